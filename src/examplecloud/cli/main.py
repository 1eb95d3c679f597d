"""Command line entry point."""

from __future__ import annotations

import logging

import click

from examplecloud.cli.commands import endpoints_command, servers_command, temp_url_command


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Log every request.")
def main(verbose: bool) -> None:
    """Example Cloud API tools."""
    if verbose:
        logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s %(message)s")


main.add_command(endpoints_command)
main.add_command(temp_url_command)
main.add_command(servers_command)


if __name__ == "__main__":
    main()
