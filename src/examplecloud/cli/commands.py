"""Endpoint, temp URL and server listing commands."""

from __future__ import annotations

import click
import httpx

from examplecloud.client import Client
from examplecloud.config import ClientSettings, connect
from examplecloud.endpoints import Service
from examplecloud.errors import ExampleCloudError, InvalidArgumentError
from examplecloud.tempurl import generate_temp_url


@click.command("endpoints")
@click.option("--region", "region", type=str, default=None, help="Region id.")
@click.option("--identity-url", "identity_url", type=str, default=None, help="Pinned identity URL.")
def endpoints_command(region: str | None, identity_url: str | None) -> None:
    """Print the resolved base URL of every service.

    Args:
        region: Region id.
        identity_url: Pinned identity URL, also used to infer the region.
    """
    with Client(region=region, identity_url=identity_url) as client:
        click.echo(f"region {client.region}")
        for service in Service:
            click.echo(f"{service.value} {client.endpoint(service)}")


@click.command("temp-url")
@click.argument("method")
@click.argument("container")
@click.argument("object_name")
@click.option("--key", "key", required=True, type=str, help="Temp URL key registered on the account.")
@click.option("--expires", "expires", required=True, type=int, help="Expiry as a Unix timestamp.")
@click.option("--tenant-id", "tenant_id", required=True, type=str, help="Tenant id.")
@click.option("--region", "region", type=str, default=None, help="Region id.")
@click.option("--object-storage-url", "object_storage_url", type=str, default=None, help="Object storage URL.")
def temp_url_command(
    method: str,
    container: str,
    object_name: str,
    key: str,
    expires: int,
    tenant_id: str,
    region: str | None,
    object_storage_url: str | None,
) -> None:
    """Print a signed temporary URL for one object. No request is made."""
    with Client(region=region, object_storage_url=object_storage_url) as client:
        base_url = client.endpoint(Service.OBJECT_STORE)
    try:
        url = generate_temp_url(base_url, tenant_id, method, container, object_name, key, expires)
    except InvalidArgumentError as exc:
        raise click.UsageError(str(exc)) from exc
    click.echo(url)


@click.command("servers")
@click.option(
    "--config",
    "config_path",
    required=True,
    type=click.Path(exists=True, dir_okay=False),
    help="Config file path (toml/json).",
)
@click.option("--jsonfile", "jsonfile", type=str, default=None, help="JSON secrets file for jsonfile placeholders.")
def servers_command(config_path: str, jsonfile: str | None) -> None:
    """Authenticate and list servers as ``id name status``."""
    try:
        settings = ClientSettings.from_file(config_path, jsonfile=jsonfile)
        with connect(settings) as client:
            servers = client.compute.list_servers_detail()
    except (ExampleCloudError, httpx.HTTPError) as exc:
        raise click.ClickException(str(exc)) from exc
    for server in servers:
        click.echo(f"{server.id} {server.name} {server.status}")
