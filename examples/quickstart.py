#!/usr/bin/env python3
"""
Quickstart: authenticate from the environment, list servers and sign a temp URL.

Set EXAMPLECLOUD_USER_ID, EXAMPLECLOUD_PASSWORD and EXAMPLECLOUD_TENANT_ID
(or the *_NAME variants) before running.
"""

import logging
import sys
import os
import time
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from examplecloud import APIError, ClientSettings, connect, deadline, is_status


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s %(message)s")
    settings = ClientSettings.from_env()

    with connect(settings) as client:
        with deadline(30):
            for server in client.compute.list_servers_detail():
                print(f"{server.id} {server.name} {server.status}")

        try:
            client.compute.get_server("does-not-exist")
        except APIError as exc:
            if not is_status(exc, 404):
                raise
            print("missing server reported as 404")

        url = client.object_storage.generate_temp_url(
            "GET",
            "public",
            "reports/2026-10.pdf",
            os.environ.get("EXAMPLECLOUD_TEMP_URL_KEY", "change-me"),
            int(time.time()) + 3600,
        )
        print(url)


if __name__ == "__main__":
    main()
