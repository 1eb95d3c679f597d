#!/usr/bin/env python3
"""Shared fixtures: a client wired to an in-memory HTTP transport."""

from __future__ import annotations

import json
from typing import Any, Callable, Iterator, List, Tuple

import httpx
import pytest

from examplecloud.client import Client
from examplecloud.endpoints import Service

API = "https://api.test"
TOKEN = "test-token"
TENANT_ID = "test-tenant-id"

Handler = Callable[[httpx.Request], httpx.Response]


class Recorder:
    """MockTransport handler that keeps every request it sees."""

    def __init__(self, handler: Handler) -> None:
        self.handler = handler
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        request.read()
        self.requests.append(request)
        return self.handler(request)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self) -> Any:
        return json.loads(self.last.content)


def respond(status_code: int = 200, payload: Any = None, **kwargs: Any) -> Handler:
    """Build a handler that always returns the same response."""

    def handler(_request: httpx.Request) -> httpx.Response:
        if payload is None:
            return httpx.Response(status_code, **kwargs)
        return httpx.Response(status_code, json=payload, **kwargs)

    return handler


@pytest.fixture
def make_client() -> Iterator[Callable[..., Tuple[Client, Recorder]]]:
    """Create clients whose every endpoint points at the mock transport."""
    transports: List[httpx.Client] = []

    def _make(handler: Handler, **kwargs: Any) -> Tuple[Client, Recorder]:
        recorder = Recorder(handler)
        http_client = httpx.Client(transport=httpx.MockTransport(recorder))
        transports.append(http_client)
        client = Client(http_client=http_client, **kwargs)
        for service in Service:
            client.set_endpoint(service, API)
        client.set_token(TOKEN)
        client.set_tenant_id(TENANT_ID)
        return client, recorder

    yield _make
    for http_client in transports:
        http_client.close()
