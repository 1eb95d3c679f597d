#!/usr/bin/env python3
"""Temp URL signing contract tests."""

from __future__ import annotations

import hashlib
import hmac
from urllib.parse import parse_qs, urlsplit

import pytest

from examplecloud.errors import (
    InvalidArgumentError,
    InvalidExpiresError,
    MissingContainerError,
    MissingKeyError,
    MissingMethodError,
    MissingObjectNameError,
)
from examplecloud.tempurl import generate_temp_url, object_url, quote_path

BASE = "https://object-storage.c3j1.example-cloud.io/v1"
TENANT = "tenant-abc"


def _sign(key: str, method: str, expires: int, path: str) -> str:
    return hmac.new(key.encode(), f"{method}\n{expires}\n{path}".encode(), hashlib.sha1).hexdigest()


def test_temp_url_layout_and_signature() -> None:
    url = generate_temp_url(BASE, TENANT, "GET", "mycontainer", "report.pdf", "secret", 1700000000)

    parts = urlsplit(url)
    assert parts.scheme == "https"
    assert parts.path == "/v1/AUTH_tenant-abc/mycontainer/report.pdf"
    assert parts.query.startswith("temp_url_expires=1700000000&temp_url_sig=")
    query = parse_qs(parts.query)
    assert query["temp_url_sig"] == [_sign("secret", "GET", 1700000000, parts.path)]


def test_temp_url_is_deterministic() -> None:
    args = (BASE, TENANT, "GET", "c", "o.txt", "k", 1700000000)

    assert generate_temp_url(*args) == generate_temp_url(*args)


@pytest.mark.parametrize(
    "changed",
    [
        {"method": "PUT"},
        {"expires": 1700000001},
        {"key": "other"},
        {"object_name": "other.txt"},
        {"container": "other"},
    ],
)
def test_signature_changes_with_every_input(changed: dict) -> None:
    args = {
        "object_storage_url": BASE,
        "tenant_id": TENANT,
        "method": "GET",
        "container": "c",
        "object_name": "o.txt",
        "key": "k",
        "expires": 1700000000,
    }
    baseline = parse_qs(urlsplit(generate_temp_url(**args)).query)["temp_url_sig"]

    modified = parse_qs(urlsplit(generate_temp_url(**{**args, **changed})).query)["temp_url_sig"]

    assert modified != baseline


def test_method_is_normalized_before_signing() -> None:
    lower = generate_temp_url(BASE, TENANT, " get ", "c", "o", "k", 1700000000)
    upper = generate_temp_url(BASE, TENANT, "GET", "c", "o", "k", 1700000000)

    assert lower == upper


def test_object_name_is_percent_encoded_and_signed_encoded() -> None:
    url = generate_temp_url(BASE, TENANT, "GET", "mycontainer", "path/to file.txt", "secret", 1700000000)

    parts = urlsplit(url)
    assert parts.path == "/v1/AUTH_tenant-abc/mycontainer/path/to%20file.txt"
    assert parse_qs(parts.query)["temp_url_sig"] == [_sign("secret", "GET", 1700000000, parts.path)]


@pytest.mark.parametrize(
    ("kwargs", "error"),
    [
        ({"method": ""}, MissingMethodError),
        ({"method": "   "}, MissingMethodError),
        ({"container": ""}, MissingContainerError),
        ({"object_name": ""}, MissingObjectNameError),
        ({"key": ""}, MissingKeyError),
        ({"expires": 0}, InvalidExpiresError),
        ({"expires": -5}, InvalidExpiresError),
    ],
)
def test_invalid_arguments_are_rejected(kwargs: dict, error: type) -> None:
    args = {
        "object_storage_url": BASE,
        "tenant_id": TENANT,
        "method": "GET",
        "container": "c",
        "object_name": "o",
        "key": "k",
        "expires": 1700000000,
    }
    args.update(kwargs)

    with pytest.raises(error) as exc_info:
        generate_temp_url(**args)

    assert isinstance(exc_info.value, InvalidArgumentError)
    assert isinstance(exc_info.value, ValueError)


def test_quote_path_keeps_pseudo_directories() -> None:
    assert quote_path("c", "a/b c/d?.txt") == "/c/a/b%20c/d%3F.txt"
    assert object_url(BASE, TENANT) == f"{BASE}/AUTH_{TENANT}"


def test_timestamp_object_name_is_signed_over_literal_path() -> None:
    url = generate_temp_url("https://os.test/v1", "t", "GET", "c", "logs/2024-01-01T10:00:00+09.txt", "k", 1700000000)

    parts = urlsplit(url)
    path = "/v1/AUTH_t/c/logs/2024-01-01T10:00:00+09.txt"
    assert url.startswith(f"https://os.test{path}?")
    assert parts.path == path
    assert parse_qs(parts.query)["temp_url_sig"] == [_sign("k", "GET", 1700000000, path)]


def test_quote_path_keeps_path_sub_delimiters() -> None:
    assert quote_path("c", "a$b&c+d:e=f@g h") == "/c/a$b&c+d:e=f@g%20h"
