#!/usr/bin/env python3
"""DNS resource contract tests."""

from __future__ import annotations

import pytest

from conftest import respond
from examplecloud.errors import APIError
from examplecloud.schemas.dns import (
    CreateDNSRecordRequest,
    CreateDomainRequest,
    UpdateDNSRecordRequest,
    UpdateDomainRequest,
)


def test_list_domains(make_client) -> None:
    payload = {"domains": [{"uuid": "d1", "name": "example.com.", "ttl": 3600}], "total_count": 1}
    client, recorder = make_client(respond(200, payload))

    (domain,) = client.dns.list_domains(limit=10, sort_key="name")

    assert recorder.last.url.path == "/domains"
    assert dict(recorder.last.url.params) == {"limit": "10", "sort_key": "name"}
    assert domain.name == "example.com."


def test_create_domain_body_is_bare(make_client) -> None:
    client, recorder = make_client(respond(200, {"uuid": "d1", "name": "example.com.", "email": "ops@example.com"}))

    domain = client.dns.create_domain(CreateDomainRequest(name="example.com.", ttl=3600, email="ops@example.com"))

    assert recorder.last_json() == {"name": "example.com.", "ttl": 3600, "email": "ops@example.com"}
    assert domain.uuid == "d1"


def test_update_domain(make_client) -> None:
    client, recorder = make_client(respond(200, {"uuid": "d1", "ttl": 600}))

    domain = client.dns.update_domain("d1", UpdateDomainRequest(ttl=600, email="ops@example.com"))

    assert (recorder.last.method, recorder.last.url.path) == ("PUT", "/domains/d1")
    assert domain.ttl == 600


def test_record_name_is_passed_unchanged(make_client) -> None:
    client, recorder = make_client(respond(200, {"uuid": "r1", "name": "www.example.com.", "type": "A"}))

    client.dns.create_record(
        "d1", CreateDNSRecordRequest(name="www.example.com.", type="A", data="203.0.113.10", ttl=300)
    )

    assert recorder.last.url.path == "/domains/d1/records"
    assert recorder.last_json() == {"name": "www.example.com.", "type": "A", "data": "203.0.113.10", "ttl": 300}


def test_record_without_trailing_period_is_rejected_by_provider(make_client) -> None:
    client, recorder = make_client(respond(400, {"badRequest": {"message": "Invalid record name", "code": 400}}))

    with pytest.raises(APIError) as exc_info:
        client.dns.create_record("d1", CreateDNSRecordRequest(name="www.example.com", type="A", data="203.0.113.10"))

    assert recorder.last_json()["name"] == "www.example.com"
    assert exc_info.value.message == "Invalid record name"


def test_update_record_sends_only_set_fields(make_client) -> None:
    client, recorder = make_client(respond(200, {"uuid": "r1", "data": "203.0.113.11"}))

    record = client.dns.update_record("d1", "r1", UpdateDNSRecordRequest(data="203.0.113.11"))

    assert recorder.last.url.path == "/domains/d1/records/r1"
    assert recorder.last_json() == {"data": "203.0.113.11"}
    assert record.data == "203.0.113.11"


def test_list_and_delete_records(make_client) -> None:
    client, recorder = make_client(respond(200, {"records": [{"uuid": "r1", "type": "MX", "priority": 10}]}))

    (record,) = client.dns.list_records("d1")
    assert recorder.last.url.path == "/domains/d1/records"
    assert record.priority == 10

    client.dns.delete_record("d1", "r1")
    client.dns.delete_domain("d1")
    assert [(r.method, r.url.path) for r in recorder.requests[1:]] == [
        ("DELETE", "/domains/d1/records/r1"),
        ("DELETE", "/domains/d1"),
    ]
