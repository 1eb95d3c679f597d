"""DNS service models.

Record names are fully qualified and end with a trailing period; the
provider enforces this, the client passes names through unchanged.
"""

from __future__ import annotations

from pydantic import BaseModel

from .common import APIModel


class Domain(APIModel):
    uuid: str = ""
    name: str = ""
    project_id: str = ""
    serial: int = 0
    ttl: int = 0
    email: str = ""
    created_at: str = ""
    updated_at: str | None = ""


class DNSRecord(APIModel):
    uuid: str = ""
    domain_uuid: str = ""
    name: str = ""
    type: str = ""
    data: str = ""
    priority: int | None = None
    weight: int | None = None
    port: int | None = None
    ttl: int | None = 0
    created_at: str = ""
    updated_at: str | None = ""


class CreateDomainRequest(BaseModel):
    name: str
    ttl: int
    email: str


class UpdateDomainRequest(BaseModel):
    ttl: int
    email: str


class CreateDNSRecordRequest(BaseModel):
    name: str
    type: str
    data: str
    priority: int | None = None
    weight: int | None = None
    port: int | None = None
    ttl: int | None = None


class UpdateDNSRecordRequest(BaseModel):
    name: str | None = None
    type: str | None = None
    data: str | None = None
    priority: int | None = None
    weight: int | None = None
    port: int | None = None
    ttl: int | None = None
