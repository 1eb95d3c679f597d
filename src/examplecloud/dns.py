"""DNS (domains and records) resource operations."""

from __future__ import annotations

from .endpoints import Service
from .resource import ServiceResource
from .schemas.common import Envelope, parse, to_body
from .schemas.dns import (
    CreateDNSRecordRequest,
    CreateDomainRequest,
    DNSRecord,
    Domain,
    UpdateDNSRecordRequest,
    UpdateDomainRequest,
)

_DOMAINS = Envelope("domain", Domain)
_RECORDS = Envelope("record", DNSRecord)


class DNSResource(ServiceResource):
    """Domains and their records.

    Single-item requests and responses are bare objects; only list
    responses are wrapped.
    """

    service = Service.DNS

    def list_domains(
        self,
        *,
        limit: int | None = None,
        offset: int | None = None,
        sort_type: str | None = None,
        sort_key: str | None = None,
    ) -> list[Domain]:
        params = {"limit": limit, "offset": offset, "sort_type": sort_type, "sort_key": sort_key}
        return _DOMAINS.unwrap_list(self._request("GET", "/domains", params=params))

    def get_domain(self, domain_id: str) -> Domain:
        return parse(Domain, self._request("GET", f"/domains/{domain_id}"))

    def create_domain(self, request: CreateDomainRequest) -> Domain:
        """Create a zone. The name must be fully qualified, e.g. ``"example.com."``."""
        return parse(Domain, self._request("POST", "/domains", body=to_body(request)))

    def update_domain(self, domain_id: str, request: UpdateDomainRequest) -> Domain:
        return parse(Domain, self._request("PUT", f"/domains/{domain_id}", body=to_body(request)))

    def delete_domain(self, domain_id: str) -> None:
        self._request("DELETE", f"/domains/{domain_id}")

    def list_records(
        self,
        domain_id: str,
        *,
        limit: int | None = None,
        offset: int | None = None,
        sort_type: str | None = None,
        sort_key: str | None = None,
    ) -> list[DNSRecord]:
        params = {"limit": limit, "offset": offset, "sort_type": sort_type, "sort_key": sort_key}
        return _RECORDS.unwrap_list(self._request("GET", f"/domains/{domain_id}/records", params=params))

    def get_record(self, domain_id: str, record_id: str) -> DNSRecord:
        return parse(DNSRecord, self._request("GET", f"/domains/{domain_id}/records/{record_id}"))

    def create_record(self, domain_id: str, request: CreateDNSRecordRequest) -> DNSRecord:
        body = to_body(request)
        return parse(DNSRecord, self._request("POST", f"/domains/{domain_id}/records", body=body))

    def update_record(self, domain_id: str, record_id: str, request: UpdateDNSRecordRequest) -> DNSRecord:
        body = to_body(request)
        return parse(DNSRecord, self._request("PUT", f"/domains/{domain_id}/records/{record_id}", body=body))

    def delete_record(self, domain_id: str, record_id: str) -> None:
        self._request("DELETE", f"/domains/{domain_id}/records/{record_id}")
