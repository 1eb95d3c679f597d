"""Service endpoint resolution.

Each service family resolves its base URL by priority: a URL pinned by the
caller, then the public endpoint reported in the identity service catalog,
then a URL synthesized from the region pattern
``https://{subdomain}.{region}.example-cloud.io{version}``.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from enum import Enum
import logging
from typing import Iterable, Mapping
from urllib.parse import urlsplit

logger = logging.getLogger(__name__)

DOMAIN = "example-cloud.io"
DEFAULT_REGION = "c3j1"


class Service(str, Enum):
    """Service families, valued by their catalog type tag."""

    IDENTITY = "identity"
    COMPUTE = "compute"
    BLOCK_STORAGE = "block-storage"
    IMAGE = "image"
    NETWORK = "network"
    LOAD_BALANCER = "load-balancer"
    OBJECT_STORE = "object-store"
    DNS = "dns"

    @property
    def subdomain(self) -> str:
        return _DEFAULTS[self][0]

    @property
    def version_path(self) -> str:
        return _DEFAULTS[self][1]

    @classmethod
    def from_catalog_type(cls, type_name: str) -> "Service | None":
        """Map a catalog ``type`` tag to a service family.

        Args:
            type_name: Catalog type, e.g. ``"compute"`` or ``"volumev3"``.

        Returns:
            Service | None: Matching family, ``None`` for unknown types.
        """
        if type_name in _CATALOG_ALIASES:
            return _CATALOG_ALIASES[type_name]
        try:
            return cls(type_name)
        except ValueError:
            return None


_DEFAULTS: dict[Service, tuple[str, str]] = {
    Service.IDENTITY: ("identity", "/v3"),
    Service.COMPUTE: ("compute", "/v2.1"),
    Service.BLOCK_STORAGE: ("block-storage", "/v3"),
    Service.IMAGE: ("image-service", "/v2"),
    Service.NETWORK: ("networking", "/v2.0"),
    Service.LOAD_BALANCER: ("lbaas", "/v2.0"),
    Service.OBJECT_STORE: ("object-storage", "/v1"),
    Service.DNS: ("dns-service", "/v1"),
}

_CATALOG_ALIASES: dict[str, Service] = {"volumev3": Service.BLOCK_STORAGE}


@dataclass(frozen=True)
class Endpoints:
    """Base URLs for every service family. Empty fields mean "not set"."""

    identity: str = ""
    compute: str = ""
    block_storage: str = ""
    image: str = ""
    network: str = ""
    load_balancer: str = ""
    object_storage: str = ""
    dns: str = ""

    def items(self) -> list[tuple[Service, str]]:
        """Return ``(service, url)`` pairs for the non-empty fields."""
        return [(_FIELD_SERVICE[f.name], getattr(self, f.name)) for f in fields(self) if getattr(self, f.name)]

    @classmethod
    def from_mapping(cls, urls: Mapping[Service, str]) -> "Endpoints":
        return cls(**{name: urls.get(service, "") for name, service in _FIELD_SERVICE.items()})


_FIELD_SERVICE: dict[str, Service] = {
    "identity": Service.IDENTITY,
    "compute": Service.COMPUTE,
    "block_storage": Service.BLOCK_STORAGE,
    "image": Service.IMAGE,
    "network": Service.NETWORK,
    "load_balancer": Service.LOAD_BALANCER,
    "object_storage": Service.OBJECT_STORE,
    "dns": Service.DNS,
}


def ensure_version_path(url: str, version_path: str) -> str:
    """Append a version path unless the URL already contains it.

    Args:
        url: Base URL.
        version_path: Version suffix such as ``"/v2.1"``.

    Returns:
        str: URL ending in the version path.
    """
    if version_path in url:
        return url
    return url.rstrip("/") + version_path


def region_pattern_url(service: Service, region: str) -> str:
    """Build the fallback URL for a service family in a region."""
    return f"https://{service.subdomain}.{region}.{DOMAIN}{service.version_path}"


def infer_region(url: str) -> str:
    """Extract the region from a ``{service}.{region}.example-cloud.io`` host.

    Args:
        url: Any endpoint URL.

    Returns:
        str: Region token, empty when the host does not match the pattern.
    """
    host = urlsplit(url).hostname or ""
    parts = host.split(".")
    domain_parts = DOMAIN.split(".")
    if len(parts) < 2 + len(domain_parts):
        return ""
    if parts[-len(domain_parts):] != domain_parts:
        return ""
    return parts[1]


class EndpointResolver:
    """Holds per-service base URLs and the pinned set.

    The resolver is not synchronized itself; the owning client serializes
    access to :meth:`get`, :meth:`set` and :meth:`update_from_catalog`.
    Region and the pinned set are fixed after construction.
    """

    def __init__(self, *, region: str | None = None, pinned: Mapping[Service, str] | None = None) -> None:
        """Resolve every service family.

        Args:
            region: Explicit region. When omitted it is inferred from a pinned
                identity URL, falling back to :data:`DEFAULT_REGION`.
            pinned: URLs set explicitly by the caller, never overwritten by
                catalog discovery.
        """
        pinned = {service: url for service, url in (pinned or {}).items() if url}
        self.explicit_region = bool(region)

        # Region must be inferred before the identity URL gains its version path.
        resolved_region = region or ""
        if not resolved_region and Service.IDENTITY in pinned:
            resolved_region = infer_region(pinned[Service.IDENTITY])
        self.region = resolved_region or DEFAULT_REGION

        self._pinned = frozenset(pinned)
        self._urls: dict[Service, str] = {}
        for service, url in pinned.items():
            self._urls[service] = ensure_version_path(url.rstrip("/"), service.version_path)
        for service in Service:
            if service not in self._urls:
                self._urls[service] = region_pattern_url(service, self.region)

    def is_pinned(self, service: Service) -> bool:
        return service in self._pinned

    def get(self, service: Service) -> str:
        return self._urls[service]

    def set(self, service: Service, url: str) -> None:
        self._urls[service] = url

    def snapshot(self) -> Endpoints:
        return Endpoints.from_mapping(self._urls)

    def update_from_catalog(self, catalog: Iterable[object]) -> list[Service]:
        """Seed unpinned URLs from an identity service catalog.

        Args:
            catalog: Catalog entries exposing ``type`` and ``endpoints``; each
                endpoint exposes ``interface``, ``region``, ``region_id`` and ``url``.

        Returns:
            list[Service]: Families whose URL was updated.
        """
        updated: list[Service] = []
        for entry in catalog:
            service = Service.from_catalog_type(getattr(entry, "type", "") or "")
            if service is None or service in self._pinned or service in updated:
                continue
            url = self._public_url(getattr(entry, "endpoints", None) or [])
            if not url:
                continue
            self._urls[service] = _normalize_catalog_url(service, url)
            logger.debug("target=endpoints.catalog service=%s url=%s", service.value, self._urls[service])
            updated.append(service)
        return updated

    def _public_url(self, endpoints: Iterable[object]) -> str:
        for endpoint in endpoints:
            if getattr(endpoint, "interface", "") != "public":
                continue
            if self.region:
                regions = (getattr(endpoint, "region", ""), getattr(endpoint, "region_id", ""))
                if self.region not in regions:
                    continue
            url = (getattr(endpoint, "url", "") or "").rstrip("/")
            if url:
                return url
        return ""


def _normalize_catalog_url(service: Service, url: str) -> str:
    if service is Service.BLOCK_STORAGE:
        # Tenant segments after /v3 are appended again by the volume resource.
        url = ensure_version_path(url, service.version_path)
        marker = service.version_path + "/"
        index = url.find(marker)
        if index >= 0:
            url = url[: index + len(service.version_path)]
        return url
    if service is Service.OBJECT_STORE:
        index = url.find("/AUTH_")
        if index >= 0:
            url = url[:index]
        return ensure_version_path(url, service.version_path)
    return ensure_version_path(url, service.version_path)
