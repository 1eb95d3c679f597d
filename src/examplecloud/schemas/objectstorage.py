"""Object storage models.

Account, container and object info come from response headers rather than
JSON bodies, so they are plain dataclasses built by the resource layer.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from .common import APIModel


@dataclass(frozen=True)
class AccountInfo:
    container_count: int = 0
    object_count: int = 0
    bytes_used: int = 0
    bytes_used_actual: int = 0
    quota_bytes: int = 0


@dataclass(frozen=True)
class ContainerInfo:
    object_count: int = 0
    bytes_used: int = 0
    read_acl: str = ""
    write_acl: str = ""
    versions_location: str = ""
    metadata: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class ObjectInfo:
    content_length: int = 0
    content_type: str = ""
    etag: str = ""
    last_modified: str = ""
    delete_at: int = 0
    metadata: dict[str, str] = field(default_factory=dict)


class Container(APIModel):
    name: str = ""
    count: int = 0
    bytes: int = 0


class StorageObject(APIModel):
    name: str = ""
    hash: str = ""
    bytes: int = 0
    content_type: str = ""
    last_modified: str = ""


class SLOSegment(APIModel):
    path: str
    etag: str
    size_bytes: int
