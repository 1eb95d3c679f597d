"""Object storage (Swift-style) resource operations.

Account, container and object state lives in response headers, so most
calls use the raw pipeline and parse headers rather than JSON bodies.
"""

from __future__ import annotations

import json
from contextlib import contextmanager
from typing import Iterable, Iterator, Mapping

import httpx

from .endpoints import Service
from .resource import RawContent, ServiceResource, decode_json
from .schemas.common import parse_list, to_body
from .schemas.objectstorage import (
    AccountInfo,
    Container,
    ContainerInfo,
    ObjectInfo,
    SLOSegment,
    StorageObject,
)
from .tempurl import generate_temp_url, quote_path


def _header_int(headers: httpx.Headers, name: str) -> int:
    value = headers.get(name, "")
    try:
        return int(value)
    except ValueError:
        return 0


def _prefixed_metadata(headers: httpx.Headers, prefix: str) -> dict[str, str]:
    metadata = {}
    for key, value in headers.items():
        lowered = key.lower()
        if lowered.startswith(prefix):
            metadata[lowered[len(prefix):]] = value
    return metadata


class ObjectStorageResource(ServiceResource):
    """Account, containers, objects, temp URLs and large objects."""

    service = Service.OBJECT_STORE

    def _url(self, path: str) -> str:
        return self._c.endpoint(self.service) + f"/AUTH_{self._c.tenant_id}" + path

    def _send(
        self,
        method: str,
        *parts: str,
        headers: Mapping[str, str] | None = None,
        params: Mapping[str, object] | None = None,
        content: RawContent | None = None,
        accept_json: bool = False,
    ) -> httpx.Response:
        return self._raw(
            method,
            quote_path(*parts),
            headers=headers,
            params=params,
            content=content,
            accept_json=accept_json,
        )

    def get_account_info(self) -> AccountInfo:
        headers = self._send("HEAD", accept_json=True).headers
        return AccountInfo(
            container_count=_header_int(headers, "X-Account-Container-Count"),
            object_count=_header_int(headers, "X-Account-Object-Count"),
            bytes_used=_header_int(headers, "X-Account-Bytes-Used"),
            bytes_used_actual=_header_int(headers, "X-Account-Bytes-Used-Actual"),
            quota_bytes=_header_int(headers, "X-Account-Meta-Quota-Bytes"),
        )

    def set_account_quota(self, giga_bytes: int | str) -> None:
        """Set the account quota in GB, in 100 GB increments."""
        self._send("POST", headers={"X-Account-Meta-Quota-Giga-Bytes": str(giga_bytes)}, accept_json=True)

    def list_containers(self) -> list[Container]:
        response = self._send("GET", params={"format": "json"}, accept_json=True)
        return parse_list(Container, decode_json(response))

    def create_container(self, name: str) -> None:
        self._send("PUT", name, accept_json=True)

    def delete_container(self, name: str) -> None:
        self._send("DELETE", name, accept_json=True)

    def get_container_info(self, name: str) -> ContainerInfo:
        headers = self._send("HEAD", name, accept_json=True).headers
        return ContainerInfo(
            object_count=_header_int(headers, "X-Container-Object-Count"),
            bytes_used=_header_int(headers, "X-Container-Bytes-Used"),
            read_acl=headers.get("X-Container-Read", ""),
            write_acl=headers.get("X-Container-Write", ""),
            versions_location=headers.get("X-Versions-Location", ""),
            metadata=_prefixed_metadata(headers, "x-container-meta-"),
        )

    def list_objects(
        self,
        container: str,
        *,
        limit: int | None = None,
        marker: str | None = None,
        end_marker: str | None = None,
        prefix: str | None = None,
        delimiter: str | None = None,
        reverse: bool = False,
    ) -> list[StorageObject]:
        params = {
            "format": "json",
            "limit": limit,
            "marker": marker,
            "end_marker": end_marker,
            "prefix": prefix,
            "delimiter": delimiter,
            "reverse": reverse,
        }
        response = self._send("GET", container, params=params, accept_json=True)
        return parse_list(StorageObject, decode_json(response))

    def upload_object(self, container: str, object_name: str, data: RawContent) -> None:
        """Upload an object body.

        Args:
            container: Container name.
            object_name: Object name, ``/`` allowed.
            data: Bytes, an iterable of byte chunks or a binary file object.
                Anything but bytes is streamed with chunked transfer encoding.
        """
        self._send("PUT", container, object_name, content=data)

    def download_object(self, container: str, object_name: str) -> bytes:
        """Download a whole object into memory. Use :meth:`stream_object` for large objects."""
        return self._send("GET", container, object_name).content

    @contextmanager
    def stream_object(
        self,
        container: str,
        object_name: str,
        chunk_size: int | None = None,
    ) -> Iterator[Iterator[bytes]]:
        """Download an object without buffering it.

        Args:
            container: Container name.
            object_name: Object name.
            chunk_size: Size of yielded chunks, as received when ``None``.

        Yields:
            Iterator[bytes]: Body chunks, valid until the block exits.

        Raises:
            APIError: Response status >= 400, raised before the block runs.

        Example:
            >>> with client.object_storage.stream_object("backups", "db.tar") as chunks:
            ...     for chunk in chunks:
            ...         fh.write(chunk)
        """
        with self._stream("GET", quote_path(container, object_name), accept_json=False) as response:
            yield response.iter_bytes(chunk_size)

    def delete_object(self, container: str, object_name: str) -> None:
        self._send("DELETE", container, object_name)

    def get_object_info(self, container: str, object_name: str) -> ObjectInfo:
        headers = self._send("HEAD", container, object_name, accept_json=True).headers
        return ObjectInfo(
            content_length=_header_int(headers, "Content-Length"),
            content_type=headers.get("Content-Type", ""),
            etag=headers.get("ETag", ""),
            last_modified=headers.get("Last-Modified", ""),
            delete_at=_header_int(headers, "X-Delete-At"),
            metadata=_prefixed_metadata(headers, "x-object-meta-"),
        )

    def copy_object(self, src_container: str, src_object: str, dst_container: str, dst_object: str) -> None:
        """Server-side copy using the ``COPY`` method."""
        self._send(
            "COPY",
            src_container,
            src_object,
            headers={"Destination": f"{dst_container}/{dst_object}"},
        )

    def schedule_object_deletion(self, container: str, object_name: str, delete_at: int) -> None:
        self._send("POST", container, object_name, headers={"X-Delete-At": str(delete_at)})

    def schedule_object_deletion_after(self, container: str, object_name: str, seconds: int) -> None:
        self._send("POST", container, object_name, headers={"X-Delete-After": str(seconds)})

    def enable_versioning(self, container: str, versions_container: str) -> None:
        self._send("POST", container, headers={"X-Versions-Location": versions_container})

    def disable_versioning(self, container: str) -> None:
        self._send("POST", container, headers={"X-Remove-Versions-Location": ""})

    def enable_web_publishing(self, container: str) -> None:
        self._send("POST", container, headers={"X-Container-Read": ".r:*"})

    def disable_web_publishing(self, container: str) -> None:
        self._send("POST", container, headers={"X-Container-Read": ""})

    def set_temp_url_key(self, key: str) -> None:
        self._send("POST", headers={"X-Account-Meta-Temp-URL-Key": key})

    def remove_temp_url_key(self) -> None:
        self._send("POST", headers={"X-Remove-Account-Meta-Temp-URL-Key": ""})

    def generate_temp_url(self, method: str, container: str, object_name: str, key: str, expires: int) -> str:
        """Sign a temporary URL using this client's endpoint and tenant.

        No request is made. See :func:`examplecloud.tempurl.generate_temp_url`.
        """
        return generate_temp_url(
            self._c.endpoint(self.service),
            self._c.tenant_id,
            method,
            container,
            object_name,
            key,
            expires,
        )

    def create_dlo_manifest(
        self,
        container: str,
        manifest_name: str,
        segment_container: str,
        segment_prefix: str,
    ) -> None:
        """Create a dynamic large object whose segments share a name prefix."""
        headers = {"X-Object-Manifest": f"{segment_container}/{segment_prefix}"}
        self._send("PUT", container, manifest_name, headers=headers, content=b"")

    def create_slo_manifest(self, container: str, manifest_name: str, segments: Iterable[SLOSegment]) -> None:
        """Create a static large object from an explicit segment list."""
        content = json.dumps([to_body(segment) for segment in segments]).encode("utf-8")
        self._send(
            "PUT",
            container,
            manifest_name,
            headers={"Content-Type": "application/json"},
            params={"multipart-manifest": "put"},
            content=content,
        )
