"""Block storage (volumes, volume types, backups) resource operations.

Every path lives under the tenant id, which the block storage base URL
does not carry.
"""

from __future__ import annotations

from typing import Any, Mapping

from .endpoints import Service
from .resource import ServiceResource
from .schemas.common import Envelope, member, parse
from .schemas.volume import (
    Backup,
    BackupRestoreResponse,
    CreateVolumeRequest,
    Volume,
    VolumeImageSaveResponse,
    VolumeType,
)

_VOLUME = Envelope("volume", Volume)
_VOLUME_TYPE = Envelope("volume_type", VolumeType)
_BACKUP = Envelope("backup", Backup)


class VolumeResource(ServiceResource):
    """Volumes, volume types and backups."""

    service = Service.BLOCK_STORAGE

    def _request(
        self,
        method: str,
        path: str,
        *,
        body: Any = None,
        params: Mapping[str, Any] | None = None,
    ) -> Any:
        return super()._request(method, f"/{self._c.tenant_id}{path}", body=body, params=params)

    def list_volumes(
        self,
        *,
        limit: int | None = None,
        offset: int | None = None,
        marker: str | None = None,
        sort: str | None = None,
        with_count: bool = False,
    ) -> list[Volume]:
        params = {"limit": limit, "offset": offset, "marker": marker, "sort": sort, "with_count": with_count}
        return _VOLUME.unwrap_list(self._request("GET", "/volumes", params=params))

    def list_volumes_detail(
        self,
        *,
        limit: int | None = None,
        offset: int | None = None,
        marker: str | None = None,
        sort: str | None = None,
        with_count: bool = False,
    ) -> list[Volume]:
        params = {"limit": limit, "offset": offset, "marker": marker, "sort": sort, "with_count": with_count}
        return _VOLUME.unwrap_list(self._request("GET", "/volumes/detail", params=params))

    def get_volume(self, volume_id: str) -> Volume:
        return _VOLUME.unwrap(self._request("GET", f"/volumes/{volume_id}"))

    def create_volume(self, request: CreateVolumeRequest) -> Volume:
        return _VOLUME.unwrap(self._request("POST", "/volumes", body=_VOLUME.wrap(request)))

    def delete_volume(self, volume_id: str, *, force: bool = False) -> None:
        """Delete a volume.

        Args:
            volume_id: Volume id.
            force: Delete even when the volume is in an error state.
        """
        self._request("DELETE", f"/volumes/{volume_id}", params={"force": force})

    def update_volume(self, volume_id: str, name: str, description: str | None = None) -> Volume:
        fields: dict[str, Any] = {"name": name}
        if description is not None:
            fields["description"] = description
        return _VOLUME.unwrap(self._request("PUT", f"/volumes/{volume_id}", body=_VOLUME.wrap(fields)))

    def save_volume_as_image(self, volume_id: str, image_name: str) -> VolumeImageSaveResponse:
        body = {"os-volume_upload_image": {"image_name": image_name}}
        payload = self._request("POST", f"/volumes/{volume_id}/action", body=body)
        return parse(VolumeImageSaveResponse, member(payload, "os-volume_upload_image"))

    def list_volume_types(self) -> list[VolumeType]:
        return _VOLUME_TYPE.unwrap_list(self._request("GET", "/types"))

    def get_volume_type(self, type_id: str) -> VolumeType:
        return _VOLUME_TYPE.unwrap(self._request("GET", f"/types/{type_id}"))

    def list_backups(
        self,
        *,
        limit: int | None = None,
        offset: int | None = None,
        sort: str | None = None,
    ) -> list[Backup]:
        params = {"limit": limit, "offset": offset, "sort": sort}
        return _BACKUP.unwrap_list(self._request("GET", "/backups", params=params))

    def list_backups_detail(
        self,
        *,
        limit: int | None = None,
        offset: int | None = None,
        sort: str | None = None,
    ) -> list[Backup]:
        params = {"limit": limit, "offset": offset, "sort": sort}
        return _BACKUP.unwrap_list(self._request("GET", "/backups/detail", params=params))

    def get_backup(self, backup_id: str) -> Backup:
        return _BACKUP.unwrap(self._request("GET", f"/backups/{backup_id}"))

    def enable_auto_backup(
        self,
        server_id: str,
        *,
        schedule: str | None = None,
        retention: int | None = None,
    ) -> Backup:
        """Subscribe a server to automatic backups.

        Args:
            server_id: Server (instance) id.
            schedule: Optional schedule such as ``"weekly"``.
            retention: Optional number of generations to keep.

        Returns:
            Backup: Backup subscription.
        """
        fields: dict[str, Any] = {"instance_uuid": server_id}
        if schedule:
            fields["schedule"] = schedule
        if retention:
            fields["retention"] = retention
        return _BACKUP.unwrap(self._request("POST", "/backups", body=_BACKUP.wrap(fields)))

    def disable_auto_backup(self, server_id: str) -> None:
        self._request("DELETE", f"/backups/{server_id}")

    def update_backup_retention(self, server_id: str, retention: int) -> Backup:
        """Change how many backup generations are kept for a server.

        Backup subscriptions are keyed by instance, so the path carries the
        server id rather than a backup id.
        """
        body = _BACKUP.wrap({"retention": retention})
        return _BACKUP.unwrap(self._request("PUT", f"/backups/{server_id}", body=body))

    def restore_backup(self, backup_id: str, volume_id: str) -> BackupRestoreResponse:
        body = {"restore": {"volume_id": volume_id}}
        payload = self._request("POST", f"/backups/{backup_id}/restore", body=body)
        return parse(BackupRestoreResponse, member(payload, "restore"))
