"""Block storage models."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from .common import APIModel, Link


class Volume(APIModel):
    id: str = ""
    status: str = ""
    size: int = 0
    availability_zone: str = ""
    created_at: str = ""
    updated_at: str = ""
    name: str = ""
    description: str | None = None
    volume_type: str = ""
    snapshot_id: str | None = None
    source_volid: str | None = None
    metadata: dict[str, str] = Field(default_factory=dict)
    user_id: str = ""
    bootable: str = ""
    encrypted: bool = False
    multiattach: bool = False
    attachments: list[Any] = Field(default_factory=list)
    links: list[Link] = Field(default_factory=list)


class VolumeType(APIModel):
    id: str = ""
    name: str = ""
    is_public: bool = False
    description: str | None = ""


class CreateVolumeRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    size: int
    name: str
    volume_type: str
    description: str | None = None
    image_ref: str | None = Field(default=None, alias="imageRef")
    source_volid: str | None = None
    backup_id: str | None = None


class VolumeImageSaveResponse(APIModel):
    id: str = ""
    status: str = ""
    size: int = 0
    image_id: str = ""
    container_format: str = ""
    disk_format: str = ""
    image_name: str = ""


class Backup(APIModel):
    id: str = ""
    status: str = ""
    size: int = 0
    object_count: int = 0
    availability_zone: str | None = None
    container: str | None = ""
    created_at: str = ""
    updated_at: str = ""
    name: str | None = ""
    description: str | None = None
    fail_reason: str | None = None
    volume_id: str = ""
    links: list[Link] = Field(default_factory=list)
    is_incremental: bool = False
    has_dependent_backups: bool = False
    snapshot_id: str | None = None
    data_timestamp: str = ""
    metadata: dict[str, str] = Field(default_factory=dict)


class BackupRestoreResponse(APIModel):
    backup_id: str = ""
    volume_id: str = ""
    volume_name: str = ""
