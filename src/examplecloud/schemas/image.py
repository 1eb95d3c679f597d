"""Image service models."""

from __future__ import annotations

from pydantic import BaseModel, Field

from .common import APIModel


class Image(APIModel):
    id: str = ""
    name: str | None = ""
    status: str = ""
    visibility: str = ""
    os_type: str = ""
    size: int | None = None
    disk_format: str | None = ""
    container_format: str | None = ""
    min_disk: int = 0
    min_ram: int = 0
    created_at: str = ""
    updated_at: str = ""
    checksum: str | None = ""
    owner: str = ""
    protected: bool = False
    architecture: str = ""
    tags: list[str] = Field(default_factory=list)
    os_hash_algo: str | None = ""
    os_hash_value: str | None = ""
    os_hidden: bool = False
    virtual_size: int | None = None
    hw_rescue_bus: str = ""
    hw_rescue_device: str = ""
    bootable: str = ""
    hw_video_model: str = ""
    hw_vif_multiqueue_enabled: str = ""
    hw_qemu_guest_agent: str = ""


class ImageQuota(APIModel):
    image_size: str = ""


class ImageUsage(APIModel):
    size: int = 0


class CreateISOImageRequest(BaseModel):
    name: str
    disk_format: str = "iso"
    hw_rescue_bus: str = "ide"
    hw_rescue_device: str = "cdrom"
    container_format: str = "bare"
