"""Compute service models."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from .common import APIModel, Link


class Server(APIModel):
    id: str = ""
    name: str = ""
    links: list[Link] = Field(default_factory=list)


class FlavorRef(APIModel):
    id: str = ""
    links: list[Link] = Field(default_factory=list)
    vcpus: int = 0
    ram: int = 0
    disk: int = 0


class Address(APIModel):
    version: int = 0
    addr: str = ""
    type: str = Field(default="", alias="OS-EXT-IPS:type")
    mac_addr: str = Field(default="", alias="OS-EXT-IPS-MAC:mac_addr")


class VolumeAttachmentRef(APIModel):
    id: str = ""


class SecurityGroupRef(APIModel):
    name: str = ""


class ServerDetail(APIModel):
    id: str = ""
    name: str = ""
    status: str = ""
    tenant_id: str = ""
    user_id: str = ""
    metadata: dict[str, str] = Field(default_factory=dict)
    host_id: str = Field(default="", alias="hostId")
    # Either an image reference object or an empty string for volume-booted servers.
    image: Any = None
    flavor: FlavorRef = Field(default_factory=FlavorRef)
    created: str = ""
    updated: str = ""
    addresses: dict[str, list[Address]] = Field(default_factory=dict)
    access_ipv4: str = Field(default="", alias="accessIPv4")
    access_ipv6: str = Field(default="", alias="accessIPv6")
    links: list[Link] = Field(default_factory=list)
    disk_config: str = Field(default="", alias="OS-DCF:diskConfig")
    availability_zone: str = Field(default="", alias="OS-EXT-AZ:availability_zone")
    config_drive: str = ""
    key_name: str | None = None
    launched_at: str | None = Field(default=None, alias="OS-SRV-USG:launched_at")
    terminated_at: str | None = Field(default=None, alias="OS-SRV-USG:terminated_at")
    host: str | None = Field(default=None, alias="OS-EXT-SRV-ATTR:host")
    instance_name: str | None = Field(default=None, alias="OS-EXT-SRV-ATTR:instance_name")
    hypervisor_hostname: str | None = Field(default=None, alias="OS-EXT-SRV-ATTR:hypervisor_hostname")
    task_state: str | None = Field(default=None, alias="OS-EXT-STS:task_state")
    vm_state: str = Field(default="", alias="OS-EXT-STS:vm_state")
    power_state: int = Field(default=0, alias="OS-EXT-STS:power_state")
    volumes_attached: list[VolumeAttachmentRef] = Field(
        default_factory=list, alias="os-extended-volumes:volumes_attached"
    )
    security_groups: list[SecurityGroupRef] = Field(default_factory=list)
    progress: int = 0


class BlockDeviceMap(BaseModel):
    uuid: str


class CreateServerRequest(BaseModel):
    """Body of ``POST /servers``.

    ``block_device_mapping_v2`` normally carries a single boot volume.
    """

    model_config = ConfigDict(populate_by_name=True)

    flavor_ref: str = Field(alias="flavorRef")
    admin_pass: str = Field(alias="adminPass")
    block_device_mapping_v2: list[BlockDeviceMap] = Field(default_factory=list)
    metadata: dict[str, str] | None = None
    security_groups: list[SecurityGroupRef] | None = None
    key_name: str | None = None
    user_data: str | None = None


class CreateServerResponse(APIModel):
    id: str = ""
    links: list[Link] = Field(default_factory=list)
    disk_config: str = Field(default="", alias="OS-DCF:diskConfig")
    security_groups: list[SecurityGroupRef] = Field(default_factory=list)
    admin_pass: str = Field(default="", alias="adminPass")


class RebuildServerRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    image_ref: str = Field(alias="imageRef")
    admin_pass: str = Field(alias="adminPass")
    key_name: str | None = None


class RemoteConsole(APIModel):
    protocol: str = ""
    type: str = ""
    url: str = ""


class ServerSecurityGroupRule(APIModel):
    id: str = ""
    parent_group_id: str = ""
    ip_protocol: str | None = None
    from_port: int | None = None
    to_port: int | None = None
    group: Any = None
    ip_range: Any = None


class ServerSecurityGroup(APIModel):
    id: str = ""
    description: str = ""
    name: str = ""
    tenant_id: str = ""
    rules: list[ServerSecurityGroupRule] = Field(default_factory=list)


class Flavor(APIModel):
    id: str = ""
    name: str = ""
    links: list[Link] = Field(default_factory=list)


class FlavorDetail(APIModel):
    id: str = ""
    name: str = ""
    ram: int = 0
    disk: int = 0
    swap: str | int = ""
    vcpus: int = 0
    rxtx_factor: float = 0.0
    links: list[Link] = Field(default_factory=list)
    ephemeral: int = Field(default=0, alias="OS-FLV-EXT-DATA:ephemeral")
    disabled: bool = Field(default=False, alias="OS-FLV-DISABLED:disabled")
    is_public: bool = Field(default=False, alias="os-flavor-access:is_public")


class Keypair(APIModel):
    name: str = ""
    public_key: str = ""
    private_key: str = ""
    fingerprint: str = ""
    user_id: str = ""
    created_at: str = ""
    deleted: bool = False
    deleted_at: str | None = None
    id: int = 0
    updated_at: str | None = None


class FixedIP(APIModel):
    subnet_id: str = ""
    ip_address: str = ""


class InterfaceAttachment(APIModel):
    net_id: str = ""
    port_id: str = ""
    mac_addr: str = ""
    port_state: str = ""
    fixed_ips: list[FixedIP] = Field(default_factory=list)


class ServerVolumeAttachment(APIModel):
    id: str = ""
    volume_id: str = Field(default="", alias="volumeId")
    server_id: str = Field(default="", alias="serverId")
    device: str = ""


class RRDData(APIModel):
    """Monitoring series: column names in ``schema_`` and rows in ``data``."""

    schema_: list[str] = Field(default_factory=list, alias="schema")
    data: list[list[Any]] = Field(default_factory=list)
