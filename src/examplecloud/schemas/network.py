"""Networking models."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from .common import APIModel
from .compute import FixedIP


class QoSRule(APIModel):
    max_kbps: int = 0
    max_burst_kbps: int = 0
    direction: str = ""
    id: str = ""
    qos_policy_id: str = ""
    type: str = ""


class QoSPolicy(APIModel):
    id: str = ""
    project_id: str = ""
    name: str = ""
    shared: bool = False
    rules: list[QoSRule] = Field(default_factory=list)
    is_default: bool = False
    revision_number: int = 0
    description: str = ""
    created_at: str = ""
    updated_at: str = ""
    tenant_id: str = ""
    tags: list[str] = Field(default_factory=list)


class AllocationPool(APIModel):
    start: str = ""
    end: str = ""


class Subnet(APIModel):
    id: str = ""
    name: str = ""
    tenant_id: str = ""
    network_id: str = ""
    ip_version: int = 0
    enable_dhcp: bool = False
    ipv6_ra_mode: str | None = None
    ipv6_address_mode: str | None = None
    gateway_ip: str | None = None
    cidr: str = ""
    allocation_pools: list[AllocationPool] = Field(default_factory=list)
    host_routes: list[Any] = Field(default_factory=list)
    dns_nameservers: list[str] = Field(default_factory=list)
    project_id: str = ""


class SecurityGroupRule(APIModel):
    id: str = ""
    tenant_id: str = ""
    security_group_id: str = ""
    ethertype: str = ""
    direction: str = ""
    protocol: str | None = None
    port_range_min: int | None = None
    port_range_max: int | None = None
    remote_ip_prefix: str | None = None
    remote_group_id: str | None = None
    project_id: str = ""


class SecurityGroup(APIModel):
    id: str = ""
    name: str = ""
    tenant_id: str = ""
    description: str = ""
    shared: bool = False
    project_id: str = ""
    security_group_rules: list[SecurityGroupRule] = Field(default_factory=list)


class CreateSecurityGroupRuleRequest(BaseModel):
    security_group_id: str
    direction: str
    ethertype: str = "IPv4"
    protocol: str | None = None
    port_range_min: int | None = None
    port_range_max: int | None = None
    remote_ip_prefix: str | None = None
    remote_group_id: str | None = None


class Network(APIModel):
    id: str = ""
    name: str = ""
    tenant_id: str = ""
    admin_state_up: bool = False
    mtu: int = 0
    status: str = ""
    subnets: list[str] = Field(default_factory=list)
    shared: bool = False
    project_id: str = ""
    external: bool = Field(default=False, alias="router:external")


class AddressPair(APIModel):
    mac_address: str | None = None
    ip_address: str = ""


class Port(APIModel):
    id: str = ""
    name: str = ""
    network_id: str = ""
    tenant_id: str = ""
    mac_address: str = ""
    admin_state_up: bool = False
    status: str = ""
    device_id: str = ""
    device_owner: str = ""
    fixed_ips: list[FixedIP] = Field(default_factory=list)
    project_id: str = ""
    security_groups: list[str] = Field(default_factory=list)
    allowed_address_pairs: list[AddressPair] = Field(default_factory=list)
    extra_dhcp_opts: list[Any] = Field(default_factory=list)
    binding_vnic_type: str = Field(default="", alias="binding:vnic_type")


class CreatePortRequest(BaseModel):
    network_id: str
    fixed_ips: list[FixedIP] | None = None
    security_groups: list[str] | None = None
    allowed_address_pairs: list[AddressPair] | None = None


class UpdatePortRequest(BaseModel):
    security_groups: list[str] | None = None
    qos_policy_id: str | None = None
    fixed_ips: list[FixedIP] | None = None
    allowed_address_pairs: list[AddressPair] | None = None
