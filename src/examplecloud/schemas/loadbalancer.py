"""Load balancer (LBaaS) models."""

from __future__ import annotations

from pydantic import BaseModel, Field

from .common import APIModel


class IDRef(APIModel):
    id: str = ""


class LoadBalancer(APIModel):
    id: str = ""
    name: str = ""
    description: str = ""
    provisioning_status: str = ""
    operating_status: str = ""
    admin_state_up: bool = False
    project_id: str = ""
    vip_address: str = ""
    vip_port_id: str = ""
    vip_subnet_id: str = ""
    vip_network_id: str = ""
    listeners: list[IDRef] = Field(default_factory=list)
    pools: list[IDRef] = Field(default_factory=list)
    tenant_id: str = ""


class Listener(APIModel):
    id: str = ""
    name: str = ""
    description: str = ""
    provisioning_status: str = ""
    operating_status: str = ""
    admin_state_up: bool = False
    protocol: str = ""
    protocol_port: int = 0
    connection_limit: int = 0
    project_id: str = ""
    default_pool_id: str | None = None
    loadbalancers: list[IDRef] = Field(default_factory=list)
    tenant_id: str = ""


class Pool(APIModel):
    id: str = ""
    name: str = ""
    description: str = ""
    provisioning_status: str = ""
    operating_status: str = ""
    admin_state_up: bool = False
    protocol: str = ""
    lb_algorithm: str = ""
    project_id: str = ""
    loadbalancers: list[IDRef] = Field(default_factory=list)
    listeners: list[IDRef] = Field(default_factory=list)
    members: list[IDRef] = Field(default_factory=list)
    tenant_id: str = ""


class Member(APIModel):
    id: str = ""
    name: str = ""
    operating_status: str = ""
    provisioning_status: str = ""
    admin_state_up: bool = False
    address: str = ""
    protocol_port: int = 0
    weight: int = 0
    project_id: str = ""
    tenant_id: str = ""


class HealthMonitor(APIModel):
    id: str = ""
    name: str = ""
    type: str = ""
    delay: int = 0
    timeout: int = 0
    max_retries: int = 0
    url_path: str | None = None
    expected_codes: str | None = None
    admin_state_up: bool = False
    project_id: str = ""
    pools: list[IDRef] = Field(default_factory=list)
    provisioning_status: str = ""
    operating_status: str = ""
    tenant_id: str = ""


class CreateHealthMonitorRequest(BaseModel):
    name: str
    pool_id: str
    delay: int
    max_retries: int
    timeout: int
    type: str
    url_path: str | None = None
    expected_codes: str | None = None
