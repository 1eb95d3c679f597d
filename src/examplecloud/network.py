"""Networking resource operations."""

from __future__ import annotations

from .endpoints import Service
from .resource import ServiceResource
from .schemas.common import Envelope
from .schemas.network import (
    CreatePortRequest,
    CreateSecurityGroupRuleRequest,
    Network,
    Port,
    QoSPolicy,
    SecurityGroup,
    SecurityGroupRule,
    Subnet,
    UpdatePortRequest,
)

_POLICY = Envelope("policy", QoSPolicy, plural="policies")
_SUBNET = Envelope("subnet", Subnet)
_SECURITY_GROUP = Envelope("security_group", SecurityGroup)
_RULE = Envelope("security_group_rule", SecurityGroupRule)
_NETWORK = Envelope("network", Network)
_PORT = Envelope("port", Port)


class NetworkResource(ServiceResource):
    """QoS policies, subnets, security groups, networks and ports."""

    service = Service.NETWORK

    def list_qos_policies(self) -> list[QoSPolicy]:
        return _POLICY.unwrap_list(self._request("GET", "/qos/policies"))

    def get_qos_policy(self, policy_id: str) -> QoSPolicy:
        return _POLICY.unwrap(self._request("GET", f"/qos/policies/{policy_id}"))

    def list_subnets(self) -> list[Subnet]:
        return _SUBNET.unwrap_list(self._request("GET", "/subnets"))

    def get_subnet(self, subnet_id: str) -> Subnet:
        return _SUBNET.unwrap(self._request("GET", f"/subnets/{subnet_id}"))

    def create_subnet(self, network_id: str, cidr: str) -> Subnet:
        body = _SUBNET.wrap({"network_id": network_id, "cidr": cidr})
        return _SUBNET.unwrap(self._request("POST", "/subnets", body=body))

    def delete_subnet(self, subnet_id: str) -> None:
        self._request("DELETE", f"/subnets/{subnet_id}")

    def list_security_groups(self) -> list[SecurityGroup]:
        return _SECURITY_GROUP.unwrap_list(self._request("GET", "/security-groups"))

    def get_security_group(self, group_id: str) -> SecurityGroup:
        return _SECURITY_GROUP.unwrap(self._request("GET", f"/security-groups/{group_id}"))

    def create_security_group(self, name: str, description: str = "") -> SecurityGroup:
        fields = {"name": name}
        if description:
            fields["description"] = description
        body = _SECURITY_GROUP.wrap(fields)
        return _SECURITY_GROUP.unwrap(self._request("POST", "/security-groups", body=body))

    def update_security_group(self, group_id: str, *, name: str = "", description: str = "") -> SecurityGroup:
        """Rename or re-describe a security group. Empty values are left unchanged."""
        fields = {}
        if name:
            fields["name"] = name
        if description:
            fields["description"] = description
        body = _SECURITY_GROUP.wrap(fields)
        return _SECURITY_GROUP.unwrap(self._request("PUT", f"/security-groups/{group_id}", body=body))

    def delete_security_group(self, group_id: str) -> None:
        self._request("DELETE", f"/security-groups/{group_id}")

    def list_security_group_rules(self) -> list[SecurityGroupRule]:
        return _RULE.unwrap_list(self._request("GET", "/security-group-rules"))

    def get_security_group_rule(self, rule_id: str) -> SecurityGroupRule:
        return _RULE.unwrap(self._request("GET", f"/security-group-rules/{rule_id}"))

    def create_security_group_rule(self, request: CreateSecurityGroupRuleRequest) -> SecurityGroupRule:
        return _RULE.unwrap(self._request("POST", "/security-group-rules", body=_RULE.wrap(request)))

    def delete_security_group_rule(self, rule_id: str) -> None:
        self._request("DELETE", f"/security-group-rules/{rule_id}")

    def list_networks(self) -> list[Network]:
        return _NETWORK.unwrap_list(self._request("GET", "/networks"))

    def get_network(self, network_id: str) -> Network:
        return _NETWORK.unwrap(self._request("GET", f"/networks/{network_id}"))

    def create_network(self) -> Network:
        """Create a local network. The provider assigns every attribute."""
        return _NETWORK.unwrap(self._request("POST", "/networks"))

    def delete_network(self, network_id: str) -> None:
        self._request("DELETE", f"/networks/{network_id}")

    def list_ports(self) -> list[Port]:
        return _PORT.unwrap_list(self._request("GET", "/ports"))

    def get_port(self, port_id: str) -> Port:
        return _PORT.unwrap(self._request("GET", f"/ports/{port_id}"))

    def create_port(self, request: CreatePortRequest) -> Port:
        return _PORT.unwrap(self._request("POST", "/ports", body=_PORT.wrap(request)))

    def allocate_additional_ip(self, count: int, security_groups: list[str] | None = None) -> Port:
        """Allocate a port holding additional public addresses.

        Args:
            count: Number of addresses.
            security_groups: Security group ids applied to the new port.

        Returns:
            Port: Port carrying the allocated addresses.
        """
        fields: dict = {"count": count}
        if security_groups:
            fields["security_groups"] = security_groups
        return _PORT.unwrap(self._request("POST", "/allocateips", body={"allocateip": fields}))

    def update_port(self, port_id: str, request: UpdatePortRequest) -> Port:
        return _PORT.unwrap(self._request("PUT", f"/ports/{port_id}", body=_PORT.wrap(request)))

    def delete_port(self, port_id: str) -> None:
        self._request("DELETE", f"/ports/{port_id}")
