"""Load balancer (LBaaS) resource operations."""

from __future__ import annotations

from typing import Any

from .endpoints import Service
from .resource import ServiceResource
from .schemas.common import Envelope
from .schemas.loadbalancer import (
    CreateHealthMonitorRequest,
    HealthMonitor,
    Listener,
    LoadBalancer,
    Member,
    Pool,
)

_LOAD_BALANCER = Envelope("loadbalancer", LoadBalancer)
_LISTENER = Envelope("listener", Listener)
_POOL = Envelope("pool", Pool)
_MEMBER = Envelope("member", Member)
_HEALTH_MONITOR = Envelope("healthmonitor", HealthMonitor)


class LoadBalancerResource(ServiceResource):
    """Load balancers, listeners, pools, members and health monitors."""

    service = Service.LOAD_BALANCER

    def _url(self, path: str) -> str:
        return super()._url("/lbaas" + path)

    def list_load_balancers(self) -> list[LoadBalancer]:
        return _LOAD_BALANCER.unwrap_list(self._request("GET", "/loadbalancers"))

    def get_load_balancer(self, lb_id: str) -> LoadBalancer:
        return _LOAD_BALANCER.unwrap(self._request("GET", f"/loadbalancers/{lb_id}"))

    def create_load_balancer(self, name: str) -> LoadBalancer:
        body = _LOAD_BALANCER.wrap({"name": name})
        return _LOAD_BALANCER.unwrap(self._request("POST", "/loadbalancers", body=body))

    def update_load_balancer(self, lb_id: str, name: str) -> LoadBalancer:
        body = _LOAD_BALANCER.wrap({"name": name})
        return _LOAD_BALANCER.unwrap(self._request("PUT", f"/loadbalancers/{lb_id}", body=body))

    def delete_load_balancer(self, lb_id: str) -> None:
        self._request("DELETE", f"/loadbalancers/{lb_id}")

    def list_listeners(self) -> list[Listener]:
        return _LISTENER.unwrap_list(self._request("GET", "/listeners"))

    def get_listener(self, listener_id: str) -> Listener:
        return _LISTENER.unwrap(self._request("GET", f"/listeners/{listener_id}"))

    def create_listener(self, name: str, protocol: str, port: int, lb_id: str) -> Listener:
        """Create a listener on a load balancer.

        Args:
            name: Listener name.
            protocol: ``TCP``, ``UDP`` and so on.
            port: Listening port.
            lb_id: Owning load balancer id.

        Returns:
            Listener: Created listener.
        """
        body = _LISTENER.wrap(
            {"name": name, "protocol": protocol, "protocol_port": port, "loadbalancer_id": lb_id}
        )
        return _LISTENER.unwrap(self._request("POST", "/listeners", body=body))

    def update_listener(self, listener_id: str, name: str) -> Listener:
        body = _LISTENER.wrap({"name": name})
        return _LISTENER.unwrap(self._request("PUT", f"/listeners/{listener_id}", body=body))

    def delete_listener(self, listener_id: str) -> None:
        self._request("DELETE", f"/listeners/{listener_id}")

    def list_pools(self) -> list[Pool]:
        return _POOL.unwrap_list(self._request("GET", "/pools"))

    def get_pool(self, pool_id: str) -> Pool:
        return _POOL.unwrap(self._request("GET", f"/pools/{pool_id}"))

    def create_pool(self, name: str, protocol: str, lb_algorithm: str, listener_id: str) -> Pool:
        body = _POOL.wrap(
            {"name": name, "protocol": protocol, "lb_algorithm": lb_algorithm, "listener_id": listener_id}
        )
        return _POOL.unwrap(self._request("POST", "/pools", body=body))

    def update_pool(self, pool_id: str, *, name: str = "", lb_algorithm: str = "") -> Pool:
        fields: dict[str, Any] = {}
        if name:
            fields["name"] = name
        if lb_algorithm:
            fields["lb_algorithm"] = lb_algorithm
        return _POOL.unwrap(self._request("PUT", f"/pools/{pool_id}", body=_POOL.wrap(fields)))

    def delete_pool(self, pool_id: str) -> None:
        self._request("DELETE", f"/pools/{pool_id}")

    def list_members(self, pool_id: str) -> list[Member]:
        return _MEMBER.unwrap_list(self._request("GET", f"/pools/{pool_id}/members"))

    def get_member(self, pool_id: str, member_id: str) -> Member:
        return _MEMBER.unwrap(self._request("GET", f"/pools/{pool_id}/members/{member_id}"))

    def add_member(self, pool_id: str, name: str, address: str, port: int) -> Member:
        body = _MEMBER.wrap({"name": name, "address": address, "protocol_port": port})
        return _MEMBER.unwrap(self._request("POST", f"/pools/{pool_id}/members", body=body))

    def update_member(self, pool_id: str, member_id: str, admin_state_up: bool) -> Member:
        body = _MEMBER.wrap({"admin_state_up": admin_state_up})
        return _MEMBER.unwrap(self._request("PUT", f"/pools/{pool_id}/members/{member_id}", body=body))

    def delete_member(self, pool_id: str, member_id: str) -> None:
        self._request("DELETE", f"/pools/{pool_id}/members/{member_id}")

    def list_health_monitors(self) -> list[HealthMonitor]:
        return _HEALTH_MONITOR.unwrap_list(self._request("GET", "/healthmonitors"))

    def get_health_monitor(self, monitor_id: str) -> HealthMonitor:
        return _HEALTH_MONITOR.unwrap(self._request("GET", f"/healthmonitors/{monitor_id}"))

    def create_health_monitor(self, request: CreateHealthMonitorRequest) -> HealthMonitor:
        body = _HEALTH_MONITOR.wrap(request)
        return _HEALTH_MONITOR.unwrap(self._request("POST", "/healthmonitors", body=body))

    def update_health_monitor(self, monitor_id: str, name: str) -> HealthMonitor:
        body = _HEALTH_MONITOR.wrap({"name": name})
        return _HEALTH_MONITOR.unwrap(self._request("PUT", f"/healthmonitors/{monitor_id}", body=body))

    def delete_health_monitor(self, monitor_id: str) -> None:
        self._request("DELETE", f"/healthmonitors/{monitor_id}")
