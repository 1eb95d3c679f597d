"""Compute (servers, flavors, keypairs) resource operations."""

from __future__ import annotations

from typing import Any

from .endpoints import Service
from .errors import InvalidArgumentError
from .resource import ServiceResource
from .schemas.common import Envelope, member, parse
from .schemas.compute import (
    Address,
    CreateServerRequest,
    CreateServerResponse,
    Flavor,
    FlavorDetail,
    InterfaceAttachment,
    Keypair,
    RebuildServerRequest,
    RemoteConsole,
    RRDData,
    Server,
    ServerDetail,
    ServerSecurityGroup,
    ServerVolumeAttachment,
)

_SERVER = Envelope("server", Server)
_SERVER_DETAIL = Envelope("server", ServerDetail)
_CREATED_SERVER = Envelope("server", CreateServerResponse)
_FLAVOR = Envelope("flavor", Flavor)
_FLAVOR_DETAIL = Envelope("flavor", FlavorDetail)
_KEYPAIR = Envelope("keypair", Keypair)
_CONSOLE = Envelope("remote_console", RemoteConsole)
_SECURITY_GROUP = Envelope("security_group", ServerSecurityGroup)
_INTERFACE = Envelope("interfaceAttachment", InterfaceAttachment, plural="interfaceAttachments")
_VOLUME_ATTACHMENT = Envelope("volumeAttachment", ServerVolumeAttachment, plural="volumeAttachments")


class ComputeResource(ServiceResource):
    """Servers, flavors, keypairs, attachments and monitoring."""

    service = Service.COMPUTE

    def list_servers(
        self,
        *,
        limit: int | None = None,
        marker: str | None = None,
        status: str | None = None,
        name: str | None = None,
    ) -> list[Server]:
        params = {"limit": limit, "marker": marker, "status": status, "name": name}
        return _SERVER.unwrap_list(self._request("GET", "/servers", params=params))

    def list_servers_detail(
        self,
        *,
        limit: int | None = None,
        marker: str | None = None,
        status: str | None = None,
        name: str | None = None,
    ) -> list[ServerDetail]:
        params = {"limit": limit, "marker": marker, "status": status, "name": name}
        return _SERVER_DETAIL.unwrap_list(self._request("GET", "/servers/detail", params=params))

    def get_server(self, server_id: str) -> ServerDetail:
        return _SERVER_DETAIL.unwrap(self._request("GET", f"/servers/{server_id}"))

    def create_server(self, request: CreateServerRequest) -> CreateServerResponse:
        """Create a server.

        Args:
            request: Flavor, admin password, boot volume and options.

        Returns:
            CreateServerResponse: New server id and generated admin password.
        """
        return _CREATED_SERVER.unwrap(self._request("POST", "/servers", body=_SERVER.wrap(request)))

    def delete_server(self, server_id: str) -> None:
        self._request("DELETE", f"/servers/{server_id}")

    def _action(self, server_id: str, body: dict[str, Any]) -> Any:
        return self._request("POST", f"/servers/{server_id}/action", body=body)

    def start_server(self, server_id: str) -> None:
        self._action(server_id, {"os-start": None})

    def stop_server(self, server_id: str) -> None:
        self._action(server_id, {"os-stop": None})

    def reboot_server(self, server_id: str) -> None:
        self._action(server_id, {"reboot": {"type": "SOFT"}})

    def force_stop_server(self, server_id: str) -> None:
        self._action(server_id, {"os-stop": {"force_shutdown": True}})

    def rebuild_server(self, server_id: str, request: RebuildServerRequest) -> None:
        self._action(server_id, {"rebuild": request.model_dump(by_alias=True, exclude_none=True)})

    def resize_server(self, server_id: str, flavor_ref: str) -> None:
        self._action(server_id, {"resize": {"flavorRef": flavor_ref}})

    def confirm_resize(self, server_id: str) -> None:
        self._action(server_id, {"confirmResize": None})

    def revert_resize(self, server_id: str) -> None:
        self._action(server_id, {"revertResize": None})

    def set_video_device(self, server_id: str, model: str) -> None:
        self._action(server_id, {"hwVideoModel": model})

    def set_network_adapter(self, server_id: str, model: str) -> None:
        self._action(server_id, {"hwVifModel": model})

    def set_storage_controller(self, server_id: str, bus: str) -> None:
        self._action(server_id, {"hwDiskBus": bus})

    def mount_iso(self, server_id: str, image_ref: str) -> str:
        """Boot a server into rescue mode with an ISO image attached.

        Returns:
            str: Temporary admin password, empty when not returned.
        """
        result = self._action(server_id, {"rescue": {"rescue_image_ref": image_ref}})
        return str(member(result, "adminPass") or "")

    def unmount_iso(self, server_id: str) -> None:
        self._action(server_id, {"unrescue": None})

    def get_server_addresses(self, server_id: str) -> dict[str, list[Address]]:
        payload = self._request("GET", f"/servers/{server_id}/ips")
        return _parse_addresses(member(payload, "addresses") or {})

    def get_server_addresses_by_network(self, server_id: str, network_name: str) -> list[Address]:
        payload = self._request("GET", f"/servers/{server_id}/ips/{network_name}")
        return _parse_addresses({network_name: member(payload, network_name) or []})[network_name]

    def get_server_security_groups(self, server_id: str) -> list[ServerSecurityGroup]:
        return _SECURITY_GROUP.unwrap_list(self._request("GET", f"/servers/{server_id}/os-security-groups"))

    def get_console_url(self, server_id: str, protocol: str, console_type: str) -> RemoteConsole:
        body = _CONSOLE.wrap({"protocol": protocol, "type": console_type})
        return _CONSOLE.unwrap(self._request("POST", f"/servers/{server_id}/remote-consoles", body=body))

    def get_vnc_console_url(self, server_id: str) -> str:
        return self.get_console_url(server_id, "vnc", "novnc").url

    def get_server_metadata(self, server_id: str) -> dict[str, str]:
        payload = self._request("GET", f"/servers/{server_id}/metadata")
        return dict(member(payload, "metadata") or {})

    def update_server_metadata(self, server_id: str, metadata: dict[str, str]) -> dict[str, str]:
        """Merge keys into server metadata and return the resulting set."""
        payload = self._request("POST", f"/servers/{server_id}/metadata", body={"metadata": metadata})
        return dict(member(payload, "metadata") or {})

    def list_flavors(self) -> list[Flavor]:
        return _FLAVOR.unwrap_list(self._request("GET", "/flavors"))

    def list_flavors_detail(self) -> list[FlavorDetail]:
        return _FLAVOR_DETAIL.unwrap_list(self._request("GET", "/flavors/detail"))

    def get_flavor(self, flavor_id: str) -> FlavorDetail:
        return _FLAVOR_DETAIL.unwrap(self._request("GET", f"/flavors/{flavor_id}"))

    def list_keypairs(self, *, limit: int | None = None, marker: str | None = None) -> list[Keypair]:
        payload = self._request("GET", "/os-keypairs", params={"limit": limit, "marker": marker})
        # Each list item is itself wrapped as {"keypair": {...}}.
        return [_KEYPAIR.unwrap(item) for item in member(payload, "keypairs") or []]

    def create_keypair(self, name: str) -> Keypair:
        """Generate a keypair. The private key is only returned here."""
        return _KEYPAIR.unwrap(self._request("POST", "/os-keypairs", body=_KEYPAIR.wrap({"name": name})))

    def import_keypair(self, name: str, public_key: str) -> Keypair:
        body = _KEYPAIR.wrap({"name": name, "public_key": public_key})
        return _KEYPAIR.unwrap(self._request("POST", "/os-keypairs", body=body))

    def get_keypair(self, name: str) -> Keypair:
        return _KEYPAIR.unwrap(self._request("GET", f"/os-keypairs/{name}"))

    def delete_keypair(self, name: str) -> None:
        self._request("DELETE", f"/os-keypairs/{name}")

    def list_server_interfaces(self, server_id: str) -> list[InterfaceAttachment]:
        return _INTERFACE.unwrap_list(self._request("GET", f"/servers/{server_id}/os-interface"))

    def get_server_interface(self, server_id: str, port_id: str) -> InterfaceAttachment:
        return _INTERFACE.unwrap(self._request("GET", f"/servers/{server_id}/os-interface/{port_id}"))

    def attach_port(self, server_id: str, port_id: str) -> InterfaceAttachment:
        body = _INTERFACE.wrap({"port_id": port_id})
        return _INTERFACE.unwrap(self._request("POST", f"/servers/{server_id}/os-interface", body=body))

    def detach_port(self, server_id: str, port_id: str) -> None:
        self._request("DELETE", f"/servers/{server_id}/os-interface/{port_id}")

    def list_server_volumes(self, server_id: str) -> list[ServerVolumeAttachment]:
        return _VOLUME_ATTACHMENT.unwrap_list(self._request("GET", f"/servers/{server_id}/os-volume_attachments"))

    def get_server_volume(self, server_id: str, volume_id: str) -> ServerVolumeAttachment:
        path = f"/servers/{server_id}/os-volume_attachments/{volume_id}"
        return _VOLUME_ATTACHMENT.unwrap(self._request("GET", path))

    def attach_volume(self, server_id: str, volume_id: str) -> ServerVolumeAttachment:
        body = _VOLUME_ATTACHMENT.wrap({"volumeId": volume_id})
        path = f"/servers/{server_id}/os-volume_attachments"
        return _VOLUME_ATTACHMENT.unwrap(self._request("POST", path, body=body))

    def detach_volume(self, server_id: str, volume_id: str) -> None:
        self._request("DELETE", f"/servers/{server_id}/os-volume_attachments/{volume_id}")

    def get_cpu_usage(
        self,
        server_id: str,
        *,
        start_date_raw: str | None = None,
        end_date_raw: str | None = None,
        mode: str | None = None,
    ) -> RRDData:
        """Fetch CPU usage series.

        Args:
            server_id: Server id.
            start_date_raw: UTC start datetime.
            end_date_raw: UTC end datetime.
            mode: ``average``, ``max`` or ``min``.

        Returns:
            RRDData: Monitoring series.
        """
        params = {"start_date_raw": start_date_raw, "end_date_raw": end_date_raw, "mode": mode}
        return self._rrd(server_id, "cpu", params)

    def get_disk_io(
        self,
        server_id: str,
        *,
        device: str | None = None,
        start_date_raw: str | None = None,
        end_date_raw: str | None = None,
        mode: str | None = None,
    ) -> RRDData:
        """Fetch disk IO series for a device such as ``vda``."""
        params = {
            "device": device,
            "start_date_raw": start_date_raw,
            "end_date_raw": end_date_raw,
            "mode": mode,
        }
        return self._rrd(server_id, "disk", params)

    def get_network_traffic(
        self,
        server_id: str,
        *,
        port_id: str,
        start_date_raw: str | None = None,
        end_date_raw: str | None = None,
        mode: str | None = None,
    ) -> RRDData:
        """Fetch traffic series for one port.

        Raises:
            InvalidArgumentError: ``port_id`` is empty.
        """
        if not port_id:
            raise InvalidArgumentError("port_id is required for network traffic monitoring")
        params = {
            "port_id": port_id,
            "start_date_raw": start_date_raw,
            "end_date_raw": end_date_raw,
            "mode": mode,
        }
        return self._rrd(server_id, "interface", params)

    def _rrd(self, server_id: str, kind: str, params: dict[str, Any]) -> RRDData:
        payload = self._request("GET", f"/servers/{server_id}/rrd/{kind}", params=params)
        return parse(RRDData, member(payload, kind))


def _parse_addresses(raw: dict[str, Any]) -> dict[str, list[Address]]:
    return {network: [parse(Address, item) for item in items or []] for network, items in raw.items()}
