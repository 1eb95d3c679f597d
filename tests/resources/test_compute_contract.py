#!/usr/bin/env python3
"""Compute resource contract tests."""

from __future__ import annotations

import httpx
import pytest

from conftest import API, respond
from examplecloud.errors import APIError, InvalidArgumentError
from examplecloud.schemas.compute import BlockDeviceMap, CreateServerRequest, RebuildServerRequest


def test_list_servers_passes_filters(make_client) -> None:
    client, recorder = make_client(respond(200, {"servers": [{"id": "s1", "name": "web", "links": []}]}))

    servers = client.compute.list_servers(limit=10, status="ACTIVE")

    request = recorder.last
    assert request.url.path == "/servers"
    assert dict(request.url.params) == {"limit": "10", "status": "ACTIVE"}
    assert [server.id for server in servers] == ["s1"]


def test_list_servers_detail_maps_extension_fields(make_client) -> None:
    payload = {
        "servers": [
            {
                "id": "s1",
                "name": "web",
                "status": "ACTIVE",
                "OS-EXT-STS:vm_state": "active",
                "OS-EXT-STS:power_state": 1,
                "OS-EXT-AZ:availability_zone": "nova",
                "os-extended-volumes:volumes_attached": [{"id": "v1"}],
                "addresses": {
                    "ext-net": [
                        {
                            "addr": "203.0.113.10",
                            "version": 4,
                            "OS-EXT-IPS:type": "fixed",
                            "OS-EXT-IPS-MAC:mac_addr": "fa:16:3e:00:00:01",
                        }
                    ]
                },
                "image": "",
                "flavor": {"id": "f1", "vcpus": 2, "ram": 1024},
                "new_field": "kept",
            }
        ]
    }
    client, recorder = make_client(respond(200, payload))

    (server,) = client.compute.list_servers_detail()

    assert recorder.last.url.path == "/servers/detail"
    assert server.vm_state == "active"
    assert server.power_state == 1
    assert server.availability_zone == "nova"
    assert server.volumes_attached[0].id == "v1"
    assert server.addresses["ext-net"][0].mac_addr == "fa:16:3e:00:00:01"
    assert server.flavor.vcpus == 2
    assert server.model_extra["new_field"] == "kept"


def test_create_server_wraps_request(make_client) -> None:
    client, recorder = make_client(respond(202, {"server": {"id": "new-id", "adminPass": "generated"}}))
    request = CreateServerRequest(
        flavor_ref="flavor-1",
        admin_pass="Secret-Pass1",
        block_device_mapping_v2=[BlockDeviceMap(uuid="vol-1")],
        metadata={"instance_name_tag": "web"},
    )

    created = client.compute.create_server(request)

    assert recorder.last.method == "POST"
    assert recorder.last_json() == {
        "server": {
            "flavorRef": "flavor-1",
            "adminPass": "Secret-Pass1",
            "block_device_mapping_v2": [{"uuid": "vol-1"}],
            "metadata": {"instance_name_tag": "web"},
        }
    }
    assert created.id == "new-id"
    assert created.admin_pass == "generated"


def test_get_server_not_found(make_client) -> None:
    client, _ = make_client(respond(404, {"itemNotFound": {"message": "Instance could not be found", "code": 404}}))

    with pytest.raises(APIError) as exc_info:
        client.compute.get_server("missing")

    assert exc_info.value.is_not_found
    assert exc_info.value.message == "Instance could not be found"


@pytest.mark.parametrize(
    ("call", "expected"),
    [
        (lambda c: c.start_server("s1"), {"os-start": None}),
        (lambda c: c.stop_server("s1"), {"os-stop": None}),
        (lambda c: c.force_stop_server("s1"), {"os-stop": {"force_shutdown": True}}),
        (lambda c: c.reboot_server("s1"), {"reboot": {"type": "SOFT"}}),
        (lambda c: c.resize_server("s1", "flavor-2"), {"resize": {"flavorRef": "flavor-2"}}),
        (lambda c: c.confirm_resize("s1"), {"confirmResize": None}),
        (lambda c: c.revert_resize("s1"), {"revertResize": None}),
        (lambda c: c.set_video_device("s1", "vga"), {"hwVideoModel": "vga"}),
        (lambda c: c.set_network_adapter("s1", "e1000"), {"hwVifModel": "e1000"}),
        (lambda c: c.set_storage_controller("s1", "ide"), {"hwDiskBus": "ide"}),
        (lambda c: c.unmount_iso("s1"), {"unrescue": None}),
    ],
)
def test_server_actions_post_action_body(make_client, call, expected: dict) -> None:
    client, recorder = make_client(respond(202))

    call(client.compute)

    assert recorder.last.method == "POST"
    assert recorder.last.url.path == "/servers/s1/action"
    assert recorder.last_json() == expected


def test_rebuild_server_uses_wire_names(make_client) -> None:
    client, recorder = make_client(respond(202))

    client.compute.rebuild_server("s1", RebuildServerRequest(image_ref="img-1", admin_pass="pw"))

    assert recorder.last_json() == {"rebuild": {"imageRef": "img-1", "adminPass": "pw"}}


def test_mount_iso_returns_admin_pass(make_client) -> None:
    client, recorder = make_client(respond(200, {"adminPass": "rescue-pw"}))

    assert client.compute.mount_iso("s1", "iso-image") == "rescue-pw"
    assert recorder.last_json() == {"rescue": {"rescue_image_ref": "iso-image"}}


def test_server_addresses(make_client) -> None:
    payload = {"addresses": {"ext-net": [{"addr": "203.0.113.10", "version": 4}]}}
    client, recorder = make_client(respond(200, payload))

    addresses = client.compute.get_server_addresses("s1")

    assert recorder.last.url.path == "/servers/s1/ips"
    assert addresses["ext-net"][0].addr == "203.0.113.10"


def test_server_addresses_by_network(make_client) -> None:
    client, recorder = make_client(respond(200, {"ext-net": [{"addr": "2001:db8::1", "version": 6}]}))

    addresses = client.compute.get_server_addresses_by_network("s1", "ext-net")

    assert recorder.last.url.path == "/servers/s1/ips/ext-net"
    assert addresses[0].version == 6


def test_vnc_console_url(make_client) -> None:
    payload = {"remote_console": {"protocol": "vnc", "type": "novnc", "url": "https://console.example/vnc"}}
    client, recorder = make_client(respond(200, payload))

    assert client.compute.get_vnc_console_url("s1") == "https://console.example/vnc"
    assert recorder.last.url.path == "/servers/s1/remote-consoles"
    assert recorder.last_json() == {"remote_console": {"protocol": "vnc", "type": "novnc"}}


def test_server_metadata_roundtrip(make_client) -> None:
    client, recorder = make_client(respond(200, {"metadata": {"instance_name_tag": "web"}}))

    assert client.compute.get_server_metadata("s1") == {"instance_name_tag": "web"}
    assert client.compute.update_server_metadata("s1", {"instance_name_tag": "web"}) == {"instance_name_tag": "web"}
    assert recorder.last.method == "POST"
    assert recorder.last_json() == {"metadata": {"instance_name_tag": "web"}}


def test_server_security_groups(make_client) -> None:
    payload = {"security_groups": [{"id": "sg1", "name": "default", "rules": [{"id": "r1", "from_port": 22}]}]}
    client, recorder = make_client(respond(200, payload))

    (group,) = client.compute.get_server_security_groups("s1")

    assert recorder.last.url.path == "/servers/s1/os-security-groups"
    assert group.rules[0].from_port == 22


def test_flavors(make_client) -> None:
    payload = {
        "flavors": [
            {"id": "f1", "name": "g2l-t-c2m1", "ram": 1024, "vcpus": 2, "os-flavor-access:is_public": True}
        ]
    }
    client, recorder = make_client(respond(200, payload))

    (flavor,) = client.compute.list_flavors_detail()

    assert recorder.last.url.path == "/flavors/detail"
    assert flavor.is_public
    assert flavor.ram == 1024


def test_list_keypairs_unwraps_each_item(make_client) -> None:
    payload = {"keypairs": [{"keypair": {"name": "k1", "fingerprint": "aa"}}, {"keypair": {"name": "k2"}}]}
    client, recorder = make_client(respond(200, payload))

    keypairs = client.compute.list_keypairs()

    assert recorder.last.url.path == "/os-keypairs"
    assert [keypair.name for keypair in keypairs] == ["k1", "k2"]


def test_import_keypair(make_client) -> None:
    client, recorder = make_client(respond(200, {"keypair": {"name": "k1", "public_key": "ssh-ed25519 AAAA"}}))

    keypair = client.compute.import_keypair("k1", "ssh-ed25519 AAAA")

    assert recorder.last_json() == {"keypair": {"name": "k1", "public_key": "ssh-ed25519 AAAA"}}
    assert keypair.public_key == "ssh-ed25519 AAAA"


def test_attach_port_and_volume(make_client) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path.endswith("/os-interface"):
            return httpx.Response(200, json={"interfaceAttachment": {"port_id": "p1", "net_id": "n1"}})
        return httpx.Response(200, json={"volumeAttachment": {"id": "v1", "volumeId": "v1", "serverId": "s1"}})

    client, recorder = make_client(handler)

    interface = client.compute.attach_port("s1", "p1")
    assert recorder.last_json() == {"interfaceAttachment": {"port_id": "p1"}}
    assert interface.net_id == "n1"

    attachment = client.compute.attach_volume("s1", "v1")
    assert recorder.last.url.path == "/servers/s1/os-volume_attachments"
    assert recorder.last_json() == {"volumeAttachment": {"volumeId": "v1"}}
    assert attachment.server_id == "s1"


def test_detach_calls_use_delete(make_client) -> None:
    client, recorder = make_client(respond(202))

    client.compute.detach_port("s1", "p1")
    client.compute.detach_volume("s1", "v1")

    assert [(r.method, r.url.path) for r in recorder.requests] == [
        ("DELETE", "/servers/s1/os-interface/p1"),
        ("DELETE", "/servers/s1/os-volume_attachments/v1"),
    ]


def test_cpu_usage_series(make_client) -> None:
    payload = {"cpu": {"schema": ["unixtime", "value"], "data": [[1700000000, 0.5]]}}
    client, recorder = make_client(respond(200, payload))

    series = client.compute.get_cpu_usage("s1", mode="average")

    assert recorder.last.url.path == "/servers/s1/rrd/cpu"
    assert dict(recorder.last.url.params) == {"mode": "average"}
    assert series.schema_ == ["unixtime", "value"]
    assert series.data == [[1700000000, 0.5]]


def test_network_traffic_requires_port(make_client) -> None:
    client, recorder = make_client(respond(200, {"interface": {"schema": [], "data": []}}))

    with pytest.raises(InvalidArgumentError):
        client.compute.get_network_traffic("s1", port_id="")
    assert recorder.requests == []

    client.compute.get_network_traffic("s1", port_id="p1")
    assert recorder.last.url.path == "/servers/s1/rrd/interface"
    assert dict(recorder.last.url.params) == {"port_id": "p1"}


def test_delete_server_accepts_empty_body(make_client) -> None:
    client, recorder = make_client(respond(204))

    assert client.compute.delete_server("s1") is None
    assert (recorder.last.method, str(recorder.last.url)) == ("DELETE", f"{API}/servers/s1")
