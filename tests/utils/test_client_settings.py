#!/usr/bin/env python3

from __future__ import annotations

import json

import httpx
import pytest

from examplecloud.config import ClientSettings, connect, load_config_by_file
from examplecloud.endpoints import Service
from examplecloud.errors import APIError, InvalidArgumentError


def test_load_config_by_file_resolves_env_and_jsonfile(tmp_path, monkeypatch) -> None:
    secrets = tmp_path / "secrets.json"
    secrets.write_text(json.dumps({"cloud": {"password": "from-jsonfile"}}), encoding="utf-8")
    config_path = tmp_path / "config.toml"
    config_path.write_text(
        "[examplecloud]\n"
        'user_id = "env,EC_TEST_USER"\n'
        'password = "jsonfile,cloud.password"\n'
        'tenant_id = "jsonfile,EC_TEST_TENANT"\n'
        'region = "c3j2"\n',
        encoding="utf-8",
    )
    monkeypatch.setenv("EC_TEST_USER", "user-from-env")
    monkeypatch.setenv("EC_TEST_TENANT", "tenant-from-env")

    config = load_config_by_file(str(config_path), jsonfile=str(secrets))

    assert config["examplecloud"]["user_id"] == "user-from-env"
    assert config["examplecloud"]["password"] == "from-jsonfile"
    assert config["examplecloud"]["tenant_id"] == "tenant-from-env"


def test_unresolved_placeholders_are_kept(tmp_path, monkeypatch) -> None:
    config_path = tmp_path / "config.json"
    config_path.write_text(json.dumps({"password": "env,EC_TEST_MISSING"}), encoding="utf-8")
    monkeypatch.delenv("EC_TEST_MISSING", raising=False)

    assert load_config_by_file(str(config_path)) == {"password": "env,EC_TEST_MISSING"}


@pytest.mark.parametrize(
    "secrets_text",
    [None, "{broken", "[\"not\", \"an\", \"object\"]"],
    ids=["missing", "invalid-json", "list-root"],
)
def test_unusable_jsonfile_falls_back_to_environment(tmp_path, monkeypatch, secrets_text) -> None:
    secrets = tmp_path / "secrets.json"
    if secrets_text is not None:
        secrets.write_text(secrets_text, encoding="utf-8")
    config_path = tmp_path / "config.json"
    config_path.write_text(
        json.dumps({"password": "jsonfile,EC_TEST_PASSWORD", "user": "jsonfile,EC_TEST_UNSET"}),
        encoding="utf-8",
    )
    monkeypatch.setenv("EC_TEST_PASSWORD", "pw-from-env")
    monkeypatch.delenv("EC_TEST_UNSET", raising=False)

    config = load_config_by_file(str(config_path), jsonfile=str(secrets))

    assert config == {"password": "pw-from-env", "user": "jsonfile,EC_TEST_UNSET"}


def test_settings_from_file_reads_endpoints(tmp_path) -> None:
    config_path = tmp_path / "config.toml"
    config_path.write_text(
        "[examplecloud]\n"
        'user_name = "api-user"\n'
        'password = "pw"\n'
        'tenant_name = "tenant"\n'
        "[examplecloud.endpoints]\n"
        'compute = "https://compute.example.test"\n',
        encoding="utf-8",
    )

    settings = ClientSettings.from_file(str(config_path))

    assert settings.user_name == "api-user"
    assert settings.endpoints.compute == "https://compute.example.test"
    assert settings.endpoints.identity == ""


def test_settings_rejects_unknown_endpoint_keys() -> None:
    with pytest.raises(InvalidArgumentError):
        ClientSettings.from_mapping({"endpoints": {"metering": "https://m.example"}})


def test_settings_from_env() -> None:
    environ = {
        "EXAMPLECLOUD_USER_ID": "u1",
        "EXAMPLECLOUD_PASSWORD": "pw",
        "EXAMPLECLOUD_TENANT_ID": "t1",
        "EXAMPLECLOUD_IDENTITY_URL": "https://identity.c3j2.example-cloud.io",
    }

    settings = ClientSettings.from_env(environ)

    assert (settings.user_id, settings.tenant_id) == ("u1", "t1")
    assert settings.endpoints.identity == "https://identity.c3j2.example-cloud.io"


def test_settings_repr_masks_password() -> None:
    settings = ClientSettings(user_id="u1", password="super-secret")

    assert "super-secret" not in repr(settings)


@pytest.mark.parametrize(
    "settings",
    [
        ClientSettings(user_id="u1", tenant_id="t1"),
        ClientSettings(user_id="u1", password="pw"),
        ClientSettings(user_name="n", password="pw"),
    ],
)
def test_connect_validates_credentials(settings: ClientSettings) -> None:
    with pytest.raises(InvalidArgumentError):
        connect(settings)


def _token_handler(status_code: int = 201):
    def handler(request: httpx.Request) -> httpx.Response:
        if status_code >= 400:
            return httpx.Response(status_code, json={"error": {"message": "denied", "code": status_code}})
        return httpx.Response(
            status_code,
            json={"token": {"project": {"id": "tenant-from-token"}, "catalog": []}},
            headers={"X-Subject-Token": "issued"},
        )

    return handler


def test_connect_authenticates_by_name() -> None:
    http_client = httpx.Client(transport=httpx.MockTransport(_token_handler()))
    settings = ClientSettings(
        user_name="api-user",
        password="pw",
        tenant_name="tenant",
        region="c3j2",
    )

    with connect(settings, http_client=http_client) as client:
        assert client.token == "issued"
        assert client.tenant_id == "tenant-from-token"
        assert client.region == "c3j2"
        assert client.endpoint(Service.IDENTITY) == "https://identity.c3j2.example-cloud.io/v3"
    http_client.close()


def test_connect_propagates_rejection() -> None:
    http_client = httpx.Client(transport=httpx.MockTransport(_token_handler(401)))

    with pytest.raises(APIError):
        connect(ClientSettings(user_id="u1", password="pw", tenant_id="t1"), http_client=http_client)
    http_client.close()
