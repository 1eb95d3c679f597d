"""Client settings from TOML/JSON files or the environment."""

from __future__ import annotations

from dataclasses import dataclass, field
import json
import os
from pathlib import Path
import tomllib
from typing import Any, Dict, Mapping, Optional

import httpx

from .client import Client
from .endpoints import Endpoints
from .errors import InvalidArgumentError

ENV_PREFIX = "EXAMPLECLOUD_"


def _read_secrets(jsonfile: Optional[str]) -> Dict[str, Any]:
    """Parse the secrets file behind ``jsonfile,`` placeholders.

    An unset path, an unreadable file, invalid JSON or a non-object root all
    yield an empty mapping, so lookups fall through to the environment.
    """
    if not jsonfile:
        return {}
    try:
        secrets = json.loads(Path(jsonfile).read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return {}
    return secrets if isinstance(secrets, dict) else {}


def _lookup(secrets: Mapping[str, Any], dotted_key: str) -> Any:
    value: Any = secrets
    for key_part in dotted_key.split("."):
        if isinstance(value, dict) and key_part in value:
            value = value[key_part]
        else:
            return None
    return value


def _replace_values(data: Any, secrets: Mapping[str, Any]) -> Any:
    """Recursively resolve placeholders in config values.

    Supported placeholder prefixes:
    - ``env,NAME``
    - ``jsonfile,key`` (dotted key path, environment variable fallback)

    Unresolved placeholders are returned unchanged.
    """
    if isinstance(data, dict):
        return {k: _replace_values(v, secrets) for k, v in data.items()}
    if isinstance(data, list):
        return [_replace_values(item, secrets) for item in data]
    if not isinstance(data, str):
        return data

    if data.startswith("env,"):
        return os.getenv(data.split(",", 1)[1], data)
    if data.startswith("jsonfile,"):
        key = data.split(",", 1)[1]
        value = _lookup(secrets, key)
        if value is not None:
            return value
        env_value = os.getenv(key)
        if env_value is not None:
            return env_value
    return data


def load_config_by_file(path: str, jsonfile: Optional[str] = None) -> Dict[str, Any]:
    """Load config from TOML/JSON and resolve supported placeholders.

    Args:
        path: Config file path. ``.toml`` files are parsed as TOML, anything else as JSON.
        jsonfile: JSON secrets file used for ``jsonfile,`` lookups.

    Returns:
        Dict[str, Any]: Loaded and resolved config.
    """
    if path.endswith(".toml"):
        with open(path, "rb") as f:
            config = tomllib.load(f)
    else:
        with open(path, "r", encoding="utf-8") as f:
            config = json.load(f)

    return _replace_values(config, _read_secrets(jsonfile))


@dataclass(frozen=True)
class ClientSettings:
    """Connection settings.

    Attributes:
        region: Region id, empty to infer or use the default.
        endpoints: Pinned endpoint URLs.
        user_id: API user id. Takes precedence over ``user_name``.
        user_name: API user name.
        password: API user password.
        tenant_id: Tenant id used with ``user_id``.
        tenant_name: Tenant name used with ``user_name``.
    """

    region: str = ""
    endpoints: Endpoints = field(default_factory=Endpoints)
    user_id: str = ""
    user_name: str = ""
    password: str = ""
    tenant_id: str = ""
    tenant_name: str = ""

    def __repr__(self) -> str:
        return (
            f"ClientSettings(region={self.region!r}, user_id={self.user_id!r}, "
            f"user_name={self.user_name!r}, tenant_id={self.tenant_id!r}, "
            f"tenant_name={self.tenant_name!r}, password=***)"
        )

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "ClientSettings":
        """Build settings from a loaded config.

        Reads the ``examplecloud`` table when present, otherwise the root.
        Pinned URLs come from its ``endpoints`` sub-table.
        """
        section = data.get("examplecloud", data)
        raw_endpoints = section.get("endpoints") or {}
        unknown = set(raw_endpoints) - set(Endpoints.__dataclass_fields__)
        if unknown:
            raise InvalidArgumentError(f"unknown endpoint keys: {', '.join(sorted(unknown))}")
        return cls(
            region=str(section.get("region") or ""),
            endpoints=Endpoints(**{k: str(v) for k, v in raw_endpoints.items() if v}),
            user_id=str(section.get("user_id") or ""),
            user_name=str(section.get("user_name") or ""),
            password=str(section.get("password") or ""),
            tenant_id=str(section.get("tenant_id") or ""),
            tenant_name=str(section.get("tenant_name") or ""),
        )

    @classmethod
    def from_file(cls, path: str, jsonfile: Optional[str] = None) -> "ClientSettings":
        return cls.from_mapping(load_config_by_file(path, jsonfile=jsonfile))

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ClientSettings":
        """Build settings from ``EXAMPLECLOUD_*`` environment variables."""
        env = os.environ if environ is None else environ

        def get(name: str) -> str:
            return env.get(ENV_PREFIX + name, "")

        return cls(
            region=get("REGION"),
            endpoints=Endpoints(identity=get("IDENTITY_URL")),
            user_id=get("USER_ID"),
            user_name=get("USER_NAME"),
            password=get("PASSWORD"),
            tenant_id=get("TENANT_ID"),
            tenant_name=get("TENANT_NAME"),
        )


def connect(settings: ClientSettings, http_client: httpx.Client | None = None) -> Client:
    """Build a client from settings and authenticate it.

    Authenticates by id when ``user_id`` is set, otherwise by name.

    Args:
        settings: Connection settings.
        http_client: Optional injected transport.

    Returns:
        Client: Authenticated client.

    Raises:
        InvalidArgumentError: Credentials are incomplete.
        APIError: Provider rejected the credentials.
    """
    if not settings.password:
        raise InvalidArgumentError("password is required")
    if settings.user_id:
        if not settings.tenant_id:
            raise InvalidArgumentError("tenant_id is required with user_id")
    elif not (settings.user_name and settings.tenant_name):
        raise InvalidArgumentError("user_id or user_name with tenant_name is required")

    client = Client(
        region=settings.region or None,
        http_client=http_client,
        endpoints=settings.endpoints,
    )
    try:
        if settings.user_id:
            client.authenticate(settings.user_id, settings.password, settings.tenant_id)
        else:
            client.authenticate_by_name(settings.user_name, settings.password, settings.tenant_name)
    except BaseException:
        client.close()
        raise
    return client
