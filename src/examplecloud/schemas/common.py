"""Shared model base and JSON envelope helpers."""

from __future__ import annotations

from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, ValidationError

from ..errors import UnmarshalError

M = TypeVar("M", bound=BaseModel)


class APIModel(BaseModel):
    """Base for provider resources.

    Unknown keys are kept so new provider fields survive a round trip.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)


class Link(APIModel):
    href: str = ""
    rel: str = ""


def to_body(value: BaseModel | dict[str, Any]) -> dict[str, Any]:
    """Dump a request model using wire names and without unset fields."""
    if isinstance(value, BaseModel):
        return value.model_dump(by_alias=True, exclude_none=True)
    return value


def parse(model: type[M], payload: Any) -> M:
    """Validate a bare JSON object into ``model``.

    Raises:
        UnmarshalError: Payload does not match the model.
    """
    try:
        return model.model_validate(payload if payload is not None else {})
    except ValidationError as exc:
        raise UnmarshalError(f"decode {model.__name__}: {exc}") from exc


def parse_list(model: type[M], payload: Any) -> list[M]:
    if payload is None:
        return []
    if not isinstance(payload, list):
        raise UnmarshalError(f"decode {model.__name__} list: expected array, got {type(payload).__name__}")
    return [parse(model, item) for item in payload]


class Envelope(Generic[M]):
    """Single-key JSON wrapper such as ``{"server": {...}}``.

    Args:
        key: Singular envelope key.
        model: Resource model.
        plural: Plural key used by list responses, ``key + "s"`` by default.
    """

    def __init__(self, key: str, model: type[M], plural: str | None = None) -> None:
        self.key = key
        self.model = model
        self.plural = plural or f"{key}s"

    def wrap(self, body: BaseModel | dict[str, Any]) -> dict[str, Any]:
        return {self.key: to_body(body)}

    def unwrap(self, payload: Any) -> M:
        return parse(self.model, member(payload, self.key))

    def unwrap_list(self, payload: Any) -> list[M]:
        return parse_list(self.model, member(payload, self.plural))


def member(payload: Any, key: str) -> Any:
    if payload is None:
        return None
    if not isinstance(payload, dict):
        raise UnmarshalError(f"decode envelope {key!r}: expected object, got {type(payload).__name__}")
    return payload.get(key)
