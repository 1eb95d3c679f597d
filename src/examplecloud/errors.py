"""Example Cloud error types."""

from __future__ import annotations

import json
from typing import Any, Mapping

import httpx


class ExampleCloudError(Exception):
    """Base client error."""


class APIError(ExampleCloudError):
    """Provider returned a response with status >= 400.

    Attributes:
        status_code: HTTP status code.
        status: Status line text, e.g. ``"404 Not Found"``.
        body: Raw response body text.
        message: Parsed provider message, empty when the body is not an error envelope.
        code: Parsed provider code, ``0`` when absent.
        headers: Response headers.
    """

    def __init__(
        self,
        *,
        status_code: int,
        status: str = "",
        body: str = "",
        message: str = "",
        code: int = 0,
        headers: Mapping[str, str] | None = None,
    ) -> None:
        self.status_code = status_code
        self.status = status or str(status_code)
        self.body = body
        self.message = message
        self.code = code
        self.headers = dict(headers or {})
        super().__init__(str(self))

    def __str__(self) -> str:
        if self.message:
            return f"examplecloud api error: {self.status}: {self.message}"
        return f"examplecloud api error: {self.status} (body: {self.body})"

    @property
    def is_not_found(self) -> bool:
        return self.status_code == 404

    @property
    def is_conflict(self) -> bool:
        return self.status_code == 409

    @classmethod
    def from_response(cls, response: httpx.Response) -> "APIError":
        """Build an error from an HTTP response.

        The recognized envelope is ``{"<anyKey>": {"message": ..., "code": ...}}``.
        The first inner object with a non-empty message wins; any other body
        shape leaves ``message`` empty and keeps the raw body.

        Args:
            response: Fully read HTTP response.

        Returns:
            APIError: Error record.
        """
        body = response.text
        message, code = _parse_error_envelope(body)
        reason = response.reason_phrase or ""
        status = f"{response.status_code} {reason}".strip()
        return cls(
            status_code=response.status_code,
            status=status,
            body=body,
            message=message,
            code=code,
            headers=response.headers,
        )


def _parse_error_envelope(body: str) -> tuple[str, int]:
    try:
        payload: Any = json.loads(body)
    except ValueError:
        return "", 0
    if not isinstance(payload, dict):
        return "", 0
    for inner in payload.values():
        if not isinstance(inner, dict):
            continue
        message = inner.get("message")
        if isinstance(message, str) and message:
            code = inner.get("code")
            return message, code if isinstance(code, int) else 0
    return "", 0


class UnmarshalError(ExampleCloudError):
    """Successful response body could not be decoded into the expected shape."""

    def __init__(self, message: str, *, body: str = "", status_code: int = 0) -> None:
        self.body = body
        self.status_code = status_code
        super().__init__(message)


class RequestEncodeError(ExampleCloudError):
    """Request body could not be serialized to JSON."""


class InvalidArgumentError(ExampleCloudError, ValueError):
    """Caller argument failed a precondition."""


class MissingMethodError(InvalidArgumentError):
    """Temp URL method is empty."""


class MissingContainerError(InvalidArgumentError):
    """Temp URL container is empty."""


class MissingObjectNameError(InvalidArgumentError):
    """Temp URL object name is empty."""


class MissingKeyError(InvalidArgumentError):
    """Temp URL key is empty."""


class InvalidExpiresError(InvalidArgumentError):
    """Temp URL expiry is not a positive Unix timestamp."""


def is_status(exc: BaseException, status_code: int) -> bool:
    """Check whether an exception is a provider error with the given status.

    Args:
        exc: Raised exception.
        status_code: Expected HTTP status code.

    Returns:
        bool: True when ``exc`` is an :class:`APIError` carrying ``status_code``.
    """
    return isinstance(exc, APIError) and exc.status_code == status_code
