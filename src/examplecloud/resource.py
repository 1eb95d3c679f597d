"""Base class shared by the per-service resource wrappers."""

from __future__ import annotations

from contextlib import contextmanager
from typing import IO, TYPE_CHECKING, Any, Iterable, Iterator, Mapping, Union

import httpx

from .endpoints import Service
from .errors import UnmarshalError

if TYPE_CHECKING:
    from .client import Client

# Raw request bodies: buffered bytes, a chunk iterator or a binary file object.
RawContent = Union[bytes, Iterable[bytes], IO[bytes]]


def decode_json(response: httpx.Response) -> Any:
    """Decode a JSON body, ``None`` when the body is empty.

    Raises:
        UnmarshalError: Body is present but is not valid JSON.
    """
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError as exc:
        raise UnmarshalError(
            f"unmarshal response: {exc}",
            body=response.text,
            status_code=response.status_code,
        ) from exc


class ServiceResource:
    """Binds one service family to the shared client pipeline."""

    service: Service

    def __init__(self, client: "Client") -> None:
        """Initialize resource.

        Args:
            client: Owning :class:`~examplecloud.client.Client`.
        """
        self._c = client

    def _url(self, path: str) -> str:
        return self._c.endpoint(self.service) + path

    def _request(
        self,
        method: str,
        path: str,
        *,
        body: Any = None,
        params: Mapping[str, Any] | None = None,
    ) -> Any:
        return self._c.request_json(method, self._url(path), body=body, params=params)

    def _raw(
        self,
        method: str,
        path: str,
        *,
        params: Mapping[str, Any] | None = None,
        headers: Mapping[str, str] | None = None,
        content: RawContent | None = None,
        accept_json: bool = True,
    ) -> httpx.Response:
        return self._c.request_raw(
            method,
            self._url(path),
            params=params,
            headers=headers,
            content=content,
            accept_json=accept_json,
        )

    @contextmanager
    def _stream(
        self,
        method: str,
        path: str,
        *,
        params: Mapping[str, Any] | None = None,
        headers: Mapping[str, str] | None = None,
        accept_json: bool = True,
    ) -> Iterator[httpx.Response]:
        with self._c.stream_raw(
            method,
            self._url(path),
            params=params,
            headers=headers,
            accept_json=accept_json,
        ) as response:
            yield response
