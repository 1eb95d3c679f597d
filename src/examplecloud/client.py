"""Example Cloud API client."""

from __future__ import annotations

import json
import logging
import threading
import time
from contextlib import contextmanager
from types import TracebackType
from typing import IO, Any, Iterator, Mapping
import uuid

import httpx

from .compute import ComputeResource
from .deadline import remaining
from .dns import DNSResource
from .endpoints import EndpointResolver, Endpoints, Service
from .errors import APIError, RequestEncodeError
from .identity import IdentityResource
from .image import ImageResource
from .loadbalancer import LoadBalancerResource
from .network import NetworkResource
from .objectstorage import ObjectStorageResource
from .resource import RawContent, decode_json
from .schemas.common import Envelope
from .schemas.identity import AuthProject, AuthUser, Token, password_auth_body
from .volume import VolumeResource

logger = logging.getLogger(__name__)

AUTH_TOKEN_HEADER = "X-Auth-Token"
SUBJECT_TOKEN_HEADER = "X-Subject-Token"

_TOKEN = Envelope("token", Token)

UPLOAD_CHUNK_SIZE = 64 * 1024


def clean_params(params: Mapping[str, Any] | None) -> dict[str, str]:
    """Drop unset query values and stringify the rest.

    ``None``, empty strings, ``False`` and ``0`` are treated as unset.

    Args:
        params: Raw query parameters.

    Returns:
        dict[str, str]: Parameters to send.
    """
    cleaned: dict[str, str] = {}
    for key, value in (params or {}).items():
        if value is None or value == "" or value is False:
            continue
        if value is True:
            cleaned[key] = "true"
        elif isinstance(value, int) and value == 0:
            continue
        else:
            cleaned[key] = str(value)
    return cleaned


def iter_chunks(reader: IO[bytes], chunk_size: int = UPLOAD_CHUNK_SIZE) -> Iterator[bytes]:
    """Read a binary file object in fixed-size chunks until EOF."""
    while True:
        chunk = reader.read(chunk_size)
        if not chunk:
            return
        yield chunk


class Client:
    """Synchronous client for every Example Cloud service family.

    Token, tenant id and endpoint URLs are guarded by one lock that is never
    held across network I/O, so one client may be shared between threads.
    """

    def __init__(
        self,
        *,
        region: str | None = None,
        http_client: httpx.Client | None = None,
        endpoints: Endpoints | None = None,
        identity_url: str | None = None,
        compute_url: str | None = None,
        block_storage_url: str | None = None,
        image_url: str | None = None,
        network_url: str | None = None,
        load_balancer_url: str | None = None,
        object_storage_url: str | None = None,
        dns_url: str | None = None,
    ) -> None:
        """Initialize client and resolve endpoints.

        Args:
            region: Region id. Inferred from ``identity_url`` when omitted.
            http_client: Injected transport. Never closed by this client.
            endpoints: Bulk URL overrides; empty fields are ignored.
            identity_url: Pinned identity URL.
            compute_url: Pinned compute URL.
            block_storage_url: Pinned block storage URL.
            image_url: Pinned image service URL.
            network_url: Pinned networking URL.
            load_balancer_url: Pinned load balancer URL.
            object_storage_url: Pinned object storage URL.
            dns_url: Pinned DNS service URL.
        """
        pinned: dict[Service, str] = dict(endpoints.items()) if endpoints else {}
        overrides = {
            Service.IDENTITY: identity_url,
            Service.COMPUTE: compute_url,
            Service.BLOCK_STORAGE: block_storage_url,
            Service.IMAGE: image_url,
            Service.NETWORK: network_url,
            Service.LOAD_BALANCER: load_balancer_url,
            Service.OBJECT_STORE: object_storage_url,
            Service.DNS: dns_url,
        }
        pinned.update({service: url for service, url in overrides.items() if url})

        self._lock = threading.Lock()
        self._resolver = EndpointResolver(region=region, pinned=pinned)
        self._token = ""
        self._tenant_id = ""
        self._owns_http = http_client is None
        self._http = http_client if http_client is not None else httpx.Client(timeout=None)

        self.compute = ComputeResource(self)
        self.volume = VolumeResource(self)
        self.image = ImageResource(self)
        self.network = NetworkResource(self)
        self.load_balancer = LoadBalancerResource(self)
        self.object_storage = ObjectStorageResource(self)
        self.dns = DNSResource(self)
        self.identity = IdentityResource(self)

    def __enter__(self) -> "Client":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        self.close()

    def close(self) -> None:
        """Close the transport when this client created it."""
        if self._owns_http:
            self._http.close()

    @property
    def http_client(self) -> httpx.Client:
        return self._http

    @property
    def region(self) -> str:
        return self._resolver.region

    @property
    def token(self) -> str:
        with self._lock:
            return self._token

    def set_token(self, token: str) -> None:
        with self._lock:
            self._token = token

    @property
    def tenant_id(self) -> str:
        with self._lock:
            return self._tenant_id

    def set_tenant_id(self, tenant_id: str) -> None:
        with self._lock:
            self._tenant_id = tenant_id

    def endpoint(self, service: Service) -> str:
        """Return the resolved base URL of a service family."""
        with self._lock:
            return self._resolver.get(service)

    def set_endpoint(self, service: Service, url: str) -> None:
        """Replace a base URL verbatim. Pinned status is unchanged."""
        with self._lock:
            self._resolver.set(service, url)

    def endpoints(self) -> Endpoints:
        """Snapshot every resolved base URL."""
        with self._lock:
            return self._resolver.snapshot()

    def is_pinned(self, service: Service) -> bool:
        return self._resolver.is_pinned(service)

    def authenticate(self, user_id: str, password: str, tenant_id: str) -> Token:
        """Issue a token with user id, password and project id.

        Args:
            user_id: API user id.
            password: API user password.
            tenant_id: Project (tenant) id used as scope.

        Returns:
            Token: Issued token body including the service catalog.

        Raises:
            APIError: Provider rejected the credentials.
        """
        body = password_auth_body(
            AuthUser(id=user_id, password=password),
            AuthProject(id=tenant_id) if tenant_id else None,
        )
        return self._authenticate(body, tenant_id)

    def authenticate_by_name(self, user_name: str, password: str, tenant_name: str) -> Token:
        """Issue a token with user name, password and project name.

        The tenant id is taken from the project reported in the token.

        Args:
            user_name: API user name.
            password: API user password.
            tenant_name: Project (tenant) name used as scope.

        Returns:
            Token: Issued token body including the service catalog.
        """
        body = password_auth_body(
            AuthUser(name=user_name, password=password),
            AuthProject(name=tenant_name) if tenant_name else None,
        )
        return self._authenticate(body, "")

    def _authenticate(self, body: dict[str, Any], tenant_id: str) -> Token:
        url = self.endpoint(Service.IDENTITY) + "/auth/tokens"
        request = self._new_request("POST", url, body=body, with_token=False)
        response = self._send(request)
        token = _TOKEN.unwrap(decode_json(response))

        subject_token = response.headers.get(SUBJECT_TOKEN_HEADER, "")
        with self._lock:
            self._token = subject_token
            if tenant_id:
                self._tenant_id = tenant_id
            elif token.project.id:
                self._tenant_id = token.project.id
            discovered = self._resolver.update_from_catalog(token.catalog) if token.catalog else []

        logger.info("target=identity.authenticate result=ok catalog_endpoints=%s", len(discovered))
        return token

    def request_json(
        self,
        method: str,
        url: str,
        *,
        body: Any = None,
        params: Mapping[str, Any] | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> Any:
        """Send a JSON request and decode the JSON response.

        Args:
            method: HTTP method.
            url: Absolute URL.
            body: JSON-serializable body, omitted when ``None``.
            params: Query parameters; unset values are dropped.
            headers: Extra request headers.

        Returns:
            Any: Decoded JSON, ``None`` for an empty body.

        Raises:
            APIError: Response status >= 400.
            UnmarshalError: Response body is not valid JSON.
            httpx.HTTPError: Transport failure.
        """
        request = self._new_request(method, url, body=body, params=params, headers=headers)
        return decode_json(self._send(request))

    def request_raw(
        self,
        method: str,
        url: str,
        *,
        params: Mapping[str, Any] | None = None,
        headers: Mapping[str, str] | None = None,
        content: RawContent | None = None,
        accept_json: bool = True,
    ) -> httpx.Response:
        """Send a request and return the response without decoding it.

        Status classification is the same as :meth:`request_json`.

        Args:
            content: Request body. Iterables and binary file objects are sent
                chunked without being buffered.

        Returns:
            httpx.Response: Fully read response.
        """
        request = self._new_request(
            method,
            url,
            params=params,
            headers=headers,
            content=content,
            accept_json=accept_json,
        )
        return self._send(request)

    @contextmanager
    def stream_raw(
        self,
        method: str,
        url: str,
        *,
        params: Mapping[str, Any] | None = None,
        headers: Mapping[str, str] | None = None,
        accept_json: bool = True,
    ) -> Iterator[httpx.Response]:
        """Send a request and yield the response with its body still unread.

        Error statuses are classified before anything is yielded: the body is
        read only in that case, then :class:`APIError` is raised. The response
        is closed when the block exits.

        Example:
            >>> with client.stream_raw("GET", url) as response:
            ...     for chunk in response.iter_bytes():
            ...         sink.write(chunk)
        """
        request = self._new_request(method, url, params=params, headers=headers, accept_json=accept_json)
        response = self._send(request, stream=True)
        try:
            yield response
        finally:
            response.close()

    def _new_request(
        self,
        method: str,
        url: str,
        *,
        body: Any = None,
        params: Mapping[str, Any] | None = None,
        headers: Mapping[str, str] | None = None,
        content: RawContent | None = None,
        with_token: bool = True,
        accept_json: bool = True,
    ) -> httpx.Request:
        request_headers: dict[str, str] = {}
        if body is not None:
            try:
                content = json.dumps(body).encode("utf-8")
            except (TypeError, ValueError) as exc:
                raise RequestEncodeError(f"marshal request body: {exc}") from exc
            request_headers["Content-Type"] = "application/json"
        elif content is not None and hasattr(content, "read"):
            content = iter_chunks(content)
        if accept_json:
            request_headers["Accept"] = "application/json"
        if with_token:
            token = self.token
            if token:
                request_headers[AUTH_TOKEN_HEADER] = token
        request_headers.update(headers or {})

        extra: dict[str, Any] = {}
        left = remaining()
        if left is not None:
            extra["timeout"] = httpx.Timeout(max(left, 0.0))
        return self._http.build_request(
            method,
            url,
            params=clean_params(params) or None,
            headers=request_headers,
            content=content,
            **extra,
        )

    def _send(self, request: httpx.Request, *, stream: bool = False) -> httpx.Response:
        task_id = uuid.uuid4().hex[:8]
        target = f"{request.method} {request.url.path}"
        started_at = time.monotonic()

        left = remaining()
        if left is not None and left <= 0:
            self._log_step(task_id, target, "deadline_exceeded", started_at, level=logging.WARNING)
            raise httpx.TimeoutException("deadline exceeded before request was sent", request=request)

        try:
            response = self._http.send(request, stream=stream)
        except httpx.HTTPError as exc:
            self._log_step(task_id, target, f"transport_error:{type(exc).__name__}", started_at, level=logging.WARNING)
            raise

        if response.status_code >= 400:
            if stream:
                try:
                    response.read()
                finally:
                    response.close()
            self._log_step(task_id, target, f"http_{response.status_code}", started_at, level=logging.WARNING)
            raise APIError.from_response(response)
        self._log_step(task_id, target, f"http_{response.status_code}", started_at)
        return response

    @staticmethod
    def _log_step(task_id: str, target: str, result: str, started_at: float, *, level: int = logging.INFO) -> None:
        logger.log(
            level,
            "task_id=%s target=%s result=%s duration_ms=%s",
            task_id,
            target,
            result,
            int((time.monotonic() - started_at) * 1000),
        )
