"""Signed temporary URLs for object storage.

A temp URL grants time-limited access to one object without a token. The
signature is HMAC-SHA1 over ``METHOD\\nEXPIRES\\nPATH`` keyed by the
account's temp URL key.
"""

from __future__ import annotations

import hashlib
import hmac
from urllib.parse import quote, urlencode, urlsplit

from .errors import (
    InvalidExpiresError,
    MissingContainerError,
    MissingKeyError,
    MissingMethodError,
    MissingObjectNameError,
)


_PATH_SAFE = "/$&+:=@"


def quote_path(*parts: str) -> str:
    """Percent-encode path parts, keeping ``/`` inside each part.

    Object names may contain ``/`` to form pseudo-directories. The path
    sub-delimiters ``$ & + : = @`` stay literal; they are part of the signed
    temp URL path.
    """
    return "".join("/" + quote(part, safe=_PATH_SAFE) for part in parts)


def object_url(object_storage_url: str, tenant_id: str, *parts: str) -> str:
    """Build an account, container or object URL.

    Args:
        object_storage_url: Object storage base URL ending in ``/v1``.
        tenant_id: Tenant id forming the ``AUTH_`` account.
        *parts: Container, then optional object name.

    Returns:
        str: Absolute URL.
    """
    return f"{object_storage_url}/AUTH_{tenant_id}" + quote_path(*parts)


def generate_temp_url(
    object_storage_url: str,
    tenant_id: str,
    method: str,
    container: str,
    object_name: str,
    key: str,
    expires: int,
) -> str:
    """Sign a temporary URL for one object.

    Args:
        object_storage_url: Object storage base URL.
        tenant_id: Tenant id.
        method: HTTP method the URL is valid for, case-insensitive.
        container: Container name.
        object_name: Object name, may contain ``/``.
        key: Temp URL key registered on the account.
        expires: Expiry as a Unix timestamp.

    Returns:
        str: Object URL with ``temp_url_expires`` and ``temp_url_sig`` query parameters.

    Raises:
        MissingMethodError: ``method`` is blank.
        MissingContainerError: ``container`` is empty.
        MissingObjectNameError: ``object_name`` is empty.
        MissingKeyError: ``key`` is empty.
        InvalidExpiresError: ``expires`` is not positive.
    """
    method = (method or "").strip().upper()
    if not method:
        raise MissingMethodError("method is required")
    if not container:
        raise MissingContainerError("container is required")
    if not object_name:
        raise MissingObjectNameError("object name is required")
    if not key:
        raise MissingKeyError("temp url key is required")
    if expires <= 0:
        raise InvalidExpiresError("expires must be greater than 0")

    url = object_url(object_storage_url, tenant_id, container, object_name)
    path = urlsplit(url).path
    payload = f"{method}\n{expires}\n{path}"
    signature = hmac.new(key.encode("utf-8"), payload.encode("utf-8"), hashlib.sha1).hexdigest()
    query = urlencode({"temp_url_expires": str(expires), "temp_url_sig": signature})
    return f"{url}?{query}"
