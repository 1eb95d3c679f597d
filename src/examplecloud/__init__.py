"""Typed client for the Example Cloud REST API."""

from .client import Client
from .config import ClientSettings, connect, load_config_by_file
from .deadline import deadline
from .endpoints import DEFAULT_REGION, DOMAIN, Endpoints, Service
from .errors import (
    APIError,
    ExampleCloudError,
    InvalidArgumentError,
    InvalidExpiresError,
    MissingContainerError,
    MissingKeyError,
    MissingMethodError,
    MissingObjectNameError,
    RequestEncodeError,
    UnmarshalError,
    is_status,
)
from .tempurl import generate_temp_url

__all__ = [
    "APIError",
    "Client",
    "ClientSettings",
    "DEFAULT_REGION",
    "DOMAIN",
    "Endpoints",
    "ExampleCloudError",
    "InvalidArgumentError",
    "InvalidExpiresError",
    "MissingContainerError",
    "MissingKeyError",
    "MissingMethodError",
    "MissingObjectNameError",
    "RequestEncodeError",
    "Service",
    "UnmarshalError",
    "connect",
    "deadline",
    "generate_temp_url",
    "is_status",
    "load_config_by_file",
]
