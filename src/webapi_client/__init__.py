"""Typed HTTP client: declarative resources, nested key paths and bounded retry."""

from .clients.decoder import JSONDecoder, KeyDecodingStrategy
from .clients.errors import (
    DecodingError,
    KeyPathError,
    TransportError,
    UnsupportedURLError,
    WebAPIClientError,
)
from .clients.http import WebAPIClient
from .clients.multipart import MultipartData
from .clients.transport import RequestsTransport, Transport, TransportResponse
from .config.config import ConfigurationError, Environment, load_environment, load_environments
from .core.method import HTTPMethod
from .core.resource import Resource

__all__ = [
    "ConfigurationError",
    "DecodingError",
    "Environment",
    "HTTPMethod",
    "JSONDecoder",
    "KeyDecodingStrategy",
    "KeyPathError",
    "MultipartData",
    "RequestsTransport",
    "Resource",
    "Transport",
    "TransportError",
    "TransportResponse",
    "UnsupportedURLError",
    "WebAPIClient",
    "WebAPIClientError",
    "load_environment",
    "load_environments",
]
