"""restwrap - quick access to any REST or REST-like API over httpx."""

from ._client import RestClient
from ._config import Config
from ._rest import (
    api,
    api_async,
    build_request_object,
    build_response,
    default_client,
    make_request,
)
from ._utils import add_query_parameters, setup_logging
from .models import (
    ConfigError,
    ConstructionError,
    Method,
    ReadError,
    Request,
    Response,
    RestError,
    TransportError,
)

__all__ = [
    "Config",
    "ConfigError",
    "ConstructionError",
    "Method",
    "ReadError",
    "Request",
    "Response",
    "RestClient",
    "RestError",
    "TransportError",
    "add_query_parameters",
    "api",
    "api_async",
    "build_request_object",
    "build_response",
    "default_client",
    "make_request",
    "setup_logging",
]
