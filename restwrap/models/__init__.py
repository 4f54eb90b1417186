from .errors import ConfigError
from .exceptions import ConstructionError, ReadError, RestError, TransportError
from .request import Method, Request
from .response import Response

__all__ = [
    "ConfigError",
    "ConstructionError",
    "Method",
    "ReadError",
    "Request",
    "Response",
    "RestError",
    "TransportError",
]
