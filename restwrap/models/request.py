from dataclasses import dataclass, field
from enum import Enum
from typing import Union


class Method(str, Enum):
    """HTTP verbs supported by the API helpers."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"


@dataclass(frozen=True)
class Request:
    """Describes a single call to a REST or REST-like endpoint.

    The query string is supplied separately through ``query_params`` and is
    merged into ``base_url`` when the request is built. Neither mapping is
    ordered, so the encoded query and header order are not guaranteed.
    Header names are matched ignoring case; of two names differing only in
    case, the later one wins.

    ``base_url`` is parsed and re-serialized by httpx: the scheme and host are
    lowercased and characters not allowed in a path are percent-encoded. A URL
    already in that normal form is sent exactly as given.

    Examples:
        ```python
        from restwrap import Method, Request

        request = Request(
            method=Method.GET,
            base_url="https://api.example.com/v3/users",
            request_headers={"Authorization": "Bearer token"},
            query_params={"limit": "10"},
        )
        ```
    """

    method: Union[Method, str]
    base_url: str
    request_headers: dict[str, str] = field(default_factory=dict)
    query_params: dict[str, str] = field(default_factory=dict)
    request_body: bytes = b""

    @property
    def method_name(self) -> str:
        if isinstance(self.method, Method):
            return self.method.value
        return str(self.method)
