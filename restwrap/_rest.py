"""Module-level API calls backed by a shared default :class:`RestClient`."""

import threading
from typing import Optional

from httpx import Request as TransportRequest
from httpx import Response as TransportResponse

from ._client import RestClient
from .models import Request, Response

_default_client: Optional[RestClient] = None
_default_client_lock = threading.Lock()


def default_client() -> RestClient:
    """Returns the process-wide client, creating it on first use."""
    global _default_client
    with _default_client_lock:
        if _default_client is None:
            _default_client = RestClient()
        return _default_client


def build_request_object(request: Request) -> TransportRequest:
    return default_client().build_request_object(request)


def make_request(req: TransportRequest) -> TransportResponse:
    return default_client().make_request(req)


def build_response(res: TransportResponse) -> Response:
    return default_client().build_response(res)


def api(request: Request) -> Response:
    """Makes the API call described by ``request`` with the default client.

    Examples:
        ```python
        from restwrap import Method, Request, api

        response = api(
            Request(
                method=Method.POST,
                base_url="https://api.example.com/v3/mail/send",
                request_headers={"Content-Type": "application/json"},
                request_body=b'{"to": "someone@example.com"}',
            )
        )
        ```
    """
    return default_client().send(request)


async def api_async(request: Request) -> Response:
    return await default_client().send_async(request)
