import asyncio
from logging import getLogger
from typing import Any, Optional, Union

from dotenv import load_dotenv
from httpx import (
    AsyncClient,
    Client,
    Headers,
    HTTPError,
    InvalidURL,
    Limits,
    StreamError,
)
from httpx import Request as TransportRequest
from httpx import Response as TransportResponse

from ._config import load_config
from ._utils import (
    BaseUrl,
    add_query_parameters,
    get_httpx_client_kwargs,
    header_user_agent,
    setup_logging,
    user_agent_value,
)
from ._utils.constants import LOGGER_NAME
from .models import (
    ConstructionError,
    ReadError,
    Request,
    Response,
    TransportError,
)

load_dotenv(override=True)


def _response_url(res: TransportResponse) -> str:
    try:
        return str(res.request.url)
    except RuntimeError:
        # responses built by hand have no request attached
        return ""


def _collect_headers(headers: Headers) -> dict[str, list[str]]:
    collected: dict[str, list[str]] = {}
    names: dict[str, str] = {}
    for raw_key, raw_value in headers.raw:
        key = raw_key.decode(headers.encoding)
        name = names.setdefault(key.lower(), key)
        collected.setdefault(name, []).append(raw_value.decode(headers.encoding))
    return collected


def _set_headers(request_headers: dict[str, str]) -> Headers:
    headers = Headers()
    for key, value in request_headers.items():
        # replaces any earlier entry whose name differs only in case
        headers[key] = value
    return headers


def _decode_body(body: bytes) -> str:
    # any charset declared in Content-Type is ignored; invalid UTF-8 survives
    # as lone surrogates so that Response.content gives back the exact bytes
    return body.decode("utf-8", errors="surrogateescape")


class RestClient:
    """Issues REST calls and normalizes their responses.

    A call runs in three stages, each exposed on its own so that one can be
    replaced while the others are reused:

    1. :meth:`build_request_object` turns a :class:`~restwrap.Request` into an
       ``httpx.Request``.
    2. :meth:`make_request` sends it, exactly once, over the underlying
       ``httpx.Client``.
    3. :meth:`build_response` drains and releases the body and returns a
       :class:`~restwrap.Response`.

    :meth:`send` chains them and stops at the first failure. Pass your own
    ``http_client`` (or ``async_http_client``) to swap the transport. Clients
    passed in stay open after :meth:`close`; only clients created here are
    closed.

    Unless an ``async_http_client`` is passed in, :meth:`send_async` opens a
    fresh ``httpx.AsyncClient`` for each call, so no connection outlives the
    event loop that opened it.

    No timeout is applied and nothing is retried. Callers needing deadlines
    should configure them on the ``httpx.Client`` they pass in.

    Examples:
        ```python
        from restwrap import Method, Request, RestClient

        with RestClient() as client:
            response = client.send(
                Request(method=Method.GET, base_url="https://api.example.com/users")
            )
            print(response.status_code, response.response_body)
        ```
    """

    def __init__(
        self,
        *,
        http_client: Optional[Client] = None,
        async_http_client: Optional[AsyncClient] = None,
        debug: Optional[bool] = None,
        user_agent: Optional[str] = None,
    ) -> None:
        self._logger = getLogger(LOGGER_NAME)
        self._config = load_config(debug=debug, user_agent=user_agent)

        if self._config.debug:
            setup_logging(self._config.debug)

        self._client_kwargs: dict[str, Any] = {
            **get_httpx_client_kwargs(),  # no timeout, redirects followed
            "headers": Headers(self.default_headers),
        }

        self._client = http_client or Client(**self._client_kwargs)
        self._owns_client = http_client is None

        self._client_async: Optional[AsyncClient] = async_http_client
        self._owns_client_async = async_http_client is None

    @property
    def default_headers(self) -> dict[str, str]:
        return header_user_agent(self._config.user_agent or user_agent_value())

    def build_request_object(self, request: Request) -> TransportRequest:
        """Builds the transport request for ``request``.

        Query parameters are percent-encoded into the URL and every request
        header replaces any default of the same name.

        Raises:
            ConstructionError: If ``base_url`` is not an absolute http(s) URL
                or the transport cannot encode the request.
        """
        return self._build(self._client, request)

    def make_request(self, req: TransportRequest) -> TransportResponse:
        """Sends ``req`` once and returns the response with its body unread.

        Raises:
            TransportError: If no response could be obtained.
        """
        self._logger.debug(f"Request: {req.method} {req.url}")
        self._logger.debug(f"HEADERS: {req.headers}")

        try:
            return self._client.send(req, stream=True)
        except HTTPError as e:
            raise TransportError(
                f"Request failed: {req.method} {req.url}: {e}",
                url=str(req.url),
                error=e,
            ) from e

    def build_response(self, res: TransportResponse) -> Response:
        """Reads the whole body of ``res`` and normalizes it.

        The response is closed before returning, whether or not the read
        succeeded.

        Raises:
            ReadError: If the body could not be fully read.
        """
        url = _response_url(res)
        try:
            body = res.read()
        except (HTTPError, StreamError) as e:
            raise ReadError(
                f"Failed to read response body from {url or 'response'}: {e}",
                url=url,
                error=e,
            ) from e
        finally:
            res.close()

        return self._normalize(res, body, url)

    def send(self, request: Request) -> Response:
        """Makes the API call described by ``request``.

        Raises:
            ConstructionError: The request could not be built; nothing was sent.
            TransportError: The request was sent but no response arrived.
            ReadError: A response arrived but its body could not be read.
        """
        req = self.build_request_object(request)
        res = self.make_request(req)
        return self.build_response(res)

    async def make_request_async(self, req: TransportRequest) -> TransportResponse:
        return await self._make_request_async(self._get_client_async(), req)

    async def build_response_async(self, res: TransportResponse) -> Response:
        url = _response_url(res)
        try:
            body = await res.aread()
        except (HTTPError, StreamError) as e:
            raise ReadError(
                f"Failed to read response body from {url or 'response'}: {e}",
                url=url,
                error=e,
            ) from e
        finally:
            await res.aclose()

        return self._normalize(res, body, url)

    async def send_async(self, request: Request) -> Response:
        """Asynchronously makes the API call described by ``request``."""
        if not self._owns_client_async:
            return await self._send_async(self._get_client_async(), request)

        async with AsyncClient(**self._client_kwargs) as client:
            return await self._send_async(client, request)

    def close(self) -> None:
        """Closes the clients created by this instance.

        Raises:
            RuntimeError: If called inside a running event loop while an async
                client created by :meth:`make_request_async` is open. Use
                :meth:`aclose` there instead.
        """
        if self._owns_client:
            self._client.close()

        if not self._has_open_client_async():
            return

        try:
            asyncio.get_running_loop()
        except RuntimeError:
            asyncio.run(self._client_async.aclose())  # type: ignore[union-attr]
        else:
            raise RuntimeError(
                "RestClient has an open async client; use `await client.aclose()`"
            )

    async def aclose(self) -> None:
        if self._has_open_client_async():
            await self._client_async.aclose()  # type: ignore[union-attr]
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> "RestClient":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    async def __aenter__(self) -> "RestClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()

    def _get_client_async(self) -> AsyncClient:
        if self._client_async is None:
            # no keep-alive: pooled connections would be bound to the event
            # loop that opened them
            self._client_async = AsyncClient(
                **self._client_kwargs,
                limits=Limits(max_keepalive_connections=0),
            )
        return self._client_async

    def _has_open_client_async(self) -> bool:
        return (
            self._owns_client_async
            and self._client_async is not None
            and not self._client_async.is_closed
        )

    async def _send_async(self, client: AsyncClient, request: Request) -> Response:
        req = self._build(client, request)
        res = await self._make_request_async(client, req)
        return await self.build_response_async(res)

    async def _make_request_async(
        self, client: AsyncClient, req: TransportRequest
    ) -> TransportResponse:
        self._logger.debug(f"Request: {req.method} {req.url}")
        self._logger.debug(f"HEADERS: {req.headers}")

        try:
            return await client.send(req, stream=True)
        except HTTPError as e:
            raise TransportError(
                f"Request failed: {req.method} {req.url}: {e}",
                url=str(req.url),
                error=e,
            ) from e

    def _build(
        self, client: Union[Client, AsyncClient], request: Request
    ) -> TransportRequest:
        method = request.method_name
        if not BaseUrl(request.base_url).is_valid:
            raise ConstructionError(
                f"Invalid base URL {request.base_url!r}: "
                "an absolute http:// or https:// URL is required"
            )

        try:
            return client.build_request(
                method,
                add_query_parameters(request.base_url, request.query_params),
                headers=_set_headers(request.request_headers),
                content=request.request_body,
            )
        except (InvalidURL, UnicodeEncodeError) as e:
            raise ConstructionError(
                f"Could not build {method} request for {request.base_url}: {e}",
                error=e,
            ) from e

    def _normalize(self, res: TransportResponse, body: bytes, url: str) -> Response:
        self._logger.debug(f"Response: {res.status_code} {url}")

        return Response(
            status_code=res.status_code,
            response_body=_decode_body(body),
            response_headers=_collect_headers(res.headers),
        )
