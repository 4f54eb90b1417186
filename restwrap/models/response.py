from dataclasses import dataclass, field


@dataclass(frozen=True)
class Response:
    """The normalized result of an API call.

    ``response_body`` is the payload decoded as UTF-8 with no charset
    negotiation. Bytes that are not valid UTF-8 are kept as lone surrogates,
    so :attr:`content` always returns exactly what the server sent.

    ``response_headers`` maps each header name, spelled as first received,
    to all of its values in the order they arrived.
    """

    status_code: int
    response_body: str = ""
    response_headers: dict[str, list[str]] = field(default_factory=dict)

    @property
    def content(self) -> bytes:
        """The response payload as the raw bytes received."""
        return self.response_body.encode("utf-8", errors="surrogateescape")

    def header(self, name: str) -> list[str]:
        """Returns every value received for ``name``, ignoring case.

        Examples:
            >>> response = Response(status_code=200, response_headers={"X-Limit": ["600"]})
            >>> response.header("x-limit")
            ['600']
        """
        wanted = name.lower()
        for key, values in self.response_headers.items():
            if key.lower() == wanted:
                return list(values)
        return []
