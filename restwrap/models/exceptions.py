from typing import Optional


class RestError(Exception):
    """Base class for every failure raised while making an API call.

    The underlying library exception, when there is one, is kept on ``error``
    and chained as ``__cause__``.
    """

    def __init__(self, message: str, error: Optional[BaseException] = None) -> None:
        self.message = message
        self.error = error
        super().__init__(self.message)


class ConstructionError(RestError):
    """The request could not be turned into a transport request.

    Nothing was sent over the network.
    """


class TransportError(RestError):
    """The round trip failed before a response status line was received."""

    def __init__(
        self, message: str, url: str, error: Optional[BaseException] = None
    ) -> None:
        self.url = url
        super().__init__(message, error)


class ReadError(RestError):
    """A response arrived but its body could not be fully read.

    The status code and headers of that response are discarded.
    """

    def __init__(
        self, message: str, url: str, error: Optional[BaseException] = None
    ) -> None:
        self.url = url
        super().__init__(message, error)
