from typing import Mapping

from httpx import URL, InvalidURL

_SUPPORTED_SCHEMES = ("http", "https")


class BaseUrl:
    """An absolute http(s) URL that requests are addressed to.

    >>> url = BaseUrl("https://api.example.com/v3/users?page=2")
    >>> url.scheme
    'https'
    >>> url.host
    'api.example.com'
    >>> url.is_valid
    True
    >>> BaseUrl("not a url").is_valid
    False

    Args:
        url (str): The URL to parse.
    """

    def __init__(self, url: str):
        self._url = url

    def __str__(self):
        return self._url

    def __repr__(self):
        return f"BaseUrl({self._url})"

    @property
    def scheme(self) -> str:
        parsed = self._parsed
        return parsed.scheme if parsed is not None else ""

    @property
    def host(self) -> str:
        parsed = self._parsed
        return parsed.host if parsed is not None else ""

    @property
    def is_valid(self) -> bool:
        return self.scheme in _SUPPORTED_SCHEMES and bool(self.host)

    @property
    def _parsed(self):
        try:
            return URL(self._url)
        except (InvalidURL, TypeError):
            return None


def add_query_parameters(base_url: str, query_params: Mapping[str, str]) -> str:
    """Returns ``base_url`` with ``query_params`` percent-encoded into its query.

    Parameters already present on ``base_url`` are kept. An empty mapping
    returns ``base_url`` unchanged.

    Examples:
        >>> add_query_parameters("https://api.example.com/users", {})
        'https://api.example.com/users'
        >>> add_query_parameters("https://api.example.com/users", {"q": "a b"})
        'https://api.example.com/users?q=a+b'
    """
    if not query_params:
        return base_url

    return str(URL(base_url).copy_merge_params(dict(query_params)))
