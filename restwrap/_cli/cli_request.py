import os
from typing import Optional, Tuple

import click

from .._client import RestClient
from .._utils import setup_logging
from ..models import Method, Request, Response, RestError
from ._utils._console import ConsoleLogger

console = ConsoleLogger()


def _split_pairs(
    values: Tuple[str, ...], separator: str, option: str
) -> dict[str, str]:
    pairs: dict[str, str] = {}
    for value in values:
        key, sep, rest = value.partition(separator)
        if not sep or not key.strip():
            console.error(
                f"Invalid {option} value {value!r}. Expected 'name{separator}value'."
            )
        pairs[key.strip()] = rest.strip() if separator == ":" else rest
    return pairs


def _read_body(data: Optional[str]) -> bytes:
    if data is None:
        return b""
    if data.startswith("@"):
        path = data[1:]
        if not os.path.isfile(path):
            console.error(f"Body file not found at path {path}.")
        with open(path, "rb") as f:
            return f.read()
    return data.encode("utf-8")


def _print_response(response: Response, include: bool) -> None:
    if include:
        click.echo(f"HTTP {response.status_code}")
        for name, values in response.response_headers.items():
            for value in values:
                click.echo(f"{name}: {value}")
        click.echo("")
    click.echo(response.content)


@click.command()
@click.argument(
    "method",
    type=click.Choice([method.value for method in Method], case_sensitive=False),
)
@click.argument("url")
@click.option(
    "-H",
    "--header",
    "headers",
    multiple=True,
    help="Request header as 'Name: value'. May be repeated.",
)
@click.option(
    "-q",
    "--query",
    "query",
    multiple=True,
    help="Query parameter as 'key=value'. May be repeated.",
)
@click.option(
    "-d",
    "--data",
    required=False,
    help="Request body. Use @path to read it from a file.",
)
@click.option(
    "-i",
    "--include",
    is_flag=True,
    help="Print the status line and response headers before the body.",
)
@click.option("--debug", is_flag=True, help="Log requests and responses to stderr.")
def request(
    method: str,
    url: str,
    headers: Tuple[str, ...],
    query: Tuple[str, ...],
    data: Optional[str],
    include: bool,
    debug: bool,
) -> None:
    """Send a single request to URL and print the response."""
    setup_logging(debug)

    api_request = Request(
        method=Method(method.upper()),
        base_url=url,
        request_headers=_split_pairs(headers, ":", "--header"),
        query_params=_split_pairs(query, "=", "--query"),
        request_body=_read_body(data),
    )

    with RestClient(debug=debug) as client:
        try:
            with console.spinner(f"{api_request.method_name} {url} ..."):
                response = client.send(api_request)
        except RestError as e:
            console.error(f"{type(e).__name__}: {e}")
            return

    _print_response(response, include)


if __name__ == "__main__":
    request()
