import importlib.metadata

import click

from .cli_request import request as request  # type: ignore


def _get_safe_version() -> str:
    """Get the version of the restwrap package."""
    try:
        version = importlib.metadata.version("restwrap")
        return version
    except importlib.metadata.PackageNotFoundError:
        return "unknown"


@click.group()
@click.version_option(
    _get_safe_version(),
    prog_name="restwrap",
    message="%(prog)s version %(version)s",
)
def cli() -> None:
    """Call REST and REST-like APIs from the command line."""


cli.add_command(request)
