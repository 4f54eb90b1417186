import importlib.metadata

from .constants import HEADER_USER_AGENT


def user_agent_value() -> str:
    product = "restwrap"

    try:
        version = importlib.metadata.version("restwrap")
    except importlib.metadata.PackageNotFoundError:
        version = "unknown"

    return f"{product}/{version}"


def header_user_agent(user_agent: str) -> dict[str, str]:
    return {HEADER_USER_AGENT: user_agent}
