from ._logs import logger, setup_logging
from ._transport import get_httpx_client_kwargs
from ._url import BaseUrl, add_query_parameters
from ._user_agent import header_user_agent, user_agent_value

__all__ = [
    "BaseUrl",
    "add_query_parameters",
    "get_httpx_client_kwargs",
    "header_user_agent",
    "logger",
    "setup_logging",
    "user_agent_value",
]
