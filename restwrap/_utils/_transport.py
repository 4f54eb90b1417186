from typing import Any, Dict


def get_httpx_client_kwargs() -> Dict[str, Any]:
    """Get standardized httpx client configuration.

    No timeout is applied and redirects are followed. Connection pooling,
    proxies from ``HTTP_PROXY``/``HTTPS_PROXY``/``NO_PROXY`` and certificate
    verification are left to httpx defaults.
    """
    client_kwargs: Dict[str, Any] = {"follow_redirects": True, "timeout": None}

    return client_kwargs
