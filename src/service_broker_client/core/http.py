from __future__ import annotations

import httpx

DEFAULT_TIMEOUT = httpx.Timeout(60.0, connect=5.0)


def create_http_client(
    timeout: httpx.Timeout | None = None,
    verify: bool | str = True,
    transport: httpx.BaseTransport | None = None,
) -> httpx.Client:
    """
    Shared HTTP client with sane defaults.
    Each broker call is a single attempt; no retry transport is mounted.
    """
    return httpx.Client(
        timeout=timeout or DEFAULT_TIMEOUT,
        follow_redirects=False,
        verify=verify,
        transport=transport,
    )


def timeout_for(connect: float, receive: float) -> httpx.Timeout:
    return httpx.Timeout(receive, connect=connect)
