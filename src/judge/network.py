"""Minimal GET primitive for server-backed validators.

This is a thin wrapper over httpx, not a resilience layer: one request, no
retries, and no timeout beyond the client's default. Callers decide what a
failure means for their Validation.
"""

import asyncio
import logging
from collections.abc import Callable, Mapping

import httpx

logger = logging.getLogger(__name__)

# Callback signature: (status, headers, body) -> None
ResponseCallback = Callable[[int, Mapping[str, str], str], None]
Getter = Callable[..., "asyncio.Task[None]"]

# Strong references to in-flight requests; the loop only keeps weak ones.
_in_flight: set["asyncio.Task[None]"] = set()


def is_success(status: int) -> bool:
    return 200 <= status <= 299


async def fetch(
    url: str,
    on_success: ResponseCallback,
    on_error: ResponseCallback,
    client: httpx.AsyncClient | None = None,
) -> None:
    """Perform the GET and route the completion to exactly one callback."""
    try:
        if client is None:
            async with httpx.AsyncClient() as own_client:
                response = await own_client.get(url)
        else:
            response = await client.get(url)
    except (httpx.HTTPError, httpx.InvalidURL) as exc:
        logger.warning("GET %s failed: %s", url, exc)
        on_error(0, {}, str(exc))
        return

    headers = dict(response.headers)
    if is_success(response.status_code):
        on_success(response.status_code, headers, response.text)
    else:
        logger.warning("GET %s returned %d", url, response.status_code)
        on_error(response.status_code, headers, response.text)


def get(
    url: str,
    on_success: ResponseCallback,
    on_error: ResponseCallback,
    *,
    client: httpx.AsyncClient | None = None,
) -> "asyncio.Task[None]":
    """Issue a GET request on the running event loop.

    Returns immediately; the request completes in the background.

    Args:
        url: Absolute URL, or a path relative to ``client.base_url``
        on_success: Called with (status, headers, body) for 2xx responses
        on_error: Called for any other status, or with status 0 on
            transport failure
        client: Optional shared client; a short-lived one is used otherwise

    Returns:
        The task driving the request. Awaiting it is optional.

    Raises:
        RuntimeError: If no event loop is running
    """
    logger.debug("GET %s", url)
    task = asyncio.get_running_loop().create_task(fetch(url, on_success, on_error, client))
    _in_flight.add(task)
    task.add_done_callback(_in_flight.discard)
    return task
