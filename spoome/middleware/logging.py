"""
Logging Hooks for Request/Response Logging

These httpx event hooks log every exchange with the spoo.me API for
observability. They capture:
- Request method and path
- Response status code
- Request processing time

Design Decisions:
- Uses httpx event hooks so the client code stays free of logging calls
- Logs to standard Python logging; the library never configures handlers
- Form bodies are never logged (they may carry passwords)
"""

import time
import logging

import httpx

logger = logging.getLogger("spoome")

START_TIME_KEY = "spoome.start_time"


def log_request(request: httpx.Request) -> None:
    """
    Record the start time of a request and log it at DEBUG.

    Args:
        request: The outgoing httpx request
    """
    request.extensions[START_TIME_KEY] = time.time()
    logger.debug(f"-> {request.method} {request.url.path}")


def log_response(response: httpx.Response) -> None:
    """
    Log the completed exchange.

    Format: METHOD PATH STATUS_CODE PROCESS_TIME_MS
    """
    request = response.request
    start_time = request.extensions.get(START_TIME_KEY)
    process_time = time.time() - start_time if start_time else 0.0

    logger.info(
        f"{request.method} {request.url.path} "
        f"{response.status_code} {process_time*1000:.2f}ms"
    )


async def alog_request(request: httpx.Request) -> None:
    log_request(request)


async def alog_response(response: httpx.Response) -> None:
    log_response(response)


def logging_hooks(use_async: bool = False) -> dict:
    """
    Build the ``event_hooks`` mapping for an httpx client.

    Args:
        use_async: Return coroutine hooks for httpx.AsyncClient

    Returns:
        Mapping suitable for the ``event_hooks`` argument of httpx clients
    """
    if use_async:
        return {"request": [alog_request], "response": [alog_response]}
    return {"request": [log_request], "response": [log_response]}
