"""HTTP requests with bounded retry, exponential backoff and cancellation."""

import asyncio
import random
from typing import Any, Callable, Optional

import httpx
from loguru import logger

from ..errors import CancellationError, TransportError
from .cancellation import CancellationToken

ShouldRetry = Callable[[Optional[httpx.Response], Optional[BaseException]], bool]


def backoff_delay(attempt: int, base: float = 0.2, cap: float = 2.0, jitter: float = 0.1) -> float:
    """Seconds to wait after failed attempt number ``attempt`` (1-based)."""
    return min(cap, base * 2 ** (attempt - 1)) + random.uniform(0, jitter)


def default_should_retry(
    response: Optional[httpx.Response], error: Optional[BaseException]
) -> bool:
    if error is not None:
        return True
    if response is None:
        return True
    if response.status_code >= 500:
        return True
    if response.status_code == 429:
        return True
    return False


async def _send(
    client: httpx.AsyncClient,
    token: Optional[CancellationToken],
    **request_kwargs: Any,
) -> httpx.Response:
    if token is None:
        return await client.request(**request_kwargs)

    token.raise_if_cancelled()
    request_task = asyncio.ensure_future(client.request(**request_kwargs))
    cancel_task = asyncio.ensure_future(token.wait())
    try:
        await asyncio.wait({request_task, cancel_task}, return_when=asyncio.FIRST_COMPLETED)
    finally:
        for task in (request_task, cancel_task):
            if not task.done():
                task.cancel()

    if token.cancelled:
        if request_task.done() and not request_task.cancelled():
            # Mark the outcome as retrieved; cancellation wins.
            request_task.exception()
        raise CancellationError(token.reason)
    return request_task.result()


async def pause(delay: float, token: Optional[CancellationToken] = None) -> None:
    """Sleep for ``delay`` seconds, raising CancellationError if ``token`` fires first."""
    if token is None:
        await asyncio.sleep(delay)
        return
    try:
        await asyncio.wait_for(token.wait(), timeout=delay)
    except asyncio.TimeoutError:
        return
    raise CancellationError(token.reason)


async def fetch_with_retry(
    client: httpx.AsyncClient,
    url: str,
    *,
    method: str = "POST",
    headers: Optional[dict] = None,
    json: Any = None,
    content: Optional[bytes] = None,
    token: Optional[CancellationToken] = None,
    max_attempts: int = 3,
    should_retry: ShouldRetry = default_should_retry,
) -> httpx.Response:
    """Issue a request, retrying transient failures.

    Network errors, 5xx and 429 are retried up to ``max_attempts`` times with
    exponential backoff. Any other response, successful or not, is returned
    to the caller as is. Cancellation through ``token`` aborts immediately with
    ``CancellationError`` and is never retried.

    Raises:
        CancellationError: the token fired during an attempt or a backoff pause.
        TransportError: the last attempt still qualified for a retry.
    """
    if max_attempts < 1:
        raise ValueError("max_attempts must be at least 1")

    request_kwargs: dict[str, Any] = {"method": method, "url": url, "headers": headers}
    if json is not None:
        request_kwargs["json"] = json
    if content is not None:
        request_kwargs["content"] = content

    for attempt in range(1, max_attempts + 1):
        try:
            response = await _send(client, token, **request_kwargs)
        except CancellationError:
            raise
        except httpx.HTTPError as e:
            if not should_retry(None, e):
                raise TransportError(f"Request failed: {e}") from e
            if attempt == max_attempts:
                raise TransportError(
                    f"Request failed after {max_attempts} attempts: {e}"
                ) from e
            logger.warning(f"Attempt {attempt}/{max_attempts} to {url} failed: {e}")
        else:
            if not should_retry(response, None):
                return response
            if attempt == max_attempts:
                raise TransportError(
                    f"Request failed after {max_attempts} attempts: "
                    f"{response.status_code} {response.reason_phrase} {response.text}".rstrip(),
                    status_code=response.status_code,
                    body=response.text,
                )
            logger.warning(
                f"Attempt {attempt}/{max_attempts} to {url} returned {response.status_code}"
            )

        await pause(backoff_delay(attempt), token)

    # max_attempts >= 1 guarantees the loop returns or raises
    raise TransportError(f"Request failed after {max_attempts} attempts")
