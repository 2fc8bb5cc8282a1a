import asyncio
import functools
import random
from typing import Callable, Optional

import httpx

from backoffice.common import logger


def is_transient_http_error(exc: BaseException) -> bool:
    if isinstance(exc, asyncio.CancelledError):
        return False
    if isinstance(exc, (httpx.TimeoutException, httpx.NetworkError, httpx.RemoteProtocolError)):
        return True
    if isinstance(exc, httpx.HTTPStatusError):
        code = exc.response.status_code
        return code == 429 or code >= 500
    return False


async def _sleep_with_jitter(delay: float, jitter: float) -> None:
    jitter_val = random.uniform(-jitter * delay, jitter * delay)
    await asyncio.sleep(max(0.0, delay + jitter_val))


def retry_async(
    *,
    attempts: int = 3,
    base_delay: float = 0.2,
    factor: float = 2.0,
    max_delay: float = 2.0,
    jitter: float = 0.15,
    if_retryable: Optional[Callable[[BaseException], bool]] = None,
):
    """Retry an async callable with exponential backoff while the error is retryable."""
    if if_retryable is None:
        if_retryable = is_transient_http_error

    def deco(fn: Callable):
        @functools.wraps(fn)
        async def wrapper(*args, **kwargs):
            for attempt in range(1, attempts + 1):
                try:
                    return await fn(*args, **kwargs)
                except asyncio.CancelledError:
                    raise
                except Exception as exc:
                    if not if_retryable(exc) or attempt == attempts:
                        raise
                    delay = min(max_delay, base_delay * (factor ** (attempt - 1)))
                    logger.debug(
                        "retry.attempt_failed",
                        extra={"fn": fn.__name__, "attempt": attempt, "delay": delay, "error": str(exc)},
                    )
                    await _sleep_with_jitter(delay, jitter)
        return wrapper
    return deco
