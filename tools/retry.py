"""Bounded exponential-backoff retry for upstream LLM calls."""

import asyncio
import logging
from typing import Awaitable, Callable, Optional, TypeVar

from config.exceptions import LLMError, LLMOverloadedError, VerseCraftError

logger = logging.getLogger(__name__)

T = TypeVar("T")

MAX_RETRIES = 3  # total attempts = MAX_RETRIES + 1

StatusCallback = Callable[[str], None]

_OVERLOAD_MARKERS = ("503", "529", "overloaded", "unavailable")


def is_overloaded(error: BaseException) -> bool:
    """Classify an upstream failure as transient overload/unavailability."""
    if isinstance(error, LLMOverloadedError):
        return True
    if isinstance(error, VerseCraftError):
        message = error.message
    else:
        message = str(error)
    message = message.lower()
    if any(marker in message for marker in _OVERLOAD_MARKERS):
        return True
    status = getattr(getattr(error, "__cause__", None), "status", None)
    return status == "UNAVAILABLE"


def backoff_delay(attempt: int) -> int:
    """Seconds to wait after failed attempt ``attempt`` (0-indexed): 2, 4, 8, ..."""
    return 2 ** (attempt + 1)


async def generate_with_retry(
    call: Callable[[], Awaitable[T]],
    on_status: Optional[StatusCallback] = None,
    max_retries: int = MAX_RETRIES,
    sleep: Optional[Callable[[float], Awaitable[None]]] = None,
) -> T:
    """Run ``call`` and retry it while the service reports overload.

    Args:
        call: Zero-argument coroutine factory performing one upstream request.
        on_status: Optional sink for human-readable retry notices.
        max_retries: Retries after the first attempt.
        sleep: Awaitable delay function; defaults to ``asyncio.sleep``.

    Returns:
        Whatever ``call`` returns.

    Raises:
        LLMOverloadedError: The service stayed overloaded for every attempt.
        LLMError: Any other upstream failure, raised on the first occurrence.
    """
    sleep = sleep or asyncio.sleep
    for attempt in range(max_retries + 1):
        try:
            return await call()
        except VerseCraftError as e:
            if not isinstance(e, LLMError) or not is_overloaded(e):
                raise
            error: Exception = e
        except Exception as e:
            if not is_overloaded(e):
                logger.error("API call failed after %d attempt(s): %s", attempt + 1, e)
                raise LLMError(str(e) or "An unknown API error occurred.") from e
            error = e

        if attempt >= max_retries:
            logger.error("API call failed after %d attempts: model overloaded", attempt + 1)
            raise LLMOverloadedError() from error

        delay = backoff_delay(attempt)
        message = (
            f"The model is overloaded. Retrying in {delay}s... "
            f"({attempt + 1}/{max_retries})"
        )
        logger.warning("%s (%s)", message, error)
        if on_status:
            on_status(message)
        await sleep(delay)

    # Unreachable with max_retries >= 0
    raise LLMError("API call failed after multiple attempts.")
