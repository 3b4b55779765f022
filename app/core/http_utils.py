"""
Retry helper for outbound calls to third-party APIs
"""
import asyncio
import functools
import logging
from typing import Callable, Any, TypeVar, cast, Awaitable

logger = logging.getLogger(__name__)

# Define a type variable for the return type of the decorated function
T = TypeVar('T')

def with_retry(
    max_retries: int = 1,
    retry_delay: float = 0.5
) -> Callable[[Callable[..., Awaitable[T]]], Callable[..., Awaitable[T]]]:
    """
    Decorator that retries an idempotent call when it fails with a retryable error.

    An exception is retryable when it has a truthy ``retryable`` attribute
    (see app.core.plaid.PlaidError). Anything else propagates immediately.

    Args:
        max_retries: Retries after the first attempt before giving up
        retry_delay: Delay before the first retry in seconds, doubled for each further one

    Returns:
        Decorated function with retry logic. The last error is re-raised unchanged
        once retries are exhausted.
    """
    def decorator(func: Callable[..., Awaitable[T]]) -> Callable[..., Awaitable[T]]:
        @functools.wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> T:
            attempt = 0
            while True:
                try:
                    return await func(*args, **kwargs)
                except Exception as e:
                    if not getattr(e, "retryable", False) or attempt >= max_retries:
                        raise
                    attempt += 1
                    delay = retry_delay * (2 ** (attempt - 1))
                    logger.warning(
                        f"{func.__name__} failed: {str(e)}. "
                        f"Retrying in {delay:.2f}s... (Attempt {attempt}/{max_retries})"
                    )
                    await asyncio.sleep(delay)

        return cast(Callable[..., Awaitable[T]], wrapper)

    return decorator
