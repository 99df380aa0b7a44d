"""
Retry handler for LLM requests.

Decides whether a failed attempt may be retried with the next model
candidate of the same provider, and waits the fixed backoff interval
between such retries.
"""

import asyncio
import logging
from typing import Callable, Awaitable, Optional

from ...core.models.errors import LLMError


logger = logging.getLogger(__name__)

DEFAULT_BACKOFF_SECONDS = 3.0


class RetryHandler:
    """
    Retry policy for provider attempts.

    Which failures are transient is decided once, by classify_error:
    rate limiting or quota exhaustion, regional or temporary
    unavailability, and a model that is not found or not supported.
    Everything else aborts the provider.
    """

    def __init__(
        self,
        backoff_seconds: float = DEFAULT_BACKOFF_SECONDS,
        sleep: Optional[Callable[[float], Awaitable[None]]] = None
    ):
        """
        Initialize retry handler.

        Args:
            backoff_seconds: Fixed delay before retrying another model
            sleep: Async sleep function, defaults to asyncio.sleep
        """
        self.backoff_seconds = max(0.0, backoff_seconds)
        self._sleep = sleep or asyncio.sleep

    def is_retryable_error(self, error: Exception) -> bool:
        """
        Check if error is retryable.

        Args:
            error: Classified error from an attempt

        Returns:
            True if error is retryable
        """
        return isinstance(error, LLMError) and error.retryable

    async def wait(self, label: str = "") -> None:
        """Sleep for the backoff interval before the next candidate."""
        if self.backoff_seconds <= 0:
            return

        logger.info(f"Waiting {self.backoff_seconds:.1f}s before retrying {label}".rstrip())
        await self._sleep(self.backoff_seconds)

    def get_retry_stats(self) -> dict:
        """Get retry handler statistics."""
        return {"backoff_seconds": self.backoff_seconds}
