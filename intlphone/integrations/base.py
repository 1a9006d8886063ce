"""Base classes for external integrations.

All network integrations inherit from IntegrationBase, which provides:
    - Health check interface
    - Configuration check
    - Retry with exponential backoff
    - Logging patterns

RateLimiter spaces out calls to services with a usage policy
(the public Nominatim geocoder allows one request per second).
"""

import threading
import time
from abc import ABC, abstractmethod
from typing import Callable, Optional, TypeVar

from intlphone.core.exceptions import IntegrationError
from intlphone.core.logging import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


class IntegrationBase(ABC):
    """Abstract base class for all external integrations.

    Subclasses must implement:
        - health_check(): Check if service is available
        - is_configured(): Check if endpoints/credentials are present
    """

    @abstractmethod
    def health_check(self) -> bool:
        """Check if integration is healthy and available.

        Returns:
            True if service is reachable and functioning
        """
        pass

    @abstractmethod
    def is_configured(self) -> bool:
        """Check if required configuration is present.

        Returns:
            True if all required config is present
        """
        pass

    def with_retry(
        self,
        func: Callable[[], T],
        max_retries: int = 2,
        base_delay: float = 0.5,
        max_delay: float = 4.0,
        exceptions: tuple = (Exception,),
    ) -> T:
        """Execute function with exponential backoff retry.

        Blocking; call from a worker thread when used under asyncio.

        Args:
            func: Function to execute
            max_retries: Maximum retry attempts
            base_delay: Initial delay between retries (seconds)
            max_delay: Maximum delay between retries
            exceptions: Exception types to catch and retry

        Returns:
            Function result

        Raises:
            IntegrationError: If all retries exhausted
        """
        last_exception: Optional[Exception] = None
        delay = base_delay

        for attempt in range(max_retries + 1):
            try:
                return func()
            except exceptions as e:
                last_exception = e
                if attempt < max_retries:
                    logger.warning(
                        f"Retry {attempt + 1}/{max_retries} after {delay}s: {e}",
                        extra={"context": {"integration": type(self).__name__}},
                    )
                    time.sleep(delay)
                    delay = min(delay * 2, max_delay)

        raise IntegrationError(
            f"Operation failed after {max_retries + 1} attempts: {last_exception}"
        ) from last_exception


class RateLimiter:
    """Minimum spacing between calls, safe across worker threads.

    Attributes:
        min_interval: Seconds that must pass between two calls
    """

    def __init__(self, calls_per_second: float = 1.0):
        """Initialize rate limiter.

        Args:
            calls_per_second: Maximum calls per second
        """
        self.min_interval = 1.0 / calls_per_second
        self._last_call: Optional[float] = None
        self._lock = threading.Lock()

    def wait_if_needed(self) -> None:
        """Sleep until the next call is allowed, then claim the slot."""
        with self._lock:
            now = time.monotonic()
            if self._last_call is not None:
                sleep_time = self.min_interval - (now - self._last_call)
                if sleep_time > 0:
                    logger.debug(f"Rate limit: sleeping {sleep_time:.2f}s")
                    time.sleep(sleep_time)
            self._last_call = time.monotonic()
