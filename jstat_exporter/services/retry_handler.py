"""Retry handler with exponential backoff for transient jstat failures."""

import random
import logging
import time
from typing import Callable, TypeVar, Tuple


T = TypeVar('T')


class RetryHandler:
    """
    Handles retry logic with exponential backoff and jitter.

    The sampler itself never retries; the collector decides whether a failed
    invocation is worth repeating within the same scrape.
    """

    @staticmethod
    def with_retry(
        func: Callable[[], T],
        max_attempts: int = 1,
        base_delay: float = 0.5,
        max_delay: float = 5.0,
        exceptions: Tuple[type, ...] = (Exception,),
        logger: logging.Logger = None,
        sleep: Callable[[float], None] = time.sleep
    ) -> T:
        """
        Execute function with exponential backoff retry.

        Args:
            func: Callable to execute
            max_attempts: Maximum attempts, including the first one
            base_delay: Initial delay in seconds
            max_delay: Maximum delay in seconds
            exceptions: Tuple of exception types to retry on
            logger: Optional logger for retry events
            sleep: Function used to wait between attempts

        Returns:
            Result from successful function execution

        Raises:
            Exception: Last exception if all attempts are exhausted, or any
                exception not listed in *exceptions*
        """
        logger = logger or logging.getLogger(__name__)
        max_attempts = max(1, max_attempts)

        for attempt in range(1, max_attempts + 1):
            try:
                return func()

            except exceptions as e:
                if attempt == max_attempts:
                    if max_attempts > 1:
                        logger.warning(f"All {max_attempts} attempts exhausted: {e}")
                    raise

                delay = min(base_delay * (2 ** (attempt - 1)), max_delay)
                jitter = random.uniform(0, delay * 0.1)  # Add 0-10% jitter
                total_delay = delay + jitter

                logger.info(
                    f"Attempt {attempt}/{max_attempts} failed: {e}. "
                    f"Retrying in {total_delay:.2f}s..."
                )

                sleep(total_delay)

        raise RuntimeError("Retry loop exited without a result")
