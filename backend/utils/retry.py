"""
Retry decorator with exponential backoff for async calls
"""

import logging
from typing import Tuple, Type

from tenacity import (
    before_sleep_log,
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

logger = logging.getLogger(__name__)


def retry_with_backoff(
    max_retries: int = 3,
    base_delay: float = 1.0,
    max_delay: float = 30.0,
    exceptions: Tuple[Type[BaseException], ...] = (Exception,),
):
    """
    Retry an async function on failure, doubling the delay after each attempt.

    Args:
        max_retries: Number of retries after the first attempt
        base_delay: Delay before the first retry, in seconds
        max_delay: Upper bound for a single delay, in seconds
        exceptions: Exception types that trigger a retry. Anything else propagates immediately.
    """
    return retry(
        stop=stop_after_attempt(max_retries + 1),
        wait=wait_exponential(multiplier=base_delay, max=max_delay),
        retry=retry_if_exception_type(exceptions),
        before_sleep=before_sleep_log(logger, logging.WARNING),
        reraise=True,
    )
