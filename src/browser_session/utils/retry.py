"""Retry helper for flaky WebDriver calls."""

import time
import random
from typing import Callable, Tuple, Type

from selenium.common.exceptions import (
    NoSuchWindowException,
    StaleElementReferenceException,
    WebDriverException,
)

import logging
logger = logging.getLogger(__name__)

TRANSIENT_EXCEPTIONS = (NoSuchWindowException, StaleElementReferenceException, WebDriverException)


def retry_op(
    fn: Callable,
    retries: int = 2,
    base_delay: float = 0.15,
    exceptions: Tuple[Type[BaseException], ...] = TRANSIENT_EXCEPTIONS,
):
    """
    Call ``fn``, retrying with jittered backoff while it raises ``exceptions``.

    Args:
        fn: Zero-argument callable
        retries: Extra attempts after the first one
        base_delay: Seconds to wait before the first retry; doubles each time
        exceptions: Exception types that trigger another attempt

    Returns:
        Whatever ``fn`` returns

    Raises:
        The exception from the last attempt
    """
    for attempt in range(retries + 1):
        try:
            return fn()
        except exceptions as e:
            if attempt == retries:
                raise
            delay = base_delay * (2 ** attempt) * (1.0 + random.random())
            logger.debug(f"Attempt {attempt + 1}/{retries + 1} failed ({e.__class__.__name__}); retrying in {delay:.2f}s")
            time.sleep(delay)
