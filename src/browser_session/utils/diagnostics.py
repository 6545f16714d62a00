"""Diagnostics and debugging information utility functions."""

import sys
import platform
from typing import Optional

import selenium


def collect_diagnostics(driver=None, exc: Optional[BaseException] = None) -> str:
    """
    Collect diagnostic information about the backend and environment.

    Args:
        driver: Active backend driver (can be None)
        exc: Exception that occurred (can be None)

    Returns:
        str: Formatted diagnostic information
    """
    parts = [
        f"OS                : {platform.system()} {platform.release()}",
        f"Python            : {sys.version.split()[0]}",
        f"Selenium          : {getattr(selenium, '__version__', '?')}",
        f"Driver            : {getattr(driver, 'name', '<none>')}",
    ]

    if driver is not None:
        parts.append(f"Driver closed     : {driver.closed}")
        if not driver.closed:
            try:
                parts.append(f"Current URL       : {driver.current_url() or '<none>'}")
            except Exception as e:
                parts.append(f"Current URL       : <unavailable: {e.__class__.__name__}>")

    if exc is not None:
        parts.append(f"Exception         : {exc.__class__.__name__}: {exc}")

    return "\n".join(parts)
