"""
Global constants and configuration defaults.
No dependencies - safe to import from anywhere.
"""

import os

# ============================================================================
# Backend Selection
# ============================================================================

DEFAULT_DRIVER = os.getenv("BROWSER_SESSION_DRIVER", "http")
"""Backend used when a Session is built without an explicit driver."""


# ============================================================================
# Headless HTTP Backend
# ============================================================================

DEFAULT_HTTP_TIMEOUT = float(os.getenv("BROWSER_SESSION_HTTP_TIMEOUT", "30"))
"""Per-request timeout in seconds for the headless backend."""

DEFAULT_USER_AGENT = os.getenv("BROWSER_SESSION_USER_AGENT", "browser-session/0.1")
"""User-Agent header sent by the headless backend."""


# ============================================================================
# Selenium Remote Backend
# ============================================================================

DEFAULT_SELENIUM_HOST = "127.0.0.1"
DEFAULT_SELENIUM_PORT = 4444
DEFAULT_SELENIUM_PATH = "/wd/hub"
DEFAULT_BROWSER_NAME = "firefox"

SELENIUM_CONNECT_RETRIES = int(os.getenv("SELENIUM_CONNECT_RETRIES", "2"))
"""Extra attempts when opening the remote WebDriver session."""


__all__ = [
    "DEFAULT_DRIVER",
    "DEFAULT_HTTP_TIMEOUT",
    "DEFAULT_USER_AGENT",
    "DEFAULT_SELENIUM_HOST",
    "DEFAULT_SELENIUM_PORT",
    "DEFAULT_SELENIUM_PATH",
    "DEFAULT_BROWSER_NAME",
    "SELENIUM_CONNECT_RETRIES",
]
