"""Environment configuration for the remote Selenium backend."""

import os

from dotenv import load_dotenv, find_dotenv

from ..constants import (
    DEFAULT_BROWSER_NAME,
    DEFAULT_SELENIUM_HOST,
    DEFAULT_SELENIUM_PATH,
    DEFAULT_SELENIUM_PORT,
)
from ..errors import ConfigurationError

import logging
logger = logging.getLogger(__name__)


def _env(name: str) -> str:
    return (os.getenv(name) or "").strip()


def get_remote_config() -> dict:
    """
    Read the Selenium server location from the environment.

    A ``.env`` file in the working directory (or a parent) is loaded first;
    variables already set in the process environment win.

    Optional:   SELENIUM_REMOTE_SERVER_HOST (default 127.0.0.1)
                SELENIUM_REMOTE_SERVER_PORT (default 4444)
                SELENIUM_REMOTE_SERVER_PATH (default /wd/hub)
                SELENIUM_BROWSER_NAME       (default firefox)

    Raises:
        ConfigurationError: if the port is not a number
    """
    load_dotenv(find_dotenv(filename=".env", usecwd=True))

    port_env = _env("SELENIUM_REMOTE_SERVER_PORT")
    if port_env and not port_env.isdigit():
        raise ConfigurationError(f"SELENIUM_REMOTE_SERVER_PORT must be a number, got {port_env!r}")

    path = _env("SELENIUM_REMOTE_SERVER_PATH")
    if path and not path.startswith("/"):
        path = "/" + path

    config = {
        "host": _env("SELENIUM_REMOTE_SERVER_HOST") or DEFAULT_SELENIUM_HOST,
        "port": int(port_env) if port_env else DEFAULT_SELENIUM_PORT,
        "path": path or DEFAULT_SELENIUM_PATH,
        "browser_name": (_env("SELENIUM_BROWSER_NAME") or DEFAULT_BROWSER_NAME).lower(),
    }
    logger.debug(f"Remote Selenium config: {config}")
    return config
