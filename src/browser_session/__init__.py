"""
Uniform browser scripting over interchangeable backends.

Locators passed to session actions come in three forms:

    "#email"            identifier
    "//form//input"     XPath, used verbatim
    "Email"             fuzzy: link text, button value, label text, ...

Backends:

    "http"      headless requests + lxml client (default)
    "selenium"  a running Selenium server / Grid, configured through
                SELENIUM_REMOTE_SERVER_HOST / _PORT and SELENIUM_BROWSER_NAME
"""

from .session import Session
from .result import ActionResult
from .node import Node
from .locator import ActionKind, Locator, LocatorKind, compile_locator, to_xpath
from .drivers import Driver, load_driver
from .errors import (
    BrowserSessionError,
    ConfigurationError,
    InvalidLocator,
    ElementNotFound,
    ActionError,
    StaleNodeError,
    NotSupportedError,
    DriverError,
)

__all__ = [
    "Session",
    "ActionResult",
    "Node",
    "ActionKind",
    "Locator",
    "LocatorKind",
    "compile_locator",
    "to_xpath",
    "Driver",
    "load_driver",
    "BrowserSessionError",
    "ConfigurationError",
    "InvalidLocator",
    "ElementNotFound",
    "ActionError",
    "StaleNodeError",
    "NotSupportedError",
    "DriverError",
]
