"""Exception taxonomy shared by the session core and its backends."""


class BrowserSessionError(Exception):
    """Base class for every error raised by browser_session."""


class ConfigurationError(BrowserSessionError):
    """The session or a backend was given an unusable configuration."""


class InvalidLocator(BrowserSessionError):
    """A locator could not be compiled, or a query could not be evaluated."""


class ElementNotFound(BrowserSessionError):
    """No query alternative matched a node in the current scope."""

    def __init__(self, locator, queries=()):
        self.locator = locator
        self.queries = list(queries)
        super().__init__(f"Unable to find element for locator {locator!r}")


class ActionError(BrowserSessionError):
    """A resolved node rejected the requested operation."""


class StaleNodeError(ActionError):
    """The node no longer belongs to the page the backend is showing."""


class NotSupportedError(BrowserSessionError):
    """The active backend does not implement this capability."""


class DriverError(BrowserSessionError):
    """
    Backend or transport failure below node resolution.

    The session never masks this one: a lost connection must not look like
    a missing element.
    """


__all__ = [
    "BrowserSessionError",
    "ConfigurationError",
    "InvalidLocator",
    "ElementNotFound",
    "ActionError",
    "StaleNodeError",
    "NotSupportedError",
    "DriverError",
]
