"""Driver capability contract shared by every backend."""

import abc
import re
from typing import Any, List, Optional
from urllib.parse import urljoin, urlparse

import logging
logger = logging.getLogger(__name__)

_ABSOLUTE_PATH = re.compile(r"^(\(*\s*)/")


class Driver(abc.ABC):
    """
    Everything the session needs from a backend.

    Finders report "not found" with ``None`` or ``[]``; they never raise for
    it. Faults below node resolution (lost connection, dead remote session)
    are raised as ``DriverError``.
    """

    name = "abstract"

    def __init__(self, app_host: Optional[str] = None):
        self.app_host = app_host
        self._closed = False

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    @abc.abstractmethod
    def navigate(self, url: str) -> None: ...

    @abc.abstractmethod
    def current_url(self) -> str: ...

    def current_path(self) -> str:
        return urlparse(self.current_url() or "").path

    def resolve_url(self, url: str) -> str:
        """Join a relative URL onto ``app_host`` when one is configured."""
        url = str(url)
        if self.app_host and not urlparse(url).scheme:
            return urljoin(self.app_host, url)
        return url

    # ------------------------------------------------------------------
    # Page
    # ------------------------------------------------------------------

    @abc.abstractmethod
    def title(self) -> str: ...

    @abc.abstractmethod
    def source(self) -> str: ...

    @abc.abstractmethod
    def screenshot(self, path: str) -> None: ...

    # ------------------------------------------------------------------
    # Scripting
    # ------------------------------------------------------------------

    @abc.abstractmethod
    def run_script(self, code: str) -> None: ...

    @abc.abstractmethod
    def evaluate_script(self, code: str) -> Any: ...

    # ------------------------------------------------------------------
    # Finders
    # ------------------------------------------------------------------

    @abc.abstractmethod
    def find_one(self, query: str, scope=None): ...

    @abc.abstractmethod
    def find_all(self, query: str, scope=None) -> List: ...

    @staticmethod
    def relative_query(query: str) -> str:
        """
        Make an absolute query search below a scope node instead of the document.

        Leading parentheses are kept, so ``(//input)[1]`` becomes ``(.//input)[1]``.
        """
        return _ABSOLUTE_PATH.sub(r"\1./", query, count=1)

    def same_node(self, a: Any, b: Any) -> bool:
        return a is b or a == b

    # ------------------------------------------------------------------
    # Teardown
    # ------------------------------------------------------------------

    @property
    def closed(self) -> bool:
        return self._closed

    def quit(self) -> None:
        """Release backend resources. Safe to call more than once."""
        if self._closed:
            return
        self._closed = True
        logger.debug(f"Shutting down {self.name} driver")
        self._shutdown()

    def _shutdown(self) -> None:
        pass


__all__ = ["Driver"]
