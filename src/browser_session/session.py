"""
Browser session: one backend, one scope stack, one action vocabulary.

    from browser_session import Session

    with Session(app_host="http://localhost:8000") as session:
        session.visit("/login")
        session.fill_in("Email", "a@b.com")
        session.fill_in("Password", "secret")
        if not session.click_button("Sign in"):
            print(session.last_result.error)

Every mutating action returns ``True`` when the element was found and the
backend accepted the action, ``False`` otherwise. A failure is logged once at
WARNING and never raised. Backend faults (``DriverError``) are raised.

Thread Safety:
    A Session is NOT thread-safe. Use one Session (and so one backend
    connection) per thread.
"""

import contextlib
import logging
import weakref
from typing import Any, Iterator, List, Optional, Tuple

from .decorators import safe_action
from .drivers import load_driver
from .errors import DriverError, ElementNotFound
from .locator import ActionKind, compile_locator, to_xpath
from .node import Node
from .result import ActionResult


class Session:
    """
    Attributes:
        driver: The backend this session owns
        logger: Where failed actions are reported
        last_result: ActionResult of the most recent action, or None
    """

    def __init__(self, driver=None, logger: Optional[logging.Logger] = None, **options):
        self.logger = logger if logger is not None else logging.getLogger(__name__)
        self.driver = load_driver(driver, **options)
        self._finalizer = weakref.finalize(self, self.driver.quit)
        self.last_result: Optional[ActionResult] = None
        self._scopes: List[Node] = []

    def __repr__(self):
        return f"<Session driver={self.driver.name} scopes={len(self._scopes)}>"

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def __enter__(self) -> "Session":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    @property
    def closed(self) -> bool:
        return self.driver.closed

    def close(self) -> None:
        """
        Tear the backend down. Later calls do nothing.

        A session that is dropped without being closed tears its backend down
        when it is garbage collected.
        """
        self._scopes.clear()
        self._finalizer()

    def _live_driver(self):
        if self.driver.closed:
            raise DriverError("Session is closed")
        return self.driver

    # ------------------------------------------------------------------
    # Navigation and page state
    # ------------------------------------------------------------------

    def visit(self, url: str) -> None:
        self.logger.debug(f"visit {url}")
        self._live_driver().navigate(url)
        self._scopes.clear()

    def current_url(self) -> str:
        return self._live_driver().current_url()

    def current_path(self) -> str:
        return self._live_driver().current_path()

    def title(self) -> str:
        return self._live_driver().title()

    def source(self) -> str:
        return self._live_driver().source()

    def screenshot(self, path: str) -> None:
        self._live_driver().screenshot(path)

    def execute_script(self, code: str) -> None:
        self._live_driver().run_script(code)

    def evaluate_script(self, code: str) -> Any:
        return self._live_driver().evaluate_script(code)

    # ------------------------------------------------------------------
    # Scope
    # ------------------------------------------------------------------

    @property
    def scopes(self) -> Tuple[Node, ...]:
        return tuple(self._scopes)

    @property
    def current_scope(self) -> Optional[Node]:
        """Innermost live scope node, or None for the whole document."""
        while self._scopes and self._scopes[-1].is_stale():
            stale = self._scopes.pop()
            self.logger.debug(f"Dropping stale scope {stale!r}")
        return self._scopes[-1] if self._scopes else None

    @contextlib.contextmanager
    def within(self, locator: str) -> Iterator[Node]:
        """
        Narrow every find and action inside the block to one sub-tree.

        Raises:
            ElementNotFound: if ``locator`` does not resolve
        """
        node = self.find(locator)
        if node is None:
            raise ElementNotFound(locator, [to_xpath(locator)])

        depth = len(self._scopes)
        self._scopes.append(node)
        try:
            yield node
        finally:
            del self._scopes[depth:]

    # ------------------------------------------------------------------
    # Finders
    # ------------------------------------------------------------------

    def find(self, locator: str) -> Optional[Node]:
        return self._live_driver().find_one(to_xpath(locator), scope=self.current_scope)

    def all(self, locator: str) -> List[Node]:
        return self._live_driver().find_all(to_xpath(locator), scope=self.current_scope)

    def _resolve(self, locator: str, kind: ActionKind, scope: Optional[Node] = None) -> Node:
        driver = self._live_driver()
        queries = compile_locator(locator, kind)
        if scope is None:
            scope = self.current_scope

        for query in queries:
            node = driver.find_one(query, scope=scope)
            if node is not None:
                self.logger.debug(f"{kind.value} {locator!r} resolved via {query}")
                return node
        raise ElementNotFound(locator, queries)

    def _resolve_option(self, value: str, from_: Optional[str]) -> Node:
        scope = None
        if from_ is not None:
            scope = self._resolve(from_, ActionKind.SELECT_FIELD)
        return self._resolve(value, ActionKind.OPTION, scope=scope)

    # ------------------------------------------------------------------
    # Links and buttons
    # ------------------------------------------------------------------

    @safe_action
    def click_link(self, locator: str):
        self._resolve(locator, ActionKind.LINK).click()

    @safe_action
    def click_button(self, locator: str):
        self._resolve(locator, ActionKind.BUTTON).click()

    @safe_action
    def click_link_or_button(self, locator: str):
        self._resolve(locator, ActionKind.LINK_OR_BUTTON).click()

    click_on = click_link_or_button

    # ------------------------------------------------------------------
    # Forms
    # ------------------------------------------------------------------

    @safe_action
    def fill_in(self, locator: str, value: str):
        self._resolve(locator, ActionKind.FIELD).set_value(value)

    @safe_action
    def choose(self, locator: str):
        self._resolve(locator, ActionKind.RADIO).select()

    @safe_action
    def check(self, locator: str):
        self._resolve(locator, ActionKind.CHECKBOX).select()

    @safe_action
    def uncheck(self, locator: str):
        self._resolve(locator, ActionKind.CHECKBOX).unselect()

    @safe_action
    def select(self, locator: str, from_: Optional[str] = None):
        """Select the option ``locator``, optionally only inside the select box ``from_``."""
        self._resolve_option(locator, from_).select()

    @safe_action
    def unselect(self, locator: str, from_: Optional[str] = None):
        self._resolve_option(locator, from_).unselect()

    @safe_action
    def attach_file(self, locator: str, filename: str):
        self._resolve(locator, ActionKind.FILE_FIELD).set_value(filename)


__all__ = ["Session"]
