"""Node handles: one resolved element plus the driver that owns it."""

import abc
from typing import Any, List, Optional

from .errors import StaleNodeError


class Node(abc.ABC):
    """
    Backend-neutral handle on a single element.

    ``native`` is whatever the backend uses to address the element (an lxml
    element, a Selenium WebElement, ...). The session never looks inside it.
    """

    def __init__(self, driver, native: Any):
        self.driver = driver
        self.native = native

    def __eq__(self, other):
        if not isinstance(other, Node):
            return NotImplemented
        return self.driver is other.driver and self.driver.same_node(self.native, other.native)

    def __hash__(self):
        return id(self.driver)

    def __repr__(self):
        try:
            tag = self.tag_name
        except Exception:
            tag = "?"
        return f"<{type(self).__name__} {tag}>"

    def _ensure_fresh(self) -> None:
        if self.is_stale():
            raise StaleNodeError(f"{self!r} is no longer attached to the current page")

    # ------------------------------------------------------------------
    # Finders scoped to this node
    # ------------------------------------------------------------------

    def find(self, query: str) -> Optional["Node"]:
        return self.driver.find_one(query, scope=self)

    def all(self, query: str) -> List["Node"]:
        return self.driver.find_all(query, scope=self)

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    @abc.abstractmethod
    def tag_name(self) -> str: ...

    @property
    @abc.abstractmethod
    def text(self) -> str: ...

    @property
    def value(self) -> Optional[str]:
        return self.attribute("value")

    @abc.abstractmethod
    def attribute(self, name: str) -> Optional[str]: ...

    @abc.abstractmethod
    def is_stale(self) -> bool: ...

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------

    @abc.abstractmethod
    def click(self) -> None: ...

    @abc.abstractmethod
    def set_value(self, value: str) -> None: ...

    @abc.abstractmethod
    def select(self) -> None: ...

    @abc.abstractmethod
    def unselect(self) -> None: ...


__all__ = ["Node"]
