"""Outcome envelope produced by the safe-action wrapper."""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class ActionResult:
    """
    Result of one mutating session action.

    Attributes:
        ok: Whether the node was resolved and the action was accepted
        action: Name of the session action (e.g. "click_link")
        locator: Locator string the caller passed in
        error: Diagnostic message when ok is False
    """

    ok: bool
    action: str
    locator: Optional[str] = None
    error: Optional[str] = None

    def __bool__(self) -> bool:
        return self.ok

    @classmethod
    def success(cls, action: str, locator: Optional[str] = None) -> "ActionResult":
        return cls(ok=True, action=action, locator=locator)

    @classmethod
    def failure(cls, action: str, locator: Optional[str], error: str) -> "ActionResult":
        return cls(ok=False, action=action, locator=locator, error=error)

    def to_dict(self) -> dict:
        payload = {"ok": self.ok, "action": self.action, "locator": self.locator}
        if not self.ok:
            payload["error"] = self.error
        return payload


__all__ = ["ActionResult"]
