# browser_session/decorators/safe_action.py

import functools
from typing import Any, Callable

from ..errors import DriverError
from ..result import ActionResult
from ..utils.diagnostics import collect_diagnostics


__all__ = [
    "run_safely",
    "safe_action",
]


def run_safely(session, action: str, locator: Any, fn: Callable[[], Any]) -> ActionResult:
    """
    Run one resolve-and-act step and fold its outcome into an ActionResult.

      - Resolution and node-level failures become ``ok=False`` and are
        reported once through ``session.logger`` at WARNING.
      - ``DriverError`` is logged with diagnostics and re-raised.
    """
    try:
        fn()
    except DriverError as e:
        session.logger.error(f"{action}({locator!r}) hit a backend failure: {e}\n{collect_diagnostics(session.driver, e)}")
        raise
    except Exception as e:
        result = ActionResult.failure(action, str(locator), f"{e.__class__.__name__}: {e}")
        session.logger.warning(f"{action}({locator!r}) failed: {result.error}")
    else:
        result = ActionResult.success(action, str(locator))

    session.last_result = result
    return result


def safe_action(func: Callable):
    """
    Decorator for Session actions whose first argument is a locator.

    The decorated method does the work and returns nothing; the wrapper
    returns ``True``/``False`` and leaves the full ActionResult on
    ``session.last_result``.
    """
    @functools.wraps(func)
    def wrapper(self, locator, *args, **kwargs) -> bool:
        result = run_safely(self, func.__name__, locator, lambda: func(self, locator, *args, **kwargs))
        return result.ok
    return wrapper
