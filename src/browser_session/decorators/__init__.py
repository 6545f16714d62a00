# browser_session/decorators/__init__.py

from .safe_action import run_safely, safe_action

__all__ = [
    "run_safely",
    "safe_action",
]
