"""Utility functions shared by the drivers and the session."""

from .retry import retry_op
from .diagnostics import collect_diagnostics

__all__ = [
    "retry_op",
    "collect_diagnostics",
]
