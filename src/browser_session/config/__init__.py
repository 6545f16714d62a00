"""Configuration management for browser backends."""

from .environment import get_remote_config

__all__ = [
    "get_remote_config",
]
