"""
Backend registry.

``load_driver`` turns the session's ``driver`` option into a Driver
instance. Accepted forms:

    None                                   DEFAULT_DRIVER ("http")
    "selenium"                             registered name
    "mypkg.drivers:CustomDriver"           dotted class path
    {"class": "selenium", "args": {...}}   class plus constructor args
    SomeDriver(...)                        used as is
"""

import importlib
from typing import Mapping, Optional, Union

from ..constants import DEFAULT_DRIVER
from ..errors import ConfigurationError
from .base import Driver
from .http import HttpDriver, HttpNode
from .selenium_remote import SeleniumRemoteDriver, SeleniumNode

import logging
logger = logging.getLogger(__name__)


DRIVERS = {
    "http": HttpDriver,
    "headless": HttpDriver,
    "selenium": SeleniumRemoteDriver,
    "remote": SeleniumRemoteDriver,
}


def _import_class(path: str) -> type:
    module_name, sep, attr = path.partition(":")
    if not sep:
        module_name, _, attr = path.rpartition(".")
    if not module_name or not attr:
        raise ConfigurationError(f"Unknown driver {path!r}; registered drivers: {sorted(DRIVERS)}")
    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise ConfigurationError(f"Cannot import driver module {module_name!r}: {e}") from e
    try:
        return getattr(module, attr)
    except AttributeError as e:
        raise ConfigurationError(f"Module {module_name!r} has no driver class {attr!r}") from e


def resolve_driver_class(name: Union[str, type]) -> type:
    if isinstance(name, type):
        cls = name
    elif name.lower() in DRIVERS:
        cls = DRIVERS[name.lower()]
    else:
        cls = _import_class(name)

    if not (isinstance(cls, type) and issubclass(cls, Driver)):
        raise ConfigurationError(f"{cls!r} does not implement the Driver contract")
    return cls


def load_driver(spec: Optional[Union[str, type, Mapping, Driver]] = None, **options) -> Driver:
    """
    Build the backend for a session.

    Args:
        spec: Backend selector (see module docstring)
        **options: Passthrough constructor options (``app_host``, ``host``, ...);
            they override matching keys of ``spec["args"]``

    Returns:
        A Driver instance

    Raises:
        ConfigurationError: if the selector or its arguments are unusable
    """
    if isinstance(spec, Driver):
        if options:
            raise ConfigurationError("Driver options cannot be applied to an already built driver")
        return spec

    args = {}
    if spec is None:
        name = DEFAULT_DRIVER
    elif isinstance(spec, Mapping):
        if "class" not in spec:
            raise ConfigurationError("Structured driver config needs a 'class' entry")
        name = spec["class"]
        args.update(spec.get("args") or {})
    else:
        name = spec

    args.update(options)
    cls = resolve_driver_class(name)
    logger.debug(f"Loading driver {cls.__name__} with options {sorted(args)}")
    try:
        return cls(**args)
    except TypeError as e:
        raise ConfigurationError(f"Invalid options for {cls.__name__}: {e}") from e


__all__ = [
    "DRIVERS",
    "Driver",
    "HttpDriver",
    "HttpNode",
    "SeleniumRemoteDriver",
    "SeleniumNode",
    "load_driver",
    "resolve_driver_class",
]
