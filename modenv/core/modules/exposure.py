"""
Process-default environment and its global binding.

Host code that cannot have an Environment passed in finds it as an attribute
of `builtins`, under the configured `global_name`.
"""
from __future__ import annotations

import builtins
import logging
from typing import Optional

from modenv.core.config import get_settings

from .environment import Environment

log = logging.getLogger("modenv.globals")

_DEFAULT: Optional[Environment] = None


def get_environment() -> Environment:
    global _DEFAULT
    if _DEFAULT is None:
        _DEFAULT = Environment()
        if get_settings().auto_install:
            install(_DEFAULT)
    return _DEFAULT


def reset_environment() -> None:
    """Test helper: drop the default environment and any binding pointing at it."""
    global _DEFAULT
    if _DEFAULT is not None:
        name = get_settings().global_name
        if getattr(builtins, name, None) is _DEFAULT:
            uninstall(name)
    _DEFAULT = None


def install(env: Optional[Environment] = None, name: Optional[str] = None) -> str:
    if env is None:
        env = get_environment()
    if name is None:
        name = get_settings().global_name

    current = getattr(builtins, name, None)
    if current is not None and current is not env:
        log.warning("Replacing existing global binding %r", name)

    setattr(builtins, name, env)
    log.debug("Published %r as builtins.%s", env, name)
    return name


def uninstall(name: Optional[str] = None) -> Optional[Environment]:
    if name is None:
        name = get_settings().global_name
    env = installed(name)
    if env is None:
        return None
    delattr(builtins, name)
    return env


def installed(name: Optional[str] = None) -> Optional[Environment]:
    if name is None:
        name = get_settings().global_name
    env = getattr(builtins, name, None)
    return env if isinstance(env, Environment) else None
