"""
Module environment core.

Provides a CommonJS-style registry for in-memory module factories:
- define records by package/module name and/or source path
- relative and bare-specifier resolution
- lazy, memoized loading that tolerates circular requires
"""

from modenv.core.modules.environment import Environment
from modenv.core.modules.exposure import (
    get_environment,
    install,
    installed,
    reset_environment,
    uninstall,
)
from modenv.core.modules.models import ModuleState, Package
from modenv.core.modules.record import ModuleContext, ModuleRecord
from modenv.core.modules.resolver import Candidate, resolve_candidates

__all__ = [
    "Candidate",
    "Environment",
    "ModuleContext",
    "ModuleRecord",
    "ModuleState",
    "Package",
    "get_environment",
    "install",
    "installed",
    "reset_environment",
    "resolve_candidates",
    "uninstall",
]
