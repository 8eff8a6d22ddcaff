from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Dict

if TYPE_CHECKING:
    from .record import ModuleRecord


class ModuleState(str, Enum):
    UNREGISTERED = "UNREGISTERED"
    REGISTERED = "REGISTERED"
    LOADING = "LOADING"
    LOADED = "LOADED"


@dataclass
class Package:
    """
    One named package with two independent keyspaces.

    A record may sit under a module name, a path, or both (alias).
    """

    name: str
    by_module: Dict[str, "ModuleRecord"] = field(default_factory=dict)
    by_path: Dict[str, "ModuleRecord"] = field(default_factory=dict)

    def records(self) -> list["ModuleRecord"]:
        seen: Dict[int, "ModuleRecord"] = {}
        for rec in list(self.by_module.values()) + list(self.by_path.values()):
            seen.setdefault(id(rec), rec)
        return list(seen.values())
