from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from modenv.core.errors import ModuleAlreadyDefined, ModuleNotFoundError
from modenv.core.observability.metrics import inc_define, inc_resolve_miss

from .models import Package
from .record import ModuleRecord
from .resolver import KEYSPACE_PATH, Candidate, is_relative, resolve_candidates

log = logging.getLogger("modenv.registry")


class Environment:
    """
    Registry of packages and their module records.

    Responsibilities:
    - define records under (package, module) and/or (package, path)
    - resolve identifiers to records (get), without executing anything
    - resolve + load in one step (require)
    """

    def __init__(self) -> None:
        self._packages: Dict[str, Package] = {}

    # ========== registration ==========

    def define(
        self,
        package: str,
        module: Optional[str] = None,
        path: Optional[str] = None,
    ) -> ModuleRecord:
        if not isinstance(package, str) or not package:
            raise ValueError("package name must be a non-empty string")
        if module is None and path is None:
            raise ValueError(f"define({package!r}) needs a module name or a path")

        pkg = self._packages.get(package)

        if pkg is not None and module is not None and module in pkg.by_module:
            raise ModuleAlreadyDefined(package, module=module)

        if pkg is not None and path is not None and path in pkg.by_path:
            if module is None:
                raise ModuleAlreadyDefined(package, path=path)
            existing = pkg.by_path[path]
            pkg.by_module[module] = existing
            inc_define(package, "alias")
            log.debug("Aliased %s:%s to existing record %s", package, module, existing.id)
            return existing

        if pkg is None:
            pkg = self._packages[package] = Package(name=package)

        record = ModuleRecord(self, package, module, path)
        if module is not None:
            pkg.by_module[module] = record
        if path is not None:
            pkg.by_path[path] = record

        inc_define(package, "new")
        log.debug("Defined %s", record.id)
        return record

    # ========== resolution ==========

    def _lookup(self, candidate: Candidate) -> Optional[ModuleRecord]:
        pkg = self._packages.get(candidate.package)
        if pkg is None:
            return None
        if candidate.keyspace == KEYSPACE_PATH:
            return pkg.by_path.get(candidate.key)
        return pkg.by_module.get(candidate.key)

    def get(self, identifier: str, from_record: Optional[ModuleRecord] = None) -> ModuleRecord:
        if not isinstance(identifier, str):
            raise TypeError("require package name must be a string")

        relative = from_record is not None and is_relative(identifier)
        if relative:
            candidates = resolve_candidates(identifier, package=from_record.package, path=from_record.path)
        else:
            candidates = resolve_candidates(identifier)

        for candidate in candidates:
            record = self._lookup(candidate)
            if record is not None:
                return record

        mode = "relative" if relative else "package"
        inc_resolve_miss(mode)
        log.debug(
            "No module for %r (mode=%s from=%s) tried=%s",
            identifier,
            mode,
            from_record.id if from_record is not None else None,
            [str(c) for c in candidates],
        )
        raise ModuleNotFoundError(
            identifier,
            candidates,
            package=from_record.package if relative else None,
        )

    def has(self, identifier: str, from_record: Optional[ModuleRecord] = None) -> bool:
        try:
            self.get(identifier, from_record)
        except ModuleNotFoundError:
            return False
        return True

    def require(self, identifier: str) -> Any:
        """Top-level require with no calling record (package mode only)."""
        return self.get(identifier).load()

    # ========== introspection ==========

    def package(self, name: str) -> Optional[Package]:
        return self._packages.get(name)

    def packages(self) -> List[str]:
        return sorted(self._packages.keys())

    def records(self) -> List[ModuleRecord]:
        out: List[ModuleRecord] = []
        for name in self.packages():
            out.extend(self._packages[name].records())
        return out

    def __repr__(self) -> str:
        return f"<Environment packages={len(self._packages)}>"
