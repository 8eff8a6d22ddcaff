from __future__ import annotations

import logging
from types import SimpleNamespace
from typing import TYPE_CHECKING, Any, Callable, Optional

from modenv.core.errors import FactoryAlreadyRegistered, InvalidFactory, MissingRegistrationError
from modenv.core.observability.metrics import inc_load

from .models import ModuleState
from .state_machine import ensure_transition, is_terminal

if TYPE_CHECKING:
    from .environment import Environment

log = logging.getLogger("modenv.loader")

Require = Callable[[str], Any]
Factory = Callable[["ModuleContext"], Any]


class ModuleContext:
    """
    The `module` object handed to a factory.

    The factory reads `module.require` / `module.exports` and may replace
    `module.exports` with any value; whatever it holds when the factory
    returns becomes the record's exports.
    """

    def __init__(self, record: "ModuleRecord"):
        self.record = record
        self.id = record.id
        self.path = record.path
        self.exports: Any = SimpleNamespace()
        self.require: Require = record.create_require()

    def create_require(self, target: Any = None) -> Require:
        return ModuleRecord.anchored_require(self.record, target)

    def __repr__(self) -> str:
        return f"<ModuleContext {self.id}>"


class ModuleRecord:
    """
    Identity plus lazy, memoized execution for one source unit.

    Lifecycle: UNREGISTERED -> REGISTERED -> LOADING -> LOADED.
    The factory runs at most once; a load() that re-enters while LOADING
    (circular require) gets the in-progress exports instead.
    """

    def __init__(
        self,
        env: "Environment",
        package: str,
        module: Optional[str] = None,
        path: Optional[str] = None,
    ):
        self.env = env
        self.package = package
        self.module = module
        self.path = path
        self.state = ModuleState.UNREGISTERED
        self._factory: Optional[Factory] = None
        self._context: Optional[ModuleContext] = None
        self._failed = False

    @property
    def id(self) -> str:
        if self.module is not None:
            return f"{self.package}/{self.module}"
        return f"{self.package}::{self.path}"

    @property
    def context(self) -> Optional[ModuleContext]:
        return self._context

    @property
    def exports(self) -> Any:
        if self._context is None:
            return None
        return self._context.exports

    @property
    def failed(self) -> bool:
        """True once the factory has raised; the record never leaves LOADING."""
        return self._failed

    def _advance(self, dst: ModuleState) -> None:
        ensure_transition(self.state, dst)
        self.state = dst

    def register(self, factory: Factory) -> "ModuleRecord":
        if not callable(factory):
            raise InvalidFactory(factory)
        if self._factory is not None:
            raise FactoryAlreadyRegistered(self.id, self.package, module=self.module, path=self.path)

        self._factory = factory
        self._advance(ModuleState.REGISTERED)
        return self

    def load(self) -> Any:
        if is_terminal(self.state):
            inc_load(self.package, "cached")
            return self._context.exports

        if self._failed:
            log.debug("Module %s failed to load earlier, returning partial exports", self.id)
            inc_load(self.package, "after_failure")
            return self._context.exports

        if self.state is ModuleState.LOADING:
            log.debug("Circular require of %s, returning partial exports", self.id)
            inc_load(self.package, "reentrant")
            return self._context.exports

        if self.state is ModuleState.UNREGISTERED:
            raise MissingRegistrationError(self.id)

        self._advance(ModuleState.LOADING)
        self._context = ModuleContext(self)

        try:
            self._factory(self._context)
        except Exception:
            # stays LOADING; later loads see whatever was exported so far
            self._failed = True
            log.error("Factory for %s raised during load", self.id)
            inc_load(self.package, "failed")
            raise

        self._advance(ModuleState.LOADED)
        inc_load(self.package, "executed")
        log.debug("Loaded %s", self.id)
        return self._context.exports

    def create_require(self) -> Require:
        record = self

        def require(identifier: str) -> Any:
            return record.env.get(identifier, record).load()

        return require

    @staticmethod
    def anchored_require(anchor: "ModuleRecord", target: Any = None) -> Require:
        """
        Require function anchored at `target`.

        - str: resolved from `anchor` (relative ids use anchor's path)
        - ModuleRecord: used as-is
        - anything else: `anchor` itself
        """
        if isinstance(target, str):
            target = anchor.env.get(target, anchor)
        elif not isinstance(target, ModuleRecord):
            target = anchor
        return target.create_require()

    def __repr__(self) -> str:
        return f"<ModuleRecord {self.id} {self.state.value}>"
