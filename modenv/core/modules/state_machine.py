# modenv/core/modules/state_machine.py
from __future__ import annotations

from typing import Set, Tuple

from modenv.core.errors import IllegalTransition

from .models import ModuleState


_ALLOWED: Set[Tuple[ModuleState, ModuleState]] = {
    (ModuleState.UNREGISTERED, ModuleState.REGISTERED),
    (ModuleState.REGISTERED, ModuleState.LOADING),
    (ModuleState.LOADING, ModuleState.LOADED),
}

_TERMINAL: Set[ModuleState] = {
    ModuleState.LOADED,
}


def is_terminal(state: ModuleState) -> bool:
    return state in _TERMINAL


def can_transition(src: ModuleState, dst: ModuleState) -> bool:
    if src in _TERMINAL:
        return False
    return (src, dst) in _ALLOWED


def ensure_transition(src: ModuleState, dst: ModuleState) -> None:
    if not can_transition(src, dst):
        raise IllegalTransition(src, dst)
