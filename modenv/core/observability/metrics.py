from __future__ import annotations

from collections import Counter
from typing import Dict

from prometheus_client import Counter as PromCounter

# Named counters (in-process, test friendly)
_NAMED = Counter()

_PROM_DEFINES = PromCounter(
    "modenv_defines_total",
    "Module records defined or aliased",
    ["package", "kind"],
)

_PROM_LOADS = PromCounter(
    "modenv_loads_total",
    "Module load() calls by outcome",
    ["package", "outcome"],
)

_PROM_RESOLVE_MISSES = PromCounter(
    "modenv_resolve_misses_total",
    "Identifiers that matched no candidate",
    ["mode"],
)


def reset_metrics() -> None:
    """
    Test helper: clears the in-process counters.
    Prometheus counters are process-global and keep accumulating.
    """
    _NAMED.clear()


def inc_named(name: str, value: int = 1) -> None:
    if not name:
        return
    _NAMED[name] += int(value)


def inc_define(package: str, kind: str) -> None:
    """kind: "new" | "alias" """
    _NAMED["defines_total"] += 1
    _NAMED[f"defines_{kind}"] += 1
    _PROM_DEFINES.labels(package=package, kind=kind).inc()


def inc_load(package: str, outcome: str) -> None:
    """
    outcome: "executed" | "cached" | "reentrant" | "failed" | "after_failure"

    Cached loads stay in-process only; they are the hot path.
    """
    _NAMED[f"loads_{outcome}"] += 1
    if outcome == "cached":
        return
    _PROM_LOADS.labels(package=package, outcome=outcome).inc()


def inc_resolve_miss(mode: str) -> None:
    _NAMED["resolve_misses_total"] += 1
    _NAMED[f"resolve_misses_{mode}"] += 1
    _PROM_RESOLVE_MISSES.labels(mode=mode).inc()


def snapshot_named() -> Dict[str, int]:
    return dict(_NAMED)
