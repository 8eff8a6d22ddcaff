from prometheus_client import REGISTRY

from modenv.core.observability.metrics import inc_named, reset_metrics, snapshot_named


def test_define_and_alias_counters(env):
    env.define("p", None, "x.js")
    env.define("p", "m", "x.js")
    snap = snapshot_named()
    assert snap["defines_total"] == 2
    assert snap["defines_new"] == 1
    assert snap["defines_alias"] == 1


def test_resolve_miss_counters(env):
    assert not env.has("nothing/here")
    caller = env.define("p", None, "a.js")
    assert not env.has("./b", caller)

    snap = snapshot_named()
    assert snap["resolve_misses_package"] == 1
    assert snap["resolve_misses_relative"] == 1
    assert snap["resolve_misses_total"] == 2


def test_prometheus_counter_exported(env):
    before = REGISTRY.get_sample_value("modenv_defines_total", {"package": "prom", "kind": "new"}) or 0.0
    env.define("prom", "m")
    after = REGISTRY.get_sample_value("modenv_defines_total", {"package": "prom", "kind": "new"})
    assert after == before + 1


def test_reset_and_named():
    inc_named("custom", 3)
    inc_named("")
    assert snapshot_named() == {"custom": 3}
    reset_metrics()
    assert snapshot_named() == {}


def test_cached_loads_skip_prometheus(env):
    labels_cached = {"package": "hot", "outcome": "cached"}
    labels_executed = {"package": "hot", "outcome": "executed"}
    before_exec = REGISTRY.get_sample_value("modenv_loads_total", labels_executed) or 0.0

    rec = env.define("hot", ".").register(lambda module: None)
    for _ in range(3):
        rec.load()

    assert REGISTRY.get_sample_value("modenv_loads_total", labels_cached) is None
    assert REGISTRY.get_sample_value("modenv_loads_total", labels_executed) == before_exec + 1
    assert snapshot_named()["loads_cached"] == 2
