import pytest

from modenv.core.config import reset_settings
from modenv.core.modules import Environment, reset_environment
from modenv.core.observability.metrics import reset_metrics


@pytest.fixture(autouse=True)
def _isolate_runtime(monkeypatch):
    # Settings come from env; keep the developer's shell out of the tests
    monkeypatch.delenv("MODENV_CONFIG_FILE", raising=False)
    monkeypatch.delenv("MODENV_GLOBAL_NAME", raising=False)
    monkeypatch.delenv("MODENV_AUTO_INSTALL", raising=False)
    reset_settings()
    reset_metrics()
    reset_environment()
    yield
    reset_environment()
    reset_settings()


@pytest.fixture()
def env():
    return Environment()
