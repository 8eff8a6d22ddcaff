"""
Settings loader tests.
"""
from __future__ import annotations

import json

from modenv.core.config import DEFAULT_GLOBAL_NAME, Settings, get_settings, load_settings, reset_settings


# ---------------------------------------------------------------------------
# defaults
# ---------------------------------------------------------------------------

def test_defaults_without_file_or_env():
    s = load_settings()
    assert s.global_name == DEFAULT_GLOBAL_NAME
    assert s.auto_install is True


def test_missing_file_falls_back_to_defaults(tmp_path):
    s = load_settings(tmp_path / "nope.yaml")
    assert s == Settings()


# ---------------------------------------------------------------------------
# file formats
# ---------------------------------------------------------------------------

def test_json_file(tmp_path):
    f = tmp_path / "modenv.json"
    f.write_text(json.dumps({"global_name": "Lum", "auto_install": False}), encoding="utf-8")
    s = load_settings(f)
    assert s.global_name == "Lum"
    assert s.auto_install is False


def test_yaml_file(tmp_path):
    f = tmp_path / "modenv.yaml"
    f.write_text("global_name: LumV5\nauto_install: no\n", encoding="utf-8")
    s = load_settings(f)
    assert s.global_name == "LumV5"
    assert s.auto_install is False


def test_non_mapping_file_is_ignored(tmp_path, caplog):
    f = tmp_path / "modenv.yaml"
    f.write_text("- a\n- b\n", encoding="utf-8")
    s = load_settings(f)
    assert s == Settings()
    assert "must be a mapping" in caplog.text


def test_invalid_value_falls_back_to_defaults(tmp_path, caplog):
    f = tmp_path / "modenv.json"
    f.write_text(json.dumps({"global_name": "   "}), encoding="utf-8")
    s = load_settings(f)
    assert s.global_name == DEFAULT_GLOBAL_NAME
    assert "Invalid settings" in caplog.text


# ---------------------------------------------------------------------------
# environment variables
# ---------------------------------------------------------------------------

def test_env_file_path(tmp_path, monkeypatch):
    f = tmp_path / "modenv.json"
    f.write_text(json.dumps({"global_name": "FromFile"}), encoding="utf-8")
    monkeypatch.setenv("MODENV_CONFIG_FILE", str(f))
    assert load_settings().global_name == "FromFile"


def test_env_overrides_file(tmp_path, monkeypatch):
    f = tmp_path / "modenv.json"
    f.write_text(json.dumps({"global_name": "FromFile", "auto_install": True}), encoding="utf-8")
    monkeypatch.setenv("MODENV_GLOBAL_NAME", "FromEnv")
    monkeypatch.setenv("MODENV_AUTO_INSTALL", "0")
    s = load_settings(f)
    assert s.global_name == "FromEnv"
    assert s.auto_install is False


def test_get_settings_caches_until_reset(monkeypatch):
    monkeypatch.setenv("MODENV_GLOBAL_NAME", "First")
    assert get_settings().global_name == "First"
    monkeypatch.setenv("MODENV_GLOBAL_NAME", "Second")
    assert get_settings().global_name == "First"
    reset_settings()
    assert get_settings().global_name == "Second"
