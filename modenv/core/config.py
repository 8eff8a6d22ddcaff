"""
Runtime settings for the module environment.

Reads an optional YAML/JSON settings file and applies environment overrides.

Settings file format (YAML or JSON):
    global_name: __modenv__
    auto_install: true

Environment variables:
    MODENV_CONFIG_FILE:  path to the settings file (optional).
    MODENV_GLOBAL_NAME:  name the default environment is published under.
    MODENV_AUTO_INSTALL: "1"/"true"/"yes" (default) publishes the default
                         environment as soon as it is created; any other
                         value keeps it unpublished.
"""
from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import BaseModel, ValidationError, field_validator

_log = logging.getLogger("modenv.config")

DEFAULT_GLOBAL_NAME = "__modenv__"

_TRUTHY = ("1", "true", "yes")


class Settings(BaseModel):
    global_name: str = DEFAULT_GLOBAL_NAME
    auto_install: bool = True

    @field_validator("global_name")
    @classmethod
    def _non_empty_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("global_name must be a non-empty string")
        return v


_SETTINGS: Optional[Settings] = None


def _read_settings_file(path: Optional[Path]) -> Dict[str, Any]:
    """
    Parse the settings file as JSON, falling back to YAML.

    Returns an empty dict if the file is absent, unreadable or malformed;
    the caller falls back to defaults in that case.
    """
    if path is None or not path.exists():
        return {}

    try:
        raw_text = path.read_text(encoding="utf-8")
    except OSError as exc:
        _log.warning("Cannot read settings file %s: %s", path, exc)
        return {}

    try:
        data = json.loads(raw_text)
    except json.JSONDecodeError:
        try:
            data = yaml.safe_load(raw_text)
        except yaml.YAMLError as exc:
            _log.warning("Failed to parse settings file %s as JSON or YAML: %s", path, exc)
            return {}

    if data is None:
        return {}
    if not isinstance(data, dict):
        _log.warning("Settings file %s must be a mapping, got %s", path, type(data).__name__)
        return {}
    return data


def _resolve_path(path: Optional[Path]) -> Optional[Path]:
    if path is not None:
        return Path(path)
    env_path = os.getenv("MODENV_CONFIG_FILE", "").strip()
    if env_path:
        return Path(env_path)
    return None


def _env_overrides() -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    name = os.getenv("MODENV_GLOBAL_NAME")
    if name is not None and name.strip():
        out["global_name"] = name.strip()
    auto = os.getenv("MODENV_AUTO_INSTALL")
    if auto is not None:
        out["auto_install"] = auto.strip().lower() in _TRUTHY
    return out


def load_settings(path: Optional[Path] = None) -> Settings:
    resolved = _resolve_path(path)
    raw = _read_settings_file(resolved)
    raw.update(_env_overrides())

    try:
        settings = Settings(**raw)
    except ValidationError as exc:
        _log.warning("Invalid settings in %s, using defaults: %s", resolved or "environment", exc)
        return Settings()

    if raw:
        _log.debug("Loaded settings %s", settings.model_dump())
    return settings


def get_settings() -> Settings:
    global _SETTINGS
    if _SETTINGS is None:
        _SETTINGS = load_settings()
    return _SETTINGS


def reset_settings() -> None:
    """Test helper: forget cached settings so the next call re-reads them."""
    global _SETTINGS
    _SETTINGS = None
