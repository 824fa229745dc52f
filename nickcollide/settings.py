#!/usr/bin/env python3
"""
Settings loader for nickcollide.

Values come from ``configs/app.yaml`` inside the package, or from the
file named by ``NICKCOLLIDE_CONFIG`` when that variable is set.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Any
import os

import yaml

PACKAGE_ROOT = Path(__file__).resolve().parent
CONFIG_DIR = PACKAGE_ROOT / "configs"
APP_CONFIG_PATH = CONFIG_DIR / "app.yaml"
CONFIG_ENV_VAR = "NICKCOLLIDE_CONFIG"


def config_path() -> Path:
    """Settings file in effect: $NICKCOLLIDE_CONFIG or the bundled app.yaml."""
    override = os.environ.get(CONFIG_ENV_VAR)
    return Path(override).expanduser() if override else APP_CONFIG_PATH


@lru_cache(maxsize=4)
def _load_yaml(path: Path) -> dict:
    if not path.exists():
        raise FileNotFoundError(f"Missing app config: {path}")
    data = yaml.safe_load(path.read_text())
    return data or {}


def load_app_config() -> dict:
    return _load_yaml(config_path())


def get_setting(path: str, default: Any = None) -> Any:
    """Get nested setting by dotted path."""
    current: Any = load_app_config()
    for part in path.split('.'):
        if not isinstance(current, dict) or part not in current:
            return default
        current = current[part]
    return current


def require_setting(path: str) -> Any:
    """Get a setting that has no fallback; a missing one is a broken config."""
    value = get_setting(path)
    if value is None:
        raise ValueError(f"{path} must be set in app.yaml")
    return value


def resolve_path(value: str, base: Path | None = None) -> Path:
    """Resolve a path string relative to the package directory (unless absolute)."""
    if value is None:
        raise ValueError("path value is required")
    path = Path(os.path.expanduser(str(value)))
    if path.is_absolute():
        return path
    return ((base or PACKAGE_ROOT) / path).resolve()


__all__ = [
    "config_path",
    "load_app_config",
    "get_setting",
    "require_setting",
    "resolve_path",
    "PACKAGE_ROOT",
    "APP_CONFIG_PATH",
    "CONFIG_ENV_VAR",
]
