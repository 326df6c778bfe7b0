from __future__ import annotations

import logging
import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

APP_NAME = "ErpDashboard"
STORAGE_FILENAME = "storage.db"

# Environment overrides, all optional.
HOME_ENV = "ERPDASH_HOME"
STRICT_PRODUCTS_ENV = "ERPDASH_STRICT_PRODUCTS"
LOG_LEVEL_ENV = "ERPDASH_LOG_LEVEL"

_TRUTHY = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class AppPaths:
    base_dir: Path
    storage_path: Path
    logs_dir: Path


@dataclass(frozen=True)
class AppSettings:
    paths: AppPaths
    strict_products: bool = False
    log_level: int = logging.INFO


def _platform_data_dir(app_name: str, env: Mapping[str, str]) -> Path:
    if sys.platform.startswith("win"):
        return Path(env.get("APPDATA", str(Path.home() / "AppData" / "Roaming"))) / app_name
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / app_name
    return Path.home() / f".{app_name.lower()}"


def get_app_paths(app_name: str = APP_NAME, env: Optional[Mapping[str, str]] = None) -> AppPaths:
    """Resolve (and create) the per-user data directory.

    ``ERPDASH_HOME`` replaces the platform default entirely, which is how
    a second, throwaway data set is kept apart from the real one.
    """
    env = os.environ if env is None else env
    override = (env.get(HOME_ENV) or "").strip()
    base = Path(override).expanduser() if override else _platform_data_dir(app_name, env)

    logs = base / "logs"
    base.mkdir(parents=True, exist_ok=True)
    logs.mkdir(parents=True, exist_ok=True)

    return AppPaths(base_dir=base, storage_path=base / STORAGE_FILENAME, logs_dir=logs)


def _parse_log_level(raw: str) -> int:
    level = logging.getLevelName(raw.strip().upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level '{raw}' in {LOG_LEVEL_ENV}")
    return level


def load_settings(app_name: str = APP_NAME, env: Optional[Mapping[str, str]] = None) -> AppSettings:
    env = os.environ if env is None else env
    raw_level = env.get(LOG_LEVEL_ENV)
    return AppSettings(
        paths=get_app_paths(app_name, env),
        strict_products=(env.get(STRICT_PRODUCTS_ENV) or "").strip().lower() in _TRUTHY,
        log_level=_parse_log_level(raw_level) if raw_level else logging.INFO,
    )
