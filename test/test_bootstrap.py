import json
import logging
import sys
from pathlib import Path

import pytest

from erpdash import main as main_module
from erpdash.application.container import build_container
from erpdash.config import get_app_paths, load_settings
from erpdash.logging_config import JsonFormatter
from erpdash.repositories.kv_storage import SqliteKeyValueStorage


def test_app_paths_live_under_home_dot_dir(tmp_path: Path, monkeypatch):
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.delenv("ERPDASH_HOME", raising=False)
    monkeypatch.setattr(sys, "platform", "linux")

    paths = get_app_paths("ErpTest")

    assert paths.base_dir == tmp_path / ".erptest"
    assert paths.storage_path == tmp_path / ".erptest" / "storage.db"
    assert paths.logs_dir.is_dir()


def test_home_override_replaces_platform_dir(tmp_path: Path):
    paths = get_app_paths("ErpTest", env={"ERPDASH_HOME": str(tmp_path / "data")})

    assert paths.base_dir == tmp_path / "data"
    assert paths.storage_path == tmp_path / "data" / "storage.db"
    assert paths.logs_dir.is_dir()


def test_settings_defaults(tmp_path: Path):
    settings = load_settings(env={"ERPDASH_HOME": str(tmp_path)})

    assert settings.strict_products is False
    assert settings.log_level == logging.INFO


def test_settings_read_strict_mode_and_log_level(tmp_path: Path):
    settings = load_settings(
        env={"ERPDASH_HOME": str(tmp_path), "ERPDASH_STRICT_PRODUCTS": " Yes ", "ERPDASH_LOG_LEVEL": "debug"}
    )

    assert settings.strict_products is True
    assert settings.log_level == logging.DEBUG
    assert build_container(settings.paths.storage_path, strict_products=settings.strict_products).sales.strict_products


def test_unknown_log_level_is_rejected(tmp_path: Path):
    with pytest.raises(ValueError, match="Unknown log level 'loud'"):
        load_settings(env={"ERPDASH_HOME": str(tmp_path), "ERPDASH_LOG_LEVEL": "loud"})


def test_json_formatter_emits_one_object_per_record():
    record = logging.LogRecord("erpdash.sales", logging.INFO, __file__, 1, "sale_recorded sale_id=%s", ("abc",), None)

    payload = json.loads(JsonFormatter(datefmt="%Y-%m-%d %H:%M:%S").format(record))

    assert payload["logger"] == "erpdash.sales"
    assert payload["level"] == "INFO"
    assert payload["message"] == "sale_recorded sale_id=abc"


def test_main_bootstraps_seeded_storage(tmp_path: Path, monkeypatch):
    monkeypatch.setenv("ERPDASH_HOME", str(tmp_path))
    monkeypatch.delenv("ERPDASH_LOG_LEVEL", raising=False)

    main_module.main()

    keys = SqliteKeyValueStorage(tmp_path / "storage.db").keys()
    assert keys == ["erp_notifications", "erp_products", "erp_sales", "erp_users"]
    assert (tmp_path / "logs").is_dir()
