"""Tests for settings merging and logging setup."""

import json
import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from wmdesktop.local import effective_settings as config
from wmdesktop.local.config import MergedSettings
from wmdesktop.log import setup_logging


class TestMergedSettings:

    def test_defaults_without_overrides(self, tmp_path):
        settings = MergedSettings(overrides_path=tmp_path / "overrides.json")

        assert settings.LOCAL_API_MODE == "tauri-sidecar"
        assert settings.SIDECAR_SCRIPT_SUBPATH == Path("sidecar") / "local-api-server.mjs"
        assert settings.OVERRIDES_JSON_PATH == tmp_path / "overrides.json"

    def test_modifiable_overrides_are_coerced(self, tmp_path):
        path = tmp_path / "overrides.json"
        path.write_text(json.dumps({
            "LOCAL_API_PORT": "47000",
            "NODE_EXECUTABLE": "/usr/local/bin/node",
            "LOG_FILE_ENABLED": "no",
        }))

        settings = MergedSettings(overrides_path=path)

        assert settings.LOCAL_API_PORT == 47000
        assert settings.NODE_EXECUTABLE == "/usr/local/bin/node"
        assert settings.LOG_FILE_ENABLED is False

    def test_protected_and_unknown_keys_are_ignored(self, tmp_path):
        path = tmp_path / "overrides.json"
        path.write_text(json.dumps({"LOCAL_API_MODE": "standalone", "NOT_A_SETTING": 1}))

        settings = MergedSettings(overrides_path=path)

        assert settings.LOCAL_API_MODE == "tauri-sidecar"
        assert not hasattr(settings, "NOT_A_SETTING")

    def test_bad_values_keep_defaults(self, tmp_path):
        path = tmp_path / "overrides.json"
        path.write_text(json.dumps({"LOCAL_API_PORT": "not-a-port"}))

        settings = MergedSettings(overrides_path=path)

        assert isinstance(settings.LOCAL_API_PORT, int)

    def test_malformed_file_is_ignored(self, tmp_path, caplog):
        path = tmp_path / "overrides.json"
        path.write_text("{not json")

        settings = MergedSettings(overrides_path=path)

        assert settings.LOCAL_API_MODE == "tauri-sidecar"
        assert "Failed to load or parse overrides file" in caplog.text

    def test_as_dict(self, tmp_path):
        settings = MergedSettings(overrides_path=tmp_path / "overrides.json")

        snapshot = settings.as_dict()

        assert snapshot["LOCAL_API_MODE"] == "tauri-sidecar"
        assert all(key.isupper() for key in snapshot)


class TestSetupLogging:

    def test_console_only(self, monkeypatch, restore_root_logger):
        monkeypatch.setattr(config, "LOG_FILE_ENABLED", False)

        setup_logging(logging.WARNING)

        handlers = restore_root_logger.handlers
        assert len(handlers) == 1
        assert handlers[0].level == logging.WARNING
        assert restore_root_logger.level == logging.DEBUG

    def test_file_handler(self, monkeypatch, tmp_path, restore_root_logger):
        monkeypatch.setattr(config, "LOG_FILE_ENABLED", True)
        monkeypatch.setattr(config, "LOG_FILE_PATH", tmp_path / "logs" / "desktop.log")

        setup_logging()
        logging.getLogger("wmdesktop.test").info("hello from the shell")
        for handler in restore_root_logger.handlers:
            handler.flush()

        file_handlers = [h for h in restore_root_logger.handlers if isinstance(h, RotatingFileHandler)]
        assert len(file_handlers) == 1
        assert "hello from the shell" in (tmp_path / "logs" / "desktop.log").read_text()

    def test_repeated_setup_does_not_duplicate(self, monkeypatch, restore_root_logger):
        monkeypatch.setattr(config, "LOG_FILE_ENABLED", False)

        setup_logging()
        setup_logging()

        assert len(restore_root_logger.handlers) == 1
