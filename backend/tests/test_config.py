"""Tests for settings loading and storage path configuration."""
from pathlib import Path

import pytest
from pydantic import ValidationError

from seminar_storage import config as config_module
from seminar_storage.config import (
    SETTINGS_ENV_VAR,
    AppConfig,
    StorageSettings,
    get_config,
    load_config,
    reset_config,
)


@pytest.fixture(autouse=True)
def clean_config_cache():
    reset_config()
    yield
    reset_config()


class TestDefaults:
    def test_storage_defaults(self):
        cfg = AppConfig()
        assert cfg.storage.base_upload_dir == "uploads/presentations"
        assert cfg.storage.error_log_path == "logs/file-storage-errors.log"
        assert cfg.storage.project_root is None
        assert cfg.logging.level == "info"
        assert cfg.server.port == 8000

    def test_missing_settings_file_yields_defaults(self, tmp_path):
        cfg = load_config(settings_path=tmp_path / "absent.yaml")
        assert cfg == AppConfig()


class TestBaseUploadDirValidation:
    """base_upload_dir must be a clean relative path."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("uploads/presentations", "uploads/presentations"),
            ("uploads\\presentations\\", "uploads/presentations"),
            ("./uploads//presentations/", "uploads/presentations"),
            ("  files  ", "files"),
        ],
    )
    def test_normalised(self, value, expected):
        assert StorageSettings(base_upload_dir=value).base_upload_dir == expected

    @pytest.mark.parametrize(
        "value",
        ["/srv/uploads", "C:\\uploads", "\\\\server\\share", "", "./", "../outside", "uploads/../../x"],
    )
    def test_rejected(self, value):
        with pytest.raises(ValidationError):
            StorageSettings(base_upload_dir=value)


class TestLoadConfig:
    """Tests for YAML loading."""

    def test_values_from_yaml(self, tmp_path):
        settings_file = tmp_path / "storage.settings.yaml"
        settings_file.write_text(
            "server:\n"
            "  port: 9100\n"
            "logging:\n"
            "  level: debug\n"
            "storage:\n"
            "  base_upload_dir: data/presentations\n"
            "  error_log_path: var/log/storage-errors.log\n",
            encoding="utf-8",
        )

        cfg = load_config(settings_path=settings_file)

        assert cfg.server.port == 9100
        assert cfg.logging.level == "debug"
        assert cfg.storage.base_upload_dir == "data/presentations"
        assert cfg.storage.error_log_path == "var/log/storage-errors.log"

    def test_relative_project_root_resolves_from_settings_dir(self, tmp_path):
        config_dir = tmp_path / "config"
        config_dir.mkdir()
        settings_file = config_dir / "storage.settings.yaml"
        settings_file.write_text("storage:\n  project_root: ..\n", encoding="utf-8")

        cfg = load_config(settings_path=settings_file)

        assert Path(cfg.storage.project_root).resolve() == tmp_path.resolve()

    def test_absolute_project_root_unchanged(self, tmp_path):
        settings_file = tmp_path / "storage.settings.yaml"
        settings_file.write_text(f"storage:\n  project_root: {tmp_path}\n", encoding="utf-8")

        cfg = load_config(settings_path=settings_file)

        assert cfg.storage.project_root == str(tmp_path)

    def test_empty_yaml_file(self, tmp_path):
        settings_file = tmp_path / "storage.settings.yaml"
        settings_file.write_text("", encoding="utf-8")
        assert load_config(settings_path=settings_file) == AppConfig()

    def test_env_var_selects_settings_file(self, tmp_path, monkeypatch):
        settings_file = tmp_path / "custom.yaml"
        settings_file.write_text("server:\n  port: 8123\n", encoding="utf-8")
        monkeypatch.setenv(SETTINGS_ENV_VAR, str(settings_file))

        assert load_config().server.port == 8123


class TestGetConfig:
    def test_cached_until_reset(self, tmp_path, monkeypatch):
        monkeypatch.setenv(SETTINGS_ENV_VAR, str(tmp_path / "absent.yaml"))

        first = get_config()
        assert get_config() is first

        reset_config()
        assert config_module._config is None
        assert get_config() is not first
