"""Seminar storage configuration.

Loads settings from a single YAML file:
  * storage.settings.yaml: non-secret configuration

The file location can be overridden with the SEMINAR_STORAGE_SETTINGS
environment variable. A missing file yields the defaults below.
"""
from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import BaseModel, Field, field_validator

from seminar_storage.presentations.paths import is_absolute_path, normalize_separators

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

SETTINGS_FILE = Path("storage.settings.yaml")
SETTINGS_ENV_VAR = "SEMINAR_STORAGE_SETTINGS"


def _load_yaml(path: Path) -> Dict[str, Any]:
    if not path.exists():
        logger.warning("Config file not found: %s", path)
        return {}
    with path.open(encoding="utf-8") as fh:
        return yaml.safe_load(fh) or {}


# ---------------------------------------------------------------------------
# Settings models
# ---------------------------------------------------------------------------


class ServerSettings(BaseModel):
    host:  str = "0.0.0.0"
    port:  int = 8000


class LoggingSettings(BaseModel):
    level: str = "info"


class StorageSettings(BaseModel):
    """Where presenter files and the error log live.

    ``project_root`` is the directory both other paths are relative to; when
    unset the process working directory is used.
    """
    project_root:    Optional[str] = None
    base_upload_dir: str           = "uploads/presentations"
    error_log_path:  str           = "logs/file-storage-errors.log"

    @field_validator("base_upload_dir")
    @classmethod
    def _check_base_upload_dir(cls, value: str) -> str:
        value = value.strip()
        if is_absolute_path(value):
            raise ValueError("base_upload_dir must be relative to project_root")
        segments = [s for s in normalize_separators(value).split("/") if s and s != "."]
        if not segments:
            raise ValueError("base_upload_dir must not be empty")
        if ".." in segments:
            raise ValueError("base_upload_dir must stay inside project_root")
        return "/".join(segments)


class AppConfig(BaseModel):
    server:  ServerSettings  = Field(default_factory=ServerSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    storage: StorageSettings = Field(default_factory=StorageSettings)


# ---------------------------------------------------------------------------
# Public loader
# ---------------------------------------------------------------------------


def load_config(settings_path: Optional[Path] = None) -> AppConfig:
    """Load the YAML settings file into an *AppConfig*.

    A relative ``storage.project_root`` is resolved from the directory of the
    settings file.
    """
    if settings_path is None:
        settings_path = Path(os.environ.get(SETTINGS_ENV_VAR, SETTINGS_FILE))
    settings_path = Path(settings_path)

    config = AppConfig(**_load_yaml(settings_path))

    project_root = config.storage.project_root
    if project_root and not Path(project_root).is_absolute():
        config.storage.project_root = str((settings_path.parent / project_root).absolute())

    logger.info(
        "Settings loaded (server=%s:%s, base_upload_dir=%s, error_log=%s)",
        config.server.host,
        config.server.port,
        config.storage.base_upload_dir,
        config.storage.error_log_path,
    )
    return config


_config: Optional[AppConfig] = None


def get_config() -> AppConfig:
    """Return the process-wide config, loading it on first use."""
    global _config
    if _config is None:
        _config = load_config()
    return _config


def reset_config() -> None:
    """Forget the cached config (for testing)."""
    global _config
    _config = None
