"""Runtime settings for formik-migrate.

Settings come from a YAML file (``config/formik_migrate.yaml`` by default,
or the path in ``$FORMIK_MIGRATE_CONFIG``) validated into a pydantic
model. Every field has a default, so running without a config file works.
"""

import logging
import os
from functools import lru_cache
from pathlib import Path
from typing import List, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from .core.ast_parser.utils import DEFAULT_EXTENSIONS, SKIP_DIRECTORIES

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "FORMIK_MIGRATE_CONFIG"
DEFAULT_CONFIG_PATH = Path(__file__).parent.parent / "config" / "formik_migrate.yaml"


class ConfigError(ValueError):
    """Raised when a config file exists but cannot be used."""


class Settings(BaseModel):
    """Discovery and conversion settings."""

    extensions: List[str] = Field(
        default_factory=lambda: list(DEFAULT_EXTENSIONS),
        description="File extensions scanned during discovery",
    )
    skip_directories: List[str] = Field(
        default_factory=lambda: sorted(SKIP_DIRECTORIES),
        description="Directory names never descended into",
    )
    max_workers: int = Field(4, ge=1, le=64, description="Worker threads for analysis and conversion")
    retain_lines: bool = Field(True, description="Keep original line numbers in converted files")
    backup_suffix: str = Field(".backup", min_length=1, description="Suffix for backup copies")
    log_level: str = Field("INFO", description="Default logging level")

    @field_validator("extensions")
    @classmethod
    def _normalise_extensions(cls, value: List[str]) -> List[str]:
        return [ext.lower() if ext.startswith(".") else f".{ext.lower()}" for ext in value]

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR"):
            raise ValueError(f"Unknown log level: {value}")
        return level


def load_settings(path: Optional[str] = None) -> Settings:
    """Load settings from YAML.

    Args:
        path: Explicit config file. Falls back to ``$FORMIK_MIGRATE_CONFIG``,
            then the bundled ``config/formik_migrate.yaml``.

    Returns:
        Validated Settings; defaults when no config file is found

    Raises:
        ConfigError: If the file cannot be parsed or fails validation
    """
    config_path = Path(path or os.getenv(CONFIG_ENV_VAR) or DEFAULT_CONFIG_PATH)

    if not config_path.exists():
        if path:
            logger.warning(f"Config file not found at {config_path}, using defaults")
        return Settings()

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"Cannot read config {config_path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Config {config_path} must be a mapping")

    try:
        settings = Settings(**data)
    except ValidationError as e:
        raise ConfigError(f"Invalid config {config_path}: {e}") from e

    logger.debug(f"Loaded settings from {config_path}")
    return settings


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Process-wide settings, loaded once."""
    return load_settings()
