"""
Configuration loader — reads the pacbridge config file into a Config.

The file is optional.  It is looked up at ``$PACBRIDGE_CONFIG`` and
falls back to ``~/.config/pacbridge/config.yml``.  A missing file means
defaults; anything present but broken is a ``ConfigError``.

Example::

    default_pm: apt
    dry_run: false
    no_confirm: true
    needed: true
    no_cache: false
    elevation_cmd: sudo
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from pacbridge.core.errors import ConfigError

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "PACBRIDGE_CONFIG"
DEFAULT_CONFIG_FILE = Path("~/.config/pacbridge/config.yml")

__all__ = ["Config", "ConfigError", "config_path", "load_config"]


class Config(BaseModel):
    """Resolved configuration for a single command invocation.

    The engine reads it and never mutates it; every manager instance
    holds one by reference.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    default_pm: str | None = None
    dry_run: bool = False
    no_confirm: bool = False
    needed: bool = False
    no_cache: bool = False
    elevation_cmd: str = "sudo"

    @field_validator("default_pm")
    @classmethod
    def _blank_pm_is_none(cls, v: str | None) -> str | None:
        if v is None:
            return None
        return v.strip() or None

    @field_validator("elevation_cmd")
    @classmethod
    def _elevation_not_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("elevation_cmd must not be empty")
        return v.strip()

    def join(self, other: Config) -> Config:
        """Merge ``other`` underneath this config.

        Boolean switches are OR'd.  ``default_pm`` and ``elevation_cmd``
        keep this config's value when it differs from the default.
        """
        return Config(
            default_pm=self.default_pm or other.default_pm,
            dry_run=self.dry_run or other.dry_run,
            no_confirm=self.no_confirm or other.no_confirm,
            needed=self.needed or other.needed,
            no_cache=self.no_cache or other.no_cache,
            elevation_cmd=(
                self.elevation_cmd if self.elevation_cmd != "sudo" else other.elevation_cmd
            ),
        )


def config_path() -> Path:
    """Where the config file is expected to live."""
    env = os.environ.get(CONFIG_ENV_VAR)
    if env:
        return Path(env).expanduser()
    return DEFAULT_CONFIG_FILE.expanduser()


def load_config(path: Path | None = None) -> Config:
    """Load and validate the config file.

    Args:
        path: Explicit path. If None, uses ``config_path()``.

    Returns:
        Validated Config (defaults when the file does not exist).

    Raises:
        ConfigError: If the file exists but is unreadable or invalid.
    """
    explicit = path is not None
    path = path if path is not None else config_path()

    if not path.exists():
        if explicit:
            raise ConfigError(f"Config file not found: {path}")
        logger.debug("No config file at %s, using defaults", path)
        return Config()

    if not path.is_file():
        raise ConfigError(f"Config path is not a file: {path}")

    logger.debug("Loading config from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        return Config()

    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    try:
        cfg = Config.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration in {path}: {e}") from e

    logger.info("Loaded config from %s (default_pm=%s)", path, cfg.default_pm)
    return cfg
