# Author: PB & Claude
# Maintainer: PB
# Original date: 2026.10.17
# License: (c) HRDAG, 2025, GPL-2 or newer
#
# ------
# src/dotfiles/config/manager.py

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional, Final

import yaml
from loguru import logger
from pydantic import BaseModel, PrivateAttr, ValidationError

from dotfiles.system.exceptions import ConfigError


# ---- Constants ----

CONFIG_FILE: Final = "dotfiles.yml"
CONFIG_DIR_NAME: Final = "dotfiles"


def get_config_path() -> Path:
    """Locate the configuration file.

    Evaluated on every call so environment overrides set by tests or by the
    user's shell are honored.
    """
    explicit = os.getenv("DOTFILES_CONFIG_HOME")
    if explicit:
        return Path(explicit) / CONFIG_FILE
    xdg_config = os.getenv("XDG_CONFIG_HOME")
    if xdg_config:
        return Path(xdg_config) / CONFIG_DIR_NAME / CONFIG_FILE
    return Path.home() / ".config" / CONFIG_DIR_NAME / CONFIG_FILE


# ---- Config Model ----

class DotfilesConfig(BaseModel):
    """Persisted dotfiles settings.

    Only ``git_dir`` is written by ``init`` and ``clone``; ``local_log`` is
    an optional, hand-edited setting enabling a debug log file.
    """
    git_dir: Optional[Path] = None
    local_log: Optional[Path] = None

    _path: Optional[Path] = PrivateAttr(default=None)

    @property
    def path(self) -> Path:
        return self._path or get_config_path()

    @classmethod
    def load(cls, config_path: Path | None = None) -> DotfilesConfig:
        """Load the configuration, returning an empty one if no file exists."""
        config_path = config_path or get_config_path()
        if not config_path.exists():
            logger.debug(f"No config at {config_path}")
            config = cls()
        else:
            try:
                with config_path.open("r", encoding="utf-8") as f:
                    data = yaml.safe_load(f) or {}
            except (OSError, yaml.YAMLError) as e:
                raise ConfigError(f"Cannot read {config_path}: {e}") from e
            if not isinstance(data, dict):
                raise ConfigError(f"Malformed configuration in {config_path}")
            try:
                config = cls.model_validate(data)
            except ValidationError as e:
                raise ConfigError(f"Invalid configuration in {config_path}: {e}") from e
            logger.debug(f"Loaded config from {config_path}")
        config._path = config_path
        return config

    def save(self, config_path: Path | None = None) -> Path:
        """Write the configuration, creating its directory if needed."""
        config_path = config_path or self.path
        data = {"git_dir": str(self.git_dir) if self.git_dir else None}
        if self.local_log:
            data["local_log"] = str(self.local_log)
        try:
            config_path.parent.mkdir(parents=True, exist_ok=True)
            with config_path.open("w", encoding="utf-8") as f:
                yaml.safe_dump(data, f, default_flow_style=False, sort_keys=False)
        except OSError as e:
            raise ConfigError(f"Cannot write {config_path}: {e}") from e
        self._path = config_path
        logger.debug(f"Saved config to {config_path}")
        return config_path

    def require_git_dir(self) -> Path:
        """Return the metadata directory or fail if none was configured."""
        if self.git_dir is None:
            raise ConfigError(
                f"No dotfiles repository configured in {self.path}. "
                "Run 'dotfiles init' or 'dotfiles clone' first"
            )
        return self.git_dir
