"""Convenience exports for loading and persisting the deploy configuration."""

from __future__ import annotations

from .loader import complete_config, load_or_create, save_config
from .models import (
    CONFIG_FILENAME,
    DEFAULT_DEST,
    SUPPORTED_ARCH,
    ConfigCreated,
    ConfigError,
    DeployConfig,
)

__all__ = [
    "load_or_create",
    "save_config",
    "complete_config",
    "DeployConfig",
    "ConfigError",
    "ConfigCreated",
    "CONFIG_FILENAME",
    "SUPPORTED_ARCH",
    "DEFAULT_DEST",
]
