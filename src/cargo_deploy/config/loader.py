"""Read, create and update the JSON deploy configuration."""

from __future__ import annotations

import dataclasses
import json
import logging
from pathlib import Path
from typing import Callable

from .models import ConfigCreated, ConfigError, DeployConfig

LOGGER = logging.getLogger(__name__)

PromptFn = Callable[[str], str]


def load_or_create(path: str | Path) -> DeployConfig:
    """Load the deploy configuration, writing a default one if absent.

    Args:
        path: Filesystem path of ``cargo_deploy.json``.

    Returns:
        DeployConfig: Parsed and validated configuration.

    Raises:
        ConfigCreated: If the file did not exist; a default was written and the
            operator must edit it before the next run.
        ConfigError: When the file cannot be read, is not valid JSON, or holds
            invalid values.
    """
    config_path = Path(path)
    if not config_path.exists():
        save_config(config_path, DeployConfig.default())
        raise ConfigCreated(
            f"Created default {config_path}; set target_name and target_user, then run again"
        )

    try:
        with config_path.open("r", encoding="utf-8") as handle:
            raw = json.load(handle)
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Invalid JSON in {config_path}: {exc}") from exc
    except OSError as exc:
        raise ConfigError(f"Failed to read {config_path}: {exc}") from exc

    if not isinstance(raw, dict):
        raise ConfigError(f"{config_path} must contain a JSON object")
    return DeployConfig.from_mapping(raw, source=str(config_path))


def save_config(path: str | Path, config: DeployConfig) -> None:
    """Write ``config`` to ``path`` as pretty-printed JSON."""
    config_path = Path(path)
    try:
        with config_path.open("w", encoding="utf-8") as handle:
            json.dump(config.to_dict(), handle, indent=2)
            handle.write("\n")
    except OSError as exc:
        raise ConfigError(f"Failed to write {config_path}: {exc}") from exc
    LOGGER.debug("Saved configuration to %s", config_path)


def complete_config(
    path: str | Path,
    config: DeployConfig,
    prompt: PromptFn = input,
) -> DeployConfig:
    """Ask for missing connection fields and persist the answers.

    Args:
        path: Configuration file to update when answers were collected.
        config: Configuration loaded by :func:`load_or_create`.
        prompt: Callable used to ask the operator; defaults to :func:`input`.

    Returns:
        DeployConfig: A configuration with host and user populated.

    Raises:
        ConfigError: If the file still holds default placeholder values or
            the operator leaves a field empty.
    """
    placeholders = config.placeholder_fields()
    if placeholders:
        raise ConfigError(
            f"Edit {path} and replace the placeholder value of {', '.join(placeholders)}"
        )

    missing = config.missing_fields()
    if not missing:
        return config

    labels = {"target_name": "Enter remote hostname/IP : ", "target_user": "Enter remote username : "}
    answers: dict[str, str] = {}
    for name in missing:
        answer = prompt(labels[name]).strip()
        if not answer:
            raise ConfigError(f"A value for {name} is required")
        answers[name] = answer

    updated = dataclasses.replace(config, **answers)
    save_config(path, updated)
    return updated
