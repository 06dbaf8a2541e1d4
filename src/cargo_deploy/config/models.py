"""Configuration model for the deploy target.

The model is a short-lived value: it is loaded once per run, passed explicitly
to each step and replaced (never mutated) when a field is resolved.
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from typing import Any, Mapping

LOGGER = logging.getLogger(__name__)

CONFIG_FILENAME = "cargo_deploy.json"
SUPPORTED_ARCH = "aarch64-unknown-linux-gnu"
DEFAULT_DEST = "~/bin"
PLACEHOLDER_HOST = "<hostname>"
PLACEHOLDER_USER = "<username>"

FIELDS = ("target_arch", "target_dest", "target_name", "target_user")


class ConfigError(RuntimeError):
    """Raised when the configuration file is missing fields or malformed."""


class ConfigCreated(ConfigError):
    """Raised after a default configuration was written for the operator to edit."""


def is_placeholder(value: str | None) -> bool:
    """Return ``True`` for unedited ``<...>`` values from the default file."""
    return bool(value) and value.startswith("<") and value.endswith(">")


@dataclass(frozen=True, slots=True)
class DeployConfig:
    """Deploy target description stored in ``cargo_deploy.json``.

    Attributes:
        target_arch: Target triple used for cross compiling.
        target_dest: Remote directory receiving the executable. A leading
            ``~`` is resolved against the remote home directory on deploy.
        target_name: Hostname or IP address of the remote device.
        target_user: Login user on the remote device.
    """

    target_arch: str = SUPPORTED_ARCH
    target_dest: str = DEFAULT_DEST
    target_name: str | None = None
    target_user: str | None = None

    @classmethod
    def default(cls) -> "DeployConfig":
        """Return the configuration written on first run."""
        return cls(target_name=PLACEHOLDER_HOST, target_user=PLACEHOLDER_USER)

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any], source: str = CONFIG_FILENAME) -> "DeployConfig":
        """Build a config from parsed JSON, applying defaults for null fields.

        Raises:
            ConfigError: If a field has the wrong type or the architecture is
                not supported.
        """
        unknown = sorted(set(payload) - set(FIELDS))
        if unknown:
            LOGGER.warning("Ignoring unknown keys in %s: %s", source, ", ".join(unknown))
        values: dict[str, str | None] = {}
        for name in FIELDS:
            value = payload.get(name)
            if value is not None and not isinstance(value, str):
                raise ConfigError(f"'{name}' in {source} must be a string, got {type(value).__name__}")
            values[name] = value.strip() if isinstance(value, str) else None

        config = cls(
            target_arch=values["target_arch"] or SUPPORTED_ARCH,
            target_dest=values["target_dest"] or DEFAULT_DEST,
            target_name=values["target_name"] or None,
            target_user=values["target_user"] or None,
        )
        config.validate(source)
        return config

    def validate(self, source: str = CONFIG_FILENAME) -> None:
        """Ensure the architecture is the single supported target."""
        if self.target_arch != SUPPORTED_ARCH:
            raise ConfigError(
                f"Unsupported target_arch '{self.target_arch}' in {source}; "
                f"only '{SUPPORTED_ARCH}' is supported"
            )

    def missing_fields(self) -> tuple[str, ...]:
        """Return the connection fields that still need a value."""
        return tuple(
            name for name in ("target_name", "target_user") if not getattr(self, name)
        )

    def placeholder_fields(self) -> tuple[str, ...]:
        """Return fields still holding the ``<...>`` values of the default file."""
        return tuple(name for name in FIELDS if is_placeholder(getattr(self, name)))

    @property
    def connection(self) -> str:
        """Return the ``user@host`` string used by ssh and scp."""
        return f"{self.target_user}@{self.target_name}"

    def to_dict(self) -> dict[str, str | None]:
        """Return a JSON-serialisable mapping with keys in file order."""
        return asdict(self)
