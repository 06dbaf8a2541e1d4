"""Per-target SSH key generation and installation."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from pathlib import Path

from cargo_deploy import PACKAGE_NAME, __version__
from cargo_deploy.process.base import CommandRunner

LOGGER = logging.getLogger(__name__)

KEY_TYPE = "ed25519"
CONNECT_TIMEOUT_S = 5

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]")
_UNDERSCORE_RUNS = re.compile(r"_{2,}")


@dataclass(frozen=True, slots=True)
class KeyPath:
    """Location of a target's SSH keypair and what provisioning did.

    Attributes:
        private: Private key file passed to ``ssh -i``.
        generated: The keypair was created during this run.
        installed: ``ssh-copy-id`` ran during this run.
    """

    private: Path
    generated: bool = False
    installed: bool = False

    @property
    def public(self) -> Path:
        """Return the matching ``.pub`` file."""
        return self.private.with_name(self.private.name + ".pub")


def sanitize_component(value: str) -> str:
    """Make ``value`` safe for use inside a key file name.

    Characters other than letters, digits, ``.``, ``_`` and ``-`` become
    underscores; runs of underscores collapse and edge underscores are trimmed,
    so hostnames such as ``raspberrypi.local`` are kept verbatim.
    """
    sanitized = _UNDERSCORE_RUNS.sub("_", _UNSAFE_CHARS.sub("_", value))
    return sanitized.strip("_")


def default_ssh_dir() -> Path:
    """Return ``~/.ssh`` for the local user."""
    return Path.home() / ".ssh"


def key_path_for(user: str, host: str, ssh_dir: Path | None = None) -> Path:
    """Return the deterministic private key path for ``user@host``."""
    directory = ssh_dir if ssh_dir is not None else default_ssh_dir()
    return directory / f"id_{KEY_TYPE}_{sanitize_component(user)}_{sanitize_component(host)}"


def identity_args(key: Path | None) -> list[str]:
    """Return the ``-i`` arguments that select ``key`` for ssh and scp."""
    if key is None:
        return []
    return ["-i", str(key), "-o", "IdentitiesOnly=yes"]


def check_key_authorized(runner: CommandRunner, user: str, host: str, key: Path) -> bool:
    """Check whether ``key`` allows a non-interactive login to ``user@host``."""
    result = runner.run(
        [
            "ssh",
            *identity_args(key),
            "-o",
            "BatchMode=yes",
            "-o",
            f"ConnectTimeout={CONNECT_TIMEOUT_S}",
            f"{user}@{host}",
            "true",
        ],
        capture=True,
    )
    return result.ok


def generate_key(runner: CommandRunner, key: Path) -> None:
    """Create a passphrase-less keypair at ``key``.

    Raises:
        CommandError: If ``ssh-keygen`` is missing or fails.
    """
    key.parent.mkdir(mode=0o700, parents=True, exist_ok=True)
    comment = f"Key generated by {PACKAGE_NAME}, Version: {__version__}"
    runner.run(
        ["ssh-keygen", "-t", KEY_TYPE, "-f", str(key), "-N", "", "-C", comment]
    ).check("SSH key generation failed")
    LOGGER.info("Generated SSH key %s", key)


def install_key(runner: CommandRunner, user: str, host: str, key: Path) -> None:
    """Install the public half of ``key`` in the remote ``authorized_keys``.

    ``ssh-copy-id`` may prompt for the remote password; the prompt is handled
    by the external program on the operator's terminal.

    Raises:
        CommandError: If ``ssh-copy-id`` is missing or fails.
    """
    runner.run(["ssh-copy-id", "-i", str(key), f"{user}@{host}"]).check(
        f"Installing SSH key on {host} failed"
    )
    LOGGER.info("Installed SSH key on %s@%s", user, host)


def ensure_key(
    runner: CommandRunner,
    user: str,
    host: str,
    ssh_dir: Path | None = None,
) -> KeyPath:
    """Make sure a dedicated key for ``user@host`` exists and is authorised.

    An existing key is never regenerated. It is checked with a read-only
    BatchMode login; only when that fails is ``ssh-copy-id`` run again, which
    recovers a key whose earlier installation was interrupted or revoked.

    Args:
        runner: Runner used for ssh tooling.
        user: Remote login user.
        host: Remote hostname or IP address.
        ssh_dir: Directory holding the key; defaults to ``~/.ssh``.

    Returns:
        KeyPath: The key location plus what this call had to do.

    Raises:
        CommandError: If key generation or installation fails.
    """
    key = key_path_for(user, host, ssh_dir)
    if key.exists():
        LOGGER.debug("Using existing SSH key %s", key)
        if check_key_authorized(runner, user, host, key):
            return KeyPath(private=key)
        LOGGER.info("SSH key %s is not authorised on %s@%s", key, user, host)
        install_key(runner, user, host, key)
        return KeyPath(private=key, installed=True)

    LOGGER.info("No SSH key found for %s@%s. Generating one...", user, host)
    generate_key(runner, key)
    install_key(runner, user, host, key)
    return KeyPath(private=key, generated=True, installed=True)
