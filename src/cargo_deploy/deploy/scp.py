"""Copy the build artifact to the remote device."""

from __future__ import annotations

import logging
import posixpath
import shlex
from pathlib import Path

from cargo_deploy.process.base import CommandError, CommandFailedError, CommandRunner
from cargo_deploy.ssh.provisioner import identity_args

LOGGER = logging.getLogger(__name__)


class DeployError(CommandError):
    """Raised when the artifact cannot be deployed."""


def is_home_relative(dest: str) -> bool:
    """Return ``True`` for ``~`` and ``~/...`` destinations."""
    return dest == "~" or dest.startswith("~/")


def resolve_remote_dest(
    runner: CommandRunner,
    user: str,
    host: str,
    dest: str,
    key: Path | None = None,
) -> str:
    """Substitute the remote home directory for a leading ``~``.

    Absolute destinations are returned unchanged without contacting the host.

    Raises:
        CommandError: If the remote home directory cannot be read.
    """
    if not is_home_relative(dest):
        return dest
    result = runner.run(
        ["ssh", *identity_args(key), f"{user}@{host}", 'printf %s "$HOME"'],
        capture=True,
    ).check(f"Reading the home directory of {user} on {host} failed")
    home = result.stdout.strip()
    if not home:
        raise CommandFailedError(f"{host} reported an empty home directory for {user}", result=result)
    resolved = posixpath.join(home, dest[2:]) if dest != "~" else home
    LOGGER.info("Resolved remote destination %s to %s", dest, resolved)
    return resolved.rstrip("/") or "/"


def create_remote_directory(
    runner: CommandRunner,
    user: str,
    host: str,
    dest: str,
    key: Path | None = None,
) -> None:
    """Run ``mkdir -p`` for ``dest`` on the remote device."""
    runner.run(
        ["ssh", *identity_args(key), f"{user}@{host}", f"mkdir -p {shlex.quote(dest)}"]
    ).check(f"Failed to create remote directory {dest}")


def deploy(
    runner: CommandRunner,
    artifact: Path,
    user: str,
    host: str,
    dest: str,
    key: Path | None = None,
) -> None:
    """Copy ``artifact`` into the remote ``dest`` directory with scp.

    Args:
        runner: Runner used for scp.
        artifact: Local binary produced by the build.
        user: Remote login user.
        host: Remote hostname or IP address.
        dest: Remote directory; must already exist.
        key: Optional private key passed to scp.

    Raises:
        DeployError: If the artifact does not exist locally.
        CommandError: If scp is missing or the transfer fails.
    """
    if not artifact.is_file():
        raise DeployError(f"Build artifact not found: {artifact}")
    connection = f"{user}@{host}"
    LOGGER.info("Uploading to %s:%s...", connection, dest)
    remote = f"{connection}:{dest.rstrip('/')}/"
    runner.run(["scp", *identity_args(key), str(artifact), remote], quiet=True).check(
        f"SCP file transfer failed. Check your connection to {host}"
    )
