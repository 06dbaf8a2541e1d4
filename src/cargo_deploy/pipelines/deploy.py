"""Deploy pipeline sequencing config, provisioning, build and upload."""

from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass
from pathlib import Path

from ..build.cross import BuildProfile, build
from ..config.loader import PromptFn, complete_config, load_or_create, save_config
from ..config.models import DeployConfig
from ..deploy.scp import create_remote_directory, deploy, resolve_remote_dest
from ..process.base import CommandRunner
from ..process.subprocess_runner import SubprocessRunner
from ..ssh.provisioner import KeyPath, ensure_key

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class DeployReport:
    """Summary of a successful deployment."""

    config: DeployConfig
    profile: BuildProfile
    key: KeyPath
    artifact: Path
    destination: str


def run_deploy(
    config_path: str | Path,
    profile: BuildProfile = BuildProfile.RELEASE,
    *,
    runner: CommandRunner | None = None,
    project_dir: str | Path = ".",
    ssh_dir: Path | None = None,
    prompt: PromptFn = input,
) -> DeployReport:
    """Load config, ensure the SSH key, build and deploy.

    Each step runs to completion before the next starts and the first failure
    propagates unchanged. Nothing is rolled back: a failed upload leaves the
    built artifact in place for a manual retry.

    Args:
        config_path: Location of ``cargo_deploy.json``.
        profile: Build profile to compile and deploy.
        runner: Process runner; defaults to :class:`SubprocessRunner`.
        project_dir: Cargo project directory.
        ssh_dir: Directory for the target key; defaults to ``~/.ssh``.
        prompt: Callable used to ask for missing host or user.

    Returns:
        DeployReport: What was built and where it was copied.

    Raises:
        ConfigError: When the configuration was just created or is invalid.
        CommandError: When any external step fails.
    """
    runner = runner or SubprocessRunner()

    config = load_or_create(config_path)
    config = complete_config(config_path, config, prompt=prompt)
    user = str(config.target_user)
    host = str(config.target_name)

    key = ensure_key(runner, user, host, ssh_dir=ssh_dir)
    artifact = build(runner, config.target_arch, profile, project_dir=project_dir)

    destination = resolve_remote_dest(runner, user, host, config.target_dest, key=key.private)
    create_remote_directory(runner, user, host, destination, key=key.private)
    deploy(runner, artifact, user, host, destination, key=key.private)

    if destination != config.target_dest:
        config = dataclasses.replace(config, target_dest=destination)
        save_config(config_path, config)
        LOGGER.info("Saved resolved destination %s to %s", destination, config_path)

    LOGGER.info("Deployment complete.")
    return DeployReport(
        config=config,
        profile=profile,
        key=key,
        artifact=artifact,
        destination=destination,
    )
