"""Invoke ``cross`` and locate the resulting binary."""

from __future__ import annotations

import enum
import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

from cargo_deploy.process.base import CommandError, CommandRunner, ToolNotFoundError

LOGGER = logging.getLogger(__name__)

CROSS_PROGRAM = "cross"
CONTAINER_ENGINES = ("docker", "podman")
CONTAINER_ENGINE_ENV = "CROSS_CONTAINER_ENGINE"


class BuildError(CommandError):
    """Raised when the build output cannot be located from cargo metadata."""


class BuildProfile(enum.Enum):
    """Cargo build profile; the value is the output directory name."""

    DEBUG = "debug"
    RELEASE = "release"

    @classmethod
    def from_flag(cls, debug: bool) -> "BuildProfile":
        """Release unless the debug flag was given."""
        return cls.DEBUG if debug else cls.RELEASE

    @property
    def directory(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class CargoMetadata:
    """Subset of ``cargo metadata`` needed to find the artifact."""

    bin_name: str
    target_directory: Path


def artifact_path(
    target_directory: str | Path,
    target_arch: str,
    profile: BuildProfile,
    bin_name: str,
) -> Path:
    """Return ``<target_directory>/<triple>/<profile>/<bin_name>``."""
    return Path(target_directory) / target_arch / profile.directory / bin_name


def find_container_engine(runner: CommandRunner, env: Mapping[str, str] | None = None) -> str:
    """Return the container engine ``cross`` will use.

    Honours ``$CROSS_CONTAINER_ENGINE`` like ``cross`` itself, otherwise
    prefers docker over podman.

    Raises:
        ToolNotFoundError: If no engine is installed.
    """
    environ = os.environ if env is None else env
    requested = environ.get(CONTAINER_ENGINE_ENV)
    candidates = (requested,) if requested else CONTAINER_ENGINES
    for engine in candidates:
        if runner.which(engine):
            return engine
    raise ToolNotFoundError(
        f"No container engine found (looked for {', '.join(candidates)}); "
        "cross needs docker or podman to build"
    )


def preflight(runner: CommandRunner, env: Mapping[str, str] | None = None) -> str:
    """Check ``cross`` and a container engine are installed.

    Returns:
        str: The container engine that will be used.
    """
    if not runner.which(CROSS_PROGRAM):
        raise ToolNotFoundError(
            f"'{CROSS_PROGRAM}' was not found; install it with 'cargo install cross'"
        )
    engine = find_container_engine(runner, env)
    LOGGER.debug("Using container engine %s", engine)
    return engine


def read_metadata(runner: CommandRunner, project_dir: str | Path = ".") -> CargoMetadata:
    """Query ``cargo metadata`` for the binary name and target directory.

    Raises:
        CommandError: If ``cargo`` is missing or fails.
        BuildError: When the output has no root package or binary target.
    """
    project = Path(project_dir).resolve()
    result = runner.run(
        ["cargo", "metadata", "--format-version", "1", "--no-deps"],
        cwd=str(project),
        capture=True,
    ).check("Failed to get cargo metadata")
    try:
        payload = json.loads(result.stdout)
    except json.JSONDecodeError as exc:
        raise BuildError(f"cargo metadata returned invalid JSON: {exc}") from exc
    package = _root_package(payload, project)
    bin_name = _binary_target(package)
    target_directory = payload.get("target_directory") or str(project / "target")
    return CargoMetadata(bin_name=bin_name, target_directory=Path(target_directory))


def _root_package(payload: Mapping[str, Any], project: Path) -> Mapping[str, Any]:
    packages = payload.get("packages") or []
    manifest = project / "Cargo.toml"
    for package in packages:
        if Path(package.get("manifest_path", "")).resolve() == manifest:
            return package
    if len(packages) == 1:
        return packages[0]
    raise BuildError(f"No root package found for {manifest}")


def _binary_target(package: Mapping[str, Any]) -> str:
    for target in package.get("targets") or []:
        if "bin" in (target.get("kind") or []):
            return str(target["name"])
    raise BuildError(f"No binary target found in package '{package.get('name')}'")


def build(
    runner: CommandRunner,
    target_arch: str,
    profile: BuildProfile,
    project_dir: str | Path = ".",
) -> Path:
    """Cross compile the project and return the artifact path.

    The compiler inherits the terminal so its diagnostics reach the operator
    unchanged; they are not parsed.

    Args:
        runner: Runner used for ``cross`` and ``cargo``.
        target_arch: Target triple passed to ``--target``.
        profile: Debug or release build.
        project_dir: Directory containing ``Cargo.toml``.

    Returns:
        Path: Conventional location of the compiled binary.

    Raises:
        CommandError: If tooling is missing or the build fails.
    """
    preflight(runner)
    LOGGER.info("Building (%s) for %s...", profile.value, target_arch)
    args = [CROSS_PROGRAM, "build", "--target", target_arch]
    if profile is BuildProfile.RELEASE:
        args.append("--release")
    runner.run(args, cwd=str(project_dir)).check("Build failed")

    metadata = read_metadata(runner, project_dir)
    path = artifact_path(metadata.target_directory, target_arch, profile, metadata.bin_name)
    LOGGER.debug("Build artifact: %s", path)
    return path
