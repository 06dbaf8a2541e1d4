"""Cross-compilation helpers."""

from .cross import (
    BuildError,
    BuildProfile,
    CargoMetadata,
    artifact_path,
    build,
    find_container_engine,
    preflight,
    read_metadata,
)

__all__ = [
    "BuildProfile",
    "BuildError",
    "CargoMetadata",
    "build",
    "artifact_path",
    "read_metadata",
    "preflight",
    "find_container_engine",
]
