"""Remote deployment helpers."""

from .scp import (
    DeployError,
    create_remote_directory,
    deploy,
    is_home_relative,
    resolve_remote_dest,
)

__all__ = [
    "deploy",
    "DeployError",
    "create_remote_directory",
    "resolve_remote_dest",
    "is_home_relative",
]
