"""Public process-invocation interfaces exposed by :mod:`cargo_deploy`."""

from .base import (
    CommandError,
    CommandFailedError,
    CommandResult,
    CommandRunner,
    CommandStatus,
    ToolNotFoundError,
)
from .mock import MockRunner
from .subprocess_runner import SubprocessRunner

__all__ = [
    "CommandRunner",
    "CommandResult",
    "CommandStatus",
    "CommandError",
    "CommandFailedError",
    "ToolNotFoundError",
    "MockRunner",
    "SubprocessRunner",
]
