"""Result types and runner interface for external tool invocations."""

from __future__ import annotations

import abc
import enum
import logging
import shlex
from dataclasses import dataclass
from typing import Sequence

LOGGER = logging.getLogger(__name__)


class CommandStatus(enum.Enum):
    """Outcome of a single external process invocation."""

    SUCCESS = "success"
    NOT_FOUND = "not_found"
    FAILED = "failed"


class CommandError(RuntimeError):
    """Raised when an external tool cannot complete a deployment step."""


class ToolNotFoundError(CommandError):
    """Raised when a required executable is not installed or not on PATH."""


class CommandFailedError(CommandError):
    """Raised when an external tool exits with a nonzero status.

    Args:
        message: Human-readable summary of the failed step.
        result: The captured result of the failing invocation, if any.
    """

    def __init__(self, message: str, result: "CommandResult | None" = None) -> None:
        super().__init__(message)
        self.result = result

    @property
    def output(self) -> str:
        """Return the tool's captured stderr, falling back to stdout."""
        if self.result is None:
            return ""
        return (self.result.stderr or self.result.stdout).strip()


@dataclass(slots=True)
class CommandResult:
    """Captured outcome of an external process.

    Attributes:
        args: Argument vector that was executed.
        status: Success, missing executable, or nonzero exit.
        returncode: Process exit status; ``None`` when the tool was not found.
        stdout: Captured standard output (empty unless capture was requested).
        stderr: Captured standard error (empty unless capture was requested).
    """

    args: tuple[str, ...]
    status: CommandStatus
    returncode: int | None = None
    stdout: str = ""
    stderr: str = ""

    @property
    def program(self) -> str:
        """Return the executable name of the invocation."""
        return self.args[0] if self.args else ""

    @property
    def ok(self) -> bool:
        """Return ``True`` when the process exited successfully."""
        return self.status is CommandStatus.SUCCESS

    def check(self, description: str) -> "CommandResult":
        """Raise when the invocation did not succeed.

        Args:
            description: Short summary of the step, used in the error message.

        Returns:
            CommandResult: ``self`` so calls can be chained.

        Raises:
            ToolNotFoundError: If the executable could not be located.
            CommandFailedError: If the process exited with a nonzero status.
        """
        if self.status is CommandStatus.NOT_FOUND:
            raise ToolNotFoundError(
                f"{description}: '{self.program}' was not found, is it installed and on PATH?"
            )
        if self.status is CommandStatus.FAILED:
            raise CommandFailedError(
                f"{description}: '{self.program}' exited with status {self.returncode}",
                result=self,
            )
        return self


class CommandRunner(abc.ABC):
    """Common interface for launching external tools."""

    def run(
        self,
        args: Sequence[str],
        *,
        cwd: str | None = None,
        capture: bool = False,
        quiet: bool = False,
    ) -> CommandResult:
        """Run ``args`` to completion and return its result.

        Args:
            args: Program and arguments; no shell interpretation is applied.
            cwd: Optional working directory for the process.
            capture: Capture stdout/stderr instead of inheriting the terminal.
            quiet: Discard standard output; errors still reach the terminal.

        Returns:
            CommandResult: Outcome of the invocation. Missing executables are
            reported through :attr:`CommandStatus.NOT_FOUND` rather than raised.
        """
        argv = tuple(str(arg) for arg in args)
        LOGGER.debug("Running: %s", shlex.join(argv))
        result = self._execute(argv, cwd=cwd, capture=capture, quiet=quiet)
        if not result.ok:
            LOGGER.debug("Command %s finished with %s", argv[0], result.status.value)
        return result

    @abc.abstractmethod
    def _execute(
        self,
        args: tuple[str, ...],
        *,
        cwd: str | None,
        capture: bool,
        quiet: bool,
    ) -> CommandResult:
        """Launch the process and wait for it to exit."""

    @abc.abstractmethod
    def which(self, program: str) -> str | None:
        """Return the resolved path of ``program`` or ``None`` if absent."""
