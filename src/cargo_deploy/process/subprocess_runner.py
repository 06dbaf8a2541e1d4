"""Runner backed by :mod:`subprocess`."""

from __future__ import annotations

import shutil
import subprocess
from pathlib import Path

from .base import CommandError, CommandResult, CommandRunner, CommandStatus


class SubprocessRunner(CommandRunner):
    """Launch real processes and block until they exit."""

    def _execute(
        self,
        args: tuple[str, ...],
        *,
        cwd: str | None,
        capture: bool,
        quiet: bool,
    ) -> CommandResult:
        if cwd is not None and not Path(cwd).is_dir():
            raise CommandError(f"Working directory {cwd} does not exist")
        if capture:
            stdout = stderr = subprocess.PIPE
        else:
            stdout = subprocess.DEVNULL if quiet else None
            stderr = None
        try:
            completed = subprocess.run(
                args,
                cwd=cwd,
                stdout=stdout,
                stderr=stderr,
                text=True,
                check=False,
            )
        except FileNotFoundError:
            return CommandResult(args=args, status=CommandStatus.NOT_FOUND)
        status = CommandStatus.SUCCESS if completed.returncode == 0 else CommandStatus.FAILED
        return CommandResult(
            args=args,
            status=status,
            returncode=completed.returncode,
            stdout=completed.stdout or "",
            stderr=completed.stderr or "",
        )

    def which(self, program: str) -> str | None:
        return shutil.which(program)
