"""Mock runner for deterministic orchestration testing."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Dict, List, Mapping, Set, TypeVar

from .base import CommandResult, CommandRunner, CommandStatus

_T = TypeVar("_T")


@dataclass(slots=True)
class MockRunner(CommandRunner):
    """Spoof runner that records invocations instead of launching processes.

    Lookups in ``returncodes``, ``outputs`` and ``side_effects`` first try keys
    equal to one of the arguments after the program (for example
    ``"BatchMode=yes"`` or ``"--release"``), then fall back to the program name.
    """

    returncodes: Dict[str, int] = field(default_factory=dict)
    outputs: Dict[str, str] = field(default_factory=dict)
    missing: Set[str] = field(default_factory=set)
    side_effects: Dict[str, Callable[[tuple[str, ...]], None]] = field(default_factory=dict)
    calls: List[tuple[str, ...]] = field(default_factory=list)

    def _execute(
        self,
        args: tuple[str, ...],
        *,
        cwd: str | None,
        capture: bool,
        quiet: bool,
    ) -> CommandResult:
        self.calls.append(args)
        if args[0] in self.missing:
            return CommandResult(args=args, status=CommandStatus.NOT_FOUND)
        effect = _lookup(self.side_effects, args)
        if effect is not None:
            effect(args)
        returncode = _lookup(self.returncodes, args) or 0
        stdout = _lookup(self.outputs, args) or ""
        if returncode == 0:
            return CommandResult(
                args=args, status=CommandStatus.SUCCESS, returncode=0, stdout=stdout
            )
        return CommandResult(
            args=args,
            status=CommandStatus.FAILED,
            returncode=returncode,
            stdout=stdout,
            stderr=f"{args[0]}: simulated failure",
        )

    def which(self, program: str) -> str | None:
        """Report every program except those listed in ``missing`` as installed."""
        if program in self.missing:
            return None
        return f"/usr/bin/{program}"

    def calls_to(self, program: str) -> list[tuple[str, ...]]:
        """Return recorded invocations of ``program`` in call order."""
        return [call for call in self.calls if call[0] == program]

    def programs(self) -> list[str]:
        """Return the executable names of all recorded invocations."""
        return [call[0] for call in self.calls]


def _lookup(mapping: Mapping[str, _T], args: tuple[str, ...]) -> _T | None:
    arguments = set(args[1:])
    for key, value in mapping.items():
        if key != args[0] and key in arguments:
            return value
    return mapping.get(args[0])
