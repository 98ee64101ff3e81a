"""Result models for child process invocations."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True, frozen=True)
class CommandResult:
    """Outcome of a child process that was collected to completion.

    Both streams are always fully drained. ``status`` is the terminal exit
    status of the reaped process, or None when no status could be obtained.
    Negative values denote termination by signal.
    """

    status: int | None
    out: str
    err: str

    @property
    def exit_code(self) -> int | None:
        """Exit code for normally terminated processes, None otherwise."""
        if self.status is None or self.status < 0:
            return None
        return self.status


@dataclass(slots=True, frozen=True)
class ShellOutput:
    """Outcome of a synchronous shell command that exited successfully."""

    command: str
    status: int
    output: str
    error: str  # empty when stderr was merged into output
