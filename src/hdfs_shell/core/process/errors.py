"""Exception hierarchy for hadoop client invocations.

Every failure surfaced by the collector, the command runner and the HDFS
facade derives from HDFSError so callers can handle the whole family with a
single except clause while still distinguishing the individual cases.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Literal

if TYPE_CHECKING:
    from .models import CommandResult

type CollectorSource = Literal["status", "stdout", "stderr"]


class HDFSError(Exception):
    """Base exception for all hadoop client errors."""

    def __init__(self, message: str, context: dict[str, object] | None = None) -> None:
        """Initialize HDFSError.

        Args:
            message: Error message
            context: Additional context information for diagnosis
        """
        super().__init__(message)
        self.message: str = message
        self.context: dict[str, object] = context or {}


class LaunchError(HDFSError):
    """Raised when the child process could not be started."""


class CollectorError(HDFSError):
    """Raised when the exit status or an output stream could not be obtained."""

    def __init__(self, source: CollectorSource, reason: str) -> None:
        """Initialize CollectorError.

        Args:
            source: Which sub-operation failed ("status", "stdout" or "stderr")
            reason: Failure text of the sub-operation, or "discarded"
        """
        if source == "status":
            what = "get the exit status of"
        else:
            what = f"read {source} from"
        super().__init__(f"Failed to {what} the subprocess: {reason}", {"source": source})
        self.source: CollectorSource = source
        self.reason: str = reason


class ReapError(HDFSError):
    """Raised when a child process finished without a terminal status."""


class UnexpectedResultError(HDFSError):
    """Raised when a child process exits with a status outside the known set."""

    def __init__(self, result: CommandResult) -> None:
        super().__init__(
            "Unexpected result from the subprocess: "
            f"status='{result.status}', stdout='{result.out}', stderr='{result.err}'",
            {"status": result.status},
        )
        self.result: CommandResult = result


class ShellCommandError(HDFSError):
    """Raised when a shell command exits with a non-zero status."""

    def __init__(self, command: str, status: int, output: str = "") -> None:
        """Initialize ShellCommandError.

        Args:
            command: The shell command line that was executed
            status: Exit status reported for the command
            output: Captured output of the command, if any
        """
        message = (
            f"Failed to execute '{command}'; the command was either "
            f"not found or exited with a non-zero exit status: {status}"
        )
        if output.strip():
            message = f"{message}\n{output.rstrip()}"
        super().__init__(message, {"command": command, "status": status})
        self.command: str = command
        self.status: int = status
        self.output: str = output


class ExecutableValidationError(HDFSError):
    """Raised when the hadoop client fails its version check."""


class LocalPathNotFoundError(HDFSError):
    """Raised when a local source path is missing before a copy."""

    def __init__(self, path: str) -> None:
        super().__init__(f"Failed to find {path}", {"path": path})
        self.path: str = path


class DiskUsageError(HDFSError):
    """Raised when the du command itself could not be run."""


class DiskUsageFormatError(DiskUsageError):
    """Raised when du output does not contain a parseable answer line."""

    def __init__(self, message: str, output: str) -> None:
        """Initialize DiskUsageFormatError.

        Args:
            message: Error message
            output: Raw combined output of the du command
        """
        super().__init__(message, {"output": output})
        self.output: str = output
