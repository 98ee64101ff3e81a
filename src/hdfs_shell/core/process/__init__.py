"""Child process launching and result collection for the hadoop client."""

from __future__ import annotations

from .collector import DISCARDED, ByteStream, SubprocessHandle, collect
from .errors import (
    CollectorError,
    DiskUsageError,
    DiskUsageFormatError,
    ExecutableValidationError,
    HDFSError,
    LaunchError,
    LocalPathNotFoundError,
    ReapError,
    ShellCommandError,
    UnexpectedResultError,
)
from .models import CommandResult, ShellOutput
from .runner import CommandRunner

__all__ = [
    "DISCARDED",
    "ByteStream",
    "CollectorError",
    "CommandResult",
    "CommandRunner",
    "DiskUsageError",
    "DiskUsageFormatError",
    "ExecutableValidationError",
    "HDFSError",
    "LaunchError",
    "LocalPathNotFoundError",
    "ReapError",
    "ShellCommandError",
    "ShellOutput",
    "SubprocessHandle",
    "UnexpectedResultError",
    "collect",
]
