"""hdfs-shell - Asynchronous facade over the hadoop command-line client.

Operations such as existence checks, disk usage, removal and local copies are
carried out by running ``hadoop fs`` as a child process and interpreting its
exit status and output.
"""

from hdfs_shell.core.hdfs import HDFS
from hdfs_shell.core.paths import absolute_path
from hdfs_shell.core.process import (
    CollectorError,
    CommandResult,
    CommandRunner,
    DiskUsageError,
    DiskUsageFormatError,
    ExecutableValidationError,
    HDFSError,
    LaunchError,
    LocalPathNotFoundError,
    ReapError,
    ShellCommandError,
    UnexpectedResultError,
    collect,
)

__all__ = [
    "HDFS",
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
    "UnexpectedResultError",
    "absolute_path",
    "collect",
]
