"""HDFS facade backed by the hadoop command-line client.

Each operation builds a ``hadoop fs`` command line, runs it and translates the
exit status or output into a Python value. ``exists`` runs the client
asynchronously and collects its status and streams concurrently; the other
operations run it synchronously through the shell and have awaitable
counterparts that offload the blocking call to a worker thread.
"""

from __future__ import annotations

import asyncio
import logging
import os
from collections.abc import Mapping
from typing import TYPE_CHECKING, Final

from hdfs_shell.core.config import HADOOP_BINARY, resolve_executable
from hdfs_shell.core.paths import absolute_path
from hdfs_shell.core.process import (
    CommandRunner,
    DiskUsageError,
    DiskUsageFormatError,
    ExecutableValidationError,
    HDFSError,
    LocalPathNotFoundError,
    ReapError,
    UnexpectedResultError,
    collect,
)
from hdfs_shell.utils.logging import log_with_context

if TYPE_CHECKING:
    from hdfs_shell.core.config import HadoopConfig

logger = logging.getLogger(__name__)

# Exit codes of `hadoop fs -test -e`
EXISTS_EXIT_CODE: Final[int] = 0
MISSING_EXIT_CODE: Final[int] = 1


class HDFS:
    """Client for a distributed filesystem reached through the hadoop CLI.

    The only state is the resolved executable, so one instance can serve any
    number of concurrent calls; every call launches its own child process.

    Use ``HDFS.create`` rather than the constructor so the executable is
    validated before first use.
    """

    def __init__(self, hadoop: str, *, runner: CommandRunner | None = None) -> None:
        """Initialize the facade without validating the executable.

        Args:
            hadoop: Path or command name of the hadoop client
            runner: Command runner used to launch the client
        """
        self._hadoop: str = hadoop
        self._runner: CommandRunner = runner or CommandRunner()

    @classmethod
    def create(
        cls,
        hadoop: str | None = None,
        *,
        runner: CommandRunner | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> HDFS:
        """Resolve and validate the hadoop client, then build a facade.

        Args:
            hadoop: Explicit client path; falls back to $HADOOP_HOME/bin/hadoop,
                then to ``hadoop`` on PATH
            runner: Command runner used to launch the client
            environ: Environment to consult (defaults to os.environ)

        Returns:
            Facade bound to the validated client

        Raises:
            ExecutableValidationError: If ``<hadoop> version`` fails
        """
        executable = resolve_executable(hadoop, environ=environ)
        runner = runner or CommandRunner()

        try:
            version = runner.shell(f"{executable} version 2>&1")
        except HDFSError as e:
            raise ExecutableValidationError(e.message, {"hadoop": executable}) from e

        log_with_context(
            logger,
            logging.INFO,
            "Using hadoop client",
            extra={"hadoop": executable, "version": _first_line(version.output)},
        )
        return cls(executable, runner=runner)

    @classmethod
    def from_config(cls, config: HadoopConfig, *, runner: CommandRunner | None = None) -> HDFS:
        """Create a facade from the hadoop configuration section."""
        executable = resolve_executable(config.binary, config.home)
        return cls.create(executable, runner=runner)

    @property
    def hadoop(self) -> str:
        """Path or command name of the hadoop client."""
        return self._hadoop

    @staticmethod
    def absolute_path(path: str) -> str:
        """Normalise a path the way every operation does before running."""
        return absolute_path(path)

    async def exists(self, path: str) -> bool:
        """Check whether a path exists on the remote filesystem.

        Args:
            path: HDFS path or URL

        Returns:
            True if the path exists, False if it does not

        Raises:
            LaunchError: If the client could not be started
            CollectorError: If the status or output could not be collected
            ReapError: If the client finished without an exit status
            UnexpectedResultError: If the client exited with neither 0 nor 1
        """
        argv = [HADOOP_BINARY, "fs", "-test", "-e", absolute_path(path)]

        async with self._runner.spawn(self._hadoop, argv) as process:
            result = await collect(process)

        if result.status is None:
            raise ReapError("Failed to reap the subprocess")

        if result.exit_code == EXISTS_EXIT_CODE:
            return True
        if result.exit_code == MISSING_EXIT_CODE:
            return False

        raise UnexpectedResultError(result)

    def disk_usage(self, path: str) -> int:
        """Return the number of bytes used by a path.

        The client may interleave warnings with its answer, so the combined
        output is scanned for the line ``<bytes> <path>``.

        Args:
            path: HDFS path or URL

        Returns:
            Size in bytes

        Raises:
            DiskUsageError: If the du command failed
            DiskUsageFormatError: If no answer line could be parsed
        """
        path = absolute_path(path)

        try:
            out = self._runner.shell(f"{self._hadoop} fs -du '{path}' 2>&1", combine_output=True)
        except HDFSError as e:
            raise DiskUsageError(f"HDFS du failed: {e.message}", {"path": path}) from e

        return parse_disk_usage(out.output, path)

    def remove(self, path: str) -> None:
        """Remove a path from the remote filesystem.

        Raises:
            HDFSError: If the rm command could not be run or failed
        """
        _ = self._runner.shell(f"{self._hadoop} fs -rm '{absolute_path(path)}'")
        logger.info("Removed %s", path)

    def copy_from_local(self, source: str, destination: str) -> None:
        """Upload a local file or directory.

        Args:
            source: Local path, which must exist
            destination: HDFS path or URL

        Raises:
            LocalPathNotFoundError: If ``source`` does not exist locally
            HDFSError: If the copy command could not be run or failed
        """
        if not os.path.exists(source):
            raise LocalPathNotFoundError(source)

        destination = absolute_path(destination)
        _ = self._runner.shell(f"{self._hadoop} fs -copyFromLocal '{source}' '{destination}'")
        logger.info("Copied %s to %s", source, destination)

    def copy_to_local(self, source: str, destination: str) -> None:
        """Download a remote file or directory.

        Args:
            source: HDFS path or URL
            destination: Local path

        Raises:
            HDFSError: If the copy command could not be run or failed
        """
        source = absolute_path(source)
        _ = self._runner.shell(f"{self._hadoop} fs -copyToLocal '{source}' '{destination}'")
        logger.info("Copied %s to %s", source, destination)

    async def disk_usage_async(self, path: str) -> int:
        """Awaitable variant of ``disk_usage`` running in a worker thread."""
        return await asyncio.to_thread(self.disk_usage, path)

    async def remove_async(self, path: str) -> None:
        """Awaitable variant of ``remove`` running in a worker thread."""
        await asyncio.to_thread(self.remove, path)

    async def copy_from_local_async(self, source: str, destination: str) -> None:
        """Awaitable variant of ``copy_from_local`` running in a worker thread."""
        await asyncio.to_thread(self.copy_from_local, source, destination)

    async def copy_to_local_async(self, source: str, destination: str) -> None:
        """Awaitable variant of ``copy_to_local`` running in a worker thread."""
        await asyncio.to_thread(self.copy_to_local, source, destination)


def parse_disk_usage(output: str, path: str) -> int:
    """Extract the byte count for ``path`` from ``hadoop fs -du`` output.

    Args:
        output: Combined stdout and stderr of the du command
        path: Absolute path that was queried

    Returns:
        Size in bytes

    Raises:
        DiskUsageFormatError: If no line matches or its size is not a number

    Examples:
        >>> parse_disk_usage("1234 /a/b/c\\nWARN: something\\n", "/a/b/c")
        1234
    """
    for line in output.splitlines():
        fields = line.split()

        if len(fields) == 2 and fields[1] == path:
            size = fields[0]
            if not (size.isascii() and size.isdigit()):
                raise DiskUsageFormatError(
                    f"HDFS du returned unexpected format: invalid byte count '{size}' in '{output}'",
                    output,
                )
            return int(size)

    raise DiskUsageFormatError(f"HDFS du returned an unexpected format: '{output}'", output)


def _first_line(text: str) -> str:
    lines = text.strip().splitlines()
    return lines[0] if lines else ""
