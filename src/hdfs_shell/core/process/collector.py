"""Concurrent collection of a child process's exit status and output.

The collector waits on three independent operations of an already launched
child process: reaping its exit status, draining stdout and draining stderr.
All three run as separate tasks and are joined before any result is
inspected, so a slow stream never blocks the others and a failure in one of
them never leaves the other two dangling.

Failures are reported in a fixed order (status, stdout, stderr) regardless of
the order in which the operations actually finished.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable
from typing import Protocol

from .errors import CollectorError, CollectorSource
from .models import CommandResult

logger = logging.getLogger(__name__)

# Marker used when a sub-operation was cancelled rather than failed
DISCARDED = "discarded"


class ByteStream(Protocol):
    """Readable byte stream, such as asyncio.StreamReader."""

    def read(self, n: int = -1) -> Awaitable[bytes]:
        """Read up to n bytes, or until EOF when n is -1."""
        ...


class SubprocessHandle(Protocol):
    """Structural interface of a spawned child process.

    asyncio.subprocess.Process satisfies this protocol. Test doubles only
    need the two stream attributes and a ``wait`` coroutine.
    """

    @property
    def stdout(self) -> ByteStream | None: ...

    @property
    def stderr(self) -> ByteStream | None: ...

    def wait(self) -> Awaitable[int | None]:
        """Wait for the process to terminate and return its exit status."""
        ...


async def collect(process: SubprocessHandle) -> CommandResult:
    """Wait for a child process to finish and capture both output streams.

    Args:
        process: Spawned process whose stdout and stderr are both piped

    Returns:
        CommandResult with the exit status and the complete stream contents

    Raises:
        ValueError: If stdout or stderr was not captured through a pipe
        CollectorError: If the status or either stream could not be obtained
    """
    stdout = process.stdout
    stderr = process.stderr
    if stdout is None or stderr is None:
        msg = "collect() requires a process spawned with stdout and stderr piped"
        raise ValueError(msg)

    status_task: asyncio.Future[int | None] = asyncio.ensure_future(process.wait())
    out_task: asyncio.Future[bytes] = asyncio.ensure_future(stdout.read())
    err_task: asyncio.Future[bytes] = asyncio.ensure_future(stderr.read())
    tasks = (status_task, out_task, err_task)

    try:
        _ = await asyncio.wait(tasks, return_when=asyncio.ALL_COMPLETED)
    except asyncio.CancelledError:
        for task in tasks:
            _ = task.cancel()
        _ = await asyncio.gather(*tasks, return_exceptions=True)
        raise

    status = _settled(status_task, "status")
    out = _settled(out_task, "stdout")
    err = _settled(err_task, "stderr")

    logger.debug(
        "Collected subprocess result",
        extra={"status": status, "stdout_bytes": len(out), "stderr_bytes": len(err)},
    )

    return CommandResult(
        status=status,
        out=out.decode("utf-8", errors="replace"),
        err=err.decode("utf-8", errors="replace"),
    )


def _settled[T](task: asyncio.Future[T], source: CollectorSource) -> T:
    """Return the value of a finished task or raise a CollectorError."""
    if task.cancelled():
        raise CollectorError(source, DISCARDED)

    exc = task.exception()
    if exc is not None:
        raise CollectorError(source, str(exc) or type(exc).__name__) from exc

    return task.result()
