"""Launching child processes for the hadoop client.

Two invocation strategies are provided:

- ``spawn``: asynchronous launch with argument vector and piped stdout and
  stderr, intended to be paired with ``collect``. The process is scoped to an
  async context manager so it is always killed and reaped on exit.
- ``shell``: synchronous execution of a shell command line, optionally with
  stderr merged into stdout. Blocks the calling thread.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
import subprocess
from collections.abc import AsyncIterator, Sequence

from .errors import LaunchError, ShellCommandError
from .models import ShellOutput

logger = logging.getLogger(__name__)


class CommandRunner:
    """Runs external commands on behalf of the HDFS facade.

    Instances hold no state, so a single runner may be shared by any number
    of concurrent calls.
    """

    @contextlib.asynccontextmanager
    async def spawn(
        self,
        program: str,
        argv: Sequence[str],
    ) -> AsyncIterator[asyncio.subprocess.Process]:
        """Launch a child process with stdout and stderr piped.

        Args:
            program: Path or name of the executable to run
            argv: Full argument vector, including argv[0]

        Yields:
            The running process

        Raises:
            LaunchError: If the process could not be started
        """
        logger.debug("Spawning subprocess", extra={"program": program, "argv": list(argv)})
        try:
            process = await asyncio.create_subprocess_exec(
                *argv,
                executable=program,
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as e:
            raise LaunchError(
                f"Failed to execute the subprocess: {e}",
                {"program": program},
            ) from e

        try:
            yield process
        except BaseException:
            # The error raised inside the block takes precedence over a failed reap
            await _terminate(process, quiet=True)
            raise
        await _terminate(process)

    def shell(self, command: str, *, combine_output: bool = False) -> ShellOutput:
        """Run a command line through the shell and wait for it to finish.

        Args:
            command: Command line passed to /bin/sh
            combine_output: Merge stderr into stdout, as ``2>&1`` would

        Returns:
            ShellOutput of the successfully finished command

        Raises:
            LaunchError: If the shell itself could not be started
            ShellCommandError: If the command exited with a non-zero status
        """
        logger.debug("Running shell command", extra={"command": command})
        try:
            completed = subprocess.run(
                command,
                shell=True,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT if combine_output else subprocess.PIPE,
                check=False,
            )
        except OSError as e:
            raise LaunchError(f"Failed to execute '{command}': {e}", {"command": command}) from e

        output = _decode(completed.stdout)
        error = _decode(completed.stderr)

        if completed.returncode != 0:
            logger.debug(
                "Shell command failed",
                extra={"command": command, "status": completed.returncode},
            )
            raise ShellCommandError(command, completed.returncode, output + error)

        return ShellOutput(
            command=command,
            status=completed.returncode,
            output=output,
            error=error,
        )


async def _terminate(process: asyncio.subprocess.Process, *, quiet: bool = False) -> None:
    """Kill and reap a child that is still running."""
    if process.returncode is not None:
        return

    logger.debug("Killing unfinished subprocess", extra={"pid": process.pid})
    with contextlib.suppress(ProcessLookupError):
        process.kill()

    try:
        _ = await process.wait()
    except Exception:
        if not quiet:
            raise
        logger.warning("Failed to reap subprocess %s", process.pid, exc_info=True)


def _decode(data: bytes | None) -> str:
    if data is None:
        return ""
    return data.decode("utf-8", errors="replace")
