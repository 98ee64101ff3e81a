"""Command-line interface for the hadoop client facade."""

from __future__ import annotations

import asyncio
import contextlib
from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path
from uuid import uuid4

import click

from hdfs_shell.core.config import ConfigurationError, MainConfig, load_config
from hdfs_shell.core.hdfs import HDFS
from hdfs_shell.core.process import HDFSError
from hdfs_shell.utils.formatting import format_size
from hdfs_shell.utils.logging import clear_correlation_id, configure_logging, set_correlation_id

try:
    __version__ = version("hdfs-shell")
except PackageNotFoundError:
    __version__ = "unknown"

VALID_LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})


@dataclass(slots=True)
class CliState:
    """Options shared by every subcommand."""

    config: MainConfig
    hadoop: str | None = None


def validate_log_level(
    ctx: click.Context,  # pyright: ignore[reportUnusedParameter] # required by Click callback signature
    param: click.Parameter,  # pyright: ignore[reportUnusedParameter] # required by Click callback signature
    value: str | None,
) -> str | None:
    """Validate and normalize log level.

    Raises:
        click.BadParameter: If the level is unknown
    """
    if value is None:
        return value

    normalized_value = value.upper().strip()
    if normalized_value not in VALID_LOG_LEVELS:
        raise click.BadParameter(
            f'Invalid log level "{value}". Valid options: {", ".join(sorted(VALID_LOG_LEVELS))}'
        )

    return normalized_value


@contextlib.contextmanager
def _reported_errors() -> Iterator[None]:
    """Turn client and configuration errors into click errors."""
    try:
        yield
    except (HDFSError, ConfigurationError) as e:
        raise click.ClickException(str(e)) from e


def _client(state: CliState) -> HDFS:
    if state.hadoop is not None:
        return HDFS.create(state.hadoop)
    return HDFS.from_config(state.config.hadoop)


async def _exists_all(client: HDFS, paths: Sequence[str]) -> list[bool]:
    return await asyncio.gather(*(client.exists(path) for path in paths))


@click.group()
@click.option(
    '--hadoop',
    type=str,
    default=None,
    help='Path to the hadoop executable (default: $HADOOP_HOME/bin/hadoop, then hadoop on PATH)',
)
@click.option(
    '--config', '-c',
    type=click.Path(path_type=Path, dir_okay=False),
    default=None,
    help='YAML configuration file',
)
@click.option(
    '--log-level', '-l',
    type=str,
    default=None,
    callback=validate_log_level,
    help='Logging verbosity level (DEBUG, INFO, WARNING, ERROR, CRITICAL)',
)
@click.version_option(version=__version__, prog_name='hdfs-shell')
@click.pass_context
def cli(
    ctx: click.Context,
    hadoop: str | None,
    config: Path | None,
    log_level: str | None,
) -> None:
    """hdfs-shell - Run HDFS operations through the hadoop client.

    Examples:

        # Check whether paths exist
        hdfs-shell exists /data/a /data/b

        # Show disk usage in human-readable form
        hdfs-shell du -H /data

        # Use a specific hadoop installation
        hdfs-shell --hadoop /opt/hadoop/bin/hadoop rm /tmp/old
    """
    with _reported_errors():
        main_config = load_config(config) if config is not None else MainConfig()

    configure_logging(
        log_level=log_level or main_config.logging.level,
        enable_syslog=main_config.logging.syslog_enabled,
    )
    set_correlation_id(uuid4().hex)
    _ = ctx.call_on_close(clear_correlation_id)

    ctx.obj = CliState(config=main_config, hadoop=hadoop)


@cli.command()
@click.argument('paths', nargs=-1, required=True)
@click.pass_context
def exists(ctx: click.Context, paths: tuple[str, ...]) -> None:
    """Check whether PATHS exist. Exits 1 if any path is missing."""
    state: CliState = ctx.obj  # pyright: ignore[reportAny]  # click context boundary
    with _reported_errors():
        client = _client(state)
        results = asyncio.run(_exists_all(client, paths))

    for path, found in zip(paths, results, strict=True):
        click.echo(f"{path}\t{'true' if found else 'false'}")

    if not all(results):
        ctx.exit(1)


@cli.command()
@click.argument('path')
@click.option('--human-readable', '-H', is_flag=True, help='Print sizes in binary units')
@click.pass_obj
def du(state: CliState, path: str, human_readable: bool) -> None:
    """Show the number of bytes used by PATH."""
    with _reported_errors():
        size = _client(state).disk_usage(path)

    shown = format_size(size) if human_readable else str(size)
    click.echo(f"{shown}\t{HDFS.absolute_path(path)}")


@cli.command()
@click.argument('path')
@click.pass_obj
def rm(state: CliState, path: str) -> None:
    """Remove PATH."""
    with _reported_errors():
        _client(state).remove(path)


@cli.command()
@click.argument('local')
@click.argument('remote')
@click.pass_obj
def put(state: CliState, local: str, remote: str) -> None:
    """Copy LOCAL to REMOTE."""
    with _reported_errors():
        _client(state).copy_from_local(local, remote)


@cli.command()
@click.argument('remote')
@click.argument('local')
@click.pass_obj
def get(state: CliState, remote: str, local: str) -> None:
    """Copy REMOTE to LOCAL."""
    with _reported_errors():
        _client(state).copy_to_local(remote, local)
