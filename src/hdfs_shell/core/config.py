"""Configuration system for the hadoop client.

This module implements the configuration schema using Pydantic for
validation, with support for environment variable resolution in YAML files
and the executable resolution order used by the HDFS facade.
"""

import os
import re
from collections.abc import Mapping
from pathlib import Path
from typing import Annotated, Final

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

# Matches ${VARIABLE_NAME} references inside configuration strings
ENV_VAR_PATTERN: Final[re.Pattern[str]] = re.compile(r"\$\{([A-Z0-9_]+)\}")

HADOOP_HOME_ENV: Final[str] = "HADOOP_HOME"
HADOOP_BINARY: Final[str] = "hadoop"


class HadoopConfig(BaseModel):
    """Location of the hadoop client executable."""

    model_config = ConfigDict(frozen=True)

    binary: Annotated[
        str | None,
        Field(
            min_length=1,
            description="Explicit path to the hadoop executable",
        ),
    ] = None
    home: Annotated[
        Path | None,
        Field(
            description="Hadoop installation directory, overrides $HADOOP_HOME",
        ),
    ] = None


class LoggingConfig(BaseModel):
    """Logging behaviour for the command-line interface."""

    level: Annotated[
        str,
        Field(
            description="Logging level",
            pattern=r"^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$",
        ),
    ] = "WARNING"
    syslog_enabled: Annotated[
        bool,
        Field(
            description="Enable syslog integration",
        ),
    ] = False


class MainConfig(BaseModel):
    """Top-level configuration container."""

    hadoop: Annotated[
        HadoopConfig,
        Field(description="Hadoop client configuration"),
    ] = HadoopConfig()
    logging: Annotated[
        LoggingConfig,
        Field(description="Logging configuration"),
    ] = LoggingConfig()


class EnvironmentVariableError(Exception):
    """Exception raised when environment variable resolution fails."""


class ConfigurationError(Exception):
    """Exception raised when configuration loading or validation fails."""


def resolve_executable(
    binary: str | None = None,
    home: Path | str | None = None,
    environ: Mapping[str, str] | None = None,
) -> str:
    """Determine which hadoop client to run.

    An explicit binary wins. Otherwise the client is looked up below the
    hadoop home directory, taken from ``home`` or ``$HADOOP_HOME``. Without
    either the bare command name is returned and resolved through PATH.

    Args:
        binary: Explicit executable path or name
        home: Hadoop installation directory
        environ: Environment to consult (defaults to os.environ)

    Returns:
        Executable path or command name

    Examples:
        >>> resolve_executable("/opt/hadoop/bin/hadoop")
        '/opt/hadoop/bin/hadoop'
        >>> resolve_executable(environ={"HADOOP_HOME": "/opt/hadoop"})
        '/opt/hadoop/bin/hadoop'
        >>> resolve_executable(environ={})
        'hadoop'
    """
    if binary is not None:
        return binary

    if home is None:
        env = os.environ if environ is None else environ
        home = env.get(HADOOP_HOME_ENV)

    # An empty home anchors at the root, never at the working directory
    if home is not None:
        return f"{str(home).rstrip('/')}/bin/{HADOOP_BINARY}"

    return HADOOP_BINARY


def resolve_env_var(value: str, environ: Mapping[str, str] | None = None) -> str:
    """Substitute ``${NAME}`` references in a configuration string.

    Raises:
        EnvironmentVariableError: If a referenced variable is unset

    Examples:
        >>> resolve_env_var("${HADOOP_PREFIX}/bin/hadoop", {"HADOOP_PREFIX": "/opt/hadoop"})
        '/opt/hadoop/bin/hadoop'
    """
    env = os.environ if environ is None else environ

    def substitute(match: re.Match[str]) -> str:
        name = match.group(1)
        try:
            return env[name]
        except KeyError:
            raise EnvironmentVariableError(
                f"${{{name}}} is referenced in the hdfs-shell configuration but {name} is not set"
            ) from None

    return ENV_VAR_PATTERN.sub(substitute, value)


def resolve_env_vars_in_dict(
    data: Mapping[str, object],
    environ: Mapping[str, str] | None = None,
) -> dict[str, object]:
    """Return a copy of ``data`` with every string value resolved.

    Nested mappings and lists are walked to any depth; other scalars are kept.
    """
    return {key: _resolve_value(value, environ) for key, value in data.items()}


def _resolve_value(value: object, environ: Mapping[str, str] | None) -> object:
    if isinstance(value, str):
        return resolve_env_var(value, environ)
    if isinstance(value, Mapping):
        return resolve_env_vars_in_dict(value, environ)  # pyright: ignore[reportUnknownArgumentType]  # YAML boundary
    if isinstance(value, list):
        return [_resolve_value(item, environ) for item in value]  # pyright: ignore[reportUnknownVariableType]  # YAML boundary
    return value


def load_config(config_path: Path) -> MainConfig:
    """Load the hdfs-shell configuration from a YAML file.

    An empty file yields the defaults. ``${NAME}`` references are resolved
    from the process environment before validation.

    Raises:
        ConfigurationError: If the file is missing or unreadable, is not a YAML
            mapping, references an unset variable, or fails validation
    """
    if not config_path.exists():
        raise ConfigurationError(f"Configuration file not found: {config_path}")

    try:
        with config_path.open("r") as f:
            raw_data: object = yaml.safe_load(f)  # pyright: ignore[reportAny]  # YAML boundary
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Failed to parse YAML in {config_path}: {e}") from e
    except OSError as e:
        raise ConfigurationError(f"Failed to read {config_path}: {e}") from e

    if raw_data is None:
        raw_data = {}

    if not isinstance(raw_data, dict):
        raise ConfigurationError(
            f"Expected YAML dictionary with 'hadoop' and 'logging' sections in {config_path}, "
            f"got {type(raw_data).__name__}"
        )

    try:
        resolved = resolve_env_vars_in_dict(raw_data)  # pyright: ignore[reportUnknownArgumentType]  # YAML boundary
    except EnvironmentVariableError as e:
        raise ConfigurationError(f"{config_path}: {e}") from e

    try:
        return MainConfig.model_validate(resolved)
    except ValidationError as e:
        problems = [
            f"  {' → '.join(str(loc) for loc in error['loc'])}: {error['msg']}"
            for error in e.errors()
        ]
        raise ConfigurationError(
            "\n".join([f"Configuration validation failed for {config_path}:", *problems])
        ) from e
