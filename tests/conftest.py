"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import logging
import stat
from collections.abc import Callable, Generator
from pathlib import Path

import pytest

# Stand-in for the hadoop client. Paths ending in "code-N" make `-test -e`
# exit with N; paths containing "missing" do not exist.
FAKE_HADOOP_SCRIPT = """\
#!/bin/sh
echo "$*" >> "$(dirname "$0")/calls.log"
if [ "$1" = "version" ]; then
  echo "Hadoop 3.3.6"
  echo "Source code repository https://github.com/apache/hadoop.git"
  exit 0
fi
shift
cmd="$1"
shift
case "$cmd" in
  -test)
    case "$2" in
      *code-*) exit "${2##*code-}" ;;
      *missing*) exit 1 ;;
      *) exit 0 ;;
    esac
    ;;
  -du)
    echo "WARN util.NativeCodeLoader: Unable to load native-hadoop library"
    case "$1" in
      *missing*) echo "du: \\`$1': No such file or directory" >&2; exit 1 ;;
    esac
    echo "4096  $1"
    ;;
  -rm)
    case "$1" in
      *missing*) echo "rm: \\`$1': No such file or directory" >&2; exit 1 ;;
    esac
    echo "Deleted $1"
    ;;
  -copyFromLocal)
    [ -e "$1" ] || exit 1
    ;;
  -copyToLocal)
    case "$1" in
      *missing*) echo "copyToLocal: \\`$1': No such file or directory" >&2; exit 1 ;;
    esac
    echo "contents of $1" > "$2"
    ;;
  *)
    echo "$cmd: Unknown command" >&2
    exit 255
    ;;
esac
"""

BROKEN_HADOOP_SCRIPT = """\
#!/bin/sh
echo "Error: JAVA_HOME is not set and could not be found."
exit 1
"""


def _write_executable(path: Path, content: str) -> Path:
    _ = path.write_text(content)
    path.chmod(path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return path


@pytest.fixture
def fake_hadoop(tmp_path: Path) -> Path:
    """Create a fake hadoop client inside a HADOOP_HOME style layout."""
    bin_dir = tmp_path / "hadoop" / "bin"
    bin_dir.mkdir(parents=True)
    return _write_executable(bin_dir / "hadoop", FAKE_HADOOP_SCRIPT)


@pytest.fixture
def broken_hadoop(tmp_path: Path) -> Path:
    """Create a hadoop client that fails its version check."""
    return _write_executable(tmp_path / "broken-hadoop", BROKEN_HADOOP_SCRIPT)


@pytest.fixture
def hadoop_calls(fake_hadoop: Path) -> Callable[[], list[str]]:
    """Return a reader for the argument lines recorded by the fake client."""

    def read() -> list[str]:
        log = fake_hadoop.parent / "calls.log"
        if not log.exists():
            return []
        return log.read_text().splitlines()

    return read


@pytest.fixture(autouse=True)
def restore_root_logger() -> Generator[None, None, None]:
    """Undo handler changes made by configure_logging during a test."""
    root_logger = logging.getLogger()
    handlers = list(root_logger.handlers)
    level = root_logger.level
    try:
        yield
    finally:
        root_logger.handlers[:] = handlers
        root_logger.setLevel(level)
