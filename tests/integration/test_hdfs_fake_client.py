"""Integration tests running the HDFS facade against a stand-in hadoop client."""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from pathlib import Path

import pytest

from hdfs_shell.core.hdfs import HDFS
from hdfs_shell.core.process import (
    DiskUsageError,
    ExecutableValidationError,
    LaunchError,
    LocalPathNotFoundError,
    ShellCommandError,
    UnexpectedResultError,
)

pytestmark = pytest.mark.integration


@pytest.fixture
def hdfs(fake_hadoop: Path) -> HDFS:
    """Create a facade bound to the fake client."""
    return HDFS.create(str(fake_hadoop))


class TestCreate:
    """Test construction against real executables."""

    def test_validates_with_version(self, fake_hadoop: Path, hadoop_calls: Callable[[], list[str]]) -> None:
        """Creation runs the version command exactly once."""
        _ = HDFS.create(str(fake_hadoop))

        assert hadoop_calls() == ["version"]

    def test_resolves_from_hadoop_home(self, fake_hadoop: Path) -> None:
        """HADOOP_HOME points at the installation containing bin/hadoop."""
        home = fake_hadoop.parent.parent

        hdfs = HDFS.create(environ={"HADOOP_HOME": str(home)})

        assert hdfs.hadoop == str(fake_hadoop)

    def test_broken_client(self, broken_hadoop: Path) -> None:
        """A client failing its version check cannot be used."""
        with pytest.raises(ExecutableValidationError, match="JAVA_HOME is not set"):
            _ = HDFS.create(str(broken_hadoop))

    def test_missing_client(self, tmp_path: Path) -> None:
        """A HADOOP_HOME without a client fails at creation."""
        with pytest.raises(ExecutableValidationError, match="non-zero exit status: 127"):
            _ = HDFS.create(environ={"HADOOP_HOME": str(tmp_path)})


class TestExists:
    """Test existence checks through a real child process."""

    @pytest.mark.asyncio
    async def test_exists(self, hdfs: HDFS, hadoop_calls: Callable[[], list[str]]) -> None:
        """Paths the client reports with exit 0 exist."""
        assert await hdfs.exists("data/present") is True
        assert hadoop_calls()[-1] == "fs -test -e /data/present"

    @pytest.mark.asyncio
    async def test_missing(self, hdfs: HDFS) -> None:
        """Paths the client reports with exit 1 do not exist."""
        assert await hdfs.exists("/data/missing") is False

    @pytest.mark.asyncio
    async def test_unexpected_code(self, hdfs: HDFS) -> None:
        """Other exit codes are failures."""
        with pytest.raises(UnexpectedResultError, match="status='2'"):
            _ = await hdfs.exists("/data/code-2")

    @pytest.mark.asyncio
    async def test_client_removed_after_creation(self, fake_hadoop: Path) -> None:
        """A client that disappears after validation fails to launch."""
        hdfs = HDFS.create(str(fake_hadoop))
        fake_hadoop.unlink()

        with pytest.raises(LaunchError):
            _ = await hdfs.exists("/data/present")

    @pytest.mark.asyncio
    async def test_fifty_concurrent_calls(self, hdfs: HDFS) -> None:
        """Concurrent calls on one facade do not interfere with each other."""
        paths = [f"/data/{i}/code-{i % 3}" for i in range(50)]

        results = await asyncio.gather(
            *(hdfs.exists(path) for path in paths),
            return_exceptions=True,
        )

        for i, result in enumerate(results):
            if i % 3 == 0:
                assert result is True
            elif i % 3 == 1:
                assert result is False
            else:
                assert isinstance(result, UnexpectedResultError)


class TestSynchronousOperations:
    """Test shell based operations."""

    def test_disk_usage(self, hdfs: HDFS) -> None:
        """du finds the answer line after the warning the client emits."""
        assert hdfs.disk_usage("/data/events") == 4096

    def test_disk_usage_failure(self, hdfs: HDFS) -> None:
        """A failing du includes the combined output."""
        with pytest.raises(DiskUsageError, match="No such file or directory"):
            _ = hdfs.disk_usage("/data/missing")

    def test_remove(self, hdfs: HDFS, hadoop_calls: Callable[[], list[str]]) -> None:
        """rm passes the absolute path."""
        hdfs.remove("tmp/old")

        assert hadoop_calls()[-1] == "fs -rm /tmp/old"

    def test_remove_failure(self, hdfs: HDFS) -> None:
        """rm failures carry the client's error text."""
        with pytest.raises(ShellCommandError, match="No such file or directory"):
            hdfs.remove("/tmp/missing")

    def test_copy_from_local(self, hdfs: HDFS, tmp_path: Path, hadoop_calls: Callable[[], list[str]]) -> None:
        """Existing local files are uploaded."""
        source = tmp_path / "report.csv"
        _ = source.write_text("a,b\n")

        hdfs.copy_from_local(str(source), "/reports/report.csv")

        assert hadoop_calls()[-1] == f"fs -copyFromLocal {source} /reports/report.csv"

    def test_copy_from_missing_local(
        self,
        hdfs: HDFS,
        tmp_path: Path,
        hadoop_calls: Callable[[], list[str]],
    ) -> None:
        """Missing local files never reach the client."""
        calls_before = len(hadoop_calls())

        with pytest.raises(LocalPathNotFoundError):
            hdfs.copy_from_local(str(tmp_path / "absent.csv"), "/reports/absent.csv")

        assert len(hadoop_calls()) == calls_before

    def test_copy_to_local(self, hdfs: HDFS, tmp_path: Path) -> None:
        """Remote files are downloaded to the local path."""
        destination = tmp_path / "report.csv"

        hdfs.copy_to_local("reports/report.csv", str(destination))

        assert destination.read_text() == "contents of /reports/report.csv\n"

    @pytest.mark.asyncio
    async def test_async_counterparts(self, hdfs: HDFS, tmp_path: Path) -> None:
        """The thread-offloaded variants run alongside existence checks."""
        destination = tmp_path / "copy.csv"

        size, found, _ = await asyncio.gather(
            hdfs.disk_usage_async("/data/events"),
            hdfs.exists("/data/events"),
            hdfs.copy_to_local_async("/data/events", str(destination)),
        )

        assert size == 4096
        assert found is True
        assert destination.exists()
