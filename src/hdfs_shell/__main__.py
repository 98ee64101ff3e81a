"""Entry point for ``python -m hdfs_shell``."""

from hdfs_shell.app.cli import cli


def main() -> None:
    """Run the hdfs-shell command-line interface."""
    cli(prog_name="hdfs-shell")


if __name__ == "__main__":
    main()
