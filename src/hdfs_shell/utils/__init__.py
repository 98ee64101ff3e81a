"""Shared utility modules for logging and output formatting."""

from hdfs_shell.utils.formatting import format_size

__all__ = [
    "format_size",
]
