"""Command-line application for hdfs-shell."""

from __future__ import annotations

from .cli import cli

__all__ = ["cli"]
