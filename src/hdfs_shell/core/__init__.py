"""Core HDFS facade, configuration and process handling."""

from __future__ import annotations

from .hdfs import HDFS, parse_disk_usage
from .paths import absolute_path

__all__ = ["HDFS", "absolute_path", "parse_disk_usage"]
