"""Path normalisation for HDFS command lines."""

import posixpath
from typing import Final

HDFS_SCHEME: Final[str] = "hdfs://"
ROOT: Final[str] = "/"


def absolute_path(path: str) -> str:
    """Normalise a path before it is embedded in a hadoop command line.

    Fully qualified ``hdfs://`` URLs and paths starting with ``/`` are
    returned unchanged. Anything else is taken relative to the filesystem
    root.

    Args:
        path: HDFS path or URL

    Returns:
        Absolute path or URL

    Examples:
        >>> absolute_path("hdfs://namenode:8020/data")
        'hdfs://namenode:8020/data'
        >>> absolute_path("/data/file")
        '/data/file'
        >>> absolute_path("data/file")
        '/data/file'
    """
    if path.startswith((HDFS_SCHEME, ROOT)):
        return path

    return posixpath.join(ROOT, path)
