"""Human-readable formatting of byte counts."""

from typing import Final

# Binary units (1024-based), matching `hadoop fs -du -h`
_UNITS: Final[tuple[str, ...]] = ("K", "M", "G", "T", "P", "E")
_STEP: Final[int] = 1024


def format_size(size: int, *, precision: int = 1) -> str:
    """Convert a byte count to a human-readable size.

    Args:
        size: Number of bytes (must be non-negative)
        precision: Decimal places for values of 1 K and above

    Returns:
        Size in bytes below 1 K, otherwise the largest unit that keeps the
        value at or above 1

    Examples:
        >>> format_size(512)
        '512'
        >>> format_size(1536)
        '1.5 K'
        >>> format_size(5 * 1024**3)
        '5.0 G'
    """
    if size < 0:
        msg = "size must be non-negative"
        raise ValueError(msg)

    if size < _STEP:
        return str(size)

    value = float(size)
    unit = _UNITS[0]
    for unit in _UNITS:
        value /= _STEP
        if value < _STEP:
            break

    return f"{value:.{precision}f} {unit}"
