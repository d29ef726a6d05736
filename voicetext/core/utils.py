"""Shared utility functions for voice-to-text."""

_SIZE_UNITS = ("B", "KB", "MB", "GB")


def format_bytes(size: int) -> str:
    """Render a byte count in base-1024 units with at most two decimals.

    Examples: ``0 -> "0 B"``, ``1536 -> "1.5 KB"``, ``147951465 -> "141.1 MB"``.
    """
    value = float(size)
    order = 0
    while value >= 1024 and order < len(_SIZE_UNITS) - 1:
        order += 1
        value /= 1024
    number = f"{value:.2f}".rstrip("0").rstrip(".")
    return f"{number} {_SIZE_UNITS[order]}"
