from __future__ import annotations

SIZE_UNITS = ("B", "KB", "MB", "GB", "TB", "PB")
UNIT_BASE = 1024

EXTERNAL_SUFFIX = " used in external storage"
INTERNAL_SUFFIX = " used in internal storage"


def format_file_size(total_bytes: int, decimals: int = 2) -> str:
    if total_bytes < 0:
        raise ValueError(f"total_bytes must be non-negative, got {total_bytes}")
    value = float(total_bytes)
    unit_index = 0
    while value >= UNIT_BASE and unit_index < len(SIZE_UNITS) - 1:
        value /= UNIT_BASE
        unit_index += 1
    places = max(0, int(decimals))
    return f"{value:.{places}f}{SIZE_UNITS[unit_index]}"


def format_storage_summary(total_bytes: int, is_external: bool, decimals: int = 2) -> str:
    """Return e.g. "1.00B used in internal storage"."""
    suffix = EXTERNAL_SUFFIX if is_external else INTERNAL_SUFFIX
    return format_file_size(total_bytes, decimals) + suffix


def format_battery_summary(percent: float) -> str:
    rounded = int(round(max(0.0, float(percent))))
    if rounded == 0:
        return "No battery use since last full charge"
    return f"{rounded}% use since last full charge"


__all__ = [
    "SIZE_UNITS",
    "UNIT_BASE",
    "format_file_size",
    "format_storage_summary",
    "format_battery_summary",
]
