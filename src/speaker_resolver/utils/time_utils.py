"""Time-related utility functions."""

from typing import Optional


def ms_to_seconds(ms: float) -> float:
    """Convert milliseconds to seconds."""
    return ms / 1000.0


def format_timestamp(ms: Optional[float]) -> str:
    """Format milliseconds as MM:SS.

    Minutes keep counting past the hour, so 3725000 ms renders as "62:05".

    Args:
        ms: Time in milliseconds, None renders as "00:00"

    Returns:
        Formatted string like "01:23"
    """
    if ms is None:
        return "00:00"
    total_seconds = max(int(ms), 0) // 1000
    minutes = total_seconds // 60
    seconds = total_seconds % 60
    return f"{minutes:02d}:{seconds:02d}"


def format_duration(ms: float) -> str:
    """Format a duration in milliseconds as a human-readable string.

    Args:
        ms: Duration in milliseconds

    Returns:
        Formatted string like "2h 15m" or "45m 30s"
    """
    seconds = ms_to_seconds(ms)
    if seconds < 60:
        return f"{int(seconds)}s"

    minutes = int(seconds // 60)
    remaining_seconds = int(seconds % 60)

    if minutes < 60:
        if remaining_seconds > 0:
            return f"{minutes}m {remaining_seconds}s"
        return f"{minutes}m"

    hours = minutes // 60
    remaining_minutes = minutes % 60

    if remaining_minutes > 0:
        return f"{hours}h {remaining_minutes}m"
    return f"{hours}h"
