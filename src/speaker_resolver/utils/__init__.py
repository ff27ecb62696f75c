"""Utility functions for the Speaker Identity Resolution Engine."""

from speaker_resolver.utils.time_utils import (
    format_duration,
    format_timestamp,
    ms_to_seconds,
)

__all__ = [
    "format_duration",
    "format_timestamp",
    "ms_to_seconds",
]
