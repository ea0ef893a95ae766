"""Timestamp labels for caption offsets.

RULES:
- Floor at every unit; sub-second precision is dropped, never rounded up
- "H:MM:SS" when hours > 0, otherwise "M:SS"
- Hours and (in M:SS form) minutes are not zero-padded
"""

from __future__ import annotations

import math


def format_timestamp(seconds: float) -> str:
    """Format a non-negative number of seconds as "M:SS" or "H:MM:SS"."""
    hrs = math.floor(seconds / 3600)
    mins = math.floor((seconds % 3600) / 60)
    secs = math.floor(seconds % 60)

    if hrs > 0:
        return "{}:{:02d}:{:02d}".format(hrs, mins, secs)
    return "{}:{:02d}".format(mins, secs)


def format_offset(offset_ms: int) -> str:
    """Format a millisecond offset (as stored on fragments and blocks)."""
    return format_timestamp(offset_ms / 1000)
