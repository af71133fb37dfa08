"""
captioncut.subtitles.timecode - SRT timestamp math.

SRT timestamps are HH:MM:SS,mmm. Conversion to seconds is exact integer
arithmetic on the fields; formatting rounds to the nearest millisecond.
"""

from __future__ import annotations

import re

SRT_TIMESTAMP = r"\d{2}:\d{2}:\d{2},\d{3}"
TIMESTAMP_RE = re.compile(rf"^({SRT_TIMESTAMP})$")
TIME_RANGE_RE = re.compile(rf"({SRT_TIMESTAMP}) --> ({SRT_TIMESTAMP})")


def srt_time_to_seconds(timestamp: str) -> float:
    """Convert an SRT timestamp to float seconds.

    Args:
        timestamp: Timestamp in HH:MM:SS,mmm format

    Returns:
        hours*3600 + minutes*60 + seconds + milliseconds/1000

    Raises:
        ValueError: If the timestamp is malformed
    """
    if not TIMESTAMP_RE.match(timestamp.strip()):
        raise ValueError(f"Invalid SRT timestamp: {timestamp!r}")
    hms, ms = timestamp.strip().split(",")
    hh, mm, ss = (int(p) for p in hms.split(":"))
    return hh * 3600 + mm * 60 + ss + int(ms) / 1000


def seconds_to_srt_time(seconds: float) -> str:
    """Convert float seconds to an SRT timestamp.

    Args:
        seconds: Non-negative time in seconds

    Returns:
        Timestamp string in HH:MM:SS,mmm format
    """
    if seconds < 0:
        raise ValueError(f"Negative time: {seconds}")
    total_ms = round(seconds * 1000)
    hh, rem = divmod(total_ms, 3_600_000)
    mm, rem = divmod(rem, 60_000)
    ss, ms = divmod(rem, 1000)
    return f"{hh:02d}:{mm:02d}:{ss:02d},{ms:03d}"


def parse_time_range(line: str) -> tuple[str, str] | None:
    """Find a 'start --> end' timestamp pair in a line.

    Returns:
        (start, end) timestamp strings, or None if the line has no pair
    """
    match = TIME_RANGE_RE.search(line)
    if not match:
        return None
    return match.group(1), match.group(2)


def display_time(timestamp: str) -> str:
    """Drop the millisecond part of an SRT timestamp for display."""
    return timestamp.split(",")[0]
