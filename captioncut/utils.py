"""
captioncut.utils - Display helpers for the CLI.

Human-readable durations, byte sizes and caption text previews.
"""

from __future__ import annotations


def format_duration(seconds: float) -> str:
    """Format a caption track length as H:MM:SS or M:SS.

    Args:
        seconds: Duration in seconds (fractions are dropped)

    Returns:
        Formatted string
    """
    minutes, secs = divmod(int(seconds), 60)
    hours, minutes = divmod(minutes, 60)
    if hours:
        return f"{hours}:{minutes:02d}:{secs:02d}"
    return f"{minutes}:{secs:02d}"


def format_size(size: int) -> str:
    """Format a byte count using 1024-based units."""
    value = float(size)
    for unit in ("B", "KB", "MB", "GB"):
        if value < 1024:
            return f"{value:.1f} {unit}"
        value /= 1024
    return f"{value:.1f} TB"


def preview_text(text: str, width: int = 60) -> str:
    """Shorten caption text for a table cell, ending with an ellipsis."""
    if len(text) <= width:
        return text
    return text[: width - 1].rstrip() + "…"
