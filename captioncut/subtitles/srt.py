"""
captioncut.subtitles.srt - SRT serialization and export.

Serialization is the structural inverse of the parser: id line, timestamp
line, single text line, one blank line between blocks.
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

from captioncut.io import write_text
from captioncut.models import Caption

DEFAULT_EXPORT_SUFFIX = "_CaptionCut"


def format_block(caption: Caption) -> str:
    """Format a single caption as an SRT block (with trailing newline)."""
    return f"{caption.id}\n{caption.start_time} --> {caption.end_time}\n{caption.text}\n"


def serialize_srt(captions: Iterable[Caption]) -> str:
    """Serialize captions to SRT text in list order.

    Args:
        captions: Captions to write

    Returns:
        SRT document; empty string for no captions
    """
    return "\n".join(format_block(c) for c in captions)


def export_filename(original_name: str, suffix: str = DEFAULT_EXPORT_SUFFIX) -> str:
    """Build the export file name: <original-stem><suffix>.srt."""
    stem = Path(original_name).stem
    return f"{stem}{suffix}.srt"


def export_srt(
    captions: Iterable[Caption],
    original_name: str,
    directory: Path,
    suffix: str = DEFAULT_EXPORT_SUFFIX,
) -> Path:
    """Write captions to an SRT file next to other exports.

    Args:
        captions: Captions to export
        original_name: Name of the source media file
        directory: Output directory
        suffix: Appended to the source stem

    Returns:
        Path of the written file
    """
    path = directory / export_filename(original_name, suffix)
    write_text(path, serialize_srt(captions))
    return path
