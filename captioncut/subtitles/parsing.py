"""
captioncut.subtitles.parsing - Best-effort SRT parsing.

Transcription replies are not guaranteed to be valid SRT. Parsing never
raises: a block that lacks an integer id, a timestamp line, or a sane
time range is dropped and parsing continues with the next block.
"""

from __future__ import annotations

import logging
import re

from pydantic import ValidationError

from captioncut.models import Caption, ParseResult
from captioncut.subtitles.timecode import parse_time_range, srt_time_to_seconds

logger = logging.getLogger(__name__)

_BLOCK_SPLIT_RE = re.compile(r"\n\s*\n")


def split_blocks(text: str) -> list[str]:
    """Split SRT text into candidate blocks on blank-line boundaries."""
    normalized = text.replace("\r\n", "\n").replace("\r", "\n").strip()
    if not normalized:
        return []
    return _BLOCK_SPLIT_RE.split(normalized)


def flatten_text(text: str) -> str:
    """Join multi-line caption text into one line, skipping blank lines."""
    return " ".join(line for line in text.splitlines() if line.strip())


def parse_block(block: str) -> Caption | None:
    """Parse one SRT block.

    Multi-line text is flattened into a single line joined by spaces.

    Returns:
        Caption, or None if the block is malformed
    """
    lines = block.split("\n")
    if len(lines) < 2:
        return None

    try:
        caption_id = int(lines[0].strip())
    except ValueError:
        return None

    time_range = parse_time_range(lines[1])
    if time_range is None:
        return None
    start_time, end_time = time_range

    try:
        return Caption(
            id=caption_id,
            start_time=start_time,
            end_time=end_time,
            start_seconds=srt_time_to_seconds(start_time),
            end_seconds=srt_time_to_seconds(end_time),
            text=flatten_text("\n".join(lines[2:])),
        )
    except (ValidationError, ValueError):
        return None


def parse_srt_detailed(text: str) -> ParseResult:
    """Parse SRT text and report how many blocks were dropped.

    Args:
        text: Raw SRT text (may be empty or malformed)

    Returns:
        ParseResult with captions in input order
    """
    result = ParseResult()
    for index, block in enumerate(split_blocks(text)):
        result.total += 1
        caption = parse_block(block)
        if caption is None:
            result.dropped += 1
            logger.debug("Dropped malformed SRT block %d: %r", index + 1, block[:80])
            continue
        result.captions.append(caption)

    if result.dropped:
        logger.info("Parsed %d of %d SRT blocks", len(result.captions), result.total)
    return result


def parse_srt(text: str) -> list[Caption]:
    """Parse SRT text into captions, silently dropping malformed blocks.

    Args:
        text: Raw SRT text

    Returns:
        Captions in input block order (not re-sorted, duplicates kept)
    """
    return parse_srt_detailed(text).captions
