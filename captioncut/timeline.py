"""
captioncut.timeline - Caption list ownership and playback sync.

The timeline holds the parsed captions for one completed run, answers
"which caption is showing at time t", and applies text edits in place.
It never drives playback itself: seek_to only describes where a player
should jump.
"""

from __future__ import annotations

import enum
import logging
from collections.abc import Iterable

from captioncut.exceptions import CaptionNotFoundError
from captioncut.models import Caption, SeekRequest
from captioncut.subtitles.parsing import flatten_text
from captioncut.subtitles.srt import serialize_srt

logger = logging.getLogger(__name__)


class TimelineState(str, enum.Enum):
    EMPTY = "empty"
    POPULATED = "populated"


class CaptionTimeline:
    """Ordered caption list with active-caption lookup and text editing."""

    def __init__(self, captions: Iterable[Caption] | None = None) -> None:
        self._captions: list[Caption] = []
        self.state = TimelineState.EMPTY
        if captions is not None:
            self.load(captions)

    @property
    def captions(self) -> tuple[Caption, ...]:
        """Snapshot of the current captions in stored order."""
        return tuple(self._captions)

    def __len__(self) -> int:
        return len(self._captions)

    def load(self, captions: Iterable[Caption]) -> None:
        """Replace the caption list in one step."""
        self._captions = list(captions)
        self.state = TimelineState.POPULATED
        logger.debug("Timeline loaded with %d captions", len(self._captions))

    def clear(self) -> None:
        """Discard all captions."""
        self._captions = []
        self.state = TimelineState.EMPTY

    def active_caption(self, current_time: float) -> Caption | None:
        """Return the caption showing at a playback time.

        Both interval ends are inclusive; when captions overlap (or share a
        boundary) the first one in stored order wins.

        Args:
            current_time: Playback position in seconds

        Returns:
            The active caption, or None if no caption covers the time
        """
        if self.state is TimelineState.EMPTY:
            return None
        for caption in self._captions:
            if caption.start_seconds <= current_time <= caption.end_seconds:
                return caption
        return None

    def get(self, caption_id: int) -> Caption:
        """Get the first caption with the given id.

        Raises:
            CaptionNotFoundError: If no caption has that id
        """
        for caption in self._captions:
            if caption.id == caption_id:
                return caption
        raise CaptionNotFoundError(caption_id)

    def edit_text(self, caption_id: int, new_text: str) -> list[Caption]:
        """Replace the text of every caption with the given id, in place.

        Line breaks are flattened to single spaces, as the parser does, so
        the edited caption still serializes as one SRT block. Ids, times and
        list order are never touched.

        Returns:
            The edited captions in stored order

        Raises:
            CaptionNotFoundError: If no caption has that id
        """
        matches = [c for c in self._captions if c.id == caption_id]
        if not matches:
            raise CaptionNotFoundError(caption_id)

        text = flatten_text(new_text)
        for caption in matches:
            caption.text = text
        logger.debug("Edited %d caption(s) with id #%d", len(matches), caption_id)
        return matches

    def seek_to(self, caption: Caption) -> SeekRequest:
        """Describe a jump to the start of a caption, then play."""
        return SeekRequest(target_seconds=caption.start_seconds, play=True)

    def to_srt(self) -> str:
        """Serialize the current (possibly edited) captions."""
        return serialize_srt(self._captions)
