"""
captioncut.pipeline - Media-to-caption orchestrator.

Runs one file through extraction → transcription → parsing as a strict
sequence of states:

    idle → extracting → transcribing → completed
                 ↘            ↘
                  error  ←─────┘

Every stage failure is recovered here and reported as the error state;
nothing propagates past run(). One run at a time per pipeline.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from captioncut.exceptions import (
    CaptionCutError,
    PipelineBusyError,
    StateTransitionError,
    UnknownPipelineError,
)
from captioncut.extract.audio import extract_audio
from captioncut.media import MediaHandle
from captioncut.models import Caption, MediaFile, ProcessState, ProgressEvent
from captioncut.subtitles.parsing import parse_srt_detailed
from captioncut.timeline import CaptionTimeline
from captioncut.transcribe.prompts import CaptionStyle
from captioncut.validation import check_file_size

logger = logging.getLogger(__name__)

DEFAULT_ERROR_MESSAGE = "Interrupted. Please check your connection and try again."

TRANSITIONS: dict[ProcessState, frozenset[ProcessState]] = {
    ProcessState.IDLE: frozenset({ProcessState.EXTRACTING, ProcessState.ERROR}),
    ProcessState.EXTRACTING: frozenset({ProcessState.TRANSCRIBING, ProcessState.ERROR}),
    ProcessState.TRANSCRIBING: frozenset({ProcessState.COMPLETED, ProcessState.ERROR}),
    ProcessState.COMPLETED: frozenset(
        {ProcessState.EXTRACTING, ProcessState.ERROR, ProcessState.IDLE}
    ),
    ProcessState.ERROR: frozenset({ProcessState.EXTRACTING, ProcessState.ERROR, ProcessState.IDLE}),
}

IN_FLIGHT = frozenset({ProcessState.EXTRACTING, ProcessState.TRANSCRIBING})

ProgressCallback = Callable[[ProgressEvent], None]


@dataclass
class PipelineResult:
    """Outcome of one pipeline run."""

    state: ProcessState
    style: CaptionStyle
    captions: list[Caption] = field(default_factory=list)
    error: CaptionCutError | None = None
    message: str = ""
    dropped_blocks: int = 0

    @property
    def ok(self) -> bool:
        return self.state is ProcessState.COMPLETED


class CaptionPipeline:
    """Sequences extraction, transcription and parsing for one media file."""

    def __init__(
        self,
        client: Any,
        timeline: CaptionTimeline | None = None,
        max_file_size_mb: int = 50,
        decode_sample_rate: int | None = None,
        on_progress: ProgressCallback | None = None,
    ) -> None:
        self.client = client
        self.timeline = timeline if timeline is not None else CaptionTimeline()
        self.max_file_size_mb = max_file_size_mb
        self.decode_sample_rate = decode_sample_rate
        self.on_progress = on_progress
        self._state = ProcessState.IDLE
        self._fraction = 0.0
        self._preview: MediaHandle | None = None

    @classmethod
    def from_config(
        cls, config: Any, on_progress: ProgressCallback | None = None
    ) -> CaptionPipeline:
        """Build a pipeline from CaptionCutConfig."""
        from captioncut.transcribe.client import create_client_from_config

        return cls(
            client=create_client_from_config(config),
            max_file_size_mb=config.max_file_size_mb,
            decode_sample_rate=config.decode_sample_rate,
            on_progress=on_progress,
        )

    @property
    def state(self) -> ProcessState:
        return self._state

    @property
    def preview_path(self) -> Path | None:
        """On-disk copy of the current video for playback, if any."""
        if self._preview is None or self._preview.released:
            return None
        return self._preview.path

    def _set_state(self, new_state: ProcessState) -> None:
        if new_state not in TRANSITIONS[self._state]:
            raise StateTransitionError(
                f"Cannot move from {self._state.value} to {new_state.value}"
            )
        logger.debug("Pipeline state: %s -> %s", self._state.value, new_state.value)
        self._state = new_state

    def _progress(self, fraction: float, message: str) -> None:
        # progress never moves backwards within a run
        self._fraction = max(self._fraction, fraction)
        if self.on_progress:
            self.on_progress(ProgressEvent(self._state, self._fraction, message))

    def _release_preview(self) -> None:
        if self._preview is not None:
            self._preview.release()
            self._preview = None

    def _fail(self, error: CaptionCutError, style: CaptionStyle) -> PipelineResult:
        self._set_state(ProcessState.ERROR)
        message = str(error) or DEFAULT_ERROR_MESSAGE
        logger.warning("Pipeline failed: %s", message)
        self._progress(self._fraction, message)
        return PipelineResult(
            state=ProcessState.ERROR,
            style=style,
            error=error,
            message=message,
        )

    async def run(self, media: MediaFile, style: CaptionStyle | str) -> PipelineResult:
        """Turn a media file into a populated caption timeline.

        Args:
            media: Submitted media file
            style: Caption style directive

        Returns:
            PipelineResult in the completed or error state

        Raises:
            PipelineBusyError: If another run is still in flight
            ValueError: If the style is not a known caption style
        """
        if self._state in IN_FLIGHT:
            raise PipelineBusyError(f"A run is already {self._state.value}")

        style = CaptionStyle(style)
        self._fraction = 0.0

        try:
            check_file_size(media.size_bytes, self.max_file_size_mb)
        except CaptionCutError as e:
            return self._fail(e, style)

        self._release_preview()
        self.timeline.clear()

        try:
            self._set_state(ProcessState.EXTRACTING)
            if media.is_video:
                self._preview = MediaHandle.spool(media)
            self._progress(0.10, "Extracting local audio stream...")
            encoded = await asyncio.to_thread(extract_audio, media, self.decode_sample_rate)

            self._set_state(ProcessState.TRANSCRIBING)
            self._progress(0.40, "Syncing with transcription engine...")
            srt_text = await self.client.transcribe(encoded, style)
            del encoded

            self._progress(0.80, "Parsing frame-accurate timeline...")
            parsed = parse_srt_detailed(srt_text)
            self.timeline.load(parsed.captions)

            self._set_state(ProcessState.COMPLETED)
            self._progress(1.0, f"Generated {len(parsed.captions)} captions")
        except StateTransitionError:
            raise
        except CaptionCutError as e:
            return self._fail(e, style)
        except Exception as e:
            logger.debug("Unexpected pipeline failure", exc_info=True)
            return self._fail(UnknownPipelineError(str(e), cause=e), style)

        return PipelineResult(
            state=ProcessState.COMPLETED,
            style=style,
            captions=list(self.timeline.captions),
            message="Completed",
            dropped_blocks=parsed.dropped,
        )

    def discard(self) -> None:
        """Drop the current result and release held media. Safe to repeat.

        Raises:
            PipelineBusyError: If a run is still in flight
        """
        if self._state in IN_FLIGHT:
            raise PipelineBusyError(f"Cannot discard while {self._state.value}")
        self._release_preview()
        self.timeline.clear()
        if self._state is not ProcessState.IDLE:
            self._set_state(ProcessState.IDLE)
        self._fraction = 0.0
