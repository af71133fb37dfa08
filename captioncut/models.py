"""
captioncut.models - Shared data types used across the pipeline.

Audio payloads are plain dataclasses; captions are pydantic models so the
start < end invariant and the frozen id/time fields are enforced on
construction and assignment.
"""

from __future__ import annotations

import enum
import mimetypes
from dataclasses import dataclass, field
from pathlib import Path

import numpy as np
from pydantic import BaseModel, ConfigDict, Field, model_validator


@dataclass(frozen=True)
class AudioBuffer:
    """Decoded audio: float samples shaped (channels, frames)."""

    samples: np.ndarray
    sample_rate: int

    def __post_init__(self) -> None:
        samples = np.atleast_2d(np.asarray(self.samples, dtype=np.float32))
        if samples.ndim != 2 or samples.shape[0] < 1:
            raise ValueError("AudioBuffer needs at least one channel")
        if self.sample_rate <= 0:
            raise ValueError(f"Invalid sample rate: {self.sample_rate}")
        samples = samples.copy()
        samples.setflags(write=False)
        object.__setattr__(self, "samples", samples)

    @property
    def channels(self) -> int:
        return int(self.samples.shape[0])

    @property
    def frames(self) -> int:
        return int(self.samples.shape[1])

    @property
    def duration(self) -> float:
        return self.frames / self.sample_rate


@dataclass(frozen=True)
class EncodedAudio:
    """Binary audio payload ready to send to the transcription service."""

    data: bytes
    mime_type: str

    @property
    def size_bytes(self) -> int:
        return len(self.data)


@dataclass(frozen=True)
class MediaFile:
    """A submitted media file held in memory."""

    name: str
    mime_type: str
    data: bytes = field(repr=False)

    @classmethod
    def from_path(cls, path: Path, mime_type: str | None = None) -> MediaFile:
        """Read a file from disk, guessing its MIME type from the extension."""
        if mime_type is None:
            mime_type = mimetypes.guess_type(path.name)[0] or "application/octet-stream"
        return cls(name=path.name, mime_type=mime_type, data=path.read_bytes())

    @property
    def size_bytes(self) -> int:
        return len(self.data)

    @property
    def size_mb(self) -> float:
        return self.size_bytes / (1024 * 1024)

    @property
    def is_audio(self) -> bool:
        return self.mime_type.startswith("audio/")

    @property
    def is_video(self) -> bool:
        return self.mime_type.startswith("video/")


class Caption(BaseModel):
    """One subtitle cue. Only ``text`` may change after creation."""

    model_config = ConfigDict(validate_assignment=True)

    id: int = Field(gt=0, frozen=True)
    start_time: str = Field(frozen=True)
    end_time: str = Field(frozen=True)
    start_seconds: float = Field(ge=0.0, frozen=True)
    end_seconds: float = Field(ge=0.0, frozen=True)
    text: str = ""

    @model_validator(mode="after")
    def check_order(self) -> Caption:
        if self.start_seconds >= self.end_seconds:
            raise ValueError(
                f"Caption #{self.id} ends before it starts "
                f"({self.start_time} --> {self.end_time})"
            )
        return self


class ProcessState(str, enum.Enum):
    """Pipeline run status."""

    IDLE = "idle"
    EXTRACTING = "extracting"
    TRANSCRIBING = "transcribing"
    COMPLETED = "completed"
    ERROR = "error"


@dataclass(frozen=True)
class ProgressEvent:
    """Progress report emitted on each pipeline stage change."""

    state: ProcessState
    fraction: float
    message: str


@dataclass(frozen=True)
class SeekRequest:
    """Where a player should jump to, and whether it should start playing."""

    target_seconds: float
    play: bool = True


@dataclass
class ParseResult:
    """Captions parsed from SRT text plus how many blocks were dropped."""

    captions: list[Caption] = field(default_factory=list)
    dropped: int = 0
    total: int = 0
