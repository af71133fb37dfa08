"""
captioncut.exceptions - Custom exception classes.

All CaptionCut-specific exceptions inherit from CaptionCutError. The four
run-level failures (FileTooLargeError, UnsupportedMediaError,
TranscriptionFailedError, UnknownPipelineError) are recovered by the
pipeline and turned into its error state.
"""

from __future__ import annotations


class CaptionCutError(Exception):
    """Base exception for all CaptionCut errors."""

    pass


class ConfigError(CaptionCutError):
    """Configuration loading or validation error."""

    pass


class FileTooLargeError(CaptionCutError):
    """Input file exceeds the upload size limit."""

    def __init__(self, size_mb: float, limit_mb: int = 50):
        self.size_mb = size_mb
        self.limit_mb = limit_mb
        super().__init__(f"File is too large ({size_mb:.1f}MB). Limit is {limit_mb}MB.")


class UnsupportedMediaError(CaptionCutError):
    """Audio could not be decoded and the input is not an audio file."""

    pass


class TranscriptionFailedError(CaptionCutError):
    """Transcription service call failed."""

    def __init__(self, message: str, cause: BaseException | None = None):
        self.cause = cause
        super().__init__(message)


class UnknownPipelineError(CaptionCutError):
    """Unexpected failure during extraction or transcription."""

    def __init__(self, message: str, cause: BaseException | None = None):
        self.cause = cause
        super().__init__(message)


class CaptionNotFoundError(CaptionCutError):
    """No caption with the requested id exists in the timeline."""

    def __init__(self, caption_id: int):
        self.caption_id = caption_id
        super().__init__(f"Caption #{caption_id} not found")


class StateTransitionError(CaptionCutError):
    """Pipeline asked to move between states that are not connected."""

    pass


class PipelineBusyError(CaptionCutError):
    """A run was started while another run is still in flight."""

    pass


class DependencyError(CaptionCutError):
    """Required dependency missing or misconfigured."""

    def __init__(self, dependency: str, message: str, install_hint: str | None = None):
        self.dependency = dependency
        self.message = message
        self.install_hint = install_hint
        super().__init__(f"{dependency}: {message}")
