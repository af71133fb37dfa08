"""
CaptionCut - media-to-caption toolkit.

Takes a video or audio file and produces an editable SRT caption timeline
through a short pipeline: audio extraction → canonical WAV encoding →
transcription → SRT parsing → synchronized, editable timeline → export.
"""

__version__ = "0.1.0"
