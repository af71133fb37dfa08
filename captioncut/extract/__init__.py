"""
captioncut.extract - Audio extraction and WAV encoding.

Pipeline Stage 1: decode the input's audio track and encode it as
16-bit PCM WAV for the transcription service.
"""

from __future__ import annotations
