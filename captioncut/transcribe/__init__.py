"""
captioncut.transcribe - Transcription service adapter.

Pipeline Stage 2: send encoded audio plus a caption style directive to an
LLM transcription backend and get SRT text back.
"""

from __future__ import annotations
