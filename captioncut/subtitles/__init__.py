"""
captioncut.subtitles - SRT parsing, serialization and timestamp math.

Pipeline Stage 3: turn the service's SRT reply into Caption objects, and
turn (possibly edited) captions back into SRT for export.
"""

from __future__ import annotations
