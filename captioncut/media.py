"""
captioncut.media - Scoped temporary handles for media bytes.

Decoders and players want a path on disk; a MediaHandle spools in-memory
media to a temporary file and removes it on release. Release is idempotent,
so the pipeline can release on every exit path and again on discard.
"""

from __future__ import annotations

import logging
import tempfile
from pathlib import Path

from captioncut.models import MediaFile

logger = logging.getLogger(__name__)


class MediaHandle:
    """A temporary on-disk copy of a media file."""

    def __init__(self, path: Path) -> None:
        self._path: Path | None = path

    @classmethod
    def spool(cls, media: MediaFile, directory: Path | None = None) -> MediaHandle:
        """Write media bytes to a temp file that keeps the original suffix."""
        suffix = Path(media.name).suffix
        with tempfile.NamedTemporaryFile(
            mode="wb",
            dir=directory,
            prefix="captioncut_",
            suffix=suffix,
            delete=False,
        ) as tmp:
            tmp_path = Path(tmp.name)
            try:
                tmp.write(media.data)
            except Exception:
                tmp_path.unlink(missing_ok=True)
                raise
        logger.debug("Spooled %s to %s", media.name, tmp_path)
        return cls(tmp_path)

    @property
    def path(self) -> Path:
        if self._path is None:
            raise RuntimeError("Media handle already released")
        return self._path

    @property
    def released(self) -> bool:
        return self._path is None

    def release(self) -> None:
        """Delete the temp file. Safe to call more than once."""
        if self._path is None:
            return
        path, self._path = self._path, None
        path.unlink(missing_ok=True)
        logger.debug("Released %s", path)

    def __enter__(self) -> MediaHandle:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.release()
