"""
captioncut.io - Text read/write helpers, atomic file writes.

Centralized I/O utilities for caption files.
"""

from __future__ import annotations

import tempfile
from pathlib import Path


def read_text(path: Path) -> str:
    """Read a text file with UTF-8 encoding.

    A leading byte-order mark is dropped and newlines are left untouched.

    Args:
        path: Path to text file

    Returns:
        File contents as string
    """
    with open(path, encoding="utf-8-sig", newline="") as f:
        return f.read()


def write_text(path: Path, content: str) -> None:
    """Write a text file atomically, byte-for-byte.

    Writes to a temp file first, then renames to prevent corruption
    on interruption. Newlines are not translated.

    Args:
        path: Destination path
        content: Text content to write
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    with tempfile.NamedTemporaryFile(
        mode="w",
        encoding="utf-8",
        newline="",
        dir=path.parent,
        delete=False,
        suffix=".tmp",
    ) as tmp:
        tmp_path = Path(tmp.name)
        try:
            tmp.write(content)
        except Exception:
            tmp_path.unlink(missing_ok=True)
            raise
    tmp_path.replace(path)
