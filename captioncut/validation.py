"""
captioncut.validation - Pre-flight checks and environment validation.

The upload size gate runs before any decoding; the remaining checks back
the `captioncut doctor` command.
"""

from __future__ import annotations

import os
import shutil
import subprocess
from pathlib import Path
from typing import Any

from captioncut.exceptions import DependencyError, FileTooLargeError


def check_file_size(size_bytes: int, limit_mb: int = 50) -> float:
    """Reject files over the size limit.

    Args:
        size_bytes: File size in bytes
        limit_mb: Limit in megabytes (1 MB = 1024 * 1024 bytes)

    Returns:
        File size in megabytes

    Raises:
        FileTooLargeError: If the file is larger than the limit
    """
    size_mb = size_bytes / (1024 * 1024)
    if size_bytes > limit_mb * 1024 * 1024:
        raise FileTooLargeError(round(size_mb, 1), limit_mb)
    return size_mb


def check_ffmpeg() -> dict[str, str]:
    """Check that FFmpeg is installed and get its version.

    librosa decodes video containers through audioread, which shells out
    to ffmpeg.

    Returns:
        Dict with 'ffmpeg_version'

    Raises:
        DependencyError: If FFmpeg is not found
    """
    ffmpeg_path = shutil.which("ffmpeg")
    if not ffmpeg_path:
        raise DependencyError(
            "ffmpeg",
            "FFmpeg not found in PATH",
            "Install with: brew install ffmpeg (macOS) or apt install ffmpeg (Linux)",
        )

    try:
        proc = subprocess.run(
            [ffmpeg_path, "-version"],
            capture_output=True,
            text=True,
            timeout=5,
        )
        version_line = proc.stdout.split("\n")[0]
        version = version_line.split()[2] if version_line else "unknown"
    except (subprocess.TimeoutExpired, IndexError):
        version = "unknown"

    return {"ffmpeg_version": version}


def check_api_key(env_var: str | None) -> dict[str, Any]:
    """Check whether the transcription API key variable is set.

    Args:
        env_var: Environment variable name (None means the backend needs no key)

    Returns:
        Dict with 'env_var' and 'present'
    """
    if not env_var:
        return {"env_var": None, "present": True}
    return {"env_var": env_var, "present": bool(os.environ.get(env_var))}


def validate_media_file(path: Path, limit_mb: int = 50) -> dict[str, Any]:
    """Validate that a media file exists and is within the size limit.

    Args:
        path: Path to the media file
        limit_mb: Size limit in megabytes

    Returns:
        Dict with 'path' and 'size_mb'

    Raises:
        FileNotFoundError: If the file doesn't exist
        FileTooLargeError: If the file exceeds the limit
    """
    if not path.is_file():
        raise FileNotFoundError(f"File not found: {path}")

    size_mb = check_file_size(path.stat().st_size, limit_mb)
    return {"path": str(path), "size_mb": round(size_mb, 1)}
