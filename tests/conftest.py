"""
Test configuration and shared fixtures.
"""

from __future__ import annotations

from pathlib import Path
from unittest.mock import AsyncMock

import numpy as np
import pytest
import yaml

from captioncut.models import AudioBuffer, Caption, EncodedAudio, MediaFile

TWO_BLOCK_SRT = """\
1
00:00:00,000 --> 00:00:02,000
Hello there

2
00:00:02,000 --> 00:00:04,500
General Kenobi
"""


@pytest.fixture
def two_block_srt() -> str:
    """Return a valid two-block SRT document."""
    return TWO_BLOCK_SRT


@pytest.fixture
def adjacent_captions() -> list[Caption]:
    """Two captions sharing the 2.0s boundary."""
    return [
        Caption(
            id=1,
            start_time="00:00:00,000",
            end_time="00:00:02,000",
            start_seconds=0.0,
            end_seconds=2.0,
            text="a",
        ),
        Caption(
            id=2,
            start_time="00:00:02,000",
            end_time="00:00:04,000",
            start_seconds=2.0,
            end_seconds=4.0,
            text="b",
        ),
    ]


@pytest.fixture
def stereo_buffer() -> AudioBuffer:
    """A short stereo buffer at 8 kHz."""
    left = np.linspace(-1.0, 1.0, 16, dtype=np.float32)
    right = np.zeros(16, dtype=np.float32)
    return AudioBuffer(samples=np.stack([left, right]), sample_rate=8000)


@pytest.fixture
def wav_payload() -> EncodedAudio:
    """A tiny stand-in for an encoded WAV payload."""
    return EncodedAudio(data=b"RIFF" + b"\x00" * 40, mime_type="audio/wav")


@pytest.fixture
def video_file() -> MediaFile:
    """A small in-memory 'video' upload."""
    return MediaFile(name="clip.mp4", mime_type="video/mp4", data=b"fake video data")


@pytest.fixture
def fake_client(two_block_srt: str) -> AsyncMock:
    """A transcription client whose transcribe() returns two valid blocks."""
    client = AsyncMock()
    client.transcribe.return_value = two_block_srt
    return client


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    """Write a captioncut.yaml with test settings."""
    config = {
        "max_file_size_mb": 50,
        "default_style": "standard",
        "transcription_model": "gemini/test-model",
        "api_key_env": "CAPTIONCUT_TEST_KEY",
        "export_suffix": "_CaptionCut",
    }
    path = tmp_path / "captioncut.yaml"
    with open(path, "w") as f:
        yaml.dump(config, f)
    return path
