"""
captioncut.extract.wav - Canonical 16-bit PCM WAV encoding.

Turns a decoded AudioBuffer into a RIFF/WAVE blob: a fixed 44-byte header
followed by interleaved little-endian 16-bit signed samples.
"""

from __future__ import annotations

import struct
from typing import Any

import numpy as np

from captioncut.models import AudioBuffer, EncodedAudio

WAV_MIME_TYPE = "audio/wav"
HEADER_SIZE = 44
BITS_PER_SAMPLE = 16
BYTES_PER_SAMPLE = BITS_PER_SAMPLE // 8

_HEADER = struct.Struct("<4sI4s4sIHHIIHH4sI")


def wav_header(channels: int, sample_rate: int, frames: int) -> bytes:
    """Build the 44-byte RIFF/WAVE header for 16-bit PCM.

    Args:
        channels: Number of interleaved channels
        sample_rate: Samples per second per channel
        frames: Number of sample frames (one sample per channel each)

    Returns:
        Header bytes
    """
    data_size = frames * channels * BYTES_PER_SAMPLE
    block_align = channels * BYTES_PER_SAMPLE
    return _HEADER.pack(
        b"RIFF",
        HEADER_SIZE + data_size - 8,
        b"WAVE",
        b"fmt ",
        16,
        1,
        channels,
        sample_rate,
        sample_rate * block_align,
        block_align,
        BITS_PER_SAMPLE,
        b"data",
        data_size,
    )


def read_wav_header(data: bytes) -> dict[str, Any]:
    """Parse a canonical WAV header.

    Args:
        data: WAV bytes (at least 44 bytes)

    Returns:
        Dict of header fields

    Raises:
        ValueError: If the data is too short or not RIFF/WAVE
    """
    if len(data) < HEADER_SIZE:
        raise ValueError(f"WAV data too short: {len(data)} bytes")

    (
        riff,
        riff_size,
        wave,
        fmt,
        fmt_size,
        audio_format,
        channels,
        sample_rate,
        byte_rate,
        block_align,
        bits,
        data_id,
        data_size,
    ) = _HEADER.unpack_from(data)

    if riff != b"RIFF" or wave != b"WAVE" or fmt != b"fmt " or data_id != b"data":
        raise ValueError("Not a canonical RIFF/WAVE header")

    return {
        "riff_size": riff_size,
        "fmt_size": fmt_size,
        "audio_format": audio_format,
        "channels": channels,
        "sample_rate": sample_rate,
        "byte_rate": byte_rate,
        "block_align": block_align,
        "bits_per_sample": bits,
        "data_size": data_size,
    }


def float_to_pcm16(samples: np.ndarray) -> np.ndarray:
    """Convert float samples to int16 with asymmetric scaling.

    NaN becomes silence and infinities saturate. Samples are clamped to
    [-1, 1]; negatives scale by 32768 and the rest by 32767 so +1.0 cannot
    overflow. Values truncate toward zero.
    """
    finite = np.nan_to_num(
        np.asarray(samples, dtype=np.float64), nan=0.0, posinf=1.0, neginf=-1.0
    )
    clamped = np.clip(finite, -1.0, 1.0)
    scaled = np.where(clamped < 0, clamped * 0x8000, clamped * 0x7FFF)
    return np.trunc(scaled).astype(np.int16)


def encode_wav(buffer: AudioBuffer) -> EncodedAudio:
    """Encode an AudioBuffer as a canonical 16-bit PCM WAV blob.

    Output length is always 44 + 2 * channels * frames bytes.

    Args:
        buffer: Decoded audio

    Returns:
        EncodedAudio tagged audio/wav
    """
    header = wav_header(buffer.channels, buffer.sample_rate, buffer.frames)

    # (channels, frames) -> frame-major so channels interleave
    interleaved = float_to_pcm16(buffer.samples).T.reshape(-1)
    payload = interleaved.astype("<i2").tobytes()

    return EncodedAudio(data=header + payload, mime_type=WAV_MIME_TYPE)
