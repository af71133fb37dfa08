"""
captioncut.extract.audio - Audio track extraction.

Decodes the audio track of any container librosa can read (video files go
through its audioread/ffmpeg backend) and re-encodes it as canonical WAV.
Audio files that fail to decode are passed through untouched.
"""

from __future__ import annotations

import logging
import time

from captioncut.extract.wav import encode_wav
from captioncut.media import MediaHandle
from captioncut.models import AudioBuffer, EncodedAudio, MediaFile

logger = logging.getLogger(__name__)

UNSUPPORTED_MESSAGE = "Unable to extract audio track. Ensure the file is not corrupted."


def decode_audio(handle: MediaHandle, sample_rate: int | None = None) -> AudioBuffer:
    """Decode a spooled media file into an AudioBuffer.

    Args:
        handle: Media handle pointing at the file to decode
        sample_rate: Resample to this rate (keep the native rate if None)

    Returns:
        Decoded multi-channel audio

    Raises:
        Exception: Whatever the decoder raises for unreadable input
    """
    import librosa

    audio, sr = librosa.load(str(handle.path), sr=sample_rate, mono=False)
    if audio.size == 0:
        raise ValueError(f"No audio samples decoded from {handle.path.name}")
    return AudioBuffer(samples=audio, sample_rate=int(sr))


def extract_audio(media: MediaFile, sample_rate: int | None = None) -> EncodedAudio:
    """Extract a media file's audio as a payload for transcription.

    The temporary decode file is released on every exit path.

    Args:
        media: Submitted media file
        sample_rate: Optional resample rate for the decoded audio

    Returns:
        Canonical WAV payload, or the original bytes for undecodable audio

    Raises:
        UnsupportedMediaError: If decoding fails and the input is not audio
    """
    from captioncut.exceptions import UnsupportedMediaError

    started = time.perf_counter()

    with MediaHandle.spool(media) as handle:
        try:
            buffer = decode_audio(handle, sample_rate=sample_rate)
        except Exception as e:
            if media.is_audio:
                logger.debug("Decode failed for %s (%s); passing audio through", media.name, e)
                return EncodedAudio(data=media.data, mime_type=media.mime_type)
            raise UnsupportedMediaError(UNSUPPORTED_MESSAGE) from e

    logger.debug(
        "Decoded %s: %d ch, %d Hz, %.2fs in %.2fs",
        media.name,
        buffer.channels,
        buffer.sample_rate,
        buffer.duration,
        time.perf_counter() - started,
    )
    return encode_wav(buffer)
