"""Tests for captioncut.extract.audio and captioncut.media modules."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

import numpy as np
import pytest

from captioncut.exceptions import UnsupportedMediaError
from captioncut.extract.audio import UNSUPPORTED_MESSAGE, decode_audio, extract_audio
from captioncut.extract.wav import encode_wav, read_wav_header
from captioncut.media import MediaHandle
from captioncut.models import AudioBuffer, MediaFile


class TestMediaHandle:
    def test_spool_keeps_suffix_and_bytes(self, video_file: MediaFile) -> None:
        handle = MediaHandle.spool(video_file)
        try:
            assert handle.path.suffix == ".mp4"
            assert handle.path.read_bytes() == video_file.data
        finally:
            handle.release()

    def test_release_deletes_file(self, video_file: MediaFile) -> None:
        handle = MediaHandle.spool(video_file)
        path = handle.path
        handle.release()
        assert not path.exists()
        assert handle.released

    def test_double_release_is_noop(self, video_file: MediaFile) -> None:
        handle = MediaHandle.spool(video_file)
        handle.release()
        handle.release()
        assert handle.released

    def test_path_after_release_raises(self, video_file: MediaFile) -> None:
        handle = MediaHandle.spool(video_file)
        handle.release()
        with pytest.raises(RuntimeError, match="released"):
            _ = handle.path

    def test_context_manager_releases(self, video_file: MediaFile, tmp_path: Path) -> None:
        with MediaHandle.spool(video_file, directory=tmp_path) as handle:
            path = handle.path
            assert path.parent == tmp_path
            assert path.exists()
        assert not path.exists()


class TestDecodeAudio:
    def test_mono_decode_becomes_one_channel(self, video_file: MediaFile) -> None:
        with MediaHandle.spool(video_file) as handle:
            with patch("librosa.load", return_value=(np.zeros(100, dtype=np.float32), 22050)):
                buffer = decode_audio(handle)
        assert buffer.channels == 1
        assert buffer.frames == 100
        assert buffer.sample_rate == 22050

    def test_stereo_decode(self, video_file: MediaFile) -> None:
        audio = np.zeros((2, 50), dtype=np.float32)
        with MediaHandle.spool(video_file) as handle:
            with patch("librosa.load", return_value=(audio, 44100)) as mock_load:
                buffer = decode_audio(handle, sample_rate=16000)
        assert buffer.channels == 2
        assert mock_load.call_args.kwargs["sr"] == 16000
        assert mock_load.call_args.kwargs["mono"] is False

    def test_empty_decode_raises(self, video_file: MediaFile) -> None:
        with MediaHandle.spool(video_file) as handle:
            with patch("librosa.load", return_value=(np.zeros(0, dtype=np.float32), 22050)):
                with pytest.raises(ValueError, match="No audio samples"):
                    decode_audio(handle)


class TestExtractAudio:
    def test_video_decodes_to_wav(self, video_file: MediaFile) -> None:
        buffer = AudioBuffer(samples=np.zeros((2, 10), dtype=np.float32), sample_rate=16000)
        with patch("captioncut.extract.audio.decode_audio", return_value=buffer):
            encoded = extract_audio(video_file)

        assert encoded.mime_type == "audio/wav"
        assert len(encoded.data) == 44 + 2 * 2 * 10
        assert read_wav_header(encoded.data)["sample_rate"] == 16000

    def test_sample_rate_forwarded(self, video_file: MediaFile) -> None:
        buffer = AudioBuffer(samples=np.zeros(4, dtype=np.float32), sample_rate=8000)
        with patch("captioncut.extract.audio.decode_audio", return_value=buffer) as mock_decode:
            extract_audio(video_file, sample_rate=8000)
        assert mock_decode.call_args.kwargs["sample_rate"] == 8000

    def test_undecodable_audio_passes_through(self) -> None:
        media = MediaFile(name="voice.mp3", mime_type="audio/mpeg", data=b"not really mp3")
        with patch("captioncut.extract.audio.decode_audio", side_effect=RuntimeError("bad")):
            encoded = extract_audio(media)

        assert encoded.data == media.data
        assert encoded.mime_type == "audio/mpeg"

    def test_undecodable_video_raises(self, video_file: MediaFile) -> None:
        with patch("captioncut.extract.audio.decode_audio", side_effect=RuntimeError("bad")):
            with pytest.raises(UnsupportedMediaError) as exc_info:
                extract_audio(video_file)

        assert str(exc_info.value) == UNSUPPORTED_MESSAGE
        assert isinstance(exc_info.value.__cause__, RuntimeError)

    @pytest.mark.parametrize("fails", [False, True])
    def test_temp_file_released(self, video_file: MediaFile, fails: bool) -> None:
        seen: list[Path] = []
        buffer = AudioBuffer(samples=np.zeros(4, dtype=np.float32), sample_rate=8000)

        def fake_decode(handle: MediaHandle, sample_rate: int | None = None) -> AudioBuffer:
            seen.append(handle.path)
            assert handle.path.exists()
            if fails:
                raise RuntimeError("decode failed")
            return buffer

        with patch("captioncut.extract.audio.decode_audio", side_effect=fake_decode):
            if fails:
                with pytest.raises(UnsupportedMediaError):
                    extract_audio(video_file)
            else:
                extract_audio(video_file)

        assert len(seen) == 1
        assert not seen[0].exists()


class TestExtractAudioDecoding:
    def test_stereo_wav_through_librosa(self) -> None:
        frames = 800
        t = np.arange(frames, dtype=np.float32) / 8000
        left = 0.5 * np.sin(2 * np.pi * 440 * t)
        right = np.zeros(frames, dtype=np.float32)
        source = encode_wav(AudioBuffer(samples=np.stack([left, right]), sample_rate=8000))

        # a non-audio MIME type rules out the pass-through branch
        media = MediaFile(name="tone.wav", mime_type="application/octet-stream", data=source.data)
        encoded = extract_audio(media)

        header = read_wav_header(encoded.data)
        assert len(encoded.data) == 44 + 2 * 2 * frames
        assert header["channels"] == 2
        assert header["sample_rate"] == 8000

        samples = np.frombuffer(encoded.data[44:], dtype="<i2").reshape(-1, 2)
        assert np.any(samples[:, 0] != 0)
        assert not np.any(samples[:, 1])
