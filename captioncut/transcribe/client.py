"""
captioncut.transcribe.client - Transcription backend using litellm.

Sends the encoded audio as an inline base64 file part together with the
rendered style prompt, and returns the raw SRT text of the reply. No
retries: a failed call ends the run.
"""

from __future__ import annotations

import base64
import logging
import os
import re
from pathlib import Path
from typing import Any

from captioncut.models import EncodedAudio
from captioncut.transcribe.prompts import CaptionStyle, PromptRenderer

logger = logging.getLogger(__name__)

_FENCE_RE = re.compile(r"^```[a-zA-Z]*\s*\n(.*?)\n?```\s*$", re.DOTALL)


def strip_code_fence(text: str) -> str:
    """Remove a markdown code fence wrapped around the whole reply."""
    stripped = text.strip()
    match = _FENCE_RE.match(stripped)
    if match:
        return match.group(1)
    return text


def audio_data_url(encoded: EncodedAudio) -> str:
    """Encode an audio payload as a data: URL."""
    b64 = base64.b64encode(encoded.data).decode("ascii")
    return f"data:{encoded.mime_type};base64,{b64}"


class TranscriptionClient:
    """litellm wrapper that turns audio into SRT text."""

    def __init__(
        self,
        model: str = "gemini/gemini-3-flash-preview",
        api_key: str | None = None,
        timeout: int = 300,
        prompts_dir: Path | None = None,
    ) -> None:
        self.model = model
        self.api_key = api_key
        self.timeout = timeout
        self.prompts = PromptRenderer(prompts_dir)
        self._token_usage = {"prompt_tokens": 0, "completion_tokens": 0, "total_tokens": 0}

    def build_messages(self, encoded: EncodedAudio, style: CaptionStyle | str) -> list[dict[str, Any]]:
        """Build the single user message carrying audio and instructions."""
        return [
            {
                "role": "user",
                "content": [
                    {"type": "file", "file": {"file_data": audio_data_url(encoded)}},
                    {"type": "text", "text": self.prompts.render(style)},
                ],
            }
        ]

    async def transcribe(self, encoded: EncodedAudio, style: CaptionStyle | str) -> str:
        """Send audio to the service and return its SRT reply.

        Args:
            encoded: Audio payload (WAV or pass-through audio)
            style: Caption style directive

        Returns:
            Raw reply text; empty string if the service returned no content

        Raises:
            TranscriptionFailedError: If the request fails for any reason
        """
        from captioncut.exceptions import TranscriptionFailedError

        messages = self.build_messages(encoded, style)

        try:
            import litellm
        except ImportError as e:
            raise TranscriptionFailedError(
                "litellm not installed. Install with: pip install litellm", cause=e
            ) from e

        litellm.telemetry = False

        kwargs: dict[str, Any] = {
            "model": self.model,
            "messages": messages,
            "timeout": self.timeout,
        }
        if self.api_key:
            kwargs["api_key"] = self.api_key

        logger.debug(
            "Sending %d bytes of %s to %s", encoded.size_bytes, encoded.mime_type, self.model
        )

        try:
            response = await litellm.acompletion(**kwargs)
        except Exception as e:
            raise TranscriptionFailedError(f"Transcription request failed: {e}", cause=e) from e

        usage = getattr(response, "usage", None)
        if usage:
            self._token_usage["prompt_tokens"] += getattr(usage, "prompt_tokens", 0) or 0
            self._token_usage["completion_tokens"] += getattr(usage, "completion_tokens", 0) or 0
            self._token_usage["total_tokens"] += getattr(usage, "total_tokens", 0) or 0

        choices = getattr(response, "choices", None) or []
        if not choices:
            return ""
        message = getattr(choices[0], "message", None)
        content = getattr(message, "content", None) if message is not None else None
        if not content:
            return ""

        return strip_code_fence(content)

    def get_token_usage(self) -> dict[str, int]:
        """Get cumulative token usage."""
        return self._token_usage.copy()


def create_client_from_config(config: Any) -> TranscriptionClient:
    """Create a transcription client from CaptionCutConfig.

    Args:
        config: CaptionCutConfig instance

    Returns:
        Configured TranscriptionClient
    """
    return TranscriptionClient(
        model=config.transcription_model,
        api_key=os.environ.get(config.api_key_env) if config.api_key_env else None,
        timeout=config.transcription_timeout,
        prompts_dir=config.prompts_dir,
    )
