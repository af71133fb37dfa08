"""
captioncut.transcribe.prompts - Caption styles and prompt rendering.

Each caption style maps to a fixed instruction line sent alongside the
audio. The full request prompt is a Jinja2 template; a project may
override it with prompts/transcribe.txt.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, Template

PROMPT_TEMPLATE_NAME = "transcribe.txt"

DEFAULT_PROMPT_TEMPLATE = (
    "Transcribe this audio into a professional SRT file.\n"
    "RULES:\n"
    "1. Style: {{ instruction }}\n"
    "2. Maintain frame-accurate sync.\n"
    "3. Return valid SRT content only."
)


class CaptionStyle(str, enum.Enum):
    """Caption pacing directive sent with each transcription request."""

    REELS = "reels"
    STANDARD = "standard"
    FAST = "fast"


@dataclass(frozen=True)
class StyleSpec:
    label: str
    description: str
    instruction: str


STYLES: dict[CaptionStyle, StyleSpec] = {
    CaptionStyle.REELS: StyleSpec(
        label="Reels Style",
        description="2-4 words per line. Ultra punchy for social media.",
        instruction=(
            "Break sentences into chunks of exactly 2-4 words. "
            "Each line should be punchy for TikTok/Reels."
        ),
    ),
    CaptionStyle.STANDARD: StyleSpec(
        label="Normal Subtitle",
        description="5-8 words per line. Traditional, easy-to-read layout.",
        instruction="Standard subtitle format. 5-8 words per line. Traditional pacing.",
    ),
    CaptionStyle.FAST: StyleSpec(
        label="Fast-paced",
        description="Rapid-fire captions focused on high-energy speech.",
        instruction="Rapid-fire captions, 2-5 words. Optimized for high-energy speech.",
    ),
}


def style_instruction(style: CaptionStyle | str) -> str:
    """Get the instruction line for a style.

    Raises:
        ValueError: If the style is not one of reels, standard, fast
    """
    return STYLES[CaptionStyle(style)].instruction


class PromptRenderer:
    """Renders the transcription prompt, preferring a project override."""

    def __init__(self, prompts_dir: Path | None = None) -> None:
        self.prompts_dir = prompts_dir
        self._template: Template | None = None

    def get_template(self) -> Template:
        if self._template is None:
            override = self.prompts_dir / PROMPT_TEMPLATE_NAME if self.prompts_dir else None
            if override is not None and override.exists():
                env = Environment(
                    loader=FileSystemLoader(str(self.prompts_dir)),
                    autoescape=False,
                    keep_trailing_newline=False,
                )
                self._template = env.get_template(PROMPT_TEMPLATE_NAME)
            else:
                self._template = Environment(autoescape=False).from_string(
                    DEFAULT_PROMPT_TEMPLATE
                )
        return self._template

    def render(self, style: CaptionStyle | str) -> str:
        """Render the full request prompt for a style."""
        style = CaptionStyle(style)
        return self.get_template().render(
            style=style.value,
            instruction=style_instruction(style),
        )
