"""
captioncut.config - YAML config loading and validation.

Handles loading captioncut.yaml from the working directory (or an explicit
path) and validating all parameters. Without a config file the defaults
apply.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from captioncut.exceptions import ConfigError
from captioncut.transcribe.prompts import CaptionStyle

CONFIG_FILENAME = "captioncut.yaml"


class CaptionCutConfig(BaseModel):
    """Resolved configuration for CaptionCut."""

    max_file_size_mb: int = Field(default=50, gt=0)
    default_style: str = CaptionStyle.REELS.value

    transcription_model: str = "gemini/gemini-3-flash-preview"
    transcription_timeout: int = Field(default=300, gt=0)
    api_key_env: str | None = "GEMINI_API_KEY"

    decode_sample_rate: int | None = Field(default=None, gt=0)

    export_suffix: str = "_CaptionCut"
    prompts_dir: Path | None = None

    config_path: Path | None = None

    @field_validator("default_style")
    @classmethod
    def validate_style(cls, v: str) -> str:
        valid = {s.value for s in CaptionStyle}
        if v not in valid:
            raise ValueError(f"default_style must be one of: {sorted(valid)}")
        return v

    @field_validator("export_suffix")
    @classmethod
    def validate_suffix(cls, v: str) -> str:
        if "/" in v or "\\" in v:
            raise ValueError("export_suffix must not contain path separators")
        return v


def find_config_file(start: Path | None = None) -> Path | None:
    """Find captioncut.yaml in a directory or any of its parents."""
    current = (start or Path.cwd()).resolve()
    while True:
        candidate = current / CONFIG_FILENAME
        if candidate.exists():
            return candidate
        if current == current.parent:
            return None
        current = current.parent


def load_config(path: Path | None = None) -> CaptionCutConfig:
    """Load and validate configuration.

    Args:
        path: Explicit config file; searched for from the cwd if None

    Returns:
        Validated config (defaults if no file is found)

    Raises:
        ConfigError: If the file is unreadable or has invalid values
    """
    config_file = path if path is not None else find_config_file()
    if config_file is None:
        return CaptionCutConfig()

    if not config_file.exists():
        raise ConfigError(f"Config file not found: {config_file}")

    try:
        with open(config_file, encoding="utf-8") as f:
            raw_config = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {config_file}: {e}") from e

    if not isinstance(raw_config, dict):
        raise ConfigError(f"{config_file} must contain a mapping")

    prompts_dir = raw_config.get("prompts_dir")
    if prompts_dir is not None:
        raw_config["prompts_dir"] = (config_file.parent / prompts_dir).resolve()
    raw_config["config_path"] = config_file

    try:
        return CaptionCutConfig(**raw_config)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration in {config_file}:\n{e}") from e


def create_default_config(style: str = CaptionStyle.REELS.value) -> dict[str, Any]:
    """Create a default config dict for a new working directory."""
    defaults = CaptionCutConfig(default_style=style)
    return {
        "max_file_size_mb": defaults.max_file_size_mb,
        "default_style": defaults.default_style,
        "transcription_model": defaults.transcription_model,
        "transcription_timeout": defaults.transcription_timeout,
        "api_key_env": defaults.api_key_env,
        "export_suffix": defaults.export_suffix,
    }


def write_config(config: dict[str, Any], path: Path) -> None:
    """Write configuration to a YAML file."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        yaml.dump(config, f, default_flow_style=False, sort_keys=False)
