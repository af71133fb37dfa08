"""Tests for captioncut.config module."""

from __future__ import annotations

from pathlib import Path

import pytest
import yaml

from captioncut.config import (
    CONFIG_FILENAME,
    CaptionCutConfig,
    create_default_config,
    find_config_file,
    load_config,
    write_config,
)
from captioncut.exceptions import ConfigError


class TestDefaults:
    def test_default_values(self) -> None:
        config = CaptionCutConfig()
        assert config.max_file_size_mb == 50
        assert config.default_style == "reels"
        assert config.transcription_model == "gemini/gemini-3-flash-preview"
        assert config.transcription_timeout == 300
        assert config.api_key_env == "GEMINI_API_KEY"
        assert config.decode_sample_rate is None
        assert config.export_suffix == "_CaptionCut"

    def test_invalid_style(self) -> None:
        with pytest.raises(ValueError, match="default_style"):
            CaptionCutConfig(default_style="karaoke")

    def test_suffix_with_separator(self) -> None:
        with pytest.raises(ValueError, match="path separators"):
            CaptionCutConfig(export_suffix="../evil")

    def test_non_positive_limit(self) -> None:
        with pytest.raises(ValueError):
            CaptionCutConfig(max_file_size_mb=0)


class TestLoadConfig:
    def test_load_from_file(self, config_file: Path) -> None:
        config = load_config(config_file)
        assert config.default_style == "standard"
        assert config.transcription_model == "gemini/test-model"
        assert config.api_key_env == "CAPTIONCUT_TEST_KEY"
        assert config.config_path == config_file

    def test_no_file_gives_defaults(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setattr("captioncut.config.find_config_file", lambda start=None: None)
        config = load_config()
        assert config == CaptionCutConfig()

    def test_explicit_missing_path(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="not found"):
            load_config(tmp_path / "nope.yaml")

    def test_invalid_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / CONFIG_FILENAME
        path.write_text("default_style: [unclosed\n")
        with pytest.raises(ConfigError, match="Invalid YAML"):
            load_config(path)

    def test_non_mapping(self, tmp_path: Path) -> None:
        path = tmp_path / CONFIG_FILENAME
        path.write_text("- a\n- b\n")
        with pytest.raises(ConfigError, match="mapping"):
            load_config(path)

    def test_invalid_value(self, tmp_path: Path) -> None:
        path = tmp_path / CONFIG_FILENAME
        path.write_text("default_style: karaoke\n")
        with pytest.raises(ConfigError, match="Invalid configuration"):
            load_config(path)

    def test_empty_file_gives_defaults(self, tmp_path: Path) -> None:
        path = tmp_path / CONFIG_FILENAME
        path.write_text("")
        assert load_config(path).default_style == "reels"

    def test_prompts_dir_relative_to_config(self, tmp_path: Path) -> None:
        path = tmp_path / CONFIG_FILENAME
        path.write_text("prompts_dir: prompts\n")
        config = load_config(path)
        assert config.prompts_dir == (tmp_path / "prompts").resolve()


class TestFindConfigFile:
    def test_found_in_parent(self, config_file: Path) -> None:
        nested = config_file.parent / "a" / "b"
        nested.mkdir(parents=True)
        assert find_config_file(nested) == config_file.resolve()

    def test_found_in_start_dir(self, config_file: Path) -> None:
        assert find_config_file(config_file.parent) == config_file.resolve()


class TestWriteConfig:
    def test_default_config_round_trip(self, tmp_path: Path) -> None:
        path = tmp_path / CONFIG_FILENAME
        write_config(create_default_config("fast"), path)

        with open(path) as f:
            raw = yaml.safe_load(f)
        assert raw["default_style"] == "fast"
        assert load_config(path).default_style == "fast"

    def test_default_config_rejects_bad_style(self) -> None:
        with pytest.raises(ValueError):
            create_default_config("karaoke")
