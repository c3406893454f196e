"""Configuration model and loaders for chaptermark.

Responsibilities:
- Define runtime configuration as a typed dataclass.
- Provide loader entry points for file- and environment-based configuration.

Key types:
- `ChaptermarkConfig`: normalized settings for one chapter write.
- `ConfigLoader`: static construction helpers for `ChaptermarkConfig`.
"""

from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path
from typing import Any, Mapping

import yaml

from .audio.tags import SUPPORTED_ID3_VERSIONS
from .chapters.timecode import TIMECODE_MODES
from .parsing import normalize_optional_string


_DEFAULT_TIMECODE_MODE = "strict"
_DEFAULT_ID3_VERSION = 4


@dataclass(slots=True)
class ChaptermarkConfig:
    """Runtime configuration for one chapter write.

    Attributes:
        input_audio: Source MP3 file.
        chapters_file: YAML or JSON chapter-marks file.
        output_audio: Destination MP3; `None` writes chapters into `input_audio`.
        cover_image: Optional image attached to every chapter.
        title: Optional display title; a run-stamped title is used when unset.
        timecode_mode: `strict` rejects malformed timecodes, `permissive` zeroes them.
        id3_version: ID3v2 minor version written on save (3 or 4).
        duration_ms: Optional total duration override, skipping audio probing.
    """

    input_audio: Path
    chapters_file: Path
    output_audio: Path | None = None
    cover_image: Path | None = None
    title: str | None = None
    timecode_mode: str = _DEFAULT_TIMECODE_MODE
    id3_version: int = _DEFAULT_ID3_VERSION
    duration_ms: int | None = None

    def validate(self) -> None:
        """Validate configuration values before a chapter write."""

        if self.timecode_mode not in TIMECODE_MODES:
            raise ValueError(
                f"`timecode_mode` must be one of: {', '.join(sorted(TIMECODE_MODES))}."
            )
        if self.id3_version not in SUPPORTED_ID3_VERSIONS:
            raise ValueError("`id3_version` must be 3 or 4.")
        if self.duration_ms is not None and self.duration_ms < 0:
            raise ValueError("`duration_ms` must be a non-negative integer.")

    @property
    def target_audio(self) -> Path:
        """Return the file whose tag receives the chapters."""

        return self.output_audio if self.output_audio is not None else self.input_audio


class ConfigLoader:
    """Factory methods for loading `ChaptermarkConfig`."""

    _SUPPORTED_YAML_KEYS = frozenset(
        {
            "input_audio",
            "chapters_file",
            "output_audio",
            "cover_image",
            "title",
            "timecode_mode",
            "id3_version",
            "duration_ms",
        }
    )
    _REQUIRED_YAML_KEYS = frozenset({"input_audio", "chapters_file"})

    @staticmethod
    def from_yaml(path: Path) -> ChaptermarkConfig:
        """Create a validated config from a YAML file."""

        payload = yaml.safe_load(path.read_text(encoding="utf-8"))
        if payload is None:
            payload = {}
        if not isinstance(payload, Mapping):
            raise ValueError(f"YAML config `{path}` must contain a top-level mapping/object.")
        return ConfigLoader._build_config_from_mapping(payload, source_label=f"YAML `{path}`")

    @staticmethod
    def from_env(env: Mapping[str, str] | None = None) -> ChaptermarkConfig:
        """Create a validated config from `CHAPTERMARK_*` environment variables."""

        env_map: Mapping[str, str] = os.environ if env is None else env

        config = ChaptermarkConfig(
            input_audio=ConfigLoader._required_env_path(env_map, "CHAPTERMARK_INPUT_AUDIO"),
            chapters_file=ConfigLoader._required_env_path(env_map, "CHAPTERMARK_CHAPTERS_FILE"),
            output_audio=ConfigLoader._optional_env_path(env_map, "CHAPTERMARK_OUTPUT_AUDIO"),
            cover_image=ConfigLoader._optional_env_path(env_map, "CHAPTERMARK_COVER_IMAGE"),
            title=normalize_optional_string(env_map.get("CHAPTERMARK_TITLE")),
            timecode_mode=(
                normalize_optional_string(env_map.get("CHAPTERMARK_TIMECODE_MODE"))
                or _DEFAULT_TIMECODE_MODE
            ).lower(),
            id3_version=ConfigLoader._optional_int(
                env_map.get("CHAPTERMARK_ID3_VERSION"),
                "Environment variable `CHAPTERMARK_ID3_VERSION`",
                default=_DEFAULT_ID3_VERSION,
            ),
            duration_ms=ConfigLoader._optional_int(
                env_map.get("CHAPTERMARK_DURATION_MS"),
                "Environment variable `CHAPTERMARK_DURATION_MS`",
                default=None,
            ),
        )
        config.validate()
        return config

    @staticmethod
    def _build_config_from_mapping(
        payload: Mapping[str, Any], source_label: str
    ) -> ChaptermarkConfig:
        """Build a validated config from a normalized mapping payload."""

        ConfigLoader._validate_yaml_keys(payload, source_label)

        config = ChaptermarkConfig(
            input_audio=ConfigLoader._required_path(payload, "input_audio", source_label),
            chapters_file=ConfigLoader._required_path(payload, "chapters_file", source_label),
            output_audio=ConfigLoader._optional_path(payload, "output_audio"),
            cover_image=ConfigLoader._optional_path(payload, "cover_image"),
            title=normalize_optional_string(payload.get("title")),
            timecode_mode=(
                normalize_optional_string(payload.get("timecode_mode"))
                or _DEFAULT_TIMECODE_MODE
            ).lower(),
            id3_version=ConfigLoader._optional_int(
                payload.get("id3_version"),
                f"{source_label} field `id3_version`",
                default=_DEFAULT_ID3_VERSION,
            ),
            duration_ms=ConfigLoader._optional_int(
                payload.get("duration_ms"),
                f"{source_label} field `duration_ms`",
                default=None,
            ),
        )
        config.validate()
        return config

    @staticmethod
    def _validate_yaml_keys(payload: Mapping[str, Any], source_label: str) -> None:
        """Validate supported and required YAML keys."""

        unknown = sorted(set(payload).difference(ConfigLoader._SUPPORTED_YAML_KEYS))
        if unknown:
            key_list = ", ".join(unknown)
            raise ValueError(f"{source_label} includes unsupported key(s): {key_list}.")

        missing = sorted(
            key for key in ConfigLoader._REQUIRED_YAML_KEYS if key not in payload
        )
        if missing:
            key_list = ", ".join(missing)
            raise ValueError(f"{source_label} is missing required key(s): {key_list}.")

    @staticmethod
    def _required_path(payload: Mapping[str, Any], key: str, source_label: str) -> Path:
        """Read a required non-empty path-like field from a payload."""

        value = normalize_optional_string(payload.get(key))
        if value is None:
            raise ValueError(f"{source_label} requires non-empty `{key}`.")
        return Path(value)

    @staticmethod
    def _optional_path(payload: Mapping[str, Any], key: str) -> Path | None:
        """Read an optional path-like field, treating blank values as unset."""

        value = normalize_optional_string(payload.get(key))
        if value is None:
            return None
        return Path(value)

    @staticmethod
    def _optional_int(raw_value: object, label: str, default: int | None) -> int | None:
        """Parse an optional integer value from YAML or environment input."""

        if isinstance(raw_value, bool):
            raise ValueError(f"{label} must be an integer.")
        if isinstance(raw_value, int):
            return raw_value
        normalized = normalize_optional_string(raw_value)
        if normalized is None:
            return default
        try:
            return int(normalized)
        except ValueError as exc:
            raise ValueError(f"{label} must be an integer.") from exc

    @staticmethod
    def _required_env_path(env: Mapping[str, str], key: str) -> Path:
        """Read a required non-empty path value from environment mapping."""

        value = normalize_optional_string(env.get(key))
        if value is None:
            raise ValueError(f"Environment variable `{key}` is required.")
        return Path(value)

    @staticmethod
    def _optional_env_path(env: Mapping[str, str], key: str) -> Path | None:
        """Read an optional path value from environment mapping."""

        return ConfigLoader._optional_path(env, key)
