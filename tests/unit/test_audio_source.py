"""Unit tests for MP3 duration probing."""

from __future__ import annotations

from pathlib import Path

from mutagen.mp3 import MP3
import pytest

from chaptermark.audio.source import AudioSource
from chaptermark.errors import ChapterWriteError


def test_duration_ms_probes_mpeg_frames_and_truncates(mpeg_audio_path: Path) -> None:
    """Probed duration should be the MP3 length truncated to whole milliseconds."""

    duration_ms = AudioSource(mpeg_audio_path).duration_ms()

    assert duration_ms == int(MP3(str(mpeg_audio_path)).info.length * 1000)
    assert 1000 <= duration_ms <= 1100


def test_duration_override_skips_probing(fake_audio_path: Path) -> None:
    """An explicit duration should be returned without decoding the file."""

    assert AudioSource(fake_audio_path, duration_override_ms=42000).duration_ms() == 42000


def test_duration_ms_reports_undecodable_audio(fake_audio_path: Path) -> None:
    """Files without MPEG frames should fail at the duration stage."""

    with pytest.raises(ChapterWriteError) as exc_info:
        AudioSource(fake_audio_path).duration_ms()

    assert exc_info.value.stage == "duration"
