"""Shared pytest fixtures for the full chaptermark test suite."""

from __future__ import annotations

from pathlib import Path

import pytest


@pytest.fixture
def fake_audio_path(tmp_path: Path) -> Path:
    """Provide an untagged placeholder audio file.

    ID3 tags can be written to any byte payload, so tag tests do not need
    decodable MPEG frames.
    """

    path = tmp_path / "input.mp3"
    path.write_bytes(b"\x00" * 512)
    return path


_MPEG1_LAYER3_128K_44K_HEADER = b"\xff\xfb\x90\x00"
_MPEG1_LAYER3_128K_44K_FRAME_SIZE = 417


@pytest.fixture
def mpeg_audio_path(tmp_path: Path) -> Path:
    """Provide an untagged CBR MP3 of 40 silent 128 kbps / 44.1 kHz frames (about 1 s)."""

    frame = _MPEG1_LAYER3_128K_44K_HEADER + b"\x00" * (
        _MPEG1_LAYER3_128K_44K_FRAME_SIZE - len(_MPEG1_LAYER3_128K_44K_HEADER)
    )
    path = tmp_path / "episode.mp3"
    path.write_bytes(frame * 40)
    return path
