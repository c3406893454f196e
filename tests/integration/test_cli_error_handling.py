"""CLI error-handling tests for stage-aware diagnostics."""

from __future__ import annotations

from pathlib import Path

from mutagen.id3 import ID3, ID3NoHeaderError
from pytest import MonkeyPatch
import pytest
from typer.testing import CliRunner

from chaptermark.cli import app
from chaptermark.errors import PersistFailedError


def test_write_command_reports_invalid_timecode(fake_audio_path: Path, tmp_path: Path) -> None:
    """Strict parsing failures should name the stage, the timecode and a hint."""

    chapters_path = tmp_path / "chapters.yaml"
    chapters_path.write_text('- start: "00:xx:03"\n', encoding="utf-8")

    runner = CliRunner()
    result = runner.invoke(
        app,
        ["write", str(fake_audio_path), str(chapters_path), "--duration-ms", "1000"],
    )

    assert result.exit_code == 1
    assert "write failed at stage `timecode`: Invalid timecode `00:xx:03`." in result.output
    assert "Hint: Use `SS`, `MM:SS` or `HH:MM:SS` with numeric fields." in result.output
    assert "[phase] level=ERROR stage=normalize event=failure" in result.output
    with pytest.raises(ID3NoHeaderError):
        ID3(str(fake_audio_path))


def test_write_command_reports_missing_start(fake_audio_path: Path, tmp_path: Path) -> None:
    """A mark without a start should fail at the build stage."""

    chapters_path = tmp_path / "chapters.yaml"
    chapters_path.write_text("- title: No start\n", encoding="utf-8")

    runner = CliRunner()
    result = runner.invoke(
        app,
        ["write", str(fake_audio_path), str(chapters_path), "--duration-ms", "1000"],
    )

    assert result.exit_code == 1
    assert (
        "write failed at stage `build`: Chapter 1 is missing required field `start`."
        in result.output
    )


def test_write_command_reports_persist_failure(
    monkeypatch: MonkeyPatch, fake_audio_path: Path, tmp_path: Path
) -> None:
    """Commit failures should surface as `persist` stage errors."""

    def _failing_persist(self: object) -> None:
        _ = self
        raise PersistFailedError("Failed to write ID3 tag: disk full")

    monkeypatch.setattr("chaptermark.audio.tags.Mp3TagStore.persist", _failing_persist)
    chapters_path = tmp_path / "chapters.yaml"
    chapters_path.write_text('- start: "1"\n', encoding="utf-8")

    runner = CliRunner()
    result = runner.invoke(
        app,
        ["write", str(fake_audio_path), str(chapters_path), "--duration-ms", "1000"],
    )

    assert result.exit_code == 1
    assert "write failed at stage `persist`: Failed to write ID3 tag: disk full" in result.output
    assert "Hint: Check that the output file exists" in result.output


def test_write_command_requires_inputs_without_config() -> None:
    """Without `--config` both positional paths are required."""

    runner = CliRunner()
    result = runner.invoke(app, ["write"])

    assert result.exit_code == 1
    assert "write failed at stage `config`" in result.output


def test_write_command_reports_missing_config_file() -> None:
    """A missing `--config` path should fail with a config-stage error."""

    runner = CliRunner()
    result = runner.invoke(app, ["write", "--config", "missing-chaptermark.yaml"])

    assert result.exit_code == 1
    assert "Config file not found: `missing-chaptermark.yaml`." in result.output


def test_write_command_reports_missing_input_audio(tmp_path: Path) -> None:
    """A missing input file should fail at the copy stage."""

    chapters_path = tmp_path / "chapters.yaml"
    chapters_path.write_text("[]\n", encoding="utf-8")

    runner = CliRunner()
    result = runner.invoke(
        app, ["write", str(tmp_path / "absent.mp3"), str(chapters_path)]
    )

    assert result.exit_code == 1
    assert "write failed at stage `copy`: Input audio not found" in result.output


def test_write_command_reports_invalid_chapters_file(
    fake_audio_path: Path, tmp_path: Path
) -> None:
    """Malformed chapter payloads should fail at the load stage."""

    chapters_path = tmp_path / "chapters.yaml"
    chapters_path.write_text("- begin: 1\n", encoding="utf-8")

    runner = CliRunner()
    result = runner.invoke(
        app,
        ["write", str(fake_audio_path), str(chapters_path), "--duration-ms", "1000"],
    )

    assert result.exit_code == 1
    assert "write failed at stage `load`" in result.output
    assert "unsupported key(s): begin" in result.output


def test_write_command_reports_unprobeable_audio(fake_audio_path: Path, tmp_path: Path) -> None:
    """Audio without decodable frames needs an explicit duration."""

    chapters_path = tmp_path / "chapters.yaml"
    chapters_path.write_text('- start: "1"\n', encoding="utf-8")

    runner = CliRunner()
    result = runner.invoke(app, ["write", str(fake_audio_path), str(chapters_path)])

    assert result.exit_code == 1
    assert "write failed at stage `duration`" in result.output
    assert "--duration-ms" in result.output
