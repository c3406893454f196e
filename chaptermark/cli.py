"""Command-line interface for chaptermark.

Responsibilities:
- Expose user-facing commands for writing and listing chapters.
- Convert CLI arguments into `ChaptermarkConfig` and run the writer.

Key public functions:
- `app`: Typer application instance.
- `main`: invoke the Typer application.
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from .cli_rendering import echo_chapter_list, exit_with_command_error
from .config import ChaptermarkConfig, ConfigLoader
from .errors import ChapterWriteError
from .telemetry.logger import RunLogger
from .writer import ChapterWriter

app = typer.Typer(
    name="chaptermark",
    no_args_is_help=True,
    help="Write ID3v2 chapter frames into MP3 files.",
)


class WriteProgressIndicator:
    """Render deterministic per-stage progress lines for chapter writes."""

    _SPINNER_FRAMES = "|/-\\"

    def __init__(self, command_name: str) -> None:
        self._command_name = command_name

    def on_stage_start(self, stage_name: str, stage_index: int, stage_total: int) -> None:
        """Print one progress line for a stage start transition."""

        spinner = self._SPINNER_FRAMES[(stage_index - 1) % len(self._SPINNER_FRAMES)]
        typer.echo(
            f"[progress] command={self._command_name} "
            f"{spinner} {stage_index}/{stage_total} stage={stage_name}"
        )


def _load_yaml_config(config_path: Path | None) -> ChaptermarkConfig | None:
    """Load a YAML config file when requested and map failures to stage errors."""

    if config_path is None:
        return None

    try:
        return ConfigLoader.from_yaml(config_path)
    except FileNotFoundError as exc:
        raise ChapterWriteError(
            stage="config",
            detail=f"Config file not found: `{config_path}`.",
            hint="Provide an existing path via `--config <path.yaml>`.",
        ) from exc
    except ValueError as exc:
        raise ChapterWriteError(
            stage="config",
            detail=f"Invalid config file `{config_path}`: {exc}",
            hint="Fix config schema/values and rerun.",
        ) from exc
    except Exception as exc:
        raise ChapterWriteError(
            stage="config",
            detail=f"Failed to load config file `{config_path}`: {exc}",
            hint="Verify YAML syntax and file permissions.",
        ) from exc


def _resolve_write_config(
    config_file: Path | None,
    input_audio: Path | None,
    chapters_file: Path | None,
    out: Path | None,
    cover: Path | None,
    title: str | None,
    timecode_mode: str | None,
    id3_version: int | None,
    duration_ms: int | None,
) -> ChaptermarkConfig:
    """Resolve effective write config from YAML defaults and explicit CLI overrides."""

    loaded_config = _load_yaml_config(config_file)

    if loaded_config is None:
        if input_audio is None or chapters_file is None:
            raise ChapterWriteError(
                stage="config",
                detail="Input audio and chapters file are required when `--config` is not provided.",
                hint="Pass `<input.mp3> <chapters.yaml>` or use `--config <path.yaml>`.",
            )
        loaded_config = ChaptermarkConfig(input_audio=input_audio, chapters_file=chapters_file)

    resolved = ChaptermarkConfig(
        input_audio=input_audio if input_audio is not None else loaded_config.input_audio,
        chapters_file=(
            chapters_file if chapters_file is not None else loaded_config.chapters_file
        ),
        output_audio=out if out is not None else loaded_config.output_audio,
        cover_image=cover if cover is not None else loaded_config.cover_image,
        title=title if title is not None else loaded_config.title,
        timecode_mode=(
            timecode_mode.lower() if timecode_mode is not None else loaded_config.timecode_mode
        ),
        id3_version=id3_version if id3_version is not None else loaded_config.id3_version,
        duration_ms=duration_ms if duration_ms is not None else loaded_config.duration_ms,
    )
    try:
        resolved.validate()
    except ValueError as exc:
        raise ChapterWriteError(
            stage="config",
            detail=str(exc),
            hint="Fix the option value and rerun.",
        ) from exc
    return resolved


@app.command("write")
def write_command(
    input_audio: Annotated[
        Path | None,
        typer.Argument(help="Source MP3 file. Optional when `--config` provides it."),
    ] = None,
    chapters_file: Annotated[
        Path | None,
        typer.Argument(help="YAML or JSON chapter marks. Optional when `--config` provides it."),
    ] = None,
    out: Annotated[
        Path | None,
        typer.Option("--out", help="Destination MP3; defaults to editing the input in place."),
    ] = None,
    cover: Annotated[
        Path | None,
        typer.Option("--cover", help="JPEG image attached to every chapter."),
    ] = None,
    title: Annotated[
        str | None,
        typer.Option("--title", help="Display title written to the tag."),
    ] = None,
    timecode_mode: Annotated[
        str | None,
        typer.Option("--timecode-mode", help="`strict` (default) or `permissive`."),
    ] = None,
    id3_version: Annotated[
        int | None,
        typer.Option("--id3-version", help="ID3v2 minor version to write (3 or 4)."),
    ] = None,
    duration_ms: Annotated[
        int | None,
        typer.Option("--duration-ms", help="Total duration override in milliseconds."),
    ] = None,
    config_file: Annotated[
        Path | None,
        typer.Option("--config", help="YAML config file."),
    ] = None,
) -> None:
    """Replace all chapter and TOC frames of an MP3 file."""

    try:
        config = _resolve_write_config(
            config_file=config_file,
            input_audio=input_audio,
            chapters_file=chapters_file,
            out=out,
            cover=cover,
            title=title,
            timecode_mode=timecode_mode,
            id3_version=id3_version,
            duration_ms=duration_ms,
        )
        progress = WriteProgressIndicator(command_name="write")
        writer = ChapterWriter(
            run_logger=RunLogger(),
            stage_progress_callback=progress.on_stage_start,
        )
        result = writer.write(config)
    except Exception as exc:
        exit_with_command_error("write", exc)

    typer.echo(f"Output audio: {result.target_audio}")
    typer.echo(f"Title: {result.title}")
    typer.echo(f"Chapters written: {len(result.chapters)}")
    echo_chapter_list(list(result.chapters))


@app.command("list-chapters")
def list_chapters_command(
    audio: Annotated[Path, typer.Argument(help="MP3 file to inspect.")],
) -> None:
    """List chapter frames stored in an MP3 file."""

    try:
        chapters = ChapterWriter().list_chapters(audio)
    except Exception as exc:
        exit_with_command_error("list-chapters", exc)

    echo_chapter_list(chapters)


def main() -> None:
    """CLI entrypoint for console scripts."""
    app()


if __name__ == "__main__":
    main()
