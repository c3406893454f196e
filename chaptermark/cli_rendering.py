"""CLI output and error rendering helpers.

This module centralizes user-facing CLI presentation for command diagnostics,
write summaries, and chapter listing rows.
"""

from __future__ import annotations

from typing import NoReturn

import typer

from .chapters.timecode import format_timecode
from .errors import ChapterWriteError
from .models.frames import ChapterFrame, TextFrame, UrlFrame


def exit_with_command_error(command_name: str, exc: Exception) -> NoReturn:
    """Print concise diagnostics for command failures and exit with code 1."""

    if isinstance(exc, ChapterWriteError):
        typer.secho(
            f"{command_name} failed at stage `{exc.stage}`: {exc.detail}",
            fg=typer.colors.RED,
            err=True,
        )
        if exc.hint:
            typer.secho(f"Hint: {exc.hint}", fg=typer.colors.YELLOW, err=True)
    else:
        typer.secho(f"{command_name} failed: {exc}", fg=typer.colors.RED, err=True)
    raise typer.Exit(code=1) from exc


def echo_chapter_list(chapters: list[ChapterFrame]) -> None:
    """Print one row per chapter: id, time range, title and link."""

    if not chapters:
        typer.echo("No chapters found.")
        return
    for chapter in chapters:
        title = next(
            (frame.text for frame in chapter.embedded if isinstance(frame, TextFrame)),
            "",
        )
        url = next(
            (frame.url for frame in chapter.embedded if isinstance(frame, UrlFrame)),
            None,
        )
        row = (
            f"{chapter.element_id} "
            f"{format_timecode(chapter.start_ms)}-{format_timecode(chapter.end_ms)} {title}"
        ).rstrip()
        if url:
            row = f"{row} <{url}>"
        typer.echo(row)
