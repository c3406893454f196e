"""Chapter writing orchestration.

Responsibilities:
- Copy the source audio to its destination.
- Run timecode normalization, frame building and tag synchronization.
- Emit stage telemetry and map failures to stage-aware errors.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
import shutil
from typing import TypeVar

from .audio.source import AudioSource
from .audio.tags import Mp3TagStore
from .chapters.builders import ChapterFrameBuilder, TocFrameBuilder
from .chapters.normalizer import ChapterMarkNormalizer
from .chapters.synchronizer import TagSynchronizer, fresh_display_title
from .chapters.timecode import TimecodeParser
from .config import ChaptermarkConfig
from .errors import ChapterWriteError
from .io.cover import load_cover_image
from .io.marks import load_chapter_marks
from .models.datatypes import ChapterMark, CoverImage, NormalizedChapter
from .models.frames import ChapterFrame, TocFrame
from .telemetry.logger import RunLogger

_StageResult = TypeVar("_StageResult")


@dataclass(frozen=True, slots=True)
class WriteResult:
    """Summary of one completed chapter write.

    Attributes:
        target_audio: File whose tag now carries the chapters.
        title: Display title written to the tag.
        duration_ms: Total duration used for open-ended chapters.
        chapters: Chapter frames written, in TOC order.
        toc: Table of contents frame written.
    """

    target_audio: Path
    title: str
    duration_ms: int
    chapters: tuple[ChapterFrame, ...]
    toc: TocFrame


class ChapterWriter:
    """Write ID3v2 chapter and TOC frames into an MP3 file."""

    _PHASE_SEQUENCE = (
        "copy",
        "duration",
        "load",
        "normalize",
        "build",
        "sync",
    )

    def __init__(
        self,
        run_logger: RunLogger | None = None,
        stage_progress_callback: Callable[[str, int, int], None] | None = None,
        synchronizer: TagSynchronizer | None = None,
    ) -> None:
        self._run_logger = run_logger
        self._stage_progress_callback = stage_progress_callback
        self._synchronizer = synchronizer or TagSynchronizer()
        self._chapter_builder = ChapterFrameBuilder()
        self._toc_builder = TocFrameBuilder()

    def write(self, config: ChaptermarkConfig) -> WriteResult:
        """Replace chapter frames in the configured target audio file."""

        config.validate()
        target = config.target_audio
        self._run_stage(
            "copy",
            lambda: self._copy_audio(config.input_audio, target),
            source=config.input_audio,
            target=target,
        )
        duration_ms = self._run_stage(
            "duration",
            lambda: AudioSource(target, duration_override_ms=config.duration_ms).duration_ms(),
            override=config.duration_ms is not None,
        )
        marks, cover_image = self._run_stage(
            "load",
            lambda: self._load_inputs(config),
            chapters_file=config.chapters_file,
        )
        normalizer = ChapterMarkNormalizer(TimecodeParser(config.timecode_mode))
        normalized = self._run_stage(
            "normalize",
            lambda: normalizer.normalize(marks, duration_ms, cover_image),
            marks=len(marks),
            mode=config.timecode_mode,
        )
        chapters, toc = self._run_stage(
            "build",
            lambda: self._build_frames(normalized),
            chapters=len(normalized),
        )
        title = config.title if config.title is not None else fresh_display_title()
        self._run_stage(
            "sync",
            lambda: self._sync_tag(target, config.id3_version, chapters, toc, title),
            chapters=len(chapters),
            id3_version=config.id3_version,
        )

        return WriteResult(
            target_audio=target,
            title=title,
            duration_ms=duration_ms,
            chapters=tuple(chapters),
            toc=toc,
        )

    def list_chapters(self, audio_path: Path) -> list[ChapterFrame]:
        """Return the chapter frames currently stored in `audio_path`."""

        with Mp3TagStore.open(audio_path) as tag_store:
            return tag_store.read_chapters()

    def _copy_audio(self, source: Path, target: Path) -> None:
        """Copy source audio to the target path unless both are the same file."""

        if not source.is_file():
            raise ChapterWriteError(
                stage="copy",
                detail=f"Input audio not found: `{source}`.",
                hint="Pass an existing MP3 path.",
            )
        if target.exists() and source.resolve() == target.resolve():
            return
        target.parent.mkdir(parents=True, exist_ok=True)
        shutil.copyfile(source, target)

    def _load_inputs(
        self, config: ChaptermarkConfig
    ) -> tuple[list[ChapterMark], CoverImage | None]:
        """Load chapter marks and the optional cover image."""

        try:
            marks = load_chapter_marks(config.chapters_file)
        except FileNotFoundError as exc:
            raise ChapterWriteError(
                stage="load",
                detail=f"Chapters file not found: `{config.chapters_file}`.",
                hint="Provide an existing YAML or JSON chapters file.",
            ) from exc
        except ValueError as exc:
            raise ChapterWriteError(
                stage="load",
                detail=f"Invalid chapters file `{config.chapters_file}`: {exc}",
                hint="Use a list of marks with `start`, `end`, `title` and `url` keys.",
            ) from exc

        if config.cover_image is None:
            return marks, None
        try:
            return marks, load_cover_image(config.cover_image)
        except OSError as exc:
            raise ChapterWriteError(
                stage="load",
                detail=f"Failed to read cover image `{config.cover_image}`: {exc}",
                hint="Verify the cover image path and file permissions.",
            ) from exc

    def _build_frames(
        self, normalized: list[NormalizedChapter]
    ) -> tuple[list[ChapterFrame], TocFrame]:
        return self._chapter_builder.build_all(normalized), self._toc_builder.build(normalized)

    def _sync_tag(
        self,
        target: Path,
        id3_version: int,
        chapters: list[ChapterFrame],
        toc: TocFrame,
        title: str,
    ) -> None:
        with Mp3TagStore.open(target, id3_version=id3_version) as tag_store:
            self._synchronizer.synchronize(tag_store, chapters, toc, title=title)

    def _stage_position(self, stage_name: str) -> tuple[int, int] | None:
        """Return 1-based stage index and total stage count for known stages."""

        try:
            index = self._PHASE_SEQUENCE.index(stage_name) + 1
        except ValueError:
            return None
        return index, len(self._PHASE_SEQUENCE)

    def _run_stage(
        self,
        stage_name: str,
        action: Callable[[], _StageResult],
        **context: object,
    ) -> _StageResult:
        """Run one named stage and emit start/complete/failure telemetry events."""

        stage_position = self._stage_position(stage_name)
        if stage_position and self._stage_progress_callback is not None:
            self._stage_progress_callback(stage_name, stage_position[0], stage_position[1])
        if self._run_logger is not None:
            self._run_logger.log_stage_start(stage_name, **context)
        try:
            result = action()
        except Exception as exc:
            if self._run_logger is not None:
                self._run_logger.log_stage_failure(stage_name, type(exc).__name__)
            if isinstance(exc, ChapterWriteError):
                raise
            raise ChapterWriteError(
                stage=stage_name,
                detail=f"Stage `{stage_name}` failed: {exc}",
            ) from exc
        if self._run_logger is not None:
            self._run_logger.log_stage_complete(stage_name)
        return result
