"""Chapter mark normalization.

Responsibilities:
- Resolve start/end timecodes into millisecond offsets.
- Default a missing end to the total audio duration.
- Attach the run's cover image to every chapter.
"""

from __future__ import annotations

from collections.abc import Iterable

from ..models.datatypes import ChapterMark, CoverImage, NormalizedChapter
from ..parsing import normalize_optional_string
from .timecode import TimecodeParser


class ChapterMarkNormalizer:
    """Turn raw chapter marks into ordered `NormalizedChapter` records."""

    def __init__(self, timecode_parser: TimecodeParser | None = None) -> None:
        self._timecode_parser = timecode_parser or TimecodeParser()

    def normalize(
        self,
        raw_marks: Iterable[ChapterMark],
        total_duration_ms: int,
        cover_image: CoverImage | None = None,
    ) -> list[NormalizedChapter]:
        """Normalize marks in input order.

        Overlapping or out-of-order marks pass through unchanged; output order
        is the only thing later element identifiers depend on.
        """

        return [
            self._normalize_mark(mark, total_duration_ms, cover_image) for mark in raw_marks
        ]

    def _normalize_mark(
        self,
        mark: ChapterMark,
        total_duration_ms: int,
        cover_image: CoverImage | None,
    ) -> NormalizedChapter:
        end_ms = self._timecode_parser.parse(mark.end)
        return NormalizedChapter(
            start_ms=self._timecode_parser.parse(mark.start),
            end_ms=total_duration_ms if end_ms is None else end_ms,
            title=normalize_optional_string(mark.title),
            url=normalize_optional_string(mark.url),
            image_mime=cover_image.mime if cover_image is not None else None,
            image_data=cover_image.data if cover_image is not None else None,
        )
