"""Chapter and table-of-contents frame builders.

Both builders derive element identifiers through `chapter_element_id`, so the
TOC children always name the chapter frames built for the same sequence.
"""

from __future__ import annotations

from collections.abc import Sequence

from ..errors import MissingRequiredFieldError
from ..models.datatypes import NormalizedChapter
from ..models.frames import (
    CHAPTER_ELEMENT_PREFIX,
    UNSPECIFIED_BYTE_OFFSET,
    ChapterFrame,
    ImageFrame,
    SubFrame,
    TextFrame,
    TocFrame,
    UrlFrame,
)


def chapter_element_id(index: int) -> str:
    """Return the element id for the 0-based chapter `index`."""

    return f"{CHAPTER_ELEMENT_PREFIX}{index + 1}"


class ChapterFrameBuilder:
    """Build one chapter frame per normalized chapter."""

    def build(self, chapter: NormalizedChapter, index: int) -> ChapterFrame:
        """Build the chapter frame for `chapter` at 0-based position `index`.

        Raises:
            MissingRequiredFieldError: If the chapter has no start offset.
        """

        if chapter.start_ms is None:
            raise MissingRequiredFieldError("start", index)

        return ChapterFrame(
            element_id=chapter_element_id(index),
            start_ms=int(chapter.start_ms),
            end_ms=int(chapter.end_ms),
            start_byte_offset=UNSPECIFIED_BYTE_OFFSET,
            end_byte_offset=UNSPECIFIED_BYTE_OFFSET,
            embedded=self._embedded_frames(chapter),
        )

    def build_all(self, chapters: Sequence[NormalizedChapter]) -> list[ChapterFrame]:
        """Build chapter frames for a whole ordered sequence."""

        return [self.build(chapter, index) for index, chapter in enumerate(chapters)]

    def _embedded_frames(self, chapter: NormalizedChapter) -> tuple[SubFrame, ...]:
        """Build title, URL and image sub-frames for the fields that are present."""

        frames: list[SubFrame] = []
        if chapter.title is not None:
            frames.append(TextFrame(text=chapter.title))
        if chapter.url is not None:
            frames.append(UrlFrame(url=chapter.url))
        if chapter.image_data is not None and chapter.image_mime is not None:
            frames.append(ImageFrame(mime=chapter.image_mime, data=chapter.image_data))
        return tuple(frames)


class TocFrameBuilder:
    """Build the single top-level ordered table of contents."""

    def build(self, chapters: Sequence[NormalizedChapter]) -> TocFrame:
        return TocFrame(
            children=tuple(chapter_element_id(index) for index in range(len(chapters)))
        )
