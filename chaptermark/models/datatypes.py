"""Core datatypes shared across chaptermark modules.

Responsibilities:
- Represent author-supplied chapter marks and their normalized form.
- Keep optional attributes explicit so "present" always means "render".

Key types:
- `ChapterMark`, `NormalizedChapter`, and `CoverImage`.
"""

from __future__ import annotations

from dataclasses import dataclass


COVER_IMAGE_MIME = "image/jpeg"


@dataclass(frozen=True, slots=True)
class ChapterMark:
    """One human-authored chapter mark as read from a chapters file.

    Attributes:
        start: Start timecode text (`SS`, `MM:SS`, `HH:MM:SS`).
        end: Optional end timecode text; defaults to the audio end.
        title: Optional chapter title.
        url: Optional chapter link.
    """

    start: str | None = None
    end: str | None = None
    title: str | None = None
    url: str | None = None


@dataclass(frozen=True, slots=True)
class CoverImage:
    """Raw cover image payload attached to every chapter.

    Attributes:
        data: Encoded image bytes.
        mime: Image MIME type.
    """

    data: bytes
    mime: str = COVER_IMAGE_MIME


@dataclass(frozen=True, slots=True)
class NormalizedChapter:
    """A chapter mark resolved to millisecond offsets and optional payloads.

    `start_ms` stays `None` when the source mark had no start; frame builders
    reject such records. Every other `None` field means "emit no sub-frame".

    Attributes:
        start_ms: Start offset in milliseconds.
        end_ms: End offset in milliseconds.
        title: Optional chapter title.
        url: Optional chapter link.
        image_mime: Cover image MIME type, when a cover is attached.
        image_data: Cover image bytes, when a cover is attached.
    """

    start_ms: int | None
    end_ms: int
    title: str | None = None
    url: str | None = None
    image_mime: str | None = None
    image_data: bytes | None = None
