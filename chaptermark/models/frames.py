"""Tag frame records produced by the frame builders.

These are format-level descriptions of ID3v2 chapter-extension frames; the tag
store adapter turns them into concrete library frames on insertion.
"""

from __future__ import annotations

from dataclasses import dataclass, field


CHAPTER_FRAME_TYPE = "CHAP"
TOC_FRAME_TYPE = "CTOC"
TITLE_FRAME_TYPE = "TIT2"
URL_FRAME_TYPE = "WXXX"
IMAGE_FRAME_TYPE = "APIC"

CHAPTER_ELEMENT_PREFIX = "CH"
TOC_ELEMENT_ID = "TOC"
UNSPECIFIED_BYTE_OFFSET = 0xFFFFFFFF
CHAPTER_URL_DESCRIPTION = "chapter URL"

ENCODING_LATIN1 = "latin-1"
ENCODING_UTF8 = "utf-8"
PICTURE_ROLE_OTHER = "Other"


@dataclass(frozen=True, slots=True)
class TextFrame:
    """Chapter title sub-frame."""

    text: str
    kind: str = "title"
    encoding: str = ENCODING_UTF8


@dataclass(frozen=True, slots=True)
class UrlFrame:
    """User-defined link sub-frame."""

    url: str
    description: str = CHAPTER_URL_DESCRIPTION
    encoding: str = ENCODING_UTF8


@dataclass(frozen=True, slots=True)
class ImageFrame:
    """Attached picture sub-frame."""

    mime: str
    data: bytes
    encoding: str = ENCODING_LATIN1
    role: str = PICTURE_ROLE_OTHER


SubFrame = TextFrame | UrlFrame | ImageFrame


@dataclass(frozen=True, slots=True)
class ChapterFrame:
    """One navigable chapter segment with its embedded sub-frames.

    Attributes:
        element_id: Unique chapter key (`CH1`, `CH2`, ...).
        start_ms: Start offset in milliseconds.
        end_ms: End offset in milliseconds.
        start_byte_offset: Always `UNSPECIFIED_BYTE_OFFSET`.
        end_byte_offset: Always `UNSPECIFIED_BYTE_OFFSET`.
        embedded: Ordered sub-frames (title, URL, image).
    """

    element_id: str
    start_ms: int
    end_ms: int
    start_byte_offset: int = UNSPECIFIED_BYTE_OFFSET
    end_byte_offset: int = UNSPECIFIED_BYTE_OFFSET
    embedded: tuple[SubFrame, ...] = field(default_factory=tuple)


@dataclass(frozen=True, slots=True)
class TocFrame:
    """Top-level ordered table of contents referencing chapter element ids."""

    children: tuple[str, ...] = field(default_factory=tuple)
    element_id: str = TOC_ELEMENT_ID
    is_top_level: bool = True
    is_ordered: bool = True


Frame = ChapterFrame | TocFrame | TextFrame | UrlFrame | ImageFrame
