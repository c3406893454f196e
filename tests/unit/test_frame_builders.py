"""Unit tests for chapter and table-of-contents frame builders."""

from __future__ import annotations

import pytest

from chaptermark.chapters.builders import (
    ChapterFrameBuilder,
    TocFrameBuilder,
    chapter_element_id,
)
from chaptermark.errors import MissingRequiredFieldError
from chaptermark.models.datatypes import NormalizedChapter
from chaptermark.models.frames import (
    UNSPECIFIED_BYTE_OFFSET,
    ChapterFrame,
    ImageFrame,
    TextFrame,
    TocFrame,
    UrlFrame,
)


@pytest.mark.parametrize(("index", "expected"), [(0, "CH1"), (1, "CH2"), (41, "CH42")])
def test_chapter_element_id_is_one_based(index: int, expected: str) -> None:
    """Element ids should be `CH` followed by the 1-based position."""

    assert chapter_element_id(index) == expected


def test_build_minimal_chapter_frame() -> None:
    """A chapter with only times should yield a frame without sub-frames."""

    frame = ChapterFrameBuilder().build(NormalizedChapter(start_ms=3000, end_ms=5000), 0)

    assert frame == ChapterFrame(
        element_id="CH1",
        start_ms=3000,
        end_ms=5000,
        start_byte_offset=0xFFFFFFFF,
        end_byte_offset=0xFFFFFFFF,
        embedded=(),
    )
    assert UNSPECIFIED_BYTE_OFFSET == 0xFFFFFFFF


def test_build_embeds_title_url_and_image_in_fixed_order() -> None:
    """Sub-frames should follow the title, URL, image order."""

    chapter = NormalizedChapter(
        start_ms=0,
        end_ms=1000,
        title="Opening",
        url="https://example.test/1",
        image_mime="image/jpeg",
        image_data=b"jpeg-bytes",
    )

    frame = ChapterFrameBuilder().build(chapter, 2)

    assert frame.element_id == "CH3"
    assert frame.embedded == (
        TextFrame(text="Opening"),
        UrlFrame(url="https://example.test/1"),
        ImageFrame(mime="image/jpeg", data=b"jpeg-bytes"),
    )
    title_frame, url_frame, image_frame = frame.embedded
    assert title_frame.encoding == "utf-8"
    assert url_frame.description == "chapter URL"
    assert image_frame.encoding == "latin-1"
    assert image_frame.role == "Other"


def test_build_without_title_has_no_title_sub_frame() -> None:
    """Missing titles should produce no text sub-frame at all."""

    chapter = NormalizedChapter(start_ms=0, end_ms=1000, url="https://example.test")

    frame = ChapterFrameBuilder().build(chapter, 0)

    assert not any(isinstance(sub_frame, TextFrame) for sub_frame in frame.embedded)
    assert frame.embedded == (UrlFrame(url="https://example.test"),)


def test_build_rejects_missing_start() -> None:
    """A chapter without a start offset should be rejected explicitly."""

    with pytest.raises(MissingRequiredFieldError) as exc_info:
        ChapterFrameBuilder().build(NormalizedChapter(start_ms=None, end_ms=1000), 4)

    assert exc_info.value.field_name == "start"
    assert exc_info.value.stage == "build"
    assert "Chapter 5" in exc_info.value.detail


def test_build_is_deterministic() -> None:
    """Identical inputs should build identical frames."""

    chapter = NormalizedChapter(start_ms=10, end_ms=20, title="Same")
    builder = ChapterFrameBuilder()

    assert builder.build(chapter, 0) == builder.build(chapter, 0)


def test_toc_children_match_chapter_ids_in_input_order() -> None:
    """TOC children should list `CH1..CHN` in input order, not chronological order."""

    chapters = [
        NormalizedChapter(start_ms=50000, end_ms=60000),
        NormalizedChapter(start_ms=0, end_ms=10000),
        NormalizedChapter(start_ms=20000, end_ms=30000),
    ]

    toc = TocFrameBuilder().build(chapters)
    frames = ChapterFrameBuilder().build_all(chapters)

    assert toc.children == ("CH1", "CH2", "CH3")
    assert [frame.element_id for frame in frames] == list(toc.children)
    assert toc.element_id == "TOC"
    assert toc.is_top_level is True
    assert toc.is_ordered is True


def test_toc_for_empty_chapters_has_no_children() -> None:
    """An empty chapter list is valid and yields an empty TOC."""

    assert TocFrameBuilder().build([]) == TocFrame(children=())
    assert ChapterFrameBuilder().build_all([]) == []
