"""Chapter frame synthesis: timecodes, normalization, builders and tag sync."""

from .builders import ChapterFrameBuilder, TocFrameBuilder, chapter_element_id
from .normalizer import ChapterMarkNormalizer
from .synchronizer import TagStoreProtocol, TagSynchronizer
from .timecode import TimecodeParser, format_timecode

__all__ = [
    "ChapterFrameBuilder",
    "ChapterMarkNormalizer",
    "TagStoreProtocol",
    "TagSynchronizer",
    "TimecodeParser",
    "TocFrameBuilder",
    "chapter_element_id",
    "format_timecode",
]
