"""Top-level package for chaptermark.

This package writes ID3v2 chapter-extension metadata (`CHAP` and `CTOC`
frames) into MP3 files. The main orchestration entry point is `ChapterWriter`.
"""

from .writer import ChapterWriter

__all__ = ["ChapterWriter", "__version__"]

__version__ = "0.1.0"
