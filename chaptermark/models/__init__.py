"""Shared typed data models for chaptermark.

This package contains dataclasses used across chapter modules to avoid
cross-module coupling and circular imports.
"""

from .datatypes import ChapterMark, CoverImage, NormalizedChapter
from .frames import ChapterFrame, ImageFrame, TextFrame, TocFrame, UrlFrame

__all__ = [
    "ChapterFrame",
    "ChapterMark",
    "CoverImage",
    "ImageFrame",
    "NormalizedChapter",
    "TextFrame",
    "TocFrame",
    "UrlFrame",
]
