"""Input loaders for chapter marks and cover images."""

from .cover import load_cover_image
from .marks import load_chapter_marks, parse_chapter_marks

__all__ = ["load_chapter_marks", "load_cover_image", "parse_chapter_marks"]
