"""Cover image loading for chapter picture sub-frames."""

from __future__ import annotations

from pathlib import Path

from ..models.datatypes import COVER_IMAGE_MIME, CoverImage


def load_cover_image(path: Path, mime: str = COVER_IMAGE_MIME) -> CoverImage:
    """Read cover image bytes from disk."""

    return CoverImage(data=path.read_bytes(), mime=mime)
