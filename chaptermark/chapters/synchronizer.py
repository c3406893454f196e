"""Replace chapter navigation frames in a tag store.

Responsibilities:
- Define the tag store operations the synchronizer depends on.
- Apply the remove-then-insert edit sequence and commit it.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime
from typing import Protocol, TypeVar

from ..errors import PersistFailedError
from ..models.frames import CHAPTER_FRAME_TYPE, TOC_FRAME_TYPE, ChapterFrame, Frame, TocFrame


class TagStoreProtocol(Protocol):
    """Protocol for the tag operations used during synchronization."""

    def frames_of_type(self, kind: str) -> Sequence[object]:
        """Return existing frames of one frame type."""

    def remove(self, frame: object) -> None:
        """Remove one existing frame."""

    def add(self, frame: Frame) -> None:
        """Insert one new frame."""

    def set_title(self, text: str) -> None:
        """Replace the tag display title."""

    def persist(self) -> None:
        """Commit pending edits to the underlying file."""


TagStoreT = TypeVar("TagStoreT", bound=TagStoreProtocol)


def fresh_display_title(now: datetime | None = None) -> str:
    """Return the run-stamped display title written on every synchronization."""

    moment = now if now is not None else datetime.now()
    return f"changed at {moment.isoformat(timespec='seconds')}"


class TagSynchronizer:
    """Replace every chapter and TOC frame of a tag with freshly built ones.

    No rollback is attempted: a failed commit leaves the store in whatever
    state the edits reached.
    """

    def synchronize(
        self,
        tag_store: TagStoreT,
        chapters: Sequence[ChapterFrame],
        toc: TocFrame,
        title: str | None = None,
    ) -> TagStoreT:
        """Apply chapter frames and the TOC to `tag_store`, then persist it.

        Raises:
            PersistFailedError: If committing the store fails.
        """

        tag_store.set_title(title if title is not None else fresh_display_title())
        self._remove_all(tag_store, CHAPTER_FRAME_TYPE)
        self._remove_all(tag_store, TOC_FRAME_TYPE)
        for chapter in chapters:
            tag_store.add(chapter)
        tag_store.add(toc)

        try:
            tag_store.persist()
        except PersistFailedError:
            raise
        except Exception as exc:
            raise PersistFailedError(f"Failed to persist tag: {exc}") from exc
        return tag_store

    def _remove_all(self, tag_store: TagStoreProtocol, kind: str) -> None:
        """Remove every existing frame of `kind`."""

        for frame in list(tag_store.frames_of_type(kind)):
            tag_store.remove(frame)
