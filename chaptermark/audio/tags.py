"""ID3v2 tag store backed by `mutagen`.

Responsibilities:
- Open an MP3 file's ID3v2 tag with a scoped lifetime.
- Expose the frame listing and add/remove/title/persist operations used by
  `TagSynchronizer`.
- Convert chapter-extension frame records to and from mutagen frames.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from mutagen import MutagenError
from mutagen.id3 import (
    APIC,
    CHAP,
    CTOC,
    ID3,
    TIT2,
    WXXX,
    CTOCFlags,
    Encoding,
    Frame as ID3Frame,
    ID3NoHeaderError,
    PictureType,
)

from ..errors import ChapterWriteError, PersistFailedError
from ..models.frames import (
    CHAPTER_FRAME_TYPE,
    ENCODING_LATIN1,
    ENCODING_UTF8,
    IMAGE_FRAME_TYPE,
    PICTURE_ROLE_OTHER,
    TITLE_FRAME_TYPE,
    TOC_FRAME_TYPE,
    URL_FRAME_TYPE,
    ChapterFrame,
    Frame,
    ImageFrame,
    SubFrame,
    TextFrame,
    TocFrame,
    UrlFrame,
)


SUPPORTED_ID3_VERSIONS = frozenset({3, 4})

_ENCODINGS = {
    ENCODING_LATIN1: Encoding.LATIN1,
    ENCODING_UTF8: Encoding.UTF8,
}
_PICTURE_ROLES = {
    PICTURE_ROLE_OTHER: PictureType.OTHER,
}


class Mp3TagStore:
    """Mutable ID3v2 tag of one audio file.

    Edits stay in memory until `persist` writes them back to `path`.
    """

    def __init__(self, path: Path, tags: ID3, id3_version: int = 4) -> None:
        if id3_version not in SUPPORTED_ID3_VERSIONS:
            raise ValueError(f"Unsupported ID3v2 version `{id3_version}`. Supported: 3, 4.")
        self.path = path
        self.id3_version = id3_version
        self._tags = tags

    @classmethod
    @contextmanager
    def open(cls, path: Path, id3_version: int = 4) -> Iterator[Mp3TagStore]:
        """Open the tag of `path`, starting from an empty tag when none exists."""

        if not path.is_file():
            raise ChapterWriteError(
                stage="open",
                detail=f"Audio file not found: `{path}`.",
                hint="Verify the audio path exists.",
            )
        try:
            tags = ID3(str(path))
        except ID3NoHeaderError:
            tags = ID3()
        except MutagenError as exc:
            raise ChapterWriteError(
                stage="open",
                detail=f"Failed to read ID3 tag from `{path}`: {exc}",
                hint="Verify the file is a readable MP3 with a valid ID3v2 tag.",
            ) from exc
        yield cls(path, tags, id3_version=id3_version)

    def frames_of_type(self, kind: str) -> list[ID3Frame]:
        """Return existing frames of one frame type (`CHAP`, `CTOC`, ...)."""

        return list(self._tags.getall(kind))

    def remove(self, frame: ID3Frame) -> None:
        """Remove one frame previously returned by `frames_of_type`."""

        hash_key = frame.HashKey
        if hash_key in self._tags:
            del self._tags[hash_key]

    def add(self, frame: Frame) -> None:
        """Insert one chapter or TOC frame."""

        if isinstance(frame, ChapterFrame):
            self._tags.add(self._chapter_to_id3(frame))
        elif isinstance(frame, TocFrame):
            self._tags.add(self._toc_to_id3(frame))
        else:
            self._tags.add(self._sub_frame_to_id3(frame))

    def set_title(self, text: str) -> None:
        """Replace the tag display title."""

        self._tags.setall(TITLE_FRAME_TYPE, [TIT2(encoding=Encoding.UTF8, text=[text])])

    def title(self) -> str | None:
        """Return the current display title, if any."""

        frames = self._tags.getall(TITLE_FRAME_TYPE)
        if not frames or not frames[0].text:
            return None
        return str(frames[0].text[0])

    def persist(self) -> None:
        """Write the tag back to the audio file.

        Raises:
            PersistFailedError: If mutagen or the filesystem rejects the write.
        """

        try:
            if self.id3_version == 3:
                self._tags.update_to_v23()
            self._tags.save(str(self.path), v2_version=self.id3_version)
        except (MutagenError, OSError) as exc:
            raise PersistFailedError(f"Failed to write ID3 tag to `{self.path}`: {exc}") from exc

    def read_chapters(self) -> list[ChapterFrame]:
        """Return existing chapter frames, in TOC order when a TOC lists them."""

        by_id = {
            frame.element_id: self._chapter_from_id3(frame)
            for frame in self._tags.getall(CHAPTER_FRAME_TYPE)
        }
        ordered: list[ChapterFrame] = []
        for toc in self._tags.getall(TOC_FRAME_TYPE):
            for child_id in toc.child_element_ids:
                if child_id in by_id:
                    ordered.append(by_id.pop(child_id))
        ordered.extend(sorted(by_id.values(), key=lambda item: (item.start_ms, item.element_id)))
        return ordered

    def _chapter_to_id3(self, frame: ChapterFrame) -> CHAP:
        return CHAP(
            element_id=frame.element_id,
            start_time=frame.start_ms,
            end_time=frame.end_ms,
            start_offset=frame.start_byte_offset,
            end_offset=frame.end_byte_offset,
            sub_frames=[self._sub_frame_to_id3(sub_frame) for sub_frame in frame.embedded],
        )

    def _toc_to_id3(self, frame: TocFrame) -> CTOC:
        flags = 0
        if frame.is_top_level:
            flags |= CTOCFlags.TOP_LEVEL
        if frame.is_ordered:
            flags |= CTOCFlags.ORDERED
        return CTOC(
            element_id=frame.element_id,
            flags=flags,
            child_element_ids=list(frame.children),
            sub_frames=[],
        )

    def _sub_frame_to_id3(self, frame: SubFrame) -> TIT2 | WXXX | APIC:
        if isinstance(frame, TextFrame):
            return TIT2(encoding=_ENCODINGS[frame.encoding], text=[frame.text])
        if isinstance(frame, UrlFrame):
            return WXXX(
                encoding=_ENCODINGS[frame.encoding],
                desc=frame.description,
                url=frame.url,
            )
        return APIC(
            encoding=_ENCODINGS[frame.encoding],
            mime=frame.mime,
            type=_PICTURE_ROLES[frame.role],
            desc="",
            data=frame.data,
        )

    def _chapter_from_id3(self, frame: CHAP) -> ChapterFrame:
        embedded: list[SubFrame] = []
        for title_frame in frame.sub_frames.getall(TITLE_FRAME_TYPE):
            embedded.append(TextFrame(text=str(title_frame.text[0]) if title_frame.text else ""))
        for url_frame in frame.sub_frames.getall(URL_FRAME_TYPE):
            embedded.append(UrlFrame(url=url_frame.url, description=url_frame.desc))
        for image_frame in frame.sub_frames.getall(IMAGE_FRAME_TYPE):
            embedded.append(ImageFrame(mime=image_frame.mime, data=image_frame.data))
        return ChapterFrame(
            element_id=frame.element_id,
            start_ms=frame.start_time,
            end_ms=frame.end_time,
            start_byte_offset=frame.start_offset,
            end_byte_offset=frame.end_offset,
            embedded=tuple(embedded),
        )
