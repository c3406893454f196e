"""Audio duration probing for chapter end defaults."""

from __future__ import annotations

from pathlib import Path

from mutagen import MutagenError
from mutagen.mp3 import MP3

from ..errors import ChapterWriteError


class AudioSource:
    """An MP3 file whose total duration bounds open-ended chapters."""

    def __init__(self, path: Path, duration_override_ms: int | None = None) -> None:
        self.path = path
        self._duration_override_ms = duration_override_ms

    def duration_ms(self) -> int:
        """Return total duration in milliseconds, truncated."""

        if self._duration_override_ms is not None:
            return self._duration_override_ms

        try:
            audio = MP3(str(self.path))
        except MutagenError as exc:
            raise ChapterWriteError(
                stage="duration",
                detail=f"Failed to probe audio duration of `{self.path}`: {exc}",
                hint="Verify the file is a valid MP3 or pass `--duration-ms` explicitly.",
            ) from exc
        return int(audio.info.length * 1000)
