"""Domain exceptions for chapter synthesis and CLI diagnostics."""

from __future__ import annotations


class ChapterWriteError(RuntimeError):
    """Raised when a specific chapter-writing stage fails."""

    def __init__(
        self,
        *,
        stage: str,
        detail: str,
        hint: str | None = None,
    ) -> None:
        """Initialize a stage-scoped chapter error."""

        super().__init__(detail)
        self.stage = stage
        self.detail = detail
        self.hint = hint


class InvalidTimecodeError(ChapterWriteError):
    """Raised when a timecode contains a non-numeric or negative field."""

    def __init__(self, timecode: str) -> None:
        super().__init__(
            stage="timecode",
            detail=f"Invalid timecode `{timecode}`.",
            hint="Use `SS`, `MM:SS` or `HH:MM:SS` with numeric fields.",
        )
        self.timecode = timecode


class MissingRequiredFieldError(ChapterWriteError):
    """Raised when a normalized chapter lacks a field a frame cannot omit."""

    def __init__(self, field_name: str, index: int) -> None:
        super().__init__(
            stage="build",
            detail=f"Chapter {index + 1} is missing required field `{field_name}`.",
            hint="Every chapter mark needs a `start` timecode.",
        )
        self.field_name = field_name
        self.index = index


class PersistFailedError(ChapterWriteError):
    """Raised when the tag store cannot commit its frames."""

    def __init__(self, detail: str) -> None:
        super().__init__(
            stage="persist",
            detail=detail,
            hint="Check that the output file exists, is writable and is not locked.",
        )
