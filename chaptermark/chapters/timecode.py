"""Timecode parsing for chapter marks.

Timecodes are colon-separated numeric fields, most significant first. Each field
is weighted by `60 ** position` counting from the rightmost field, so `SS`,
`MM:SS` and `HH:MM:SS` all parse with the same rule.
"""

from __future__ import annotations

from decimal import Decimal
import re

from ..errors import InvalidTimecodeError
from ..parsing import normalize_optional_string


TIMECODE_MODES = frozenset({"strict", "permissive"})

_STRICT_FIELD_PATTERN = re.compile(r"^\d+$")
_STRICT_SECONDS_PATTERN = re.compile(r"^\d+(\.\d+)?$")
_LEADING_INTEGER_PATTERN = re.compile(r"^[-+]?\d+")


class TimecodeParser:
    """Convert timecode text into integer millisecond offsets.

    In `strict` mode a non-numeric or negative field raises
    `InvalidTimecodeError`. In `permissive` mode each field is read like a
    leading integer and anything unreadable counts as zero.
    """

    def __init__(self, mode: str = "strict") -> None:
        if mode not in TIMECODE_MODES:
            raise ValueError(
                f"Unsupported timecode mode `{mode}`. Supported: `strict`, `permissive`."
            )
        self.mode = mode

    def parse(self, text: str | None) -> int | None:
        """Return the millisecond offset for `text`, or `None` when absent."""

        normalized = normalize_optional_string(text)
        if normalized is None:
            return None

        total = Decimal(0)
        for position, field_text in enumerate(reversed(normalized.split(":"))):
            field_value = self._field_value(field_text.strip(), position, normalized)
            total += field_value * (60**position) * 1000
        return int(total)

    def _field_value(self, field_text: str, position: int, timecode: str) -> Decimal:
        """Read one timecode field according to the configured mode.

        Only the rightmost field (`position` 0) may carry a fractional part.
        """

        if self.mode == "permissive":
            match = _LEADING_INTEGER_PATTERN.match(field_text)
            return Decimal(match.group(0)) if match else Decimal(0)

        pattern = _STRICT_SECONDS_PATTERN if position == 0 else _STRICT_FIELD_PATTERN
        if not pattern.match(field_text):
            raise InvalidTimecodeError(timecode)
        return Decimal(field_text)


def format_timecode(milliseconds: int) -> str:
    """Render milliseconds as `HH:MM:SS.mmm`."""

    seconds, millis = divmod(max(milliseconds, 0), 1000)
    minutes, seconds = divmod(seconds, 60)
    hours, minutes = divmod(minutes, 60)
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}.{millis:03d}"
