"""Chapter-mark file loading.

Responsibilities:
- Read chapter marks from YAML or JSON files.
- Validate the payload shape and keep mark order intact.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Mapping

import yaml

from ..models.datatypes import ChapterMark
from ..parsing import normalize_optional_string


_SUPPORTED_MARK_KEYS = frozenset({"start", "end", "title", "url"})
_JSON_SUFFIXES = frozenset({".json"})


def load_chapter_marks(path: Path) -> list[ChapterMark]:
    """Load ordered chapter marks from `path`.

    The root may be a list of mark mappings or a mapping with a `chapters` list.

    Raises:
        ValueError: If the payload shape or a mark is invalid.
    """

    raw_text = path.read_text(encoding="utf-8")
    if path.suffix.lower() in _JSON_SUFFIXES:
        payload = json.loads(raw_text)
    else:
        # BaseLoader keeps every scalar a string, so `010` or `1:30` reach the
        # timecode parser verbatim instead of as YAML 1.1 octal or sexagesimal ints.
        payload = yaml.load(raw_text, Loader=yaml.BaseLoader)
    return parse_chapter_marks(payload, source_label=f"`{path}`")


def parse_chapter_marks(payload: Any, source_label: str = "chapters") -> list[ChapterMark]:
    """Build chapter marks from an already-decoded payload."""

    if payload is None:
        return []
    if isinstance(payload, Mapping):
        if "chapters" not in payload:
            raise ValueError(f"{source_label} mapping must contain a `chapters` list.")
        payload = payload["chapters"]
        if payload is None:
            return []
    if not isinstance(payload, list):
        raise ValueError(f"{source_label} must contain a list of chapter marks.")

    return [
        _parse_mark(raw_mark, position, source_label)
        for position, raw_mark in enumerate(payload, start=1)
    ]


def _parse_mark(raw_mark: Any, position: int, source_label: str) -> ChapterMark:
    """Validate one mark mapping and normalize its values to strings."""

    if not isinstance(raw_mark, Mapping):
        raise ValueError(f"{source_label} chapter {position} must be a mapping/object.")

    unknown = sorted(str(key) for key in set(raw_mark).difference(_SUPPORTED_MARK_KEYS))
    if unknown:
        key_list = ", ".join(unknown)
        raise ValueError(
            f"{source_label} chapter {position} includes unsupported key(s): {key_list}."
        )

    return ChapterMark(
        start=normalize_optional_string(raw_mark.get("start")),
        end=normalize_optional_string(raw_mark.get("end")),
        title=normalize_optional_string(raw_mark.get("title")),
        url=normalize_optional_string(raw_mark.get("url")),
    )
