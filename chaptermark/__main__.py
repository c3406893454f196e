"""Module entrypoint for running chaptermark as ``python -m chaptermark``."""

from __future__ import annotations

from chaptermark.cli import main


if __name__ == "__main__":
    main()
