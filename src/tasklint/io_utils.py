"""Wrappers for text file reads with consistent encoding (UTF-8)."""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

PathLike = Path | str


def _as_path(path: PathLike) -> Path:
    return path if isinstance(path, Path) else Path(path)


def read_text(path: PathLike, errors: str = "strict") -> str:
    """Read *path* as UTF-8 text, dropping a leading BOM."""
    return _as_path(path).read_text(encoding="utf-8-sig", errors=errors)


def iter_numbered_lines(path: PathLike) -> Iterator[tuple[int, str]]:
    """Yield ``(line_number, line)`` pairs, 1-based, without line endings.

    Blank lines are yielded too so callers keep numbering aligned with the file.
    """
    with _as_path(path).open("r", encoding="utf-8-sig", errors="replace", newline=None) as fh:
        for number, line in enumerate(fh, start=1):
            yield number, line.rstrip("\r\n")
