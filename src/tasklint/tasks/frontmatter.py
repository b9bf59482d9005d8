"""YAML frontmatter extraction for task files.

The header is the ``---`` delimited block that leads the file. Anything that
does not yield a mapping (no block, unterminated block, invalid YAML) parses
to ``{}`` so callers treat it as "no value found".
"""

from __future__ import annotations

from typing import Any

import yaml

DELIMITER = "---"


def extract_block(text: str) -> str | None:
    """Return the raw header body, or ``None`` when the file has no header."""
    lines = text.lstrip("\ufeff").splitlines()

    start = 0
    while start < len(lines) and not lines[start].strip():
        start += 1
    if start >= len(lines) or lines[start].rstrip() != DELIMITER:
        return None

    for end in range(start + 1, len(lines)):
        if lines[end].rstrip() == DELIMITER:
            return "\n".join(lines[start + 1:end])
    return None


def _scalar(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return str(value).lower()
    return str(value)


def parse_frontmatter(text: str) -> dict[str, Any]:
    """Parse the header into a dict of strings (scalars) and string lists."""
    block = extract_block(text)
    if block is None:
        return {}
    try:
        data = yaml.safe_load(block)
    except yaml.YAMLError:
        return {}
    if not isinstance(data, dict):
        return {}

    meta: dict[str, Any] = {}
    for key, value in data.items():
        if isinstance(value, list):
            meta[str(key)] = [_scalar(v) for v in value]
        elif isinstance(value, dict):
            continue
        else:
            meta[str(key)] = _scalar(value)
    return meta


def id_list(value: Any) -> list[str]:
    """Normalise a header ``depends_on`` value to a list of ids.

    Lists come from YAML as-is; a plain ``T001, T002`` string is split on
    commas; an empty value means no dependencies.
    """
    if isinstance(value, list):
        items = value
    else:
        items = _scalar(value).split(",")
    return [item.strip() for item in items if item.strip()]
