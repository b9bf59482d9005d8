"""Load a ``tasks.jsonl`` index into a :class:`TaskIndex`."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from tasklint import log
from tasklint.io_utils import iter_numbered_lines
from tasklint.tasks.model import Task, TaskIndex


def _is_str_list(value: Any) -> bool:
    return isinstance(value, list) and all(isinstance(item, str) for item in value)


def _text_field(record: dict[str, Any], key: str) -> str:
    value = record.get(key)
    return value if isinstance(value, str) else ""


def parse_record(record: dict[str, Any], line: int) -> Task | str:
    """Build a Task from one decoded index line, or return the error message."""
    task_id = _text_field(record, "id").strip()
    if not task_id:
        return f"Line {line}: Missing 'id' field"

    file = _text_field(record, "file").strip()
    if not file:
        return f"Line {line}: Missing 'file' field for task {task_id}"

    deps = record.get("depends_on")
    if deps is None:
        deps = []
    elif not _is_str_list(deps):
        return f"Line {line}: 'depends_on' must be a list of strings for task {task_id}"

    return Task(
        id=task_id,
        file=file,
        summary=_text_field(record, "description") or _text_field(record, "summary"),
        status=_text_field(record, "status"),
        parallel=record.get("parallel") is True,
        depends_on=[d.strip() for d in deps if d.strip()],
        line=line,
    )


def load_index(path: Path) -> TaskIndex:
    """Parse *path* line by line.

    Bad lines are reported in ``TaskIndex.errors`` and skipped; loading never
    stops early. Blank lines are ignored but still count toward line numbers.
    """
    index = TaskIndex()
    seen: set[str] = set()

    for number, raw in iter_numbered_lines(path):
        if not raw.strip():
            continue
        index.line_count += 1

        try:
            record = json.loads(raw)
        except (ValueError, RecursionError):
            index.errors.append(f"Line {number}: Invalid JSON")
            continue
        if not isinstance(record, dict):
            index.errors.append(f"Line {number}: Invalid JSON")
            continue

        parsed = parse_record(record, number)
        if isinstance(parsed, str):
            index.errors.append(parsed)
            continue

        if parsed.id in seen:
            index.errors.append(f"Line {number}: Duplicate task id '{parsed.id}'")
        seen.add(parsed.id)
        index.tasks.append(parsed)

    if index.is_empty:
        index.errors.append(f"{path.name} is empty")

    log.debug(f"Loaded {len(index.tasks)} tasks from {path} ({index.line_count} lines)")
    return index
