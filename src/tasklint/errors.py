"""Precondition failures that stop a run before any check executes."""

from __future__ import annotations

from pathlib import Path


class TasklintError(Exception):
    """Base class for fatal tasklint conditions (exit status 2)."""

    #: Short message used in ``--json`` output.
    summary = "tasklint error"

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"{self.summary}: {path}")


class TasksDirNotFound(TasklintError):
    summary = "Tasks directory not found"


class IndexNotFound(TasklintError):
    def __init__(self, path: Path) -> None:
        self.summary = f"{path.name} not found"
        super().__init__(path)
