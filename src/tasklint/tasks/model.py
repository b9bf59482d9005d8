"""Task and TaskIndex data models shared by the loader and the checks."""

from __future__ import annotations

from dataclasses import dataclass, field


STATUS_DONE = "done"


@dataclass
class Task:
    id: str
    file: str
    summary: str = ""
    status: str = ""
    parallel: bool = False
    depends_on: list[str] = field(default_factory=list)
    line: int = 0


@dataclass
class TaskIndex:
    tasks: list[Task] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)
    line_count: int = 0

    @property
    def is_empty(self) -> bool:
        return self.line_count == 0
