"""Shared fixtures for tasklint tests.

File handling in tests:
- Use tmp_path for any directory or file creation so tests are isolated and cleaned up.
- Use the ``tasks_dir`` factory to lay out a tasks.jsonl index plus task files.
"""

from __future__ import annotations

import json
import subprocess
from pathlib import Path

import pytest

from tasklint.tasks.model import Task


def pytest_addoption(parser: pytest.Parser) -> None:
    """Register opt-in switch for subprocess end-to-end tests."""
    parser.addoption(
        "--run-e2e",
        action="store_true",
        default=False,
        help="Run end-to-end tests marked with 'e2e'.",
    )


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """Skip e2e tests unless explicitly enabled."""
    if config.getoption("--run-e2e"):
        return

    skip_e2e = pytest.mark.skip(
        reason="E2E tests are skipped by default. Use --run-e2e to include them.",
    )
    for item in items:
        if "e2e" in item.keywords:
            item.add_marker(skip_e2e)


@pytest.fixture
def git_repo(tmp_path: Path) -> Path:
    """Create a minimal git repo for testing."""
    subprocess.run(["git", "init"], cwd=tmp_path, capture_output=True, check=True)
    subprocess.run(
        ["git", "config", "user.name", "Test"], cwd=tmp_path, capture_output=True
    )
    subprocess.run(
        ["git", "config", "user.email", "test@test"], cwd=tmp_path, capture_output=True
    )
    (tmp_path / "README.md").write_text("# Test", encoding="utf-8")
    subprocess.run(["git", "add", "README.md"], cwd=tmp_path, capture_output=True)
    subprocess.run(
        ["git", "commit", "-m", "Initial"], cwd=tmp_path, capture_output=True
    )
    return tmp_path


def _make_task(
    id: str,
    file: str = "",
    status: str = "pending",
    depends_on: list[str] | None = None,
    summary: str = "",
    parallel: bool = False,
) -> Task:
    return Task(
        id=id,
        file=file or f"{id}-task.md",
        summary=summary or f"Task {id}",
        status=status,
        parallel=parallel,
        depends_on=depends_on or [],
    )


def task_record(task: Task) -> dict:
    return {
        "id": task.id,
        "description": task.summary,
        "file": task.file,
        "status": task.status,
        "parallel": task.parallel,
        "depends_on": task.depends_on,
    }


def frontmatter_for(task: Task, body: str = "") -> str:
    return (
        "---\n"
        f"id: {task.id}\n"
        f"status: {task.status}\n"
        "---\n"
        "\n"
        f"# {task.summary}\n"
        f"{body}"
    )


def write_tasks(
    directory: Path,
    tasks: list[Task],
    *,
    write_files: bool = True,
) -> Path:
    """Write tasks.jsonl and (optionally) a task file with matching frontmatter per task."""
    directory.mkdir(parents=True, exist_ok=True)
    lines = [json.dumps(task_record(t)) for t in tasks]
    (directory / "tasks.jsonl").write_text("\n".join(lines) + "\n", encoding="utf-8")
    if write_files:
        for t in tasks:
            (directory / t.file).write_text(frontmatter_for(t), encoding="utf-8")
    return directory


@pytest.fixture
def make_task():
    """Factory fixture that creates Task instances."""
    return _make_task


@pytest.fixture
def tasks_dir(tmp_path: Path):
    """Factory fixture: lay out a consistent tasks directory and return its path."""

    def _build(tasks: list[Task], *, write_files: bool = True) -> Path:
        return write_tasks(tmp_path / "tasks", tasks, write_files=write_files)

    return _build
