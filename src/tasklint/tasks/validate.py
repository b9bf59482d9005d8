"""Consistency checks between tasks.jsonl and the task files beside it.

Every check appends to a shared :class:`ReportBuilder` and keeps going after a
failure, so a single run surfaces every problem. Only the two preconditions in
:func:`validate_tasks_dir` (missing directory, missing index) abort early.
"""

from __future__ import annotations

from collections import defaultdict
from pathlib import Path

from tasklint import log
from tasklint.config import Config
from tasklint.errors import IndexNotFound, TasksDirNotFound
from tasklint.io_utils import read_text
from tasklint.report import Report, ReportBuilder
from tasklint.tasks.frontmatter import id_list, parse_frontmatter
from tasklint.tasks.io import load_index
from tasklint.tasks.model import STATUS_DONE, Task, TaskIndex


# ── Cycle detection ──────────────────────────────────────────────────


def find_cycle(start: str, deps: dict[str, list[str]], clean: set[str] | None = None) -> list[str]:
    """Return the first cycle reachable from *start* as a closed path, or ``[]``.

    *deps* maps id -> dependency ids; ids missing from it are leaves.
    *clean* collects nodes proven cycle-free and may be shared across calls.
    """
    if clean is None:
        clean = set()
    if start in clean or start not in deps:
        return []

    path: list[str] = [start]
    on_path: set[str] = {start}
    pending = [iter(deps[start])]
    while pending:
        dep = next(pending[-1], None)
        if dep is None:
            pending.pop()
            node = path.pop()
            on_path.discard(node)
            clean.add(node)
            continue
        if dep in on_path:
            return path[path.index(dep):] + [dep]
        if dep in clean or dep not in deps:
            continue
        path.append(dep)
        on_path.add(dep)
        pending.append(iter(deps[dep]))
    return []


def detect_cycles(tasks: list[Task]) -> list[tuple[str, list[str]]]:
    """Return ``(task_id, cycle)`` for every task that reaches a cycle.

    Each distinct id is walked once, in declaration order. A task is reported
    when its own walk runs into a cycle, so tasks depending on a cycle are
    reported as well as the cycle members.
    """
    deps: dict[str, list[str]] = {}
    for t in tasks:
        deps.setdefault(t.id, t.depends_on)

    clean: set[str] = set()
    found: list[tuple[str, list[str]]] = []
    for task_id in deps:
        cycle = find_cycle(task_id, deps, clean)
        if cycle:
            found.append((task_id, cycle))
    return found


# ── Individual checks ────────────────────────────────────────────────


def check_index(index: TaskIndex, report: ReportBuilder) -> None:
    report.begin("JSONL validity")
    for msg in index.errors:
        report.error(msg)
    if not index.is_empty:
        report.passed(f"JSONL validity: {index.line_count} lines parsed")


def check_file_references(tasks: list[Task], tasks_dir: Path, report: ReportBuilder) -> None:
    report.begin("file references")
    for t in tasks:
        if (tasks_dir / t.file).is_file():
            report.passed(f"Task {t.id}: File exists")
        else:
            report.error(f"Task {t.id}: Referenced file not found: {t.file}")


def check_orphans(
    tasks: list[Task],
    tasks_dir: Path,
    report: ReportBuilder,
    pattern: str = "T*.md",
    index_name: str = "tasks.jsonl",
) -> None:
    report.begin("orphan files")
    referenced: dict[str, list[str]] = defaultdict(list)
    for t in tasks:
        referenced[t.file].append(t.id)

    for path in sorted(tasks_dir.glob(pattern)):
        if not path.is_file():
            continue
        owners = referenced.get(path.name, [])
        if not owners:
            report.error(f"Orphan file (not in {index_name}): {path.name}")
        elif len(owners) > 1:
            report.error(f"File referenced by multiple tasks: {path.name} ({', '.join(owners)})")

    report.passed("Orphan check complete")


def check_frontmatter_sync(tasks: list[Task], tasks_dir: Path, report: ReportBuilder) -> None:
    report.begin("frontmatter sync")
    for t in tasks:
        path = tasks_dir / t.file
        if not path.is_file():
            continue
        try:
            meta = parse_frontmatter(read_text(path))
        except (OSError, UnicodeDecodeError) as exc:
            report.error(f"Task {t.id}: Cannot read file {t.file}: {exc}")
            continue

        fm_id = meta.get("id", "")
        if fm_id != t.id:
            report.error(f"Task {t.id}: Frontmatter id mismatch (found: '{fm_id}')")
        else:
            report.passed(f"Task {t.id}: Frontmatter sync OK")

        fm_status = meta.get("status", "")
        if fm_status != t.status:
            report.warning(
                f"Task {t.id}: Status mismatch (JSONL: '{t.status}', file: '{fm_status}')"
            )

        if "depends_on" in meta:
            fm_deps = id_list(meta["depends_on"])
            if sorted(fm_deps) != sorted(t.depends_on):
                report.error(
                    f"Task {t.id}: Frontmatter depends_on mismatch "
                    f"(JSONL: [{', '.join(t.depends_on)}], file: [{', '.join(fm_deps)}])"
                )


def check_dependencies(tasks: list[Task], report: ReportBuilder) -> None:
    report.begin("dependency validity")
    known = {t.id for t in tasks}
    for t in tasks:
        for dep in t.depends_on:
            if dep not in known:
                report.error(f"Task {t.id}: Unknown dependency '{dep}'")

    for task_id, cycle in detect_cycles(tasks):
        report.error(
            f"Circular dependency detected involving task {task_id} ({' -> '.join(cycle)})"
        )

    report.passed("Dependency check complete")


def check_status_coherence(
    tasks: list[Task], report: ReportBuilder, done_status: str = STATUS_DONE
) -> None:
    report.begin("status coherence")
    status_of: dict[str, str] = {}
    for t in tasks:
        status_of.setdefault(t.id, t.status)

    for t in tasks:
        if t.status != done_status:
            continue
        for dep in t.depends_on:
            if dep not in status_of:
                continue
            if status_of[dep] != done_status:
                report.warning(f"Task {t.id} is done but dependency {dep} is not")

    report.passed("Status coherence check complete")


# ── Entry point ──────────────────────────────────────────────────────


def validate_index(index: TaskIndex, tasks_dir: Path, cfg: Config | None = None) -> Report:
    """Run every check against an already loaded *index*."""
    cfg = cfg or Config(tasks_dir=str(tasks_dir))
    report = ReportBuilder()

    check_index(index, report)
    check_file_references(index.tasks, tasks_dir, report)
    check_orphans(
        index.tasks, tasks_dir, report, pattern=cfg.detail_pattern, index_name=cfg.index_name
    )
    check_frontmatter_sync(index.tasks, tasks_dir, report)
    check_dependencies(index.tasks, report)
    check_status_coherence(index.tasks, report, done_status=cfg.done_status)

    return report.finish(task_count=len(index.tasks))


def validate_tasks_dir(tasks_dir: Path, cfg: Config | None = None) -> Report:
    """Validate the tasks directory *tasks_dir*.

    Raises :class:`TasksDirNotFound` or :class:`IndexNotFound` before any
    check runs when the preconditions are not met.
    """
    cfg = cfg or Config(tasks_dir=str(tasks_dir))
    if not tasks_dir.is_dir():
        raise TasksDirNotFound(tasks_dir)
    index_path = tasks_dir / cfg.index_name
    if not index_path.is_file():
        raise IndexNotFound(index_path)

    log.debug(f"Validating {index_path}")
    report = validate_index(load_index(index_path), tasks_dir, cfg)
    log.debug(
        f"{report.checks_passed} passed, {report.checks_failed} failed, "
        f"{len(report.warnings)} warnings"
    )
    return report
