"""Configuration defaults, env vars, and tasks-directory resolution."""

from __future__ import annotations

import os
import re
from dataclasses import dataclass
from pathlib import Path

from tasklint import git_ops, log


DEFAULT_INDEX_NAME = "tasks.jsonl"
DEFAULT_DETAIL_PATTERN = "T*.md"
DEFAULT_DONE_STATUS = "done"
SPECS_DIR = "specs"


@dataclass
class Config:
    """Runtime configuration for a single validation run."""

    # Location
    tasks_dir: str = ""

    # Convention
    index_name: str = DEFAULT_INDEX_NAME
    detail_pattern: str = ""
    done_status: str = DEFAULT_DONE_STATUS

    # Output
    json_output: bool = False
    verbose: bool = False

    def __post_init__(self) -> None:
        if not self.tasks_dir:
            self.tasks_dir = os.environ.get("TASKLINT_TASKS_DIR", "")
        if not self.detail_pattern:
            self.detail_pattern = (
                os.environ.get("TASKLINT_DETAIL_PATTERN") or DEFAULT_DETAIL_PATTERN
            )

    def resolve_tasks_dir(self, cwd: Path | None = None) -> Path:
        """Return the tasks directory, resolving the current feature if unset."""
        if self.tasks_dir:
            return Path(self.tasks_dir)
        return find_feature_dir(resolve_repo_root(cwd), current_feature(cwd)) / "tasks"


def resolve_repo_root(cwd: Path | None = None) -> Path:
    """Return the git repository root, falling back to cwd."""
    root = git_ops.toplevel(cwd=cwd)
    if root is not None:
        return root
    return cwd or Path.cwd()


def current_feature(cwd: Path | None = None) -> str:
    """Feature name from ``SPECIFY_FEATURE`` or the checked-out git branch."""
    feature = os.environ.get("SPECIFY_FEATURE", "").strip()
    if feature:
        return feature
    return git_ops.current_branch(cwd=cwd)


_PREFIX_RE = re.compile(r"^(\d{3})-")


def find_feature_dir(repo_root: Path, feature: str) -> Path:
    """Map a feature/branch name to its ``specs/`` directory.

    An exact ``specs/<feature>`` directory wins. Otherwise a numeric ``NNN-``
    prefix selects the single ``specs/NNN-*`` directory carrying it, so
    several branches can work on the same spec.
    """
    specs = repo_root / SPECS_DIR
    exact = specs / feature
    if exact.is_dir():
        return exact

    m = _PREFIX_RE.match(feature)
    if not m or not specs.is_dir():
        return exact

    matches = sorted(p for p in specs.glob(f"{m.group(1)}-*") if p.is_dir())
    if len(matches) == 1:
        log.debug(f"Feature {feature} resolved by prefix to {matches[0].name}")
        return matches[0]
    if len(matches) > 1:
        names = ", ".join(p.name for p in matches)
        log.warn(f"Multiple spec directories share prefix {m.group(1)}: {names}")
    return exact
