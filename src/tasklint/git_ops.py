"""Read-only git queries used to locate the current feature."""

from __future__ import annotations

import subprocess
from pathlib import Path


def _git(*args: str, cwd: Path | None = None) -> subprocess.CompletedProcess[str] | None:
    """Run a git command, suppressing stderr noise. ``None`` if git is missing."""
    try:
        return subprocess.run(
            ["git", *args],
            capture_output=True,
            text=True,
            cwd=cwd,
            check=False,
        )
    except FileNotFoundError:
        return None


def toplevel(cwd: Path | None = None) -> Path | None:
    r = _git("rev-parse", "--show-toplevel", cwd=cwd)
    if r is None or r.returncode != 0 or not r.stdout.strip():
        return None
    return Path(r.stdout.strip())


def current_branch(cwd: Path | None = None) -> str:
    r = _git("rev-parse", "--abbrev-ref", "HEAD", cwd=cwd)
    return r.stdout.strip() if r is not None and r.returncode == 0 else "main"
