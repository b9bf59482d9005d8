"""Logging utilities with colored output via Rich.

Result output goes to stdout through :data:`console`; diagnostics go to stderr
so ``--json`` output stays machine-readable.
"""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape

console = Console(highlight=False, soft_wrap=True)
_err_console = Console(highlight=False, soft_wrap=True, stderr=True)

_verbose = False


def set_verbose(enabled: bool) -> None:
    global _verbose
    _verbose = enabled


def warn(msg: str) -> None:
    _err_console.print(f"[yellow]\\[WARN][/yellow] {escape(msg)}")


def error(msg: str) -> None:
    _err_console.print(f"[red]{escape(msg)}[/red]")


def hint(msg: str) -> None:
    _err_console.print(f"[dim]{escape(msg)}[/dim]")


def debug(msg: str) -> None:
    if _verbose:
        _err_console.print(f"[dim]\\[DEBUG] {escape(msg)}[/dim]")
