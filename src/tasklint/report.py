"""Validation findings, the report builder, and result rendering."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from rich.markup import escape

from tasklint import log


class Severity(str, Enum):
    PASS = "pass"
    WARNING = "warning"
    ERROR = "error"


@dataclass(frozen=True)
class Finding:
    check: str
    severity: Severity
    message: str


@dataclass
class ReportBuilder:
    """Accumulates findings while the checks run; call :meth:`finish` once."""

    findings: list[Finding] = field(default_factory=list)
    checks: list[str] = field(default_factory=list)
    _check: str = ""

    def begin(self, check: str) -> None:
        self._check = check
        if check not in self.checks:
            self.checks.append(check)

    def passed(self, message: str) -> None:
        self.findings.append(Finding(self._check, Severity.PASS, message))

    def error(self, message: str) -> None:
        self.findings.append(Finding(self._check, Severity.ERROR, message))

    def warning(self, message: str) -> None:
        self.findings.append(Finding(self._check, Severity.WARNING, message))

    def finish(self, task_count: int) -> Report:
        return Report(task_count=task_count, findings=list(self.findings), checks=list(self.checks))


@dataclass(frozen=True)
class Report:
    task_count: int
    findings: list[Finding]
    checks: list[str] = field(default_factory=list)

    def _messages(self, severity: Severity) -> list[str]:
        return [f.message for f in self.findings if f.severity == severity]

    @property
    def errors(self) -> list[str]:
        return self._messages(Severity.ERROR)

    @property
    def warnings(self) -> list[str]:
        return self._messages(Severity.WARNING)

    @property
    def checks_passed(self) -> int:
        return len(self._messages(Severity.PASS))

    @property
    def checks_failed(self) -> int:
        return len(self.errors)

    @property
    def valid(self) -> bool:
        return self.checks_failed == 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "valid": self.valid,
            "tasks": self.task_count,
            "checks_passed": self.checks_passed,
            "checks_failed": self.checks_failed,
            "errors": self.errors,
            "warnings": self.warnings,
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=False)


def fatal_payload(message: str) -> str:
    """JSON emitted when a precondition fails before any check ran."""
    return json.dumps({"valid": False, "error": message, "checks": []}, ensure_ascii=False)


def render_text(report: Report, verbose: bool = False) -> None:
    """Print the human-readable report to the console."""
    out = log.console

    if verbose:
        for check in report.checks:
            out.print(f"Checking {check}...", markup=False)
            for f in report.findings:
                if f.check == check and f.severity == Severity.PASS:
                    out.print(f"  [green]✓[/green] {escape(f.message)}")

    out.print("")
    out.print("[bold]=== Validation Results ===[/bold]")
    out.print(f"Tasks: {report.task_count}")
    out.print(f"Checks passed: {report.checks_passed}")
    out.print(f"Checks failed: {report.checks_failed}")
    out.print("")

    if report.errors:
        out.print("[red]Errors:[/red]")
        for msg in report.errors:
            out.print(f"  [red]✗[/red] {escape(msg)}")
        out.print("")

    if report.warnings:
        out.print("[yellow]Warnings:[/yellow]")
        for msg in report.warnings:
            out.print(f"  [yellow]⚠[/yellow] {escape(msg)}")
        out.print("")

    if report.valid:
        out.print("[green]✓ All checks passed[/green]")
    else:
        out.print("[red]✗ Validation failed[/red]")
