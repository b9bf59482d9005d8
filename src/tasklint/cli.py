"""tasklint CLI.

Installed as ``tasklint`` console_script via pipx / pip.
"""

from __future__ import annotations

import sys

import click

from tasklint import __version__
from tasklint.config import Config
from tasklint.errors import TasklintError


EXIT_OK = 0
EXIT_INVALID = 1
EXIT_PRECONDITION = 2

CONTEXT_SETTINGS = dict(help_option_names=["-h", "--help"])


@click.command(context_settings=CONTEXT_SETTINGS)
@click.option("--json", "json_output", is_flag=True, help="Output results in JSON format")
@click.option("-v", "--verbose", is_flag=True, help="Show detailed information for each check")
@click.option(
    "--tasks-dir",
    default="",
    help="Tasks directory (default: specs/<feature>/tasks of the current branch)",
)
@click.option("--pattern", "detail_pattern", default="", help="Glob for task files (default: T*.md)")
@click.version_option(__version__, prog_name="tasklint")
def main(json_output: bool, verbose: bool, tasks_dir: str, detail_pattern: str) -> None:
    """Validate the tasks/ directory structure for consistency.

    \b
    CHECKS PERFORMED:
      1. JSONL validity - Each line in tasks.jsonl is valid JSON
      2. File references - Each file referenced in JSONL exists
      3. No orphans - No task files exist without JSONL entry
      4. Frontmatter sync - Task file frontmatter matches JSONL data
      5. Dependency validity - All depends_on refs exist, no cycles
      6. Status coherence - Done tasks have all dependencies done

    \b
    EXIT CODES:
      0 - All checks passed
      1 - One or more checks failed
      2 - Tasks directory or tasks.jsonl not found
    """
    from tasklint import log as tlog
    from tasklint.report import fatal_payload, render_text
    from tasklint.tasks.validate import validate_tasks_dir

    tlog.set_verbose(verbose and not json_output)

    cfg = Config(
        tasks_dir=tasks_dir,
        detail_pattern=detail_pattern,
        json_output=json_output,
        verbose=verbose,
    )
    target = cfg.resolve_tasks_dir()
    tlog.debug(f"Tasks directory: {target}")

    try:
        report = validate_tasks_dir(target, cfg)
    except TasklintError as exc:
        if cfg.json_output:
            click.echo(fatal_payload(exc.summary))
        else:
            tlog.error(f"ERROR: {exc}")
            tlog.hint("Run /speckit.tasks first to create the task structure.")
        sys.exit(EXIT_PRECONDITION)

    if cfg.json_output:
        click.echo(report.to_json())
    else:
        render_text(report, verbose=cfg.verbose)

    sys.exit(EXIT_OK if report.valid else EXIT_INVALID)
