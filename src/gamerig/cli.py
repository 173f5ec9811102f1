"""CLI interface for gamerig."""

from __future__ import annotations

import json
import logging
import sys

import click

from gamerig import defaults
from gamerig.core.engine import CleanupRunner, Reporter
from gamerig.core.loader import load_probes, load_steps
from gamerig.core.registry import Registry
from gamerig.formatting import format_header, format_line, format_result
from gamerig.models.check_result import ProbeReport, Status
from gamerig.models.cleanup import StepResult
from gamerig.steps.steam import steam_root_candidates
from gamerig.utils import bytes_to_human


def _setup_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s")


def _build_reporter() -> Reporter:
    registry = Registry()
    load_probes(registry)
    return Reporter(registry)


def _build_runner() -> CleanupRunner:
    registry = Registry()
    load_steps(registry)
    return CleanupRunner(registry, steam_root_candidates(), marker=defaults.STEAM_ROOT_MARKER)


@click.group()
@click.option("-v", "--verbose", count=True, help="Increase verbosity (-v info, -vv debug)")
def main(verbose: int) -> None:
    """gamerig: diagnostics and cache cleanup for a Linux gaming rig."""
    _setup_logging(verbose)


# ── list ─────────────────────────────────────────────────────────────────

@main.command("list")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def list_cmd(as_json: bool) -> None:
    """List diagnostic probes and cleanup steps in run order."""
    probes = list(_build_reporter().registry)
    steps = list(_build_runner().registry)

    if as_json:
        def _entry(unit) -> dict:
            return {
                "id": unit.id,
                "name": unit.name,
                "description": unit.description,
                "requires_root": unit.requires_root,
            }

        click.echo(json.dumps({"probes": [_entry(p) for p in probes], "steps": [_entry(s) for s in steps]}, indent=2))
        return

    for title, units in (("Probes (gamerig check)", probes), ("Cleanup steps (gamerig clean)", steps)):
        click.echo(format_header(title))
        for unit in units:
            root_tag = click.style(" [requires root]", fg="yellow") if unit.requires_root else ""
            click.echo(f"  {click.style(unit.id, fg='cyan', bold=True):30s}  {unit.name}{root_tag}")
            click.echo(f"    {unit.description}")
    click.echo()


# ── check ────────────────────────────────────────────────────────────────

@main.command()
@click.argument("probe_ids", nargs=-1)
@click.option("--strict", is_flag=True, help="Exit with status 1 if any check fails")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def check(probe_ids: tuple[str, ...], strict: bool, as_json: bool) -> None:
    """Run diagnostics (read-only)."""
    reporter = _build_reporter()
    ids = list(probe_ids) if probe_ids else None

    def on_report(report: ProbeReport) -> None:
        if as_json:
            return
        click.echo(format_header(report.probe_name))
        for result in report.results:
            click.echo(format_result(result))

    reports = reporter.run(probe_ids=ids, on_report=on_report)

    if as_json:
        data = [
            {
                "probe_id": r.probe_id,
                "probe_name": r.probe_name,
                "results": [{"status": res.status.value, "message": res.message} for res in r.results],
            }
            for r in reports
        ]
        click.echo(json.dumps(data, indent=2))
    else:
        counts = {status: 0 for status in Status}
        for report in reports:
            for result in report.results:
                counts[result.status] += 1
        click.echo(
            f"\n{click.style(str(counts[Status.PASS]), fg='green', bold=True)} passed, "
            f"{click.style(str(counts[Status.FAIL]), fg='red', bold=True)} failed, "
            f"{click.style(str(counts[Status.WARN]), fg='yellow', bold=True)} warnings\n"
        )

    if strict and any(r.failed for r in reports):
        sys.exit(1)


# ── clean ────────────────────────────────────────────────────────────────

@main.command()
@click.argument("step_ids", nargs=-1)
@click.option("--yes", "-y", is_flag=True, help="Skip confirmation")
def clean(step_ids: tuple[str, ...], yes: bool) -> None:
    """Delete caches, temp files and old logs."""
    runner = _build_runner()
    ids = list(step_ids) if step_ids else None

    if not yes:
        click.echo("This deletes Steam, Mesa, AUR helper and user caches, old package versions, "
                   "old journal entries and coredumps.")
        if not click.confirm("Continue?", default=False):
            click.echo("Aborted.")
            return

    def on_result(result: StepResult) -> None:
        click.echo(format_header(result.step_name))
        for line in result.lines:
            click.echo(format_result(line))

    results = runner.run(step_ids=ids, on_result=on_result)

    total_freed = sum(r.freed_bytes for r in results)
    error_count = sum(len(r.errors) for r in results)
    click.echo(f"\nTotal freed: {click.style(bytes_to_human(total_freed), fg='green', bold=True)}")
    if error_count:
        click.echo(format_line(Status.WARN, f"{error_count} error(s), run with -v for details"))
    click.echo()
