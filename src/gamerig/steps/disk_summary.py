"""Step summarizing disk usage after cleanup."""

from __future__ import annotations

import shutil
from pathlib import Path

from gamerig import defaults
from gamerig.models.check_result import CheckResult, Status
from gamerig.models.cleanup import CleanupContext, StepResult
from gamerig.models.step import CleanupStep
from gamerig.settings import Settings
from gamerig.utils import CommandError, bytes_to_human, format_du, has_command, largest_entries, run_command

_ROOT_FS = Path("/")


def _dust(home: Path, limit: int) -> list[str]:
    proc = run_command(["dust", "-d", "1", "-n", str(limit), "-b", str(home)])
    if proc.returncode != 0:
        raise CommandError(proc.stderr.strip() or f"dust exited with {proc.returncode}")
    return [line.rstrip() for line in proc.stdout.splitlines() if line.strip()]


def _walk_largest(home: Path, limit: int) -> list[str]:
    """Largest non-hidden entries of *home*, like ``du -sh ~/* | sort -rh``."""
    top = largest_entries(home, limit, include_hidden=False)
    return [f"{format_du(size):>6}  {home / name}" for name, size in top]


class DiskSummaryStep(CleanupStep):
    """Prints root filesystem usage and the largest entries in $HOME."""

    id = "disk_summary"
    name = "Disk Usage"
    description = "Free space on / and the largest directories in the home folder."
    sort_order = 100

    def run(self, context: CleanupContext) -> StepResult:
        result = self._result()
        usage = shutil.disk_usage(_ROOT_FS)
        result.lines.append(
            CheckResult(
                Status.INFO,
                f"/: {bytes_to_human(usage.total)} total, {bytes_to_human(usage.used)} used, "
                f"{bytes_to_human(usage.free)} available",
            )
        )

        limit = Settings.instance().get_int("clean.top_entries", defaults.TOP_ENTRIES)
        lines: list[str] = []
        if has_command("dust"):
            try:
                lines = _dust(context.home, limit)
            except CommandError as e:
                result.lines.append(CheckResult(Status.WARN, f"dust failed, falling back: {e}"))
        if not lines:
            lines = _walk_largest(context.home, limit)

        result.lines.append(CheckResult(Status.INFO, f"Largest in {context.home}:"))
        result.lines.extend(CheckResult(Status.INFO, f"  {line}") for line in lines)
        return result
