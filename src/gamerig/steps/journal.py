"""Step to vacuum old systemd journal entries."""

from __future__ import annotations

import logging
from pathlib import Path

from gamerig import defaults
from gamerig.core.privileges import PrivilegeError, run_privileged
from gamerig.models.check_result import CheckResult, Status
from gamerig.models.cleanup import CleanupContext, StepResult
from gamerig.models.step import CleanupStep
from gamerig.settings import Settings
from gamerig.utils import CommandError, dir_info, has_command, run_command

log = logging.getLogger(__name__)

_JOURNAL_DIR = Path("/var/log/journal")


def _disk_usage() -> str:
    proc = run_command(["journalctl", "--disk-usage"])
    return proc.stdout.strip() or proc.stderr.strip()


class JournalVacuumStep(CleanupStep):
    """Drops journal entries older than the retention window."""

    id = "journal"
    name = "Journal Logs"
    description = "Reports journal disk usage, then vacuums entries older than the retention window."
    sort_order = 60
    requires_root = True

    @property
    def unavailable_reason(self) -> str | None:
        if not has_command("journalctl"):
            return "journalctl not found"
        return None

    def run(self, context: CleanupContext) -> StepResult:
        result = self._result()
        retention = Settings.instance().get_str("clean.journal_retention", defaults.JOURNAL_RETENTION)

        try:
            result.lines.append(CheckResult(Status.INFO, _disk_usage()))
        except CommandError as e:
            result.lines.append(CheckResult(Status.WARN, f"Cannot read journal usage: {e}"))

        size_before = dir_info(_JOURNAL_DIR)[0] if _JOURNAL_DIR.is_dir() else 0
        try:
            proc = run_privileged(["journalctl", f"--vacuum-time={retention}"])
        except PrivilegeError as e:
            result.errors.append(str(e))
            result.lines.append(CheckResult(Status.WARN, f"Journal vacuum skipped: {e}"))
            return result

        if proc.returncode != 0:
            error = proc.stderr.strip() or f"exit {proc.returncode}"
            result.errors.append(error)
            result.lines.append(CheckResult(Status.WARN, f"journalctl vacuum failed: {error}"))
            return result

        size_after = dir_info(_JOURNAL_DIR)[0] if _JOURNAL_DIR.is_dir() else 0
        result.freed_bytes = max(0, size_before - size_after)
        result.lines.append(CheckResult(Status.PASS, f"Removed journal entries older than {retention}"))
        return result
