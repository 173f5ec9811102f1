"""Step to prune the pacman package cache with paccache."""

from __future__ import annotations

import logging
from pathlib import Path

from gamerig import defaults
from gamerig.core.privileges import PrivilegeError, run_privileged
from gamerig.models.check_result import CheckResult, Status
from gamerig.models.cleanup import CleanupContext, StepResult
from gamerig.models.step import CleanupStep
from gamerig.settings import Settings
from gamerig.utils import dir_info, disk_usage_text, has_command

log = logging.getLogger(__name__)

_PACMAN_CACHE_DIR = Path("/var/cache/pacman/pkg")


def _last_line(text: str) -> str:
    lines = [line.strip() for line in text.splitlines() if line.strip()]
    return lines[-1] if lines else ""


class PacmanCacheStep(CleanupStep):
    """Keeps the newest cached versions and drops those of removed packages."""

    id = "pacman_cache"
    name = "Pacman Cache"
    description = (
        "Runs paccache to keep only the most recent versions of each cached "
        "package and to remove every version of uninstalled packages."
    )
    sort_order = 40
    requires_root = True

    @property
    def unavailable_reason(self) -> str | None:
        if not has_command("paccache"):
            return "paccache not found (install pacman-contrib)"
        if not _PACMAN_CACHE_DIR.is_dir():
            return "Pacman cache directory not found"
        return None

    def _prune_commands(self) -> list[list[str]]:
        keep = Settings.instance().get_int("clean.keep_versions", defaults.KEEP_VERSIONS)
        return [
            ["paccache", f"-rk{keep}"],
            ["paccache", "-ruk0"],
        ]

    def run(self, context: CleanupContext) -> StepResult:
        result = self._result()
        bytes_before = dir_info(_PACMAN_CACHE_DIR)[0]
        result.lines.append(CheckResult(Status.INFO, f"Size before: {disk_usage_text(_PACMAN_CACHE_DIR)}"))

        for cmd in self._prune_commands():
            label = " ".join(cmd)
            try:
                proc = run_privileged(cmd)
            except PrivilegeError as e:
                result.errors.append(f"{label}: {e}")
                result.lines.append(CheckResult(Status.WARN, f"{label}: {e}"))
                continue
            if proc.returncode != 0:
                error = proc.stderr.strip() or f"exit {proc.returncode}"
                result.errors.append(f"{label}: {error}")
                result.lines.append(CheckResult(Status.WARN, f"{label} failed: {error}"))
            else:
                summary = _last_line(proc.stdout) or "done"
                result.lines.append(CheckResult(Status.PASS, f"{label}: {summary}"))

        bytes_after = dir_info(_PACMAN_CACHE_DIR)[0]
        result.freed_bytes = max(0, bytes_before - bytes_after)
        result.lines.append(CheckResult(Status.INFO, f"Size after: {disk_usage_text(_PACMAN_CACHE_DIR)}"))
        return result
