"""Step to clear systemd coredumps."""

from __future__ import annotations

import logging
from pathlib import Path

from gamerig.core.privileges import PrivilegeError, is_root, run_privileged
from gamerig.models.check_result import CheckResult, Status
from gamerig.models.cleanup import CleanupContext, CleanupTarget, StepResult
from gamerig.models.step import CleanupStep
from gamerig.utils import clear_contents, dir_info, format_du

log = logging.getLogger(__name__)

_COREDUMP_DIR = Path("/var/lib/systemd/coredump")


def should_clear(size_bytes: int) -> bool:
    """Coredumps are cleared only when their files hold at least one byte.

    Empty subdirectories do not count, so a directory that ``du -sh``
    would report as ``4.0K`` is left alone.
    """
    return size_bytes > 0


class CoredumpsStep(CleanupStep):
    """Removes crash snapshots collected by systemd-coredump."""

    id = "coredumps"
    name = "Core Dumps"
    description = "Deletes the contents of /var/lib/systemd/coredump when it holds any dumps."
    sort_order = 70
    requires_root = True

    def run(self, context: CleanupContext) -> StepResult:
        result = self._result()
        target = CleanupTarget(path=_COREDUMP_DIR, label="Coredumps")
        result.targets.append(target)

        if not _COREDUMP_DIR.is_dir():
            result.lines.append(CheckResult(Status.INFO, "No coredumps"))
            return result

        size, count = dir_info(_COREDUMP_DIR)
        target.existed_before = True
        target.size_before = format_du(size)
        if not should_clear(size):
            result.lines.append(CheckResult(Status.INFO, "No coredumps"))
            return result

        if is_root():
            freed, _removed, errors = clear_contents(_COREDUMP_DIR)
        else:
            freed, errors = self._clear_privileged(size)
        result.freed_bytes = freed
        result.errors.extend(errors)

        if errors:
            for error in errors:
                log.warning("Could not remove %s", error)
            result.lines.append(CheckResult(Status.WARN, f"Coredumps ({target.size_before}): {len(errors)} error(s)"))
        else:
            result.lines.append(CheckResult(Status.PASS, f"Cleared {count} coredumps ({target.size_before})"))
        return result

    def _clear_privileged(self, size: int) -> tuple[int, list[str]]:
        try:
            proc = run_privileged(["find", str(_COREDUMP_DIR), "-mindepth", "1", "-delete"])
        except PrivilegeError as e:
            return 0, [str(e)]
        if proc.returncode != 0:
            return 0, [proc.stderr.strip() or f"find exited with {proc.returncode}"]
        return size, []
