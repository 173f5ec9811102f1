"""Probes for the sched_ext BPF CPU scheduler."""

from __future__ import annotations

import logging
import re
from pathlib import Path

from gamerig.core.privileges import PrivilegeError, run_privileged
from gamerig.models.check_result import CheckResult, Status
from gamerig.models.probe import Probe
from gamerig.utils import CommandError, run_command

log = logging.getLogger(__name__)

_SCHED_EXT_DIR = Path("/sys/kernel/sched_ext")
_LOG_RE = re.compile(r"sched_ext|scx_")

NO_LOG_MESSAGE = (
    "No sched_ext messages in kernel log "
    "(no BPF scheduler loaded since boot, or the ring buffer has rotated)"
)


def _read(path: Path) -> str:
    try:
        return path.read_text().strip()
    except OSError:
        return ""


def _kernel_log() -> str:
    """Read the kernel ring buffer, escalating only when dmesg is restricted."""
    proc = run_command(["dmesg"])
    if proc.returncode == 0:
        return proc.stdout
    proc = run_privileged(["dmesg"])
    if proc.returncode != 0:
        raise PrivilegeError(f"dmesg failed: {proc.stderr.strip()}")
    return proc.stdout


def last_scheduler_line(kernel_log: str) -> str | None:
    """Return the most recent kernel log line about sched_ext."""
    matches = [line.strip() for line in kernel_log.splitlines() if _LOG_RE.search(line)]
    return matches[-1] if matches else None


class SchedulerStateProbe(Probe):
    """Reports whether a sched_ext scheduler is active."""

    id = "scheduler_state"
    name = "CPU Scheduler"
    description = "sched_ext state and the name of the loaded BPF scheduler."
    sort_order = 70

    def run(self) -> list[CheckResult]:
        if not _SCHED_EXT_DIR.is_dir():
            return [CheckResult(Status.WARN, "Kernel has no sched_ext support")]

        state = _read(_SCHED_EXT_DIR / "state")
        if state == "enabled":
            ops = _read(_SCHED_EXT_DIR / "root" / "ops") or "unknown"
            return [CheckResult(Status.PASS, f"sched_ext: enabled ({ops})")]
        return [CheckResult(Status.WARN, f"sched_ext: {state or 'unknown'}")]


class KernelLogProbe(Probe):
    """Shows the latest sched_ext kernel message."""

    id = "kernel_log"
    name = "Kernel Log"
    description = "Last sched_ext line from the kernel ring buffer (reads dmesg as root)."
    sort_order = 75
    requires_root = True

    def run(self) -> list[CheckResult]:
        try:
            line = last_scheduler_line(_kernel_log())
        except (CommandError, PrivilegeError) as e:
            log.info("Cannot read kernel log: %s", e)
            return [CheckResult(Status.WARN, f"Cannot read kernel log: {e}")]
        if line:
            return [CheckResult(Status.PASS, line)]
        return [CheckResult(Status.WARN, NO_LOG_MESSAGE)]
