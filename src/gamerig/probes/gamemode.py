"""Probe for the GameMode daemon."""

from __future__ import annotations

from gamerig.models.check_result import CheckResult, Status
from gamerig.models.probe import Probe
from gamerig.utils import CommandError, run_command

_PROCESS = "gamemoded"


def find_pids(process: str) -> list[str]:
    """PIDs of processes named exactly *process*."""
    proc = run_command(["pgrep", "-x", process])
    return proc.stdout.split() if proc.returncode == 0 else []


class GameModeProbe(Probe):
    """Checks whether gamemoded is running."""

    id = "gamemode"
    name = "GameMode"
    description = "Whether the Feral GameMode daemon is running."
    sort_order = 80

    def run(self) -> list[CheckResult]:
        try:
            pids = find_pids(_PROCESS)
        except CommandError as e:
            return [CheckResult(Status.WARN, f"Cannot query processes: {e}")]
        if pids:
            return [CheckResult(Status.PASS, f"{_PROCESS} running (PID {' '.join(pids)})")]
        return [CheckResult(Status.WARN, f"{_PROCESS} not running (it starts on demand via gamemoderun)")]
