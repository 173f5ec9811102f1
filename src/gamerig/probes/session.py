"""Probe for the graphical session type."""

from __future__ import annotations

import os

from gamerig.models.check_result import CheckResult, Status
from gamerig.models.probe import Probe
from gamerig.utils import CommandError, has_command, run_command


def _x_clients() -> list[str]:
    proc = run_command(["xlsclients"])
    if proc.returncode != 0:
        raise CommandError(proc.stderr.strip() or f"xlsclients exited with {proc.returncode}")
    return [line for line in proc.stdout.splitlines() if line.strip()]


class DisplaySessionProbe(Probe):
    """Reports the session type and how many X clients are connected."""

    id = "display_session"
    name = "Display Session"
    description = "XDG session type and X11/Xwayland clients."
    sort_order = 85

    def run(self) -> list[CheckResult]:
        results: list[CheckResult] = []
        session_type = os.environ.get("XDG_SESSION_TYPE", "")
        if session_type:
            results.append(CheckResult(Status.INFO, f"Session type: {session_type}"))
        else:
            results.append(CheckResult(Status.WARN, "XDG_SESSION_TYPE not set"))

        if has_command("xlsclients"):
            try:
                clients = _x_clients()
            except CommandError as e:
                results.append(CheckResult(Status.WARN, f"Cannot list X clients: {e}"))
            else:
                results.append(CheckResult(Status.INFO, f"Xwayland/X11 clients: {len(clients)}"))
        return results
