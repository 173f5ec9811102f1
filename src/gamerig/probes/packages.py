"""Probe for required pacman packages."""

from __future__ import annotations

from gamerig import defaults
from gamerig.models.check_result import CheckResult, Status
from gamerig.models.probe import Probe
from gamerig.settings import Settings
from gamerig.utils import CommandError, has_command, run_command


def query_package(name: str) -> str | None:
    """Return the installed version of *name*, or None if not installed."""
    proc = run_command(["pacman", "-Q", name])
    if proc.returncode != 0:
        return None
    fields = proc.stdout.split()
    return fields[1] if len(fields) > 1 else ""


class PackagesProbe(Probe):
    """Checks that each expected package is installed."""

    id = "packages"
    name = "Packages"
    description = "Gaming packages in the pacman database."
    sort_order = 90

    @property
    def unavailable_reason(self) -> str | None:
        if not has_command("pacman"):
            return "pacman not found"
        return None

    def run(self) -> list[CheckResult]:
        names = Settings.instance().get_list("check.packages", defaults.PACKAGES)
        results: list[CheckResult] = []
        for name in names:
            try:
                version = query_package(name)
            except CommandError as e:
                results.append(CheckResult(Status.WARN, f"{name}: {e}"))
                continue
            if version is None:
                results.append(CheckResult(Status.FAIL, f"{name} missing"))
            elif version:
                results.append(CheckResult(Status.PASS, f"{name} installed ({version})"))
            else:
                results.append(CheckResult(Status.PASS, f"{name} installed"))
        return results
