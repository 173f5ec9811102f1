"""Step reporting orphaned packages."""

from __future__ import annotations

from gamerig.models.check_result import CheckResult, Status
from gamerig.models.cleanup import CleanupContext, StepResult
from gamerig.models.step import CleanupStep
from gamerig.utils import CommandError, has_command, run_command

REMOVE_HINT = "sudo pacman -Rns $(pacman -Qdtq)"


def find_orphans() -> list[str]:
    """Names of packages installed as dependencies that nothing requires."""
    proc = run_command(["pacman", "-Qdtq"])
    # pacman exits 1 when there are no orphans
    if proc.returncode != 0:
        return []
    return proc.stdout.split()


class OrphanPackagesStep(CleanupStep):
    """Lists orphaned packages; removing them is left to the user."""

    id = "orphans"
    name = "Orphaned Packages"
    description = "Packages no longer required by anything. Reported only, never removed."
    sort_order = 90

    @property
    def unavailable_reason(self) -> str | None:
        if not has_command("pacman"):
            return "pacman not found"
        return None

    def run(self, context: CleanupContext) -> StepResult:
        result = self._result()
        try:
            orphans = find_orphans()
        except CommandError as e:
            result.lines.append(CheckResult(Status.WARN, f"Cannot query orphans: {e}"))
            return result

        if not orphans:
            result.lines.append(CheckResult(Status.PASS, "No orphaned packages"))
            return result

        result.lines.append(
            CheckResult(Status.WARN, f"{len(orphans)} orphaned package(s): {' '.join(orphans)}")
        )
        result.lines.append(CheckResult(Status.INFO, f"Remove with: {REMOVE_HINT}"))
        return result
