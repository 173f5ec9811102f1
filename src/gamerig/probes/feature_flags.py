"""Probe listing driver debug and feature flags."""

from __future__ import annotations

from gamerig import defaults
from gamerig.models.check_result import CheckResult, Status
from gamerig.models.probe import Probe
from gamerig.utils import CommandError, has_command, run_command

# (label, command, environment toggle that makes the driver print its options)
_LISTINGS = (
    ("RADV_PERFTEST", ["vulkaninfo", "--summary"], {"RADV_PERFTEST": "help"}),
    ("AMD_DEBUG", ["glxinfo", "-B"], {"AMD_DEBUG": "help"}),
)


def list_options(command: list[str], env: dict[str, str], limit: int) -> list[str]:
    """Run *command* with *env* and return the first *limit* output lines.

    Mesa prints the option list on stderr, so both streams are read.
    """
    proc = run_command(command, env=env)
    lines = (proc.stderr + proc.stdout).splitlines()
    return [line.rstrip() for line in lines if line.strip()][:limit]


class FeatureFlagsProbe(Probe):
    """Prints the option lists Mesa drivers report for their debug variables."""

    id = "feature_flags"
    name = "Driver Feature Flags"
    description = "Known RADV_PERFTEST and AMD_DEBUG options (informational)."
    sort_order = 100

    def run(self) -> list[CheckResult]:
        results: list[CheckResult] = []
        for label, command, env in _LISTINGS:
            if not has_command(command[0]):
                results.append(CheckResult(Status.WARN, f"{label}: {command[0]} not found"))
                continue
            results.append(CheckResult(Status.INFO, f"{label} options:"))
            try:
                lines = list_options(command, env, defaults.FEATURE_FLAG_LINES)
            except CommandError as e:
                results.append(CheckResult(Status.WARN, str(e)))
                continue
            results.extend(CheckResult(Status.INFO, f"  {line}") for line in lines)
        return results
