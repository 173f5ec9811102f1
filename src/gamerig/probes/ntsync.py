"""Probe for the NTSync kernel driver used by Proton."""

from __future__ import annotations

from pathlib import Path

from gamerig.models.check_result import CheckResult, Status
from gamerig.models.probe import Probe
from gamerig.utils import CommandError, run_command

_MODULE = "ntsync"
_DEVICE = Path("/dev/ntsync")


def _loaded_modules() -> set[str]:
    """Names of loaded kernel modules, from ``lsmod``."""
    proc = run_command(["lsmod"])
    modules: set[str] = set()
    for line in proc.stdout.splitlines()[1:]:
        fields = line.split()
        if fields:
            modules.add(fields[0])
    return modules


class NtsyncProbe(Probe):
    """Checks that the ntsync module is loaded and its device node exists."""

    id = "ntsync"
    name = "NTSync"
    description = "Kernel synchronization primitives for Wine/Proton (ntsync module and /dev/ntsync)."
    sort_order = 30

    def run(self) -> list[CheckResult]:
        results: list[CheckResult] = []

        try:
            loaded = _MODULE in _loaded_modules()
        except CommandError as e:
            results.append(CheckResult(Status.WARN, f"Cannot list modules: {e}"))
        else:
            if loaded:
                results.append(CheckResult(Status.PASS, f"{_MODULE} module loaded"))
            else:
                results.append(CheckResult(Status.FAIL, f"{_MODULE} module not loaded"))

        if _DEVICE.exists():
            results.append(CheckResult(Status.PASS, f"{_DEVICE} exists"))
        else:
            results.append(CheckResult(Status.FAIL, f"{_DEVICE} missing"))
        return results
