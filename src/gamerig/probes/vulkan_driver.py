"""Probe for the active Vulkan driver."""

from __future__ import annotations

import logging
import re

from gamerig.models.check_result import CheckResult, Status
from gamerig.models.probe import Probe
from gamerig.utils import CommandError, has_command, run_command

log = logging.getLogger(__name__)

_REQUIRED_DRIVER = "radv"
_DRIVER_NAME_RE = re.compile(r"driverName\s*=\s*(.*)")
_DRIVER_INFO_RE = re.compile(r"driverInfo\s*=\s*(.*)")


def _vulkaninfo_summary() -> str:
    proc = run_command(["vulkaninfo", "--summary"])
    if proc.returncode != 0:
        log.info("vulkaninfo exited with %d: %s", proc.returncode, proc.stderr.strip())
    return proc.stdout


def _first_match(pattern: re.Pattern[str], text: str) -> str:
    for line in text.splitlines():
        m = pattern.search(line)
        if m:
            return m.group(1).strip()
    return ""


def parse_driver(summary: str) -> tuple[str, str]:
    """Return (driver_name, driver_info) from ``vulkaninfo --summary`` output.

    Only the first GPU listed is considered; missing fields are empty.
    """
    return _first_match(_DRIVER_NAME_RE, summary), _first_match(_DRIVER_INFO_RE, summary)


class VulkanDriverProbe(Probe):
    """Checks that Vulkan runs on the RADV driver."""

    id = "vulkan_driver"
    name = "Vulkan Driver"
    description = "Queries vulkaninfo and expects the Mesa RADV driver."
    sort_order = 20

    @property
    def unavailable_reason(self) -> str | None:
        if not has_command("vulkaninfo"):
            return "vulkaninfo not found (install vulkan-tools)"
        return None

    def run(self) -> list[CheckResult]:
        try:
            summary = _vulkaninfo_summary()
        except CommandError as e:
            return [CheckResult(Status.WARN, str(e))]

        driver_name, driver_info = parse_driver(summary)
        if _REQUIRED_DRIVER in driver_name:
            return [
                CheckResult(Status.PASS, f"Driver: {driver_name}"),
                CheckResult(Status.PASS, f"Driver info: {driver_info}"),
            ]
        return [CheckResult(Status.FAIL, f"Expected RADV driver, found: {driver_name}")]
