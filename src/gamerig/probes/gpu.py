"""Probes for the GPU: PCI device and VRAM counters."""

from __future__ import annotations

import re
from pathlib import Path

from gamerig.models.check_result import CheckResult, Status
from gamerig.models.probe import Probe
from gamerig.utils import CommandError, has_command, run_command

_GPU_CLASS_RE = re.compile(r"vga|display|3d", re.IGNORECASE)
_DRM_DIR = Path("/sys/class/drm")


def _lspci() -> str:
    return run_command(["lspci"]).stdout


def find_gpu_lines(lspci_output: str) -> list[str]:
    """PCI lines whose device class looks like a display controller."""
    return [line.strip() for line in lspci_output.splitlines() if _GPU_CLASS_RE.search(line)]


def read_vram_counters(drm_dir: Path = _DRM_DIR) -> tuple[int, int] | None:
    """Return (used_bytes, total_bytes) of the first card that reports them."""
    for device in sorted(drm_dir.glob("card[0-9]*/device")):
        total_file = device / "mem_info_vram_total"
        used_file = device / "mem_info_vram_used"
        if not (total_file.is_file() and used_file.is_file()):
            continue
        try:
            total = int(total_file.read_text().strip())
            used = int(used_file.read_text().strip())
        except (OSError, ValueError):
            continue
        return used, total
    return None


class GpuDeviceProbe(Probe):
    """Finds the display controller in the PCI device list."""

    id = "gpu_device"
    name = "GPU"
    description = "Display controllers listed by lspci."
    sort_order = 50

    @property
    def unavailable_reason(self) -> str | None:
        if not has_command("lspci"):
            return "lspci not found (install pciutils)"
        return None

    def run(self) -> list[CheckResult]:
        try:
            lines = find_gpu_lines(_lspci())
        except CommandError as e:
            return [CheckResult(Status.WARN, str(e))]
        if lines:
            return [CheckResult(Status.PASS, f"GPU: {lines[0]}")]
        return [CheckResult(Status.WARN, "No display controller found in lspci output")]


class VramProbe(Probe):
    """Reads VRAM usage from the amdgpu sysfs counters."""

    id = "vram"
    name = "VRAM"
    description = "Used and total video memory from /sys/class/drm."
    sort_order = 60

    def run(self) -> list[CheckResult]:
        counters = read_vram_counters(_DRM_DIR)
        if counters is None:
            return [CheckResult(Status.WARN, "VRAM counters not available")]
        used, total = counters
        return [CheckResult(Status.PASS, f"VRAM: {used // 1024**2} MB used / {total // 1024**3} GB total")]
