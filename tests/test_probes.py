"""Tests for the built-in diagnostic probes."""

from __future__ import annotations

from unittest.mock import patch

import pytest

from gamerig import defaults
from gamerig.core.engine import Reporter
from gamerig.core.privileges import PrivilegeError
from gamerig.core.registry import Registry
from gamerig.models.check_result import CheckResult, Status
from gamerig.probes.environment import EnvironmentProbe, check_env_var
from gamerig.probes.feature_flags import FeatureFlagsProbe, list_options
from gamerig.probes.gamemode import GameModeProbe
from gamerig.probes.gpu import GpuDeviceProbe, VramProbe, find_gpu_lines, read_vram_counters
from gamerig.probes.ntsync import NtsyncProbe
from gamerig.probes.packages import PackagesProbe, query_package
from gamerig.probes.scheduler import (
    NO_LOG_MESSAGE,
    KernelLogProbe,
    SchedulerStateProbe,
    last_scheduler_line,
)
from gamerig.probes.session import DisplaySessionProbe
from gamerig.probes.shader_cache import ShaderCacheProbe
from gamerig.probes.vulkan_driver import VulkanDriverProbe, parse_driver
from gamerig.utils import CommandError
from tests.helpers import proc

VULKAN_SUMMARY = """\
Devices:
========
GPU0:
\tapiVersion         = 1.4.303
\tdriverVersion      = 25.0.1
\tvendorID           = 0x1002
\tdeviceName         = AMD Radeon RX 7900 XTX (RADV NAVI31)
\tdriverID           = DRIVER_ID_MESA_RADV
\tdriverName         = radv
\tdriverInfo         = Mesa 25.0.1-arch1.1
GPU1:
\tdeviceName         = llvmpipe (LLVM 19.1.7, 256 bits)
\tdriverName         = llvmpipe
\tdriverInfo         = Mesa 25.0.1-arch1.1 (LLVM 19.1.7)
"""

LSPCI_OUTPUT = """\
00:00.0 Host bridge: Advanced Micro Devices, Inc. [AMD] Raphael/Granite Ridge Root Complex
03:00.0 VGA compatible controller: Advanced Micro Devices, Inc. [AMD/ATI] Navi 31 [Radeon RX 7900 XT/7900 XTX] (rev c8)
03:00.1 Audio device: Advanced Micro Devices, Inc. [AMD/ATI] Navi 31 HDMI/DP Audio
"""


def _report(probe) -> list[CheckResult]:
    registry = Registry()
    registry.register(probe)
    return Reporter(registry).run()[0].results


class TestEnvironment:
    @pytest.fixture
    def all_set(self, monkeypatch):
        for name in defaults.ENV_VARS:
            monkeypatch.setenv(name, "1")

    def test_single_missing_variable_fails_alone(self, all_set, monkeypatch):
        monkeypatch.delenv("AMD_VULKAN_ICD")

        results = _report(EnvironmentProbe())

        failures = [r for r in results if r.status is Status.FAIL]
        assert failures == [CheckResult(Status.FAIL, "AMD_VULKAN_ICD not set")]
        assert len(results) == len(defaults.ENV_VARS)
        assert all(r.status is Status.PASS for r in results if r not in failures)

    def test_pass_shows_value(self, monkeypatch):
        monkeypatch.setenv("RADV_PERFTEST", "gpl,nggc")
        assert check_env_var("RADV_PERFTEST") == CheckResult(Status.PASS, "RADV_PERFTEST=gpl,nggc")

    def test_empty_value_counts_as_unset(self, monkeypatch):
        monkeypatch.setenv("DXVK_ASYNC", "")
        assert check_env_var("DXVK_ASYNC").status is Status.FAIL

    def test_variable_list_from_settings(self, use_settings, monkeypatch):
        use_settings({"check": {"env_vars": ["GAMERIG_ONLY"]}})
        monkeypatch.setenv("GAMERIG_ONLY", "yes")
        assert EnvironmentProbe().run() == [CheckResult(Status.PASS, "GAMERIG_ONLY=yes")]


class TestVulkanDriver:
    def test_parse_uses_first_gpu(self):
        assert parse_driver(VULKAN_SUMMARY) == ("radv", "Mesa 25.0.1-arch1.1")

    def test_parse_missing_fields(self):
        assert parse_driver("no devices") == ("", "")

    def test_radv_passes(self):
        with patch("gamerig.probes.vulkan_driver.run_command", return_value=proc(VULKAN_SUMMARY)):
            results = VulkanDriverProbe().run()
        assert results == [
            CheckResult(Status.PASS, "Driver: radv"),
            CheckResult(Status.PASS, "Driver info: Mesa 25.0.1-arch1.1"),
        ]

    def test_other_driver_fails(self):
        summary = "\tdriverName = AMD proprietary driver\n\tdriverInfo = 2025.Q1.1\n"
        with patch("gamerig.probes.vulkan_driver.run_command", return_value=proc(summary)):
            results = VulkanDriverProbe().run()
        assert results == [CheckResult(Status.FAIL, "Expected RADV driver, found: AMD proprietary driver")]

    def test_unavailable_without_vulkaninfo(self):
        with patch("gamerig.probes.vulkan_driver.has_command", return_value=False):
            results = _report(VulkanDriverProbe())
        assert results == [CheckResult(Status.WARN, "vulkaninfo not found (install vulkan-tools)")]


class TestNtsync:
    LSMOD = "Module                  Size  Used by\nntsync                 28672  0\namdgpu               1234  5\n"

    def test_loaded_and_present(self, tmp_path):
        device = tmp_path / "ntsync"
        device.touch()
        with (
            patch("gamerig.probes.ntsync.run_command", return_value=proc(self.LSMOD)),
            patch("gamerig.probes.ntsync._DEVICE", device),
        ):
            results = NtsyncProbe().run()
        assert [r.status for r in results] == [Status.PASS, Status.PASS]

    def test_checks_are_independent(self, tmp_path):
        lsmod = "Module                  Size  Used by\namdgpu               1234  5\n"
        device = tmp_path / "ntsync"
        device.touch()
        with (
            patch("gamerig.probes.ntsync.run_command", return_value=proc(lsmod)),
            patch("gamerig.probes.ntsync._DEVICE", device),
        ):
            results = NtsyncProbe().run()
        assert results == [
            CheckResult(Status.FAIL, "ntsync module not loaded"),
            CheckResult(Status.PASS, f"{device} exists"),
        ]

    def test_device_missing(self, tmp_path):
        device = tmp_path / "ntsync"
        with (
            patch("gamerig.probes.ntsync.run_command", return_value=proc(self.LSMOD)),
            patch("gamerig.probes.ntsync._DEVICE", device),
        ):
            results = NtsyncProbe().run()
        assert results[1] == CheckResult(Status.FAIL, f"{device} missing")


class TestShaderCache:
    def test_reports_measured_size_and_count(self, fake_home, monkeypatch):
        cache = fake_home / ".cache" / "mesa_shader_cache"
        cache.mkdir(parents=True)
        for i in range(3):
            (cache / f"entry{i}").write_bytes(b"s" * 100)
        monkeypatch.setenv("MESA_SHADER_CACHE_MAX_SIZE", "12G")

        with patch("gamerig.probes.shader_cache.disk_usage_text", return_value="42M"):
            results = ShaderCacheProbe().run()

        assert results == [
            CheckResult(Status.PASS, "Cache size: 42M (3 files)"),
            CheckResult(Status.PASS, "MESA_SHADER_CACHE_MAX_SIZE=12G"),
        ]

    def test_missing_cache_and_limit(self, fake_home, monkeypatch):
        monkeypatch.delenv("MESA_SHADER_CACHE_MAX_SIZE", raising=False)
        results = ShaderCacheProbe().run()
        assert results == [
            CheckResult(Status.WARN, "Shader cache doesn't exist yet"),
            CheckResult(Status.WARN, "MESA_SHADER_CACHE_MAX_SIZE not set (default: 1G)"),
        ]


class TestGpu:
    def test_find_gpu_lines(self):
        lines = find_gpu_lines(LSPCI_OUTPUT)
        assert len(lines) == 1
        assert lines[0].startswith("03:00.0 VGA compatible controller")

    def test_device_probe_pass(self):
        with patch("gamerig.probes.gpu.run_command", return_value=proc(LSPCI_OUTPUT)):
            results = GpuDeviceProbe().run()
        assert results[0].status is Status.PASS
        assert "Navi 31" in results[0].message

    def test_device_probe_nothing_found(self):
        with patch("gamerig.probes.gpu.run_command", return_value=proc("00:00.0 Host bridge: foo\n")):
            results = GpuDeviceProbe().run()
        assert results == [CheckResult(Status.WARN, "No display controller found in lspci output")]

    def test_vram_counters(self, tmp_path):
        (tmp_path / "card0" / "device").mkdir(parents=True)
        device = tmp_path / "card1" / "device"
        device.mkdir(parents=True)
        (device / "mem_info_vram_total").write_text(f"{24 * 1024**3}\n")
        (device / "mem_info_vram_used").write_text(f"{1536 * 1024**2}\n")

        assert read_vram_counters(tmp_path) == (1536 * 1024**2, 24 * 1024**3)
        with patch("gamerig.probes.gpu._DRM_DIR", tmp_path):
            results = VramProbe().run()
        assert results == [CheckResult(Status.PASS, "VRAM: 1536 MB used / 24 GB total")]

    def test_vram_unavailable(self, tmp_path):
        with patch("gamerig.probes.gpu._DRM_DIR", tmp_path):
            assert VramProbe().run() == [CheckResult(Status.WARN, "VRAM counters not available")]


class TestScheduler:
    @pytest.fixture
    def sched_dir(self, tmp_path):
        d = tmp_path / "sched_ext"
        (d / "root").mkdir(parents=True)
        with patch("gamerig.probes.scheduler._SCHED_EXT_DIR", d):
            yield d

    def test_enabled(self, sched_dir):
        (sched_dir / "state").write_text("enabled\n")
        (sched_dir / "root" / "ops").write_text("lavd_1.0.6_g1a2b3c_x86_64_unknown_linux_gnu\n")
        results = SchedulerStateProbe().run()
        assert results == [
            CheckResult(Status.PASS, "sched_ext: enabled (lavd_1.0.6_g1a2b3c_x86_64_unknown_linux_gnu)")
        ]

    def test_disabled(self, sched_dir):
        (sched_dir / "state").write_text("disabled\n")
        assert SchedulerStateProbe().run() == [CheckResult(Status.WARN, "sched_ext: disabled")]

    def test_no_kernel_support(self, tmp_path):
        with patch("gamerig.probes.scheduler._SCHED_EXT_DIR", tmp_path / "missing"):
            assert SchedulerStateProbe().run() == [CheckResult(Status.WARN, "Kernel has no sched_ext support")]

    def test_last_scheduler_line(self):
        text = (
            "[    1.0] usb 1-1: new device\n"
            "[   10.0] sched_ext: BPF scheduler \"rusty\" enabled\n"
            "[   20.0] sched_ext: BPF scheduler \"lavd_1.0.6\" enabled\n"
            "[   30.0] amdgpu: ring gfx ok\n"
        )
        assert last_scheduler_line(text) == '[   20.0] sched_ext: BPF scheduler "lavd_1.0.6" enabled'
        assert last_scheduler_line("nothing here\n") is None

    def test_kernel_log_plain_dmesg(self):
        log = "[ 5.0] scx_lavd: loaded\n"
        with (
            patch("gamerig.probes.scheduler.run_command", return_value=proc(log)),
            patch("gamerig.probes.scheduler.run_privileged") as mock_priv,
        ):
            results = KernelLogProbe().run()
        assert results == [CheckResult(Status.PASS, "[ 5.0] scx_lavd: loaded")]
        mock_priv.assert_not_called()

    def test_kernel_log_escalates_when_restricted(self):
        denied = proc(returncode=1, stderr="dmesg: read kernel buffer failed: Operation not permitted")
        with (
            patch("gamerig.probes.scheduler.run_command", return_value=denied),
            patch("gamerig.probes.scheduler.run_privileged", return_value=proc("[ 1.0] usb\n")) as mock_priv,
        ):
            results = KernelLogProbe().run()
        mock_priv.assert_called_once_with(["dmesg"])
        assert results == [CheckResult(Status.WARN, NO_LOG_MESSAGE)]

    def test_kernel_log_privilege_failure_warns(self):
        with (
            patch("gamerig.probes.scheduler.run_command", return_value=proc(returncode=1)),
            patch(
                "gamerig.probes.scheduler.run_privileged",
                side_effect=PrivilegeError("Authentication dismissed by user"),
            ),
        ):
            results = KernelLogProbe().run()
        assert results == [CheckResult(Status.WARN, "Cannot read kernel log: Authentication dismissed by user")]


class TestGameMode:
    def test_running(self):
        with patch("gamerig.probes.gamemode.run_command", return_value=proc("1234\n5678\n")):
            assert GameModeProbe().run() == [CheckResult(Status.PASS, "gamemoded running (PID 1234 5678)")]

    def test_not_running_is_warning(self):
        with patch("gamerig.probes.gamemode.run_command", return_value=proc(returncode=1)):
            results = GameModeProbe().run()
        assert results[0].status is Status.WARN

    def test_pgrep_missing(self):
        with patch("gamerig.probes.gamemode.run_command", side_effect=CommandError("pgrep not found")):
            assert GameModeProbe().run() == [CheckResult(Status.WARN, "Cannot query processes: pgrep not found")]


class TestDisplaySession:
    def test_wayland_with_x_clients(self, monkeypatch):
        monkeypatch.setenv("XDG_SESSION_TYPE", "wayland")
        with (
            patch("gamerig.probes.session.has_command", return_value=True),
            patch("gamerig.probes.session.run_command", return_value=proc("host  steam\nhost  xterm\n")),
        ):
            results = DisplaySessionProbe().run()
        assert results == [
            CheckResult(Status.INFO, "Session type: wayland"),
            CheckResult(Status.INFO, "Xwayland/X11 clients: 2"),
        ]

    def test_unset_session_without_xlsclients(self, monkeypatch):
        monkeypatch.delenv("XDG_SESSION_TYPE", raising=False)
        with patch("gamerig.probes.session.has_command", return_value=False):
            assert DisplaySessionProbe().run() == [CheckResult(Status.WARN, "XDG_SESSION_TYPE not set")]


class TestPackages:
    @staticmethod
    def _pacman(args, **kwargs):
        installed = {"steam": "1.0.0.81-2", "gamemode": "1.8.2-1"}
        name = args[-1]
        if name in installed:
            return proc(f"{name} {installed[name]}\n")
        return proc(returncode=1, stderr=f"error: package '{name}' was not found")

    def test_query_package(self):
        with patch("gamerig.probes.packages.run_command", side_effect=self._pacman):
            assert query_package("steam") == "1.0.0.81-2"
            assert query_package("mangohud") is None

    def test_reports_each_package(self, use_settings):
        use_settings({"check": {"packages": ["steam", "mangohud", "gamemode"]}})
        with patch("gamerig.probes.packages.run_command", side_effect=self._pacman):
            results = PackagesProbe().run()
        assert results == [
            CheckResult(Status.PASS, "steam installed (1.0.0.81-2)"),
            CheckResult(Status.FAIL, "mangohud missing"),
            CheckResult(Status.PASS, "gamemode installed (1.8.2-1)"),
        ]

    def test_default_list(self):
        with patch("gamerig.probes.packages.run_command", side_effect=self._pacman):
            results = PackagesProbe().run()
        assert len(results) == len(defaults.PACKAGES)

    def test_unavailable_without_pacman(self):
        with patch("gamerig.probes.packages.has_command", return_value=False):
            assert _report(PackagesProbe()) == [CheckResult(Status.WARN, "pacman not found")]


class TestFeatureFlags:
    def test_list_options_reads_stderr_and_limits(self):
        stderr = "\n".join(f"option{i}    description {i}" for i in range(30))
        with patch("gamerig.probes.feature_flags.run_command", return_value=proc("", stderr=stderr)) as mock_run:
            lines = list_options(["vulkaninfo", "--summary"], {"RADV_PERFTEST": "help"}, 15)
        assert len(lines) == 15
        assert lines[0] == "option0    description 0"
        assert mock_run.call_args.kwargs["env"] == {"RADV_PERFTEST": "help"}

    def test_probe_output(self):
        def fake_run(args, **kwargs):
            return proc(stderr=f"{args[0]}-flag-a\n\n{args[0]}-flag-b\n")

        with (
            patch("gamerig.probes.feature_flags.has_command", side_effect=lambda name: name == "vulkaninfo"),
            patch("gamerig.probes.feature_flags.run_command", side_effect=fake_run),
        ):
            results = FeatureFlagsProbe().run()

        assert results == [
            CheckResult(Status.INFO, "RADV_PERFTEST options:"),
            CheckResult(Status.INFO, "  vulkaninfo-flag-a"),
            CheckResult(Status.INFO, "  vulkaninfo-flag-b"),
            CheckResult(Status.WARN, "AMD_DEBUG: glxinfo not found"),
        ]
