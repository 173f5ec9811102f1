"""Fakes shared by several test modules."""

from __future__ import annotations

import subprocess

from gamerig.models.check_result import CheckResult, Status
from gamerig.models.cleanup import CleanupContext, StepResult
from gamerig.models.probe import Probe
from gamerig.models.step import CleanupStep


def proc(stdout: str = "", returncode: int = 0, stderr: str = "") -> subprocess.CompletedProcess[str]:
    """Build a finished process result for mocked commands."""
    return subprocess.CompletedProcess(args=[], returncode=returncode, stdout=stdout, stderr=stderr)


class FakeProbe(Probe):
    """Probe that returns canned results without touching the system."""

    def __init__(
        self,
        probe_id: str = "fake",
        sort_order: int = 50,
        results: list[CheckResult] | None = None,
        available: bool = True,
        fail: bool = False,
    ):
        self._id = probe_id
        self._sort_order = sort_order
        self._results = results if results is not None else [CheckResult(Status.PASS, f"{probe_id} ok")]
        self._available = available
        self._fail = fail
        self.ran = False

    @property
    def id(self) -> str:
        return self._id

    @property
    def name(self) -> str:
        return f"Fake Probe ({self._id})"

    @property
    def description(self) -> str:
        return "A fake probe for testing"

    @property
    def sort_order(self) -> int:
        return self._sort_order

    @property
    def unavailable_reason(self) -> str | None:
        return None if self._available else f"{self._id} not available"

    def run(self) -> list[CheckResult]:
        self.ran = True
        if self._fail:
            raise RuntimeError("probe exploded")
        return list(self._results)


class FakeStep(CleanupStep):
    """Cleanup step that records the context it was run with."""

    def __init__(
        self,
        step_id: str = "fake",
        sort_order: int = 50,
        needs_root_dir: bool = False,
        available: bool = True,
        fail: bool = False,
        freed: int = 0,
    ):
        self._id = step_id
        self._sort_order = sort_order
        self._needs_root_dir = needs_root_dir
        self._available = available
        self._fail = fail
        self._freed = freed
        self.context: CleanupContext | None = None

    @property
    def id(self) -> str:
        return self._id

    @property
    def name(self) -> str:
        return f"Fake Step ({self._id})"

    @property
    def description(self) -> str:
        return "A fake step for testing"

    @property
    def sort_order(self) -> int:
        return self._sort_order

    @property
    def needs_install_root(self) -> bool:
        return self._needs_root_dir

    @property
    def unavailable_reason(self) -> str | None:
        return None if self._available else f"{self._id} tool missing"

    def run(self, context: CleanupContext) -> StepResult:
        self.context = context
        if self._fail:
            raise RuntimeError("step exploded")
        result = self._result()
        result.freed_bytes = self._freed
        result.lines.append(CheckResult(Status.PASS, f"{self._id} done"))
        return result
