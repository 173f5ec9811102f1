"""Diagnostic result dataclasses."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class Status(Enum):
    """Outcome category of a single check line."""

    PASS = "pass"
    FAIL = "fail"
    WARN = "warn"
    INFO = "info"


@dataclass(slots=True)
class CheckResult:
    """One printed status line."""

    status: Status
    message: str


@dataclass(slots=True)
class ProbeReport:
    """All lines produced by one probe."""

    probe_id: str
    probe_name: str
    results: list[CheckResult] = field(default_factory=list)

    @property
    def failed(self) -> bool:
        """Whether any line of this probe is a Fail."""
        return any(r.status is Status.FAIL for r in self.results)
