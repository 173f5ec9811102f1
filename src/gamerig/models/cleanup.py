"""Cleanup dataclasses."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from gamerig.models.check_result import CheckResult


class ClearMode(Enum):
    """How a cleanup target is emptied."""

    CONTENTS = "contents"
    """Remove everything inside the directory, keep the directory."""

    RECREATE = "recreate"
    """Remove the directory itself and create it again empty."""


@dataclass(frozen=True)
class InstallRoot:
    """Resolved base directory of the Steam installation."""

    path: Path | None = None

    @property
    def found(self) -> bool:
        return self.path is not None


@dataclass(slots=True)
class CleanupTarget:
    """A directory eligible for clearing.

    ``size_before`` stays ``None`` for targets that did not exist.
    """

    path: Path
    label: str
    mode: ClearMode = ClearMode.CONTENTS
    existed_before: bool = False
    size_before: str | None = None


@dataclass(slots=True)
class CleanupContext:
    """State shared by the steps of one cleanup run."""

    install_root: InstallRoot = field(default_factory=InstallRoot)
    home: Path = field(default_factory=Path.home)


@dataclass(slots=True)
class StepResult:
    """Result of one cleanup step."""

    step_id: str
    step_name: str
    lines: list[CheckResult] = field(default_factory=list)
    targets: list[CleanupTarget] = field(default_factory=list)
    freed_bytes: int = 0
    errors: list[str] = field(default_factory=list)
