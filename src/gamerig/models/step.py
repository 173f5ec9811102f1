"""Cleanup step interface."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

from gamerig import utils
from gamerig.models.check_result import CheckResult, Status
from gamerig.models.cleanup import CleanupContext, CleanupTarget, ClearMode, StepResult
from gamerig.models.component import Component

log = logging.getLogger(__name__)


class CleanupStep(Component, ABC):
    """Base class for all cleanup steps.

    Steps run in ``sort_order``.  A step that sets ``needs_install_root``
    is skipped when no Steam installation was found.
    """

    @property
    def needs_install_root(self) -> bool:
        """Whether this step operates under the Steam installation root."""
        return False

    @abstractmethod
    def run(self, context: CleanupContext) -> StepResult:
        """Perform the step and report what happened."""

    def _result(self) -> StepResult:
        return StepResult(step_id=self.id, step_name=self.name)


class DirectoryTargetsStep(CleanupStep, ABC):
    """Base class for steps that clear a fixed list of directories.

    Subclasses define metadata properties and ``_targets()``.  Each
    target is measured, then cleared according to its mode; targets are
    independent, so one missing or failing directory never stops the
    others.
    """

    @abstractmethod
    def _targets(self, context: CleanupContext) -> list[CleanupTarget]:
        """Directories to clear, in order."""

    def run(self, context: CleanupContext) -> StepResult:
        result = self._result()
        for target in self._targets(context):
            result.targets.append(target)
            if target.mode is ClearMode.RECREATE:
                self._recreate(target, result)
            else:
                self._clear(target, result)
        return result

    def _clear(self, target: CleanupTarget, result: StepResult) -> None:
        if not target.path.is_dir():
            result.lines.append(CheckResult(Status.WARN, f"{target.label}: not found"))
            return

        target.existed_before = True
        target.size_before = utils.disk_usage_text(target.path)
        freed, _removed, errors = utils.clear_contents(target.path)
        result.freed_bytes += freed
        self._report(target, result, errors, "cleared")

    def _recreate(self, target: CleanupTarget, result: StepResult) -> None:
        if target.path.is_dir():
            target.existed_before = True
            target.size_before = utils.disk_usage_text(target.path)
        freed, errors = utils.clear_and_recreate(target.path)
        result.freed_bytes += freed
        self._report(target, result, errors, "recreated")

    def _report(self, target: CleanupTarget, result: StepResult, errors: list[str], verb: str) -> None:
        size = target.size_before if target.size_before is not None else "was missing"
        if errors:
            for error in errors:
                log.warning("Could not remove %s", error)
            result.errors.extend(errors)
            result.lines.append(
                CheckResult(Status.WARN, f"{target.label}: {verb} ({size}), {len(errors)} error(s)")
            )
        else:
            result.lines.append(CheckResult(Status.PASS, f"{target.label}: {verb} ({size})"))
