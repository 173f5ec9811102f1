"""Diagnostic and cleanup orchestration."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Sequence

from gamerig.core.registry import Registry
from gamerig.models.check_result import CheckResult, ProbeReport, Status
from gamerig.models.cleanup import CleanupContext, InstallRoot, StepResult
from gamerig.models.probe import Probe
from gamerig.models.step import CleanupStep

log = logging.getLogger(__name__)

ReportCallback = Callable[[ProbeReport], None]
StepCallback = Callable[[StepResult], None]


def resolve_install_root(candidates: Sequence[Path], marker: str = "steamapps") -> InstallRoot:
    """Return the first candidate that contains *marker*.

    Order matters: later candidates are ignored once one matches.
    """
    for candidate in candidates:
        if (candidate / marker).exists():
            log.info("Install root: %s", candidate)
            return InstallRoot(candidate)
        log.debug("No %s under %s", marker, candidate)
    return InstallRoot()


def _select(registry: Registry, ids: list[str] | None) -> list:
    """Resolve *ids* against *registry*, keeping run order."""
    if not ids:
        return registry.get_all()
    selected = []
    for unit in registry.get_all():
        if unit.id in ids:
            selected.append(unit)
    for unknown in set(ids) - {u.id for u in selected}:
        log.warning("'%s' not found, skipping", unknown)
    return selected


class Reporter:
    """Runs diagnostic probes one after another."""

    def __init__(self, registry: Registry[Probe]) -> None:
        self.registry = registry

    def run(
        self,
        probe_ids: list[str] | None = None,
        on_report: ReportCallback | None = None,
    ) -> list[ProbeReport]:
        """Run the selected probes (all by default) in order.

        Every probe is independent: an unavailable probe yields a single
        Warn, and a probe that raises yields a single Fail, without
        affecting the ones after it.

        Args:
            probe_ids: Specific probe IDs to run. If None, run all.
            on_report: Optional callback fired after each probe.

        Returns:
            One report per probe, in run order.
        """
        reports: list[ProbeReport] = []
        for probe in _select(self.registry, probe_ids):
            report = ProbeReport(probe_id=probe.id, probe_name=probe.name)
            try:
                reason = probe.unavailable_reason
                if reason is not None:
                    report.results.append(CheckResult(Status.WARN, reason))
                else:
                    report.results.extend(probe.run())
            except Exception as e:
                log.exception("Probe '%s' failed", probe.id)
                report.results.append(CheckResult(Status.FAIL, f"Probe crashed: {e}"))
            reports.append(report)
            if on_report:
                on_report(report)
        return reports


class CleanupRunner:
    """Resolves the Steam root, then runs cleanup steps one after another."""

    def __init__(
        self,
        registry: Registry[CleanupStep],
        root_candidates: Sequence[Path] = (),
        marker: str = "steamapps",
    ) -> None:
        self.registry = registry
        self.root_candidates = tuple(root_candidates)
        self.marker = marker

    def run(
        self,
        step_ids: list[str] | None = None,
        on_result: StepCallback | None = None,
    ) -> list[StepResult]:
        """Run the selected steps (all by default) in order.

        The first result always reports install root resolution.  Steps
        that need the root are skipped when it was not found; everything
        else still runs.  An unavailable step yields a single Warn, and a
        step that raises yields a single Fail.

        Args:
            step_ids: Specific step IDs to run. If None, run all.
            on_result: Optional callback fired after each step.

        Returns:
            One result per executed step, preceded by the root result.
        """
        install_root = resolve_install_root(self.root_candidates, self.marker)
        context = CleanupContext(install_root=install_root)

        root_result = StepResult(step_id="install_root", step_name="Steam Installation")
        if install_root.found:
            root_result.lines.append(CheckResult(Status.PASS, f"Steam found at {install_root.path}"))
        else:
            root_result.lines.append(CheckResult(Status.WARN, "Steam installation not found"))
        results = [root_result]
        if on_result:
            on_result(root_result)

        for step in _select(self.registry, step_ids):
            if step.needs_install_root and not install_root.found:
                log.info("Skipping '%s': no Steam installation", step.id)
                continue
            try:
                reason = step.unavailable_reason
                if reason is not None:
                    result = StepResult(
                        step_id=step.id,
                        step_name=step.name,
                        lines=[CheckResult(Status.WARN, reason)],
                    )
                else:
                    result = step.run(context)
            except Exception as e:
                log.exception("Step '%s' failed", step.id)
                result = StepResult(
                    step_id=step.id,
                    step_name=step.name,
                    lines=[CheckResult(Status.FAIL, f"Step crashed: {e}")],
                    errors=[str(e)],
                )
            results.append(result)
            if on_result:
                on_result(result)
        return results
