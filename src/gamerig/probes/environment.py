"""Probe for gaming-related environment variables."""

from __future__ import annotations

import os

from gamerig import defaults
from gamerig.models.check_result import CheckResult, Status
from gamerig.models.probe import Probe
from gamerig.settings import Settings


def check_env_var(name: str) -> CheckResult:
    """Pass with ``name=value`` if *name* is set and non-empty."""
    value = os.environ.get(name, "")
    if value:
        return CheckResult(Status.PASS, f"{name}={value}")
    return CheckResult(Status.FAIL, f"{name} not set")


class EnvironmentProbe(Probe):
    """Checks that the expected environment variables are exported."""

    id = "environment"
    name = "Environment Variables"
    description = "Driver and Proton tuning variables exported in the session."
    sort_order = 10

    def _names(self) -> tuple[str, ...]:
        return Settings.instance().get_list("check.env_vars", defaults.ENV_VARS)

    def run(self) -> list[CheckResult]:
        return [check_env_var(name) for name in self._names()]
