"""Diagnostic probe interface."""

from __future__ import annotations

from abc import ABC, abstractmethod

from gamerig.models.check_result import CheckResult
from gamerig.models.component import Component


class Probe(Component, ABC):
    """Base class for all diagnostic probes.

    A probe inspects the system and returns one or more status lines.
    It MUST NOT change system state.
    """

    @abstractmethod
    def run(self) -> list[CheckResult]:
        """Run the probe and return its status lines."""
