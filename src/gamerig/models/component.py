"""Base interface shared by probes and cleanup steps."""

from __future__ import annotations

from abc import ABC, abstractmethod


class Component(ABC):
    """A unit the registry can hold: a diagnostic probe or a cleanup step."""

    @property
    @abstractmethod
    def id(self) -> str:
        """Unique identifier, e.g. 'vulkan_driver'."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable name, e.g. 'Vulkan Driver'."""

    @property
    @abstractmethod
    def description(self) -> str:
        """What this unit checks or cleans."""

    @property
    def sort_order(self) -> int:
        """Position in the run (lower = first). Default 50."""
        return 50

    @property
    def requires_root(self) -> bool:
        """Whether this unit escalates privileges for part of its work."""
        return False

    @property
    def unavailable_reason(self) -> str | None:
        """Why this unit cannot work on this system, or None if supported."""
        return None

    def is_available(self) -> bool:
        """Check if this unit is applicable on the current system."""
        return self.unavailable_reason is None
