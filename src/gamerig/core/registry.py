"""Central component registry."""

from __future__ import annotations

import logging
from typing import Generic, Iterator, TypeVar

from gamerig.models.component import Component

log = logging.getLogger(__name__)

C = TypeVar("C", bound=Component)


class Registry(Generic[C]):
    """Stores registered probes or steps and hands them out in run order."""

    def __init__(self) -> None:
        self._components: dict[str, C] = {}

    def register(self, component: C) -> None:
        """Register a component instance."""
        if component.id in self._components:
            log.warning("Component '%s' already registered, skipping duplicate", component.id)
            return
        self._components[component.id] = component
        log.debug("Registered: %s (%s)", component.id, component.name)

    def get(self, component_id: str) -> C | None:
        """Get a component by its ID."""
        return self._components.get(component_id)

    def get_all(self) -> list[C]:
        """Get all registered components sorted by ``sort_order``."""
        return sorted(self._components.values(), key=lambda c: (c.sort_order, c.id))

    def get_available(self) -> list[C]:
        """Get all components that are available on this system, in run order."""
        available = []
        for component in self.get_all():
            try:
                if component.is_available():
                    available.append(component)
            except Exception:
                log.exception("Error checking availability of '%s'", component.id)
        return available

    def __len__(self) -> int:
        return len(self._components)

    def __iter__(self) -> Iterator[C]:
        return iter(self.get_all())

    def __contains__(self, component_id: str) -> bool:
        return component_id in self._components
