"""Discovery of built-in probes and cleanup steps."""

from __future__ import annotations

import importlib
import inspect
import logging
import pkgutil
from types import ModuleType

from gamerig.core.registry import Registry
from gamerig.models.component import Component
from gamerig.models.probe import Probe
from gamerig.models.step import CleanupStep

log = logging.getLogger(__name__)


def _find_components_in_module(module: ModuleType, base: type[Component]) -> list[type[Component]]:
    """Find all concrete subclasses of *base* defined in a module."""
    found: list[type[Component]] = []
    for _, obj in inspect.getmembers(module, inspect.isclass):
        if issubclass(obj, base) and not inspect.isabstract(obj) and obj.__module__ == module.__name__:
            found.append(obj)
    return found


def _load_package(package_name: str, base: type[Component]) -> list[type[Component]]:
    """Import every module of *package_name* and collect its components."""
    package = importlib.import_module(package_name)
    found: list[type[Component]] = []
    for _importer, modname, _ispkg in pkgutil.iter_modules(package.__path__):
        try:
            module = importlib.import_module(f"{package_name}.{modname}")
            found.extend(_find_components_in_module(module, base))
        except Exception:
            log.exception("Failed to load module: %s.%s", package_name, modname)
    return found


def _register_all(registry: Registry, classes: list[type[Component]]) -> None:
    for cls in classes:
        try:
            registry.register(cls())
        except Exception:
            log.exception("Failed to instantiate: %s", cls.__name__)


def load_probes(registry: Registry[Probe]) -> None:
    """Discover and register the built-in diagnostic probes."""
    _register_all(registry, _load_package("gamerig.probes", Probe))
    log.info("Loaded %d probes", len(registry))


def load_steps(registry: Registry[CleanupStep]) -> None:
    """Discover and register the built-in cleanup steps."""
    _register_all(registry, _load_package("gamerig.steps", CleanupStep))
    log.info("Loaded %d cleanup steps", len(registry))
