"""Step to clear AUR helper build caches."""

from __future__ import annotations

from gamerig.models.cleanup import CleanupContext, CleanupTarget
from gamerig.models.step import DirectoryTargetsStep
from gamerig.utils import xdg_cache_home


class BuildCachesStep(DirectoryTargetsStep):
    """Clears yay and paru build directories."""

    id = "build_caches"
    name = "AUR Build Caches"
    description = "Sources and packages left behind by the yay and paru AUR helpers."
    sort_order = 50

    def _targets(self, context: CleanupContext) -> list[CleanupTarget]:
        cache = xdg_cache_home()
        return [
            CleanupTarget(path=cache / "yay", label="yay cache"),
            CleanupTarget(path=cache / "paru", label="paru cache"),
        ]
