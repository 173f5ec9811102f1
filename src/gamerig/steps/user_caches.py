"""Step to clear the thumbnail cache and trash."""

from __future__ import annotations

from gamerig.models.cleanup import CleanupContext, CleanupTarget
from gamerig.models.step import DirectoryTargetsStep
from gamerig.utils import xdg_cache_home, xdg_data_home


class UserCachesStep(DirectoryTargetsStep):
    """Empties ~/.cache/thumbnails and the trash."""

    id = "user_caches"
    name = "Thumbnails and Trash"
    description = "Cached thumbnails (regenerated on demand) and files already moved to the trash."
    sort_order = 80

    def _targets(self, context: CleanupContext) -> list[CleanupTarget]:
        return [
            CleanupTarget(path=xdg_cache_home() / "thumbnails", label="Thumbnails"),
            CleanupTarget(path=xdg_data_home() / "Trash", label="Trash"),
        ]
