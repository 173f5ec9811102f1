"""Step to reset the Mesa shader cache."""

from __future__ import annotations

from gamerig.models.cleanup import CleanupContext, CleanupTarget, ClearMode
from gamerig.models.step import DirectoryTargetsStep
from gamerig.utils import xdg_cache_home


class MesaShaderCacheStep(DirectoryTargetsStep):
    """Removes and recreates the Mesa shader cache directory."""

    id = "mesa_shader_cache"
    name = "Mesa Shader Cache"
    description = (
        "Deletes compiled Mesa shaders and recreates the empty cache directory. "
        "Games recompile shaders on first launch."
    )
    sort_order = 30

    def _targets(self, context: CleanupContext) -> list[CleanupTarget]:
        return [
            CleanupTarget(
                path=xdg_cache_home() / "mesa_shader_cache",
                label="Mesa shader cache",
                mode=ClearMode.RECREATE,
            )
        ]
