"""Steps operating under the Steam installation root."""

from __future__ import annotations

import logging
from pathlib import Path

from gamerig import defaults
from gamerig.models.check_result import CheckResult, Status
from gamerig.models.cleanup import CleanupContext, CleanupTarget, StepResult
from gamerig.models.step import CleanupStep, DirectoryTargetsStep
from gamerig.settings import Settings
from gamerig.utils import disk_usage_text, format_du, largest_entries

log = logging.getLogger(__name__)

# (path relative to the Steam root, label)
_STEAM_CACHE_DIRS = (
    ("steamapps/shadercache", "Shader cache"),
    ("steamapps/temp", "Download temp"),
    ("steamapps/downloading", "Download staging"),
    ("config/htmlcache", "Web view cache"),
    ("appcache/httpcache", "HTTP cache"),
    ("logs", "Logs"),
    ("dumps", "Crash dumps"),
    ("depotcache", "Depot cache"),
)


def steam_root_candidates(home: Path | None = None) -> list[Path]:
    """Candidate Steam roots in priority order.

    Built-in locations come first; ``clean.extra_steam_roots`` from the
    settings are tried after them.
    """
    home = home or Path.home()
    candidates = [home / rel for rel in defaults.STEAM_ROOTS]
    for extra in Settings.instance().get_list("clean.extra_steam_roots", ()):
        candidates.append(Path(extra).expanduser())
    return candidates


class SteamCachesStep(DirectoryTargetsStep):
    """Clears Steam's shader, download, web, log and depot caches."""

    id = "steam_caches"
    name = "Steam Caches"
    description = "Empties Steam cache, temp, log and crash dump directories under the install root."
    sort_order = 10
    needs_install_root = True

    def _targets(self, context: CleanupContext) -> list[CleanupTarget]:
        root = context.install_root.path
        return [CleanupTarget(path=root / rel, label=label) for rel, label in _STEAM_CACHE_DIRS]


class CompatdataReportStep(CleanupStep):
    """Reports Proton prefix usage without deleting anything."""

    id = "compatdata_report"
    name = "Proton Prefixes"
    description = "Lists the largest compatdata prefixes so unused ones can be removed by app ID."
    sort_order = 20
    needs_install_root = True

    def run(self, context: CleanupContext) -> StepResult:
        result = self._result()
        compatdata = context.install_root.path / "steamapps" / "compatdata"
        if not compatdata.is_dir():
            result.lines.append(CheckResult(Status.WARN, "compatdata: not found"))
            return result

        try:
            count = sum(1 for _ in compatdata.iterdir())
            limit = Settings.instance().get_int("clean.top_entries", defaults.TOP_ENTRIES)
            top = largest_entries(compatdata, limit)
        except OSError as e:
            result.lines.append(CheckResult(Status.WARN, f"compatdata: {e}"))
            result.errors.append(str(e))
            return result

        size = disk_usage_text(compatdata)
        result.lines.append(CheckResult(Status.INFO, f"compatdata: {size} in {count} prefixes"))
        for name, entry_size in top:
            result.lines.append(CheckResult(Status.INFO, f"  {format_du(entry_size):>6}  {name}"))
        if top:
            result.lines.append(
                CheckResult(
                    Status.INFO,
                    f"Remove prefixes of uninstalled games manually: rm -rf {compatdata}/<appid>",
                )
            )
        return result
