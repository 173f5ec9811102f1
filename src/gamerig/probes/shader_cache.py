"""Probe for the Mesa shader cache."""

from __future__ import annotations

import os
from pathlib import Path

from gamerig import defaults
from gamerig.models.check_result import CheckResult, Status
from gamerig.models.probe import Probe
from gamerig.utils import dir_info, disk_usage_text, xdg_cache_home

_SIZE_VAR = "MESA_SHADER_CACHE_MAX_SIZE"


def shader_cache_dir() -> Path:
    return xdg_cache_home() / "mesa_shader_cache"


class ShaderCacheProbe(Probe):
    """Reports shader cache usage and its configured size limit."""

    id = "shader_cache"
    name = "Shader Cache"
    description = "Size of the Mesa shader cache and the MESA_SHADER_CACHE_MAX_SIZE limit."
    sort_order = 40

    def run(self) -> list[CheckResult]:
        results: list[CheckResult] = []

        cache_dir = shader_cache_dir()
        if cache_dir.is_dir():
            size = disk_usage_text(cache_dir)
            _total, count = dir_info(cache_dir)
            results.append(CheckResult(Status.PASS, f"Cache size: {size} ({count} files)"))
        else:
            results.append(CheckResult(Status.WARN, "Shader cache doesn't exist yet"))

        limit = os.environ.get(_SIZE_VAR, "")
        if limit:
            results.append(CheckResult(Status.PASS, f"{_SIZE_VAR}={limit}"))
        else:
            results.append(
                CheckResult(Status.WARN, f"{_SIZE_VAR} not set (default: {defaults.SHADER_CACHE_DEFAULT_MAX})")
            )
        return results
