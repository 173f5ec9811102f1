"""Built-in lists and limits used when no settings override them."""

from __future__ import annotations

from pathlib import PurePosixPath

# Environment variables the gaming setup expects to be exported.
ENV_VARS = (
    "AMD_VULKAN_ICD",
    "RADV_PERFTEST",
    "mesa_glthread",
    "DXVK_ASYNC",
    "PROTON_ENABLE_WAYLAND",
)

# Packages that should be installed.
PACKAGES = (
    "steam",
    "vulkan-radeon",
    "lib32-vulkan-radeon",
    "gamemode",
    "lib32-gamemode",
    "mangohud",
    "lib32-mangohud",
)

# Steam installation roots relative to $HOME, highest priority first.
STEAM_ROOTS = (
    PurePosixPath(".steam/steam"),
    PurePosixPath(".local/share/Steam"),
    PurePosixPath(".steam/root"),
    PurePosixPath(".var/app/com.valvesoftware.Steam/.local/share/Steam"),
)

# A candidate root counts as a Steam installation when this exists under it.
STEAM_ROOT_MARKER = "steamapps"

# Mesa's built-in limit when MESA_SHADER_CACHE_MAX_SIZE is unset.
SHADER_CACHE_DEFAULT_MAX = "1G"

# Cached package versions paccache keeps per package.
KEEP_VERSIONS = 3

# Journal entries older than this are vacuumed.
JOURNAL_RETENTION = "7d"

# Entries shown in "largest" listings.
TOP_ENTRIES = 10

# Raw output lines shown per feature-flag listing.
FEATURE_FLAG_LINES = 15
