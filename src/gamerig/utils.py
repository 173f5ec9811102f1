"""Shared utility functions."""

from __future__ import annotations

import logging
import math
import os
import shutil
import subprocess
from pathlib import Path

log = logging.getLogger(__name__)

# Timeout for unprivileged external commands (seconds).
COMMAND_TIMEOUT = 120


class CommandError(Exception):
    """Raised when an external command cannot be started or times out."""


def has_command(name: str) -> bool:
    """Check if a command exists on the system."""
    try:
        subprocess.run(["which", name], capture_output=True, check=True)
        return True
    except (subprocess.CalledProcessError, FileNotFoundError):
        return False


def run_command(
    args: list[str],
    *,
    env: dict[str, str] | None = None,
    timeout: float = COMMAND_TIMEOUT,
) -> subprocess.CompletedProcess[str]:
    """Run *args* and capture its text output.

    A non-zero exit status is not an error here; callers inspect
    ``returncode`` themselves.  *env* entries are added on top of the
    current environment.

    Raises:
        CommandError: If the program is missing or does not finish in time.
    """
    full_env = None
    if env:
        full_env = {**os.environ, **env}
    log.debug("Running: %s", " ".join(args))
    try:
        return subprocess.run(
            args,
            capture_output=True,
            text=True,
            env=full_env,
            timeout=timeout,
        )
    except FileNotFoundError:
        raise CommandError(f"{args[0]} not found")
    except subprocess.TimeoutExpired:
        raise CommandError(f"{args[0]} timed out after {timeout:.0f}s")


def xdg_cache_home() -> Path:
    """Return XDG_CACHE_HOME, defaulting to ~/.cache when unset or empty."""
    return Path(os.environ.get("XDG_CACHE_HOME") or Path.home() / ".cache")


def xdg_config_home() -> Path:
    """Return XDG_CONFIG_HOME, defaulting to ~/.config when unset or empty."""
    return Path(os.environ.get("XDG_CONFIG_HOME") or Path.home() / ".config")


def xdg_data_home() -> Path:
    """Return XDG_DATA_HOME, defaulting to ~/.local/share when unset or empty."""
    return Path(os.environ.get("XDG_DATA_HOME") or Path.home() / ".local" / "share")


def clear_contents(directory: Path) -> tuple[int, int, list[str]]:
    """Remove everything inside *directory*, leaving the directory itself.

    Every child is removed independently, so one failure does not stop
    the rest.

    Returns:
        (freed_bytes, entries_removed, errors) tuple.
    """
    freed = 0
    removed = 0
    errors: list[str] = []

    try:
        children = sorted(directory.iterdir())
    except OSError as e:
        return 0, 0, [f"{directory}: {e}"]

    for child in children:
        try:
            if child.is_dir() and not child.is_symlink():
                size = dir_info(child)[0]
                shutil.rmtree(child)
            else:
                size = child.lstat().st_size
                child.unlink()
            freed += size
            removed += 1
        except OSError as e:
            errors.append(f"{child}: {e}")

    return freed, removed, errors


def clear_and_recreate(directory: Path) -> tuple[int, list[str]]:
    """Remove *directory* entirely, then create it again empty.

    Works whether or not the directory existed beforehand.

    Returns:
        (freed_bytes, errors) tuple.
    """
    freed = 0
    errors: list[str] = []
    if directory.is_dir():
        freed = dir_info(directory)[0]
        try:
            shutil.rmtree(directory)
        except OSError as e:
            errors.append(f"{directory}: {e}")
    try:
        directory.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        errors.append(f"{directory}: {e}")
    return freed, errors


def dir_info(path: Path | str) -> tuple[int, int]:
    """Calculate total size and file count of a directory tree.

    Uses GNU ``find`` (C-speed walk) when available, falling back to
    ``os.scandir`` on systems without it.

    Returns:
        (total_bytes, file_count) tuple.
    """
    try:
        return _dir_info_find(str(path))
    except (OSError, ValueError, subprocess.SubprocessError):
        return _dir_info_scandir(path)


def _dir_info_find(path_str: str) -> tuple[int, int]:
    """Walk a directory tree using GNU find."""
    proc = subprocess.run(
        ["find", path_str, "-type", "f", "-printf", "%s\n"],
        capture_output=True,
        timeout=60,
    )
    total = count = 0
    for line in proc.stdout.split(b"\n"):
        if line:
            total += int(line)
            count += 1
    return total, count


def _dir_info_scandir(path: Path | str) -> tuple[int, int]:
    """Walk a directory tree using os.scandir (pure Python fallback)."""
    total = 0
    count = 0
    stack: list[Path | str] = [path]
    while stack:
        current = stack.pop()
        try:
            with os.scandir(current) as it:
                for entry in it:
                    try:
                        if entry.is_file(follow_symlinks=False):
                            total += entry.stat(follow_symlinks=False).st_size
                            count += 1
                        elif entry.is_dir(follow_symlinks=False):
                            stack.append(entry.path)
                    except OSError:
                        pass
        except OSError:
            pass
    return total, count


def largest_entries(directory: Path, limit: int, include_hidden: bool = True) -> list[tuple[str, int]]:
    """Return up to *limit* (name, size_bytes) pairs of *directory*, largest first."""
    sizes: list[tuple[str, int]] = []
    for entry in directory.iterdir():
        if not include_hidden and entry.name.startswith("."):
            continue
        try:
            if entry.is_dir() and not entry.is_symlink():
                size = dir_info(entry)[0]
            else:
                size = entry.lstat().st_size
        except OSError:
            log.debug("Cannot access: %s", entry)
            continue
        sizes.append((entry.name, size))
    sizes.sort(key=lambda item: item[1], reverse=True)
    return sizes[:limit]


def disk_usage_text(path: Path) -> str:
    """Return the ``du -sh`` size of *path*, e.g. ``42M``.

    Falls back to formatting the apparent file size when ``du`` cannot
    be run.  ``du`` exits 1 when some subdirectories are unreadable but
    still prints its total, which is used as is.
    """
    try:
        proc = run_command(["du", "-sh", str(path)])
        if proc.stdout.strip():
            return proc.stdout.split()[0]
        log.debug("du printed nothing for %s (exit %d)", path, proc.returncode)
    except CommandError as e:
        log.debug("du failed for %s: %s", path, e)
    return format_du(dir_info(path)[0])


def format_du(size_bytes: int) -> str:
    """Format a byte count the way ``du -h`` does (``0``, ``4.0K``, ``42M``).

    Values are rounded up; below 10 units one decimal is kept.
    """
    if size_bytes <= 0:
        return "0"
    if size_bytes < 1024:
        return str(size_bytes)
    value = float(size_bytes)
    for unit in ("K", "M", "G", "T", "P"):
        value /= 1024
        if value < 1024 or unit == "P":
            if value < 10:
                rounded = math.ceil(value * 10) / 10
                if rounded < 10:
                    return f"{rounded:.1f}{unit}"
                return f"{int(rounded)}{unit}"
            return f"{math.ceil(value)}{unit}"
    return f"{size_bytes}"


def bytes_to_human(size_bytes: int) -> str:
    """Convert byte count to a human-readable string."""
    if size_bytes < 0:
        return f"-{bytes_to_human(-size_bytes)}"
    if size_bytes == 0:
        return "0 B"

    units = ("B", "KB", "MB", "GB", "TB")
    value = float(size_bytes)
    for unit in units[:-1]:
        if abs(value) < 1024:
            return f"{value:.1f} {unit}" if unit != "B" else f"{int(value)} B"
        value /= 1024
    return f"{value:.1f} {units[-1]}"
