"""Privilege escalation for commands that need root."""

from __future__ import annotations

import logging
import os
import shutil
import subprocess

log = logging.getLogger(__name__)

# Timeout for privileged commands (seconds); includes the password prompt.
_PRIVILEGED_TIMEOUT = 300


class PrivilegeError(Exception):
    """Raised when privilege escalation fails."""


def is_root() -> bool:
    """Check if the current process is running as root."""
    return os.geteuid() == 0


def sudo_available() -> bool:
    """Check if sudo is available on the system."""
    return shutil.which("sudo") is not None


def pkexec_available() -> bool:
    """Check if pkexec is available on the system."""
    return shutil.which("pkexec") is not None


def privileged_command(args: list[str]) -> list[str]:
    """Return *args* prefixed with whatever grants root.

    Prefers ``sudo`` (it caches credentials across the run), then
    ``pkexec``.  Running as root needs no prefix.

    Raises:
        PrivilegeError: If no escalation tool is available.
    """
    if is_root():
        return list(args)
    if sudo_available():
        return ["sudo", *args]
    if pkexec_available():
        return ["pkexec", *args]
    raise PrivilegeError(f"Running '{args[0]}' requires root (neither sudo nor pkexec available)")


def run_privileged(args: list[str]) -> subprocess.CompletedProcess[str]:
    """Run *args* as root and capture its text output.

    The password prompt, if any, goes to the terminal; only the
    command's own stdout and stderr are captured.

    Raises:
        PrivilegeError: On missing escalation tool, cancel/deny, or timeout.
    """
    cmd = privileged_command(args)
    log.debug("Running privileged: %s", " ".join(cmd))

    try:
        proc = subprocess.run(
            cmd,
            capture_output=True,
            text=True,
            timeout=_PRIVILEGED_TIMEOUT,
        )
    except FileNotFoundError:
        raise PrivilegeError(f"{cmd[0]} not found")
    except subprocess.TimeoutExpired:
        raise PrivilegeError(f"Privileged '{args[0]}' timed out after 5 minutes")

    if cmd[0] == "pkexec":
        if proc.returncode == 126:
            raise PrivilegeError("Authentication dismissed by user")
        if proc.returncode == 127:
            raise PrivilegeError("Authentication denied")
    elif cmd[0] == "sudo" and proc.returncode == 1 and "password" in proc.stderr.lower():
        raise PrivilegeError("Authentication failed")

    return proc
