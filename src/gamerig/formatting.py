"""Status line formatting."""

from __future__ import annotations

import click

from gamerig.models.check_result import CheckResult, Status

_GLYPHS: dict[Status, tuple[str, str]] = {
    Status.PASS: ("✓", "green"),
    Status.FAIL: ("✗", "red"),
    Status.WARN: ("!", "yellow"),
    Status.INFO: ("·", "bright_black"),
}


def format_line(status: Status, message: str) -> str:
    """Return *message* prefixed with a colored glyph for *status*."""
    glyph, color = _GLYPHS[status]
    return f"  {click.style(glyph, fg=color, bold=True)} {message}"


def format_result(result: CheckResult) -> str:
    return format_line(result.status, result.message)


def format_header(title: str) -> str:
    return f"\n{click.style(title, fg='blue', bold=True)}"
