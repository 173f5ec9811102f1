"""gamerig: diagnostics and cache cleanup for a Linux gaming workstation."""

__version__ = "0.1.0"
