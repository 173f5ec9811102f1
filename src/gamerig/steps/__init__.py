"""Built-in cleanup steps."""
