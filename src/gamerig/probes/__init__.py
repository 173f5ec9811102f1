"""Built-in diagnostic probes."""
