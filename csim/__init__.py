"""Trace-driven set-associative cache simulator."""

__version__ = "0.1.0"
