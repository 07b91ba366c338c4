"""Simulation package.

Exposes the trace-driven Simulation and its configuration at
`csim.simulation`.
"""
from .simulation import CacheConfig, ConfigError, Simulation
from .trace import TraceFormatError, TraceRecord, read_trace

__all__ = ["CacheConfig", "ConfigError", "Simulation", "TraceFormatError", "TraceRecord", "read_trace"]
