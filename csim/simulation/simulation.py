"""Simulation wrapper used by the command line

Validates the cache geometry, builds the core cache and simulator, and
streams a trace file through them.
"""
import logging
from dataclasses import dataclass
from typing import Callable, Optional

from csim.core.address import ADDRESS_BITS
from csim.core.cache import AccessKind, Cache
from csim.core.simulator import CacheSimulator
from csim.simulation.trace import read_trace

log = logging.getLogger(__name__)


class ConfigError(ValueError):
    pass


@dataclass
class CacheConfig:
    set_bits: int = 0
    lines_per_set: int = 1
    block_bits: int = 0
    trace_path: Optional[str] = None
    verbose: bool = False

    def validate(self) -> None:
        if self.set_bits is None or self.lines_per_set is None or self.block_bits is None:
            raise ConfigError("-s, -E and -b are all required")
        if self.set_bits < 0:
            raise ConfigError(f"set index bits must be >= 0, got {self.set_bits}")
        if self.block_bits < 0:
            raise ConfigError(f"block offset bits must be >= 0, got {self.block_bits}")
        if self.lines_per_set < 1:
            raise ConfigError(f"lines per set must be >= 1, got {self.lines_per_set}")
        if self.set_bits + self.block_bits > ADDRESS_BITS:
            raise ConfigError(f"s + b must not exceed {ADDRESS_BITS}")
        if not self.trace_path:
            raise ConfigError("a trace file is required")


class Simulation:
    def __init__(self, config: CacheConfig, track_history: bool = False):
        config.validate()
        self.config = config
        self.cache = Cache(set_bits=config.set_bits, lines_per_set=config.lines_per_set,
                           block_bits=config.block_bits)
        self.sim = CacheSimulator(self.cache, track_history=track_history)

    @property
    def stats(self):
        return self.sim.stats

    def run(self, callback: Optional[Callable[[dict], None]] = None) -> dict:
        """Replay the whole trace and return the byte-scaled summary."""
        log.info("simulating %s (s=%d, E=%d, b=%d)", self.config.trace_path,
                 self.config.set_bits, self.config.lines_per_set, self.config.block_bits)
        for record in read_trace(self.config.trace_path):
            info = self.sim.access(AccessKind.parse(record.op), record.address, record.size)
            if callback:
                callback(info)
        return self.sim.summary()
