"""CacheSimulator coordinates cache accesses and statistics.
Feeds decoded trace records into the core Cache and keeps the stats record.
"""
from typing import Callable, Iterable, List, Optional, Tuple

from .address import block_offset, decode_address
from .cache import AccessKind, Cache
from ..data.stats_export import Statistics


class CacheSimulator:
    def __init__(self, cache: Cache, stats: Optional[Statistics] = None, track_history: bool = False):
        self.cache = cache
        self.stats = stats or Statistics()
        self.track_history = track_history
        self.hit_rate_history: List[float] = []
        self.sequence: List[Tuple[AccessKind, int, int]] = []
        self.index = 0

    def reset(self):
        # clear stats and rewind the sequence pointer
        self.stats.reset()
        self.hit_rate_history = []
        self.index = 0
        # also clear cache contents
        self.cache.reset()

    def load_sequence(self, records: Iterable[Tuple[str, int, int]]):
        # records are (op, address, size) triples or TraceRecords
        self.sequence = [(AccessKind.parse(op) if isinstance(op, str) else op, int(address), int(size))
                         for op, address, size in records]
        self.index = 0

    def has_next(self) -> bool:
        return self.index < len(self.sequence)

    def access(self, kind: AccessKind, address: int, size: int = 1) -> dict:
        """Decode one address and run it through the cache."""
        set_index, tag = decode_address(address, self.cache.set_bits, self.cache.block_bits)
        outcome = self.cache.access(kind, tag, set_index, self.stats)
        if self.track_history:
            self.hit_rate_history.append(self.stats.hit_rate)

        return {
            'op': kind.value,
            'address': address,
            'size': size,
            'set_index': set_index,
            'tag': tag,
            'offset': block_offset(address, self.cache.block_bits),
            'hit': outcome.hit,
            'line_index': outcome.line_index,
            'evicted': outcome.evicted,
            'dirty_eviction': outcome.dirty_eviction,
            'stats': {
                'hits': self.stats.hits,
                'misses': self.stats.misses,
                'evictions': self.stats.evictions,
                'dirty_bytes': self.stats.dirty_bytes,
                'dirty_evictions': self.stats.dirty_evictions,
            },
        }

    def step(self) -> Optional[dict]:
        if not self.has_next():
            return None
        kind, address, size = self.sequence[self.index]
        self.index += 1
        return self.access(kind, address, size)

    def run_all(self, callback: Optional[Callable[[dict], None]] = None):
        while self.has_next():
            info = self.step()
            if callback:
                callback(info)

    def summary(self) -> dict:
        return self.stats.summary(self.cache.block_bits)
