"""Core cache implementation

Set-associative, write-back, write-allocate cache model driven by decoded
(kind, tag, set_index) accesses.
Behavior:
- Cache is composed of 2**set_bits sets; each set has `lines_per_set` ways.
- Replacement is LRU over per-line recency stamps (see replacement_policies).
- A load never dirties a line; a store always leaves the touched line dirty.
- Statistics are passed in explicitly; the cache keeps no counters itself.
- access returns AccessOutcome(hit, line_index, evicted, dirty_eviction, evicted_tag)
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, NamedTuple, Optional

from csim.core.replacement_policies import LRUReplacement
from csim.data.stats_export import Statistics

log = logging.getLogger(__name__)


class AccessKind(Enum):
    LOAD = 'L'
    STORE = 'S'

    @classmethod
    def parse(cls, op: str) -> "AccessKind":
        """Map a trace operation letter ('L' or 'S') to a kind."""
        try:
            return cls(op.strip().upper())
        except ValueError:
            raise ValueError(f"unknown operation {op!r}, expected 'L' or 'S'") from None


@dataclass
class CacheLine:
    """container for a cache line (way).

    Fields:
    - valid: whether the line currently holds a block
    - dirty: whether the block was written since it was filled
    - tag: the tag stored in the line
    - recency: LRU stamp, larger means more recently used
    """

    valid: bool = False
    dirty: bool = False
    tag: int = 0
    recency: int = 0


class AccessOutcome(NamedTuple):
    hit: bool
    line_index: int
    evicted: bool = False
    dirty_eviction: bool = False
    evicted_tag: Optional[int] = None


class Cache:
    """Simple set-associative cache model.
    """

    def __init__(self, set_bits: int = 0, lines_per_set: int = 1, block_bits: int = 0):
        # basic checks
        if lines_per_set < 1:
            raise ValueError("lines_per_set must be >= 1")
        if set_bits < 0:
            raise ValueError("set_bits must be >= 0")
        if block_bits < 0:
            raise ValueError("block_bits must be >= 0")

        self.set_bits = set_bits
        self.block_bits = block_bits
        self.associativity = lines_per_set
        self.num_sets = 1 << set_bits
        self.replacement_policy_objs: List[LRUReplacement] = [
            LRUReplacement() for _ in range(self.num_sets)
        ]

        # allocate the sets matrix: num_sets x associativity
        self.sets: List[List[CacheLine]] = [
            [CacheLine() for _ in range(self.associativity)]
            for _ in range(self.num_sets)
        ]
        log.debug("cache built: %d sets x %d lines, %d-byte blocks",
                  self.num_sets, self.associativity, self.block_size)

    @property
    def block_size(self) -> int:
        return 1 << self.block_bits

    def access(self, kind: AccessKind, tag: int, set_index: int, stats: Statistics) -> AccessOutcome:
        """Perform a load or store against one set and update `stats`.

        Lookup, fill and eviction all stamp the touched line as most
        recently used. Stores leave the line dirty; loads never change a
        resident line's dirty bit, and a line refilled by a load is clean.
        """
        cache_set = self.sets[set_index]
        policy = self.replacement_policy_objs[set_index]
        min_recency, max_recency = policy.bounds(cache_set)
        is_store = kind is AccessKind.STORE

        # search for hit
        # wi = way-index
        for wi, line in enumerate(cache_set):
            if line.valid and line.tag == tag:
                stats.record_hit()
                policy.touch(line, max_recency)
                if is_store and not line.dirty:
                    line.dirty = True
                    stats.mark_dirty()
                return AccessOutcome(True, wi)

        # miss handling
        stats.record_miss()

        # try to find a free way
        for wi, line in enumerate(cache_set):
            if not line.valid:
                # fill
                line.tag = tag
                line.valid = True
                line.dirty = False
                policy.touch(line, max_recency)
                if is_store:
                    line.dirty = True
                    stats.mark_dirty()
                return AccessOutcome(False, wi)

        # set is full: evict the least recently used way
        wi = policy.victim(cache_set, min_recency)
        victim = cache_set[wi]
        evicted_tag = victim.tag
        was_dirty = victim.dirty
        stats.record_eviction(was_dirty)
        log.debug("set %d: evicting tag %#x (dirty=%s) for tag %#x",
                  set_index, evicted_tag, was_dirty, tag)

        # place the new block into victim slot
        victim.tag = tag
        victim.dirty = False
        policy.touch(victim, max_recency)
        if is_store:
            victim.dirty = True
            stats.mark_dirty()
        return AccessOutcome(False, wi, True, was_dirty, evicted_tag)

    def dirty_line_count(self) -> int:
        return sum(1 for s in self.sets for line in s if line.dirty)

    def valid_line_count(self) -> int:
        return sum(1 for s in self.sets for line in s if line.valid)

    def reset(self):
        """Clear cache contents back to the freshly built state.
        """

        for s in self.sets:
            for line in s:
                line.valid = False
                line.dirty = False
                line.tag = 0
                line.recency = 0
