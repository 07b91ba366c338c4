"""LRU replacement over per-line recency stamps.

Each cache line carries an integer `recency`. Touching a line stamps it
with one more than the largest stamp currently in its set, so within a set
the stamps give a total order from least to most recently used. A fresh
set has every stamp at 0; the first eviction candidate among equal stamps
is always the lowest way index.

API (methods):
- bounds(lines): (min_recency, max_recency) over the whole set
- victim(lines, min_recency): index of the way to evict
- touch(line, max_recency): mark `line` as most recently used
"""

from typing import Sequence, Tuple


class LRUReplacement:
    """Least-Recently-Used replacement for one set.

    The cache creates one instance per set; the policy holds no state of
    its own, the recency stamps live on the lines.
    """

    def bounds(self, lines: Sequence) -> Tuple[int, int]:
        """Return (min_recency, max_recency) over all ways of the set."""
        lo = hi = lines[0].recency
        for line in lines:
            if line.recency < lo:
                lo = line.recency
            if line.recency > hi:
                hi = line.recency
        return lo, hi

    def victim(self, lines: Sequence, min_recency: int) -> int:
        """Return the first way whose stamp equals `min_recency`."""
        for wi, line in enumerate(lines):
            if line.recency == min_recency:
                return wi
        raise ValueError(f"no line with recency {min_recency}")

    def touch(self, line, max_recency: int) -> None:
        line.recency = max_recency + 1


__all__ = ["LRUReplacement"]
