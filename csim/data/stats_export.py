"""Statistics and exporter.
"""
import csv
import json
import logging
from typing import Dict, List

log = logging.getLogger(__name__)

SUMMARY_FIELDS = ('hits', 'misses', 'evictions', 'dirty_bytes', 'dirty_evictions')


def export_chart_json(hit_rate_history: List[float], stats: Dict[str, float], fpath: str) -> str:
    """Export hit-rate history and stats to a JSON file. Returns the saved path.
    """
    data = {
        'hit_rate_history': list(hit_rate_history),
        'stats': stats
    }
    with open(fpath, 'w', encoding='utf-8') as fh:
        json.dump(data, fh, indent=2)
    log.debug("wrote chart data to %s", fpath)
    return fpath


def export_chart_pdf(hit_rate_history: List[float], fpath: str) -> str:
    """Render the hit-rate history to a PDF using matplotlib and save it.
    Returns the saved file path.
    """
    # Use matplotlib
    import matplotlib
    matplotlib.use('Agg')
    import matplotlib.pyplot as plt

    data = list(hit_rate_history) or [0]
    fig, ax = plt.subplots(figsize=(6, 2))
    ax.plot(range(len(data)), data, color='#FFA500', linewidth=2)
    ax.fill_between(range(len(data)), data, color='#FFA500', alpha=0.1)
    ax.set_ylim(0, 1)
    ax.set_xlabel('Access')
    ax.set_ylabel('Hit rate')
    ax.grid(False)
    fig.tight_layout()
    fig.savefig(fpath, format='pdf', dpi=150)
    plt.close(fig)
    log.debug("wrote hit-rate chart to %s", fpath)
    return fpath


class Statistics:
    """Running counters for one simulation.

    `dirty_bytes` and `dirty_evictions` are kept in lines, not bytes;
    `summary()` scales them by the block size.
    """

    def __init__(self):
        self.reset()

    def reset(self):
        # counters start from zero
        self.hits = 0
        self.misses = 0
        self.evictions = 0
        self.dirty_bytes = 0
        self.dirty_evictions = 0

    def record_hit(self):
        self.hits += 1

    def record_miss(self):
        self.misses += 1

    def record_eviction(self, dirty: bool):
        self.evictions += 1
        if dirty:
            # the line leaves the cache, so it no longer counts as resident
            self.dirty_evictions += 1
            self.dirty_bytes -= 1

    def mark_dirty(self):
        self.dirty_bytes += 1

    @property
    def accesses(self):
        return self.hits + self.misses

    @property
    def hit_rate(self):
        return (self.hits / self.accesses) if self.accesses else 0.0

    @property
    def miss_rate(self):
        return (self.misses / self.accesses) if self.accesses else 0.0

    def summary(self, block_bits: int = 0) -> Dict[str, int]:
        """Final record with the dirty counters converted to bytes."""
        block_size = 1 << block_bits
        return {
            'hits': self.hits,
            'misses': self.misses,
            'evictions': self.evictions,
            'dirty_bytes': self.dirty_bytes * block_size,
            'dirty_evictions': self.dirty_evictions * block_size,
        }


class Exporter:
    @staticmethod
    def export_stats_csv(path: str, stats: Statistics, block_bits: int = 0):
        summary = stats.summary(block_bits)
        with open(path, 'w', newline='') as f:
            writer = csv.writer(f)
            writer.writerow(list(SUMMARY_FIELDS) + ['accesses', 'hit_rate', 'miss_rate'])
            writer.writerow([summary[k] for k in SUMMARY_FIELDS] + [
                stats.accesses, stats.hit_rate, stats.miss_rate
            ])
        log.debug("wrote statistics csv to %s", path)
        return path
