import pytest
from csim.core.cache import CacheLine
from csim.core.replacement_policies import LRUReplacement


def _lines(*stamps):
    return [CacheLine(valid=True, tag=i, recency=r) for i, r in enumerate(stamps)]


def test_bounds_scan_whole_set():
    p = LRUReplacement()
    assert p.bounds(_lines(3, 1, 7, 2)) == (1, 7)
    assert p.bounds(_lines(0, 0, 0, 0)) == (0, 0)


def test_victim_is_oldest_stamp():
    p = LRUReplacement()
    lines = _lines(5, 2, 9)
    assert p.victim(lines, 2) == 1


def test_victim_ties_pick_lowest_way():
    # a fresh set has every stamp at 0
    p = LRUReplacement()
    assert p.victim(_lines(0, 0, 0, 0), 0) == 0
    assert p.victim(_lines(4, 1, 1, 6), 1) == 1


def test_victim_with_unknown_stamp_raises():
    p = LRUReplacement()
    with pytest.raises(ValueError):
        p.victim(_lines(1, 2), 0)


def test_touch_makes_line_most_recent():
    p = LRUReplacement()
    lines = _lines(1, 2, 3)
    lo, hi = p.bounds(lines)
    p.touch(lines[0], hi)
    assert lines[0].recency == 4
    assert p.bounds(lines) == (2, 4)
    assert p.victim(lines, 2) == 1
