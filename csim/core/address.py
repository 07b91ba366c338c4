"""Address decoding.

Splits a raw address into the fields a set-associative cache cares about:

  | tag | set index (s bits) | block offset (b bits) |

The offset is dropped by the cache model; block size only matters when
converting dirty-line counts into bytes.
"""
from typing import Tuple

ADDRESS_BITS = 64
ADDRESS_MASK = (1 << ADDRESS_BITS) - 1


def _as_word(address: int) -> int:
    # treat the address as an unsigned machine word (negative ints wrap)
    return int(address) & ADDRESS_MASK


def decode_address(address: int, set_bits: int, block_bits: int) -> Tuple[int, int]:
    """Decode address into (set_index, tag)."""
    if set_bits < 0 or block_bits < 0:
        raise ValueError("set_bits and block_bits must be >= 0")
    word = _as_word(address)
    set_index = (word >> block_bits) & ((1 << set_bits) - 1)
    tag = word >> (set_bits + block_bits)
    return set_index, tag


def block_offset(address: int, block_bits: int) -> int:
    if block_bits < 0:
        raise ValueError("block_bits must be >= 0")
    return _as_word(address) & ((1 << block_bits) - 1)


__all__ = ["ADDRESS_BITS", "decode_address", "block_offset"]
