import pytest
from csim.core.address import ADDRESS_BITS, block_offset, decode_address


def test_fields_split_at_block_and_set_bits():
    # 0b1011_0110_1101 with s=4, b=4: offset 0xd, set 0x6, tag 0xb
    set_index, tag = decode_address(0xb6d, set_bits=4, block_bits=4)
    assert set_index == 0x6
    assert tag == 0xb
    assert block_offset(0xb6d, 4) == 0xd


def test_zero_set_bits_gives_single_set():
    for addr in (0, 1, 0x7ff0005c8, 2 ** 63):
        set_index, tag = decode_address(addr, set_bits=0, block_bits=3)
        assert set_index == 0
        assert tag == addr >> 3


def test_zero_block_bits_keeps_every_address_distinct():
    assert decode_address(0, 0, 0) == (0, 0)
    assert decode_address(1, 0, 0) == (0, 1)


def test_negative_address_is_treated_as_unsigned_word():
    set_index, tag = decode_address(-1, set_bits=4, block_bits=4)
    assert set_index == 0xf
    assert tag == (1 << (ADDRESS_BITS - 8)) - 1


def test_high_bit_does_not_sign_extend():
    addr = 1 << 63
    set_index, tag = decode_address(addr, set_bits=2, block_bits=2)
    assert set_index == 0
    assert tag == 1 << 59


def test_full_width_fields_leave_no_tag():
    set_index, tag = decode_address(0xdeadbeefcafef00d, set_bits=60, block_bits=4)
    assert tag == 0
    assert set_index == 0xdeadbeefcafef00
    assert decode_address(0xffff, set_bits=0, block_bits=64) == (0, 0)


@pytest.mark.parametrize('s,b', [(-1, 0), (0, -1)])
def test_negative_widths_rejected(s, b):
    with pytest.raises(ValueError):
        decode_address(0, s, b)
