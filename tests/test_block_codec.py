import pytest
from hypothesis import given
from hypothesis import strategies as st

from pubcrypt.bigint import to_bytes_be
from pubcrypt.block_codec import block_count, decode_block, decode_blocks, encode_blocks, layout_for
from pubcrypt.errors import CiphertextError, KeySizeError

# smallest modulus with 64 bytes; the worst case for "block value < n"
N_TIGHT = 1 << (8 * 63)
N_512 = (1 << 512) - 569


def test_layout_for_512_bit_modulus():
    lay = layout_for(N_512)
    assert lay.cipher_block_bytes == 64
    assert lay.plain_block_bytes == 63
    assert lay.capacity == 62


def test_layout_capacity_is_capped_by_marker():
    assert layout_for(1 << 4095).capacity == 255


def test_layout_rejects_tiny_modulus():
    assert layout_for(1 << 16).capacity == 1
    with pytest.raises(KeySizeError):
        layout_for(0xFFFF)


def test_empty_input_has_no_blocks():
    assert encode_blocks(b"", N_512) == []
    assert decode_blocks([], N_512) == b""
    assert block_count(0, N_512) == 0


def test_block_count():
    assert block_count(1, N_512) == 1
    assert block_count(62, N_512) == 1
    assert block_count(63, N_512) == 2
    assert block_count(620, N_512) == 10


def test_leading_zero_bytes_survive():
    data = b"\x00\x00\x00\x01\x00"
    blocks = encode_blocks(data, N_512)
    assert len(blocks) == 1
    assert to_bytes_be(blocks[0]) == b"\x05" + data
    assert decode_blocks(blocks, N_512) == data


def test_all_zero_chunks():
    data = b"\x00" * 130
    assert decode_blocks(encode_blocks(data, N_512), N_512) == data


@given(st.binary(max_size=400))
def test_blocks_stay_below_modulus_and_round_trip(data):
    blocks = encode_blocks(data, N_TIGHT)
    assert all(0 < b < N_TIGHT for b in blocks)
    assert len(blocks) == block_count(len(data), N_TIGHT)
    assert decode_blocks(blocks, N_TIGHT) == data


def test_full_capacity_of_ff_is_below_modulus():
    cap = layout_for(N_TIGHT).capacity
    (block,) = encode_blocks(b"\xff" * cap, N_TIGHT)
    assert block < N_TIGHT


def test_decode_rejects_bad_marker():
    cap = layout_for(N_512).capacity
    too_long = int.from_bytes(bytes([cap + 1]) + b"x" * (cap + 1), "big")
    with pytest.raises(CiphertextError):
        decode_block(too_long, N_512)
    excess_payload = int.from_bytes(b"\x02abc", "big")
    with pytest.raises(CiphertextError):
        decode_block(excess_payload, N_512)


def test_decode_keeps_inner_zero_bytes():
    assert decode_block(int.from_bytes(b"\x03\x00\x00\x07", "big"), N_512) == b"\x00\x00\x07"


def test_decode_zero_extends_short_payload():
    assert decode_block(int.from_bytes(b"\x05\x01", "big"), N_512) == b"\x00\x00\x00\x00\x01"
    assert decode_block(0, N_512) == b""
