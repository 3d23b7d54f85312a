from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List

from pubcrypt.bigint import byte_length, from_bytes_be, to_bytes_be
from pubcrypt.errors import CiphertextError, KeySizeError

# Plaintext block layout (plain_block_bytes = k - 1, k = byte length of n):
#   [len:1][payload...len]
# A value of at most k-1 bytes is always < n. The length marker keeps
# leading zero bytes of the payload and the exact size of the last chunk.

MAX_MARKER = 0xFF


@dataclass(frozen=True)
class BlockLayout:
    cipher_block_bytes: int
    plain_block_bytes: int
    capacity: int


def layout_for(n: int) -> BlockLayout:
    k = byte_length(n)
    plain_block = k - 1
    capacity = min(plain_block - 1, MAX_MARKER)
    if capacity < 1:
        raise KeySizeError("modulus too small to hold a one-byte payload")
    return BlockLayout(cipher_block_bytes=k, plain_block_bytes=plain_block, capacity=capacity)


def block_count(length: int, n: int) -> int:
    cap = layout_for(n).capacity
    return (length + cap - 1) // cap


def encode_blocks(data: bytes, n: int) -> List[int]:
    cap = layout_for(n).capacity
    blocks: List[int] = []
    for i in range(0, len(data), cap):
        chunk = data[i:i + cap]
        blocks.append(from_bytes_be(bytes([len(chunk)]) + chunk))
    return blocks


def decode_block(value: int, n: int) -> bytes:
    cap = layout_for(n).capacity
    raw = to_bytes_be(value)
    if not raw:
        return b""

    declared = raw[0]
    payload = raw[1:]
    if declared > cap or len(payload) > declared:
        raise CiphertextError("bad plaintext block (wrong key or corrupt data)")
    return payload.rjust(declared, b"\x00")


def decode_blocks(values: Iterable[int], n: int) -> bytes:
    out = bytearray()
    for v in values:
        out += decode_block(v, n)
    return bytes(out)
