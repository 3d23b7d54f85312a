from __future__ import annotations

from typing import Iterator

from pubcrypt.bigint import from_bytes_be, mod_pow, to_bytes_be
from pubcrypt.block_codec import decode_block, encode_blocks, layout_for
from pubcrypt.errors import CiphertextError
from pubcrypt.keygen import PrivateKey, PublicKey

# ECB: every block is transformed on its own, so equal plaintext blocks give
# equal ciphertext blocks under one key.


def encrypt_int(m: int, pub: PublicKey) -> int:
    if m < 0 or m >= pub.n:
        raise ValueError("m out of range")
    return mod_pow(m, pub.e, pub.n)


def decrypt_int(c: int, priv: PrivateKey) -> int:
    if c < 0 or c >= priv.n:
        raise ValueError("c out of range")
    return mod_pow(c, priv.d, priv.n)


def iter_blocks(data: bytes, width: int) -> Iterator[bytes]:
    for i in range(0, len(data), width):
        yield data[i:i + width]


def encrypt_bytes(data: bytes, pub: PublicKey) -> bytes:
    k = layout_for(pub.n).cipher_block_bytes

    out = bytearray()
    for m in encode_blocks(data, pub.n):
        c = encrypt_int(m, pub)
        out += to_bytes_be(c, k)
    return bytes(out)


def decrypt_bytes(data: bytes, priv: PrivateKey) -> bytes:
    k = layout_for(priv.n).cipher_block_bytes
    if len(data) % k != 0:
        raise CiphertextError(f"cipher length {len(data)} is not a multiple of the {k}-byte block")

    out = bytearray()
    for index, b in enumerate(iter_blocks(data, k)):
        c = from_bytes_be(b)
        if c >= priv.n:
            raise CiphertextError(f"block {index} is out of range for this key")
        m = decrypt_int(c, priv)
        out += decode_block(m, priv.n)
    return bytes(out)
