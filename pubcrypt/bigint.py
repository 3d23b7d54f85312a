from __future__ import annotations

import random
import secrets
from typing import List, Optional, Tuple

from pubcrypt.errors import NoInverseError

# Python's int already stores an unbounded magnitude as a canonical digit
# sequence; this module pins it down to unsigned semantics and supplies the
# modular algorithms the cipher is built from.

DEFAULT_ROUNDS = 40


def _check_unsigned(*values: int) -> None:
    for v in values:
        if v < 0:
            raise ValueError(f"negative value: {v}")


# ===== Unsigned arithmetic =====

def add(a: int, b: int) -> int:
    _check_unsigned(a, b)
    return a + b


def sub(a: int, b: int) -> int:
    _check_unsigned(a, b)
    if b > a:
        raise ValueError("unsigned subtraction underflow")
    return a - b


def mul(a: int, b: int) -> int:
    _check_unsigned(a, b)
    return a * b


def byte_length(v: int) -> int:
    _check_unsigned(v)
    return (v.bit_length() + 7) // 8


# ===== Modular arithmetic =====

def mod_pow(base: int, exponent: int, modulus: int) -> int:
    """Binary square-and-multiply: base**exponent % modulus."""
    _check_unsigned(base)
    if modulus < 1:
        raise ValueError("modulus must be positive")
    if exponent < 0:
        raise ValueError("negative exponent")
    if modulus == 1:
        return 0

    result = 1
    base %= modulus
    while exponent:
        if exponent & 1:
            result = (result * base) % modulus
        base = (base * base) % modulus
        exponent >>= 1
    return result


def egcd(a: int, b: int) -> Tuple[int, int, int]:
    """Return (g, x, y) with a*x + b*y == g == gcd(a, b)."""
    old_r, r = a, b
    old_x, x = 1, 0
    old_y, y = 0, 1
    while r:
        q = old_r // r
        old_r, r = r, old_r - q * r
        old_x, x = x, old_x - q * x
        old_y, y = y, old_y - q * y
    return old_r, old_x, old_y


def gcd(a: int, b: int) -> int:
    while b:
        a, b = b, a % b
    return a


def lcm(a: int, b: int) -> int:
    if a == 0 or b == 0:
        return 0
    return a // gcd(a, b) * b


def mod_inverse(a: int, m: int) -> int:
    _check_unsigned(a)
    if m < 1:
        raise ValueError("modulus must be positive")
    g, x, _ = egcd(a % m, m)
    if g != 1:
        raise NoInverseError(f"no inverse: gcd({a}, {m}) = {g}")
    return x % m


# ===== Primality =====

def _sieve(limit: int) -> List[int]:
    flags = bytearray([1]) * limit
    flags[0:2] = b"\x00\x00"
    for i in range(2, int(limit ** 0.5) + 1):
        if flags[i]:
            flags[i * i::i] = bytearray(len(flags[i * i::i]))
    return [i for i, f in enumerate(flags) if f]


SMALL_PRIMES = _sieve(1000)
_SMALL_LIMIT = SMALL_PRIMES[-1]


def is_probable_prime(
    candidate: int,
    rounds: int = DEFAULT_ROUNDS,
    rng: Optional[random.Random] = None,
) -> bool:
    """
    Miller-Rabin with `rounds` random bases; a composite slips through with
    probability at most 4**-rounds. Anything below 1000**2 is decided by
    trial division alone.
    """
    n = candidate
    if n < 2:
        return False
    for p in SMALL_PRIMES:
        if n == p:
            return True
        if n % p == 0:
            return False
    if n < _SMALL_LIMIT * _SMALL_LIMIT:
        return True

    d = n - 1
    s = 0
    while d % 2 == 0:
        d //= 2
        s += 1

    def check(a: int) -> bool:
        x = mod_pow(a, d, n)
        if x == 1 or x == n - 1:
            return True
        for _ in range(s - 1):
            x = (x * x) % n
            if x == n - 1:
                return True
        return False

    rng = rng or secrets.SystemRandom()
    for _ in range(rounds):
        a = rng.randrange(2, n - 1)
        if not check(a):
            return False
    return True


def random_bits(bit_length: int, rng: Optional[random.Random] = None) -> int:
    """Uniform odd integer of exactly `bit_length` bits."""
    if bit_length < 2:
        raise ValueError("bit_length must be at least 2")
    rng = rng or secrets.SystemRandom()
    return rng.getrandbits(bit_length) | (1 << (bit_length - 1)) | 1


# ===== Byte conversion =====

def from_bytes_be(data: bytes) -> int:
    return int.from_bytes(bytes(data), "big")


def to_bytes_be(value: int, width: Optional[int] = None) -> bytes:
    """
    Minimal big-endian encoding (b"" for zero), or left zero-padded to
    `width`. Raises OverflowError if the value does not fit in `width`.
    """
    natural = byte_length(value)
    if width is None:
        return value.to_bytes(natural, "big")
    if natural > width:
        raise OverflowError(f"value needs {natural} bytes, width is {width}")
    return value.to_bytes(width, "big")
