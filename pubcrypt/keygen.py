from __future__ import annotations

import random
import secrets
from dataclasses import dataclass
from typing import Optional

from pubcrypt import config
from pubcrypt.bigint import is_probable_prime, lcm, mod_inverse, random_bits
from pubcrypt.errors import KeySizeError, NoInverseError, PrimeSearchError

# ===== Keys =====

@dataclass(frozen=True)
class PublicKey:
    n: int
    e: int


@dataclass(frozen=True)
class PrivateKey:
    n: int
    d: int


@dataclass(frozen=True)
class KeyPair:
    public: PublicKey
    private: PrivateKey


# ===== Generation =====

def gen_prime(
    bits: int,
    rng: Optional[random.Random] = None,
    rounds: int = config.PRIME_ROUNDS,
    max_attempts: int = config.MAX_PRIME_ATTEMPTS,
) -> int:
    if bits < 16:
        raise ValueError("bits too small")
    rng = rng or secrets.SystemRandom()
    for _ in range(max_attempts):
        x = random_bits(bits, rng)
        if is_probable_prime(x, rounds, rng):
            return x
    raise PrimeSearchError(f"no {bits}-bit prime found in {max_attempts} attempts")


def derive_keypair(p: int, q: int, e: int) -> KeyPair:
    """
    Build a key pair from two primes, using Carmichael's lambda(n) =
    lcm(p-1, q-1) as the exponent modulus. Raises NoInverseError when e is
    not coprime to lambda(n).
    """
    if p == q:
        raise ValueError("p and q must differ")
    n = p * q
    lam = lcm(p - 1, q - 1)
    d = mod_inverse(e, lam)
    return KeyPair(public=PublicKey(n=n, e=e), private=PrivateKey(n=n, d=d))


def generate_keypair(
    bits: int = config.KEY_BITS,
    e: int = config.PUBLIC_EXPONENT,
    rng: Optional[random.Random] = None,
    rounds: int = config.PRIME_ROUNDS,
    max_attempts: int = config.MAX_PRIME_ATTEMPTS,
) -> KeyPair:
    """
    Sample two distinct primes of bits/2 each and derive (n, e) / (n, d).
    The public exponent is fixed; primes are redrawn until it is coprime to
    lambda(n).
    """
    if bits < config.MIN_KEY_BITS:
        raise KeySizeError(f"key size {bits} is below the {config.MIN_KEY_BITS}-bit minimum")
    if e < 3 or e % 2 == 0:
        raise ValueError("public exponent must be odd and at least 3")

    rng = rng or secrets.SystemRandom()
    half = bits // 2
    for _ in range(max_attempts):
        p = gen_prime(half, rng, rounds, max_attempts)
        q = gen_prime(bits - half, rng, rounds, max_attempts)
        if p == q:
            continue
        try:
            return derive_keypair(p, q, e)
        except NoInverseError:
            continue
    raise PrimeSearchError(f"no usable prime pair for e={e} in {max_attempts} attempts")
