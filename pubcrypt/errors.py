from __future__ import annotations


class KeyFormatError(ValueError):
    """Key file is missing fields, has the wrong kind or holds bad numbers."""


class CiphertextError(ValueError):
    """Ciphertext is truncated, misaligned or was not produced by this key."""


class NoInverseError(ValueError):
    """No modular inverse exists: gcd(a, m) != 1."""


class KeySizeError(ValueError):
    """Modulus is too small to carry a single payload byte per block."""


class PrimeSearchError(RuntimeError):
    """Prime search gave up after its attempt cap."""
