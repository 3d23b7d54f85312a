import random

import pytest

from pubcrypt import keygen
from pubcrypt.bigint import is_probable_prime, lcm
from pubcrypt.errors import KeySizeError, NoInverseError, PrimeSearchError
from pubcrypt.keygen import derive_keypair, gen_prime, generate_keypair


def test_gen_prime_has_exact_bit_length():
    rng = random.Random(5)
    for bits in (16, 64, 128):
        p = gen_prime(bits, rng)
        assert p.bit_length() == bits
        assert is_probable_prime(p, rng=random.Random(0))


def test_gen_prime_gives_up(monkeypatch):
    monkeypatch.setattr(keygen, "is_probable_prime", lambda *a, **kw: False)
    with pytest.raises(PrimeSearchError):
        gen_prime(64, random.Random(1), max_attempts=10)


def test_derive_keypair_textbook():
    pair = derive_keypair(61, 53, 17)
    assert pair.public.n == pair.private.n == 3233
    assert pair.public.e == 17
    assert pair.private.d == 413


def test_derive_keypair_rejects_non_coprime_exponent():
    with pytest.raises(NoInverseError):
        derive_keypair(7, 13, 3)
    with pytest.raises(ValueError):
        derive_keypair(11, 11, 3)


def test_generated_pair_is_consistent(monkeypatch):
    seen = {}
    real = keygen.derive_keypair

    def spy(p, q, e):
        seen.update(p=p, q=q)
        return real(p, q, e)

    monkeypatch.setattr(keygen, "derive_keypair", spy)
    pair = generate_keypair(bits=512, rng=random.Random(42), rounds=20)

    p, q = seen["p"], seen["q"]
    lam = lcm(p - 1, q - 1)
    assert p != q
    assert pair.public.n == pair.private.n == p * q
    assert pair.public.n.bit_length() in (511, 512)
    assert pair.public.e == 65537
    assert (pair.public.e * pair.private.d) % lam == 1


def test_generated_pair_inverts_sampled_values(keypair):
    n, e, d = keypair.public.n, keypair.public.e, keypair.private.d
    rng = random.Random(3)
    for m in [0, 1, 2, n - 1] + [rng.randrange(n) for _ in range(50)]:
        assert pow(pow(m, e, n), d, n) == m


def test_seeded_generation_is_reproducible():
    a = generate_keypair(bits=512, rng=random.Random(8), rounds=10)
    b = generate_keypair(bits=512, rng=random.Random(8), rounds=10)
    assert a == b


def test_retries_until_exponent_is_usable(monkeypatch):
    draws = iter([7, 13, 5, 5, 5, 11])
    monkeypatch.setattr(keygen, "gen_prime", lambda *a, **kw: next(draws))
    pair = generate_keypair(bits=512, e=3)
    assert pair.public.n == 55
    assert pair.private.d == 7


def test_pathological_draws_are_capped(monkeypatch):
    monkeypatch.setattr(keygen, "gen_prime", lambda *a, **kw: 7)
    with pytest.raises(PrimeSearchError):
        generate_keypair(bits=512, max_attempts=5)


def test_rejects_small_keys_and_bad_exponents():
    with pytest.raises(KeySizeError):
        generate_keypair(bits=256)
    with pytest.raises(ValueError):
        generate_keypair(bits=512, e=65536)
    with pytest.raises(ValueError):
        generate_keypair(bits=512, e=1)
