import random

import pytest

from pubcrypt import audit
from pubcrypt.keygen import generate_keypair


@pytest.fixture(scope="session")
def keypair():
    return generate_keypair(bits=512, rng=random.Random(1234), rounds=20)


@pytest.fixture(scope="session")
def other_keypair():
    return generate_keypair(bits=512, rng=random.Random(4321), rounds=20)


@pytest.fixture(autouse=True)
def audit_to_tmp(tmp_path, monkeypatch):
    monkeypatch.setattr(audit, "LOG_DIR", tmp_path / "logs")
    monkeypatch.setattr(audit, "ENABLED", True)
    return tmp_path / "logs"
