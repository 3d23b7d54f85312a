"""
Randomized black-box round trip through the CLI.

Generates a key pair with `pubcrypt genkey`, then for lengths 0..8 and a set
of random lengths writes random plaintext, runs `crypt -e` and `crypt -d` as
subprocesses and compares the result with the original byte for byte.
"""
from __future__ import annotations

import argparse
import os
import random
import subprocess
import sys
import tempfile
from pathlib import Path
from typing import List, Optional

from pubcrypt.block_codec import block_count, layout_for
from pubcrypt.keyfile import load_public_key


def _run(cmd: List[str], env: dict) -> None:
    p = subprocess.run(cmd, env=env, capture_output=True, text=True)
    if p.returncode != 0:
        raise RuntimeError(p.stderr.strip() or f"command failed: {' '.join(cmd)}")


def _cli(*args: str) -> List[str]:
    return [sys.executable, "-m", "pubcrypt", *args]


def run_roundtrips(workdir: Path, runs: int, max_len: int, bits: int, seed: Optional[int]) -> int:
    rng = random.Random(seed)
    env = {**os.environ, "PUBCRYPT_LOG_DIR": str(workdir / "logs")}

    pub_path = workdir / "pub.key"
    priv_path = workdir / "priv.key"
    _run(_cli("genkey", "--pub", str(pub_path), "--priv", str(priv_path), "--bits", str(bits)), env)

    pub = load_public_key(pub_path)
    k = layout_for(pub.n).cipher_block_bytes
    print(f"key: n_bits={pub.n.bit_length()} k(mod bytes)={k} capacity={layout_for(pub.n).capacity}")

    lengths = list(range(9)) + [rng.randint(0, max_len) for _ in range(runs)]
    failures = 0
    for i, length in enumerate(lengths):
        plain = workdir / f"plain_{i}.bin"
        cipher = workdir / f"cipher_{i}.bin"
        back = workdir / f"back_{i}.bin"
        plain.write_bytes(rng.getrandbits(8 * length).to_bytes(length, "big"))

        try:
            _run(_cli("crypt", "-e", "--in", str(plain), "--out", str(cipher), "--key", str(pub_path)), env)
            _run(_cli("crypt", "-d", "--in", str(cipher), "--out", str(back), "--key", str(priv_path)), env)
        except RuntimeError as e:
            print(f"FAIL len={length}: {e}")
            failures += 1
            continue

        expected_len = block_count(length, pub.n) * k
        if cipher.stat().st_size != expected_len:
            print(f"FAIL len={length}: cipher has {cipher.stat().st_size} bytes, expected {expected_len}")
            failures += 1
        elif back.read_bytes() != plain.read_bytes():
            print(f"FAIL len={length}: decrypted output differs")
            failures += 1

    print(f"{len(lengths) - failures}/{len(lengths)} round trips ok")
    return failures


def main(argv: Optional[List[str]] = None) -> int:
    ap = argparse.ArgumentParser(prog="pubcrypt-harness", description="Randomized CLI round-trip test")
    ap.add_argument("--runs", type=int, default=100, help="Number of random lengths on top of 0..8")
    ap.add_argument("--max-len", type=int, default=20000, help="Largest random plaintext length")
    ap.add_argument("--bits", type=int, default=512, help="Key size for the generated pair")
    ap.add_argument("--seed", type=int, default=None, help="Seed for plaintext lengths and contents")
    ap.add_argument("--workdir", default=None, help="Keep files here instead of a temp dir")
    args = ap.parse_args(argv)

    if args.workdir:
        workdir = Path(args.workdir)
        workdir.mkdir(parents=True, exist_ok=True)
        failures = run_roundtrips(workdir, args.runs, args.max_len, args.bits, args.seed)
    else:
        with tempfile.TemporaryDirectory(prefix="pubcrypt_") as tmp:
            failures = run_roundtrips(Path(tmp), args.runs, args.max_len, args.bits, args.seed)
    return 1 if failures else 0


if __name__ == "__main__":
    sys.exit(main())
