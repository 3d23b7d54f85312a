from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from pubcrypt import __version__, config
from pubcrypt.audit import audit_log
from pubcrypt.cipher import decrypt_bytes, encrypt_bytes
from pubcrypt.errors import PrimeSearchError
from pubcrypt.fileio import read_bytes, write_atomic
from pubcrypt.keyfile import load_private_key, load_public_key, save_key
from pubcrypt.keygen import generate_keypair


def _fail(msg: str, err: BaseException, action: str, details: dict) -> int:
    print(f"{msg}: {err}", file=sys.stderr)
    audit_log("ERROR", action, {**details, "error": str(err)})
    return 1


def cmd_genkey(args: argparse.Namespace) -> int:
    details = {"pub": args.pub, "bits": args.bits}
    try:
        pair = generate_keypair(bits=args.bits)
    except (ValueError, PrimeSearchError) as e:
        return _fail("Failed to generate keys", e, "genkey", details)

    try:
        save_key(args.pub, pair.public)
    except OSError as e:
        return _fail(f"Failed to write public key {args.pub}", e, "genkey", details)
    try:
        save_key(args.priv, pair.private)
    except OSError as e:
        Path(args.pub).unlink(missing_ok=True)
        return _fail(f"Failed to write private key {args.priv}", e, "genkey", details)

    audit_log("INFO", "genkey", {**details, "n_bits": pair.public.n.bit_length(), "e": pair.public.e})
    print(f"Wrote public key to {args.pub} and private key to {args.priv}")
    return 0


def cmd_crypt(args: argparse.Namespace) -> int:
    action = "encrypt" if args.encrypt else "decrypt"
    details = {"in": args.inpath, "out": args.outpath, "key": args.keypath}

    try:
        key = load_public_key(args.keypath) if args.encrypt else load_private_key(args.keypath)
    except (OSError, ValueError) as e:
        return _fail(f"Failed to read key file {args.keypath}", e, action, details)

    try:
        data = read_bytes(args.inpath)
    except OSError as e:
        return _fail(f"Failed to open input file {args.inpath}", e, action, details)

    try:
        if args.encrypt:
            out = encrypt_bytes(data, key)
        else:
            out = decrypt_bytes(data, key)
    except ValueError as e:
        return _fail("Encryption failed" if args.encrypt else "Decryption failed", e, action, details)

    try:
        write_atomic(args.outpath, out)
    except OSError as e:
        return _fail(f"Failed to write output file {args.outpath}", e, action, details)

    audit_log("INFO", action, {**details, "in_bytes": len(data), "out_bytes": len(out)})
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pubcrypt",
        description="Public key encryption and decryption application",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    sub = parser.add_subparsers(dest="command", required=True)

    gen = sub.add_parser("genkey", help="Generate a public/private key pair")
    gen.add_argument("--pub", default=config.PUB_PATH, help="Output public key to given file")
    gen.add_argument("--priv", default=config.PRIV_PATH, help="Output private key to given file")
    gen.add_argument("--bits", type=int, default=config.KEY_BITS, help="Modulus size in bits")
    gen.set_defaults(func=cmd_genkey)

    crypt = sub.add_parser("crypt", help="Encrypt or decrypt a file")
    mode = crypt.add_mutually_exclusive_group(required=True)
    mode.add_argument("-e", dest="encrypt", action="store_true", help="Sets algorithm to encrypt")
    mode.add_argument("-d", dest="decrypt", action="store_true", help="Sets algorithm to decrypt")
    crypt.add_argument("-i", "--in", dest="inpath", required=True, help="Read the algorithm input from the given file")
    crypt.add_argument("-o", "--out", dest="outpath", required=True, help="Write the algorithm output to the given file")
    crypt.add_argument("-k", "--key", dest="keypath", required=True, help="Read the encryption/decryption key from the given file")
    crypt.set_defaults(func=cmd_crypt)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
