from __future__ import annotations

from typing import Any, Dict, Optional, Union

import orjson

from pubcrypt.errors import KeyFormatError
from pubcrypt.fileio import PathLike, read_bytes, write_atomic
from pubcrypt.keygen import PrivateKey, PublicKey

Key = Union[PublicKey, PrivateKey]

# On disk a key is one JSON object; integers are decimal strings so they
# survive tools that parse JSON numbers as doubles:
#   {"kind": "public",  "n": "...", "e": "65537"}
#   {"kind": "private", "n": "...", "d": "..."}


def key_to_json(key: Key) -> Dict[str, Any]:
    if isinstance(key, PublicKey):
        return {"kind": "public", "n": str(key.n), "e": str(key.e)}
    if isinstance(key, PrivateKey):
        return {"kind": "private", "n": str(key.n), "d": str(key.d)}
    raise TypeError(f"not a key: {type(key).__name__}")


def _parse_int(d: Dict[str, Any], field: str) -> int:
    raw = d.get(field)
    if raw is None:
        raise KeyFormatError(f"missing field {field!r}")
    if not isinstance(raw, str) or not (raw.isascii() and raw.isdigit()):
        raise KeyFormatError(f"field {field!r} must be a decimal string")
    v = int(raw)
    if v <= 0:
        raise KeyFormatError(f"field {field!r} must be positive")
    return v


def key_from_json(d: Any) -> Key:
    if not isinstance(d, dict):
        raise KeyFormatError("key must be a JSON object")
    kind = d.get("kind")
    if kind == "public":
        return PublicKey(n=_parse_int(d, "n"), e=_parse_int(d, "e"))
    if kind == "private":
        return PrivateKey(n=_parse_int(d, "n"), d=_parse_int(d, "d"))
    raise KeyFormatError(f"unknown key kind: {kind!r}")


def dumps_key(key: Key) -> bytes:
    return orjson.dumps(key_to_json(key), option=orjson.OPT_INDENT_2) + b"\n"


def loads_key(data: bytes) -> Key:
    try:
        obj = orjson.loads(data)
    except orjson.JSONDecodeError as e:
        raise KeyFormatError(f"key file is not valid JSON: {e}") from e
    return key_from_json(obj)


def save_key(path: PathLike, key: Key) -> None:
    # private keys stay owner-only
    mode = 0o600 if isinstance(key, PrivateKey) else None
    write_atomic(path, dumps_key(key), mode=mode)


def load_key(path: PathLike, kind: Optional[str] = None) -> Key:
    key = loads_key(read_bytes(path))
    if kind is not None and key_to_json(key)["kind"] != kind:
        raise KeyFormatError(f"expected a {kind} key")
    return key


def load_public_key(path: PathLike) -> PublicKey:
    key = load_key(path, kind="public")
    if not isinstance(key, PublicKey):
        raise KeyFormatError("expected a public key")
    return key


def load_private_key(path: PathLike) -> PrivateKey:
    key = load_key(path, kind="private")
    if not isinstance(key, PrivateKey):
        raise KeyFormatError("expected a private key")
    return key
