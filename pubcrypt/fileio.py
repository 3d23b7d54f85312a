from __future__ import annotations

import os
import tempfile
from pathlib import Path
from typing import Optional, Union

PathLike = Union[str, os.PathLike]


def read_bytes(path: PathLike) -> bytes:
    return Path(path).read_bytes()


def _default_mode() -> int:
    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask


def write_atomic(path: PathLike, data: bytes, mode: Optional[int] = None) -> None:
    """
    Write to a temp file beside `path`, then rename it over `path`. A failed
    write leaves neither a partial file nor a stray temp file behind. The
    file gets `mode`, or 0o666 minus the umask like a plain open() would.
    """
    target = Path(path)
    fd, tmp = tempfile.mkstemp(prefix=f".{target.name}.", suffix=".tmp", dir=target.parent)
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(data)
        os.chmod(tmp, _default_mode() if mode is None else mode)
        os.replace(tmp, target)
    except BaseException:
        Path(tmp).unlink(missing_ok=True)
        raise
