from __future__ import annotations

import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional

import orjson

from pubcrypt import config

LOG_DIR: Path = config.LOG_DIR
ENABLED: bool = config.AUDIT_ENABLED

SENSITIVE_KEYS = {"d", "private_exponent", "p", "q", "priv", "private_key"}


def _redact(obj: Any) -> Any:
    if isinstance(obj, dict):
        out = {}
        for k, v in obj.items():
            if str(k).lower() in SENSITIVE_KEYS:
                out[k] = "***"
            else:
                out[k] = _redact(v)
        return out
    if isinstance(obj, list):
        return [_redact(x) for x in obj]
    return obj


def audit_file() -> Path:
    return LOG_DIR / "audit.log"


def audit_log(level: str, action: str, details: Optional[Dict[str, Any]]) -> None:
    if not ENABLED:
        return

    level = (level or "INFO").upper()
    if level not in ("INFO", "WARNING", "ERROR"):
        level = "INFO"

    line = {
        "ts": datetime.now(timezone.utc).isoformat(),
        "level": level,
        "action": action,
        "details": _redact(details or {}),
    }
    try:
        LOG_DIR.mkdir(parents=True, exist_ok=True)
        with audit_file().open("ab") as f:
            f.write(orjson.dumps(line, default=str) + b"\n")
    except OSError as e:
        print(f"Failed to write audit log {audit_file()}: {e}", file=sys.stderr)
