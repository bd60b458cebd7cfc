"""One-line JSON log records for batch jobs."""

from __future__ import annotations

import json
from datetime import datetime, timezone
from typing import Any, Iterable


def utc_now_iso() -> str:
    """Return the current UTC time in ISO-8601 with Z suffix."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def log(lvl: str, msg: str, **fields: Any) -> None:
    """Print a compact JSON record with timestamp, level and message plus extra fields."""
    payload = {"ts": utc_now_iso(), "lvl": lvl, "msg": msg}
    payload.update(fields)
    print(json.dumps(payload, separators=(",", ":"), ensure_ascii=False, default=str), flush=True)


__all__: Iterable[str] = ("utc_now_iso", "log")
