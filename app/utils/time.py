"""Time utilities (UTC now for record timestamps)."""
from __future__ import annotations
from datetime import datetime, timezone

def utc_now() -> datetime:
    return datetime.now(timezone.utc)

__all__ = ["utc_now"]
