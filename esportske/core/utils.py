"""Small helpers shared by the service layer."""

from __future__ import annotations

import datetime
import secrets
import time


def utcnow_iso() -> str:
    """Return the current UTC time as an ISO-8601 string."""
    return datetime.datetime.now(datetime.timezone.utc).isoformat()


def generate_id() -> str:
    """Return a new record id: a millisecond timestamp plus a random suffix."""
    return f"{int(time.time() * 1000)}-{secrets.token_hex(4)}"
