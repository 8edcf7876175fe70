from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from ..core.exceptions import ValidationError


def now_utc() -> datetime:
    """Current UTC time, naive, second precision.

    Note: Wrapped so tests can patch/mock easier. Naive UTC matches what
    MySQL DATETIME columns give back.
    """
    return datetime.now(timezone.utc).replace(tzinfo=None, microsecond=0)


def current_month(now: datetime | None = None) -> str:
    now = now or now_utc()
    return f"{now.year:04d}-{now.month:02d}"


def parse_iso_datetime(value: Any, field_name: str = "Date sent") -> datetime:
    """Parse an ISO-8601 timestamp (``Z`` suffix accepted) into naive UTC."""
    if isinstance(value, datetime):
        dt = value
    else:
        s = str(value or "").strip()
        if not s:
            raise ValidationError(f"{field_name} is required")
        if s.endswith("Z"):
            s = s[:-1] + "+00:00"
        try:
            dt = datetime.fromisoformat(s)
        except ValueError:
            raise ValidationError(f"{field_name} must be an ISO date/time")

    if dt.tzinfo is not None:
        dt = dt.astimezone(timezone.utc).replace(tzinfo=None)
    return dt.replace(microsecond=0)


def isoformat_utc(value: datetime | None) -> str | None:
    if value is None:
        return None
    return value.strftime("%Y-%m-%dT%H:%M:%SZ")
