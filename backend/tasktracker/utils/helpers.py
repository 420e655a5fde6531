from datetime import datetime, timezone
from typing import Optional


def utcnow() -> datetime:
    # naive UTC, matching what the DateTime columns hand back
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_utc_naive(value: Optional[datetime]) -> Optional[datetime]:
    if value is None:
        return None
    if value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def format_duration(seconds: Optional[int]) -> str:
    total = max(0, int(seconds or 0))
    hrs = total // 3600
    mins = (total % 3600) // 60
    secs = total % 60
    return f"{hrs}h {mins}m {secs}s"


def normalize_email(value: Optional[str]) -> str:
    return (value or "").strip().lower()
