"""UTC timestamp helpers."""
from datetime import datetime, timezone
from typing import Optional


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def to_iso(moment: Optional[datetime] = None) -> str:
    """Format a datetime as fixed-width UTC ISO-8601 with second precision.

    Fixed width keeps lexical order equal to chronological order, which the
    signups table relies on for range filters.
    """
    moment = moment or utc_now()
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc).isoformat(timespec="seconds")
