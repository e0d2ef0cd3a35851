"""Timestamp helpers for signed requests."""

from __future__ import annotations

from datetime import UTC, datetime


def pad(num: int) -> str:
    """Left-pad ``num`` with ``0`` when it is a single digit."""
    out = str(num)
    if len(out) == 1:
        out = "0" + out
    return out


def utc_now() -> datetime:
    return datetime.now(tz=UTC)


def format_date(moment: datetime) -> str:
    """Format ``moment`` as ISO 8601 in UTC without fractional seconds.

    Naive datetimes are treated as already being in UTC.
    """
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=UTC)
    else:
        moment = moment.astimezone(UTC)
    return (
        f"{moment.year}"
        f"-{pad(moment.month)}"
        f"-{pad(moment.day)}"
        f"T{pad(moment.hour)}"
        f":{pad(moment.minute)}"
        f":{pad(moment.second)}"
        "Z"
    )


__all__ = ["format_date", "pad", "utc_now"]
