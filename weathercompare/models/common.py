"""Common types and helpers shared across models."""

from datetime import UTC, datetime, tzinfo
from typing import TypeAlias
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

DayKey: TypeAlias = str  # YYYY-MM-DD


def utc_now() -> datetime:
    return datetime.now(UTC)


def utc_now_iso() -> str:
    return utc_now().isoformat()


def local_tz() -> tzinfo:
    """The process's local zone."""
    return datetime.now().astimezone().tzinfo or UTC


def resolve_tz(name: str | None) -> tzinfo | None:
    """Look up an IANA zone name. Returns None for missing or unknown names."""
    if not name or not isinstance(name, str):
        return None
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        return None


def parse_timestamp(iso_str: str | None) -> datetime | None:
    """Parse an ISO timestamp, keeping whatever offset it carries."""
    if not iso_str or not isinstance(iso_str, str):
        return None
    try:
        return datetime.fromisoformat(iso_str.strip().replace("Z", "+00:00"))
    except ValueError:
        return None
