"""Syslog timestamp handling for dnsmasq lines.

dnsmasq writes ``May  9 22:04:25`` with no year and no zone, so both are
supplied by the caller instead of being read from the wall clock.
"""

from __future__ import annotations

from datetime import datetime, timezone, tzinfo

from pihole_log_parser.errors import MalformedTimestampError

SYSLOG_TIMESTAMP_FORMAT = "%Y %b %d %H:%M:%S"


def parse_syslog_timestamp(text: str, year: int, tz: tzinfo = timezone.utc) -> datetime:
    """Convert 'May  9 22:04:25' → aware datetime in *year*, localised to *tz*."""
    stripped = text.strip()
    try:
        dt = datetime.strptime(f"{year:04d} {stripped}", SYSLOG_TIMESTAMP_FORMAT)
    except ValueError as exc:
        raise MalformedTimestampError(stripped) from exc
    return dt.replace(tzinfo=tz)


def to_iso_utc(dt: datetime) -> str:
    """Render *dt* as '2001-05-09T21:04:25.000Z'."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    iso = dt.astimezone(timezone.utc).isoformat(timespec="milliseconds")
    return iso.replace("+00:00", "Z")
