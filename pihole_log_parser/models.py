"""Parsed dnsmasq log records — one frozen dataclass per line variant."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Union

from pihole_log_parser.timestamps import to_iso_utc


class LineType(str, Enum):
    QUERY = "query"
    FORWARDED = "forwarded"
    GRAVITY = "gravity"
    CACHED = "cached"
    REPLY = "reply"
    CONFIG = "config"

    def __str__(self) -> str:
        return self.value


LINE_TYPES = LineType


@dataclass(frozen=True)
class QueryFields:
    """Fields shared by every DNS query line."""

    id: str                 # query sequence number, kept as logged
    client_address: str
    query_port: str
    domain: str


@dataclass(frozen=True)
class QueryData(QueryFields):
    query_type: str         # e.g. "A", "AAAA", "type=65"


@dataclass(frozen=True)
class ForwardedData(QueryFields):
    nameserver: str


@dataclass(frozen=True)
class GravityData(QueryFields):
    pass


@dataclass(frozen=True)
class AnswerData(QueryFields):
    address: str            # reply, cached and config lines


LineData = Union[QueryData, ForwardedData, GravityData, AnswerData]


@dataclass(frozen=True)
class ParsedLine:
    timestamp: datetime
    line_type: LineType
    data: LineData
    raw: str = ""

    def to_dict(self) -> dict[str, Any]:
        """Render the JSON-ready ``{ts, type, data}`` shape."""
        return {
            "ts": to_iso_utc(self.timestamp),
            "type": self.line_type.value,
            "data": entry_to_dict(self.data),
        }


def entry_to_dict(data: LineData) -> dict[str, Any]:
    """Convert a variant record to a dict, dropping None values for cleaner JSON."""
    return {k: v for k, v in asdict(data).items() if v is not None}
