"""dnsmasq line parser — timestamp extraction plus positional token dispatch.

Log lines have a few formats:

  May  9 22:04:27 dnsmasq[412]: 19 172.17.0.1/38348 query[A] tools.google.com from 172.17.0.1
  May  9 22:04:27 dnsmasq[412]: 19 172.17.0.1/38348 forwarded tools.google.com to 1.0.0.1
  May  9 22:04:27 dnsmasq[412]: 18 172.17.0.1/59098 reply tools.l.google.com is 74.125.193.138
  May  9 22:04:27 dnsmasq[412]: 21 192.168.1.3/63101 cached tools.l.google.com is 74.125.193.139
  May  9 22:25:32 dnsmasq[412]: 476 192.168.1.3/59139 gravity blocked vortex.data.microsoft.com is ::
  May  9 21:42:43 dnsmasq[418]: 34449 192.168.1.3/54472 config use-application-dns.net is NXDOMAIN

Every call is independent: lines are never correlated with each other.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from datetime import timezone, tzinfo
from typing import Union

from pihole_log_parser.config import ParserConfig, resolve_timezone
from pihole_log_parser.errors import (
    InvalidArgumentError,
    MalformedLineError,
    ParseError,
    UnrecognizedLineTypeError,
)
from pihole_log_parser.models import (
    AnswerData,
    ForwardedData,
    GravityData,
    LineData,
    LineType,
    ParsedLine,
    QueryData,
)
from pihole_log_parser.timestamps import parse_syslog_timestamp

logger = logging.getLogger(__name__)

# Pi-hole resolving its own hostname from its hosts file
SELF_RESOLUTION_MARKER = "/etc/pihole/local.list"
PROCESS_MARKER = "dnsmasq"
BODY_SEPARATOR = ": "

_QUERY_TYPE_RE = re.compile(r"\[(.*?)\]")

# Token offsets within the log body
_ID, _CLIENT, _VARIANT, _DOMAIN = 0, 1, 2, 3
_GRAVITY_DOMAIN = 4
_TARGET = 5

IGNORED_SELF_RESOLUTION = "self-resolution"
IGNORED_NOT_DNSMASQ = "not-dnsmasq"
IGNORED_NOT_A_QUERY = "not-a-query"


# ---------------------------------------------------------------------------
# Three-state result
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Parsed:
    line: ParsedLine


@dataclass(frozen=True)
class Ignored:
    reason: str


@dataclass(frozen=True)
class Failed:
    error: ParseError


ParseResult = Union[Parsed, Ignored, Failed]


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _check_line(line: object) -> str:
    if not isinstance(line, str):
        raise InvalidArgumentError("dnsmasq parser expects a single string argument")
    if len(line) == 0:
        raise InvalidArgumentError("dnsmasq parser expects a non-empty string argument")
    return line.rstrip("\r\n")


def split_line(line: str) -> tuple[str, str] | None:
    """Split a line into (timestamp text, log body), or None if it isn't dnsmasq's."""
    head, marker, rest = line.partition(PROCESS_MARKER)
    if not marker:
        return None
    # rest is "[412]: <body>"
    _, sep, body = rest.partition(BODY_SEPARATOR)
    if not sep:
        return None
    return head, body


def _is_query_id(token: str) -> bool:
    try:
        int(token)
    except ValueError:
        return False
    return True


def _token(tokens: list[str], index: int, name: str, body: str) -> str:
    if index >= len(tokens):
        raise MalformedLineError(f"Missing {name} at token {index}", body)
    return tokens[index]


def classify(body: str) -> tuple[LineType, LineData] | None:
    """Classify a log body and extract its fields.

    Returns None when the body is not a DNS query line (its first token is
    not a numeric query ID). Raises UnrecognizedLineTypeError when it is one
    but the variant token is unknown.
    """
    tokens = body.split(" ")
    query_id = tokens[_ID]
    if not _is_query_id(query_id):
        return None

    address, sep, port = _token(tokens, _CLIENT, "client address/port", body).partition("/")
    if not sep:
        raise MalformedLineError("Expected address/port after query ID", body)

    variant = _token(tokens, _VARIANT, "line type", body)
    common = {"id": query_id, "client_address": address, "query_port": port}

    if variant == LineType.GRAVITY.value:
        # "gravity blocked <domain>" puts the domain one token later
        domain = _token(tokens, _GRAVITY_DOMAIN, "domain", body)
        return LineType.GRAVITY, GravityData(domain=domain, **common)

    if variant.startswith(LineType.QUERY.value):
        match = _QUERY_TYPE_RE.search(variant)
        if match is None:
            raise MalformedLineError(f'Query type missing from "{variant}"', body)
        domain = _token(tokens, _DOMAIN, "domain", body)
        return LineType.QUERY, QueryData(domain=domain, query_type=match.group(1), **common)

    if variant == LineType.FORWARDED.value:
        domain = _token(tokens, _DOMAIN, "domain", body)
        nameserver = _token(tokens, _TARGET, "nameserver", body)
        return LineType.FORWARDED, ForwardedData(domain=domain, nameserver=nameserver, **common)

    if variant in (LineType.CONFIG.value, LineType.REPLY.value, LineType.CACHED.value):
        domain = _token(tokens, _DOMAIN, "domain", body)
        answer = _token(tokens, _TARGET, "address", body)
        return LineType(variant), AnswerData(domain=domain, address=answer, **common)

    raise UnrecognizedLineTypeError(variant, body)


# ---------------------------------------------------------------------------
# Parser
# ---------------------------------------------------------------------------


class LineParser:
    """Parses single dnsmasq log lines.

    dnsmasq timestamps carry neither year nor zone, so both are fixed at
    construction time. The parser holds no other state and can be shared
    freely between threads.
    """

    def __init__(self, reference_year: int, tz: tzinfo = timezone.utc):
        if isinstance(reference_year, bool) or not isinstance(reference_year, int):
            raise InvalidArgumentError(
                f"reference_year must be an int, got {type(reference_year).__name__}"
            )
        if not 1 <= reference_year <= 9999:
            raise InvalidArgumentError(f"reference_year out of range: {reference_year}")
        if not isinstance(tz, tzinfo):
            raise InvalidArgumentError(f"tz must be a tzinfo, got {type(tz).__name__}")
        self.reference_year = reference_year
        self.tz = tz

    @classmethod
    def from_config(cls, config: ParserConfig) -> LineParser:
        return cls(config.reference_year, resolve_timezone(config.timezone))

    def try_parse(self, line: str) -> ParseResult:
        """Parse *line* into Parsed, Ignored or Failed.

        Raises InvalidArgumentError for non-string or empty input.
        """
        text = _check_line(line)

        if SELF_RESOLUTION_MARKER in text:
            logger.debug("Ignoring self-resolution line: %s", text)
            return Ignored(IGNORED_SELF_RESOLUTION)

        parts = split_line(text)
        if parts is None:
            logger.debug("Ignoring non-dnsmasq line: %s", text)
            return Ignored(IGNORED_NOT_DNSMASQ)
        ts_text, body = parts

        try:
            classified = classify(body)
            if classified is None:
                # e.g. "dnsmasq[328]: started, version pi-hole-2.85"
                logger.debug("Ignoring informational line: %s", body)
                return Ignored(IGNORED_NOT_A_QUERY)
            line_type, data = classified
            timestamp = parse_syslog_timestamp(ts_text, self.reference_year, self.tz)
        except ParseError as exc:
            return Failed(exc)

        return Parsed(ParsedLine(timestamp=timestamp, line_type=line_type, data=data, raw=text))

    def parse(self, line: str) -> ParsedLine | None:
        """Parse *line*, returning None for ignored lines and raising ParseError on failures."""
        result = self.try_parse(line)
        if isinstance(result, Failed):
            raise result.error
        if isinstance(result, Ignored):
            return None
        return result.line


def parse(line: str, reference_year: int, tz: tzinfo = timezone.utc) -> ParsedLine | None:
    """Parse a single dnsmasq log line. See LineParser.parse."""
    return LineParser(reference_year, tz).parse(line)
