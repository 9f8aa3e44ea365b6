"""Parse dnsmasq / Pi-hole log lines into structured records."""

from pihole_log_parser.batch import ParseStats, iter_parsed
from pihole_log_parser.config import ParserConfig, load_config
from pihole_log_parser.errors import (
    InvalidArgumentError,
    MalformedLineError,
    MalformedTimestampError,
    ParseError,
    UnrecognizedLineTypeError,
)
from pihole_log_parser.models import (
    LINE_TYPES,
    AnswerData,
    ForwardedData,
    GravityData,
    LineType,
    ParsedLine,
    QueryData,
)
from pihole_log_parser.parser import Failed, Ignored, LineParser, Parsed, parse

__all__ = [
    "LINE_TYPES",
    "AnswerData",
    "Failed",
    "ForwardedData",
    "GravityData",
    "Ignored",
    "InvalidArgumentError",
    "LineParser",
    "LineType",
    "MalformedLineError",
    "MalformedTimestampError",
    "ParseError",
    "ParseStats",
    "Parsed",
    "ParsedLine",
    "ParserConfig",
    "QueryData",
    "UnrecognizedLineTypeError",
    "iter_parsed",
    "load_config",
    "parse",
]
