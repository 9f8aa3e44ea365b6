"""Line-by-line parsing loop for callers ingesting whole logs."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, Iterator

from pihole_log_parser.models import ParsedLine
from pihole_log_parser.parser import Failed, Ignored, LineParser

logger = logging.getLogger(__name__)


@dataclass
class ParseStats:
    total_lines: int = 0
    parsed: int = 0
    ignored: int = 0
    failed: int = 0
    type_counts: dict[str, int] = field(default_factory=dict)

    def record(self, entry: ParsedLine) -> None:
        self.parsed += 1
        key = entry.line_type.value
        self.type_counts[key] = self.type_counts.get(key, 0) + 1

    def to_dict(self) -> dict:
        return {
            "total_lines": self.total_lines,
            "parsed": self.parsed,
            "ignored": self.ignored,
            "failed": self.failed,
            "type_counts": dict(self.type_counts),
        }


def iter_parsed(
    lines: Iterable[str],
    parser: LineParser,
    *,
    strict: bool = False,
    stats: ParseStats | None = None,
) -> Iterator[ParsedLine]:
    """Yield a ParsedLine for every query line in *lines*.

    Blank and ignored lines are skipped. Unparseable query lines are logged
    and counted unless *strict* is set, in which case the ParseError propagates.
    """
    if stats is None:
        stats = ParseStats()

    for lineno, line in enumerate(lines, start=1):
        if not line.strip():
            continue
        stats.total_lines += 1

        result = parser.try_parse(line)
        if isinstance(result, Ignored):
            stats.ignored += 1
            continue
        if isinstance(result, Failed):
            stats.failed += 1
            if strict:
                raise result.error
            logger.warning("Skipping line %d (%s): %s", lineno, result.error.kind, result.error)
            continue

        stats.record(result.line)
        yield result.line

    logger.info(
        "Parsed %d of %d lines (%d ignored, %d failed)",
        stats.parsed, stats.total_lines, stats.ignored, stats.failed,
    )
