"""Exceptions raised while parsing dnsmasq log lines."""

from __future__ import annotations


class InvalidArgumentError(TypeError, ValueError):
    """Raised when the parser is called outside its contract."""


class ParseError(Exception):
    """Base class for lines that look like DNS queries but cannot be parsed.

    ``kind`` is a short stable tag; ``context`` is the text that was being
    parsed when the error occurred.
    """

    kind = "parse-error"

    def __init__(self, message: str, context: str = ""):
        super().__init__(message)
        self.context = context


class UnrecognizedLineTypeError(ParseError):
    """The variant token is not one of the known line types."""

    kind = "unrecognized-line-type"

    def __init__(self, line_type: str, body: str):
        super().__init__(
            f'Unknown log type "{line_type}". Log line is: "{body}"', body
        )
        self.line_type = line_type
        self.body = body


class MalformedLineError(ParseError):
    """A query line is missing a token at a fixed position."""

    kind = "malformed-line"

    def __init__(self, reason: str, body: str):
        super().__init__(f'{reason}. Log line is: "{body}"', body)
        self.body = body


class MalformedTimestampError(ParseError):
    kind = "malformed-timestamp"

    def __init__(self, text: str):
        super().__init__(f'Cannot parse timestamp "{text}"', text)
        self.text = text
