"""Shared pytest fixtures for the pihole-log-parser test suite."""

from __future__ import annotations

from pathlib import Path

import pytest

from pihole_log_parser.parser import LineParser

FIXTURES_DIR = Path(__file__).parent / "fixtures"


def read_fixture(name: str) -> list[str]:
    """Return the lines of a fixture log file, without terminators."""
    return (FIXTURES_DIR / name).read_text().splitlines()


@pytest.fixture()
def parser() -> LineParser:
    """A parser pinned to 2001 in UTC."""
    return LineParser(2001)


@pytest.fixture()
def pihole_log() -> list[str]:
    return read_fixture("pihole.log")


@pytest.fixture()
def startup_log() -> list[str]:
    return read_fixture("pihole.startup.log")
