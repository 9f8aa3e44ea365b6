"""Parser configuration loaded from a YAML ``parser`` section and environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import timezone, tzinfo
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import yaml

from pihole_log_parser.errors import InvalidArgumentError

CONFIG_PATH_ENV = "PIHOLE_PARSER_CONFIG"


def _parse_bool(value: str) -> bool:
    return value.strip().lower() in ("true", "1", "yes")


@dataclass(frozen=True)
class ParserConfig:
    reference_year: int
    timezone: str = "UTC"
    strict: bool = False

    @classmethod
    def from_dict(cls, d: dict) -> ParserConfig:
        if d.get("reference_year") is None:
            raise InvalidArgumentError("parser config requires reference_year")
        try:
            year = int(d["reference_year"])
        except (TypeError, ValueError) as exc:
            raise InvalidArgumentError(
                f"reference_year must be an integer, got {d['reference_year']!r}"
            ) from exc
        strict = d.get("strict", False)
        if isinstance(strict, str):
            strict = _parse_bool(strict)
        return cls(
            reference_year=year,
            timezone=str(d.get("timezone", "UTC")),
            strict=bool(strict),
        )


def load_yaml(path: str) -> dict:
    """Load YAML config from *path* and return as a dict.

    The path can be overridden via the ``PIHOLE_PARSER_CONFIG`` environment variable.
    """
    path = os.environ.get(CONFIG_PATH_ENV, path)
    with open(path, "r") as f:
        return yaml.safe_load(f) or {}


def load_config(path: str | None = None) -> ParserConfig:
    """Build ParserConfig from the YAML ``parser`` section, then apply env overrides.

    Environment variables: PIHOLE_REFERENCE_YEAR, PIHOLE_TIMEZONE, PIHOLE_STRICT.
    The reference year has no default; dnsmasq lines don't carry one.
    """
    section: dict = {}
    if path is not None or CONFIG_PATH_ENV in os.environ:
        section = dict(load_yaml(path or "").get("parser") or {})

    if "PIHOLE_REFERENCE_YEAR" in os.environ:
        section["reference_year"] = os.environ["PIHOLE_REFERENCE_YEAR"]
    if "PIHOLE_TIMEZONE" in os.environ:
        section["timezone"] = os.environ["PIHOLE_TIMEZONE"]
    if "PIHOLE_STRICT" in os.environ:
        section["strict"] = os.environ["PIHOLE_STRICT"]

    return ParserConfig.from_dict(section)


def resolve_timezone(name: str) -> tzinfo:
    """Map 'UTC' to timezone.utc and anything else through the IANA database."""
    if name.strip().upper() in ("UTC", "Z"):
        return timezone.utc
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise InvalidArgumentError(f"Unknown timezone: {name!r}") from exc
