"""Free-text extraction rules for search result descriptions and titles.

Each extractor is an ordered list of small rules. A rule takes the text and
returns a value or ``None``; the first rule that returns a value wins.
"""

import re
from collections.abc import Callable, Sequence
from datetime import datetime, timedelta, timezone
from typing import Any

from .exceptions import ConfigError
from .models import VideoQuality
from .text import normalize_query

KIB = 1
MIB = 1024
GIB = 1024**2
TIB = 1024**3

Rule = Callable[..., Any]


def first_match(rules: Sequence[Rule], text: str, *args) -> Any:
    """Apply rules in order and return the first non-None result."""
    for rule in rules:
        value = rule(text, *args)
        if value is not None:
            return value
    return None


# Size


def size_rule(unit: str, multiplier: int) -> Rule:
    """Build a rule matching "Size <number> <unit>" and returning kilobytes."""
    pattern = re.compile(rf"Size\s*(\d+(?:\.\d+)?)\s*{unit}")

    def rule(text: str) -> int | None:
        match = pattern.search(text)
        if not match:
            return None
        return round(float(match.group(1)) * multiplier)

    rule.__name__ = f"size_{unit.lower()}"
    return rule


SIZE_RULES: list[Rule] = [
    size_rule("GiB", GIB),
    size_rule("MiB", MIB),
    size_rule("KiB", KIB),
]


def extract_size(description: str) -> int:
    """Extract the torrent size in KB from a description, 0 if absent."""
    return first_match(SIZE_RULES, description) or 0


# Upload time


def _build(year: int, month: int, day: int, hour: int = 0, minute: int = 0):
    try:
        return datetime(year, month, day, hour, minute, tzinfo=timezone.utc)
    except ValueError:
        return None


_MONTH_DAY_TIME = re.compile(r"Uploaded\s*(\d\d)-(\d\d)\s*(\d\d):(\d\d)")
_MONTH_DAY_YEAR = re.compile(r"Uploaded\s*(\d\d)-(\d\d)\s*(\d{4})")
_TODAY = re.compile(r"Uploaded\s*Today\s*(\d\d):(\d\d)")
_YESTERDAY = re.compile(r"Uploaded\s*Y-day\s*(\d\d):(\d\d)")
_MINUTES_AGO = re.compile(r"Uploaded\s*(\d+)\s*mins?\s*ago")


def uploaded_month_day_time(text: str, now: datetime) -> datetime | None:
    """MM-DD HH:MM, in the current year."""
    m = _MONTH_DAY_TIME.search(text)
    if not m:
        return None
    month, day, hour, minute = (int(g) for g in m.groups())
    return _build(now.year, month, day, hour, minute)


def uploaded_month_day_year(text: str, now: datetime) -> datetime | None:
    """MM-DD YYYY, at midnight."""
    m = _MONTH_DAY_YEAR.search(text)
    if not m:
        return None
    month, day, year = (int(g) for g in m.groups())
    return _build(year, month, day)


def uploaded_today(text: str, now: datetime) -> datetime | None:
    m = _TODAY.search(text)
    if not m:
        return None
    hour, minute = (int(g) for g in m.groups())
    return _build(now.year, now.month, now.day, hour, minute)


def uploaded_yesterday(text: str, now: datetime) -> datetime | None:
    m = _YESTERDAY.search(text)
    if not m:
        return None
    hour, minute = (int(g) for g in m.groups())
    yday = now - timedelta(days=1)
    return _build(yday.year, yday.month, yday.day, hour, minute)


def uploaded_minutes_ago(text: str, now: datetime) -> datetime | None:
    m = _MINUTES_AGO.search(text)
    if not m:
        return None
    return now - timedelta(minutes=int(m.group(1)))


UPLOAD_TIME_RULES: list[Rule] = [
    uploaded_month_day_time,
    uploaded_month_day_year,
    uploaded_today,
    uploaded_yesterday,
    uploaded_minutes_ago,
]


def extract_upload_time(
    description: str, now: datetime | None = None
) -> datetime | None:
    """Extract the upload time from a description, None if unparseable."""
    now = now or datetime.now(timezone.utc)
    return first_match(UPLOAD_TIME_RULES, description, now)


# Video quality

QUALITY_TERMS: list[tuple[VideoQuality, frozenset[str]]] = [
    (VideoQuality.UHD, frozenset({VideoQuality.UHD.value, "4k", "uhd", "ultrahd"})),
    (VideoQuality.HIGH, frozenset({VideoQuality.HIGH.value})),
    (VideoQuality.MEDIUM, frozenset({VideoQuality.MEDIUM.value})),
    (VideoQuality.LOW, frozenset({VideoQuality.LOW.value})),
]


def quality_rule(quality: VideoQuality, terms: frozenset[str]) -> Rule:
    """Build a rule matching any whole token of a normalized title."""

    def rule(words: set[str]) -> VideoQuality | None:
        return quality if words & terms else None

    rule.__name__ = f"quality_{quality.name.lower()}"
    return rule


QUALITY_RULES: list[Rule] = [quality_rule(q, terms) for q, terms in QUALITY_TERMS]


def extract_video_quality(title: str) -> VideoQuality:
    """Classify a title into a quality tier from its keywords."""
    words = set(normalize_query(title).split())
    return first_match(QUALITY_RULES, words) or VideoQuality.DEFAULT


# Size filters

_SIZE_FILTER = re.compile(r"^([\d.]+)\s*(B|KB|KIB|MB|MIB|GB|GIB|TB|TIB)?$")

_FILTER_MULTIPLIERS = {
    "B": 1 / 1024,
    "KB": KIB,
    "KIB": KIB,
    "MB": MIB,
    "MIB": MIB,
    "GB": GIB,
    "GIB": GIB,
    "TB": TIB,
    "TIB": TIB,
}


def parse_size_kb(size_str: str) -> int:
    """Parse a size filter like '1.5 GB' or '700MiB' to kilobytes.

    A bare number is taken as kilobytes. Raises ConfigError when malformed.
    """
    text = (size_str or "").upper().strip()
    match = _SIZE_FILTER.match(text)
    if not match:
        raise ConfigError(f"Invalid size: {size_str!r}")
    try:
        value = float(match.group(1))
    except ValueError as e:
        raise ConfigError(f"Invalid size: {size_str!r}") from e
    unit = match.group(2) or "KB"
    return round(value * _FILTER_MULTIPLIERS[unit])
