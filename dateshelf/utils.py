"""Utility helpers for parsing timestamps reported by metadata tools.

Spotlight's ``mdls`` prints dates as ``2023-03-05 08:12:44 +0000`` but other
tools and locales vary, so parsing tries a few explicit formats first and
falls back to ``dateutil.parser`` for anything else.
"""

from datetime import datetime
import re
from dateutil import parser as dparser

EXPLICIT_FORMATS = [
    "%Y-%m-%d %H:%M:%S %z",
    "%Y-%m-%d %H:%M:%S.%f %z",
    "%Y-%m-%d %H:%M:%S",
    "%Y-%m-%d %H:%M:%S.%f",
    "%Y-%m-%dT%H:%M:%S",
    "%Y-%m-%dT%H:%M:%S.%f",
    "%Y-%m-%dT%H:%M:%S%z",
    "%Y-%m-%dT%H:%M:%S.%f%z",
]

# mdls prints this for attributes the filesystem does not track
NULL_VALUES = {"(null)", "null", "none"}


def parse_date(s: str) -> datetime | None:
    """Parse a timestamp string printed by a metadata tool.

    Uses explicit strptime formats for speed/accuracy, then falls back to
    dateutil.parser.parse which handles most variations and timezones.
    Returns a timezone-aware datetime when an offset is present, otherwise
    naive. Returns ``None`` for empty, null-like or unparsable input.
    """
    if not s or not isinstance(s, str):
        return None
    s = s.strip().strip('"')
    if not s or s.lower() in NULL_VALUES:
        return None
    # bare numbers are counters or sizes, not dates
    if re.fullmatch(r"\d{1,8}", s):
        return None

    for fmt in EXPLICIT_FORMATS:
        try:
            return datetime.strptime(s, fmt)
        except ValueError:
            pass

    try:
        return dparser.parse(s)
    except (ValueError, OverflowError):
        return None


def to_local(dt: datetime) -> datetime:
    """Return ``dt`` as a naive datetime in local time.

    Aware datetimes are converted to the local timezone; naive ones are
    assumed to already be local.
    """
    if dt.tzinfo is None:
        return dt
    return dt.astimezone().replace(tzinfo=None)
