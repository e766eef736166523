"""
dates.py
WHOIS creation-date normalization and the six-month age check.
"""

import calendar
import re
from datetime import datetime, timezone
from typing import Optional, Union

# Most specific first: looser patterns must not get a chance at a timestamp.
# strptime alone accepts one-digit fields ("2024115", "2024-1-5"), so each
# layout is pinned by an anchored pattern first.
DATE_FORMATS = (
    (re.compile(r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}(?:\.\d+)?Z"), "%Y-%m-%dT%H:%M:%SZ"),
    (re.compile(r"\d{4}-\d{2}-\d{2}"), "%Y-%m-%d"),
    (re.compile(r"\d{8}"), "%Y%m%d"),
)

_FRACTION = re.compile(r"\.\d+(?=Z$)")

RECENT_MONTHS = 6


class UnsupportedDateFormat(ValueError):
    """Creation date string matched none of DATE_FORMATS."""

    def __init__(self, value: str):
        self.value = value
        super().__init__(f"unsupported date format: {value}")


def _as_utc(moment: datetime) -> datetime:
    """Naive datetimes are taken to be UTC."""
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


def normalize_date(value: Union[str, datetime, list]) -> datetime:
    """
    Turn a WHOIS creation-date value into a UTC datetime.

    python-whois hands back a datetime when it could cast the field, the raw
    string when it could not, and a list when the record repeats the field.
    Strings may carry a trailing annotation (e.g. "2024-01-15 #12345"); only
    the first whitespace-delimited token is parsed.
    """
    if isinstance(value, list):
        if not value:
            raise UnsupportedDateFormat("")
        value = value[0]
    if isinstance(value, datetime):
        return _as_utc(value)

    raw = str(value)
    tokens = raw.split()
    if not tokens:
        raise UnsupportedDateFormat(raw)

    token = tokens[0]
    for pattern, fmt in DATE_FORMATS:
        if not pattern.fullmatch(token):
            continue
        try:
            return datetime.strptime(_FRACTION.sub("", token), fmt).replace(tzinfo=timezone.utc)
        except ValueError:
            continue
    raise UnsupportedDateFormat(raw)


def format_date(moment: datetime) -> str:
    return moment.strftime("%Y-%m-%d")


def months_before(moment: datetime, months: int) -> datetime:
    """Calendar-month subtraction; the day is clamped to the target month's length."""
    index = moment.year * 12 + (moment.month - 1) - months
    year, month = divmod(index, 12)
    month += 1
    day = min(moment.day, calendar.monthrange(year, month)[1])
    return moment.replace(year=year, month=month, day=day)


def is_recently_registered(created: datetime, now: Optional[datetime] = None,
                           months: int = RECENT_MONTHS) -> bool:
    """True iff created is strictly after now minus `months` calendar months."""
    now = _as_utc(now) if now is not None else datetime.now(timezone.utc)
    cutoff = months_before(now, months)
    return _as_utc(created) > cutoff
