"""Calendar-day helpers shared by the aggregation and rendering code.

All arithmetic runs on `datetime.date` ordinals (proleptic Gregorian, no
time component, no timezone), so week alignment never drifts across DST or
leap days.
"""

from collections.abc import Iterator
from datetime import date
from datetime import timedelta


DAYS_PER_WEEK = 7
# Weeks start on Sunday, like the GitHub contribution calendar.
ANCHOR_WEEKDAY = 6
WEEKDAY_NAMES = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")
MONTH_NAMES = (
    "Jan",
    "Feb",
    "Mar",
    "Apr",
    "May",
    "Jun",
    "Jul",
    "Aug",
    "Sep",
    "Oct",
    "Nov",
    "Dec",
)


def parse_day(raw_day: str) -> date:
    """Parse an ISO `YYYY-MM-DD` string into a date."""

    return date.fromisoformat(raw_day)


def weekday_row(day: date) -> int:
    """Return the 0..6 row of a day, counted from the anchor weekday."""

    return (day.weekday() - ANCHOR_WEEKDAY) % DAYS_PER_WEEK


def week_start(day: date) -> date:
    return day - timedelta(days=weekday_row(day))


def days_between(first: date, second: date) -> int:
    return second.toordinal() - first.toordinal()


def iter_days(start: date, end: date) -> Iterator[date]:
    """Yield every day from start to end, both inclusive."""

    for offset in range(days_between(start, end) + 1):
        yield start + timedelta(days=offset)


def month_key(day: date) -> str:
    return f"{day.year:04d}-{day.month:02d}"


def month_name(key: str) -> str:
    return MONTH_NAMES[int(key[5:7]) - 1]
