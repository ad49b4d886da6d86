import re
from datetime import date, timedelta

from reservation_calendar.errors import InvalidDateError, InvalidDayError

# A DayIndex is the number of whole days since 1970-01-01. Plain date
# arithmetic on integers keeps day math free of timezone and DST drift.
DayIndex = int

EPOCH = date(1970, 1, 1)
_EPOCH_ORDINAL = EPOCH.toordinal()
_MIN_DAY = date.min.toordinal() - _EPOCH_ORDINAL
_MAX_DAY = date.max.toordinal() - _EPOCH_ORDINAL

_DAY_RE = re.compile(r"^([0-9]{4})-([0-9]{2})-([0-9]{2})$")


def _check_day(value, label: str) -> None:
    """Raises InvalidDayError unless value is an integer day index."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidDayError(f"{label} must be a finite integer, got {value!r}")


def parse_day(value: str) -> DayIndex:
    """Parses a YYYY-MM-DD string into a day index."""
    if not isinstance(value, str):
        raise InvalidDateError(f"Invalid day format: {value!r}")
    m = _DAY_RE.match(value)
    if not m:
        raise InvalidDateError(f"Invalid day format: {value}")

    year, month, day = (int(part) for part in m.groups())

    # Structural bounds first; the calendar itself decides the rest.
    if month < 1 or month > 12:
        raise InvalidDateError(f"Invalid month in day: {value}")
    if day < 1 or day > 31:
        raise InvalidDateError(f"Invalid day in date: {value}")

    try:
        idx = date(year, month, day).toordinal() - _EPOCH_ORDINAL
    except ValueError:
        raise InvalidDateError(f"Invalid calendar day: {value}") from None

    if format_day(idx) != value:
        raise InvalidDateError(f"Invalid calendar day: {value}")
    return idx


def format_day(day: DayIndex) -> str:
    """Formats a day index as YYYY-MM-DD."""
    return date_from_day(day).isoformat()


def date_from_day(day: DayIndex) -> date:
    _check_day(day, "day")
    if day < _MIN_DAY or day > _MAX_DAY:
        raise InvalidDayError(f"day {day} is outside the supported calendar")
    return EPOCH + timedelta(days=day)


def day_from_date(value: date) -> DayIndex:
    return value.toordinal() - _EPOCH_ORDINAL


def weekday(day: DayIndex) -> int:
    """Monday is 0 and Sunday is 6, like date.weekday()."""
    _check_day(day, "day")
    # 1970-01-01 was a Thursday.
    return (day + 3) % 7


def compare_days(a: DayIndex, b: DayIndex) -> int:
    _check_day(a, "a")
    _check_day(b, "b")
    if a == b:
        return 0
    return -1 if a < b else 1


def day_range_inclusive(start: DayIndex, end: DayIndex) -> range:
    """Days from start to end, both included. Empty when end < start."""
    _check_day(start, "start")
    _check_day(end, "end")
    return range(start, max(end + 1, start))


def day_range_exclusive(start: DayIndex, end: DayIndex) -> range:
    """Days from start up to but not including end. Empty when end <= start."""
    _check_day(start, "start")
    _check_day(end, "end")
    return range(start, max(end, start))
