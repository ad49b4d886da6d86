class CalendarError(Exception):
    """Base class for errors raised by the calendar engine."""


class InvalidDateError(CalendarError, ValueError):
    """A date string is not YYYY-MM-DD or names a day that does not exist."""


class InvalidDayError(CalendarError, ValueError):
    """A day index is not an integer inside the supported calendar."""


class WeekStartsError(CalendarError, ValueError):
    """Week start boundaries are empty, gapped or do not cover the visible range."""
