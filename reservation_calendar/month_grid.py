from datetime import date

from reservation_calendar.day import date_from_day, day_from_date, format_day, weekday
from reservation_calendar.models import MonthGrid, MonthGridDay

GRID_WEEKS = 6
GRID_DAYS = GRID_WEEKS * 7


def build_month_grid(value: date) -> MonthGrid:
    """Builds the Monday-first 6x7 grid for the month containing value.

    The grid always has 42 days, so it starts in the previous month and
    usually runs into the next one. December 9999 is not supported: its grid
    runs past date.max and raises InvalidDayError.
    """
    first_day = day_from_date(date(value.year, value.month, 1))
    # weekday() is 0 on Monday, so a month starting on Sunday steps back 6 days.
    start_day = first_day - weekday(first_day)
    end_day_inclusive = start_day + GRID_DAYS - 1
    # Fails fast when the grid leaves the supported calendar.
    date_from_day(end_day_inclusive)

    weeks = []
    week_starts = []
    for w in range(GRID_WEEKS):
        week_start = start_day + w * 7
        week_starts.append(week_start)
        week = []
        for idx in range(week_start, week_start + 7):
            d = date_from_day(idx)
            week.append(
                MonthGridDay(
                    day_index=idx,
                    date_str=format_day(idx),
                    in_month=(d.year == value.year and d.month == value.month),
                )
            )
        weeks.append(week)

    return MonthGrid(
        year=value.year,
        month=value.month,
        weeks=weeks,
        days=[d for week in weeks for d in week],
        week_starts=week_starts,
        start_day=start_day,
        end_day_inclusive=end_day_inclusive,
        end_day_exclusive=start_day + GRID_DAYS,
        range_inclusive=(start_day, end_day_inclusive),
    )
