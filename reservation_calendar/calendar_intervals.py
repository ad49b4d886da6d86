from typing import Iterable, List, Optional

from reservation_calendar.day import DayIndex
from reservation_calendar.errors import WeekStartsError
from reservation_calendar.intervals import Interval, get_render_interval
from reservation_calendar.models import Reservation, WeekSplit

DAYS_PER_WEEK = 7


def get_render_interval_inclusive(reservation: Reservation) -> Interval:
    return get_render_interval(reservation)


def clip_interval_to_range(interval: Interval, range_inclusive: Interval) -> Optional[Interval]:
    """Intersects two inclusive intervals. Returns None when they are disjoint."""
    start, end = interval
    range_start, range_end = range_inclusive
    clipped_start = max(start, range_start)
    clipped_end = min(end, range_end)
    if clipped_start > clipped_end:
        return None
    return clipped_start, clipped_end


def normalize_week_starts(week_starts: Iterable[DayIndex]) -> List[DayIndex]:
    return sorted(set(week_starts))


def validate_week_starts(week_starts: Iterable[DayIndex], visible_range: Optional[Interval] = None) -> List[DayIndex]:
    """Returns the sorted week starts, or raises WeekStartsError.

    Consecutive week starts must be exactly one week apart, otherwise days in
    the gap would silently disappear from the grid. When a visible range is
    given the weeks must also cover all of it.
    """
    starts = normalize_week_starts(week_starts)
    if not starts:
        raise WeekStartsError("week_starts must not be empty")

    for prev, curr in zip(starts, starts[1:]):
        if curr - prev != DAYS_PER_WEEK:
            raise WeekStartsError(f"week starts {prev} and {curr} are not one week apart")

    if visible_range is not None:
        range_start, range_end = visible_range
        last_day = starts[-1] + DAYS_PER_WEEK - 1
        if range_start <= range_end and (range_start < starts[0] or range_end > last_day):
            raise WeekStartsError(
                f"week starts cover {starts[0]}..{last_day} but the visible range is {range_start}..{range_end}"
            )
    return starts


def split_interval_by_weeks(clipped: Interval, week_starts: Iterable[DayIndex]) -> List[WeekSplit]:
    """Splits an inclusive interval into one piece per week it touches."""
    clipped_start, clipped_end = clipped
    out: List[WeekSplit] = []

    for week_start in validate_week_starts(week_starts):
        week_end = week_start + DAYS_PER_WEEK - 1
        if week_end < clipped_start:
            continue
        if week_start > clipped_end:
            break

        seg_start = max(clipped_start, week_start)
        seg_end = min(clipped_end, week_end)
        if seg_start <= seg_end:
            out.append(WeekSplit(week_start=week_start, seg_start=seg_start, seg_end=seg_end))

    return out
