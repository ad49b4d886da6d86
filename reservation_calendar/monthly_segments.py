import logging
from datetime import date
from typing import Dict, Iterable, List

from reservation_calendar.calendar_intervals import (
    clip_interval_to_range,
    get_render_interval_inclusive,
    split_interval_by_weeks,
    validate_week_starts,
)
from reservation_calendar.day import DayIndex
from reservation_calendar.intervals import Interval, should_render_reservation
from reservation_calendar.lanes import pack_lanes
from reservation_calendar.month_grid import build_month_grid
from reservation_calendar.models import MonthlySegment, Reservation

logger = logging.getLogger(__name__)


def segment_key(reservation_id: str, week_start: DayIndex) -> str:
    return f"{reservation_id}::{week_start}"


def build_monthly_reservation_segments_with_lanes(
    reservations: Iterable[Reservation],
    visible_range_inclusive: Interval,
    week_starts: Iterable[DayIndex],
    include_cancelled: bool = False,
) -> List[MonthlySegment]:
    """Builds week-clipped segments for a 6x7 month grid of one apartment.

    Lanes are assigned per week with the strict rule, so A 20->22 and B 22->24
    are stacked on day 22. On equal start days the longer segment goes first.
    """
    starts = validate_week_starts(week_starts, visible_range_inclusive)

    by_week: Dict[DayIndex, List[dict]] = {}
    for r in reservations:
        if not should_render_reservation(r.status, include_cancelled):
            continue

        clipped = clip_interval_to_range(get_render_interval_inclusive(r), visible_range_inclusive)
        if clipped is None:
            continue

        for split in split_interval_by_weeks(clipped, starts):
            by_week.setdefault(split.week_start, []).append(
                {
                    "key": segment_key(r.id, split.week_start),
                    "reservation": r,
                    "week_start": split.week_start,
                    "seg_start_day": split.seg_start,
                    "seg_end_day_inclusive": split.seg_end,
                }
            )

    out: List[MonthlySegment] = []
    for segments in by_week.values():
        ordered = sorted(segments, key=lambda s: (s["seg_start_day"], -s["seg_end_day_inclusive"], s["key"]))
        packed = pack_lanes(ordered, lambda s: s["seg_start_day"], lambda s: s["seg_end_day_inclusive"])
        for raw, lane_index in packed:
            out.append(MonthlySegment(**raw, lane_index=lane_index))

    out.sort(key=lambda s: (s.week_start, s.lane_index, s.seg_start_day, s.seg_end_day_inclusive, s.key))
    logger.debug(f"Built {len(out)} monthly segments across {len(by_week)} weeks")
    return out


def build_month_segments(
    reservations: Iterable[Reservation], month_date: date, include_cancelled: bool = False
) -> List[MonthlySegment]:
    """Segments one apartment's reservations against the grid of the month containing month_date."""
    grid = build_month_grid(month_date)
    return build_monthly_reservation_segments_with_lanes(
        reservations,
        visible_range_inclusive=grid.range_inclusive,
        week_starts=grid.week_starts,
        include_cancelled=include_cancelled,
    )
