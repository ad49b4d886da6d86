import logging
from typing import Dict, Iterable, List, Tuple

from reservation_calendar.calendar_intervals import (
    clip_interval_to_range,
    get_render_interval_inclusive,
    split_interval_by_weeks,
    validate_week_starts,
)
from reservation_calendar.day import DayIndex
from reservation_calendar.intervals import Interval, should_render_reservation
from reservation_calendar.lanes import pack_lanes
from reservation_calendar.models import Reservation, WeeklySegment

logger = logging.getLogger(__name__)

RawSegment = Dict[str, object]


def _segment_sort_key(segment: WeeklySegment):
    return (
        segment.week_start,
        segment.apartment_id,
        segment.lane_index,
        segment.seg_start,
        segment.seg_end,
        segment.reservation_id,
    )


def build_weekly_segments_with_lanes(
    reservations: Iterable[Reservation],
    visible_range_inclusive: Interval,
    week_starts: Iterable[DayIndex],
    include_cancelled: bool = False,
) -> List[WeeklySegment]:
    """Splits reservations into per-week segments and assigns lanes per (week, apartment).

    A reservation may sit in lane 0 one week and lane 1 the next; lanes are
    recomputed for every grid row.
    """
    starts = validate_week_starts(week_starts, visible_range_inclusive)

    groups: Dict[Tuple[DayIndex, str], List[RawSegment]] = {}
    for r in reservations:
        if not should_render_reservation(r.status, include_cancelled):
            continue

        clipped = clip_interval_to_range(get_render_interval_inclusive(r), visible_range_inclusive)
        if clipped is None:
            continue

        for split in split_interval_by_weeks(clipped, starts):
            raw = {
                "reservation_id": r.id,
                "apartment_id": r.apartment_id,
                "status": r.status,
                "week_start": split.week_start,
                "seg_start": split.seg_start,
                "seg_end": split.seg_end,
            }
            groups.setdefault((split.week_start, r.apartment_id), []).append(raw)

    out: List[WeeklySegment] = []
    for group in groups.values():
        ordered = sorted(group, key=lambda s: (s["seg_start"], s["seg_end"], s["reservation_id"]))
        for raw, lane_index in pack_lanes(ordered, lambda s: s["seg_start"], lambda s: s["seg_end"]):
            out.append(WeeklySegment(**raw, lane_index=lane_index))

    out.sort(key=_segment_sort_key)
    logger.debug(f"Built {len(out)} weekly segments in {len(groups)} (week, apartment) groups")
    return out
