import logging
from typing import Callable, Iterable, List, Optional, Sequence, Tuple, TypeVar

from reservation_calendar.day import DayIndex
from reservation_calendar.intervals import get_render_interval, should_render_reservation
from reservation_calendar.models import LaneAssignedReservation, Reservation

logger = logging.getLogger(__name__)

T = TypeVar("T")


def pack_lanes(
    items: Sequence[T], start_of: Callable[[T], DayIndex], end_of: Callable[[T], DayIndex]
) -> List[Tuple[T, int]]:
    """Greedy lane packing over items already sorted by start day.

    Each item goes to the first lane whose last inclusive end day is strictly
    before the item's start. Two items sharing a single day never share a lane.
    """
    lane_last_end: List[DayIndex] = []
    out: List[Tuple[T, int]] = []

    for item in items:
        start, end = start_of(item), end_of(item)
        lane_index = -1
        for i, last_end in enumerate(lane_last_end):
            if start > last_end:
                lane_index = i
                lane_last_end[i] = max(last_end, end)
                break

        if lane_index == -1:
            lane_index = len(lane_last_end)
            lane_last_end.append(end)

        out.append((item, lane_index))

    return out


def assign_lanes(
    reservations: Iterable[Reservation],
    view_start_day: Optional[DayIndex] = None,
    view_end_day_inclusive: Optional[DayIndex] = None,
    include_cancelled: bool = False,
) -> List[LaneAssignedReservation]:
    """Assigns a lane to each reservation of a single apartment row.

    Render intervals are inclusive, so a stay ending on day E and another
    starting on day E overlap and land in different lanes. With a view window
    the render interval is clipped to it and reservations outside it drop out.
    """
    has_view = view_start_day is not None and view_end_day_inclusive is not None
    if not has_view and (view_start_day is not None or view_end_day_inclusive is not None):
        logger.warning("Only one view bound given; assigning lanes without a view window.")

    decorated = []
    for r in reservations:
        if not should_render_reservation(r.status, include_cancelled):
            continue
        start, end = get_render_interval(r)
        if has_view:
            start = max(start, view_start_day)
            end = min(end, view_end_day_inclusive)
            if end < view_start_day or start > view_end_day_inclusive:
                continue
        if end < start:
            continue
        decorated.append((r, start, end))

    decorated.sort(key=lambda item: (item[1], item[2], str(item[0].id)))

    out = []
    for (r, start, end), lane_index in pack_lanes(decorated, lambda x: x[1], lambda x: x[2]):
        out.append(
            LaneAssignedReservation.model_validate(
                {
                    **r.model_dump(),
                    "lane_index": lane_index,
                    "render_start_day": start,
                    "render_end_day_inclusive": end,
                }
            )
        )

    logger.debug(f"Assigned {len(out)} reservations to {lane_count(out)} lanes")
    return out


def lane_count(assigned: Iterable) -> int:
    """Number of lanes needed to draw lane-assigned reservations or segments."""
    return max((a.lane_index for a in assigned), default=-1) + 1
