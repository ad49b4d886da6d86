import logging
from typing import Dict, Iterable, List, Optional, Tuple

from reservation_calendar.day import DayIndex, day_range_exclusive, format_day, parse_day
from reservation_calendar.models import Reservation

logger = logging.getLogger(__name__)

BOOKED = "booked"
BLOCKED = "blocked"
CANCELLED = "cancelled"

Interval = Tuple[DayIndex, DayIndex]


def get_occupancy_interval(reservation: Reservation) -> Interval:
    """Business occupancy: [check_in, check_out). The check-out day is free again."""
    start = parse_day(reservation.check_in)
    end = parse_day(reservation.check_out)
    # Check-out before check-in collapses to an empty stay instead of failing.
    return start, max(end, start)


def get_render_interval(reservation: Reservation) -> Interval:
    """Visual render: [check_in, check_out], at least one day long."""
    start = parse_day(reservation.check_in)
    end = parse_day(reservation.check_out)
    return start, max(end, start)


def should_render_reservation(status: str, include_cancelled: bool = False) -> bool:
    if status in (BOOKED, BLOCKED):
        return True
    if status == CANCELLED:
        return bool(include_cancelled)
    # Unknown statuses stay visible.
    return True


def should_occupy_reservation(status: str) -> bool:
    # Unknown statuses block the calendar.
    return status != CANCELLED


def _occupying(reservations: Iterable[Reservation], apartment_id: Optional[str]) -> List[Reservation]:
    return [
        r
        for r in reservations
        if should_occupy_reservation(r.status) and (apartment_id is None or r.apartment_id == apartment_id)
    ]


def is_day_occupied(reservations: Iterable[Reservation], day: DayIndex, apartment_id: Optional[str] = None) -> bool:
    """Checks whether any occupying reservation holds the resource on the given day."""
    for r in _occupying(reservations, apartment_id):
        start, end_exclusive = get_occupancy_interval(r)
        if start <= day < end_exclusive:
            return True
    return False


def occupied_days(
    reservations: Iterable[Reservation],
    range_start: DayIndex,
    range_end_exclusive: DayIndex,
    apartment_id: Optional[str] = None,
) -> List[DayIndex]:
    """Returns the sorted distinct occupied days inside [range_start, range_end_exclusive)."""
    days = set()
    for r in _occupying(reservations, apartment_id):
        start, end_exclusive = get_occupancy_interval(r)
        days.update(day_range_exclusive(max(start, range_start), min(end_exclusive, range_end_exclusive)))
    return sorted(days)


def blocked_dates_by_apartment(
    reservations: Iterable[Reservation], range_start: DayIndex, range_end_exclusive: DayIndex
) -> Dict[str, List[str]]:
    """Maps every apartment in the input to its occupied YYYY-MM-DD dates in the window."""
    by_apartment: Dict[str, List[Reservation]] = {}
    for r in reservations:
        by_apartment.setdefault(r.apartment_id, []).append(r)

    blocked = {}
    for apartment_id in sorted(by_apartment):
        days = occupied_days(by_apartment[apartment_id], range_start, range_end_exclusive)
        blocked[apartment_id] = [format_day(d) for d in days]
        logger.debug(f"Apartment {apartment_id}: {len(days)} blocked days")
    return blocked
