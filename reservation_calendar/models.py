from typing import List, Tuple

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CalendarModel(BaseModel):
    # Store records and renderer payloads use camelCase keys.
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class Reservation(CalendarModel):
    model_config = ConfigDict(extra="allow", coerce_numbers_to_str=True)

    id: str
    apartment_id: str
    check_in: str  # YYYY-MM-DD
    check_out: str  # YYYY-MM-DD
    status: str  # booked | blocked | cancelled | anything else


class LaneAssignedReservation(Reservation):
    lane_index: int
    render_start_day: int
    render_end_day_inclusive: int


class WeekSplit(CalendarModel):
    week_start: int
    seg_start: int
    seg_end: int


class WeeklySegment(CalendarModel):
    reservation_id: str
    apartment_id: str
    status: str
    week_start: int
    seg_start: int
    seg_end: int
    lane_index: int


class MonthlySegment(CalendarModel):
    key: str  # "<reservation id>::<week start>"
    reservation: Reservation
    week_start: int
    seg_start_day: int
    seg_end_day_inclusive: int
    lane_index: int


class MonthGridDay(CalendarModel):
    day_index: int
    date_str: str
    in_month: bool


class MonthGrid(CalendarModel):
    year: int
    month: int  # 1-12
    weeks: List[List[MonthGridDay]]
    days: List[MonthGridDay]
    week_starts: List[int]
    start_day: int
    end_day_inclusive: int
    end_day_exclusive: int
    range_inclusive: Tuple[int, int]


class ApartmentCalendar(CalendarModel):
    apartment_id: str
    lane_count: int
    segments: List[WeeklySegment]
    blocked_dates: List[str]


class CalendarReport(CalendarModel):
    month: str  # YYYY-MM
    start_date: str
    end_date: str
    include_cancelled: bool
    apartments: List[ApartmentCalendar]
