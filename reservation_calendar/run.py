import logging
import sys
from datetime import date
from typing import List

from reservation_calendar import config, persist, store
from reservation_calendar.day import format_day, parse_day
from reservation_calendar.errors import InvalidDateError
from reservation_calendar.intervals import blocked_dates_by_apartment
from reservation_calendar.lanes import lane_count
from reservation_calendar.models import ApartmentCalendar, CalendarReport, Reservation
from reservation_calendar.month_grid import build_month_grid
from reservation_calendar.weekly_segments import build_weekly_segments_with_lanes

logger = logging.getLogger(__name__)


def parse_month(month_arg: str | None) -> date:
    """Parses a YYYY-MM month argument. Defaults to the current month."""
    if not month_arg:
        today = date.today()
        return date(today.year, today.month, 1)
    try:
        parse_day(f"{month_arg}-01")
    except InvalidDateError:
        logger.error("Error: Month must be in YYYY-MM format.")
        sys.exit(1)
    year, month = month_arg.split("-")
    return date(int(year), int(month), 1)


def build_calendar_report(
    reservations: List[Reservation], month_date: date, include_cancelled: bool = False
) -> CalendarReport:
    """Lays out the reservations on the month grid and collects blocked dates per apartment."""
    grid = build_month_grid(month_date)
    segments = build_weekly_segments_with_lanes(
        reservations,
        visible_range_inclusive=grid.range_inclusive,
        week_starts=grid.week_starts,
        include_cancelled=include_cancelled,
    )
    blocked = blocked_dates_by_apartment(reservations, grid.start_day, grid.end_day_exclusive)

    apartments = []
    for apartment_id in sorted({r.apartment_id for r in reservations}):
        apartment_segments = [s for s in segments if s.apartment_id == apartment_id]
        apartments.append(
            ApartmentCalendar(
                apartment_id=apartment_id,
                lane_count=lane_count(apartment_segments),
                segments=apartment_segments,
                blocked_dates=blocked.get(apartment_id, []),
            )
        )

    return CalendarReport(
        month=f"{grid.year:04d}-{grid.month:02d}",
        start_date=format_day(grid.start_day),
        end_date=format_day(grid.end_day_inclusive),
        include_cancelled=include_cancelled,
        apartments=apartments,
    )


def print_calendar_report(report: CalendarReport):
    """Prints the per-apartment layout to stdout."""
    print(f"\n--- Calendar for {report.month} ({report.start_date} to {report.end_date}) ---")

    for apartment in report.apartments:
        print(f"\nApartment {apartment.apartment_id}: {apartment.lane_count} lane(s)")
        for seg in apartment.segments:
            print(
                f"  week {format_day(seg.week_start)} [lane {seg.lane_index}] "
                f"{format_day(seg.seg_start)} -> {format_day(seg.seg_end)} {seg.reservation_id} ({seg.status})"
            )
        print(f"Summary: {len(apartment.blocked_dates)} blocked day(s) in view.")

    if not report.apartments:
        print("Summary: No reservations in view.")


def run(month: str | None = None, apartment_id: str | None = None, include_cancelled: bool | None = None):
    """Core orchestration logic. Loads reservations, lays them out for the month and saves the report."""
    month_date = parse_month(month)
    if include_cancelled is None:
        include_cancelled = config.INCLUDE_CANCELLED

    reservations = store.load_reservations()
    if apartment_id:
        reservations = [r for r in reservations if r.apartment_id == apartment_id]
    logger.info(f"Laying out {len(reservations)} reservations for {month_date:%Y-%m}")

    report = build_calendar_report(reservations, month_date, include_cancelled)
    print_calendar_report(report)
    persist.save_report(report)
    return report
