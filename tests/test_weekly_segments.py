import pytest

from reservation_calendar.day import parse_day
from reservation_calendar.errors import WeekStartsError
from reservation_calendar.weekly_segments import build_weekly_segments_with_lanes


def rng(start, end):
    return (parse_day(start), parse_day(end))


def by_id(segments):
    return {s.reservation_id: s for s in segments}


WEEK_OF_19 = parse_day("2026-01-19")


def test_same_week_shared_day_stacks(res):
    a = res("A", "2026-01-20", "2026-01-22")
    b = res("B", "2026-01-22", "2026-01-24")

    segments = build_weekly_segments_with_lanes(
        [a, b], visible_range_inclusive=rng("2026-01-19", "2026-01-25"), week_starts=[WEEK_OF_19]
    )
    a_seg, b_seg = by_id(segments)["A"], by_id(segments)["B"]

    assert a_seg.week_start == b_seg.week_start == WEEK_OF_19
    assert a_seg.seg_end == parse_day("2026-01-22")
    assert b_seg.seg_start == parse_day("2026-01-22")
    assert (a_seg.lane_index, b_seg.lane_index) == (0, 1)


def test_no_overlap_same_lane(res):
    a = res("A", "2026-01-20", "2026-01-22")
    b = res("B", "2026-01-23", "2026-01-24")

    segments = build_weekly_segments_with_lanes(
        [a, b], visible_range_inclusive=rng("2026-01-19", "2026-01-25"), week_starts=[WEEK_OF_19]
    )
    assert {k: s.lane_index for k, s in by_id(segments).items()} == {"A": 0, "B": 0}


def test_end_of_week_shared_day_stacks(res):
    a = res("A", "2026-01-27", "2026-01-30")
    b = res("B", "2026-01-30", "2026-01-31")

    segments = build_weekly_segments_with_lanes(
        [a, b],
        visible_range_inclusive=rng("2026-01-26", "2026-02-01"),
        week_starts=[parse_day("2026-01-26")],
    )
    segs = by_id(segments)
    assert segs["A"].seg_end == parse_day("2026-01-30")
    assert segs["B"].seg_start == parse_day("2026-01-30")
    assert (segs["A"].lane_index, segs["B"].lane_index) == (0, 1)


def test_cross_month_split_on_february_grid(res):
    a = res("A", "2026-01-28", "2026-02-03")
    week_starts = [
        parse_day(s) for s in ["2026-01-26", "2026-02-02", "2026-02-09", "2026-02-16", "2026-02-23", "2026-03-02"]
    ]

    segments = build_weekly_segments_with_lanes(
        [a], visible_range_inclusive=rng("2026-01-26", "2026-03-08"), week_starts=week_starts
    )

    assert [s.week_start for s in segments] == [parse_day("2026-01-26"), parse_day("2026-02-02")]
    assert (segments[0].seg_start, segments[0].seg_end) == rng("2026-01-28", "2026-02-01")
    assert (segments[1].seg_start, segments[1].seg_end) == rng("2026-02-02", "2026-02-03")
    assert all(s.lane_index == 0 for s in segments)


def test_cancelled_only_when_requested(res):
    booked = res("A", "2026-01-20", "2026-01-22")
    cancelled = res("C", "2026-01-22", "2026-01-24", status="cancelled")
    visible = rng("2026-01-19", "2026-01-25")

    hidden = build_weekly_segments_with_lanes([booked, cancelled], visible, [WEEK_OF_19])
    assert [s.reservation_id for s in hidden] == ["A"]

    shown = build_weekly_segments_with_lanes([booked, cancelled], visible, [WEEK_OF_19], include_cancelled=True)
    assert {k: s.lane_index for k, s in by_id(shown).items()} == {"A": 0, "C": 1}
    assert by_id(shown)["C"].status == "cancelled"


def test_lanes_are_recomputed_per_week(res):
    a = res("A", "2026-01-20", "2026-01-27")
    b = res("B", "2026-01-19", "2026-01-22")

    segments = build_weekly_segments_with_lanes(
        [a, b],
        visible_range_inclusive=rng("2026-01-19", "2026-02-01"),
        week_starts=[parse_day("2026-01-19"), parse_day("2026-01-26")],
    )
    a_lanes = [(s.week_start, s.lane_index) for s in segments if s.reservation_id == "A"]
    assert a_lanes == [(parse_day("2026-01-19"), 1), (parse_day("2026-01-26"), 0)]


def test_apartments_get_independent_lanes(res):
    a = res("A", "2026-01-20", "2026-01-22", apartment_id="apt_2")
    b = res("B", "2026-01-20", "2026-01-22", apartment_id="apt_1")

    segments = build_weekly_segments_with_lanes([a, b], rng("2026-01-19", "2026-01-25"), [WEEK_OF_19])
    assert [(s.apartment_id, s.reservation_id, s.lane_index) for s in segments] == [
        ("apt_1", "B", 0),
        ("apt_2", "A", 0),
    ]


def test_reservation_outside_visible_range_is_dropped(res):
    a = res("A", "2026-01-01", "2026-01-05")
    assert build_weekly_segments_with_lanes([a], rng("2026-01-19", "2026-01-25"), [WEEK_OF_19]) == []


def test_output_order_and_determinism(res):
    reservations = [
        res("c", "2026-01-21", "2026-01-21"),
        res("b", "2026-01-20", "2026-01-22"),
        res("a", "2026-01-20", "2026-01-22"),
        res("d", "2026-01-24", "2026-01-25"),
    ]
    visible = rng("2026-01-19", "2026-01-25")

    first = build_weekly_segments_with_lanes(reservations, visible, [WEEK_OF_19])
    second = build_weekly_segments_with_lanes(list(reversed(reservations)), visible, [WEEK_OF_19])

    assert [(s.reservation_id, s.lane_index) for s in first] == [("a", 0), ("d", 0), ("b", 1), ("c", 2)]
    assert [s.model_dump() for s in first] == [s.model_dump() for s in second]


def test_gapped_week_starts_raise(res):
    a = res("A", "2026-01-20", "2026-02-05")
    with pytest.raises(WeekStartsError):
        build_weekly_segments_with_lanes(
            [a],
            visible_range_inclusive=rng("2026-01-19", "2026-02-08"),
            week_starts=[parse_day("2026-01-19"), parse_day("2026-02-02")],
        )


def test_week_starts_must_cover_visible_range(res):
    with pytest.raises(WeekStartsError):
        build_weekly_segments_with_lanes(
            [res("A", "2026-01-20", "2026-01-22")],
            visible_range_inclusive=rng("2026-01-19", "2026-01-26"),
            week_starts=[WEEK_OF_19],
        )


def test_segments_serialize_with_camel_case(res):
    segments = build_weekly_segments_with_lanes(
        [res("A", "2026-01-20", "2026-01-22")], rng("2026-01-19", "2026-01-25"), [WEEK_OF_19]
    )
    dumped = segments[0].model_dump(mode="json", by_alias=True)
    assert dumped == {
        "reservationId": "A",
        "apartmentId": "apt_1",
        "status": "booked",
        "weekStart": WEEK_OF_19,
        "segStart": parse_day("2026-01-20"),
        "segEnd": parse_day("2026-01-22"),
        "laneIndex": 0,
    }
