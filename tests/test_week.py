"""Tests for week and day view helpers."""

from __future__ import annotations

import unittest
from datetime import date, datetime

from dayflow.events import Event
from dayflow.week import (
    calculate_week_layouts,
    clamp_to_day,
    filter_week_events,
    organize_all_day_events,
    organize_all_day_segments,
    split_day_segments,
)

WEEK_START = date(2026, 3, 2)


def _timed(event_id: str, start: datetime, end: datetime) -> Event:
    return Event(id=event_id, day=0, start=start, end=end)


def _all_day(event_id: str, first: date, last_exclusive: date) -> Event:
    return Event(
        id=event_id,
        day=0,
        start=datetime.combine(first, datetime.min.time()),
        end=datetime.combine(last_exclusive, datetime.min.time()),
        all_day=True,
    )


class SplitDaySegmentsTests(unittest.TestCase):
    def test_multi_day_event_is_cut_per_day(self) -> None:
        event = _timed("trip", datetime(2026, 3, 2, 22), datetime(2026, 3, 4, 2))

        segments = split_day_segments(event, WEEK_START)

        self.assertEqual([segment.day for segment in segments], [0, 1, 2])
        self.assertEqual((segments[0].start, segments[0].end), (22.0, 23.99))
        self.assertEqual((segments[1].start, segments[1].end), (0.0, 23.99))
        self.assertEqual((segments[2].start, segments[2].end), (0.0, 2.0))
        self.assertTrue(all(segment.id == "trip" for segment in segments))

    def test_event_outside_window_has_no_segments(self) -> None:
        event = _timed("later", datetime(2026, 3, 20, 9), datetime(2026, 3, 20, 10))
        self.assertEqual(split_day_segments(event, WEEK_START), [])

    def test_hour_events_are_not_split(self) -> None:
        self.assertEqual(split_day_segments(Event(id="a", day=1, start=9, end=10), WEEK_START), [])

    def test_days_to_show_is_validated(self) -> None:
        event = _timed("a", datetime(2026, 3, 2, 9), datetime(2026, 3, 2, 10))
        with self.assertRaises(ValueError):
            split_day_segments(event, WEEK_START, 0)
        with self.assertRaises(TypeError):
            split_day_segments(event, WEEK_START, "7")  # type: ignore[arg-type]


class WeekLayoutTests(unittest.TestCase):
    def test_layouts_per_visible_day(self) -> None:
        events = [
            _timed("trip", datetime(2026, 3, 2, 22), datetime(2026, 3, 4, 2)),
            _timed("meeting", datetime(2026, 3, 3, 9), datetime(2026, 3, 3, 10)),
            Event(id="gym", day=4, start=7, end=8),
            _all_day("holiday", date(2026, 3, 5), date(2026, 3, 6)),
        ]

        layouts = calculate_week_layouts(events, WEEK_START)

        self.assertEqual(sorted(layouts), list(range(7)))
        self.assertEqual(set(layouts[0]), {"trip"})
        self.assertEqual(set(layouts[1]), {"trip", "meeting"})
        self.assertEqual(set(layouts[2]), {"trip"})
        self.assertEqual(set(layouts[4]), {"gym"})
        self.assertEqual(layouts[3], {})
        self.assertEqual(layouts[1]["trip"].z_index, 0)
        self.assertEqual(layouts[1]["meeting"].z_index, 1)

    def test_filter_keeps_events_touching_window(self) -> None:
        events = [
            _timed("before", datetime(2026, 2, 20, 9), datetime(2026, 2, 20, 10)),
            _timed("spanning", datetime(2026, 2, 28, 9), datetime(2026, 3, 3, 10)),
            _timed("inside", datetime(2026, 3, 5, 9), datetime(2026, 3, 5, 10)),
            _timed("after", datetime(2026, 3, 9, 9), datetime(2026, 3, 9, 10)),
            Event(id="hours", day=2, start=9, end=10),
            Event(id="hours-outside", day=9, start=9, end=10),
        ]

        visible = {event.id: event.day for event in filter_week_events(events, WEEK_START)}

        self.assertEqual(visible, {"spanning": 0, "inside": 3, "hours": 2})


class ClampToDayTests(unittest.TestCase):
    def test_events_are_clipped_to_the_day(self) -> None:
        events = [
            _timed("overnight", datetime(2026, 3, 2, 22), datetime(2026, 3, 3, 2)),
            _timed("yesterday", datetime(2026, 3, 2, 9), datetime(2026, 3, 2, 10)),
            Event(id="hours", day=3, start=9, end=10),
            _all_day("holiday", date(2026, 3, 3), date(2026, 3, 4)),
        ]

        clamped = {event.id: event for event in clamp_to_day(events, date(2026, 3, 3))}

        self.assertEqual(set(clamped), {"overnight", "hours"})
        self.assertEqual(clamped["overnight"].start, datetime(2026, 3, 3, 0))
        self.assertEqual(clamped["overnight"].end, datetime(2026, 3, 3, 2))
        self.assertEqual(clamped["hours"].day, 0)


class AllDayPackingTests(unittest.TestCase):
    def test_overlapping_spans_use_separate_rows(self) -> None:
        events = [
            _all_day("conference", date(2026, 3, 2), date(2026, 3, 5)),
            _all_day("offsite", date(2026, 3, 3), date(2026, 3, 4)),
            _all_day("holiday", date(2026, 3, 5), date(2026, 3, 6)),
            _timed("meeting", datetime(2026, 3, 3, 9), datetime(2026, 3, 3, 10)),
        ]

        packed = organize_all_day_segments(events, WEEK_START)
        segments = {segment.event.id: segment for segment in packed}

        self.assertEqual(set(segments), {"conference", "offsite", "holiday"})
        self.assertEqual(segments["conference"].row, 0)
        self.assertEqual(segments["conference"].end_day_index, 2)
        self.assertEqual(segments["conference"].total_days, 3)
        self.assertEqual(segments["offsite"].row, 1)
        self.assertEqual(segments["holiday"].row, 0)

    def test_spans_are_clipped_to_window(self) -> None:
        events = [_all_day("long", date(2026, 2, 27), date(2026, 3, 12))]

        (segment,) = organize_all_day_segments(events, WEEK_START)

        self.assertEqual((segment.start_day_index, segment.end_day_index), (0, 6))
        self.assertEqual(segment.total_days, 13)

    def test_longer_span_wins_ties(self) -> None:
        events = [
            _all_day("short", date(2026, 3, 2), date(2026, 3, 3)),
            _all_day("long", date(2026, 3, 2), date(2026, 3, 4)),
        ]

        packed = organize_all_day_segments(events, WEEK_START)
        rows = {segment.event.id: segment.row for segment in packed}

        self.assertEqual(rows, {"long": 0, "short": 1})

    def test_single_day_stacks_all_day_events(self) -> None:
        events = [
            _all_day("a", date(2026, 3, 3), date(2026, 3, 4)),
            _all_day("b", date(2026, 3, 3), date(2026, 3, 4)),
            _all_day("other", date(2026, 3, 9), date(2026, 3, 10)),
        ]

        segments = organize_all_day_events(events, date(2026, 3, 3))

        self.assertEqual(
            [(segment.event.id, segment.row) for segment in segments],
            [("a", 0), ("b", 1)],
        )


if __name__ == "__main__":
    unittest.main()
