"""Tests for pairwise event relations."""

from __future__ import annotations

import unittest

from dayflow.events import Event, LayoutEvent, to_layout_event
from dayflow.profiles import LayoutConfig
from dayflow.relations import (
    can_event_contain,
    events_overlap,
    is_extended_event,
    should_be_parallel,
)


def _event(
    event_id: str,
    start: float,
    end: float,
    *,
    day: int = 0,
    all_day: bool = False,
) -> LayoutEvent:
    return to_layout_event(Event(id=event_id, day=day, start=start, end=end, all_day=all_day))


class OverlapTests(unittest.TestCase):
    def test_touching_endpoints_do_not_overlap(self) -> None:
        self.assertFalse(events_overlap(_event("a", 9, 10), _event("b", 10, 11)))

    def test_shared_time_overlaps(self) -> None:
        self.assertTrue(events_overlap(_event("a", 9, 10), _event("b", 9.5, 11)))

    def test_different_days_never_overlap(self) -> None:
        self.assertFalse(events_overlap(_event("a", 9, 10), _event("b", 9, 10, day=1)))

    def test_all_day_events_never_overlap(self) -> None:
        self.assertFalse(events_overlap(_event("a", 9, 10), _event("b", 9, 10, all_day=True)))


class ContainmentTests(unittest.TestCase):
    def test_full_containment(self) -> None:
        outer = _event("outer", 9, 12)
        inner = _event("inner", 10, 11)
        self.assertTrue(can_event_contain(outer, inner))
        self.assertFalse(can_event_contain(inner, outer))

    def test_overlap_with_earlier_start_counts_as_containment(self) -> None:
        self.assertTrue(can_event_contain(_event("a", 9, 11), _event("b", 10, 12)))

    def test_event_cannot_contain_itself(self) -> None:
        event = _event("a", 9, 12)
        self.assertFalse(can_event_contain(event, event))

    def test_different_days_cannot_contain(self) -> None:
        self.assertFalse(can_event_contain(_event("a", 9, 12), _event("b", 10, 11, day=2)))


class ParallelTests(unittest.TestCase):
    def test_close_starts_are_parallel(self) -> None:
        self.assertTrue(should_be_parallel(_event("a", 9, 10), _event("b", 9.2, 10)))

    def test_starts_below_nesting_threshold_are_parallel(self) -> None:
        self.assertTrue(should_be_parallel(_event("a", 9, 11), _event("b", 9.4, 10.5)))

    def test_early_start_inside_long_event_is_not_parallel(self) -> None:
        self.assertFalse(should_be_parallel(_event("a", 9, 11), _event("b", 9.5, 10.5)))

    def test_late_start_inside_long_event_is_parallel(self) -> None:
        long_event = _event("a", 9, 11)
        late = _event("b", 10, 10.5)
        self.assertTrue(is_extended_event(long_event))
        self.assertTrue(should_be_parallel(long_event, late))
        self.assertTrue(should_be_parallel(late, long_event))

    def test_non_overlapping_events_are_not_parallel(self) -> None:
        self.assertFalse(should_be_parallel(_event("a", 9, 10), _event("b", 10, 11)))

    def test_thresholds_come_from_config(self) -> None:
        config = LayoutConfig(parallel_threshold=0.05, nested_threshold=0.1)
        self.assertFalse(should_be_parallel(_event("a", 9, 10), _event("b", 9.2, 10), config))


if __name__ == "__main__":
    unittest.main()
