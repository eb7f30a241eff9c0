"""Tests for preview rendering components."""

from __future__ import annotations

import unittest
from typing import Any

from dayflow.components import (
    draw_column_labels,
    draw_event_boxes,
    draw_header,
    draw_hour_grid,
)
from dayflow.config import Theme
from dayflow.engine import calculate_day_event_layouts
from dayflow.events import Event, to_layout_event
from dayflow.preview_geometry import compute_preview_geometry


class RecordingPrimitives:
    """Stand-in backend that records every drawing call."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, tuple[Any, ...], dict[str, Any]]] = []

    def string_width(self, text: str, font_name: str, size: float) -> float:
        return len(text) * size * 0.5

    def __getattr__(self, name: str) -> Any:
        def record(*args: Any, **kwargs: Any) -> None:
            self.calls.append((name, args, kwargs))

        return record

    def named(self, name: str) -> list[tuple[Any, ...]]:
        return [args for call_name, args, _ in self.calls if call_name == name]


class ComponentValidationTests(unittest.TestCase):
    def test_column_labels_must_match_column_count(self) -> None:
        geometry = compute_preview_geometry(2)
        with self.assertRaises(ValueError):
            draw_column_labels(None, geometry, ["MON"])  # type: ignore[arg-type]

    def test_event_boxes_reject_unknown_column(self) -> None:
        geometry = compute_preview_geometry(2)
        with self.assertRaises(ValueError):
            draw_event_boxes(None, geometry, 2, [], {})  # type: ignore[arg-type]


class ComponentDrawingTests(unittest.TestCase):
    def test_header_and_labels_draw_text(self) -> None:
        pdf = RecordingPrimitives()
        geometry = compute_preview_geometry(2)

        draw_header(pdf, "Event layout", "WEEK VIEW", geometry=geometry)  # type: ignore[arg-type]
        draw_column_labels(pdf, geometry, ["MON 02", "TUE 03"])  # type: ignore[arg-type]

        texts = [args[2] for args in pdf.named("draw_string")]
        labels = [args[2] for args in pdf.named("draw_centred_string")]
        self.assertEqual(texts, ["Event layout", "WEEK VIEW"])
        self.assertEqual(labels, ["MON 02", "TUE 03"])

    def test_hour_grid_labels_every_visible_hour(self) -> None:
        pdf = RecordingPrimitives()
        geometry = compute_preview_geometry(3, start_hour=8, end_hour=12)

        draw_hour_grid(pdf, geometry)  # type: ignore[arg-type]

        labels = [args[2] for args in pdf.named("draw_string")]
        self.assertEqual(labels, ["08:00", "09:00", "10:00", "11:00"])
        # Two lines per hour, the bottom edge, and one separator per column edge.
        self.assertEqual(len(pdf.named("line")), (4 * 2) + 1 + 4)

    def test_event_boxes_draw_shallow_levels_first(self) -> None:
        events = [
            Event(id="inner", day=0, start=10, end=11, title="Inner"),
            Event(id="outer", day=0, start=9, end=13),
        ]
        layouts = calculate_day_event_layouts(events)
        pdf = RecordingPrimitives()
        geometry = compute_preview_geometry(1, start_hour=9, end_hour=13)

        draw_event_boxes(
            pdf,  # type: ignore[arg-type]
            geometry,
            0,
            [to_layout_event(event) for event in events],
            layouts,
        )

        boxes = pdf.named("round_rect")
        self.assertEqual(len(boxes), 2)
        self.assertLess(boxes[0][0], boxes[1][0])
        fills = [args[0] for args in pdf.named("set_fill_color")]
        self.assertIn(Theme.EVENT_FILL, fills)
        self.assertIn(Theme.EVENT_NESTED_FILL, fills)
        self.assertEqual([args[2] for args in pdf.named("draw_string")], ["outer", "Inner"])
        self.assertEqual(len(pdf.named("save_state")), len(pdf.named("restore_state")))

    def test_events_without_layout_are_skipped(self) -> None:
        pdf = RecordingPrimitives()
        geometry = compute_preview_geometry(1)
        event = to_layout_event(Event(id="a", day=0, start=9, end=10))

        draw_event_boxes(pdf, geometry, 0, [event], {})  # type: ignore[arg-type]

        self.assertEqual(pdf.calls, [])


if __name__ == "__main__":
    unittest.main()
