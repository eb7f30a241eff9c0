"""Pairwise time relations between layout events."""

from __future__ import annotations

from .events import LayoutEvent
from .profiles import DEFAULT_LAYOUT_CONFIG, LayoutConfig


def events_overlap(a: LayoutEvent, b: LayoutEvent) -> bool:
    """Return whether two timed events share time on the same day.

    Intervals are half-open, so touching endpoints do not overlap.
    """
    if a.day != b.day or a.all_day or b.all_day:
        return False
    return a.start_hour < b.end_hour and b.start_hour < a.end_hour


def can_event_contain(parent: LayoutEvent, child: LayoutEvent) -> bool:
    """Return whether `child` may be drawn nested inside `parent`."""
    if parent.id == child.id or parent.day != child.day:
        return False
    if parent.all_day or child.all_day:
        return False
    if parent.start_hour <= child.start_hour and parent.end_hour >= child.end_hour:
        return True
    return events_overlap(parent, child) and parent.start_hour <= child.start_hour


def is_extended_event(event: LayoutEvent, config: LayoutConfig = DEFAULT_LAYOUT_CONFIG) -> bool:
    return event.duration >= config.extended_event_hours


def _starts_late_inside(
    extended: LayoutEvent,
    other: LayoutEvent,
    config: LayoutConfig,
) -> bool:
    if not is_extended_event(extended, config):
        return False
    progress_point = extended.start_hour + (extended.duration * config.extended_event_progress)
    return other.start_hour >= progress_point and other.start_hour < extended.end_hour


def should_be_parallel(
    a: LayoutEvent,
    b: LayoutEvent,
    config: LayoutConfig = DEFAULT_LAYOUT_CONFIG,
) -> bool:
    """Return whether two overlapping events belong side by side.

    True for near-simultaneous starts, for starts closer than the nesting
    threshold, and for an event starting late inside a long event.
    """
    if not events_overlap(a, b):
        return False

    start_gap = abs(a.start_hour - b.start_hour)
    if start_gap <= config.parallel_threshold:
        return True
    if config.parallel_threshold < start_gap < config.nested_threshold:
        return True
    return _starts_late_inside(a, b, config) or _starts_late_inside(b, a, config)
