"""Day-level entry points of the event layout engine."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import replace

from .calculate import (
    EventLayout,
    LayoutForest,
    analyze_parallel_groups,
    build_nested_structure,
    calculate_layout_from_structure,
    group_overlapping_events,
    rebalance_load_by_groups,
    sort_for_parallel_analysis,
)
from .calculate.geometry import GeometryContext, full_width_layout
from .config import DEFAULT_VIEW_TYPE
from .events import Event, to_layout_event
from .profiles import DEFAULT_LAYOUT_CONFIG, LayoutConfig, resolve_view_profile

logger = logging.getLogger(__name__)

NEW_EVENT_ID = "__new__"


def calculate_day_event_layouts(
    events: Sequence[Event],
    *,
    view_type: str = DEFAULT_VIEW_TYPE,
    container_width: float | None = None,
    config: LayoutConfig = DEFAULT_LAYOUT_CONFIG,
) -> dict[str, EventLayout]:
    """Lay out the timed events of one rendering target.

    All-day events are skipped. Every timed event gets exactly one entry,
    keyed by event id. Each call works on fresh copies of the events.
    """
    view = resolve_view_profile(view_type)
    width_px = config.default_container_width if container_width is None else container_width

    layouts: dict[str, EventLayout] = {}
    timed_events = [to_layout_event(event) for event in events if not event.all_day]
    if not timed_events:
        return layouts

    context = GeometryContext(view=view, config=config, container_width=width_px)
    overlap_groups = group_overlapping_events(timed_events)

    for group in overlap_groups:
        if len(group) == 1:
            layouts[group[0].id] = full_width_layout(group[0], context)
            continue

        parallel_groups = analyze_parallel_groups(sort_for_parallel_analysis(group), config)
        forest = LayoutForest.from_groups(parallel_groups)
        build_nested_structure(parallel_groups, forest, config)
        rebalance_load_by_groups(parallel_groups, forest, config)
        calculate_layout_from_structure(
            forest,
            forest.roots(),
            view_type=view.name,
            container_width=width_px,
            config=config,
            layouts=layouts,
        )

    logger.debug(
        "laid out %d timed event(s) in %d overlap group(s) for %s view",
        len(timed_events),
        len(overlap_groups),
        view.name,
    )
    return layouts


def calculate_new_event_layout(
    target_day: int,
    start_hour: float,
    end_hour: float,
    events: Sequence[Event],
    *,
    view_type: str = DEFAULT_VIEW_TYPE,
    container_width: float | None = None,
    config: LayoutConfig = DEFAULT_LAYOUT_CONFIG,
) -> EventLayout | None:
    """Return the layout a not-yet-created event would get on `target_day`."""
    draft = Event(id=NEW_EVENT_ID, day=target_day, start=start_hour, end=end_hour)
    day_events = [event for event in events if event.day == target_day and not event.all_day]
    layouts = calculate_day_event_layouts(
        [*day_events, draft],
        view_type=view_type,
        container_width=container_width,
        config=config,
    )
    return layouts.get(NEW_EVENT_ID)


def calculate_drag_layout(
    dragged_event: Event,
    target_day: int,
    start_hour: float,
    end_hour: float,
    events: Sequence[Event],
    *,
    view_type: str = DEFAULT_VIEW_TYPE,
    container_width: float | None = None,
    config: LayoutConfig = DEFAULT_LAYOUT_CONFIG,
) -> EventLayout | None:
    """Return the layout `dragged_event` would get if dropped at the target slot."""
    moved = replace(dragged_event, day=target_day, start=start_hour, end=end_hour)
    candidates = [moved if event.id == dragged_event.id else event for event in events]
    if all(event.id != dragged_event.id for event in events):
        candidates.append(moved)

    day_events = [
        event for event in candidates if event.day == target_day and not event.all_day
    ]
    if not day_events:
        return None

    layouts = calculate_day_event_layouts(
        day_events,
        view_type=view_type,
        container_width=container_width,
        config=config,
    )
    return layouts.get(dragged_event.id)
