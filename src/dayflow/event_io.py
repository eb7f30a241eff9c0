"""JSON event loading and layout serialization."""

from __future__ import annotations

import json
from collections.abc import Mapping, Sequence
from dataclasses import asdict
from datetime import datetime
from pathlib import Path
from typing import Any

from .calculate import EventLayout
from .events import Event, HourValue
from .profiles import read_json_file
from .week import AllDaySegment

_ALL_DAY_KEYS = ("all_day", "allDay")
_KNOWN_KEYS = {"id", "day", "start", "end", "title", *_ALL_DAY_KEYS}


def _parse_bound(raw_value: Any, *, key: str, index: int) -> HourValue:
    if isinstance(raw_value, bool):
        msg = f"event #{index}: '{key}' must be a number of hours or an ISO datetime."
        raise ValueError(msg)
    if isinstance(raw_value, (int, float)):
        return float(raw_value)
    if isinstance(raw_value, str):
        try:
            return datetime.fromisoformat(raw_value)
        except ValueError as exc:
            msg = f"event #{index}: invalid datetime '{raw_value}' for '{key}'."
            raise ValueError(msg) from exc
    msg = f"event #{index}: '{key}' must be a number of hours or an ISO datetime."
    raise ValueError(msg)


def parse_event(raw_event: Any, *, index: int = 0) -> Event:
    """Build one Event from its JSON object form."""
    if not isinstance(raw_event, Mapping):
        msg = f"event #{index} must be a JSON object."
        raise ValueError(msg)

    unknown = sorted(key for key in raw_event if key not in _KNOWN_KEYS)
    if unknown:
        msg = f"event #{index}: unknown key(s): {', '.join(unknown)}."
        raise ValueError(msg)

    for required in ("id", "start", "end"):
        if required not in raw_event:
            msg = f"event #{index}: missing required key '{required}'."
            raise ValueError(msg)

    event_id = raw_event["id"]
    if isinstance(event_id, bool) or not isinstance(event_id, (str, int)):
        msg = f"event #{index}: 'id' must be a string."
        raise ValueError(msg)

    day = raw_event.get("day", 0)
    if isinstance(day, bool) or not isinstance(day, int):
        msg = f"event #{index}: 'day' must be an integer."
        raise ValueError(msg)

    all_day = False
    for key in _ALL_DAY_KEYS:
        if key in raw_event:
            if not isinstance(raw_event[key], bool):
                msg = f"event #{index}: '{key}' must be a boolean."
                raise ValueError(msg)
            all_day = raw_event[key]

    title = raw_event.get("title", "")
    if not isinstance(title, str):
        msg = f"event #{index}: 'title' must be a string."
        raise ValueError(msg)

    return Event(
        id=str(event_id),
        day=day,
        start=_parse_bound(raw_event["start"], key="start", index=index),
        end=_parse_bound(raw_event["end"], key="end", index=index),
        all_day=all_day,
        title=title,
    )


def parse_events(payload: Any) -> list[Event]:
    """Parse a JSON list of events, or an object holding one under `events`."""
    if isinstance(payload, Mapping):
        if "events" not in payload:
            msg = "event payload object must contain an 'events' list."
            raise ValueError(msg)
        payload = payload["events"]
    if not isinstance(payload, list):
        msg = "event payload must be a JSON list."
        raise ValueError(msg)

    events = [parse_event(raw_event, index=index) for index, raw_event in enumerate(payload)]
    seen: set[str] = set()
    for event in events:
        if event.id in seen:
            msg = f"duplicate event id '{event.id}'."
            raise ValueError(msg)
        seen.add(event.id)
    return events


def load_events(path: str | Path) -> list[Event]:
    """Read and parse an event file."""
    return parse_events(read_json_file(path, label="event"))


def layouts_to_payload(layouts: Mapping[str, EventLayout]) -> dict[str, dict[str, Any]]:
    """Return layouts as plain JSON-ready dicts keyed by event id."""
    return {event_id: asdict(layout) for event_id, layout in layouts.items()}


def dump_layouts(layouts: Mapping[str, EventLayout]) -> str:
    return json.dumps(layouts_to_payload(layouts), indent=2, sort_keys=True)


def all_day_segments_to_payload(segments: Sequence[AllDaySegment]) -> list[dict[str, Any]]:
    return [
        {
            "id": segment.event.id,
            "row": segment.row,
            "start_day_index": segment.start_day_index,
            "end_day_index": segment.end_day_index,
            "total_days": segment.total_days,
        }
        for segment in segments
    ]


def dump_week_layouts(
    layouts_by_day: Mapping[int, Mapping[str, EventLayout]],
    all_day_segments: Sequence[AllDaySegment] = (),
) -> str:
    """Serialize per-column layouts plus packed all-day rows."""
    payload = {
        "days": {str(day): layouts_to_payload(layouts) for day, layouts in layouts_by_day.items()},
        "all_day": all_day_segments_to_payload(all_day_segments),
    }
    return json.dumps(payload, indent=2, sort_keys=True)
