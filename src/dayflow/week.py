"""Week and day view helpers feeding the layout engine."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, replace
from datetime import date, datetime, time, timedelta

from .calculate import EventLayout
from .config import DAY_END_HOUR
from .engine import calculate_day_event_layouts
from .events import Event, hour_of_day
from .profiles import DEFAULT_LAYOUT_CONFIG, LayoutConfig

_ONE_DAY = timedelta(days=1)


@dataclass(frozen=True)
class AllDaySegment:
    """An all-day event clipped to the visible days, with its packed row."""

    event: Event
    start_day_index: int
    end_day_index: int
    total_days: int
    row: int


def _validate_days_to_show(days_to_show: int) -> None:
    if isinstance(days_to_show, bool) or not isinstance(days_to_show, int):
        msg = "days_to_show must be an integer."
        raise TypeError(msg)
    if days_to_show < 1:
        msg = "days_to_show must be >= 1."
        raise ValueError(msg)


def _has_datetime_bounds(event: Event) -> bool:
    return isinstance(event.start, datetime) and isinstance(event.end, datetime)


def _day_start(day: date, reference: datetime) -> datetime:
    return datetime.combine(day, time.min, tzinfo=reference.tzinfo)


def split_day_segments(
    event: Event,
    week_start: date,
    days_to_show: int = 7,
) -> list[Event]:
    """Cut a timed event with datetime bounds into one hour-based event per day.

    Segments carry the visible column index as `day`; a segment reaching
    midnight ends at 23.99. Events with hour bounds yield no segments.
    """
    _validate_days_to_show(days_to_show)
    if event.all_day or not _has_datetime_bounds(event):
        return []

    start_dt: datetime = event.start  # type: ignore[assignment]
    end_dt: datetime = event.end  # type: ignore[assignment]
    segments: list[Event] = []
    for day_idx in range(days_to_show):
        day_start = _day_start(week_start + timedelta(days=day_idx), start_dt)
        next_day = day_start + _ONE_DAY
        if start_dt >= next_day:
            continue
        if end_dt <= day_start and not (start_dt == end_dt and start_dt >= day_start):
            continue

        segment_start = max(start_dt, day_start)
        segment_end = min(end_dt, next_day)
        start_hour = hour_of_day(segment_start)
        end_hour = 24.0 if segment_end >= next_day else hour_of_day(segment_end)
        segments.append(
            replace(event, day=day_idx, start=start_hour, end=min(end_hour, DAY_END_HOUR))
        )
    return segments


def calculate_week_layouts(
    events: Sequence[Event],
    week_start: date,
    days_to_show: int = 7,
    *,
    view_type: str = "week",
    container_width: float | None = None,
    config: LayoutConfig = DEFAULT_LAYOUT_CONFIG,
) -> dict[int, dict[str, EventLayout]]:
    """Return one layout map per visible day column."""
    _validate_days_to_show(days_to_show)
    events_by_day: dict[int, list[Event]] = {day: [] for day in range(days_to_show)}

    for event in events:
        if event.all_day:
            continue
        if _has_datetime_bounds(event):
            for segment in split_day_segments(event, week_start, days_to_show):
                events_by_day[segment.day].append(segment)
        elif event.day in events_by_day:
            events_by_day[event.day].append(event)

    return {
        day: calculate_day_event_layouts(
            day_events,
            view_type=view_type,
            container_width=container_width,
            config=config,
        )
        for day, day_events in events_by_day.items()
    }


def filter_week_events(
    events: Sequence[Event],
    week_start: date,
    days_to_show: int = 7,
) -> list[Event]:
    """Keep events touching the visible days, re-bucketed by start date."""
    _validate_days_to_show(days_to_show)
    last_day = week_start + timedelta(days=days_to_show - 1)

    visible: list[Event] = []
    for event in events:
        if not _has_datetime_bounds(event):
            if 0 <= event.day < days_to_show:
                visible.append(event)
            continue

        start_date = event.start.date()  # type: ignore[union-attr]
        end_date = event.end.date()  # type: ignore[union-attr]
        if end_date < week_start or start_date > last_day:
            continue
        day = max(0, min(days_to_show - 1, (start_date - week_start).days))
        visible.append(replace(event, day=day))
    return visible


def clamp_to_day(events: Sequence[Event], current_date: date) -> list[Event]:
    """Clip timed events to one calendar day and put them all in bucket 0."""
    clamped: list[Event] = []
    for event in events:
        if event.all_day:
            continue

        if not _has_datetime_bounds(event):
            start_hour = max(0.0, hour_of_day(event.start))
            end_hour = min(24.0, hour_of_day(event.end))
            clamped.append(replace(event, day=0, start=start_hour, end=end_hour))
            continue

        start_dt: datetime = event.start  # type: ignore[assignment]
        end_dt: datetime = event.end  # type: ignore[assignment]
        day_start = _day_start(current_date, start_dt)
        next_day = day_start + _ONE_DAY
        if not (start_dt < next_day and end_dt > day_start):
            continue
        clamped.append(
            replace(event, day=0, start=max(start_dt, day_start), end=min(end_dt, next_day))
        )
    return clamped


def _all_day_span(event: Event, week_start: date) -> tuple[int, int, float]:
    """Return unclipped start/end day indexes and a start-hour tie breaker."""
    if not _has_datetime_bounds(event):
        return event.day, event.day, 0.0

    start_dt: datetime = event.start  # type: ignore[assignment]
    end_dt: datetime = event.end  # type: ignore[assignment]
    end_date = end_dt.date()
    # An exclusive midnight end belongs to the previous day.
    if end_date > start_dt.date() and end_dt.time() == time.min:
        end_date -= _ONE_DAY
    return (
        (start_dt.date() - week_start).days,
        (end_date - week_start).days,
        hour_of_day(start_dt),
    )


def _pack_rows(spans: list[tuple[Event, int, int, int]]) -> list[AllDaySegment]:
    placed: list[AllDaySegment] = []
    for event, start_idx, end_idx, total_days in spans:
        row = 0
        while any(
            existing.row == row
            and not (end_idx < existing.start_day_index or start_idx > existing.end_day_index)
            for existing in placed
        ):
            row += 1
        placed.append(
            AllDaySegment(
                event=event,
                start_day_index=start_idx,
                end_day_index=end_idx,
                total_days=total_days,
                row=row,
            )
        )
    return placed


def organize_all_day_segments(
    events: Sequence[Event],
    week_start: date,
    days_to_show: int = 7,
) -> list[AllDaySegment]:
    """Pack visible all-day events into rows, first fit.

    Earlier starts go first and longer spans win ties; two segments sharing
    a day index never share a row.
    """
    _validate_days_to_show(days_to_show)

    ordered: list[tuple[int, float, int, Event, int, int]] = []
    for event in events:
        if not event.all_day:
            continue
        start_idx, end_idx, start_hour = _all_day_span(event, week_start)
        if end_idx < 0 or start_idx > days_to_show - 1:
            continue
        total_days = end_idx - start_idx + 1
        ordered.append(
            (
                start_idx,
                start_hour,
                -total_days,
                event,
                max(0, start_idx),
                min(days_to_show - 1, end_idx),
            )
        )

    ordered.sort(key=lambda item: (item[0], item[1], item[2]))
    return _pack_rows(
        [(event, start, end, -neg_total) for _, _, neg_total, event, start, end in ordered]
    )


def organize_all_day_events(events: Sequence[Event], current_date: date) -> list[AllDaySegment]:
    """Stack the all-day events of one day, one row each."""
    return organize_all_day_segments(events, current_date, days_to_show=1)
