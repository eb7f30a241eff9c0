"""Event model and normalization into layout events."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

HourValue = float | int | datetime


@dataclass(frozen=True)
class Event:
    """A calendar event as handed to the layout engine.

    `start` and `end` are fractional hours of the day (9.5 is 09:30) or
    datetimes; datetimes are reduced to hours when the event is normalized.
    """

    id: str
    day: int
    start: HourValue
    end: HourValue
    all_day: bool = False
    title: str = ""


@dataclass
class LayoutEvent:
    """Per-call working copy of an event with cached hours and tree links."""

    event: Event
    start_hour: float
    end_hour: float
    parent_id: str | None = None
    children: list[str] = field(default_factory=list)

    @property
    def id(self) -> str:
        return self.event.id

    @property
    def day(self) -> int:
        return self.event.day

    @property
    def all_day(self) -> bool:
        return self.event.all_day

    @property
    def duration(self) -> float:
        return self.end_hour - self.start_hour


def hour_of_day(value: HourValue) -> float:
    """Return `value` as a fractional hour of its day."""
    if isinstance(value, datetime):
        return value.hour + (value.minute / 60) + (value.second / 3600)
    return float(value)


def event_end_hour(event: Event) -> float:
    """Return the end hour, reading a next-day datetime end as 24."""
    if (
        isinstance(event.start, datetime)
        and isinstance(event.end, datetime)
        and event.end.date() > event.start.date()
    ):
        return 24.0
    return hour_of_day(event.end)


def to_layout_event(event: Event) -> LayoutEvent:
    """Normalize one event; all-day events carry zero hours."""
    if event.all_day:
        return LayoutEvent(event=event, start_hour=0.0, end_hour=0.0)
    return LayoutEvent(
        event=event,
        start_hour=hour_of_day(event.start),
        end_hour=event_end_hour(event),
    )
