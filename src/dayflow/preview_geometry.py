"""Pure geometry helpers for the layout preview page."""

from __future__ import annotations

import math
from collections.abc import Iterable
from dataclasses import dataclass

from .calculate import EventLayout
from .config import (
    PREVIEW_HEADER_HEIGHT,
    PREVIEW_LABEL_WIDTH,
    PREVIEW_MARGIN,
    PREVIEW_PAGE_HEIGHT,
    PREVIEW_PAGE_WIDTH,
)
from .events import LayoutEvent

MIN_EVENT_HEIGHT = 6.0


@dataclass(frozen=True)
class Rect:
    """Rectangle in page units."""

    x: float
    y: float
    width: float
    height: float

    @property
    def top(self) -> float:
        return self.y + self.height


@dataclass(frozen=True)
class RowBounds:
    """Vertical row bounds with center point."""

    top: float
    center: float
    bottom: float


@dataclass(frozen=True)
class PreviewGeometry:
    """Resolved geometry for a page of side-by-side day columns."""

    page_width: float
    page_height: float
    start_x: float
    top_y: float
    bottom_y: float
    label_width: float
    grid_x: float
    grid_width: float
    column_count: int
    col_width: float
    start_hour: int
    end_hour: int
    hour_height: float

    @property
    def hour_count(self) -> int:
        return self.end_hour - self.start_hour


def compute_preview_geometry(
    column_count: int,
    *,
    start_hour: int = 0,
    end_hour: int = 24,
    page_width: float = PREVIEW_PAGE_WIDTH,
    page_height: float = PREVIEW_PAGE_HEIGHT,
) -> PreviewGeometry:
    """Compute grid bounds for `column_count` day columns between two hours."""
    if column_count < 1:
        msg = "column_count must be >= 1."
        raise ValueError(msg)
    if not 0 <= start_hour < end_hour <= 24:
        msg = "hours must satisfy 0 <= start_hour < end_hour <= 24."
        raise ValueError(msg)

    start_x = PREVIEW_MARGIN
    top_y = page_height - PREVIEW_HEADER_HEIGHT
    bottom_y = PREVIEW_MARGIN
    grid_x = start_x + PREVIEW_LABEL_WIDTH
    grid_width = page_width - grid_x - PREVIEW_MARGIN
    if grid_width <= 0 or top_y <= bottom_y:
        msg = "page is too small for the preview grid."
        raise ValueError(msg)

    return PreviewGeometry(
        page_width=page_width,
        page_height=page_height,
        start_x=start_x,
        top_y=top_y,
        bottom_y=bottom_y,
        label_width=PREVIEW_LABEL_WIDTH,
        grid_x=grid_x,
        grid_width=grid_width,
        column_count=column_count,
        col_width=grid_width / column_count,
        start_hour=start_hour,
        end_hour=end_hour,
        hour_height=(top_y - bottom_y) / (end_hour - start_hour),
    )


def preview_hour_range(events: Iterable[LayoutEvent]) -> tuple[int, int]:
    """Return whole-hour bounds covering every timed event; full day if none."""
    timed = [event for event in events if not event.all_day]
    if not timed:
        return 0, 24
    first = max(0, math.floor(min(event.start_hour for event in timed)))
    last = min(24, math.ceil(max(event.end_hour for event in timed)))
    if last <= first:
        last = min(24, first + 1)
        first = last - 1
    return first, last


def hour_to_y(geometry: PreviewGeometry, hour: float) -> float:
    """Map an hour onto the page, clamped to the visible range."""
    clamped = max(geometry.start_hour, min(geometry.end_hour, hour))
    return geometry.top_y - ((clamped - geometry.start_hour) * geometry.hour_height)


def day_column_rect(geometry: PreviewGeometry, col_idx: int) -> Rect:
    """Return one day column rectangle."""
    if not 0 <= col_idx < geometry.column_count:
        msg = f"col_idx must be between 0 and {geometry.column_count - 1}."
        raise ValueError(msg)
    return Rect(
        x=geometry.grid_x + (col_idx * geometry.col_width),
        y=geometry.bottom_y,
        width=geometry.col_width,
        height=geometry.top_y - geometry.bottom_y,
    )


def hour_row_bounds(geometry: PreviewGeometry, hour_idx: int) -> RowBounds:
    """Return top/center/bottom bounds for one hour row."""
    if not 0 <= hour_idx < geometry.hour_count:
        msg = f"hour_idx must be between 0 and {geometry.hour_count - 1}."
        raise ValueError(msg)
    row_top = geometry.top_y - (hour_idx * geometry.hour_height)
    return RowBounds(
        top=row_top,
        center=row_top - (geometry.hour_height / 2),
        bottom=row_top - geometry.hour_height,
    )


def event_rect(
    geometry: PreviewGeometry,
    col_idx: int,
    layout: EventLayout,
    event: LayoutEvent,
) -> Rect:
    """Place an event box from its percentage layout and its hours."""
    column = day_column_rect(geometry, col_idx)
    top = hour_to_y(geometry, event.start_hour)
    bottom = min(hour_to_y(geometry, event.end_hour), top - MIN_EVENT_HEIGHT)
    return Rect(
        x=column.x + (column.width * layout.left / 100),
        y=bottom,
        width=max(0.0, column.width * layout.width / 100),
        height=top - bottom,
    )
