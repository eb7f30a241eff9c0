"""Rendering helpers for the layout preview page."""

from __future__ import annotations

from collections.abc import Mapping, Sequence

from .calculate import EventLayout
from .config import Theme
from .drawing import DrawingPrimitives
from .events import LayoutEvent
from .preview_geometry import (
    PreviewGeometry,
    day_column_rect,
    event_rect,
    hour_row_bounds,
)

EVENT_CORNER_RADIUS = 3
EVENT_TEXT_PADDING = 3
MIN_FILL_ALPHA = 0.45


def draw_page_background(
    pdf: DrawingPrimitives,
    geometry: PreviewGeometry,
    *,
    theme: type = Theme,
) -> None:
    pdf.set_fill_color(theme.BACKGROUND)
    pdf.rect(0, 0, geometry.page_width, geometry.page_height, fill=1, stroke=0)


def draw_header(
    pdf: DrawingPrimitives,
    title: str,
    subtitle: str,
    *,
    geometry: PreviewGeometry,
    title_size: int = 36,
    subtitle_size: int = 18,
    theme: type = Theme,
) -> None:
    """Draw the title block above the grid."""
    pdf.set_fill_color(theme.TEXT_PRIMARY)
    pdf.set_font(theme.FONT_HEADER, title_size)
    pdf.draw_string(geometry.start_x, geometry.page_height - 60, title)

    pdf.set_fill_color(theme.ACCENT)
    pdf.set_font(theme.FONT_HEADER, subtitle_size)
    pdf.draw_string(geometry.start_x, geometry.page_height - 88, subtitle)


def draw_column_labels(
    pdf: DrawingPrimitives,
    geometry: PreviewGeometry,
    labels: Sequence[str],
    *,
    font_size: int = 14,
    theme: type = Theme,
) -> None:
    """Draw one centred label above each day column."""
    if len(labels) != geometry.column_count:
        msg = f"labels must contain exactly {geometry.column_count} entries."
        raise ValueError(msg)

    pdf.set_font(theme.FONT_BOLD, font_size)
    pdf.set_fill_color(theme.TEXT_SECONDARY)
    for col_idx, label in enumerate(labels):
        column = day_column_rect(geometry, col_idx)
        pdf.draw_centred_string(column.x + (column.width / 2), geometry.top_y + 10, label)


def draw_hour_grid(
    pdf: DrawingPrimitives,
    geometry: PreviewGeometry,
    *,
    font_size: int = 10,
    theme: type = Theme,
) -> None:
    """Draw hour rows, half-hour guides, hour labels and column separators."""
    grid_right = geometry.grid_x + geometry.grid_width

    for hour_idx in range(geometry.hour_count):
        row = hour_row_bounds(geometry, hour_idx)

        pdf.set_stroke_color(theme.HALF_HOUR_LINES)
        pdf.set_line_width(0.5)
        pdf.line(geometry.grid_x, row.center, grid_right, row.center)

        pdf.set_stroke_color(theme.GRID_LINES)
        pdf.set_line_width(1)
        pdf.line(geometry.grid_x, row.top, grid_right, row.top)

        pdf.set_font(theme.FONT_REGULAR, font_size)
        pdf.set_fill_color(theme.TEXT_SECONDARY)
        label = f"{geometry.start_hour + hour_idx:02d}:00"
        pdf.draw_string(geometry.start_x, row.top - font_size, label)

    pdf.set_stroke_color(theme.GRID_LINES)
    pdf.set_line_width(1)
    pdf.line(geometry.grid_x, geometry.bottom_y, grid_right, geometry.bottom_y)
    for col_idx in range(geometry.column_count + 1):
        x_pos = geometry.grid_x + (col_idx * geometry.col_width)
        pdf.line(x_pos, geometry.bottom_y, x_pos, geometry.top_y)


def _fit_text(
    pdf: DrawingPrimitives,
    text: str,
    *,
    font_name: str,
    font_size: float,
    max_width: float,
) -> str:
    if pdf.string_width(text, font_name, font_size) <= max_width:
        return text
    trimmed = text
    while trimmed and pdf.string_width(f"{trimmed}...", font_name, font_size) > max_width:
        trimmed = trimmed[:-1]
    return f"{trimmed}..." if trimmed else ""


def draw_event_boxes(
    pdf: DrawingPrimitives,
    geometry: PreviewGeometry,
    col_idx: int,
    events: Sequence[LayoutEvent],
    layouts: Mapping[str, EventLayout],
    *,
    font_size: int = 9,
    theme: type = Theme,
) -> None:
    """Draw the laid-out events of one column, shallow levels first.

    Nested events get the darker fill; fill opacity follows importance.
    Events without a layout entry (all-day events) are skipped.
    """
    if not 0 <= col_idx < geometry.column_count:
        msg = f"col_idx must be between 0 and {geometry.column_count - 1}."
        raise ValueError(msg)

    placed = [(layouts[event.id], event) for event in events if event.id in layouts]
    placed.sort(key=lambda item: (item[0].z_index, item[1].start_hour, item[0].left))

    for layout, event in placed:
        box = event_rect(geometry, col_idx, layout, event)
        if box.width <= 0:
            continue

        pdf.save_state()
        pdf.set_fill_alpha(MIN_FILL_ALPHA + ((1 - MIN_FILL_ALPHA) * layout.importance))
        pdf.set_fill_color(theme.EVENT_NESTED_FILL if layout.level > 0 else theme.EVENT_FILL)
        pdf.set_stroke_color(theme.EVENT_BORDER)
        pdf.set_line_width(0.8)
        pdf.round_rect(
            box.x,
            box.y,
            box.width,
            box.height,
            EVENT_CORNER_RADIUS,
            fill=1,
            stroke=1,
        )
        pdf.restore_state()

        if box.height < font_size + EVENT_TEXT_PADDING:
            continue
        label = _fit_text(
            pdf,
            event.event.title or event.id,
            font_name=theme.FONT_REGULAR,
            font_size=font_size,
            max_width=box.width - (2 * EVENT_TEXT_PADDING),
        )
        if label:
            pdf.set_font(theme.FONT_REGULAR, font_size)
            pdf.set_fill_color(theme.TEXT_PRIMARY)
            pdf.draw_string(
                box.x + EVENT_TEXT_PADDING,
                box.top - EVENT_TEXT_PADDING - font_size,
                label,
            )
