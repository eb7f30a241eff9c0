"""CLI and orchestration for event layout runs and PDF previews."""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, fields
from datetime import date, timedelta
from pathlib import Path

from .calculate import EventLayout
from .components import (
    draw_column_labels,
    draw_event_boxes,
    draw_header,
    draw_hour_grid,
    draw_page_background,
)
from .config import DEFAULT_PREVIEW_FILENAME, DEFAULT_VIEW_TYPE, WEEKDAY_LABELS, Theme
from .drawing import create_reportlab_primitives
from .engine import calculate_day_event_layouts
from .event_io import dump_layouts, dump_week_layouts, load_events
from .events import Event, to_layout_event
from .preview_geometry import compute_preview_geometry, preview_hour_range
from .profiles import (
    VIEW_PROFILES,
    available_view_profiles,
    resolve_layout_config,
)
from .theme_profiles import available_theme_profiles, resolve_theme
from .week import calculate_week_layouts, organize_all_day_segments, split_day_segments

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PreviewColumn:
    """One day column of the preview page."""

    label: str
    events: tuple[Event, ...]
    layouts: Mapping[str, EventLayout]


def generate_preview(
    columns: Sequence[PreviewColumn],
    output_path: str | Path | None = None,
    *,
    title: str = "Event layout",
    subtitle: str = "",
    theme: type = Theme,
) -> Path:
    """Render laid-out day columns to a one-page PDF and return its path."""
    if not columns:
        msg = "preview needs at least one day column."
        raise ValueError(msg)

    column_events = [
        [to_layout_event(event) for event in column.events if not event.all_day]
        for column in columns
    ]
    start_hour, end_hour = preview_hour_range(
        event for events in column_events for event in events
    )
    geometry = compute_preview_geometry(len(columns), start_hour=start_hour, end_hour=end_hour)

    destination = Path(output_path or DEFAULT_PREVIEW_FILENAME)
    destination.parent.mkdir(parents=True, exist_ok=True)

    pdf = create_reportlab_primitives(
        str(destination),
        pagesize=(geometry.page_width, geometry.page_height),
    )
    pdf.set_title(title)

    draw_page_background(pdf, geometry, theme=theme)
    draw_header(pdf, title, subtitle, geometry=geometry, theme=theme)
    draw_column_labels(pdf, geometry, [column.label for column in columns], theme=theme)
    draw_hour_grid(pdf, geometry, theme=theme)
    for col_idx, (column, events) in enumerate(zip(columns, column_events, strict=True)):
        draw_event_boxes(pdf, geometry, col_idx, events, column.layouts, theme=theme)

    pdf.show_page()
    pdf.save()
    logger.debug("wrote %d-column preview to %s", len(columns), destination)
    return destination


def day_columns(
    events: Sequence[Event],
    layouts: Mapping[str, EventLayout],
) -> list[PreviewColumn]:
    """Group timed events into one preview column per day bucket."""
    by_day: dict[int, list[Event]] = {}
    for event in events:
        if not event.all_day:
            by_day.setdefault(event.day, []).append(event)
    return [
        PreviewColumn(label=f"DAY {day}", events=tuple(by_day[day]), layouts=layouts)
        for day in sorted(by_day)
    ]


def week_columns(
    events: Sequence[Event],
    layouts_by_day: Mapping[int, Mapping[str, EventLayout]],
    week_start: date,
) -> list[PreviewColumn]:
    """Build one preview column per visible day, datetime events split per day."""
    by_day: dict[int, list[Event]] = {day: [] for day in layouts_by_day}
    for event in events:
        if event.all_day:
            continue
        segments = split_day_segments(event, week_start, len(layouts_by_day))
        if segments:
            for segment in segments:
                by_day[segment.day].append(segment)
        elif event.day in by_day:
            by_day[event.day].append(event)

    columns: list[PreviewColumn] = []
    for day, day_layouts in layouts_by_day.items():
        column_date = week_start + timedelta(days=day)
        label = f"{WEEKDAY_LABELS[column_date.weekday()]} {column_date.day:02d}"
        columns.append(PreviewColumn(label=label, events=tuple(by_day[day]), layouts=day_layouts))
    return columns


def _write_or_print(text: str, output_path: Path | None) -> None:
    if output_path is None:
        print(text)
        return
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(f"{text}\n", encoding="utf-8")
    print(f"Wrote layouts to: {output_path}")


def _parse_week_start(raw_value: str) -> date:
    try:
        return date.fromisoformat(raw_value)
    except ValueError as exc:
        msg = f"invalid week start '{raw_value}', expected YYYY-MM-DD."
        raise ValueError(msg) from exc


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("events", type=Path, help="JSON file with the events to lay out.")
    parser.add_argument(
        "--container-width",
        type=float,
        default=None,
        help="Day column width in pixels, used for indent offsets.",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="JSON file with layout config overrides.",
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Write layouts as JSON to this path instead of stdout.",
    )
    parser.add_argument(
        "--pdf",
        type=Path,
        default=None,
        help="Also render a PDF preview to this path.",
    )
    parser.add_argument(
        "--theme-profile",
        choices=available_theme_profiles(),
        default="default",
        help="Built-in theme profile name for the preview.",
    )
    parser.add_argument(
        "--theme-file",
        type=Path,
        default=None,
        help="JSON file with preview theme overrides.",
    )


def _build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dayflow",
        description="Lay out overlapping calendar events into day columns.",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log layout decisions at debug level.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    layout_parser = subparsers.add_parser("layout", help="Lay out events per day bucket.")
    _add_common_arguments(layout_parser)
    layout_parser.add_argument(
        "--view",
        choices=available_view_profiles(),
        default=DEFAULT_VIEW_TYPE,
        help="View profile controlling indents and margins.",
    )

    week_parser = subparsers.add_parser(
        "week",
        help="Lay out a week window, splitting multi-day events per day.",
    )
    _add_common_arguments(week_parser)
    week_parser.add_argument(
        "--week-start",
        required=True,
        help="First visible date, YYYY-MM-DD.",
    )
    week_parser.add_argument("--days", type=int, default=7, help="Number of visible days.")

    profiles_parser = subparsers.add_parser(
        "profiles",
        help="List view profiles and the effective layout config.",
    )
    profiles_parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="JSON file with layout config overrides.",
    )
    return parser


def _run_layout(args: argparse.Namespace) -> None:
    config = resolve_layout_config(config_file=args.config)
    events = load_events(args.events)
    layouts = calculate_day_event_layouts(
        events,
        view_type=args.view,
        container_width=args.container_width,
        config=config,
    )
    _write_or_print(dump_layouts(layouts), args.output)

    if args.pdf is not None:
        theme = resolve_theme(profile=args.theme_profile, theme_file=args.theme_file)
        columns = day_columns(events, layouts)
        if not columns:
            msg = "no timed events to preview."
            raise ValueError(msg)
        destination = generate_preview(
            columns,
            args.pdf,
            title="Event layout",
            subtitle=f"{args.view.upper()} VIEW | {len(layouts)} EVENTS",
            theme=theme,
        )
        print(f"Generated preview at: {destination}")


def _run_week(args: argparse.Namespace) -> None:
    week_start = _parse_week_start(args.week_start)
    config = resolve_layout_config(config_file=args.config)
    events = load_events(args.events)
    layouts_by_day = calculate_week_layouts(
        events,
        week_start,
        args.days,
        container_width=args.container_width,
        config=config,
    )
    all_day_segments = organize_all_day_segments(events, week_start, args.days)
    _write_or_print(dump_week_layouts(layouts_by_day, all_day_segments), args.output)

    if args.pdf is not None:
        theme = resolve_theme(profile=args.theme_profile, theme_file=args.theme_file)
        destination = generate_preview(
            week_columns(events, layouts_by_day, week_start),
            args.pdf,
            title=f"Week of {week_start.isoformat()}",
            subtitle=f"{args.days} DAYS",
            theme=theme,
        )
        print(f"Generated preview at: {destination}")


def _run_profiles(args: argparse.Namespace) -> None:
    config = resolve_layout_config(config_file=args.config)
    print("views:")
    for name in available_view_profiles():
        view = VIEW_PROFILES[name]
        print(
            f"  {name}\tindent_step={view.indent_step_percent} "
            f"edge_margin={view.edge_margin(config)}"
        )
    print("config:")
    for item in fields(config):
        print(f"  {item.name}: {getattr(config, item.name)}")


def main(argv: list[str] | None = None) -> int:
    argv_list = list(sys.argv[1:] if argv is None else argv)
    parser = _build_arg_parser()
    args = parser.parse_args(argv_list)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    runners = {
        "layout": _run_layout,
        "week": _run_week,
        "profiles": _run_profiles,
    }
    try:
        runners[args.command](args)
    except ValueError as exc:
        parser.exit(status=2, message=f"error: {exc}\n")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
