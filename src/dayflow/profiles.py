"""Layout configuration and view profiles for event placement."""

from __future__ import annotations

import json
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any

from .config import (
    DEFAULT_CONTAINER_WIDTH,
    DEFAULT_VIEW_TYPE,
    EDGE_MARGIN_PERCENT,
    EXTENDED_EVENT_HOURS,
    EXTENDED_EVENT_PROGRESS,
    INDENT_STEP_PERCENT,
    MARGIN_BETWEEN,
    MIN_WIDTH,
    NESTED_THRESHOLD,
    PARALLEL_THRESHOLD,
    REBALANCE_MAX_ITERATIONS,
    REBALANCE_MIN_SPREAD,
)


@dataclass(frozen=True)
class LayoutConfig:
    """Thresholds and horizontal budget shared by every layout stage.

    Hour values are fractional hours; width values are percentages of one
    day column.
    """

    parallel_threshold: float = PARALLEL_THRESHOLD
    nested_threshold: float = NESTED_THRESHOLD
    min_width: float = MIN_WIDTH
    margin_between: float = MARGIN_BETWEEN
    edge_margin_percent: float = EDGE_MARGIN_PERCENT
    extended_event_hours: float = EXTENDED_EVENT_HOURS
    extended_event_progress: float = EXTENDED_EVENT_PROGRESS
    rebalance_max_iterations: int = REBALANCE_MAX_ITERATIONS
    rebalance_min_spread: int = REBALANCE_MIN_SPREAD
    default_container_width: float = DEFAULT_CONTAINER_WIDTH


@dataclass(frozen=True)
class ViewProfile:
    """Indent and gutter tuning for one kind of time grid."""

    name: str
    indent_step_percent: float
    apply_edge_margin: bool
    # Left nudges for nesting depth 1, 2 and 3+.
    depth_adjustments: tuple[float, float, float]
    first_level_margin_scale: float
    nested_margin_scale: float

    def edge_margin(self, config: LayoutConfig) -> float:
        return config.edge_margin_percent if self.apply_edge_margin else 0.0

    def left_adjustment(self, depth: int) -> float:
        """Return the left nudge applied to a node at `depth`."""
        if depth <= 0:
            return 0.0
        return self.depth_adjustments[min(depth, 3) - 1]

    def margin_scale(self, depth: int) -> float:
        """Return the gutter scale for parallel siblings at `depth`."""
        return self.first_level_margin_scale if depth == 1 else self.nested_margin_scale


VIEW_PROFILES = {
    "week": ViewProfile(
        name="week",
        indent_step_percent=INDENT_STEP_PERCENT,
        apply_edge_margin=True,
        depth_adjustments=(1.5, -1.0, -3.5),
        first_level_margin_scale=0.3,
        nested_margin_scale=0.2,
    ),
    # Day columns are wide, so indents stay small.
    "day": ViewProfile(
        name="day",
        indent_step_percent=0.5,
        apply_edge_margin=False,
        depth_adjustments=(0.5, -0.01, 0.55),
        first_level_margin_scale=0.15,
        nested_margin_scale=0.1,
    ),
}

DEFAULT_LAYOUT_CONFIG = LayoutConfig()


def available_view_profiles() -> tuple[str, ...]:
    """Return built-in view profile names."""
    return tuple(sorted(VIEW_PROFILES))


def resolve_view_profile(view_type: str = DEFAULT_VIEW_TYPE) -> ViewProfile:
    """Resolve a view type name into its profile."""
    if view_type not in VIEW_PROFILES:
        msg = (
            f"unknown view type '{view_type}'. "
            f"Valid view types: {', '.join(available_view_profiles())}."
        )
        raise ValueError(msg)
    return VIEW_PROFILES[view_type]


def evaluate_layout_config(config: LayoutConfig) -> tuple[str, ...]:
    """Return configuration issues; empty result means the config is usable."""
    issues: list[str] = []
    if config.parallel_threshold < 0:
        issues.append("parallel_threshold must be >= 0")
    if config.nested_threshold <= config.parallel_threshold:
        issues.append(
            f"nested_threshold {config.nested_threshold} must be greater than "
            f"parallel_threshold {config.parallel_threshold}"
        )
    if not 0 < config.min_width <= 100:
        issues.append("min_width must be between 0 and 100")
    if config.margin_between < 0:
        issues.append("margin_between must be >= 0")
    if not 0 <= config.edge_margin_percent < 100:
        issues.append("edge_margin_percent must be between 0 and 100")
    if config.extended_event_hours <= 0:
        issues.append("extended_event_hours must be positive")
    if not 0 <= config.extended_event_progress <= 1:
        issues.append("extended_event_progress must be between 0 and 1")
    if config.rebalance_max_iterations < 0:
        issues.append("rebalance_max_iterations must be >= 0")
    if config.rebalance_min_spread < 1:
        issues.append("rebalance_min_spread must be >= 1")
    if config.default_container_width <= 0:
        issues.append("default_container_width must be positive")
    return tuple(issues)


def resolve_layout_config(
    *,
    config_file: str | Path | None = None,
    base: LayoutConfig = DEFAULT_LAYOUT_CONFIG,
) -> LayoutConfig:
    """Resolve the layout config plus optional JSON file overrides."""
    resolved = base
    if config_file is not None:
        resolved = replace(base, **_load_config_file(Path(config_file)))

    issues = evaluate_layout_config(resolved)
    if issues:
        msg = f"invalid layout config: {'; '.join(issues)}."
        raise ValueError(msg)
    return resolved


def read_json_file(path: str | Path, *, label: str) -> Any:
    """Read one JSON document, reporting problems as ValueError."""
    source = Path(path)
    if not source.exists():
        msg = f"{label} file '{source}' does not exist."
        raise ValueError(msg)
    try:
        return json.loads(source.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        msg = f"{label} file '{source}' is not valid JSON: {exc}."
        raise ValueError(msg) from exc


def _load_config_file(path: Path) -> dict[str, Any]:
    payload = read_json_file(path, label="config")
    if not isinstance(payload, dict):
        msg = "config file content must be a JSON object."
        raise ValueError(msg)

    field_types = {item.name: item.type for item in fields(LayoutConfig)}
    unknown = sorted(key for key in payload if key not in field_types)
    if unknown:
        msg = f"unknown config key(s): {', '.join(unknown)}."
        raise ValueError(msg)

    for key, value in payload.items():
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            msg = f"config key '{key}' must be a number."
            raise ValueError(msg)
        if field_types[key] == "int" and not isinstance(value, int):
            msg = f"config key '{key}' must be an integer."
            raise ValueError(msg)

    return payload
