"""Recursive placement of a layout forest inside one day column."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from ..config import IMPORTANCE_FULL_HOURS, IMPORTANCE_MAX, IMPORTANCE_MIN
from ..events import LayoutEvent
from ..profiles import DEFAULT_LAYOUT_CONFIG, LayoutConfig, ViewProfile, resolve_view_profile
from ..relations import should_be_parallel
from .structure import LayoutForest


@dataclass(frozen=True)
class EventLayout:
    """Placement of one event, in percent of the day column."""

    id: str
    left: float
    width: float
    z_index: int
    level: int
    is_primary: bool
    indent_offset: float
    importance: float


@dataclass(frozen=True)
class GeometryContext:
    """Everything the placement walk needs besides the forest."""

    view: ViewProfile
    config: LayoutConfig
    container_width: float

    def indent_for_depth(self, depth: int) -> float:
        return depth * self.view.indent_step_percent

    def indent_to_pixels(self, indent_percent: float) -> float:
        return (indent_percent * self.container_width) / 100


def calculate_event_importance(event: LayoutEvent) -> float:
    """Return duration / 4h clamped into [0.1, 1.0]."""
    return max(IMPORTANCE_MIN, min(IMPORTANCE_MAX, event.duration / IMPORTANCE_FULL_HOURS))


def full_width_layout(event: LayoutEvent, context: GeometryContext) -> EventLayout:
    """Return the layout of an event that overlaps nothing."""
    return EventLayout(
        id=event.id,
        left=0.0,
        width=100 - context.view.edge_margin(context.config),
        z_index=0,
        level=0,
        is_primary=True,
        indent_offset=0.0,
        importance=calculate_event_importance(event),
    )


def children_are_parallel(events: Sequence[LayoutEvent], config: LayoutConfig) -> bool:
    """Return whether any pair among sibling events belongs side by side."""
    if len(events) < 2:
        return False
    return any(
        should_be_parallel(events[i], events[j], config)
        for i in range(len(events))
        for j in range(i + 1, len(events))
    )


def _node_indent(forest: LayoutForest, idx: int, context: GeometryContext) -> float:
    node = forest.node(idx)
    indent = context.indent_for_depth(node.depth)
    if node.is_processed:
        branch_root = forest.node(forest.branch_root(idx))
        if branch_root.depth == 1:
            indent = context.indent_for_depth(branch_root.depth)
    return indent


def _emit(
    forest: LayoutForest,
    idx: int,
    left: float,
    width: float,
    indent: float,
    context: GeometryContext,
    layouts: dict[str, EventLayout],
) -> None:
    node = forest.node(idx)
    layouts[node.event.id] = EventLayout(
        id=node.event.id,
        left=left,
        width=width,
        z_index=node.depth,
        level=node.depth,
        is_primary=node.depth == 0,
        indent_offset=context.indent_to_pixels(indent),
        importance=calculate_event_importance(node.event),
    )


def layout_node(
    forest: LayoutForest,
    idx: int,
    base_left: float,
    available_width: float,
    context: GeometryContext,
    layouts: dict[str, EventLayout],
    *,
    slot: bool = False,
) -> None:
    """Place node `idx` and, recursively, its subtree.

    With `slot` the band is the node's own box (a share of a parallel split);
    otherwise the node indents itself inside the band by its depth.
    """
    node = forest.node(idx)
    if slot:
        node_left = base_left
        node_width = available_width
        indent = context.indent_for_depth(node.depth)
        _emit(forest, idx, node_left, node_width, indent, context, layouts)
    else:
        indent = _node_indent(forest, idx, context)
        adjustment = context.view.left_adjustment(node.depth)
        # Deep chains collapse at the band's right edge instead of spilling past it.
        band_right = base_left + available_width
        node_left = min(base_left + indent + adjustment, band_right)
        node_width = max(0.0, band_right - node_left)
        _emit(forest, idx, node_left, node_width, indent, context, layouts)

    if not node.children:
        return

    children = sorted(node.children, key=lambda child: -forest.node(child).event.duration)
    if len(children) == 1:
        layout_node(forest, children[0], node_left, node_width, context, layouts)
        return

    child_events = [forest.node(child).event for child in children]
    if children_are_parallel(child_events, context.config):
        first_depth = forest.node(children[0]).depth
        used = context.indent_for_depth(first_depth) + context.view.left_adjustment(first_depth)
        band_width = node_width - used
        margin = context.config.margin_between * context.view.margin_scale(first_depth)
        child_width = (band_width - (margin * (len(children) - 1))) / len(children)
        if child_width > 0:
            for position, child in enumerate(children):
                child_left = node_left + used + (position * (child_width + margin))
                layout_node(forest, child, child_left, child_width, context, layouts, slot=True)
            return

    for child in children:
        layout_node(forest, child, node_left, node_width, context, layouts)


def calculate_layout_from_structure(
    forest: LayoutForest,
    roots: Sequence[int],
    *,
    view_type: str = "week",
    container_width: float | None = None,
    config: LayoutConfig = DEFAULT_LAYOUT_CONFIG,
    layouts: dict[str, EventLayout] | None = None,
) -> dict[str, EventLayout]:
    """Turn a layout forest into per-event placements."""
    context = GeometryContext(
        view=resolve_view_profile(view_type),
        config=config,
        container_width=(
            config.default_container_width if container_width is None else container_width
        ),
    )
    result = {} if layouts is None else layouts
    total_width = 100 - context.view.edge_margin(config)

    if len(roots) == 1:
        layout_node(forest, roots[0], 0.0, total_width, context, result)
    elif len(roots) > 1:
        gutter = config.margin_between
        root_width = (total_width - (gutter * (len(roots) - 1))) / len(roots)
        for position, root in enumerate(roots):
            left = position * (root_width + gutter)
            # min_width never pushes a root past the column edge.
            width = min(max(root_width, config.min_width), total_width - left)
            layout_node(forest, root, left, width, context, result)

    return result
