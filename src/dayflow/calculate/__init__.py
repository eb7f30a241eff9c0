"""Layout calculation stages: grouping, structure, rebalancing, geometry."""

from .geometry import EventLayout, calculate_event_importance, calculate_layout_from_structure
from .grouping import (
    ParallelGroup,
    analyze_parallel_groups,
    group_overlapping_events,
    sort_for_parallel_analysis,
)
from .rebalance import rebalance_load_by_groups
from .structure import (
    LayoutForest,
    LayoutNode,
    build_nested_structure,
    can_group_contain,
    optimize_child_assignments,
)

__all__ = [
    "EventLayout",
    "LayoutForest",
    "LayoutNode",
    "ParallelGroup",
    "analyze_parallel_groups",
    "build_nested_structure",
    "calculate_event_importance",
    "calculate_layout_from_structure",
    "can_group_contain",
    "group_overlapping_events",
    "optimize_child_assignments",
    "rebalance_load_by_groups",
    "sort_for_parallel_analysis",
]
