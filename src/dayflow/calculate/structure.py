"""Nested parent/child structure built over parallel groups.

Nodes live in an index-based arena (`LayoutForest`); links between nodes are
arena indexes, and every link change also updates the `parent_id` and
`children` back-references on the wrapped layout events.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

from ..events import LayoutEvent
from ..profiles import DEFAULT_LAYOUT_CONFIG, LayoutConfig
from ..relations import can_event_contain, events_overlap, should_be_parallel
from .grouping import ParallelGroup

logger = logging.getLogger(__name__)


@dataclass
class LayoutNode:
    """One arena slot wrapping a layout event."""

    event: LayoutEvent
    parent: int | None = None
    children: list[int] = field(default_factory=list)
    depth: int = 0
    # Relocated by rebalancing; indent follows the branch root.
    is_processed: bool = False


class LayoutForest:
    """Arena of layout nodes addressed by index, with an event id lookup."""

    def __init__(self, events: Sequence[LayoutEvent]) -> None:
        self._nodes: list[LayoutNode] = []
        self._index: dict[str, int] = {}
        for event in events:
            self._index[event.id] = len(self._nodes)
            self._nodes.append(LayoutNode(event=event))

    @classmethod
    def from_groups(cls, parallel_groups: Sequence[ParallelGroup]) -> LayoutForest:
        return cls([event for group in parallel_groups for event in group.events])

    def __len__(self) -> int:
        return len(self._nodes)

    def node(self, idx: int) -> LayoutNode:
        return self._nodes[idx]

    def index_of(self, event_id: str) -> int:
        return self._index[event_id]

    def event(self, event_id: str) -> LayoutEvent:
        return self._nodes[self._index[event_id]].event

    def attach(self, child_idx: int, parent_idx: int) -> None:
        """Hang `child_idx` under `parent_idx` one level deeper."""
        child = self._nodes[child_idx]
        parent = self._nodes[parent_idx]
        child.parent = parent_idx
        child.depth = parent.depth + 1
        parent.children.append(child_idx)

        child.event.parent_id = parent.event.id
        if child.event.id not in parent.event.children:
            parent.event.children.append(child.event.id)

    def detach(self, child_idx: int) -> None:
        """Cut `child_idx` loose from its current parent, if any."""
        child = self._nodes[child_idx]
        if child.parent is None:
            return
        parent = self._nodes[child.parent]
        parent.children = [idx for idx in parent.children if idx != child_idx]
        parent.event.children = [
            event_id for event_id in parent.event.children if event_id != child.event.id
        ]
        child.parent = None
        child.event.parent_id = None

    def roots(self) -> list[int]:
        return [idx for idx, node in enumerate(self._nodes) if node.parent is None]

    def at_depth(self, depth: int) -> list[int]:
        return [idx for idx, node in enumerate(self._nodes) if node.depth == depth]

    def count_descendants(self, idx: int) -> int:
        """Return the number of nodes below `idx`, transitively."""
        return sum(1 + self.count_descendants(child) for child in self._nodes[idx].children)

    def leaves(self, idx: int) -> list[int]:
        """Return the leaves under `idx` in depth-first order."""
        node = self._nodes[idx]
        if not node.children:
            return [idx]
        collected: list[int] = []
        for child in node.children:
            collected.extend(self.leaves(child))
        return collected

    def branch_root(self, idx: int) -> int:
        """Return the topmost ancestor of `idx` that sits below a root."""
        current = idx
        while True:
            parent = self._nodes[current].parent
            if parent is None or self._nodes[parent].depth <= 0:
                return current
            current = parent


def _is_load_balance_parallel(
    parent_group: ParallelGroup,
    child_group: ParallelGroup,
    config: LayoutConfig,
) -> bool:
    for parent_event in parent_group.events:
        for child_event in child_group.events:
            if not events_overlap(parent_event, child_event):
                continue
            if abs(child_event.start_hour - parent_event.start_hour) < config.nested_threshold:
                return True
    return False


def can_group_contain(
    parent_group: ParallelGroup,
    child_group: ParallelGroup,
    config: LayoutConfig = DEFAULT_LAYOUT_CONFIG,
) -> bool:
    """Return whether `child_group` can nest under `parent_group`.

    Any overlapping cross pair starting closer than the nesting threshold
    rejects the pair of groups, even if other members would nest.
    """
    if _is_load_balance_parallel(parent_group, child_group, config):
        return False
    if child_group.start_hour - parent_group.start_hour < config.nested_threshold:
        return False
    return any(
        can_event_contain(parent_event, child_event)
        for parent_event in parent_group.events
        for child_event in child_group.events
    )


def find_best_parent_in_group(
    child: LayoutEvent,
    parent_group: ParallelGroup,
    forest: LayoutForest,
    config: LayoutConfig = DEFAULT_LAYOUT_CONFIG,
) -> LayoutEvent | None:
    """Pick the parent event for one child: least loaded first."""
    valid_parents = [parent for parent in parent_group.events if can_event_contain(parent, child)]
    if not valid_parents:
        return None
    if len(valid_parents) == 1:
        return valid_parents[0]

    def has_parallel_sibling(parent: LayoutEvent) -> bool:
        return any(
            should_be_parallel(child, forest.event(sibling_id), config)
            for sibling_id in parent.children
        )

    ranked = sorted(
        valid_parents,
        key=lambda parent: (
            len(parent.children),
            has_parallel_sibling(parent),
            abs(child.start_hour - parent.start_hour),
        ),
    )
    return ranked[0]


def _find_parent_with_min_load(
    child: LayoutEvent,
    valid_parents: Sequence[LayoutEvent],
    group_children: Sequence[LayoutEvent],
) -> LayoutEvent | None:
    if not valid_parents:
        return None

    min_load = min(len(parent.children) for parent in valid_parents)
    candidates = [parent for parent in valid_parents if len(parent.children) == min_load]

    durations = {event.id: event.duration for event in group_children}
    loaded_durations = [
        durations.get(child_id, 0.0) for parent in candidates for child_id in parent.children
    ]
    is_longest = child.duration > max(loaded_durations, default=0.0)
    return candidates[0] if is_longest else candidates[-1]


def optimize_child_assignments(
    child_events: Sequence[LayoutEvent],
    parent_group: ParallelGroup,
    forest: LayoutForest,
    config: LayoutConfig = DEFAULT_LAYOUT_CONFIG,
) -> list[tuple[LayoutEvent, LayoutEvent]]:
    """Distribute one group's events among the events of its parent group.

    Returns `(child, parent)` pairs; each pair is attached in `forest` as it
    is decided, so later choices see the updated loads.
    """
    assignments: list[tuple[LayoutEvent, LayoutEvent]] = []

    def assign(child: LayoutEvent, parent: LayoutEvent) -> None:
        forest.attach(forest.index_of(child.id), forest.index_of(parent.id))
        assignments.append((child, parent))

    if len(child_events) == 1:
        parent = find_best_parent_in_group(child_events[0], parent_group, forest, config)
        if parent is not None:
            assign(child_events[0], parent)
        return assignments

    valid_parents = [
        parent
        for parent in parent_group.events
        if all(can_event_contain(parent, child) for child in child_events)
    ]

    if not valid_parents:
        for child in child_events:
            parent = find_best_parent_in_group(child, parent_group, forest, config)
            if parent is not None:
                assign(child, parent)
        return assignments

    sorted_children = sorted(child_events, key=lambda event: -event.duration)

    if len(sorted_children) % len(valid_parents) == 0:
        per_parent = len(sorted_children) // len(valid_parents)
        for parent_idx, parent in enumerate(valid_parents):
            block = sorted_children[parent_idx * per_parent : (parent_idx + 1) * per_parent]
            for child in block:
                assign(child, parent)
    else:
        for child in sorted_children:
            parent = _find_parent_with_min_load(child, valid_parents, sorted_children)
            if parent is not None:
                assign(child, parent)

    return assignments


def build_nested_structure(
    parallel_groups: Sequence[ParallelGroup],
    forest: LayoutForest,
    config: LayoutConfig = DEFAULT_LAYOUT_CONFIG,
) -> list[int]:
    """Link each parallel group under its nearest containing ancestor group.

    Returns the root indexes of `forest`; roots are forced to depth 0.
    """
    for group_idx, group in enumerate(parallel_groups):
        for ancestor_idx in range(group_idx - 1, -1, -1):
            ancestor = parallel_groups[ancestor_idx]
            if can_group_contain(ancestor, group, config):
                optimize_child_assignments(group.events, ancestor, forest, config)
                break

    roots = forest.roots()
    for root in roots:
        forest.node(root).depth = 0

    logger.debug(
        "built nested structure: %d group(s), %d node(s), %d root(s)",
        len(parallel_groups),
        len(forest),
        len(roots),
    )
    return roots
