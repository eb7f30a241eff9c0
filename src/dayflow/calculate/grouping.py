"""Overlap grouping and parallel-group analysis."""

from __future__ import annotations

from collections import deque
from collections.abc import Sequence
from dataclasses import dataclass

from ..events import LayoutEvent
from ..profiles import DEFAULT_LAYOUT_CONFIG, LayoutConfig
from ..relations import events_overlap


@dataclass
class ParallelGroup:
    """Events judged to start together, with their combined time span."""

    events: list[LayoutEvent]
    start_hour: float
    end_hour: float

    @classmethod
    def from_events(cls, events: Sequence[LayoutEvent]) -> ParallelGroup:
        members = list(events)
        if not members:
            msg = "a parallel group needs at least one event."
            raise ValueError(msg)
        return cls(
            events=members,
            start_hour=min(event.start_hour for event in members),
            end_hour=max(event.end_hour for event in members),
        )


def group_overlapping_events(events: Sequence[LayoutEvent]) -> list[list[LayoutEvent]]:
    """Split events into connected components of the overlap graph.

    Every input event lands in exactly one group; groups keep encounter order.
    """
    groups: list[list[LayoutEvent]] = []
    visited: set[int] = set()

    for seed_idx, seed in enumerate(events):
        if seed_idx in visited:
            continue

        visited.add(seed_idx)
        group = [seed]
        queue = deque([seed])
        while queue:
            current = queue.popleft()
            for other_idx, other in enumerate(events):
                if other_idx in visited:
                    continue
                if events_overlap(current, other):
                    visited.add(other_idx)
                    group.append(other)
                    queue.append(other)

        groups.append(group)

    return groups


def sort_for_parallel_analysis(events: Sequence[LayoutEvent]) -> list[LayoutEvent]:
    """Order by start hour, longer events first on equal starts."""
    return sorted(events, key=lambda event: (event.start_hour, -event.duration))


def analyze_parallel_groups(
    sorted_events: Sequence[LayoutEvent],
    config: LayoutConfig = DEFAULT_LAYOUT_CONFIG,
) -> list[ParallelGroup]:
    """Cluster events whose start is within the parallel threshold of a seed.

    Candidates are compared with the seed only, not with members absorbed
    before them.
    """
    groups: list[ParallelGroup] = []
    claimed: set[int] = set()

    for seed_idx, seed in enumerate(sorted_events):
        if seed_idx in claimed:
            continue

        claimed.add(seed_idx)
        members = [seed]
        for other_idx, other in enumerate(sorted_events):
            if other_idx in claimed:
                continue
            if abs(seed.start_hour - other.start_hour) <= config.parallel_threshold:
                members.append(other)
                claimed.add(other_idx)

        members.sort(key=lambda event: event.start_hour)
        groups.append(ParallelGroup.from_events(members))

    groups.sort(key=lambda group: group.start_hour)
    return groups
