"""Leaf redistribution between unevenly loaded sibling branches."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from ..profiles import DEFAULT_LAYOUT_CONFIG, LayoutConfig
from ..relations import can_event_contain
from .grouping import ParallelGroup
from .structure import LayoutForest

logger = logging.getLogger(__name__)


@dataclass
class BranchLoad:
    """A node at the balancing depth and its subtree size."""

    node: int
    load: int


def calculate_parent_loads(forest: LayoutForest, group_nodes: Sequence[int]) -> list[BranchLoad]:
    """Return every node at the group's parent depth, heaviest first."""
    if not group_nodes:
        return []
    first_parent = forest.node(group_nodes[0]).parent
    if first_parent is None:
        return []

    parent_depth = forest.node(first_parent).depth
    loads = [
        BranchLoad(node=idx, load=forest.count_descendants(idx))
        for idx in forest.at_depth(parent_depth)
    ]
    loads.sort(key=lambda item: -item.load)
    return loads


def needs_rebalancing(
    loads: Sequence[BranchLoad],
    config: LayoutConfig = DEFAULT_LAYOUT_CONFIG,
) -> bool:
    if len(loads) < 2:
        return False
    return loads[0].load - loads[-1].load >= config.rebalance_min_spread


def find_transferable_leaf(forest: LayoutForest, heavy: int, light: int) -> int | None:
    """Pick a leaf under `heavy`, preferring one `light` can contain."""
    leaves = [leaf for leaf in forest.leaves(heavy) if leaf != heavy]
    if not leaves:
        return None
    light_event = forest.node(light).event
    for leaf in leaves:
        if can_event_contain(light_event, forest.node(leaf).event):
            return leaf
    return leaves[0]


def transfer_node(forest: LayoutForest, leaf: int, new_parent: int) -> int:
    """Move `leaf` under `new_parent`, or under a child of it that contains the leaf.

    Returns the index the leaf ended up attached to.
    """
    forest.detach(leaf)
    leaf_event = forest.node(leaf).event

    target = new_parent
    for child in forest.node(new_parent).children:
        if can_event_contain(forest.node(child).event, leaf_event):
            target = child
            break

    forest.attach(leaf, target)
    forest.node(leaf).is_processed = True
    return target


def rebalance_group_load(
    forest: LayoutForest,
    loads: list[BranchLoad],
    config: LayoutConfig = DEFAULT_LAYOUT_CONFIG,
) -> int:
    """Shift leaves from the heaviest to the lightest branch; return the transfer count."""
    transfers = 0
    while transfers < config.rebalance_max_iterations:
        loads.sort(key=lambda item: -item.load)
        heaviest = loads[0]
        lightest = loads[-1]
        if heaviest.load - lightest.load < config.rebalance_min_spread:
            return transfers

        leaf = find_transferable_leaf(forest, heaviest.node, lightest.node)
        if leaf is None:
            return transfers

        transfer_node(forest, leaf, lightest.node)
        heaviest.load -= 1
        lightest.load += 1
        transfers += 1

    loads.sort(key=lambda item: -item.load)
    if loads[0].load - loads[-1].load >= config.rebalance_min_spread:
        logger.debug(
            "rebalancing stopped after %d transfer(s) with load spread %d",
            transfers,
            loads[0].load - loads[-1].load,
        )
    return transfers


def rebalance_load_by_groups(
    parallel_groups: Sequence[ParallelGroup],
    forest: LayoutForest,
    config: LayoutConfig = DEFAULT_LAYOUT_CONFIG,
) -> int:
    """Balance branch loads, walking groups from the latest start down to the second.

    Returns the total number of relocated leaves.
    """
    total = 0
    for group_idx in range(len(parallel_groups) - 1, 0, -1):
        group_nodes = [forest.index_of(event.id) for event in parallel_groups[group_idx].events]
        loads = calculate_parent_loads(forest, group_nodes)
        if needs_rebalancing(loads, config):
            total += rebalance_group_load(forest, loads, config)

    if total:
        logger.debug("rebalanced %d leaf node(s)", total)
    return total
