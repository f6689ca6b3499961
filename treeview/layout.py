#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
layout.py
---------
Level-order layout for search trees.

Every node at depth d sits at y = d * level_height + top_offset. Nodes that
share a depth are spread evenly along x, centred on 0, in the order they were
added (discovery order for the traced planners). A node's x depends only on
its rank within its level, not on its parent, so wide or unbalanced trees can
have crossing edges.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Tuple

from planners.events import Cell, SearchTreeNode


@dataclass(frozen=True)
class LayoutConfig:
    level_height: float = 80.0
    sibling_gap: float = 60.0
    top_offset: float = 50.0
    width_margin: float = 100.0
    height_margin: float = 100.0


DEFAULT_CONFIG = LayoutConfig()


@dataclass(frozen=True)
class LayoutNode:
    """A SearchTreeNode with its 2-D position."""
    id: str
    parent_id: Optional[str]
    state: Cell
    depth: int
    children: Tuple[str, ...]
    x: float
    y: float

    @classmethod
    def from_node(cls, node: SearchTreeNode, x: float, y: float) -> "LayoutNode":
        return cls(id=node.id, parent_id=node.parent_id, state=node.state,
                   depth=node.depth, children=tuple(node.children), x=x, y=y)


@dataclass(frozen=True)
class TreeLayout:
    nodes: Tuple[LayoutNode, ...]
    width: float
    height: float
    root: Optional[LayoutNode]


class TreeManager:
    """
    Holds tree nodes keyed by id (insertion ordered) and computes layouts.

    The position cache is rebuilt by `calculate_layout` and cleared on every
    structural change; lookups through `cached_position` are the only reads.
    """

    def __init__(self, config: Optional[LayoutConfig] = None):
        self.config = config or DEFAULT_CONFIG
        self._nodes: Dict[str, SearchTreeNode] = {}
        self._layout_cache: Dict[str, Tuple[float, float]] = {}

    # ---------------------------- structure ---------------------------- #

    def add_node(self, node: SearchTreeNode) -> None:
        self._nodes[node.id] = node
        self._layout_cache.clear()

    def link_child(self, parent_id: str, child_id: str) -> None:
        parent = self._nodes.get(parent_id)
        if parent is not None and child_id not in parent.children:
            self._nodes[parent_id] = dataclasses.replace(parent, children=parent.children + (child_id,))
            self._layout_cache.clear()

    def clear(self) -> None:
        self._nodes.clear()
        self._layout_cache.clear()

    def load_nodes(self, nodes: Iterable[SearchTreeNode]) -> None:
        self.clear()
        for n in nodes:
            self.add_node(n)

    def all_nodes(self) -> List[SearchTreeNode]:
        return list(self._nodes.values())

    def get_node(self, node_id: str) -> Optional[SearchTreeNode]:
        return self._nodes.get(node_id)

    def nodes_at_depth(self, depth: int) -> List[SearchTreeNode]:
        return [n for n in self._nodes.values() if n.depth == depth]

    def max_depth(self) -> int:
        return max((n.depth for n in self._nodes.values()), default=0)

    # ----------------------------- layout ------------------------------ #

    def calculate_layout(self) -> TreeLayout:
        cfg = self.config
        levels: Dict[int, List[SearchTreeNode]] = {}
        for node in self._nodes.values():
            levels.setdefault(node.depth, []).append(node)

        positioned: List[LayoutNode] = []
        for depth, level in levels.items():
            y = depth * cfg.level_height + cfg.top_offset
            start_x = -((len(level) - 1) * cfg.sibling_gap) / 2
            for i, node in enumerate(level):
                x = start_x + i * cfg.sibling_gap
                positioned.append(LayoutNode.from_node(node, x, y))
                self._layout_cache[node.id] = (x, y)

        max_abs_x = max((abs(n.x) for n in positioned), default=0.0)
        width = max_abs_x * 2 + cfg.width_margin
        height = self.max_depth() * cfg.level_height + cfg.height_margin
        root = next((n for n in positioned if n.parent_id is None), None)
        return TreeLayout(nodes=tuple(positioned), width=width, height=height, root=root)

    def cached_position(self, node_id: str) -> Optional[Tuple[float, float]]:
        return self._layout_cache.get(node_id)


def layout(nodes: Iterable[SearchTreeNode], config: Optional[LayoutConfig] = None) -> TreeLayout:
    """Position a node collection (typically one StepEvent.tree_snapshot)."""
    manager = TreeManager(config)
    manager.load_nodes(nodes)
    return manager.calculate_layout()
