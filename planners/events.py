#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Step-event data model shared by every traced planner.

Each planner emits a list of StepEvent snapshots with the same fields
(current, frontier, explored, newly_added, neighbours, depth, status) plus
the tree fields (tree_snapshot, expanded_node_id, newly_generated_ids), so
tree layout and render-state projection work for any of them unchanged.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

Cell = Tuple[int, int]  # (row, col)

# Status values
RUNNING = "running"
GOAL_FOUND = "goal-found"
FINISHED = "finished"
BLOCKED = "blocked"
STATUSES = (RUNNING, GOAL_FOUND, FINISHED, BLOCKED)


def cell_key(cell: Cell) -> str:
    """Canonical node id for a cell: 'row,col'."""
    return f"{int(cell[0])},{int(cell[1])}"


def _cells(cells) -> List[List[int]]:
    return [[int(r), int(c)] for r, c in cells]


@dataclass(frozen=True)
class SearchTreeNode:
    """One discovered cell in the search tree."""
    id: str
    parent_id: Optional[str]
    state: Cell
    depth: int
    children: Tuple[str, ...] = ()

    def to_dict(self) -> Dict:
        return {
            "id": self.id,
            "parent_id": self.parent_id,
            "state": [int(self.state[0]), int(self.state[1])],
            "depth": self.depth,
            "children": list(self.children),
        }


class SearchTree:
    """
    Accumulates tree nodes during one search call.

    Nodes are kept in discovery order; children lists grow as parents expand.
    `snapshot()` freezes the current structure for a StepEvent.
    """

    def __init__(self):
        self._nodes: Dict[str, dict] = {}

    def __len__(self) -> int:
        return len(self._nodes)

    def __contains__(self, node_id: str) -> bool:
        return node_id in self._nodes

    def add_root(self, cell: Cell) -> str:
        node_id = cell_key(cell)
        self._nodes[node_id] = {"parent_id": None, "state": cell, "depth": 0, "children": []}
        return node_id

    def add_child(self, parent_id: str, cell: Cell) -> str:
        parent = self._nodes[parent_id]
        node_id = cell_key(cell)
        self._nodes[node_id] = {
            "parent_id": parent_id,
            "state": cell,
            "depth": parent["depth"] + 1,
            "children": [],
        }
        parent["children"].append(node_id)
        return node_id

    def snapshot(self) -> Tuple[SearchTreeNode, ...]:
        return tuple(
            SearchTreeNode(id=node_id, parent_id=n["parent_id"], state=n["state"],
                           depth=n["depth"], children=tuple(n["children"]))
            for node_id, n in self._nodes.items()
        )


@dataclass(frozen=True)
class StepEvent:
    current: Cell
    frontier: Tuple[Cell, ...]
    explored: Tuple[Cell, ...]
    newly_added: Tuple[Cell, ...]
    neighbours: Tuple[Cell, ...]
    depth: int
    status: str
    tree_snapshot: Tuple[SearchTreeNode, ...] = ()
    expanded_node_id: Optional[str] = None
    newly_generated_ids: Tuple[str, ...] = ()

    @property
    def explored_ids(self) -> frozenset:
        return frozenset(cell_key(c) for c in self.explored)

    @property
    def frontier_ids(self) -> frozenset:
        return frozenset(cell_key(c) for c in self.frontier)

    def to_dict(self) -> Dict:
        return {
            "current": [int(self.current[0]), int(self.current[1])],
            "frontier": _cells(self.frontier),
            "explored": _cells(self.explored),
            "newly_added": _cells(self.newly_added),
            "neighbours": _cells(self.neighbours),
            "depth": self.depth,
            "status": self.status,
            "tree_snapshot": [n.to_dict() for n in self.tree_snapshot],
            "expanded_node_id": self.expanded_node_id,
            "newly_generated_ids": list(self.newly_generated_ids),
        }


@dataclass
class SearchResult:
    status: str
    path: List[Cell] = field(default_factory=list)
    path_ids: List[str] = field(default_factory=list)
    steps: List[StepEvent] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return self.status == GOAL_FOUND

    def to_dict(self, include_steps: bool = True) -> Dict:
        out = {
            "status": self.status,
            "path": _cells(self.path),
            "path_ids": list(self.path_ids),
            "num_steps": len(self.steps),
        }
        if include_steps:
            out["steps"] = [s.to_dict() for s in self.steps]
        return out
