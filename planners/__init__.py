# -*- coding: utf-8 -*-
"""
Traced planners on grid maps with a unified API:
planner.search(grid, start: (r,c), goal: (r,c))
  -> SearchResult(status, path, path_ids, steps)
"""

from __future__ import annotations
from typing import Dict, Type

from .events import (
    BLOCKED, FINISHED, GOAL_FOUND, RUNNING, STATUSES,
    SearchResult, SearchTree, SearchTreeNode, StepEvent, cell_key,
)
from .base import TracedGridSearch, reconstruct_path
from .bfs import BFSPlanner, search
from .dfs import DFSPlanner

# Mapping used by factories/CLIs
PLANNERS: Dict[str, Type[TracedGridSearch]] = {
    "bfs": BFSPlanner,
    "dfs": DFSPlanner,
}


def get_planner(name: str) -> TracedGridSearch:
    """Instantiate a planner by name ('bfs' or 'dfs')."""
    name = name.strip().lower()
    if name not in PLANNERS:
        raise ValueError(f"Unknown planner '{name}'. Available: {sorted(PLANNERS)}")
    return PLANNERS[name]()


__all__ = [
    "BFSPlanner",
    "DFSPlanner",
    "TracedGridSearch",
    "PLANNERS",
    "get_planner",
    "search",
    "reconstruct_path",
    "SearchResult",
    "SearchTree",
    "SearchTreeNode",
    "StepEvent",
    "cell_key",
    "RUNNING",
    "GOAL_FOUND",
    "FINISHED",
    "BLOCKED",
    "STATUSES",
]
