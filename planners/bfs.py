#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Breadth-First Search with a full step trace (unweighted shortest hops).
- 4-connected grids; neighbours examined up, down, left, right.
- Cells are expanded in non-decreasing depth order, so the returned path is
  a shortest path in hop count.
"""

from __future__ import annotations
from typing import Deque, Sequence, Tuple

from .base import TracedGridSearch
from .events import Cell, SearchResult


class BFSPlanner(TracedGridSearch):
    name = "bfs"

    def _pop(self, frontier: Deque[Tuple[Cell, int]]) -> Tuple[Cell, int]:
        return frontier.popleft()


def search(grid, start: Sequence[int], goal: Sequence[int]) -> SearchResult:
    """Run BFS from start to goal and return status, path and step trace."""
    return BFSPlanner().search(grid, start, goal)
