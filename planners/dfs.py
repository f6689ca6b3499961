#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Depth-First Search with a full step trace (not optimal, but useful as a baseline).
- 4-connected grids, same neighbour order and event fields as BFS.
- The frontier is a stack; StepEvent.frontier lists it bottom to top, so the
  next cell to expand is the last one.
- Cells are marked visited when pushed, so each cell is discovered once and
  the search tree stays a tree.
"""

from __future__ import annotations
from typing import Deque, Tuple

from .base import TracedGridSearch
from .events import Cell


class DFSPlanner(TracedGridSearch):
    name = "dfs"

    def _pop(self, frontier: Deque[Tuple[Cell, int]]) -> Tuple[Cell, int]:
        return frontier.pop()
