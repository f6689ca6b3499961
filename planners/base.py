#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Shared machinery for traced grid planners.

A traced planner expands one cell at a time and records a StepEvent after
initialization and after every expansion. Subclasses only choose which end
of the frontier to pop from (FIFO for BFS, LIFO for DFS).

Grid convention: grid[r, c] truthy means blocked. 4-connected moves only,
examined in the fixed order up, down, left, right.
"""

from __future__ import annotations

from collections import deque
from typing import Deque, List, Sequence, Tuple

import numpy as np

from envs.grid import as_grid, validate_endpoints
from .events import (
    BLOCKED, FINISHED, GOAL_FOUND, RUNNING,
    Cell, SearchResult, SearchTree, StepEvent, cell_key,
)

# up, down, left, right
DELTAS_4 = np.array([(-1, 0), (1, 0), (0, -1), (0, 1)], dtype=np.int8)


def _as_cell(cell: Sequence[int]) -> Cell:
    return (int(cell[0]), int(cell[1]))


def reconstruct_path(par_r: np.ndarray, par_c: np.ndarray,
                     start: Cell, goal: Cell) -> List[Cell]:
    """
    Walk parent arrays from goal back to start.
    Returns [] when goal was never assigned a parent (and start != goal).
    """
    if start != goal and par_r[goal] == -1:
        return []
    path: List[Cell] = []
    r, c = goal
    while (r, c) != start:
        path.append((int(r), int(c)))
        pr, pc = int(par_r[r, c]), int(par_c[r, c])
        if pr == -1:
            return []
        r, c = pr, pc
    path.append(start)
    path.reverse()
    return path


def expansion_status(current: Cell, goal: Cell, frontier_size: int,
                     neighbours: Sequence[Cell], newly_added: Sequence[Cell]) -> str:
    if current == goal:
        return GOAL_FOUND
    if frontier_size == 0:
        # frontier exhausted right after an expansion that only saw visited cells
        if neighbours and not newly_added:
            return BLOCKED
        return FINISHED
    return RUNNING


class TracedGridSearch:
    """Base class; subclasses implement `_pop`."""

    name = "traced"

    def _pop(self, frontier: Deque[Tuple[Cell, int]]) -> Tuple[Cell, int]:
        raise NotImplementedError

    def search(self, grid, start: Sequence[int], goal: Sequence[int]) -> SearchResult:
        """
        Run the search to completion and return the full step trace.

        Raises GridConfigError for ragged grids, or for start/goal outside a
        non-empty grid. An unreachable goal is reported through the status.
        """
        grid = as_grid(grid)
        start, goal = _as_cell(start), _as_cell(goal)
        if grid.size:
            validate_endpoints(grid, start, goal)

        tree = SearchTree()
        root_id = tree.add_root(start)
        steps: List[StepEvent] = [StepEvent(
            current=start,
            frontier=(start,),
            explored=(),
            newly_added=(start,),
            neighbours=(),
            depth=0,
            status=RUNNING,
            tree_snapshot=tree.snapshot(),
            expanded_node_id=root_id,
            newly_generated_ids=(root_id,),
        )]

        if grid.size == 0:
            return SearchResult(status=FINISHED, steps=steps)

        H, W = grid.shape
        visited = np.zeros((H, W), dtype=bool)
        par_r = np.full((H, W), -1, dtype=np.int32)
        par_c = np.full((H, W), -1, dtype=np.int32)

        frontier: Deque[Tuple[Cell, int]] = deque([(start, 0)])
        visited[start] = True
        explored: List[Cell] = []

        while frontier:
            current, depth = self._pop(frontier)
            r, c = current
            current_id = cell_key(current)
            neighbours: List[Cell] = []
            newly_added: List[Cell] = []

            for dr, dc in DELTAS_4:
                nr, nc = r + int(dr), c + int(dc)
                if nr < 0 or nr >= H or nc < 0 or nc >= W:
                    continue
                if grid[nr, nc]:
                    continue
                neighbours.append((nr, nc))
                if visited[nr, nc]:
                    continue
                visited[nr, nc] = True
                par_r[nr, nc] = r
                par_c[nr, nc] = c
                frontier.append(((nr, nc), depth + 1))
                newly_added.append((nr, nc))
                tree.add_child(current_id, (nr, nc))

            explored.append(current)
            status = expansion_status(current, goal, len(frontier), neighbours, newly_added)

            steps.append(StepEvent(
                current=current,
                frontier=tuple(cell for cell, _ in frontier),
                explored=tuple(explored),
                newly_added=tuple(newly_added),
                neighbours=tuple(neighbours),
                depth=depth,
                status=status,
                tree_snapshot=tree.snapshot(),
                expanded_node_id=current_id,
                newly_generated_ids=tuple(cell_key(n) for n in newly_added),
            ))

            if status == GOAL_FOUND:
                path = reconstruct_path(par_r, par_c, start, goal)
                return SearchResult(status=status, path=path,
                                    path_ids=[cell_key(p) for p in path], steps=steps)

        status = steps[-1].status
        if status == RUNNING:
            status = FINISHED
        return SearchResult(status=status, steps=steps)
