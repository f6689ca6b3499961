#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
grid.py
-------
Occupancy-grid model shared by the planners, the tree views and the CLIs.

Grid convention: grid[r, c] == True means blocked, False means open.
Cells are (row, col) tuples of plain ints.

Accepted inputs for `as_grid`:
- nested lists of 0/1 (any non-zero value is a wall)
- any 2-D numpy array (cast to bool)

Grid files (`load_grid`):
- .txt  : one row per line; '.', '0', 'S', 'G' open, '#', '1' blocked.
          'S' and 'G' mark start and goal.
- .json : {"grid": [[0,1,...],...], "start": [r,c], "goal": [r,c]}
- .npz  : arrays 'grid', 'start', 'goal' (as written by np.savez_compressed)
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np

Cell = Tuple[int, int]  # (row, col)

OPEN_CHARS = ".0SG"
WALL_CHARS = "#1"


class GridConfigError(ValueError):
    """Raised for malformed grids, bad endpoints or unreadable grid files."""


@dataclass
class GridProblem:
    """A grid plus the endpoints to search between."""
    grid: np.ndarray            # (H, W) bool array: True = blocked
    start: Cell
    goal: Cell
    settings: Dict = field(default_factory=dict)   # provenance (file, seed, density, ...)

    @property
    def shape(self) -> Tuple[int, int]:
        return self.grid.shape

    @property
    def H(self) -> int:
        return self.grid.shape[0]

    @property
    def W(self) -> int:
        return self.grid.shape[1]


# ------------------------------ Validation ---------------------------------- #

def as_grid(obj) -> np.ndarray:
    """
    Return `obj` as a 2-D bool occupancy array.

    Raises GridConfigError for ragged rows or arrays that are not 2-D.
    An empty input (no rows) becomes a (0, 0) grid.
    """
    if isinstance(obj, np.ndarray):
        arr = obj
        if arr.size == 0 and arr.ndim < 2:
            return np.zeros((0, 0), dtype=bool)
    else:
        rows = list(obj)
        if not rows:
            return np.zeros((0, 0), dtype=bool)
        widths = {len(row) for row in rows}
        if len(widths) != 1:
            raise GridConfigError(f"Grid rows have unequal lengths: {sorted(widths)}")
        arr = np.asarray(rows)
    if arr.ndim != 2:
        raise GridConfigError(f"Grid must be 2-D, got shape {arr.shape}")
    return arr.astype(bool)


def in_bounds(grid: np.ndarray, cell: Cell) -> bool:
    H, W = grid.shape
    r, c = cell
    return 0 <= r < H and 0 <= c < W


def validate_endpoints(grid: np.ndarray, start: Cell, goal: Cell,
                       check_walls: bool = False) -> None:
    """Raise GridConfigError if start/goal fall outside the grid (or on a wall)."""
    for name, cell in (("start", start), ("goal", goal)):
        if not in_bounds(grid, cell):
            raise GridConfigError(f"{name} {tuple(cell)} is outside the {grid.shape[0]}x{grid.shape[1]} grid")
        if check_walls and grid[cell]:
            raise GridConfigError(f"{name} {tuple(cell)} is on a blocked cell")


def parse_cell(text: str) -> Cell:
    """Parse 'r,c' into a cell."""
    parts = [p.strip() for p in str(text).split(",")]
    if len(parts) != 2:
        raise GridConfigError(f"Bad cell '{text}', expected like 3,4")
    try:
        return (int(parts[0]), int(parts[1]))
    except ValueError as e:
        raise GridConfigError(f"Bad cell '{text}', expected like 3,4") from e


# ------------------------------- Text format -------------------------------- #

def parse_grid_text(text: str) -> GridProblem:
    """
    Parse the ASCII grid format. Blank lines are ignored.
    Missing 'S'/'G' markers default to the top-left / bottom-right corners.
    """
    lines = [ln.strip() for ln in text.splitlines() if ln.strip()]
    rows: List[List[int]] = []
    start: Optional[Cell] = None
    goal: Optional[Cell] = None
    for r, line in enumerate(lines):
        row = []
        for c, ch in enumerate(line):
            if ch in WALL_CHARS:
                row.append(1)
            elif ch in OPEN_CHARS:
                row.append(0)
                if ch == "S":
                    start = (r, c)
                elif ch == "G":
                    goal = (r, c)
            else:
                raise GridConfigError(f"Unknown grid character {ch!r} at ({r},{c})")
        rows.append(row)

    grid = as_grid(rows)
    H, W = grid.shape
    if start is None:
        start = (0, 0)
    if goal is None:
        goal = (max(H - 1, 0), max(W - 1, 0))
    return GridProblem(grid=grid, start=start, goal=goal)


def format_grid_text(grid: np.ndarray, start: Optional[Cell] = None,
                     goal: Optional[Cell] = None,
                     path: Sequence[Cell] = ()) -> str:
    """Inverse of parse_grid_text; path cells (other than S/G) are drawn as '*'."""
    on_path = {tuple(p) for p in path}
    out = []
    for r in range(grid.shape[0]):
        chars = []
        for c in range(grid.shape[1]):
            if start is not None and (r, c) == tuple(start):
                chars.append("S")
            elif goal is not None and (r, c) == tuple(goal):
                chars.append("G")
            elif grid[r, c]:
                chars.append("#")
            elif (r, c) in on_path:
                chars.append("*")
            else:
                chars.append(".")
        out.append("".join(chars))
    return "\n".join(out)


# ---------------------------------- I/O ------------------------------------- #

def _json_cell(value, name: str, path: str) -> Cell:
    """Check a JSON endpoint is an [r, c] pair of integers."""
    if (not isinstance(value, (list, tuple)) or len(value) != 2
            or not all(isinstance(v, int) and not isinstance(v, bool) for v in value)):
        raise GridConfigError(f"{path}: '{name}' must be [row, col] integers, got {value!r}")
    return (value[0], value[1])


def load_grid(path: str) -> GridProblem:
    """Load a grid problem from .txt, .json or .npz."""
    ext = os.path.splitext(path)[1].lower()
    if not os.path.exists(path):
        raise GridConfigError(f"Grid file not found: {path}")

    if ext == ".npz":
        with np.load(path) as data:
            problem = GridProblem(grid=as_grid(data["grid"]),
                                  start=tuple(int(v) for v in data["start"]),
                                  goal=tuple(int(v) for v in data["goal"]))
    elif ext == ".json":
        with open(path) as f:
            try:
                data = json.load(f)
            except json.JSONDecodeError as e:
                raise GridConfigError(f"Invalid JSON in {path}: {e}") from e
        if "grid" not in data:
            raise GridConfigError(f"{path}: missing 'grid' key")
        grid = as_grid(data["grid"])
        H, W = grid.shape
        start = _json_cell(data.get("start", (0, 0)), "start", path)
        goal = _json_cell(data.get("goal", (max(H - 1, 0), max(W - 1, 0))), "goal", path)
        problem = GridProblem(grid=grid, start=start, goal=goal)
    else:
        with open(path) as f:
            problem = parse_grid_text(f.read())

    problem.settings["source"] = path
    return problem


def save_grid(problem: GridProblem, path: str) -> None:
    """Write a grid problem in the format implied by the file extension."""
    ext = os.path.splitext(path)[1].lower()
    if os.path.dirname(path):
        os.makedirs(os.path.dirname(path), exist_ok=True)
    if ext == ".npz":
        np.savez_compressed(path, grid=problem.grid, start=problem.start, goal=problem.goal)
    elif ext == ".json":
        with open(path, "w") as f:
            json.dump({
                "grid": problem.grid.astype(int).tolist(),
                "start": list(problem.start),
                "goal": list(problem.goal),
            }, f)
    else:
        with open(path, "w") as f:
            f.write(format_grid_text(problem.grid, problem.start, problem.goal) + "\n")
