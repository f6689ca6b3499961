#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
generator.py
------------
Random occupancy-grid generator for search-trace demos and benchmarks.

- Walls are sampled independently per cell at a target density, plus a few
  optional rectangular blocks so corridors appear on larger grids.
- Reachability is decided on 4-connected free space with
  scipy.ndimage.label, so "success"/"failure" requests are honoured without
  running a planner.
- Reproducibility: explicit np.random.Generator.
"""

from __future__ import annotations

from typing import Optional, Tuple

import numpy as np

try:
    from scipy.ndimage import label as cc_label
except Exception as e:
    raise ImportError(
        "scipy.ndimage is required. Install with: pip install scipy"
    ) from e

from .grid import Cell, GridProblem

# 4-connected structuring element (no diagonals)
STRUCTURE_4 = np.array([[0, 1, 0],
                        [1, 1, 1],
                        [0, 1, 0]], dtype=np.uint8)

ENSURE_CHOICES = ("any", "success", "failure")


def free_components(grid: np.ndarray) -> Tuple[np.ndarray, int]:
    """Label 4-connected components of free space. Walls get label 0."""
    labels, num = cc_label((~grid).astype(np.uint8), structure=STRUCTURE_4)
    return labels.astype(np.int32), int(num)


def has_path(grid: np.ndarray, start: Cell, goal: Cell) -> bool:
    """True if start and goal are open and share a 4-connected free component."""
    if grid.size == 0 or grid[start] or grid[goal]:
        return False
    labels, _ = free_components(grid)
    return bool(labels[start] == labels[goal])


def _stamp_rectangles(grid: np.ndarray, rng: np.random.Generator, n: int,
                      size: Tuple[int, int]) -> None:
    H, W = grid.shape
    lo, hi = size
    for _ in range(n):
        h = int(rng.integers(lo, hi + 1))
        w = int(rng.integers(lo, hi + 1))
        r0 = int(rng.integers(0, max(1, H - h + 1)))
        c0 = int(rng.integers(0, max(1, W - w + 1)))
        grid[r0:r0 + h, c0:c0 + w] = True


def generate_grid(
    H: int = 20,
    W: int = 20,
    *,
    density: float = 0.25,
    start: Cell = (0, 0),
    goal: Optional[Cell] = None,
    n_rects: int = 0,
    rect_size: Tuple[int, int] = (2, 4),
    ensure_status: str = "any",      # "any" | "success" | "failure"
    rng: Optional[np.random.Generator] = None,
    max_tries: int = 200,
) -> GridProblem:
    """
    Sample a random grid with open start/goal cells.

    ensure_status:
        "any"     : no guarantee about path existence.
        "success" : a 4-connected path from start to goal exists.
        "failure" : no such path exists.

    Raises RuntimeError if the requested status is not met in max_tries samples.
    """
    if ensure_status not in ENSURE_CHOICES:
        raise ValueError(f"Unknown ensure_status '{ensure_status}'. Available: {list(ENSURE_CHOICES)}")
    if not 0.0 <= density <= 1.0:
        raise ValueError(f"density must be in [0, 1], got {density}")
    if H < 1 or W < 1:
        raise ValueError(f"Grid size must be at least 1x1, got {H}x{W}")
    if rng is None:
        rng = np.random.default_rng()
    if goal is None:
        goal = (H - 1, W - 1)
    for name, (r, c) in (("start", start), ("goal", goal)):
        if not (0 <= r < H and 0 <= c < W):
            raise ValueError(f"{name} {(r, c)} is outside the {H}x{W} grid")

    for attempt in range(1, max_tries + 1):
        grid = rng.random((H, W)) < density
        if n_rects > 0:
            _stamp_rectangles(grid, rng, n_rects, rect_size)
        grid[start] = False
        grid[goal] = False

        if ensure_status == "any":
            break
        reachable = has_path(grid, start, goal)
        if (ensure_status == "success") == reachable:
            break
    else:
        raise RuntimeError(
            f"Could not generate a '{ensure_status}' grid of {H}x{W} at density {density} "
            f"in {max_tries} tries; adjust density"
        )

    settings = {
        "H": H, "W": W, "density": density, "n_rects": n_rects,
        "ensure_status": ensure_status, "attempts": attempt,
    }
    return GridProblem(grid=grid, start=tuple(start), goal=tuple(goal), settings=settings)
