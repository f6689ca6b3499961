import os
from typing import Optional, Sequence

import numpy as np
import matplotlib.pyplot as plt
from matplotlib import colors as mcolors

from planners.events import Cell, GOAL_FOUND, SearchResult, StepEvent
from .layout import LayoutConfig
from .render_state import RenderState, project_grid_cells, project_step

NODE_RADIUS = 20  # in layout units


def render_grid(grid: np.ndarray, step: Optional[StepEvent], start: Cell, goal: Cell,
                path: Sequence[Cell] = (), ax=None, title=None):
    """
    Render the grid view of one step.

    Layers:
      - per-cell colours from project_grid_cells
      - final path as a purple line (only once the goal is found)
    """
    H, W = grid.shape
    if ax is None:
        _, ax = plt.subplots(figsize=(max(3, W / 4), max(3, H / 4)), dpi=120)

    ax.set_xticks([]); ax.set_yticks([])
    if title:
        ax.set_title(title, fontsize=10)
    if H == 0 or W == 0:
        ax.text(0.5, 0.5, "empty grid", ha="center", va="center", transform=ax.transAxes)
        return ax

    cell_colors, path_mask = project_grid_cells(grid, step, start, goal, path)
    rgb = np.ones((H, W, 3), dtype=float)
    for r in range(H):
        for c in range(W):
            rgb[r, c] = mcolors.to_rgb(cell_colors[r, c])

    ax.imshow(rgb, interpolation="nearest", origin="upper")

    if path_mask.any() and len(path) > 1:
        rr, cc = zip(*path)
        ax.plot(cc, rr, color="#6C5CE7", lw=2.5, alpha=0.9)
    return ax


def render_tree(state: RenderState, ax=None, title=None):
    """Draw edges first, then nodes with labels, from a projected RenderState."""
    if ax is None:
        _, ax = plt.subplots(figsize=(6, 4), dpi=120)

    for e in state.edges:
        ax.plot([e.from_x, e.to_x], [e.from_y, e.to_y],
                color=e.color, lw=e.line_width, zorder=1)

    for n in state.nodes:
        circle = plt.Circle((n.x, n.y), NODE_RADIUS, facecolor=n.color,
                            edgecolor=n.outline, lw=n.line_width, zorder=2)
        ax.add_patch(circle)
        ax.text(n.x, n.y, n.label, color="#0f1115", fontsize=6,
                family="monospace", ha="center", va="center", zorder=3)

    if state.nodes:
        xs = [n.x for n in state.nodes]
        ys = [n.y for n in state.nodes]
        pad = NODE_RADIUS * 2
        ax.set_xlim(min(xs) - pad, max(xs) + pad)
        ax.set_ylim(max(ys) + pad, min(ys) - pad)  # depth grows downward
    ax.set_aspect("equal")
    ax.axis("off")
    if title:
        ax.set_title(title, fontsize=10)
    return ax


def save_step_figure(grid: np.ndarray, result: SearchResult, step_index: int,
                     start: Cell, goal: Cell, path: str,
                     config: Optional[LayoutConfig] = None) -> str:
    """Save grid view and tree view of steps[step_index] side by side."""
    step = result.steps[step_index]
    index = step_index % len(result.steps)
    show_path = result.path if step.status == GOAL_FOUND else []
    state, _ = project_step(step, path_ids=result.path_ids, config=config)

    fig, axes = plt.subplots(1, 2, figsize=(12, 5), dpi=120)
    render_grid(grid, step, start, goal, path=show_path, ax=axes[0],
                title=f"step {index}/{len(result.steps) - 1}: {step.status}")
    render_tree(state, ax=axes[1], title=f"search tree ({len(state.nodes)} nodes)")
    fig.tight_layout()
    if os.path.dirname(path):
        os.makedirs(os.path.dirname(path), exist_ok=True)
    fig.savefig(path, bbox_inches="tight")
    plt.close(fig)
    return path
