#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
render_state.py
---------------
Turns positioned tree nodes plus the highlight sets of one step into
render-ready node/edge records. No drawing happens here; any renderer
(matplotlib in treeview.plot, a canvas, ...) consumes the records as is.

Node colour priority (first match wins):
    current > newly generated > explored > on path (goal found) > default

The grid view follows the same idea per cell:
    start > goal > wall > current > newly added > frontier > explored > open
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional, Sequence, Tuple

import numpy as np

from planners.events import GOAL_FOUND, Cell, StepEvent
from .layout import LayoutConfig, LayoutNode, TreeLayout, layout

# ------------------------------- Palette ------------------------------------ #

NODE_COLORS = {
    "current": "#f1c40f",    # yellow
    "new": "#00cec9",        # teal
    "explored": "#7f8c8d",   # gray
    "path": "#6C5CE7",       # purple
    "default": "#ffffff",
}

EDGE_COLORS = {
    "path": "#6C5CE7",
    "default": "#636e72",
}

OUTLINE_PATH = "#ffffff"
OUTLINE_DEFAULT = "#2d3436"

CELL_COLORS = {
    "start": "#2ecc71",
    "goal": "#e74c3c",
    "wall": "#000000",
    "current": "#f1c40f",
    "new": "#3498db",
    "frontier": "#2980b9",
    "explored": "#7f8c8d",
    "open": "#ffffff",
}


@dataclass(frozen=True)
class NodeRenderState:
    id: str
    x: float
    y: float
    color: str
    is_path: bool
    is_current: bool
    label: str
    outline: str = OUTLINE_DEFAULT
    line_width: float = 2.0


@dataclass(frozen=True)
class EdgeRenderState:
    from_id: str
    to_id: str
    from_x: float
    from_y: float
    to_x: float
    to_y: float
    is_path: bool
    color: str = EDGE_COLORS["default"]
    line_width: float = 1.5


@dataclass(frozen=True)
class RenderState:
    nodes: Tuple[NodeRenderState, ...]
    edges: Tuple[EdgeRenderState, ...]


def node_label(cell: Cell) -> str:
    return f"{int(cell[0])},{int(cell[1])}"


def node_color(is_current: bool, is_new: bool, is_explored: bool,
               is_path: bool, goal_found: bool) -> str:
    if is_current:
        return NODE_COLORS["current"]
    if is_new:
        return NODE_COLORS["new"]
    if is_explored:
        return NODE_COLORS["explored"]
    if is_path and goal_found:
        return NODE_COLORS["path"]
    return NODE_COLORS["default"]


def project_render_state(
    layout_nodes: Sequence[LayoutNode],
    current_id: Optional[str],
    newly_generated_ids: Iterable[str],
    explored_ids: Iterable[str],
    path_ids: Iterable[str],
    goal_found: bool,
) -> RenderState:
    """
    Build one edge per parent->child pair present in `layout_nodes` and one
    coloured node record per node. An edge whose parent is absent is omitted.
    """
    new_ids = set(newly_generated_ids)
    explored = set(explored_ids)
    on_path = set(path_ids)
    by_id = {n.id: n for n in layout_nodes}

    edges = []
    for node in layout_nodes:
        if node.parent_id is None:
            continue
        parent = by_id.get(node.parent_id)
        if parent is None:
            continue
        is_path = node.id in on_path and parent.id in on_path
        edges.append(EdgeRenderState(
            from_id=parent.id, to_id=node.id,
            from_x=parent.x, from_y=parent.y, to_x=node.x, to_y=node.y,
            is_path=is_path,
            color=EDGE_COLORS["path"] if is_path else EDGE_COLORS["default"],
            line_width=3.0 if is_path else 1.5,
        ))

    nodes = []
    for node in layout_nodes:
        is_current = node.id == current_id
        is_path = node.id in on_path and goal_found
        color = node_color(is_current, node.id in new_ids, node.id in explored,
                           node.id in on_path, goal_found)
        nodes.append(NodeRenderState(
            id=node.id, x=node.x, y=node.y, color=color,
            is_path=is_path, is_current=is_current,
            label=node_label(node.state),
            outline=OUTLINE_PATH if is_path else OUTLINE_DEFAULT,
            line_width=3.0 if is_path else 2.0,
        ))

    return RenderState(nodes=tuple(nodes), edges=tuple(edges))


def project_step(step: StepEvent, path_ids: Iterable[str] = (),
                 config: Optional[LayoutConfig] = None) -> Tuple[RenderState, TreeLayout]:
    """Layout the step's tree snapshot and project it with the step's own highlight sets."""
    tree = layout(step.tree_snapshot, config)
    state = project_render_state(
        tree.nodes,
        current_id=step.expanded_node_id,
        newly_generated_ids=step.newly_generated_ids,
        explored_ids=step.explored_ids,
        path_ids=path_ids,
        goal_found=step.status == GOAL_FOUND,
    )
    return state, tree


# ------------------------------- Grid view ---------------------------------- #

def project_grid_cells(grid: np.ndarray, step: Optional[StepEvent], start: Cell, goal: Cell,
                       path: Sequence[Cell] = ()) -> Tuple[np.ndarray, np.ndarray]:
    """
    Per-cell colours (object array of hex strings) and a bool path mask for
    the grid view of one step. `step=None` colours only walls and endpoints.
    """
    H, W = grid.shape
    colors = np.full((H, W), CELL_COLORS["open"], dtype=object)
    path_mask = np.zeros((H, W), dtype=bool)
    if H == 0 or W == 0:
        return colors, path_mask

    if step is not None:
        for cell in step.explored:
            colors[cell] = CELL_COLORS["explored"]
        for cell in step.frontier:
            colors[cell] = CELL_COLORS["frontier"]
        for cell in step.newly_added:
            colors[cell] = CELL_COLORS["new"]
        colors[step.current] = CELL_COLORS["current"]

    colors[grid.astype(bool)] = CELL_COLORS["wall"]
    colors[tuple(goal)] = CELL_COLORS["goal"]
    colors[tuple(start)] = CELL_COLORS["start"]

    for cell in path:
        path_mask[tuple(cell)] = True
    return colors, path_mask


__all__ = [
    "NODE_COLORS", "EDGE_COLORS", "CELL_COLORS",
    "NodeRenderState", "EdgeRenderState", "RenderState",
    "node_label", "node_color",
    "project_render_state", "project_step", "project_grid_cells",
]
