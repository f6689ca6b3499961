# -*- coding: utf-8 -*-
"""
Search-tree views: level-order layout and render-state projection.
The matplotlib renderer lives in treeview.plot and is imported on demand.
"""

from __future__ import annotations

from .layout import DEFAULT_CONFIG, LayoutConfig, LayoutNode, TreeLayout, TreeManager, layout
from .render_state import (
    CELL_COLORS,
    EDGE_COLORS,
    NODE_COLORS,
    EdgeRenderState,
    NodeRenderState,
    RenderState,
    project_grid_cells,
    project_render_state,
    project_step,
)

__all__ = [
    "DEFAULT_CONFIG",
    "LayoutConfig",
    "LayoutNode",
    "TreeLayout",
    "TreeManager",
    "layout",
    "CELL_COLORS",
    "EDGE_COLORS",
    "NODE_COLORS",
    "EdgeRenderState",
    "NodeRenderState",
    "RenderState",
    "project_grid_cells",
    "project_render_state",
    "project_step",
]
