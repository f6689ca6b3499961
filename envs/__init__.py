# -*- coding: utf-8 -*-
"""
Grid model and random grid generation.
Exposes:
- GridProblem, GridConfigError, Cell
- as_grid / validate_endpoints / parse_cell
- parse_grid_text / format_grid_text / load_grid / save_grid
- generate_grid / has_path
"""

from __future__ import annotations

from .grid import (
    Cell,
    GridConfigError,
    GridProblem,
    as_grid,
    format_grid_text,
    in_bounds,
    load_grid,
    parse_cell,
    parse_grid_text,
    save_grid,
    validate_endpoints,
)
from .generator import generate_grid, has_path, free_components

__all__ = [
    "Cell",
    "GridConfigError",
    "GridProblem",
    "as_grid",
    "format_grid_text",
    "in_bounds",
    "load_grid",
    "parse_cell",
    "parse_grid_text",
    "save_grid",
    "validate_endpoints",
    "generate_grid",
    "has_path",
    "free_components",
]
