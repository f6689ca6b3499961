#!/usr/bin/env python3
# -*- coding: utf-8 -*-

import os, sys
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

import json

import numpy as np
import pytest

from envs.grid import (
    GridConfigError, GridProblem, as_grid, format_grid_text, load_grid,
    parse_cell, parse_grid_text, save_grid, validate_endpoints,
)
from envs.generator import free_components, generate_grid, has_path
from planners import search

MAZE = """
S.#..
..#.#
....G
"""


def test_as_grid_accepts_lists_and_arrays():
    g = as_grid([[0, 1], [2, 0]])
    assert g.dtype == bool
    assert g.tolist() == [[False, True], [True, False]]
    assert as_grid(np.array([[0, 0, 1]])).shape == (1, 3)
    assert as_grid([]).shape == (0, 0)
    assert as_grid(np.array([])).shape == (0, 0)


def test_as_grid_rejects_ragged_and_non_2d():
    with pytest.raises(GridConfigError):
        as_grid([[0, 0], [0]])
    with pytest.raises(GridConfigError):
        as_grid(np.zeros((2, 2, 2)))
    # config errors are ValueErrors for callers that catch broadly
    with pytest.raises(ValueError):
        as_grid([[0], [0, 0, 0]])


def test_validate_endpoints():
    grid = as_grid([[0, 1], [0, 0]])
    validate_endpoints(grid, (0, 0), (1, 1))
    with pytest.raises(GridConfigError):
        validate_endpoints(grid, (0, 0), (2, 1))
    with pytest.raises(GridConfigError):
        validate_endpoints(grid, (0, 1), (1, 1), check_walls=True)


def test_parse_cell():
    assert parse_cell("3, 4") == (3, 4)
    for bad in ("3", "a,b", "1,2,3"):
        with pytest.raises(GridConfigError):
            parse_cell(bad)


def test_parse_grid_text_markers_and_walls():
    p = parse_grid_text(MAZE)
    assert p.shape == (3, 5)
    assert p.start == (0, 0)
    assert p.goal == (2, 4)
    assert p.grid[0, 2] and p.grid[1, 4]
    assert not p.grid[2, 4]
    res = search(p.grid, p.start, p.goal)
    assert res.success


def test_parse_grid_text_defaults_and_errors():
    p = parse_grid_text("...\n.#.\n")
    assert p.start == (0, 0)
    assert p.goal == (1, 2)
    with pytest.raises(GridConfigError):
        parse_grid_text("..x\n...")
    with pytest.raises(GridConfigError):
        parse_grid_text("...\n..")


def test_format_grid_text_draws_path():
    p = parse_grid_text(MAZE)
    res = search(p.grid, p.start, p.goal)
    text = format_grid_text(p.grid, p.start, p.goal, res.path)
    lines = text.splitlines()
    assert lines[0][0] == "S" and lines[2][4] == "G"
    assert text.count("*") == len(res.path) - 2
    assert parse_grid_text(text.replace("*", ".")).grid.tolist() == p.grid.tolist()


@pytest.mark.parametrize("ext", [".txt", ".json", ".npz"])
def test_save_and_load_grid(tmp_path, ext):
    p = parse_grid_text(MAZE)
    path = str(tmp_path / f"maze{ext}")
    save_grid(p, path)
    q = load_grid(path)
    assert q.grid.tolist() == p.grid.tolist()
    assert tuple(q.start) == p.start
    assert tuple(q.goal) == p.goal
    assert q.settings["source"] == path


def test_load_grid_errors(tmp_path):
    with pytest.raises(GridConfigError):
        load_grid(str(tmp_path / "missing.txt"))
    bad = tmp_path / "bad.json"
    bad.write_text("{not json")
    with pytest.raises(GridConfigError):
        load_grid(str(bad))
    nogrid = tmp_path / "nogrid.json"
    nogrid.write_text(json.dumps({"start": [0, 0]}))
    with pytest.raises(GridConfigError):
        load_grid(str(nogrid))


def test_has_path_uses_four_connectivity():
    # diagonal-only contact does not connect
    grid = as_grid([[0, 1],
                    [1, 0]])
    assert not has_path(grid, (0, 0), (1, 1))
    labels, num = free_components(grid)
    assert num == 2
    assert labels[0, 1] == 0
    assert has_path(as_grid([[0, 0], [1, 0]]), (0, 0), (1, 1))


def test_generate_grid_keeps_endpoints_open_and_is_seeded():
    a = generate_grid(15, 15, density=0.4, rng=np.random.default_rng(5))
    b = generate_grid(15, 15, density=0.4, rng=np.random.default_rng(5))
    assert isinstance(a, GridProblem)
    assert np.array_equal(a.grid, b.grid)
    assert not a.grid[a.start] and not a.grid[a.goal]
    assert a.goal == (14, 14)
    assert a.settings["density"] == 0.4


@pytest.mark.parametrize("seed", [0, 1, 2])
def test_generate_grid_honours_ensure_status(seed):
    ok = generate_grid(12, 12, density=0.3, n_rects=2, ensure_status="success",
                       rng=np.random.default_rng(seed))
    assert search(ok.grid, ok.start, ok.goal).success

    bad = generate_grid(12, 12, density=0.35, ensure_status="failure",
                        rng=np.random.default_rng(seed))
    assert not search(bad.grid, bad.start, bad.goal).success


def test_generate_grid_rejects_bad_arguments():
    with pytest.raises(ValueError):
        generate_grid(5, 5, ensure_status="near-failure")
    with pytest.raises(ValueError):
        generate_grid(5, 5, density=1.5)
    with pytest.raises(RuntimeError):
        # a fully walled grid is never solvable
        generate_grid(6, 6, density=1.0, ensure_status="success",
                      rng=np.random.default_rng(0), max_tries=5)


def test_generate_grid_rejects_empty_size_and_outside_endpoints():
    with pytest.raises(ValueError):
        generate_grid(0, 0)
    with pytest.raises(ValueError):
        generate_grid(0, 5)
    with pytest.raises(ValueError):
        generate_grid(4, 4, goal=(4, 0))
    with pytest.raises(ValueError):
        generate_grid(4, 4, start=(-1, 0))
    one = generate_grid(1, 1, density=1.0, rng=np.random.default_rng(0))
    assert one.start == one.goal == (0, 0)
    assert not one.grid[0, 0]


@pytest.mark.parametrize("payload", [
    {"grid": [[0, 0]], "start": [0]},
    {"grid": [[0, 0]], "goal": ["a", 1]},
    {"grid": [[0, 0]], "start": [0.5, 0]},
    {"grid": [[0, 0]], "goal": [True, 0]},
    {"grid": [[0, 0]], "start": 3},
])
def test_load_grid_rejects_malformed_json_endpoints(tmp_path, payload):
    p = tmp_path / "bad_cell.json"
    p.write_text(json.dumps(payload))
    with pytest.raises(GridConfigError):
        load_grid(str(p))
