#!/usr/bin/env python3
# -*- coding: utf-8 -*-

import os, sys
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from collections import defaultdict

import numpy as np

from planners import SearchTreeNode, search
from treeview.layout import LayoutConfig, TreeManager, layout


def _small_tree():
    return [
        SearchTreeNode(id="0,0", parent_id=None, state=(0, 0), depth=0, children=("1,0", "0,1")),
        SearchTreeNode(id="1,0", parent_id="0,0", state=(1, 0), depth=1, children=("2,0",)),
        SearchTreeNode(id="0,1", parent_id="0,0", state=(0, 1), depth=1),
        SearchTreeNode(id="2,0", parent_id="1,0", state=(2, 0), depth=2),
    ]


def test_level_positions_and_bounds():
    out = layout(_small_tree())
    pos = {n.id: (n.x, n.y) for n in out.nodes}
    assert pos["0,0"] == (0.0, 50.0)
    assert pos["1,0"] == (-30.0, 130.0)
    assert pos["0,1"] == (30.0, 130.0)
    assert pos["2,0"] == (0.0, 210.0)
    assert out.width == 2 * 30 + 100
    assert out.height == 2 * 80 + 100
    assert out.root is not None and out.root.id == "0,0"


def test_empty_layout():
    out = layout([])
    assert out.nodes == ()
    assert out.root is None
    assert out.width == 100
    assert out.height == 100


def test_layout_is_deterministic_and_centred_per_level():
    grid = np.zeros((5, 5), dtype=bool)
    grid[2, 1:4] = True
    res = search(grid, (0, 2), (4, 2))
    snapshot = res.steps[-1].tree_snapshot

    a = layout(snapshot)
    b = layout(snapshot)
    assert a == b

    by_level = defaultdict(list)
    for n in a.nodes:
        by_level[n.depth].append(n.x)
    for xs in by_level.values():
        assert abs(float(np.mean(xs))) < 1e-9
        assert len(set(xs)) == len(xs)


def test_siblings_keep_insertion_order():
    res = search(np.zeros((3, 3), dtype=bool), (1, 1), (0, 0))
    out = layout(res.steps[1].tree_snapshot)
    level1 = [n for n in out.nodes if n.depth == 1]
    assert [n.id for n in level1] == ["0,1", "2,1", "1,0", "1,2"]
    assert [n.x for n in level1] == [-90.0, -30.0, 30.0, 90.0]


def test_layout_nodes_carry_tree_fields():
    out = layout(_small_tree())
    node = next(n for n in out.nodes if n.id == "1,0")
    assert node.parent_id == "0,0"
    assert node.state == (1, 0)
    assert node.children == ("2,0",)


def test_custom_config():
    cfg = LayoutConfig(level_height=10, sibling_gap=4, top_offset=0, width_margin=0, height_margin=0)
    out = layout(_small_tree(), cfg)
    pos = {n.id: (n.x, n.y) for n in out.nodes}
    assert pos["1,0"] == (-2.0, 10.0)
    assert pos["2,0"] == (0.0, 20.0)
    assert out.width == 4
    assert out.height == 20


def test_tree_manager_structure_queries():
    tm = TreeManager()
    tm.load_nodes(_small_tree())
    assert tm.max_depth() == 2
    assert [n.id for n in tm.nodes_at_depth(1)] == ["1,0", "0,1"]
    assert tm.get_node("2,0").parent_id == "1,0"
    assert tm.get_node("9,9") is None
    assert len(tm.all_nodes()) == 4

    tm.link_child("0,1", "5,5")
    tm.link_child("0,1", "5,5")
    assert tm.get_node("0,1").children == ("5,5",)
    tm.link_child("missing", "5,5")  # no-op

    tm.clear()
    assert tm.all_nodes() == []
    assert tm.max_depth() == 0


def test_position_cache_is_invalidated_on_change():
    tm = TreeManager()
    tm.load_nodes(_small_tree())
    assert tm.cached_position("0,0") is None
    out = tm.calculate_layout()
    assert tm.cached_position("0,1") == (30.0, 130.0)

    tm.add_node(SearchTreeNode(id="0,2", parent_id="0,1", state=(0, 2), depth=2))
    assert tm.cached_position("0,1") is None
    again = tm.calculate_layout()
    assert len(again.nodes) == len(out.nodes) + 1
    assert tm.cached_position("0,2") == (30.0, 210.0)
