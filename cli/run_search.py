#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
run_search.py
-------------
Run one traced search and report it:
- Loads a grid file (.txt/.json/.npz) or generates a random grid
- Runs the selected planner (bfs/dfs) and prints status, path and step count
- Optionally writes the full step trace as JSON and a PNG of one step
  (grid view + search tree)

Example:
    python -m cli.run_search --size 12x12 --density 0.25 --seed 3 \
        --ensure success --planner bfs --step -1 \
        --json results/trace.json --plot results/step.png

Grid convention: grid[r,c] == True means blocked, False means open.
"""

from __future__ import annotations
import argparse
import json
import os
from typing import List, Optional, Tuple

import numpy as np

from envs.grid import GridConfigError, format_grid_text, load_grid, parse_cell
from envs.generator import ENSURE_CHOICES, generate_grid
from planners import PLANNERS, get_planner

TAG = "[run_search]"


def _parse_size(s: str) -> Tuple[int, int]:
    token = s.strip().lower()
    if "x" not in token:
        raise ValueError(f"Bad size '{s}', expected like 20x20")
    h, w = token.split("x")
    return int(h), int(w)


def _parse_density(s: str) -> float:
    token = s.strip()
    if token.endswith("%"):
        return float(token[:-1]) / 100.0
    return float(token)


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="Run a traced grid search and report its steps.")
    ap.add_argument("--grid", type=str, default=None,
                    help="Grid file (.txt, .json or .npz). If omitted, a random grid is generated.")
    ap.add_argument("--size", type=str, default="20x20", help="Random grid size like 20x20")
    ap.add_argument("--density", type=str, default="0.25",
                    help="Random wall density (0–1 or %%, e.g., 25%%)")
    ap.add_argument("--seed", type=int, default=0, help="RNG seed for the random grid")
    ap.add_argument("--ensure", type=str, default="any", choices=list(ENSURE_CHOICES),
                    help="Require the random grid to be solvable (success) or not (failure)")
    ap.add_argument("--start", type=str, default=None, help="Start cell as r,c (overrides the grid file)")
    ap.add_argument("--goal", type=str, default=None, help="Goal cell as r,c (overrides the grid file)")
    ap.add_argument("--planner", type=str, default="bfs", choices=sorted(PLANNERS),
                    help="Traced planner to run")
    ap.add_argument("--step", type=int, default=-1,
                    help="Step index to report/plot (negative counts from the end)")
    ap.add_argument("--json", type=str, default=None, help="Write the full step trace to this JSON file")
    ap.add_argument("--plot", type=str, default=None, help="Save a PNG of the selected step")
    ap.add_argument("--quiet", action="store_true", help="Only print the one-line summary")
    return ap


def _load_problem(args):
    if args.grid:
        problem = load_grid(args.grid)
    else:
        H, W = _parse_size(args.size)
        rng = np.random.default_rng(args.seed)
        problem = generate_grid(H, W, density=_parse_density(args.density),
                                ensure_status=args.ensure, rng=rng)
        problem.settings["seed"] = args.seed
    if args.start:
        problem.start = parse_cell(args.start)
    if args.goal:
        problem.goal = parse_cell(args.goal)
    return problem


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        problem = _load_problem(args)
        planner = get_planner(args.planner)
        result = planner.search(problem.grid, problem.start, problem.goal)
    except GridConfigError as e:
        print(f"{TAG} Invalid grid: {e}")
        return 2
    except (ValueError, RuntimeError) as e:
        print(f"{TAG} Invalid input: {e}")
        return 2

    n = len(result.steps)
    if not -n <= args.step < n:
        print(f"{TAG} Step {args.step} out of range (run has {n} steps)")
        return 2
    index = args.step % n
    step = result.steps[index]

    print(f"{TAG} {planner.name}: {result.status} | path hops={max(len(result.path) - 1, 0)} "
          f"| steps={n} | explored={len(result.steps[-1].explored)}")
    if not args.quiet:
        H, W = problem.shape
        print(f"{TAG} grid {H}x{W}, start={problem.start}, goal={problem.goal}")
        print(format_grid_text(problem.grid, problem.start, problem.goal, result.path))
        print(f"{TAG} step {index}: current={step.current} depth={step.depth} status={step.status} "
              f"frontier={len(step.frontier)} tree={len(step.tree_snapshot)} nodes")

    if args.json:
        if os.path.dirname(args.json):
            os.makedirs(os.path.dirname(args.json), exist_ok=True)
        payload = result.to_dict()
        payload["planner"] = planner.name
        payload["start"] = list(problem.start)
        payload["goal"] = list(problem.goal)
        payload["grid"] = problem.grid.astype(int).tolist()
        with open(args.json, "w") as f:
            json.dump(payload, f)
        print(f"{TAG} Wrote: {args.json}")

    if args.plot:
        from treeview.plot import save_step_figure  # lazy: matplotlib
        save_step_figure(problem.grid, result, index, problem.start, problem.goal, args.plot)
        print(f"{TAG} Saved: {args.plot}")

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
