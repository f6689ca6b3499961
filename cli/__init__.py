# -*- coding: utf-8 -*-
"""
Command-line entry points (run with `python -m cli.<name>`):

- run_search : one traced search; prints the run, writes JSON trace / PNG of a step
- run_bench  : random-grid benchmark of the traced planners to CSV
"""
__all__ = [
    "run_search",
    "run_bench",
]
