"""
Root-finding utilities.

Public API:
    has_root(fn, lower, upper)      - does the interval bracket a root?
    find_interval(fn, lower, upper) - outward bracket expansion
    bisection(fn, lower, upper)     - bisection with iteration cap
"""

from pydistfit.rootfinding.solvers import (
    IntervalSearch,
    RootSolution,
    has_root,
    find_interval,
    bisection,
)

__all__ = [
    "IntervalSearch",
    "RootSolution",
    "has_root",
    "find_interval",
    "bisection",
]
