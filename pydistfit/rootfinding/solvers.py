"""
Root finding for scalar functions.

Used by the maximum likelihood estimators to solve their implicit score
equations. Every loop is capped by an iteration budget from
RootFindingConfig; exhausting the budget is reported through the returned
object, never by raising.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Callable

from pydistfit.core.config import DEFAULT_ROOT_FINDING, RootFindingConfig
from pydistfit.core.exceptions import ConvergenceError, ValidationError

logger = logging.getLogger(__name__)

ScalarFunction = Callable[[float], float]


@dataclass(frozen=True)
class IntervalSearch:
    """
    Outcome of an outward bracket search.

    Attributes:
        found: True when f(lower) and f(upper) have opposite signs.
        lower: Final lower end.
        upper: Final upper end.
        iterations: Expansions performed.
    """
    found: bool
    lower: float
    upper: float
    iterations: int


@dataclass(frozen=True)
class RootSolution:
    """
    Outcome of a bisection search.

    Attributes:
        root: Last iterate (the root when converged).
        value: f(root).
        iterations: Bisection steps taken.
        converged: True when |f(root)| or the bracket width fell below the
            desired precision within the iteration budget.
        lower: Final bracket lower end.
        upper: Final bracket upper end.
    """
    root: float
    value: float
    iterations: int
    converged: bool
    lower: float
    upper: float

    def raise_if_not_converged(self, threshold: float) -> None:
        """Raise ConvergenceError when the search did not converge."""
        if not self.converged:
            raise ConvergenceError(
                f"Bisection did not converge after {self.iterations} iterations",
                iterations=self.iterations,
                final_change=self.upper - self.lower,
                reason='max_iterations',
                threshold=threshold,
            )


def has_root(fn: ScalarFunction, lower: float, upper: float) -> bool:
    """
    True when [lower, upper] brackets a root of fn.

    The interval must satisfy lower < upper and fn must not have the same
    strict sign at both ends. NaN function values never bracket a root.
    """
    if not lower < upper:
        return False
    product = fn(lower) * fn(upper)
    return bool(product <= 0.0)


def find_interval(
    fn: ScalarFunction,
    lower: float,
    upper: float,
    config: RootFindingConfig = DEFAULT_ROOT_FINDING,
) -> IntervalSearch:
    """
    Expand [lower, upper] outward until it brackets a sign change.

    At each step the end with the smaller |f| is pushed away from the other
    end by search_factor times the current width.

    Raises:
        ValidationError: If lower >= upper
    """
    if not lower < upper:
        raise ValidationError(
            f"find_interval: lower must be < upper, got ({lower}, {upper})"
        )
    x1, x2 = float(lower), float(upper)
    f1, f2 = fn(x1), fn(x2)
    factor = config.search_factor
    for j in range(config.max_search_iterations):
        if f1 * f2 < 0.0:
            return IntervalSearch(True, x1, x2, j)
        if abs(f1) < abs(f2):
            x1 += factor * (x1 - x2)
            f1 = fn(x1)
        else:
            x2 += factor * (x2 - x1)
            f2 = fn(x2)
    found = f1 * f2 < 0.0
    if not found:
        logger.debug(
            "find_interval: no sign change after %d expansions, last interval [%g, %g]",
            config.max_search_iterations, x1, x2,
        )
    return IntervalSearch(found, x1, x2, config.max_search_iterations)


def bisection(
    fn: ScalarFunction,
    lower: float,
    upper: float,
    initial: float | None = None,
    config: RootFindingConfig = DEFAULT_ROOT_FINDING,
) -> RootSolution:
    """
    Bisection search for a root of fn in [lower, upper].

    Args:
        fn: Continuous scalar function.
        lower, upper: Bracket with a sign change (see has_root).
        initial: First iterate; the midpoint is used when it is None or
            outside the bracket.
        config: Precision and iteration budget.

    Returns:
        RootSolution. When the budget runs out, converged is False and root
        holds the last iterate.

    Raises:
        ValidationError: If [lower, upper] does not bracket a root.
    """
    if not has_root(fn, lower, upper):
        raise ValidationError(
            f"bisection: the interval [{lower}, {upper}] does not bracket a root"
        )
    lo, hi = float(lower), float(upper)
    f_lo = fn(lo)
    if f_lo == 0.0:
        return RootSolution(lo, 0.0, 0, True, lo, hi)
    if fn(hi) == 0.0:
        return RootSolution(hi, 0.0, 0, True, lo, hi)

    precision = config.desired_precision
    x = initial if initial is not None and lo < initial < hi else 0.5 * (lo + hi)
    fx = fn(x)
    for k in range(1, config.max_iterations + 1):
        if abs(fx) < precision:
            return RootSolution(x, fx, k, True, lo, hi)
        if f_lo * fx < 0.0:
            hi = x
        else:
            lo, f_lo = x, fx
        x = 0.5 * (lo + hi)
        fx = fn(x)
        if hi - lo < precision:
            return RootSolution(x, fx, k, True, lo, hi)

    converged = abs(fx) < precision
    if not converged:
        logger.debug(
            "bisection: no convergence after %d iterations (|f|=%g, width=%g)",
            config.max_iterations, abs(fx), hi - lo,
        )
    return RootSolution(x, fx, config.max_iterations, converged, lo, hi)
