"""
Exception hierarchy for pydistfit.

All exceptions inherit from PyDistFitError to allow catching any
library-specific error.

Only caller bugs raise. Properties of the data (too few observations,
values outside a family's support, a root search that does not converge)
are reported through failed EstimationResults or bad Scores instead.
"""


class PyDistFitError(Exception):
    """Base exception for all pydistfit errors."""
    pass


class ValidationError(PyDistFitError):
    """
    Input validation failed.

    Raised when caller-provided inputs (arrays, break points, configuration
    values, family names) fail validation checks.
    """
    pass


class DimensionError(ValidationError):
    """
    Array dimensions are incorrect or inconsistent.

    Raised when a sample is not one-dimensional or when paired arrays
    have different lengths.
    """
    pass


class NumericalError(PyDistFitError):
    """
    Numerical computation failed.

    Base class for errors arising from numerical issues during computation.
    """
    pass


class ConvergenceError(NumericalError):
    """
    Iterative algorithm failed to converge.

    Estimators never raise this themselves; it is available to callers of
    the root-finding utilities who prefer an exception over inspecting
    RootSolution.converged.

    Attributes:
        iterations: Number of iterations completed
        final_change: Final bracket width or function value
        reason: Why convergence failed (e.g., 'max_iterations', 'no_bracket')
        threshold: The convergence threshold that was not met
    """

    def __init__(
        self,
        message: str,
        iterations: int,
        final_change: float | None = None,
        reason: str | None = None,
        threshold: float | None = None
    ):
        super().__init__(message)
        self.iterations = iterations
        self.final_change = final_change
        self.reason = reason
        self.threshold = threshold
