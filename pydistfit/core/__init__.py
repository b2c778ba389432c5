"""
Core infrastructure for pydistfit.

Shared abstractions used by every domain sub-package.

Key components:
    result: Generic Result[P] envelope
    exceptions: Exception hierarchy
    validation: Input validators
    config: Frozen configuration dataclasses
    logging: Logging setup helpers
    parallel: Ordered thread-pool map and per-task random streams
    compute: Timing
"""

from pydistfit.core.result import Result
from pydistfit.core.exceptions import (
    PyDistFitError,
    ValidationError,
    DimensionError,
    NumericalError,
    ConvergenceError,
)
from pydistfit.core.config import (
    RootFindingConfig,
    EstimationConfig,
    BootstrapConfig,
    ModelingConfig,
)
from pydistfit.core.logging import configure_logging, get_logger

__all__ = [
    # Result
    "Result",
    # Exceptions
    "PyDistFitError",
    "ValidationError",
    "DimensionError",
    "NumericalError",
    "ConvergenceError",
    # Configuration
    "RootFindingConfig",
    "EstimationConfig",
    "BootstrapConfig",
    "ModelingConfig",
    # Logging
    "configure_logging",
    "get_logger",
]
