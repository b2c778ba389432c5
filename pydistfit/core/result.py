"""
Generic result container for all pydistfit computations.

The Result class is the envelope that domain-specific results use:
bootstrap runs, goodness-of-fit reports and modeling sessions all wrap
their own parameter payload in it.

Design decisions:
    - Generic over parameter payload P
    - info dict for flexible metadata (resample counts, failures, method)
    - timing is optional (don't burden unit tests)
    - Immutable (frozen=True)
"""

from dataclasses import dataclass, field
from typing import TypeVar, Generic, Any

P = TypeVar('P')  # Parameter payload type


@dataclass(frozen=True)
class Result(Generic[P]):
    """
    Immutable result envelope.

    Type Parameters:
        P: The domain-specific parameter payload type

    Attributes:
        params: Domain-specific payload (bootstrap estimates, test statistics, ...)
        info: Structured metadata
        timing: Execution timing breakdown, or None if not measured
        backend_name: Identifier of the backend that produced this result
        warnings: Non-fatal issues encountered during computation

    Examples:
        >>> Result(
        ...     params=BootstrapParams(...),
        ...     info={'num_samples': 399, 'num_failed': 0},
        ...     timing={'total_seconds': 0.2, 'resampling': 0.19},
        ...     backend_name='cpu_bootstrap'
        ... )
    """
    params: P
    info: dict[str, Any]
    timing: dict[str, float] | None
    backend_name: str
    warnings: tuple[str, ...] = field(default_factory=tuple)

    def has_warning(self, substring: str) -> bool:
        """Check if any warning contains the given substring."""
        return any(substring in w for w in self.warnings)
