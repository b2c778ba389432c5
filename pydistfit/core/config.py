"""
Configuration dataclasses.

Every tunable constant used by the estimators, the root finders, the
bootstrap engine and the modeler lives in one of these frozen dataclasses.
They are passed explicitly to whatever needs them, so two estimators in
the same process can run with different settings.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from pydistfit.core.exceptions import ValidationError
from pydistfit.core.validation import check_level, check_positive, check_positive_int


REDUCED_PERCENTILES: tuple[float, ...] = (0.1, 0.2, 0.3, 0.4)
EXPANDED_PERCENTILES: tuple[float, ...] = (
    0.05, 0.1, 0.15, 0.2, 0.25, 0.3, 0.35, 0.4, 0.45,
)


@dataclass(frozen=True)
class RootFindingConfig:
    """
    Settings for bisection and interval search.

    Attributes:
        desired_precision: Stop when |f(x)| or the bracket width falls below this.
        max_iterations: Hard cap on bisection steps.
        search_factor: Growth factor for each outward interval expansion.
        max_search_iterations: Hard cap on interval expansions.
    """
    desired_precision: float = 0.0001
    max_iterations: int = 100
    search_factor: float = 1.6
    max_search_iterations: int = 50

    def __post_init__(self):
        check_positive(self.desired_precision, "desired_precision")
        check_positive_int(self.max_iterations, "max_iterations")
        check_positive(self.search_factor, "search_factor")
        check_positive_int(self.max_search_iterations, "max_search_iterations")


@dataclass(frozen=True)
class EstimationConfig:
    """
    Settings shared by the parameter estimators.

    Attributes:
        zero_tolerance: Values this close to zero are treated as zero
            (shift estimates, lower ends of MLE search intervals).
        root_finding: Bisection settings for the MLE estimators.
        gamma_interval_factor: Half-width multiplier for the Gamma MLE
            search interval (shape +/- factor * sqrt(shape)).
        weibull_newton_steps: Newton iterations used to seed the Weibull MLE.
        weibull_bisection_width: Half-width of the Weibull MLE bisection interval.
        weibull_sample_size_factor: Below this sample size the percentile
            estimator uses the reduced percentile set.
        weibull_reduced_percentiles: Lower-half percentiles for small samples.
        weibull_expanded_percentiles: Lower-half percentiles otherwise.
    """
    zero_tolerance: float = 0.001
    root_finding: RootFindingConfig = field(default_factory=RootFindingConfig)
    gamma_interval_factor: float = 3.0
    weibull_newton_steps: int = 10
    weibull_bisection_width: float = 10.0
    weibull_sample_size_factor: int = 20
    weibull_reduced_percentiles: tuple[float, ...] = REDUCED_PERCENTILES
    weibull_expanded_percentiles: tuple[float, ...] = EXPANDED_PERCENTILES

    def __post_init__(self):
        check_positive(self.zero_tolerance, "zero_tolerance")
        check_positive(self.gamma_interval_factor, "gamma_interval_factor")
        check_positive_int(self.weibull_newton_steps, "weibull_newton_steps")
        check_positive(self.weibull_bisection_width, "weibull_bisection_width")
        check_positive_int(self.weibull_sample_size_factor, "weibull_sample_size_factor")
        for name in ("weibull_reduced_percentiles", "weibull_expanded_percentiles"):
            values = getattr(self, name)
            if len(values) == 0:
                raise ValidationError(f"{name}: must not be empty")
            if any(not (0.0 < p < 0.5) for p in values):
                raise ValidationError(
                    f"{name}: percentiles must lie in (0, 0.5), got {values}"
                )


@dataclass(frozen=True)
class BootstrapConfig:
    """
    Settings for bootstrap resampling.

    Attributes:
        num_samples: Number of bootstrap resamples.
        level: Confidence level for percentile intervals.
        seed: Seed for the resampling streams; None draws fresh entropy.
        n_jobs: Worker threads for the resample loop (1 = sequential).
    """
    num_samples: int = 399
    level: float = 0.95
    seed: int | None = None
    n_jobs: int = 1

    def __post_init__(self):
        check_positive_int(self.num_samples, "num_samples")
        check_level(self.level, "level")
        check_positive_int(self.n_jobs, "n_jobs")


SCALING_FUNCTIONS = ("linear", "logistic")
RANKING_METHODS = ("ordinal", "dense", "min", "average")
EVALUATION_METHODS = ("scoring", "ranking")


@dataclass(frozen=True)
class ModelingConfig:
    """
    Settings for a full estimate-score-rank session.

    Attributes:
        automatic_shifting: Estimate and remove a left shift before running
            estimators that require a range check.
        zero_tolerance: Shift threshold compared against the lower limit of
            the bootstrap interval for the minimum.
        shift_bootstrap: Bootstrap settings for the interval on the minimum.
        scaling_function: 'linear' or 'logistic' value functions.
        logistic_factor: Quantile factor for logistic value functions, in (0, 0.5).
        ranking_method: How ties are ranked within a metric.
        evaluation_method: 'scoring' ranks by weighted value,
            'ranking' by average rank across metrics.
        adjust_lower_limits: Rescale metric lower limits from observed scores.
        adjust_upper_limits: Rescale metric upper limits from observed scores.
        n_jobs: Worker threads for the per-family estimation and scoring loops.
    """
    automatic_shifting: bool = True
    zero_tolerance: float = 0.001
    shift_bootstrap: BootstrapConfig = field(default_factory=BootstrapConfig)
    scaling_function: str = "linear"
    logistic_factor: float = 0.25
    ranking_method: str = "ordinal"
    evaluation_method: str = "scoring"
    adjust_lower_limits: bool = False
    adjust_upper_limits: bool = True
    n_jobs: int = 1

    def __post_init__(self):
        check_positive(self.zero_tolerance, "zero_tolerance")
        if not 0.0 < self.logistic_factor < 0.5:
            raise ValidationError(f"logistic_factor: must be in (0, 0.5), got {self.logistic_factor}")
        check_positive_int(self.n_jobs, "n_jobs")
        if self.scaling_function not in SCALING_FUNCTIONS:
            raise ValidationError(
                f"scaling_function: must be one of {SCALING_FUNCTIONS}, "
                f"got {self.scaling_function!r}"
            )
        if self.ranking_method not in RANKING_METHODS:
            raise ValidationError(
                f"ranking_method: must be one of {RANKING_METHODS}, "
                f"got {self.ranking_method!r}"
            )
        if self.evaluation_method not in EVALUATION_METHODS:
            raise ValidationError(
                f"evaluation_method: must be one of {EVALUATION_METHODS}, "
                f"got {self.evaluation_method!r}"
            )


DEFAULT_ROOT_FINDING = RootFindingConfig()
DEFAULT_ESTIMATION = EstimationConfig()
DEFAULT_BOOTSTRAP = BootstrapConfig()
DEFAULT_MODELING = ModelingConfig()
