"""
CPU backend for bootstrap resampling.

Each resample gets its own random stream spawned from the design seed, so
the replicates are identical whether the loop runs sequentially or on a
thread pool.
"""

from __future__ import annotations

import logging

import numpy as np
from numpy.typing import NDArray

from pydistfit.core.compute.timing import Timer
from pydistfit.core.exceptions import ValidationError
from pydistfit.core.parallel import ordered_map, spawn_generators
from pydistfit.core.result import Result
from pydistfit.montecarlo._ci import percentile_ci
from pydistfit.montecarlo._common import BootstrapEstimate, BootstrapParams
from pydistfit.montecarlo.design import BootstrapDesign

logger = logging.getLogger(__name__)


class CPUBootstrapBackend:
    """Ordinary nonparametric bootstrap on the CPU."""

    @property
    def name(self) -> str:
        return 'cpu_bootstrap'

    def solve(self, design: BootstrapDesign) -> Result[BootstrapParams]:
        """Run the bootstrap and return Result[BootstrapParams]."""
        timer = Timer()
        timer.start()

        data = design.data
        estimator = design.estimator
        cfg = design.config
        R = cfg.num_samples
        n = data.shape[0]

        with timer.section('t0_computation'):
            t0 = np.asarray(estimator(data), dtype=np.float64)
        k = len(design.names)
        if t0.shape != (k,) or not np.all(np.isfinite(t0)):
            raise ValidationError(
                f"bootstrap: the estimator produced no usable estimate on the "
                f"original sample ({design.label})"
            )

        def replicate(rng: np.random.Generator) -> NDArray | None:
            sample = data[rng.integers(0, n, size=n)]
            est = np.asarray(estimator(sample), dtype=np.float64)
            if est.shape != (k,) or not np.all(np.isfinite(est)):
                return None
            return est

        with timer.section('bootstrap_replicates'):
            streams = spawn_generators(cfg.seed, R)
            replicates = ordered_map(replicate, streams, n_jobs=cfg.n_jobs)

        ok = [r for r in replicates if r is not None]
        num_failed = R - len(ok)
        t = np.vstack(ok) if ok else np.empty((0, k), dtype=np.float64)

        warnings_list: list[str] = []
        if num_failed > 0:
            warnings_list.append(
                f"{num_failed} of {R} resamples could not be estimated and were dropped"
            )
            logger.info("bootstrap %s: dropped %d of %d resamples",
                        design.label, num_failed, R)

        with timer.section('summary_statistics'):
            estimates = tuple(
                _summarize(name, float(t0[j]), t[:, j], cfg.level)
                for j, name in enumerate(design.names)
            )

        timer.stop()

        params = BootstrapParams(
            t0=t0,
            t=t,
            names=tuple(design.names),
            num_requested=R,
            num_failed=num_failed,
            estimates=estimates,
        )
        return Result(
            params=params,
            info={
                'n': n,
                'k': k,
                'num_samples': R,
                'num_failed': num_failed,
                'level': cfg.level,
                'seed': cfg.seed,
            },
            timing=timer.result(),
            backend_name=self.name,
            warnings=tuple(warnings_list),
        )


def _summarize(name: str, original: float, values: NDArray, level: float) -> BootstrapEstimate:
    m = len(values)
    if m == 0:
        nan = float('nan')
        return BootstrapEstimate(name, original, nan, nan, nan, nan, (nan, nan), level, 0)
    mean = float(np.mean(values))
    variance = float(np.var(values, ddof=1)) if m > 1 else 0.0
    bias = mean - original
    return BootstrapEstimate(
        name=name,
        original=original,
        mean=mean,
        bias=bias,
        variance=variance,
        mse=variance + bias * bias,
        ci=percentile_ci(values, level),
        level=level,
        num_samples=m,
    )
