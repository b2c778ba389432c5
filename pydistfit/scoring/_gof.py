"""
Goodness-of-fit report computation.

Chi-squared over equal-probability bins of the fitted distribution, and
the EDF statistics K-S, Anderson-Darling, Cramer-von Mises and Watson with
their finite-sample p-values.
"""

from __future__ import annotations

import math

from numpy.typing import NDArray
from scipy import stats as sp_stats

from pydistfit.core.exceptions import ValidationError
from pydistfit.distributions import FittedDistribution
from pydistfit.scoring import _statistics as st
from pydistfit.scoring._cdf_approx import (
    anderson_darling_cdf,
    cramer_von_mises_cdf,
    watson_cdf,
)
from pydistfit.scoring._common import ChiSquaredTest, EDFStatistic, GOFParams
from pydistfit.scoring.models import chi_squared_histogram


def _upper_tail(cdf_value: float) -> float:
    return min(max(1.0 - cdf_value, 0.0), 1.0)


def chi_squared_test(
    x: NDArray,
    distribution: FittedDistribution,
    num_estimated_parameters: int,
    warnings_list: list[str],
) -> ChiSquaredTest:
    h = chi_squared_histogram(x, distribution)
    observed = h.bin_counts
    expected = h.expected_counts(distribution)
    dof = h.num_bins - 1 - num_estimated_parameters
    if dof < 0:
        raise ValidationError(
            f"chi-squared: {h.num_bins} bins and {num_estimated_parameters} estimated "
            f"parameters leave {dof} degrees of freedom; use a larger sample"
        )
    statistic = st.chi_squared_statistic(observed, expected)
    if dof == 0 or not math.isfinite(statistic):
        p_value = math.nan if dof == 0 else 0.0
    else:
        p_value = float(sp_stats.chi2.sf(statistic, dof))

    small = int((expected <= 5.0).sum())
    if small > 0:
        warnings_list.append(
            f"Chi-squared approximation may be incorrect: {small} of {h.num_bins} "
            f"bins have expected count <= 5"
        )
    return ChiSquaredTest(
        statistic=statistic,
        dof=dof,
        p_value=p_value,
        break_points=tuple(h.break_points.tolist()),
        observed=tuple(observed.tolist()),
        expected=tuple(expected.tolist()),
    )


def gof_report(
    x: NDArray,
    distribution: FittedDistribution,
    num_estimated_parameters: int,
) -> tuple[GOFParams, list[str]]:
    warnings_list: list[str] = []
    n = x.size
    chi = chi_squared_test(x, distribution, num_estimated_parameters, warnings_list)

    d = st.ks_statistic(x, distribution.cdf)[0]
    ks = EDFStatistic("K-S", d, float(sp_stats.kstwo.sf(d, n)))

    a2 = st.anderson_darling_statistic(x, distribution.cdf)
    ad_p = _upper_tail(anderson_darling_cdf(n, a2)) if math.isfinite(a2) else 0.0
    ad = EDFStatistic("Anderson-Darling", a2, ad_p)

    w2 = st.cramer_von_mises_statistic(x, distribution.cdf)
    cvm = EDFStatistic("Cramer-von Mises", w2, _upper_tail(cramer_von_mises_cdf(n, w2)))

    u2 = st.watson_statistic(x, distribution.cdf)
    watson = EDFStatistic("Watson", u2, _upper_tail(watson_cdf(n, u2)))

    if distribution.is_discrete:
        warnings_list.append(
            "EDF p-values assume a continuous distribution and are conservative "
            "for discrete data"
        )

    params = GOFParams(
        distribution_name=distribution.name,
        n=n,
        num_estimated_parameters=num_estimated_parameters,
        chi_squared=chi,
        ks=ks,
        anderson_darling=ad,
        cramer_von_mises=cvm,
        watson=watson,
    )
    return params, warnings_list
