"""
Goodness-of-fit report solution type.

GOFSolution wraps Result[GOFParams] and prints a compact report of the
chi-squared test and the EDF statistics.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from pydistfit.core.result import Result
from pydistfit.distributions import FittedDistribution
from pydistfit.scoring._common import ChiSquaredTest, EDFStatistic, GOFParams


@dataclass
class GOFSolution:
    """
    User-facing goodness-of-fit report.

    Wraps Result[GOFParams]; summary() formats every statistic with its
    p-value.
    """
    _result: Result[GOFParams]
    _distribution: FittedDistribution

    @property
    def distribution(self) -> FittedDistribution:
        return self._distribution

    @property
    def n(self) -> int:
        return self._result.params.n

    @property
    def chi_squared(self) -> ChiSquaredTest:
        return self._result.params.chi_squared

    @property
    def ks(self) -> EDFStatistic:
        return self._result.params.ks

    @property
    def anderson_darling(self) -> EDFStatistic:
        return self._result.params.anderson_darling

    @property
    def cramer_von_mises(self) -> EDFStatistic:
        return self._result.params.cramer_von_mises

    @property
    def watson(self) -> EDFStatistic:
        return self._result.params.watson

    @property
    def statistics(self) -> dict[str, float]:
        """Statistic by name, chi-squared included."""
        out = {"Chi-Squared": self.chi_squared.statistic}
        out.update({s.name: s.statistic for s in self._result.params.edf_statistics})
        return out

    @property
    def p_values(self) -> dict[str, float]:
        out = {"Chi-Squared": self.chi_squared.p_value}
        out.update({s.name: s.p_value for s in self._result.params.edf_statistics})
        return out

    # --- Metadata ---

    @property
    def info(self) -> dict[str, Any]:
        return self._result.info

    @property
    def timing(self) -> dict[str, float] | None:
        return self._result.timing

    @property
    def backend_name(self) -> str:
        return self._result.backend_name

    @property
    def warnings(self) -> tuple[str, ...]:
        return self._result.warnings

    def summary(self) -> str:
        p = self._result.params
        chi = p.chi_squared
        lines = [
            "\tGoodness-of-fit tests",
            "",
            f"distribution:  {p.distribution_name}",
            f"n = {p.n}, estimated parameters = {p.num_estimated_parameters}",
            "",
            f"{'Statistic':<20s}{'Value':>14s}{'p-value':>14s}",
            f"{'Chi-Squared':<20s}{chi.statistic:>14.6g}{_format_pvalue(chi.p_value):>14s}"
            f"   (df = {chi.dof}, bins = {chi.num_bins})",
        ]
        for s in p.edf_statistics:
            lines.append(f"{s.name:<20s}{s.statistic:>14.6g}{_format_pvalue(s.p_value):>14s}")
        for w in self.warnings:
            lines.append(f"Warning: {w}")
        lines.append("")
        return "\n".join(lines)

    def __repr__(self) -> str:
        p = self._result.params
        return (
            f"GOFSolution(distribution={p.distribution_name!r}, n={p.n}, "
            f"chi_squared={p.chi_squared.statistic:.4g}, "
            f"anderson_darling={p.anderson_darling.statistic:.4g})"
        )


def _format_pvalue(p: float) -> str:
    if p != p:
        return "NA"
    if p < 2.2e-16:
        return "< 2.2e-16"
    if p < 0.001:
        return f"{p:.4e}"
    return f"{p:.4g}"
