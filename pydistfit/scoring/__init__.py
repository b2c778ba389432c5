"""
Goodness-of-fit scoring.

Public API:
    Metric, Score, Direction         - measures, raw values, preferred direction
    ScoringModel and its subclasses  - (data, distribution) -> Score
    default_scoring_models()         - BIC, Anderson-Darling, Cramer-von Mises, Q-Q correlation
    all_scoring_models()             - one of every model
    gof_test(data, distribution)     - chi-squared and EDF statistics with p-values
    anderson_darling_cdf, cramer_von_mises_cdf, watson_cdf
"""

from pydistfit.scoring._common import (
    MAX_VALUE,
    Direction,
    Metric,
    Score,
    EDFStatistic,
    ChiSquaredTest,
    GOFParams,
)
from pydistfit.scoring._cdf_approx import (
    anderson_darling_cdf,
    cramer_von_mises_cdf,
    watson_cdf,
    watson_asymptotic_cdf,
)
from pydistfit.scoring._statistics import (
    anderson_darling_statistic,
    cramer_von_mises_statistic,
    watson_statistic,
    ks_statistic,
    chi_squared_statistic,
    pp_sum_of_squares,
    qq_sum_of_squares,
    pp_correlation,
    qq_correlation,
    aic,
    bic,
)
from pydistfit.scoring.models import (
    ScoringModel,
    ChiSquaredScoringModel,
    SquaredErrorScoringModel,
    AndersonDarlingScoringModel,
    CramerVonMisesScoringModel,
    WatsonScoringModel,
    KSScoringModel,
    PPSSEScoringModel,
    QQSSEScoringModel,
    MallowsL2ScoringModel,
    PPCorrelationScoringModel,
    QQCorrelationScoringModel,
    AICScoringModel,
    BICScoringModel,
    ParameterMSEScoringModel,
    chi_squared_histogram,
    default_scoring_models,
    all_scoring_models,
)
from pydistfit.scoring.solution import GOFSolution
from pydistfit.scoring.solvers import gof_test, score_results

__all__ = [
    "MAX_VALUE",
    "Direction",
    "Metric",
    "Score",
    "EDFStatistic",
    "ChiSquaredTest",
    "GOFParams",
    "anderson_darling_cdf",
    "cramer_von_mises_cdf",
    "watson_cdf",
    "watson_asymptotic_cdf",
    "anderson_darling_statistic",
    "cramer_von_mises_statistic",
    "watson_statistic",
    "ks_statistic",
    "chi_squared_statistic",
    "pp_sum_of_squares",
    "qq_sum_of_squares",
    "pp_correlation",
    "qq_correlation",
    "aic",
    "bic",
    "ScoringModel",
    "ChiSquaredScoringModel",
    "SquaredErrorScoringModel",
    "AndersonDarlingScoringModel",
    "CramerVonMisesScoringModel",
    "WatsonScoringModel",
    "KSScoringModel",
    "PPSSEScoringModel",
    "QQSSEScoringModel",
    "MallowsL2ScoringModel",
    "PPCorrelationScoringModel",
    "QQCorrelationScoringModel",
    "AICScoringModel",
    "BICScoringModel",
    "ParameterMSEScoringModel",
    "chi_squared_histogram",
    "default_scoring_models",
    "all_scoring_models",
    "GOFSolution",
    "gof_test",
    "score_results",
]
