"""
Distribution modeling: estimate, score and rank candidate distributions.

Usage:
    from pydistfit.modeler import fit_distributions

    results = fit_distributions(data)
    print(results.summary())
    results.rank("Exponential")   # 1 = recommended, 0 = not fitted
"""

from pydistfit.modeler._common import (
    EvaluationMethod,
    FamilyFrequency,
    ModelingParams,
    ScoringResult,
)
from pydistfit.modeler.modeler import PDFModeler
from pydistfit.modeler.solution import PDFModelingResults
from pydistfit.modeler.solvers import bootstrap_family_frequency, fit_distributions

__all__ = [
    "EvaluationMethod",
    "FamilyFrequency",
    "ModelingParams",
    "ScoringResult",
    "PDFModeler",
    "PDFModelingResults",
    "fit_distributions",
    "bootstrap_family_frequency",
]
