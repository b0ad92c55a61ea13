"""Numbers behind the charts: correlation matrices and grouped estimators."""

from .aggregation import ESTIMATORS, aggregate, category_levels
from .correlation import (
    CORRELATION_METHODS,
    correlation_matrix,
    correlation_pvalues,
    matrix_to_dict,
    strongest_pairs,
)

__all__ = [
    "ESTIMATORS",
    "aggregate",
    "category_levels",
    "CORRELATION_METHODS",
    "correlation_matrix",
    "correlation_pvalues",
    "matrix_to_dict",
    "strongest_pairs",
]
