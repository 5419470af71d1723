"""
Summaries of fitted GLLVMs.

Public API:
    summarize()       — build a SummaryReport from a FittedModel
    SummaryReport     — read-only mapping of labeled sections
    CoefficientTable  — labeled coefficient matrix
"""

from pygllvm.summary.solvers import summarize, coefficient_labels
from pygllvm.summary.solution import SummaryReport, CoefficientTable

__all__ = [
    "summarize",
    "coefficient_labels",
    "SummaryReport",
    "CoefficientTable",
]
