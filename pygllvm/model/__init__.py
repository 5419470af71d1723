"""
Fitted GLLVM records.

Public API:
    FittedModel          — validated record of a fitted model
    GllvmParams          — fitted parameter set
    Family               — response distribution (tagged variant)
    RowEffect            — row-effect kind (none, fixed, random)
    ResidualSet          — Dunn-Smyth residuals and linear predictors
    InformationCriteria  — df, AIC, AICc, BIC
"""

from pygllvm.model._common import (
    Family,
    RowEffect,
    GllvmParams,
    ResidualSet,
    InformationCriteria,
)
from pygllvm.model.design import FittedModel

__all__ = [
    "FittedModel",
    "GllvmParams",
    "Family",
    "RowEffect",
    "ResidualSet",
    "InformationCriteria",
]
