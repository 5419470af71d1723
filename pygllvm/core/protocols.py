"""
Collaborator protocols for pygllvm.

Residuals and information criteria are computed by the model-fitting
machinery, not by this package. These protocols describe the callables
the plotter and the summary formatter accept in their place.

We use Protocol (structural typing) rather than ABC (nominal typing) so
any plain function with the right signature qualifies.
"""

from __future__ import annotations

from typing import Protocol, TYPE_CHECKING, runtime_checkable

if TYPE_CHECKING:
    from pygllvm.model import FittedModel, InformationCriteria, ResidualSet


@runtime_checkable
class ResidualProvider(Protocol):
    """
    Computes Dunn-Smyth residuals and linear predictors for a model.

    The returned ResidualSet must have matrices of the same shape as the
    model's response matrix.
    """

    def __call__(self, model: 'FittedModel') -> 'ResidualSet':
        ...


@runtime_checkable
class CriteriaProvider(Protocol):
    """
    Computes degrees of freedom and AIC/AICc/BIC for a model.
    """

    def __call__(self, model: 'FittedModel') -> 'InformationCriteria':
        ...
