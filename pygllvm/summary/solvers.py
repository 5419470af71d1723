"""
Summary assembly for fitted GLLVMs.

summarize() collects the fit statistics, the coefficient table and the
configuration-dependent parameter sections of a FittedModel into a
SummaryReport.
"""

from __future__ import annotations

import warnings

import numpy as np

from pygllvm.core.exceptions import ValidationError
from pygllvm.core.protocols import CriteriaProvider
from pygllvm.model import FittedModel, InformationCriteria, RowEffect
from pygllvm.summary.solution import CoefficientTable, SummaryReport


def _resolve_criteria(
    model: FittedModel,
    criteria: InformationCriteria | CriteriaProvider,
) -> InformationCriteria:
    """Use precomputed criteria or call the provider."""
    if isinstance(criteria, InformationCriteria):
        return criteria
    if callable(criteria):
        crit = criteria(model)
        if not isinstance(crit, InformationCriteria):
            raise ValidationError(
                f"criteria provider returned {type(crit).__name__}, "
                f"expected InformationCriteria"
            )
        return crit
    raise ValidationError(
        f"criteria: expected InformationCriteria or a callable, "
        f"got {type(criteria).__name__}"
    )


def coefficient_labels(num_lv: int) -> tuple[str, ...]:
    """Column labels of the coefficient table: Intercept, theta.LV1, ..."""
    return ('Intercept',) + tuple(f'theta.LV{i}' for i in range(1, num_lv + 1))


def summarize(
    model: FittedModel,
    criteria: InformationCriteria | CriteriaProvider,
) -> SummaryReport:
    """
    Summarize a fitted GLLVM. Matches R summary.gllvm().

    Parameters
    ----------
    model : FittedModel
        Validated fitted model.
    criteria : InformationCriteria or callable
        Precomputed information criteria, or a provider computing them
        from the model.

    Returns
    -------
    SummaryReport
        'log-likelihood', 'df', 'AIC', 'AICc', 'BIC', 'Call', 'family'
        and 'Coefficients', followed by whichever of 'Covariate
        coefficients', 'Environmental coefficients', 'Row intercepts',
        'Variance of random row intercepts', 'Dispersion parameters' and
        'Zero inflation p' apply to the model.
    """
    if not isinstance(model, FittedModel):
        raise ValidationError(
            f"model: expected FittedModel, got {type(model).__name__}"
        )
    crit = _resolve_criteria(model, criteria)
    params = model.params

    sumry: dict = {}
    sumry['log-likelihood'] = model.log_likelihood
    sumry['df'] = crit.k
    sumry['AIC'] = crit.aic
    sumry['AICc'] = crit.aicc
    sumry['BIC'] = crit.bic
    sumry['Call'] = model.call
    sumry['family'] = model.family.value

    M = np.column_stack([params.beta0, params.theta])
    sumry['Coefficients'] = CoefficientTable(
        values=M,
        row_names=model.response_names,
        col_names=coefficient_labels(model.num_lv),
    )

    if model.X is not None:
        if model.TR is not None:
            sumry['Covariate coefficients'] = params.b
        else:
            sumry['Environmental coefficients'] = CoefficientTable(
                values=params.xcoef,
                row_names=model.response_names,
                col_names=model.covariate_names,
            )

    if params.row_params is not None:
        sumry['Row intercepts'] = params.row_params

    if model.row_eff is RowEffect.RANDOM:
        sumry['Variance of random row intercepts'] = {
            'sigma^2': params.sigma ** 2,
        }

    label = model.family.extra_parameter_label
    if label is not None:
        if params.phi is None:
            warnings.warn(
                f"family {model.family.value!r} has no stored phi; "
                f"'{label}' omitted from summary",
                UserWarning,
                stacklevel=2,
            )
        else:
            sumry[label] = params.phi

    return SummaryReport(sumry)
