"""
Fitted model record for GLLVM diagnostics.

FittedModel validates and organizes what a fitting routine produced: the
response matrix y, optional covariates X and traits TR, the fitted
parameter set and the model configuration (family, number of latent
variables, row-effect kind).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pygllvm.core.exceptions import ValidationError
from pygllvm.core.validation import (
    check_array,
    check_finite,
    check_2d,
    check_shape,
)
from pygllvm.model._common import Family, RowEffect, GllvmParams


def _readonly(array: NDArray) -> NDArray:
    out = np.array(array, dtype=np.float64, copy=True)
    out.setflags(write=False)
    return out


def _labels(
    names: Sequence[str] | None, size: int, prefix: str, name: str,
) -> tuple[str, ...]:
    if names is None:
        return tuple(f"{prefix}{j + 1}" for j in range(size))
    labels = tuple(str(s) for s in names)
    if len(labels) != size:
        raise ValidationError(
            f"{name} has {len(labels)} entries, expected {size}"
        )
    return labels


def _as_matrix(array: ArrayLike, name: str) -> NDArray:
    arr = check_array(array, name)
    if arr.ndim == 1:
        arr = arr.reshape(-1, 1)
    check_2d(arr, name)
    return arr


@dataclass(frozen=True)
class FittedModel:
    """Validated record of a fitted GLLVM.

    Attributes:
        y: Response matrix (n, p).
        X: Covariate matrix (n, nX), or None.
        TR: Trait matrix (p, nTR), or None.
        num_lv: Number of latent variables k.
        family: Response distribution.
        params: Fitted parameters, validated against n, p and k.
        log_likelihood: Maximized log-likelihood.
        call: Textual form of the call that produced the fit.
        row_eff: Row-effect kind.
        response_names: Column labels of y (p,).
        covariate_names: Column labels of X (nX,), empty without X.
    """
    y: NDArray
    X: NDArray | None
    TR: NDArray | None
    num_lv: int
    family: Family
    params: GllvmParams
    log_likelihood: float
    call: str
    row_eff: RowEffect
    response_names: tuple[str, ...]
    covariate_names: tuple[str, ...] = ()

    @property
    def n(self) -> int:
        """Number of observations (rows of y)."""
        return self.y.shape[0]

    @property
    def p(self) -> int:
        """Number of response variables (columns of y)."""
        return self.y.shape[1]

    @property
    def shape(self) -> tuple[int, int]:
        return self.y.shape

    @property
    def column_order(self) -> NDArray:
        """Column indices of y ordered by ascending total response."""
        return np.argsort(self.y.sum(axis=0), kind='stable')

    @staticmethod
    def validate(
        y: ArrayLike,
        params: GllvmParams,
        family: str | Family,
        num_lv: int = 2,
        X: ArrayLike | None = None,
        TR: ArrayLike | None = None,
        row_eff: str | bool | None | RowEffect = False,
        log_likelihood: float = float('nan'),
        call: str = '',
        response_names: Sequence[str] | None = None,
        covariate_names: Sequence[str] | None = None,
    ) -> 'FittedModel':
        """Validate inputs and create a FittedModel.

        Args:
            y: Response matrix. A 1-D input is treated as a single response.
            params: Fitted parameter set.
            family: Family tag or Family member.
            num_lv: Number of latent variables.
            X: Optional covariate matrix with n rows.
            TR: Optional trait matrix with p rows.
            row_eff: False, 'fixed' or 'random'.
            log_likelihood: Maximized log-likelihood of the fit.
            call: Textual call specification, shown in summaries.
            response_names: Optional labels for the columns of y.
                Defaults to V1..Vp.
            covariate_names: Optional labels for the columns of X.
                Defaults to X1..XnX.

        Returns:
            Validated FittedModel. All arrays are read-only copies.

        Raises:
            ValidationError: On invalid configuration.
            DimensionError: On inconsistent shapes.
        """
        y_arr = _as_matrix(y, 'y')
        check_finite(y_arr, 'y')
        n, p = y_arr.shape

        family = Family.parse(family)
        row_eff = RowEffect.parse(row_eff)

        if isinstance(num_lv, bool) or int(num_lv) != num_lv or num_lv < 0:
            raise ValidationError(
                f"num_lv: expected a non-negative integer, got {num_lv!r}"
            )
        num_lv = int(num_lv)

        X_arr = None
        if X is not None:
            X_arr = _as_matrix(X, 'X')
            if X_arr.shape[0] != n:
                raise ValidationError(
                    f"X has {X_arr.shape[0]} rows, expected {n} (matching y)"
                )
        TR_arr = None
        if TR is not None:
            TR_arr = _as_matrix(TR, 'TR')
            if TR_arr.shape[0] != p:
                raise ValidationError(
                    f"TR has {TR_arr.shape[0]} rows, expected {p} "
                    f"(one per column of y)"
                )

        params = _validate_params(
            params, n=n, p=p, num_lv=num_lv,
            row_eff=row_eff, X=X_arr, TR=TR_arr,
        )

        names = _labels(response_names, p, "V", "response_names")
        n_cov = 0 if X_arr is None else X_arr.shape[1]
        cov_names = _labels(covariate_names, n_cov, "X", "covariate_names")

        return FittedModel(
            y=_readonly(y_arr),
            X=None if X_arr is None else _readonly(X_arr),
            TR=None if TR_arr is None else _readonly(TR_arr),
            num_lv=num_lv,
            family=family,
            params=params,
            log_likelihood=float(log_likelihood),
            call=str(call),
            row_eff=row_eff,
            response_names=names,
            covariate_names=cov_names,
        )


def _validate_params(
    params: GllvmParams,
    *,
    n: int,
    p: int,
    num_lv: int,
    row_eff: RowEffect,
    X: NDArray | None,
    TR: NDArray | None,
) -> GllvmParams:
    """Check each fitted parameter against the model dimensions."""
    if not isinstance(params, GllvmParams):
        raise ValidationError(
            f"params: expected GllvmParams, got {type(params).__name__}"
        )

    beta0 = check_array(params.beta0, 'beta0').ravel()
    check_shape(beta0, (p,), 'beta0')

    if params.theta is None:
        if num_lv > 0:
            raise ValidationError(
                f"theta: loadings required for a model with num_lv={num_lv}"
            )
        theta = np.empty((p, 0))
    else:
        theta = check_array(params.theta, 'theta')
        if theta.ndim == 1:
            theta = theta.reshape(-1, 1)
        check_shape(theta, (p, num_lv), 'theta')

    xcoef = None
    if params.xcoef is not None:
        xcoef = check_array(params.xcoef, 'xcoef')
        if xcoef.ndim == 1:
            xcoef = xcoef.reshape(-1, 1)
        if X is not None and TR is None:
            check_shape(xcoef, (p, X.shape[1]), 'xcoef')
    elif X is not None and TR is None:
        raise ValidationError(
            "xcoef: environmental coefficients required when X is given"
        )

    b = None
    if params.b is not None:
        b = check_array(params.b, 'b')
    elif X is not None and TR is not None:
        raise ValidationError(
            "b: covariate coefficients required when both X and TR are given"
        )

    row_params = None
    if params.row_params is not None:
        row_params = check_array(params.row_params, 'row_params').ravel()
        check_shape(row_params, (n,), 'row_params')
    elif row_eff is RowEffect.FIXED:
        raise ValidationError(
            "row_params: row intercepts required for row_eff='fixed'"
        )

    sigma = None
    if params.sigma is not None:
        sigma = float(np.asarray(params.sigma, dtype=np.float64).ravel()[0])
    elif row_eff is RowEffect.RANDOM:
        raise ValidationError(
            "sigma: row effect scale required for row_eff='random'"
        )

    phi = None
    if params.phi is not None:
        phi = check_array(params.phi, 'phi').ravel()
        check_shape(phi, (p,), 'phi')

    lvs = None
    if params.lvs is not None:
        lvs = check_array(params.lvs, 'lvs')
        if lvs.ndim == 1:
            lvs = lvs.reshape(-1, 1)
        check_shape(lvs, (n, num_lv), 'lvs')

    return GllvmParams(
        beta0=_readonly(beta0),
        theta=_readonly(theta),
        xcoef=None if xcoef is None else _readonly(xcoef),
        b=None if b is None else _readonly(b),
        row_params=None if row_params is None else _readonly(row_params),
        sigma=sigma,
        phi=None if phi is None else _readonly(phi),
        lvs=None if lvs is None else _readonly(lvs),
    )
