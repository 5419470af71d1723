"""
Common data types for fitted GLLVMs.

Contains the tagged variants over response family and row-effect kind,
and the frozen payloads describing what the fitting machinery hands over:
the fitted parameter set, the residual view and the information criteria.
Each payload is a pure data container.

References:
    Niku, J., Hui, F. K. C., Taskinen, S., and Warton, D. I. (2019).
    gllvm: Fast analysis of multivariate abundance data with generalized
    linear latent variable models in R. Methods in Ecology and Evolution,
    10, 2173-2182.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from numpy.typing import ArrayLike, NDArray

from pygllvm.core.exceptions import ValidationError
from pygllvm.core.validation import check_array, check_shape


class Family(Enum):
    """Response distribution of a fitted GLLVM."""

    POISSON = 'poisson'
    NEGATIVE_BINOMIAL = 'negative.binomial'
    BINOMIAL = 'binomial'
    ZIP = 'ZIP'
    TWEEDIE = 'tweedie'
    GAUSSIAN = 'gaussian'
    ORDINAL = 'ordinal'

    @classmethod
    def parse(cls, value: 'str | Family') -> 'Family':
        """Resolve a family tag such as 'negative.binomial' or 'zip'."""
        if isinstance(value, Family):
            return value
        if isinstance(value, str):
            key = value.strip().lower()
            for member in cls:
                if member.value.lower() == key:
                    return member
        valid = ', '.join(m.value for m in cls)
        raise ValidationError(f"Unknown family: {value!r}. Valid families: {valid}")

    @property
    def extra_parameter_label(self) -> str | None:
        """Summary label of the per-response phi parameters, or None."""
        return _EXTRA_PARAMETER_LABELS[self]

    def __str__(self) -> str:
        return self.value


# Every Family member must have an entry (checked in tests).
_EXTRA_PARAMETER_LABELS: dict[Family, str | None] = {
    Family.POISSON: None,
    Family.NEGATIVE_BINOMIAL: 'Dispersion parameters',
    Family.BINOMIAL: None,
    Family.ZIP: 'Zero inflation p',
    Family.TWEEDIE: 'Dispersion parameters',
    Family.GAUSSIAN: None,
    Family.ORDINAL: None,
}


class RowEffect(Enum):
    """Kind of row (site) effect included in the model."""

    NONE = 'none'
    FIXED = 'fixed'
    RANDOM = 'random'

    @classmethod
    def parse(cls, value: 'str | bool | None | RowEffect') -> 'RowEffect':
        """Resolve False/None, True, 'fixed' or 'random'."""
        if isinstance(value, RowEffect):
            return value
        if value is None or value is False:
            return cls.NONE
        if value is True:
            return cls.FIXED
        if isinstance(value, str):
            key = value.strip().lower()
            if key in ('', 'none', 'false'):
                return cls.NONE
            for member in cls:
                if member.value == key:
                    return member
        raise ValidationError(
            f"Unknown row effect: {value!r}. Use False, 'fixed' or 'random'"
        )

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class GllvmParams:
    """
    Fitted parameter set of a GLLVM.

    Shapes use n for observations (rows of y), p for responses (columns
    of y) and k for the number of latent variables.
    """
    beta0: NDArray                      # species intercepts (p,)
    theta: NDArray | None = None        # loadings (p, k)
    xcoef: NDArray | None = None        # environmental coefficients (p, nX)
    b: NDArray | None = None            # covariate coefficients, trait models
    row_params: NDArray | None = None   # row intercepts (n,)
    sigma: float | None = None          # random row effect scale
    phi: NDArray | None = None          # dispersion or zero-inflation (p,)
    lvs: NDArray | None = None          # latent variable scores (n, k)


@dataclass(frozen=True)
class ResidualSet:
    """
    Dunn-Smyth residuals and linear predictors of a fitted model.

    Attributes:
        residuals: Randomized quantile residuals (n, p).
        linpred: Linear predictors (n, p).
    """
    residuals: NDArray
    linpred: NDArray

    @property
    def shape(self) -> tuple[int, int]:
        return self.residuals.shape

    @staticmethod
    def validate(
        residuals: ArrayLike,
        linpred: ArrayLike,
        shape: tuple[int, int],
    ) -> 'ResidualSet':
        """Coerce both matrices and check they match the response shape.

        Args:
            residuals: Residual matrix.
            linpred: Linear predictor matrix.
            shape: Shape (n, p) of the response matrix.

        Returns:
            Validated ResidualSet.

        Raises:
            DimensionError: If either matrix is not of shape (n, p).
        """
        res = check_array(residuals, 'residuals')
        eta = check_array(linpred, 'linpred')
        check_shape(res, shape, 'residuals')
        check_shape(eta, shape, 'linpred')
        return ResidualSet(residuals=res, linpred=eta)


@dataclass(frozen=True)
class InformationCriteria:
    """
    Degrees of freedom and information criteria of a fitted model.

    Attributes:
        k: Number of estimated parameters (df).
        aic: Akaike information criterion.
        aicc: Small-sample corrected AIC.
        bic: Bayesian information criterion.
    """
    k: int
    aic: float
    aicc: float
    bic: float
