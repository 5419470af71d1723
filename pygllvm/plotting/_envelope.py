"""
Quantile helpers and simulated envelopes for residual diagnostics.

Q-Q plotting positions and the reference line follow R's qqnorm() and
qqline(); quantiles are Hyndman & Fan type 7 (numpy's default 'linear'
method, R's default). Smoothers are lowess fits with R's default span
and robustness iterations.

Reference:
    Dunn, P. K., and Smyth, G. K. (1996). Randomized quantile residuals.
    Journal of Computational and Graphical Statistics, 5, 236-244.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
from numpy.typing import ArrayLike, NDArray
from scipy import stats
from statsmodels.nonparametric.smoothers_lowess import lowess

from pygllvm.core.exceptions import ValidationError


ENVELOPE_PROBS = (0.025, 0.975)


@dataclass(frozen=True)
class QQEnvelope:
    """Pointwise simulated band for a normal Q-Q plot.

    Attributes:
        x: Sorted theoretical quantiles (N,).
        lower: 2.5% percentile of the sorted simulated draws (N,).
        upper: 97.5% percentile of the sorted simulated draws (N,).
        intercept: Mean of the simulated normal draws.
        slope: Standard deviation of the simulated normal draws.
    """
    x: NDArray
    lower: NDArray
    upper: NDArray
    intercept: float
    slope: float


@dataclass(frozen=True)
class SmoothEnvelope:
    """Lowess fit and bootstrap band, sorted by x."""
    x: NDArray
    fit: NDArray
    lower: NDArray
    upper: NDArray


def ppoints(n: int) -> NDArray:
    """Probability points (1..n - a) / (n + 1 - 2a), as R ppoints()."""
    a = 3.0 / 8.0 if n <= 10 else 0.5
    return (np.arange(1, n + 1) - a) / (n + 1 - 2 * a)


def boxplot_whiskers(values: ArrayLike, coef: float = 1.5) -> tuple[float, float]:
    """
    Whisker ends of a Tukey boxplot, as boxplot.stats()$stats[c(1, 5)].

    Hinges are taken from fivenum(); the whiskers extend to the most
    extreme data points within coef * IQR of the hinges.
    """
    x = np.sort(np.asarray(values, dtype=np.float64).ravel())
    x = x[np.isfinite(x)]
    n = len(x)
    if n == 0:
        raise ValidationError("boxplot_whiskers: no finite values")

    n4 = np.floor((n + 3) / 2) / 2
    d = np.array([1.0, n4, (n + 1) / 2, n + 1 - n4, n]) - 1
    five = 0.5 * (x[np.floor(d).astype(int)] + x[np.ceil(d).astype(int)])
    iqr = five[3] - five[1]
    lo = x[x >= five[1] - coef * iqr].min()
    hi = x[x <= five[3] + coef * iqr].max()
    return float(lo), float(hi)


def qq_points(residuals: ArrayLike) -> tuple[NDArray, NDArray]:
    """Theoretical and sample values of a normal Q-Q plot, in input order."""
    y = np.asarray(residuals, dtype=np.float64).ravel(order='F')
    n = len(y)
    ranks = np.argsort(np.argsort(y, kind='stable'), kind='stable')
    x = stats.norm.ppf(ppoints(n))[ranks]
    return x, y


def qq_line(residuals: ArrayLike) -> tuple[float, float]:
    """Intercept and slope of the line through the quartile points."""
    y = np.asarray(residuals, dtype=np.float64).ravel()
    y = y[~np.isnan(y)]
    yq = np.quantile(y, [0.25, 0.75])
    xq = stats.norm.ppf([0.25, 0.75])
    slope = (yq[1] - yq[0]) / (xq[1] - xq[0])
    intercept = yq[0] - slope * xq[0]
    return float(intercept), float(slope)


def qq_envelope(
    residuals: ArrayLike,
    reps: int,
    rng: np.random.Generator,
) -> QQEnvelope:
    """
    Simulate a pointwise envelope for the normal Q-Q plot of residuals.

    Draws reps samples of size N from a normal distribution whose mean and
    standard deviation are the intercept and slope of the quartile line,
    sorts each draw, and takes pointwise 2.5/97.5 percentiles across the
    replications.

    Parameters
    ----------
    residuals : array-like
        Residual matrix; flattened to N = n * p values.
    reps : int
        Number of simulated draws.
    rng : numpy.random.Generator
        Source of the normal variates.

    Returns
    -------
    QQEnvelope
    """
    if reps < 1:
        raise ValidationError(f"reps: expected a positive integer, got {reps}")
    y = np.asarray(residuals, dtype=np.float64).ravel()
    n_obs = len(y)
    intercept, slope = qq_line(y)

    draws = np.sort(rng.normal(intercept, slope, size=(reps, n_obs)), axis=1)
    lower, upper = np.quantile(draws, ENVELOPE_PROBS, axis=0)

    return QQEnvelope(
        x=stats.norm.ppf(ppoints(n_obs)),
        lower=lower,
        upper=upper,
        intercept=intercept,
        slope=slope,
    )


def _lowess_delta(x: NDArray) -> float:
    # R lowess() default
    return 0.01 * float(np.ptp(x)) if len(x) else 0.0


def lowess_smooth(
    x: ArrayLike,
    y: ArrayLike,
    frac: float = 2.0 / 3.0,
    it: int = 3,
) -> tuple[NDArray, NDArray]:
    """Lowess curve sorted by x, as R lowess()."""
    x = np.asarray(x, dtype=np.float64).ravel(order='F')
    y = np.asarray(y, dtype=np.float64).ravel(order='F')
    curve = lowess(y, x, frac=frac, it=it, delta=_lowess_delta(x))
    return curve[:, 0], curve[:, 1]


def smooth_envelope(
    x: ArrayLike,
    y: ArrayLike,
    reps: int,
    rng: np.random.Generator,
    frac: float = 2.0 / 3.0,
    it: int = 3,
) -> SmoothEnvelope:
    """
    Lowess smoother with a residual-bootstrap envelope.

    The smoother is refitted on reps bootstrap responses (fit plus
    resampled smoother residuals); the band is the pointwise 2.5/97.5
    percentile of the refitted curves.
    """
    if reps < 1:
        raise ValidationError(f"reps: expected a positive integer, got {reps}")
    x = np.asarray(x, dtype=np.float64).ravel(order='F')
    y = np.asarray(y, dtype=np.float64).ravel(order='F')
    delta = _lowess_delta(x)

    fit = lowess(y, x, frac=frac, it=it, delta=delta, return_sorted=False)
    resid = y - fit
    curves = np.empty((reps, len(x)))
    for r in range(reps):
        y_star = fit + rng.choice(resid, size=len(resid), replace=True)
        curves[r] = lowess(
            y_star, x, frac=frac, it=it, delta=delta, return_sorted=False
        )
    lower, upper = np.quantile(curves, ENVELOPE_PROBS, axis=0)

    order = np.argsort(x, kind='stable')
    return SmoothEnvelope(
        x=x[order], fit=fit[order], lower=lower[order], upper=upper[order],
    )
