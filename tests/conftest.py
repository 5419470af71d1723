"""
pytest configuration and shared fixtures.

Models are built from simulated count data with a known number of
observations (n=20) and responses (p=6). Residuals and information
criteria are supplied directly, standing in for the fitting machinery.
"""

import matplotlib

matplotlib.use('Agg')

import matplotlib.pyplot as plt
import numpy as np
import pytest

from pygllvm.model import (
    FittedModel,
    GllvmParams,
    InformationCriteria,
    ResidualSet,
)


N_OBS = 20
N_RESP = 6
NUM_LV = 2


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return np.random.default_rng(42)


@pytest.fixture(autouse=True)
def close_figures():
    """Release figures created by a test."""
    yield
    plt.close('all')


@pytest.fixture
def counts(rng):
    """Count matrix (20, 6) whose columns have clearly different totals."""
    means = np.array([4.0, 0.5, 8.0, 2.0, 12.0, 1.0])
    return rng.poisson(means, size=(N_OBS, N_RESP)).astype(float)


@pytest.fixture
def base_params(rng):
    """Intercepts, loadings and latent scores for a two-LV model."""
    return dict(
        beta0=rng.normal(0.0, 1.0, N_RESP),
        theta=np.tril(rng.normal(0.0, 1.0, (N_RESP, NUM_LV))),
        lvs=rng.normal(0.0, 1.0, (N_OBS, NUM_LV)),
    )


@pytest.fixture
def make_model(counts, base_params):
    """Factory for validated models; keyword arguments override defaults."""

    def _make(family='poisson', params=None, **kwargs):
        fields = dict(base_params)
        fields.update(params or {})
        kwargs.setdefault('num_lv', NUM_LV)
        kwargs.setdefault('log_likelihood', -412.37)
        kwargs.setdefault('call', 'gllvm(y = y, family = "poisson", num.lv = 2)')
        return FittedModel.validate(
            counts, GllvmParams(**fields), family, **kwargs,
        )

    return _make


@pytest.fixture
def poisson_model(make_model):
    return make_model('poisson')


@pytest.fixture
def residual_set(rng, poisson_model):
    """Standard normal residuals and linear predictors of the model shape."""
    n, p = poisson_model.shape
    return ResidualSet(
        residuals=rng.standard_normal((n, p)),
        linpred=rng.normal(1.0, 1.5, (n, p)),
    )


@pytest.fixture
def criteria():
    return InformationCriteria(k=31, aic=886.74, aicc=891.02, bic=974.1)
