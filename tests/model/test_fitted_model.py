"""Tests for FittedModel validation and the residual view."""

import numpy as np
import pytest

from pygllvm.core.exceptions import DimensionError, ValidationError
from pygllvm.model import (
    Family,
    FittedModel,
    GllvmParams,
    ResidualSet,
    RowEffect,
)


class TestFittedModelBasics:
    """A valid fit is stored as read-only arrays with derived sizes."""

    def test_dimensions(self, poisson_model):
        assert poisson_model.n == 20
        assert poisson_model.p == 6
        assert poisson_model.shape == (20, 6)
        assert poisson_model.num_lv == 2

    def test_family_parsed(self, poisson_model):
        assert poisson_model.family is Family.POISSON

    def test_default_response_names(self, poisson_model):
        assert poisson_model.response_names == tuple(f"V{j}" for j in range(1, 7))

    def test_custom_response_names(self, make_model):
        names = ['Camponotus', 'Iridomyrmex', 'Melophorus',
                 'Pheidole', 'Rhytidoponera', 'Tetramorium']
        model = make_model(response_names=names)
        assert model.response_names == tuple(names)

    def test_arrays_are_read_only(self, poisson_model):
        with pytest.raises(ValueError):
            poisson_model.y[0, 0] = 99.0
        with pytest.raises(ValueError):
            poisson_model.params.beta0[0] = 99.0

    def test_input_not_aliased(self, counts, base_params):
        model = FittedModel.validate(counts, GllvmParams(**base_params), 'poisson')
        counts[0, 0] = -1.0
        assert model.y[0, 0] != -1.0

    def test_column_order_ascending_totals(self, poisson_model):
        totals = poisson_model.y.sum(axis=0)
        order = poisson_model.column_order
        assert np.all(np.diff(totals[order]) >= 0)

    def test_no_latent_variables(self, counts, base_params):
        params = GllvmParams(beta0=base_params['beta0'])
        model = FittedModel.validate(counts, params, 'poisson', num_lv=0)
        assert model.params.theta.shape == (6, 0)

    def test_one_dimensional_response(self, rng):
        y = rng.poisson(3.0, size=15)
        model = FittedModel.validate(
            y, GllvmParams(beta0=[0.5]), 'poisson', num_lv=0,
        )
        assert model.shape == (15, 1)

    def test_row_effect_default_none(self, poisson_model):
        assert poisson_model.row_eff is RowEffect.NONE


class TestFittedModelValidation:
    """Inconsistent fits are rejected at construction."""

    def test_unknown_family(self, make_model):
        with pytest.raises(ValidationError, match="Unknown family"):
            make_model('lognormal')

    def test_beta0_wrong_length(self, make_model):
        with pytest.raises(DimensionError, match="beta0"):
            make_model(params={'beta0': np.zeros(5)})

    def test_theta_wrong_shape(self, make_model):
        with pytest.raises(DimensionError, match="theta"):
            make_model(params={'theta': np.zeros((6, 3))})

    def test_theta_required_with_lvs(self, counts, base_params):
        params = GllvmParams(beta0=base_params['beta0'])
        with pytest.raises(ValidationError, match="theta"):
            FittedModel.validate(counts, params, 'poisson', num_lv=2)

    def test_negative_num_lv(self, make_model):
        with pytest.raises(ValidationError, match="num_lv"):
            make_model(num_lv=-1)

    def test_non_finite_y(self, counts, base_params):
        counts[3, 2] = np.nan
        with pytest.raises(ValidationError, match="non-finite"):
            FittedModel.validate(counts, GllvmParams(**base_params), 'poisson')

    def test_x_row_mismatch(self, make_model, rng):
        with pytest.raises(ValidationError, match="X has 19 rows"):
            make_model(X=rng.normal(size=(19, 2)),
                       params={'xcoef': np.zeros((6, 2))})

    def test_tr_row_mismatch(self, make_model, rng):
        with pytest.raises(ValidationError, match="TR has 4 rows"):
            make_model(TR=rng.normal(size=(4, 2)))

    def test_xcoef_required_with_x(self, make_model, rng):
        with pytest.raises(ValidationError, match="xcoef"):
            make_model(X=rng.normal(size=(20, 2)))

    def test_b_required_with_x_and_tr(self, make_model, rng):
        with pytest.raises(ValidationError, match="b:"):
            make_model(X=rng.normal(size=(20, 2)), TR=rng.normal(size=(6, 1)))

    def test_fixed_row_effect_requires_row_params(self, make_model):
        with pytest.raises(ValidationError, match="row_params"):
            make_model(row_eff='fixed')

    def test_random_row_effect_requires_sigma(self, make_model):
        with pytest.raises(ValidationError, match="sigma"):
            make_model(row_eff='random')

    def test_phi_wrong_length(self, make_model):
        with pytest.raises(DimensionError, match="phi"):
            make_model('negative.binomial', params={'phi': np.ones(3)})

    def test_response_names_wrong_length(self, make_model):
        with pytest.raises(ValidationError, match="response_names"):
            make_model(response_names=['a', 'b'])

    def test_covariate_names_default(self, make_model, rng):
        model = make_model(X=rng.normal(size=(20, 3)),
                           params={'xcoef': np.zeros((6, 3))})
        assert model.covariate_names == ('X1', 'X2', 'X3')

    def test_params_type_checked(self, counts):
        with pytest.raises(ValidationError, match="GllvmParams"):
            FittedModel.validate(counts, {'beta0': np.zeros(6)}, 'poisson')


class TestResidualSetValidation:
    """Residual and linear predictor matrices must match y."""

    def test_valid(self, residual_set):
        res = ResidualSet.validate(
            residual_set.residuals, residual_set.linpred, (20, 6),
        )
        assert res.shape == (20, 6)

    def test_residuals_shape_mismatch(self, rng):
        with pytest.raises(DimensionError) as excinfo:
            ResidualSet.validate(
                rng.standard_normal((20, 5)), rng.standard_normal((20, 6)),
                (20, 6),
            )
        assert excinfo.value.name == 'residuals'
        assert excinfo.value.actual == (20, 5)
        assert excinfo.value.expected == (20, 6)

    def test_linpred_shape_mismatch(self, rng):
        with pytest.raises(DimensionError, match="linpred"):
            ResidualSet.validate(
                rng.standard_normal((20, 6)), rng.standard_normal((6, 20)),
                (20, 6),
            )
