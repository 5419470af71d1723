"""Tests for the R-style text rendering of SummaryReport."""

import numpy as np
import pytest

from pygllvm.model import FittedModel, GllvmParams
from pygllvm.summary import CoefficientTable, summarize


class TestSummaryText:

    def test_header_blocks(self, poisson_model, criteria):
        text = summarize(poisson_model, criteria).summary()
        lines = text.splitlines()
        assert lines[0] == 'Call:'
        assert lines[1] == poisson_model.call
        assert 'Family:  poisson' in lines
        assert 'Coefficients related to species:' in lines

    def test_fit_statistics_line(self, poisson_model, criteria):
        text = summarize(poisson_model, criteria).summary(digits=2)
        assert 'AIC:  886.74' in text
        assert 'AICc:  891.02' in text
        assert 'BIC:  974.10' in text
        assert 'LL:  -412.37' in text
        assert 'df:  31' in text

    def test_coefficient_header(self, poisson_model, criteria):
        lines = summarize(poisson_model, criteria).summary().splitlines()
        i = lines.index('Coefficients related to species:')
        header = lines[i + 1].split()
        assert header == ['Intercept', 'theta.LV1', 'theta.LV2']
        assert lines[i + 2].startswith('V1')

    def test_empty_call_placeholder(self, make_model, criteria):
        text = summarize(make_model(call=''), criteria).summary()
        assert text.splitlines()[1] == 'gllvm()'

    def test_optional_sections_rendered(self, make_model, criteria):
        phi = np.array([0.1, 0.2, 0.3, 0.4, 0.5, 0.6])
        model = make_model('ZIP', row_eff='random',
                           params={'sigma': 0.5, 'phi': phi})
        text = summarize(model, criteria).summary()
        assert 'Variance of random row intercepts:' in text
        assert 'sigma^2' in text
        assert '0.2500' in text
        assert 'Zero inflation p:' in text
        assert 'V6' in text.split('Zero inflation p:')[1]

    def test_covariate_vector_rendered(self, make_model, criteria, rng):
        model = make_model(X=rng.normal(size=(20, 2)), TR=rng.normal(size=(6, 1)),
                           params={'b': np.array([0.25, -1.5])})
        text = summarize(model, criteria).summary(digits=2)
        block = text.split('Covariate coefficients:')[1]
        assert '0.25 -1.50' in block

    def test_row_intercepts_not_labeled_by_response(self, criteria):
        y = np.array([[1.0, 0.0, 3.0, 2.0],
                      [0.0, 4.0, 1.0, 1.0],
                      [2.0, 1.0, 0.0, 5.0],
                      [3.0, 2.0, 1.0, 0.0]])
        params = GllvmParams(
            beta0=np.zeros(4), row_params=np.array([0.0, 1.0, 2.0, 3.0]),
        )
        model = FittedModel.validate(y, params, 'poisson', num_lv=0,
                                     row_eff='fixed')
        block = summarize(model, criteria).summary().split('Row intercepts:')[1]
        assert 'V1' not in block
        assert '0.0000 1.0000 2.0000 3.0000' in block

    def test_covariate_vector_of_response_length_not_labeled(
        self, make_model, criteria, rng,
    ):
        model = make_model(X=rng.normal(size=(20, 6)), TR=rng.normal(size=(6, 1)),
                           params={'b': np.arange(6.0)})
        block = summarize(model, criteria).summary(digits=1).split(
            'Covariate coefficients:')[1]
        assert 'V1' not in block
        assert '0.0 1.0 2.0 3.0 4.0 5.0' in block


class TestCoefficientTableFormat:

    def test_alignment(self):
        table = CoefficientTable(
            values=np.array([[1.0, -0.5], [10.25, 2.0]]),
            row_names=('sp1', 'species2'),
            col_names=('Intercept', 'theta.LV1'),
        )
        lines = table.format(digits=2)
        assert len(lines) == 3
        assert len({len(line) for line in lines}) == 1
        assert lines[1].startswith('sp1 ')
        assert lines[2].split() == ['species2', '10.25', '2.00']

    def test_shape(self):
        table = CoefficientTable(np.zeros((3, 2)), ('a', 'b', 'c'), ('x', 'y'))
        assert table.shape == (3, 2)

    def test_unknown_row(self):
        table = CoefficientTable(np.zeros((1, 1)), ('a',), ('x',))
        with pytest.raises(KeyError):
            table.row('b')
