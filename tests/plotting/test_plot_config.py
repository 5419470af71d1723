"""Tests for PlotConfig."""

import pytest

from pygllvm.core.exceptions import ValidationError
from pygllvm.plotting import PlotConfig


class TestGrid:

    @pytest.mark.parametrize("n_panels,expected", [
        (1, (1, 1)),
        (2, (1, 2)),
        (3, (2, 2)),
        (5, (3, 2)),
    ])
    def test_default_two_columns(self, n_panels, expected):
        assert PlotConfig().grid(n_panels) == expected

    def test_explicit_layout(self):
        assert PlotConfig(layout=(1, 5)).grid(5) == (1, 5)

    def test_layout_too_small(self):
        with pytest.raises(ValidationError, match="cells"):
            PlotConfig(layout=(1, 2)).grid(3)

    def test_figure_size_scales(self):
        assert PlotConfig().figure_size(3, 2) == (10.0, 12.0)

    def test_figure_size_explicit(self):
        assert PlotConfig(figsize=(8, 6)).figure_size(3, 2) == (8, 6)


class TestValidation:

    @pytest.mark.parametrize("kwargs", [
        {'smoother_span': 0.0},
        {'smoother_span': 1.5},
        {'smoother_iterations': -1},
        {'alpha': 2.0},
        {'layout': (0, 2)},
        {'layout': (1, 2, 3)},
        {'xlim': (1.0,)},
    ])
    def test_invalid(self, kwargs):
        with pytest.raises(ValidationError):
            PlotConfig(**kwargs)

    def test_frozen(self):
        config = PlotConfig()
        with pytest.raises(AttributeError):
            config.alpha = 0.5
