"""
Rendering configuration for diagnostic plots.

A PlotConfig is passed to one plot_diagnostics() call and applied through
matplotlib.rc_context for that call only; global rcParams are left as
they were.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Mapping

from pygllvm.core.exceptions import ValidationError


@dataclass(frozen=True)
class PlotConfig:
    """
    Figure layout and drawing options.

    Attributes:
        layout: (rows, cols) panel grid. None picks two columns.
        figsize: Figure size in inches. None scales with the grid.
        point_size: Marker area of scatter points.
        qq_point_size: Marker area of Q-Q points.
        alpha: Marker transparency.
        smoother_span: Lowess span (fraction of points per local fit).
        smoother_iterations: Lowess robustness iterations.
        xlim: Fixed x-limits for the linear predictor panels (plots 1 and
            5). None uses the boxplot whiskers of the linear predictors.
            The row and column index panels always span their indices.
        rc_params: Extra matplotlib rc settings, scoped to the call.
    """
    layout: tuple[int, int] | None = None
    figsize: tuple[float, float] | None = None
    point_size: float = 12.0
    qq_point_size: float = 6.0
    alpha: float = 1.0
    smoother_span: float = 2.0 / 3.0
    smoother_iterations: int = 3
    xlim: tuple[float, float] | None = None
    rc_params: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        if not 0.0 < self.smoother_span <= 1.0:
            raise ValidationError(
                f"smoother_span: expected a value in (0, 1], got {self.smoother_span}"
            )
        if self.smoother_iterations < 0:
            raise ValidationError(
                f"smoother_iterations: expected >= 0, got {self.smoother_iterations}"
            )
        if not 0.0 <= self.alpha <= 1.0:
            raise ValidationError(f"alpha: expected a value in [0, 1], got {self.alpha}")
        if self.layout is not None and (
            len(self.layout) != 2 or min(self.layout) < 1
        ):
            raise ValidationError(
                f"layout: expected (rows, cols) of positive integers, got {self.layout}"
            )
        if self.xlim is not None and len(self.xlim) != 2:
            raise ValidationError(f"xlim: expected (low, high), got {self.xlim}")

    def grid(self, n_panels: int) -> tuple[int, int]:
        """Panel grid for n_panels plots."""
        if self.layout is not None:
            rows, cols = self.layout
            if rows * cols < n_panels:
                raise ValidationError(
                    f"layout {self.layout} has {rows * cols} cells, "
                    f"need {n_panels}"
                )
            return rows, cols
        cols = min(n_panels, 2)
        return math.ceil(n_panels / cols), cols

    def figure_size(self, rows: int, cols: int) -> tuple[float, float]:
        if self.figsize is not None:
            return self.figsize
        return 5.0 * cols, 4.0 * rows
