"""
Diagnostic plots for fitted GLLVMs.

plot_diagnostics() draws up to five panels from the Dunn-Smyth residuals
of a fitted model:

    1. Residuals vs linear predictors (lowess smoother with envelope)
    2. Normal Q-Q (simulated envelope)
    3. Residuals vs row index
    4. Residuals vs column index (responses by ascending total)
    5. Scale-Location

Colors identify response variables.

References:
    Dunn, P. K., and Smyth, G. K. (1996). Randomized quantile residuals.
    Journal of Computational and Graphical Statistics, 5, 236-244.

    Hui, F. K. C., Taskinen, S., Pledger, S., Foster, S. D., and
    Warton, D. I. (2015). Model-based approaches to unconstrained
    ordination. Methods in Ecology and Evolution, 6, 399-411.
"""

from __future__ import annotations

from typing import Iterable, Sequence

import matplotlib as mpl
import matplotlib.pyplot as plt
import numpy as np
from matplotlib.axes import Axes
from matplotlib.figure import Figure
from matplotlib import colors as mcolors
from numpy.typing import NDArray

from pygllvm.core.exceptions import ValidationError
from pygllvm.core.protocols import ResidualProvider
from pygllvm.model import FittedModel, ResidualSet
from pygllvm.plotting.config import PlotConfig
from pygllvm.plotting._colors import response_colors, point_colors
from pygllvm.plotting._envelope import (
    boxplot_whiskers,
    lowess_smooth,
    qq_envelope,
    qq_line,
    qq_points,
    smooth_envelope,
)
from pygllvm.plotting._shaping import (
    column_index_points,
    flatten_responses,
    row_index_points,
    scale_location_points,
)


DEFAULT_CAPTIONS: tuple[str, ...] = (
    "Residuals vs linear predictors",
    "Normal Q-Q",
    "Residuals vs row index",
    "Residuals vs column index",
    "Scale-Location",
)

RESIDUAL_LABEL = "Dunn-Smyth-residuals"


def _resolve_residuals(
    model: FittedModel,
    residuals: ResidualSet | ResidualProvider,
) -> ResidualSet:
    """Obtain residuals and check them against the response shape."""
    if isinstance(residuals, ResidualSet):
        res = residuals
    elif callable(residuals):
        res = residuals(model)
        if not isinstance(res, ResidualSet):
            raise ValidationError(
                f"residual provider returned {type(res).__name__}, "
                f"expected ResidualSet"
            )
    else:
        raise ValidationError(
            f"residuals: expected ResidualSet or a callable, "
            f"got {type(residuals).__name__}"
        )
    return ResidualSet.validate(res.residuals, res.linpred, model.shape)


def _check_which(which: int | Iterable[int]) -> list[int]:
    if isinstance(which, (int, float, np.number)):
        which = [which]
    selected = list(which)
    non_int = [w for w in selected
               if isinstance(w, bool) or not isinstance(w, (int, np.integer))]
    if non_int:
        raise ValidationError(f"which: plot numbers must be integers, got {non_int}")
    panels = sorted(set(int(w) for w in selected))
    if not panels:
        raise ValidationError("which: select at least one plot from 1..5")
    bad = [w for w in panels if w not in range(1, 6)]
    if bad:
        raise ValidationError(f"which: plots must be in 1..5, got {bad}")
    return panels


def plot_diagnostics(
    model: FittedModel,
    residuals: ResidualSet | ResidualProvider,
    which: int | Iterable[int] = (1, 2, 3, 4, 5),
    captions: Sequence[str] = DEFAULT_CAPTIONS,
    var_colors: str | Sequence[str] | None = None,
    add_smooth: bool = True,
    envelopes: bool = True,
    reps: int = 150,
    envelope_col: Sequence[str] = ("blue", "lightblue"),
    config: PlotConfig | None = None,
    seed: int | np.random.Generator | None = None,
    axes: Sequence[Axes] | None = None,
) -> Figure:
    """
    Plot residual diagnostics of a fitted GLLVM. Matches R plot.gllvm().

    Parameters
    ----------
    model : FittedModel
        Validated fitted model.
    residuals : ResidualSet or callable
        Dunn-Smyth residuals and linear predictors, or a provider
        computing them from the model. Both matrices must have the shape
        of model.y.
    which : int or iterable of int
        Plot number, or subset of 1..5, selecting the plots to draw.
    captions : sequence of str
        Panel titles, indexed by plot number.
    var_colors : str or sequence of str, optional
        Colors for responses, recycled to the number of responses.
        Default colors responses by ascending total response.
    add_smooth : bool
        Overlay a lowess smoother on the scatter panels.
    envelopes : bool
        Add simulated envelopes to the smoother of plot 1 and to the
        Q-Q plot.
    reps : int
        Number of replications for the simulated envelopes.
    envelope_col : sequence of two colors
        Line color and envelope fill color.
    config : PlotConfig, optional
        Layout and drawing options for this call.
    seed : int or numpy.random.Generator, optional
        Seed for the envelope simulations.
    axes : sequence of Axes, optional
        Draw into these axes (one per selected plot) instead of a new
        figure.

    Returns
    -------
    matplotlib.figure.Figure
        The figure holding the panels.
    """
    if not isinstance(model, FittedModel):
        raise ValidationError(
            f"model: expected FittedModel, got {type(model).__name__}"
        )
    res = _resolve_residuals(model, residuals)
    panels = _check_which(which)
    if len(captions) < max(panels):
        raise ValidationError(
            f"captions: {len(captions)} given, need a caption for plot {max(panels)}"
        )
    if isinstance(reps, bool) or int(reps) != reps or reps < 1:
        raise ValidationError(f"reps: expected a positive integer, got {reps!r}")
    envelope_col = tuple(envelope_col)
    if len(envelope_col) != 2 or not all(mcolors.is_color_like(c) for c in envelope_col):
        raise ValidationError(
            f"envelope_col: expected two colors, got {envelope_col!r}"
        )
    if axes is not None and len(axes) != len(panels):
        raise ValidationError(
            f"axes: {len(axes)} given for {len(panels)} selected plots"
        )

    config = config if config is not None else PlotConfig()
    rng = np.random.default_rng(seed)
    colors = response_colors(model.y, var_colors)

    with mpl.rc_context(rc=dict(config.rc_params)):
        owns_figure = axes is None
        if owns_figure:
            rows, cols = config.grid(len(panels))
            fig, grid = plt.subplots(
                rows, cols, figsize=config.figure_size(rows, cols), squeeze=False,
            )
            cells = list(grid.ravel())
            for ax in cells[len(panels):]:
                fig.delaxes(ax)
            axes = cells[:len(panels)]
        fig = axes[0].figure

        ctx = _PanelContext(
            model=model, res=res, colors=colors, add_smooth=add_smooth,
            envelopes=envelopes, reps=int(reps), envelope_col=envelope_col,
            config=config, rng=rng,
        )
        for ax, panel in zip(axes, panels):
            _PANELS[panel](ax, ctx, captions[panel - 1])

        if owns_figure and len(fig.axes) > 1:
            fig.tight_layout()

    return fig


class _PanelContext:
    """Inputs shared by all panels of one plot_diagnostics() call."""

    def __init__(self, *, model, res, colors, add_smooth, envelopes, reps,
                 envelope_col, config, rng):
        self.model = model
        self.res = res
        self.colors = colors
        self.add_smooth = add_smooth
        self.envelopes = envelopes
        self.reps = reps
        self.line_col, self.fill_col = envelope_col
        self.config = config
        self.rng = rng
        self.point_rgba = point_colors(colors, model.n)

    def linpred_xlim(self) -> tuple[float, float] | None:
        if self.config.xlim is not None:
            return tuple(self.config.xlim)
        lo, hi = boxplot_whiskers(self.res.linpred)
        return (lo, hi) if hi > lo else None

    def scatter(self, ax: Axes, x: NDArray, y: NDArray, rgba: NDArray | None = None):
        ax.scatter(
            x, y, c=self.point_rgba if rgba is None else rgba,
            s=self.config.point_size, alpha=self.config.alpha, zorder=2,
        )

    def smoother(self, ax: Axes, x: NDArray, y: NDArray):
        sx, sy = lowess_smooth(
            x, y, frac=self.config.smoother_span,
            it=self.config.smoother_iterations,
        )
        ax.plot(sx, sy, color=self.line_col, zorder=3)


def _zero_line(ax: Axes):
    ax.axhline(0.0, color='grey', linestyle=':', zorder=1)


def _residuals_vs_linpred(ax: Axes, ctx: _PanelContext, caption: str):
    x = flatten_responses(ctx.res.linpred)
    y = flatten_responses(ctx.res.residuals)

    if ctx.add_smooth and ctx.envelopes:
        env = smooth_envelope(
            x, y, ctx.reps, ctx.rng, frac=ctx.config.smoother_span,
            it=ctx.config.smoother_iterations,
        )
        ax.fill_between(env.x, env.lower, env.upper, color=ctx.fill_col,
                        linewidth=0, zorder=0)
        ax.plot(env.x, env.fit, color=ctx.line_col, zorder=3)
    elif ctx.add_smooth:
        ctx.smoother(ax, x, y)

    _zero_line(ax)
    ctx.scatter(ax, x, y)
    xlim = ctx.linpred_xlim()
    if xlim is not None:
        ax.set_xlim(*xlim)
    ax.set_xlabel("linear predictors")
    ax.set_ylabel(RESIDUAL_LABEL)
    ax.set_title(caption)


def _normal_qq(ax: Axes, ctx: _PanelContext, caption: str):
    x, y = qq_points(ctx.res.residuals)

    if ctx.envelopes:
        env = qq_envelope(ctx.res.residuals, ctx.reps, ctx.rng)
        ax.fill(
            np.concatenate([env.x, env.x[::-1]]),
            np.concatenate([env.lower, env.upper[::-1]]),
            color=ctx.fill_col, linewidth=0, zorder=0,
        )

    ax.scatter(x, y, c=ctx.point_rgba, s=ctx.config.qq_point_size,
               alpha=ctx.config.alpha, zorder=2)
    intercept, slope = qq_line(ctx.res.residuals)
    ax.axline((0.0, intercept), slope=slope, color=ctx.line_col, zorder=3)
    ax.set_xlabel("Theoretical Quantiles")
    ax.set_ylabel("Dunn-Smyth residuals")
    ax.set_title(caption)


def _residuals_vs_row(ax: Axes, ctx: _PanelContext, caption: str):
    x, y = row_index_points(ctx.res.residuals)
    ctx.scatter(ax, x, y)
    _zero_line(ax)
    if ctx.add_smooth:
        ctx.smoother(ax, x, y)
    ax.set_xlabel("site.index")
    ax.set_ylabel(RESIDUAL_LABEL)
    ax.set_title(caption)


def _residuals_vs_column(ax: Axes, ctx: _PanelContext, caption: str):
    order = ctx.model.column_order
    x, y, columns = column_index_points(ctx.res.residuals, order)
    rgba = mcolors.to_rgba_array(ctx.colors)[columns]
    ctx.scatter(ax, x, y, rgba)
    _zero_line(ax)
    if ctx.add_smooth:
        ctx.smoother(ax, x, y)
    ax.set_xlabel("spp.index")
    ax.set_ylabel(RESIDUAL_LABEL)
    ax.set_title(caption)


def _scale_location(ax: Axes, ctx: _PanelContext, caption: str):
    x, y = scale_location_points(ctx.res.linpred, ctx.res.residuals)
    ctx.scatter(ax, x, y)
    if ctx.add_smooth:
        ctx.smoother(ax, x, y)
    xlim = ctx.linpred_xlim()
    if xlim is not None:
        ax.set_xlim(*xlim)
    ax.set_xlabel("linear predictors")
    ax.set_ylabel(f"sqrt(|{RESIDUAL_LABEL}|)")
    ax.set_title(caption)


_PANELS = {
    1: _residuals_vs_linpred,
    2: _normal_qq,
    3: _residuals_vs_row,
    4: _residuals_vs_column,
    5: _scale_location,
}
