"""
Residual diagnostic plots for fitted GLLVMs.

Public API:
    plot_diagnostics()  — draw up to five residual diagnostic panels
    PlotConfig          — per-call layout and drawing options
    response_colors()   — one color per response variable
    qq_envelope()       — simulated Q-Q envelope
    smooth_envelope()   — lowess smoother with bootstrap envelope
"""

from pygllvm.plotting.config import PlotConfig
from pygllvm.plotting.solvers import plot_diagnostics, DEFAULT_CAPTIONS
from pygllvm.plotting._colors import response_colors, rainbow, ORDINAL_PALETTE
from pygllvm.plotting._envelope import (
    QQEnvelope,
    SmoothEnvelope,
    qq_envelope,
    smooth_envelope,
    boxplot_whiskers,
)

__all__ = [
    "plot_diagnostics",
    "DEFAULT_CAPTIONS",
    "PlotConfig",
    "response_colors",
    "rainbow",
    "ORDINAL_PALETTE",
    "QQEnvelope",
    "SmoothEnvelope",
    "qq_envelope",
    "smooth_envelope",
    "boxplot_whiskers",
]
