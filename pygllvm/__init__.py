"""
pygllvm: diagnostics and summaries for generalized linear latent variable
models.

Presentation layer over a fitted GLLVM: residual diagnostic plots and
R-style model summaries. Fitting, residual computation and information
criteria are supplied by the caller.

Submodules:
    model: Fitted model record, families, residual and criteria payloads
    plotting: Residual diagnostic plots
    summary: Model summaries
"""

__version__ = "0.1.0"
__author__ = "Hai-Shuo"
__email__ = "contact@sgcx.org"

from pygllvm import model
from pygllvm import plotting
from pygllvm import summary
from pygllvm.model import FittedModel, GllvmParams, ResidualSet, InformationCriteria
from pygllvm.plotting import plot_diagnostics, PlotConfig
from pygllvm.summary import summarize, SummaryReport

__all__ = [
    "__version__",
    "model",
    "plotting",
    "summary",
    "FittedModel",
    "GllvmParams",
    "ResidualSet",
    "InformationCriteria",
    "plot_diagnostics",
    "PlotConfig",
    "summarize",
    "SummaryReport",
]
