"""
posterior
=========

Posterior representations.

This subpackage provides:
- ParameterPosterior: protocol for posteriors over model parameters p(θ | data)
- MAPPosterior: delta distribution at θ_MAP (point estimate)
- VariationalPosterior: wrapper around the PyVBMC variational posterior
- GridPosterior: 1-D posterior tabulated on a grid
- predictive_bands / PsychometricPredictivePosterior: posterior predictive
  psychometric curves

Two-tier design
---------------
- ParameterPosterior: represents p(θ | data) for summaries and corner plots
- PsychometricPredictivePosterior: represents p(p_right(s*) | data) for
  posterior predictive checks
"""

from .grid_posterior import GridPosterior
from .parameter_posterior import ParameterPosterior
from .posterior import MAPPosterior, VariationalPosterior
from .predictive_posterior import (
    PsychometricPredictivePosterior,
    predictive_bands,
    predictive_curves,
)

__all__ = [
    # Core protocol
    "ParameterPosterior",
    # Parameter posterior implementations
    "MAPPosterior",
    "VariationalPosterior",
    "GridPosterior",
    # Predictions
    "PsychometricPredictivePosterior",
    "predictive_bands",
    "predictive_curves",
]
