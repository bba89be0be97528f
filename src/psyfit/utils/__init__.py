"""
utils
=====

Shared utility functions and helpers for psyfit.

This subpackage provides:
- diagnostics : parameter summaries and correlations from posterior samples.
- plotting : matplotlib figures for data, priors and posteriors.
"""

from .diagnostics import parameter_summary, posterior_correlations, print_parameter_summary
from .plotting import (
    PARAMETER_LABELS,
    corner_plot,
    plot_grid_posterior,
    plot_predictive_bands,
    plot_prior_shapes,
    plot_psychometric_curve,
    plot_psychometric_data,
)

__all__ = [
    # diagnostics
    "parameter_summary",
    "print_parameter_summary",
    "posterior_correlations",
    # plotting
    "PARAMETER_LABELS",
    "plot_psychometric_data",
    "plot_psychometric_curve",
    "plot_predictive_bands",
    "plot_prior_shapes",
    "plot_grid_posterior",
    "corner_plot",
]
