"""
psyfit.model
============

Model-layer API: everything model-related in one place.

Includes
--------
- psychofun / psychofun_loglike (psychometric function and likelihood)
- Bounded prior densities (uniform box, trapezoidal, smooth trapezoidal)
- ParameterBounds and Prior
- PsychometricModel (core model)

All functions/classes use JAX arrays (jax.numpy as jnp) for autodiff.

Typical usage
-------------
    from psyfit.model import PsychometricModel, Prior, ParameterBounds
"""

from .base import Model
from .prior import (
    PRIOR_DENSITIES,
    ParameterBounds,
    Prior,
    smooth_trapezoidal_logpdf,
    smooth_trapezoidal_pdf,
    trapezoidal_logpdf,
    trapezoidal_pdf,
    uniform_box_logpdf,
    uniform_box_pdf,
)
from .psychometric import PARAMETER_NAMES, psychofun, psychofun_loglike, trial_loglike
from .psychometric_model import PsychometricModel

__all__ = [
    # Base
    "Model",
    # Models
    "PsychometricModel",
    # Psychometric function
    "PARAMETER_NAMES",
    "psychofun",
    "psychofun_loglike",
    "trial_loglike",
    # Priors
    "ParameterBounds",
    "Prior",
    "PRIOR_DENSITIES",
    "uniform_box_pdf",
    "uniform_box_logpdf",
    "trapezoidal_pdf",
    "trapezoidal_logpdf",
    "smooth_trapezoidal_pdf",
    "smooth_trapezoidal_logpdf",
]
