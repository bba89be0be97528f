"""
inference
=========

Inference engines for psychometric models.

This subpackage provides different strategies for fitting model parameters
to data and returning posterior objects. The numerical heavy lifting of the
Bayesian engines lives in external packages; these classes only prepare
objectives and bounds and wrap the results.

Implementations
---------------
- grid_posterior_1d : brute-force 1-D posterior on a grid.
- BADSOptimizer : MAP estimate with PyBADS (optional dependency).
- ScipyOptimizer : MAP estimate with scipy's bound-constrained minimizers.
- MAPOptimizer : MAP estimate with Optax gradient ascent.
- VBMCInference : variational posterior with PyVBMC (optional dependency).
- find_map : MAP estimate with automatic fallback from PyBADS to scipy.
"""

from .bads import BADSOptimizer, bads_available
from .base import InferenceEngine
from .grid import grid_posterior_1d
from .map import find_map
from .map_optimizer import MAPOptimizer
from .scipy_optimizer import ScipyOptimizer
from .vbmc import VBMCInference, vbmc_available

# Registry for string-based inference selection
INFERENCE_ENGINES = {
    "bads": BADSOptimizer,
    "scipy": ScipyOptimizer,
    "optax": MAPOptimizer,
    "vbmc": VBMCInference,
}

__all__ = [
    "InferenceEngine",
    "BADSOptimizer",
    "ScipyOptimizer",
    "MAPOptimizer",
    "VBMCInference",
    "INFERENCE_ENGINES",
    "find_map",
    "grid_posterior_1d",
    "bads_available",
    "vbmc_available",
]
