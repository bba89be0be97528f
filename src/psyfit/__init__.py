"""
psyfit
======

Bayesian fitting of psychometric functions, for teaching.

This package accompanies a narrated tutorial (docs/examples/tutorial) that
walks through loading a behavioral dataset, visualizing a psychometric
function model, computing log-likelihoods, and then delegating Bayesian
inference to two external black-box packages: PyBADS (MAP estimation) and
PyVBMC (variational posterior).

----------------------------------------------------------------------
Workflow
----------------------------------------------------------------------

Core design
-----------
1. TrialData (data/dataset.py):
   - One row per trial: session, contrast, position, choice, ...
   - Derived signed contrast = contrast * position.

2. Psychometric function (model/psychometric.py):
   - p_right = lapse_rate * lapse_bias + (1 - lapse_rate) * Phi((s - mu) / sigma)
   - Bernoulli log-likelihood summed over trials.

3. Prior (model/prior.py):
   - Uniform box, trapezoidal and smooth trapezoidal densities between hard
     bounds, with a plateau on the plausible range.

4. PsychometricModel (model/psychometric_model.py):
   - log_posterior_from_data = log-likelihood + log prior.

5. Inference (inference/):
   - grid_posterior_1d for "Bayesian inference by hand".
   - find_map: PyBADS, falling back to scipy when PyBADS is missing.
   - VBMCInference: PyVBMC variational posterior.

Unified import style
--------------------
Top-level:
  from psyfit import PsychometricModel, Prior, ParameterBounds, TrialData
  from psyfit import find_map, VBMCInference, grid_posterior_1d

Subpackages:
  from psyfit.model import psychofun, psychofun_loglike, trapezoidal_pdf
  from psyfit.inference import BADSOptimizer, ScipyOptimizer, MAPOptimizer
  from psyfit.posterior import MAPPosterior, VariationalPosterior, predictive_bands
  from psyfit.utils import corner_plot, plot_psychometric_data, print_parameter_summary

Data flow
---------
- load_trials_csv(path) -> TrialData; data.for_session(n) selects a session.
- Engines work on the log joint:
      log_posterior = psychofun_loglike(theta, data) + prior.log_prob(theta)
- Posteriors expose sample(n) for corner plots and predictive checks.

----------------------------------------------------------------------
"""

from . import data as data
from . import inference as inference
from . import model as model
from . import posterior as posterior
from . import utils as utils
from .data.dataset import TrialData
from .data.io import load_trials_csv
from .data.simulation import simulate_trials

# Inference
from .inference.bads import BADSOptimizer
from .inference.grid import grid_posterior_1d
from .inference.map import find_map
from .inference.map_optimizer import MAPOptimizer
from .inference.scipy_optimizer import ScipyOptimizer
from .inference.vbmc import VBMCInference

# Model
from .model.prior import ParameterBounds, Prior
from .model.psychometric import psychofun, psychofun_loglike
from .model.psychometric_model import PsychometricModel

# Posterior
from .posterior.grid_posterior import GridPosterior
from .posterior.posterior import MAPPosterior, VariationalPosterior

__version__ = "0.1.0"

__all__ = [
    # Core model
    "PsychometricModel",
    "Prior",
    "ParameterBounds",
    "psychofun",
    "psychofun_loglike",
    # Inference
    "grid_posterior_1d",
    "find_map",
    "BADSOptimizer",
    "ScipyOptimizer",
    "MAPOptimizer",
    "VBMCInference",
    # Posterior
    "MAPPosterior",
    "VariationalPosterior",
    "GridPosterior",
    # Data handling
    "TrialData",
    "load_trials_csv",
    "simulate_trials",
    # Subpackages
    "model",
    "inference",
    "posterior",
    "utils",
    "data",
]
