"""
bads.py
-------

MAP estimation with Bayesian Adaptive Direct Search (PyBADS).

PyBADS is an external, derivative-free optimizer for noisy or expensive
black-box functions:
    https://github.com/acerbilab/pybads

It is an optional dependency (`pip install pybads`). This module only
builds the objective (negated log posterior) and the bound vectors; the
optimization itself is entirely delegated to PyBADS.
"""

from __future__ import annotations

from typing import Any

import numpy as np

from psyfit.inference.base import InferenceEngine
from psyfit.inference.objective import make_log_joint, starting_point, to_numpy_objective
from psyfit.posterior.posterior import MAPPosterior

BADS_URL = "https://github.com/acerbilab/pybads"


def bads_available() -> bool:
    """Return True if PyBADS can be imported."""
    try:
        import pybads  # noqa: F401
    except ImportError:
        return False
    return True


def _import_bads():
    try:
        from pybads import BADS
    except ImportError as err:
        raise ImportError(
            "BADSOptimizer requires Bayesian Adaptive Direct Search (PyBADS). "
            f"Install it with `pip install pybads` (see {BADS_URL})."
        ) from err
    return BADS


class BADSOptimizer(InferenceEngine):
    """
    MAP optimizer backed by PyBADS.

    Parameters
    ----------
    options : dict, optional
        PyBADS options, e.g. {"display": "iter"} or {"display": "off"}.

    Notes
    -----
    - Objective = negative log posterior (BADS minimizes).
    - Hard bounds (lb, ub) and plausible bounds (plb, pub) are taken from
      the model's prior.
    """

    def __init__(self, options: dict | None = None):
        self.options = dict(options or {})

    def fit(
        self, model, data, x0: Any = None, *, seed: int | None = None
    ) -> MAPPosterior:
        """
        Find the MAP estimate with PyBADS.

        Parameters
        ----------
        model : PsychometricModel
            Model instance.
        data : TrialData
            Observed trials.
        x0 : array-like, shape (D,), optional
            Starting point. Takes precedence over the seed.
        seed : int | None, optional
            Seed for a random starting point inside the plausible box.

        Returns
        -------
        MAPPosterior
            Posterior wrapper around the MAP estimate. The PyBADS result
            is available as `.result`.

        Raises
        ------
        ImportError
            If PyBADS is not installed.
        """
        BADS = _import_bads()

        objective = to_numpy_objective(make_log_joint(model, data), negate=True)
        x0 = starting_point(model, x0, seed)
        b = model.bounds

        bads = BADS(
            objective,
            x0,
            np.asarray(b.lb, dtype=float),
            np.asarray(b.ub, dtype=float),
            np.asarray(b.plb, dtype=float),
            np.asarray(b.pub, dtype=float),
            options=self.options or None,
        )
        result = bads.optimize()
        return MAPPosterior(
            np.asarray(result["x"], dtype=float),
            model,
            fval=result["fval"],
            method="bads",
            result=result,
        )
