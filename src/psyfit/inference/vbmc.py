"""
vbmc.py
-------

Bayesian inference with Variational Bayesian Monte Carlo (PyVBMC).

PyVBMC is an external inference engine that returns a variational
approximation of the posterior together with a lower bound on the log
marginal likelihood (ELBO):
    https://github.com/acerbilab/pyvbmc

It is an optional dependency (`pip install pyvbmc`). This module builds the
log joint (log likelihood + log prior) and the bound vectors, and wraps the
returned variational posterior; the algorithm itself is entirely delegated
to PyVBMC.
"""

from __future__ import annotations

from typing import Any

import numpy as np

from psyfit.inference.base import InferenceEngine
from psyfit.inference.objective import make_log_joint, starting_point, to_numpy_objective
from psyfit.posterior.posterior import VariationalPosterior

VBMC_URL = "https://github.com/acerbilab/pyvbmc"


def vbmc_available() -> bool:
    """Return True if PyVBMC can be imported."""
    try:
        import pyvbmc  # noqa: F401
    except ImportError:
        return False
    return True


def _import_vbmc():
    try:
        from pyvbmc import VBMC
    except ImportError as err:
        raise ImportError(
            "To run variational inference you need to install "
            "Variational Bayesian Monte Carlo (PyVBMC): `pip install pyvbmc` "
            f"(see {VBMC_URL})."
        ) from err
    return VBMC


class VBMCInference(InferenceEngine):
    """
    Variational posterior inference backed by PyVBMC.

    Parameters
    ----------
    options : dict, optional
        PyVBMC options, e.g. {"display": "iter", "plot": True}.

    Notes
    -----
    Starting from the MAP estimate is not necessary but it helps.
    """

    def __init__(self, options: dict | None = None):
        self.options = dict(options or {})

    def fit(
        self, model, data, x0: Any = None, *, seed: int | None = None
    ) -> VariationalPosterior:
        """
        Run VBMC on the model's log joint.

        Parameters
        ----------
        model : PsychometricModel
            Model instance.
        data : TrialData
            Observed trials.
        x0 : array-like, shape (D,), optional
            Starting point, e.g. the MAP estimate. Takes precedence over
            the seed.
        seed : int | None, optional
            Seed for a random starting point inside the plausible box.

        Returns
        -------
        VariationalPosterior
            Wrapper around the variational posterior, with the ELBO, its
            standard deviation and the success flag.

        Raises
        ------
        ImportError
            If PyVBMC is not installed.
        """
        VBMC = _import_vbmc()

        log_joint = to_numpy_objective(make_log_joint(model, data))
        x0 = starting_point(model, x0, seed)
        b = model.bounds

        vbmc = VBMC(
            log_joint,
            x0[None, :],
            np.asarray(b.lb, dtype=float)[None, :],
            np.asarray(b.ub, dtype=float)[None, :],
            np.asarray(b.plb, dtype=float)[None, :],
            np.asarray(b.pub, dtype=float)[None, :],
            options=self.options or None,
        )
        vp, results = vbmc.optimize()
        return VariationalPosterior(vp, model, results)
