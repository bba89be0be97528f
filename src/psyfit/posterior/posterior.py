"""
posterior.py
------------

Concrete ParameterPosterior implementations.

This module provides:
- MAPPosterior: delta distribution at θ_MAP (point estimate)
- VariationalPosterior: wrapper around a PyVBMC variational posterior
"""

from __future__ import annotations

from typing import Any

import jax.numpy as jnp
import numpy as np


class MAPPosterior:
    """
    MAP (Maximum A Posteriori) posterior - delta distribution at θ_MAP.

    Represents a point estimate with no uncertainty.

    Parameters
    ----------
    params : array-like, shape (D,)
        MAP parameter vector (θ_MAP)
    model : PsychometricModel
        Model instance used for predictions
    fval : float, optional
        Negative log posterior at θ_MAP, as reported by the optimizer.
    method : str, optional
        Name of the optimizer that produced the estimate.
    result : Any, optional
        Raw optimizer result (PyBADS OptimizeResult, scipy OptimizeResult).
    """

    def __init__(self, params, model, *, fval=None, method=None, result=None):
        self._params = jnp.asarray(params)
        self._model = model
        self.fval = None if fval is None else float(fval)
        self.method = method
        self.result = result

    # ------------------------------------------------------------------
    # ParameterPosterior protocol implementation
    # ------------------------------------------------------------------
    @property
    def params(self) -> jnp.ndarray:
        """Return the MAP parameters (θ_MAP)."""
        return self._params

    @property
    def model(self):
        """Return the associated model."""
        return self._model

    def sample(self, n: int = 1, *, key=None) -> jnp.ndarray:
        """
        Sample from delta distribution (returns repeated θ_MAP).

        Parameters
        ----------
        n : int, default=1
            Number of samples
        key : jax.random.KeyArray, optional
            PRNG key (unused for delta distribution)

        Returns
        -------
        jnp.ndarray, shape (n, D)
        """
        return jnp.tile(self._params[None, :], (n, 1))

    def log_prob(self, params) -> jnp.ndarray:
        """
        Evaluate log p(θ | data) under delta distribution.

        Returns 0.0 if params == θ_MAP, -∞ otherwise.
        """
        match = jnp.allclose(jnp.asarray(params), self._params)
        return jnp.where(match, 0.0, -jnp.inf)

    def diagnostics(self) -> dict:
        """Return optimizer name and final negative log posterior."""
        return {"method": self.method, "fval": self.fval}

    # ------------------------------------------------------------------
    # PREDICTIONS: delegates to model
    # ------------------------------------------------------------------
    def predict_prob(self, stim) -> jnp.ndarray:
        """
        Probability of a rightward response at θ_MAP.

        Delegates to PsychometricModel.predict_prob().
        """
        return self.model.predict_prob(self.params, stim)

    def __repr__(self) -> str:
        return f"MAPPosterior(params={np.asarray(self._params)}, method={self.method!r})"


class VariationalPosterior:
    """
    Variational posterior returned by PyVBMC.

    The approximation is a mixture of Gaussians, so sampling and moments are
    cheap. This class only wraps the external object; it does not implement
    any part of the variational algorithm.

    Parameters
    ----------
    vp : pyvbmc.VariationalPosterior
        Variational posterior returned by VBMC.optimize().
    model : PsychometricModel
        Model instance used for predictions.
    results : dict
        Results dictionary returned by VBMC.optimize().

    Attributes
    ----------
    elbo : float
        Lower bound to the log marginal likelihood (log evidence). Can be used
        for model comparison.
    elbo_sd : float
        Standard deviation of the ELBO estimate.
    success_flag : bool
        Whether PyVBMC reports convergence.
    """

    def __init__(self, vp: Any, model, results: dict | None = None):
        self.vp = vp
        self._model = model
        self.results = dict(results or {})
        self.elbo = _maybe_float(self.results.get("elbo"))
        self.elbo_sd = _maybe_float(self.results.get("elbo_sd"))
        self.success_flag = bool(self.results.get("success_flag", False))

    @property
    def params(self) -> jnp.ndarray:
        """Posterior mean."""
        mean, _ = self.moments()
        return jnp.asarray(mean)

    @property
    def model(self):
        return self._model

    def moments(self) -> tuple[np.ndarray, np.ndarray]:
        """
        Posterior mean and covariance.

        Returns
        -------
        mean : np.ndarray, shape (D,)
        cov : np.ndarray, shape (D, D)
        """
        mean, cov = self.vp.moments(cov_flag=True)
        return np.asarray(mean).reshape(-1), np.asarray(cov)

    def sample(self, n: int, *, key=None) -> np.ndarray:
        """
        Draw samples from the variational posterior.

        Parameters
        ----------
        n : int
            Number of samples
        key : unused
            PyVBMC samples with NumPy's global generator.

        Returns
        -------
        np.ndarray, shape (n, D)
        """
        samples, _ = self.vp.sample(int(n))
        return np.asarray(samples)

    def diagnostics(self) -> dict:
        return {
            "elbo": self.elbo,
            "elbo_sd": self.elbo_sd,
            "success_flag": self.success_flag,
        }

    def predict_prob(self, stim) -> jnp.ndarray:
        """Probability of a rightward response at the posterior mean."""
        return self.model.predict_prob(self.params, stim)


def _maybe_float(value):
    return None if value is None else float(value)
