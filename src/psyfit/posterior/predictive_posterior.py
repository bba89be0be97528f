"""
predictive_posterior.py
----------------------

Posterior predictions p(p_right(s*) | data) at test stimuli.

This module defines posteriors over **predictions** (not parameters),
used for posterior predictive checks (the "Bayesian fit" plotted on top
of the data).

Design
------
PsychometricPredictivePosterior wraps a ParameterPosterior and evaluates
the psychometric curve for every posterior sample:

    p_right(s*; θ_i),  θ_i ~ p(θ | data)

The curves are then reduced to a mean, a variance or pointwise quantiles
(e.g. the median prediction and a 95% band).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Sequence

import jax
import jax.numpy as jnp

from psyfit.model.psychometric import psychofun

if TYPE_CHECKING:
    from psyfit.posterior.parameter_posterior import ParameterPosterior


def predictive_curves(samples: Any, stim: Any) -> jnp.ndarray:
    """
    Psychometric curves for a batch of parameter samples.

    Parameters
    ----------
    samples : array-like, shape (n_samples, D)
        Posterior samples.
    stim : array-like, shape (n_stim,)
        Stimulus grid.

    Returns
    -------
    jnp.ndarray, shape (n_samples, n_stim)
    """
    samples = jnp.asarray(samples)
    stim = jnp.asarray(stim)
    return jax.vmap(lambda theta: psychofun(theta, stim))(samples)


def predictive_bands(
    samples: Any,
    stim: Any,
    quantiles: Sequence[float] = (0.025, 0.5, 0.975),
) -> jnp.ndarray:
    """
    Pointwise quantiles of the posterior predictive psychometric curve.

    Parameters
    ----------
    samples : array-like, shape (n_samples, D)
        Posterior samples.
    stim : array-like, shape (n_stim,)
        Stimulus grid.
    quantiles : sequence of float, default=(0.025, 0.5, 0.975)
        Quantiles in [0, 1].

    Returns
    -------
    jnp.ndarray, shape (len(quantiles), n_stim)
        With the default quantiles: bottom 2.5%, median and top 97.5%
        predictions.
    """
    q = jnp.asarray(quantiles)
    if bool(jnp.any((q < 0) | (q > 1))):
        raise ValueError(f"quantiles must lie in [0, 1], got {list(quantiles)}")
    curves = predictive_curves(samples, stim)
    return jnp.quantile(curves, q, axis=0)


class PsychometricPredictivePosterior:
    """
    Predictive posterior for psychometric models.

    Parameters
    ----------
    param_posterior : ParameterPosterior
        Posterior over model parameters
    stim : jnp.ndarray, shape (n_stim,)
        Test stimuli (signed contrasts)
    n_samples : int, default=10000
        Number of posterior samples
    key : jax.random.KeyArray, optional
        Passed to param_posterior.sample()

    Notes
    -----
    Uses lazy evaluation: curves computed on first access.
    """

    def __init__(
        self,
        param_posterior: ParameterPosterior,
        stim: Any,
        n_samples: int = 10_000,
        *,
        key: Any = None,
    ):
        self.param_posterior = param_posterior
        self.stim = jnp.asarray(stim)
        self.n_samples = int(n_samples)
        self.key = key

        self._curves = None

    def _ensure_computed(self):
        if self._curves is not None:
            return
        samples = self.param_posterior.sample(self.n_samples, key=self.key)
        self._curves = predictive_curves(samples, self.stim)

    @property
    def curves(self) -> jnp.ndarray:
        """Per-sample curves, shape (n_samples, n_stim)."""
        self._ensure_computed()
        return self._curves

    @property
    def mean(self) -> jnp.ndarray:
        """E[p_right(s*) | data], shape (n_stim,)."""
        return jnp.mean(self.curves, axis=0)

    @property
    def variance(self) -> jnp.ndarray:
        """Var[p_right(s*) | data], shape (n_stim,)."""
        return jnp.var(self.curves, axis=0)

    def quantiles(self, q: Sequence[float] = (0.025, 0.5, 0.975)) -> jnp.ndarray:
        """Pointwise quantiles, shape (len(q), n_stim)."""
        return jnp.quantile(self.curves, jnp.asarray(q), axis=0)
