"""
parameter_posterior.py
---------------------

Protocol for posterior distributions over model parameters.

This module defines the ParameterPosterior interface representing p(θ | data),
used for research workflows: summaries, corner plots, predictive checks.

Design
------
Different inference engines produce different posterior representations:
- BADS / scipy / optax: delta distribution at θ_MAP
- VBMC: variational mixture of Gaussians (sampled through PyVBMC)

All implement a common protocol for polymorphic use. Parameters are plain
vectors ordered as the model's param_names.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

import jax.numpy as jnp


@runtime_checkable
class ParameterPosterior(Protocol):
    """
    Protocol for posterior distributions over model parameters p(θ | data).

    Returned by InferenceEngine.fit(model, data).
    """

    @property
    def params(self) -> jnp.ndarray:
        """
        Point estimate of the parameters, shape (D,).

        Notes
        -----
        - MAP: θ_MAP
        - VBMC: posterior mean of the variational posterior
        """
        ...

    @property
    def model(self):
        """
        Associated model.

        Returns
        -------
        Model
            The PsychometricModel instance used for predictions.
        """
        ...

    def sample(self, n: int, *, key: Any = None) -> jnp.ndarray:
        """
        Sample parameter vectors from p(θ | data).

        Parameters
        ----------
        n : int
            Number of samples
        key : jax.random.KeyArray, optional
            PRNG key, for posteriors that sample with JAX

        Returns
        -------
        array, shape (n, D)
        """
        ...

    def diagnostics(self) -> dict:
        """
        Return inference-specific diagnostic information.

        Returns
        -------
        dict
            MAP:
                - method: optimizer used
                - fval: negative log posterior at the optimum
            VBMC:
                - elbo, elbo_sd: evidence lower bound and its uncertainty
                - success_flag: convergence flag reported by PyVBMC
        """
        ...

    def predict_prob(self, stim: Any) -> jnp.ndarray:
        """
        Probability of a rightward response at the point estimate.

        For uncertainty bands use predictive_bands with posterior samples.
        """
        ...
