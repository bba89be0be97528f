"""
base.py
-------

Base class for psychometric models.

Provides:
- Model.log_posterior_from_data(theta, data) --> log joint used by all engines
- Model.fit(data, inference=...) --> fit through an inference engine
- Model.posterior() --> the posterior returned by the last fit

Design
------
This façade delegates inference to specialized engines (BADS, scipy, optax,
VBMC) while keeping a simple API for users. Models never optimize or sample
themselves; they only evaluate log densities.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

import jax.numpy as jnp

if TYPE_CHECKING:
    from psyfit.data import TrialData
    from psyfit.inference.base import InferenceEngine
    from psyfit.posterior import ParameterPosterior


class Model(ABC):
    """
    Abstract base class for psychometric models.

    Subclasses must implement:
    - init_params(key) --> draw a starting parameter vector
    - log_likelihood_from_data(theta, data) --> log p(data | theta)
    - log_prior(theta) --> log p(theta)

    Attributes
    ----------
    _posterior : ParameterPosterior | None
        Cached posterior from the last fit
    _inference_engine : InferenceEngine | None
        Engine used in the last fit
    """

    def __init__(self) -> None:
        self._posterior: ParameterPosterior | None = None
        self._inference_engine: InferenceEngine | None = None

    # ------------------------------------------------------------------
    # Abstract methods (must be implemented by subclasses)
    # ------------------------------------------------------------------

    @abstractmethod
    def init_params(self, key: Any) -> jnp.ndarray:
        """
        Draw a starting parameter vector.

        Parameters
        ----------
        key : jax.random.KeyArray
            PRNG key

        Returns
        -------
        jnp.ndarray
            Parameter vector, shape (D,)
        """
        ...

    @abstractmethod
    def log_likelihood_from_data(self, theta: Any, data: TrialData) -> jnp.ndarray:
        """
        Compute log p(data | theta).

        Parameters
        ----------
        theta : array-like, shape (D,)
            Model parameters
        data : TrialData
            Observed trials

        Returns
        -------
        jnp.ndarray
            Log-likelihood (scalar)
        """
        ...

    @abstractmethod
    def log_prior(self, theta: Any) -> jnp.ndarray:
        """Compute log p(theta)."""
        ...

    def log_posterior_from_data(self, theta: Any, data: TrialData) -> jnp.ndarray:
        """
        Unnormalized log posterior (log joint).

        log p(theta | data) = log p(data | theta) + log p(theta) + const
        """
        return self.log_likelihood_from_data(theta, data) + self.log_prior(theta)

    # ------------------------------------------------------------------
    # fit / posterior
    # ------------------------------------------------------------------

    def fit(
        self,
        data: TrialData,
        *,
        inference: InferenceEngine | str = "bads",
        inference_config: dict | None = None,
        **fit_kwargs,
    ) -> Model:
        """
        Fit model to data.

        Parameters
        ----------
        data : TrialData
            Observed trials.
        inference : InferenceEngine | str, default="bads"
            Inference engine or string key ("bads", "scipy", "optax", "vbmc").
        inference_config : dict | None
            Constructor arguments for string-based inference.
            Example: {"options": {"display": "off"}} for BADS.
        **fit_kwargs
            Passed to the engine's fit() (e.g. x0, seed).

        Returns
        -------
        Model
            Self for method chaining

        Examples
        --------
        >>> model.fit(session_data, inference="scipy")
        >>> from psyfit.inference import VBMCInference
        >>> model.fit(session_data, inference=VBMCInference(), x0=theta_map)
        """
        from psyfit.inference import INFERENCE_ENGINES, InferenceEngine

        is_string_inference = isinstance(inference, str)

        if is_string_inference:
            config = inference_config or {}
            inference_key: str = inference  # type: ignore[assignment]
            if inference_key not in INFERENCE_ENGINES:
                available = ", ".join(INFERENCE_ENGINES.keys())
                raise ValueError(
                    f"Unknown inference: '{inference}'. Available: {available}"
                )
            inference_engine: InferenceEngine = INFERENCE_ENGINES[inference_key](
                **config
            )
        elif isinstance(inference, InferenceEngine):
            inference_engine = inference
        else:
            raise TypeError(
                f"inference must be InferenceEngine or str, got {type(inference)}"
            )

        if inference_config is not None and not is_string_inference:
            raise ValueError(
                "Cannot pass inference_config with InferenceEngine instance"
            )

        self._posterior = inference_engine.fit(self, data, **fit_kwargs)
        self._inference_engine = inference_engine
        return self

    def posterior(self) -> ParameterPosterior:
        """
        Return the posterior from the last fit.

        Raises
        ------
        RuntimeError
            If model has not been fit yet
        """
        if self._posterior is None:
            raise RuntimeError("Must call fit() before posterior()")
        return self._posterior
