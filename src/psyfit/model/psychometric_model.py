"""
psychometric_model.py
---------------------

PsychometricModel: psychometric function + bounded prior.

The model holds no data and no fitted state beyond what Model caches; it
evaluates densities that the inference engines consume:

    log_posterior_from_data(theta, data) = psychofun_loglike(theta, data)
                                         + prior.log_prob(theta)

All numerics use JAX (jax.numpy as jnp), so the log joint can be
differentiated (used by the scipy and optax engines) and jit-compiled.
"""

from __future__ import annotations

from typing import Any, Callable

import jax.numpy as jnp

from .base import Model
from .prior import Prior
from .psychometric import psychofun, psychofun_loglike


class PsychometricModel(Model):
    """
    Psychometric function with lapses under a bounded prior.

    Parameters
    ----------
    prior : Prior
        Prior over [mu, sigma, lapse_rate, lapse_bias] (or the first three
        parameters when symmetric=True).
    symmetric : bool, default=False
        If True, lapse_bias is fixed to 0.5 and the model has 3 parameters.

    Examples
    --------
    >>> model = PsychometricModel(Prior.default())
    >>> theta = model.init_params(jax.random.PRNGKey(0))
    >>> model.log_posterior_from_data(theta, session_data)
    """

    def __init__(self, prior: Prior, *, symmetric: bool = False) -> None:
        super().__init__()
        self.prior = prior
        self.symmetric = bool(symmetric)

        expected = 3 if self.symmetric else 4
        if prior.dim != expected:
            raise ValueError(
                f"prior must cover {expected} parameters "
                f"(symmetric={self.symmetric}), got {prior.dim}"
            )

    @property
    def dim(self) -> int:
        """Number of free parameters."""
        return self.prior.dim

    @property
    def bounds(self):
        """Hard and plausible bounds (ParameterBounds)."""
        return self.prior.bounds

    @property
    def param_names(self) -> tuple[str, ...]:
        return self.prior.bounds.names

    # ------------------------------------------------------------------
    # Model interface
    # ------------------------------------------------------------------

    def init_params(self, key: Any) -> jnp.ndarray:
        """Random starting point inside the plausible box."""
        return self.prior.sample_params(key)

    def predict_prob(self, theta: Any, stim: Any) -> jnp.ndarray:
        """Probability of a rightward response at each stimulus."""
        return psychofun(theta, stim)

    def log_likelihood_from_data(self, theta: Any, data: Any) -> jnp.ndarray:
        return psychofun_loglike(theta, data)

    def log_prior(self, theta: Any) -> jnp.ndarray:
        return self.prior.log_prob(theta)

    # ------------------------------------------------------------------
    # Conditional densities
    # ------------------------------------------------------------------

    def expand(self, free: Any, fixed: dict[str, float]) -> jnp.ndarray:
        """
        Build a full parameter vector from free values and fixed ones.

        Parameters
        ----------
        free : array-like, shape (D - len(fixed),)
            Values of the non-fixed parameters, in parameter order.
        fixed : dict[str, float]
            Parameter name -> fixed value.

        Returns
        -------
        jnp.ndarray, shape (D,)
        """
        unknown = set(fixed) - set(self.param_names)
        if unknown:
            raise ValueError(
                f"Unknown parameters {sorted(unknown)}. "
                f"Available: {list(self.param_names)}"
            )
        free = jnp.atleast_1d(jnp.asarray(free))
        n_free = self.dim - len(fixed)
        if free.shape[-1] != n_free:
            raise ValueError(f"expected {n_free} free values, got {free.shape[-1]}")

        values = []
        j = 0
        for name in self.param_names:
            if name in fixed:
                values.append(jnp.asarray(fixed[name], dtype=free.dtype))
            else:
                values.append(free[..., j])
                j += 1
        return jnp.stack(values, axis=-1)

    def conditional_log_likelihood(
        self, data: Any, fixed: dict[str, float]
    ) -> Callable[[Any], jnp.ndarray]:
        """
        Log-likelihood as a function of the non-fixed parameters only.

        Examples
        --------
        >>> loglike = model.conditional_log_likelihood(
        ...     data, fixed={"mu": -10.0, "lapse_rate": 0.26, "lapse_bias": 0.54}
        ... )
        >>> loglike(20.0)  # log p(data | sigma=20, mu*, lapse*, bias*)
        """

        def loglike(free):
            return self.log_likelihood_from_data(self.expand(free, fixed), data)

        return loglike

    def with_fixed(
        self, data: Any, fixed: dict[str, float]
    ) -> Callable[[Any], jnp.ndarray]:
        """
        Log joint as a function of the non-fixed parameters only.

        The prior term is the marginal prior of the free parameters, so the
        returned function is an unnormalized conditional log posterior
        log p(free | fixed, data) + const.

        Parameters
        ----------
        data : TrialData
            Observed trials.
        fixed : dict[str, float]
            Parameter name -> fixed value.

        Returns
        -------
        callable
            free (shape (D - len(fixed),)) -> scalar log joint.

        Examples
        --------
        >>> log_joint = model.with_fixed(
        ...     data, fixed={"mu": -10.0, "lapse_rate": 0.26, "lapse_bias": 0.54}
        ... )
        >>> log_joint(20.0)  # log p(data | sigma=20, ...) + log p(sigma=20)
        """
        loglike = self.conditional_log_likelihood(data, fixed)
        free_dims = [d for d, name in enumerate(self.param_names) if name not in fixed]

        def log_joint(free):
            free = jnp.atleast_1d(jnp.asarray(free))
            return loglike(free) + self.prior.marginal_log_prob(free, free_dims)

        return log_joint
