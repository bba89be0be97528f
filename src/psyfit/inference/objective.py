"""
objective.py
------------

Objective functions handed to the inference engines.

The external optimizers (PyBADS, PyVBMC, scipy) call back into Python with
NumPy vectors and expect Python floats; the JAX log joint is jit-compiled
once per (model, data) pair and wrapped accordingly.
"""

from __future__ import annotations

from typing import Any, Callable

import jax
import jax.numpy as jnp
import numpy as np


def make_log_joint(model, data) -> Callable[[Any], jnp.ndarray]:
    """
    Jit-compiled log joint theta -> log p(data | theta) + log p(theta).

    The trial arrays are captured as constants.
    """

    @jax.jit
    def log_joint(theta):
        return model.log_posterior_from_data(theta, data)

    return log_joint


def to_numpy_objective(
    fn: Callable[[Any], jnp.ndarray], *, negate: bool = False
) -> Callable[[np.ndarray], float]:
    """
    Wrap a JAX scalar function for libraries that work with NumPy.

    Parameters
    ----------
    fn : callable
        theta -> scalar jnp array.
    negate : bool, default=False
        Return -fn(theta) (optimizers minimize).

    Returns
    -------
    callable
        theta (np.ndarray, shape (D,) or (1, D)) -> float
    """
    sign = -1.0 if negate else 1.0

    def objective(theta):
        theta = jnp.asarray(np.asarray(theta, dtype=float).reshape(-1))
        return sign * float(fn(theta))

    return objective


def starting_point(model, x0: Any = None, seed: int | None = None) -> np.ndarray:
    """
    Resolve the starting point of an optimization.

    Parameters
    ----------
    model : PsychometricModel
    x0 : array-like, shape (D,), optional
        Explicit starting point; takes precedence over the seed.
    seed : int | None, optional
        Seed for a random point inside the plausible box. Defaults to 0.

    Returns
    -------
    np.ndarray, shape (D,)

    Raises
    ------
    ValueError
        If x0 has the wrong length or lies outside the hard bounds.
    """
    if x0 is None:
        rng_seed = 0 if seed is None else int(seed)
        return np.asarray(model.init_params(jax.random.PRNGKey(rng_seed)), dtype=float)

    x0 = np.asarray(x0, dtype=float).reshape(-1)
    if x0.shape[0] != model.dim:
        raise ValueError(f"x0 must have {model.dim} entries, got {x0.shape[0]}")
    if not bool(model.bounds.contains(x0)):
        raise ValueError(f"x0 {x0.tolist()} lies outside the hard bounds")
    return x0
