"""
grid.py
-------

Brute-force posterior over a single parameter.

With all other parameters fixed, Bayes' rule is applied pointwise on a
grid (in log space):

    log p(x | data) = log p(data | x) + log p(x) + const

The result is shifted by its maximum for numerical stability,
exponentiated and normalized so that sum(pdf) * dx == 1.
"""

from __future__ import annotations

from typing import Any, Callable

import jax
import jax.numpy as jnp

from psyfit.posterior.grid_posterior import GridPosterior


def grid_posterior_1d(
    log_likelihood: Callable[[Any], jnp.ndarray],
    prior_pdf: Callable[[Any], jnp.ndarray] | Any,
    grid: Any,
) -> GridPosterior:
    """
    Compute a normalized 1-D posterior on a regular grid.

    Parameters
    ----------
    log_likelihood : callable
        x -> log p(data | x), JAX-traceable (it is vmapped over the grid).
    prior_pdf : callable or array-like
        Prior density, either as a function of x or already evaluated on
        the grid.
    grid : array-like, shape (n,)
        Evenly spaced grid of parameter values (n >= 2).

    Returns
    -------
    GridPosterior

    Raises
    ------
    ValueError
        If the grid has fewer than two points or the prior is zero
        everywhere on the grid.

    Examples
    --------
    >>> loglike = model.conditional_log_likelihood(
    ...     data, fixed={"mu": -10.0, "lapse_rate": 0.26, "lapse_bias": 0.54}
    ... )
    >>> grid = jnp.linspace(0.0, 101.0, 1001)
    >>> post = grid_posterior_1d(loglike, lambda s: uniform_box_pdf(s, 1.0, 100.0), grid)
    >>> post.integral()
    1.0
    """
    grid = jnp.asarray(grid)
    if grid.ndim != 1 or grid.shape[0] < 2:
        raise ValueError("grid must be 1-D with at least two points")
    dx = grid[1] - grid[0]

    prior = prior_pdf(grid) if callable(prior_pdf) else jnp.asarray(prior_pdf)
    if prior.shape != grid.shape:
        raise ValueError(
            f"prior must have the grid's shape {grid.shape}, got {prior.shape}"
        )
    support = prior > 0
    if not bool(jnp.any(support)):
        raise ValueError("prior is zero everywhere on the grid")

    loglike = jax.vmap(log_likelihood)(grid)
    # Outside the prior support the likelihood may be undefined (e.g. sigma=0).
    safe_prior = jnp.where(support, prior, 1.0)
    logpost = jnp.where(support, loglike + jnp.log(safe_prior), -jnp.inf)

    post = jnp.exp(logpost - jnp.max(logpost))
    post = post / (jnp.sum(post) * dx)
    return GridPosterior(grid, post, logpost)
