"""
grid_posterior.py
-----------------

Posterior over a single parameter, tabulated on a regular grid.

Produced by psyfit.inference.grid.grid_posterior_1d ("Bayesian inference
by hand"): the density is known at every grid point, so moments and
quantiles are computed by simple quadrature.
"""

from __future__ import annotations

import jax.numpy as jnp


class GridPosterior:
    """
    Normalized 1-D posterior density on a regular grid.

    Parameters
    ----------
    grid : jnp.ndarray, shape (n,)
        Evenly spaced parameter values.
    pdf : jnp.ndarray, shape (n,)
        Posterior density at each grid point; sum(pdf) * dx == 1.
    log_unnormalized : jnp.ndarray, shape (n,)
        log likelihood + log prior at each grid point (-inf where the prior
        is zero).
    """

    def __init__(self, grid, pdf, log_unnormalized):
        self.grid = jnp.asarray(grid)
        self.pdf = jnp.asarray(pdf)
        self.log_unnormalized = jnp.asarray(log_unnormalized)

    @property
    def dx(self) -> float:
        """Grid spacing."""
        return float(self.grid[1] - self.grid[0])

    def integral(self) -> float:
        """Riemann sum of the density (1 up to rounding)."""
        return float(jnp.sum(self.pdf) * self.dx)

    def mean(self) -> float:
        """Posterior mean."""
        return float(jnp.sum(self.grid * self.pdf) * self.dx)

    def std(self) -> float:
        """Posterior standard deviation."""
        m = self.mean()
        return float(jnp.sqrt(jnp.sum((self.grid - m) ** 2 * self.pdf) * self.dx))

    def mode(self) -> float:
        """Grid point with the highest posterior density."""
        return float(self.grid[jnp.argmax(self.pdf)])

    def cdf(self) -> jnp.ndarray:
        """Cumulative distribution at each grid point."""
        return jnp.cumsum(self.pdf) * self.dx

    def quantile(self, q: float) -> float:
        """
        Smallest grid point whose cumulative probability reaches q.

        Raises
        ------
        ValueError
            If q is outside [0, 1].
        """
        if not 0.0 <= q <= 1.0:
            raise ValueError(f"q must lie in [0, 1], got {q}")
        idx = jnp.searchsorted(self.cdf(), q)
        idx = jnp.minimum(idx, self.grid.shape[0] - 1)
        return float(self.grid[idx])

    def __repr__(self) -> str:
        return (
            f"GridPosterior(n={self.grid.shape[0]}, "
            f"mean={self.mean():.3f}, mode={self.mode():.3f})"
        )
