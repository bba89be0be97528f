"""
prior.py
--------

Bounded prior densities for psychometric function parameters.

Three shapes are provided, each defined between hard bounds [lb, ub]:

- uniform box : flat between the hard bounds.
- trapezoidal : flat within the plausible range [plb, pub], falling
                linearly to zero towards the hard bounds ("tent" prior).
- smooth trapezoidal : as trapezoidal, with the linear ramps replaced by
                cubic smoothstep ramps (no sharp edges).

Multivariate densities are products of independent per-parameter densities.

Shapes
------
- If all bounds are scalars, the density is evaluated elementwise on x.
- If bounds are vectors of length D, x has shape (D,) or (N, D) and the
  per-dimension densities are multiplied over the last axis.

Connections
-----------
- PsychometricModel adds Prior.log_prob(theta) to the log-likelihood to form
  the log joint that the inference engines work with.
- Prior.sample_params(key) draws starting points inside the plausible box.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import jax.numpy as jnp
import jax.random as jr

from .psychometric import PARAMETER_NAMES


def _is_scalar_bounds(*bounds) -> bool:
    return all(jnp.ndim(b) == 0 for b in bounds)


def _safe_width(a, b):
    """Return b - a, replaced by 1 where the interval is empty."""
    width = b - a
    return jnp.where(width > 0, width, 1.0)


def _product(per_dim: jnp.ndarray, scalar: bool) -> jnp.ndarray:
    return per_dim if scalar else jnp.prod(per_dim, axis=-1)


def _log_sum(per_dim: jnp.ndarray, scalar: bool) -> jnp.ndarray:
    log_per_dim = jnp.log(per_dim)
    return log_per_dim if scalar else jnp.sum(log_per_dim, axis=-1)


# ----------------------------------------------------------------------
# Uniform box
# ----------------------------------------------------------------------


def _uniform_box(x, lb, ub):
    x, lb, ub = jnp.asarray(x), jnp.asarray(lb), jnp.asarray(ub)
    inside = (x >= lb) & (x <= ub)
    return jnp.where(inside, 1.0 / (ub - lb), 0.0)


def uniform_box_pdf(x: Any, lb: Any, ub: Any) -> jnp.ndarray:
    """
    Uniform density between hard bounds, zero outside.

    Parameters
    ----------
    x : array-like
        Points at which to evaluate the density.
    lb, ub : float or array-like, shape (D,)
        Hard lower and upper bounds.

    Returns
    -------
    jnp.ndarray
        Density values.
    """
    return _product(_uniform_box(x, lb, ub), _is_scalar_bounds(lb, ub))


def uniform_box_logpdf(x: Any, lb: Any, ub: Any) -> jnp.ndarray:
    """Log of uniform_box_pdf (-inf outside the hard bounds)."""
    return _log_sum(_uniform_box(x, lb, ub), _is_scalar_bounds(lb, ub))


# ----------------------------------------------------------------------
# Trapezoidal
# ----------------------------------------------------------------------


def _trapezoid(x, lb, plb, pub, ub, ramp):
    x = jnp.asarray(x)
    lb, plb, pub, ub = (jnp.asarray(b) for b in (lb, plb, pub, ub))

    # The smoothstep ramp integrates to the same area as the linear ramp,
    # so both shapes share the plateau height.
    height = 2.0 / (ub - lb + pub - plb)

    z_up = (x - lb) / _safe_width(lb, plb)
    z_down = (ub - x) / _safe_width(pub, ub)

    y = jnp.where(
        (x >= plb) & (x <= pub),
        height,
        jnp.where(
            (x >= lb) & (x < plb),
            height * ramp(z_up),
            jnp.where((x > pub) & (x <= ub), height * ramp(z_down), 0.0),
        ),
    )
    return y


def _linear(z):
    return z


def _smoothstep(z):
    return z * z * (3.0 - 2.0 * z)


def trapezoidal_pdf(x: Any, lb: Any, plb: Any, pub: Any, ub: Any) -> jnp.ndarray:
    """
    Trapezoidal ("tent") density.

    Flat within the plausible range [plb, pub], decreasing linearly to zero
    at the hard bounds lb and ub. Zero outside [lb, ub].

    Parameters
    ----------
    x : array-like
        Points at which to evaluate the density.
    lb, plb, pub, ub : float or array-like, shape (D,)
        Hard lower, plausible lower, plausible upper and hard upper bounds,
        with lb <= plb < pub <= ub.

    Returns
    -------
    jnp.ndarray
        Density values.

    Notes
    -----
    The plateau height is 2 / (ub - lb + pub - plb), which makes the
    density integrate to one over [lb, ub].
    """
    per_dim = _trapezoid(x, lb, plb, pub, ub, _linear)
    return _product(per_dim, _is_scalar_bounds(lb, plb, pub, ub))


def trapezoidal_logpdf(x: Any, lb: Any, plb: Any, pub: Any, ub: Any) -> jnp.ndarray:
    """Log of trapezoidal_pdf (-inf outside (lb, ub))."""
    per_dim = _trapezoid(x, lb, plb, pub, ub, _linear)
    return _log_sum(per_dim, _is_scalar_bounds(lb, plb, pub, ub))


def smooth_trapezoidal_pdf(
    x: Any, lb: Any, plb: Any, pub: Any, ub: Any
) -> jnp.ndarray:
    """
    Smoothed trapezoidal density.

    Same support and plateau as trapezoidal_pdf, but the ramps follow the
    cubic smoothstep 3 z^2 - 2 z^3, so the density has no sharp corners.

    Parameters
    ----------
    x : array-like
        Points at which to evaluate the density.
    lb, plb, pub, ub : float or array-like, shape (D,)
        Bounds, with lb <= plb < pub <= ub.

    Returns
    -------
    jnp.ndarray
        Density values.
    """
    per_dim = _trapezoid(x, lb, plb, pub, ub, _smoothstep)
    return _product(per_dim, _is_scalar_bounds(lb, plb, pub, ub))


def smooth_trapezoidal_logpdf(
    x: Any, lb: Any, plb: Any, pub: Any, ub: Any
) -> jnp.ndarray:
    """Log of smooth_trapezoidal_pdf (-inf outside (lb, ub))."""
    per_dim = _trapezoid(x, lb, plb, pub, ub, _smoothstep)
    return _log_sum(per_dim, _is_scalar_bounds(lb, plb, pub, ub))


# ----------------------------------------------------------------------
# Bounds and Prior
# ----------------------------------------------------------------------


@dataclass
class ParameterBounds:
    """
    Hard and plausible bounds for a parameter vector.

    Parameters
    ----------
    lb, ub : sequence of float
        Hard lower and upper bounds. The prior is zero outside.
    plb, pub : sequence of float
        Plausible lower and upper bounds, where most prior mass lies.
    names : sequence of str
        Parameter names, used for plots and summaries.

    Raises
    ------
    ValueError
        If the bounds have different lengths or are not ordered as
        lb <= plb < pub <= ub.
    """

    lb: Any
    ub: Any
    plb: Any
    pub: Any
    names: tuple[str, ...] = field(default=PARAMETER_NAMES)

    def __post_init__(self):
        """Validate and convert bounds to float arrays."""
        self.lb = jnp.atleast_1d(jnp.asarray(self.lb, dtype=float))
        self.ub = jnp.atleast_1d(jnp.asarray(self.ub, dtype=float))
        self.plb = jnp.atleast_1d(jnp.asarray(self.plb, dtype=float))
        self.pub = jnp.atleast_1d(jnp.asarray(self.pub, dtype=float))
        self.names = tuple(self.names)

        D = self.lb.shape[0]
        for name in ("ub", "plb", "pub"):
            if getattr(self, name).shape != (D,):
                raise ValueError(
                    f"{name} must have the same length as lb ({D}), "
                    f"got shape {getattr(self, name).shape}"
                )
        if len(self.names) != D:
            raise ValueError(f"expected {D} parameter names, got {len(self.names)}")

        if not bool(jnp.all(self.lb <= self.plb)):
            raise ValueError("bounds must satisfy lb <= plb")
        if not bool(jnp.all(self.plb < self.pub)):
            raise ValueError("bounds must satisfy plb < pub")
        if not bool(jnp.all(self.pub <= self.ub)):
            raise ValueError("bounds must satisfy pub <= ub")

    @classmethod
    def default(cls, *, symmetric: bool = False) -> ParameterBounds:
        """
        Bounds for [bias, threshold, lapse rate, lapse bias].

        With symmetric=True the lapse bias is dropped.
        """
        n = 3 if symmetric else 4
        return cls(
            lb=[-100.0, 1.0, 0.0, 0.0][:n],
            ub=[100.0, 100.0, 1.0, 1.0][:n],
            plb=[-25.0, 5.0, 0.05, 0.2][:n],
            pub=[25.0, 25.0, 0.40, 0.8][:n],
            names=PARAMETER_NAMES[:n],
        )

    @property
    def dim(self) -> int:
        """Number of parameters."""
        return int(self.lb.shape[0])

    def contains(self, theta: Any) -> jnp.ndarray:
        """True where theta lies within the hard bounds."""
        theta = jnp.asarray(theta)
        return jnp.all((theta >= self.lb) & (theta <= self.ub), axis=-1)


#: Prior density shapes by name: (pdf, logpdf, uses_plausible_bounds).
PRIOR_DENSITIES = {
    "uniform": (uniform_box_pdf, uniform_box_logpdf, False),
    "trapezoidal": (trapezoidal_pdf, trapezoidal_logpdf, True),
    "smooth_trapezoidal": (smooth_trapezoidal_pdf, smooth_trapezoidal_logpdf, True),
}


@dataclass
class Prior:
    """
    Independent bounded prior over a parameter vector.

    Parameters
    ----------
    bounds : ParameterBounds
        Hard and plausible bounds.
    kind : {"uniform", "trapezoidal", "smooth_trapezoidal"}, default="smooth_trapezoidal"
        Shape of each per-parameter density.

    Examples
    --------
    >>> prior = Prior(ParameterBounds.default(), kind="trapezoidal")
    >>> prior.log_prob(jnp.array([0.0, 10.0, 0.1, 0.5]))
    """

    bounds: ParameterBounds
    kind: str = "smooth_trapezoidal"

    def __post_init__(self):
        if self.kind not in PRIOR_DENSITIES:
            raise ValueError(
                f"Unknown prior kind '{self.kind}'. "
                f"Available: {sorted(PRIOR_DENSITIES)}"
            )

    @classmethod
    def default(cls, kind: str = "smooth_trapezoidal", *, symmetric: bool = False) -> Prior:
        """Convenience constructor with the default psychometric bounds."""
        return cls(bounds=ParameterBounds.default(symmetric=symmetric), kind=kind)

    @property
    def dim(self) -> int:
        return self.bounds.dim

    def _args(self, dims=None) -> tuple:
        b = self.bounds
        lb, plb, pub, ub = b.lb, b.plb, b.pub, b.ub
        if dims is not None:
            lb, plb, pub, ub = lb[dims], plb[dims], pub[dims], ub[dims]
        if PRIOR_DENSITIES[self.kind][2]:
            return (lb, plb, pub, ub)
        return (lb, ub)

    def pdf(self, theta: Any) -> jnp.ndarray:
        """Prior density p(theta); theta has shape (D,) or (N, D)."""
        return PRIOR_DENSITIES[self.kind][0](theta, *self._args())

    def log_prob(self, theta: Any) -> jnp.ndarray:
        """Log prior density log p(theta) (-inf outside support)."""
        return PRIOR_DENSITIES[self.kind][1](theta, *self._args())

    def marginal_pdf(self, x: Any, dim: int) -> jnp.ndarray:
        """
        Density of a single parameter, evaluated elementwise on x.

        Parameters
        ----------
        x : array-like
            Values of parameter `dim`.
        dim : int
            Parameter index.
        """
        return PRIOR_DENSITIES[self.kind][0](x, *self._args(dims=dim))

    def marginal_log_prob(self, x: Any, dims: Any) -> jnp.ndarray:
        """
        Log density of a subset of parameters.

        Parameters
        ----------
        x : array-like, shape (len(dims),) or (N, len(dims))
            Values of the selected parameters, in parameter order.
        dims : sequence of int
            Parameter indices.
        """
        dims = jnp.atleast_1d(jnp.asarray(dims, dtype=int))
        return PRIOR_DENSITIES[self.kind][1](x, *self._args(dims=dims))

    def sample_params(self, key: Any) -> jnp.ndarray:
        """
        Draw a starting point uniformly inside the plausible box.

        Parameters
        ----------
        key : JAX random key

        Returns
        -------
        jnp.ndarray, shape (D,)
        """
        b = self.bounds
        u = jr.uniform(key, shape=(self.dim,))
        return b.plb + u * (b.pub - b.plb)
