"""
diagnostics.py
--------------

Posterior summaries from parameter samples.

Provides tools for:
- Parameter posterior summaries (mean, median, std, credible intervals)
- Posterior correlations between parameters

Examples
--------
>>> from psyfit.utils.diagnostics import parameter_summary
>>> thetas = vp.sample(100_000)
>>> summary = parameter_summary(thetas, names=model.param_names)
>>> print(f"sigma: {summary['sigma']['mean']:.2f} ± {summary['sigma']['std']:.2f}")
"""

from __future__ import annotations

from typing import Any, Sequence

import jax.numpy as jnp

from psyfit.model.psychometric import PARAMETER_NAMES


def _as_samples(samples: Any) -> jnp.ndarray:
    samples = jnp.asarray(samples)
    if samples.ndim != 2:
        raise ValueError(f"samples must have shape (n_samples, D), got {samples.shape}")
    return samples


def parameter_summary(
    samples: Any,
    names: Sequence[str] | None = None,
    *,
    quantiles: tuple[float, ...] = (0.025, 0.5, 0.975),
) -> dict[str, dict[str, Any]]:
    """
    Compute summary statistics for each parameter.

    Parameters
    ----------
    samples : array-like, shape (n_samples, D)
        Posterior samples.
    names : sequence of str, optional
        Parameter names. Defaults to the psychometric parameter names.
    quantiles : tuple of floats, default=(0.025, 0.5, 0.975)
        Quantiles to compute

    Returns
    -------
    summary : dict[str, dict]
        Dictionary with keys for each parameter, values are dicts with:
        - "mean": Mean of posterior samples
        - "median": Median
        - "std": Standard deviation
        - "quantiles": Dict mapping quantile to value
    """
    samples = _as_samples(samples)
    D = samples.shape[1]
    names = tuple(names) if names is not None else PARAMETER_NAMES[:D]
    if len(names) != D:
        raise ValueError(f"expected {D} parameter names, got {len(names)}")

    summary = {}
    for d, name in enumerate(names):
        x = samples[:, d]
        summary[name] = {
            "mean": float(jnp.mean(x)),
            "median": float(jnp.median(x)),
            "std": float(jnp.std(x, ddof=1)),
            "quantiles": {q: float(jnp.quantile(x, q)) for q in quantiles},
        }
    return summary


def print_parameter_summary(samples: Any, names: Sequence[str] | None = None) -> None:
    """
    Print a human-readable parameter summary.

    Examples
    --------
    >>> print_parameter_summary(thetas, names=model.param_names)
    mu: Mean: -8.51, Median -8.50, Std 1.91, 95% CI [-12.30, -4.83]
    """
    summary = parameter_summary(samples, names, quantiles=(0.025, 0.975))
    for name, stats in summary.items():
        q = stats["quantiles"]
        print(
            f"{name}: Mean: {stats['mean']:.2f}, Median {stats['median']:.2f}, "
            f"Std {stats['std']:.2f}, 95% CI [{q[0.025]:.2f}, {q[0.975]:.2f}]"
        )


def posterior_correlations(samples: Any) -> jnp.ndarray:
    """
    Correlation matrix between parameters.

    Parameters
    ----------
    samples : array-like, shape (n_samples, D)

    Returns
    -------
    jnp.ndarray, shape (D, D)
    """
    samples = _as_samples(samples)
    return jnp.corrcoef(samples, rowvar=False)
