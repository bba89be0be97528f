"""
psychometric.py
---------------

Psychometric function with lapses and its Bernoulli log-likelihood.

The model maps a signed stimulus contrast s to the probability of a
rightward response:

    p_right(s) = lapse_rate * lapse_bias
               + (1 - lapse_rate) * Phi((s - mu) / sigma)

where Phi is the standard normal CDF. Parameters are ordered as

    theta = [mu, sigma, lapse_rate, lapse_bias]

- mu         : bias (stimulus at which the sigmoid is centered)
- sigma      : slope/noise (threshold)
- lapse_rate : probability of a stimulus-independent response
- lapse_bias : probability that a lapse is a rightward response

A 3-element theta gives the symmetric model (lapse_bias = 0.5).

All functions use JAX (jax.numpy) so log-likelihoods can be differentiated.
"""

from __future__ import annotations

from typing import Any

import jax.numpy as jnp
from jax.scipy.special import log_ndtr
from jax.scipy.stats import norm

#: Names of the psychometric function parameters, in theta order.
PARAMETER_NAMES = ("mu", "sigma", "lapse_rate", "lapse_bias")


def _unpack(theta: jnp.ndarray):
    theta = jnp.asarray(theta)
    mu = theta[..., 0]
    sigma = theta[..., 1]
    lapse_rate = theta[..., 2]
    if theta.shape[-1] >= 4:
        lapse_bias = theta[..., 3]
    else:
        lapse_bias = jnp.full_like(lapse_rate, 0.5)
    return mu, sigma, lapse_rate, lapse_bias


def psychofun(theta: Any, stim: Any) -> jnp.ndarray:
    """
    Evaluate the psychometric function at the given stimuli.

    Parameters
    ----------
    theta : array-like, shape (3,) or (4,), or (..., 3|4)
        Parameter vector [mu, sigma, lapse_rate, lapse_bias]. With a
        leading batch axis (B, 4), every parameter vector is evaluated at
        every stimulus.
    stim : array-like, shape (S,)
        Signed stimulus contrasts.

    Returns
    -------
    jnp.ndarray
        Probability of a rightward response, shape (S,) or (B, S).

    Examples
    --------
    >>> import jax.numpy as jnp
    >>> stim = jnp.linspace(-100, 100, 201)
    >>> p_right = psychofun(jnp.array([-20.0, 40.0, 0.2, 0.5]), stim)
    """
    mu, sigma, lapse_rate, lapse_bias = _unpack(theta)
    stim = jnp.asarray(stim)
    if jnp.ndim(mu) > 0:
        mu, sigma = mu[..., None], sigma[..., None]
        lapse_rate, lapse_bias = lapse_rate[..., None], lapse_bias[..., None]
    return lapse_rate * lapse_bias + (1.0 - lapse_rate) * norm.cdf(
        stim, loc=mu, scale=sigma
    )


def trial_loglike(theta: Any, stim: Any, choice: Any) -> jnp.ndarray:
    """
    Per-trial log-probabilities of the observed choices.

    Parameters
    ----------
    theta : array-like, shape (3,) or (4,)
        Parameter vector.
    stim : array-like, shape (n_trials,)
        Signed contrasts.
    choice : array-like, shape (n_trials,)
        Responses, 1 for right and -1 for left.

    Returns
    -------
    jnp.ndarray
        log p(choice_i | stim_i, theta), shape (n_trials,).
    """
    mu, sigma, lapse_rate, lapse_bias = _unpack(theta)
    z = (jnp.asarray(stim) - mu) / sigma
    # Both choice probabilities stay in log space: in float32, 1 - p_right
    # rounds to 0 when the lapse rate is tiny and the stimulus is strong.
    log_attend = jnp.log1p(-lapse_rate)
    log_right = jnp.logaddexp(
        jnp.log(lapse_rate * lapse_bias), log_attend + log_ndtr(z)
    )
    log_left = jnp.logaddexp(
        jnp.log(lapse_rate * (1.0 - lapse_bias)), log_attend + log_ndtr(-z)
    )
    return jnp.where(jnp.asarray(choice) == 1, log_right, log_left)


def psychofun_loglike(theta: Any, data: Any) -> jnp.ndarray:
    """
    Log-likelihood log p(data | theta) of a dataset.

    Bernoulli observation model: the log-likelihood is the exact sum of
    per-trial log-probabilities (see trial_loglike).

    Parameters
    ----------
    theta : array-like, shape (3,) or (4,)
        Parameter vector.
    data : TrialData or array-like, shape (n_trials, 9)
        Trials. Arrays follow TrialData.to_numpy() column order.

    Returns
    -------
    jnp.ndarray
        Scalar log-likelihood. Higher is better.
    """
    stim, choice = _stim_and_choice(data)
    return jnp.sum(trial_loglike(theta, stim, choice))


def _stim_and_choice(data: Any) -> tuple[jnp.ndarray, jnp.ndarray]:
    if hasattr(data, "signed_contrast"):
        return jnp.asarray(data.signed_contrast), jnp.asarray(data.response_choice)
    data = jnp.asarray(data)
    if data.ndim != 2 or data.shape[1] != 9:
        raise ValueError(
            f"data must be TrialData or an array of shape (n_trials, 9), got {data.shape}"
        )
    return data[:, 8], data[:, 5]
