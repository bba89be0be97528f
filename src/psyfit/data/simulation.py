"""
simulation.py
-------------

Synthetic behavioral sessions drawn from the psychometric model.

Useful for running the tutorial without the IBL dataset and for
parameter-recovery checks: the generated trials have the same eight
columns as the CSV files read by io.load_trials_csv.
"""

from __future__ import annotations

from typing import Any, Sequence

import numpy as np

from psyfit.model.psychometric import psychofun

from .dataset import TrialData

#: Contrast levels (percent) of the IBL training protocol.
DEFAULT_CONTRASTS = (0.0, 6.25, 12.5, 25.0, 50.0, 100.0)


def simulate_trials(
    theta: Any | Sequence[Any],
    *,
    n_sessions: int = 1,
    trials_per_session: int = 400,
    contrasts: Sequence[float] = DEFAULT_CONTRASTS,
    first_session: int = 1,
    seed: int = 0,
) -> TrialData:
    """
    Simulate trials from the psychometric function.

    For each trial a contrast and a side are drawn uniformly, then the
    choice is sampled as y ~ Bernoulli(p_right(contrast * side)).

    Parameters
    ----------
    theta : array-like, shape (D,) or sequence of n_sessions vectors
        Generating parameters, shared by all sessions or one per session.
    n_sessions : int, default=1
        Number of sessions.
    trials_per_session : int, default=400
        Trials per session.
    contrasts : sequence of float
        Unsigned contrast levels.
    first_session : int, default=1
        Number of the first session.
    seed : int, default=0
        Seed for numpy's Generator.

    Returns
    -------
    TrialData
    """
    if n_sessions <= 0 or trials_per_session <= 0:
        raise ValueError("n_sessions and trials_per_session must be positive")

    theta = np.asarray(theta, dtype=float)
    if theta.ndim == 1:
        thetas = np.tile(theta, (n_sessions, 1))
    elif theta.shape[0] == n_sessions:
        thetas = theta
    else:
        raise ValueError(
            f"theta must be a single vector or one per session, got shape {theta.shape}"
        )

    rng = np.random.default_rng(seed)
    contrasts = np.asarray(contrasts, dtype=float)
    blocks = []
    for s in range(n_sessions):
        n = trials_per_session
        contrast = rng.choice(contrasts, size=n)
        position = rng.choice([-1.0, 1.0], size=n)
        p_right = np.asarray(psychofun(thetas[s], contrast * position))
        choice = np.where(rng.uniform(size=n) < p_right, 1.0, -1.0)
        # Zero-contrast trials are rewarded at random.
        correct = np.where(
            contrast > 0, choice == position, rng.uniform(size=n) < 0.5
        ).astype(float)
        blocks.append(
            np.stack(
                [
                    np.arange(1, n + 1, dtype=float),
                    np.full(n, first_session + s, dtype=float),
                    np.full(n, 0.5),
                    contrast,
                    position,
                    choice,
                    correct,
                    rng.lognormal(mean=-0.5, sigma=0.6, size=n),
                ],
                axis=1,
            )
        )
    return TrialData.from_array(np.concatenate(blocks, axis=0))
