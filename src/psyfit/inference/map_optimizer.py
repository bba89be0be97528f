"""
map_optimizer.py
----------------

MAP (Maximum A Posteriori) optimizer using Optax.

- Uses projected gradient ascent on the log posterior.
- Parameters are rescaled so that the plausible box maps to [0, 1]^D;
  iterates are clipped to stay strictly inside the hard bounds.
- Defaults to Adam, but any Optax optimizer can be passed in.

Connections
-----------
- Calls PsychometricModel.log_posterior_from_data(theta, data) as the objective.
- Returns a MAPPosterior wrapping the MAP estimate.
"""

from __future__ import annotations

from typing import Any

import jax
import jax.numpy as jnp
import optax

from psyfit.inference.base import InferenceEngine
from psyfit.inference.objective import starting_point
from psyfit.posterior.posterior import MAPPosterior


class MAPOptimizer(InferenceEngine):
    """
    Gradient-based MAP optimizer.

    Parameters
    ----------
    steps : int, default=1000
        Number of optimization steps.
    learning_rate : float, default=1e-2
        Learning rate for the default optimizer (Adam), in units of the
        plausible range of each parameter.
    optimizer : optax.GradientTransformation, optional
        Optax optimizer to use. Default: Adam.
    margin : float, default=1e-6
        Fraction of the hard range kept between iterates and the hard bounds,
        where bounded priors vanish.
    track_history : bool, default=False
        When True, record loss history during fitting for plotting.
    log_every : int, default=10
        Record every N steps (also records the last step).

    Notes
    -----
    - Loss function = negative log posterior.
    - Gradients computed with jax.grad.
    """

    def __init__(
        self,
        steps: int = 1000,
        learning_rate: float = 1e-2,
        optimizer: optax.GradientTransformation | None = None,
        *,
        margin: float = 1e-6,
        track_history: bool = False,
        log_every: int = 10,
    ):
        self.steps = int(steps)
        self.optimizer = optimizer or optax.adam(learning_rate=learning_rate)
        self.margin = float(margin)
        self.track_history = track_history
        self.log_every = max(1, int(log_every))
        # Exposed after fit() when tracking is enabled
        self.loss_steps: list[int] = []
        self.loss_history: list[float] = []

    def fit(
        self, model, data, x0: Any = None, *, seed: int | None = None
    ) -> MAPPosterior:
        """
        Fit model parameters with MAP optimization.

        Parameters
        ----------
        model : PsychometricModel
            Model instance.
        data : TrialData
            Observed trials.
        x0 : array-like, shape (D,), optional
            Starting point. Takes precedence over the seed.
        seed : int | None, optional
            Seed for a random starting point inside the plausible box.

        Returns
        -------
        MAPPosterior
            Posterior wrapper around MAP params and model.
        """
        b = model.bounds
        offset = b.plb
        scale = b.pub - b.plb
        pad = self.margin * (b.ub - b.lb)
        z_min = (b.lb + pad - offset) / scale
        z_max = (b.ub - pad - offset) / scale

        def to_theta(z):
            return offset + scale * z

        def loss_fn(z):
            return -model.log_posterior_from_data(to_theta(z), data)

        z = (jnp.asarray(starting_point(model, x0, seed)) - offset) / scale
        z = jnp.clip(z, z_min, z_max)
        opt_state = self.optimizer.init(z)

        @jax.jit
        def step(z, opt_state):
            loss, grads = jax.value_and_grad(loss_fn)(z)  # auto-diff
            updates, opt_state = self.optimizer.update(grads, opt_state, z)
            z = optax.apply_updates(z, updates)
            z = jnp.clip(z, z_min, z_max)  # project back into the box
            return z, opt_state, loss

        if self.track_history:
            self.loss_steps.clear()
            self.loss_history.clear()

        for i in range(self.steps):
            z, opt_state, loss = step(z, opt_state)
            if self.track_history and (
                (i % self.log_every == 0) or (i == self.steps - 1)
            ):
                self.loss_steps.append(i)
                self.loss_history.append(float(loss))

        theta = to_theta(z)
        return MAPPosterior(
            theta,
            model,
            fval=loss_fn(z),
            method="optax",
        )

    def get_history(self) -> tuple[list[int], list[float]]:
        """Return (steps, losses) recorded during the last fit when tracking was enabled."""
        return self.loss_steps, self.loss_history
