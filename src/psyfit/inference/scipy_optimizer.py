"""
scipy_optimizer.py
------------------

Generic bound-constrained MAP optimizer (scipy.optimize.minimize).

Used as the fallback when PyBADS is not installed. Gradients of the
negative log posterior come from JAX autodiff.
"""

from __future__ import annotations

from typing import Any

import jax
import jax.numpy as jnp
import numpy as np
from scipy.optimize import minimize

from psyfit.inference.base import InferenceEngine
from psyfit.inference.objective import starting_point
from psyfit.posterior.posterior import MAPPosterior

DISPLAY_LEVELS = ("off", "iter", "final")


class ScipyOptimizer(InferenceEngine):
    """
    MAP optimizer using scipy's bound-constrained minimizers.

    Parameters
    ----------
    method : str, default="L-BFGS-B"
        Any scipy.optimize.minimize method that accepts bounds.
    options : dict, optional
        Passed to scipy.optimize.minimize (e.g. {"maxiter": 500}).
    margin : float, default=1e-6
        Fraction of the hard range removed from each side of the bounds
        given to scipy, where bounded priors vanish.
    display : {"off", "iter", "final"}, default="off"
        Progress printed while optimizing, with the same levels as the
        PyBADS "display" option: one line per iteration, or a final
        summary only.
    """

    def __init__(
        self,
        method: str = "L-BFGS-B",
        options: dict | None = None,
        *,
        margin: float = 1e-6,
        display: str = "off",
    ):
        self.method = method
        self.options = dict(options or {})
        self.margin = float(margin)
        if display not in DISPLAY_LEVELS:
            raise ValueError(
                f"Unknown display level: '{display}'. Available: {DISPLAY_LEVELS}"
            )
        self.display = display

    def fit(
        self, model, data, x0: Any = None, *, seed: int | None = None
    ) -> MAPPosterior:
        """
        Find the MAP estimate with scipy.optimize.minimize.

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
            Posterior wrapper; the scipy OptimizeResult is `.result`.
        """

        def loss_fn(theta):
            return -model.log_posterior_from_data(theta, data)

        value_and_grad = jax.jit(jax.value_and_grad(loss_fn))

        def fun(theta):
            loss, grad = value_and_grad(jnp.asarray(theta))
            return float(loss), np.asarray(grad, dtype=float)

        b = model.bounds
        lb = np.asarray(b.lb, dtype=float)
        ub = np.asarray(b.ub, dtype=float)
        pad = self.margin * (ub - lb)
        x0 = np.clip(starting_point(model, x0, seed), lb + pad, ub - pad)

        callback = None
        if self.display == "iter":
            iteration = 0
            print(f" {'Iteration':>9}  {'f(x)':>14}")
            print(f" {iteration:>9d}  {fun(x0)[0]:>14.6g}")

            def callback(xk):
                nonlocal iteration
                iteration += 1
                print(f" {iteration:>9d}  {fun(xk)[0]:>14.6g}")

        result = minimize(
            fun,
            x0,
            jac=True,
            method=self.method,
            bounds=list(zip(lb + pad, ub - pad)),
            options=self.options or None,
            callback=callback,
        )
        if self.display != "off":
            print(
                f"scipy {self.method}: {result.message} "
                f"(f(x) = {float(result.fun):.6g}, {result.get('nit', 'n/a')} iterations)"
            )
        return MAPPosterior(
            np.asarray(result.x, dtype=float),
            model,
            fval=result.fun,
            method=f"scipy-{self.method}",
            result=result,
        )
