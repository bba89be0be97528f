"""
map.py
------

Maximum-a-posteriori estimation with optimizer fallback.

find_map() prefers PyBADS; when it is not installed, a warning is issued and
a generic bound-constrained optimizer (scipy L-BFGS-B) is used instead.
"""

from __future__ import annotations

import warnings
from typing import Any

from psyfit.inference.bads import BADS_URL, BADSOptimizer, bads_available
from psyfit.inference.map_optimizer import MAPOptimizer
from psyfit.inference.scipy_optimizer import ScipyOptimizer
from psyfit.posterior.posterior import MAPPosterior

MAP_METHODS = {
    "bads": BADSOptimizer,
    "scipy": ScipyOptimizer,
    "optax": MAPOptimizer,
}

#: PyBADS "display" levels -> ScipyOptimizer display levels.
FALLBACK_DISPLAY = {
    "off": "off",
    "none": "off",
    "iter": "iter",
    "notify": "final",
    "final": "final",
}


def find_map(
    model,
    data,
    x0: Any = None,
    *,
    method: str = "auto",
    seed: int | None = None,
    options: dict | None = None,
) -> MAPPosterior:
    """
    Find the MAP estimate of the model parameters.

    Parameters
    ----------
    model : PsychometricModel
        Model instance.
    data : TrialData
        Observed trials.
    x0 : array-like, shape (D,), optional
        Starting point. If None, drawn uniformly inside the plausible box.
    method : {"auto", "bads", "scipy", "optax"}, default="auto"
        "auto" uses PyBADS when installed and falls back to scipy otherwise.
    seed : int | None, optional
        Seed for the random starting point.
    options : dict, optional
        Options of the selected optimizer (PyBADS options for "bads", scipy
        minimize options for "scipy"). Ignored for "optax". When "auto"
        falls back to scipy, only the PyBADS "display" level is carried over
        (see FALLBACK_DISPLAY).

    Returns
    -------
    MAPPosterior

    Raises
    ------
    ValueError
        If method is unknown.

    Warns
    -----
    UserWarning
        When method="auto" and PyBADS is not installed.
    """
    if method == "auto":
        if bads_available():
            method = "bads"
        else:
            warnings.warn(
                "PyBADS is not installed; falling back to scipy L-BFGS-B for the "
                f"MAP estimate. Install it with `pip install pybads` ({BADS_URL}).",
                UserWarning,
                stacklevel=2,
            )
            display = (options or {}).get("display", "off")
            engine = ScipyOptimizer(display=FALLBACK_DISPLAY.get(display, "final"))
            return engine.fit(model, data, x0, seed=seed)

    if method not in MAP_METHODS:
        available = ", ".join(["auto", *MAP_METHODS])
        raise ValueError(f"Unknown MAP method: '{method}'. Available: {available}")

    if method == "optax":
        engine = MAPOptimizer()
    else:
        engine = MAP_METHODS[method](options=options)
    return engine.fit(model, data, x0, seed=seed)
