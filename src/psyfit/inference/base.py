"""
base.py
-------

Abstract base class for inference engines.

All inference engines must implement a `fit(model, data, ...)` method
that returns a posterior object.

All inference engines (BADSOptimizer, ScipyOptimizer, MAPOptimizer,
VBMCInference) subclass from this base.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class InferenceEngine(ABC):
    """
    Abstract interface for inference engines.

    Methods
    -------
    fit(model, data) -> ParameterPosterior
        Fit model parameters to data and return a posterior object.
    """

    @abstractmethod
    def fit(self, model: Any, data: Any, x0: Any = None, *, seed: int | None = None) -> Any:
        """
        Fit model parameters to data.

        Parameters
        ----------
        model : PsychometricModel
            Model to fit.
        data : TrialData
            Observed trials.
        x0 : array-like, shape (D,), optional
            Starting point. If None, drawn inside the plausible box.
        seed : int | None, optional
            Seed for the random starting point.

        Returns
        -------
        ParameterPosterior
            Posterior object wrapping fitted params and model reference.
        """
        ...
