"""
psyfit.data
==========

submodule for handling behavioral trial data.

Includes:
- dataset: TrialData container and column layout
- io: load/save trial CSV files
- simulation: synthetic sessions from the psychometric model
"""

from .dataset import COLUMNS, TrialData
from .io import load_trials_csv, save_trials_csv
from .simulation import simulate_trials

__all__ = [
    "COLUMNS",
    "TrialData",
    "load_trials_csv",
    "save_trials_csv",
    "simulate_trials",
]
