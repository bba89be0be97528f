"""
Central pytest configuration for this project.

This file is automatically discovered by pytest and is intended for:

- **Fixtures**: reusable objects or setup logic shared across multiple test files.
- **Pytest hooks**: project-wide customizations of pytest behavior.

Notes
-----
- Contributors should
  install the package in editable mode (`pip install -e ".[test]"`) so that
  imports are resolved consistently in local dev and CI environments.
- Keep this file focused on test setup. Do not add application logic here.
"""

import matplotlib

matplotlib.use("Agg")

import jax.numpy as jnp  # noqa: E402
import pytest  # noqa: E402

from psyfit.data import simulate_trials  # noqa: E402
from psyfit.model import Prior, PsychometricModel  # noqa: E402

CSV_TEXT = """trial_num,session_num,stim_probability,contrast,position,response_choice,trial_correct,reaction_time
1,1,0.5,100,1,1,1,0.41
2,1,0.5,25,-1,-1,1,0.62
3,1,0.5,0,1,-1,0,1.05
4,1,0.5,50,-1,1,0,0.77
5,1,0.5,12.5,1,1,1,0.55
1,2,0.5,100,-1,-1,1,0.38
2,2,0.5,6.25,1,-1,0,0.91
3,2,0.5,25,1,1,1,0.48
"""


@pytest.fixture
def csv_path(tmp_path):
    """Small trial CSV with two sessions."""
    path = tmp_path / "trials.csv"
    path.write_text(CSV_TEXT)
    return path


@pytest.fixture
def true_theta():
    """Generating parameters [mu, sigma, lapse_rate, lapse_bias]."""
    return jnp.array([-5.0, 15.0, 0.1, 0.6])


@pytest.fixture
def sim_data(true_theta):
    """Simulated session with enough trials for parameter recovery."""
    return simulate_trials(true_theta, n_sessions=1, trials_per_session=3000, seed=1)


@pytest.fixture
def model():
    """Psychometric model with the default smooth trapezoidal prior."""
    return PsychometricModel(Prior.default())
