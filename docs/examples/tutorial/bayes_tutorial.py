"""
Bayesian model fitting made easy with Variational Bayesian Monte Carlo
----------------------------------------------------------------------

Tutorial on Bayesian inference for model fitting. We estimate the
parameters of a psychometric function model in a fully Bayesian manner,
which yields a posterior distribution as opposed to a single point estimate.

Steps:

0. Load the data.
1. Inspect the data (plot per-session choices).
2. Plot the psychometric function model for some parameter values.
3. Compute the log-likelihood of a session.
4. Bayesian inference "by hand": 1-D posterior over sigma on a grid.
5. A closer look at priors (uniform, trapezoidal, smooth trapezoidal).
6. Running Bayesian inference: MAP with PyBADS, posterior with PyVBMC.
7. Posterior usages: corner plot, uncertainty, posterior predictive check.

Data
----
We use data from the International Brain Laboratory (IBL;
https://www.internationalbrainlab.com/) publicly released behavioral mouse
dataset, from exemplar mouse `KS014`. See The IBL et al. (2021)
https://elifesciences.org/articles/63711 for more information about the
task and datasets. Put the preprocessed training sessions in
`data/KS014_train.csv` next to this script. If the file is missing, a
synthetic dataset with the same layout is simulated instead.

Requirements
------------
    pip install -e ".[bayes]"   # psyfit + pybads + pyvbmc
"""

from __future__ import annotations

import os
import sys

import jax
import jax.numpy as jnp
import matplotlib.pyplot as plt
import numpy as np

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "../../../src")))
# --8<-- [start:imports]
from psyfit.data import load_trials_csv, simulate_trials
from psyfit.inference import VBMCInference, find_map, grid_posterior_1d
from psyfit.model import (
    ParameterBounds,
    Prior,
    PsychometricModel,
    psychofun,
    psychofun_loglike,
    uniform_box_pdf,
)
from psyfit.posterior import predictive_bands
from psyfit.utils import (
    corner_plot,
    plot_grid_posterior,
    plot_predictive_bands,
    plot_prior_shapes,
    plot_psychometric_curve,
    plot_psychometric_data,
    print_parameter_summary,
)

# --8<-- [end:imports]

# ---------- Settings ----------
DATA_PATH = os.path.join(os.path.dirname(__file__), "data", "KS014_train.csv")
PLOTS_DIR = os.path.join(os.path.dirname(__file__), "plots")
N_SAMPLES = 100_000  # posterior samples for summaries and predictions
SEED = 0

os.makedirs(PLOTS_DIR, exist_ok=True)


def _save(fig, name: str) -> None:
    path = os.path.join(PLOTS_DIR, f"{name}.png")
    fig.savefig(path, dpi=200, bbox_inches="tight")
    print(f"    Saved {path}")


# ---------- 0) Load the data ----------
print("[0/7] Loading data...")
# --8<-- [start:data]
if os.path.isfile(DATA_PATH):
    data = load_trials_csv(DATA_PATH)
    print(f"    Loaded file {DATA_PATH}.")
else:
    # Sessions with a slowly shrinking threshold and lapse rate, as in training.
    n_sessions = 15
    thetas = np.stack(
        [
            np.linspace(-15.0, -5.0, n_sessions),  # mu
            np.linspace(45.0, 12.0, n_sessions),  # sigma
            np.linspace(0.5, 0.2, n_sessions),  # lapse_rate
            np.full(n_sessions, 0.55),  # lapse_bias
        ],
        axis=1,
    )
    data = simulate_trials(thetas, n_sessions=n_sessions, trials_per_session=500, seed=SEED)
    print(f"    {DATA_PATH} not found: simulated {n_sessions} synthetic sessions instead.")
# --8<-- [end:data]

# The columns are now (each row is a trial):
# 1. trial_num
# 2. session_num
# 3. stim_probability   (unused in training sessions)
# 4. contrast           (from 0 to 100)
# 5. position           (-1 left, 1 right)
# 6. response_choice    (-1 left, 1 right)
# 7. trial_correct      (1 yes, 0 no)
# 8. reaction_time      (seconds)
# 9. signed contrasts   (from -100 to 100)
print(f"    Total # of trials: {len(data)}")
print(f"    Sessions: {data.sessions.tolist()}")
print(data.head(5))

# ---------- I) Inspecting the data ----------
# The first thing to do with any dataset is to get familiar with it by
# running simple visualizations. Here we plot data from individual sessions.
print("[1/7] Plotting data from individual sessions...")
fig, axes = plt.subplots(1, 2, figsize=(12, 4.5))
plot_psychometric_data(data, 2, ax=axes[0])
plot_psychometric_data(data, 15, ax=axes[1])
fig.tight_layout()
_save(fig, "1_sessions")
plt.show()

# ---------- II) Psychometric function model ----------
# Parameters are [bias, slope/noise, lapse rate, lapse bias]. Try different
# values and match the data from one of the sessions. A 3-element theta gives
# the symmetric model (lapse bias = 0.5).
print("[2/7] Plotting the psychometric function model...")
# --8<-- [start:psychofun]
theta0 = jnp.array([-20.0, 40.0, 0.2, 0.5])  # arbitrary parameter values
session_num = 15

stim = jnp.linspace(-100, 100, 201)  # stimulus grid for plotting
p_right = psychofun(theta0, stim)  # psychometric function values
# --8<-- [end:psychofun]

fig, ax = plt.subplots(figsize=(6, 4.5))
plot_psychometric_data(data, session_num, ax=ax)
plot_psychometric_curve(stim, p_right, ax=ax)
plot_psychometric_curve(stim, psychofun(theta0[:3], stim), ax=ax, label="symmetric model", ls="--")
ax.legend(loc="upper left", frameon=False, fontsize=12)
_save(fig, "2_psychometric_model")
plt.show()

# ---------- III) Psychometric function log-likelihood ----------
# log p(data | theta): higher values of the log-likelihood are better.
# Fitting the model by maximizing it is maximum-likelihood estimation; here
# we are going to go full Bayesian instead.
print("[3/7] Computing the log-likelihood of a session...")
# --8<-- [start:loglike]
session_num = 14  # a different session
session_data = data.for_session(session_num)
ll = float(psychofun_loglike(theta0, session_data))
# --8<-- [end:loglike]
print(f"    Log-likelihood value: {ll:.3f}")

fig, ax = plt.subplots(figsize=(6, 4.5))
plot_psychometric_data(data, session_num, ax=ax)
plot_psychometric_curve(stim, p_right, ax=ax)
ax.text(-100, 0.7, f"Log-likelihood: {ll:.3f}", fontsize=12)
ax.legend(loc="upper left", frameon=False, fontsize=12)
_save(fig, "3_loglikelihood")
plt.show()

# ---------- IV) Bayesian inference "by hand" ----------
# Fix all parameters except sigma and compute the 1-D posterior
# p(sigma | mu*, lambda*, gamma*, data) on a grid.
print("[4/7] Computing the posterior over sigma on a grid...")
# --8<-- [start:grid]
fixed = {"mu": -10.0, "lapse_rate": 0.26, "lapse_bias": 0.54}  # ~ ML values
lb, ub = 1.0, 100.0  # hard bounds for sigma

sigma_range = jnp.linspace(0.0, ub + 1.0, 1001)
prior_pdf = uniform_box_pdf(sigma_range, lb, ub)  # uniform box, 0 outside

session_num = 12
session_data = data.for_session(session_num)
model = PsychometricModel(Prior.default())
loglike = model.conditional_log_likelihood(session_data, fixed)

post = grid_posterior_1d(loglike, prior_pdf, sigma_range)
# --8<-- [end:grid]
print(f"    Posterior integral: {post.integral():.3f}.")
print(f"    Posterior mean: {post.mean():.2f}, mode: {post.mode():.2f}")

axes = plot_grid_posterior(post, prior_pdf, name="sigma")
for ax in axes:
    ax.set_xlim(0, 110)
_save(axes[0].figure, "4_grid_posterior")
plt.show()

# ---------- V) A closer look at priors ----------
# Hard bounds: the prior is zero outside. Plausible bounds: where most prior
# mass lies, also used to draw starting points.
print("[5/7] Plotting prior shapes...")
# --8<-- [start:priors]
bounds = ParameterBounds(
    lb=[-100.0, 1.0, 0.0, 0.0],
    ub=[100.0, 100.0, 1.0, 1.0],
    plb=[-25.0, 5.0, 0.05, 0.2],
    pub=[25.0, 25.0, 0.40, 0.8],
)
for kind in ("uniform", "trapezoidal", "smooth_trapezoidal"):
    fig = plot_prior_shapes(Prior(bounds, kind=kind))
    _save(fig, f"5_prior_{kind}")
    plt.show()
# --8<-- [end:priors]

# ---------- VI) Running Bayesian inference ----------
print("[6/7] Running Bayesian inference...")
# --8<-- [start:inference]
session_num = 14
session_data = data.for_session(session_num)

# Smoothed trapezoidal prior (use kind="uniform" for a box-uniform prior)
model = PsychometricModel(Prior(bounds, kind="smooth_trapezoidal"))

# Random starting point inside the plausible box
x0 = model.init_params(jax.random.PRNGKey(SEED))

# MAP estimate: PyBADS if installed, otherwise scipy L-BFGS-B
map_post = find_map(model, session_data, x0, options={"display": "iter"})
print(f"    MAP ({map_post.method}): {np.round(np.asarray(map_post.params), 3)}")

# Variational posterior with PyVBMC, starting from the MAP (not necessary,
# but it helps). Raises ImportError with instructions if PyVBMC is missing.
vbmc = VBMCInference(options={"display": "iter", "plot": False})
vp_post = vbmc.fit(model, session_data, x0=map_post.params)
# --8<-- [end:inference]
# vp_post.elbo: lower bound to the log marginal likelihood (log evidence),
# usable for model comparison (similar to AIC, BIC).
print(f"    ELBO: {vp_post.elbo:.2f} +/- {vp_post.elbo_sd:.2f}")
print(f"    Converged: {vp_post.success_flag}")

# ---------- VII) Posterior usages ----------
print("[7/7] Visualizing the posterior...")
# --8<-- [start:posterior]
thetas = vp_post.sample(N_SAMPLES)  # the posterior is a mixture of Gaussians
fig = corner_plot(thetas, model.param_names)
_save(fig, "7_corner")
plt.show()

# Uncertainty from posterior samples
print_parameter_summary(thetas, model.param_names)

# Posterior predictive check: median and 95% CI of the predicted curve
bands = predictive_bands(thetas, stim)
fig, ax = plt.subplots(figsize=(6, 4.5))
plot_psychometric_data(data, session_num, ax=ax)
plot_predictive_bands(stim, bands, ax=ax)
ax.legend(loc="upper left", frameon=False, fontsize=12)
# --8<-- [end:posterior]
_save(fig, "7_posterior_predictive")
plt.show()

# For more advanced usages of VBMC, see https://github.com/acerbilab/pyvbmc
