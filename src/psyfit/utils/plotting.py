"""
plotting.py
-----------

Matplotlib helpers for the tutorial figures.

Every function draws into the given Axes (or Figure), creating one when
None is passed, and returns what it drew into so figures can be saved by
the caller.
"""

from __future__ import annotations

from typing import Any, Sequence

import matplotlib.pyplot as plt
import numpy as np

#: Axis labels for the psychometric parameters.
PARAMETER_LABELS = {
    "mu": r"bias ($\mu$)",
    "sigma": r"threshold ($\sigma$)",
    "lapse_rate": r"lapse rate ($\lambda$)",
    "lapse_bias": r"lapse bias ($\gamma$)",
}


def _label(name: str) -> str:
    return PARAMETER_LABELS.get(name, name)


def _despine(ax) -> None:
    ax.spines["top"].set_visible(False)
    ax.spines["right"].set_visible(False)
    ax.tick_params(direction="out")


def plot_psychometric_data(data, session_num: int, ax=None):
    """
    Plot the fraction of rightward choices per signed contrast.

    Parameters
    ----------
    data : TrialData
        Full dataset; only the trials of `session_num` are shown.
    session_num : int
        Session to plot.
    ax : matplotlib Axes, optional

    Returns
    -------
    matplotlib Axes
    """
    if ax is None:
        _, ax = plt.subplots(figsize=(6, 4.5))

    session = data.for_session(session_num)
    if len(session) == 0:
        raise ValueError(f"session {session_num} not found in data")

    stim, _, p_right, sem = session.choice_summary()
    ax.errorbar(
        stim,
        p_right,
        yerr=sem,
        fmt="o",
        color="k",
        markersize=5,
        capsize=0,
        label="data",
    )
    ax.axhline(0.5, color="#999999", lw=0.5, ls=":")
    ax.axvline(0.0, color="#999999", lw=0.5, ls=":")
    ax.set_xlim(-105, 105)
    ax.set_ylim(-0.03, 1.03)
    ax.set_xlabel("Signed contrast (%)")
    ax.set_ylabel("Rightward response probability")
    ax.set_title(f"Session {session_num} ({len(session)} trials)")
    _despine(ax)
    return ax


def plot_psychometric_curve(stim: Any, p_right: Any, ax=None, label: str = "model", **kwargs):
    """Draw a model psychometric curve (black line by default)."""
    if ax is None:
        _, ax = plt.subplots(figsize=(6, 4.5))
    style = {"color": "k", "lw": 1.0}
    style.update(kwargs)
    ax.plot(np.asarray(stim), np.asarray(p_right), label=label, **style)
    return ax


def plot_predictive_bands(stim: Any, bands: Any, ax=None, label: str = "model"):
    """
    Draw a posterior predictive median with a shaded credible band.

    Parameters
    ----------
    stim : array-like, shape (n_stim,)
    bands : array-like, shape (3, n_stim)
        Bottom, median and top predictions (see predictive_bands).
    ax : matplotlib Axes, optional
    """
    if ax is None:
        _, ax = plt.subplots(figsize=(6, 4.5))
    stim = np.asarray(stim)
    bottom, median, top = np.asarray(bands)
    ax.fill_between(stim, bottom, top, color="k", alpha=0.2, lw=0, label="95% CI")
    ax.plot(stim, median, color="k", lw=1.0, label=label)
    return ax


def plot_prior_shapes(prior, n_points: int = 1000, fig=None):
    """
    Plot the marginal prior density of each parameter.

    Parameters
    ----------
    prior : Prior
    n_points : int, default=1000
        Points per parameter, spanning the hard bounds.
    fig : matplotlib Figure, optional

    Returns
    -------
    matplotlib Figure
    """
    b = prior.bounds
    D = b.dim
    ncols = int(np.ceil(D / 2))
    if fig is None:
        fig = plt.figure(figsize=(4 * ncols, 6))
    for d in range(D):
        ax = fig.add_subplot(2, ncols, d + 1)
        x = np.linspace(float(b.lb[d]), float(b.ub[d]), n_points)
        ax.plot(x, np.asarray(prior.marginal_pdf(x, d)), "k-", lw=1.0)
        ax.set_xlabel(_label(b.names[d]))
        ax.set_ylabel("prior pdf")
        _despine(ax)
    fig.suptitle(f"{prior.kind.replace('_', ' ')} prior")
    fig.tight_layout()
    return fig


def plot_grid_posterior(posterior, prior_pdf: Any = None, name: str = "sigma", axes=None):
    """
    Plot a 1-D grid posterior, optionally next to its prior.

    Parameters
    ----------
    posterior : GridPosterior
    prior_pdf : array-like, optional
        Prior density on posterior.grid.
    name : str, default="sigma"
        Parameter name, for the axis labels.
    axes : sequence of matplotlib Axes, optional
        Two axes (prior, posterior) or one axis (posterior only).

    Returns
    -------
    list of matplotlib Axes
    """
    n_panels = 1 if prior_pdf is None else 2
    if axes is None:
        _, axes = plt.subplots(1, n_panels, figsize=(5 * n_panels, 4), squeeze=False)
        axes = list(axes[0])
    axes = list(axes)

    grid = np.asarray(posterior.grid)
    label = _label(name)
    if prior_pdf is not None:
        axes[0].plot(grid, np.asarray(prior_pdf), "-k", lw=1.0)
        axes[0].set_xlabel(label)
        axes[0].set_ylabel(f"p({name})")
        axes[0].set_title("Prior pdf")
        _despine(axes[0])

    ax = axes[-1]
    ax.plot(grid, np.asarray(posterior.pdf), "-k", lw=1.0)
    ax.set_xlabel(label)
    ax.set_ylabel(f"p({name} | data)")
    ax.set_title("Posterior pdf")
    _despine(ax)
    return axes


def corner_plot(
    samples: Any,
    names: Sequence[str] | None = None,
    *,
    bins: int = 40,
    fig=None,
):
    """
    Corner plot of posterior samples.

    Marginal histograms on the diagonal, 2-D histograms of each pair of
    parameters below it.

    Parameters
    ----------
    samples : array-like, shape (n_samples, D)
    names : sequence of str, optional
    bins : int, default=40
    fig : matplotlib Figure, optional

    Returns
    -------
    matplotlib Figure
    """
    samples = np.asarray(samples)
    if samples.ndim != 2:
        raise ValueError(f"samples must have shape (n_samples, D), got {samples.shape}")
    D = samples.shape[1]
    names = list(names) if names is not None else [f"x{d + 1}" for d in range(D)]

    if fig is None:
        fig = plt.figure(figsize=(2.5 * D, 2.5 * D))
    axes = fig.subplots(D, D, squeeze=False)

    lims = [np.quantile(samples[:, d], [0.001, 0.999]) for d in range(D)]
    for i in range(D):
        for j in range(D):
            ax = axes[i, j]
            if j > i:
                ax.set_visible(False)
                continue
            if i == j:
                ax.hist(samples[:, i], bins=bins, range=lims[i], color="k", histtype="step")
                ax.set_yticks([])
            else:
                ax.hist2d(
                    samples[:, j],
                    samples[:, i],
                    bins=bins,
                    range=[lims[j], lims[i]],
                    cmap="Greys",
                )
            if i == D - 1:
                ax.set_xlabel(_label(names[j]))
            else:
                ax.set_xticklabels([])
            if j == 0 and i > 0:
                ax.set_ylabel(_label(names[i]))
            elif j > 0:
                ax.set_yticklabels([])
    fig.tight_layout()
    return fig
