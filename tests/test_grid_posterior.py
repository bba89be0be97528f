"""
test_grid_posterior.py
----------------------

Tests for the brute-force 1-D posterior over a single parameter.
"""

import jax.numpy as jnp
import numpy as np
import pytest

from psyfit.inference import grid_posterior_1d
from psyfit.model import uniform_box_pdf
from psyfit.posterior import GridPosterior

FIXED = {"mu": -5.0, "lapse_rate": 0.1, "lapse_bias": 0.6}


@pytest.fixture
def sigma_grid():
    return jnp.linspace(0.0, 101.0, 1001)


@pytest.fixture
def sigma_posterior(model, sim_data, sigma_grid):
    loglike = model.conditional_log_likelihood(sim_data, FIXED)
    prior_pdf = uniform_box_pdf(sigma_grid, 1.0, 100.0)
    return grid_posterior_1d(loglike, prior_pdf, sigma_grid), prior_pdf


class TestGridPosterior1D:
    def test_normalized(self, sigma_posterior):
        post, _ = sigma_posterior
        assert isinstance(post, GridPosterior)
        assert post.integral() == pytest.approx(1.0, abs=1e-4)

    def test_zero_where_prior_is_zero(self, sigma_posterior):
        post, prior_pdf = sigma_posterior
        outside = np.asarray(prior_pdf) == 0
        assert outside.any()
        np.testing.assert_array_equal(np.asarray(post.pdf)[outside], 0.0)
        assert np.all(np.isneginf(np.asarray(post.log_unnormalized)[outside]))

    def test_finite_everywhere(self, sigma_posterior):
        post, _ = sigma_posterior
        assert np.all(np.isfinite(np.asarray(post.pdf)))

    def test_concentrates_near_truth(self, sigma_posterior, true_theta):
        post, _ = sigma_posterior
        sigma = float(true_theta[1])
        assert abs(post.mode() - sigma) < 5.0
        assert abs(post.mean() - sigma) < 5.0
        assert post.quantile(0.025) < post.mean() < post.quantile(0.975)

    def test_callable_prior(self, model, sim_data, sigma_grid, sigma_posterior):
        loglike = model.conditional_log_likelihood(sim_data, FIXED)
        post = grid_posterior_1d(loglike, lambda s: uniform_box_pdf(s, 1.0, 100.0), sigma_grid)
        np.testing.assert_allclose(post.pdf, sigma_posterior[0].pdf, rtol=1e-6)

    def test_known_gaussian(self):
        """Flat prior and Gaussian log-likelihood give a Gaussian posterior."""
        grid = jnp.linspace(-10.0, 10.0, 2001)
        post = grid_posterior_1d(lambda x: -0.5 * (x - 1.0) ** 2 / 4.0, jnp.ones_like(grid), grid)
        assert post.mean() == pytest.approx(1.0, abs=1e-3)
        assert post.std() == pytest.approx(2.0, abs=1e-2)
        assert post.quantile(0.5) == pytest.approx(1.0, abs=0.02)

    def test_invalid_inputs(self):
        grid = jnp.linspace(0.0, 1.0, 11)
        with pytest.raises(ValueError, match="at least two"):
            grid_posterior_1d(lambda x: x, jnp.ones(1), jnp.zeros(1))
        with pytest.raises(ValueError, match="shape"):
            grid_posterior_1d(lambda x: x, jnp.ones(5), grid)
        with pytest.raises(ValueError, match="zero everywhere"):
            grid_posterior_1d(lambda x: x, jnp.zeros(11), grid)

    def test_quantile_range(self, sigma_posterior):
        post, _ = sigma_posterior
        with pytest.raises(ValueError):
            post.quantile(1.5)
