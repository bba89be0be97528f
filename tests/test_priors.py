"""
test_priors.py
--------------

Tests for bounded prior densities, ParameterBounds and Prior.

Integrals are computed with a midpoint Riemann sum in float64.
"""

import jax.numpy as jnp
import jax.random as jr
import numpy as np
import pytest

from psyfit.model import (
    ParameterBounds,
    Prior,
    smooth_trapezoidal_logpdf,
    smooth_trapezoidal_pdf,
    trapezoidal_pdf,
    uniform_box_logpdf,
    uniform_box_pdf,
)

LB, PLB, PUB, UB = -100.0, -25.0, 25.0, 100.0


def _integrate(pdf, lb=LB, ub=UB, n=200_000):
    dx = (ub - lb) / n
    x = lb + dx * (np.arange(n) + 0.5)
    return float(np.sum(np.asarray(pdf(x), dtype=np.float64)) * dx)


DENSITIES = {
    "uniform": lambda x: uniform_box_pdf(x, LB, UB),
    "trapezoidal": lambda x: trapezoidal_pdf(x, LB, PLB, PUB, UB),
    "smooth_trapezoidal": lambda x: smooth_trapezoidal_pdf(x, LB, PLB, PUB, UB),
}


class TestDensities:
    @pytest.mark.parametrize("kind", sorted(DENSITIES))
    def test_integrates_to_one(self, kind):
        assert _integrate(DENSITIES[kind]) == pytest.approx(1.0, abs=1e-3)

    @pytest.mark.parametrize("kind", sorted(DENSITIES))
    def test_zero_outside_hard_bounds(self, kind):
        x = jnp.array([-1000.0, -100.5, 100.5, 250.0])
        np.testing.assert_array_equal(DENSITIES[kind](x), 0.0)

    @pytest.mark.parametrize("kind", sorted(DENSITIES))
    def test_positive_on_plausible_range(self, kind):
        x = jnp.linspace(PLB, PUB, 101)
        assert np.all(np.asarray(DENSITIES[kind](x)) > 0)

    def test_trapezoid_plateau_height(self):
        height = 2.0 / (UB - LB + PUB - PLB)
        x = jnp.array([PLB, 0.0, PUB])
        np.testing.assert_allclose(trapezoidal_pdf(x, LB, PLB, PUB, UB), height, rtol=1e-6)
        np.testing.assert_allclose(smooth_trapezoidal_pdf(x, LB, PLB, PUB, UB), height, rtol=1e-6)

    def test_ramps_are_half_height_at_midpoint(self):
        height = 2.0 / (UB - LB + PUB - PLB)
        mid = jnp.array([(LB + PLB) / 2])
        np.testing.assert_allclose(trapezoidal_pdf(mid, LB, PLB, PUB, UB), height / 2, rtol=1e-5)
        np.testing.assert_allclose(
            smooth_trapezoidal_pdf(mid, LB, PLB, PUB, UB), height / 2, rtol=1e-5
        )

    def test_smooth_ramp_is_flat_near_bound(self):
        """Smoothstep starts flatter than the linear ramp."""
        x = jnp.array([LB + 1.0])
        assert smooth_trapezoidal_pdf(x, LB, PLB, PUB, UB) < trapezoidal_pdf(x, LB, PLB, PUB, UB)

    def test_plausible_equals_hard_bounds(self):
        """No ramps: the trapezoid reduces to a uniform box."""
        x = jnp.linspace(0.0, 1.0, 11)
        np.testing.assert_allclose(
            trapezoidal_pdf(x, 0.0, 0.0, 1.0, 1.0), uniform_box_pdf(x, 0.0, 1.0), rtol=1e-6
        )
        assert _integrate(lambda x: smooth_trapezoidal_pdf(x, 0.0, 0.0, 1.0, 1.0), 0.0, 1.0) == (
            pytest.approx(1.0, abs=1e-3)
        )

    def test_vector_bounds_multiply(self):
        lb, ub = jnp.array([0.0, -1.0]), jnp.array([2.0, 3.0])
        x = jnp.array([[1.0, 0.0], [1.0, 5.0]])
        np.testing.assert_allclose(uniform_box_pdf(x, lb, ub), [1 / 8, 0.0], rtol=1e-6)

    def test_vector_logpdf(self):
        lb, plb = jnp.array([0.0, -1.0]), jnp.array([0.5, 0.0])
        pub, ub = jnp.array([1.5, 1.0]), jnp.array([2.0, 3.0])
        x = jnp.array([1.0, 0.5])
        np.testing.assert_allclose(
            smooth_trapezoidal_logpdf(x, lb, plb, pub, ub),
            np.log(smooth_trapezoidal_pdf(x, lb, plb, pub, ub)),
            rtol=1e-5,
        )
        assert float(uniform_box_logpdf(jnp.array([5.0, 0.0]), lb, ub)) == -np.inf


class TestParameterBounds:
    def test_default(self):
        b = ParameterBounds.default()
        assert b.dim == 4
        np.testing.assert_allclose(b.lb, [-100.0, 1.0, 0.0, 0.0])
        np.testing.assert_allclose(b.pub, [25.0, 25.0, 0.4, 0.8])
        assert ParameterBounds.default(symmetric=True).dim == 3

    def test_length_mismatch(self):
        with pytest.raises(ValueError):
            ParameterBounds(lb=[0, 0], ub=[1, 1, 1], plb=[0.1, 0.1], pub=[0.9, 0.9], names=("a", "b"))

    def test_order_checked(self):
        with pytest.raises(ValueError, match="plb < pub"):
            ParameterBounds(lb=[0.0], ub=[1.0], plb=[0.5], pub=[0.5], names=("a",))
        with pytest.raises(ValueError, match="lb <= plb"):
            ParameterBounds(lb=[0.0], ub=[1.0], plb=[-0.5], pub=[0.5], names=("a",))

    def test_contains(self):
        b = ParameterBounds.default()
        assert bool(b.contains(jnp.array([0.0, 10.0, 0.1, 0.5])))
        assert not bool(b.contains(jnp.array([0.0, 0.5, 0.1, 0.5])))


class TestPrior:
    def test_unknown_kind(self):
        with pytest.raises(ValueError, match="Unknown prior kind"):
            Prior(ParameterBounds.default(), kind="gaussian")

    @pytest.mark.parametrize("kind", ["uniform", "trapezoidal", "smooth_trapezoidal"])
    def test_marginals_integrate_to_one(self, kind):
        prior = Prior.default(kind)
        b = prior.bounds
        for d in range(prior.dim):
            lb, ub = float(b.lb[d]), float(b.ub[d])
            total = _integrate(lambda x: prior.marginal_pdf(x, d), lb, ub)
            assert total == pytest.approx(1.0, abs=1e-3)

    def test_pdf_is_product_of_marginals(self):
        prior = Prior.default("trapezoidal")
        theta = jnp.array([30.0, 10.0, 0.02, 0.5])
        marginals = [prior.marginal_pdf(theta[d], d) for d in range(4)]
        np.testing.assert_allclose(prior.pdf(theta), np.prod(marginals), rtol=1e-5)
        np.testing.assert_allclose(prior.log_prob(theta), np.log(prior.pdf(theta)), rtol=1e-5)

    def test_batched_log_prob(self):
        prior = Prior.default()
        thetas = jnp.array([[0.0, 10.0, 0.1, 0.5], [0.0, 200.0, 0.1, 0.5]])
        lp = np.asarray(prior.log_prob(thetas))
        assert lp.shape == (2,)
        assert np.isfinite(lp[0])
        assert lp[1] == -np.inf

    def test_sample_params_in_plausible_box(self):
        prior = Prior.default()
        b = prior.bounds
        for i in range(20):
            theta = prior.sample_params(jr.PRNGKey(i))
            assert theta.shape == (4,)
            assert bool(jnp.all((theta >= b.plb) & (theta <= b.pub)))

    def test_marginal_log_prob_of_subset(self):
        prior = Prior.default("trapezoidal")
        theta = jnp.array([30.0, 10.0, 0.02, 0.5])
        np.testing.assert_allclose(
            prior.marginal_log_prob(theta, [0, 1, 2, 3]), prior.log_prob(theta), rtol=1e-6
        )
        expected = np.log(prior.marginal_pdf(theta[1], 1)) + np.log(prior.marginal_pdf(theta[3], 3))
        np.testing.assert_allclose(
            prior.marginal_log_prob(theta[jnp.array([1, 3])], [1, 3]), expected, rtol=1e-5
        )
        assert float(prior.marginal_log_prob(jnp.array([0.5]), [1])) == -np.inf
