"""
test_vbmc.py
------------

Tests for the PyVBMC wrapper.

The variational algorithm belongs to PyVBMC; here it is replaced by a
stand-in module returning a Gaussian variational posterior, so that only
the wiring (objective, bounds, returned posterior) is tested.
"""

import sys
import types

import jax.numpy as jnp
import numpy as np
import pytest

from psyfit.inference import VBMCInference
from psyfit.inference.vbmc import vbmc_available
from psyfit.posterior import ParameterPosterior, VariationalPosterior

X0 = jnp.array([-5.0, 15.0, 0.1, 0.6])


class _GaussianVP:
    def __init__(self, mean, sd):
        self.mean = np.asarray(mean, dtype=float)
        self.sd = np.asarray(sd, dtype=float)
        self.rng = np.random.default_rng(0)

    def sample(self, n):
        samples = self.mean + self.sd * self.rng.standard_normal((n, self.mean.shape[0]))
        return samples, np.zeros(n, dtype=int)

    def moments(self, cov_flag=False):
        mean = self.mean[None, :]
        if cov_flag:
            return mean, np.diag(self.sd**2)
        return mean


def _fake_vbmc_module(calls):
    class VBMC:
        def __init__(self, fun, x0, lb, ub, plb, pub, options=None):
            calls.append(
                {"fun": fun, "x0": x0, "lb": lb, "ub": ub, "plb": plb, "pub": pub, "options": options}
            )
            self.x0 = x0

        def optimize(self):
            vp = _GaussianVP(self.x0[0], [1.0, 2.0, 0.01, 0.05])
            results = {"elbo": -1234.5, "elbo_sd": 0.02, "success_flag": True}
            return vp, results

    module = types.ModuleType("pyvbmc")
    module.VBMC = VBMC
    return module


class TestVBMCInference:
    def test_missing_pyvbmc_is_fatal(self, monkeypatch, model, sim_data):
        monkeypatch.setitem(sys.modules, "pyvbmc", None)
        assert not vbmc_available()
        with pytest.raises(ImportError, match="pip install pyvbmc"):
            VBMCInference().fit(model, sim_data, x0=X0)

    def test_calls_vbmc_with_row_vectors(self, monkeypatch, model, sim_data):
        calls = []
        monkeypatch.setitem(sys.modules, "pyvbmc", _fake_vbmc_module(calls))

        VBMCInference(options={"display": "off"}).fit(model, sim_data, x0=X0)

        (call,) = calls
        for name in ("x0", "lb", "ub", "plb", "pub"):
            assert call[name].shape == (1, 4)
        np.testing.assert_allclose(call["lb"][0], model.bounds.lb)
        np.testing.assert_allclose(call["pub"][0], model.bounds.pub)
        assert call["options"] == {"display": "off"}
        # VBMC receives the (non-negated) log joint
        expected = float(model.log_posterior_from_data(X0, sim_data))
        assert call["fun"](np.asarray(X0)) == pytest.approx(expected, rel=1e-5)

    def test_returns_variational_posterior(self, monkeypatch, model, sim_data):
        monkeypatch.setitem(sys.modules, "pyvbmc", _fake_vbmc_module([]))

        post = VBMCInference().fit(model, sim_data, x0=X0)

        assert isinstance(post, VariationalPosterior)
        assert isinstance(post, ParameterPosterior)
        assert post.elbo == pytest.approx(-1234.5)
        assert post.elbo_sd == pytest.approx(0.02)
        assert post.success_flag is True
        assert post.diagnostics()["success_flag"] is True

        samples = post.sample(500)
        assert samples.shape == (500, 4)
        np.testing.assert_allclose(post.params, X0, rtol=1e-6)
        mean, cov = post.moments()
        assert mean.shape == (4,)
        assert cov.shape == (4, 4)
        assert post.predict_prob(jnp.array([0.0, 50.0])).shape == (2,)

    def test_model_fit_with_vbmc(self, monkeypatch, model, sim_data):
        monkeypatch.setitem(sys.modules, "pyvbmc", _fake_vbmc_module([]))
        model.fit(sim_data, inference="vbmc", inference_config={"options": {"display": "off"}}, x0=X0)
        assert isinstance(model.posterior(), VariationalPosterior)
