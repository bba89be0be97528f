"""
test_model_api.py
-----------------

Tests for the Model.fit() / Model.posterior() facade.
"""

import jax.numpy as jnp
import pytest

from psyfit.inference import MAPOptimizer, ScipyOptimizer
from psyfit.posterior import MAPPosterior

X0 = jnp.array([10.0, 30.0, 0.3, 0.4])


class TestModelFit:
    def test_fit_with_string(self, model, sim_data):
        """String keys resolve through the inference registry."""
        out = model.fit(sim_data, inference="scipy", x0=X0)
        assert out is model
        post = model.posterior()
        assert isinstance(post, MAPPosterior)
        assert post.method == "scipy-L-BFGS-B"

    def test_fit_with_config(self, model, sim_data):
        model.fit(sim_data, inference="optax", inference_config={"steps": 20}, x0=X0)
        assert model.posterior().method == "optax"
        assert model._inference_engine.steps == 20

    def test_fit_with_engine(self, model, sim_data):
        engine = ScipyOptimizer(options={"maxiter": 50})
        model.fit(sim_data, inference=engine, x0=X0)
        assert model._inference_engine is engine

    def test_unknown_inference(self, model, sim_data):
        with pytest.raises(ValueError, match="Unknown inference"):
            model.fit(sim_data, inference="mcmc")

    def test_config_with_engine_instance(self, model, sim_data):
        with pytest.raises(ValueError, match="inference_config"):
            model.fit(sim_data, inference=MAPOptimizer(steps=1), inference_config={"steps": 2})

    def test_bad_inference_type(self, model, sim_data):
        with pytest.raises(TypeError):
            model.fit(sim_data, inference=42)

    def test_posterior_before_fit(self, model):
        with pytest.raises(RuntimeError, match="fit"):
            model.posterior()
