import numpy as np
import pytest

from blend_simulator.core import (
    distance_to_target,
    performance_profile,
    profile_arrays,
)


class TestProfileSampling:
    def test_default_resolution(self, engine, reference_inputs):
        results = engine.evaluate(reference_inputs)
        points = performance_profile(reference_inputs, results)
        assert len(points) == 21
        assert points[0].distance == 0.0

    def test_extent(self, engine, reference_inputs):
        results = engine.evaluate(reference_inputs)
        points = performance_profile(reference_inputs, results, n_points=11)
        expected = 1.5 * max(results.mixing_distance_needed, 10.0, 5.0)
        assert points[-1].distance == pytest.approx(expected)

    def test_minimum_extent(self, engine, kenics_inputs):
        short = kenics_inputs.with_changes(available_length=1.0)
        results = engine.evaluate(short)
        points = performance_profile(short, results)
        assert points[-1].distance == pytest.approx(1.5 * 5.0)

    def test_too_few_points(self, engine, reference_inputs):
        results = engine.evaluate(reference_inputs)
        with pytest.raises(ValueError):
            performance_profile(reference_inputs, results, n_points=1)

    def test_arrays_match_points(self, engine, kenics_inputs):
        results = engine.evaluate(kenics_inputs)
        distances, cov, dissolution = profile_arrays(kenics_inputs, results)
        points = performance_profile(kenics_inputs, results)
        np.testing.assert_allclose(distances, [p.distance for p in points])
        np.testing.assert_allclose(cov, [p.cov for p in points])
        assert all(p.target == kenics_inputs.target_cov for p in points)


class TestProfileShape:
    def test_cov_bounds(self, engine, reference_inputs):
        results = engine.evaluate(reference_inputs)
        _, cov, _ = profile_arrays(reference_inputs, results)
        assert np.all(cov >= 0.001)
        assert np.all(cov <= 1.0)

    def test_natural_decay(self, engine, reference_inputs):
        inputs = reference_inputs.with_changes(flow_rate=0.5)
        results = engine.evaluate(inputs)
        distances, cov, _ = profile_arrays(inputs, results)
        alpha = (0.5 / 3600.0) * 3.6e6 / 210.0
        decay = 0.75 * np.sqrt(0.02)
        expected = np.clip(np.sqrt(alpha) * np.exp(-decay * distances / 0.8), 0.001, 1.0)
        np.testing.assert_allclose(cov, expected)

    def test_mixer_ramp_then_decay(self, engine, kenics_inputs):
        results = engine.evaluate(kenics_inputs)
        distances, cov, _ = profile_arrays(kenics_inputs, results, n_points=101)
        assert cov[0] == 1.0
        assert np.all(np.diff(cov) <= 1e-12)

        mixer_length = 10.0 * results.headloss_meters
        after = distances >= mixer_length
        assert np.all(cov[after] <= results.mixer_cov + 1e-12)

    def test_no_dissolution_for_ordinary_chemicals(self, engine, kenics_inputs):
        results = engine.evaluate(kenics_inputs)
        points = performance_profile(kenics_inputs, results)
        assert all(p.dissolution == 0.0 for p in points)

    def test_lime_dissolution_curve(self, engine, lime_inputs):
        results = engine.evaluate(lime_inputs)
        _, _, dissolution = profile_arrays(lime_inputs, results)
        assert dissolution[0] == 0.0
        assert np.all(np.diff(dissolution) >= 0.0)
        assert dissolution[-1] <= 100.0
        assert dissolution[-1] > 90.0


class TestDistanceToTarget:
    def test_compliant_mixer(self, engine, kenics_inputs):
        results = engine.evaluate(kenics_inputs)
        points = performance_profile(kenics_inputs, results, n_points=201)
        distance = distance_to_target(points)
        assert distance is not None
        assert distance <= results.mixing_distance_needed * 1.5

    def test_never_reached(self, engine, reference_inputs):
        results = engine.evaluate(reference_inputs)
        points = performance_profile(reference_inputs, results, n_points=5)
        assert distance_to_target(points[:2]) is None
