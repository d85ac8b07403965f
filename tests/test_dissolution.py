import numpy as np
import pytest

from blend_simulator.core import (
    EngineConstants,
    lime_saturation_limit,
    lime_slurry_properties,
    resolve_dissolution,
)
from blend_simulator.core.dissolution import dissolution_rate_constant, dissolved_percent


class TestSolubility:
    def test_reference_temperature(self):
        assert lime_saturation_limit(15.0) == pytest.approx(1633.5)

    def test_retrograde(self):
        temperatures = np.linspace(0.0, 40.0, 9)
        limits = [lime_saturation_limit(t) for t in temperatures]
        assert all(b < a for a, b in zip(limits, limits[1:]))


class TestRateConstant:
    def test_reference_turbulence(self):
        assert dissolution_rate_constant(100.0, 1600.0, 0.0) == pytest.approx(0.3)

    def test_low_g_is_floored(self):
        assert dissolution_rate_constant(0.0, 1600.0, 0.0) == pytest.approx(0.03)

    def test_oversaturated_dose_keeps_slow_rate(self):
        assert dissolution_rate_constant(100.0, 1600.0, 3200.0) == pytest.approx(0.03)

    def test_headroom(self):
        assert dissolution_rate_constant(400.0, 1600.0, 800.0) == pytest.approx(0.3)


class TestKinetics:
    def test_completion_time(self):
        kinetics = resolve_dissolution(400.0, 50.0, 15.0, 0.8)
        assert kinetics.time_to_completion == pytest.approx(np.log(20.0) / kinetics.rate_constant)
        assert kinetics.distance_to_completion == pytest.approx(0.8 * kinetics.time_to_completion)
        assert kinetics.dissolved_percent(kinetics.time_to_completion) == pytest.approx(95.0)

    def test_approaches_full_dissolution(self):
        kinetics = resolve_dissolution(400.0, 50.0, 15.0, 0.8)
        percents = [kinetics.dissolved_percent(t) for t in (0.1, 1.0, 10.0, 100.0)]
        assert percents[0] > 0.0
        assert all(b > a for a, b in zip(percents, percents[1:]))
        assert percents[-1] == pytest.approx(100.0)

    def test_completion_fraction_from_constants(self):
        constants = EngineConstants(dissolution_completion=0.99)
        kinetics = resolve_dissolution(400.0, 50.0, 15.0, 0.8, constants)
        assert kinetics.dissolved_percent(kinetics.time_to_completion) == pytest.approx(99.0)

    @pytest.mark.parametrize(
        "time_s, expected", [(-5.0, 0.0), (0.0, 0.0), (1e12, 100.0)]
    )
    def test_bounded(self, time_s, expected):
        assert dissolved_percent(0.5, time_s) == expected

    def test_non_finite_counts_as_undissolved(self):
        assert dissolved_percent(float("nan"), 10.0) == 0.0


class TestSlurry:
    def test_properties(self):
        density, viscosity = lime_slurry_properties(10.0)
        assert density == pytest.approx(1070.0)
        assert viscosity == pytest.approx(0.001 * np.exp(1.8))

    def test_thicker_slurry(self):
        thin = lime_slurry_properties(5.0)
        thick = lime_slurry_properties(30.0)
        assert thick[0] > thin[0]
        assert thick[1] > thin[1]
