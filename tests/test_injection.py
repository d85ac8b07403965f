import numpy as np
import pytest

from blend_simulator.core import EngineConstants, resolve_injection_blend


class TestInjectionBlend:
    """Chemical + dilution water stream."""

    @pytest.mark.parametrize(
        "chemical, water", [(10.0, 200.0), (1.0, 0.0), (0.5, 5000.0), (300.0, 300.0)]
    )
    def test_fractions_sum_to_one(self, chemical, water):
        blend = resolve_injection_blend(chemical, water, 1450.0, 0.015)
        assert blend.chemical_fraction + blend.water_fraction == pytest.approx(1.0)

    def test_linear_density(self):
        blend = resolve_injection_blend(10.0, 190.0, 1450.0, 0.015)
        assert blend.chemical_fraction == pytest.approx(0.05)
        assert blend.density == pytest.approx(0.05 * 1450.0 + 0.95 * 1000.0)

    def test_logarithmic_viscosity(self):
        blend = resolve_injection_blend(25.0, 75.0, 1100.0, 0.1)
        expected = np.exp(0.25 * np.log(0.1) + 0.75 * np.log(0.001))
        assert blend.viscosity == pytest.approx(expected)

    def test_neat_chemical_keeps_its_properties(self):
        blend = resolve_injection_blend(50.0, 0.0, 1530.0, 0.08)
        assert blend.density == pytest.approx(1530.0)
        assert blend.viscosity == pytest.approx(0.08)

    def test_flow_units(self):
        blend = resolve_injection_blend(10.0, 200.0, 1450.0, 0.015)
        assert blend.total_flow_lh == 210.0
        assert blend.total_flow_m3s == pytest.approx(210.0 / 3.6e6)

    def test_zero_flow_is_finite(self):
        blend = resolve_injection_blend(0.0, 0.0, 1450.0, 0.015)
        assert blend.chemical_fraction == 0.0
        assert np.isfinite(blend.density)
        assert np.isfinite(blend.viscosity)

    def test_water_properties_come_from_constants(self):
        constants = EngineConstants(water_density=998.0, water_viscosity=0.0011)
        blend = resolve_injection_blend(0.0, 100.0, 1450.0, 0.015, constants)
        assert blend.density == pytest.approx(998.0)
        assert blend.viscosity == pytest.approx(0.0011)
