import numpy as np
import pytest

from blend_simulator.core.numerics import (
    EPSILON,
    bounded_or_worst,
    clamp,
    guarded_log,
    is_finite,
    safe_divide,
)


class TestSafeDivide:
    def test_regular_division(self):
        assert safe_divide(6.0, 3.0) == 2.0

    def test_zero_denominator_uses_default_fallback(self):
        assert safe_divide(1.0, 0.0) == pytest.approx(1.0 / EPSILON)

    def test_zero_denominator_uses_given_fallback(self):
        assert safe_divide(2.0, 0.0, fallback=1.0) == 2.0

    def test_tiny_denominator_is_not_replaced(self):
        assert safe_divide(1.0, 1e-12) == pytest.approx(1e12)

    def test_nan_propagates_without_raising(self):
        assert np.isnan(safe_divide(float("nan"), 2.0))


class TestBounds:
    def test_clamp(self):
        assert clamp(5.0, 0.0, 1.0) == 1.0
        assert clamp(-5.0, 0.0, 1.0) == 0.0
        assert clamp(0.3, 0.0, 1.0) == 0.3

    @pytest.mark.parametrize("value", [float("nan"), float("inf"), float("-inf")])
    def test_non_finite_maps_to_worst(self, value):
        assert bounded_or_worst(value, 0.0001, 1.0, worst=1.0) == 1.0

    def test_finite_is_clamped(self):
        assert bounded_or_worst(1e-9, 0.0001, 1.0, worst=1.0) == 0.0001

    def test_guarded_log_of_zero(self):
        assert guarded_log(0.0) == pytest.approx(np.log(EPSILON))

    def test_is_finite(self):
        assert is_finite(1.0, 2.0)
        assert not is_finite(1.0, float("nan"))
