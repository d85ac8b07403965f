import numpy as np
import pytest

from blend_simulator.core import (
    ConduitType,
    DissolutionKinetics,
    EngineConstants,
    blending_distance,
    downstream_decay_rate,
    resolve_compliance,
)

FAST_KINETICS = DissolutionKinetics(1633.5, 1.0, np.log(20.0), np.log(20.0))
SLOW_KINETICS = DissolutionKinetics(1633.5, 0.01, np.log(20.0) / 0.01, 0.0)


class TestDecay:
    def test_pipe(self):
        assert downstream_decay_rate(ConduitType.PIPE) == pytest.approx(0.75 * np.sqrt(0.02))

    def test_channel(self):
        assert downstream_decay_rate(ConduitType.CHANNEL) == 0.6

    def test_from_constants(self):
        constants = EngineConstants(channel_decay_rate=0.4)
        assert downstream_decay_rate(ConduitType.CHANNEL, constants) == 0.4


class TestBlendingDistance:
    def test_compliant_mixer_needs_only_its_length(self):
        assert blending_distance(0.05, 0.05, 3.2, 0.8, 0.106) == 3.2

    def test_decay_reaches_target(self):
        decay = downstream_decay_rate(ConduitType.PIPE)
        length = blending_distance(0.4, 0.05, 3.2, 0.8, decay)
        assert 0.4 * np.exp(-decay * (length - 3.2) / 0.8) == pytest.approx(0.05)

    def test_zero_decay_uses_fallback(self):
        length = blending_distance(0.1, 0.05, 1.0, 1.0, 0.0)
        assert length == pytest.approx(1.0 + np.log(2.0) / 0.1)


class TestVerdict:
    def test_cov_governs_for_ordinary_chemicals(self):
        verdict = resolve_compliance(
            0.02, 0.05, 10.0, 3.0, 0.8, 1.0, ConduitType.PIPE, SLOW_KINETICS, is_lime=False
        )
        assert verdict.is_compliant
        assert verdict.distance_needed == 3.0
        assert verdict.time_needed == pytest.approx(3.0)
        assert verdict.is_time_compliant

    def test_non_compliant_cov(self):
        verdict = resolve_compliance(
            0.2, 0.05, 10.0, 3.0, 0.8, 1.0, ConduitType.PIPE, FAST_KINETICS, is_lime=False
        )
        assert not verdict.is_compliant
        assert verdict.distance_needed > 3.0

    def test_lime_requires_dissolution(self):
        verdict = resolve_compliance(
            0.02, 0.05, 10.0, 1.0, 0.8, 1.0, ConduitType.PIPE, SLOW_KINETICS, is_lime=True
        )
        assert verdict.cov_compliant
        assert verdict.dissolved_at_target < 90.0
        assert not verdict.is_compliant

    def test_lime_dissolution_distance_governs(self):
        verdict = resolve_compliance(
            0.02, 0.05, 10.0, 1.0, 0.8, 1.0, ConduitType.PIPE, FAST_KINETICS, is_lime=True
        )
        assert verdict.distance_needed == FAST_KINETICS.distance_to_completion
        assert verdict.dissolved_at_target > 90.0
        assert verdict.is_compliant

    def test_time_compliance_is_advisory(self):
        verdict = resolve_compliance(
            0.02, 0.05, 1.0, 3.0, 0.8, 1.0, ConduitType.PIPE, FAST_KINETICS, is_lime=False
        )
        assert verdict.is_compliant
        assert not verdict.is_time_compliant
