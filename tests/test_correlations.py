import logging
from dataclasses import replace

import numpy as np
import pytest

from blend_simulator.core import (
    CORRELATIONS,
    ConduitType,
    DEFAULT_CONSTANTS,
    InjectionType,
    MixerModel,
    PitchRatio,
    dilution_ratio,
    get_correlation,
)
from blend_simulator.core.correlations import DEFAULT_NOTES


def test_every_model_is_registered():
    assert set(CORRELATIONS) == set(MixerModel)
    for model in MixerModel:
        assert get_correlation(model).model is model


def test_dilution_ratio():
    assert dilution_ratio(1500.0 / 3600.0, 210.0) == pytest.approx(1.5e6 / 210.0)
    assert dilution_ratio(1500.0 / 3600.0, 0.0) == pytest.approx(1.5e6)


class TestClamp:
    @pytest.mark.parametrize("model", list(MixerModel))
    @pytest.mark.parametrize("reynolds", [-1.0, 0.0, 1.0, 1e4, 1e9])
    @pytest.mark.parametrize("conduit", list(ConduitType))
    def test_cov_within_bounds(self, pipe_context, model, reynolds, conduit):
        ctx = replace(pipe_context, reynolds=reynolds, conduit_type=conduit)
        result = get_correlation(model).evaluate(ctx)
        assert 0.0001 <= result.cov <= 1.0

    def test_non_finite_prediction_is_worst_case(self, pipe_context, caplog):
        ctx = replace(pipe_context, num_elements=0)
        with caplog.at_level(logging.WARNING):
            result = get_correlation(MixerModel.KENICS_KM).evaluate(ctx)
        assert not np.isfinite(result.raw_cov)
        assert result.cov == 1.0
        assert "non-finite CoV" in caplog.text

    def test_tiny_prediction_is_floored(self, pipe_context):
        ctx = replace(pipe_context, num_elements=1000)
        result = get_correlation(MixerModel.SMV).evaluate(ctx)
        assert result.raw_cov < 0.0001
        assert result.cov == 0.0001


class TestNaturalMixing:
    def test_pipe_decay_law(self, pipe_context):
        result = get_correlation(MixerModel.NONE).evaluate(pipe_context)
        fd = result.friction_factor
        expected = 2.0 * np.sqrt(7143.0) * np.exp(-0.75 * np.sqrt(fd) * 10.0 / 0.8)
        assert result.raw_cov == pytest.approx(expected)
        assert result.mixed_length == 10.0
        assert result.notes == DEFAULT_NOTES

    def test_channel_power_law(self, pipe_context):
        ctx = replace(pipe_context, conduit_type=ConduitType.CHANNEL, momentum_ratio=0.3)
        result = get_correlation(MixerModel.NONE).evaluate(ctx)
        expected = 0.0183 * 12.5 ** (-1 / 1.3) * 0.3 ** (-2.21 / 1.3)
        assert result.raw_cov == pytest.approx(expected)

    def test_channel_momentum_floor(self, pipe_context):
        natural = get_correlation(MixerModel.NONE)
        low = replace(pipe_context, conduit_type=ConduitType.CHANNEL, momentum_ratio=0.001)
        floor = replace(low, momentum_ratio=0.01)
        assert natural.evaluate(low).raw_cov == natural.evaluate(floor).raw_cov

    def test_longer_pipe_mixes_better(self, pipe_context):
        natural = get_correlation(MixerModel.NONE)
        short = natural.evaluate(replace(pipe_context, alpha=1.0)).raw_cov
        long = natural.evaluate(
            replace(pipe_context, alpha=1.0, available_length=100.0)
        ).raw_cov
        assert long < short


class TestKenicsKM:
    def test_single_injection(self, pipe_context):
        result = get_correlation(MixerModel.KENICS_KM).evaluate(pipe_context)
        expected = 0.96 * 6.6e5 ** -0.1 * 7143.0 ** 0.03 * 4 ** -1.9
        assert result.raw_cov == pytest.approx(expected)
        assert result.friction_factor == 1.9
        assert result.mixed_length == pytest.approx(4 * 1.5 * 0.8)
        assert "0.5Dh upstream" in result.notes

    def test_twin_injection(self, pipe_context):
        ctx = replace(pipe_context, injection_type=InjectionType.TWIN)
        result = get_correlation(MixerModel.KENICS_KM).evaluate(ctx)
        expected = 0.38 * 6.6e5 ** 0.008 * 7143.0 ** 0.08 * 4 ** -2.1
        assert result.raw_cov == pytest.approx(expected)

    def test_monotonic_in_elements(self, pipe_context):
        kenics = get_correlation(MixerModel.KENICS_KM)
        covs = [
            kenics.evaluate(replace(pipe_context, num_elements=n)).raw_cov
            for n in range(1, 16)
        ]
        assert all(b < a for a, b in zip(covs, covs[1:]))


class TestHEV:
    def test_channel_form(self, pipe_context):
        ctx = replace(pipe_context, conduit_type=ConduitType.CHANNEL)
        result = get_correlation(MixerModel.HEV).evaluate(ctx)
        expected = 60.0 * 12.5 ** -0.6 * 4 ** -0.9 * 6.6e5 ** -0.4
        assert result.raw_cov == pytest.approx(expected)
        assert result.friction_factor == 0.45

    def test_short_pipe_form(self, pipe_context):
        ctx = replace(pipe_context, available_length=2.0)
        result = get_correlation(MixerModel.HEV).evaluate(ctx)
        expected = 31.5 * 6.6e5 ** -0.2 * 7143.0 ** -0.15 * 4 ** -1.7
        assert result.raw_cov == pytest.approx(expected)
        assert result.friction_factor == 0.6

    def test_long_pipe_form(self, pipe_context):
        result = get_correlation(MixerModel.HEV).evaluate(pipe_context)
        expected = 1.1 * 6.6e5 ** -0.04 * 7143.0 ** 0.02 * 4 ** -1.9
        assert result.raw_cov == pytest.approx(expected)
        assert result.mixed_length == pytest.approx(4 * 0.8)
        assert "centered" in result.notes


class TestSMV:
    def test_form(self, pipe_context):
        result = get_correlation(MixerModel.SMV).evaluate(pipe_context)
        expected = 0.3 * 6.6e5 ** -0.02 * 7143.0 ** -0.01 * 4 ** -1.6
        assert result.raw_cov == pytest.approx(expected)
        assert result.friction_factor == 10.1
        assert result.mixed_length == pytest.approx(4 * 0.8)


class TestSTM:
    @pytest.mark.parametrize(
        "pitch, fd", [(PitchRatio.PR_1_125, 3.0), (PitchRatio.PR_1_5, 7.6), (PitchRatio.PR_2_25, 1.9)]
    )
    def test_channel_friction_by_pitch(self, pipe_context, pitch, fd):
        ctx = replace(pipe_context, conduit_type=ConduitType.CHANNEL, pitch_ratio=pitch)
        result = get_correlation(MixerModel.STM).evaluate(ctx)
        assert result.friction_factor == fd
        assert result.mixed_length == pytest.approx(4 * 0.5 * 0.8)

    def test_channel_form(self, pipe_context):
        ctx = replace(pipe_context, conduit_type=ConduitType.CHANNEL)
        result = get_correlation(MixerModel.STM).evaluate(ctx)
        expected = 0.29 * 12.5 ** -0.07 * 4 ** -0.25 * 7143.0 ** 0.1 * 6.6e5 ** -0.2
        assert result.raw_cov == pytest.approx(expected)

    def test_pipe_forms(self, pipe_context):
        stm = get_correlation(MixerModel.STM)
        result = stm.evaluate(pipe_context)
        expected = 0.29 * 6.6e5 ** -0.2 * 7143.0 ** 0.09 * 4 ** -0.6
        assert result.raw_cov == pytest.approx(expected)
        assert result.friction_factor == 4.15
        assert result.mixed_length == pytest.approx(4 * 0.8 * 0.8)

    def test_pipe_fine_pitch_uses_coarse_form(self, pipe_context):
        stm = get_correlation(MixerModel.STM)
        fine = stm.evaluate(replace(pipe_context, pitch_ratio=PitchRatio.PR_1_125))
        coarse = stm.evaluate(replace(pipe_context, pitch_ratio=PitchRatio.PR_2_25))
        assert fine.raw_cov == coarse.raw_cov
        assert fine.friction_factor == coarse.friction_factor == 2.3


class TestChannelStructures:
    def test_baffles_get_no_mixing_credit(self, pipe_context):
        ctx = replace(pipe_context, conduit_type=ConduitType.CHANNEL)
        baffles = get_correlation(MixerModel.BAFFLES).evaluate(ctx)
        natural = get_correlation(MixerModel.NONE).evaluate(ctx)
        assert baffles.cov == natural.cov
        assert baffles.fixed_headloss is None

    def test_weir_fixed_headloss(self, pipe_context):
        result = get_correlation(MixerModel.WEIR).evaluate(pipe_context)
        assert result.fixed_headloss == DEFAULT_CONSTANTS.weir_headloss == 0.15
