"""
Pytest configuration and fixtures for blend_simulator testing.

Provides an engine, the reference pipe design and a few variants used
across the test modules.
"""

import pytest

from blend_simulator.core import (
    BlendingEngine,
    ConduitShape,
    ConduitType,
    CorrelationContext,
    InjectionType,
    MixerModel,
    MixingInputs,
    PitchRatio,
)
from blend_simulator.catalog import apply_preset


@pytest.fixture(scope="session")
def engine():
    """Engine with default constants."""
    return BlendingEngine()


@pytest.fixture
def reference_inputs():
    """0.8 m pipe at 1500 m³/h, ferric chloride 10 L/h + 200 L/h dilution."""
    return MixingInputs(
        conduit_type=ConduitType.PIPE,
        conduit_shape=ConduitShape.CIRCULAR,
        dimension=0.8,
        flow_rate=1500.0,
        density=1000.0,
        viscosity=0.001,
        mixer_model=MixerModel.NONE,
        chemical_flow=10.0,
        dilution_water_flow=200.0,
    )


@pytest.fixture
def kenics_inputs(reference_inputs):
    """Reference pipe with four Kenics KM elements."""
    return reference_inputs.with_changes(
        mixer_model=MixerModel.KENICS_KM, num_elements=4
    )


@pytest.fixture
def channel_inputs():
    """2.0 m wide open channel, 0.6 m deep."""
    return MixingInputs(
        conduit_type=ConduitType.CHANNEL,
        conduit_shape=ConduitShape.RECTANGULAR,
        dimension=2.0,
        depth=0.6,
        flow_rate=1500.0,
    )


@pytest.fixture
def lime_inputs(kenics_inputs):
    """10 % lime slurry dosed at 50 mg/L through a Kenics mixer."""
    return apply_preset(kenics_inputs.with_changes(chemical_dose=50.0), "lime")


@pytest.fixture
def pipe_context():
    """Correlation inputs for the reference pipe."""
    return CorrelationContext(
        conduit_type=ConduitType.PIPE,
        injection_type=InjectionType.SINGLE,
        pitch_ratio=PitchRatio.PR_1_5,
        reynolds=6.6e5,
        alpha=7143.0,
        num_elements=4,
        available_length=10.0,
        hydraulic_diameter=0.8,
        momentum_ratio=0.2,
    )
