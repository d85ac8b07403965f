"""
Integrated Blending Engine
==========================

Chains the seven stages of one design evaluation:

1. Injection blend          (injection.py)
2. Geometry & hydraulics    (hydraulics.py)
3. Momentum & orifice       (momentum.py)
4. CoV correlation          (correlations.py)
5. Headloss & G-value       (energy.py)
6. Dissolution kinetics     (dissolution.py)
7. Compliance & distance    (compliance.py)

The evaluation is a single closed-form pass: no iteration, no state kept
between calls, no I/O. Identical inputs give identical results, and
calls may run concurrently on any thread.

NUMERICAL EDGE CASES
====================

The engine never raises for numeric input. Zero denominators are replaced
by small positive fallbacks (numerics.safe_divide), CoV is clamped to
[0.0001, 1.0] with non-finite predictions treated as the worst case, and
the dissolved percentage is clamped to [0, 100]. Invalid inputs such as
negative flows are not rejected here; use MixingInputs.validate() at the
boundary.

Date: October 2026
License: MIT
"""

import logging
from typing import Optional

import numpy as np

from .constants import EngineConstants, DEFAULT_CONSTANTS
from .models import (
    MixingInputs,
    CalculationResults,
    ConduitType,
    ConduitShape,
    MixerModel,
)
from .injection import resolve_injection_blend
from .hydraulics import resolve_hydraulics
from .momentum import size_injection
from .correlations import CorrelationContext, get_correlation, dilution_ratio
from .energy import dissipate
from .dissolution import resolve_dissolution
from .compliance import resolve_compliance
from .numerics import safe_divide

logger = logging.getLogger(__name__)


class BlendingEngine:
    """
    Stateless evaluator of injection and blending designs.

    The constants are fixed at construction; ``evaluate`` may be called any
    number of times, from any thread.

    Example:
        >>> engine = BlendingEngine()
        >>> results = engine.evaluate(MixingInputs())
        >>> round(results.hydraulic_diameter, 3)
        0.8
    """

    # Unmixed reference CoV reported alongside the prediction
    NATURAL_MIXING_COV = 1.0

    def __init__(self, constants: Optional[EngineConstants] = None):
        self.constants = constants if constants is not None else DEFAULT_CONSTANTS
        self.constants.validate()

    def evaluate(self, inputs: MixingInputs) -> CalculationResults:
        """
        Evaluate one design.

        Args:
            inputs: Complete parameter snapshot

        Returns:
            CalculationResults
        """
        c = self.constants

        with np.errstate(all="ignore"):
            # Stage 1: Injected stream
            blend = resolve_injection_blend(
                inputs.chemical_flow,
                inputs.dilution_water_flow,
                inputs.chemical_density,
                inputs.chemical_viscosity,
                c,
            )

            # Stage 2: Conduit hydraulics
            hydraulics = resolve_hydraulics(
                inputs.conduit_type,
                inputs.conduit_shape,
                inputs.dimension,
                inputs.flow_rate,
                inputs.density,
                inputs.viscosity,
                inputs.depth,
                c,
            )
            logger.debug(
                f"Hydraulics: A={hydraulics.area:.4f} m², Dh={hydraulics.hydraulic_diameter:.3f} m, "
                f"v={hydraulics.velocity:.3f} m/s, Re={hydraulics.reynolds:.3e} "
                f"({hydraulics.flow_regime})"
            )

            # Stage 3: Jet momentum
            sizing = size_injection(
                blend.total_flow_m3s,
                blend.density,
                inputs.density,
                hydraulics.velocity,
                hydraulics.hydraulic_diameter,
                inputs.injection_type,
                c,
            )

            # Stage 4: Device correlation
            ctx = CorrelationContext(
                conduit_type=inputs.conduit_type,
                injection_type=inputs.injection_type,
                pitch_ratio=inputs.pitch_ratio,
                reynolds=hydraulics.reynolds,
                alpha=dilution_ratio(hydraulics.flow_m3s, blend.total_flow_lh),
                num_elements=inputs.num_elements,
                available_length=inputs.available_length,
                hydraulic_diameter=hydraulics.hydraulic_diameter,
                momentum_ratio=sizing.momentum_ratio,
            )
            correlation = get_correlation(inputs.mixer_model).evaluate(ctx, c)
            logger.debug(
                f"{inputs.mixer_model.value}: CoV={correlation.cov:.4g} "
                f"(alpha={ctx.alpha:.4g}, L/D={ctx.length_ratio:.3g}), "
                f"FD={correlation.friction_factor:.4g}, Lm={correlation.mixed_length:.3g} m"
            )

            # Stage 5: Headloss and G-value
            energy = dissipate(
                correlation.friction_factor,
                correlation.mixed_length,
                hydraulics.velocity,
                hydraulics.hydraulic_diameter,
                hydraulics.area,
                hydraulics.flow_m3s,
                inputs.density,
                inputs.viscosity,
                correlation.fixed_headloss,
                c,
            )

            # Stage 6: Dissolution
            kinetics = resolve_dissolution(
                energy.g_value,
                inputs.chemical_dose,
                inputs.water_temperature,
                hydraulics.velocity,
                c,
            )

            # Stage 7: Verdict
            verdict = resolve_compliance(
                correlation.cov,
                inputs.target_cov,
                inputs.target_mixing_time,
                correlation.mixed_length,
                hydraulics.hydraulic_diameter,
                hydraulics.velocity,
                inputs.conduit_type,
                kinetics,
                inputs.is_lime,
                c,
            )
            logger.debug(
                f"Verdict: distance={verdict.distance_needed:.2f} m, "
                f"time={verdict.time_needed:.2f} s, compliant={verdict.is_compliant}"
            )

            viscosity_ratio = safe_divide(blend.viscosity, inputs.viscosity)

        return CalculationResults(
            velocity=hydraulics.velocity,
            reynolds_number=hydraulics.reynolds,
            momentum_ratio=sizing.momentum_ratio,
            momentum_regime=sizing.regime,
            natural_mixing_cov=self.NATURAL_MIXING_COV,
            mixer_cov=correlation.cov,
            is_compliant=verdict.is_compliant,
            is_time_compliant=verdict.is_time_compliant,
            mixing_distance_needed=verdict.distance_needed,
            mixing_time_needed=verdict.time_needed,
            viscosity_ratio=viscosity_ratio,
            injected_viscosity=blend.viscosity,
            injected_density=blend.density,
            total_injection_flow=blend.total_flow_lh,
            headloss=energy.headloss_kpa,
            headloss_meters=energy.headloss_m,
            g_value=energy.g_value,
            lime_saturation_limit=kinetics.saturation_limit,
            dissolved_at_target=verdict.dissolved_at_target,
            time_to_95_dissolution=kinetics.time_to_completion,
            distance_to_95_dissolution=kinetics.distance_to_completion,
            suggested_orifice_diameter=sizing.suggested_orifice_diameter_mm,
            manufacturer_notes=correlation.notes,
            hydraulic_diameter=hydraulics.hydraulic_diameter,
            wetted_area=hydraulics.area,
        )


def calculate_mixing(
    inputs: MixingInputs, constants: Optional[EngineConstants] = None
) -> CalculationResults:
    """Evaluate one design with a throwaway engine."""
    return BlendingEngine(constants).evaluate(inputs)


def validate_engine() -> None:
    """
    End-to-end validation of the engine.

    Tests:
    1. Reference pipe design
    2. Degenerate (zero) injection stays finite
    3. Weir headloss
    4. Determinism
    """
    engine = BlendingEngine()

    # Test 1: 0.8 m pipe at 1500 m³/h
    ref = engine.evaluate(
        MixingInputs(chemical_flow=10.0, dilution_water_flow=200.0)
    )
    assert abs(ref.wetted_area - 0.5027) < 1e-4
    assert abs(ref.velocity - 0.829) < 1e-3
    assert 6.0e5 < ref.reynolds_number < 7.0e5

    # Test 2: No injection at all
    empty = engine.evaluate(MixingInputs(chemical_flow=0.0, dilution_water_flow=0.0))
    numeric = [v for v in empty.to_dict().values() if isinstance(v, float)]
    assert all(np.isfinite(numeric)), "Degenerate injection produced NaN/inf"

    # Test 3: Weir
    weir = engine.evaluate(
        MixingInputs(
            conduit_type=ConduitType.CHANNEL,
            conduit_shape=ConduitShape.RECTANGULAR,
            dimension=2.0,
            depth=0.6,
            mixer_model=MixerModel.WEIR,
        )
    )
    assert weir.headloss_meters == 0.15

    # Test 4: Same inputs, same outputs
    assert engine.evaluate(MixingInputs()) == engine.evaluate(MixingInputs())

    print("✓ All engine validations passed")
