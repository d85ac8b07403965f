"""
Blending Engine Core Package
============================

In-line chemical injection and blending performance for water treatment.

This package evaluates one injection and mixing design at a time:
- Injection: Blended density and viscosity of chemical + dilution water
- Hydraulics: Hydraulic diameter, velocity, Reynolds number
- Momentum: Jet/crossflow momentum ratio and orifice sizing
- Correlations: CoV prediction per mixing device family
- Energy: Headloss, dissipated power, G-value
- Dissolution: Lime solubility and first-order dissolution
- Compliance: Distance and time to meet the blending target

USAGE EXAMPLE
============

```python
from blend_simulator.core import BlendingEngine, MixingInputs, MixerModel

inputs = MixingInputs(
    dimension=0.8,          # m
    flow_rate=1500.0,       # m³/h
    mixer_model=MixerModel.KENICS_KM,
    num_elements=4,
    chemical_flow=10.0,     # L/h
    dilution_water_flow=200.0,
    target_cov=0.05,
)

engine = BlendingEngine()
results = engine.evaluate(inputs)

print(results.mixer_cov, results.is_compliant, results.headloss)
```

PURE CALCULATION ARCHITECTURE
=============================

The engine is a pure function of its inputs:

WHAT THIS PACKAGE DOES:
- Evaluates closed-form correlations in a single pass
- Reports every intermediate quantity in CalculationResults
- Samples the CoV/dissolution profile for a performance curve

WHAT THIS PACKAGE DOES NOT DO:
- NO persistence, network or file I/O
- NO optimisation or search over designs
- NO CFD or transient simulation
- NO unit conversion beyond the fixed unit conventions (see models.py)

Front ends (the CLI in blend_simulator.__main__, or your own) own input
validation via MixingInputs.validate() and presentation of the results.

EDGE CASES & LIMITATIONS
========================

1. **Zero injection flow:**
   - Fractions and α use a unit fallback; results stay finite

2. **Correlation outside its fitted range:**
   - CoV is clamped to [0.0001, 1.0]; non-finite values are treated as 1.0
   - A WARNING is logged on the engine logger

3. **Lime slurry:**
   - Compliance additionally requires > 90 % dissolution at the governing
     distance

VALIDATION STATUS
================

✓ Injection: Fraction closure, log-mixing rule bounds
✓ Hydraulics: Hydraulic diameters, continuity, Swamee-Jain vs Colebrook
✓ Momentum: Suggested orifice reproduces the design ratio
✓ Correlations: Registry completeness, CoV clamp, Kenics monotonicity
✓ Energy: Energy balance and G-value definition
✓ Dissolution: Retrograde solubility, 95 % completion time
✓ Compliance: Decay distance reaches target exactly
✓ Engine: Reference design, degenerate flows, determinism

Run validation: `python -m blend_simulator.core` or call `run_all_validations()`

Date: October 2026
License: MIT
"""

# Version
__version__ = "1.0.0"

# Configuration
from .constants import EngineConstants, DEFAULT_CONSTANTS

# Data model
from .models import (
    ConduitType,
    ConduitShape,
    MixerModel,
    InjectionType,
    PitchRatio,
    MomentumRegime,
    MixingInputs,
    CalculationResults,
)

# Stages
from .injection import InjectionBlend, resolve_injection_blend, validate_injection
from .hydraulics import (
    HydraulicState,
    conduit_geometry,
    resolve_hydraulics,
    darcy_friction_factor,
    validate_hydraulics,
)
from .momentum import (
    MomentumSizing,
    classify_momentum_regime,
    size_injection,
    validate_momentum,
)
from .correlations import (
    CorrelationContext,
    CorrelationResult,
    MixerCorrelation,
    CORRELATIONS,
    get_correlation,
    dilution_ratio,
    validate_correlations,
)
from .energy import EnergyDissipation, dissipate, validate_energy
from .dissolution import (
    DissolutionKinetics,
    lime_saturation_limit,
    lime_slurry_properties,
    resolve_dissolution,
    validate_dissolution,
)
from .compliance import (
    ComplianceVerdict,
    downstream_decay_rate,
    blending_distance,
    resolve_compliance,
    validate_compliance,
)

# Integrated engine
from .engine import BlendingEngine, calculate_mixing, validate_engine

# Performance curve
from .profile import ProfilePoint, performance_profile, profile_arrays, distance_to_target

# Convenience imports
__all__ = [
    # Main engine
    "BlendingEngine",
    "calculate_mixing",
    "EngineConstants",
    "DEFAULT_CONSTANTS",
    # Data model
    "ConduitType",
    "ConduitShape",
    "MixerModel",
    "InjectionType",
    "PitchRatio",
    "MomentumRegime",
    "MixingInputs",
    "CalculationResults",
    # Stages
    "InjectionBlend",
    "resolve_injection_blend",
    "HydraulicState",
    "conduit_geometry",
    "resolve_hydraulics",
    "darcy_friction_factor",
    "MomentumSizing",
    "classify_momentum_regime",
    "size_injection",
    "CorrelationContext",
    "CorrelationResult",
    "MixerCorrelation",
    "CORRELATIONS",
    "get_correlation",
    "dilution_ratio",
    "EnergyDissipation",
    "dissipate",
    "DissolutionKinetics",
    "lime_saturation_limit",
    "lime_slurry_properties",
    "resolve_dissolution",
    "ComplianceVerdict",
    "downstream_decay_rate",
    "blending_distance",
    "resolve_compliance",
    # Profile
    "ProfilePoint",
    "performance_profile",
    "profile_arrays",
    "distance_to_target",
    # Validation functions
    "validate_injection",
    "validate_hydraulics",
    "validate_momentum",
    "validate_correlations",
    "validate_energy",
    "validate_dissolution",
    "validate_compliance",
    "validate_engine",
    "run_all_validations",
]


def run_all_validations():
    """
    Run all engine validation tests.

    This should be run after any change to a correlation or constant.
    """
    print("Running Blending Engine Validation Suite")
    print("=" * 70)

    print("\n1. Injection blend...")
    validate_injection()

    print("\n2. Hydraulics...")
    validate_hydraulics()

    print("\n3. Momentum...")
    validate_momentum()

    print("\n4. Correlations...")
    validate_correlations()

    print("\n5. Energy...")
    validate_energy()

    print("\n6. Dissolution...")
    validate_dissolution()

    print("\n7. Compliance...")
    validate_compliance()

    print("\n8. Integrated engine...")
    validate_engine()

    print("\n" + "=" * 70)
    print("ALL VALIDATIONS PASSED ✓")
    print("Blending engine verified for correctness.")
    print("=" * 70)


if __name__ == "__main__":
    """Run all validations when package is executed."""
    run_all_validations()
