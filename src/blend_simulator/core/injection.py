"""
Injection Blend Module
======================

Properties of the injected stream formed by a neat chemical and its
dilution (carrier) water.

THEORETICAL FOUNDATION
=====================

1. Volume fractions:
   x_chem = Q_chem / Q_total,   x_water = Q_water / Q_total

2. Density (linear mixing):
   ρ_inj = x_chem·ρ_chem + x_water·ρ_water

3. Viscosity (logarithmic / Arrhenius mixing rule):
   ln μ_inj = x_chem·ln μ_chem + x_water·ln μ_water

   Viscosity blends multiplicatively across orders of magnitude, so a
   linear average would grossly overstate the viscosity of dilute polymer
   or caustic feeds.

References:
- Arrhenius, S. "Über die innere Reibung verdünnter wässeriger Lösungen" (1887)
- Perry's Chemical Engineers' Handbook (9th ed.), Section 2

Date: October 2026
License: MIT
"""

from dataclasses import dataclass

import numpy as np

from .constants import EngineConstants, DEFAULT_CONSTANTS
from .numerics import safe_divide, guarded_log

LITRES_PER_HOUR_PER_M3_S = 3.6e6


@dataclass(frozen=True)
class InjectionBlend:
    """
    Combined chemical + dilution water stream.

    Attributes:
        chemical_fraction: Volume fraction of neat chemical [-]
        water_fraction: Volume fraction of dilution water [-]
        density: Blended density [kg/m³]
        viscosity: Blended dynamic viscosity [Pa·s]
        total_flow_lh: Total injected flow [L/h]
        total_flow_m3s: Total injected flow [m³/s]
    """

    chemical_fraction: float
    water_fraction: float
    density: float
    viscosity: float
    total_flow_lh: float
    total_flow_m3s: float


def resolve_injection_blend(
    chemical_flow: float,
    dilution_water_flow: float,
    chemical_density: float,
    chemical_viscosity: float,
    constants: EngineConstants = DEFAULT_CONSTANTS,
) -> InjectionBlend:
    """
    Blend the chemical and dilution streams.

    Args:
        chemical_flow: Neat chemical feed [L/h]
        dilution_water_flow: Carrier water feed [L/h]
        chemical_density: Neat chemical density [kg/m³]
        chemical_viscosity: Neat chemical viscosity [Pa·s]
        constants: Engine constants (water properties)

    Returns:
        InjectionBlend

    Example:
        >>> blend = resolve_injection_blend(10.0, 190.0, 1450.0, 0.015)
        >>> round(blend.chemical_fraction, 3)
        0.05
        >>> round(blend.density, 1)
        1022.5
    """
    total_lh = chemical_flow + dilution_water_flow

    # A zero total leaves both fractions at zero rather than dividing by zero
    x_chem = safe_divide(chemical_flow, total_lh, fallback=1.0)
    x_water = safe_divide(dilution_water_flow, total_lh, fallback=1.0)

    density = x_chem * chemical_density + x_water * constants.water_density

    with np.errstate(all="ignore"):
        viscosity = float(
            np.exp(
                x_chem * guarded_log(chemical_viscosity)
                + x_water * guarded_log(constants.water_viscosity)
            )
        )

    return InjectionBlend(
        chemical_fraction=x_chem,
        water_fraction=x_water,
        density=density,
        viscosity=viscosity,
        total_flow_lh=total_lh,
        total_flow_m3s=total_lh / LITRES_PER_HOUR_PER_M3_S,
    )


def validate_injection() -> None:
    """
    Validation of the injection blend.

    Tests:
    1. Fractions sum to one for positive flows
    2. Pure water injection reproduces water properties
    3. Logarithmic viscosity rule lies between the pure components
    4. Zero total flow stays finite
    """
    constants = DEFAULT_CONSTANTS

    # Test 1: Fraction closure
    blend = resolve_injection_blend(10.0, 200.0, 1450.0, 0.015)
    assert abs(blend.chemical_fraction + blend.water_fraction - 1.0) < 1e-12

    # Test 2: Pure water
    water_only = resolve_injection_blend(0.0, 100.0, 1450.0, 0.015)
    assert abs(water_only.density - constants.water_density) < 1e-9
    assert abs(water_only.viscosity - constants.water_viscosity) < 1e-12

    # Test 3: Log-mix bounded by components and below the linear average
    half = resolve_injection_blend(50.0, 50.0, 1000.0, 0.1)
    assert constants.water_viscosity < half.viscosity < 0.1
    assert half.viscosity < 0.5 * (0.1 + constants.water_viscosity)

    # Test 4: No flow at all
    empty = resolve_injection_blend(0.0, 0.0, 1450.0, 0.015)
    assert np.isfinite(empty.density) and np.isfinite(empty.viscosity)

    print("✓ All injection validations passed")
