"""
Dissolution Kinetics Module
===========================

First-order dissolution of saturation-limited chemicals (hydrated lime
slurry) downstream of the injection point.

THEORETICAL FOUNDATION
=====================

1. Lime solubility (empirical fit, Ca(OH)₂ in water):
   C_sat(T) = (-4·10⁻⁵·T² - 0.0125·T + 1.83) · 1000      [mg/L]

   Solubility is retrograde: it falls as the water warms.

2. Rate constant:
   k = 0.3 · √(max(1, G)/100) · max(0.1, (C_sat - dose)/C_sat)   [1/s]

   - Turbulence term: mass transfer scales with √G
   - Driving-force term: headroom below saturation, floored at 10 % so
     an oversaturated dose still dissolves slowly

3. First-order approach:
   X(t) = 1 - exp(-k·t)
   t₉₅  = ln(20) / k

4. Slurry properties from concentration c [% w/w]:
   ρ = 1000 + 7·c            [kg/m³]
   μ = 0.001 · exp(0.18·c)   [Pa·s]

References:
- Johannsen, K. & Rademacher, S. "Modelling the kinetics of calcium
  hydroxide dissolution in water", Acta Hydrochim. Hydrobiol. (1999)
- Lide "CRC Handbook of Chemistry and Physics", solubility tables

Date: October 2026
License: MIT
"""

from dataclasses import dataclass

import numpy as np

from .constants import EngineConstants, DEFAULT_CONSTANTS
from .numerics import bounded_or_worst, safe_divide

MG_PER_G = 1000.0


@dataclass(frozen=True)
class DissolutionKinetics:
    """
    Dissolution rate of the injected chemical.

    Attributes:
        saturation_limit: Solubility at water temperature [mg/L]
        rate_constant: First-order rate [1/s]
        time_to_completion: Time to reach the completion fraction [s]
        distance_to_completion: Distance travelled in that time [m]
    """

    saturation_limit: float
    rate_constant: float
    time_to_completion: float
    distance_to_completion: float

    def dissolved_percent(self, time_s: float) -> float:
        """Dissolved fraction after ``time_s`` seconds [%], within [0, 100]."""
        return dissolved_percent(self.rate_constant, time_s)


def lime_saturation_limit(water_temperature: float) -> float:
    """
    Lime solubility at the given temperature.

    Args:
        water_temperature: [°C]

    Returns:
        Saturation limit [mg/L]

    Example:
        >>> round(lime_saturation_limit(15.0), 1)
        1633.5
    """
    t = water_temperature
    return (-0.00004 * t * t - 0.0125 * t + 1.83) * MG_PER_G


def dissolution_rate_constant(
    g_value: float, saturation_limit: float, dose: float
) -> float:
    """
    First-order dissolution rate constant.

    Args:
        g_value: Mean velocity gradient [1/s]
        saturation_limit: Solubility [mg/L]
        dose: Applied dose [mg/L]

    Returns:
        k [1/s]
    """
    headroom = safe_divide(saturation_limit - dose, saturation_limit)
    with np.errstate(all="ignore"):
        turbulence = np.sqrt(max(1.0, g_value) / 100.0)
    return float(0.3 * turbulence * max(0.1, headroom))


def dissolved_percent(rate_constant: float, time_s: float) -> float:
    """
    Dissolved fraction after ``time_s`` seconds.

    Clamped to [0, 100]; a non-finite result counts as nothing dissolved.
    """
    with np.errstate(all="ignore"):
        percent = float((1.0 - np.exp(-rate_constant * time_s)) * 100.0)
    return bounded_or_worst(percent, 0.0, 100.0, worst=0.0)


def resolve_dissolution(
    g_value: float,
    dose: float,
    water_temperature: float,
    velocity: float,
    constants: EngineConstants = DEFAULT_CONSTANTS,
) -> DissolutionKinetics:
    """
    Dissolution rate and time/distance to completion.

    Args:
        g_value: Mean velocity gradient [1/s]
        dose: Applied dose [mg/L]
        water_temperature: [°C]
        velocity: Mean bulk velocity [m/s]
        constants: Engine constants

    Returns:
        DissolutionKinetics
    """
    saturation = lime_saturation_limit(water_temperature)
    rate = dissolution_rate_constant(g_value, saturation, dose)

    with np.errstate(all="ignore"):
        remaining = np.log(1.0 / (1.0 - constants.dissolution_completion))
    time_to_completion = safe_divide(float(remaining), rate, fallback=1e-3)

    return DissolutionKinetics(
        saturation_limit=saturation,
        rate_constant=rate,
        time_to_completion=time_to_completion,
        distance_to_completion=time_to_completion * velocity,
    )


def lime_slurry_properties(concentration: float):
    """
    Density and viscosity of a lime slurry.

    Args:
        concentration: Slurry strength [% w/w]

    Returns:
        (density [kg/m³], viscosity [Pa·s])

    Example:
        >>> rho, mu = lime_slurry_properties(10.0)
        >>> rho, round(mu, 5)
        (1070.0, 0.00605)
    """
    density = 1000.0 + 7.0 * concentration
    viscosity = 0.001 * float(np.exp(0.18 * concentration))
    return density, viscosity


def validate_dissolution() -> None:
    """
    Validation of dissolution kinetics.

    Tests:
    1. Retrograde solubility
    2. t₉₅ reaches 95 %
    3. Oversaturated dose keeps a positive rate
    4. Dissolution is bounded
    """
    # Test 1: Colder water dissolves more lime
    assert lime_saturation_limit(5.0) > lime_saturation_limit(25.0)

    # Test 2: Completion time
    kinetics = resolve_dissolution(500.0, 50.0, 15.0, 1.0)
    assert abs(kinetics.dissolved_percent(kinetics.time_to_completion) - 95.0) < 1e-9

    # Test 3: Oversaturated
    rate = dissolution_rate_constant(100.0, 1600.0, 5000.0)
    assert abs(rate - 0.3 * 0.1) < 1e-12

    # Test 4: Bounds
    assert dissolved_percent(0.5, 1e9) == 100.0
    assert dissolved_percent(0.5, -10.0) == 0.0

    print("✓ All dissolution validations passed")
