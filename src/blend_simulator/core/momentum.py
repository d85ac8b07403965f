"""
Jet Momentum & Orifice Sizing Module
====================================

Jet-in-crossflow momentum ratio of the injection quill(s) and the orifice
diameter that achieves the design ratio.

THEORETICAL FOUNDATION
=====================

1. Momentum ratio (Forney & Gray form):
   R = √(ρ_j/ρ_b) · (u_j·d) / (u_b·D_h)

   Where:
   - u_j: jet velocity at the orifice = q / (π·d²/4)
   - d: orifice diameter
   - u_b, D_h: bulk velocity and hydraulic diameter

2. Design target R = 0.22 places the jet centreline near mid-radius.
   Substituting u_j = 4q/(π·d²) gives a closed-form orifice size:
   d = 4·q·√(ρ_j/ρ_b) / (π·R·u_b·D_h)

3. Regimes:
   R < 0.16: Low (jet hugs the wall)
   R > 0.24: High (jet impinges on the opposite wall)

The as-configured ratio is evaluated at a fixed reference orifice and is
independent of the suggested diameter; both are reported.

References:
- Forney, L.J. & Gray, G.E. "Optimum design of a tee mixer", AIChE J. (1990)
- Paul, Atiemo-Obeng & Kresta "Handbook of Industrial Mixing" (2004), Ch. 7

Date: October 2026
License: MIT
"""

from dataclasses import dataclass

import numpy as np

from .constants import EngineConstants, DEFAULT_CONSTANTS
from .models import InjectionType, MomentumRegime
from .numerics import safe_divide

MM_PER_M = 1000.0


@dataclass(frozen=True)
class MomentumSizing:
    """
    Injection momentum results.

    Attributes:
        injection_points: Number of quills
        flow_per_point_m3s: Injected flow per quill [m³/s]
        suggested_orifice_diameter_mm: Orifice for the design ratio [mm]
        jet_velocity: Jet velocity at the reference orifice [m/s]
        momentum_ratio: Ratio at the reference orifice [-]
        regime: Penetration regime
    """

    injection_points: int
    flow_per_point_m3s: float
    suggested_orifice_diameter_mm: float
    jet_velocity: float
    momentum_ratio: float
    regime: MomentumRegime


def classify_momentum_regime(
    momentum_ratio: float, constants: EngineConstants = DEFAULT_CONSTANTS
) -> MomentumRegime:
    """
    Classify the jet penetration regime.

    Both thresholds are exclusive: exactly 0.16 and exactly 0.24 are
    Intermediate.

    Example:
        >>> classify_momentum_regime(0.15).value
        'Low'
        >>> classify_momentum_regime(0.25).value
        'High'
    """
    if momentum_ratio < constants.low_momentum_threshold:
        return MomentumRegime.LOW
    if momentum_ratio > constants.high_momentum_threshold:
        return MomentumRegime.HIGH
    return MomentumRegime.INTERMEDIATE


def size_injection(
    total_injection_m3s: float,
    injected_density: float,
    bulk_density: float,
    velocity: float,
    hydraulic_diameter: float,
    injection_type: InjectionType = InjectionType.SINGLE,
    constants: EngineConstants = DEFAULT_CONSTANTS,
) -> MomentumSizing:
    """
    Size the injection orifice and classify the as-configured jet.

    Args:
        total_injection_m3s: Total injected flow [m³/s]
        injected_density: Blended injection density [kg/m³]
        bulk_density: Bulk fluid density [kg/m³]
        velocity: Mean bulk velocity [m/s]
        hydraulic_diameter: Conduit D_h [m]
        injection_type: Single or twin quill
        constants: Engine constants

    Returns:
        MomentumSizing
    """
    points = injection_type.points
    q_point = total_injection_m3s / points

    with np.errstate(all="ignore"):
        density_ratio_root = float(
            np.sqrt(safe_divide(injected_density, bulk_density, fallback=1.0))
        )

    crossflow = velocity * hydraulic_diameter

    suggested = safe_divide(
        4.0 * q_point * density_ratio_root,
        np.pi * constants.target_momentum_ratio * crossflow,
    )

    d_ref = constants.reference_orifice_diameter
    jet_velocity = safe_divide(q_point, np.pi * (d_ref / 2.0) ** 2, fallback=1e-9)
    momentum_ratio = density_ratio_root * safe_divide(jet_velocity * d_ref, crossflow)

    return MomentumSizing(
        injection_points=points,
        flow_per_point_m3s=q_point,
        suggested_orifice_diameter_mm=suggested * MM_PER_M,
        jet_velocity=jet_velocity,
        momentum_ratio=momentum_ratio,
        regime=classify_momentum_regime(momentum_ratio, constants),
    )


def validate_momentum() -> None:
    """
    Validation of momentum sizing.

    Tests:
    1. Suggested orifice reproduces the design ratio
    2. Regime thresholds
    3. Twin injection halves the per-point flow
    """
    constants = DEFAULT_CONSTANTS

    # Test 1: Plugging the suggested orifice back in gives R = 0.22
    sizing = size_injection(210.0 / 3.6e6, 1022.0, 1000.0, 0.83, 0.8)
    d = sizing.suggested_orifice_diameter_mm / MM_PER_M
    u_jet = sizing.flow_per_point_m3s / (np.pi * d**2 / 4.0)
    ratio = np.sqrt(1022.0 / 1000.0) * u_jet * d / (0.83 * 0.8)
    assert abs(ratio - constants.target_momentum_ratio) < 1e-9

    # Test 2: Thresholds
    assert classify_momentum_regime(0.15) is MomentumRegime.LOW
    assert classify_momentum_regime(0.16) is MomentumRegime.INTERMEDIATE
    assert classify_momentum_regime(0.24) is MomentumRegime.INTERMEDIATE
    assert classify_momentum_regime(0.25) is MomentumRegime.HIGH

    # Test 3: Twin quills
    twin = size_injection(
        210.0 / 3.6e6, 1022.0, 1000.0, 0.83, 0.8, InjectionType.TWIN
    )
    assert abs(twin.flow_per_point_m3s - sizing.flow_per_point_m3s / 2) < 1e-15

    print("✓ All momentum validations passed")
