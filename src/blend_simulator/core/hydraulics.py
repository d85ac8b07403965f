"""
Geometry & Hydraulics Module
============================

Cross-section geometry, mean velocity, Reynolds number and wall friction
for closed pipes, rectangular ducts and open channels.

THEORETICAL FOUNDATION
=====================

1. Hydraulic diameter:
   D_h = 4·A / P_wetted

   - Circular pipe:      A = π·d²/4,  P = π·d,     D_h = d
   - Rectangular duct:   A = w·h,     P = 2(w+h)
   - Open channel:       A = w·y,     P = w + 2y   (free surface not wetted)

2. Continuity:
   v = Q / A

3. Reynolds number:
   Re = ρ·v·D_h / μ

   Re < 2300: Laminar
   Re > 4000: Turbulent

4. Darcy friction factor:
   Swamee-Jain (explicit approximation of Colebrook-White):
   f = 0.25 / [log₁₀(ε/(3.7·D) + 5.74/Re⁰·⁹)]²

   Colebrook-White (implicit, solved numerically for reference):
   1/√f = -2·log₁₀(ε/(3.7·D) + 2.51/(Re·√f))

References:
- White "Fluid Mechanics" (8th ed.), Chapter 6
- Swamee & Jain, J. Hydraulics Div. ASCE 102(5), 1976
- Chow "Open-Channel Hydraulics" (1959)

Date: October 2026
License: MIT
"""

from dataclasses import dataclass
from typing import Optional

import numpy as np
from scipy.optimize import brentq

from .constants import EngineConstants, DEFAULT_CONSTANTS
from .models import ConduitType, ConduitShape
from .numerics import safe_divide

SECONDS_PER_HOUR = 3600.0

RE_LAMINAR = 2300.0
RE_TURBULENT = 4000.0


@dataclass(frozen=True)
class HydraulicState:
    """
    Resolved conduit geometry and bulk flow.

    Attributes:
        area: Flow cross-section [m²]
        perimeter: Wetted perimeter [m]
        hydraulic_diameter: 4A/P [m]
        flow_m3s: Bulk volumetric flow [m³/s]
        velocity: Mean velocity [m/s]
        reynolds: Reynolds number on D_h [-]
    """

    area: float
    perimeter: float
    hydraulic_diameter: float
    flow_m3s: float
    velocity: float
    reynolds: float

    @property
    def flow_regime(self) -> str:
        """Laminar, transitional or turbulent."""
        if self.reynolds < RE_LAMINAR:
            return "laminar"
        if self.reynolds > RE_TURBULENT:
            return "turbulent"
        return "transitional"


def conduit_geometry(
    conduit_type: ConduitType,
    conduit_shape: ConduitShape,
    dimension: float,
    depth: Optional[float] = None,
    constants: EngineConstants = DEFAULT_CONSTANTS,
):
    """
    Area, wetted perimeter and hydraulic diameter of the conduit.

    A rectangular duct with no (or zero) height is treated as square. An
    open channel with no depth uses the configured default depth.

    Args:
        conduit_type: Pipe or channel
        conduit_shape: Circular or rectangular (ignored for channels)
        dimension: Diameter or base width [m]
        depth: Duct height or channel depth [m]
        constants: Engine constants

    Returns:
        (area [m²], perimeter [m], hydraulic_diameter [m])
    """
    if conduit_type is ConduitType.PIPE:
        if conduit_shape is ConduitShape.CIRCULAR:
            area = np.pi * dimension * dimension / 4.0
            perimeter = np.pi * dimension
            return float(area), float(perimeter), float(dimension)

        height = depth or dimension
        area = dimension * height
        perimeter = 2.0 * (dimension + height)
    else:
        water_depth = constants.default_channel_depth if depth is None else depth
        area = dimension * water_depth
        perimeter = dimension + 2.0 * water_depth

    hydraulic_diameter = safe_divide(4.0 * area, perimeter)
    return float(area), float(perimeter), hydraulic_diameter


def resolve_hydraulics(
    conduit_type: ConduitType,
    conduit_shape: ConduitShape,
    dimension: float,
    flow_rate_m3h: float,
    density: float,
    viscosity: float,
    depth: Optional[float] = None,
    constants: EngineConstants = DEFAULT_CONSTANTS,
) -> HydraulicState:
    """
    Velocity and Reynolds number for the bulk flow.

    Args:
        conduit_type: Pipe or channel
        conduit_shape: Circular or rectangular
        dimension: Diameter or base width [m]
        flow_rate_m3h: Bulk flow [m³/h]
        density: Bulk density [kg/m³]
        viscosity: Bulk dynamic viscosity [Pa·s]
        depth: Duct height or channel depth [m]
        constants: Engine constants

    Returns:
        HydraulicState

    Example:
        >>> state = resolve_hydraulics(
        ...     ConduitType.PIPE, ConduitShape.CIRCULAR, 0.8, 1500.0, 1000.0, 0.001
        ... )
        >>> round(state.area, 4), round(state.velocity, 3)
        (0.5027, 0.829)
    """
    area, perimeter, hydraulic_diameter = conduit_geometry(
        conduit_type, conduit_shape, dimension, depth, constants
    )

    flow_m3s = flow_rate_m3h / SECONDS_PER_HOUR
    velocity = safe_divide(flow_m3s, area)
    reynolds = safe_divide(density * velocity * hydraulic_diameter, viscosity)

    return HydraulicState(
        area=area,
        perimeter=perimeter,
        hydraulic_diameter=hydraulic_diameter,
        flow_m3s=flow_m3s,
        velocity=velocity,
        reynolds=reynolds,
    )


def darcy_friction_factor(
    reynolds: float,
    hydraulic_diameter: float,
    roughness: float = DEFAULT_CONSTANTS.pipe_roughness,
    method: str = "swamee_jain",
) -> float:
    """
    Darcy-Weisbach friction factor for turbulent flow.

    Args:
        reynolds: Reynolds number [-]
        hydraulic_diameter: D_h [m]
        roughness: Absolute roughness ε [m]
        method: 'swamee_jain' (explicit, used by the engine) or 'colebrook'

    Returns:
        Friction factor f [-]. The explicit form returns NaN or 0 for
        degenerate Re rather than raising.

    Example:
        >>> f_sj = darcy_friction_factor(1e5, 0.1)
        >>> f_cw = darcy_friction_factor(1e5, 0.1, method='colebrook')
        >>> abs(f_sj - f_cw) / f_cw < 0.03
        True
    """
    relative = safe_divide(roughness, 3.7 * hydraulic_diameter)

    if method == "swamee_jain":
        with np.errstate(all="ignore"):
            log_term = np.log10(relative + 5.74 / np.power(reynolds, 0.9))
            return float(0.25 / log_term**2)

    elif method == "colebrook":
        if not reynolds > 0:
            raise ValueError(f"Colebrook requires positive Re, got {reynolds}")

        def residual(inv_sqrt_f: float) -> float:
            return inv_sqrt_f + 2.0 * np.log10(relative + 2.51 * inv_sqrt_f / reynolds)

        # 1/√f in [1, 100] brackets every turbulent root
        inv_sqrt_f = brentq(residual, 1.0, 100.0, xtol=1e-12)
        return float(1.0 / inv_sqrt_f**2)

    else:
        raise ValueError(f"Unknown friction factor method: {method}")


def validate_hydraulics() -> None:
    """
    Validation of geometry and hydraulics.

    Tests:
    1. Circular hydraulic diameter equals the diameter
    2. Square duct hydraulic diameter equals the side
    3. Wide shallow channel approaches D_h = 4·depth
    4. Continuity and Reynolds definitions
    5. Swamee-Jain within 3% of Colebrook-White
    """
    # Test 1: Circular pipe
    area, perimeter, dh = conduit_geometry(
        ConduitType.PIPE, ConduitShape.CIRCULAR, 0.5
    )
    assert abs(dh - 0.5) < 1e-12
    assert abs(4 * area / perimeter - 0.5) < 1e-12

    # Test 2: Square duct (height omitted)
    _, _, dh_square = conduit_geometry(
        ConduitType.PIPE, ConduitShape.RECTANGULAR, 0.6
    )
    assert abs(dh_square - 0.6) < 1e-12

    # Test 3: Wide channel
    _, _, dh_wide = conduit_geometry(
        ConduitType.CHANNEL, ConduitShape.RECTANGULAR, 1000.0, 0.5
    )
    assert abs(dh_wide - 2.0) < 0.01

    # Test 4: Continuity
    state = resolve_hydraulics(
        ConduitType.PIPE, ConduitShape.CIRCULAR, 0.8, 1500.0, 1000.0, 0.001
    )
    assert abs(state.velocity * state.area - 1500.0 / 3600.0) < 1e-12
    assert abs(state.reynolds - 1000.0 * state.velocity * 0.8 / 0.001) < 1e-6
    assert state.flow_regime == "turbulent"

    # Test 5: Friction factor approximation
    for re in (1e4, 1e5, 1e6):
        f_sj = darcy_friction_factor(re, 0.3)
        f_cw = darcy_friction_factor(re, 0.3, method="colebrook")
        assert abs(f_sj - f_cw) / f_cw < 0.03, f"Re={re}: {f_sj} vs {f_cw}"

    print("✓ All hydraulics validations passed")
