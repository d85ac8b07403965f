"""
Compliance & Distance Module
============================

Merges the blending and dissolution requirements into the distance and
time needed downstream of the injection point, and the overall verdicts.

THEORETICAL FOUNDATION
=====================

1. Downstream natural decay beyond the device:
   CoV(x) = CoV_mixer · exp(-k · x/D_h)

   k = 0.75·√f (pipes, f = 0.02),  k = 0.6 (open channels)

2. Blending distance:
   L = Lm                                        if CoV_mixer ≤ target
   L = Lm + ln(CoV_mixer / target)/k · D_h       otherwise

3. Lime: the dissolution distance may govern:
   L_final = max(L_blend, L_95)

4. Verdicts:
   compliant      = CoV_mixer ≤ target  AND  (not lime OR dissolved > 90 %)
   time compliant = L_final / v ≤ t_target   (advisory, not part of compliant)

Date: October 2026
License: MIT
"""

from dataclasses import dataclass

import numpy as np

from .constants import EngineConstants, DEFAULT_CONSTANTS
from .dissolution import DissolutionKinetics
from .models import ConduitType
from .numerics import safe_divide


@dataclass(frozen=True)
class ComplianceVerdict:
    """
    Distance, time and verdicts.

    Attributes:
        decay_rate: Downstream CoV decay rate [-]
        blending_distance: Distance to reach the target CoV [m]
        distance_needed: Governing distance (blending or dissolution) [m]
        time_needed: Travel time over that distance [s]
        dissolved_at_target: Dissolved % at that time
        cov_compliant: Mixer CoV meets the target
        is_compliant: All targets met
        is_time_compliant: Time within the target mixing time
    """

    decay_rate: float
    blending_distance: float
    distance_needed: float
    time_needed: float
    dissolved_at_target: float
    cov_compliant: bool
    is_compliant: bool
    is_time_compliant: bool


def downstream_decay_rate(
    conduit_type: ConduitType, constants: EngineConstants = DEFAULT_CONSTANTS
) -> float:
    """CoV decay rate per hydraulic diameter downstream of the device."""
    if conduit_type is ConduitType.PIPE:
        return constants.pipe_decay_rate
    return constants.channel_decay_rate


def blending_distance(
    mixer_cov: float,
    target_cov: float,
    mixed_length: float,
    hydraulic_diameter: float,
    decay_rate: float,
) -> float:
    """
    Distance at which the CoV reaches the target.

    Example:
        >>> blending_distance(0.02, 0.05, 3.2, 0.8, 0.106)
        3.2
    """
    if mixer_cov <= target_cov:
        return mixed_length
    with np.errstate(all="ignore"):
        log_ratio = float(np.log(safe_divide(mixer_cov, target_cov)))
    return mixed_length + safe_divide(log_ratio, decay_rate, fallback=0.1) * hydraulic_diameter


def resolve_compliance(
    mixer_cov: float,
    target_cov: float,
    target_mixing_time: float,
    mixed_length: float,
    hydraulic_diameter: float,
    velocity: float,
    conduit_type: ConduitType,
    kinetics: DissolutionKinetics,
    is_lime: bool,
    constants: EngineConstants = DEFAULT_CONSTANTS,
) -> ComplianceVerdict:
    """
    Overall distance, time and compliance.

    Dissolved-at-target is always evaluated from the kinetics (the value is
    reported for every chemical) but only gates compliance for lime.

    Args:
        mixer_cov: Clamped mixer CoV [-]
        target_cov: Required CoV [-]
        target_mixing_time: Maximum mixing time [s]
        mixed_length: Lm [m]
        hydraulic_diameter: D_h [m]
        velocity: Mean velocity [m/s]
        conduit_type: Pipe or channel
        kinetics: Dissolution kinetics of the chemical
        is_lime: Chemical is saturation limited
        constants: Engine constants

    Returns:
        ComplianceVerdict
    """
    decay = downstream_decay_rate(conduit_type, constants)
    blend = blending_distance(
        mixer_cov, target_cov, mixed_length, hydraulic_diameter, decay
    )

    distance = max(blend, kinetics.distance_to_completion) if is_lime else blend
    time_needed = safe_divide(distance, velocity)
    dissolved = kinetics.dissolved_percent(time_needed)

    cov_ok = mixer_cov <= target_cov
    dissolution_ok = (not is_lime) or dissolved > constants.lime_dissolution_cutoff

    return ComplianceVerdict(
        decay_rate=decay,
        blending_distance=blend,
        distance_needed=distance,
        time_needed=time_needed,
        dissolved_at_target=dissolved,
        cov_compliant=cov_ok,
        is_compliant=cov_ok and dissolution_ok,
        is_time_compliant=time_needed <= target_mixing_time,
    )


def validate_compliance() -> None:
    """
    Validation of the distance resolver.

    Tests:
    1. A compliant mixer needs only its own length
    2. Decay distance brings the CoV exactly to target
    3. Lime distance is never shorter than the dissolution distance
    """
    kinetics = DissolutionKinetics(1633.5, 0.5, np.log(20) / 0.5, 40.0)

    # Test 1
    assert blending_distance(0.01, 0.05, 2.0, 0.5, 0.6) == 2.0

    # Test 2
    decay = downstream_decay_rate(ConduitType.PIPE)
    length = blending_distance(0.5, 0.05, 2.0, 0.5, decay)
    cov_at_end = 0.5 * np.exp(-decay * (length - 2.0) / 0.5)
    assert abs(cov_at_end - 0.05) < 1e-12

    # Test 3
    verdict = resolve_compliance(
        0.01, 0.05, 10.0, 1.0, 0.5, 1.0, ConduitType.PIPE, kinetics, is_lime=True
    )
    assert verdict.distance_needed >= kinetics.distance_to_completion
    assert verdict.dissolved_at_target >= 95.0 - 1e-9

    print("✓ All compliance validations passed")
