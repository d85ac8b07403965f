"""
Performance Profile Module
==========================

CoV and dissolution along the conduit downstream of the injection point,
as data for a performance curve. Plotting is left to the caller.

PROFILE MODEL
=============

Natural mixing (no device):
    CoV(x) = (√α / N_quills) · exp(-k · x/D_h)

With a mixing device of nominal length L_mix:
    CoV(x) = 1 - (1 - CoV_mixer) · x/L_mix             x < L_mix
    CoV(x) = CoV_mixer · exp(-k · (x - L_mix)/D_h)     x ≥ L_mix

    L_mix = 10 · headloss [m] when the device has headloss, else 1 m.

CoV is clipped to [0.001, 1.0]. Dissolution (lime only) follows the
first-order model at t = x / v.

The profile extends to 1.5 · max(required distance, available length, 5 m).

Date: October 2026
License: MIT
"""

from dataclasses import dataclass
from typing import List, Optional, Tuple

import numpy as np

from .constants import EngineConstants, DEFAULT_CONSTANTS
from .models import MixingInputs, CalculationResults, MixerModel
from .compliance import downstream_decay_rate
from .correlations import dilution_ratio
from .dissolution import dissolution_rate_constant
from .hydraulics import SECONDS_PER_HOUR

PROFILE_MIN_COV = 0.001
PROFILE_MIN_LENGTH = 5.0  # [m]
PROFILE_EXTENSION = 1.5
MIXER_LENGTH_PER_HEADLOSS = 10.0  # [m/m]


@dataclass(frozen=True)
class ProfilePoint:
    """
    One point of the performance curve.

    Attributes:
        distance: Distance downstream of injection [m]
        cov: Predicted CoV [-]
        target: Target CoV [-]
        dissolution: Dissolved lime [%], 0 for other chemicals
    """

    distance: float
    cov: float
    target: float
    dissolution: float


def performance_profile(
    inputs: MixingInputs,
    results: CalculationResults,
    n_points: int = 21,
    constants: EngineConstants = DEFAULT_CONSTANTS,
) -> List[ProfilePoint]:
    """
    Sample CoV and dissolution along the conduit.

    Args:
        inputs: Design inputs
        results: Engine results for the same inputs
        n_points: Number of samples including both ends (≥ 2)
        constants: Engine constants

    Returns:
        List of ProfilePoint ordered by distance

    Raises:
        ValueError: If fewer than 2 points are requested
    """
    distances, cov, dissolution = profile_arrays(inputs, results, n_points, constants)
    return [
        ProfilePoint(
            distance=float(d),
            cov=float(c),
            target=inputs.target_cov,
            dissolution=float(s),
        )
        for d, c, s in zip(distances, cov, dissolution)
    ]


def profile_arrays(
    inputs: MixingInputs,
    results: CalculationResults,
    n_points: int = 21,
    constants: EngineConstants = DEFAULT_CONSTANTS,
) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """
    Vectorised profile.

    Returns:
        (distance [m], CoV [-], dissolution [%]) arrays of length n_points
    """
    if n_points < 2:
        raise ValueError(f"Need at least 2 profile points, got {n_points}")

    max_distance = PROFILE_EXTENSION * max(
        results.mixing_distance_needed, inputs.available_length, PROFILE_MIN_LENGTH
    )
    distances = np.linspace(0.0, max_distance, n_points)

    decay = downstream_decay_rate(inputs.conduit_type, constants)
    hydraulic_diameter = results.hydraulic_diameter or 1.0

    with np.errstate(all="ignore"):
        if inputs.mixer_model is MixerModel.NONE:
            alpha = dilution_ratio(
                inputs.flow_rate / SECONDS_PER_HOUR, inputs.chemical_flow + inputs.dilution_water_flow
            )
            initial = np.sqrt(alpha) / inputs.injection_type.points
            cov = initial * np.exp(-decay * distances / hydraulic_diameter)
        else:
            mixer_length = _nominal_mixer_length(results.headloss_meters)
            mixer_cov = results.mixer_cov or 1.0
            ramp = 1.0 - (1.0 - mixer_cov) * distances / mixer_length
            tail = mixer_cov * np.exp(
                -decay * (distances - mixer_length) / hydraulic_diameter
            )
            cov = np.where(distances < mixer_length, ramp, tail)

        cov = np.clip(np.nan_to_num(cov, nan=1.0), PROFILE_MIN_COV, 1.0)

        dissolution = np.zeros_like(distances)
        if inputs.is_lime:
            rate = dissolution_rate_constant(
                results.g_value, results.lime_saturation_limit, inputs.chemical_dose
            )
            time_s = distances / (results.velocity or 1.0)
            dissolution = np.clip((1.0 - np.exp(-rate * time_s)) * 100.0, 0.0, 100.0)
            dissolution = np.nan_to_num(dissolution, nan=0.0)

    return distances, cov, dissolution


def _nominal_mixer_length(headloss_m: float) -> float:
    if headloss_m > 0:
        return MIXER_LENGTH_PER_HEADLOSS * headloss_m
    return 1.0


def distance_to_target(points: List[ProfilePoint]) -> Optional[float]:
    """First sampled distance at which the CoV meets the target, if any."""
    for point in points:
        if point.cov <= point.target:
            return point.distance
    return None
