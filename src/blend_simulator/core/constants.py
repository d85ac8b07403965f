"""
Engine Constants
================

Physical and empirical constants used by the blending engine.

All constants are collected in one immutable configuration object that is
injected into the engine at construction. The defaults reproduce the
published correlations; alternate values are only intended for sensitivity
studies and deterministic testing.

LITERATURE VALUES
================

Momentum ratio design target (jet-in-crossflow injection):
- Target ratio = 0.22 (optimum between poor penetration and wall impingement)
- Regime band: 0.16 - 0.24

Downstream natural decay of CoV:
- Pipes: k = 0.75 * sqrt(f), with f = 0.02 (fully turbulent assumption)
- Open channels: k = 0.6

Weir overflow:
- Fixed headloss 0.15 m, independent of hydraulics

Date: October 2026
License: MIT
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class EngineConstants:
    """
    Immutable set of physical and empirical constants.

    Attributes:
        gravity: Gravitational acceleration [m/s²]
        water_density: Dilution water density [kg/m³]
        water_viscosity: Dilution water dynamic viscosity [Pa·s]
        pipe_roughness: Absolute wall roughness for friction factor [m]
        target_momentum_ratio: Design jet/crossflow momentum ratio [-]
        low_momentum_threshold: Ratio below which the jet under-penetrates [-]
        high_momentum_threshold: Ratio above which the jet impinges [-]
        reference_orifice_diameter: Orifice used to classify the regime [m]
        pipe_decay_friction: Friction factor assumed for downstream decay [-]
        pipe_decay_coefficient: Decay coefficient multiplying sqrt(f) [-]
        channel_decay_rate: Downstream decay rate in open channels [-]
        weir_headloss: Fixed headloss of an overflow weir [m]
        min_cov: Lower CoV clamp [-]
        max_cov: Upper CoV clamp, also the worst case [-]
        lime_dissolution_cutoff: Dissolved % required for lime compliance
        dissolution_completion: Fraction treated as "fully" dissolved [-]
        default_channel_depth: Depth used when none is supplied [m]
    """

    gravity: float = 9.81  # [m/s²]
    water_density: float = 1000.0  # [kg/m³]
    water_viscosity: float = 0.001  # [Pa·s]
    pipe_roughness: float = 1.0e-4  # [m]

    # Jet momentum
    target_momentum_ratio: float = 0.22
    low_momentum_threshold: float = 0.16
    high_momentum_threshold: float = 0.24
    reference_orifice_diameter: float = 0.025  # [m]

    # Downstream decay
    pipe_decay_friction: float = 0.02
    pipe_decay_coefficient: float = 0.75
    channel_decay_rate: float = 0.6

    weir_headloss: float = 0.15  # [m]

    # CoV bounds
    min_cov: float = 0.0001
    max_cov: float = 1.0

    # Dissolution
    lime_dissolution_cutoff: float = 90.0  # [%]
    dissolution_completion: float = 0.95

    default_channel_depth: float = 0.5  # [m]

    def validate(self) -> None:
        """Validate physical consistency of the constants."""
        if self.gravity <= 0:
            raise ValueError(f"Gravity must be positive: {self.gravity}")
        if self.water_density <= 0 or self.water_viscosity <= 0:
            raise ValueError(
                f"Water properties must be positive: rho={self.water_density}, "
                f"mu={self.water_viscosity}"
            )
        if not (
            0 < self.low_momentum_threshold
            <= self.target_momentum_ratio
            <= self.high_momentum_threshold
        ):
            raise ValueError(
                "Momentum thresholds must bracket the target ratio: "
                f"{self.low_momentum_threshold} <= {self.target_momentum_ratio} "
                f"<= {self.high_momentum_threshold}"
            )
        if not 0 < self.min_cov < self.max_cov:
            raise ValueError(
                f"Invalid CoV bounds: [{self.min_cov}, {self.max_cov}]"
            )
        if not 0 < self.dissolution_completion < 1:
            raise ValueError(
                f"Dissolution completion must be in (0, 1): {self.dissolution_completion}"
            )

    @property
    def pipe_decay_rate(self) -> float:
        """Downstream CoV decay rate in closed pipes [-]."""
        return self.pipe_decay_coefficient * self.pipe_decay_friction**0.5


DEFAULT_CONSTANTS = EngineConstants()
