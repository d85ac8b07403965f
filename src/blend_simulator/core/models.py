"""
Data Model for the Blending Engine
==================================

Immutable input and output snapshots exchanged with the engine.

MixingInputs is the complete parameter set of one design evaluation;
CalculationResults is fully derived from it and carries no identity of its
own. Both are created fresh for every evaluation.

UNIT CONVENTIONS
================

- Bulk flow rate: m³/h
- Chemical and dilution-water flow: L/h
- Dimensions and lengths: m
- Density: kg/m³, viscosity: Pa·s
- Dose and saturation limit: mg/L
- Temperature: °C
- Suggested orifice diameter (output): mm

Date: October 2026
License: MIT
"""

import warnings
from dataclasses import dataclass, asdict, fields, replace
from enum import Enum
from typing import Any, Dict, Optional


class ConduitType(Enum):
    """Closed pipe or open-top channel."""

    PIPE = "PIPE"
    CHANNEL = "CHANNEL"


class ConduitShape(Enum):
    """Cross-section shape (channels are always rectangular)."""

    CIRCULAR = "CIRCULAR"
    RECTANGULAR = "RECTANGULAR"


class MixerModel(Enum):
    """Mixing device families with a published blending correlation."""

    NONE = "NONE"
    KENICS_KM = "KENICS_KM"
    HEV = "HEV"
    SMV = "SMV"
    STM = "STM"
    BAFFLES = "BAFFLES"
    WEIR = "WEIR"


class InjectionType(Enum):
    """Number of injection quills."""

    SINGLE = "SINGLE"
    TWIN = "TWIN"

    @property
    def points(self) -> int:
        return 2 if self is InjectionType.TWIN else 1


class PitchRatio(Enum):
    """Element pitch ratio of STM mixers."""

    PR_1_125 = "1.125:1"
    PR_1_5 = "1.5:1"
    PR_2_25 = "2.25:1"


class MomentumRegime(Enum):
    """Jet penetration regime from the as-configured momentum ratio."""

    LOW = "Low"
    INTERMEDIATE = "Intermediate"
    HIGH = "High"


_ENUM_FIELDS = {
    "conduit_type": ConduitType,
    "conduit_shape": ConduitShape,
    "mixer_model": MixerModel,
    "injection_type": InjectionType,
    "pitch_ratio": PitchRatio,
}


@dataclass(frozen=True)
class MixingInputs:
    """
    Parameter snapshot of one injection and mixing design.

    Attributes:
        conduit_type: Pipe or open channel
        conduit_shape: Circular or rectangular cross-section
        dimension: Diameter (circular) or base width (rectangular) [m]
        depth: Duct height or channel water depth [m], optional
        flow_rate: Bulk flow rate [m³/h]
        density: Bulk fluid density [kg/m³]
        viscosity: Bulk fluid dynamic viscosity [Pa·s]
        mixer_model: Mixing device family
        num_elements: Number of mixer elements
        available_length: Straight length available for mixing [m]
        injection_type: Single or twin quill
        pitch_ratio: STM element pitch ratio
        chemical_type: Chemical name (lime is detected by "Lime")
        chemical_dose: Applied dose [mg/L]
        chemical_flow: Neat chemical feed rate [L/h]
        dilution_water_flow: Carrier water feed rate [L/h]
        chemical_density: Neat chemical density [kg/m³]
        chemical_viscosity: Neat chemical viscosity [Pa·s]
        target_cov: Required CoV at the end of the mixing zone [-]
        target_mixing_time: Maximum acceptable mixing time [s]
        water_temperature: Bulk water temperature [°C]
        slurry_concentration: Lime slurry strength [% w/w], optional
    """

    conduit_type: ConduitType = ConduitType.PIPE
    conduit_shape: ConduitShape = ConduitShape.CIRCULAR
    dimension: float = 0.8  # [m]
    depth: Optional[float] = None  # [m]
    flow_rate: float = 1500.0  # [m³/h]
    density: float = 1000.0  # [kg/m³]
    viscosity: float = 0.001  # [Pa·s]
    mixer_model: MixerModel = MixerModel.NONE
    num_elements: float = 4
    available_length: float = 10.0  # [m]
    injection_type: InjectionType = InjectionType.SINGLE
    pitch_ratio: PitchRatio = PitchRatio.PR_1_5
    chemical_type: str = "Ferric Chloride (40%)"
    chemical_dose: float = 1.0  # [mg/L]
    chemical_flow: float = 10.0  # [L/h]
    dilution_water_flow: float = 200.0  # [L/h]
    chemical_density: float = 1450.0  # [kg/m³]
    chemical_viscosity: float = 0.015  # [Pa·s]
    target_cov: float = 0.05
    target_mixing_time: float = 10.0  # [s]
    water_temperature: float = 15.0  # [°C]
    slurry_concentration: Optional[float] = None  # [%]

    @property
    def is_lime(self) -> bool:
        """Saturation-limited chemical requiring dissolution kinetics."""
        return "Lime" in self.chemical_type

    def with_changes(self, **changes: Any) -> "MixingInputs":
        """Return a copy with the given fields changed."""
        return replace(self, **changes)

    def validate(self) -> None:
        """
        Validate physical plausibility of the inputs.

        The engine itself never calls this; it is total over all reals.
        Front ends call it before evaluation to reject nonsense early.

        Raises:
            ValueError: If a quantity is physically impossible
        """
        if self.dimension <= 0:
            raise ValueError(f"Dimension must be positive: {self.dimension}")
        if self.depth is not None and self.depth <= 0:
            raise ValueError(f"Depth must be positive when given: {self.depth}")
        if self.flow_rate < 0:
            raise ValueError(f"Flow rate cannot be negative: {self.flow_rate}")
        if self.chemical_flow < 0 or self.dilution_water_flow < 0:
            raise ValueError(
                f"Injection flows cannot be negative: chemical={self.chemical_flow}, "
                f"dilution={self.dilution_water_flow}"
            )
        if self.density <= 0 or self.chemical_density <= 0:
            raise ValueError(
                f"Densities must be positive: bulk={self.density}, "
                f"chemical={self.chemical_density}"
            )
        if self.viscosity <= 0 or self.chemical_viscosity <= 0:
            raise ValueError(
                f"Viscosities must be positive: bulk={self.viscosity}, "
                f"chemical={self.chemical_viscosity}"
            )
        if self.num_elements < 0:
            raise ValueError(f"Element count cannot be negative: {self.num_elements}")
        if self.available_length < 0:
            raise ValueError(
                f"Available length cannot be negative: {self.available_length}"
            )
        if self.chemical_dose < 0:
            raise ValueError(f"Dose cannot be negative: {self.chemical_dose}")
        if self.target_cov <= 0:
            raise ValueError(f"Target CoV must be positive: {self.target_cov}")
        if self.target_mixing_time <= 0:
            raise ValueError(
                f"Target mixing time must be positive: {self.target_mixing_time}"
            )
        if self.conduit_type is ConduitType.CHANNEL and (
            self.conduit_shape is ConduitShape.CIRCULAR
        ):
            raise ValueError("Open channels must be rectangular")
        if self.water_temperature < 0 or self.water_temperature > 40:
            warnings.warn(
                f"Temperature {self.water_temperature}°C outside typical range [0, 40]"
            )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MixingInputs":
        """
        Build inputs from a plain mapping (e.g. parsed JSON).

        Enum fields accept either the enum member or its string value.

        Raises:
            TypeError: If the mapping contains unknown keys
            ValueError: If an enum value is not recognised
        """
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise TypeError(f"Unknown input fields: {sorted(unknown)}")

        kwargs = dict(data)
        for name, enum_cls in _ENUM_FIELDS.items():
            if name in kwargs and not isinstance(kwargs[name], enum_cls):
                try:
                    kwargs[name] = enum_cls(kwargs[name])
                except ValueError:
                    allowed = [member.value for member in enum_cls]
                    raise ValueError(
                        f"Invalid {name} {kwargs[name]!r}, expected one of {allowed}"
                    ) from None
        return cls(**kwargs)

    def to_dict(self) -> Dict[str, Any]:
        """Plain mapping with enum members replaced by their values."""
        return _plain(asdict(self))


@dataclass(frozen=True)
class CalculationResults:
    """
    Derived performance of one design.

    Attributes:
        velocity: Mean bulk velocity [m/s]
        reynolds_number: Bulk Reynolds number on hydraulic diameter [-]
        momentum_ratio: Jet/crossflow momentum ratio at the reference orifice [-]
        momentum_regime: Penetration regime classification
        natural_mixing_cov: Unmixed reference CoV (always 1.0) [-]
        mixer_cov: Predicted CoV at the end of the mixer [-]
        is_compliant: CoV target met (and lime dissolved when applicable)
        is_time_compliant: Mixing time within the target
        mixing_distance_needed: Distance to meet all targets [m]
        mixing_time_needed: Travel time over that distance [s]
        viscosity_ratio: Injected / bulk viscosity [-]
        injected_viscosity: Blended injection viscosity [Pa·s]
        injected_density: Blended injection density [kg/m³]
        total_injection_flow: Chemical + dilution flow [L/h]
        headloss: Pressure loss [kPa]
        headloss_meters: Head loss [m]
        g_value: Mean velocity gradient [1/s]
        lime_saturation_limit: Lime solubility at water temperature [mg/L]
        dissolved_at_target: Dissolved lime at the required distance [%]
        time_to_95_dissolution: Time to 95 % dissolution [s]
        distance_to_95_dissolution: Distance to 95 % dissolution [m]
        suggested_orifice_diameter: Orifice giving the design momentum ratio [mm]
        manufacturer_notes: Advisory text for the selected device
        hydraulic_diameter: 4A/P [m]
        wetted_area: Flow cross-section area [m²]
    """

    velocity: float
    reynolds_number: float
    momentum_ratio: float
    momentum_regime: MomentumRegime
    natural_mixing_cov: float
    mixer_cov: float
    is_compliant: bool
    is_time_compliant: bool
    mixing_distance_needed: float
    mixing_time_needed: float
    viscosity_ratio: float
    injected_viscosity: float
    injected_density: float
    total_injection_flow: float
    headloss: float
    headloss_meters: float
    g_value: float
    lime_saturation_limit: float
    dissolved_at_target: float
    time_to_95_dissolution: float
    distance_to_95_dissolution: float
    suggested_orifice_diameter: float
    manufacturer_notes: str
    hydraulic_diameter: float
    wetted_area: float

    def to_dict(self) -> Dict[str, Any]:
        """Plain mapping suitable for JSON serialisation."""
        return _plain(asdict(self))


def _plain(data: Dict[str, Any]) -> Dict[str, Any]:
    return {
        key: value.value if isinstance(value, Enum) else value
        for key, value in data.items()
    }
