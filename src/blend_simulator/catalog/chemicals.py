"""
Chemical Presets
================

Typical neat-feed properties of water treatment chemicals.

Densities and viscosities are at ~20°C for the stated commercial strength.
Lime slurry properties depend on slurry strength and are computed from
the concentration rather than tabulated.

Date: October 2026
License: MIT
"""

from dataclasses import dataclass
from typing import Dict, Optional

from ..core.dissolution import lime_slurry_properties
from ..core.models import MixingInputs

DEFAULT_SLURRY_CONCENTRATION = 10.0  # [% w/w]


@dataclass(frozen=True)
class ChemicalPreset:
    """
    Catalogue entry for one chemical.

    Attributes:
        preset_id: Short identifier
        name: Display name (also the MixingInputs.chemical_type)
        density: Neat density [kg/m³]
        viscosity: Neat dynamic viscosity [Pa·s]
    """

    preset_id: str
    name: str
    density: float
    viscosity: float

    @property
    def is_lime(self) -> bool:
        return "Lime" in self.name


CHEMICAL_PRESETS: Dict[str, ChemicalPreset] = {
    preset.preset_id: preset
    for preset in (
        ChemicalPreset("custom", "Custom Chemical", 1000.0, 0.001),
        ChemicalPreset("ferric", "Ferric Chloride (40%)", 1450.0, 0.015),
        ChemicalPreset("alum", "Alum (Aluminium Sulphate)", 1320.0, 0.025),
        ChemicalPreset("hypo", "Sodium Hypochlorite (15%)", 1210.0, 0.003),
        ChemicalPreset("permanganate", "Potassium Permanganate (5%)", 1030.0, 0.001),
        ChemicalPreset("amm_sulphate", "Ammonium Sulphate (40%)", 1230.0, 0.002),
        ChemicalPreset("chlorine", "Liquid Chlorine", 1460.0, 0.0003),
        ChemicalPreset("fluorosilicic", "Fluorosilicic Acid (25%)", 1220.0, 0.002),
        ChemicalPreset("soda_ash", "Sodium Carbonate (Soda Ash 10%)", 1100.0, 0.002),
        ChemicalPreset("lime", "Lime Slurry (Variable %)", 1070.0, 0.005),
        ChemicalPreset("polydadmac", "polyDADMAC", 1040.0, 0.1),
        ChemicalPreset("poly_conc", "Polymer (Concentrate)", 1050.0, 0.8),
        ChemicalPreset("poly_dilute", "Dilute Polymer (0.1%)", 1000.0, 0.01),
        ChemicalPreset("peroxide", "Hydrogen Peroxide (50%)", 1190.0, 0.0012),
        ChemicalPreset("caustic", "Caustic Soda (50%)", 1530.0, 0.08),
        ChemicalPreset("acid", "Sulphuric Acid (98%)", 1840.0, 0.027),
    )
}


def get_preset(preset_id: str) -> ChemicalPreset:
    """
    Look up a preset by id.

    Raises:
        ValueError: If the id is unknown
    """
    try:
        return CHEMICAL_PRESETS[preset_id]
    except KeyError:
        raise ValueError(
            f"Unknown chemical preset {preset_id!r}, expected one of "
            f"{sorted(CHEMICAL_PRESETS)}"
        ) from None


def apply_preset(
    inputs: MixingInputs,
    preset_id: str,
    slurry_concentration: Optional[float] = None,
) -> MixingInputs:
    """
    Copy of ``inputs`` with the chemical name and neat properties replaced.

    For lime the density and viscosity follow the slurry strength: the
    explicit ``slurry_concentration`` if given, else the one already on the
    inputs, else 10 %.

    Example:
        >>> lime = apply_preset(MixingInputs(), "lime", slurry_concentration=20.0)
        >>> lime.chemical_density
        1140.0
    """
    preset = get_preset(preset_id)

    if not preset.is_lime:
        return inputs.with_changes(
            chemical_type=preset.name,
            chemical_density=preset.density,
            chemical_viscosity=preset.viscosity,
            slurry_concentration=None,
        )

    if slurry_concentration is None:
        slurry_concentration = inputs.slurry_concentration
    if slurry_concentration is None:
        slurry_concentration = DEFAULT_SLURRY_CONCENTRATION

    density, viscosity = lime_slurry_properties(slurry_concentration)
    return inputs.with_changes(
        chemical_type=preset.name,
        chemical_density=density,
        chemical_viscosity=viscosity,
        slurry_concentration=slurry_concentration,
    )
