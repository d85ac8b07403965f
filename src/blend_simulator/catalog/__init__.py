"""
Catalog Package
===============

Selectable chemicals and mixing devices for front ends.

Available Catalogs:
- CHEMICAL_PRESETS: Neat-feed density and viscosity by chemical
- PIPE_MIXERS / CHANNEL_MIXERS: Devices offered per conduit type

Date: October 2026
License: MIT
"""

from .chemicals import (
    ChemicalPreset,
    CHEMICAL_PRESETS,
    DEFAULT_SLURRY_CONCENTRATION,
    get_preset,
    apply_preset,
)
from .mixers import (
    MixerOption,
    PIPE_MIXERS,
    CHANNEL_MIXERS,
    mixers_for,
    is_offered,
    mixer_label,
)

__all__ = [
    "ChemicalPreset",
    "CHEMICAL_PRESETS",
    "DEFAULT_SLURRY_CONCENTRATION",
    "get_preset",
    "apply_preset",
    "MixerOption",
    "PIPE_MIXERS",
    "CHANNEL_MIXERS",
    "mixers_for",
    "is_offered",
    "mixer_label",
]
