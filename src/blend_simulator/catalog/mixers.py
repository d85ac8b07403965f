"""
Mixer Offering
==============

Mixing devices available for each conduit type, labelled with the section
of the BHR in-line mixing guide their correlation comes from.

Date: October 2026
License: MIT
"""

from dataclasses import dataclass
from typing import Tuple

from ..core.models import ConduitType, MixerModel


@dataclass(frozen=True)
class MixerOption:
    """One selectable device."""

    model: MixerModel
    label: str


PIPE_MIXERS: Tuple[MixerOption, ...] = (
    MixerOption(MixerModel.NONE, "Natural Pipe Mixing (Section C7)"),
    MixerOption(MixerModel.KENICS_KM, "Chemineer Kenics KM (Section C1)"),
    MixerOption(MixerModel.HEV, "Chemineer HEV Pipe (Section C2)"),
    MixerOption(MixerModel.SMV, "Sulzer SMV (Section C3)"),
    MixerOption(MixerModel.STM, "Statiflo STM Pipe (Section C4)"),
)

CHANNEL_MIXERS: Tuple[MixerOption, ...] = (
    MixerOption(MixerModel.NONE, "Natural Channel Mixing (Section C19)"),
    MixerOption(MixerModel.HEV, "Chemineer HEV Channel (Section C14)"),
    MixerOption(MixerModel.STM, "Statiflo STM Channel (Section C16)"),
    MixerOption(MixerModel.BAFFLES, "DIY Baffles (Section C17)"),
    MixerOption(MixerModel.WEIR, "Overflow Weir (Section C20)"),
)


def mixers_for(conduit_type: ConduitType) -> Tuple[MixerOption, ...]:
    """Devices offered for ``conduit_type``."""
    if conduit_type is ConduitType.PIPE:
        return PIPE_MIXERS
    return CHANNEL_MIXERS


def is_offered(conduit_type: ConduitType, model: MixerModel) -> bool:
    """True when ``model`` is a listed option for ``conduit_type``."""
    return any(option.model is model for option in mixers_for(conduit_type))


def mixer_label(conduit_type: ConduitType, model: MixerModel) -> str:
    """Display label, falling back to the enum value for unlisted devices."""
    for option in mixers_for(conduit_type):
        if option.model is model:
            return option.label
    return model.value
