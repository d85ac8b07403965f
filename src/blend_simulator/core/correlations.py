"""
CoV Correlation Engine
======================

Empirical blending-performance correlations for in-line mixing devices.

Each mixing device family owns one correlation object that predicts the
coefficient of variation (CoV) of concentration at the end of the device,
together with the friction constant (FD) and mixed length (Lm) that the
headloss stage needs, and a fixed advisory note.

THEORETICAL FOUNDATION
=====================

1. Dimensionless groups:
   α   = Q_bulk / Q_injection         (dilution ratio, both in L/h)
   L/D = L_available / D_h            (length scale)
   Re  = ρ·v·D_h / μ                  (bulk Reynolds number)
   n   = number of mixer elements

2. Static mixers (power laws):
   CoV = C · Re^a · α^b · n^c · (L/D)^e

3. Natural pipe decay (no device):
   CoV_0 = √α
   CoV   = 2·CoV_0 · exp(-0.75·√f · L/D)

4. Natural channel mixing (jet-driven):
   CoV = 0.0183 · (L/D)^(-1/1.3) · R^(-2.21/1.3),   R ≥ 0.01

CORRELATION SUMMARY
===================

| Device     | Branches                              | FD          | Lm          |
|------------|---------------------------------------|-------------|-------------|
| NONE       | pipe / channel                        | Swamee-Jain | L_available |
| KENICS_KM  | single / twin injection               | 1.9         | 1.5·n·D_h   |
| HEV        | channel / pipe (L/D ≤ 3, L/D > 3)     | 0.45 / 0.6  | n·D_h       |
| SMV        | one form                              | 10.1        | n·D_h       |
| STM        | pitch ratio × pipe / channel          | 1.9 - 7.6   | 0.5/0.8·n·D_h |
| BAFFLES    | natural mixing (no device credit)     | Swamee-Jain | L_available |
| WEIR       | natural mixing, fixed 0.15 m headloss | Swamee-Jain | L_available |

Every prediction is clamped to [0.0001, 1.0]; a non-finite prediction is
replaced by the worst case 1.0.

References:
- BHR Group "Guide to In-line Mixing of Chemicals in Water Treatment"
- Chemineer Kenics KM / HEV technical bulletins
- Sulzer "Mixing and Reaction Technology" (SMV)
- Statiflo STM design guide

Date: October 2026
License: MIT
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, replace
from typing import Dict, Optional, Tuple

import numpy as np

from .constants import EngineConstants, DEFAULT_CONSTANTS
from .hydraulics import darcy_friction_factor
from .injection import LITRES_PER_HOUR_PER_M3_S
from .models import ConduitType, InjectionType, MixerModel, PitchRatio
from .numerics import bounded_or_worst, safe_divide

logger = logging.getLogger(__name__)

DEFAULT_NOTES = "Standard BHR quill recommendations apply."


@dataclass(frozen=True)
class CorrelationContext:
    """
    Everything a correlation may depend on.

    Attributes:
        conduit_type: Pipe or channel
        injection_type: Single or twin quill
        pitch_ratio: STM pitch ratio
        reynolds: Bulk Reynolds number [-]
        alpha: Dilution ratio Q_bulk/Q_injection [-]
        num_elements: Mixer element count [-]
        available_length: Available mixing length [m]
        hydraulic_diameter: D_h [m]
        momentum_ratio: As-configured jet momentum ratio [-]
    """

    conduit_type: ConduitType
    injection_type: InjectionType
    pitch_ratio: PitchRatio
    reynolds: float
    alpha: float
    num_elements: float
    available_length: float
    hydraulic_diameter: float
    momentum_ratio: float

    @property
    def length_ratio(self) -> float:
        """L/D, available length over hydraulic diameter."""
        return safe_divide(self.available_length, self.hydraulic_diameter)

    @property
    def is_channel(self) -> bool:
        return self.conduit_type is ConduitType.CHANNEL


@dataclass(frozen=True)
class CorrelationResult:
    """
    Outcome of one correlation.

    Attributes:
        raw_cov: Unclamped prediction (may be non-finite)
        cov: Clamped CoV [-]
        friction_factor: FD used for headloss [-]
        mixed_length: Lm used for headloss and distance [m]
        notes: Manufacturer guidance
        fixed_headloss: Device headloss independent of hydraulics [m], if any
    """

    raw_cov: float
    cov: float
    friction_factor: float
    mixed_length: float
    notes: str
    fixed_headloss: Optional[float] = None


def dilution_ratio(flow_m3s: float, total_injection_lh: float) -> float:
    """
    α: bulk flow over injected flow, both in L/h.

    Example:
        >>> round(dilution_ratio(1500.0 / 3600.0, 210.0), 1)
        7142.9
    """
    return safe_divide(flow_m3s * LITRES_PER_HOUR_PER_M3_S, total_injection_lh, fallback=1.0)


def _power_law(coefficient: float, *terms: Tuple[float, float]) -> float:
    """coefficient · Π base^exponent, with NaN instead of complex or errors."""
    with np.errstate(all="ignore"):
        value = np.float64(coefficient)
        for base, exponent in terms:
            value = value * np.power(np.float64(base), exponent)
    return float(value)


class MixerCorrelation(ABC):
    """
    Blending correlation of one mixing device family.

    Subclasses implement ``predict`` and may override ``notes``. The public
    ``evaluate`` applies the CoV clamp uniformly.
    """

    model: MixerModel
    notes: str = DEFAULT_NOTES

    @abstractmethod
    def predict(
        self, ctx: CorrelationContext, constants: EngineConstants
    ) -> Tuple[float, float, float]:
        """
        Unclamped prediction.

        Returns:
            (cov, friction_factor, mixed_length)
        """

    def fixed_headloss(self, constants: EngineConstants) -> Optional[float]:
        """Headloss independent of hydraulics [m], None for friction-based."""
        return None

    def evaluate(
        self, ctx: CorrelationContext, constants: EngineConstants = DEFAULT_CONSTANTS
    ) -> CorrelationResult:
        raw_cov, friction_factor, mixed_length = self.predict(ctx, constants)

        if not np.isfinite(raw_cov):
            logger.warning(
                f"{self.model.value}: non-finite CoV ({raw_cov}), using worst case"
            )
        cov = bounded_or_worst(
            raw_cov, constants.min_cov, constants.max_cov, worst=constants.max_cov
        )

        return CorrelationResult(
            raw_cov=raw_cov,
            cov=cov,
            friction_factor=friction_factor,
            mixed_length=mixed_length,
            notes=self.notes,
            fixed_headloss=self.fixed_headloss(constants),
        )


class NaturalMixing(MixerCorrelation):
    """Unmixed decay along the available length (no device)."""

    model = MixerModel.NONE

    def predict(self, ctx, constants):
        friction_factor = darcy_friction_factor(
            ctx.reynolds, ctx.hydraulic_diameter, constants.pipe_roughness
        )
        length_ratio = ctx.length_ratio

        if ctx.is_channel:
            momentum = max(0.01, ctx.momentum_ratio)
            cov = _power_law(
                0.0183, (length_ratio, -1.0 / 1.3), (momentum, -2.21 / 1.3)
            )
        else:
            with np.errstate(all="ignore"):
                initial_cov = np.sqrt(ctx.alpha)
                cov = float(
                    2.0
                    * initial_cov
                    * np.exp(-0.75 * np.sqrt(friction_factor) * length_ratio)
                )

        return cov, friction_factor, ctx.available_length


class KenicsKM(MixerCorrelation):
    """Chemineer Kenics KM helical elements."""

    model = MixerModel.KENICS_KM
    notes = (
        "Chemineer recommends the quill terminate at 0.5Dh upstream. "
        "DH calculated for current geometry."
    )

    FRICTION_FACTOR = 1.9
    LENGTH_PER_ELEMENT = 1.5  # [D_h]

    def predict(self, ctx, constants):
        if ctx.injection_type is InjectionType.SINGLE:
            cov = _power_law(
                0.96, (ctx.reynolds, -0.1), (ctx.alpha, 0.03), (ctx.num_elements, -1.9)
            )
        else:
            cov = _power_law(
                0.38, (ctx.reynolds, 0.008), (ctx.alpha, 0.08), (ctx.num_elements, -2.1)
            )
        mixed_length = ctx.num_elements * self.LENGTH_PER_ELEMENT * ctx.hydraulic_diameter
        return cov, self.FRICTION_FACTOR, mixed_length


class HEV(MixerCorrelation):
    """Chemineer HEV high-efficiency vortex tabs."""

    model = MixerModel.HEV
    notes = "HEV tabs work best when injection is centered relative to the DH axis."

    CHANNEL_FRICTION_FACTOR = 0.45
    PIPE_FRICTION_FACTOR = 0.6
    SHORT_MIXER_LD = 3.0

    def predict(self, ctx, constants):
        length_ratio = ctx.length_ratio
        mixed_length = ctx.num_elements * ctx.hydraulic_diameter

        if ctx.is_channel:
            cov = _power_law(
                60.0, (length_ratio, -0.6), (ctx.num_elements, -0.9), (ctx.reynolds, -0.4)
            )
            return cov, self.CHANNEL_FRICTION_FACTOR, mixed_length

        if length_ratio <= self.SHORT_MIXER_LD:
            cov = _power_law(
                31.5, (ctx.reynolds, -0.2), (ctx.alpha, -0.15), (ctx.num_elements, -1.7)
            )
        else:
            cov = _power_law(
                1.1, (ctx.reynolds, -0.04), (ctx.alpha, 0.02), (ctx.num_elements, -1.9)
            )
        return cov, self.PIPE_FRICTION_FACTOR, mixed_length


class SMV(MixerCorrelation):
    """Sulzer SMV corrugated-plate mixer."""

    model = MixerModel.SMV
    notes = (
        "Sulzer SMV is high-performance; initial distribution is critical "
        "for short conduits."
    )

    FRICTION_FACTOR = 10.1

    def predict(self, ctx, constants):
        cov = _power_law(
            0.3, (ctx.reynolds, -0.02), (ctx.alpha, -0.01), (ctx.num_elements, -1.6)
        )
        return cov, self.FRICTION_FACTOR, ctx.num_elements * ctx.hydraulic_diameter


class STM(MixerCorrelation):
    """Statiflo STM, correlated per pitch ratio."""

    model = MixerModel.STM

    # pitch ratio -> (C, L/D exp, n exp, α exp, Re exp, FD)
    CHANNEL_FORMS = {
        PitchRatio.PR_1_125: (2.10e-4, -0.2, -0.3, -0.02, 0.7, 3.0),
        PitchRatio.PR_1_5: (0.29, -0.07, -0.25, 0.1, -0.2, 7.6),
        PitchRatio.PR_2_25: (48.0, -0.2, -0.2, 0.7, -1.1, 1.9),
    }
    # pitch ratio -> (C, Re exp, α exp, n exp, FD); 1.125:1 shares the 2.25:1 form
    PIPE_FORMS = {
        PitchRatio.PR_1_5: (0.29, -0.2, 0.09, -0.6, 4.15),
        PitchRatio.PR_2_25: (0.28, -0.04, 0.10, -2.1, 2.3),
    }
    CHANNEL_LENGTH_PER_ELEMENT = 0.5  # [D_h]
    PIPE_LENGTH_PER_ELEMENT = 0.8  # [D_h]

    def predict(self, ctx, constants):
        if ctx.is_channel:
            c, e_ld, e_n, e_alpha, e_re, friction_factor = self.CHANNEL_FORMS[
                ctx.pitch_ratio
            ]
            cov = _power_law(
                c,
                (ctx.length_ratio, e_ld),
                (ctx.num_elements, e_n),
                (ctx.alpha, e_alpha),
                (ctx.reynolds, e_re),
            )
            per_element = self.CHANNEL_LENGTH_PER_ELEMENT
        else:
            form = self.PIPE_FORMS.get(ctx.pitch_ratio, self.PIPE_FORMS[PitchRatio.PR_2_25])
            c, e_re, e_alpha, e_n, friction_factor = form
            cov = _power_law(
                c, (ctx.reynolds, e_re), (ctx.alpha, e_alpha), (ctx.num_elements, e_n)
            )
            per_element = self.PIPE_LENGTH_PER_ELEMENT

        mixed_length = ctx.num_elements * per_element * ctx.hydraulic_diameter
        return cov, friction_factor, mixed_length


class Baffles(NaturalMixing):
    """DIY channel baffles: no dedicated correlation, no mixing credit."""

    model = MixerModel.BAFFLES


class Weir(NaturalMixing):
    """Overflow weir: natural mixing with a fixed drop."""

    model = MixerModel.WEIR

    def fixed_headloss(self, constants):
        return constants.weir_headloss


CORRELATIONS: Dict[MixerModel, MixerCorrelation] = {
    correlation.model: correlation
    for correlation in (
        NaturalMixing(),
        KenicsKM(),
        HEV(),
        SMV(),
        STM(),
        Baffles(),
        Weir(),
    )
}


def get_correlation(model: MixerModel) -> MixerCorrelation:
    """Correlation registered for ``model``."""
    return CORRELATIONS[model]


def validate_correlations() -> None:
    """
    Validation of the correlation set.

    Tests:
    1. Every mixer model has a correlation
    2. CoV stays clamped for extreme inputs
    3. More Kenics elements always mix better
    4. Zero elements degrade to the worst case rather than failing
    """
    # Test 1: Complete registry
    assert set(CORRELATIONS) == set(MixerModel)

    base = CorrelationContext(
        conduit_type=ConduitType.PIPE,
        injection_type=InjectionType.SINGLE,
        pitch_ratio=PitchRatio.PR_1_5,
        reynolds=6.6e5,
        alpha=7143.0,
        num_elements=4,
        available_length=10.0,
        hydraulic_diameter=0.8,
        momentum_ratio=0.2,
    )

    # Test 2: Clamp for extreme Reynolds numbers
    for model, correlation in CORRELATIONS.items():
        for reynolds in (0.0, 1.0, 1e9):
            ctx = replace(base, reynolds=reynolds)
            result = correlation.evaluate(ctx)
            assert 0.0001 <= result.cov <= 1.0, f"{model}: {result.cov}"

    # Test 3: Kenics monotonic in elements
    kenics = CORRELATIONS[MixerModel.KENICS_KM]
    previous = 2.0
    for n in range(1, 12):
        ctx = replace(base, num_elements=n)
        raw = kenics.evaluate(ctx).raw_cov
        assert raw < previous
        previous = raw

    # Test 4: Zero elements
    ctx = replace(base, num_elements=0)
    assert kenics.evaluate(ctx).cov == 1.0

    print("✓ All correlation validations passed")
