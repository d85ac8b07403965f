"""
Blending Design Evaluator
=========================

Command-line entry point: evaluate one injection and mixing design and
report blending performance, headloss and compliance.

Exit codes:
    0  design is compliant
    1  design is not compliant
    2  invalid input

Date: October 2026
"""

import argparse
import json
import logging
import sys
from dataclasses import asdict
from typing import Any, Dict, List, Optional

from .core import (
    BlendingEngine,
    CalculationResults,
    ConduitShape,
    ConduitType,
    InjectionType,
    MixerModel,
    MixingInputs,
    PitchRatio,
    performance_profile,
)
from .catalog import CHEMICAL_PRESETS, apply_preset, is_offered, mixer_label

logger = logging.getLogger(__name__)

EXIT_COMPLIANT = 0
EXIT_NOT_COMPLIANT = 1
EXIT_INVALID_INPUT = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="blend_simulator",
        description="In-line chemical injection & blending performance",
    )
    parser.add_argument(
        "--input", type=str, help="JSON file with MixingInputs fields"
    )
    parser.add_argument(
        "--preset",
        choices=sorted(CHEMICAL_PRESETS),
        help="Chemical preset (sets name, density, viscosity)",
    )
    parser.add_argument(
        "--slurry", type=float, help="Lime slurry concentration [%% w/w]"
    )
    parser.add_argument(
        "--conduit", choices=[m.value for m in ConduitType], help="Conduit type"
    )
    parser.add_argument(
        "--shape", choices=[m.value for m in ConduitShape], help="Cross-section shape"
    )
    parser.add_argument("--dimension", type=float, help="Diameter or width [m]")
    parser.add_argument("--flow", type=float, help="Bulk flow rate [m³/h]")
    parser.add_argument(
        "--mixer", choices=[m.value for m in MixerModel], help="Mixing device"
    )
    parser.add_argument("--elements", type=float, help="Number of mixer elements")
    parser.add_argument(
        "--injection", choices=[m.value for m in InjectionType], help="Quill layout"
    )
    parser.add_argument(
        "--pitch", choices=[m.value for m in PitchRatio], help="STM pitch ratio"
    )
    parser.add_argument(
        "--json", action="store_true", help="Print results as JSON on stdout"
    )
    parser.add_argument(
        "--profile", action="store_true", help="Include the performance curve"
    )
    parser.add_argument(
        "--verbose", action="store_true", help="Log engine stage details"
    )
    return parser


def load_inputs(args: argparse.Namespace) -> MixingInputs:
    """
    Assemble inputs from the JSON file, preset and overrides, in that order.

    Raises:
        OSError: If the input file cannot be read
        ValueError: If the JSON or a field value is invalid
        TypeError: If the JSON has unknown fields
    """
    if args.input:
        with open(args.input, "r", encoding="utf-8") as fh:
            data = json.load(fh)
        if not isinstance(data, dict):
            raise ValueError(f"{args.input}: expected a JSON object")
        inputs = MixingInputs.from_dict(data)
    else:
        inputs = MixingInputs()

    if args.preset:
        inputs = apply_preset(inputs, args.preset, args.slurry)
    elif args.slurry is not None:
        inputs = inputs.with_changes(slurry_concentration=args.slurry)

    overrides: Dict[str, Any] = {
        "conduit_type": args.conduit,
        "conduit_shape": args.shape,
        "dimension": args.dimension,
        "flow_rate": args.flow,
        "mixer_model": args.mixer,
        "num_elements": args.elements,
        "injection_type": args.injection,
        "pitch_ratio": args.pitch,
    }
    changes = {key: value for key, value in overrides.items() if value is not None}
    if changes:
        inputs = MixingInputs.from_dict({**inputs.to_dict(), **changes})

    # Channels are always rectangular
    if inputs.conduit_type is ConduitType.CHANNEL:
        inputs = inputs.with_changes(conduit_shape=ConduitShape.RECTANGULAR)

    return inputs


def log_report(inputs: MixingInputs, results: CalculationResults) -> None:
    """Human-readable summary on the logger."""
    logger.info("=" * 70)
    logger.info(
        f"{inputs.conduit_type.value} {inputs.conduit_shape.value} "
        f"{inputs.dimension:.3f} m | {inputs.flow_rate:.1f} m³/h | "
        f"{mixer_label(inputs.conduit_type, inputs.mixer_model)}"
    )
    logger.info(
        f"Chemical: {inputs.chemical_type} | dose {inputs.chemical_dose:g} mg/L | "
        f"{results.total_injection_flow:.1f} L/h injected"
    )
    logger.info("=" * 70)

    logger.info(
        f"Hydraulics: v={results.velocity:.3f} m/s | Re={results.reynolds_number:.3e} | "
        f"Dh={results.hydraulic_diameter:.3f} m | A={results.wetted_area:.4f} m²"
    )
    logger.info(
        f"Injection: rho={results.injected_density:.1f} kg/m³ | "
        f"mu={results.injected_viscosity:.5f} Pa·s | "
        f"viscosity ratio={results.viscosity_ratio:.2f}"
    )
    logger.info(
        f"Momentum: R={results.momentum_ratio:.3f} ({results.momentum_regime.value}) | "
        f"suggested orifice={results.suggested_orifice_diameter:.1f} mm"
    )
    logger.info(
        f"Blending: CoV={results.mixer_cov:.4f} (target {inputs.target_cov:g}) | "
        f"distance={results.mixing_distance_needed:.2f} m | "
        f"time={results.mixing_time_needed:.2f} s"
    )
    logger.info(
        f"Energy: headloss={results.headloss:.3f} kPa ({results.headloss_meters:.3f} m) | "
        f"G={results.g_value:.0f} 1/s"
    )
    if inputs.is_lime:
        logger.info(
            f"Lime: saturation={results.lime_saturation_limit:.0f} mg/L | "
            f"dissolved={results.dissolved_at_target:.1f}% | "
            f"95% at {results.distance_to_95_dissolution:.2f} m"
        )
    logger.info(f"Notes: {results.manufacturer_notes}")

    verdict = "✓ COMPLIANT" if results.is_compliant else "✗ NOT COMPLIANT"
    timing = "within" if results.is_time_compliant else "exceeds"
    logger.info(f"{verdict} (mixing time {timing} {inputs.target_mixing_time:g} s target)")


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    logging.captureWarnings(True)

    try:
        inputs = load_inputs(args)
        inputs.validate()
    except (OSError, TypeError, ValueError) as e:
        logger.error(f"Invalid input: {e}")
        return EXIT_INVALID_INPUT

    if not is_offered(inputs.conduit_type, inputs.mixer_model):
        logger.warning(
            f"{inputs.mixer_model.value} is not offered for "
            f"{inputs.conduit_type.value.lower()}s; evaluating anyway"
        )

    results = BlendingEngine().evaluate(inputs)

    if args.json:
        payload: Dict[str, Any] = {
            "inputs": inputs.to_dict(),
            "results": results.to_dict(),
        }
        if args.profile:
            payload["profile"] = [asdict(p) for p in performance_profile(inputs, results)]
        print(json.dumps(payload, indent=2))
    else:
        log_report(inputs, results)
        if args.profile:
            for point in performance_profile(inputs, results):
                dissolution = f" | dissolved {point.dissolution:5.1f}%" if inputs.is_lime else ""
                logger.info(
                    f"x={point.distance:7.2f} m | CoV={point.cov:.4f}{dissolution}"
                )

    return EXIT_COMPLIANT if results.is_compliant else EXIT_NOT_COMPLIANT


if __name__ == "__main__":
    sys.exit(main())
