"""Run the core validation suite: ``python -m blend_simulator.core``."""

from . import run_all_validations

run_all_validations()
