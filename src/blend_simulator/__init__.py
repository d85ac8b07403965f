"""
Blend Simulator
===============

In-line chemical injection and blending performance engine.

Subpackages:
- core: Calculation engine and data model
- catalog: Chemical presets and mixer offering

Command line: ``python -m blend_simulator --help``

Date: October 2026
License: MIT
"""

__version__ = "1.0.0"
