"""
Scissor Lift Calculator Package

Sizes a pantographic (scissor) lift table: link geometry, actuator and
link forces across the travel range, Euler buckling check of the links,
and lead-screw torque.

Modules:
- config: Material and hardware constants
- geometry: Inputs and closed-form kinematics
- statics: Force, buckling, and screw formulas
- validation: Input checks and engineering warnings
- calculator: MechanismCalculator (validate, calculate_all, generate_graph_data)
- visualization: Charts and schematic (matplotlib)
- service: HTTP JSON API

Usage:
    from scissorlift import MechanismCalculator, MechanismInputs

    calc = MechanismCalculator()
    inputs = MechanismInputs(load_kg=8, width_mm=200, depth_mm=200,
                             vertical_travel_mm=150, min_height_mm=50,
                             max_angle_deg=60)
    if calc.validate(inputs).is_valid:
        result = calc.calculate_all(inputs)

Or run directly:
    python -m scissorlift --load 8 --travel 150 --min-height 50 --max-angle 60
    python -m scissorlift --serve
"""

__version__ = "1.0.0"

from .errors import MechanismError, InputError, GeometryError, DegenerateAngleError
from .config import MechanismConfig, RodSection, ScrewSpec, ValidationLimits, load_config
from .geometry import MechanismInputs
from .validation import ValidationResult, validate_inputs
from .results import (MechanismResult, CalculationFailure, CalculationOutcome,
                      GraphSample, GraphCurves)
from .calculator import MechanismCalculator, Analysis


def default_inputs() -> MechanismInputs:
    """Reference design: 8 kg on a 200×200 mm platform, 50-200 mm travel, 60° max."""
    return MechanismInputs(load_kg=8.0, width_mm=200.0, depth_mm=200.0,
                           vertical_travel_mm=150.0, min_height_mm=50.0,
                           max_angle_deg=60.0)


__all__ = [
    # Errors
    'MechanismError', 'InputError', 'GeometryError', 'DegenerateAngleError',
    # Config
    'MechanismConfig', 'RodSection', 'ScrewSpec', 'ValidationLimits', 'load_config',
    # Inputs / validation
    'MechanismInputs', 'ValidationResult', 'validate_inputs',
    # Results
    'MechanismResult', 'CalculationFailure', 'CalculationOutcome',
    'GraphSample', 'GraphCurves',
    # Calculator
    'MechanismCalculator', 'Analysis',
    # Convenience
    'default_inputs',
]
