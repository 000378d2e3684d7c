"""
Validation Module - Input checks run before any calculation.

Hard errors block the calculation; warnings are advisory. Every rule is
checked independently so one request reports all of its problems.
"""

import math
from dataclasses import dataclass, field
from typing import List

from .config import ValidationLimits
from .geometry import MechanismInputs


@dataclass
class ValidationResult:
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def to_dict(self) -> dict:
        return {
            'isValid': self.is_valid,
            'errors': list(self.errors),
            'warnings': list(self.warnings),
        }


def _positive(value: float) -> bool:
    return math.isfinite(value) and value > 0


def validate_inputs(inputs: MechanismInputs,
                    limits: ValidationLimits = ValidationLimits()) -> ValidationResult:
    """Check inputs against hard limits and engineering rules of thumb. Never raises."""
    result = ValidationResult()

    if not _positive(inputs.load_kg):
        result.errors.append('Load must be greater than zero')
    if not _positive(inputs.width_mm):
        result.errors.append('Width must be greater than zero')
    if not _positive(inputs.depth_mm):
        result.errors.append('Depth must be greater than zero')
    if not _positive(inputs.vertical_travel_mm):
        result.errors.append('Vertical travel must be greater than zero')
    if not _positive(inputs.min_height_mm):
        result.errors.append('Minimum height must be greater than zero')
    if not (math.isfinite(inputs.max_angle_deg) and 0 < inputs.max_angle_deg < 90):
        result.errors.append('Maximum angle must be between 0 and 90 degrees')

    # Engineering rules of thumb
    if inputs.load_kg > limits.elevated_load_kg:
        result.warnings.append('Elevated load - consider checking the structure')
    if inputs.max_angle_deg < limits.low_angle_deg:
        result.warnings.append('Low maximum angle may result in high forces')
    if inputs.max_angle_deg > limits.high_angle_deg:
        result.warnings.append('High maximum angle may compromise stability')
    if inputs.vertical_travel_mm > inputs.min_height_mm * limits.travel_ratio:
        result.warnings.append('Vertical travel is very large relative to the minimum height')

    return result
