"""
Geometry Module - Pure kinematics, no forces.

Defines the user inputs and the closed-form scissor geometry.

Conventions:
- Each scissor arm is two links of length L pinned at the centre pivot
- theta is the link angle from horizontal
- Platform height h = 2L·sin(theta), base span x = 2L·cos(theta)
- Functions take SI units (m, rad); MechanismInputs holds display units (mm, kg, deg)
"""

import math
from dataclasses import dataclass
from typing import Dict, Mapping

import numpy as np

from .errors import InputError, GeometryError, DegenerateAngleError


# Accepted names per field: attribute, camelCase wire name, original form name
_FIELD_ALIASES = {
    'load_kg': ('load_kg', 'carga'),
    'width_mm': ('width_mm', 'largura'),
    'depth_mm': ('depth_mm', 'profundidade'),
    'vertical_travel_mm': ('vertical_travel_mm', 'verticalTravel_mm', 'movimentoVertical'),
    'min_height_mm': ('min_height_mm', 'minHeight_mm', 'alturaMinima'),
    'max_angle_deg': ('max_angle_deg', 'maxAngle_deg', 'anguloMaximo'),
}


@dataclass(frozen=True)
class MechanismInputs:
    """
    User-supplied design parameters for one calculation request.

    Width and depth describe the platform footprint only; they are
    validated but do not enter the force equations.
    """
    load_kg: float             # Mass to lift
    width_mm: float            # Platform width
    depth_mm: float            # Platform depth
    vertical_travel_mm: float  # Stroke between min and max height
    min_height_mm: float       # Platform height at the lowest position
    max_angle_deg: float       # Link angle at full extension

    @property
    def max_height_mm(self) -> float:
        return self.min_height_mm + self.vertical_travel_mm

    def to_dict(self) -> Dict[str, float]:
        """Wire representation using the camelCase field names."""
        return {
            'load_kg': self.load_kg,
            'width_mm': self.width_mm,
            'depth_mm': self.depth_mm,
            'verticalTravel_mm': self.vertical_travel_mm,
            'minHeight_mm': self.min_height_mm,
            'maxAngle_deg': self.max_angle_deg,
        }

    @classmethod
    def from_dict(cls, data: Mapping) -> "MechanismInputs":
        """
        Parse inputs from a request body or form.

        Every field may be given under any of its aliases. Numeric strings
        are accepted; anything else raises InputError.
        """
        values = {}
        missing = []
        for name, aliases in _FIELD_ALIASES.items():
            key = next((a for a in aliases if a in data), None)
            if key is None:
                missing.append(name)
                continue
            raw = data[key]
            if isinstance(raw, bool):
                raise InputError(f"Field '{key}' must be a number, got {raw!r}")
            try:
                values[name] = float(raw)
            except (TypeError, ValueError):
                raise InputError(f"Field '{key}' must be a number, got {raw!r}") from None
        if missing:
            raise InputError(f"Missing input fields: {', '.join(missing)}")
        return cls(**values)


def rod_length(h_max: float, theta_max: float) -> float:
    """
    Link length from the extended configuration: L = h_max / (2·sin(theta_max)).

    Args:
        h_max: Platform height at full extension (m)
        theta_max: Link angle at full extension (rad)

    Returns:
        Link length (m), always positive
    """
    s = np.sin(theta_max)
    if s == 0:
        raise DegenerateAngleError("Invalid angle: sine of the maximum angle is zero")
    length = h_max / (2 * s)
    if not length > 0:
        raise GeometryError(
            f"Invalid configuration: maximum height {h_max * 1000:.1f} mm "
            f"gives a non-positive rod length")
    return float(length)


def angle_at_height(h: float, L: float) -> float:
    """Link angle (rad) at platform height h: theta = asin(h / 2L)."""
    sin_value = h / (2 * L)
    if sin_value > 1 or sin_value < -1 or math.isnan(sin_value):
        raise GeometryError(
            f"Invalid configuration: height {h * 1000:.1f} mm is unreachable with "
            f"rod length {L * 1000:.1f} mm (h/2L = {sin_value:.3f})")
    return float(np.arcsin(sin_value))


def min_angle(h_min: float, L: float) -> float:
    """Link angle at the lowest position, the critical (highest force) case."""
    return angle_at_height(h_min, L)


def platform_height(L: float, theta: float) -> float:
    """Platform height (m) for link length L at angle theta."""
    return float(2 * L * np.sin(theta))


def horizontal_span(L: float, theta: float) -> float:
    """Horizontal distance between the base pivots (m)."""
    return float(2 * L * np.cos(theta))


def scissor_joints(L: float, theta: float) -> Dict[str, np.ndarray]:
    """
    Pivot positions of a single X stage, origin at the base centre.

    Returns:
        Dict with 'base_left', 'base_right', 'top_left', 'top_right',
        'centre' as (x, y) arrays, in the units of L
    """
    half = L * np.cos(theta)
    height = 2 * L * np.sin(theta)
    return {
        'base_left': np.array([-half, 0.0]),
        'base_right': np.array([half, 0.0]),
        'top_left': np.array([-half, height]),
        'top_right': np.array([half, height]),
        'centre': np.array([0.0, height / 2]),
    }
