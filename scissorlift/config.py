"""
Config Module - Material and hardware constants.

The calculator is bound to one MechanismConfig at construction. All
dataclasses are frozen: use ``dataclasses.replace`` to build a variant
(another steel, another screw) instead of mutating a shared instance.
All units SI (m, N, Pa) unless the field name says otherwise.
"""

import json
from dataclasses import dataclass, field, fields, asdict
from pathlib import Path
from typing import Union

from .statics import rectangular_moment_of_inertia


@dataclass(frozen=True)
class RodSection:
    """Rectangular flat-bar cross-section of each scissor link."""
    width: float = 0.020      # m
    thickness: float = 0.003  # m

    @property
    def moment_of_inertia(self) -> float:
        """Weak-axis second moment of area (m^4)."""
        return rectangular_moment_of_inertia(self.width, self.thickness)


@dataclass(frozen=True)
class ScrewSpec:
    """Lead screw driving the linear actuator."""
    nominal_diameter: float = 0.010  # m
    pitch: float = 0.002             # m
    mean_diameter: float = 0.009     # m
    friction: float = 0.2            # thread friction coefficient


@dataclass(frozen=True)
class ValidationLimits:
    """Thresholds for advisory warnings. They never block a calculation."""
    elevated_load_kg: float = 50.0
    low_angle_deg: float = 30.0
    high_angle_deg: float = 75.0
    travel_ratio: float = 5.0  # travel / min height


@dataclass(frozen=True)
class MechanismConfig:
    """Process-wide constants for a scissor lift calculation."""

    # Physics
    gravity: float = 9.81               # m/s^2
    elastic_modulus: float = 200e9      # Pa, structural steel (ASTM A36)
    effective_length_factor: float = 1.0  # K, pinned-pinned column
    safety_factor_threshold: float = 3.0  # buckling FS above this is "safe"

    # Hardware
    rod: RodSection = field(default_factory=RodSection)
    screw: ScrewSpec = field(default_factory=ScrewSpec)
    limits: ValidationLimits = field(default_factory=ValidationLimits)

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> "MechanismConfig":
        """
        Build a config from a (possibly partial) nested dict.

        Missing keys keep their defaults; unknown keys raise ValueError.
        """
        nested = {'rod': RodSection, 'screw': ScrewSpec, 'limits': ValidationLimits}
        kwargs = {}
        for key, value in _checked(cls, data).items():
            if key in nested:
                if not isinstance(value, dict):
                    raise ValueError(f"Config section '{key}' must be an object")
                value = nested[key](**{k: float(v) for k, v in _checked(nested[key], value).items()})
            else:
                value = float(value)
            kwargs[key] = value
        return cls(**kwargs)


def _checked(cls, data: dict) -> dict:
    known = {f.name for f in fields(cls)}
    unknown = set(data) - known
    if unknown:
        raise ValueError(f"Unknown {cls.__name__} keys: {', '.join(sorted(unknown))}")
    return data


def load_config(path: Union[str, Path]) -> MechanismConfig:
    """Load a MechanismConfig from a JSON file."""
    with open(path, 'r', encoding='utf-8') as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"Config file {path} must contain a JSON object")
    return MechanismConfig.from_dict(data)
