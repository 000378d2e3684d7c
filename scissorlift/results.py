"""
Results Module - Output types of the calculator.

calculate_all returns either a MechanismResult or a CalculationFailure;
check ``outcome.ok`` (or isinstance) before reading numeric fields.
"""

from dataclasses import dataclass
from typing import Sequence, Union

import numpy as np


@dataclass(frozen=True)
class MechanismResult:
    """Full result set at the configured extremes (display units)."""
    # Geometry
    rod_length_mm: float
    theta_min_deg: float
    theta_max_deg: float
    x_max_mm: float
    # Forces (N)
    actuator_force_min: float   # at theta_min, critical case
    actuator_force_max: float   # at theta_max
    rod_force_min: float
    rod_force_max: float
    # Strength
    critical_load_kn: float
    buckling_safety_factor: float
    # Actuator
    screw_torque_mnm: float
    # Section
    moment_of_inertia_mm4: float
    # Efficiency (fraction, not %)
    efficiency_min: float
    efficiency_max: float
    safety_factor_threshold: float = 3.0

    ok = True

    @property
    def is_safe(self) -> bool:
        return bool(self.buckling_safety_factor > self.safety_factor_threshold)

    def to_dict(self) -> dict:
        return {
            'L_mm': self.rod_length_mm,
            'thetaMin_deg': self.theta_min_deg,
            'thetaMax_deg': self.theta_max_deg,
            'xMax_mm': self.x_max_mm,
            'F_atuador_min': self.actuator_force_min,
            'F_atuador_max': self.actuator_force_max,
            'F_haste_min': self.rod_force_min,
            'F_haste_max': self.rod_force_max,
            'Pcr_kN': self.critical_load_kn,
            'FSbuckling': self.buckling_safety_factor,
            'T_mNm': self.screw_torque_mnm,
            'I_mm4': self.moment_of_inertia_mm4,
            'isSafe': self.is_safe,
            'efficiency_min': self.efficiency_min,
            'efficiency_max': self.efficiency_max,
        }


@dataclass(frozen=True)
class CalculationFailure:
    """Physically unrealizable configuration; no numeric fields."""
    kind: str     # 'geometry' or 'angle'
    message: str

    ok = False

    def to_dict(self) -> dict:
        return {'error': self.message, 'kind': self.kind}


CalculationOutcome = Union[MechanismResult, CalculationFailure]


@dataclass(frozen=True)
class GraphSample:
    """One point of the travel sweep."""
    height_mm: float
    angle_deg: float
    actuator_force_n: float
    rod_force_n: float
    horizontal_distance_mm: float
    efficiency_pct: float

    def to_dict(self) -> dict:
        return {
            'altura': self.height_mm,
            'angulo': self.angle_deg,
            'forcaAtuador': self.actuator_force_n,
            'forcaHaste': self.rod_force_n,
            'distanciaHorizontal': self.horizontal_distance_mm,
            'eficiencia': self.efficiency_pct,
        }


@dataclass
class GraphCurves:
    """Column view of a sweep, for plotting."""
    height: np.ndarray
    angle: np.ndarray
    actuator_force: np.ndarray
    rod_force: np.ndarray
    horizontal_distance: np.ndarray
    efficiency: np.ndarray

    def __len__(self) -> int:
        return len(self.height)

    @classmethod
    def from_samples(cls, samples: Sequence[GraphSample]) -> "GraphCurves":
        return cls(
            height=np.array([s.height_mm for s in samples], dtype=float),
            angle=np.array([s.angle_deg for s in samples], dtype=float),
            actuator_force=np.array([s.actuator_force_n for s in samples], dtype=float),
            rod_force=np.array([s.rod_force_n for s in samples], dtype=float),
            horizontal_distance=np.array([s.horizontal_distance_mm for s in samples], dtype=float),
            efficiency=np.array([s.efficiency_pct for s in samples], dtype=float),
        )
