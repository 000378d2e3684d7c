"""
Calculator Module - Scissor lift sizing engine.

Ties geometry, statics, and validation together:
1. validate inputs
2. compute the full result set at the travel extremes
3. sweep the travel range for plotting
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional

import numpy as np

from .config import MechanismConfig
from .errors import MechanismError, GeometryError
from .geometry import (MechanismInputs, rod_length, min_angle, angle_at_height,
                       platform_height, horizontal_span)
from .results import MechanismResult, CalculationFailure, CalculationOutcome, GraphSample
from .statics import (actuator_force, rod_force, mechanical_efficiency,
                      euler_buckling_load, screw_torque)
from .validation import ValidationResult, validate_inputs

logger = logging.getLogger(__name__)


@dataclass
class Analysis:
    """Everything one request produces, in evaluation order."""
    inputs: MechanismInputs
    validation: ValidationResult
    result: Optional[CalculationOutcome] = None
    samples: List[GraphSample] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            'inputs': self.inputs.to_dict(),
            'validation': self.validation.to_dict(),
            'results': self.result.to_dict() if self.result is not None else None,
            'graph': [s.to_dict() for s in self.samples],
        }


class MechanismCalculator:
    """
    Sizes a pantographic lift table.

    Stateless apart from the bound config, so one instance can serve
    concurrent requests.

    Usage:
        calc = MechanismCalculator()
        if calc.validate(inputs).is_valid:
            outcome = calc.calculate_all(inputs)
    """

    def __init__(self, config: Optional[MechanismConfig] = None):
        self.config = config if config is not None else MechanismConfig()

    def validate(self, inputs: MechanismInputs) -> ValidationResult:
        return validate_inputs(inputs, self.config.limits)

    def load_force(self, inputs: MechanismInputs) -> float:
        """Weight of the load (N)."""
        return inputs.load_kg * self.config.gravity

    def _rod_length(self, inputs: MechanismInputs) -> float:
        h_max = inputs.max_height_mm / 1000
        return rod_length(h_max, np.radians(inputs.max_angle_deg))

    def calculate_all(self, inputs: MechanismInputs) -> CalculationOutcome:
        """
        Compute geometry, forces, buckling and screw torque.

        Callers should validate first. Domain violations (unreachable or
        negative minimum height, horizontal links) come back as a CalculationFailure;
        no partial results are returned.
        """
        try:
            return self._calculate(inputs)
        except MechanismError as e:
            logger.warning(f"Calculation failed ({e.kind}): {e}")
            return CalculationFailure(kind=e.kind, message=str(e))

    def _calculate(self, inputs: MechanismInputs) -> MechanismResult:
        cfg = self.config

        # SI conversion
        P = self.load_force(inputs)
        h_min = inputs.min_height_mm / 1000
        theta_max = np.radians(inputs.max_angle_deg)

        # Geometry
        L = self._rod_length(inputs)
        theta_min = min_angle(h_min, L)
        if theta_min < 0:
            raise GeometryError(
                f"Invalid configuration: minimum height {inputs.min_height_mm:g} mm puts the "
                f"platform below the base (θmin = {np.degrees(theta_min):.2f}°)")
        if not theta_min < theta_max:
            raise GeometryError(
                f"Invalid configuration: minimum angle {np.degrees(theta_min):.2f}° is not "
                f"below the maximum angle {np.degrees(theta_max):.2f}°")

        # Forces at both extremes; theta_min is the critical case
        f_act_min = actuator_force(P, theta_min)
        f_rod_min = rod_force(P, theta_min)
        f_act_max = actuator_force(P, theta_max)
        f_rod_max = rod_force(P, theta_max)

        # Link buckling
        I = cfg.rod.moment_of_inertia
        P_cr = euler_buckling_load(cfg.elastic_modulus, I, cfg.effective_length_factor, L)
        fs = P_cr / f_rod_min if f_rod_min != 0 else float('inf')

        # Lead screw
        T = screw_torque(f_act_min, cfg.screw.pitch, cfg.screw.friction,
                         cfg.screw.mean_diameter)

        result = MechanismResult(
            rod_length_mm=L * 1000,
            theta_min_deg=float(np.degrees(theta_min)),
            theta_max_deg=inputs.max_angle_deg,
            x_max_mm=horizontal_span(L, theta_max) * 1000,
            actuator_force_min=f_act_min,
            actuator_force_max=f_act_max,
            rod_force_min=f_rod_min,
            rod_force_max=f_rod_max,
            critical_load_kn=P_cr / 1000,
            buckling_safety_factor=fs,
            screw_torque_mnm=T * 1000,
            moment_of_inertia_mm4=I * 1e12,
            efficiency_min=mechanical_efficiency(P, theta_min),
            efficiency_max=mechanical_efficiency(P, theta_max),
            safety_factor_threshold=cfg.safety_factor_threshold,
        )
        logger.debug(f"L={result.rod_length_mm:.1f}mm, θmin={result.theta_min_deg:.2f}°, "
                     f"FS={fs:.2f}")
        return result

    def _sample(self, P: float, L: float, h: float) -> GraphSample:
        theta = angle_at_height(h, L)
        if theta < 0:
            raise GeometryError(f"Sample height {h * 1000:g} mm is below the base")
        return GraphSample(
            height_mm=h * 1000,
            angle_deg=float(np.degrees(theta)),
            actuator_force_n=actuator_force(P, theta),
            rod_force_n=rod_force(P, theta),
            horizontal_distance_mm=horizontal_span(L, theta) * 1000,
            efficiency_pct=mechanical_efficiency(P, theta) * 100,
        )

    def generate_graph_data(self, inputs: MechanismInputs, steps: int = 30) -> List[GraphSample]:
        """
        Sample the travel range at `steps` equally spaced heights, both ends included.

        Returns an empty list if the configuration fails at the extremes or
        at any sample; failures are logged, not raised.
        """
        steps = int(steps)
        if steps < 1:
            return []

        outcome = self.calculate_all(inputs)
        if not outcome.ok:
            return []

        P = self.load_force(inputs)
        L = self._rod_length(inputs)
        h_min = inputs.min_height_mm / 1000
        h_max = inputs.max_height_mm / 1000

        if steps == 1:
            heights = np.array([h_min])
        else:
            heights = np.linspace(h_min, h_max, steps)

        try:
            samples = [self._sample(P, L, float(h)) for h in heights]
        except MechanismError as e:
            logger.warning(f"Graph sweep aborted ({e.kind}): {e}")
            return []

        logger.debug(f"Sampled {len(samples)} points from {h_min * 1000:.1f} "
                     f"to {h_max * 1000:.1f} mm")
        return samples

    def state_at_angle(self, inputs: MechanismInputs, angle_deg: float) -> Optional[GraphSample]:
        """
        Mechanism state at an arbitrary link angle (e.g. an interactive slider).

        Returns None when the rod length cannot be derived or the angle is degenerate.
        """
        try:
            L = self._rod_length(inputs)
            theta = np.radians(angle_deg)
            P = self.load_force(inputs)
            return GraphSample(
                height_mm=platform_height(L, theta) * 1000,
                angle_deg=float(angle_deg),
                actuator_force_n=actuator_force(P, theta),
                rod_force_n=rod_force(P, theta),
                horizontal_distance_mm=horizontal_span(L, theta) * 1000,
                efficiency_pct=mechanical_efficiency(P, theta) * 100,
            )
        except MechanismError as e:
            logger.warning(f"No state at {angle_deg}°: {e}")
            return None

    def analyze(self, inputs: MechanismInputs, steps: int = 30) -> Analysis:
        """Validate, calculate, and sample; stops after validation if inputs are invalid."""
        analysis = Analysis(inputs=inputs, validation=self.validate(inputs))
        if not analysis.validation.is_valid:
            logger.info(f"Inputs rejected: {'; '.join(analysis.validation.errors)}")
            return analysis
        analysis.result = self.calculate_all(inputs)
        if analysis.result.ok:
            analysis.samples = self.generate_graph_data(inputs, steps)
        return analysis
