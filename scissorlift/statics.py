"""
Statics Module - Forces, strength of materials, actuator sizing.

All functions are closed-form and take SI units (N, m, rad, Pa).

Free body of one X stage under vertical load P:
    F_act(θ) = P / (2·tanθ)     horizontal actuator force
    F_rod(θ) = P / (4·sinθ)     axial force in each link
Both grow without bound as θ → 0, so the lowest position is critical.
"""

import numpy as np

from .errors import DegenerateAngleError


def actuator_force(P: float, theta: float) -> float:
    """Horizontal force the linear actuator must deliver at angle theta (N)."""
    t = np.tan(theta)
    if t == 0:
        raise DegenerateAngleError("Invalid angle: tangent is zero")
    return float(P / (2 * t))


def rod_force(P: float, theta: float) -> float:
    """Axial compression in each link at angle theta (N)."""
    s = np.sin(theta)
    if s == 0:
        raise DegenerateAngleError("Invalid angle: sine is zero")
    return float(P / (4 * s))


def mechanical_efficiency(P: float, theta: float) -> float:
    """
    Fraction of the actuator force converted to vertical link force.

    η = F_rod·sinθ / F_act. Zero when there is no load to lift.
    """
    f_act = actuator_force(P, theta)
    if f_act == 0:
        return 0.0
    return float(rod_force(P, theta) * np.sin(theta) / f_act)


def rectangular_moment_of_inertia(b: float, t: float) -> float:
    """
    Second moment of area of a b×t rectangle about its weak axis.

    I = width·height³/12 with the smaller dimension as height, so the
    result is the governing (minimum) inertia for buckling.
    """
    width, height = max(b, t), min(b, t)
    return width * height ** 3 / 12


def euler_buckling_load(E: float, I: float, K: float, L: float) -> float:
    """Euler critical load Pcr = π²EI / (KL)² (N)."""
    return float(np.pi ** 2 * E * I / (K * L) ** 2)


def screw_torque(force: float, pitch: float, mu: float, d_m: float) -> float:
    """
    Torque to drive the lead screw against an axial force (N·m).

    T = F·p/2π + μ·d_m/2: mechanical-advantage term plus a constant
    friction term.
    """
    lead_term = force * pitch / (2 * np.pi)
    friction_term = mu * d_m / 2
    return float(lead_term + friction_term)
