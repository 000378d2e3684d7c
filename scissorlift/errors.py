"""
Errors Module - Exceptions raised by the calculation engine.

Domain errors carry a short ``kind`` tag so the calculator can turn them
into a CalculationFailure without inspecting the message.
"""


class MechanismError(ValueError):
    """Base class for all engine errors."""
    kind = "mechanism"


class InputError(MechanismError):
    """Raw input could not be parsed into MechanismInputs."""
    kind = "input"


class GeometryError(MechanismError):
    """Requested heights are unreachable with the derived rod length."""
    kind = "geometry"


class DegenerateAngleError(MechanismError):
    """Rod angle makes a force formula divide by zero (horizontal rod)."""
    kind = "angle"
