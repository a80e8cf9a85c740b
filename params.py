"""
Parse the text typed into the parameter fields.

parse_rational('2.5') == 2.5
parse_rational('5/2') == 2.5
parse_rational('1/2/3') is nan
"""

import math

from integrator import MAX_SAMPLES, SystemParameters

# field name -> label shown next to it
FIELDS = {
    "rho": "rho",
    "sigma": "sigma",
    "beta": "beta",
    "max_time": "max t",
    "step_size": "dt",
}

DEFAULT_FIELDS = {
    "rho": "28",
    "sigma": "10",
    "beta": "8/3",
    "max_time": "40",
    "step_size": "0.001",
}


class ParameterError(ValueError):
    """Raised when one or more parameter fields don't hold a valid number."""

    def __init__(self, invalid: list[str], message: str = "") -> None:
        self.invalid = invalid
        if not message:
            names = ", ".join(FIELDS.get(name, name) for name in invalid)
            message = f"Invalid input for {names}. Use numbers or fractions like 8/3."
        super().__init__(message)


def _parse_number(text: str) -> float:
    try:
        return float(text)
    except ValueError:
        return math.nan


def parse_rational(text: str) -> float:
    """Parse a number or a single fraction; returns nan when the text isn't one."""
    parts = text.split("/")
    if len(parts) == 1:
        return _parse_number(text)
    if len(parts) != 2:
        return math.nan

    numerator = _parse_number(parts[0])
    denominator = _parse_number(parts[1])
    if denominator != 0.0 or math.isnan(denominator):
        return numerator / denominator
    if numerator == 0.0 or math.isnan(numerator):
        return math.nan
    return math.copysign(math.inf, numerator) * math.copysign(1.0, denominator)


def parse_parameters(fields: dict) -> SystemParameters:
    """Build SystemParameters from the text fields, or raise ParameterError."""
    values = {name: parse_rational(fields.get(name, "")) for name in FIELDS}
    invalid = [name for name, value in values.items() if math.isnan(value)]
    if invalid:
        raise ParameterError(invalid)
    if not values["step_size"] > 0:
        raise ParameterError(["step_size"], "The step size dt must be positive.")
    max_time = values["max_time"]
    if not math.isfinite(max_time) or max_time / values["step_size"] > MAX_SAMPLES:
        raise ParameterError(
            ["max_time"],
            f"max t must be finite and at most {MAX_SAMPLES} steps of dt.",
        )
    return SystemParameters(**values)
