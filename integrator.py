"""
Lorenz system integration with the basic rectangle rule (forward Euler).
"""

import math
from typing import NamedTuple

# Lorenz parameters
RHO = 28.0
SIGMA = 10.0
BETA = 8 / 3

# Integration range and step
MAX_TIME = 40.0
STEP_SIZE = 0.001

# more samples than this would stall the viewer
MAX_SAMPLES = 2_000_000

# Initial position
INITIAL_POSITION = (1.0, 1.0, 1.0)


class Sample(NamedTuple):
    t: float
    x: float
    y: float
    z: float


class SystemParameters(NamedTuple):
    rho: float = RHO
    sigma: float = SIGMA
    beta: float = BETA
    max_time: float = MAX_TIME
    step_size: float = STEP_SIZE


def integrate(rho, sigma, beta, max_time=MAX_TIME, step_size=STEP_SIZE) -> list[Sample]:
    """Integrate from (1, 1, 1) at t = 0 while t < max_time.

    Each sample is recorded before the step is taken, so the first one is the
    initial condition. Nothing guards against blow-up: unstable parameter or
    step choices run on into inf/nan.
    """
    if not step_size > 0:
        # t would never reach max_time
        raise ValueError(f"step size must be positive, got {step_size}")
    if not math.isfinite(max_time) or max_time / step_size > MAX_SAMPLES:
        # t would never reach max_time, or only after too many samples
        raise ValueError(f"max time {max_time} is not finite or needs more than {MAX_SAMPLES} steps")

    x, y, z = INITIAL_POSITION
    t = 0.0
    dt = step_size

    data = []
    while t < max_time:
        data.append(Sample(t, x, y, z))

        # Derivative
        dx = sigma * (y - x)
        dy = x * (rho - z) - y
        dz = x * y - beta * z

        x += dx * dt
        y += dy * dt
        z += dz * dt
        t += dt

    return data
