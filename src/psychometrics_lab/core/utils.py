"""
Core utility functions shared across the lab's modules.
"""

import math

import numpy as np
from numpy.random import Generator


def get_rng(seed: int | None = None) -> Generator:
    """
    Create a numpy random Generator with optional seed.

    Args:
        seed: Random seed for reproducibility. If None, uses entropy.

    Returns:
        A numpy random Generator instance.
    """
    return np.random.default_rng(seed)


def clamp(value: float, lower: float, upper: float) -> float:
    """Clamp a scalar into [lower, upper] and return a plain float."""
    if lower > upper:
        raise ValueError(f"lower ({lower}) must be <= upper ({upper})")
    return float(min(upper, max(lower, value)))


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves going up.

    Python's ``round`` uses banker's rounding, which would send 6.5 to 6
    on a norm scale.
    """
    return int(math.floor(value + 0.5))
