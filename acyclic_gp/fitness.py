"""
acyclic_gp/fitness.py - Mean squared error fitness
"""
import numpy as np

from .operators import MAX_FLOAT


def clamp_fitness(value: float) -> float:
    """Map a non-finite fitness to MAX_FLOAT so selection can still compare it"""
    value = float(value)
    if not np.isfinite(value):
        return MAX_FLOAT
    return value


def mean_squared_error(predictions, targets: np.ndarray) -> float:
    """Mean of squared errors, clamped to MAX_FLOAT when non-finite.

    ``predictions`` may be a scalar when the expression is constant; it is
    broadcast against ``targets``. Individual terms may be NaN or infinite,
    which makes the aggregate non-finite and therefore clamped.
    """
    with np.errstate(all='ignore'):
        errors = np.square(np.subtract(predictions, targets))
        total = np.sum(np.broadcast_to(errors, np.shape(targets))) / len(targets)
    return clamp_fitness(total)


def format_number(value: float) -> str:
    """Positional notation with no trailing '.0', e.g. 0.0 -> '0', 1e-07 -> '0.0000001'"""
    return np.format_float_positional(float(value), trim='-')
