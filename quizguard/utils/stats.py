"""Small numeric helpers shared by the analyzers.

Variance and standard deviation are population statistics (divisor N),
never the sample estimate.
"""

import math
import statistics
from numbers import Real


def is_number(value):
    """True for finite real numbers. Booleans are not numbers here."""
    if isinstance(value, bool) or not isinstance(value, Real):
        return False
    return math.isfinite(value)


def numeric_values(values):
    """Keep only the finite numeric entries of a sequence."""
    if not values or isinstance(values, (str, bytes, dict)):
        return []
    try:
        return [float(v) for v in values if is_number(v)]
    except TypeError:
        return []


def mean(values):
    if not values:
        return 0.0
    return statistics.fmean(values)


def population_variance(values):
    if not values:
        return 0.0
    return statistics.pvariance(values)


def population_stddev(values):
    if not values:
        return 0.0
    return statistics.pstdev(values)


def clamp_score(value, low=0, high=100):
    """Clamp a score into [low, high]."""
    return max(low, min(value, high))


def round_half_up(value):
    """Round to the nearest integer with halves rounded up."""
    return int(math.floor(value + 0.5))


def format_number(value):
    """Render 5.0 as '5' and 5.5 as '5.5' for flag messages."""
    value = float(value)
    return str(int(value)) if value.is_integer() else str(value)
