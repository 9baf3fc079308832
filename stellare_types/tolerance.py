"""Tolerance constants for floating-point comparisons.

Centralizes the tolerance values used throughout the package so that
approximate comparisons behave the same everywhere.
"""

import math
import numbers

# Relative tolerance for approx_eq and isclose
DEFAULT_REL_TOL: float = 1e-9

# Absolute floor so values near zero can still compare equal
DEFAULT_ABS_TOL: float = 1e-12

# Vectors whose largest absolute component is at or below this are
# degenerate for direction math
ZERO_MAGNITUDE: float = 0.0

# Angular epsilon (radians) used when wrapping angles into a turn
ANGLE_EPSILON: float = 1e-12

# Determinants with absolute value below this make an affine map singular
SINGULAR_DETERMINANT: float = 1e-15


def isclose(
    a: float,
    b: float,
    rel_tol: float = DEFAULT_REL_TOL,
    abs_tol: float = DEFAULT_ABS_TOL,
) -> bool:
    """Compare two numbers with both a relative and an absolute tolerance."""
    return math.isclose(a, b, rel_tol=rel_tol, abs_tol=abs_tol)


def is_finite_number(value: object) -> bool:
    """Check that value is a real number that is neither NaN nor infinite.

    Args:
        value: Value to check.

    Returns:
        True if value is a finite real number.
    """
    if not isinstance(value, numbers.Real):
        return False
    return math.isfinite(value)
