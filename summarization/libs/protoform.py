"""
Fuzzy membership and quantification library for linguistic protoforms.

A protoform such as "Q of X are P" is evaluated in two steps:
    1. A membership function grades how well each element of X satisfies P.
    2. A sigma-count quantifier affirmation aggregates the grades into the
       fraction of X satisfying P, optionally passed through a quantifier Q.

Membership Family (trapezoid):
    - trapmf(a, b, c, d): rises on [a, b], plateau on [b, c], falls on [c, d]
    - trapmf_l(a, b): left shoulder, 1 up to a, falls to 0 at b
    - trapmf_r(a, b): right shoulder, 0 up to a, rises to 1 at b

Every membership function returns a degree clamped to [0, 1] for any real
input, including infinities. NaN or non-numeric input raises InvalidInputError.

Usage:
    from summarization.libs.protoform import trapmf_l, sigma_count_qa

    small_change = trapmf_l(0.1, 0.3)
    degree = sigma_count_qa(changes, small_change)
"""

import math
from typing import Any, Callable, Iterable, Optional, Sequence

from summarization.core.exceptions import InvalidInputError
from summarization.models.enums import TrapezoidShape


MembershipFunction = Callable[[float], float]


# =============================================================================
# Input Validation
# =============================================================================


def _to_number(value: Any) -> float:
    if isinstance(value, bool):
        raise InvalidInputError(f"Membership input must be numeric, got {value!r}")
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise InvalidInputError(f"Membership input must be numeric, got {value!r}")
    if math.isnan(number):
        raise InvalidInputError("Membership input must not be NaN")
    return number


def _check_breakpoints(breakpoints: Sequence[float]) -> Sequence[float]:
    numbers = [_to_number(value) for value in breakpoints]
    if any(math.isinf(number) for number in numbers):
        raise InvalidInputError(f"Breakpoints must be finite, got {breakpoints}")
    if any(left > right for left, right in zip(numbers, numbers[1:])):
        raise InvalidInputError(f"Breakpoints must be non-decreasing, got {breakpoints}")
    return numbers


def _clamp(degree: float) -> float:
    return min(1.0, max(0.0, degree))


# =============================================================================
# Trapezoid Membership Functions
# =============================================================================


def trapmf(a: float, b: float, c: float, d: float) -> MembershipFunction:
    """
    Symmetric trapezoid membership function.

    Args:
        a: Left foot; degree 0 below.
        b: Left shoulder; degree 1 from here.
        c: Right shoulder; degree 1 up to here.
        d: Right foot; degree 0 above.

    Returns:
        Function mapping a value to its degree in [0, 1].

    Raises:
        InvalidInputError: If breakpoints are not finite and non-decreasing.

    Example:
        >>> about_ten = trapmf(5, 9, 11, 15)
        >>> about_ten(7)
        0.5
    """
    a, b, c, d = _check_breakpoints([a, b, c, d])

    def membership(value: float) -> float:
        x = _to_number(value)
        if x < a or x > d:
            return 0.0
        if b <= x <= c:
            return 1.0
        if x < b:
            return _clamp((x - a) / (b - a))
        return _clamp((d - x) / (d - c))

    return membership


def trapmf_l(a: float, b: float) -> MembershipFunction:
    """
    Left-shoulder membership function: 1 below `a`, linearly down to 0 at `b`.

    Example:
        >>> low = trapmf_l(0.1, 0.3)
        >>> low(0.05), low(0.2), low(0.5)
        (1.0, 0.5, 0.0)
    """
    a, b = _check_breakpoints([a, b])

    def membership(value: float) -> float:
        x = _to_number(value)
        if x <= a:
            return 1.0
        if x >= b:
            return 0.0
        return _clamp((b - x) / (b - a))

    return membership


def trapmf_r(a: float, b: float) -> MembershipFunction:
    """
    Right-shoulder membership function: 0 below `a`, linearly up to 1 at `b`.

    Mirror image of trapmf_l.
    """
    a, b = _check_breakpoints([a, b])

    def membership(value: float) -> float:
        x = _to_number(value)
        if x <= a:
            return 0.0
        if x >= b:
            return 1.0
        return _clamp((x - a) / (b - a))

    return membership


def trapezoid(
    breakpoints: Sequence[float],
    shape: TrapezoidShape = TrapezoidShape.SYMMETRIC,
) -> MembershipFunction:
    """
    Build a trapezoid-family membership function from its breakpoints.

    Args:
        breakpoints: Four values for SYMMETRIC, two for the shoulder shapes.
        shape: Which member of the family to build.

    Raises:
        InvalidInputError: If the breakpoint count does not match the shape
            or the breakpoints are invalid.
    """
    breakpoints = list(breakpoints)
    expected = 4 if shape == TrapezoidShape.SYMMETRIC else 2

    if len(breakpoints) != expected:
        raise InvalidInputError(
            f"{shape.value} trapezoid takes {expected} breakpoints, got {len(breakpoints)}"
        )

    if shape == TrapezoidShape.SYMMETRIC:
        return trapmf(*breakpoints)
    elif shape == TrapezoidShape.LEFT_SHOULDER:
        return trapmf_l(*breakpoints)
    elif shape == TrapezoidShape.RIGHT_SHOULDER:
        return trapmf_r(*breakpoints)

    raise InvalidInputError(f"Unknown trapezoid shape: {shape}")


# =============================================================================
# Quantifier Affirmation
# =============================================================================


def sigma_count_qa(
    points: Iterable[Any],
    membership_fn: Callable[[Any], float],
    quantifier: Optional[MembershipFunction] = None,
) -> float:
    """
    Sigma-count quantifier affirmation.

    Computes the fuzzy cardinality of `points` under `membership_fn` divided by
    the number of points, i.e. the fraction of points satisfying the predicate.
    When a `quantifier` (e.g. "most" as trapmf_r(0.5, 0.85)) is given, the
    fraction is passed through it.

    Args:
        points: Elements to grade. Any type accepted by `membership_fn`.
        membership_fn: Grades a single element in [0, 1].
        quantifier: Optional membership function over the fraction.

    Returns:
        Degree in [0, 1]. An empty input yields 0.0.

    Example:
        >>> high = trapmf_r(10, 20)
        >>> sigma_count_qa([5, 15, 25, 30], high)
        0.625
    """
    points = list(points)
    if not points:
        return 0.0

    total = sum(_clamp(membership_fn(point)) for point in points)
    proportion = total / len(points)

    if quantifier is not None:
        return _clamp(quantifier(proportion))
    return _clamp(proportion)
