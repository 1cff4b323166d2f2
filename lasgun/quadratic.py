"""Closed-form roots of quadratic polynomials."""

from __future__ import annotations

import math


def quad_roots(a: float, b: float, c: float) -> tuple[float, ...]:
    """Return the real roots of ``a*x**2 + b*x + c``.

    The result holds zero, one (when the polynomial is linear) or two roots.
    A repeated root is returned twice.
    """
    if a == 0.0:
        if b == 0.0:
            return ()
        return (-c / b,)

    discriminant = b * b - 4.0 * a * c
    if discriminant < 0.0:
        return ()

    # Numerically stable form: avoid cancellation between b and sqrt(D).
    q = -(b + math.copysign(1.0, b) * math.sqrt(discriminant)) / 2.0
    q_over_a = q / a
    return (q_over_a, q_over_a if q == 0.0 else c / q)