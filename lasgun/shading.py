"""Shading-space trigonometry, scattering flags and hemisphere sampling.

Directions are expressed in a local shading frame in which the surface
normal is ``(0, 0, 1)``. ``theta`` is the angle between a direction and the
normal. ``phi`` is the angle between the x axis and the direction's
projection onto the tangent plane.
"""

from __future__ import annotations

import enum
import math
from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np


def _vec(values: Sequence[float]) -> np.ndarray:
    return np.asarray(values, dtype=float)


def _ieee_div(a: float, b: float) -> float:
    """Divide with IEEE semantics: a zero divisor gives an infinity or NaN."""
    if b != 0.0:
        return a / b
    if a == 0.0 or math.isnan(a):
        return math.nan
    return math.copysign(math.inf, a) * math.copysign(1.0, b)


class BxDFType(enum.Flag):
    """Kinds of scattering a distribution function models."""

    NONE = 0
    REFLECTION = 1 << 0
    TRANSMISSION = 1 << 1
    DIFFUSE = 1 << 2
    GLOSSY = 1 << 3
    SPECULAR = 1 << 4
    ALL = REFLECTION | TRANSMISSION | DIFFUSE | GLOSSY | SPECULAR


class TransportMode(enum.Enum):
    """Quantity carried along a path, for asymmetric scattering."""

    RADIANCE = enum.auto()
    IMPORTANCE = enum.auto()


@dataclass(eq=False)
class LightSample:
    """A sampled incident direction with its spectrum and probability density."""

    spectrum: np.ndarray
    wi: np.ndarray
    pdf: float

    def __post_init__(self) -> None:
        self.spectrum = _vec(self.spectrum)
        self.wi = _vec(self.wi)
        self.pdf = float(self.pdf)

    @classmethod
    def zero(cls) -> LightSample:
        """A sample carrying no light."""
        return cls(np.zeros(3), np.zeros(3), 0.0)


def cos_theta(w: Sequence[float]) -> float:
    return float(w[2])


def cos2_theta(w: Sequence[float]) -> float:
    z = float(w[2])
    return z * z


def abs_cos_theta(w: Sequence[float]) -> float:
    return abs(float(w[2]))


def sin2_theta(w: Sequence[float]) -> float:
    return max(1.0 - cos2_theta(w), 0.0)


def sin_theta(w: Sequence[float]) -> float:
    return math.sqrt(sin2_theta(w))


def tan_theta(w: Sequence[float]) -> float:
    return _ieee_div(sin_theta(w), cos_theta(w))


def tan2_theta(w: Sequence[float]) -> float:
    return _ieee_div(sin2_theta(w), cos2_theta(w))


def cos_phi(w: Sequence[float]) -> float:
    s = sin_theta(w)
    if s == 0.0:
        return 1.0
    return min(max(float(w[0]) / s, -1.0), 1.0)


def sin_phi(w: Sequence[float]) -> float:
    s = sin_theta(w)
    if s == 0.0:
        return 0.0
    return min(max(float(w[1]) / s, -1.0), 1.0)


def cos2_phi(w: Sequence[float]) -> float:
    c = cos_phi(w)
    return c * c


def sin2_phi(w: Sequence[float]) -> float:
    s = sin_phi(w)
    return s * s


def reflect(wo: Sequence[float], n: Sequence[float]) -> np.ndarray:
    """Mirror ``wo`` about the normal ``n``."""
    wo = _vec(wo)
    n = _vec(n)
    return -wo + 2.0 * float(np.dot(wo, n)) * n


def refract(wi: Sequence[float], n: Sequence[float], eta: float) -> np.ndarray | None:
    """Refract ``wi`` through a surface with normal ``n`` and relative index ``eta``.

    Returns ``None`` on total internal reflection.
    """
    wi = _vec(wi)
    n = _vec(n)
    cos_theta_i = float(np.dot(n, wi))
    sin2_theta_i = max(1.0 - cos_theta_i * cos_theta_i, 0.0)
    sin2_theta_t = eta * eta * sin2_theta_i
    if sin2_theta_t >= 1.0:
        return None
    cos_theta_t = math.sqrt(1.0 - sin2_theta_t)
    return -eta * wi + (eta * cos_theta_i - cos_theta_t) * n


def same_hemisphere(w: Sequence[float], wp: Sequence[float]) -> bool:
    return float(w[2]) * float(wp[2]) > 0.0


def hemisphere_pdf(wo: Sequence[float], wi: Sequence[float]) -> float:
    """Density of cosine-weighted hemisphere sampling, zero across the surface."""
    if same_hemisphere(wo, wi):
        return abs_cos_theta(wi) / math.pi
    return 0.0


def concentric_sample_disk(u: Sequence[float]) -> np.ndarray:
    """Map a point of the unit square onto the unit disk, preserving area."""
    ox, oy = 2.0 * _vec(u) - 1.0
    if ox == 0.0 and oy == 0.0:
        return np.zeros(2)
    if abs(ox) > abs(oy):
        r, theta = ox, math.pi / 4.0 * (oy / ox)
    else:
        r, theta = oy, math.pi / 2.0 - math.pi / 4.0 * (ox / oy)
    return r * np.array([math.cos(theta), math.sin(theta)])


def cosine_sample_hemisphere(u: Sequence[float]) -> np.ndarray:
    """Lift a disk sample onto the upper unit hemisphere."""
    dx, dy = concentric_sample_disk(u)
    z = math.sqrt(max(1.0 - dx * dx - dy * dy, 0.0))
    return np.array([dx, dy, z])