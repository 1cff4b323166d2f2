"""Trowbridge-Reitz microfacet distribution and Torrance-Sparrow scattering."""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass, field

import numpy as np

from lasgun.fresnel import Substance
from lasgun.shading import (
    LightSample,
    TransportMode,
    abs_cos_theta,
    cos2_phi,
    cos2_theta,
    cos_phi,
    cos_theta,
    reflect,
    refract,
    same_hemisphere,
    sin2_phi,
    sin_phi,
    tan2_theta,
    tan_theta,
)


def _vec(values: Sequence[float]) -> np.ndarray:
    return np.asarray(values, dtype=float).reshape(3)


def _div(a: float, b: float) -> float:
    """Division that follows IEEE rules instead of raising on a zero divisor."""
    with np.errstate(divide="ignore", invalid="ignore"):
        return float(np.float64(a) / np.float64(b))


def _normalize(v: np.ndarray) -> np.ndarray:
    with np.errstate(divide="ignore", invalid="ignore"):
        return v / np.linalg.norm(v)


def roughness_to_alpha(roughness: float) -> float:
    """Map a perceptual roughness in [0, 1] to a distribution alpha."""
    x = math.log(max(roughness, 1e-3))
    return (
        1.62142
        + 0.819955 * x
        + 0.1734 * x * x
        + 0.0171201 * x * x * x
        + 0.000640711 * x * x * x * x
    )


@dataclass(frozen=True)
class Distribution:
    """Anisotropic Trowbridge-Reitz distribution of microfacet normals."""

    alphax: float
    alphay: float

    def d(self, wh: Sequence[float]) -> float:
        """Differential area of microfacets with normal ``wh``."""
        tan2 = tan2_theta(wh)
        if math.isinf(tan2):
            return 0.0
        cos4 = cos2_theta(wh) * cos2_theta(wh)
        e = (
            cos2_phi(wh) / (self.alphax * self.alphax)
            + sin2_phi(wh) / (self.alphay * self.alphay)
        ) * tan2
        return _div(1.0, math.pi * self.alphax * self.alphay * cos4 * (1.0 + e) * (1.0 + e))

    def g(self, wo: Sequence[float], wi: Sequence[float]) -> float:
        """Fraction of microfacets visible from both ``wo`` and ``wi``."""
        return 1.0 / (1.0 + self.lambda_(wo) + self.lambda_(wi))

    def g1(self, w: Sequence[float]) -> float:
        """Fraction of microfacets visible from direction ``w``."""
        return 1.0 / (1.0 + self.lambda_(w))

    def lambda_(self, w: Sequence[float]) -> float:
        """Ratio of masked to visible microfacet area seen from ``w``."""
        abs_tan = abs(tan_theta(w))
        if math.isinf(abs_tan):
            return 0.0
        alpha = math.sqrt(
            cos2_phi(w) * self.alphax * self.alphax
            + sin2_phi(w) * self.alphay * self.alphay
        )
        alpha2_tan2 = (alpha * abs_tan) * (alpha * abs_tan)
        return (math.sqrt(1.0 + alpha2_tan2) - 1.0) / 2.0

    def pdf(self, wo: Sequence[float], wh: Sequence[float]) -> float:
        """Density of sampling the microfacet normal ``wh`` as seen from ``wo``."""
        cos_wo_wh = abs(float(np.dot(_vec(wo), _vec(wh))))
        return _div(self.d(wh) * self.g1(wo) * cos_wo_wh, abs_cos_theta(wh))

    def sample_wh(self, wo: Sequence[float], sample: Sequence[float]) -> np.ndarray:
        """Sample a visible microfacet normal for the outgoing direction ``wo``."""
        wo = _vec(wo)
        flip = wo[2] < 0.0
        if flip:
            wo = -wo
        wh = trowbridge_reitz_sample(wo, self.alphax, self.alphay, sample[0], sample[1])
        return -wh if flip else wh


@dataclass(eq=False)
class MicrofacetReflection:
    """Glossy reflection off a rough surface of microfacets."""

    r: np.ndarray
    substance: Substance
    distribution: Distribution

    def __post_init__(self) -> None:
        self.r = np.asarray(self.r, dtype=float)

    def f(self, wo: Sequence[float], wi: Sequence[float]) -> np.ndarray:
        wo = _vec(wo)
        wi = _vec(wi)
        cos_theta_o = abs_cos_theta(wo)
        cos_theta_i = abs_cos_theta(wi)
        wh = wi + wo
        if cos_theta_i == 0.0 or cos_theta_o == 0.0:
            return np.zeros(3)
        if not wh.any():
            return np.zeros(3)
        wh = _normalize(wh)
        spectrum = self.substance.evaluate(float(np.dot(wi, wh)))
        scale = self.distribution.d(wh) * self.distribution.g(wo, wi)
        return self.r * scale * spectrum / (4.0 * cos_theta_i * cos_theta_o)

    def sample_f(self, wo: Sequence[float], sample: Sequence[float]) -> LightSample:
        wo = _vec(wo)
        if wo[2] == 0.0:
            return LightSample.zero()
        wh = self.distribution.sample_wh(wo, sample)
        wi = reflect(wo, wh)
        if not same_hemisphere(wo, wi):
            return LightSample(np.zeros(3), wi, 0.0)
        pdf = _div(self.distribution.pdf(wo, wh), 4.0 * float(np.dot(wo, wh)))
        return LightSample(self.f(wo, wi), wi, pdf)

    def pdf(self, wo: Sequence[float], wi: Sequence[float]) -> float:
        if not same_hemisphere(wo, wi):
            return 0.0
        wo = _vec(wo)
        wh = _normalize(wo + _vec(wi))
        return _div(self.distribution.pdf(wo, wh), 4.0 * float(np.dot(wo, wh)))


@dataclass(eq=False)
class MicrofacetTransmission:
    """Glossy transmission through a rough dielectric boundary.

    ``eta_a`` is the index of refraction outside the surface and ``eta_b``
    the index inside it.
    """

    t: np.ndarray
    eta_a: float
    eta_b: float
    mode: TransportMode
    distribution: Distribution
    substance: Substance = field(init=False)

    def __post_init__(self) -> None:
        self.t = np.asarray(self.t, dtype=float)
        self.substance = Substance.dielectric(self.eta_a, self.eta_b)

    def f(self, wo: Sequence[float], wi: Sequence[float]) -> np.ndarray:
        wo = _vec(wo)
        wi = _vec(wi)
        if same_hemisphere(wo, wi):
            return np.zeros(3)

        cos_theta_o = cos_theta(wo)
        cos_theta_i = cos_theta(wi)
        if cos_theta_o == 0.0 or cos_theta_i == 0.0:
            return np.zeros(3)

        eta = self.eta(wo)
        wh = _normalize(wo + wi * eta)
        if wh[2] < 0.0:
            wh = -wh

        fresnel = self.substance.evaluate(float(np.dot(wo, wh)))
        wo_wh = float(np.dot(wo, wh))
        wi_wh = float(np.dot(wi, wh))
        sqrt_denom = wo_wh + eta * wi_wh
        factor = 1.0 / eta if self.mode is TransportMode.RADIANCE else 1.0

        numerator = (
            self.distribution.d(wh)
            * self.distribution.g(wo, wi)
            * eta
            * eta
            * abs(wi_wh)
            * abs(wo_wh)
            * factor
            * factor
        )
        scale = abs(_div(numerator, cos_theta_i * cos_theta_o * sqrt_denom * sqrt_denom))
        return (1.0 - fresnel) * self.t * scale

    def sample_f(self, wo: Sequence[float], sample: Sequence[float]) -> LightSample:
        wo = _vec(wo)
        if wo[2] == 0.0:
            return LightSample.zero()
        wh = self.distribution.sample_wh(wo, sample)
        wi = refract(wo, wh, self.eta(wo))
        if wi is None:
            return LightSample.zero()
        return LightSample(self.f(wo, wi), wi, self.pdf(wo, wi))

    def pdf(self, wo: Sequence[float], wi: Sequence[float]) -> float:
        if same_hemisphere(wo, wi):
            return 0.0
        wo = _vec(wo)
        wi = _vec(wi)
        eta = self.eta(wo)
        wh = _normalize(wo + eta * wi)
        wi_wh = float(np.dot(wi, wh))
        sqrt_denom = float(np.dot(wo, wh)) + eta * wi_wh
        dwh_dwi = abs(_div(eta * eta * wi_wh, sqrt_denom * sqrt_denom))
        return self.distribution.pdf(wo, wh) * dwh_dwi

    def eta(self, wo: Sequence[float]) -> float:
        """Relative index of refraction for the side ``wo`` lies on."""
        if cos_theta(wo) > 0.0:
            return self.eta_b / self.eta_a
        return self.eta_a / self.eta_b


def trowbridge_reitz_sample(
    wi: Sequence[float], alphax: float, alphay: float, u1: float, u2: float
) -> np.ndarray:
    """Sample a visible microfacet normal for ``wi`` in the upper hemisphere."""
    wi = _vec(wi)
    wi = _normalize(np.array([alphax * wi[0], alphay * wi[1], wi[2]]))

    slope_x, slope_y = trowbridge_reitz_sample_11(cos_theta(wi), u1, u2)

    cphi, sphi = cos_phi(wi), sin_phi(wi)
    slope_x, slope_y = cphi * slope_x - sphi * slope_y, sphi * slope_x + cphi * slope_y

    slope_x *= alphax
    slope_y *= alphay

    return _normalize(np.array([-slope_x, -slope_y, 1.0]))


def trowbridge_reitz_sample_11(cos_theta: float, u1: float, u2: float) -> tuple[float, float]:
    """Sample slopes of an isotropic unit-roughness distribution; returns (x, y)."""
    with np.errstate(all="ignore"):
        c = np.float64(cos_theta)
        u1 = np.float64(u1)
        u2 = np.float64(u2)

        if c > 0.9999:
            r = np.sqrt(u1 / (1.0 - u1))
            phi = 6.28318530718 * u2
            return float(r * np.cos(phi)), float(r * np.sin(phi))

        sin_theta = np.sqrt(np.fmax(np.float64(0.0), 1.0 - c * c))
        tan_theta = sin_theta / c
        a = 1.0 / tan_theta
        g1 = 2.0 / (1.0 + np.sqrt(1.0 + 1.0 / (a * a)))

        a = 2.0 * u1 / g1 - 1.0
        tmp = 1.0 / (a * a - 1.0)
        if tmp > 1e10:
            tmp = np.float64(1e10)
        b = tan_theta
        d = np.sqrt(np.fmax(b * b * tmp * tmp - (a * a - b * b) * tmp, 0.0))
        slope_x_1 = b * tmp - d
        slope_x_2 = b * tmp + d
        slope_x = slope_x_1 if (a < 0.0 or slope_x_2 > 1.0 / tan_theta) else slope_x_2

        if u2 > 0.5:
            s, u2 = 1.0, 2.0 * (u2 - 0.5)
        else:
            s, u2 = -1.0, 2.0 * (0.5 - u2)

        z = (u2 * (u2 * (u2 * 0.27385 - 0.73369) + 0.46341)) / (
            u2 * (u2 * (u2 * 0.093073 + 0.309420) - 1.000000) + 0.597999
        )
        slope_y = s * z * np.sqrt(1.0 + slope_x * slope_x)

    return float(slope_x), float(slope_y)