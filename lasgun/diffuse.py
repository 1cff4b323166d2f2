"""Diffuse reflection models."""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass, field

import numpy as np

from lasgun.shading import abs_cos_theta, cos_phi, sin_phi, sin_theta


@dataclass(eq=False)
class Lambertian:
    """Ideal diffuse reflector with reflection spectrum ``r``."""

    r: np.ndarray

    def __post_init__(self) -> None:
        self.r = np.asarray(self.r, dtype=float)

    def f(self) -> np.ndarray:
        return self.r / math.pi

    def rho(self) -> np.ndarray:
        return self.r


@dataclass(eq=False)
class OrenNayar:
    """Rough diffuse reflector; ``sigma`` is the facet slope spread in degrees."""

    r: np.ndarray
    sigma: float
    a: float = field(init=False)
    b: float = field(init=False)

    def __post_init__(self) -> None:
        self.r = np.asarray(self.r, dtype=float)
        sigma = math.radians(self.sigma)
        sigma2 = sigma * sigma
        self.a = 1.0 - (sigma2 / 2.0 * (sigma2 + 0.33))
        self.b = 0.45 * sigma2 / (sigma2 + 0.09)

    def f(self, wo: Sequence[float], wi: Sequence[float]) -> np.ndarray:
        sin_theta_i = sin_theta(wi)
        sin_theta_o = sin_theta(wo)

        max_cos = 0.0
        if sin_theta_i > 1e-4 and sin_theta_o > 1e-4:
            d_cos = cos_phi(wi) * cos_phi(wo) + sin_phi(wi) * sin_phi(wo)
            max_cos = max(d_cos, 0.0)

        if abs_cos_theta(wi) > abs_cos_theta(wo):
            sin_alpha = sin_theta_o
            tan_beta = sin_theta_i / abs_cos_theta(wi)
        else:
            sin_alpha = sin_theta_i
            denominator = abs_cos_theta(wo)
            tan_beta = sin_theta_o / denominator if denominator else (
                0.0 if sin_theta_o == 0.0 else math.inf
            )

        shading = self.b * max_cos * sin_alpha * tan_beta if max_cos else 0.0
        return self.r / math.pi * (self.a + shading)