"""Perfectly specular reflection and transmission."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

import numpy as np

from lasgun.fresnel import Substance
from lasgun.shading import LightSample, abs_cos_theta, cos_theta, refract

_NORMAL = np.array([0.0, 0.0, 1.0])


@dataclass(eq=False)
class SpecularReflection:
    """Mirror reflection scaled by ``r`` and the substance's Fresnel term."""

    r: np.ndarray
    substance: Substance

    def __post_init__(self) -> None:
        self.r = np.asarray(self.r, dtype=float)

    def sample_f(self, wo: Sequence[float], sample: Sequence[float] = (0.5, 0.5)) -> LightSample:
        """The single mirrored direction; ``sample`` is not used."""
        wi = np.array([-float(wo[0]), -float(wo[1]), float(wo[2])])
        with np.errstate(divide="ignore", invalid="ignore"):
            spectrum = self.substance.evaluate(cos_theta(wi)) * self.r / abs_cos_theta(wi)
        return LightSample(spectrum, wi, 1.0)


@dataclass(eq=False)
class SpecularTransmission:
    """Refraction between media with indices ``eta_a`` (outside) and ``eta_b``."""

    t: np.ndarray
    eta_a: float
    eta_b: float
    substance: Substance = field(init=False)

    def __post_init__(self) -> None:
        self.t = np.asarray(self.t, dtype=float)
        self.substance = Substance.dielectric(self.eta_a, self.eta_b)

    def sample_f(self, wo: Sequence[float], sample: Sequence[float] = (0.5, 0.5)) -> LightSample:
        """The single refracted direction; ``sample`` is not used."""
        entering = cos_theta(wo) > 0.0
        eta_i, eta_t = (self.eta_a, self.eta_b) if entering else (self.eta_b, self.eta_a)

        wi = refract(wo, _NORMAL, eta_i / eta_t)
        if wi is None:
            return LightSample.zero()

        with np.errstate(divide="ignore", invalid="ignore"):
            spectrum = self.t * (1.0 - self.substance.evaluate(cos_theta(wi))) / abs_cos_theta(wi)
        return LightSample(spectrum, wi, 1.0)