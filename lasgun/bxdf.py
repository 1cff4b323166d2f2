"""Bidirectional scattering distribution functions used by materials."""

from __future__ import annotations

import enum
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

import numpy as np

from lasgun.diffuse import Lambertian, OrenNayar
from lasgun.fresnel import Substance
from lasgun.microfacet import Distribution, MicrofacetReflection, MicrofacetTransmission
from lasgun.shading import (
    BxDFType,
    LightSample,
    TransportMode,
    cosine_sample_hemisphere,
    hemisphere_pdf,
)
from lasgun.specular import SpecularReflection, SpecularTransmission


class Variant(enum.Enum):
    CONSTANT = enum.auto()
    SPECULAR_REFLECTION = enum.auto()
    SPECULAR_TRANSMISSION = enum.auto()
    QUICK_DIFFUSE = enum.auto()
    DIFFUSE = enum.auto()
    MICROFACET_REFLECTION = enum.auto()
    MICROFACET_TRANSMISSION = enum.auto()


_FLAGS = {
    Variant.CONSTANT: BxDFType.NONE,
    Variant.SPECULAR_REFLECTION: BxDFType.REFLECTION | BxDFType.SPECULAR,
    Variant.SPECULAR_TRANSMISSION: BxDFType.TRANSMISSION | BxDFType.SPECULAR,
    Variant.QUICK_DIFFUSE: BxDFType.REFLECTION | BxDFType.DIFFUSE,
    Variant.DIFFUSE: BxDFType.REFLECTION | BxDFType.DIFFUSE,
    Variant.MICROFACET_REFLECTION: BxDFType.REFLECTION | BxDFType.GLOSSY,
    Variant.MICROFACET_TRANSMISSION: BxDFType.TRANSMISSION | BxDFType.GLOSSY,
}

_SAMPLED = {
    Variant.SPECULAR_REFLECTION,
    Variant.SPECULAR_TRANSMISSION,
    Variant.MICROFACET_REFLECTION,
    Variant.MICROFACET_TRANSMISSION,
}


@dataclass(frozen=True, eq=False)
class BxDF:
    """One scattering model: which kind it is and the model that implements it."""

    variant: Variant
    model: Any

    @classmethod
    def constant(cls, spectrum) -> BxDF:
        """A function that always evaluates to ``spectrum``."""
        return cls(Variant.CONSTANT, np.asarray(spectrum, dtype=float))

    @classmethod
    def specular_reflection(cls, r, substance: Substance) -> BxDF:
        return cls(Variant.SPECULAR_REFLECTION, SpecularReflection(r, substance))

    @classmethod
    def specular_transmission(cls, t, eta_a: float, eta_b: float) -> BxDF:
        return cls(Variant.SPECULAR_TRANSMISSION, SpecularTransmission(t, eta_a, eta_b))

    @classmethod
    def quick_diffuse(cls, r) -> BxDF:
        """Lambertian diffuse reflection."""
        return cls(Variant.QUICK_DIFFUSE, Lambertian(r))

    @classmethod
    def diffuse(cls, r, sigma: float) -> BxDF:
        """Oren-Nayar diffuse reflection with slope spread ``sigma`` in degrees."""
        return cls(Variant.DIFFUSE, OrenNayar(r, sigma))

    @classmethod
    def microfacet_reflection(cls, r, substance: Substance, distribution: Distribution) -> BxDF:
        return cls(
            Variant.MICROFACET_REFLECTION,
            MicrofacetReflection(r, substance, distribution),
        )

    @classmethod
    def microfacet_transmission(
        cls,
        t,
        eta_a: float,
        eta_b: float,
        mode: TransportMode,
        distribution: Distribution,
    ) -> BxDF:
        return cls(
            Variant.MICROFACET_TRANSMISSION,
            MicrofacetTransmission(t, eta_a, eta_b, mode, distribution),
        )

    def kind(self) -> BxDFType:
        """Scattering flags describing this function."""
        return _FLAGS[self.variant]

    def matches(self, flags: BxDFType) -> bool:
        """Whether every flag of this function is among ``flags``."""
        t = self.kind()
        return (t & flags) == t

    def has_t(self, flags: BxDFType) -> bool:
        """Whether this function shares any flag with ``flags``."""
        return (self.kind() & flags) != BxDFType.NONE

    def f(self, wo: Sequence[float], wi: Sequence[float]) -> np.ndarray:
        """Value of the distribution for outgoing ``wo`` and incident ``wi``."""
        if self.variant is Variant.CONSTANT:
            return self.model.copy()
        if self.variant is Variant.QUICK_DIFFUSE:
            return self.model.f()
        if self.variant in (
            Variant.DIFFUSE,
            Variant.MICROFACET_REFLECTION,
            Variant.MICROFACET_TRANSMISSION,
        ):
            return self.model.f(wo, wi)
        # Specular functions only scatter through sampling.
        return np.zeros(3)

    def sample_f(self, wo: Sequence[float], sample: Sequence[float]) -> LightSample:
        """Sample an incident direction for ``wo`` using the point ``sample``."""
        if self.variant in _SAMPLED:
            return self.model.sample_f(wo, sample)
        wi = cosine_sample_hemisphere(sample)
        if float(wo[2]) < 0.0:
            wi[2] *= -1.0
        return LightSample(self.f(wo, wi), wi, hemisphere_pdf(wo, wi))

    def pdf(self, wo: Sequence[float], wi: Sequence[float]) -> float:
        """Probability density of sampling ``wi`` given ``wo``."""
        if self.variant in (Variant.MICROFACET_REFLECTION, Variant.MICROFACET_TRANSMISSION):
            return self.model.pdf(wo, wi)
        if self.variant in (Variant.SPECULAR_REFLECTION, Variant.SPECULAR_TRANSMISSION):
            return 0.0
        return hemisphere_pdf(wo, wi)