"""Fresnel models for the split between reflected and transmitted light."""

from __future__ import annotations

import enum
import math
from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np


class SubstanceKind(enum.Enum):
    DIELECTRIC = enum.auto()
    CONDUCTOR = enum.auto()
    NOOP = enum.auto()


@dataclass(frozen=True, eq=False)
class Substance:
    """A surface's Fresnel model.

    Dielectrics carry two scalar refraction indices, conductors three RGB
    spectra (``eta_i``, ``eta_t``, ``k``); the no-op model reflects everything.
    """

    kind: SubstanceKind
    params: tuple = ()

    @classmethod
    def dielectric(cls, eta_i: float, eta_t: float) -> Substance:
        return cls(SubstanceKind.DIELECTRIC, (float(eta_i), float(eta_t)))

    @classmethod
    def conductor(cls, eta_i, eta_t, k) -> Substance:
        return cls(
            SubstanceKind.CONDUCTOR,
            tuple(np.asarray(c, dtype=float).reshape(3) for c in (eta_i, eta_t, k)),
        )

    @classmethod
    def noop(cls) -> Substance:
        return cls(SubstanceKind.NOOP)

    def evaluate(self, cos_theta_i: float) -> np.ndarray:
        """Reflected fraction of light for the given cosine of incidence."""
        if self.kind is SubstanceKind.DIELECTRIC:
            return np.full(3, fresnel_dielectric(cos_theta_i, *self.params))
        if self.kind is SubstanceKind.CONDUCTOR:
            return fresnel_conductor(cos_theta_i, *self.params)
        return np.ones(3)


def fresnel_dielectric(cos_theta_i: float, eta_i: float, eta_t: float) -> float:
    """Fresnel reflectance of a dielectric boundary for unpolarised light."""
    cos_theta_i = min(max(float(cos_theta_i), -1.0), 1.0)
    if cos_theta_i <= 0.0:
        eta_i, eta_t = eta_t, eta_i
        cos_theta_i = abs(cos_theta_i)

    sin_theta_i = math.sqrt(max(1.0 - cos_theta_i * cos_theta_i, 0.0))
    sin_theta_t = eta_i / eta_t * sin_theta_i
    if sin_theta_t >= 1.0:
        return 1.0  # total internal reflection

    cos_theta_t = math.sqrt(max(1.0 - sin_theta_t * sin_theta_t, 0.0))
    r_parl = (eta_t * cos_theta_i - eta_i * cos_theta_t) / (
        eta_t * cos_theta_i + eta_i * cos_theta_t
    )
    r_perp = (eta_i * cos_theta_i - eta_t * cos_theta_t) / (
        eta_i * cos_theta_i + eta_t * cos_theta_t
    )
    return (r_parl * r_parl + r_perp * r_perp) * 0.5


def fresnel_conductor(
    cos_theta_i: float,
    eta_i: Sequence[float],
    eta_t: Sequence[float],
    k: Sequence[float],
) -> np.ndarray:
    """Per-channel Fresnel reflectance at a conductor boundary."""
    cos_theta_i = min(max(float(cos_theta_i), -1.0), 1.0)
    eta_i = np.asarray(eta_i, dtype=float)
    eta = np.asarray(eta_t, dtype=float) / eta_i
    etak = np.asarray(k, dtype=float) / eta_i

    cos2 = cos_theta_i * cos_theta_i
    sin2 = 1.0 - cos2
    eta2 = eta * eta
    etak2 = etak * etak

    t0 = eta2 - etak2 - sin2
    a2plusb2 = np.sqrt(t0 * t0 + 4.0 * eta2 * etak2)
    t1 = a2plusb2 + cos2
    a = np.sqrt(0.5 * (a2plusb2 + t0))
    t2 = 2.0 * cos_theta_i * a
    rs = (t1 - t2) / (t1 + t2)

    t3 = cos2 * a2plusb2 + sin2 * sin2
    t4 = t2 * sin2
    rp = rs * (t3 - t4) / (t3 + t4)

    return 0.5 * (rp + rs)