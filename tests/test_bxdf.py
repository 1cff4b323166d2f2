import math

import numpy as np
import pytest

from lasgun.bxdf import BxDF
from lasgun.diffuse import Lambertian
from lasgun.fresnel import Substance
from lasgun.microfacet import Distribution, MicrofacetReflection, MicrofacetTransmission
from lasgun.shading import BxDFType, TransportMode, hemisphere_pdf


def unit(x, y, z):
    v = np.array([x, y, z], dtype=float)
    return v / np.linalg.norm(v)


R = [0.8, 0.5, 0.2]
DIST = Distribution(0.3, 0.3)


@pytest.mark.parametrize(
    "bxdf, flags",
    [
        (BxDF.constant(R), BxDFType.NONE),
        (BxDF.specular_reflection(R, Substance.noop()), BxDFType.REFLECTION | BxDFType.SPECULAR),
        (BxDF.specular_transmission(R, 1.0, 1.5), BxDFType.TRANSMISSION | BxDFType.SPECULAR),
        (BxDF.quick_diffuse(R), BxDFType.REFLECTION | BxDFType.DIFFUSE),
        (BxDF.diffuse(R, 20.0), BxDFType.REFLECTION | BxDFType.DIFFUSE),
        (
            BxDF.microfacet_reflection(R, Substance.noop(), DIST),
            BxDFType.REFLECTION | BxDFType.GLOSSY,
        ),
        (
            BxDF.microfacet_transmission(R, 1.0, 1.5, TransportMode.RADIANCE, DIST),
            BxDFType.TRANSMISSION | BxDFType.GLOSSY,
        ),
    ],
)
def test_kind_flags(bxdf, flags):
    assert bxdf.kind() == flags
    assert bxdf.matches(BxDFType.ALL)


def test_matches_and_has_t():
    d = BxDF.quick_diffuse(R)
    assert not d.matches(BxDFType.REFLECTION)
    assert d.matches(BxDFType.REFLECTION | BxDFType.DIFFUSE)
    assert d.has_t(BxDFType.DIFFUSE)
    assert not d.has_t(BxDFType.TRANSMISSION | BxDFType.SPECULAR)


def test_constant_f_returns_spectrum():
    c = BxDF.constant(R)
    assert np.allclose(c.f(unit(0, 0, 1), unit(1, 0, 1)), R)


def test_quick_diffuse_matches_lambertian():
    d = BxDF.quick_diffuse(R)
    assert np.allclose(d.f(unit(0, 1, 1), unit(1, 0, 1)), Lambertian(R).f())


def test_diffuse_with_zero_sigma_is_lambertian():
    d = BxDF.diffuse(R, 0.0)
    assert np.allclose(d.f(unit(0.3, 0.1, 0.9), unit(-0.2, 0.4, 0.7)), np.array(R) / math.pi)


def test_specular_f_and_pdf_are_zero():
    s = BxDF.specular_reflection(R, Substance.noop())
    wo, wi = unit(0.1, 0.2, 0.9), unit(-0.1, -0.2, 0.9)
    assert np.array_equal(s.f(wo, wi), np.zeros(3))
    assert s.pdf(wo, wi) == 0.0
    t = BxDF.specular_transmission(R, 1.0, 1.5)
    assert t.pdf(wo, -wi) == 0.0


def test_specular_reflection_sample_mirrors():
    s = BxDF.specular_reflection(R, Substance.noop())
    wo = unit(0.3, 0.2, 0.8)
    sample = s.sample_f(wo, (0.5, 0.5))
    assert np.allclose(sample.wi, [-wo[0], -wo[1], wo[2]])
    assert sample.pdf == 1.0
    assert np.allclose(sample.spectrum, np.array(R) / wo[2])


def test_diffuse_sample_follows_wo_hemisphere():
    d = BxDF.quick_diffuse(R)
    for wo in (unit(0.2, 0.1, 0.9), unit(0.2, 0.1, -0.9)):
        s = d.sample_f(wo, (0.3, 0.7))
        assert np.sign(s.wi[2]) == np.sign(wo[2])
        assert np.linalg.norm(s.wi) == pytest.approx(1.0)
        assert s.pdf == pytest.approx(hemisphere_pdf(wo, s.wi))
        assert np.allclose(s.spectrum, d.f(wo, s.wi))


def test_diffuse_pdf_zero_across_surface():
    d = BxDF.diffuse(R, 10.0)
    assert d.pdf(unit(0, 0, 1), unit(0, 0, -1)) == 0.0
    assert d.pdf(unit(0, 0, 1), unit(0, 0, 1)) == pytest.approx(1.0 / math.pi)


def test_microfacet_reflection_delegates():
    substance = Substance.dielectric(1.0, 1.5)
    b = BxDF.microfacet_reflection(R, substance, DIST)
    m = MicrofacetReflection(R, substance, DIST)
    wo, wi = unit(0.3, 0.1, 0.8), unit(-0.2, 0.3, 0.7)
    assert np.allclose(b.f(wo, wi), m.f(wo, wi))
    assert b.pdf(wo, wi) == pytest.approx(m.pdf(wo, wi))
    s1, s2 = b.sample_f(wo, (0.4, 0.6)), m.sample_f(wo, (0.4, 0.6))
    assert np.allclose(s1.wi, s2.wi)
    assert s1.pdf == pytest.approx(s2.pdf)


def test_microfacet_transmission_delegates():
    b = BxDF.microfacet_transmission(R, 1.0, 1.5, TransportMode.RADIANCE, DIST)
    m = MicrofacetTransmission(R, 1.0, 1.5, TransportMode.RADIANCE, DIST)
    wo, wi = unit(0.2, 0.0, 0.9), unit(-0.1, 0.05, -0.9)
    assert np.allclose(b.f(wo, wi), m.f(wo, wi))
    assert b.pdf(wo, wi) == pytest.approx(m.pdf(wo, wi))
    assert b.pdf(wo, wi) > 0.0