import math

import numpy as np
import pytest

from lasgun.diffuse import Lambertian, OrenNayar


def unit(x, y, z):
    v = np.array([x, y, z], dtype=float)
    return v / np.linalg.norm(v)


R = [0.8, 0.5, 0.2]


def test_lambertian_rho_is_reflectance():
    assert np.allclose(Lambertian(R).rho(), R)


def test_lambertian_f_integrates_to_rho():
    assert np.allclose(Lambertian(R).f() * math.pi, R)


def test_oren_nayar_smooth_matches_lambertian():
    model = OrenNayar(R, 0.0)
    assert model.a == 1.0
    assert model.b == 0.0
    wo, wi = unit(0.3, 0.2, 0.9), unit(-0.4, 0.1, 0.6)
    assert np.allclose(model.f(wo, wi), Lambertian(R).f())


@pytest.mark.parametrize(
    "wo,wi",
    [
        (unit(0.3, 0.2, 0.9), unit(0.4, 0.1, 0.6)),
        (unit(0.7, -0.2, 0.3), unit(0.1, 0.5, 0.8)),
        (unit(0.5, 0.5, 0.5), unit(0.6, 0.4, 0.2)),
    ],
)
def test_oren_nayar_is_reciprocal(wo, wi):
    model = OrenNayar(R, 20.0)
    assert np.allclose(model.f(wo, wi), model.f(wi, wo))


def test_oren_nayar_opposed_azimuths_use_base_term():
    model = OrenNayar(R, 20.0)
    wo = unit(1.0, 0.0, 1.0)
    first = model.f(wo, unit(-1.0, 0.0, 0.5))
    second = model.f(wo, unit(0.0, 1.0, 2.0))
    assert np.allclose(first, second)
    assert np.allclose(first, np.asarray(R) / math.pi * model.a)


def test_oren_nayar_rough_dims_base_term():
    model = OrenNayar(R, 30.0)
    assert 0.0 < model.a < 1.0
    assert model.b > 0.0


def test_oren_nayar_aligned_directions_brighter_than_base():
    model = OrenNayar(R, 30.0)
    wo = unit(0.5, 0.0, 0.8)
    wi = unit(0.6, 0.0, 0.5)
    f = model.f(wo, wi)
    base = np.asarray(R) / math.pi * model.a
    assert min(f / base) > 1.0


def test_oren_nayar_normal_incidence():
    model = OrenNayar(R, 25.0)
    n = [0.0, 0.0, 1.0]
    assert np.allclose(model.f(n, unit(0.3, 0.4, 0.5)), np.asarray(R) / math.pi * model.a)