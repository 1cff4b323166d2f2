# lasgun

Components of a Whitted-style ray tracer, built on numpy vectors. Colours,
directions and points are length-3 numpy arrays; shading directions are
expressed in a local frame where the surface normal is `(0, 0, 1)`.

## Modules

- `lasgun.camera`
  - `Projection(kind, value)` — `"perspective"` with a field of view in
    degrees, or `"orthographic"` with the focal-plane height in world units.
    `image_plane_height(focal_distance)` and `pixel_separation()`.
  - `Camera.perspective(fov)` / `Camera.orthographic(height)` (both raise
    `ValueError` for non-positive values); `Camera()` is a 45° perspective
    camera. `look_at(origin, look, up)` places it; the distance to `look` is
    the focal distance.
  - `set_supersampling(base)` gives `(base + 1) ** 2` rays per pixel
    (`base` in 0–254, otherwise `ValueError`); `num_samples()` reports the
    count. The default is one ray per pixel.
  - `sample(x, y, img)` returns a list of `Ray` objects (`origin`, `d`,
    `dinv`) through pixel `(x, y)` of an image.
  - `set_aperture_radius(radius)` stores a radius; ray generation does not
    use it, so every camera behaves as a pinhole.
- `lasgun.img` — the abstract `Img` (width `w`, height `h`, `winv`, `hinv`,
  `aspect`, row-major `offset(x, y)` that raises `IndexError` outside the
  image, and `set(x, y, color)`), plus `to_byte(channel)` and
  `pixel_color(color)` which clamp channels to [0, 1] and scale to 0–255.
- `lasgun.film` — `Film(width, height, output=None)`, an `Img` holding RGBA
  tuples initialised to `(0, 0, 0, 0)`. An existing list can be passed as
  `output` and is written in place. Supports indexing, `len()` and iteration.
- `lasgun.quadratic` — `quad_roots(a, b, c)` returns a tuple of zero, one
  (linear case) or two real roots, using the numerically stable form.
- `lasgun.morton` — `left_shift_3`, `encode_morton_3`, `MortonPrimitive` and
  a stable `radix_sort` over the low 30 bits of the codes. `encode_morton_3`
  fills the outer lanes of each bit triple from z and the middle lane from y;
  x does not contribute.
- `lasgun.shading` — `BxDFType` flags, `TransportMode`, `LightSample`
  (`spectrum`, `wi`, `pdf`, `LightSample.zero()`), shading-frame
  trigonometry (`cos_theta`, `sin_phi`, `tan2_theta`, …), `reflect`,
  `refract` (returns `None` on total internal reflection), `same_hemisphere`,
  `hemisphere_pdf`, `concentric_sample_disk` and `cosine_sample_hemisphere`.
- `lasgun.fresnel` — `Substance.dielectric(eta_i, eta_t)`,
  `Substance.conductor(eta_i, eta_t, k)` and `Substance.noop()`, each with
  `evaluate(cos_theta_i)`; plus `fresnel_dielectric` and `fresnel_conductor`.
- `lasgun.diffuse` — `Lambertian(r)` and `OrenNayar(r, sigma)` (sigma in
  degrees).
- `lasgun.specular` — `SpecularReflection(r, substance)` and
  `SpecularTransmission(t, eta_a, eta_b)`, each with `sample_f(wo, sample)`.
- `lasgun.microfacet` — `roughness_to_alpha`, the Trowbridge–Reitz
  `Distribution(alphax, alphay)` (`d`, `g`, `g1`, `lambda_`, `pdf`,
  `sample_wh`), `MicrofacetReflection` and `MicrofacetTransmission` (`f`,
  `sample_f`, `pdf`), and the sampling helpers `trowbridge_reitz_sample` and
  `trowbridge_reitz_sample_11`.
- `lasgun.bxdf` — `BxDF`, one scattering model chosen by constructor
  (`constant`, `specular_reflection`, `specular_transmission`,
  `quick_diffuse`, `diffuse`, `microfacet_reflection`,
  `microfacet_transmission`) with `kind()`, `matches(flags)`,
  `has_t(flags)`, `f(wo, wi)`, `sample_f(wo, sample)` and `pdf(wo, wi)`.
  Specular models return zero from `f` and scatter only through `sample_f`.

## Install

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Example

```python
import numpy as np
from lasgun.camera import Camera
from lasgun.film import Film
from lasgun.bxdf import BxDF
from lasgun.fresnel import Substance
from lasgun.microfacet import Distribution, roughness_to_alpha

film = Film(64, 48)
camera = Camera.perspective(45.0)
camera.look_at([0.0, 0.0, 5.0], [0.0, 0.0, 0.0], [0.0, 1.0, 0.0])
camera.set_supersampling(1)          # 2 x 2 = 4 rays per pixel
rays = camera.sample(10, 20, film)   # list of Ray, len == camera.num_samples()

alpha = roughness_to_alpha(0.25)
metal = BxDF.microfacet_reflection(
    np.array([1.0, 1.0, 1.0]),
    Substance.conductor(np.ones(3), np.array([0.2, 0.9, 1.1]), np.array([3.9, 2.4, 2.2])),
    Distribution(alpha, alpha),
)
wo = np.array([0.0, 0.6, 0.8])
wi = np.array([0.0, -0.6, 0.8])
colour = metal.f(wo, wi)

film.set(10, 20, colour)
print(film[film.offset(10, 20)])     # RGBA bytes
```

## What it does not do

lasgun provides parts, not a full renderer. There is no scene description,
no geometry or ray–shape intersection, no bounding volume hierarchy beyond
the Morton ordering in `lasgun.morton`, no light integrator, no mesh loading,
and no command-line program. `Film` keeps pixels in memory only; writing
them to an image file is left to the caller.