"""Ray tracing components: cameras, film, Morton ordering and scattering models."""

__version__ = "0.1.0"

__all__ = [
    "bxdf",
    "camera",
    "diffuse",
    "film",
    "fresnel",
    "img",
    "microfacet",
    "morton",
    "quadratic",
    "shading",
    "specular",
]