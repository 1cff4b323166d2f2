"""Cameras that turn image pixels into primary rays."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import ClassVar

import numpy as np

from lasgun.img import Img


def _vec(values) -> np.ndarray:
    return np.asarray(values, dtype=float).reshape(3)


def _normalize(v: np.ndarray) -> np.ndarray:
    return v / np.linalg.norm(v)


@dataclass(eq=False)
class Ray:
    """A ray with an origin, a direction and the direction's reciprocal."""

    origin: np.ndarray
    d: np.ndarray
    dinv: np.ndarray = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self.origin = _vec(self.origin)
        self.d = _vec(self.d)
        with np.errstate(divide="ignore"):
            self.dinv = 1.0 / self.d


@dataclass(frozen=True)
class Projection:
    """Camera projection.

    ``perspective`` takes a field of view in degrees; ``orthographic`` takes
    the height of the focal plane in world units.
    """

    kind: str
    value: float

    PERSPECTIVE: ClassVar[str] = "perspective"
    ORTHOGRAPHIC: ClassVar[str] = "orthographic"

    def __post_init__(self) -> None:
        if self.kind not in (self.PERSPECTIVE, self.ORTHOGRAPHIC):
            raise ValueError(f"unknown projection {self.kind!r}")

    def image_plane_height(self, focal_distance: float) -> float:
        """Vertical extent of the image plane at the given focal distance."""
        if self.kind == self.PERSPECTIVE:
            return focal_distance * math.tan(self.value * math.pi / 360.0) * 2.0
        return self.value

    def pixel_separation(self) -> float:
        """Spacing of sensor cells relative to spacing on the image plane."""
        return 0.0 if self.kind == self.PERSPECTIVE else 1.0


class Camera:
    """Eye in the scene, generating one or more rays per pixel."""

    def __init__(self, projection: Projection | None = None) -> None:
        if projection is None:
            projection = Projection(Projection.PERSPECTIVE, 45.0)
        self.projection = projection
        self.origin = np.zeros(3)
        self.view = np.array([0.0, 0.0, 1.0])
        self.up = np.array([0.0, 1.0, 0.0])
        self.aux = np.array([1.0, 0.0, 0.0])
        self.aperture_radius = 0.0
        self.image_plane_height = projection.image_plane_height(1.0)
        self.pixel_separation = projection.pixel_separation()
        self._root = 1
        self._sample_distance = 1.0

    @classmethod
    def perspective(cls, fov: float) -> Camera:
        """Perspective camera with a field of view in degrees."""
        if not fov > 0.0:
            raise ValueError(f"field of view must be positive, got {fov}")
        return cls(Projection(Projection.PERSPECTIVE, fov))

    @classmethod
    def orthographic(cls, height: float) -> Camera:
        """Orthographic camera whose focal plane has the given height."""
        if not height > 0.0:
            raise ValueError(f"focal plane height must be positive, got {height}")
        return cls(Projection(Projection.ORTHOGRAPHIC, height))

    def look_at(self, origin, look, up) -> None:
        """Place the camera at ``origin`` looking at ``look`` with ``up`` upward."""
        origin = _vec(origin)
        view = _vec(look) - origin
        aux = np.cross(view, _vec(up))
        self.origin = origin
        self.up = _normalize(np.cross(aux, view))
        self.aux = _normalize(aux)
        self.view = view
        self.image_plane_height = self.projection.image_plane_height(
            float(np.linalg.norm(view))
        )

    def set_supersampling(self, base: int) -> None:
        """Take ``(base + 1) ** 2`` samples per pixel."""
        if not 0 <= base < 255:
            raise ValueError(f"supersampling base must be in [0, 254], got {base}")
        self._root = base + 1
        self._sample_distance = 1.0 / self._root

    def set_aperture_radius(self, radius: float) -> None:
        """Set the lens aperture radius in world units (0 for a pinhole)."""
        self.aperture_radius = radius

    def num_samples(self) -> int:
        """Number of rays generated per pixel."""
        return self._root * self._root

    def sample(self, x: int, y: int, img: Img) -> list[Ray]:
        """Rays through pixel ``(x, y)`` of ``img``, row-major over the sub-grid."""
        plane_height = self.image_plane_height
        plane_width = plane_height * img.aspect
        pixel_size = plane_height * img.hinv
        separation = self._sample_distance * pixel_size
        sx = (x * img.winv - 0.5) * plane_width
        sy = (0.5 - (y + 1) * img.hinv) * plane_height

        origin = (
            self.origin
            + sy * self.pixel_separation * self.up
            + sx * self.pixel_separation * self.aux
        )
        corner = self.view + sy * self.up + sx * self.aux

        updiff = self.up * separation
        auxdiff = self.aux * separation
        halfdiff = 0.5 * updiff + 0.5 * auxdiff

        dim = self._root
        return [
            Ray(origin, corner + j * updiff + i * auxdiff + halfdiff)
            for i in range(dim)
            for j in range(dim)
        ]