"""Images as row-major buffers of RGBA pixels."""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from collections.abc import Sequence

Pixel = tuple[int, int, int, int]


def to_byte(channel: float) -> int:
    """Convert a colour channel in [0, 1] to an integer in [0, 255]."""
    if math.isnan(channel):
        return 0
    clamped = min(max(channel, 0.0), 1.0)
    return int(math.floor(clamped * 255.0 + 0.5))


def pixel_color(color: Sequence[float]) -> Pixel:
    """Build an opaque pixel from an RGB colour with channels in [0, 1]."""
    r, g, b = color
    return (to_byte(r), to_byte(g), to_byte(b), 255)


class Img(ABC):
    """A rectangular image whose pixels are stored in row-major order."""

    @property
    @abstractmethod
    def w(self) -> int:
        """Width of the image, in pixels."""

    @property
    @abstractmethod
    def h(self) -> int:
        """Height of the image, in pixels."""

    @abstractmethod
    def __getitem__(self, index: int) -> Pixel: ...

    @abstractmethod
    def __setitem__(self, index: int, pixel: Pixel) -> None: ...

    @property
    def winv(self) -> float:
        """Reciprocal of the width."""
        return 1.0 / self.w

    @property
    def hinv(self) -> float:
        """Reciprocal of the height."""
        return 1.0 / self.h

    @property
    def aspect(self) -> float:
        """Width to height ratio."""
        return self.w * self.hinv

    def offset(self, x: int, y: int) -> int:
        """Index of the pixel at column ``x`` and row ``y``."""
        if not 0 <= x < self.w or not 0 <= y < self.h:
            raise IndexError(f"pixel ({x}, {y}) outside {self.w}x{self.h} image")
        return self.w * y + x

    def set(self, x: int, y: int, color: Sequence[float]) -> None:
        """Assign an RGB colour with channels in [0, 1] to a pixel."""
        self[self.offset(x, y)] = pixel_color(color)