"""Film: the pixel store a scene is captured onto."""

from __future__ import annotations

from collections.abc import Iterator, MutableSequence

from lasgun.img import Img, Pixel


class Film(Img):
    """Row-major RGBA pixel store, initialised to transparent black.

    An existing pixel list may be passed as ``output``; it is used in place
    and must hold at least ``width * height`` pixels.
    """

    def __init__(
        self,
        width: int,
        height: int,
        output: MutableSequence[Pixel] | None = None,
    ) -> None:
        if width <= 0 or height <= 0:
            raise ValueError(f"film size must be positive, got {width}x{height}")
        area = width * height
        if output is None:
            output = [(0, 0, 0, 0)] * area
        elif len(output) < area:
            raise ValueError(f"output holds {len(output)} pixels, need {area}")
        self._w = width
        self._h = height
        self._winv = 1.0 / width
        self._hinv = 1.0 / height
        self._aspect = width / height
        self._output = output

    @property
    def w(self) -> int:
        return self._w

    @property
    def h(self) -> int:
        return self._h

    @property
    def winv(self) -> float:
        return self._winv

    @property
    def hinv(self) -> float:
        return self._hinv

    @property
    def aspect(self) -> float:
        return self._aspect

    def _check_index(self, index: int) -> None:
        if not 0 <= index < len(self._output):
            raise IndexError(f"pixel index {index} out of range")

    def __getitem__(self, index: int) -> Pixel:
        self._check_index(index)
        return self._output[index]

    def __setitem__(self, index: int, pixel: Pixel) -> None:
        self._check_index(index)
        pixel = tuple(int(channel) for channel in pixel)
        if len(pixel) != 4 or not all(0 <= channel <= 255 for channel in pixel):
            raise ValueError(f"invalid RGBA pixel {pixel!r}")
        self._output[index] = pixel

    def __len__(self) -> int:
        return len(self._output)

    def __iter__(self) -> Iterator[Pixel]:
        return iter(self._output)