"""Morton codes and the radix sort that orders primitives by them."""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

MORTON_BITS = 10
MORTON_SCALE = 1 << MORTON_BITS

RADIX_BITS_PER_PASS = 6
RADIX_NBITS = 30
RADIX_NPASSES = RADIX_NBITS // RADIX_BITS_PER_PASS
RADIX_NBUCKETS = 1 << RADIX_BITS_PER_PASS
RADIX_BITMASK = (1 << RADIX_BITS_PER_PASS) - 1

_U32_MAX = 0xFFFFFFFF


@dataclass(frozen=True)
class MortonPrimitive:
    """A primitive's index together with the Morton code of its centroid."""

    index: int
    code: int


def _to_u32(value: float) -> int:
    """Saturating conversion of a float to an unsigned 32-bit integer."""
    if math.isnan(value) or value <= 0.0:
        return 0
    if value >= _U32_MAX:
        return _U32_MAX
    return int(value)


def left_shift_3(x: int) -> int:
    """Spread the low 10 bits of ``x`` so that bit ``k`` lands on bit ``3k``.

    The value ``1 << 10`` (a centroid exactly on the upper bound) is clamped
    to ``1023`` first.
    """
    x &= _U32_MAX
    if x == 1 << 10:
        x -= 1
    x = (x | (x << 16)) & 0b00000011000000000000000011111111
    x = (x | (x << 8)) & 0b00000011000000001111000000001111
    x = (x | (x << 4)) & 0b00000011000011000011000011000011
    x = (x | (x << 2)) & 0b00001001001001001001001001001001
    return x


def encode_morton_3(v: Sequence[float]) -> int:
    """Interleave the scaled coordinates of ``v`` into a 30-bit Morton code.

    The z coordinate fills both the top and bottom lanes of each triple and
    y the middle lane; x does not contribute.
    """
    _, y, z = (float(c) for c in v)
    zs = left_shift_3(_to_u32(z))
    ys = left_shift_3(_to_u32(y))
    return (zs << 2) | (ys << 1) | zs


def radix_sort(prims: Iterable[MortonPrimitive]) -> list[MortonPrimitive]:
    """Stable sort of primitives by the low 30 bits of their Morton codes."""
    items = list(prims)
    for pass_number in range(RADIX_NPASSES):
        lowbit = pass_number * RADIX_BITS_PER_PASS
        buckets: list[list[MortonPrimitive]] = [[] for _ in range(RADIX_NBUCKETS)]
        for prim in items:
            buckets[(prim.code >> lowbit) & RADIX_BITMASK].append(prim)
        items = [prim for bucket in buckets for prim in bucket]
    return items