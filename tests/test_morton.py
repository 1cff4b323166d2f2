import random

import pytest

from lasgun.morton import (
    MortonPrimitive,
    encode_morton_3,
    left_shift_3,
    radix_sort,
)

SPREAD_MASK = 0b00001001001001001001001001001001


def test_left_shift_zero_and_one():
    assert left_shift_3(0) == 0
    assert left_shift_3(1) == 1


def test_left_shift_all_bits_gives_mask():
    assert left_shift_3(1023) == SPREAD_MASK


def test_left_shift_clamps_upper_bound():
    assert left_shift_3(1024) == left_shift_3(1023)


@pytest.mark.parametrize("k", range(10))
def test_left_shift_single_bit_moves_to_triple_position(k):
    assert left_shift_3(1 << k) == 1 << (3 * k)


@pytest.mark.parametrize("x", [3, 5, 100, 511, 777, 1000])
def test_left_shift_result_within_mask_and_reversible(x):
    spread = left_shift_3(x)
    assert spread & ~SPREAD_MASK == 0
    recovered = sum(((spread >> (3 * k)) & 1) << k for k in range(10))
    assert recovered == x


def test_left_shift_is_additive_over_disjoint_bits():
    assert left_shift_3(0b1010) | left_shift_3(0b0101) == left_shift_3(0b1111)


def test_encode_ignores_x():
    assert encode_morton_3([512.0, 0.0, 0.0]) == 0


@pytest.mark.parametrize("y", [1.0, 7.0, 300.0, 1023.0])
def test_encode_y_occupies_middle_lane(y):
    assert encode_morton_3([0.0, y, 0.0]) == left_shift_3(int(y)) << 1


@pytest.mark.parametrize("z", [1.0, 7.0, 300.0, 1023.0])
def test_encode_z_occupies_outer_lanes(z):
    spread = left_shift_3(int(z))
    assert encode_morton_3([0.0, 0.0, z]) == (spread << 2) | spread


def test_encode_truncates_fractions_and_clamps_negatives():
    assert encode_morton_3([0.0, 3.9, 2.7]) == encode_morton_3([0.0, 3.0, 2.0])
    assert encode_morton_3([-5.0, -1.0, -2.0]) == 0


def test_encode_fits_in_30_bits():
    code = encode_morton_3([1024.0, 1024.0, 1024.0])
    assert 0 <= code < 1 << 30


def test_radix_sort_empty():
    assert radix_sort([]) == []


def test_radix_sort_orders_by_code():
    rng = random.Random(7)
    prims = [MortonPrimitive(i, rng.randrange(1 << 30)) for i in range(200)]
    result = radix_sort(prims)
    codes = [p.code for p in result]
    assert codes == sorted(codes)
    assert sorted(p.index for p in result) == list(range(200))


def test_radix_sort_is_stable():
    prims = [
        MortonPrimitive(0, 5),
        MortonPrimitive(1, 2),
        MortonPrimitive(2, 5),
        MortonPrimitive(3, 2),
        MortonPrimitive(4, 0),
    ]
    assert [p.index for p in radix_sort(prims)] == [4, 1, 3, 0, 2]


def test_radix_sort_ignores_bits_above_30():
    prims = [MortonPrimitive(0, (1 << 30) | 3), MortonPrimitive(1, 1)]
    assert [p.index for p in radix_sort(prims)] == [1, 0]


def test_radix_sort_does_not_mutate_input():
    prims = [MortonPrimitive(0, 9), MortonPrimitive(1, 1)]
    radix_sort(prims)
    assert [p.index for p in prims] == [0, 1]


def test_radix_sort_of_encoded_points_groups_by_code():
    points = [(0.0, y, z) for y in (0.0, 512.0) for z in (0.0, 512.0)]
    prims = [MortonPrimitive(i, encode_morton_3(p)) for i, p in enumerate(points)]
    result = radix_sort(prims)
    assert result[0].code == 0
    assert [p.code for p in result] == sorted(p.code for p in prims)