from __future__ import annotations

import random

import numpy as np
import pytest

from examcodes.distance import (
    closest_pairs,
    codes_to_array,
    hamming_distance,
    is_admissible,
    min_pairwise_distance,
    pairwise_distances,
)


def test_hamming_distance_hand_examples() -> None:
    assert hamming_distance("1234567", "1204507") == 2
    assert hamming_distance("S012345", "P012345") == 1
    assert hamming_distance("", "") == 0
    assert hamming_distance("000", "999") == 3


def test_hamming_distance_properties() -> None:
    rng = random.Random(11)
    for _ in range(200):
        n = rng.randint(1, 9)
        a = "".join(rng.choice("0123456789") for _ in range(n))
        b = "".join(rng.choice("0123456789") for _ in range(n))
        d = hamming_distance(a, b)
        assert d == hamming_distance(b, a)
        assert hamming_distance(a, a) == 0
        assert 0 <= d <= n
        assert d == sum(1 for i in range(n) if a[i] != b[i])


def test_hamming_distance_rejects_unequal_lengths() -> None:
    with pytest.raises(ValueError):
        hamming_distance("123", "1234")


def test_is_admissible() -> None:
    accepted = ["00000", "11111"]
    assert is_admissible("22222", accepted, 5)
    assert is_admissible("00111", accepted, 2)
    assert not is_admissible("00001", accepted, 2)
    assert is_admissible("00000", [], 3)
    assert is_admissible("00000", accepted, 0)


def test_is_admissible_monotone_under_subsets() -> None:
    rng = random.Random(3)
    pool = [f"{rng.randrange(10000):04d}" for _ in range(30)]
    for _ in range(200):
        candidate = f"{rng.randrange(10000):04d}"
        d = rng.randint(0, 4)
        if not is_admissible(candidate, pool, d):
            continue
        subset = [c for c in pool if rng.random() < 0.5]
        assert is_admissible(candidate, subset, d)


def test_codes_to_array() -> None:
    arr = codes_to_array(["A01", "B23"])
    assert arr.shape == (2, 3)
    assert arr[0, 0] == ord("A")
    assert arr[1, 2] == ord("3")
    assert codes_to_array([]).shape == (0, 0)
    with pytest.raises(ValueError):
        codes_to_array(["123", "12"])


def test_pairwise_distances_matches_scalar() -> None:
    codes = ["12345", "12305", "99999", "12345"]
    dist = pairwise_distances(codes)
    assert dist.shape == (4, 4)
    assert np.array_equal(dist, dist.T)
    assert all(dist[i, i] == 0 for i in range(4))
    for i in range(4):
        for j in range(4):
            assert dist[i, j] == hamming_distance(codes[i], codes[j])


def test_closest_pairs_order() -> None:
    codes = ["000", "001", "011", "111"]
    assert closest_pairs(codes, 3) == [(0, 1, 1), (1, 2, 1), (2, 3, 1)]
    assert closest_pairs(codes, 0) == []
    assert closest_pairs(["000"], 5) == []
    assert len(closest_pairs(codes, 100)) == 6


def test_min_pairwise_distance() -> None:
    assert min_pairwise_distance(["000", "011", "101"]) == 2
    assert min_pairwise_distance(["000"]) is None
    assert min_pairwise_distance([]) is None


def test_closest_pairs_blocked_matches_full_matrix() -> None:
    rng = random.Random(21)
    codes = [f"{rng.randrange(10**4):04d}" for _ in range(300)]
    dist = pairwise_distances(codes)
    iu, ju = np.triu_indices(len(codes), k=1)
    expected = sorted(
        (int(dist[i, j]), int(i), int(j)) for i, j in zip(iu, ju)
    )[:25]
    expected_pairs = [(i, j, d) for d, i, j in expected]
    assert closest_pairs(codes, 25) == expected_pairs
    # One row per block exercises the merge between blocks.
    assert closest_pairs(codes, 25, block_cells=1) == expected_pairs


def test_closest_pairs_many_codes_small_blocks() -> None:
    rng = random.Random(8)
    codes = [f"{value:08d}" for value in rng.sample(range(10**8), 3000)]
    codes.append(codes[1234])
    pairs = closest_pairs(codes, 3, block_cells=50_000)
    assert pairs[0] == (1234, 3000, 0)
    assert len(pairs) == 3
    assert [d for _, _, d in pairs] == sorted(d for _, _, d in pairs)
    assert min_pairwise_distance(codes) == 0
