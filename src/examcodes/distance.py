"""Hamming distance helpers for fixed-length codes."""

from __future__ import annotations

from typing import Iterable, List, Sequence, Tuple

import numpy as np

# Element comparisons per block in closest_pairs.
_BLOCK_CELLS = 1 << 22


def hamming_distance(a: str, b: str) -> int:
    """Count positions at which two equal-length codes differ."""
    if len(a) != len(b):
        raise ValueError(
            f"Cannot compare codes of different lengths: {a!r} ({len(a)}) "
            f"vs {b!r} ({len(b)})."
        )
    return sum(1 for x, y in zip(a, b) if x != y)


def is_admissible(candidate: str, accepted: Iterable[str], min_distance: int) -> bool:
    """Return True if candidate is at least min_distance from every accepted code."""
    for code in accepted:
        if hamming_distance(candidate, code) < min_distance:
            return False
    return True


def codes_to_array(codes: Sequence[str]) -> np.ndarray:
    """Pack equal-length codes into an (n, L) array of code points."""
    if not codes:
        return np.zeros((0, 0), dtype=np.uint32)
    length = len(codes[0])
    for code in codes:
        if len(code) != length:
            raise ValueError(
                f"Mixed code lengths: expected {length}, got {len(code)} for {code!r}."
            )
    arr = np.zeros((len(codes), length), dtype=np.uint32)
    for i, code in enumerate(codes):
        arr[i, :] = [ord(ch) for ch in code]
    return arr


def pairwise_distances(codes: Sequence[str]) -> np.ndarray:
    """Return the (n, n) matrix of Hamming distances between codes.

    Holds n * n * L comparisons at once; use closest_pairs for large lists.
    """
    arr = codes_to_array(codes)
    if arr.shape[0] == 0:
        return np.zeros((0, 0), dtype=np.int64)
    diff = arr[:, None, :] != arr[None, :, :]
    return diff.sum(axis=2).astype(np.int64)


def closest_pairs(
    codes: Sequence[str], limit: int, *, block_cells: int = _BLOCK_CELLS
) -> List[Tuple[int, int, int]]:
    """Return up to `limit` pairs (i, j, d) with i < j, closest first.

    Rows are compared one block at a time so memory stays near `block_cells`
    comparisons however many codes there are; only the best `limit` pairs
    are kept between blocks. Ties are ordered by (i, j).
    """
    if limit < 0:
        raise ValueError("limit must be nonnegative.")
    n = len(codes)
    if n < 2 or limit == 0:
        return []
    arr = codes_to_array(codes)
    length = arr.shape[1]
    rows_per_block = max(1, block_cells // max(1, n * length))
    cols = np.arange(n)
    best_i = np.zeros(0, dtype=np.int64)
    best_j = np.zeros(0, dtype=np.int64)
    best_d = np.zeros(0, dtype=np.int64)
    for start in range(0, n - 1, rows_per_block):
        stop = min(start + rows_per_block, n - 1)
        block = arr[start:stop]
        dist = (block[:, None, :] != arr[None, :, :]).sum(axis=2)
        upper = cols[None, :] > np.arange(start, stop)[:, None]
        bi, bj = np.nonzero(upper)
        # Earlier blocks hold smaller i, so concatenation keeps (i, j) order.
        best_i = np.concatenate([best_i, bi + start])
        best_j = np.concatenate([best_j, bj])
        best_d = np.concatenate([best_d, dist[bi, bj].astype(np.int64)])
        keep = np.argsort(best_d, kind="stable")[:limit]
        keep.sort()
        best_i, best_j, best_d = best_i[keep], best_j[keep], best_d[keep]
    order = np.argsort(best_d, kind="stable")
    return [(int(best_i[k]), int(best_j[k]), int(best_d[k])) for k in order]


def min_pairwise_distance(codes: Sequence[str]) -> int | None:
    """Minimum distance over distinct pairs, or None for fewer than two codes."""
    pairs = closest_pairs(codes, 1)
    if not pairs:
        return None
    return pairs[0][2]


__all__ = [
    "hamming_distance",
    "is_admissible",
    "codes_to_array",
    "pairwise_distances",
    "closest_pairs",
    "min_pairwise_distance",
]
