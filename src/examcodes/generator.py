"""Randomized greedy generation of codes with a minimum Hamming distance.

Each group is filled by drawing uniformly random digit suffixes, prepending the
group prefix, and keeping a candidate only when it is far enough from every
code accepted so far. There is no attempt limit unless one is requested, so an
infeasible request keeps drawing until the process is interrupted.
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence, Tuple

from .distance import is_admissible

ProgressFn = Callable[[bool], None]


@dataclass(frozen=True)
class GroupSpec:
    """One output batch: codes sharing `prefix`, `count` of them."""

    prefix: str
    count: int

    def __post_init__(self) -> None:
        if self.count < 0:
            raise ValueError(f"Group count must be nonnegative, got {self.count}.")
        if ":" in self.prefix:
            raise ValueError(f"Group prefix may not contain ':' (got {self.prefix!r}).")
        if "/" in self.prefix or "\\" in self.prefix:
            raise ValueError(
                f"Group prefix may not contain path separators (got {self.prefix!r})."
            )


class GenerationStalled(RuntimeError):
    """Raised when a group exceeds its consecutive-failure budget."""

    def __init__(self, prefix: str, accepted: List[str], failures: int) -> None:
        self.prefix = prefix
        self.accepted = list(accepted)
        self.failures = failures
        super().__init__(
            f"Gave up on prefix {prefix!r} after {failures} consecutive rejected "
            f"draws with {len(accepted)} codes accepted."
        )

    def __reduce__(self):
        # Rebuild from fields so the error survives a process-pool boundary.
        return (GenerationStalled, (self.prefix, self.accepted, self.failures))


def random_digits(digit_count: int, rng: random.Random) -> str:
    """Draw `digit_count` independent uniform decimal digits."""
    value = rng.randrange(10**digit_count)
    return f"{value:0{digit_count}d}"


def max_group_size(digit_count: int, min_distance: int) -> Optional[int]:
    """Upper bound on one group's size (Singleton bound over the digit positions).

    Returns None when min_distance is 0 (duplicates allowed, no bound).
    """
    if min_distance <= 0:
        return None
    if min_distance > digit_count:
        return 1
    return 10 ** (digit_count - min_distance + 1)


def derive_group_seeds(groups: Sequence[GroupSpec], rng: random.Random) -> List[int]:
    return [rng.randrange(1 << 31) for _ in groups]


def _generate_group_details(
    prefix: str,
    digit_count: int,
    min_distance: int,
    target_count: int,
    rng: random.Random,
    *,
    existing: Sequence[str] = (),
    progress: Optional[ProgressFn] = None,
    max_attempts: Optional[int] = None,
) -> Tuple[List[str], int]:
    if digit_count < 1:
        raise ValueError("digit_count must be at least 1.")
    if min_distance < 0:
        raise ValueError("min_distance must be nonnegative.")
    if target_count < 0:
        raise ValueError("target_count must be nonnegative.")
    if max_attempts is not None and max_attempts <= 0:
        raise ValueError("max_attempts must be positive.")

    code_len = len(prefix) + digit_count
    avoid = [code for code in existing if len(code) == code_len]
    accepted: List[str] = []
    attempts = 0
    failures_in_row = 0
    while len(accepted) < target_count:
        candidate = prefix + random_digits(digit_count, rng)
        attempts += 1
        if is_admissible(candidate, avoid, min_distance) and is_admissible(
            candidate, accepted, min_distance
        ):
            accepted.append(candidate)
            failures_in_row = 0
            if progress is not None:
                progress(True)
            continue
        failures_in_row += 1
        if progress is not None:
            progress(False)
        if max_attempts is not None and failures_in_row >= max_attempts:
            raise GenerationStalled(prefix, accepted, failures_in_row)
    return accepted, attempts


def generate_group(
    prefix: str,
    digit_count: int,
    min_distance: int,
    target_count: int,
    rng: random.Random,
    *,
    existing: Sequence[str] = (),
    progress: Optional[ProgressFn] = None,
    max_attempts: Optional[int] = None,
) -> List[str]:
    """Generate `target_count` codes for one prefix, in acceptance order.

    Every pair of returned codes (and every returned code against each
    same-length code in `existing`) differs in at least `min_distance`
    positions. `progress` is called once per draw with True for an accepted
    candidate and False for a rejected one. With `max_attempts` set, the call
    raises GenerationStalled after that many consecutive rejections.
    """
    codes, _ = _generate_group_details(
        prefix,
        digit_count,
        min_distance,
        target_count,
        rng,
        existing=existing,
        progress=progress,
        max_attempts=max_attempts,
    )
    return codes


__all__ = [
    "GroupSpec",
    "GenerationStalled",
    "random_digits",
    "max_group_size",
    "derive_group_seeds",
    "generate_group",
]
