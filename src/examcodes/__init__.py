"""examcodes: random exam numbers with a guaranteed minimum Hamming distance."""

from .codefile import READ_ERRORS, read_codes, read_error_reason, write_codes
from .distance import (
    closest_pairs,
    codes_to_array,
    hamming_distance,
    is_admissible,
    min_pairwise_distance,
    pairwise_distances,
)
from .generator import (
    GenerationStalled,
    GroupSpec,
    derive_group_seeds,
    generate_group,
    max_group_size,
    random_digits,
)
from .groups import DEFAULT_GROUPS, output_filename, parse_group_spec

__all__ = [
    "hamming_distance",
    "is_admissible",
    "codes_to_array",
    "pairwise_distances",
    "closest_pairs",
    "min_pairwise_distance",
    "GroupSpec",
    "GenerationStalled",
    "random_digits",
    "max_group_size",
    "derive_group_seeds",
    "generate_group",
    "DEFAULT_GROUPS",
    "parse_group_spec",
    "output_filename",
    "READ_ERRORS",
    "read_codes",
    "read_error_reason",
    "write_codes",
]
