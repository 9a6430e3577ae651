"""Parsing of `<prefix>:<count>` group arguments."""

from __future__ import annotations

from typing import List

from .generator import GroupSpec

DEFAULT_GROUPS: List[GroupSpec] = [GroupSpec("", 100)]


def parse_group_spec(text: str) -> GroupSpec:
    """Parse '<prefix>:<count>' (or a bare '<count>') into a GroupSpec."""
    if ":" in text:
        prefix, count_str = text.split(":", 1)
    else:
        prefix, count_str = "", text
    count_str = count_str.strip()
    if not (count_str.isascii() and count_str.isdigit()):
        raise ValueError(
            f"Invalid group '{text}'; expected '<prefix>:<count>' or '<count>' "
            "with a nonnegative integer count."
        )
    return GroupSpec(prefix, int(count_str))


def output_filename(prefix: str) -> str:
    return f"prefix_{prefix}.txt"


__all__ = ["DEFAULT_GROUPS", "parse_group_spec", "output_filename"]
