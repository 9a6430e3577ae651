from __future__ import annotations

import pytest

from examcodes.generator import GroupSpec
from examcodes.groups import DEFAULT_GROUPS, output_filename, parse_group_spec


def test_parse_group_spec() -> None:
    assert parse_group_spec("AB3:78") == GroupSpec("AB3", 78)
    assert parse_group_spec("78") == GroupSpec("", 78)
    assert parse_group_spec(":5") == GroupSpec("", 5)
    assert parse_group_spec("S0:0") == GroupSpec("S0", 0)


def test_parse_group_spec_errors() -> None:
    for bad in ("", "abc", "S0:", "S0:-1", "S0:1.5", "A:B:3", "S0:x", "x/y:3"):
        with pytest.raises(ValueError):
            parse_group_spec(bad)


def test_output_filename() -> None:
    assert output_filename("") == "prefix_.txt"
    assert output_filename("S0") == "prefix_S0.txt"


def test_default_groups() -> None:
    assert DEFAULT_GROUPS == [GroupSpec("", 100)]
