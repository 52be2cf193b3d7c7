"""
Unit tests for version ordering.
"""

from functools import cmp_to_key

import pytest

from pubscope.core.versions import compare_versions, max_version, parse_version


class TestCompareVersions:

    @pytest.mark.parametrize("lower,higher", [
        ("1.0", "1.0.1"),
        ("1.9", "1.10"),
        ("1.0-alpha", "1.0-beta"),
        ("1.0-beta", "1.0-rc"),
        ("1.0-rc", "1.0"),
        ("1.0-SNAPSHOT", "1.0"),
        ("1.0", "1.0-sp"),
        ("1.0-rc", "1.0.1"),
        ("", "0.0.1"),
        ("2.0.0-M1", "2.0.0-RC1"),
    ])
    def test_ordering(self, lower, higher):
        assert compare_versions(lower, higher) < 0
        assert compare_versions(higher, lower) > 0

    @pytest.mark.parametrize("left,right", [
        ("1", "1.0"),
        ("1.0", "1.0.0"),
        ("1.0-final", "1.0"),
        ("1.0-GA", "1.0.0"),
    ])
    def test_equivalent(self, left, right):
        assert compare_versions(left, right) == 0

    def test_unspecified_is_lowest(self):
        assert compare_versions("", "") == 0
        assert compare_versions("", "0.1-alpha") < 0

    def test_unknown_qualifiers_rank_above_known_ones(self):
        assert compare_versions("1.0-sp", "1.0-jre") < 0
        assert compare_versions("1.0-android", "1.0-jre") < 0

    def test_parse_strips_trailing_nulls(self):
        assert parse_version("1.0.0") == (1,)
        assert parse_version("1.2.0-beta1") == (1, 2, 0, "beta", 1)


class TestSorting:

    def test_sort_with_compare_versions(self):
        versions = ["1.10", "1.2", "1.2-rc1", "", "1.9"]
        ordered = sorted(versions, key=cmp_to_key(compare_versions))
        assert ordered == ["", "1.2-rc1", "1.2", "1.9", "1.10"]


class TestMaxVersion:

    def test_picks_highest(self):
        assert max_version(["1.0.0", "1.2.0", "1.1.5"]) == "1.2.0"

    def test_real_version_beats_unspecified(self):
        assert max_version(["", "3.1.0"]) == "3.1.0"
        assert max_version(["3.1.0", ""]) == "3.1.0"

    def test_tie_keeps_first_seen(self):
        assert max_version(["1.0", "1.0.0"]) == "1.0"
        assert max_version(["1.0.0", "1.0"]) == "1.0.0"

    def test_empty_raises(self):
        with pytest.raises(ValueError):
            max_version([])
