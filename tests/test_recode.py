"""
Tests for recoding, collapsing, dropping and counting levels.

Recode semantics:
    - old -> new mapping, unmapped levels pass through
    - several old levels may merge into one new level
    - unknown old levels warn (non-fatal) and are ignored
"""

import warnings

import pytest
from factorlab.model import MISSING, FactorError, UnknownLevelWarning, factor
from factorlab.recode import (
    LevelCount,
    fct_collapse,
    fct_count,
    fct_drop,
    fct_expand,
    fct_na_value_to_level,
    fct_recode,
)


PARTY = [
    "Strong republican", "Not str republican", "Independent",
    "Not str democrat", "Strong democrat", "Independent", "Strong democrat",
]


class TestRecode:
    """Test fct_recode."""

    def test_rename(self):
        f = factor(["a", "b", "a"])
        out = fct_recode(f, {"a": "apple"})
        assert out.levels == ("apple", "b")
        assert out.values == ["apple", "b", "apple"]

    def test_unmapped_pass_through(self):
        f = factor(PARTY)
        out = fct_recode(f, {"Strong republican": "Republican, strong"})
        assert "Independent" in out.levels
        assert "Republican, strong" in out.levels
        assert "Strong republican" not in out.levels

    def test_merge(self):
        """Several old levels mapping to one new level collapse together."""
        f = factor(PARTY)
        out = fct_recode(f, {
            "Strong republican": "Republican",
            "Not str republican": "Republican",
            "Strong democrat": "Democrat",
            "Not str democrat": "Democrat",
        })
        assert set(out.levels) == {"Republican", "Independent", "Democrat"}
        assert out.counts() == {"Independent": 2, "Democrat": 3, "Republican": 2}

    def test_merged_level_takes_first_position(self):
        f = factor(["a", "b", "c"])
        out = fct_recode(f, {"c": "a2", "a": "a2"})
        assert out.levels == ("a2", "b")

    def test_rename_into_existing_level(self):
        f = factor(["a", "b", "c"])
        out = fct_recode(f, {"c": "a"})
        assert out.levels == ("a", "b")
        assert out.values == ["a", "b", "a"]

    def test_unknown_level_warns(self):
        f = factor(["a", "b"])
        with pytest.warns(UnknownLevelWarning, match="zzz"):
            out = fct_recode(f, {"zzz": "q", "a": "A"})
        assert out.levels == ("A", "b")

    def test_no_warning_for_known_levels(self):
        f = factor(["a", "b"])
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            fct_recode(f, {"a": "A"})

    def test_map_to_none_removes_level(self):
        f = factor(["a", "b", "a"])
        out = fct_recode(f, {"a": None})
        assert out.levels == ("b",)
        assert out.values == [MISSING, "b", MISSING]

    def test_missing_observations_stay_missing(self):
        f = factor(["a", None])
        out = fct_recode(f, {"a": "x"})
        assert out.values == ["x", None]

    def test_input_not_mutated(self):
        f = factor(["a", "b"])
        fct_recode(f, {"a": "x"})
        assert f.levels == ("a", "b")


class TestCollapse:
    """Test fct_collapse."""

    def test_full_cover_gives_key_set(self):
        """A mapping covering every level yields exactly the mapping's keys."""
        f = factor(PARTY)
        groups = {
            "rep": ["Strong republican", "Not str republican"],
            "ind": ["Independent"],
            "dem": ["Not str democrat", "Strong democrat"],
        }
        out = fct_collapse(f, groups)
        assert set(out.levels) == set(groups)
        assert len(out) == len(f)

    def test_partial_cover_keeps_rest(self):
        f = factor(["a", "b", "c"])
        out = fct_collapse(f, {"ab": ["a", "b"]})
        assert out.levels == ("ab", "c")

    def test_other_level(self):
        f = factor(["a", "b", "c", "d"])
        out = fct_collapse(f, {"A": ["a"], "C": ["c"]}, other_level="Other")
        assert out.levels == ("A", "C", "Other")
        assert out.values == ["A", "Other", "C", "Other"]

    def test_single_string_member(self):
        f = factor(["a", "b"])
        out = fct_collapse(f, {"x": "a"})
        assert out.levels == ("x", "b")

    def test_member_in_two_groups(self):
        f = factor(["a", "b", "c"])
        with pytest.raises(FactorError, match="'b'"):
            fct_collapse(f, {"x": ["a", "b"], "y": ["b", "c"]})

    def test_member_repeated_in_one_group(self):
        f = factor(["a", "b"])
        out = fct_collapse(f, {"x": ["a", "a", "b"]})
        assert out.levels == ("x",)

    def test_nan_other_level(self):
        f = factor(["a", "b"])
        with pytest.raises(FactorError):
            fct_collapse(f, {"x": ["a"]}, other_level=float("nan"))

    def test_unknown_member_warns(self):
        f = factor(["a", "b"])
        with pytest.warns(UnknownLevelWarning):
            out = fct_collapse(f, {"x": ["a", "nope"]})
        assert out.levels == ("x", "b")


class TestDropExpand:
    """Test fct_drop, fct_expand and fct_na_value_to_level."""

    def test_drop_unused(self):
        f = factor(["a"], levels=["a", "b", "c"])
        assert fct_drop(f).levels == ("a",)

    def test_drop_only(self):
        f = factor(["a"], levels=["a", "b", "c"])
        assert fct_drop(f, only=["c"]).levels == ("a", "b")

    def test_drop_nothing_unused(self):
        f = factor(["a", "b"])
        assert fct_drop(f) is f

    def test_expand(self):
        f = factor(["a"])
        out = fct_expand(f, "z", "a")
        assert out.levels == ("a", "z")
        assert out.values == ["a"]

    def test_expand_rejects_missing(self):
        with pytest.raises(FactorError):
            fct_expand(factor(["a"]), None)

    def test_na_value_to_level(self):
        f = factor(["a", None, "b"])
        out = fct_na_value_to_level(f)
        assert out.levels == ("a", "b", "(Missing)")
        assert out.values == ["a", "(Missing)", "b"]
        assert out.n_missing == 0

    def test_na_value_to_level_custom(self):
        f = factor([None])
        assert fct_na_value_to_level(f, "unknown").levels == ("unknown",)

    def test_na_value_to_level_without_missing(self):
        f = factor(["a"])
        assert fct_na_value_to_level(f) is f


class TestCount:
    """Test fct_count."""

    def test_level_order(self):
        f = factor(["b", "a", "b"], levels=["a", "b", "c"])
        assert fct_count(f) == [LevelCount("a", 1), LevelCount("b", 2), LevelCount("c", 0)]

    def test_sorted_with_missing_row_last(self):
        f = factor(["b", "a", "b", None])
        rows = fct_count(f, sort=True)
        assert [(r.level, r.n) for r in rows] == [("b", 2), ("a", 1), (None, 1)]

    def test_prop(self):
        f = factor(["b", "a", "b", None])
        rows = fct_count(f, prop=True)
        assert [r.prop for r in rows] == [0.25, 0.5, 0.25]

    def test_fruit_counts(self):
        f = factor(["pear", "apple", "banana", "apple", "pear", "apple"],
                   levels=["apple", "banana", "pear"])
        assert [(r.level, r.n) for r in fct_count(f)] == [("apple", 3), ("banana", 1), ("pear", 2)]
