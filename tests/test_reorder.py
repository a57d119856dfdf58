"""
Tests for level reordering.

Every reorder must:
    - Permute levels only (observation labels unchanged)
    - Leave the input factor untouched
    - Keep ties in original relative order
"""

import pytest
from factorlab.aggregators import Aggregator, first2
from factorlab.model import Factor, FactorError, UnknownLevelWarning, factor
from factorlab.reorder import (
    fct_infreq,
    fct_inorder,
    fct_relevel,
    fct_reorder,
    fct_reorder2,
    fct_rev,
)


@pytest.fixture
def relig():
    return factor(["Protestant", "Catholic", "None", "Protestant", "Jewish", "None", "Catholic"])


class TestReorder:
    """Test fct_reorder (reorder by summary of a key)."""

    def test_median_ascending(self, relig):
        tv = [3, 2, 1, 5, 4, 1, 2]
        out = fct_reorder(relig, tv)
        # medians: Catholic 2, Jewish 4, None 1, Protestant 4
        assert out.levels == ("None", "Catholic", "Jewish", "Protestant")

    def test_values_unchanged(self, relig):
        out = fct_reorder(relig, [3, 2, 1, 5, 4, 1, 2])
        assert out.values == relig.values

    def test_input_not_mutated(self, relig):
        before = relig.levels
        fct_reorder(relig, [3, 2, 1, 5, 4, 1, 2])
        assert relig.levels == before

    def test_desc(self, relig):
        out = fct_reorder(relig, [3, 2, 1, 5, 4, 1, 2], desc=True)
        # Jewish and Protestant tie at 4; original order kept
        assert out.levels == ("Jewish", "Protestant", "Catholic", "None")

    def test_other_aggregator(self, relig):
        out = fct_reorder(relig, [3, 2, 1, 5, 4, 1, 2], aggregator=Aggregator.MAX)
        # max: Catholic 2, Jewish 4, None 1, Protestant 5
        assert out.levels == ("None", "Catholic", "Jewish", "Protestant")

    def test_level_without_key_goes_last(self):
        f = factor(["a", "b", "c"], levels=["a", "b", "c", "d"])
        out = fct_reorder(f, [3, None, 1])
        assert out.levels == ("c", "a", "b", "d")

    def test_length_mismatch(self, relig):
        with pytest.raises(FactorError):
            fct_reorder(relig, [1, 2])

    def test_ordered_flag_kept(self):
        f = factor(["a", "b"], ordered=True)
        assert fct_reorder(f, [2, 1]).ordered


class TestRelevel:
    """Test fct_relevel."""

    def test_move_to_front(self):
        f = factor(["a", "b", "c", "d"])
        out = fct_relevel(f, "c")
        assert out.levels[0] == "c"
        assert out.levels == ("c", "a", "b", "d")

    def test_multiple_labels_in_given_order(self):
        f = factor(["a", "b", "c", "d"])
        assert fct_relevel(f, "d", "b").levels == ("d", "b", "a", "c")

    def test_after(self):
        f = factor(["a", "b", "c", "d"])
        assert fct_relevel(f, "a", after=2).levels == ("b", "c", "a", "d")

    def test_after_none_moves_to_end(self):
        f = factor(["a", "b", "c"])
        assert fct_relevel(f, "a", after=None).levels == ("b", "c", "a")

    def test_unknown_level_warns(self):
        f = factor(["a", "b"])
        with pytest.warns(UnknownLevelWarning):
            out = fct_relevel(f, "zzz", "b")
        assert out.levels == ("b", "a")

    def test_negative_after(self):
        f = factor(["a", "b", "c"])
        with pytest.raises(FactorError):
            fct_relevel(f, "c", after=-1)


class TestReorder2:
    """Test fct_reorder2 (y at the largest x)."""

    def test_default_last2_desc(self):
        marital = factor(["Married", "Widowed", "Married", "Widowed", "Divorced", "Divorced"])
        age = [20, 20, 80, 80, 20, 80]
        prop = [0.5, 0.0, 0.3, 0.6, 0.1, 0.1]
        out = fct_reorder2(marital, age, prop)
        # at age 80: Widowed 0.6, Married 0.3, Divorced 0.1
        assert out.levels == ("Widowed", "Married", "Divorced")

    def test_first2_ascending(self):
        f = factor(["a", "b", "a", "b"])
        out = fct_reorder2(f, [1, 1, 2, 2], [9, 3, 0, 0], aggregator=first2, desc=False)
        assert out.levels == ("b", "a")

    def test_length_mismatch(self):
        f = factor(["a", "b"])
        with pytest.raises(FactorError):
            fct_reorder2(f, [1, 2], [1])


class TestFrequency:
    """Test fct_infreq, fct_inorder, fct_rev."""

    def test_infreq(self):
        f = factor(["b", "a", "b", "c", "b", "c"])
        assert fct_infreq(f).levels == ("b", "c", "a")

    def test_infreq_ties_keep_order(self):
        f = factor(["c", "a", "b"])
        assert fct_infreq(f).levels == ("a", "b", "c")

    def test_infreq_ascending(self):
        f = factor(["b", "a", "b", "c", "b", "c"])
        assert fct_infreq(f, desc=False).levels == ("a", "c", "b")

    def test_infreq_ordered(self):
        f = factor(["b", "a", "b"])
        assert fct_infreq(f, ordered=True).ordered

    def test_inorder(self):
        f = factor(["c", "a", "c", "b"], levels=["a", "b", "c", "d"])
        assert fct_inorder(f).levels == ("c", "a", "b", "d")

    def test_rev(self):
        f = factor(["a", "b", "c"])
        out = fct_rev(f)
        assert out.levels == ("c", "b", "a")
        assert out.values == ["a", "b", "c"]

    def test_empty_factor(self):
        f = Factor()
        assert fct_infreq(f).levels == ()
        assert fct_rev(f).levels == ()
