"""
Tests for serialization and deserialization of Factor objects.

These tests ensure lossless JSON/YAML round-trip using the explicit
serialization functions in `factorlab.serialization`.
"""

import pytest
from factorlab.model import Factor, FactorError, factor
from factorlab.recode import fct_lump
from factorlab.serialization import (
    factor_from_dict,
    factor_from_json,
    factor_from_yaml,
    factor_to_dict,
    factor_to_json,
    factor_to_yaml,
)


def build_sample_factor() -> Factor:
    values = ["Married", "Widowed", None, "Divorced", "Married", "Never married"]
    levels = ["Never married", "Divorced", "Widowed", "Married", "Separated"]
    return factor(values, levels=levels, ordered=True)


def test_dict_shape():
    f = factor(["b", None, "a"])
    assert factor_to_dict(f) == {"levels": ["a", "b"], "codes": [1, None, 0], "ordered": False}


def test_json_roundtrip():
    f = build_sample_factor()
    restored = factor_from_json(factor_to_json(f))
    assert restored == f
    assert factor_to_dict(restored) == factor_to_dict(f)


def test_yaml_roundtrip():
    f = build_sample_factor()
    restored = factor_from_yaml(factor_to_yaml(f))
    assert restored == f


def test_roundtrip_after_lump():
    f = fct_lump(factor(["a"] * 10 + ["b"] * 5 + ["c", "d"]))
    assert factor_from_json(factor_to_json(f)) == f


def test_invalid_codes_rejected():
    with pytest.raises(FactorError):
        factor_from_dict({"levels": ["a"], "codes": [3]})


def test_missing_levels_key():
    with pytest.raises(FactorError):
        factor_from_dict({"codes": []})


def test_not_a_mapping():
    with pytest.raises(FactorError):
        factor_from_yaml("- a\n- b\n")
