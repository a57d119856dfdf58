"""
Serialization helpers for Factor objects.

Provides lossless JSON/YAML round-trip via intermediate dict representation.
This module intentionally keeps serialization structure stable and explicit:

    {"levels": [...], "codes": [... null for missing ...], "ordered": bool}
"""
from __future__ import annotations

import json
from typing import Any, Dict

import yaml

from factorlab.model import Factor, FactorError


def factor_to_dict(f: Factor) -> Dict[str, Any]:
    return {
        "levels": list(f.levels),
        "codes": list(f.codes),
        "ordered": f.ordered,
    }


def factor_from_dict(d: Dict[str, Any]) -> Factor:
    if not isinstance(d, dict):
        raise FactorError(f"Expected a mapping, got {type(d).__name__}")
    if "levels" not in d:
        raise FactorError("Serialized factor is missing 'levels'")
    return Factor.from_codes(
        codes=d.get("codes", []),
        levels=d["levels"],
        ordered=bool(d.get("ordered", False)),
    )


def factor_to_json(f: Factor) -> str:
    return json.dumps(factor_to_dict(f), sort_keys=True)


def factor_from_json(s: str) -> Factor:
    d = json.loads(s)
    return factor_from_dict(d)


def factor_to_yaml(f: Factor) -> str:
    return yaml.safe_dump(factor_to_dict(f))


def factor_from_yaml(s: str) -> Factor:
    d = yaml.safe_load(s)
    return factor_from_dict(d)
