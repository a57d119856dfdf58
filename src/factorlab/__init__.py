"""
factorlab — categorical variables ("factors") for Python

A factor is a value drawn from a fixed, finite set of labels ("levels"),
optionally carrying an explicit ordering.

ARCHITECTURAL GUARANTEE:
------------------------
Factors are immutable values.
Every operation returns a new Factor and leaves its input untouched.

Layers:
    model        - Factor, construction, invariants
    reorder      - permute levels (values untouched)
    recode       - rename, merge, lump, drop levels
    summary      - read-only diagnostics
    serialization, csv_io, backends, cli - outer surfaces
"""

from factorlab.model import MISSING, Factor, FactorError, UnknownLevelWarning, as_factor, factor
from factorlab.aggregators import Aggregator, first2, last2
from factorlab.reorder import fct_infreq, fct_inorder, fct_relevel, fct_reorder, fct_reorder2, fct_rev
from factorlab.recode import (
    LevelCount,
    fct_collapse,
    fct_count,
    fct_drop,
    fct_expand,
    fct_lump,
    fct_lump_min,
    fct_na_value_to_level,
    fct_other,
    fct_recode,
)

__version__ = "0.1.0"

__all__ = [
    "Aggregator",
    "Factor",
    "FactorError",
    "LevelCount",
    "MISSING",
    "UnknownLevelWarning",
    "as_factor",
    "factor",
    "fct_collapse",
    "fct_count",
    "fct_drop",
    "fct_expand",
    "fct_infreq",
    "fct_inorder",
    "fct_lump",
    "fct_lump_min",
    "fct_na_value_to_level",
    "fct_other",
    "fct_recode",
    "fct_relevel",
    "fct_reorder",
    "fct_reorder2",
    "fct_rev",
    "first2",
    "last2",
]
