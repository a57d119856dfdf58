"""
Aggregators for level reordering.

Reordering by a statistic needs a summary function applied to the key
values of each level. Summaries are named by an enum rather than passed
around as arbitrary code, so a reorder request can be logged,
serialized and selected from the command line.

Callables are still accepted where an Aggregator is expected.
"""

import statistics
from enum import Enum
from typing import Any, Callable, List, Optional, Sequence, Union

from factorlab.model import FactorError, is_missing


class Aggregator(Enum):
    """
    Summary functions supported for fct_reorder.

    Every aggregator here must:
        - Accept a list of numbers
        - Return a single comparable number
    """

    MEDIAN = "median"
    MEAN = "mean"
    MIN = "min"
    MAX = "max"
    SUM = "sum"
    COUNT = "count"
    FIRST = "first"
    LAST = "last"


_FUNCTIONS = {
    Aggregator.MEDIAN: statistics.median,
    Aggregator.MEAN: statistics.fmean,
    Aggregator.MIN: min,
    Aggregator.MAX: max,
    Aggregator.SUM: sum,
    Aggregator.COUNT: len,
    Aggregator.FIRST: lambda xs: xs[0],
    Aggregator.LAST: lambda xs: xs[-1],
}

AggregatorLike = Union[Aggregator, str, Callable[[List[Any]], Any]]


def resolve(aggregator: AggregatorLike) -> Callable[[List[Any]], Any]:
    """
    Turn an Aggregator, its name, or a callable into a callable.

    Raises:
        FactorError: If the name is not a known aggregator
    """
    if isinstance(aggregator, Aggregator):
        return _FUNCTIONS[aggregator]
    if isinstance(aggregator, str):
        try:
            return _FUNCTIONS[Aggregator(aggregator.lower())]
        except ValueError:
            known = ", ".join(a.value for a in Aggregator)
            raise FactorError(f"Unknown aggregator '{aggregator}' (expected one of: {known})")
    if callable(aggregator):
        return aggregator
    raise FactorError(f"Not an aggregator: {aggregator!r}")


def aggregate(aggregator: AggregatorLike, values: Sequence[Any]) -> Optional[Any]:
    """
    Apply an aggregator to values, ignoring missing entries.

    Returns:
        The summary, or None when no values remain
        (COUNT and SUM return 0 instead)
    """
    fn = resolve(aggregator)
    present = [v for v in values if not is_missing(v)]
    if not present:
        return 0 if fn in (len, sum) else None
    return fn(present)


def _pairs(x: Sequence[Any], y: Sequence[Any]) -> List[tuple]:
    return [(a, b) for a, b in zip(x, y) if not is_missing(a) and not is_missing(b)]


def last2(x: Sequence[Any], y: Sequence[Any]) -> Optional[Any]:
    """The y value at the largest x. Ties pick the later observation."""
    pairs = _pairs(x, y)
    if not pairs:
        return None
    best = pairs[0]
    for pair in pairs[1:]:
        if pair[0] >= best[0]:
            best = pair
    return best[1]


def first2(x: Sequence[Any], y: Sequence[Any]) -> Optional[Any]:
    """The y value at the smallest x. Ties pick the earlier observation."""
    pairs = _pairs(x, y)
    if not pairs:
        return None
    best = pairs[0]
    for pair in pairs[1:]:
        if pair[0] < best[0]:
            best = pair
    return best[1]


__all__ = ["Aggregator", "aggregate", "first2", "last2", "resolve"]
