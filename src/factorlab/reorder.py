"""
Level reordering operations.

Every function here permutes Factor.levels and leaves each observation's
label untouched. The input factor is never modified.

Ties always keep the original relative order of levels (stable sorts).
"""

import logging
import warnings
from typing import Any, Callable, Hashable, List, Optional, Sequence

from factorlab.aggregators import Aggregator, AggregatorLike, aggregate, last2
from factorlab.model import MISSING, Factor, FactorError, UnknownLevelWarning

logger = logging.getLogger(__name__)


def _check_length(f: Factor, series: Sequence[Any], name: str) -> None:
    if len(series) != len(f):
        raise FactorError(f"`{name}` has length {len(series)}, factor has length {len(f)}")


def _group_by_level(f: Factor, series: Sequence[Any]) -> List[List[Any]]:
    groups: List[List[Any]] = [[] for _ in f.levels]
    for code, value in zip(f.codes, series):
        if code is not MISSING:
            groups[code].append(value)
    return groups


def _order_by_summary(levels: Sequence[Hashable], summaries: Sequence[Any], desc: bool) -> List[Hashable]:
    """Sort levels by summary; levels without a summary go last."""
    known = [(s, level) for s, level in zip(summaries, levels) if s is not None]
    unknown = [level for s, level in zip(summaries, levels) if s is None]
    known = sorted(known, key=lambda pair: pair[0], reverse=desc)
    return [level for _, level in known] + unknown


def fct_reorder(f: Factor, key: Sequence[Any], aggregator: AggregatorLike = Aggregator.MEDIAN,
                desc: bool = False) -> Factor:
    """
    Reorder levels by a summary of another variable.

    Args:
        f: Factor to reorder
        key: Values parallel to f (same length)
        aggregator: Summary applied to each level's key values
        desc: Sort summaries in descending order

    Returns:
        Factor with permuted levels

    Example:
        Order religions by median hours of TV watched:
            fct_reorder(relig, tvhours)
    """
    _check_length(f, key, "key")
    groups = _group_by_level(f, key)
    summaries = [aggregate(aggregator, group) for group in groups]
    return f.with_levels(_order_by_summary(f.levels, summaries, desc))


def fct_reorder2(f: Factor, x: Sequence[Any], y: Sequence[Any],
                 aggregator: Callable[[Sequence[Any], Sequence[Any]], Any] = last2,
                 desc: bool = True) -> Factor:
    """
    Reorder levels by a summary of two paired variables.

    With the default (last2, descending), levels are ordered by the y
    value found at the largest x, so the legend of a line plot lines up
    with the right-hand ends of the lines.
    """
    _check_length(f, x, "x")
    _check_length(f, y, "y")
    xs = _group_by_level(f, x)
    ys = _group_by_level(f, y)
    summaries = [aggregator(gx, gy) for gx, gy in zip(xs, ys)]
    return f.with_levels(_order_by_summary(f.levels, summaries, desc))


def fct_relevel(f: Factor, *labels: Hashable, after: Optional[int] = 0) -> Factor:
    """
    Move named levels to the front (or after a given position).

    Args:
        f: Factor
        *labels: Levels to move, in the order they should appear
        after: Number of remaining levels to place before the moved ones.
            0 puts them first; None puts them last.

    Unknown labels issue UnknownLevelWarning and are ignored.
    """
    unknown = [label for label in labels if not f.has_level(label)]
    if unknown:
        warnings.warn(f"Unknown levels in factor: {', '.join(map(str, unknown))}", UnknownLevelWarning,
                      stacklevel=2)
        logger.debug("fct_relevel ignored unknown levels %s", unknown)

    moved = []
    for label in labels:
        if f.has_level(label) and label not in moved:
            moved.append(label)
    rest = [level for level in f.levels if level not in moved]

    if after is None or after >= len(rest):
        new_levels = rest + moved
    else:
        if after < 0:
            raise FactorError(f"`after` must be non-negative, got {after}")
        new_levels = rest[:after] + moved + rest[after:]
    return f.with_levels(new_levels)


def fct_infreq(f: Factor, desc: bool = True, ordered: Optional[bool] = None) -> Factor:
    """Reorder levels by observed frequency (most frequent first by default)."""
    counts = f.counts()
    new_levels = sorted(f.levels, key=lambda level: counts[level], reverse=desc)
    return f.with_levels(new_levels, ordered=ordered)


def fct_inorder(f: Factor, ordered: Optional[bool] = None) -> Factor:
    """Reorder levels by first appearance in the data; unseen levels go last."""
    seen = []
    seen_codes = set()
    for code in f.codes:
        if code is not MISSING and code not in seen_codes:
            seen_codes.add(code)
            seen.append(f.levels[code])
    unseen = [level for i, level in enumerate(f.levels) if i not in seen_codes]
    return f.with_levels(seen + unseen, ordered=ordered)


def fct_rev(f: Factor) -> Factor:
    """Reverse the level order."""
    return f.with_levels(tuple(reversed(f.levels)))


__all__ = [
    "fct_infreq",
    "fct_inorder",
    "fct_relevel",
    "fct_reorder",
    "fct_reorder2",
    "fct_rev",
]
