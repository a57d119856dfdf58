"""
Recoding, collapsing and lumping of levels.

These operations change the level set itself: renaming labels, merging
several labels into one, or folding rare labels into a catch-all.

Referencing a level the factor does not have is never fatal. It issues
UnknownLevelWarning and the offending entry is ignored.
"""

import logging
import warnings
from dataclasses import dataclass
from typing import Dict, Hashable, Iterable, List, Mapping, Optional, Sequence, Set

from factorlab.model import MISSING, Factor, FactorError, UnknownLevelWarning, is_missing

logger = logging.getLogger(__name__)

DEFAULT_OTHER_LEVEL = "Other"
DEFAULT_MISSING_LEVEL = "(Missing)"


def _warn_unknown(f: Factor, labels: Iterable[Hashable], operation: str) -> None:
    unknown = [label for label in labels if not f.has_level(label)]
    if unknown:
        warnings.warn(
            f"Unknown levels in factor: {', '.join(map(str, unknown))}",
            UnknownLevelWarning,
            stacklevel=3,
        )
        logger.debug("%s ignored unknown levels %s", operation, unknown)


def _revalue(f: Factor, new_labels: Sequence[Optional[Hashable]]) -> Factor:
    """
    Relabel every level, merging levels that receive the same label.

    new_labels is parallel to f.levels. A merged level takes the position
    of its first contributor. A label of None drops the level and makes
    its observations missing.
    """
    new_levels: List[Hashable] = []
    position: Dict[Hashable, int] = {}
    remap: List[Optional[int]] = []
    for label in new_labels:
        if is_missing(label):
            remap.append(MISSING)
            continue
        if label not in position:
            position[label] = len(new_levels)
            new_levels.append(label)
        remap.append(position[label])
    codes = tuple(MISSING if c is MISSING else remap[c] for c in f.codes)
    return Factor(levels=tuple(new_levels), codes=codes, ordered=f.ordered)


def _move_last(f: Factor, label: Hashable) -> Factor:
    if not f.has_level(label):
        return f
    rest = [level for level in f.levels if level != label]
    return f.with_levels(rest + [label])


def _check_other_level(other_level: Hashable) -> None:
    if is_missing(other_level):
        raise FactorError("The catch-all level cannot be a missing value")


def fct_recode(f: Factor, mapping: Mapping[Hashable, Optional[Hashable]]) -> Factor:
    """
    Rename levels by an old -> new mapping.

    Args:
        f: Factor
        mapping: {old_level: new_level}. Unmapped levels pass through.
            Several old levels may map to one new level (they merge).
            Mapping to None removes the level; its observations become missing.

    Returns:
        Recoded factor

    Example:
        fct_recode(party, {"Strong republican": "Republican, strong",
                           "Not str republican": "Republican, weak"})
    """
    _warn_unknown(f, mapping.keys(), "fct_recode")
    new_labels = [mapping.get(level, level) for level in f.levels]
    return _revalue(f, new_labels)


def fct_collapse(f: Factor, groups: Mapping[Hashable, Iterable[Hashable]],
                 other_level: Optional[Hashable] = None) -> Factor:
    """
    Collapse groups of levels into new levels.

    Args:
        f: Factor
        groups: {new_level: [old members...]}
        other_level: If given, every level not named in groups is folded
            into this level, which is placed last

    Returns:
        Collapsed factor

    Raises:
        FactorError: If an old level is listed under two different groups,
            or other_level is NaN
    """
    if other_level is not None:
        _check_other_level(other_level)

    mapping: Dict[Hashable, Hashable] = {}
    members_seen: List[Hashable] = []
    for new, members in groups.items():
        if isinstance(members, str):
            members = [members]
        for old in members:
            if old in mapping and mapping[old] != new:
                raise FactorError(
                    f"Level {old!r} is listed under both {mapping[old]!r} and {new!r}"
                )
            members_seen.append(old)
            mapping[old] = new
    _warn_unknown(f, members_seen, "fct_collapse")

    new_labels = []
    for level in f.levels:
        if level in mapping:
            new_labels.append(mapping[level])
        elif other_level is not None:
            new_labels.append(other_level)
        else:
            new_labels.append(level)
    out = _revalue(f, new_labels)
    if other_level is not None:
        out = _move_last(out, other_level)
    return out


def _lump(f: Factor, to_lump: Set[Hashable], other_level: Hashable) -> Factor:
    _check_other_level(other_level)
    if not to_lump:
        return f
    logger.debug("Lumping %d levels into %r: %s", len(to_lump), other_level, sorted(map(str, to_lump)))
    new_labels = [other_level if level in to_lump else level for level in f.levels]
    return _move_last(_revalue(f, new_labels), other_level)


def _rank_min(values: Sequence[int]) -> List[int]:
    """Rank with ties given the minimum rank (1-based)."""
    ordered = sorted(values)
    first = {}
    for i, v in enumerate(ordered, start=1):
        first.setdefault(v, i)
    return [first[v] for v in values]


def _lump_cutoff(sorted_counts: Sequence[int], existing_other: int = 0) -> int:
    """
    Number of most frequent levels to keep so that the lumped remainder
    is strictly smaller than every kept level.

    sorted_counts must be in descending order and exclude the catch-all.
    existing_other is the count already held by the catch-all level.
    """
    left = sum(sorted_counts) + existing_other
    for i, count in enumerate(sorted_counts):
        left -= count
        if count > left:
            return i + 1
    return len(sorted_counts)


def fct_lump(f: Factor, n: Optional[int] = None, prop: Optional[float] = None,
             other_level: Hashable = DEFAULT_OTHER_LEVEL) -> Factor:
    """
    Lump uncommon levels together into other_level.

    Args:
        f: Factor
        n: Keep the n most frequent levels (ties at the boundary are all
            kept). Negative n keeps the -n least frequent levels.
        prop: Keep levels whose share of non-missing observations exceeds
            prop. Negative prop keeps levels with a share of at most -prop.
        other_level: Label of the catch-all level (placed last)

    With neither n nor prop, the smallest levels are lumped for as long
    as the catch-all stays smaller than every kept level.

    Raises:
        FactorError: If both n and prop are given, or other_level is missing
    """
    if n is not None and prop is not None:
        raise FactorError("Pass at most one of `n` and `prop`")

    counts = f.counts()
    levels = list(f.levels)
    tally = [counts[level] for level in levels]

    if n is not None:
        if n >= 0:
            ranks = _rank_min([-c for c in tally])
            keep = [r <= n for r in ranks]
        else:
            ranks = _rank_min(tally)
            keep = [r <= -n for r in ranks]
    elif prop is not None:
        total = sum(tally)
        shares = [c / total if total else 0.0 for c in tally]
        if prop >= 0:
            keep = [s > prop for s in shares]
        else:
            keep = [s <= -prop for s in shares]
    else:
        # An existing catch-all level already counts toward the remainder
        existing_other = counts.get(other_level, 0)
        candidates = [i for i, level in enumerate(levels) if level != other_level]
        order = sorted(candidates, key=lambda i: tally[i], reverse=True)
        cutoff = _lump_cutoff([tally[i] for i in order], existing_other)
        kept = set(order[:cutoff])
        keep = [i in kept or levels[i] == other_level for i in range(len(levels))]

    to_lump = {level for level, k in zip(levels, keep) if not k}
    return _lump(f, to_lump, other_level)


def fct_lump_min(f: Factor, min: int, other_level: Hashable = DEFAULT_OTHER_LEVEL) -> Factor:
    """Lump levels that appear fewer than `min` times."""
    if min < 0:
        raise FactorError(f"`min` must be non-negative, got {min}")
    counts = f.counts()
    to_lump = {level for level, c in counts.items() if c < min}
    return _lump(f, to_lump, other_level)


def fct_other(f: Factor, keep: Optional[Iterable[Hashable]] = None,
              drop: Optional[Iterable[Hashable]] = None,
              other_level: Hashable = DEFAULT_OTHER_LEVEL) -> Factor:
    """
    Manually replace levels with other_level.

    Exactly one of keep (levels to preserve) or drop (levels to replace)
    must be given.
    """
    if (keep is None) == (drop is None):
        raise FactorError("Pass exactly one of `keep` and `drop`")
    if keep is not None:
        keep = list(keep)
        _warn_unknown(f, keep, "fct_other")
        to_lump = {level for level in f.levels if level not in keep}
    else:
        drop = list(drop)
        _warn_unknown(f, drop, "fct_other")
        to_lump = {level for level in f.levels if level in drop}
    return _lump(f, to_lump, other_level)


def fct_drop(f: Factor, only: Optional[Iterable[Hashable]] = None) -> Factor:
    """Drop unused levels (optionally only those listed in `only`)."""
    counts = f.counts()
    unused = [level for level, c in counts.items() if c == 0]
    if only is not None:
        only = set(only)
        unused = [level for level in unused if level in only]
    if not unused:
        return f
    logger.debug("Dropping unused levels %s", unused)
    unused = set(unused)
    return _revalue(f, [None if level in unused else level for level in f.levels])


def fct_expand(f: Factor, *labels: Hashable) -> Factor:
    """Add levels at the end; existing levels are left alone."""
    new_levels = list(f.levels)
    for label in labels:
        if is_missing(label):
            raise FactorError("A missing value cannot be a level")
        if label not in new_levels:
            new_levels.append(label)
    return Factor(levels=tuple(new_levels), codes=f.codes, ordered=f.ordered)


def fct_na_value_to_level(f: Factor, level: Hashable = DEFAULT_MISSING_LEVEL) -> Factor:
    """Give missing observations an explicit level, added last."""
    if f.n_missing == 0:
        return f
    expanded = fct_expand(f, level)
    target = expanded.index_of(level)
    codes = tuple(target if c is MISSING else c for c in expanded.codes)
    return Factor(levels=expanded.levels, codes=codes, ordered=f.ordered)


@dataclass(frozen=True)
class LevelCount:
    """One row of fct_count output. level is None for the missing row."""
    level: Optional[Hashable]
    n: int
    prop: Optional[float] = None


def fct_count(f: Factor, sort: bool = False, prop: bool = False) -> List[LevelCount]:
    """
    Count observations per level.

    Args:
        sort: Order rows by count (largest first) instead of level order
        prop: Fill in each row's share of all observations

    A trailing row with level=None is added when observations are missing.
    """
    rows = list(f.counts().items())
    if sort:
        rows = sorted(rows, key=lambda row: row[1], reverse=True)
    if f.n_missing:
        rows.append((MISSING, f.n_missing))
    total = len(f)
    return [
        LevelCount(level=level, n=n, prop=(n / total if total else 0.0) if prop else None)
        for level, n in rows
    ]


__all__ = [
    "DEFAULT_MISSING_LEVEL",
    "DEFAULT_OTHER_LEVEL",
    "LevelCount",
    "fct_collapse",
    "fct_count",
    "fct_drop",
    "fct_expand",
    "fct_lump",
    "fct_lump_min",
    "fct_na_value_to_level",
    "fct_other",
    "fct_recode",
]
