"""
Core Factor Model

Defines the fundamental data structure of factorlab: the categorical
variable ("factor").

A Factor is:
    - levels: an ordered sequence of unique valid labels
    - codes: one entry per observation, an index into levels or MISSING
    - ordered: whether the level order carries meaning

ARCHITECTURAL RULE:
    Factors are values.
        - They are immutable (frozen dataclass)
        - Every transformation returns a new Factor
        - They know nothing about CSV, YAML, charts or the CLI
"""

import math
from dataclasses import dataclass, field
from typing import Any, Dict, Hashable, Iterable, Iterator, List, Optional, Sequence, Tuple


# The explicit missing marker. Codes and values use it alike.
MISSING = None


class FactorError(Exception):
    """Raised when a factor is built or transformed with invalid structure."""
    pass


class UnknownLevelWarning(UserWarning):
    """Issued when an operation references a level the factor does not have."""
    pass


def is_missing(value: Any) -> bool:
    """True for None and for float NaN."""
    if value is None:
        return True
    return isinstance(value, float) and math.isnan(value)


@dataclass(frozen=True)
class Factor:
    """
    A categorical variable: values constrained to a fixed set of levels.

    Properties:
        levels:
            Tuple of unique labels, in level order.
            Example: ("apple", "banana", "pear")

        codes:
            Tuple with one entry per observation.
            Each entry is an index into levels, or MISSING (None).
            Example: (2, 0, 1, 0, 2, 0)

        ordered:
            True when the level order is meaningful (e.g. "low" < "high").
            Reordering operations keep this flag unless told otherwise.

    INVARIANTS:
        - levels has no duplicates
        - every non-missing code satisfies 0 <= code < len(levels)

    Both are checked at construction; violations raise FactorError.
    """

    levels: Tuple[Hashable, ...] = ()
    codes: Tuple[Optional[int], ...] = ()
    ordered: bool = False
    _index: Dict[Hashable, int] = field(default=None, init=False, repr=False, compare=False)

    def __post_init__(self):
        levels = tuple(self.levels)
        codes = tuple(self.codes)
        object.__setattr__(self, "levels", levels)
        object.__setattr__(self, "codes", codes)

        index = {}
        for i, level in enumerate(levels):
            if is_missing(level):
                raise FactorError("A missing value cannot be a level")
            if level in index:
                raise FactorError(f"Duplicate level: {level!r}")
            index[level] = i
        object.__setattr__(self, "_index", index)

        n = len(levels)
        for pos, code in enumerate(codes):
            if code is MISSING:
                continue
            if isinstance(code, bool) or not isinstance(code, int) or not 0 <= code < n:
                raise FactorError(f"Invalid code {code!r} at position {pos} for {n} levels")

    @classmethod
    def from_codes(cls, codes: Iterable[Optional[int]], levels: Iterable[Hashable],
                   ordered: bool = False) -> "Factor":
        """
        Build a factor from integer codes and a level set.

        Args:
            codes: Level indices, None for missing
            levels: Level labels

        Returns:
            Factor

        Raises:
            FactorError: On duplicate levels or out-of-range codes
        """
        return cls(levels=tuple(levels), codes=tuple(codes), ordered=ordered)

    # -------------------------------------------------------------------------
    # Sequence protocol
    # -------------------------------------------------------------------------

    def __len__(self) -> int:
        return len(self.codes)

    def __iter__(self) -> Iterator[Optional[Hashable]]:
        levels = self.levels
        for code in self.codes:
            yield MISSING if code is MISSING else levels[code]

    def __getitem__(self, position: int) -> Optional[Hashable]:
        code = self.codes[position]
        return MISSING if code is MISSING else self.levels[code]

    # -------------------------------------------------------------------------
    # Derived properties
    # -------------------------------------------------------------------------

    @property
    def values(self) -> List[Optional[Hashable]]:
        """Observation labels, MISSING where the observation is missing."""
        return list(self)

    @property
    def nlevels(self) -> int:
        return len(self.levels)

    @property
    def n_missing(self) -> int:
        return sum(1 for code in self.codes if code is MISSING)

    def has_level(self, label: Hashable) -> bool:
        return label in self._index

    def index_of(self, label: Hashable) -> Optional[int]:
        """
        Position of a level.

        Returns:
            Index into levels, or None if label is not a level
        """
        return self._index.get(label)

    def counts(self) -> Dict[Hashable, int]:
        """
        Observation count per level, in level order.

        Every level appears, unused ones with 0. Missing observations are
        not counted here; see n_missing.
        """
        tally = [0] * len(self.levels)
        for code in self.codes:
            if code is not MISSING:
                tally[code] += 1
        return dict(zip(self.levels, tally))

    def with_levels(self, new_levels: Sequence[Hashable], ordered: Optional[bool] = None) -> "Factor":
        """
        Return a factor with the same observations and permuted levels.

        new_levels must be a permutation of the current levels.
        """
        new_levels = tuple(new_levels)
        if len(new_levels) != len(self.levels) or set(new_levels) != set(self.levels):
            raise FactorError(
                f"New levels must be a permutation of existing levels; got {list(new_levels)}"
            )
        position = {level: i for i, level in enumerate(new_levels)}
        remap = [position[level] for level in self.levels]
        codes = tuple(MISSING if c is MISSING else remap[c] for c in self.codes)
        return Factor(
            levels=new_levels,
            codes=codes,
            ordered=self.ordered if ordered is None else ordered,
        )


def _encode(values: Sequence[Any], levels: Tuple[Hashable, ...]) -> Tuple[Optional[int], ...]:
    index = {level: i for i, level in enumerate(levels)}
    codes = []
    for value in values:
        if is_missing(value):
            codes.append(MISSING)
        else:
            # Values outside the level set become missing, silently.
            codes.append(index.get(value, MISSING))
    return tuple(codes)


def _unique_in_order(values: Iterable[Any]) -> List[Hashable]:
    seen = set()
    out = []
    for value in values:
        if is_missing(value) or value in seen:
            continue
        seen.add(value)
        out.append(value)
    return out


def factor(values: Iterable[Any], levels: Optional[Iterable[Hashable]] = None,
           ordered: bool = False) -> Factor:
    """
    Construct a factor from raw values.

    Args:
        values: Observations; None/NaN mark missing entries
        levels: Explicit level set. If None, the distinct values in
            sorted order are used.
        ordered: Whether level order is meaningful

    Returns:
        Factor

    Raises:
        FactorError: If explicit levels contain duplicates, or discovered
            levels cannot be sorted (mixed types)

    Example:
        >>> f = factor(["pear", "apple", "pear"], levels=["apple", "banana", "pear"])
        >>> f.counts()
        {'apple': 1, 'banana': 0, 'pear': 2}
    """
    values = list(values)
    if levels is None:
        try:
            level_tuple = tuple(sorted(_unique_in_order(values)))
        except TypeError as e:
            raise FactorError(
                f"Cannot sort discovered levels of mixed types; pass levels explicitly ({e})"
            )
    else:
        level_tuple = tuple(levels)
    # Duplicate levels are rejected by Factor itself.
    return Factor(levels=level_tuple, codes=_encode(values, level_tuple), ordered=ordered)


def as_factor(values: Iterable[Any], ordered: bool = False) -> Factor:
    """Construct a factor whose levels follow first-appearance order."""
    values = list(values)
    level_tuple = tuple(_unique_in_order(values))
    return Factor(levels=level_tuple, codes=_encode(values, level_tuple), ordered=ordered)


__all__ = [
    "MISSING",
    "Factor",
    "FactorError",
    "UnknownLevelWarning",
    "as_factor",
    "factor",
    "is_missing",
]
