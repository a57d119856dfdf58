"""
Factor Summary — Early diagnostics and inventory of a categorical variable.

This module provides lightweight analysis of Factor objects:
    - Level counts and missing-value inventory
    - Unused, rare and dominant levels
    - Warning flags for analysis risk (sparse or lopsided categories)

IMPORTANT: This is read-only. It does NOT modify the factor.
It only produces reports.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Hashable, List, Optional

from factorlab.model import Factor

RARE_SHARE = 0.01
HIGH_MISSING_PERCENT = 20.0
MANY_RARE_LEVELS = 5
DOMINANT_SHARE = 0.9


@dataclass
class FactorReport:
    """Analysis report for a single factor."""

    name: str
    total_observations: int = 0
    total_levels: int = 0
    ordered: bool = False

    # Missing values
    missing: int = 0
    missing_percent: float = 0.0

    # Level inventory
    counts: Dict[Hashable, int] = field(default_factory=dict)
    unused_levels: List[Hashable] = field(default_factory=list)
    rare_levels: List[Hashable] = field(default_factory=list)
    dominant_level: Optional[Hashable] = None
    dominant_share: float = 0.0

    # Warnings and flags
    warnings: List[str] = field(default_factory=list)

    def add_warning(self, msg: str) -> None:
        """Add a warning to the report."""
        if msg not in self.warnings:
            self.warnings.append(msg)


def summarize_factor(f: Factor, name: str = "factor") -> FactorReport:
    """
    Perform analysis of a Factor.

    Checks for:
    - Missing observations
    - Levels never observed
    - Rare levels (share below 1% of non-missing observations)
    - A single level holding most of the data

    Returns a FactorReport with metrics and warnings.
    """
    report = FactorReport(name=name, ordered=f.ordered)
    report.total_observations = len(f)
    report.total_levels = f.nlevels
    report.counts = f.counts()
    report.missing = f.n_missing

    if report.total_observations:
        report.missing_percent = report.missing / report.total_observations * 100

    observed = report.total_observations - report.missing
    for level, count in report.counts.items():
        if count == 0:
            report.unused_levels.append(level)
        elif observed and count / observed < RARE_SHARE:
            report.rare_levels.append(level)

    if observed:
        # max() keeps the first level among ties
        top = max(report.counts, key=lambda level: report.counts[level])
        report.dominant_level = top
        report.dominant_share = report.counts[top] / observed

    # =========================================================================
    # WARNING FLAGS
    # =========================================================================

    if report.total_observations == 0:
        report.add_warning("Empty factor: no observations")

    if report.unused_levels:
        report.add_warning(
            f"Unused levels: {', '.join(map(str, report.unused_levels))}"
        )

    if report.missing_percent > HIGH_MISSING_PERCENT:
        report.add_warning(
            f"High missing share: {report.missing_percent:.1f}% of observations are missing"
        )

    if len(report.rare_levels) > MANY_RARE_LEVELS:
        report.add_warning(
            f"Many rare levels: {len(report.rare_levels)} levels below {RARE_SHARE:.0%}; consider fct_lump"
        )

    if report.total_levels > 1 and report.dominant_share > DOMINANT_SHARE:
        report.add_warning(
            f"Dominant level: {report.dominant_level} holds {report.dominant_share:.0%} of observations"
        )

    return report


__all__ = ["FactorReport", "summarize_factor"]
