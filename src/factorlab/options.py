"""
Run options for the factorlab command line.

Options are read from a YAML mapping. Unknown keys are rejected so that a
typo in a config file is reported instead of silently ignored.

Example options.yaml:

    other_level: Other
    missing_label: (Missing)
    na_values: ["", NA, "N/A"]
    chart_width: 30
    log_level: INFO
"""
from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Any, Dict, List, Optional

import yaml

from factorlab.csv_io import DEFAULT_NA_VALUES
from factorlab.model import is_missing
from factorlab.recode import DEFAULT_MISSING_LEVEL, DEFAULT_OTHER_LEVEL


class OptionsError(Exception):
    """Raised when an options file is malformed."""
    pass


@dataclass
class FactorOptions:
    """
    Defaults used by the CLI.

    Properties:
        other_level: Catch-all label for lumping
        missing_label: Level given to missing values when made explicit
        na_values: CSV cells read as missing
        chart_width: Longest bar in BARS output
        log_level: Logging level name for the CLI
    """

    other_level: str = DEFAULT_OTHER_LEVEL
    missing_label: str = DEFAULT_MISSING_LEVEL
    na_values: List[str] = field(default_factory=lambda: list(DEFAULT_NA_VALUES))
    chart_width: int = 40
    log_level: str = "WARNING"


def options_from_dict(d: Optional[Dict[str, Any]]) -> FactorOptions:
    if d is None:
        return FactorOptions()
    if not isinstance(d, dict):
        raise OptionsError(f"Options must be a mapping, got {type(d).__name__}")

    known = {f.name for f in fields(FactorOptions)}
    unknown = sorted(set(d) - known)
    if unknown:
        raise OptionsError(f"Unknown option(s): {', '.join(unknown)}")

    opts = FactorOptions(**d)
    if not isinstance(opts.chart_width, int) or opts.chart_width <= 0:
        raise OptionsError(f"chart_width must be a positive integer, got {opts.chart_width!r}")
    if not isinstance(opts.na_values, list):
        raise OptionsError("na_values must be a list")
    # Cells are compared as strings; YAML may have parsed some entries as numbers or null
    opts.na_values = [str(v) if v is not None else "" for v in opts.na_values]
    for name in ("other_level", "missing_label"):
        value = getattr(opts, name)
        if is_missing(value):
            raise OptionsError(f"{name} must be a label, got {value!r}")
        setattr(opts, name, str(value))
    opts.log_level = str(opts.log_level).upper()
    return opts


def load_options(path: str) -> FactorOptions:
    """
    Load options from a YAML file.

    Raises:
        FileNotFoundError: If the file doesn't exist
        OptionsError: If the content is not a valid options mapping
    """
    with open(path, 'r', encoding='utf-8') as fh:
        try:
            data = yaml.safe_load(fh)
        except yaml.YAMLError as e:
            raise OptionsError(f"Invalid YAML in {path}: {e}")
    return options_from_dict(data)


__all__ = ["FactorOptions", "OptionsError", "load_options", "options_from_dict"]
