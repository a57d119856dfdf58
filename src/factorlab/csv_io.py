"""
CSV input for factorlab (raw tabular text -> Factor).

Reads one column of a CSV file into a Factor, and numeric columns into
plain lists for use as reorder keys.

CSV Format:
    A header row followed by data rows. Any number of columns.

Syntax Notes:
    - Cells are stripped of surrounding whitespace
    - Cells listed in na_values ("" and "NA" by default) become missing
"""

import csv
import logging
import os
from io import StringIO
from typing import Dict, Iterable, List, Optional, Sequence

from factorlab.model import MISSING, Factor, factor

logger = logging.getLogger(__name__)

DEFAULT_NA_VALUES = ("", "NA")


class CSVParseError(Exception):
    """Raised when CSV parsing fails."""
    pass


def read_csv_columns(csv_content: str) -> Dict[str, List[str]]:
    """
    Parse CSV content into {column: [cells]}.

    Raises:
        CSVParseError: If the CSV has no header or a row is ragged
    """
    reader = csv.DictReader(StringIO(csv_content))

    if reader.fieldnames is None:
        raise CSVParseError("CSV is empty")

    columns: Dict[str, List[str]] = {name.strip(): [] for name in reader.fieldnames}
    for row_num, row in enumerate(reader, start=2):  # Start at 2 (header is line 1)
        if None in row:
            raise CSVParseError(f"Row {row_num} has more cells than the header")
        for name, cell in row.items():
            columns[name.strip()].append((cell or "").strip())
    return columns


def _column(columns: Dict[str, List[str]], column: str) -> List[str]:
    if column not in columns:
        raise CSVParseError(f"Missing required column: {column!r} (have: {', '.join(columns)})")
    return columns[column]


def _na_to_missing(cells: Iterable[str], na_values: Sequence[str]) -> List[Optional[str]]:
    na = set(na_values)
    return [MISSING if cell in na else cell for cell in cells]


def parse_numeric(cells: Iterable[str], na_values: Sequence[str] = DEFAULT_NA_VALUES) -> List[Optional[float]]:
    """
    Convert cells to floats, NA cells to None.

    Raises:
        CSVParseError: If a cell is not a number
    """
    out: List[Optional[float]] = []
    for i, cell in enumerate(_na_to_missing(cells, na_values)):
        if cell is MISSING:
            out.append(MISSING)
            continue
        try:
            out.append(float(cell))
        except ValueError:
            raise CSVParseError(f"Not a number in data row {i + 1}: {cell!r}")
    return out


def parse_csv_string(csv_content: str, column: str, levels: Optional[Sequence[str]] = None,
                     na_values: Sequence[str] = DEFAULT_NA_VALUES, ordered: bool = False) -> Factor:
    """
    Parse one CSV column into a Factor.

    Args:
        csv_content: CSV as string
        column: Header name of the column to read
        levels: Explicit level set; cells outside it become missing
        na_values: Cells treated as missing

    Returns:
        Factor

    Raises:
        CSVParseError: If parsing fails
    """
    columns = read_csv_columns(csv_content)
    cells = _na_to_missing(_column(columns, column), na_values)
    f = factor(cells, levels=levels, ordered=ordered)
    logger.debug("Parsed column %r: %d observations, %d levels, %d missing",
                 column, len(f), f.nlevels, f.n_missing)
    return f


def parse_csv_file(filepath: str, column: str, levels: Optional[Sequence[str]] = None,
                   na_values: Sequence[str] = DEFAULT_NA_VALUES, ordered: bool = False) -> Factor:
    """
    Parse one column of a CSV file into a Factor.

    Raises:
        FileNotFoundError: If file doesn't exist
        CSVParseError: If parsing fails
    """
    return parse_csv_string(read_csv_file(filepath), column, levels=levels,
                            na_values=na_values, ordered=ordered)


def read_csv_file(filepath: str) -> str:
    try:
        with open(filepath, 'r', encoding='utf-8-sig', newline='') as f:
            return f.read()
    except FileNotFoundError:
        raise FileNotFoundError(f"CSV file not found: {os.fspath(filepath)}")


__all__ = [
    "CSVParseError",
    "DEFAULT_NA_VALUES",
    "parse_csv_file",
    "parse_csv_string",
    "parse_numeric",
    "read_csv_columns",
    "read_csv_file",
]
