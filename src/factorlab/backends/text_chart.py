"""
Plain-text chart generator for factors.

Converts a Factor's level counts into a printable table or bar chart.

Supports multiple modes:
    - TABLE: Level and count columns
    - BARS: Horizontal bar chart, one bar per level
    - PROPORTIONS: Level, count and percentage columns
"""

from enum import Enum
from typing import List

from factorlab.model import Factor
from factorlab.recode import LevelCount, fct_count

NA_LABEL = "<NA>"


class ChartMode(Enum):
    """Rendering modes for count output."""
    TABLE = "table"              # level | n
    BARS = "bars"                # level | ##### n
    PROPORTIONS = "proportions"  # level | n | percent


def _label(row: LevelCount) -> str:
    return NA_LABEL if row.level is None else str(row.level)


def render_counts(f: Factor, mode: ChartMode = ChartMode.TABLE, width: int = 40) -> str:
    """
    Render a factor's level counts as text.

    Args:
        f: Factor to render
        mode: Rendering mode (TABLE, BARS, PROPORTIONS)
        width: Length of the longest bar in BARS mode

    Returns:
        Multi-line string, levels in level order, missing row last
    """
    rows = fct_count(f, prop=True)
    if not rows:
        return "(no levels)"

    label_width = max(len("level"), *(len(_label(r)) for r in rows))
    count_width = max(len("n"), *(len(str(r.n)) for r in rows))
    lines: List[str] = []

    if mode == ChartMode.BARS:
        peak = max(r.n for r in rows)
        for row in rows:
            bar_len = round(row.n / peak * width) if peak else 0
            # Non-zero counts always get at least one mark
            if row.n and bar_len == 0:
                bar_len = 1
            lines.append(f"{_label(row).ljust(label_width)} | {'#' * bar_len} {row.n}".rstrip())
        return "\n".join(lines)

    header = f"{'level'.ljust(label_width)}  {'n'.rjust(count_width)}"
    if mode == ChartMode.PROPORTIONS:
        header += "  percent"
    lines.append(header)
    lines.append("-" * len(header))

    for row in rows:
        line = f"{_label(row).ljust(label_width)}  {str(row.n).rjust(count_width)}"
        if mode == ChartMode.PROPORTIONS:
            line += f"  {row.prop * 100:6.1f}%"
        lines.append(line)

    return "\n".join(lines)


def save_chart(f: Factor, filename: str, mode: ChartMode = ChartMode.TABLE, width: int = 40) -> None:
    """
    Render counts and save to file.

    Args:
        f: Factor to render
        filename: Output file path
        mode: Rendering mode
    """
    text = render_counts(f, mode=mode, width=width)
    with open(filename, 'w') as fh:
        fh.write(text + "\n")


__all__ = ["ChartMode", "render_counts", "save_chart"]
