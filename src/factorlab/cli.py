"""
Command line entry point.

Reads one column of a CSV file as a factor, applies the requested
transformations and prints the result.

Transformations run in a fixed order:
    recode -> lump -> explicit NA -> infreq -> rev -> reorder-by
"""
import argparse
import logging
import sys
from typing import List, Optional

from factorlab.aggregators import Aggregator
from factorlab.backends import ChartMode, render_counts
from factorlab.csv_io import CSVParseError, parse_csv_string, parse_numeric, read_csv_columns, read_csv_file
from factorlab.model import Factor, FactorError
from factorlab.options import FactorOptions, OptionsError, load_options
from factorlab.recode import fct_lump, fct_na_value_to_level, fct_recode
from factorlab.reorder import fct_infreq, fct_reorder, fct_rev
from factorlab.serialization import factor_to_json, factor_to_yaml
from factorlab.summary import summarize_factor

logger = logging.getLogger(__name__)

_CHART_FORMATS = {mode.value: mode for mode in ChartMode}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="factorlab",
        description="Inspect and transform a categorical column of a CSV file",
    )
    parser.add_argument("csv", help="Path to CSV file")
    parser.add_argument("column", help="Column to read as a factor")
    parser.add_argument("--levels", help="Comma-separated explicit level set; other values become missing")
    parser.add_argument("--config", help="YAML options file")
    parser.add_argument("--recode", action="append", default=[], metavar="OLD=NEW",
                        help="Rename a level (repeatable; several OLD may share one NEW)")

    lump = parser.add_mutually_exclusive_group()
    lump.add_argument("--lump", type=int, metavar="N", help="Keep the N most frequent levels")
    lump.add_argument("--lump-default", action="store_true",
                      help="Lump rare levels while the catch-all stays the smallest group")

    parser.add_argument("--explicit-na", action="store_true", help="Turn missing values into a level")
    parser.add_argument("--infreq", action="store_true", help="Order levels by frequency")
    parser.add_argument("--rev", action="store_true", help="Reverse level order")
    parser.add_argument("--reorder-by", metavar="KEYCOL", help="Order levels by a numeric column")
    parser.add_argument("--fun", default=Aggregator.MEDIAN.value,
                        choices=[a.value for a in Aggregator], help="Summary for --reorder-by")
    parser.add_argument("--format", default="table",
                        choices=list(_CHART_FORMATS) + ["json", "yaml"], help="Output format")
    parser.add_argument("--report", action="store_true", help="Print diagnostics after the output")
    return parser


def _parse_recodes(pairs: List[str]) -> dict:
    mapping = {}
    for pair in pairs:
        if "=" not in pair:
            raise FactorError(f"--recode expects OLD=NEW, got {pair!r}")
        old, new = pair.split("=", 1)
        mapping[old.strip()] = new.strip()
    return mapping


def transform(f: Factor, args: argparse.Namespace, opts: FactorOptions,
              columns: Optional[dict] = None) -> Factor:
    """Apply the CLI transformations to f, in order."""
    if args.recode:
        f = fct_recode(f, _parse_recodes(args.recode))
    if args.lump is not None:
        f = fct_lump(f, n=args.lump, other_level=opts.other_level)
    elif args.lump_default:
        f = fct_lump(f, other_level=opts.other_level)
    if args.explicit_na:
        f = fct_na_value_to_level(f, opts.missing_label)
    if args.infreq:
        f = fct_infreq(f)
    if args.rev:
        f = fct_rev(f)
    if args.reorder_by:
        if columns is None or args.reorder_by not in columns:
            raise CSVParseError(f"Missing required column: {args.reorder_by!r}")
        key = parse_numeric(columns[args.reorder_by], na_values=opts.na_values)
        f = fct_reorder(f, key, aggregator=Aggregator(args.fun))
    return f


def render(f: Factor, fmt: str, opts: FactorOptions) -> str:
    if fmt == "json":
        return factor_to_json(f)
    if fmt == "yaml":
        return factor_to_yaml(f).rstrip("\n")
    return render_counts(f, mode=_CHART_FORMATS[fmt], width=opts.chart_width)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        opts = load_options(args.config) if args.config else FactorOptions()
    except (OptionsError, FileNotFoundError) as e:
        logging.basicConfig(level=logging.WARNING)
        logger.error("%s", e)
        return 2

    logging.basicConfig(level=getattr(logging, opts.log_level, logging.WARNING),
                        format="%(levelname)s %(name)s: %(message)s")

    levels = [v.strip() for v in args.levels.split(",")] if args.levels else None
    try:
        content = read_csv_file(args.csv)
        f = parse_csv_string(content, args.column, levels=levels, na_values=opts.na_values)
        columns = read_csv_columns(content) if args.reorder_by else None
        f = transform(f, args, opts, columns)
    except (CSVParseError, FactorError, FileNotFoundError) as e:
        logger.error("%s", e)
        return 2

    print(render(f, args.format, opts))

    if args.report:
        report = summarize_factor(f, name=args.column)
        print()
        print(f"Observations: {report.total_observations}  Levels: {report.total_levels}  "
              f"Missing: {report.missing} ({report.missing_percent:.1f}%)")
        for warning in report.warnings:
            print(f"Warning: {warning}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
