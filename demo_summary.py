"""
Demo: Summarize the example survey's categorical columns and print the reports.
"""

from factorlab.examples import build_example_survey
from factorlab.summary import summarize_factor
from factorlab.serialization import factor_to_yaml


def print_report(report):
    """Pretty-print a FactorReport."""
    print()
    print("=" * 70)
    print(f"FACTOR SUMMARY: {report.name}")
    print("=" * 70)
    print()

    print("📊 BASIC METRICS")
    print(f"  Observations:          {report.total_observations}")
    print(f"  Levels:                {report.total_levels}")
    print(f"  Ordered:               {'YES' if report.ordered else 'NO'}")
    print(f"  Missing:               {report.missing} ({report.missing_percent:.1f}%)")
    print()

    print("📈 LEVEL COUNTS")
    for level, count in report.counts.items():
        print(f"    {level}: {count}")
    print()

    print("🔎 LEVEL INVENTORY")
    print(f"  Unused Levels:         {report.unused_levels if report.unused_levels else 'None'}")
    print(f"  Rare Levels:           {report.rare_levels if report.rare_levels else 'None'}")
    print(f"  Dominant Level:        {report.dominant_level} ({report.dominant_share:.0%})")
    print()

    if report.warnings:
        print("⚠️  WARNINGS")
        for i, warning in enumerate(report.warnings, 1):
            print(f"  {i}. {warning}")
    else:
        print("✨ NO WARNINGS - Factor looks clean!")
    print()


if __name__ == "__main__":
    sample = build_example_survey(respondents=500)

    for name, f in [
        ("marital", sample.marital_factor()),
        ("religion", sample.religion_factor()),
        ("party", sample.party_factor()),
    ]:
        print_report(summarize_factor(f, name=name))

    # Also save one factor to YAML for inspection
    with open("religion_factor.yaml", "w") as fh:
        fh.write(factor_to_yaml(sample.religion_factor()))
    print("✅ Religion factor exported to religion_factor.yaml")
