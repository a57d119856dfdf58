#!/usr/bin/env python3
"""
Complete Pipeline Demo: survey sample → Factors → Transformations → Charts

Shows the full workflow:
1. Build the example survey sample
2. Reorder religion by median TV hours
3. Recode and collapse party identification
4. Lump rare religions
5. Render the results as text charts
"""

from factorlab.backends import ChartMode, render_counts, save_chart
from factorlab.examples import build_example_survey
from factorlab.recode import fct_collapse, fct_lump, fct_recode
from factorlab.reorder import fct_infreq, fct_relevel, fct_reorder, fct_reorder2, fct_rev


def main():
    print("=" * 80)
    print("COMPLETE PIPELINE DEMO: Sample → Factors → Transformations → Charts")
    print("=" * 80)

    # =========================================================================
    # STEP 1: Build sample
    # =========================================================================
    print("\n1. BUILDING SAMPLE...")
    sample = build_example_survey(respondents=1000)
    relig = sample.religion_factor()
    marital = sample.marital_factor()
    party = sample.party_factor()
    print(f"   ✓ Respondents: {len(sample)}")
    print(f"   ✓ Religion levels: {relig.nlevels}")
    print(f"   ✓ Party levels: {party.nlevels}")

    # =========================================================================
    # STEP 2: Reordering
    # =========================================================================
    print("\n2. REORDERING...")
    by_tv = fct_reorder(relig, sample.tvhours)
    print(f"   ✓ Religion by median TV hours: {list(by_tv.levels)}")
    by_tv = fct_relevel(by_tv, "Not applicable")
    print(f"   ✓ 'Not applicable' moved to front: {by_tv.levels[0]}")
    by_age = fct_reorder2(marital, sample.year, sample.age)
    print(f"   ✓ Marital by age in the latest year: {list(by_age.levels)}")
    marital_freq = fct_rev(fct_infreq(marital))
    print(f"   ✓ Marital, least frequent first: {list(marital_freq.levels)}")

    # =========================================================================
    # STEP 3: Recoding
    # =========================================================================
    print("\n3. RECODING PARTY...")
    recoded = fct_recode(party, {
        "Strong republican": "Republican, strong",
        "Not str republican": "Republican, weak",
        "Ind,near rep": "Independent, near rep",
        "Ind,near dem": "Independent, near dem",
        "Not str democrat": "Democrat, weak",
        "Strong democrat": "Democrat, strong",
        "No answer": "Other",
        "Don't know": "Other",
        "Other party": "Other",
    })
    print(f"   ✓ Recoded levels: {list(recoded.levels)}")
    collapsed = fct_collapse(party, {
        "other": ["No answer", "Don't know", "Other party"],
        "rep": ["Strong republican", "Not str republican"],
        "ind": ["Ind,near rep", "Independent", "Ind,near dem"],
        "dem": ["Not str democrat", "Strong democrat"],
    })
    print(f"   ✓ Collapsed levels: {list(collapsed.levels)}")

    # =========================================================================
    # STEP 4: Lumping
    # =========================================================================
    print("\n4. LUMPING RELIGION...")
    lumped = fct_lump(relig)
    print(f"   ✓ Default lump: {list(lumped.levels)}")
    top10 = fct_lump(relig, n=10)
    print(f"   ✓ Top 10: {list(top10.levels)}")

    # =========================================================================
    # STEP 5: Charts
    # =========================================================================
    print("\n5. RENDERING CHARTS...")
    for mode in ChartMode:
        filename = f"religion_{mode.value}.txt"
        save_chart(fct_infreq(top10), filename, mode=mode)
        print(f"   ✓ Saved {filename}")

    print("\n   Collapsed party:")
    print("-" * 80)
    for line in render_counts(collapsed, mode=ChartMode.BARS).split('\n'):
        print(f"   {line}")

    print("\n" + "=" * 80)
    print("PIPELINE COMPLETE!")
    print("=" * 80)


if __name__ == "__main__":
    main()
