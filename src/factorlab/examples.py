"""
Example datasets for demos and tests.

fruit_factor() is the smallest useful factor: six observations over three
levels. build_example_survey() generates a synthetic social-survey sample
with the kind of categorical columns (marital status, religion, party ID)
and numeric columns (age, TV hours, year) used to demonstrate reordering
and lumping.
"""
import random
from dataclasses import dataclass, field
from typing import List, Optional

from factorlab.model import Factor, factor

FRUIT_VALUES = ["pear", "apple", "banana", "apple", "pear", "apple"]
FRUIT_LEVELS = ["apple", "banana", "pear"]

MARITAL_LEVELS = ["No answer", "Never married", "Separated", "Divorced", "Widowed", "Married"]
RELIGION_LEVELS = [
    "No answer", "Don't know", "Inter-nondenominational", "Native american",
    "Christian", "Orthodox-christian", "Moslem/islam", "Other eastern",
    "Hinduism", "Buddhism", "Other", "None", "Jewish", "Catholic",
    "Protestant", "Not applicable",
]
PARTY_LEVELS = [
    "No answer", "Don't know", "Other party", "Strong republican",
    "Not str republican", "Ind,near rep", "Independent", "Ind,near dem",
    "Not str democrat", "Strong democrat",
]

# Relative weights; a few dominant religions and a long tail of rare ones.
_RELIGION_WEIGHTS = [1, 1, 2, 1, 6, 2, 2, 1, 2, 3, 3, 45, 6, 40, 90, 0]
_MARITAL_WEIGHTS = [1, 20, 4, 16, 8, 51]
_PARTY_WEIGHTS = [1, 1, 2, 10, 13, 9, 16, 12, 17, 14]
_YEARS = [2000, 2002, 2004, 2006, 2008, 2010, 2012, 2014]


def fruit_factor() -> Factor:
    """Fruit example: counts apple 3, banana 1, pear 2."""
    return factor(FRUIT_VALUES, levels=FRUIT_LEVELS)


@dataclass
class SurveySample:
    """
    Parallel columns of a survey sample.

    Every list has one entry per respondent. None marks a missing answer.
    """

    marital: List[str] = field(default_factory=list)
    religion: List[str] = field(default_factory=list)
    party: List[str] = field(default_factory=list)
    age: List[Optional[float]] = field(default_factory=list)
    tvhours: List[Optional[float]] = field(default_factory=list)
    year: List[int] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.marital)

    def marital_factor(self) -> Factor:
        return factor(self.marital, levels=MARITAL_LEVELS)

    def religion_factor(self) -> Factor:
        return factor(self.religion, levels=RELIGION_LEVELS)

    def party_factor(self) -> Factor:
        return factor(self.party, levels=PARTY_LEVELS)


def build_example_survey(respondents: int = 500, seed: int = 2204) -> SurveySample:
    rng = random.Random(seed)
    sample = SurveySample()

    for _ in range(respondents):
        marital = rng.choices(MARITAL_LEVELS, weights=_MARITAL_WEIGHTS)[0]
        age = float(rng.randint(18, 89))
        # Widowed respondents skew older, never-married younger
        if marital == "Widowed":
            age = float(max(age, rng.randint(60, 89)))
        elif marital == "Never married":
            age = float(min(age, rng.randint(18, 45)))

        religion = rng.choices(RELIGION_LEVELS, weights=_RELIGION_WEIGHTS)[0]
        tvhours = float(rng.randint(0, 6))
        if religion in ("Protestant", "Catholic"):
            tvhours += 1.0
        # About one respondent in three skips the TV question
        if rng.random() < 0.3:
            tvhours = None

        sample.marital.append(marital)
        sample.religion.append(religion)
        sample.party.append(rng.choices(PARTY_LEVELS, weights=_PARTY_WEIGHTS)[0])
        sample.age.append(age)
        sample.tvhours.append(tvhours)
        sample.year.append(rng.choice(_YEARS))

    return sample
