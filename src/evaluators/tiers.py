"""
Tier Placement - Map scores and error counts to Tier 1-3

Two rule families coexist and use different cut points:
- Written tests: overall percentage (math 80/50, ELA 85/70)
- Oral reading: decoding-error count (fluency) and comprehension
  percentage, effective tier = the worse of the two
"""

from enum import IntEnum
from typing import Optional, Sequence, Tuple


class Tier(IntEnum):
    """Tier 1 is best, Tier 3 needs the most support"""
    TIER_1 = 1
    TIER_2 = 2
    TIER_3 = 3

    @property
    def label(self) -> str:
        return f"Tier {self.value}"

    def __str__(self) -> str:
        return self.label


# (minimum score, tier) checked top-down; anything below falls to Tier 3
WRITTEN_TIER_THRESHOLDS = (
    (80, Tier.TIER_1),
    (50, Tier.TIER_2),
)

ELA_TIER_THRESHOLDS = (
    (85, Tier.TIER_1),
    (70, Tier.TIER_2),
)

COMPREHENSION_TIER_THRESHOLDS = (
    (70, Tier.TIER_1),
    (50, Tier.TIER_2),
)

# (maximum decoding errors, tier) checked top-down
FLUENCY_TIER_LIMITS = (
    (3, Tier.TIER_1),
    (7, Tier.TIER_2),
)

TIER_DESCRIPTIONS = {
    Tier.TIER_1: "Excellent mastery - Student demonstrates strong reading fluency and comprehension.",
    Tier.TIER_2: "Good progress - Student shows understanding but needs targeted practice in specific areas.",
    Tier.TIER_3: "Needs support - Student requires significant intervention and guided reading practice.",
}


def tier_from_score(score: float, thresholds: Sequence[Tuple[float, Tier]]) -> Tier:
    for minimum, tier in thresholds:
        if score >= minimum:
            return tier
    return Tier.TIER_3


def tier_from_count(count: int, limits: Sequence[Tuple[int, Tier]]) -> Tier:
    for maximum, tier in limits:
        if count <= maximum:
            return tier
    return Tier.TIER_3


def written_tier(score: float) -> Tier:
    return tier_from_score(score, WRITTEN_TIER_THRESHOLDS)


def ela_tier(score: float) -> Tier:
    return tier_from_score(score, ELA_TIER_THRESHOLDS)


def fluency_tier(error_count: int) -> Tier:
    return tier_from_count(error_count, FLUENCY_TIER_LIMITS)


def comprehension_tier(percentage: float) -> Tier:
    return tier_from_score(percentage, COMPREHENSION_TIER_THRESHOLDS)


def oral_reading_tier(error_count: int, comprehension_percentage: Optional[float] = None) -> Tier:
    """
    Effective oral-reading tier.

    Fluency and comprehension are tiered independently; the worse one wins.
    Without a comprehension percentage the fluency tier stands alone.
    """
    fluency = fluency_tier(error_count)
    if comprehension_percentage is None:
        return fluency
    return max(fluency, comprehension_tier(comprehension_percentage))


def tier_description(tier: Optional[Tier]) -> str:
    if tier is None:
        return "Unable to determine tier from available data."
    return TIER_DESCRIPTIONS[tier]
