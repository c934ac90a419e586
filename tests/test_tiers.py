"""
Tests for tier placement
"""

import pytest
from src.evaluators.tiers import (
    Tier,
    comprehension_tier,
    ela_tier,
    fluency_tier,
    oral_reading_tier,
    tier_description,
    written_tier,
)


class TestWrittenTier:
    """Test the 80/50 written-test table"""

    @pytest.mark.parametrize('score, expected', [
        (100, Tier.TIER_1),
        (80, Tier.TIER_1),
        (79.99, Tier.TIER_2),
        (50, Tier.TIER_2),
        (49.99, Tier.TIER_3),
        (0, Tier.TIER_3),
    ])
    def test_boundaries(self, score, expected):
        assert written_tier(score) == expected

    def test_ela_table(self):
        assert ela_tier(85) == Tier.TIER_1
        assert ela_tier(84) == Tier.TIER_2
        assert ela_tier(70) == Tier.TIER_2
        assert ela_tier(69) == Tier.TIER_3


class TestOralReadingTier:
    """Test fluency, comprehension and the combined tier"""

    @pytest.mark.parametrize('errors, expected', [
        (0, Tier.TIER_1),
        (3, Tier.TIER_1),
        (4, Tier.TIER_2),
        (7, Tier.TIER_2),
        (8, Tier.TIER_3),
    ])
    def test_fluency(self, errors, expected):
        assert fluency_tier(errors) == expected

    @pytest.mark.parametrize('pct, expected', [
        (70, Tier.TIER_1),
        (69, Tier.TIER_2),
        (50, Tier.TIER_2),
        (49, Tier.TIER_3),
    ])
    def test_comprehension(self, pct, expected):
        assert comprehension_tier(pct) == expected

    def test_worse_tier_wins(self):
        assert oral_reading_tier(2, 40) == Tier.TIER_3
        assert oral_reading_tier(5, 40) == Tier.TIER_3
        assert oral_reading_tier(9, 90) == Tier.TIER_3
        assert oral_reading_tier(2, 60) == Tier.TIER_2

    def test_fluency_only_without_comprehension(self):
        assert oral_reading_tier(5) == Tier.TIER_2
        assert oral_reading_tier(2, None) == Tier.TIER_1


class TestTierLabels:
    """Test tier display"""

    def test_label(self):
        assert Tier.TIER_2.label == 'Tier 2'
        assert str(Tier.TIER_3) == 'Tier 3'

    def test_ordering(self):
        assert Tier.TIER_1 < Tier.TIER_3

    def test_description(self):
        assert tier_description(Tier.TIER_1).startswith('Excellent mastery')
        assert tier_description(None) == 'Unable to determine tier from available data.'


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
