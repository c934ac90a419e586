"""
Tests for oral-reading analysis

Covers:
- Comprehension summary
- Decoding strategy suggestions
- Breakdown point by grade band
- OralReadingEvaluator end to end
- Oral-reading requests from the command line
"""

import pytest
from src.evaluators.oral_reading import (
    AlignmentResult,
    ComprehensionSummary,
    Insertion,
    Omission,
    OralReadingEvaluator,
    Substitution,
    analyze_decoding_strategy,
    identify_breakdown_point,
)
from src.evaluators.oral_reading.scoring import (
    STRATEGY_GUESSED,
    STRATEGY_SKIPPED,
    STRATEGY_SOUNDED_OUT,
    STRATEGY_SUCCESSFUL,
)
from src.evaluators.tiers import Tier
from evaluate import run_oral_reading


PASSAGE = (
    "Mia found a small bird under the old oak tree. "
    "Its wing was hurt, so she carried it home in her hat."
)


class TestComprehensionSummary:
    """Test comprehension percentages"""

    def test_percentage(self):
        summary = ComprehensionSummary(literal_correct=2, literal_total=3,
                                       inferential_correct=1, inferential_total=2)
        assert summary.correct == 3
        assert summary.total == 5
        assert summary.percentage == 60

    def test_half_rounds_up(self):
        assert ComprehensionSummary(literal_correct=1, literal_total=8).percentage == 13

    def test_empty(self):
        assert ComprehensionSummary().percentage == 0

    def test_from_dict_ignores_extra_keys(self):
        summary = ComprehensionSummary.from_dict({
            'literal_correct': 2, 'literal_total': 3,
            'inferential_correct': 1, 'inferential_total': 2,
            'percentage': 60, 'notes': 'read twice',
        })
        assert summary == ComprehensionSummary(literal_correct=2, literal_total=3,
                                               inferential_correct=1, inferential_total=2)

    def test_from_dict_missing_fields_are_zero(self):
        assert ComprehensionSummary.from_dict({'literal_total': 4}).total == 4
        assert ComprehensionSummary.from_dict({}).percentage == 0


class TestDecodingStrategy:
    """Test decoding strategy suggestions"""

    def test_no_errors(self):
        assert analyze_decoding_strategy(AlignmentResult(), 20) == STRATEGY_SUCCESSFUL

    def test_few_errors_long_passage(self):
        result = AlignmentResult(errors=[Omission('a'), Insertion('b')])
        assert analyze_decoding_strategy(result, 60) == STRATEGY_SUCCESSFUL

    def test_skipping(self):
        result = AlignmentResult(errors=[Omission('big'), Omission('old'), Omission('tree')])
        assert analyze_decoding_strategy(result, 20) == STRATEGY_SKIPPED

    def test_phonetic_substitutions(self):
        result = AlignmentResult(errors=[
            Substitution('house', 'horse'),
            Substitution('cat', 'cap'),
        ])
        assert analyze_decoding_strategy(result, 20) == STRATEGY_SOUNDED_OUT

    def test_guessing(self):
        result = AlignmentResult(errors=[
            Substitution('house', 'tree'),
            Substitution('cat', 'dog'),
        ])
        assert analyze_decoding_strategy(result, 20) == STRATEGY_GUESSED

    def test_moderate_errors(self):
        result = AlignmentResult(errors=[Insertion('a'), Insertion('b'), Insertion('c')])
        assert analyze_decoding_strategy(result, 20) == STRATEGY_SOUNDED_OUT

    def test_nothing_stands_out(self):
        result = AlignmentResult(errors=[Insertion('a')])
        assert analyze_decoding_strategy(result, 10) is None


class TestBreakdownPoint:
    """Test breakdown point thresholds"""

    def test_elementary_decoding(self):
        assert identify_breakdown_point('3-4', 8, None) == 'decoding'
        assert identify_breakdown_point('1-2', 7, None) is None

    def test_secondary_decoding(self):
        assert identify_breakdown_point('5-6', 8, None) is None
        assert identify_breakdown_point('5-6', 16, None) == 'decoding'

    def test_early_band_literal(self):
        summary = ComprehensionSummary(literal_correct=1, literal_total=3,
                                       inferential_correct=1, inferential_total=2,
                                       analytical_correct=1, analytical_total=1)
        assert identify_breakdown_point('1-2', 0, summary) == 'literal'

    def test_inferential_gap(self):
        summary = ComprehensionSummary(literal_correct=3, literal_total=4,
                                       inferential_correct=1, inferential_total=3,
                                       analytical_correct=2, analytical_total=2)
        assert identify_breakdown_point('5-6', 2, summary) == 'inferential'

    def test_analytical_gap(self):
        summary = ComprehensionSummary(literal_correct=3, literal_total=3,
                                       inferential_correct=2, inferential_total=2,
                                       analytical_correct=0, analytical_total=1)
        assert identify_breakdown_point('3-4', 1, summary) == 'analytical'

    def test_no_gap(self):
        summary = ComprehensionSummary(literal_correct=4, literal_total=4,
                                       inferential_correct=3, inferential_total=3,
                                       analytical_correct=2, analytical_total=2)
        assert identify_breakdown_point('5-6', 2, summary) is None


class TestOralReadingEvaluator:
    """Test the evaluator interface"""

    def test_clean_reading(self):
        result = OralReadingEvaluator().evaluate(PASSAGE, PASSAGE)
        assert result.error_count == 0
        assert result.tier == Tier.TIER_1
        assert result.comprehension_tier is None
        assert result.decoding_strategy == STRATEGY_SUCCESSFUL

    def test_errors_are_detected(self):
        spoken = "Mia found a bird under the old oak tree its wing was hurt so she took it home in her hat"
        result = OralReadingEvaluator().evaluate(PASSAGE, spoken)
        assert result.alignment.omissions == ['small']
        assert [(s.expected, s.actual) for s in result.alignment.substitutions] == [('carried', 'took')]
        assert result.error_count == 2

    def test_worse_tier_wins(self):
        summary = ComprehensionSummary(literal_correct=2, literal_total=5)
        result = OralReadingEvaluator().evaluate(PASSAGE, PASSAGE, summary, confirmed_error_count=5)
        assert result.fluency_tier == Tier.TIER_2
        assert result.comprehension_tier == Tier.TIER_3
        assert result.tier == Tier.TIER_3

    def test_confirmed_count_overrides_suggested(self):
        result = OralReadingEvaluator().evaluate(PASSAGE, PASSAGE, confirmed_error_count=9)
        assert result.alignment.suggested_error_count == 0
        assert result.error_count == 9
        assert result.tier == Tier.TIER_3

    def test_breakdown_point(self):
        result = OralReadingEvaluator().evaluate(PASSAGE, '', grade_band='1-2')
        assert result.breakdown_point == 'decoding'
        assert result.breakdown_title == 'IF PRIMARY GAP = DECODING'

    def test_to_dict(self):
        summary = ComprehensionSummary(literal_correct=3, literal_total=4)
        data = OralReadingEvaluator().evaluate(PASSAGE, PASSAGE, summary).to_dict()
        assert data['tier'] == 'Tier 1'
        assert data['comprehension']['percentage'] == 75
        assert data['alignment']['suggestedErrorCount'] == 0


class TestCommandLine:
    """Test the oral-reading request handling in evaluate.py"""

    def test_extra_comprehension_keys_are_ignored(self):
        request = {
            'passage': PASSAGE,
            'transcript': PASSAGE,
            'grade_band': '3-4',
            'comprehension': {'literal_correct': 3, 'literal_total': 3, 'percentage': 100},
        }
        data, report = run_oral_reading(OralReadingEvaluator(), request, 'Ava')
        assert data['comprehension']['percentage'] == 100
        assert '**Comprehension:** 100%' in report

    def test_invalid_comprehension_exits(self, capsys):
        request = {'passage': PASSAGE, 'transcript': PASSAGE,
                   'comprehension': {'literal_total': 'three'}}
        with pytest.raises(SystemExit):
            run_oral_reading(OralReadingEvaluator(), request, 'Ava')
        assert 'ERROR:' in capsys.readouterr().out


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
