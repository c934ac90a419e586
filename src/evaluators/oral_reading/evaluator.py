"""
Oral Reading Evaluator - Reading errors, tiers and spoken comprehension answers

Two entry points:
- OralReadingEvaluator: aligns a reading transcript with the passage and
  places the student from error count and comprehension
- OralAnswerEvaluator: grades a spoken answer with the Claude API, falling
  back to keyword matching when the API is unavailable
"""

from dataclasses import dataclass
from typing import Dict, Optional

from .alignment import AlignmentResult, align, tokenize
from .api_evaluator import evaluate_answer_with_api
from .fallback import AnswerEvaluation, fallback_evaluation, UNCLEAR
from .scoring import (
    ComprehensionSummary, analyze_decoding_strategy, identify_breakdown_point,
    BREAKDOWN_TITLES,
)
from ..tiers import (
    Tier, fluency_tier, comprehension_tier, oral_reading_tier, tier_description,
)


MIN_TRANSCRIPT_LENGTH = 3


@dataclass
class OralReadingResult:
    """Complete oral-reading evaluation output"""

    alignment: AlignmentResult
    error_count: int
    fluency_tier: Tier
    tier: Tier
    comprehension_tier: Optional[Tier] = None
    comprehension: Optional[ComprehensionSummary] = None
    decoding_strategy: Optional[str] = None
    breakdown_point: Optional[str] = None

    @property
    def tier_description(self) -> str:
        return tier_description(self.tier)

    @property
    def breakdown_title(self) -> Optional[str]:
        return BREAKDOWN_TITLES.get(self.breakdown_point)

    def to_dict(self) -> Dict:
        return {
            'alignment': self.alignment.to_dict(),
            'errorCount': self.error_count,
            'fluencyTier': self.fluency_tier.label,
            'comprehensionTier': self.comprehension_tier.label if self.comprehension_tier else None,
            'tier': self.tier.label,
            'tierDescription': self.tier_description,
            'comprehension': self.comprehension.to_dict() if self.comprehension else None,
            'decodingStrategy': self.decoding_strategy,
            'breakdownPoint': self.breakdown_point,
        }


class OralReadingEvaluator:
    """
    Evaluates a recorded passage reading

    Usage:
        evaluator = OralReadingEvaluator()
        result = evaluator.evaluate(passage, transcript, summary, grade_band='3-4')
        print(result.alignment.suggested_error_count)
        print(result.tier.label)
    """

    def evaluate(
        self,
        reference: str,
        transcript: str,
        summary: Optional[ComprehensionSummary] = None,
        grade_band: Optional[str] = None,
        confirmed_error_count: Optional[int] = None
    ) -> OralReadingResult:
        """
        Main evaluation pipeline

        Args:
            reference: Passage text
            transcript: Transcript of the student's reading
            summary: Optional comprehension results for the passage questions
            grade_band: Optional grade band ('1-2', '3-4', ...)
            confirmed_error_count: Manually confirmed error count; replaces
                the suggested count for tiering when given

        Returns:
            OralReadingResult
        """

        alignment = align(reference, transcript)
        error_count = alignment.suggested_error_count
        if confirmed_error_count is not None:
            error_count = confirmed_error_count

        has_comprehension = summary is not None and summary.total > 0
        comprehension_pct = summary.percentage if has_comprehension else None

        return OralReadingResult(
            alignment=alignment,
            error_count=error_count,
            fluency_tier=fluency_tier(error_count),
            tier=oral_reading_tier(error_count, comprehension_pct),
            comprehension_tier=comprehension_tier(comprehension_pct) if has_comprehension else None,
            comprehension=summary,
            decoding_strategy=analyze_decoding_strategy(alignment, len(tokenize(reference))),
            breakdown_point=identify_breakdown_point(grade_band, error_count, summary),
        )


class OralAnswerEvaluator:
    """
    Grades spoken answers to comprehension questions

    Usage:
        evaluator = OralAnswerEvaluator()
        result = evaluator.evaluate(passage, question, transcript, 'literal')
        print(result.suggested_result, result.confidence)
    """

    def __init__(self, use_api: bool = True, api_key: Optional[str] = None):
        self.use_api = use_api
        self.api_key = api_key

    def evaluate(
        self,
        passage: str,
        question: str,
        transcript: str,
        question_type: str = 'literal'
    ) -> AnswerEvaluation:
        if not passage or not question or not transcript:
            return AnswerEvaluation(
                suggested_result=UNCLEAR,
                confidence=0,
                rationale='Missing required inputs for evaluation.',
                expected_answer='Unable to determine expected answer.',
            )

        if len(transcript.strip()) < MIN_TRANSCRIPT_LENGTH:
            return AnswerEvaluation(
                suggested_result=UNCLEAR,
                confidence=0,
                rationale='The student response was too short to evaluate.',
                expected_answer='A complete verbal response is needed.',
            )

        if self.use_api:
            try:
                api_result = evaluate_answer_with_api(
                    passage, question, transcript, question_type, self.api_key
                )
                return AnswerEvaluation(
                    suggested_result=api_result['suggestedResult'],
                    confidence=api_result['confidence'],
                    rationale=api_result['rationale'],
                    expected_answer=api_result['expectedAnswer'],
                )
            except Exception as e:
                print(f"  ⚠ API evaluation failed ({e}), falling back to keyword matching")

        return fallback_evaluation(passage, question, transcript, question_type)
