"""
Oral Reading Evaluator Package

Scores a student reading a passage aloud:
- Aligns the reading transcript with the passage (omissions,
  substitutions, insertions)
- Places the student from error count and comprehension, worse tier wins
- Suggests a decoding strategy and the primary breakdown point
- Grades spoken comprehension answers (Claude API, keyword fallback)

Usage:
    from src.evaluators.oral_reading import OralReadingEvaluator, ComprehensionSummary

    summary = ComprehensionSummary(literal_correct=3, literal_total=4)
    result = OralReadingEvaluator().evaluate(passage, transcript, summary)

    print(result.alignment.omissions)
    print(result.tier.label)
"""

from .evaluator import OralReadingEvaluator, OralReadingResult, OralAnswerEvaluator
from .alignment import (
    AlignmentResult,
    Omission,
    Substitution,
    Insertion,
    align,
    tokenize,
)
from .fallback import AnswerEvaluation, fallback_evaluation
from .scoring import ComprehensionSummary, analyze_decoding_strategy, identify_breakdown_point
from .api_evaluator import evaluate_answer_with_api

__all__ = [
    'OralReadingEvaluator',
    'OralReadingResult',
    'OralAnswerEvaluator',
    'AlignmentResult',
    'Omission',
    'Substitution',
    'Insertion',
    'align',
    'tokenize',
    'AnswerEvaluation',
    'fallback_evaluation',
    'ComprehensionSummary',
    'analyze_decoding_strategy',
    'identify_breakdown_point',
    'evaluate_answer_with_api',
]
