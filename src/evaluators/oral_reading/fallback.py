"""
Fallback Answer Evaluation - Keyword overlap when the AI grader is unavailable

Only literal-recall questions get a verdict. Inferential and analytical
answers need a human, so they always come back 'unclear'.
"""

from dataclasses import dataclass
from typing import Dict, List


CORRECT = 'correct'
INCORRECT = 'incorrect'
UNCLEAR = 'unclear'
VALID_RESULTS = (CORRECT, INCORRECT, UNCLEAR)

LITERAL = 'literal'
INFERENTIAL = 'inferential'
ANALYTICAL = 'analytical'
QUESTION_TYPES = (LITERAL, INFERENTIAL, ANALYTICAL)

MIN_KEYWORD_LENGTH = 4
CORRECT_MATCH_RATIO = 0.5
CORRECT_MIN_MATCHES = 2
INCORRECT_MATCH_RATIO = 0.2


@dataclass
class AnswerEvaluation:
    suggested_result: str
    confidence: int
    rationale: str
    expected_answer: str = ''

    def to_dict(self) -> Dict:
        return {
            'suggestedResult': self.suggested_result,
            'confidence': self.confidence,
            'rationale': self.rationale,
            'expectedAnswer': self.expected_answer,
        }


def keywords(text: str) -> List[str]:
    """Whitespace tokens of 4+ characters, lower-cased, duplicates kept"""
    return [w for w in (text or '').lower().split() if len(w) >= MIN_KEYWORD_LENGTH]


def fallback_evaluation(
    passage: str,
    question: str,
    transcript: str,
    question_type: str
) -> AnswerEvaluation:
    """
    Grade an oral answer by keyword overlap with the passage.

    Args:
        passage: Passage text the question is about
        question: Question text (not used for matching)
        transcript: Transcript of the student's spoken answer
        question_type: 'literal', 'inferential' or 'analytical'

    Returns:
        AnswerEvaluation; confidence stays at or below 70
    """

    if question_type != LITERAL:
        label = (question_type or 'These').capitalize()
        return AnswerEvaluation(
            suggested_result=UNCLEAR,
            confidence=0,
            rationale=f"{label} questions require human evaluation.",
            expected_answer='Please review the passage and evaluate manually.',
        )

    passage_words = set(keywords(passage))
    spoken = keywords(transcript)
    matches = sum(1 for word in spoken if word in passage_words)
    match_ratio = matches / max(len(spoken), 1)

    if match_ratio >= CORRECT_MATCH_RATIO and matches >= CORRECT_MIN_MATCHES:
        result, confidence = CORRECT, min(70, 40 + matches * 10)
    elif match_ratio < INCORRECT_MATCH_RATIO or matches == 0:
        result, confidence = INCORRECT, 40
    else:
        result, confidence = UNCLEAR, 30

    return AnswerEvaluation(
        suggested_result=result,
        confidence=confidence,
        rationale=f"Keyword matching found {matches} relevant terms from the passage. Human review recommended.",
        expected_answer='Based on passage content - please verify manually.',
    )
