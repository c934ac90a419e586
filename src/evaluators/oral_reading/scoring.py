"""
Oral Reading Scoring - Comprehension summary, decoding strategy, breakdown point

Inputs for oral-reading tier placement plus two diagnostic reads of the
alignment: which decoding strategy the errors suggest, and where the
student's reading first breaks down.
"""

import math
from dataclasses import dataclass
from typing import Dict, Optional

from .alignment import AlignmentResult


# ==================== DECODING STRATEGIES ====================

STRATEGY_SUCCESSFUL = "Sounded out unfamiliar words successfully"
STRATEGY_SKIPPED = "Skipped difficult words entirely"
STRATEGY_SOUNDED_OUT = "Attempted to sound out but needed help"
STRATEGY_GUESSED = "Guessed at words based on pictures/first letter"

# Few errors over a long passage still counts as successful decoding
FEW_ERRORS = 2
LONG_PASSAGE_WORDS = 50
MIN_OMISSIONS_FOR_SKIPPING = 3
MIN_SUBSTITUTIONS = 2
MODERATE_ERRORS = 3


# ==================== BREAKDOWN POINTS ====================

DECODING = 'decoding'
LITERAL = 'literal'
INFERENTIAL = 'inferential'
ANALYTICAL = 'analytical'

EARLY_GRADE_BAND = '1-2'
ELEMENTARY_GRADE_BANDS = ('1-2', '3-4')
ELEMENTARY_DECODING_ERRORS = 8
SECONDARY_DECODING_ERRORS = 16

BREAKDOWN_TITLES = {
    DECODING: 'IF PRIMARY GAP = DECODING',
    LITERAL: 'IF PRIMARY GAP = LITERAL COMPREHENSION',
    INFERENTIAL: 'IF PRIMARY GAP = INFERENTIAL COMPREHENSION',
    ANALYTICAL: 'IF PRIMARY GAP = ANALYTICAL COMPREHENSION',
}

COMPREHENSION_FIELDS = (
    'literal_correct', 'literal_total',
    'inferential_correct', 'inferential_total',
    'analytical_correct', 'analytical_total',
)


@dataclass
class ComprehensionSummary:
    """Correct answers and question counts per comprehension level"""
    literal_correct: int = 0
    literal_total: int = 0
    inferential_correct: int = 0
    inferential_total: int = 0
    analytical_correct: int = 0
    analytical_total: int = 0

    @classmethod
    def from_dict(cls, data: Dict) -> 'ComprehensionSummary':
        """Read the six count fields; other keys are ignored"""
        return cls(**{name: int(data.get(name) or 0) for name in COMPREHENSION_FIELDS})

    @property
    def correct(self) -> int:
        return self.literal_correct + self.inferential_correct + self.analytical_correct

    @property
    def total(self) -> int:
        return self.literal_total + self.inferential_total + self.analytical_total

    @property
    def percentage(self) -> int:
        if self.total <= 0:
            return 0
        return math.floor(self.correct / self.total * 100 + 0.5)

    def to_dict(self) -> Dict:
        return {
            'literal': {'correct': self.literal_correct, 'total': self.literal_total},
            'inferential': {'correct': self.inferential_correct, 'total': self.inferential_total},
            'analytical': {'correct': self.analytical_correct, 'total': self.analytical_total},
            'percentage': self.percentage,
        }


def analyze_decoding_strategy(result: AlignmentResult, total_words: int) -> Optional[str]:
    """
    Suggest the decoding strategy the error pattern points to.

    Args:
        result: Alignment of the student's reading
        total_words: Words in the passage

    Returns:
        One of the STRATEGY_* labels, or None when nothing stands out
    """

    omissions = len(result.omissions)
    substitutions = result.substitutions
    total_errors = result.suggested_error_count

    if total_errors == 0 or (total_errors <= FEW_ERRORS and total_words > LONG_PASSAGE_WORDS):
        return STRATEGY_SUCCESSFUL

    if omissions >= MIN_OMISSIONS_FOR_SKIPPING and omissions > len(substitutions):
        return STRATEGY_SKIPPED

    # Same first letter (or first two) suggests the reader tried to sound it out
    phonetic = sum(1 for s in substitutions if _sounds_alike(s.expected, s.actual))
    if phonetic >= MIN_SUBSTITUTIONS or (
        len(substitutions) >= MIN_SUBSTITUTIONS and phonetic > len(substitutions) / 2
    ):
        return STRATEGY_SOUNDED_OUT

    if len(substitutions) >= MIN_SUBSTITUTIONS:
        return STRATEGY_GUESSED

    if total_errors >= MODERATE_ERRORS:
        return STRATEGY_SOUNDED_OUT

    return None


def _sounds_alike(expected: str, actual: str) -> bool:
    expected = expected.lower()
    actual = actual.lower()
    if expected[:1] == actual[:1]:
        return True
    return len(expected) > 1 and len(actual) > 1 and expected[:2] == actual[:2]


def identify_breakdown_point(
    grade_band: Optional[str],
    error_count: int,
    summary: Optional[ComprehensionSummary]
) -> Optional[str]:
    """
    Find where reading first breaks down, checked in order:
    decoding, literal, inferential, analytical.

    Decoding breaks down at 8+ errors for grade bands 1-2 and 3-4, 16+
    otherwise. Comprehension gaps use per-band cut points that scale with
    the number of questions at each level.
    """

    elementary = grade_band in ELEMENTARY_GRADE_BANDS
    threshold = ELEMENTARY_DECODING_ERRORS if elementary else SECONDARY_DECODING_ERRORS
    if error_count >= threshold:
        return DECODING

    if summary is None:
        return None

    if grade_band == EARLY_GRADE_BAND:
        literal_gap = summary.literal_correct <= 1
        inferential_gap = summary.inferential_correct == 0
        analytical_gap = summary.analytical_correct == 0
    else:
        literal_gap = summary.literal_correct <= (1 if summary.literal_total <= 3 else 2)
        inferential_gap = summary.inferential_correct <= (0 if summary.inferential_total <= 2 else 1)
        analytical_gap = summary.analytical_correct <= (0 if summary.analytical_total <= 1 else 1)

    if literal_gap:
        return LITERAL
    if inferential_gap:
        return INFERENTIAL
    if analytical_gap:
        return ANALYTICAL
    return None
