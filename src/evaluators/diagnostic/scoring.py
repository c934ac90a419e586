"""
Diagnostic Scoring - Per-skill tallies, skill buckets and overall score

Everything is recomputed from scratch on each call; nothing is mutated
incrementally, so re-grading the same inputs gives the same result.
"""

import math
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Sequence

from .questions import Question, Response, Correctness
from .taxonomies import (
    SKILL_MASTERED_THRESHOLD, SKILL_DEVELOPING_THRESHOLD,
    MAX_HIGHLIGHTED_SKILLS, DEFAULT_MATH_SKILL,
)


def round_half_up(value: float, digits: int = 0) -> float:
    """Round like JavaScript's Math.round (halves go up, not to even)"""
    factor = 10 ** digits
    rounded = math.floor(value * factor + 0.5) / factor
    return int(rounded) if digits == 0 else rounded


def percentage(correct: int, total: int) -> int:
    """Whole-number percentage; 0 when there is nothing to divide by"""
    if total <= 0:
        return 0
    return round_half_up(correct / total * 100)


@dataclass
class SkillStat:
    total: int = 0
    correct: int = 0
    percentage: int = 0
    question_ids: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict:
        return {
            'total': self.total,
            'correct': self.correct,
            'percentage': self.percentage,
            'questionIds': list(self.question_ids),
        }


@dataclass
class SkillAnalysis:
    mastered: List[str] = field(default_factory=list)
    developing: List[str] = field(default_factory=list)
    needs_support: List[str] = field(default_factory=list)
    skill_stats: Dict[str, SkillStat] = field(default_factory=dict)

    @property
    def strengths(self) -> List[str]:
        return self.mastered[:MAX_HIGHLIGHTED_SKILLS]

    @property
    def weaknesses(self) -> List[str]:
        return self.needs_support[:MAX_HIGHLIGHTED_SKILLS]

    def to_dict(self) -> Dict:
        return {
            'mastered': list(self.mastered),
            'developing': list(self.developing),
            'needsSupport': list(self.needs_support),
            'skillStats': {skill: stat.to_dict() for skill, stat in self.skill_stats.items()},
        }


@dataclass
class AggregateResult:
    skill_analysis: SkillAnalysis
    correct_count: int
    total_gradable: int
    pending_count: int = 0
    pending_question_ids: List[str] = field(default_factory=list)

    @property
    def score(self) -> float:
        return overall_score(self.correct_count, self.total_gradable)


def overall_score(correct_count: int, total_gradable: int) -> float:
    """Overall percentage rounded to two decimals; 0 with nothing gradable"""
    if total_gradable <= 0:
        return 0.0
    return round_half_up(correct_count / total_gradable * 100, 2)


def bucket_skill(pct: float) -> str:
    if pct >= SKILL_MASTERED_THRESHOLD:
        return 'mastered'
    if pct < SKILL_DEVELOPING_THRESHOLD:
        return 'needs_support'
    return 'developing'


def build_skill_analysis(skill_stats: Dict[str, SkillStat]) -> SkillAnalysis:
    """Fill in percentages and sort skills into mastered/developing/needs support"""
    buckets = {'mastered': [], 'developing': [], 'needs_support': []}
    for skill, stat in skill_stats.items():
        stat.percentage = percentage(stat.correct, stat.total)
        buckets[bucket_skill(stat.percentage)].append(skill)

    return SkillAnalysis(
        mastered=sorted(buckets['mastered']),
        developing=sorted(buckets['developing']),
        needs_support=sorted(buckets['needs_support']),
        skill_stats=skill_stats,
    )


def aggregate(
    questions: Sequence[Question],
    responses: Iterable[Response],
    include_manual: bool = False,
    default_skill: str = DEFAULT_MATH_SKILL
) -> AggregateResult:
    """
    Tally responses per skill and overall.

    Args:
        questions: Normalized questions with skills assigned
        responses: Responses for one attempt
        include_manual: Count resolved open-ended responses toward the
            overall score too, and responses whose question is missing
            under default_skill (used once every response is graded)
        default_skill: Label for questions that carry no skill

    Returns:
        AggregateResult; pending responses are reported, never scored
    """

    by_id = {q.id: q for q in questions}
    skill_stats: Dict[str, SkillStat] = {}
    correct_count = 0
    total_gradable = 0
    pending_ids = []

    for response in responses:
        question = by_id.get(response.question_id)
        if question is None:
            print(f"  ⚠ Question {response.question_id} not found in test")
            # Finalized scores still count it, under the default skill
            if not include_manual:
                continue

        if response.correctness is Correctness.PENDING_REVIEW:
            pending_ids.append(response.question_id)
            continue

        is_correct = response.correctness is Correctness.CORRECT
        skill = (question.skill if question else '') or default_skill
        stat = skill_stats.setdefault(skill, SkillStat())
        stat.total += 1
        stat.question_ids.append(response.question_id)
        if is_correct:
            stat.correct += 1

        if include_manual or question.is_multiple_choice:
            total_gradable += 1
            if is_correct:
                correct_count += 1

    return AggregateResult(
        skill_analysis=build_skill_analysis(skill_stats),
        correct_count=correct_count,
        total_gradable=total_gradable,
        pending_count=len(pending_ids),
        pending_question_ids=pending_ids,
    )


def is_answer_correct(answer: Optional[str], correct_answer: str) -> bool:
    """Auto-grade a multiple-choice answer: the stored answer must equal the key"""
    if answer is None or not correct_answer:
        return False
    return answer == correct_answer


def is_letter_answer_correct(answer: Optional[str], correct_answer: str) -> bool:
    """
    Auto-grade a lettered answer.

    An exact match wins; otherwise the first character of the answer,
    upper-cased, must equal the key ('b. fast' matches 'B').
    """
    if not answer or not correct_answer:
        return False
    if answer == correct_answer:
        return True
    return answer[0].upper() == correct_answer
