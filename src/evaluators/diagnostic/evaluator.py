"""
Diagnostic Evaluator - Main grading class for written diagnostic tests

This is the primary interface for diagnostic assessment. It coordinates:
- Question normalization (all stored test shapes)
- Skill classification
- Auto-grading of multiple-choice answers
- Skill aggregation and tier placement
- Finalization once manual grading is complete
- Feedback and report generation
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Union

from .questions import Question, Response, Correctness, normalize_questions
from .skills import Subject, skill_classifier, subject_for_test
from .scoring import SkillAnalysis, aggregate, is_answer_correct, is_letter_answer_correct
from .sections import SectionReport, aggregate_sections
from .feedback import generate_feedback, generate_report
from .taxonomies import DEFAULT_MATH_SKILL, DEFAULT_ELA_SKILL
from ..tiers import Tier, written_tier, ela_tier


@dataclass
class GradingResult:
    """Complete grading output for one attempt"""

    score: float
    correct_count: int
    total_gradable: int
    tier: Tier
    skill_analysis: SkillAnalysis
    pending_count: int = 0
    pending_question_ids: List[str] = field(default_factory=list)
    responses: List[Response] = field(default_factory=list)
    feedback: Dict[str, str] = field(default_factory=dict)
    sections: Optional[SectionReport] = None

    @property
    def strengths(self) -> List[str]:
        return self.skill_analysis.strengths

    @property
    def weaknesses(self) -> List[str]:
        return self.skill_analysis.weaknesses

    def to_dict(self) -> Dict:
        result = {
            'score': self.score,
            'correctCount': self.correct_count,
            'totalGradable': self.total_gradable,
            'tier': self.tier.label,
            'skillAnalysis': self.skill_analysis.to_dict(),
            'pendingCount': self.pending_count,
            'pendingQuestionIds': list(self.pending_question_ids),
            'strengths': self.strengths,
            'weaknesses': self.weaknesses,
            'responses': [r.to_dict() for r in self.responses],
            'feedback': dict(self.feedback),
        }
        if self.sections is not None:
            result['sections'] = self.sections.to_dict()
        return result


@dataclass
class FinalizationResult:
    """Outcome of a finalize request; result is None until nothing is pending"""

    ready: bool
    pending_count: int
    message: str
    result: Optional[GradingResult] = None

    def to_dict(self) -> Dict:
        return {
            'ready': self.ready,
            'pendingCount': self.pending_count,
            'message': self.message,
            'result': self.result.to_dict() if self.result else None,
        }


class DiagnosticEvaluator:
    """
    Grades written diagnostic tests

    Usage:
        evaluator = DiagnosticEvaluator()
        result = evaluator.grade(test['questions'], {'q1': 'B', 'q2': '3/4'})
        print(result.score, result.tier)
        print(result.skill_analysis.needs_support)
    """

    subject = Subject.MATH
    default_skill = DEFAULT_MATH_SKILL

    def __init__(self, cross_subject: bool = False):
        self.cross_subject = cross_subject

    def tier_for(self, score: float) -> Tier:
        return written_tier(score)

    def match_answer(self, answer: str, correct_answer: str) -> bool:
        return is_answer_correct(answer, correct_answer)

    def load_questions(self, raw_questions: Any, test_type: Optional[str] = None) -> List[Question]:
        """Normalize a stored test and assign a skill to every question"""
        subject = subject_for_test(test_type) if test_type else self.subject
        return normalize_questions(raw_questions, skill_classifier(subject, self.cross_subject))

    def grade(
        self,
        raw_questions: Any,
        answers: Union[Dict[str, str], Iterable[Dict]],
        test_type: Optional[str] = None
    ) -> GradingResult:
        """
        Grade a submitted attempt

        Args:
            raw_questions: Stored 'questions' payload in any supported shape
            answers: question_id -> answer text, or response records
            test_type: Optional stored test type, used to pick the subject

        Returns:
            GradingResult. Multiple-choice answers are auto-graded (a missing
            answer is incorrect); everything else waits for manual review.
        """

        questions = self.load_questions(raw_questions, test_type)
        given = _answer_map(answers)

        responses = []
        for question in questions:
            answer = given.get(question.id, '')
            if question.is_multiple_choice:
                correct = self.match_answer(answer, question.correct_answer)
                correctness = Correctness.CORRECT if correct else Correctness.INCORRECT
            else:
                correctness = Correctness.PENDING_REVIEW
            responses.append(Response(question.id, answer, correctness))

        known = {q.id for q in questions}
        for qid in given:
            if qid not in known:
                print(f"  ⚠ Question {qid} not found in test")

        return self._build_result(questions, responses)

    def grade_batch(self, raw_questions: Any, answers_by_student: Dict[str, Any],
                    test_type: Optional[str] = None) -> Dict[str, GradingResult]:
        """Grade several students' answers to the same test"""
        results = {}
        for name, answers in answers_by_student.items():
            results[name] = self.grade(raw_questions, answers, test_type)
            print(f"  ✓ {name}: {results[name].score}% ({results[name].tier.label})")
        return results

    def regrade(self, raw_questions: Any, responses: Iterable[Union[Response, Dict]],
                test_type: Optional[str] = None) -> GradingResult:
        """Recompute skill analysis from stored responses (e.g. after manual grading)"""
        questions = self.load_questions(raw_questions, test_type)
        return self._build_result(questions, _as_responses(responses))

    def finalize(self, raw_questions: Any, responses: Iterable[Union[Response, Dict]],
                 test_type: Optional[str] = None) -> FinalizationResult:
        """
        Produce the authoritative result once every response is graded

        Refuses while any response is pending and reports how many remain.
        All resolved responses, open-ended included, count toward the score.
        """

        responses = _as_responses(responses)
        pending = [r for r in responses if not r.correctness.is_resolved]
        if pending:
            return FinalizationResult(
                ready=False,
                pending_count=len(pending),
                message=f"{len(pending)} questions still need grading",
            )

        questions = self.load_questions(raw_questions, test_type)
        result = self._build_result(questions, responses, include_manual=True)
        print(f"  ✓ Finalized: {result.score}% ({result.tier.label})")
        return FinalizationResult(
            ready=True,
            pending_count=0,
            message="All questions graded",
            result=result,
        )

    def grade_sections(self, raw_questions: Any, responses: Iterable[Union[Response, Dict]],
                       test_type: Optional[str] = None) -> SectionReport:
        """ELA section breakdown for a set of responses"""
        questions = self.load_questions(raw_questions, test_type)
        aggregated = aggregate(questions, _as_responses(responses), default_skill=self.default_skill)
        return aggregate_sections(aggregated.skill_analysis.skill_stats, _skill_types(questions))

    def generate_report(self, result: GradingResult, student_name: str = "Student") -> str:
        return generate_report(result, student_name, result.sections)

    def _build_result(self, questions: List[Question], responses: List[Response],
                      include_manual: bool = False) -> GradingResult:
        aggregated = aggregate(
            questions, responses,
            include_manual=include_manual,
            default_skill=self.default_skill,
        )
        tier = self.tier_for(aggregated.score)
        return GradingResult(
            score=aggregated.score,
            correct_count=aggregated.correct_count,
            total_gradable=aggregated.total_gradable,
            tier=tier,
            skill_analysis=aggregated.skill_analysis,
            pending_count=aggregated.pending_count,
            pending_question_ids=aggregated.pending_question_ids,
            responses=responses,
            feedback=generate_feedback(aggregated.skill_analysis, tier),
            sections=self._sections_for(questions, aggregated.skill_analysis),
        )

    def _sections_for(self, questions: List[Question], analysis: SkillAnalysis) -> Optional[SectionReport]:
        return None


class MathDiagnosticEvaluator(DiagnosticEvaluator):
    """Math diagnostics: 80/50 placement"""


class ELADiagnosticEvaluator(DiagnosticEvaluator):
    """ELA diagnostics: 85/70 placement plus a section breakdown"""

    subject = Subject.ELA
    default_skill = DEFAULT_ELA_SKILL

    def tier_for(self, score: float) -> Tier:
        return ela_tier(score)

    def match_answer(self, answer: str, correct_answer: str) -> bool:
        return is_letter_answer_correct(answer, correct_answer)

    def _sections_for(self, questions: List[Question], analysis: SkillAnalysis) -> Optional[SectionReport]:
        return aggregate_sections(analysis.skill_stats, _skill_types(questions))


def _answer_map(answers: Union[Dict[str, str], Iterable[Dict], None]) -> Dict[str, str]:
    if not answers:
        return {}
    if isinstance(answers, dict):
        return {str(k): '' if v is None else str(v) for k, v in answers.items()}
    result = {}
    for record in answers:
        response = record if isinstance(record, Response) else Response.from_record(record)
        result[response.question_id] = response.answer_text
    return result


def _as_responses(responses: Iterable[Union[Response, Dict]]) -> List[Response]:
    return [r if isinstance(r, Response) else Response.from_record(r) for r in (responses or [])]


def _skill_types(questions: List[Question]) -> Dict[str, str]:
    # First question seen for a skill decides its type
    types = {}
    for q in questions:
        types.setdefault(q.skill, q.type)
    return types
