"""
Diagnostic Evaluator Package

Skill-based grading for written diagnostic tests (math and ELA):
- Normalizes every stored test shape to one question list
- Classifies each question into a skill
- Aggregates per-skill mastery and places the student in Tier 1-3
- Refuses to finalize while open-ended answers await manual grading

Usage:
    from src.evaluators.diagnostic import MathDiagnosticEvaluator

    evaluator = MathDiagnosticEvaluator()
    result = evaluator.grade(test['questions'], answers)

    print(result.score)        # 0-100, two decimals
    print(result.tier.label)   # "Tier 1" .. "Tier 3"
    print(result.skill_analysis.needs_support)
"""

from .evaluator import (
    DiagnosticEvaluator,
    MathDiagnosticEvaluator,
    ELADiagnosticEvaluator,
    GradingResult,
    FinalizationResult,
)
from .questions import (
    Question,
    Response,
    Correctness,
    PayloadShape,
    detect_shape,
    normalize_questions,
)
from .skills import Subject, classify_skill, is_ela_skill, map_skill_to_section, subject_for_test
from .scoring import (
    SkillStat, SkillAnalysis, AggregateResult, aggregate,
    is_answer_correct, is_letter_answer_correct,
)
from .sections import SectionResult, SectionReport, aggregate_sections
from .feedback import generate_feedback, generate_report, format_comparative_summary

__all__ = [
    'DiagnosticEvaluator',
    'MathDiagnosticEvaluator',
    'ELADiagnosticEvaluator',
    'GradingResult',
    'FinalizationResult',
    'Question',
    'Response',
    'Correctness',
    'PayloadShape',
    'detect_shape',
    'normalize_questions',
    'Subject',
    'classify_skill',
    'is_ela_skill',
    'map_skill_to_section',
    'subject_for_test',
    'SkillStat',
    'SkillAnalysis',
    'AggregateResult',
    'aggregate',
    'is_answer_correct',
    'is_letter_answer_correct',
    'SectionResult',
    'SectionReport',
    'aggregate_sections',
    'generate_feedback',
    'generate_report',
    'format_comparative_summary',
]
