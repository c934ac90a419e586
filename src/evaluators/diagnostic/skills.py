"""
Skill Classifier - Assign a skill label to each question

Precedence (first match wins):
1. Explicit override (topic / skill_tag), unless it is the 'general' sentinel
2. Ordered pattern list over question text + section label
3. 'Word Problems' when the section mentions word problems
4. Subject default ('General Math' / 'General ELA')

Also maps skills onto the five ELA report sections.
"""

import re
from enum import Enum
from typing import Optional, Sequence

from .questions import Question
from .taxonomies import (
    SkillPattern, MATH_SKILL_PATTERNS, ELA_SKILL_PATTERNS,
    GENERAL_SKILL_SENTINEL, WORD_PROBLEM_MARKER, WORD_PROBLEMS_SKILL,
    DEFAULT_MATH_SKILL, DEFAULT_ELA_SKILL, ELA_TEST_MARKERS,
    ELA_SECTION_KEYWORDS, DEFAULT_ELA_SECTION, WRITING, MATH_SKILL_KEYWORDS,
    ELA_SKILL_KEYWORDS,
)


class Subject(Enum):
    MATH = 'math'
    ELA = 'ela'


SUBJECT_PATTERNS = {
    Subject.MATH: MATH_SKILL_PATTERNS,
    Subject.ELA: ELA_SKILL_PATTERNS,
}

SUBJECT_DEFAULTS = {
    Subject.MATH: DEFAULT_MATH_SKILL,
    Subject.ELA: DEFAULT_ELA_SKILL,
}


def subject_for_test(test_type: Optional[str]) -> Subject:
    """Infer the subject from a stored test type or test name"""
    lowered = (test_type or '').lower()
    if any(marker in lowered for marker in ELA_TEST_MARKERS):
        return Subject.ELA
    return Subject.MATH


def format_skill_name(skill: str) -> str:
    """'place_value' -> 'Place Value', 'multi-step' -> 'Multi Step'"""
    spaced = re.sub(r'[_-]', ' ', skill)
    return re.sub(r'\b\w', lambda m: m.group(0).upper(), spaced).strip()


def match_skill_pattern(text: str, patterns: Sequence[SkillPattern]) -> Optional[str]:
    """Return the label of the first pattern matching text, in list order"""
    for entry in patterns:
        if entry.matches(text):
            return entry.label
    return None


def classify_skill(
    question: Question,
    subject: Subject = Subject.MATH,
    cross_subject: bool = False
) -> str:
    """
    Resolve the skill label for a question.

    Args:
        question: Normalized question
        subject: Which pattern list and default label to use
        cross_subject: Also try the other subject's patterns before falling
            back to the default

    Returns:
        Skill label (never empty)
    """

    explicit = question.explicit_skill
    if explicit and explicit != GENERAL_SKILL_SENTINEL:
        formatted = format_skill_name(explicit)
        if formatted:
            return formatted

    text = f"{question.text} {question.section}".lower()

    label = match_skill_pattern(text, SUBJECT_PATTERNS[subject])
    if label:
        return label

    if cross_subject:
        other = Subject.MATH if subject is Subject.ELA else Subject.ELA
        label = match_skill_pattern(text, SUBJECT_PATTERNS[other])
        if label:
            return label

    if WORD_PROBLEM_MARKER in question.section.lower():
        return WORD_PROBLEMS_SKILL

    return SUBJECT_DEFAULTS[subject]


def skill_classifier(subject: Subject = Subject.MATH, cross_subject: bool = False):
    """Bind classify_skill to a subject for use with normalize_questions()"""
    def classify(question: Question) -> str:
        return classify_skill(question, subject, cross_subject)
    return classify


# ==================== ELA SECTIONS ====================

def is_math_skill(skill: str) -> bool:
    lowered = skill.lower()
    return any(keyword in lowered for keyword in MATH_SKILL_KEYWORDS)


def is_ela_skill(skill: str) -> bool:
    """Math keywords exclude first; otherwise an ELA keyword is required"""
    if is_math_skill(skill):
        return False
    lowered = skill.lower()
    return any(keyword in lowered for keyword in ELA_SKILL_KEYWORDS)


def map_skill_to_section(skill: str, question_type: Optional[str] = None) -> str:
    """Place an ELA skill into one of the five report sections"""
    if question_type == 'writing':
        return WRITING

    lowered = (skill or '').lower()
    for section, keywords in ELA_SECTION_KEYWORDS:
        if any(keyword in lowered for keyword in keywords):
            return section
    return DEFAULT_ELA_SECTION
