"""
Diagnostic Questions - Normalize stored test definitions

Stored tests arrive in one of several legacy shapes:
- FLAT: a list of question objects
- SECTIONED: a list of sections, each with a 'questions' list
- NESTED: a list of items, each with a 'sections' list of the above
- SECTIONS_OBJECT: a mapping with a 'sections' key

All of them normalize to one flat, ordered list of Question records.
Unrecognized shapes normalize to an empty list.
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional, Tuple


MULTIPLE_CHOICE = 'multiple-choice'
WORD_PROBLEM = 'word-problem'
MULTI_STEP = 'multi-step'
SHORT_ANSWER = 'short-answer'
LONG_ANSWER = 'long-answer'


class PayloadShape(Enum):
    FLAT = 'flat'
    SECTIONED = 'sectioned'
    NESTED = 'nested'
    SECTIONS_OBJECT = 'sections_object'
    UNKNOWN = 'unknown'


class Correctness(Enum):
    """Grading state of a single response"""
    CORRECT = 'correct'
    INCORRECT = 'incorrect'
    PENDING_REVIEW = 'pending_review'

    @classmethod
    def from_value(cls, value: Any) -> 'Correctness':
        """Map stored is_correct values (True/False/None or strings) to a state"""
        if isinstance(value, Correctness):
            return value
        if value is True:
            return cls.CORRECT
        if value is False:
            return cls.INCORRECT
        if isinstance(value, str):
            lowered = value.strip().lower()
            if lowered in ('correct', 'true'):
                return cls.CORRECT
            if lowered in ('incorrect', 'false'):
                return cls.INCORRECT
        return cls.PENDING_REVIEW

    @property
    def is_resolved(self) -> bool:
        return self is not Correctness.PENDING_REVIEW

    def to_value(self) -> Optional[bool]:
        if self is Correctness.PENDING_REVIEW:
            return None
        return self is Correctness.CORRECT


@dataclass(frozen=True)
class Question:
    """Canonical question record"""
    id: str
    text: str
    type: str
    number: int
    options: Tuple[str, ...] = ()
    correct_answer: str = ''
    explicit_skill: str = ''
    section: str = ''
    explanation: str = ''
    skill: str = ''

    @property
    def is_multiple_choice(self) -> bool:
        return self.type == MULTIPLE_CHOICE


@dataclass(frozen=True)
class Response:
    """One student response for one question in one attempt"""
    question_id: str
    answer_text: str = ''
    correctness: Correctness = Correctness.PENDING_REVIEW

    @classmethod
    def from_record(cls, record: Dict) -> 'Response':
        """Build from a stored row ({question_id|questionId, answer|answerText, is_correct|isCorrect})"""
        question_id = _first(record, 'question_id', 'questionId', default='')
        answer = _first(record, 'answer', 'answer_text', 'answerText', default='')
        if 'is_correct' in record:
            raw = record['is_correct']
        else:
            raw = record.get('isCorrect')
        return cls(
            question_id=str(question_id),
            answer_text=str(answer),
            correctness=Correctness.from_value(raw),
        )

    def to_dict(self) -> Dict:
        return {
            'questionId': self.question_id,
            'answerText': self.answer_text,
            'isCorrect': self.correctness.to_value(),
        }


def normalize_question_type(raw_type: Any) -> str:
    """Canonicalize stored type strings ('Multiple Choice', 'short_answer', ...)"""
    if not raw_type or not isinstance(raw_type, str):
        return MULTIPLE_CHOICE
    normalized = raw_type.lower().replace('_', '-').replace(' ', '-')
    if 'multiple' in normalized or 'choice' in normalized:
        return MULTIPLE_CHOICE
    if 'word' in normalized or 'problem' in normalized:
        return WORD_PROBLEM
    if 'multi' in normalized and 'step' in normalized:
        return MULTI_STEP
    if 'short' in normalized:
        return SHORT_ANSWER
    if 'long' in normalized or 'essay' in normalized:
        return LONG_ANSWER
    return normalized


def detect_shape(raw: Any) -> PayloadShape:
    """Identify which legacy layout a stored 'questions' payload uses"""
    if isinstance(raw, dict):
        if isinstance(raw.get('sections'), list):
            return PayloadShape.SECTIONS_OBJECT
        return PayloadShape.UNKNOWN

    if not isinstance(raw, list) or not raw:
        return PayloadShape.UNKNOWN

    head = raw[0]
    if not isinstance(head, dict):
        return PayloadShape.UNKNOWN
    if head.get('question') or head.get('question_text') or head.get('id'):
        return PayloadShape.FLAT
    if head.get('questions'):
        return PayloadShape.SECTIONED
    if head.get('sections'):
        return PayloadShape.NESTED
    return PayloadShape.UNKNOWN


def normalize_questions(raw: Any, classifier=None) -> List[Question]:
    """
    Flatten a stored test definition into canonical questions.

    Args:
        raw: The loosely-typed 'questions' payload
        classifier: Optional callable(Question) -> skill label. When given,
            each question's `skill` is filled in.

    Returns:
        Questions numbered 1..n in depth-first encounter order.
    """
    adapter = SHAPE_ADAPTERS.get(detect_shape(raw))
    if adapter is None:
        return []

    questions = []
    for record in adapter(raw):
        question = _normalize_question(record, len(questions) + 1)
        if classifier is not None:
            question = replace(question, skill=classifier(question))
        questions.append(question)
    return questions


# ==================== SHAPE ADAPTERS ====================

def _from_flat(raw: List) -> Iterable[Dict]:
    return (q for q in raw if isinstance(q, dict))


def _from_sections(sections: List) -> Iterable[Dict]:
    for section in sections:
        if not isinstance(section, dict):
            continue
        yield from _from_flat(_as_list(section.get('questions')))


def _from_nested(items: List) -> Iterable[Dict]:
    for item in items:
        if not isinstance(item, dict):
            continue
        yield from _from_sections(_as_list(item.get('sections')))


def _from_sections_object(raw: Dict) -> Iterable[Dict]:
    return _from_sections(_as_list(raw.get('sections')))


SHAPE_ADAPTERS = {
    PayloadShape.FLAT: _from_flat,
    PayloadShape.SECTIONED: _from_sections,
    PayloadShape.NESTED: _from_nested,
    PayloadShape.SECTIONS_OBJECT: _from_sections_object,
}


# ==================== FIELD PRECEDENCE ====================

def _normalize_question(q: Dict, number: int) -> Question:
    options = _first(q, 'options', 'choices', default=[])
    return Question(
        id=str(_first(q, 'id', default=f'q-{number}')),
        text=str(_first(q, 'question', 'question_text', default='')),
        type=normalize_question_type(_first(q, 'type', default=MULTIPLE_CHOICE)),
        number=number,
        options=tuple(str(o) for o in options) if isinstance(options, (list, tuple)) else (),
        correct_answer=str(_first(q, 'correct_answer', 'correctAnswer', default='')),
        explicit_skill=str(_explicit_skill(q)),
        section=str(_first(q, 'section', default='')),
        explanation=str(_first(q, 'explanation', default='')),
    )


def _explicit_skill(q: Dict) -> str:
    # 'topic' wins over 'skill_tag', but a 'general' topic does not hide a real skill_tag
    topic = q.get('topic') or ''
    skill_tag = q.get('skill_tag') or ''
    if topic and topic != 'general':
        return topic
    if skill_tag and skill_tag != 'general':
        return skill_tag
    return topic or skill_tag


def _first(record: Dict, *keys: str, default: Any = None) -> Any:
    for key in keys:
        value = record.get(key)
        if value:
            return value
    return default


def _as_list(value: Any) -> List:
    return value if isinstance(value, list) else []
