"""
Text Alignment - Detect reading errors against a reference passage

Greedy two-cursor walk over word tokens with a bounded lookahead:
1. Omission repair: the spoken word appears a little later in the passage
2. Insertion repair: the passage word appears a little later in the speech
3. Substitution: neither repair applies

Repair order matters. It decides how ambiguous mismatches are classified,
so omission repair is always tried before insertion repair.

This is an O(n) approximation, not a minimum edit distance; on some
inputs it reports more errors than an optimal alignment would.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Union


ALIGNMENT_PUNCTUATION = '.,!?;:\'"()-—–'
LOOKAHEAD_WINDOW = 3

_PUNCTUATION_TABLE = str.maketrans({ch: ' ' for ch in ALIGNMENT_PUNCTUATION})


@dataclass(frozen=True)
class Omission:
    """Passage word the reader skipped"""
    word: str

    def to_dict(self) -> Dict:
        return {'type': 'omission', 'word': self.word}


@dataclass(frozen=True)
class Substitution:
    """Passage word the reader replaced with another word"""
    expected: str
    actual: str

    def to_dict(self) -> Dict:
        return {'type': 'substitution', 'expected': self.expected, 'actual': self.actual}


@dataclass(frozen=True)
class Insertion:
    """Spoken word with no counterpart in the passage"""
    word: str

    def to_dict(self) -> Dict:
        return {'type': 'insertion', 'word': self.word}


AlignmentError = Union[Omission, Substitution, Insertion]


@dataclass
class AlignmentResult:
    errors: List[AlignmentError] = field(default_factory=list)
    reference_word_count: int = 0
    transcript_word_count: int = 0

    @property
    def omissions(self) -> List[str]:
        return [e.word for e in self.errors if isinstance(e, Omission)]

    @property
    def substitutions(self) -> List[Substitution]:
        return [e for e in self.errors if isinstance(e, Substitution)]

    @property
    def insertions(self) -> List[str]:
        return [e.word for e in self.errors if isinstance(e, Insertion)]

    @property
    def suggested_error_count(self) -> int:
        return len(self.errors)

    def to_dict(self) -> Dict:
        return {
            'omissions': self.omissions,
            'substitutions': [{'expected': s.expected, 'actual': s.actual} for s in self.substitutions],
            'insertions': self.insertions,
            'suggestedErrorCount': self.suggested_error_count,
        }


def tokenize(text: str) -> List[str]:
    """Lower-case, blank out punctuation, split on whitespace"""
    if not text:
        return []
    return text.lower().translate(_PUNCTUATION_TABLE).split()


def align(reference_text: str, transcript_text: str) -> AlignmentResult:
    """
    Align a transcript of a student's reading against the passage.

    Args:
        reference_text: The passage the student was asked to read
        transcript_text: What the student actually said

    Returns:
        AlignmentResult with errors in the order they were found
    """

    reference = tokenize(reference_text)
    spoken = tokenize(transcript_text)
    errors: List[AlignmentError] = []

    i = 0
    j = 0
    while i < len(reference) or j < len(spoken):
        if i >= len(reference):
            errors.extend(Insertion(word) for word in spoken[j:])
            break
        if j >= len(spoken):
            errors.extend(Omission(word) for word in reference[i:])
            break

        if reference[i] == spoken[j]:
            i += 1
            j += 1
            continue

        skip = _find_ahead(reference, i, spoken[j])
        if skip:
            errors.extend(Omission(word) for word in reference[i:i + skip])
            i += skip
            continue

        skip = _find_ahead(spoken, j, reference[i])
        if skip:
            errors.extend(Insertion(word) for word in spoken[j:j + skip])
            j += skip
            continue

        errors.append(Substitution(expected=reference[i], actual=spoken[j]))
        i += 1
        j += 1

    return AlignmentResult(
        errors=errors,
        reference_word_count=len(reference),
        transcript_word_count=len(spoken),
    )


def _find_ahead(tokens: List[str], start: int, target: str) -> int:
    """Offset (1..LOOKAHEAD_WINDOW) of target after start, or 0"""
    for offset in range(1, LOOKAHEAD_WINDOW + 1):
        pos = start + offset
        if pos >= len(tokens):
            break
        if tokens[pos] == target:
            return offset
    return 0
