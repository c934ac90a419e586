"""
Tests for reading-error alignment

Covers:
- Tokenization
- Omissions, insertions, substitutions
- Repair order and the bounded lookahead
"""

import pytest
from src.evaluators.oral_reading import (
    AlignmentResult,
    Insertion,
    Omission,
    Substitution,
    align,
    tokenize,
)


class TestTokenize:
    """Test word tokenization"""

    def test_lowercase_and_punctuation(self):
        assert tokenize('Hello, World! "Yes."') == ['hello', 'world', 'yes']

    def test_punctuation_becomes_space(self):
        assert tokenize("don't stop—now") == ['don', 't', 'stop', 'now']

    def test_empty(self):
        assert tokenize('') == []
        assert tokenize('  ...  ') == []
        assert tokenize(None) == []


class TestAlign:
    """Test the two-cursor walk"""

    def test_identical_text(self):
        result = align('The cat sat on the mat.', 'the cat sat on the mat')
        assert result.errors == []
        assert result.suggested_error_count == 0

    def test_omission(self):
        result = align('the big dog ran', 'the dog ran')
        assert result.errors == [Omission('big')]

    def test_insertion(self):
        result = align('the dog ran', 'the big dog ran')
        assert result.errors == [Insertion('big')]

    def test_substitution(self):
        result = align('the dog ran', 'the dig ran')
        assert result.errors == [Substitution(expected='dog', actual='dig')]

    def test_empty_transcript_is_all_omissions(self):
        result = align('one two three', '')
        assert result.omissions == ['one', 'two', 'three']
        assert result.suggested_error_count == 3

    def test_empty_reference_is_all_insertions(self):
        result = align('', 'one two')
        assert result.insertions == ['one', 'two']

    def test_both_empty(self):
        assert align('', '').suggested_error_count == 0

    def test_trailing_insertions(self):
        result = align('the end', 'the end and more')
        assert result.insertions == ['and', 'more']

    def test_omission_repair_tried_first(self):
        result = align('a b c', 'b a c')
        assert result.errors == [Omission('a'), Insertion('a')]

    def test_lookahead_is_bounded(self):
        # 'six' is five words ahead, beyond the window of three
        result = align('one two three four five six', 'six')
        assert result.errors[0] == Substitution(expected='one', actual='six')
        assert result.omissions == ['two', 'three', 'four', 'five', 'six']
        assert result.suggested_error_count == 6

    def test_lookahead_within_window(self):
        result = align('one two three four', 'four')
        assert result.omissions == ['one', 'two', 'three']
        assert result.substitutions == []

    def test_count_is_sum_of_lists(self):
        result = align('the quick brown fox jumps over the lazy dog',
                       'a quick fox jumped over the very lazy dog')
        assert result.suggested_error_count == (
            len(result.omissions) + len(result.substitutions) + len(result.insertions)
        )

    def test_deterministic(self):
        reference = 'once upon a time there was a little bear'
        spoken = 'once a time there is a big little bear'
        assert align(reference, spoken) == align(reference, spoken)

    def test_word_counts(self):
        result = align('one two three', 'one three')
        assert result.reference_word_count == 3
        assert result.transcript_word_count == 2

    @pytest.mark.parametrize('reference, spoken, expected', [
        ('the quick brown fox', 'the brown fox', [Omission('quick')]),
        ('i see a dog', 'i see a big dog', [Insertion('big')]),
        ('cat sat mat', 'cat sit mat', [Substitution(expected='sat', actual='sit')]),
        ('a b c', '', [Omission('a'), Omission('b'), Omission('c')]),
    ])
    def test_single_error_cases(self, reference, spoken, expected):
        assert align(reference, spoken).errors == expected


class TestAlignmentResult:
    """Test result serialization"""

    def test_to_dict(self):
        result = align('the dog ran home', 'the dig ran')
        data = result.to_dict()
        assert data == {
            'omissions': ['home'],
            'substitutions': [{'expected': 'dog', 'actual': 'dig'}],
            'insertions': [],
            'suggestedErrorCount': 2,
        }

    def test_empty_result(self):
        assert AlignmentResult().to_dict()['suggestedErrorCount'] == 0


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
