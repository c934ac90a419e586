"""
Tests for skill classification and ELA section mapping
"""

import pytest
from src.evaluators.diagnostic import (
    Question,
    Subject,
    classify_skill,
    map_skill_to_section,
    normalize_questions,
    subject_for_test,
)
from src.evaluators.diagnostic.skills import (
    format_skill_name, is_ela_skill, is_math_skill, skill_classifier,
)


def make_question(text='', section='', explicit_skill=''):
    return Question(
        id='q1', text=text, type='multiple-choice', number=1,
        section=section, explicit_skill=explicit_skill,
    )


class TestExplicitOverride:
    """Test topic / skill_tag overrides"""

    def test_topic_is_formatted(self):
        question = make_question('What is 7 × 8?', explicit_skill='place_value')
        assert classify_skill(question) == 'Place Value'

    def test_hyphenated_topic(self):
        assert classify_skill(make_question(explicit_skill='multi-step')) == 'Multi Step'

    def test_general_sentinel_is_skipped(self):
        question = make_question('What is 7 × 8?', explicit_skill='general')
        assert classify_skill(question) == 'Multiplication'

    def test_topic_wins_over_skill_tag(self):
        raw = [{'id': 'q1', 'topic': 'geometry', 'skill_tag': 'fractions'}]
        questions = normalize_questions(raw, skill_classifier())
        assert questions[0].skill == 'Geometry'

    def test_format_skill_name(self):
        assert format_skill_name('  order_of-operations ') == 'Order Of Operations'


class TestPatternOrder:
    """Test that the first matching pattern wins"""

    def test_fraction_before_decimal(self):
        question = make_question('Convert the fraction 1/2 to a decimal.')
        assert classify_skill(question) == 'Fractions'

    def test_rounding_before_decimal(self):
        question = make_question('What is 3.25 rounded to the nearest tenth?')
        assert classify_skill(question) == 'Rounding'

    def test_multiplication(self):
        assert classify_skill(make_question('What is 7 × 8?')) == 'Multiplication'

    def test_section_label_is_scanned(self):
        question = make_question('Pick the right answer.', section='Perimeter')
        assert classify_skill(question) == 'Perimeter'

    def test_case_insensitive(self):
        assert classify_skill(make_question('Find the PERIMETER of the square.')) == 'Perimeter'

    def test_deterministic(self):
        question = make_question('Which number is greater, 0.5 or 0.45?')
        assert classify_skill(question) == classify_skill(question)


class TestDefaults:
    """Test fallbacks when nothing matches"""

    def test_word_problem_section(self):
        question = make_question('Sam has 5 apples and gets 3 more.', section='Word Problems')
        assert classify_skill(question) == 'Word Problems'

    def test_general_math(self):
        assert classify_skill(make_question('What is 5 + 3?')) == 'General Math'

    def test_general_ela(self):
        assert classify_skill(make_question('What is 5 + 3?'), Subject.ELA) == 'General ELA'

    def test_empty_question(self):
        assert classify_skill(make_question()) == 'General Math'


class TestELASkills:
    """Test the ELA pattern list"""

    def test_main_idea(self):
        question = make_question('What is the main idea of the passage?')
        assert classify_skill(question, Subject.ELA) == 'Main Idea'

    def test_figurative_language(self):
        question = make_question('Which line uses a simile?')
        assert classify_skill(question, Subject.ELA) == 'Figurative Language'

    def test_cross_subject_is_opt_in(self):
        question = make_question('What is 7 × 8?')
        assert classify_skill(question, Subject.ELA) == 'General ELA'
        assert classify_skill(question, Subject.ELA, cross_subject=True) == 'Multiplication'


class TestSubjectForTest:
    """Test subject inference from the test type"""

    @pytest.mark.parametrize('test_type, expected', [
        ('Grade 4 ELA Diagnostic', Subject.ELA),
        ('English', Subject.ELA),
        ('reading-recovery', Subject.ELA),
        ('Grade 5 Math', Subject.MATH),
        (None, Subject.MATH),
    ])
    def test_subject_for_test(self, test_type, expected):
        assert subject_for_test(test_type) == expected


class TestSectionMapping:
    """Test ELA skill -> section mapping"""

    @pytest.mark.parametrize('skill, expected', [
        ('Main Idea', 'Reading Comprehension'),
        ('Making Inferences', 'Reading Comprehension'),
        ('Synonyms & Antonyms', 'Vocabulary'),
        ('Spelling', 'Spelling'),
        ('Punctuation', 'Grammar & Language Conventions'),
        ('Essay Writing', 'Writing'),
        ('Unknown Skill', 'Grammar & Language Conventions'),
    ])
    def test_map_skill_to_section(self, skill, expected):
        assert map_skill_to_section(skill) == expected

    def test_writing_question_type(self):
        assert map_skill_to_section('Punctuation', 'writing') == 'Writing'

    def test_is_math_skill(self):
        assert is_math_skill('Rounding')
        assert is_math_skill('Place Value')
        assert not is_math_skill('Main Idea')

    @pytest.mark.parametrize('skill, expected', [
        ('Main Idea', True),
        ('Spelling', True),
        ('General ELA', True),
        ('English Language Arts', True),
        ('Multiplication', False),
        ('Time', False),
        ('Money', False),
        ('Area', False),
        ('Number Sense', False),
    ])
    def test_is_ela_skill(self, skill, expected):
        assert is_ela_skill(skill) == expected


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
