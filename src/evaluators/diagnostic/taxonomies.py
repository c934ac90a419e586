"""
Diagnostic Taxonomies - Static classification data

Contains:
- Math skill patterns (ordered, first match wins)
- ELA skill patterns (ordered, first match wins)
- ELA section keyword sets (ordered, first match wins)
- Skill bucket thresholds for math and ELA reporting
"""

import re
from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class SkillPattern:
    """One entry of an ordered skill pattern list"""
    pattern: re.Pattern
    label: str

    def matches(self, text: str) -> bool:
        return self.pattern.search(text) is not None


def _build(entries) -> Tuple[SkillPattern, ...]:
    return tuple(SkillPattern(re.compile(p, re.IGNORECASE), label) for p, label in entries)


# ==================== MATH SKILLS ====================

# Order matters: "Fractions" sits before "Decimals" so "convert the fraction
# 1/2 to a decimal" resolves to Fractions.
MATH_SKILL_PATTERNS = _build([
    (r'round(ed|ing)?', 'Rounding'),
    (r'multipli|×|times', 'Multiplication'),
    (r'divid|÷|quotient', 'Division'),
    (r'fraction|/\d', 'Fractions'),
    (r'equivalent\s+fraction', 'Equivalent Fractions'),
    (r'add.*fraction|fraction.*add|\+.*\d/\d', 'Adding Fractions'),
    (r'subtract.*fraction|fraction.*subtract|-.*\d/\d', 'Subtracting Fractions'),
    (r'multipl.*fraction|fraction.*multipl', 'Multiplying Fractions'),
    (r'decimal|hundredths?|tenths?|\d\.\d', 'Decimals'),
    (r'greater|less|compar', 'Comparing Numbers'),
    (r'volume|cm³|cubic', 'Volume'),
    (r'area|cm²|square\s+(cm|meter|inch|feet)', 'Area'),
    (r'pattern|sequence|next\s+number', 'Patterns'),
    (r'graph|bar|chart|frequency', 'Reading Graphs'),
    (r'angle|°|degree|right\s+angle', 'Angles'),
    (r'perimeter', 'Perimeter'),
    (r'time|hour|minute|second|clock', 'Time'),
    (r'money|\$|cent|dollar|spend|cost|price|buy', 'Money'),
    (r'measurement|meter|centimeter|inch|feet|convert', 'Measurement'),
    (r'order\s+of\s+operation|pemdas', 'Order of Operations'),
    (r'place\s+value|digit.*place', 'Place Value'),
])

# ==================== ELA SKILLS ====================

ELA_SKILL_PATTERNS = _build([
    (r'main\s+idea|central\s+idea', 'Main Idea'),
    (r'detail|supporting\s+detail', 'Supporting Details'),
    (r'inference|infer|imply|suggest', 'Making Inferences'),
    (r'vocabulary|meaning\s+of|word\s+means|define|definition', 'Vocabulary'),
    (r'context\s+clue', 'Context Clues'),
    (r'synonym|antonym', 'Synonyms & Antonyms'),
    (r'author.?s?\s+purpose|why\s+did\s+the\s+author', "Author's Purpose"),
    (r'point\s+of\s+view|narrator|perspective', 'Point of View'),
    (r'tone|mood', 'Tone & Mood'),
    (r'theme|lesson|moral', 'Theme'),
    (r'cause\s+and\s+effect|because|result', 'Cause & Effect'),
    (r'compare|contrast|similar|different', 'Compare & Contrast'),
    (r'sequence|order\s+of\s+events|first.*then|chronolog', 'Sequence of Events'),
    (r'summary|summarize|retell', 'Summarizing'),
    (r'character\s+trait|character.*feel|character.*chang', 'Character Analysis'),
    (r'setting', 'Setting'),
    (r'plot|conflict|resolution|climax', 'Plot Structure'),
    (r'figurative|metaphor|simile|personif|hyperbole|idiom|onomatopoeia', 'Figurative Language'),
    (r'text\s+structure|organize', 'Text Structure'),
    (r'fact\s+and\s+opinion|fact.*opinion', 'Fact & Opinion'),
    (r'prefix|suffix|root\s+word|word\s+part', 'Word Parts'),
    (r'grammar|noun|verb|adjective|adverb|pronoun|preposition', 'Grammar'),
    (r'punctuat|comma|period|apostrophe|quotation', 'Punctuation'),
    (r'sentence|fragment|run-on|compound|complex', 'Sentence Structure'),
    (r'syllable|phonics|blend|digraph|vowel|consonant', 'Phonics'),
    (r'fluency|reading\s+rate', 'Reading Fluency'),
    (r'comprehension|understand|passage', 'Reading Comprehension'),
    (r'spelling|spell', 'Spelling'),
    (r'writing|essay|paragraph|compose', 'Writing'),
    (r'rhym|poem|poetry|stanza|verse', 'Poetry'),
    (r'fiction|nonfiction|genre|fable|myth|legend', 'Genre Identification'),
    (r'text\s+feature|heading|caption|glossary|index|table\s+of\s+contents', 'Text Features'),
])

# ==================== DEFAULT LABELS ====================

GENERAL_SKILL_SENTINEL = 'general'
WORD_PROBLEM_MARKER = 'word problem'
WORD_PROBLEMS_SKILL = 'Word Problems'
DEFAULT_MATH_SKILL = 'General Math'
DEFAULT_ELA_SKILL = 'General ELA'

ELA_TEST_MARKERS = ('ela', 'english', 'reading')

# ==================== ELA SECTIONS ====================

READING_COMPREHENSION = 'Reading Comprehension'
VOCABULARY = 'Vocabulary'
SPELLING = 'Spelling'
GRAMMAR_CONVENTIONS = 'Grammar & Language Conventions'
WRITING = 'Writing'

ELA_SECTIONS = (READING_COMPREHENSION, VOCABULARY, SPELLING, GRAMMAR_CONVENTIONS, WRITING)

DEFAULT_ELA_SECTION = GRAMMAR_CONVENTIONS

# Checked in order; a skill lands in the first section with a matching keyword.
ELA_SECTION_KEYWORDS = (
    (READING_COMPREHENSION, (
        'reading', 'comprehension', 'main idea', 'inference', 'summary',
        'author', 'passage', 'text structure', 'central idea', 'literary',
        'rhetoric', 'theme', 'character', 'plot', 'setting', 'point of view',
        'compare', 'story', 'detail',
    )),
    (VOCABULARY, (
        'vocab', 'synonym', 'antonym', 'context clue', 'word meaning',
        'word structure', 'prefix', 'suffix', 'root', 'figurative', 'idiom',
        'connotation', 'denotation', 'word', 'definition', 'meaning',
    )),
    (SPELLING, (
        'spell', 'homophone', 'homograph', 'phonics', 'decoding', 'blending',
        'fluency',
    )),
    (GRAMMAR_CONVENTIONS, (
        'grammar', 'punctuation', 'verb', 'subject', 'pronoun', 'adjective',
        'adverb', 'sentence', 'clause', 'conjunction', 'tense', 'agreement',
        'capitalization', 'comma', 'apostrophe', 'possessive',
        'parts of speech', 'modifier', 'contraction',
    )),
    (WRITING, (
        'writ', 'essay', 'narrative', 'opinion', 'persuasive', 'argument',
        'composition', 'paragraph', 'draft',
    )),
)

# Skills containing any of these never enter the ELA section report.
MATH_SKILL_KEYWORDS = (
    'math', 'number', 'arithmetic', 'algebra', 'geometry', 'fraction',
    'decimal', 'multiply', 'division', 'addition', 'subtraction',
    'measurement', 'place value', 'rounding', 'equation',
)

# A skill enters the ELA section report only if it contains one of these.
ELA_SKILL_KEYWORDS = tuple(
    keyword for _, keywords in ELA_SECTION_KEYWORDS for keyword in keywords
) + ('ela', 'english', 'language arts')

# ==================== BUCKET THRESHOLDS ====================

# Math skill analysis: mastered >= 70, developing 50-69, needs support < 50
SKILL_MASTERED_THRESHOLD = 70
SKILL_DEVELOPING_THRESHOLD = 50

# ELA section report: kept separate from the math buckets
ELA_SECTION_THRESHOLDS = {
    'mastered': 85,
    'developing': 70,
}

ELA_SECTION_STATUS = {
    'mastered': 'Mastered',
    'developing': 'Developing',
    'support': 'Support Needed',
}

ELA_SECTION_RECOMMENDATIONS = {
    'Mastered': 'Maintain with weekly reinforcement.',
    'Developing': 'Targeted practice 2-3 times per week.',
    'Support Needed': 'Immediate focused intervention recommended.',
}

MAX_PRIORITY_SECTIONS = 3
MAX_HIGHLIGHTED_SKILLS = 5
