"""
API-Based Oral Answer Evaluation

Uses Anthropic Claude API to grade a student's spoken answer to a
comprehension question against the passage.
Callers fall back to keyword matching if the API is unavailable.
"""

import json
import os
from typing import Dict, Optional
from anthropic import Anthropic

from .fallback import VALID_RESULTS, UNCLEAR


MODEL = "claude-sonnet-4-20250514"
MAX_TOKENS = 500
DEFAULT_CONFIDENCE = 50


SYSTEM_PROMPT = """You are an expert reading comprehension evaluator. Your task is to grade a student's verbal response to a comprehension question.

CRITICAL RULES:
1. ONLY use the provided passage as the source of truth. Do NOT use outside knowledge.
2. Quote evidence directly from the passage when explaining your rationale.
3. Be fair but accurate - partial answers can be marked as correct if they demonstrate understanding.

QUESTION TYPE GUIDELINES:
- LITERAL: Mark correct if the student's answer matches facts stated directly in the passage or uses reasonable synonyms.
- INFERENTIAL: Mark correct if the student makes a reasonable inference supported by passage details. Mark incorrect if it contradicts passage evidence.
- ANALYTICAL: Mark correct if the student provides reasoning that connects evidence to their explanation. Mark unclear if the response is vague or partial.

You must respond with a JSON object with these exact fields:
{
  "suggestedResult": "correct" | "incorrect" | "unclear",
  "confidence": <number 0-100>,
  "rationale": "<1-2 sentences referencing passage evidence>",
  "expectedAnswer": "<short phrase(s) derived from passage that would be correct>"
}"""


EVALUATION_PROMPT = '''PASSAGE:
"""
{passage}
"""

QUESTION ({question_type}):
"{question}"

STUDENT'S VERBAL RESPONSE (transcript):
"{transcript}"

Evaluate whether this response is correct based ONLY on the passage. Return your evaluation as JSON.'''


def evaluate_answer_with_api(
    passage: str,
    question: str,
    transcript: str,
    question_type: str,
    api_key: Optional[str] = None
) -> Dict:
    """
    Evaluate an oral answer using Claude API.

    Args:
        passage: Passage text
        question: Comprehension question
        transcript: Transcript of the student's answer
        question_type: 'literal', 'inferential' or 'analytical'
        api_key: Anthropic API key (or use ANTHROPIC_API_KEY env var)

    Returns:
        Dict with suggestedResult, confidence, rationale, expectedAnswer
    """

    key = api_key or os.environ.get('ANTHROPIC_API_KEY')
    if not key:
        raise ValueError("ANTHROPIC_API_KEY not set")

    client = Anthropic(api_key=key)

    prompt = EVALUATION_PROMPT.format(
        passage=passage,
        question=question,
        transcript=transcript,
        question_type=(question_type or '').upper(),
    )

    response = client.messages.create(
        model=MODEL,
        max_tokens=MAX_TOKENS,
        system=SYSTEM_PROMPT,
        messages=[
            {"role": "user", "content": prompt}
        ]
    )

    response_text = response.content[0].text.strip()

    # Handle potential markdown wrapping
    if response_text.startswith('```'):
        response_text = response_text.split('```')[1]
        if response_text.startswith('json'):
            response_text = response_text[4:]

    try:
        result = json.loads(response_text)
    except json.JSONDecodeError as e:
        raise ValueError(f"Failed to parse API response as JSON: {e}\nResponse: {response_text[:500]}")

    return validate_evaluation(result)


def validate_evaluation(result: Dict) -> Dict:
    """Clamp a grader reply to the allowed result labels and confidence range"""
    if not isinstance(result, dict):
        raise ValueError(f"API response is not a JSON object: {result!r}")

    if result.get('suggestedResult') not in VALID_RESULTS:
        result['suggestedResult'] = UNCLEAR

    confidence = result.get('confidence')
    if isinstance(confidence, bool) or not isinstance(confidence, (int, float)) or not 0 <= confidence <= 100:
        result['confidence'] = DEFAULT_CONFIDENCE

    result.setdefault('rationale', '')
    result.setdefault('expectedAnswer', '')
    return result
