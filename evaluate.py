#!/usr/bin/env python3
"""
Evaluate CLI - Grade a diagnostic attempt or oral reading

Reads a JSON request file, runs the chosen evaluator and writes the result
plus a markdown report.
Oral answers use Claude API by default (falls back to keyword matching).

Usage:
    python evaluate.py --input attempts/Ava_Grade4_Math.json --evaluator math
    python evaluate.py --input attempts/Ava_Grade4_Math.json --evaluator math --finalize
    python evaluate.py --input readings/Ava_Passage_A.json --evaluator oral_reading
    python evaluate.py --input answers/Ava_Q3.json --evaluator oral_answer --rule-based

Output:
    outputs/evaluations/{student}_{assignment}_{evaluator}_evaluation.json
    outputs/reports/{student}_{assignment}_{evaluator}_report.md
"""

import argparse
import json
import sys
from pathlib import Path

from src.evaluators import get_evaluator, list_evaluators
from src.evaluators.oral_reading import ComprehensionSummary


def main():
    parser = argparse.ArgumentParser(
        description='Grade a diagnostic attempt or oral reading',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=f"""
Available evaluators: {', '.join(list_evaluators())}

Input files:
    math / ela:    {{"student_name", "assignment", "test_type", "questions",
                     "answers": {{question_id: answer}} or "responses": [...]}}
    oral_reading:  {{"student_name", "assignment", "passage", "transcript",
                     "grade_band", "comprehension", "confirmed_error_count"}}
    oral_answer:   {{"student_name", "assignment", "passage", "question",
                     "transcript", "question_type"}}

Examples:
    # Auto-grade a submitted test
    python evaluate.py --input attempt.json --evaluator math

    # Final score once every open-ended response is graded
    python evaluate.py --input attempt.json --evaluator ela --finalize

    # Keyword matching instead of the API
    python evaluate.py --input answer.json --evaluator oral_answer --rule-based

    # Custom output directory
    python evaluate.py --input attempt.json --evaluator math --output ./my_outputs
        """
    )

    parser.add_argument(
        '--input',
        required=True,
        help='Path to request JSON file'
    )
    parser.add_argument(
        '--evaluator',
        required=True,
        choices=list_evaluators(),
        help=f'Evaluator to use: {", ".join(list_evaluators())}'
    )
    parser.add_argument(
        '--test-type',
        help='Stored test type (overrides the input file, picks the skill list)'
    )
    parser.add_argument(
        '--finalize',
        action='store_true',
        help='Produce the final score from graded responses (refuses while any are pending)'
    )
    parser.add_argument(
        '--output',
        default='./outputs',
        help='Output directory base (default: ./outputs)'
    )
    parser.add_argument(
        '--rule-based',
        action='store_true',
        help='Use keyword matching instead of API for oral answers (API is default)'
    )
    parser.add_argument(
        '--api-key',
        help='Anthropic API key (optional, can also use ANTHROPIC_API_KEY env var)'
    )

    args = parser.parse_args()

    # Validate input path
    input_path = Path(args.input)
    if not input_path.exists():
        print(f"ERROR: Input not found: {input_path}")
        sys.exit(1)

    print(f"\n{'='*60}")
    print(f"LOADING REQUEST")
    print(f"{'='*60}")

    with open(input_path, 'r') as f:
        request = json.load(f)

    student_name = request.get('student_name', 'Unknown')
    assignment = request.get('assignment', 'Unknown')

    print(f"Student: {student_name}")
    print(f"Assignment: {assignment}")

    print(f"\n{'='*60}")
    print(f"EVALUATING with {args.evaluator.upper()}")
    print(f"{'='*60}")

    EvaluatorClass = get_evaluator(args.evaluator)

    if args.evaluator == 'oral_reading':
        eval_data, report = run_oral_reading(EvaluatorClass(), request, student_name)
    elif args.evaluator == 'oral_answer':
        if args.rule_based:
            print("  Using rule-based evaluation")
        else:
            print("  Using API-based evaluation (Claude)")
        evaluator = EvaluatorClass(use_api=not args.rule_based, api_key=args.api_key)
        eval_data, report = run_oral_answer(evaluator, request, student_name)
    else:
        eval_data, report = run_diagnostic(EvaluatorClass(), request, student_name, args)
        if eval_data is None:
            sys.exit(1)

    eval_data = {
        'student': student_name,
        'assignment': assignment,
        'evaluator': args.evaluator,
        **eval_data,
    }

    # Save evaluation
    output_base = Path(args.output)
    eval_dir = output_base / "evaluations"
    report_dir = output_base / "reports"
    eval_dir.mkdir(parents=True, exist_ok=True)
    report_dir.mkdir(parents=True, exist_ok=True)

    safe_name = student_name.replace(' ', '_')
    safe_assignment = assignment.replace(' ', '_')

    eval_path = eval_dir / f"{safe_name}_{safe_assignment}_{args.evaluator}_evaluation.json"
    with open(eval_path, 'w') as f:
        json.dump(eval_data, f, indent=2)

    report_path = report_dir / f"{safe_name}_{safe_assignment}_{args.evaluator}_report.md"
    with open(report_path, 'w') as f:
        f.write(report)

    # Summary
    print(f"\n{'='*60}")
    print("EVALUATION COMPLETE")
    print(f"{'='*60}")
    print(f"Evaluation: {eval_path}")
    print(f"Report: {report_path}")


def run_diagnostic(evaluator, request, student_name, args):
    """Grade, or finalize, a written diagnostic attempt"""
    test_type = args.test_type or request.get('test_type')
    questions = request.get('questions')

    if args.finalize:
        outcome = evaluator.finalize(questions, request.get('responses', []), test_type)
        if not outcome.ready:
            print(f"ERROR: Cannot finalize: {outcome.message}")
            return None, None
        result = outcome.result
    elif 'responses' in request:
        result = evaluator.regrade(questions, request['responses'], test_type)
    else:
        result = evaluator.grade(questions, request.get('answers', {}), test_type)

    print(f"\n✓ Grading complete")
    print(f"  Score: {result.score}% ({result.correct_count}/{result.total_gradable})")
    print(f"  Placement: {result.tier.label}")
    print(f"  Mastered: {len(result.skill_analysis.mastered)} skills")
    print(f"  Needs support: {len(result.skill_analysis.needs_support)} skills")
    if result.pending_count:
        print(f"  ⚠ {result.pending_count} questions still need grading")

    return result.to_dict(), evaluator.generate_report(result, student_name)


def run_oral_reading(evaluator, request, student_name):
    """Align a passage reading and place the student"""
    comprehension = request.get('comprehension')
    summary = None
    if comprehension:
        try:
            summary = ComprehensionSummary.from_dict(comprehension)
        except (AttributeError, TypeError, ValueError) as e:
            print(f"ERROR: Invalid comprehension block: {e}")
            sys.exit(1)

    result = evaluator.evaluate(
        request.get('passage', ''),
        request.get('transcript', ''),
        summary=summary,
        grade_band=request.get('grade_band'),
        confirmed_error_count=request.get('confirmed_error_count'),
    )
    alignment = result.alignment

    print(f"\n✓ Evaluation complete")
    print(f"  Errors: {result.error_count} (suggested {alignment.suggested_error_count})")
    print(f"  Placement: {result.tier.label}")
    if result.breakdown_point:
        print(f"  Breakdown point: {result.breakdown_point}")

    substitutions = ', '.join(f"{s.expected} → {s.actual}" for s in alignment.substitutions)
    comprehension_line = f"{summary.percentage}%" if summary else "N/A"

    report = f"""# Oral Reading Report: {student_name}

**Errors:** {result.error_count}
**Comprehension:** {comprehension_line}
**Placement:** {result.tier.label}

{result.tier_description}

---

## Reading Errors

- **Omissions:** {', '.join(alignment.omissions) or 'None'}
- **Substitutions:** {substitutions or 'None'}
- **Insertions:** {', '.join(alignment.insertions) or 'None'}

**Decoding strategy:** {result.decoding_strategy or 'N/A'}

---

## Primary Breakdown Point

{result.breakdown_title or 'No breakdown point identified.'}
"""
    return result.to_dict(), report


def run_oral_answer(evaluator, request, student_name):
    """Grade one spoken comprehension answer"""
    result = evaluator.evaluate(
        request.get('passage', ''),
        request.get('question', ''),
        request.get('transcript', ''),
        request.get('question_type', 'literal'),
    )

    print(f"\n✓ Evaluation complete")
    print(f"  Suggested: {result.suggested_result} ({result.confidence}% confidence)")

    report = f"""# Oral Answer Review: {student_name}

**Question:** {request.get('question', '')}
**Suggested result:** {result.suggested_result} ({result.confidence}% confidence)

{result.rationale}

**Expected answer:** {result.expected_answer}
"""
    return result.to_dict(), report


if __name__ == "__main__":
    main()
