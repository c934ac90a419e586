"""
Diagnostic Feedback Generation

Turns a skill analysis into classroom guidance:
- Per-skill actions by bucket
- Placement recommendation by tier
- Markdown report and class summary
"""

from typing import Dict, List, Optional

from .scoring import SkillAnalysis
from .sections import SectionReport
from ..tiers import Tier


SKILL_ACTIONS = {
    'mastered': "Spiral review weekly to retain mastery.",
    'developing': "Reinforce 2-3 times weekly until stable.",
    'needs_support': "Immediate reteach + guided practice required.",
}

PLACEMENT_PATHWAY = {
    Tier.TIER_1: "Enrichment Pod",
    Tier.TIER_2: "Skill Builder Program",
    Tier.TIER_3: "Tier 3 Intensive Plan",
}

TIER_RECOMMENDATIONS = {
    Tier.TIER_1: "Maintain consistency so mastery remains stable as standards become more complex.",
    Tier.TIER_2: "This is the ideal range for strategic reinforcement before the skill gap widens.",
    Tier.TIER_3: (
        "Based on the results, we strongly recommend additional support. "
        "Without targeted intervention, these gaps can compound in the next grade."
    ),
}


def generate_feedback(skill_analysis: SkillAnalysis, tier: Tier) -> Dict[str, str]:
    """
    Generate feedback for a graded attempt

    Returns:
        Dict with summary, strengths, growth, recommendation, placement
    """

    feedback = {}

    mastered = len(skill_analysis.mastered)
    developing = len(skill_analysis.developing)
    support = len(skill_analysis.needs_support)
    feedback['summary'] = (
        f"Skills mastered: {mastered}, developing: {developing}, needs support: {support}."
    )

    if skill_analysis.strengths:
        feedback['strengths'] = "Areas of strength: " + ', '.join(skill_analysis.strengths) + "."
    else:
        feedback['strengths'] = "No skills have reached mastery yet."

    if skill_analysis.weaknesses:
        feedback['growth'] = "Areas for growth: " + ', '.join(skill_analysis.weaknesses) + "."
    elif skill_analysis.developing:
        feedback['growth'] = "Keep reinforcing: " + ', '.join(skill_analysis.developing) + "."
    else:
        feedback['growth'] = "No skills need immediate support."

    feedback['recommendation'] = TIER_RECOMMENDATIONS[tier]
    feedback['placement'] = PLACEMENT_PATHWAY[tier]

    return feedback


def skill_action_rows(skill_analysis: SkillAnalysis) -> List[Dict[str, str]]:
    """One row per skill, weakest bucket first"""
    rows = []
    for bucket in ('needs_support', 'developing', 'mastered'):
        for skill in getattr(skill_analysis, bucket):
            stat = skill_analysis.skill_stats[skill]
            rows.append({
                'skill': skill,
                'score': f"{stat.correct}/{stat.total} ({stat.percentage}%)",
                'action': SKILL_ACTIONS[bucket],
            })
    return rows


def generate_report(
    result,
    student_name: str = "Student",
    section_report: Optional[SectionReport] = None
) -> str:
    """
    Markdown report for one graded attempt

    Args:
        result: GradingResult from DiagnosticEvaluator
        student_name: Name to use in the heading
        section_report: Optional ELA section breakdown
    """

    report = f"""# Diagnostic Report: {student_name}

**Score:** {result.score:.2f}% ({result.correct_count}/{result.total_gradable})
**Placement:** {result.tier.label} ({PLACEMENT_PATHWAY[result.tier]})
"""

    if result.pending_count:
        report += f"\n> {result.pending_count} responses are awaiting manual review and are not scored yet.\n"

    report += "\n---\n\n## Skills\n\n"
    report += "| Skill | Score | Action |\n"
    report += "|-------|-------|--------|\n"
    for row in skill_action_rows(result.skill_analysis):
        report += f"| {row['skill']} | {row['score']} | {row['action']} |\n"

    if section_report is not None and section_report.sections:
        report += "\n---\n\n## ELA Sections\n\n"
        report += "| Section | Score | Status | Action |\n"
        report += "|---------|-------|--------|--------|\n"
        for s in section_report.sections:
            report += f"| {s.section} | {s.percent}% | {s.status} | {s.recommendation} |\n"
        if section_report.priorities:
            report += f"\n**Priorities:** {', '.join(section_report.priorities)}\n"

    report += f"""
---

## Recommendation

{result.feedback.get('recommendation', '')}

{result.feedback.get('strengths', '')}
{result.feedback.get('growth', '')}
"""
    return report


def format_comparative_summary(results: Dict[str, object]) -> str:
    """Class-level table across several graded attempts"""

    summary = "# Diagnostic Results: Comparative Summary\n\n"
    summary += "| Student | Score | Tier | Mastered | Needs Support |\n"
    summary += "|---------|-------|------|----------|---------------|\n"

    tier_counts = {tier: 0 for tier in Tier}
    for name, result in results.items():
        analysis = result.skill_analysis
        tier_counts[result.tier] += 1
        summary += (
            f"| {name} | {result.score:.2f}% | {result.tier.label} | "
            f"{len(analysis.mastered)} | {len(analysis.needs_support)} |\n"
        )

    summary += "\n## Placement\n\n"
    for tier in Tier:
        summary += f"- **{tier.label} ({PLACEMENT_PATHWAY[tier]}):** {tier_counts[tier]} students\n"

    return summary
