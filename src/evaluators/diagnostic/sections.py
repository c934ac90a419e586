"""
ELA Section Report - Roll skill stats up into the five ELA sections

Uses its own thresholds (Mastered >= 85, Developing >= 70, Support Needed
< 70), independent of the math skill buckets.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .scoring import SkillStat, percentage
from .skills import is_ela_skill, map_skill_to_section
from .taxonomies import (
    ELA_SECTIONS, ELA_SECTION_THRESHOLDS, ELA_SECTION_STATUS,
    ELA_SECTION_RECOMMENDATIONS, MAX_PRIORITY_SECTIONS,
)
from ..tiers import Tier, ela_tier


@dataclass
class SectionResult:
    section: str
    correct: int
    total: int
    percent: int
    status: str
    mastered_skills: List[str] = field(default_factory=list)
    support_skills: List[str] = field(default_factory=list)

    @property
    def recommendation(self) -> str:
        return ELA_SECTION_RECOMMENDATIONS[self.status]

    @property
    def section_key(self) -> str:
        return self.section.lower().replace(' & ', '_').replace(' ', '_')

    def to_dict(self) -> Dict:
        return {
            'section': self.section,
            'sectionKey': self.section_key,
            'correct': self.correct,
            'total': self.total,
            'percent': self.percent,
            'status': self.status,
            'masteredSkills': list(self.mastered_skills),
            'supportSkills': list(self.support_skills),
            'recommendation': self.recommendation,
        }


@dataclass
class SectionReport:
    sections: List[SectionResult]
    overall_correct: int
    overall_total: int

    @property
    def overall_percent(self) -> int:
        return percentage(self.overall_correct, self.overall_total)

    @property
    def tier(self) -> Tier:
        return ela_tier(self.overall_percent)

    @property
    def priorities(self) -> List[str]:
        """Up to three weakest sections that are not yet mastered"""
        ranked = sorted(self.sections, key=lambda s: s.percent)
        weak = [s.section for s in ranked if s.status != ELA_SECTION_STATUS['mastered']]
        return weak[:MAX_PRIORITY_SECTIONS]

    def to_dict(self) -> Dict:
        return {
            'overallPercent': self.overall_percent,
            'overallCorrect': self.overall_correct,
            'overallTotal': self.overall_total,
            'tier': self.tier.label,
            'sectionBreakdown': [s.to_dict() for s in self.sections],
            'priorities': self.priorities,
        }


def section_status(pct: float) -> str:
    if pct >= ELA_SECTION_THRESHOLDS['mastered']:
        return ELA_SECTION_STATUS['mastered']
    if pct >= ELA_SECTION_THRESHOLDS['developing']:
        return ELA_SECTION_STATUS['developing']
    return ELA_SECTION_STATUS['support']


def aggregate_sections(
    skill_stats: Dict[str, SkillStat],
    skill_types: Optional[Dict[str, str]] = None
) -> SectionReport:
    """
    Build the ELA section report from per-skill stats.

    Args:
        skill_stats: Skill label -> SkillStat (from the aggregate pass)
        skill_types: Optional skill label -> question type, so that skills
            coming from 'writing' questions land in the Writing section

    Returns:
        SectionReport with sections in fixed order, empty sections dropped
    """

    skill_types = skill_types or {}
    grouped: Dict[str, Dict[str, SkillStat]] = {name: {} for name in ELA_SECTIONS}

    for skill, stat in skill_stats.items():
        question_type = skill_types.get(skill)
        if question_type != 'writing' and not is_ela_skill(skill):
            continue
        section = map_skill_to_section(skill, question_type)
        grouped.setdefault(section, {})[skill] = stat

    results = []
    overall_correct = 0
    overall_total = 0

    for name in ELA_SECTIONS:
        skills = grouped[name]
        correct = sum(s.correct for s in skills.values())
        total = sum(s.total for s in skills.values())
        if total == 0:
            continue

        overall_correct += correct
        overall_total += total
        section_pct = percentage(correct, total)

        mastered_skills = []
        support_skills = []
        for skill, stat in skills.items():
            skill_pct = percentage(stat.correct, stat.total)
            if skill_pct >= ELA_SECTION_THRESHOLDS['mastered']:
                mastered_skills.append(skill)
            elif skill_pct < ELA_SECTION_THRESHOLDS['developing']:
                support_skills.append(skill)

        results.append(SectionResult(
            section=name,
            correct=correct,
            total=total,
            percent=section_pct,
            status=section_status(section_pct),
            mastered_skills=mastered_skills,
            support_skills=support_skills,
        ))

    return SectionReport(
        sections=results,
        overall_correct=overall_correct,
        overall_total=overall_total,
    )
