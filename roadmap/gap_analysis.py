from __future__ import annotations

import logging

from roadmap.formatting import round_half_up
from roadmap.models import PRIORITY_RANK, RoleRequirements, Skill, SkillGap, SkillsGapAnalysis, UserProfile
from roadmap.roles import get_role_requirements

logger = logging.getLogger("roadmap.gap_analysis")

MONTHS_PER_LEVEL = {
    "technical": 3.0,
    "soft": 2.0,
    "domain": 2.5,
    "leadership": 4.0,
}

TIME_BUCKETS = (
    (1, "2-4 weeks"),
    (2, "1-2 months"),
    (4, "2-4 months"),
    (6, "4-6 months"),
    (9, "6-9 months"),
    (12, "9-12 months"),
)

# (max level gap, difficulty) per category; anything above the last threshold
# falls through to the category's ceiling.
DIFFICULTY_THRESHOLDS = {
    "technical": (((1, "easy"), (2, "moderate"), (3, "challenging")), "advanced"),
    "leadership": (((1, "moderate"), (2, "challenging")), "advanced"),
    "default": (((1, "easy"), (2, "moderate")), "challenging"),
}


def _readiness_level(gap_score: int) -> str:
    if gap_score >= 80:
        return "ready"
    if gap_score >= 60:
        return "advanced"
    if gap_score >= 40:
        return "intermediate"
    return "beginner"


def _is_required(skill: Skill, requirements: RoleRequirements) -> bool:
    return any(rs.name == skill.name for rs in requirements.required_skills)


def determine_priority(skill: Skill, requirements: RoleRequirements) -> str:
    if _is_required(skill, requirements):
        if skill.proficiency >= 4:
            return "critical"
        if skill.proficiency >= 3:
            return "high"
        return "medium"
    if skill.proficiency >= 4:
        return "high"
    if skill.proficiency >= 3:
        return "medium"
    return "low"


def estimate_time_to_learn(current_level: int, required_level: int, category: str) -> str:
    total_months = (required_level - current_level) * MONTHS_PER_LEVEL.get(category, 3.0)
    for limit, label in TIME_BUCKETS:
        if total_months <= limit:
            return label
    return "12+ months"


def estimate_difficulty(current_level: int, required_level: int, category: str) -> str:
    level_diff = required_level - current_level
    thresholds, ceiling = DIFFICULTY_THRESHOLDS.get(category, DIFFICULTY_THRESHOLDS["default"])
    for limit, label in thresholds:
        if level_diff <= limit:
            return label
    return ceiling


def _reasoning(skill: Skill, current_level: int, required_level: int, requirements: RoleRequirements) -> str:
    if _is_required(skill, requirements):
        if current_level == 0:
            return (
                f"Essential for {requirements.role}. This is a core requirement that most "
                "job postings list as mandatory."
            )
        return (
            f"You have foundational knowledge, but need to reach level {required_level} proficiency. "
            f"This is a core requirement for {requirements.role}."
        )
    return (
        f"While not always required, {skill.name} is highly valued and commonly found in "
        f"competitive candidates for {requirements.role}."
    )


def _summary(readiness: str, gap_score: int, gaps: list[SkillGap]) -> str:
    critical = sum(1 for g in gaps if g.priority == "critical")
    high = sum(1 for g in gaps if g.priority == "high")
    if readiness == "ready":
        return (
            f"You're well-positioned for this role! You have {gap_score}% of required skills. "
            f"Focus on the remaining {len(gaps)} skills to become an exceptional candidate."
        )
    if readiness == "advanced":
        return (
            f"You're on the right track with {gap_score}% skill coverage. Addressing "
            f"{critical + high} key gaps will significantly boost your competitiveness."
        )
    if readiness == "intermediate":
        return (
            f"You have a solid foundation with {gap_score}% coverage. Focus on {critical} critical "
            f"and {high} high-priority skills first."
        )
    return (
        f"This is an ambitious transition! You'll need to develop {critical} critical and {high} "
        "high-priority skills. Plan for 12-18+ months of focused learning."
    )


def analyze_skills_gap(profile: UserProfile, target_role: str) -> SkillsGapAnalysis:
    requirements = get_role_requirements(target_role)
    all_skills = list(requirements.all_skills)
    current = {skill.name.lower(): skill for skill in profile.current_skills}

    gaps: list[SkillGap] = []
    for skill in all_skills:
        held = current.get(skill.name.lower())
        current_level = held.proficiency if held else 0
        required_level = skill.proficiency
        if current_level >= required_level:
            continue
        gaps.append(
            SkillGap(
                skill=skill.name,
                category=skill.category,
                current_level=current_level,
                required_level=required_level,
                priority=determine_priority(skill, requirements),
                estimated_time_to_learn=estimate_time_to_learn(current_level, required_level, skill.category),
                difficulty=estimate_difficulty(current_level, required_level, skill.category),
                reasoning=_reasoning(skill, current_level, required_level, requirements),
            )
        )

    gaps.sort(key=lambda g: PRIORITY_RANK[g.priority], reverse=True)

    unmet_points = sum(g.required_level - g.current_level for g in gaps)
    total_points = sum(skill.proficiency for skill in all_skills)
    if total_points == 0:
        gap_score = 100
    else:
        gap_score = max(0, round_half_up(100 - (unmet_points / total_points) * 100))
    readiness = _readiness_level(gap_score)

    logger.info(
        "Gap analysis for %r: %d gaps, score %d (%s)", target_role, len(gaps), gap_score, readiness
    )
    return SkillsGapAnalysis(
        target_role=requirements.role,
        current_skills=list(profile.current_skills),
        required_skills=all_skills,
        gaps=gaps,
        gap_score=gap_score,
        readiness_level=readiness,
        summary=_summary(readiness, gap_score, gaps),
    )


def get_skill_development_recommendations(gap: SkillGap) -> list[str]:
    if gap.category == "technical":
        if gap.current_level == 0:
            return [
                "Start with beginner-friendly courses and tutorials",
                "Build 2-3 small projects to practice fundamentals",
                "Join online communities to ask questions and learn",
            ]
        if gap.current_level <= 2:
            return [
                "Take intermediate courses focusing on practical applications",
                "Contribute to open-source projects",
                "Build a portfolio project showcasing this skill",
            ]
        return [
            "Work on advanced, production-level projects",
            "Study system design and architectural patterns",
            "Consider mentoring others to deepen expertise",
        ]
    if gap.category == "leadership":
        return [
            "Seek opportunities to lead small projects or initiatives",
            "Find a mentor who excels in this area",
            "Read leadership books and apply learnings immediately",
            "Practice in low-stakes environments first",
        ]
    if gap.category == "soft":
        return [
            "Take courses on communication and interpersonal skills",
            "Practice in real-world situations consistently",
            "Seek feedback from peers and managers",
            "Join groups like Toastmasters or professional networks",
        ]
    if gap.category == "domain":
        return [
            "Study industry frameworks and case studies for this area",
            "Shadow colleagues who own this work in your current team",
            "Apply the method to a side project and document the outcome",
        ]
    return []
