from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable

from roadmap import config
from roadmap.catalog import load_resource_table
from roadmap.models import CostRange, LearningPath, LearningResource, SkillGap, UserProfile

logger = logging.getLogger("roadmap.learning_paths")

TIME_BUCKET_MONTHS = (
    ("week", 0.5),
    ("1-2 months", 1.5),
    ("2-4 months", 3.0),
    ("4-6 months", 5.0),
    ("6-9 months", 7.5),
    ("9-12 months", 10.5),
)

PATH_DURATION_BUCKETS = (
    (2, "1-2 months"),
    (4, "2-4 months"),
    (6, "4-6 months"),
    (9, "6-9 months"),
    (12, "9-12 months"),
)

SUBSCRIPTION_MONTHS = (1, 3)


@dataclass(frozen=True)
class _PathTemplate:
    path_id: str
    title: str
    description: str
    prerequisites: tuple[str, ...]
    max_resources: int
    order: int
    selects: Callable[[SkillGap], bool]
    duration: str | None = None
    difficulty: str | None = None


PATH_TEMPLATES = (
    _PathTemplate(
        path_id="critical-skills",
        title="Critical Skills Foundation",
        description=(
            "Master the essential skills required for your target role. These are "
            "non-negotiable requirements that most employers expect."
        ),
        prerequisites=(),
        max_resources=15,
        order=1,
        selects=lambda g: g.priority == "critical",
    ),
    _PathTemplate(
        path_id="technical-depth",
        title="Technical Skills Development",
        description=(
            "Build deep technical expertise through hands-on courses, projects, and practice. "
            "Focus on practical application and portfolio building."
        ),
        prerequisites=("Basic programming knowledge", "Development environment setup"),
        max_resources=20,
        order=2,
        selects=lambda g: g.category == "technical" and g.priority != "low",
    ),
    _PathTemplate(
        path_id="leadership-soft-skills",
        title="Leadership & Communication",
        description=(
            "Develop leadership capabilities and soft skills through courses, mentorship, "
            "and real-world practice."
        ),
        prerequisites=("Willingness to seek feedback", "Practice opportunities"),
        max_resources=12,
        order=3,
        selects=lambda g: g.category in ("leadership", "soft") and g.priority != "low",
        difficulty="intermediate",
    ),
    _PathTemplate(
        path_id="domain-expertise",
        title="Domain Knowledge & Methodologies",
        description=(
            "Learn industry-specific knowledge, frameworks, and methodologies relevant to "
            "your target role."
        ),
        prerequisites=("Basic industry understanding",),
        max_resources=10,
        order=4,
        selects=lambda g: g.category == "domain" and g.priority != "low",
        difficulty="intermediate",
    ),
    _PathTemplate(
        path_id="quick-wins",
        title="Quick Wins & Resume Boosters",
        description=(
            "Rapidly acquire in-demand skills that are easier to learn and will strengthen "
            "your profile quickly."
        ),
        prerequisites=(),
        max_resources=8,
        order=5,
        selects=lambda g: g.priority == "medium" and g.difficulty in ("easy", "moderate"),
        duration="1-3 months",
        difficulty="beginner",
    ),
)


def _placeholder_resources(gap: SkillGap) -> list[LearningResource]:
    if gap.difficulty == "easy":
        level = "beginner"
    elif gap.difficulty == "advanced":
        level = "advanced"
    else:
        level = "intermediate"
    return [
        LearningResource(
            type="course",
            title=f"Learn {gap.skill}",
            provider="Udemy/Coursera",
            duration="20-40 hours",
            cost=20,
            cost_type="one-time",
            skills=(gap.skill,),
            description=f"Comprehensive {gap.skill} course",
            difficulty=level,
        ),
        LearningResource(
            type="practice",
            title=f"{gap.skill} Exercises",
            provider="Online platforms",
            duration="30 hours",
            cost=0,
            cost_type="free",
            skills=(gap.skill,),
            description=f"Practice {gap.skill} with exercises",
            difficulty="beginner",
        ),
    ]


def within_budget(resource: LearningResource, budget: float | None) -> bool:
    """A single resource may take at most a fifth of the budget; ``None`` means no limit."""
    if budget is None:
        return True
    return resource.cost <= budget / 5


def get_resources_for_skill(gap: SkillGap, profile: UserProfile) -> list[LearningResource]:
    skill_lower = gap.skill.lower()
    resources: list[LearningResource] = []
    for key, items in load_resource_table():
        if key in skill_lower or skill_lower in key:
            resources.extend(items)
            break

    if not resources:
        logger.debug("No catalog resources for %r; using placeholders", gap.skill)
        resources = _placeholder_resources(gap)

    budget = profile.constraints.budget
    return [r for r in resources if within_budget(r, budget)]


def estimate_path_duration(gaps: list[SkillGap]) -> str:
    total = 0.0
    for gap in gaps:
        for marker, months in TIME_BUCKET_MONTHS:
            if marker in gap.estimated_time_to_learn:
                total += months
                break
        else:
            total += 12
    for limit, label in PATH_DURATION_BUCKETS:
        if total <= limit:
            return label
    return "12-18 months"


def determine_path_difficulty(gaps: list[SkillGap]) -> str:
    if any(g.difficulty == "advanced" for g in gaps) or len(gaps) > 5:
        return "advanced"
    if any(g.difficulty == "challenging" for g in gaps) or len(gaps) > 3:
        return "intermediate"
    return "beginner"


def calculate_total_cost(resources: list[LearningResource]) -> CostRange:
    low = 0.0
    high = 0.0
    for resource in resources:
        if resource.cost_type == "free":
            continue
        if resource.cost_type == "subscription":
            low += resource.cost * SUBSCRIPTION_MONTHS[0]
            high += resource.cost * SUBSCRIPTION_MONTHS[1]
        else:
            low += resource.cost
            high += resource.cost
    return CostRange(min=low, max=high, currency=config.CURRENCY)


def _build_path(template: _PathTemplate, gaps: list[SkillGap], profile: UserProfile) -> LearningPath:
    resources: list[LearningResource] = []
    for gap in gaps:
        resources.extend(get_resources_for_skill(gap, profile))
    resources = resources[: template.max_resources]
    return LearningPath(
        path_id=template.path_id,
        title=template.title,
        description=template.description,
        target_skills=[g.skill for g in gaps],
        duration=template.duration or estimate_path_duration(gaps),
        difficulty=template.difficulty or determine_path_difficulty(gaps),
        resources=resources,
        estimated_cost=calculate_total_cost(resources),
        prerequisites=list(template.prerequisites),
        order=template.order,
    )


def generate_learning_paths(gaps: list[SkillGap], profile: UserProfile) -> list[LearningPath]:
    paths: list[LearningPath] = []
    for template in PATH_TEMPLATES:
        selected = [g for g in gaps if template.selects(g)]
        if selected:
            paths.append(_build_path(template, selected, profile))
    paths.sort(key=lambda p: p.order)
    logger.info("Generated %d learning paths for %d gaps", len(paths), len(gaps))
    return paths
