from __future__ import annotations

import pytest

from roadmap.gap_analysis import (
    _readiness_level,
    analyze_skills_gap,
    estimate_difficulty,
    estimate_time_to_learn,
    get_skill_development_recommendations,
)
from roadmap.models import PRIORITY_RANK, Skill, SkillGap, UserProfile
from roadmap.roles import get_role_requirements


def _profile(skills: list[Skill], role: str = "Software Engineer") -> UserProfile:
    return UserProfile(current_role=role, years_of_experience=3, current_skills=skills)


def _gap(category: str, current: int, required: int = 4) -> SkillGap:
    return SkillGap(
        skill="Example",
        category=category,
        current_level=current,
        required_level=required,
        priority="high",
        estimated_time_to_learn="2-4 months",
        difficulty="moderate",
        reasoning="",
    )


def test_partial_skill_is_a_critical_gap():
    profile = _profile([Skill(name="JavaScript/TypeScript", category="technical", proficiency=2)])
    analysis = analyze_skills_gap(profile, "Senior Software Engineer")
    gap = next(g for g in analysis.gaps if g.skill == "JavaScript/TypeScript")
    assert gap.priority == "critical"
    assert gap.current_level == 2
    assert gap.required_level == 4
    assert gap.estimated_time_to_learn == "4-6 months"
    assert gap.difficulty == "moderate"
    assert "foundational knowledge" in gap.reasoning


def test_no_skills_scores_zero_and_beginner():
    analysis = analyze_skills_gap(_profile([]), "Senior Software Engineer")
    assert analysis.gap_score == 0
    assert analysis.readiness_level == "beginner"
    assert len(analysis.gaps) == len(analysis.required_skills)
    assert "ambitious transition" in analysis.summary


def test_skill_names_match_case_insensitively():
    profile = _profile([Skill(name="python", category="technical", proficiency=5)])
    analysis = analyze_skills_gap(profile, "Data Scientist")
    assert "Python" not in {g.skill for g in analysis.gaps}


def test_gaps_always_below_required_and_sorted_by_priority():
    profile = _profile(
        [
            Skill(name="System Design", category="technical", proficiency=4),
            Skill(name="Communication", category="soft", proficiency=1),
            Skill(name="Mentoring", category="leadership", proficiency=3),
        ]
    )
    analysis = analyze_skills_gap(profile, "Senior Software Engineer")
    assert all(g.current_level < g.required_level for g in analysis.gaps)
    ranks = [PRIORITY_RANK[g.priority] for g in analysis.gaps]
    assert ranks == sorted(ranks, reverse=True)
    assert "System Design" not in {g.skill for g in analysis.gaps}
    assert "Mentoring" not in {g.skill for g in analysis.gaps}
    assert 0 <= analysis.gap_score <= 100


def test_full_coverage_is_ready():
    requirements = get_role_requirements("DevOps Engineer")
    profile = _profile(list(requirements.all_skills))
    analysis = analyze_skills_gap(profile, "DevOps Engineer")
    assert analysis.gaps == []
    assert analysis.gap_score == 100
    assert analysis.readiness_level == "ready"


def test_unknown_role_has_no_gaps():
    analysis = analyze_skills_gap(_profile([]), "Lighthouse Keeper")
    assert analysis.gaps == []
    assert analysis.gap_score == 100
    assert analysis.readiness_level == "ready"
    assert analysis.target_role == "Lighthouse Keeper"


def test_preferred_skill_priorities():
    analysis = analyze_skills_gap(_profile([]), "Senior Software Engineer")
    by_name = {g.skill: g for g in analysis.gaps}
    assert by_name["React/Vue/Angular"].priority == "high"
    assert by_name["Docker/Kubernetes"].priority == "medium"
    assert by_name["Technical Leadership"].priority == "high"


def test_time_and_difficulty_buckets():
    assert estimate_time_to_learn(3, 4, "soft") == "1-2 months"
    assert estimate_time_to_learn(0, 5, "leadership") == "12+ months"
    assert estimate_time_to_learn(2, 3, "domain") == "2-4 months"
    assert estimate_difficulty(0, 4, "technical") == "advanced"
    assert estimate_difficulty(3, 4, "leadership") == "moderate"
    assert estimate_difficulty(0, 4, "soft") == "challenging"


def test_development_recommendations_by_category_and_level():
    beginner = get_skill_development_recommendations(_gap("technical", 0))
    assert beginner[0].startswith("Start with beginner-friendly courses")
    assert "Contribute to open-source projects" in get_skill_development_recommendations(_gap("technical", 2))
    assert len(get_skill_development_recommendations(_gap("technical", 3))) == 3
    assert len(get_skill_development_recommendations(_gap("leadership", 1))) == 4
    assert len(get_skill_development_recommendations(_gap("soft", 1))) == 4
    assert get_skill_development_recommendations(_gap("domain", 1))


@pytest.mark.parametrize(
    ("score", "expected"),
    [
        (39, "beginner"),
        (40, "intermediate"),
        (59, "intermediate"),
        (60, "advanced"),
        (79, "advanced"),
        (80, "ready"),
    ],
)
def test_readiness_band_boundaries(score, expected):
    assert _readiness_level(score) == expected


def _required_at(role: str, level: int) -> list[Skill]:
    requirements = get_role_requirements(role)
    return [
        Skill(name=s.name, category=s.category, proficiency=min(level, s.proficiency))
        for s in requirements.required_skills
    ]


def test_partial_coverage_lands_in_middle_bands():
    # DevOps: 8 required at 4 plus 16 preferred points, 48 in total.
    halfway = analyze_skills_gap(_profile(_required_at("DevOps Engineer", 3)), "DevOps Engineer")
    assert halfway.gap_score == 50
    assert halfway.readiness_level == "intermediate"
    assert "solid foundation" in halfway.summary

    required_met = analyze_skills_gap(_profile(_required_at("DevOps Engineer", 5)), "DevOps Engineer")
    assert required_met.gap_score == 67
    assert required_met.readiness_level == "advanced"
