from __future__ import annotations

from roadmap.gap_analysis import analyze_skills_gap
from roadmap.learning_paths import (
    calculate_total_cost,
    determine_path_difficulty,
    estimate_path_duration,
    generate_learning_paths,
    get_resources_for_skill,
    within_budget,
)
from roadmap.models import LearningConstraints, LearningResource, SkillGap, UserProfile


def _profile(budget: float | None = None) -> UserProfile:
    return UserProfile(
        current_role="Software Engineer",
        years_of_experience=3,
        current_skills=[],
        constraints=LearningConstraints(time_per_week=10, budget=budget),
    )


def _gap(skill: str, priority: str = "critical", category: str = "technical", **overrides) -> SkillGap:
    values = {
        "skill": skill,
        "category": category,
        "current_level": 0,
        "required_level": 4,
        "priority": priority,
        "estimated_time_to_learn": "9-12 months",
        "difficulty": "advanced",
        "reasoning": "",
    }
    values.update(overrides)
    return SkillGap(**values)


def _resource(cost: float, cost_type: str) -> LearningResource:
    return LearningResource(
        type="course",
        title="Example",
        provider="Example",
        duration="10 hours",
        cost=cost,
        cost_type=cost_type,
        skills=("Example",),
        description="",
        difficulty="beginner",
    )


def test_zero_budget_keeps_only_free_resources():
    profile = _profile(budget=0)
    gaps = analyze_skills_gap(profile, "Senior Software Engineer").gaps
    paths = generate_learning_paths(gaps, profile)
    assert paths
    for path in paths:
        assert all(r.cost == 0 for r in path.resources)
        assert path.estimated_cost.min == 0
        assert path.estimated_cost.max == 0


def test_no_budget_keeps_paid_resources():
    resources = get_resources_for_skill(_gap("JavaScript/TypeScript"), _profile(budget=None))
    assert [r.title for r in resources] == [
        "JavaScript: The Complete Guide",
        "JavaScript30",
        "Build 15 JavaScript Projects",
    ]


def test_budget_caps_single_resource_at_a_fifth():
    assert within_budget(_resource(20, "one-time"), 100)
    assert not within_budget(_resource(21, "one-time"), 100)
    assert within_budget(_resource(0, "free"), 0)
    assert not within_budget(_resource(15, "one-time"), 0)
    assert within_budget(_resource(5000, "one-time"), None)


def test_unknown_skill_gets_placeholder_resources():
    resources = get_resources_for_skill(_gap("Underwater Welding", difficulty="easy"), _profile())
    assert [r.title for r in resources] == ["Learn Underwater Welding", "Underwater Welding Exercises"]
    assert resources[0].difficulty == "beginner"
    assert resources[1].cost == 0


def test_paths_have_unique_ascending_orders():
    profile = _profile()
    gaps = analyze_skills_gap(profile, "Engineering Manager").gaps
    paths = generate_learning_paths(gaps, profile)
    orders = [p.order for p in paths]
    assert orders == sorted(set(orders))
    assert all(p.resources for p in paths)


def test_path_selection_and_resource_cap():
    gaps = [_gap(f"Skill {i}") for i in range(10)]
    paths = generate_learning_paths(gaps, _profile())
    by_id = {p.path_id: p for p in paths}
    assert set(by_id) == {"critical-skills", "technical-depth"}
    assert len(by_id["critical-skills"].resources) == 15
    assert len(by_id["technical-depth"].resources) == 20
    assert by_id["critical-skills"].difficulty == "advanced"
    assert by_id["critical-skills"].duration == "12-18 months"


def test_quick_wins_path_uses_fixed_duration():
    gaps = [_gap("Communication", priority="medium", category="soft", difficulty="easy")]
    paths = generate_learning_paths(gaps, _profile())
    quick = next(p for p in paths if p.path_id == "quick-wins")
    assert quick.duration == "1-3 months"
    assert quick.difficulty == "beginner"
    assert quick.order == 5


def test_low_priority_gaps_produce_no_paths():
    assert generate_learning_paths([_gap("NLP", priority="low")], _profile()) == []


def test_subscription_cost_band():
    cost = calculate_total_cost(
        [_resource(10, "subscription"), _resource(50, "one-time"), _resource(0, "free")]
    )
    assert cost.min == 60
    assert cost.max == 80
    assert cost.currency == "USD"


def test_path_duration_and_difficulty_helpers():
    assert estimate_path_duration([_gap("A", estimated_time_to_learn="2-4 weeks")]) == "1-2 months"
    assert estimate_path_duration([_gap("A", estimated_time_to_learn="4-6 months")] * 2) == "9-12 months"
    assert determine_path_difficulty([_gap("A", difficulty="easy")]) == "beginner"
    assert determine_path_difficulty([_gap("A", difficulty="challenging")]) == "intermediate"
    assert determine_path_difficulty([_gap("A", difficulty="easy")] * 6) == "advanced"
