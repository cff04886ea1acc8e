from __future__ import annotations

from roadmap.certifications import calculate_certification_roi
from roadmap.models import CareerRoadmap


def companion_response(user_prompt: str, roadmap: CareerRoadmap) -> str:
    prompt = (user_prompt or "").lower()
    analysis = roadmap.skills_gap
    top_gaps = [gap.skill for gap in analysis.gaps[:3]]
    gap_text = ", ".join(top_gaps) if top_gaps else "no outstanding gaps"

    if "long" in prompt or "when" in prompt or "timeline" in prompt:
        timeline = roadmap.timeline
        return (
            f"Plan for {timeline.total_duration}, landing around {timeline.target_date}. "
            f"Phase 1 ({timeline.phases[0].title}) runs to month {timeline.phases[0].end_month}; "
            "adding study hours per week is the fastest way to shorten it."
        )
    if "cert" in prompt:
        if not roadmap.certifications:
            return "No certifications stand out for this transition; put the time into projects instead."
        best = roadmap.certifications[0]
        roi = calculate_certification_roi(best)
        return (
            f"Start with {best.name} ({best.relevance}). It typically adds {roi.estimated_salary_increase} "
            f"and pays for itself in about {roi.time_to_roi}."
        )
    if "start" in prompt or "first" in prompt or "improve" in prompt:
        if not roadmap.learning_paths:
            return "You already cover this role's requirements. Move straight to applications."
        path = roadmap.learning_paths[0]
        return (
            f"Begin with the '{path.title}' path ({path.duration}), focusing on {gap_text}. "
            "Build one small project per skill as you go."
        )
    return (
        f"You're at {analysis.gap_score}% readiness ({analysis.readiness_level}) for {analysis.target_role}. "
        f"Highest-priority development areas: {gap_text}."
    )
