"""End-to-end roadmap generation.

``build_career_roadmap`` runs the whole pipeline for one request: look up the
role, analyse the gaps, then derive learning paths, timeline, milestones and
certifications from that analysis. Nothing is stored between calls; callers
that want caching own it.
"""
from __future__ import annotations

import logging
from datetime import date
from typing import Sequence

from roadmap.certifications import generate_certification_recommendations
from roadmap.errors import RoadmapInputError
from roadmap.gap_analysis import analyze_skills_gap
from roadmap.learning_paths import generate_learning_paths
from roadmap.models import CareerRoadmap, Skill, UserProfile
from roadmap.timeline import generate_career_timeline, generate_milestones

logger = logging.getLogger("roadmap.planner")


def validate_roadmap_request(current_role: str, target_role: str, skills: Sequence[Skill]) -> None:
    missing = []
    if not (current_role or "").strip():
        missing.append("current role")
    if not (target_role or "").strip():
        missing.append("target role")
    if not skills:
        missing.append("at least one skill")
    if missing:
        raise RoadmapInputError(f"Please fill in your {', '.join(missing)}")


def build_career_roadmap(
    profile: UserProfile,
    target_role: str,
    as_of: date | None = None,
) -> CareerRoadmap:
    validate_roadmap_request(profile.current_role, target_role, profile.current_skills)
    logger.info("Building roadmap %r -> %r", profile.current_role, target_role)

    gap_analysis = analyze_skills_gap(profile, target_role)
    learning_paths = generate_learning_paths(gap_analysis.gaps, profile)
    timeline = generate_career_timeline(gap_analysis, profile, target_role, as_of=as_of)
    milestones = generate_milestones(timeline.phases, gap_analysis)
    certifications = generate_certification_recommendations(gap_analysis, profile, target_role)

    return CareerRoadmap(
        current_role=profile.current_role,
        target_role=target_role,
        skills_gap=gap_analysis,
        learning_paths=learning_paths,
        timeline=timeline,
        certifications=certifications,
        milestones=milestones,
    )
