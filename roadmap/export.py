from __future__ import annotations

from dataclasses import asdict
from typing import Any

import pandas as pd

from roadmap.catalog import skill_from_dict
from roadmap.certifications import calculate_certification_roi
from roadmap.models import (
    CareerRoadmap,
    CertificationRecommendation,
    LearningConstraints,
    LearningPath,
    Milestone,
    SkillsGapAnalysis,
    UserProfile,
)


def profile_from_payload(payload: dict[str, Any]) -> UserProfile:
    constraints = payload.get("constraints") or {}
    budget = constraints.get("budget")
    return UserProfile(
        current_role=str(payload.get("current_role", "")),
        years_of_experience=float(payload.get("years_of_experience", 0) or 0),
        current_skills=[skill_from_dict(s) for s in payload.get("current_skills", []) if s.get("name")],
        education=list(payload.get("education", [])),
        certifications=list(payload.get("certifications", [])),
        industries=list(payload.get("industries", [])),
        strengths=list(payload.get("strengths", [])),
        interests=list(payload.get("interests", [])),
        constraints=LearningConstraints(
            time_per_week=float(constraints.get("time_per_week", 10)),
            budget=None if budget is None else float(budget),
            deadline=constraints.get("deadline"),
            preferred_learning_style=list(constraints.get("preferred_learning_style", ["video", "hands-on"])),
        ),
    )


def export_payload(profile: UserProfile, roadmap: CareerRoadmap) -> dict[str, Any]:
    return {
        "profile": asdict(profile),
        "roadmap": asdict(roadmap),
        "certification_roi": {
            cert.name: asdict(calculate_certification_roi(cert)) for cert in roadmap.certifications
        },
    }


def gaps_frame(analysis: SkillsGapAnalysis) -> pd.DataFrame:
    columns = ["Skill", "Category", "Current", "Required", "Priority", "Time to Learn", "Difficulty"]
    return pd.DataFrame(
        [
            {
                "Skill": g.skill,
                "Category": g.category,
                "Current": g.current_level,
                "Required": g.required_level,
                "Priority": g.priority,
                "Time to Learn": g.estimated_time_to_learn,
                "Difficulty": g.difficulty,
            }
            for g in analysis.gaps
        ],
        columns=columns,
    )


def resources_frame(path: LearningPath) -> pd.DataFrame:
    columns = ["Type", "Title", "Provider", "Duration", "Cost", "Billing", "Level", "URL"]
    return pd.DataFrame(
        [
            {
                "Type": r.type,
                "Title": r.title,
                "Provider": r.provider,
                "Duration": r.duration,
                "Cost": r.cost,
                "Billing": r.cost_type,
                "Level": r.difficulty,
                "URL": r.url or "",
            }
            for r in path.resources
        ],
        columns=columns,
    )


def milestones_frame(milestones: list[Milestone]) -> pd.DataFrame:
    columns = ["Month", "Milestone", "Type", "Priority", "Effort", "Depends On"]
    frame = pd.DataFrame(
        [
            {
                "Month": m.target_month,
                "Milestone": m.title,
                "Type": m.type,
                "Priority": m.priority,
                "Effort": m.estimated_effort,
                "Depends On": ", ".join(m.dependencies),
            }
            for m in milestones
        ],
        columns=columns,
    )
    return frame.sort_values("Month", kind="stable").reset_index(drop=True)


def certifications_frame(certs: list[CertificationRecommendation]) -> pd.DataFrame:
    columns = ["Certification", "Provider", "Relevance", "Cost", "Difficulty", "Salary Uplift", "Time to ROI"]
    rows = []
    for cert in certs:
        roi = calculate_certification_roi(cert)
        rows.append(
            {
                "Certification": cert.name,
                "Provider": cert.provider,
                "Relevance": cert.relevance,
                "Cost": cert.cost,
                "Difficulty": cert.difficulty,
                "Salary Uplift": roi.estimated_salary_increase,
                "Time to ROI": roi.time_to_roi,
            }
        )
    return pd.DataFrame(rows, columns=columns)
