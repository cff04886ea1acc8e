from __future__ import annotations

import logging
from typing import Iterable

import numpy as np

from roadmap.catalog import load_role_fallback, load_role_table
from roadmap.models import RoleRequirements, RoleSuggestion, SalaryRange, UserProfile

logger = logging.getLogger("roadmap.roles")


def _role_matches(key: str, role_lower: str) -> bool:
    if key in role_lower:
        return True
    return bool(role_lower) and role_lower in key


def get_role_requirements(role: str) -> RoleRequirements:
    """Look up a free-text role against the role table.

    Keys are tried in table order and the first key that is a substring of the
    role (or contains it) wins, so "Senior Software Engineer II" resolves to
    "senior software engineer" and "software engineer" does too because that
    entry is declared first. Unknown roles get a generic record with no skills.
    """
    role_lower = (role or "").strip().lower()
    for key, requirements in load_role_table():
        if _role_matches(key, role_lower):
            logger.debug("Role %r matched table key %r", role, key)
            return requirements

    logger.info("No role table match for %r; using generic requirements", role)
    fallback = load_role_fallback()
    years = fallback["typical_years_experience"]
    salary = fallback["typical_salary_range"]
    return RoleRequirements(
        role=role,
        seniority=fallback["seniority"],
        required_skills=(),
        preferred_skills=(),
        typical_years_experience=(years["min"], years["max"]),
        typical_salary_range=SalaryRange(min=salary["min"], max=salary["max"], currency=salary["currency"]),
    )


def known_roles() -> list[str]:
    return [requirements.role for _, requirements in load_role_table()]


def _cosine_similarity(vec1: np.ndarray, vec2: np.ndarray) -> float:
    norm_product = np.linalg.norm(vec1) * np.linalg.norm(vec2)
    if norm_product == 0:
        return 0.0
    return float(np.dot(vec1, vec2) / norm_product)


def _profile_vector(profile: UserProfile, skills: Iterable[str]) -> np.ndarray:
    levels = {s.name.lower(): s.proficiency for s in profile.current_skills}
    return np.array([levels.get(skill, 0) for skill in skills], dtype=float)


def _requirements_vector(requirements: RoleRequirements, skills: Iterable[str]) -> np.ndarray:
    targets = {s.name.lower(): s.proficiency for s in requirements.all_skills}
    return np.array([targets.get(skill, 0) for skill in skills], dtype=float)


def suggest_roles(profile: UserProfile, top_k: int = 3) -> list[RoleSuggestion]:
    """Rank catalog roles by how closely the user's skill levels track each role's targets."""
    table = load_role_table()
    skill_union = sorted(
        {skill.name.lower() for _, requirements in table for skill in requirements.all_skills}
    )
    user_vec = _profile_vector(profile, skill_union)
    results: list[RoleSuggestion] = []
    for _, requirements in table:
        sim = _cosine_similarity(user_vec, _requirements_vector(requirements, skill_union))
        results.append(RoleSuggestion(role=requirements.role, match_pct=round(max(0.0, min(1.0, sim)) * 100.0, 1)))
    results.sort(key=lambda r: r.match_pct, reverse=True)
    return results[:top_k]
