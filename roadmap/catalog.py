"""Read-only access to the role, learning-resource and certification tables.

The tables live as JSON under ``config.DATA_DIR`` so they can be edited without
touching code. Each loader parses its file once per process and hands out
frozen dataclasses, so callers cannot mutate the shared copy.
"""
from __future__ import annotations

import json
import logging
from functools import lru_cache
from pathlib import Path
from typing import Any

from roadmap import config
from roadmap.errors import CatalogError
from roadmap.models import (
    CertificationRecommendation,
    LearningResource,
    RoleRequirements,
    SalaryRange,
    Skill,
)

logger = logging.getLogger("roadmap.catalog")


def _read_json(path: Path) -> dict[str, Any]:
    try:
        with path.open("r", encoding="utf-8") as f:
            return json.load(f)
    except (OSError, json.JSONDecodeError) as exc:
        raise CatalogError(f"Cannot read data table {path}: {exc}") from exc


def skill_from_dict(item: dict[str, Any]) -> Skill:
    return Skill(
        name=str(item["name"]),
        category=str(item.get("category", "technical")),
        proficiency=max(0, min(5, int(item.get("proficiency", 0)))),
        years_of_experience=item.get("years_of_experience"),
        last_used=item.get("last_used"),
    )


def resource_from_dict(item: dict[str, Any]) -> LearningResource:
    return LearningResource(
        type=item["type"],
        title=item["title"],
        provider=item["provider"],
        duration=item["duration"],
        cost=item.get("cost", 0),
        cost_type=item.get("cost_type", "free"),
        skills=tuple(item.get("skills", [])),
        description=item.get("description", ""),
        difficulty=item.get("difficulty", "beginner"),
        url=item.get("url"),
        rating=item.get("rating"),
    )


def _salary(item: dict[str, Any]) -> SalaryRange:
    return SalaryRange(min=item["min"], max=item["max"], currency=item.get("currency", config.CURRENCY))


def _role_from_dict(item: dict[str, Any]) -> RoleRequirements:
    years = item["typical_years_experience"]
    return RoleRequirements(
        role=item["role"],
        seniority=item["seniority"],
        required_skills=tuple(skill_from_dict(s) for s in item.get("required_skills", [])),
        preferred_skills=tuple(skill_from_dict(s) for s in item.get("preferred_skills", [])),
        typical_years_experience=(years["min"], years["max"]),
        typical_salary_range=_salary(item["typical_salary_range"]),
        common_certifications=tuple(item.get("common_certifications", [])),
        industry_domains=tuple(item.get("industry_domains", [])),
    )


@lru_cache(maxsize=None)
def load_role_table(path: Path | None = None) -> tuple[tuple[str, RoleRequirements], ...]:
    """Role entries keyed by lower-case match key, in declaration order."""
    path = path or config.ROLES_FILE
    raw = _read_json(path)
    try:
        table = tuple((item["key"].lower(), _role_from_dict(item)) for item in raw["roles"])
    except (KeyError, TypeError, ValueError) as exc:
        raise CatalogError(f"Malformed role table {path}: {exc}") from exc
    logger.debug("Loaded %d roles from %s", len(table), path)
    return table


@lru_cache(maxsize=None)
def load_role_fallback(path: Path | None = None) -> dict[str, Any]:
    path = path or config.ROLES_FILE
    raw = _read_json(path)
    fallback = raw.get("fallback", {})
    return {
        "seniority": fallback.get("seniority", "mid"),
        "typical_years_experience": fallback.get("typical_years_experience", {"min": 3, "max": 7}),
        "typical_salary_range": fallback.get(
            "typical_salary_range", {"min": 80000, "max": 140000, "currency": config.CURRENCY}
        ),
    }


@lru_cache(maxsize=None)
def load_resource_table(
    path: Path | None = None,
) -> tuple[tuple[str, tuple[LearningResource, ...]], ...]:
    """Learning resources keyed by lower-case skill fragment, in declaration order."""
    path = path or config.RESOURCES_FILE
    raw = _read_json(path)
    try:
        table = tuple(
            (entry["key"].lower(), tuple(resource_from_dict(r) for r in entry["items"]))
            for entry in raw["resources"]
        )
    except (KeyError, TypeError) as exc:
        raise CatalogError(f"Malformed resource table {path}: {exc}") from exc
    logger.debug("Loaded %d resource groups from %s", len(table), path)
    return table


@lru_cache(maxsize=None)
def load_certifications(path: Path | None = None) -> tuple[CertificationRecommendation, ...]:
    path = path or config.CERTIFICATIONS_FILE
    raw = _read_json(path)
    try:
        certs = tuple(
            CertificationRecommendation(
                name=item["name"],
                provider=item["provider"],
                category=item["category"],
                relevance=item["relevance"],
                cost=item["cost"],
                duration=item["duration"],
                difficulty=item["difficulty"],
                prerequisites=tuple(item.get("prerequisites", [])),
                skills=tuple(item.get("skills", [])),
                industry_recognition=item.get("industry_recognition", "medium"),
                exam_format=item.get("exam_format", ""),
                renewal_required=bool(item.get("renewal_required", False)),
                preparation_resources=tuple(
                    resource_from_dict(r) for r in item.get("preparation_resources", [])
                ),
                benefits=tuple(item.get("benefits", [])),
                suggested_timeline=item.get("suggested_timeline", ""),
                passing_score=item.get("passing_score"),
                renewal_period=item.get("renewal_period"),
            )
            for item in raw["certifications"]
        )
    except (KeyError, TypeError) as exc:
        raise CatalogError(f"Malformed certification table {path}: {exc}") from exc
    logger.debug("Loaded %d certifications from %s", len(certs), path)
    return certs


def known_skills() -> dict[str, Skill]:
    """Every skill named by the role table, keyed by lower-case name."""
    skills: dict[str, Skill] = {}
    for _, requirements in load_role_table():
        for skill in requirements.all_skills:
            skills.setdefault(skill.name.lower(), skill)
    return skills
