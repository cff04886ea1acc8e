from __future__ import annotations

import logging
import math
import re

from roadmap.catalog import load_certifications
from roadmap.formatting import format_money
from roadmap.models import (
    RELEVANCE_RANK,
    CertificationRecommendation,
    CertificationROI,
    SkillsGapAnalysis,
    UserProfile,
)

logger = logging.getLogger("roadmap.certifications")

# Checked in order; the first matching keyword group decides the allowed categories.
ROLE_CATEGORY_RULES = (
    (("software engineer", "developer"), {"technical", "cloud", "security"}),
    (("data scientist", "ml engineer"), {"data", "cloud", "technical"}),
    (("devops", "sre"), {"cloud", "security", "technical"}),
    (("product manager",), {"project-management", "general"}),
    (("manager", "lead"), {"project-management", "general"}),
)

# Yearly salary uplift by category, then difficulty ("*" is the category default).
SALARY_INCREASE = {
    "cloud": {"professional": 15000, "associate": 10000, "*": 5000},
    "data": {"professional": 12000, "*": 8000},
    "security": {"*": 10000},
}
DEFAULT_SALARY_INCREASE = 5000


def _held_aliases(name: str) -> set[str]:
    """Names a user may list for a catalog certification.

    "AWS Certified Solutions Architect - Associate" is also held as
    "AWS Certified Solutions Architect"; "Certified Kubernetes Administrator (CKA)"
    as "CKA".
    """
    lowered = name.lower()
    aliases = {lowered, lowered.split(" - ")[0].strip(), lowered.split(" (")[0].strip()}
    aliases.update(code.lower() for code in re.findall(r"\(([^)]+)\)", name))
    return {alias for alias in aliases if alias}


def already_held(cert: CertificationRecommendation, held: list[str]) -> bool:
    aliases = _held_aliases(cert.name)
    for item in held:
        item = item.strip().lower()
        if not item:
            continue
        if item in aliases or cert.name.lower() in item:
            return True
    return False


def _matches_gaps(cert: CertificationRecommendation, gap_analysis: SkillsGapAnalysis) -> bool:
    gap_skills = [g.skill.lower() for g in gap_analysis.gaps]
    return any(skill.lower() in gap for skill in cert.skills for gap in gap_skills)


def allowed_categories(target_role: str) -> set[str] | None:
    role_lower = target_role.lower()
    for keywords, categories in ROLE_CATEGORY_RULES:
        if any(k in role_lower for k in keywords):
            return categories
    return None


def is_certification_relevant(
    cert: CertificationRecommendation,
    target_role: str,
    gap_analysis: SkillsGapAnalysis,
    profile: UserProfile,
) -> bool:
    if already_held(cert, profile.certifications):
        return False
    if cert.relevance != "essential" and not _matches_gaps(cert, gap_analysis):
        return False
    categories = allowed_categories(target_role)
    return categories is None or cert.category in categories


def generate_certification_recommendations(
    gap_analysis: SkillsGapAnalysis,
    profile: UserProfile,
    target_role: str,
) -> list[CertificationRecommendation]:
    recommendations = [
        cert
        for cert in load_certifications()
        if is_certification_relevant(cert, target_role, gap_analysis, profile)
    ]
    recommendations.sort(key=lambda c: (-RELEVANCE_RANK.get(c.relevance, 0), c.cost))
    logger.info("Recommending %d certifications for %r", len(recommendations), target_role)
    return recommendations


def get_certification_preparation_tips(cert: CertificationRecommendation) -> list[str]:
    tips: list[str] = []
    if cert.difficulty == "entry":
        tips.append("Great starting point - most people pass on first attempt with 1-2 months study")
        tips.append("Focus on understanding core concepts rather than memorization")
    elif cert.difficulty == "associate":
        tips.append("Plan for 2-3 months of dedicated study (10-15 hours/week)")
        tips.append("Hands-on practice is critical - use free tier accounts to experiment")
        tips.append("Take practice exams to identify weak areas")
    elif cert.difficulty == "professional":
        tips.append("Advanced certification - expect 3-4 months preparation")
        tips.append("Real-world experience is essential before attempting")
        tips.append("Consider completing associate-level cert first")

    if "performance-based" in cert.exam_format:
        tips.append("Hands-on exam - practice in real environments, not just theory")
        tips.append("Time management is critical - practice under time pressure")
    else:
        tips.append("Multiple choice format - process of elimination helps")
        tips.append("Read questions carefully - often testing edge cases")

    if cert.cost > 300:
        tips.append("Premium certification - make sure you're ready before paying")
        tips.append("Many employers reimburse certification costs - ask your manager")

    tips.append("Join study groups or online communities for support")
    tips.append("Schedule your exam 6-8 weeks out to create accountability")
    return tips[:6]


def calculate_certification_roi(cert: CertificationRecommendation) -> CertificationROI:
    by_difficulty = SALARY_INCREASE.get(cert.category)
    if by_difficulty is None:
        increase = DEFAULT_SALARY_INCREASE
    else:
        increase = by_difficulty.get(cert.difficulty, by_difficulty["*"])

    prep_cost = cert.preparation_resources[0].cost if cert.preparation_resources else 0
    total_cost = cert.cost + prep_cost
    months = math.ceil(total_cost / (increase / 12))
    return CertificationROI(
        salary_increase=increase,
        months_to_roi=months,
        estimated_salary_increase=f"{format_money(increase)}+",
        time_to_roi=f"{months} month{'' if months == 1 else 's'}",
        career_benefits=list(cert.benefits),
    )
