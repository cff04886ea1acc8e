from __future__ import annotations

import logging
import math
from datetime import date

import pandas as pd

from roadmap.formatting import format_duration, round_half_up
from roadmap.models import CareerTimeline, Milestone, SkillsGapAnalysis, TimelinePhase, UserProfile

logger = logging.getLogger("roadmap.timeline")

BASE_MONTHS = {
    "ready": 3,
    "advanced": 6,
    "intermediate": 12,
    "beginner": 18,
}

PHASE_SHARES = (0.25, 0.35, 0.20)

PHASE_CONTENT = (
    {
        "title": "Foundation & Core Skills",
        "goals": [
            "Build foundational knowledge in critical skill areas",
            "Complete beginner-level courses and tutorials",
            "Set up development environment and tools",
            "Create a structured learning schedule",
        ],
        "activities": [
            "Enroll in core courses for top 3 critical skills",
            "Complete daily coding/practice exercises (1-2 hours)",
            "Join relevant online communities and forums",
            "Start a learning journal to track progress",
            "Build 2-3 small beginner projects",
        ],
        "success_metrics": [
            "Completed foundational courses for critical skills",
            "Can explain core concepts confidently",
            "Built and deployed first projects",
            "Consistent daily learning habit established",
        ],
        "completion_criteria": [
            "Proficiency level 2-3 in critical technical skills",
            "Portfolio has at least 2 projects",
            "Active participation in learning communities",
        ],
    },
    {
        "title": "Skill Development & Practice",
        "goals": [
            "Achieve intermediate-level proficiency in core skills",
            "Build portfolio with real-world projects",
            "Start contributing to open-source or work projects",
            "Develop domain expertise",
        ],
        "activities": [
            "Work on 3-5 intermediate-level projects",
            "Contribute to 2-3 open-source projects",
            "Take advanced courses in specialized areas",
            "Practice system design and problem-solving",
            "Attend virtual meetups and conferences",
            "Start building professional network in target domain",
        ],
        "success_metrics": [
            "Portfolio has 4-6 high-quality projects",
            "Open-source contributions merged",
            "Can solve medium-difficulty technical problems",
            "Network includes 20+ relevant connections",
        ],
        "completion_criteria": [
            "Proficiency level 3-4 in most required skills",
            "Portfolio demonstrates real-world problem-solving",
            "Positive code review feedback from community",
        ],
    },
    {
        "title": "Specialization & Polish",
        "goals": [
            "Achieve advanced proficiency in specialized areas",
            "Build standout portfolio projects",
            "Earn relevant certifications",
            "Establish thought leadership",
        ],
        "activities": [
            "Build 1-2 advanced showcase projects",
            "Complete certification exams",
            "Write technical blog posts or create content",
            "Mentor others in your learning areas",
            "Optimize LinkedIn and professional profiles",
            "Practice behavioral and technical interviews",
        ],
        "success_metrics": [
            "Certifications earned",
            "Published technical content",
            "Portfolio includes standout project(s)",
            "Strong professional online presence",
        ],
        "completion_criteria": [
            "Proficiency level 4+ in core skills",
            "Portfolio competitive with target role candidates",
            "Active thought leadership (blog, talks, mentoring)",
        ],
    },
    {
        "title": "Job Search & Transition",
        "goals": [
            "Secure target role position",
            "Pass technical interviews with confidence",
            "Negotiate competitive offer",
            "Successfully transition to new role",
        ],
        "activities": [
            "Apply to 5-10 target companies per week",
            "Network with hiring managers and recruiters",
            "Practice 2-3 mock interviews per week",
            "Attend company info sessions and recruiting events",
            "Optimize resume and portfolio for each application",
            "Leverage referrals from network",
            "Continue learning and building through job search",
        ],
        "success_metrics": [
            "20+ applications submitted",
            "5+ phone screens completed",
            "2-3 on-site interviews",
            "At least one job offer received",
        ],
        "completion_criteria": [
            "Accepted offer for target role",
            "Negotiated competitive compensation",
            "Smooth transition plan in place",
        ],
    },
)


def _critical_count(gap_analysis: SkillsGapAnalysis) -> int:
    return sum(1 for g in gap_analysis.gaps if g.priority == "critical")


def calculate_total_months(gap_analysis: SkillsGapAnalysis, profile: UserProfile) -> int:
    total = float(BASE_MONTHS[gap_analysis.readiness_level])

    hours = profile.constraints.time_per_week
    if hours < 10:
        total *= 1.5
    elif hours >= 20:
        total *= 0.75

    critical = _critical_count(gap_analysis)
    if critical > 5:
        total += 3
    elif critical > 3:
        total += 2

    return round_half_up(total)


def _phase_boundaries(total_months: int) -> list[int]:
    # Each share is rounded up, then clamped so the last phase always ends on total_months.
    boundaries = [0]
    for share in PHASE_SHARES:
        boundaries.append(min(boundaries[-1] + math.ceil(total_months * share), total_months))
    boundaries.append(total_months)
    return boundaries


def generate_phases(total_months: int) -> list[TimelinePhase]:
    boundaries = _phase_boundaries(total_months)
    phases: list[TimelinePhase] = []
    for idx, content in enumerate(PHASE_CONTENT):
        start, end = boundaries[idx], boundaries[idx + 1]
        phases.append(
            TimelinePhase(
                phase=idx + 1,
                title=content["title"],
                duration=format_duration(end - start),
                start_month=start,
                end_month=end,
                goals=list(content["goals"]),
                activities=list(content["activities"]),
                success_metrics=list(content["success_metrics"]),
                completion_criteria=list(content["completion_criteria"]),
            )
        )
    return phases


def _assumptions(profile: UserProfile, total_months: int) -> list[str]:
    constraints = profile.constraints
    assumptions = [
        f"You can dedicate {constraints.time_per_week:g} hours per week to learning and skill development",
    ]
    if constraints.budget:
        assumptions.append(f"Budget of ${constraints.budget:g} available for courses and certifications")
    assumptions.append("You have access to a computer and internet for learning")
    assumptions.append("You can balance learning with current job/commitments")
    if total_months > 12:
        assumptions.append("You maintain consistent effort over extended period (12+ months)")
    assumptions.extend(
        [
            "Job market remains stable in your target domain",
            "You actively seek feedback and iterate on skills",
            "You network and build connections throughout the journey",
        ]
    )
    return assumptions


def _accelerators(profile: UserProfile) -> list[str]:
    if profile.constraints.time_per_week >= 20:
        accelerators = ["Increase learning time to 25-30 hours/week to finish 30-40% faster"]
    else:
        accelerators = ["Dedicate 15-20 hours/week (vs current plan) to accelerate by 20-25%"]
    accelerators.extend(
        [
            "Invest in premium courses and bootcamps for structured, faster learning",
            "Hire a mentor or coach for personalized guidance and accountability",
            "Focus exclusively on critical skills first (defer nice-to-haves)",
            "Leverage internal transfers if already at a target company",
            "Build in public - share progress on LinkedIn/Twitter for visibility",
            "Contribute to open-source projects used by target companies",
            "Attend in-person conferences and networking events",
        ]
    )
    if profile.years_of_experience >= 5:
        accelerators.append("Leverage existing experience - highlight transferable skills aggressively")
    accelerators.append("Get referrals - referred candidates are 4x more likely to get interviews")
    return accelerators[:8]


def _risks(gap_analysis: SkillsGapAnalysis, profile: UserProfile) -> list[str]:
    risks: list[str] = []
    if gap_analysis.readiness_level == "beginner":
        risks.append("Large skill gap may lead to discouragement - celebrate small wins")
        risks.append("Extended timeline (12+ months) requires sustained motivation")
    if profile.constraints.time_per_week < 10:
        risks.append("Limited time commitment may slow progress - consider reducing other commitments")
    risks.extend(
        [
            "Job market changes could affect demand for target role",
            "Burnout from balancing learning with current responsibilities",
            "Imposter syndrome may cause premature stopping - push through",
        ]
    )
    if _critical_count(gap_analysis) > 5:
        risks.append("Many critical gaps - missing even one could block job offers")
    risks.extend(
        [
            "Tutorial hell - doing courses without building real projects",
            "Not networking enough - skills alone may not be sufficient",
            "Applying too early before skills are interview-ready",
        ]
    )
    return risks[:6]


def generate_career_timeline(
    gap_analysis: SkillsGapAnalysis,
    profile: UserProfile,
    target_role: str,
    as_of: date | None = None,
) -> CareerTimeline:
    start = pd.Timestamp(as_of or date.today()).normalize()
    total_months = calculate_total_months(gap_analysis, profile)
    target = start + pd.DateOffset(months=total_months)
    logger.info("Timeline for %r: %d months (%s)", target_role, total_months, gap_analysis.readiness_level)
    return CareerTimeline(
        current_date=start.date().isoformat(),
        target_date=target.date().isoformat(),
        total_months=total_months,
        total_duration=format_duration(total_months),
        phases=generate_phases(total_months),
        assumptions=_assumptions(profile, total_months),
        accelerators=_accelerators(profile),
        risks=_risks(gap_analysis, profile),
    )


def _needs_certification(gap_analysis: SkillsGapAnalysis) -> bool:
    markers = ("aws", "azure", "certification")
    cert_gaps = [g for g in gap_analysis.gaps if any(m in g.skill.lower() for m in markers)]
    return bool(cert_gaps) or gap_analysis.readiness_level != "beginner"


def generate_milestones(phases: list[TimelinePhase], gap_analysis: SkillsGapAnalysis) -> list[Milestone]:
    """Checkpoints pinned to phase boundaries.

    Target months are clamped into the timeline, so a short plan can stack
    several milestones on the same month.
    """
    last_month = phases[-1].end_month
    milestones: list[Milestone] = []

    def add(title, description, month, kind, priority, criteria, depends_on, effort) -> str:
        milestone_id = f"m{len(milestones) + 1}"
        milestones.append(
            Milestone(
                id=milestone_id,
                title=title,
                description=description,
                target_month=max(0, min(int(month), last_month)),
                type=kind,
                priority=priority,
                completion_criteria=criteria,
                dependencies=[d for d in depends_on if d],
                estimated_effort=effort,
            )
        )
        return milestone_id

    first_course = add(
        "Complete First Course",
        "Finish your first foundational course in a critical skill area",
        1, "skill", "high",
        ["Course completed", "Quiz/exam passed", "Notes documented"],
        [], "30-40 hours",
    )
    first_project = add(
        "First Portfolio Project",
        "Build and deploy your first portfolio project",
        2, "project", "critical",
        ["Project completed", "Deployed live", "Added to portfolio/GitHub"],
        [first_course], "20-30 hours",
    )
    intermediate = add(
        "Intermediate Projects Complete",
        "Complete 3-5 intermediate-level projects",
        math.ceil(phases[1].end_month * 0.7), "project", "critical",
        ["3+ projects completed", "Projects use target role technologies", "Code quality is professional"],
        [first_project], "60-80 hours",
    )
    add(
        "First Open Source Contribution",
        "Make meaningful contribution to an open-source project",
        phases[1].start_month + 2, "project", "high",
        ["Pull request merged", "Positive feedback received"],
        [first_project], "15-25 hours",
    )
    if _needs_certification(gap_analysis):
        add(
            "Earn Key Certification",
            "Complete and pass a relevant industry certification",
            phases[2].start_month + 1, "certification", "high",
            ["Certification exam passed", "Certificate added to LinkedIn"],
            [intermediate], "40-80 hours prep",
        )
    add(
        "Showcase Project Complete",
        "Build an advanced project that demonstrates mastery",
        phases[2].end_month - 1, "project", "critical",
        ["Project is production-quality", "Deployed and accessible", "Featured on portfolio"],
        [intermediate], "40-60 hours",
    )
    presence = add(
        "Professional Presence Optimized",
        "LinkedIn, portfolio, and resume are polished and optimized",
        phases[2].end_month, "networking", "critical",
        ["LinkedIn optimized", "Portfolio live and impressive", "Resume tailored to target role"],
        [], "10-15 hours",
    )
    interview = add(
        "First Interview",
        "Land and complete first technical interview",
        phases[3].start_month + 1, "application", "high",
        ["Interview completed", "Feedback received", "Learnings documented"],
        [presence], "5-10 hours prep",
    )
    add(
        "Job Offer Received",
        "Receive and accept job offer for target role",
        phases[3].end_month - 1, "application", "critical",
        ["Offer letter received", "Compensation negotiated", "Offer accepted"],
        [interview], "Variable",
    )
    return milestones
