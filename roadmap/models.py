from __future__ import annotations

from dataclasses import dataclass, field

SKILL_CATEGORIES = ("technical", "soft", "domain", "leadership")
PRIORITY_RANK = {"critical": 4, "high": 3, "medium": 2, "low": 1}
RELEVANCE_RANK = {"essential": 4, "highly-recommended": 3, "beneficial": 2, "optional": 1}
READINESS_LEVELS = ("beginner", "intermediate", "advanced", "ready")


@dataclass(frozen=True)
class Skill:
    name: str
    category: str
    proficiency: int
    years_of_experience: float | None = None
    last_used: str | None = None


@dataclass(frozen=True)
class SalaryRange:
    min: int
    max: int
    currency: str = "USD"


@dataclass(frozen=True)
class RoleRequirements:
    role: str
    seniority: str
    required_skills: tuple[Skill, ...]
    preferred_skills: tuple[Skill, ...]
    typical_years_experience: tuple[int, int]
    typical_salary_range: SalaryRange
    common_certifications: tuple[str, ...] = ()
    industry_domains: tuple[str, ...] = ()

    @property
    def all_skills(self) -> tuple[Skill, ...]:
        return self.required_skills + self.preferred_skills


@dataclass
class SkillGap:
    skill: str
    category: str
    current_level: int
    required_level: int
    priority: str
    estimated_time_to_learn: str
    difficulty: str
    reasoning: str


@dataclass
class SkillsGapAnalysis:
    target_role: str
    current_skills: list[Skill]
    required_skills: list[Skill]
    gaps: list[SkillGap]
    gap_score: int
    readiness_level: str
    summary: str


@dataclass(frozen=True)
class LearningResource:
    type: str
    title: str
    provider: str
    duration: str
    cost: float
    cost_type: str
    skills: tuple[str, ...]
    description: str
    difficulty: str
    url: str | None = None
    rating: float | None = None


@dataclass
class CostRange:
    min: float
    max: float
    currency: str = "USD"


@dataclass
class LearningPath:
    path_id: str
    title: str
    description: str
    target_skills: list[str]
    duration: str
    difficulty: str
    resources: list[LearningResource]
    estimated_cost: CostRange
    prerequisites: list[str]
    order: int


@dataclass
class TimelinePhase:
    phase: int
    title: str
    duration: str
    start_month: int
    end_month: int
    goals: list[str]
    activities: list[str]
    success_metrics: list[str]
    completion_criteria: list[str]


@dataclass
class CareerTimeline:
    current_date: str
    target_date: str
    total_months: int
    total_duration: str
    phases: list[TimelinePhase]
    assumptions: list[str]
    accelerators: list[str]
    risks: list[str]


@dataclass
class Milestone:
    id: str
    title: str
    description: str
    target_month: int
    type: str
    priority: str
    completion_criteria: list[str]
    dependencies: list[str]
    estimated_effort: str


@dataclass(frozen=True)
class CertificationRecommendation:
    name: str
    provider: str
    category: str
    relevance: str
    cost: float
    duration: str
    difficulty: str
    prerequisites: tuple[str, ...]
    skills: tuple[str, ...]
    industry_recognition: str
    exam_format: str
    renewal_required: bool
    preparation_resources: tuple[LearningResource, ...]
    benefits: tuple[str, ...]
    suggested_timeline: str
    passing_score: str | None = None
    renewal_period: str | None = None


@dataclass
class CertificationROI:
    salary_increase: int
    months_to_roi: int
    estimated_salary_increase: str
    time_to_roi: str
    career_benefits: list[str]


@dataclass
class LearningConstraints:
    time_per_week: float = 10.0
    budget: float | None = None
    deadline: str | None = None
    preferred_learning_style: list[str] = field(default_factory=lambda: ["video", "hands-on"])


@dataclass
class UserProfile:
    current_role: str
    years_of_experience: float
    current_skills: list[Skill]
    education: list[str] = field(default_factory=list)
    certifications: list[str] = field(default_factory=list)
    industries: list[str] = field(default_factory=list)
    strengths: list[str] = field(default_factory=list)
    interests: list[str] = field(default_factory=list)
    constraints: LearningConstraints = field(default_factory=LearningConstraints)


@dataclass
class RoleSuggestion:
    role: str
    match_pct: float


@dataclass
class CareerRoadmap:
    current_role: str
    target_role: str
    skills_gap: SkillsGapAnalysis
    learning_paths: list[LearningPath]
    timeline: CareerTimeline
    certifications: list[CertificationRecommendation]
    milestones: list[Milestone]
