"""Data models for the assessment engine.

Inputs (responses, repository context) and the derived outputs
(category scores, overall score, assessment result). Catalog models
live in ``practice_catalog.schema``.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

from practice_catalog.schema import (
    MAX_RESPONSE_VALUE,
    MIN_RESPONSE_VALUE,
    Effort,
    Impact,
    Recommendation,
    Stage,
)


# =============================================================================
# Inputs
# =============================================================================

class Response(BaseModel):
    """A single answer to a catalog question."""
    question_id: str = Field(..., min_length=1)
    value: int = Field(..., strict=True, ge=MIN_RESPONSE_VALUE, le=MAX_RESPONSE_VALUE)
    timestamp: int = Field(0, description="Milliseconds since epoch when answered")


class RecentActivity(BaseModel):
    """Recent repository activity counts."""
    commits: int = Field(0, ge=0)
    pull_requests: int = Field(0, ge=0)
    issues: int = Field(0, ge=0)


class RecommendationContext(BaseModel):
    """Repository facts used to adjust recommendation priority."""
    repository_size: Optional[int] = Field(
        None,
        ge=0,
        description="Repository size in KB"
    )
    primary_language: Optional[str] = None
    team_size: Optional[int] = Field(None, ge=0)
    is_public: bool = False
    has_ci: bool = False
    recent_activity: RecentActivity = Field(default_factory=RecentActivity)


# =============================================================================
# Scores
# =============================================================================

class ScoreLevel(str, Enum):
    """Qualitative maturity level of the overall score."""
    ADVANCED = "Advanced"
    PROACTIVE = "Proactive"
    BASIC = "Basic"
    INITIAL = "Initial"


LEVEL_DESCRIPTIONS = {
    ScoreLevel.ADVANCED: "Your GitHub practices are advanced and well-optimized.",
    ScoreLevel.PROACTIVE: "You have proactive GitHub practices with some room for improvement.",
    ScoreLevel.BASIC: "You have basic GitHub practices in place but significant room for improvement.",
    ScoreLevel.INITIAL: "Your GitHub practices are in the initial stages. Focus on implementing core practices.",
}


class CategoryScore(BaseModel):
    """Weighted score of one category."""
    category: str
    title: str = ""
    raw_total: float = Field(0.0, ge=0, description="Sum of value * weight")
    max_possible: float = Field(0.0, ge=0, description="Sum of 4 * weight")
    normalized: float = Field(0.0, ge=0, le=100)
    answered: int = Field(0, ge=0, description="Answered applicable questions")
    applicable: int = Field(0, ge=0, description="Applicable questions in this category")


class OverallScore(BaseModel):
    """Combined score across categories."""
    overall_score: float = Field(..., ge=0, le=100)
    level: ScoreLevel
    description: str


# =============================================================================
# Result enrichment
# =============================================================================

class RecommendationDetail(BaseModel):
    """Action plan entry for a prioritized recommendation."""
    id: str
    title: str
    category: str
    impact: Impact
    effort: Effort
    priority_score: float
    estimated_time: str
    business_impact: str
    automation_possible: bool = False
    action_items: list[str] = Field(default_factory=list)


class NextSteps(BaseModel):
    """Recommendation ids grouped by timeframe."""
    immediate: list[str] = Field(default_factory=list)
    short_term: list[str] = Field(default_factory=list)
    long_term: list[str] = Field(default_factory=list)


class ImplementationPhase(BaseModel):
    """One phase of the implementation plan."""
    name: str
    recommendation_ids: list[str] = Field(default_factory=list)
    estimated_effort: str
    expected_outcome: str


class ImplementationPlan(BaseModel):
    """Phased plan for working through the recommendations."""
    title: str = "GitHub Well-Architected Implementation Plan"
    description: str = (
        "A phased approach to implementing the recommendations "
        "and improving your repository health."
    )
    phases: list[ImplementationPhase] = Field(default_factory=list)


# =============================================================================
# Output
# =============================================================================

class AssessmentResult(BaseModel):
    """Complete output from the assessment engine.

    Contains no wall-clock timestamps so identical inputs serialize
    identically.
    """
    scoring_version: str = Field(default="1.0.0")
    catalog_version: str
    stage: Stage

    # Scores
    overall_score: float = Field(..., ge=0, le=100)
    level: ScoreLevel
    level_description: str
    category_scores: dict[str, CategoryScore] = Field(default_factory=dict)

    # Benchmark comparison
    benchmarks: dict[str, float] = Field(default_factory=dict)
    benchmark_gaps: dict[str, float] = Field(
        default_factory=dict,
        description="Expected minus current score per answered category"
    )
    gaps: list[str] = Field(
        default_factory=list,
        description="Categories scoring below their benchmark"
    )

    # Progress
    completion_rate: float = Field(0.0, ge=0, le=1)
    answered_count: int = 0
    applicable_count: int = 0

    # Summary
    strengths: list[str] = Field(default_factory=list)
    weaknesses: list[str] = Field(default_factory=list)

    # Recommendations
    recommendations: list[Recommendation] = Field(default_factory=list)
    quick_wins: list[Recommendation] = Field(default_factory=list)
    action_plan: list[RecommendationDetail] = Field(default_factory=list)
    next_steps: NextSteps = Field(default_factory=NextSteps)
    implementation_plan: ImplementationPlan = Field(default_factory=ImplementationPlan)

    # Debug/audit info
    processing_warnings: list[str] = Field(default_factory=list)

    @property
    def is_complete(self) -> bool:
        """True when every applicable question has been answered."""
        return self.applicable_count > 0 and self.answered_count == self.applicable_count
