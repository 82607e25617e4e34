"""Explainer - Phase 7 of the Assessment Engine.

Turns scores and prioritized recommendations into the readable parts of
the result: strengths and weaknesses, an action plan with time and
business impact estimates, next steps and a phased implementation plan.
"""

from collections.abc import Mapping
from typing import Optional

from practice_catalog.schema import Recommendation, Stage

from .config import get_config
from .prioritizer import RecommendationPrioritizer
from .schema import (
    AssessmentResult,
    CategoryScore,
    ImplementationPhase,
    ImplementationPlan,
    NextSteps,
    OverallScore,
    RecommendationContext,
    RecommendationDetail,
)


class AssessmentExplainer:
    """Generates summaries and plans for assessment results.

    Configuration:
    - Strength/weakness thresholds and next-step sizes can be customized
      via octoflow-config.yaml
    """

    DEFAULT_TIME_ESTIMATE = "1-4 hours"
    DEFAULT_BUSINESS_IMPACT = "Improves overall repository health and development practices."

    TIME_ESTIMATES = {
        "security": {"low": "10-30 minutes", "medium": "1-2 hours", "high": "4-8 hours"},
        "reliability": {"low": "15-45 minutes", "medium": "2-4 hours", "high": "1-2 days"},
        "maintainability": {"low": "5-20 minutes", "medium": "1-3 hours", "high": "4-8 hours"},
        "collaboration": {"low": "10-30 minutes", "medium": "1-2 hours", "high": "3-6 hours"},
        "velocity": {"low": "15-45 minutes", "medium": "2-4 hours", "high": "1-2 days"},
    }

    BUSINESS_IMPACT = {
        "security": {
            "high": "Significantly reduces security vulnerabilities, protecting your codebase and user data from potential breaches.",
            "medium": "Improves security posture and reduces risk of security incidents.",
            "low": "Enhances security best practices and awareness.",
        },
        "reliability": {
            "high": "Dramatically improves system stability and reduces downtime, leading to better user experience and trust.",
            "medium": "Increases reliability and reduces the likelihood of service disruptions.",
            "low": "Improves system resilience and error handling.",
        },
        "maintainability": {
            "high": "Substantially reduces technical debt and makes the codebase significantly easier to maintain and extend.",
            "medium": "Improves code quality and makes future development more efficient.",
            "low": "Enhances code organization and documentation.",
        },
        "collaboration": {
            "high": "Greatly enhances team productivity and reduces communication overhead, leading to faster delivery.",
            "medium": "Improves team coordination and reduces friction in the development process.",
            "low": "Enhances collaboration practices and team awareness.",
        },
        "velocity": {
            "high": "Significantly accelerates development speed and time-to-market for new features.",
            "medium": "Improves development velocity and reduces bottlenecks.",
            "low": "Enhances workflow efficiency and reduces manual steps.",
        },
    }

    def __init__(self):
        cfg = get_config()
        self.strength_threshold = cfg.summary_thresholds.strength
        self.weakness_threshold = cfg.summary_thresholds.weakness
        self.immediate_count = cfg.next_steps.immediate
        self.short_term_count = cfg.next_steps.short_term

    def strengths(self, category_scores: Mapping[str, CategoryScore]) -> list[str]:
        """Categories at or above the strength threshold, best first."""
        ranked = sorted(category_scores.values(), key=lambda s: -s.normalized)
        return [
            self._label(s) for s in ranked
            if s.normalized >= self.strength_threshold
        ]

    def weaknesses(self, category_scores: Mapping[str, CategoryScore]) -> list[str]:
        """Categories below the weakness threshold, worst first."""
        ranked = sorted(category_scores.values(), key=lambda s: s.normalized)
        return [
            self._label(s) for s in ranked
            if s.normalized < self.weakness_threshold
        ]

    def estimate_time(self, rec: Recommendation) -> str:
        return self.TIME_ESTIMATES.get(rec.category, {}).get(
            rec.effort.value, self.DEFAULT_TIME_ESTIMATE
        )

    def business_impact(self, rec: Recommendation) -> str:
        return self.BUSINESS_IMPACT.get(rec.category, {}).get(
            rec.impact.value, self.DEFAULT_BUSINESS_IMPACT
        )

    def action_plan(
        self,
        prioritized: list[Recommendation],
        prioritizer: RecommendationPrioritizer,
        context: Optional[RecommendationContext] = None,
    ) -> list[RecommendationDetail]:
        """Detail every prioritized recommendation, keeping its order."""
        return [
            RecommendationDetail(
                id=rec.id,
                title=rec.title,
                category=rec.category,
                impact=rec.impact,
                effort=rec.effort,
                priority_score=round(prioritizer.priority_score(rec, context), 4),
                estimated_time=self.estimate_time(rec),
                business_impact=self.business_impact(rec),
                automation_possible=rec.automatable,
                action_items=list(rec.action_items),
            )
            for rec in prioritized
        ]

    def next_steps(self, prioritized: list[Recommendation]) -> NextSteps:
        """Split prioritized recommendation ids into timeframes."""
        ids = [r.id for r in prioritized]
        short_term_end = self.immediate_count + self.short_term_count
        return NextSteps(
            immediate=ids[:self.immediate_count],
            short_term=ids[self.immediate_count:short_term_end],
            long_term=ids[short_term_end:],
        )

    def implementation_plan(self, prioritized: list[Recommendation]) -> ImplementationPlan:
        """Group recommendations into three phases.

        Foundation covers security and reliability, Efficiency covers
        maintainability and collaboration, and Acceleration covers velocity
        plus the remaining security and reliability items. Empty phases
        are left out.
        """
        by_category: dict[str, list[str]] = {}
        for rec in prioritized:
            by_category.setdefault(rec.category, []).append(rec.id)

        def take(category: str, start: int, end: int) -> list[str]:
            return by_category.get(category, [])[start:end]

        phases = [
            ImplementationPhase(
                name="Foundation: Security & Reliability",
                recommendation_ids=take("security", 0, 3) + take("reliability", 0, 2),
                estimated_effort="1-2 days",
                expected_outcome="Improved security posture and reliability foundation.",
            ),
            ImplementationPhase(
                name="Efficiency: Maintainability & Collaboration",
                recommendation_ids=take("maintainability", 0, 2) + take("collaboration", 0, 2),
                estimated_effort="1-2 days",
                expected_outcome="Better code organization and team collaboration.",
            ),
            ImplementationPhase(
                name="Acceleration: Velocity & Advanced Features",
                recommendation_ids=(
                    take("velocity", 0, 2) + take("security", 3, 4) + take("reliability", 2, 3)
                ),
                estimated_effort="2-3 days",
                expected_outcome="Faster development cycles and advanced GitHub features utilization.",
            ),
        ]
        return ImplementationPlan(phases=[p for p in phases if p.recommendation_ids])

    @staticmethod
    def _label(score: CategoryScore) -> str:
        return f"{score.title or score.category} ({score.normalized:.0f}%)"


def build_assessment_result(
    stage: Stage,
    catalog_version: str,
    overall: OverallScore,
    category_scores: dict[str, CategoryScore],
    benchmarks: dict[str, float],
    completion_rate: float,
    answered_count: int,
    applicable_count: int,
    prioritized: list[Recommendation],
    quick_wins: list[Recommendation],
    prioritizer: RecommendationPrioritizer,
    context: Optional[RecommendationContext],
    warnings: list[str],
) -> AssessmentResult:
    """Build the complete assessment result.

    Args:
        stage: Stage the assessment was run for
        catalog_version: Version of the practice catalog
        overall: Combined overall score and level
        category_scores: Scores of answered categories
        benchmarks: Expected category scores for the stage
        completion_rate: Answered / applicable questions
        answered_count: Answered applicable questions
        applicable_count: Questions asked at this stage
        prioritized: Recommendations in priority order
        quick_wins: High impact, low effort subset of ``prioritized``
        prioritizer: Prioritizer used, for action plan scores
        context: Repository context, if any
        warnings: Processing warnings

    Returns:
        Complete AssessmentResult ready for output
    """
    explainer = AssessmentExplainer()

    benchmark_gaps = {
        category: round(benchmarks[category] - score.normalized, 2)
        for category, score in category_scores.items()
        if category in benchmarks
    }
    gaps = [category for category, gap in benchmark_gaps.items() if gap > 0]

    return AssessmentResult(
        catalog_version=catalog_version,
        stage=stage,
        overall_score=overall.overall_score,
        level=overall.level,
        level_description=overall.description,
        category_scores=category_scores,
        benchmarks=benchmarks,
        benchmark_gaps=benchmark_gaps,
        gaps=gaps,
        completion_rate=round(completion_rate, 4),
        answered_count=answered_count,
        applicable_count=applicable_count,
        strengths=explainer.strengths(category_scores),
        weaknesses=explainer.weaknesses(category_scores),
        recommendations=prioritized,
        quick_wins=quick_wins,
        action_plan=explainer.action_plan(prioritized, prioritizer, context),
        next_steps=explainer.next_steps(prioritized),
        implementation_plan=explainer.implementation_plan(prioritized),
        processing_warnings=warnings,
    )
