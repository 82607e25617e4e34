"""Recommendation Prioritizer - Phase 6 of the Assessment Engine.

Orders recommendations by impact and effort, boosted by repository
context when one is known.
"""

from typing import Optional

from practice_catalog.schema import Effort, Impact, Recommendation

from .config import get_config
from .schema import RecommendationContext


class RecommendationPrioritizer:
    """Scores and sorts recommendations.

    Base priority is ``impact * inverted effort``, so high impact, low
    effort items come first. Sorting is stable: equal priorities keep
    catalog order.

    Configuration:
    - Context multipliers can be customized via octoflow-config.yaml
    """

    IMPACT_SCORES = {
        Impact.HIGH: 3,
        Impact.MEDIUM: 2,
        Impact.LOW: 1,
    }

    # Inverted: less effort scores higher
    EFFORT_SCORES = {
        Effort.LOW: 3,
        Effort.MEDIUM: 2,
        Effort.HIGH: 1,
    }

    def __init__(self):
        self.multipliers = get_config().priority_multipliers

    def priority_score(
        self,
        rec: Recommendation,
        context: Optional[RecommendationContext] = None,
    ) -> float:
        """Priority of a single recommendation."""
        score = float(self.IMPACT_SCORES[rec.impact] * self.EFFORT_SCORES[rec.effort])
        if context is None:
            return score

        m = self.multipliers
        if context.is_public and rec.category == "security":
            score *= m.public_security
        if (
            context.repository_size is not None
            and context.repository_size < m.small_repository_kb
            and rec.category == "maintainability"
        ):
            score *= m.small_repository_maintainability
        if (
            context.recent_activity.pull_requests > m.active_pull_requests
            and rec.category == "collaboration"
        ):
            score *= m.active_collaboration
        if context.has_ci and rec.category == "reliability":
            score *= m.ci_reliability
        if rec.automatable:
            score *= m.automatable

        return score

    def prioritize(
        self,
        recommendations: list[Recommendation],
        context: Optional[RecommendationContext] = None,
    ) -> list[Recommendation]:
        """Sort by descending priority, keeping input order for ties."""
        return sorted(recommendations, key=lambda r: -self.priority_score(r, context))

    def quick_wins(self, recommendations: list[Recommendation]) -> list[Recommendation]:
        """High impact, low effort items, in the order given."""
        return [r for r in recommendations if r.is_quick_win]
