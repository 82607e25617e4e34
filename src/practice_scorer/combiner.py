"""Overall Score Combiner - Phase 4 of the Assessment Engine.

Combines category scores into one overall score using the stage's
category importance, then maps it onto a maturity level.
"""

import logging
from collections.abc import Mapping
from typing import Optional

from practice_catalog.schema import StageBenchmark

from .config import get_config
from .schema import LEVEL_DESCRIPTIONS, CategoryScore, OverallScore, ScoreLevel

logger = logging.getLogger(__name__)


class OverallScoreCombiner:
    """Weighted mean of category scores.

    Configuration:
    - Level thresholds can be customized via octoflow-config.yaml
    """

    def __init__(self):
        cfg = get_config().level_thresholds
        self.advanced_threshold = cfg.advanced
        self.proactive_threshold = cfg.proactive
        self.basic_threshold = cfg.basic

    def combine(
        self,
        category_scores: Mapping[str, CategoryScore],
        benchmark: Optional[StageBenchmark] = None,
    ) -> OverallScore:
        """Combine category scores into an overall score.

        Each category is weighted by the benchmark's importance for it,
        falling back to 1. No categories means an overall score of 0.
        """
        weighted_sum = 0.0
        total_weight = 0.0
        for category, score in category_scores.items():
            weight = benchmark.importance_of(category) if benchmark else 1.0
            weighted_sum += score.normalized * weight
            total_weight += weight

        overall = weighted_sum / total_weight if total_weight > 0 else 0.0
        overall = round(min(100.0, max(0.0, overall)), 2)

        level = self.get_level(overall)
        logger.debug("Combined %d categories into %.2f (%s)", len(category_scores), overall, level.value)
        return OverallScore(
            overall_score=overall,
            level=level,
            description=LEVEL_DESCRIPTIONS[level],
        )

    def get_level(self, score: float) -> ScoreLevel:
        """Map a 0-100 score onto a maturity level."""
        if score >= self.advanced_threshold:
            return ScoreLevel.ADVANCED
        if score >= self.proactive_threshold:
            return ScoreLevel.PROACTIVE
        if score >= self.basic_threshold:
            return ScoreLevel.BASIC
        return ScoreLevel.INITIAL
