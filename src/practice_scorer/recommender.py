"""Recommendation Generator - Phase 5 of the Assessment Engine.

Selects candidate improvement actions from the recommendation catalog.

An entry is selected when its category was scored and either:
- the category score is below the stage benchmark (gap), or
- the entry's score range contains the category score (range)

Entries tied to a stage are only considered for that stage.
"""

import logging
from collections.abc import Mapping
from typing import Union

from practice_catalog.schema import PracticeCatalog, Recommendation, Stage

from .schema import CategoryScore

logger = logging.getLogger(__name__)


class RecommendationGenerator:
    """Generates recommendations from category scores and benchmarks."""

    def generate(
        self,
        category_scores: Mapping[str, CategoryScore],
        benchmarks: Mapping[str, float],
        catalog: PracticeCatalog,
        stage: Union[Stage, str],
    ) -> list[Recommendation]:
        """Select recommendations in catalog order, de-duplicated by id."""
        stage = Stage.parse(stage)
        selected: list[Recommendation] = []
        seen: set[str] = set()

        for rec in catalog.recommendations:
            if rec.id in seen:
                continue
            if rec.stage is not None and rec.stage != stage:
                continue

            score = category_scores.get(rec.category)
            if score is None:
                continue

            if self._matches(rec, score.normalized, benchmarks.get(rec.category)):
                selected.append(rec)
                seen.add(rec.id)

        logger.debug("Selected %d of %d catalog recommendations", len(selected), len(catalog.recommendations))
        return selected

    @staticmethod
    def _matches(rec: Recommendation, score: float, benchmark) -> bool:
        below_benchmark = benchmark is not None and score < benchmark
        in_range = rec.applicable_score_range is not None and rec.applicable_score_range.contains(score)
        return below_benchmark or in_range
