"""Category Aggregator - Phase 2 of the Assessment Engine.

Turns responses into weighted per-category scores for a stage.

Scoring rules:
- Only questions applicable to the stage count
- Each answered question adds ``value * weight`` to the category total
  and ``4 * weight`` to the category maximum
- Unanswered questions add nothing to either side, so skipping a
  question never lowers a score; only the completion rate reflects it
"""

from collections.abc import Iterable, Mapping
from typing import Optional, Union

from practice_catalog.schema import MAX_RESPONSE_VALUE, PracticeCatalog, Question, Stage

from .schema import CategoryScore, Response

ResponseMap = Mapping[str, Union[Response, int]]


def _value_of(response: Union[Response, int]) -> int:
    return response.value if isinstance(response, Response) else int(response)


class CategoryAggregator:
    """Aggregates responses into category scores."""

    def __init__(self, catalog: Optional[PracticeCatalog] = None):
        self.catalog = catalog

    def applicable_questions(self, questions: Iterable[Question], stage: Stage) -> list[Question]:
        """Questions asked at the given stage, in catalog order."""
        return [q for q in questions if q.applies_to(stage)]

    def aggregate(
        self,
        responses: ResponseMap,
        questions: Iterable[Question],
        stage: Stage,
    ) -> dict[str, CategoryScore]:
        """Compute normalized scores for every category with an answer.

        Responses to unknown or non-applicable questions are ignored.
        Categories without any answered applicable question are left out.
        """
        applicable = self.applicable_questions(questions, stage)

        totals: dict[str, dict[str, float]] = {}
        for question in applicable:
            bucket = totals.setdefault(
                question.category,
                {"raw": 0.0, "max": 0.0, "answered": 0, "applicable": 0},
            )
            bucket["applicable"] += 1

            response = responses.get(question.id)
            if response is None:
                continue

            bucket["raw"] += _value_of(response) * question.weight
            bucket["max"] += MAX_RESPONSE_VALUE * question.weight
            bucket["answered"] += 1

        scores = {}
        for category, bucket in totals.items():
            if bucket["answered"] == 0:
                continue
            scores[category] = CategoryScore(
                category=category,
                title=self._title(category),
                raw_total=round(bucket["raw"], 4),
                max_possible=round(bucket["max"], 4),
                normalized=self._normalize(bucket["raw"], bucket["max"]),
                answered=int(bucket["answered"]),
                applicable=int(bucket["applicable"]),
            )
        return scores

    def completion_rate(
        self,
        responses: ResponseMap,
        questions: Iterable[Question],
        stage: Stage,
    ) -> float:
        """Fraction of applicable questions answered; 0 when none apply."""
        applicable = self.applicable_questions(questions, stage)
        if not applicable:
            return 0.0
        answered = sum(1 for q in applicable if q.id in responses)
        return answered / len(applicable)

    def unanswered_categories(
        self,
        category_scores: Mapping[str, CategoryScore],
        questions: Iterable[Question],
        stage: Stage,
    ) -> list[str]:
        """Categories asked at this stage that received no answers."""
        missing = []
        for question in self.applicable_questions(questions, stage):
            if question.category not in category_scores and question.category not in missing:
                missing.append(question.category)
        return missing

    @staticmethod
    def _normalize(raw_total: float, max_possible: float) -> float:
        if max_possible <= 0:
            return 0.0
        return round(min(100.0, max(0.0, 100.0 * raw_total / max_possible)), 2)

    def _title(self, category: str) -> str:
        if self.catalog is not None:
            return self.catalog.category_title(category)
        return category.replace("-", " ").capitalize()
