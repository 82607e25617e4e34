"""Assessment Engine - orchestrates the scoring pipeline.

Pipeline:
1. Normalize responses (drop invalid items with warnings)
2. Aggregate category scores for the stage
3. Resolve the stage benchmark
4. Combine into an overall score and level
5. Generate recommendations from gaps and score ranges
6. Prioritize, pick quick wins and build the result

The engine is synchronous and holds no per-assessment state: every call
to ``evaluate`` builds a fresh result from its arguments and the catalog.
"""

import json
import logging
from pathlib import Path
from typing import Any, Optional, Union

from pydantic import ValidationError

from practice_catalog.catalog import CatalogValidator, load_catalog
from practice_catalog.catalog_download import download_catalog
from practice_catalog.defaults import build_default_catalog
from practice_catalog.errors import ConfigurationError
from practice_catalog.schema import PracticeCatalog, Question, Stage

from .aggregator import CategoryAggregator
from .benchmarks import StageBenchmarkResolver
from .combiner import OverallScoreCombiner
from .errors import DegenerateInputWarning
from .explainer import build_assessment_result
from .normalizer import ResponseNormalizer
from .prioritizer import RecommendationPrioritizer
from .recommender import RecommendationGenerator
from .schema import AssessmentResult, RecommendationContext

logger = logging.getLogger(__name__)


def _require_questions(catalog: PracticeCatalog) -> PracticeCatalog:
    if not catalog.questions:
        raise ConfigurationError(
            f"Catalog version {catalog.version} defines no questions; nothing can be assessed"
        )
    return catalog


class AssessmentEngine:
    """Scores questionnaire responses against a practice catalog."""

    def __init__(self, catalog: Optional[PracticeCatalog] = None):
        """Initialize the engine, using the built-in catalog by default.

        Raises:
            ConfigurationError: If the catalog defines no questions.
        """
        self.catalog = _require_questions(
            catalog if catalog is not None else build_default_catalog()
        )

    def load_catalog(self, path: Union[str, Path]) -> PracticeCatalog:
        """Replace the catalog with one loaded from a JSON or YAML file.

        Raises:
            ConfigurationError: If the catalog cannot be loaded.
        """
        self.catalog = load_catalog(path)
        return self.catalog

    def load_catalog_url(self, url: str) -> PracticeCatalog:
        """Replace the catalog with one downloaded over HTTPS.

        Raises:
            CatalogDownloadError: If the download or validation fails.
            ConfigurationError: If the catalog defines no questions.
        """
        catalog, _ = download_catalog(url)
        self.catalog = _require_questions(catalog)
        return self.catalog

    def get_questions(self, stage: Union[Stage, str]) -> list[Question]:
        """Questions asked at a stage, in catalog order."""
        return self.catalog.questions_for_stage(Stage.parse(stage))

    def evaluate(
        self,
        responses: Any,
        stage: Union[Stage, str],
        context: Optional[Union[RecommendationContext, dict]] = None,
    ) -> AssessmentResult:
        """Run a full assessment.

        Args:
            responses: ``{question_id: value}``, ``{question_id: {value, timestamp}}``
                or a list of Response objects or dicts
            stage: Stage to assess against
            context: Optional repository context used to boost priorities

        Returns:
            AssessmentResult

        Raises:
            ConfigurationError: If the stage is unknown or has no benchmark.
        """
        stage = Stage.parse(stage)
        resolver = StageBenchmarkResolver(self.catalog)
        benchmark = resolver.get_benchmark(stage)

        # Phase 1: Normalize
        normalizer = ResponseNormalizer(q.id for q in self.catalog.questions)
        normalized, warnings = normalizer.normalize(responses)
        repo_context = self._normalize_context(context, warnings)

        # Phase 2: Aggregate
        aggregator = CategoryAggregator(self.catalog)
        applicable = aggregator.applicable_questions(self.catalog.questions, stage)
        applicable_ids = {q.id for q in applicable}

        for question_id in normalized:
            if question_id not in applicable_ids:
                message = f"Response to '{question_id}' ignored: question is not asked at stage '{stage.value}'"
                logger.info(message)
                warnings.append(message)

        if not applicable:
            self._degenerate(f"No questions apply to stage '{stage.value}'", warnings)

        category_scores = aggregator.aggregate(normalized, applicable, stage)
        for category in aggregator.unanswered_categories(category_scores, applicable, stage):
            self._degenerate(
                f"No answers for category '{self.catalog.category_title(category)}'; "
                f"it is excluded from the overall score",
                warnings,
            )

        answered_count = sum(1 for q in applicable if q.id in normalized)
        completion_rate = aggregator.completion_rate(normalized, applicable, stage)
        logger.debug(
            "Aggregated %d categories for %s (%d/%d answered)",
            len(category_scores), stage.value, answered_count, len(applicable)
        )

        # Phase 3-4: Benchmarks and overall score
        benchmarks = dict(benchmark.expected_scores)
        overall = OverallScoreCombiner().combine(category_scores, benchmark)

        # Phase 5-6: Recommendations
        recommendations = RecommendationGenerator().generate(
            category_scores, benchmarks, self.catalog, stage
        )
        prioritizer = RecommendationPrioritizer()
        prioritized = prioritizer.prioritize(recommendations, repo_context)
        quick_wins = prioritizer.quick_wins(prioritized)

        return build_assessment_result(
            stage=stage,
            catalog_version=self.catalog.version,
            overall=overall,
            category_scores=category_scores,
            benchmarks=benchmarks,
            completion_rate=completion_rate,
            answered_count=answered_count,
            applicable_count=len(applicable),
            prioritized=prioritized,
            quick_wins=quick_wins,
            prioritizer=prioritizer,
            context=repo_context,
            warnings=warnings,
        )

    @staticmethod
    def _normalize_context(
        context: Optional[Union[RecommendationContext, dict]],
        warnings: list[str],
    ) -> Optional[RecommendationContext]:
        if context is None or isinstance(context, RecommendationContext):
            return context
        try:
            return RecommendationContext.model_validate(context)
        except ValidationError as e:
            message = f"Ignoring invalid repository context: {e.error_count()} validation error(s)"
            logger.warning(message)
            warnings.append(message)
            return None

    @staticmethod
    def _degenerate(message: str, warnings: list[str]) -> None:
        warning = DegenerateInputWarning(message)
        logger.warning("%s", warning)
        warnings.append(str(warning))


def validate_catalog(catalog_path: Union[str, Path]) -> tuple[bool, list[str], Optional[PracticeCatalog]]:
    """Validate a catalog file.

    Returns:
        Tuple of (is_valid, issues, catalog or None when it cannot be loaded).
    """
    try:
        catalog = load_catalog(catalog_path)
    except ConfigurationError as e:
        return False, [str(e)], None

    issues = CatalogValidator().validate(catalog)
    return not issues, issues, catalog


def validate_responses(
    responses_path: Union[str, Path],
    catalog: Optional[PracticeCatalog] = None,
) -> tuple[bool, list[str], int]:
    """Validate a responses JSON file against a catalog.

    Returns:
        Tuple of (is_valid, issues, number of usable responses).
    """
    try:
        with open(responses_path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        return False, [f"Could not read responses: {e}"], 0

    if catalog is None:
        catalog = build_default_catalog()
    normalizer = ResponseNormalizer(q.id for q in catalog.questions)
    responses, issues = normalizer.normalize(data)
    return not issues, issues, len(responses)
