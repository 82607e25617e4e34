"""OctoFlow assessment engine: scores practice questionnaires and recommends improvements."""

from .engine import AssessmentEngine, validate_catalog, validate_responses
from .errors import (
    ConfigurationError,
    DegenerateInputWarning,
    ResponseValidationError,
    StorageError,
)
from .schema import (
    AssessmentResult,
    CategoryScore,
    OverallScore,
    RecommendationContext,
    Response,
    ScoreLevel,
)
from .store import JsonFileResponseStore

__all__ = [
    "AssessmentEngine",
    "AssessmentResult",
    "CategoryScore",
    "ConfigurationError",
    "DegenerateInputWarning",
    "JsonFileResponseStore",
    "OverallScore",
    "RecommendationContext",
    "Response",
    "ResponseValidationError",
    "ScoreLevel",
    "StorageError",
    "validate_catalog",
    "validate_responses",
]
