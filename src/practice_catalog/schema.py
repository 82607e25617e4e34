"""Pydantic models for the engineering practice catalog.

The catalog is static data loaded once at startup: categories, questions,
per-stage benchmarks and the recommendation catalog. All scores in the
catalog use the 0-100 scale.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from .errors import ConfigurationError


MAX_RESPONSE_VALUE = 4
MIN_RESPONSE_VALUE = 1


def duplicate_ids(ids) -> list[str]:
    """Ids that occur more than once, in first-repeat order."""
    seen = set()
    duplicates = []
    for item in ids:
        if item in seen and item not in duplicates:
            duplicates.append(item)
        seen.add(item)
    return duplicates


class Stage(str, Enum):
    """Startup / repository maturity stage."""
    PRE_SEED = "pre-seed"
    SEED = "seed"
    SERIES_A = "series-a"
    SERIES_B = "series-b"

    @classmethod
    def parse(cls, value: "Stage | str") -> "Stage":
        """Parse a stage from user input.

        Raises:
            ConfigurationError: If the value is not a known stage.
        """
        if isinstance(value, Stage):
            return value
        normalized = str(value).strip().lower().replace("_", "-").replace(" ", "-")
        for stage in cls:
            if stage.value == normalized:
                return stage
        known = ", ".join(s.value for s in cls)
        raise ConfigurationError(f"Unknown stage '{value}' (expected one of: {known})")

    @classmethod
    def ordered(cls) -> list["Stage"]:
        """Stages from earliest to latest."""
        return [cls.PRE_SEED, cls.SEED, cls.SERIES_A, cls.SERIES_B]


class Impact(str, Enum):
    """Expected impact of a recommendation."""
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class Effort(str, Enum):
    """Expected effort to implement a recommendation."""
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class Category(BaseModel):
    """A dimension of engineering health."""
    id: str = Field(..., description="Category identifier, e.g. 'security'")
    title: str = Field(..., description="Human-readable title")
    description: str = ""
    focus_areas: list[str] = Field(default_factory=list)


class QuestionOption(BaseModel):
    """One answer option of a question."""
    value: int = Field(..., ge=MIN_RESPONSE_VALUE, le=MAX_RESPONSE_VALUE)
    text: str


class Question(BaseModel):
    """A scorable questionnaire item."""
    id: str
    text: str
    category: str
    weight: float = Field(..., gt=0, description="Relative weight inside the category")
    applicable_stages: list[Stage] = Field(
        default_factory=lambda: Stage.ordered(),
        description="Stages for which this question is asked"
    )
    options: list[QuestionOption] = Field(default_factory=list)
    tooltip_term: Optional[str] = None
    help_url: Optional[str] = None

    def applies_to(self, stage: Stage) -> bool:
        """Check whether the question is asked at the given stage."""
        return stage in self.applicable_stages


class ScoreRange(BaseModel):
    """Closed score interval on the 0-100 scale."""
    min: float = Field(..., ge=0, le=100)
    max: float = Field(..., ge=0, le=100)

    @model_validator(mode="after")
    def _check_order(self) -> "ScoreRange":
        if self.min > self.max:
            raise ValueError(f"score range min {self.min} is greater than max {self.max}")
        return self

    def contains(self, score: float) -> bool:
        return self.min <= score <= self.max


class Resource(BaseModel):
    """A documentation link attached to a recommendation."""
    title: str
    url: str


class Recommendation(BaseModel):
    """A static improvement action from the recommendation catalog."""
    id: str
    category: str
    title: str
    description: str = ""
    impact: Impact
    effort: Effort
    action_items: list[str] = Field(default_factory=list)
    applicable_score_range: Optional[ScoreRange] = Field(
        None,
        description="Selected when the category score falls inside this range"
    )
    stage: Optional[Stage] = Field(
        None,
        description="Only selected when assessing this stage"
    )
    automatable: bool = Field(
        False,
        description="Whether the action can be applied by a script or workflow"
    )
    resources: list[Resource] = Field(default_factory=list)

    @field_validator("applicable_score_range", mode="before")
    @classmethod
    def _coerce_range(cls, value):
        # Accept [min, max] pairs as written in catalog files
        if isinstance(value, (list, tuple)):
            if len(value) != 2:
                raise ValueError("applicable_score_range must be a [min, max] pair")
            return {"min": value[0], "max": value[1]}
        return value

    @property
    def is_quick_win(self) -> bool:
        """High impact, low effort."""
        return self.impact == Impact.HIGH and self.effort == Effort.LOW


class StageBenchmark(BaseModel):
    """Expected category scores (0-100) and category importance for a stage."""
    stage: Stage
    label: str = ""
    description: str = ""
    expected_scores: dict[str, float] = Field(default_factory=dict)
    importance: dict[str, float] = Field(
        default_factory=dict,
        description="Category weight in the overall score (defaults to 1)"
    )

    @field_validator("expected_scores")
    @classmethod
    def _check_expected(cls, value: dict[str, float]) -> dict[str, float]:
        for category, score in value.items():
            if not 0 <= score <= 100:
                raise ValueError(f"expected score for '{category}' must be within 0-100, got {score}")
        return value

    @field_validator("importance")
    @classmethod
    def _check_importance(cls, value: dict[str, float]) -> dict[str, float]:
        for category, weight in value.items():
            if weight <= 0:
                raise ValueError(f"importance for '{category}' must be positive, got {weight}")
        return value

    def importance_of(self, category: str) -> float:
        return self.importance.get(category, 1.0)


class PracticeCatalog(BaseModel):
    """Complete practice catalog."""
    version: str = Field(default="1.0.0", description="Catalog schema version")
    categories: list[Category] = Field(default_factory=list)
    questions: list[Question] = Field(default_factory=list)
    recommendations: list[Recommendation] = Field(default_factory=list)
    benchmarks: list[StageBenchmark] = Field(default_factory=list)

    @model_validator(mode="after")
    def _check_unique_ids(self) -> "PracticeCatalog":
        # Lookups and scoring are keyed by id
        problems = [
            f"duplicate {kind} ids: {', '.join(dupes)}"
            for kind, dupes in (
                ("category", duplicate_ids(c.id for c in self.categories)),
                ("question", duplicate_ids(q.id for q in self.questions)),
                ("recommendation", duplicate_ids(r.id for r in self.recommendations)),
            )
            if dupes
        ]
        if problems:
            raise ValueError("; ".join(problems))
        return self

    def get_category(self, category_id: str) -> Optional[Category]:
        return next((c for c in self.categories if c.id == category_id), None)

    def category_title(self, category_id: str) -> str:
        """Title for a category id, falling back to a capitalized id."""
        category = self.get_category(category_id)
        if category:
            return category.title
        return category_id.replace("-", " ").capitalize()

    def get_question(self, question_id: str) -> Optional[Question]:
        return next((q for q in self.questions if q.id == question_id), None)

    def get_recommendation(self, recommendation_id: str) -> Optional[Recommendation]:
        return next((r for r in self.recommendations if r.id == recommendation_id), None)

    def get_benchmark(self, stage: Stage) -> Optional[StageBenchmark]:
        return next((b for b in self.benchmarks if b.stage == stage), None)

    def questions_for_stage(self, stage: Stage) -> list[Question]:
        return [q for q in self.questions if q.applies_to(stage)]
