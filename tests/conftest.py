"""Shared fixtures for the OctoFlow tests."""

import pytest

from practice_catalog.schema import PracticeCatalog
from practice_scorer.config import reset_config

ALL_STAGES = ["pre-seed", "seed", "series-a", "series-b"]


def _options():
    return [{"value": v, "text": f"Option {v}"} for v in range(1, 5)]


def make_catalog_data(**overrides) -> dict:
    """Build a small catalog dict.

    Two categories: security (sec-1 everywhere, sec-2 from seed on) and
    reliability (rel-1 everywhere, rel-late from series A on).
    """
    data = {
        "version": "test-1",
        "categories": [
            {"id": "security", "title": "Security"},
            {"id": "reliability", "title": "Reliability"},
        ],
        "questions": [
            {"id": "sec-1", "text": "Q1", "category": "security", "weight": 1.0,
             "applicable_stages": ALL_STAGES, "options": _options()},
            {"id": "sec-2", "text": "Q2", "category": "security", "weight": 0.5,
             "applicable_stages": ["seed", "series-a", "series-b"], "options": _options()},
            {"id": "rel-1", "text": "Q3", "category": "reliability", "weight": 1.0,
             "applicable_stages": ALL_STAGES, "options": _options()},
            {"id": "rel-late", "text": "Q4", "category": "reliability", "weight": 1.0,
             "applicable_stages": ["series-a", "series-b"], "options": _options()},
        ],
        "recommendations": [
            {"id": "sec-gap", "category": "security", "title": "Close the security gap",
             "impact": "high", "effort": "low", "action_items": ["Do it"]},
            {"id": "sec-range", "category": "security", "title": "Security basics",
             "impact": "medium", "effort": "medium", "applicable_score_range": [0, 30],
             "action_items": ["Start"]},
            {"id": "rel-gap", "category": "reliability", "title": "Close the reliability gap",
             "impact": "high", "effort": "high", "action_items": ["Do it"]},
            {"id": "rel-seed-only", "category": "reliability", "title": "Seed reliability",
             "impact": "low", "effort": "low", "stage": "seed",
             "applicable_score_range": [0, 100], "action_items": ["Do it"]},
        ],
        "benchmarks": [
            {"stage": stage, "label": stage,
             "expected_scores": {"security": 70.0, "reliability": 60.0},
             "importance": {"security": 2.0, "reliability": 1.0}}
            for stage in ALL_STAGES
        ],
    }
    data.update(overrides)
    return data


@pytest.fixture
def catalog_data() -> dict:
    return make_catalog_data()


@pytest.fixture
def small_catalog(catalog_data) -> PracticeCatalog:
    return PracticeCatalog.model_validate(catalog_data)


@pytest.fixture
def single_question_catalog() -> PracticeCatalog:
    """One security question with weight 1 and a seed benchmark of 70."""
    data = make_catalog_data(
        categories=[{"id": "security", "title": "Security"}],
        questions=[
            {"id": "sec-1", "text": "Q1", "category": "security", "weight": 1.0,
             "applicable_stages": ["seed"], "options": _options()},
            {"id": "sec-late", "text": "Q2", "category": "security", "weight": 1.0,
             "applicable_stages": ["series-a"], "options": _options()},
        ],
        recommendations=[
            {"id": "sec-gap", "category": "security", "title": "Close the security gap",
             "impact": "high", "effort": "low", "action_items": ["Do it"]},
            {"id": "sec-range", "category": "security", "title": "Security basics",
             "impact": "medium", "effort": "medium", "applicable_score_range": [0, 30],
             "action_items": ["Start"]},
        ],
        benchmarks=[
            {"stage": stage, "expected_scores": {"security": 70.0}}
            for stage in ALL_STAGES
        ],
    )
    return PracticeCatalog.model_validate(data)


@pytest.fixture(autouse=True)
def _default_config():
    """Every test starts from the default configuration."""
    reset_config()
    yield
    reset_config()
