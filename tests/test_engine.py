"""End-to-end tests for the assessment engine."""

import itertools
import json
from unittest.mock import patch

import pytest

from practice_catalog.defaults import build_default_catalog
from practice_catalog.errors import ConfigurationError
from practice_catalog.schema import PracticeCatalog, Recommendation, Stage
from practice_scorer.engine import AssessmentEngine, validate_catalog, validate_responses
from practice_scorer.prioritizer import RecommendationPrioritizer
from practice_scorer.schema import RecommendationContext, Response, ScoreLevel

from conftest import make_catalog_data


@pytest.fixture(scope="module")
def default_catalog():
    return build_default_catalog()


@pytest.fixture
def engine(default_catalog):
    return AssessmentEngine(default_catalog)


def _all_answers(catalog, stage, value):
    return {q.id: value for q in catalog.questions_for_stage(Stage.parse(stage))}


def _mixed_answers(catalog, stage):
    cycle = itertools.cycle([1, 4, 2, 3, 3])
    return {q.id: next(cycle) for q in catalog.questions_for_stage(Stage.parse(stage))}


class TestScenarios:
    """Reference scenarios for the scoring pipeline."""

    def test_perfect_answer_meets_benchmark(self, single_question_catalog):
        result = AssessmentEngine(single_question_catalog).evaluate({"sec-1": 4}, "seed")

        assert result.category_scores["security"].normalized == 100
        assert [r for r in result.recommendations if r.category == "security"] == []
        assert result.benchmark_gaps == {"security": -30.0}
        assert result.gaps == []

    def test_lowest_answer_triggers_recommendations(self, single_question_catalog):
        result = AssessmentEngine(single_question_catalog).evaluate({"sec-1": 1}, "seed")

        assert result.category_scores["security"].normalized == 25
        ids = [r.id for r in result.recommendations]
        assert "sec-gap" in ids
        assert "sec-range" in ids
        assert result.gaps == ["security"]

    def test_no_responses(self, engine):
        result = engine.evaluate({}, "seed")

        assert result.overall_score == 0
        assert result.level == ScoreLevel.INITIAL
        assert result.completion_rate == 0
        assert result.recommendations == []
        assert result.category_scores == {}
        assert result.processing_warnings

    def test_quick_win_ordering(self):
        r1 = Recommendation(id="R1", category="security", title="R1", impact="high", effort="low")
        r2 = Recommendation(id="R2", category="security", title="R2", impact="high", effort="high")
        prioritizer = RecommendationPrioritizer()
        prioritized = prioritizer.prioritize([r2, r1])
        quick_wins = prioritizer.quick_wins(prioritized)

        assert prioritized.index(r1) < prioritized.index(r2)
        assert r1 in quick_wins
        assert r2 not in quick_wins

    def test_non_applicable_response_excluded(self, small_catalog):
        engine = AssessmentEngine(small_catalog)
        baseline = engine.evaluate({"sec-1": 4}, "pre-seed")
        result = engine.evaluate({"sec-1": 4, "sec-2": 1}, "pre-seed")

        assert result.category_scores["security"] == baseline.category_scores["security"]
        assert result.completion_rate == baseline.completion_rate == 0.5
        assert result.answered_count == 1
        assert any("'sec-2'" in w for w in result.processing_warnings)


class TestProperties:
    """Invariants that hold for any input."""

    @pytest.mark.parametrize("stage", [s.value for s in Stage.ordered()])
    @pytest.mark.parametrize("mode", ["low", "high", "mixed", "partial"])
    def test_scores_within_range(self, engine, default_catalog, stage, mode):
        if mode == "low":
            answers = _all_answers(default_catalog, stage, 1)
        elif mode == "high":
            answers = _all_answers(default_catalog, stage, 4)
        elif mode == "mixed":
            answers = _mixed_answers(default_catalog, stage)
        else:
            answers = dict(list(_mixed_answers(default_catalog, stage).items())[::2])

        result = engine.evaluate(answers, stage)

        assert 0 <= result.overall_score <= 100
        for score in result.category_scores.values():
            assert 0 <= score.normalized <= 100
        assert 0 <= result.completion_rate <= 1

    def test_idempotent(self, engine, default_catalog):
        answers = _mixed_answers(default_catalog, "series-a")
        context = {"is_public": True, "has_ci": True, "repository_size": 200}

        first = engine.evaluate(answers, "series-a", context=context)
        second = engine.evaluate(dict(answers), "series-a", context=context)

        assert first.model_dump_json() == second.model_dump_json()

    def test_unanswered_question_does_not_penalize(self, small_catalog):
        engine = AssessmentEngine(small_catalog)
        # sec-2 also applies at seed but stays unanswered
        result = engine.evaluate({"sec-1": 4}, "seed")
        assert result.category_scores["security"].normalized == 100

    @pytest.mark.parametrize("stage", [s.value for s in Stage.ordered()])
    def test_quick_wins_subset(self, engine, default_catalog, stage):
        result = engine.evaluate(_all_answers(default_catalog, stage, 1), stage)
        ids = [r.id for r in result.recommendations]

        assert result.quick_wins
        for rec in result.quick_wins:
            assert rec.id in ids
            assert rec.is_quick_win
        assert [r.id for r in result.quick_wins] == [r.id for r in result.recommendations if r.is_quick_win]

    def test_monotonic_priority(self, engine, default_catalog):
        context = RecommendationContext(is_public=True, has_ci=True, repository_size=100)
        result = engine.evaluate(_all_answers(default_catalog, "seed", 1), "seed", context=context)
        scores = [d.priority_score for d in result.action_plan]

        assert len(scores) == len(result.recommendations)
        assert scores == sorted(scores, reverse=True)


class TestDefaultCatalogAssessments:
    """Assessments against the built-in catalog."""

    def test_all_top_answers(self, engine, default_catalog):
        result = engine.evaluate(_all_answers(default_catalog, "seed", 4), "seed")

        assert result.overall_score == 100
        assert result.level == ScoreLevel.ADVANCED
        assert result.recommendations == []
        assert result.is_complete
        assert len(result.strengths) == 5
        assert result.weaknesses == []

    def test_all_bottom_answers(self, engine, default_catalog):
        result = engine.evaluate(_all_answers(default_catalog, "seed", 1), "seed")

        assert result.overall_score == 25
        assert result.level == ScoreLevel.INITIAL
        assert set(result.gaps) == {"security", "reliability", "maintainability", "collaboration", "velocity"}
        assert "Security (25%)" in result.weaknesses
        assert all(r.stage in (None, Stage.SEED) for r in result.recommendations)
        assert "seed-pr-checks" in [r.id for r in result.recommendations]
        assert "pre-seed-basic-ci" not in [r.id for r in result.recommendations]

    def test_velocity_not_asked_at_pre_seed(self, engine, default_catalog):
        result = engine.evaluate(_all_answers(default_catalog, "pre-seed", 3), "pre-seed")
        assert "velocity" not in result.category_scores
        assert result.is_complete
        assert result.processing_warnings == []

    def test_partial_answers_recorded_as_warnings(self, engine):
        result = engine.evaluate({"dependabot": 2}, "seed")

        assert list(result.category_scores) == ["security"]
        assert not result.is_complete
        assert any("Reliability" in w for w in result.processing_warnings)

    def test_invalid_responses_do_not_raise(self, engine):
        result = engine.evaluate(
            {"dependabot": 9, "made-up": 3, "branch-protection": "yes", "ci-practices": 3},
            "seed",
        )
        assert list(result.category_scores) == ["reliability"]
        assert len(result.processing_warnings) >= 3

    def test_accepts_response_list(self, engine):
        result = engine.evaluate(
            [Response(question_id="dependabot", value=4), {"question_id": "codeowners", "value": 2}],
            Stage.SEED,
        )
        assert result.answered_count == 2

    def test_invalid_context_is_ignored(self, engine):
        result = engine.evaluate({"dependabot": 1}, "seed", context={"repository_size": -5})
        assert any("repository context" in w for w in result.processing_warnings)
        assert result.recommendations

    def test_unknown_stage_raises(self, engine):
        with pytest.raises(ConfigurationError):
            engine.evaluate({}, "unicorn")

    def test_enrichment(self, engine, default_catalog):
        result = engine.evaluate(_all_answers(default_catalog, "seed", 1), "seed")

        detail = next(d for d in result.action_plan if d.id == "security-dependabot")
        assert detail.estimated_time == "10-30 minutes"
        assert detail.business_impact.startswith("Significantly reduces security vulnerabilities")
        assert detail.automation_possible

        ids = [r.id for r in result.recommendations]
        steps = result.next_steps
        assert steps.immediate == ids[:3]
        assert steps.short_term == ids[3:8]
        assert steps.long_term == ids[8:]

        phases = result.implementation_plan.phases
        assert [p.name.split(":")[0] for p in phases] == ["Foundation", "Efficiency", "Acceleration"]
        security_ids = [r.id for r in result.recommendations if r.category == "security"]
        assert phases[0].recommendation_ids[:3] == security_ids[:3]

    def test_result_has_no_timestamps(self, engine, default_catalog):
        data = json.loads(engine.evaluate(_all_answers(default_catalog, "seed", 2), "seed").model_dump_json())
        assert "scored_at" not in data
        assert data["catalog_version"] == default_catalog.version


class TestEngineCatalogs:
    """Tests for catalog loading through the engine."""

    def test_defaults_to_builtin_catalog(self):
        assert AssessmentEngine().catalog == build_default_catalog()

    def test_load_catalog(self, small_catalog, tmp_path):
        path = tmp_path / "catalog.json"
        path.write_text(small_catalog.model_dump_json())
        engine = AssessmentEngine()
        engine.load_catalog(str(path))
        assert engine.catalog.version == "test-1"
        assert [q.id for q in engine.get_questions("pre-seed")] == ["sec-1", "rel-1"]

    @patch("practice_scorer.engine.download_catalog")
    def test_load_catalog_url(self, mock_download, small_catalog):
        mock_download.return_value = (small_catalog, None)
        engine = AssessmentEngine()
        engine.load_catalog_url("https://raw.githubusercontent.com/org/repo/main/catalog.json")
        assert engine.catalog is small_catalog
        mock_download.assert_called_once_with(
            "https://raw.githubusercontent.com/org/repo/main/catalog.json"
        )

    def test_empty_catalog_aborts_initialization(self):
        empty = PracticeCatalog.model_validate(make_catalog_data(questions=[]))
        with pytest.raises(ConfigurationError, match="defines no questions"):
            AssessmentEngine(empty)

    @patch("practice_scorer.engine.download_catalog")
    def test_load_catalog_url_rejects_empty_catalog(self, mock_download, small_catalog):
        mock_download.return_value = (PracticeCatalog.model_validate(make_catalog_data(questions=[])), None)
        engine = AssessmentEngine(small_catalog)

        with pytest.raises(ConfigurationError, match="defines no questions"):
            engine.load_catalog_url("https://raw.githubusercontent.com/org/repo/main/catalog.json")
        assert engine.catalog is small_catalog

    def test_validate_catalog(self, small_catalog, tmp_path):
        path = tmp_path / "catalog.json"
        path.write_text(small_catalog.model_dump_json())
        is_valid, issues, catalog = validate_catalog(path)
        assert is_valid and issues == [] and catalog == small_catalog

        is_valid, issues, catalog = validate_catalog(tmp_path / "missing.json")
        assert not is_valid and catalog is None

    def test_validate_responses(self, tmp_path):
        good = tmp_path / "good.json"
        good.write_text(json.dumps({"dependabot": 3, "codeowners": 4}))
        assert validate_responses(good) == (True, [], 2)

        bad = tmp_path / "bad.json"
        bad.write_text(json.dumps({"dependabot": 7}))
        is_valid, issues, count = validate_responses(bad)
        assert not is_valid and count == 0 and "'dependabot'" in issues[0]

        broken = tmp_path / "broken.json"
        broken.write_text("{")
        assert validate_responses(broken)[0] is False
