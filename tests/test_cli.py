"""Tests for the octoflow and octoflow-catalog command line interfaces."""

import json
from unittest.mock import patch

import pytest
import yaml
from click.testing import CliRunner

from practice_catalog.catalog_download import CatalogDownloadError
from practice_catalog.cli import main as catalog_cli
from practice_catalog.defaults import build_default_catalog
from practice_scorer.cli import main as scorer_cli
from practice_scorer.schema import Response
from practice_scorer.store import JsonFileResponseStore

_URL = "https://raw.githubusercontent.com/org/repo/main/catalog.json"


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def catalog_file(small_catalog, tmp_path):
    path = tmp_path / "catalog.json"
    path.write_text(small_catalog.model_dump_json())
    return path


@pytest.fixture
def responses_file(tmp_path):
    path = tmp_path / "responses.json"
    path.write_text(json.dumps({
        "branch-protection": 1,
        "dependabot": 2,
        "ci-practices": 3,
        "codeowners": 4,
        "pr-review": 2,
    }))
    return path


# === octoflow assess ===


class TestAssessCommand:
    """Tests for 'octoflow assess'."""

    def test_json_output_to_file(self, runner, responses_file, tmp_path):
        out = tmp_path / "result.json"
        result = runner.invoke(scorer_cli, [
            "assess", "-s", "pre-seed", "-r", str(responses_file), "-j", "-o", str(out),
        ])

        assert result.exit_code == 0, result.output
        data = json.loads(out.read_text())
        assert data["stage"] == "pre-seed"
        assert data["answered_count"] == 5
        assert data["category_scores"]["security"]["normalized"] == 38.33
        assert data["benchmarks"]["security"] == 37.5
        assert data["gaps"] == []
        assert data["recommendations"] == []

    def test_formatted_output(self, runner, responses_file):
        result = runner.invoke(scorer_cli, ["assess", "-s", "seed", "-r", str(responses_file)])

        assert result.exit_code == 0, result.output
        assert "Assessment Summary" in result.output
        assert "Top Recommendations" in result.output
        assert "Warnings" in result.output

    def test_stage_is_case_insensitive(self, runner, responses_file, tmp_path):
        out = tmp_path / "result.json"
        result = runner.invoke(scorer_cli, [
            "assess", "-s", "SEED", "-r", str(responses_file), "-j", "-o", str(out),
        ])
        assert result.exit_code == 0, result.output
        assert json.loads(out.read_text())["stage"] == "seed"

    def test_unknown_stage(self, runner, responses_file):
        result = runner.invoke(scorer_cli, ["assess", "-s", "unicorn", "-r", str(responses_file)])
        assert result.exit_code == 2

    def test_unreadable_responses(self, runner, tmp_path):
        broken = tmp_path / "broken.json"
        broken.write_text("{")
        result = runner.invoke(scorer_cli, ["assess", "-s", "seed", "-r", str(broken)])
        assert result.exit_code == 1
        assert "Error" in result.output

    def test_responses_list_format(self, runner, tmp_path):
        path = tmp_path / "responses.json"
        path.write_text(json.dumps({"responses": [
            {"question_id": "dependabot", "value": 4, "timestamp": 5},
            {"question_id": "codeowners", "value": 1},
        ]}))
        out = tmp_path / "result.json"

        result = runner.invoke(scorer_cli, ["assess", "-s", "seed", "-r", str(path), "-j", "-o", str(out)])

        assert result.exit_code == 0, result.output
        assert json.loads(out.read_text())["answered_count"] == 2

    def test_context_file(self, runner, responses_file, tmp_path):
        context = tmp_path / "context.json"
        context.write_text(json.dumps({"is_public": True, "has_ci": True}))
        out = tmp_path / "result.json"

        result = runner.invoke(scorer_cli, [
            "assess", "-s", "seed", "-r", str(responses_file), "-x", str(context), "-j", "-o", str(out),
        ])

        assert result.exit_code == 0, result.output
        plan = json.loads(out.read_text())["action_plan"]
        assert plan[0]["category"] == "security"

    def test_custom_catalog(self, runner, catalog_file, tmp_path):
        responses = tmp_path / "responses.json"
        responses.write_text(json.dumps({"sec-1": 1, "rel-1": 4}))
        out = tmp_path / "result.json"

        result = runner.invoke(scorer_cli, [
            "assess", "-s", "pre-seed", "-c", str(catalog_file), "-r", str(responses), "-j", "-o", str(out),
        ])

        assert result.exit_code == 0, result.output
        data = json.loads(out.read_text())
        assert data["catalog_version"] == "test-1"
        assert [r["id"] for r in data["recommendations"]] == ["sec-gap", "sec-range"]

    def test_catalog_url(self, runner, small_catalog, tmp_path):
        responses = tmp_path / "responses.json"
        responses.write_text(json.dumps({"sec-1": 2}))
        out = tmp_path / "result.json"

        with patch("practice_scorer.engine.download_catalog") as mock_download:
            mock_download.return_value = (small_catalog, None)
            result = runner.invoke(scorer_cli, [
                "assess", "-s", "seed", "--catalog-url", _URL, "-r", str(responses), "-j", "-o", str(out),
            ])

        assert result.exit_code == 0, result.output
        mock_download.assert_called_once_with(_URL)
        assert json.loads(out.read_text())["catalog_version"] == "test-1"

    def test_catalog_url_failure(self, runner, tmp_path):
        with patch("practice_scorer.engine.download_catalog",
                   side_effect=CatalogDownloadError("Invalid URL: nope")):
            result = runner.invoke(scorer_cli, ["assess", "-s", "seed", "--catalog-url", _URL])

        assert result.exit_code == 1
        assert "Invalid URL" in result.output

    def test_session_answers_are_merged(self, runner, tmp_path):
        store_dir = tmp_path / "sessions"
        store = JsonFileResponseStore(store_dir)
        store.save("team-a", {})
        responses = tmp_path / "responses.json"
        responses.write_text(json.dumps({"codeowners": 3}))
        out = tmp_path / "result.json"

        runner.invoke(scorer_cli, [
            "assess", "-s", "seed", "--session", "team-a", "--store-dir", str(store_dir),
            "-r", str(responses), "-j", "-o", str(out),
        ])
        assert json.loads(out.read_text())["answered_count"] == 1

        store.record("team-a", Response(question_id="dependabot", value=4))
        result = runner.invoke(scorer_cli, [
            "assess", "-s", "seed", "--session", "team-a", "--store-dir", str(store_dir),
            "-r", str(responses), "-j", "-o", str(out),
        ])

        assert result.exit_code == 0, result.output
        assert json.loads(out.read_text())["answered_count"] == 2

    def test_interactive_records_answers(self, runner, catalog_file, tmp_path):
        store_dir = tmp_path / "sessions"
        out = tmp_path / "result.json"

        result = runner.invoke(scorer_cli, [
            "assess", "-s", "pre-seed", "-c", str(catalog_file),
            "--session", "team-a", "--store-dir", str(store_dir), "-i", "-o", str(out),
        ], input="4\n0\n")

        assert result.exit_code == 0, result.output
        stored = JsonFileResponseStore(store_dir).load("team-a")
        assert list(stored) == ["sec-1"]
        assert stored["sec-1"].value == 4
        data = json.loads(out.read_text())
        assert data["answered_count"] == 1
        assert data["category_scores"]["security"]["normalized"] == 100


# === octoflow questions / validate / inspect / init-config ===


class TestOtherScorerCommands:
    """Tests for the remaining 'octoflow' commands."""

    def test_version(self, runner):
        result = runner.invoke(scorer_cli, ["--version"])
        assert result.exit_code == 0
        assert "1.0.0" in result.output

    def test_questions(self, runner, catalog_file):
        result = runner.invoke(scorer_cli, ["questions", "-s", "pre-seed", "-c", str(catalog_file)])

        assert result.exit_code == 0, result.output
        assert "Questions for pre-seed (2)" in result.output
        assert "sec-1" in result.output
        assert "sec-2" not in result.output

    def test_validate_requires_input(self, runner):
        result = runner.invoke(scorer_cli, ["validate"])
        assert result.exit_code == 0
        assert "Please specify" in result.output

    def test_validate_good_files(self, runner, catalog_file, tmp_path):
        responses = tmp_path / "responses.json"
        responses.write_text(json.dumps({"sec-1": 2, "rel-1": 3}))

        result = runner.invoke(scorer_cli, ["validate", "-c", str(catalog_file), "-r", str(responses)])

        assert result.exit_code == 0, result.output
        assert "Catalog valid" in result.output
        assert "Responses valid" in result.output

    def test_validate_bad_responses(self, runner, tmp_path):
        responses = tmp_path / "responses.json"
        responses.write_text(json.dumps({"dependabot": 5, "unknown-question": 2}))

        result = runner.invoke(scorer_cli, ["validate", "-r", str(responses)])

        assert result.exit_code == 1
        assert "Responses invalid" in result.output
        assert "unknown-question" in result.output

    def test_validate_bad_catalog(self, runner, tmp_path):
        path = tmp_path / "catalog.json"
        path.write_text(json.dumps({"version": "1", "questions": []}))

        result = runner.invoke(scorer_cli, ["validate", "-c", str(path)])

        assert result.exit_code == 1
        assert "Catalog invalid" in result.output

    def test_inspect(self, runner):
        result = runner.invoke(scorer_cli, ["inspect", "--category", "security"])

        assert result.exit_code == 0, result.output
        assert "Stage Benchmarks" in result.output
        assert "Recommendations" in result.output

    def test_inspect_recommendation(self, runner):
        result = runner.invoke(scorer_cli, ["inspect", "--id", "security-dependabot"])

        assert result.exit_code == 0, result.output
        assert "ID: security-dependabot" in result.output
        assert "Action Items" in result.output
        assert "When: category below benchmark" in result.output
        assert "Or when" not in result.output

    def test_inspect_ranged_recommendation(self, runner):
        result = runner.invoke(scorer_cli, ["inspect", "--id", "series-b-enterprise-security"])

        assert result.exit_code == 0, result.output
        assert "When: category below benchmark" in result.output
        assert "Or when: score in 50-100" in result.output

    def test_inspect_unknown_recommendation(self, runner):
        result = runner.invoke(scorer_cli, ["inspect", "--id", "nope"])
        assert "Recommendation not found" in result.output

    def test_init_config(self, runner):
        with runner.isolated_filesystem():
            result = runner.invoke(scorer_cli, ["init-config"])
            assert result.exit_code == 0, result.output
            assert "Config file created" in result.output
            with open("octoflow-config.yaml", encoding="utf-8") as f:
                assert yaml.safe_load(f)["level_thresholds"]["advanced"] == 90

            result = runner.invoke(scorer_cli, ["init-config"])
            assert result.exit_code == 1
            assert "already exists" in result.output

            result = runner.invoke(scorer_cli, ["init-config", "--force"])
            assert result.exit_code == 0

    def test_config_option_changes_levels(self, runner, responses_file, tmp_path):
        config = tmp_path / "config.yaml"
        config.write_text(yaml.dump({"level_thresholds": {"advanced": 30, "proactive": 20, "basic": 10}}))
        out = tmp_path / "result.json"

        result = runner.invoke(scorer_cli, [
            "--config", str(config),
            "assess", "-s", "pre-seed", "-r", str(responses_file), "-j", "-o", str(out),
        ])

        assert result.exit_code == 0, result.output
        assert json.loads(out.read_text())["level"] == "Advanced"


# === octoflow-catalog ===


class TestCatalogCLI:
    """Tests for 'octoflow-catalog'."""

    @pytest.mark.parametrize("name", ["catalog.json", "catalog.yaml"])
    def test_export_then_validate(self, runner, tmp_path, name):
        out = tmp_path / name

        result = runner.invoke(catalog_cli, ["export", "--out", str(out)])
        assert result.exit_code == 0, result.output
        assert "Catalog exported" in result.output

        result = runner.invoke(catalog_cli, ["validate", "--catalog", str(out)])
        assert result.exit_code == 0, result.output
        assert "Catalog is valid" in result.output

    def test_export_refuses_overwrite(self, runner, tmp_path):
        out = tmp_path / "catalog.json"
        out.write_text("{}")

        result = runner.invoke(catalog_cli, ["export", "--out", str(out)])
        assert result.exit_code == 1
        assert "already exists" in result.output
        assert out.read_text() == "{}"

        result = runner.invoke(catalog_cli, ["export", "--out", str(out), "--force"])
        assert result.exit_code == 0

    def test_validate_reports_issues(self, runner, tmp_path, catalog_data):
        catalog_data["questions"][1]["category"] = "mystery"
        path = tmp_path / "catalog.yaml"
        path.write_text(yaml.safe_dump(catalog_data))

        result = runner.invoke(catalog_cli, ["validate", "-c", str(path)])

        assert result.exit_code == 1
        assert "Unknown category" in result.output

    def test_validate_missing_file(self, runner, tmp_path):
        result = runner.invoke(catalog_cli, ["validate", "-c", str(tmp_path / "missing.json")])
        assert result.exit_code == 1
        assert "Error loading catalog" in result.output

    @patch("practice_catalog.cli.download_catalog")
    def test_download_success(self, mock_download, runner, tmp_path, small_catalog):
        dest = tmp_path / "catalog.json"
        mock_download.return_value = (small_catalog, dest)

        result = runner.invoke(catalog_cli, ["download", "--url", _URL, "--out", str(dest)])

        assert result.exit_code == 0, result.output
        assert "Saved 4 questions" in result.output
        mock_download.assert_called_once_with(_URL, output=dest)

    @patch("practice_catalog.cli.download_catalog")
    def test_download_failure(self, mock_download, runner, tmp_path):
        mock_download.side_effect = CatalogDownloadError("Invalid URL: URL scheme must be HTTPS")

        result = runner.invoke(catalog_cli, ["download", "--url", "http://example.com/c.json"])

        assert result.exit_code == 1
        assert "Download failed" in result.output

    def test_default_catalog_summary(self, runner, tmp_path):
        result = runner.invoke(catalog_cli, ["export", "-o", str(tmp_path / "c.json")])
        for category in build_default_catalog().categories:
            assert category.title in result.output
