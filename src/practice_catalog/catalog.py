"""Loading, saving and validating practice catalogs."""

import json
import logging
from pathlib import Path
from typing import Union

import yaml
from pydantic import ValidationError

from .errors import ConfigurationError
from .schema import PracticeCatalog, Stage, duplicate_ids

logger = logging.getLogger(__name__)

YAML_SUFFIXES = (".yaml", ".yml")


def load_catalog(path: Union[str, Path]) -> PracticeCatalog:
    """Load a practice catalog from a JSON or YAML file.

    Raises:
        ConfigurationError: If the file is missing, unreadable, malformed
            or defines no questions.
    """
    path = Path(path)
    if not path.exists():
        raise ConfigurationError(f"Catalog file not found: {path}")

    try:
        with open(path, 'r', encoding='utf-8') as f:
            if path.suffix.lower() in YAML_SUFFIXES:
                data = yaml.safe_load(f)
            else:
                data = json.load(f)
    except (OSError, json.JSONDecodeError, yaml.YAMLError) as e:
        raise ConfigurationError(f"Could not read catalog {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigurationError(f"Catalog {path} must contain a mapping at the top level")

    try:
        catalog = PracticeCatalog.model_validate(data)
    except ValidationError as e:
        raise ConfigurationError(f"Catalog {path} failed schema validation: {e}") from e

    if not catalog.questions:
        raise ConfigurationError(f"Catalog {path} defines no questions")

    logger.info(
        "Loaded catalog %s (version %s, %d questions, %d recommendations)",
        path, catalog.version, len(catalog.questions), len(catalog.recommendations)
    )
    return catalog


def save_catalog(catalog: PracticeCatalog, path: Union[str, Path]) -> None:
    """Save the catalog as JSON, or YAML when the suffix asks for it."""
    path = Path(path)
    data = catalog.model_dump(mode='json')

    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, 'w', encoding='utf-8') as f:
        if path.suffix.lower() in YAML_SUFFIXES:
            yaml.dump(data, f, default_flow_style=False, sort_keys=False, allow_unicode=True)
        else:
            json.dump(data, f, indent=2, ensure_ascii=False)

    logger.info("Catalog saved to %s", path)


class CatalogValidator:
    """Validates catalog content and reports issues."""

    def validate(self, catalog: PracticeCatalog) -> list[str]:
        """Validate the catalog and return a list of issues."""
        issues = []

        if not catalog.questions:
            issues.append("Catalog defines no questions")

        known = {c.id for c in catalog.categories}
        for question in catalog.questions:
            issues.extend(self._validate_question(question, known))

        for rec in catalog.recommendations:
            if known and rec.category not in known:
                issues.append(f"[{rec.id}] Unknown category '{rec.category}'")
            if not rec.action_items:
                issues.append(f"[{rec.id}] No action items")

        benchmarked = [b.stage for b in catalog.benchmarks]
        for stage in Stage.ordered():
            if stage not in benchmarked:
                issues.append(f"No benchmark configured for stage '{stage.value}'")
        repeated = duplicate_ids(s.value for s in benchmarked)
        if repeated:
            issues.append(f"Duplicate benchmark stage IDs: {', '.join(repeated)}")

        for benchmark in catalog.benchmarks:
            for category in benchmark.expected_scores:
                if known and category not in known:
                    issues.append(
                        f"[{benchmark.stage.value}] Benchmark for unknown category '{category}'"
                    )

        return issues

    def _validate_question(self, question, known: set[str]) -> list[str]:
        issues = []
        prefix = f"[{question.id}]"

        if known and question.category not in known:
            issues.append(f"{prefix} Unknown category '{question.category}'")

        if not question.applicable_stages:
            issues.append(f"{prefix} Not applicable to any stage")

        values = sorted(o.value for o in question.options)
        if values and values != list(range(1, len(values) + 1)):
            issues.append(f"{prefix} Option values should run from 1 without gaps, got {values}")

        return issues


def validate_catalog_file(path: Union[str, Path]) -> tuple[bool, list[str]]:
    """Load and validate a catalog file.

    Returns:
        Tuple of (is_valid, issues). Load failures are reported as a
        single issue rather than raised.
    """
    try:
        catalog = load_catalog(path)
    except ConfigurationError as e:
        return False, [str(e)]

    issues = CatalogValidator().validate(catalog)
    return not issues, issues
