"""Practice catalog: questions, categories, stage benchmarks and recommendations."""

from .catalog import CatalogValidator, load_catalog, save_catalog, validate_catalog_file
from .defaults import build_default_catalog
from .errors import ConfigurationError
from .schema import (
    Category,
    Effort,
    Impact,
    PracticeCatalog,
    Question,
    Recommendation,
    Stage,
    StageBenchmark,
)

__all__ = [
    "Category",
    "CatalogValidator",
    "ConfigurationError",
    "Effort",
    "Impact",
    "PracticeCatalog",
    "Question",
    "Recommendation",
    "Stage",
    "StageBenchmark",
    "build_default_catalog",
    "load_catalog",
    "save_catalog",
    "validate_catalog_file",
]
