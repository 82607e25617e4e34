"""Stage Benchmark Resolver - Phase 3 of the Assessment Engine.

Looks up the expected per-category scores for a maturity stage, plus
helpers for moving between stages.
"""

from typing import Optional, Union

from practice_catalog.errors import ConfigurationError
from practice_catalog.schema import PracticeCatalog, Stage, StageBenchmark


class StageBenchmarkResolver:
    """Resolves stage benchmarks from the catalog."""

    def __init__(self, catalog: PracticeCatalog):
        self.catalog = catalog

    def get_benchmark(self, stage: Union[Stage, str]) -> StageBenchmark:
        """Full benchmark entry for a stage.

        Raises:
            ConfigurationError: If the stage is unknown or has no benchmark.
        """
        stage = Stage.parse(stage)
        benchmark = self.catalog.get_benchmark(stage)
        if benchmark is None:
            raise ConfigurationError(f"No benchmark configured for stage '{stage.value}'")
        return benchmark

    def get_benchmarks(self, stage: Union[Stage, str]) -> dict[str, float]:
        """Expected category scores (0-100) for a stage."""
        return dict(self.get_benchmark(stage).expected_scores)

    def get_importance(self, stage: Union[Stage, str]) -> dict[str, float]:
        """Configured category importance weights for a stage."""
        return dict(self.get_benchmark(stage).importance)


def next_stage(stage: Union[Stage, str]) -> Optional[Stage]:
    """The stage after ``stage``, or None for the last one."""
    order = Stage.ordered()
    index = order.index(Stage.parse(stage))
    return order[index + 1] if index < len(order) - 1 else None


def previous_stage(stage: Union[Stage, str]) -> Optional[Stage]:
    """The stage before ``stage``, or None for the first one."""
    order = Stage.ordered()
    index = order.index(Stage.parse(stage))
    return order[index - 1] if index > 0 else None


def is_valid_stage_transition(
    current: Optional[Union[Stage, str]],
    target: Union[Stage, str],
) -> bool:
    """Check a stage change.

    Allowed: choosing a first stage, staying put, moving forward by one
    stage, or going back any number of stages.
    """
    order = Stage.ordered()
    target_index = order.index(Stage.parse(target))
    if current is None:
        return True
    current_index = order.index(Stage.parse(current))
    return target_index <= current_index or target_index - current_index == 1
