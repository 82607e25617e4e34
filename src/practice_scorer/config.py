"""Centralized configuration management for the assessment engine."""

import os
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, Field, model_validator


class LevelThresholdsConfig(BaseModel):
    """Minimum overall score (0-100) for each maturity level.

    Scores below ``basic`` are reported as Initial.
    """
    advanced: float = Field(90.0, ge=0, le=100, description="Minimum score for Advanced")
    proactive: float = Field(70.0, ge=0, le=100, description="Minimum score for Proactive")
    basic: float = Field(50.0, ge=0, le=100, description="Minimum score for Basic")

    @model_validator(mode="after")
    def _check_order(self) -> "LevelThresholdsConfig":
        if not self.basic <= self.proactive <= self.advanced:
            raise ValueError("level thresholds must satisfy basic <= proactive <= advanced")
        return self


class SummaryThresholdsConfig(BaseModel):
    """Thresholds for listing a category as a strength or a weakness."""
    strength: float = Field(
        70.0,
        description="Categories scoring at or above this are strengths"
    )
    weakness: float = Field(
        50.0,
        description="Categories scoring below this are weaknesses"
    )


class PriorityMultipliersConfig(BaseModel):
    """Context-sensitive boosts applied when prioritizing recommendations.

    Boosts only apply when a repository context is supplied.
    """
    public_security: float = Field(
        2.0,
        description="Multiplier for security items on public repositories"
    )
    small_repository_maintainability: float = Field(
        1.5,
        description="Multiplier for maintainability items on small repositories"
    )
    small_repository_kb: int = Field(
        500,
        description="Repositories below this size (KB) count as small"
    )
    active_collaboration: float = Field(
        1.3,
        description="Multiplier for collaboration items when pull request activity is high"
    )
    active_pull_requests: int = Field(
        10,
        description="More recent pull requests than this counts as high activity"
    )
    ci_reliability: float = Field(
        1.2,
        description="Multiplier for reliability items when CI is present"
    )
    automatable: float = Field(
        1.5,
        description="Multiplier for items that can be automated"
    )


class NextStepsConfig(BaseModel):
    """How prioritized recommendations are split into next steps."""
    immediate: int = Field(3, ge=0, description="Number of immediate actions")
    short_term: int = Field(5, ge=0, description="Number of short term actions")


class ScorerConfig(BaseModel):
    """Complete configuration for the assessment engine."""
    level_thresholds: LevelThresholdsConfig = Field(default_factory=LevelThresholdsConfig)
    summary_thresholds: SummaryThresholdsConfig = Field(default_factory=SummaryThresholdsConfig)
    priority_multipliers: PriorityMultipliersConfig = Field(default_factory=PriorityMultipliersConfig)
    next_steps: NextStepsConfig = Field(default_factory=NextStepsConfig)


# Global config instance
_config: Optional[ScorerConfig] = None


def get_config() -> ScorerConfig:
    """Get the current configuration.

    Returns the global config, initializing with defaults if not yet loaded.
    """
    global _config
    if _config is None:
        _config = ScorerConfig()
    return _config


def load_config(path: Path) -> ScorerConfig:
    """Load configuration from a YAML file.

    Args:
        path: Path to the YAML configuration file.

    Returns:
        The loaded ScorerConfig.
    """
    global _config

    with open(path, 'r', encoding='utf-8') as f:
        data = yaml.safe_load(f)

    _config = ScorerConfig.model_validate(data or {})
    return _config


def reset_config() -> None:
    """Reset configuration to defaults."""
    global _config
    _config = ScorerConfig()


def find_config_file() -> Optional[Path]:
    """Find an OctoFlow configuration file.

    Looks in (order of priority):
    1. OCTOFLOW_CONFIG environment variable
    2. ./octoflow-config.yaml
    3. ./octoflow-config.yml
    4. ~/.config/octoflow/config.yaml
    """
    env_path = os.environ.get("OCTOFLOW_CONFIG")
    if env_path:
        path = Path(env_path)
        if path.exists():
            return path

    for name in ["octoflow-config.yaml", "octoflow-config.yml"]:
        path = Path(name)
        if path.exists():
            return path

    user_config = Path.home() / ".config" / "octoflow" / "config.yaml"
    if user_config.exists():
        return user_config

    return None


def save_default_config(path: Path) -> None:
    """Save the default configuration to a YAML file.

    Args:
        path: Path where to save the configuration.
    """
    data = ScorerConfig().model_dump()

    yaml_content = """# OctoFlow Assessment Configuration
# =================================
#
# This file configures maturity level thresholds, strength/weakness
# thresholds, recommendation priority boosts and next-step grouping.
#
# Copy this file to one of these locations:
#   - ./octoflow-config.yaml (current directory)
#   - ~/.config/octoflow/config.yaml (user config)
#
# Or set the OCTOFLOW_CONFIG environment variable.

"""
    yaml_content += yaml.dump(data, default_flow_style=False, sort_keys=False, allow_unicode=True)

    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, 'w', encoding='utf-8') as f:
        f.write(yaml_content)
