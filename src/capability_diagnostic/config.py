"""Centralized configuration management for the capability diagnostic."""

import logging
import os
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)


class BandThresholdsConfig(BaseModel):
    """Lower bounds (inclusive) for each capability band.

    Averages below ``developing`` are Emerging. The top band includes 4.
    """
    developing: float = Field(1.25, description="Minimum average for the Developing band")
    established: float = Field(2.5, description="Minimum average for the Established band")
    leading: float = Field(3.5, description="Minimum average for the Leading band")


class RuleThresholdsConfig(BaseModel):
    """Trigger thresholds for the risk signal rules."""
    low_floor_max: int = Field(
        1,
        description="A domain at or below this score triggers the low-floor signal"
    )
    imbalance_watch_spread: int = Field(
        2,
        description="Score spread (max - min) that triggers the imbalance signal"
    )
    imbalance_concern_spread: int = Field(
        3,
        description="Score spread at which imbalance is raised to Concern"
    )
    exposure_max_score: int = Field(
        2,
        description="Ethics or governance at or below this score is exposed under high-stakes use"
    )
    vendor_max_score: int = Field(
        2,
        description="Renewal or governance at or below this score is fragile under vendor reliance"
    )
    ownership_max_score: int = Field(
        2,
        description="Co-agency or governance at or below this score is ambiguous under unclear ownership"
    )
    coverage_watch_spread: float = Field(
        25.0,
        description="Coverage spread (percentage points) that triggers the coverage-imbalance signal"
    )
    coverage_concern_spread: float = Field(
        40.0,
        description="Coverage spread at which coverage imbalance is raised to Concern"
    )


class StabiliserThresholdsConfig(BaseModel):
    """Minimums for the positive conditions listed as stabilisers."""
    average_min: float = Field(2.5, description="Minimum average for a stable baseline")
    awareness_min: int = Field(3, description="Minimum awareness score for strong orientation")
    renewal_min: int = Field(3, description="Minimum renewal score for renewal practices")
    governance_min: int = Field(3, description="Minimum governance score for defensible decisions")


class DiagnosticConfig(BaseModel):
    """Complete configuration for the capability diagnostic."""
    band_thresholds: BandThresholdsConfig = Field(default_factory=BandThresholdsConfig)
    rule_thresholds: RuleThresholdsConfig = Field(default_factory=RuleThresholdsConfig)
    stabiliser_thresholds: StabiliserThresholdsConfig = Field(default_factory=StabiliserThresholdsConfig)


ENV_VAR = "CAPABILITY_DIAGNOSTIC_CONFIG"
LOCAL_CONFIG_NAMES = ("diagnostic-config.yaml", "diagnostic-config.yml")

CONFIG_HEADER = """# Capability Diagnostic Configuration
# ===================================
#
# Thresholds used to classify the average score into a band, to fire
# each risk signal, and to list stabilisers. Leave a value out to keep
# its default.
#
# Searched for, in order: ${ENV_VAR}, ./diagnostic-config.yaml,
# ./diagnostic-config.yml, ~/.config/capability-diagnostic/config.yaml

"""

# Process-wide thresholds; engines copy a reference at construction
_active: Optional[DiagnosticConfig] = None


def get_config() -> DiagnosticConfig:
    """Return the active thresholds, falling back to the built-in defaults."""
    global _active
    if _active is None:
        _active = DiagnosticConfig()
    return _active


def load_config(path: Path) -> DiagnosticConfig:
    """Read thresholds from YAML and make them the active configuration.

    An empty document yields the defaults; keys that are present replace
    only the values they name.
    """
    global _active

    with open(path, 'r', encoding='utf-8') as f:
        overrides = yaml.safe_load(f) or {}

    _active = DiagnosticConfig.model_validate(overrides)
    logger.info("Loaded diagnostic configuration from %s", path)
    return _active


def reset_config() -> None:
    """Drop any loaded thresholds and return to the defaults."""
    global _active
    _active = DiagnosticConfig()


def _candidate_paths() -> list[Path]:
    candidates = []
    env_path = os.environ.get(ENV_VAR)
    if env_path:
        candidates.append(Path(env_path))
    candidates.extend(Path(name) for name in LOCAL_CONFIG_NAMES)
    candidates.append(Path.home() / ".config" / "capability-diagnostic" / "config.yaml")
    return candidates


def find_config_file() -> Optional[Path]:
    """First existing config file among the search locations, if any."""
    return next((p for p in _candidate_paths() if p.exists()), None)


def save_default_config(path: Path) -> None:
    """Write the built-in thresholds to ``path`` as a commented YAML template."""
    defaults = DiagnosticConfig().model_dump()
    body = yaml.dump(defaults, default_flow_style=False, sort_keys=False, allow_unicode=True)

    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(CONFIG_HEADER.replace("${ENV_VAR}", ENV_VAR) + body, encoding="utf-8")
