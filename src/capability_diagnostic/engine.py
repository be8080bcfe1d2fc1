"""Diagnostic Engine - entry point for evaluating a submission.

Runs the scoring utilities, the rule engine and summary assembly over one
submission and returns a ``DiagnosticResult``. Each call is independent;
the engine holds only its (read-only) configuration.
"""

import json
import logging
from pathlib import Path
from typing import Optional, Union

import yaml
from pydantic import ValidationError

from .config import DiagnosticConfig, get_config
from .exceptions import InvalidInputError
from .rules import build_context, build_summary, evaluate_rules
from .schema import DiagnosticInput, DiagnosticResult
from .scoring import average, band_for_average

logger = logging.getLogger(__name__)

YAML_SUFFIXES = {".yaml", ".yml"}


class DiagnosticEngine:
    """Evaluates diagnostic submissions against the configured thresholds.

    Principles:
    - Every signal is explainable (rationale, prompts, related domains)
    - Out-of-range values are clamped, never rejected
    - The signal list is never empty
    """

    def __init__(self, config: Optional[DiagnosticConfig] = None):
        """Initialize engine with optional configuration (defaults to the global config)."""
        self.config = config or get_config()

    def evaluate(self, inputs: DiagnosticInput) -> DiagnosticResult:
        """Evaluate a single submission.

        Args:
            inputs: The diagnostic submission

        Returns:
            Band, average, domain stats, signals and summary

        Raises:
            InvalidInputError: If the organisation name is blank
        """
        if not inputs.org_name or not inputs.org_name.strip():
            raise InvalidInputError("Organisation name must not be empty")

        logger.debug("Evaluating diagnostic for %s", inputs.org_name)

        ctx = build_context(inputs, self.config)
        scores = [s.score for s in ctx.domain_stats]
        avg = average(scores)
        average_score = round(avg, 2)
        band = band_for_average(avg, self.config.band_thresholds)

        signals = evaluate_rules(ctx)
        summary = build_summary(ctx, average_score)

        logger.debug(
            "Diagnostic for %s: band=%s average=%.2f signals=%d",
            inputs.org_name, band.value, average_score, len(signals),
        )

        return DiagnosticResult(
            org_name=inputs.org_name.strip(),
            band=band,
            average_score=average_score,
            domain_stats=ctx.domain_stats,
            signals=signals,
            summary=summary,
        )


def evaluate(inputs: DiagnosticInput, config: Optional[DiagnosticConfig] = None) -> DiagnosticResult:
    """Evaluate a submission with a one-off engine."""
    return DiagnosticEngine(config).evaluate(inputs)


def _read_file(path: Path):
    with open(path, "r", encoding="utf-8") as f:
        if path.suffix.lower() in YAML_SUFFIXES:
            return yaml.safe_load(f)
        return json.load(f)


def _format_errors(error: ValidationError) -> list[str]:
    issues = []
    for err in error.errors():
        location = ".".join(str(part) for part in err["loc"]) or "submission"
        issues.append(f"{location}: {err['msg']}")
    return issues


def load_input(path: Union[str, Path]) -> DiagnosticInput:
    """Load a submission from a JSON or YAML file.

    A JSON array holding a single submission is also accepted.

    Raises:
        InvalidInputError: If the file cannot be read, parsed or validated
    """
    path = Path(path)

    try:
        data = _read_file(path)
    except OSError as e:
        raise InvalidInputError(f"Cannot read {path}: {e}") from e
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise InvalidInputError(f"Cannot parse {path}: {e}") from e

    if isinstance(data, list) and len(data) == 1:
        data = data[0]
    if not isinstance(data, dict):
        raise InvalidInputError(f"{path} must contain a single submission object")

    try:
        return DiagnosticInput.model_validate(data)
    except ValidationError as e:
        issues = _format_errors(e)
        raise InvalidInputError(f"Invalid submission in {path}", issues) from e


def validate_input_file(path: Union[str, Path]) -> tuple[bool, list[str]]:
    """Check a submission file without evaluating it.

    Returns:
        (is_valid, issues)
    """
    try:
        load_input(path)
    except InvalidInputError as e:
        return False, e.issues or [e.message]
    return True, []
