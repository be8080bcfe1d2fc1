"""Scoring utilities for the capability diagnostic.

Pure numeric helpers shared by the rule engine: averaging, spread,
clamping and band classification.
"""

from collections.abc import Iterable, Mapping
from typing import Optional, Union

from .config import BandThresholdsConfig, get_config
from .schema import CapabilityBand, DomainCoverage, DomainStat

SCORE_MIN = 0
SCORE_MAX = 4
COVERAGE_MIN = 0.0
COVERAGE_MAX = 100.0


def clamp_score(n):
    """Clamp a domain score to [0, 4]."""
    return max(SCORE_MIN, min(SCORE_MAX, n))


def clamp_coverage(n):
    """Clamp a coverage percentage to [0, 100]."""
    return max(COVERAGE_MIN, min(COVERAGE_MAX, n))


def average(scores: Iterable[float]) -> float:
    """Arithmetic mean, or 0 for no scores."""
    values = list(scores)
    if not values:
        return 0.0
    return sum(values) / len(values)


def rounded_average(scores: Iterable[float]) -> float:
    """Mean rounded to 2 decimals for display."""
    return round(average(scores), 2)


def spread(values: Iterable[float]) -> float:
    """Max minus min, or 0 for no values."""
    values = list(values)
    if not values:
        return 0
    return max(values) - min(values)


def coverage_spread(coverage: Union[DomainCoverage, Mapping, None]) -> float:
    """Spread over the coverage values that are actually present."""
    if coverage is None:
        return 0
    if isinstance(coverage, DomainCoverage):
        values = coverage.present().values()
    else:
        values = [v for v in coverage.values() if v is not None]
    return spread(values)


def band_for_average(
    avg: float,
    thresholds: Optional[BandThresholdsConfig] = None,
) -> CapabilityBand:
    """Classify an average score into a capability band.

    Bands are half-open ``[low, high)`` with the top band closed at 4.
    """
    cuts = thresholds if thresholds is not None else get_config().band_thresholds
    if avg < cuts.developing:
        return CapabilityBand.EMERGING
    if avg < cuts.established:
        return CapabilityBand.DEVELOPING
    if avg < cuts.leading:
        return CapabilityBand.ESTABLISHED
    return CapabilityBand.LEADING


def sort_by_score(stats: Iterable[DomainStat], descending: bool = False) -> list[DomainStat]:
    """Sort stats by score; equal scores keep catalogue order."""
    return sorted(stats, key=lambda s: s.score, reverse=descending)
