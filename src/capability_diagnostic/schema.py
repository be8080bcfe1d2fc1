"""Pydantic models for the capability diagnostic.

Input schemas for a self-assessment submission and output schemas for
the derived report (band, signals and summary lists).
"""

from enum import Enum
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .domains import DomainKey, domain_keys
from .exceptions import InvalidInputError


# =============================================================================
# Enums
# =============================================================================


class SignalLevel(str, Enum):
    """Severity of a risk signal, in increasing urgency."""
    INFO = "Info"
    WATCH = "Watch"
    CONCERN = "Concern"

    @property
    def rank(self) -> int:
        """Numeric urgency (Info < Watch < Concern)."""
        return _LEVEL_RANK[self]


_LEVEL_RANK = {
    SignalLevel.INFO: 0,
    SignalLevel.WATCH: 1,
    SignalLevel.CONCERN: 2,
}


class CapabilityBand(str, Enum):
    """Overall maturity band derived from the average domain score."""
    EMERGING = "Emerging"
    DEVELOPING = "Developing"
    ESTABLISHED = "Established"
    LEADING = "Leading"


# =============================================================================
# Input Models
# =============================================================================


class DomainScores(BaseModel):
    """Reflective 0-4 score for each domain.

    Missing domains default to 0. Values are not range-checked here;
    the engine clamps them before computing statistics.
    """
    model_config = ConfigDict(extra="forbid")

    awareness: int = 0
    coagency: int = 0
    practice: int = 0
    ethics: int = 0
    governance: int = 0
    renewal: int = 0

    def get(self, key: Union[DomainKey, str]) -> int:
        return getattr(self, DomainKey(key).value)

    def as_dict(self) -> dict[DomainKey, int]:
        """Scores keyed by domain, in catalogue order."""
        return {key: self.get(key) for key in domain_keys()}


class DomainCoverage(BaseModel):
    """Optional 0-100 coverage estimate per domain.

    Any subset of domains may carry a value; ``None`` means not estimated.
    NaN and infinite estimates are rejected.
    """
    model_config = ConfigDict(extra="forbid", allow_inf_nan=False)

    awareness: Optional[float] = None
    coagency: Optional[float] = None
    practice: Optional[float] = None
    ethics: Optional[float] = None
    governance: Optional[float] = None
    renewal: Optional[float] = None

    def get(self, key: Union[DomainKey, str]) -> Optional[float]:
        return getattr(self, DomainKey(key).value)

    def present(self) -> dict[DomainKey, float]:
        """Estimated domains only, in catalogue order."""
        values = {}
        for key in domain_keys():
            value = self.get(key)
            if value is not None:
                values[key] = value
        return values

    def is_empty(self) -> bool:
        return not self.present()


class ContextFlags(BaseModel):
    """High-level context checkboxes that tune signal severity."""
    model_config = ConfigDict(extra="forbid")

    high_stakes_use: bool = False  # assessment, admissions, clinical, consequential decisions
    public_facing: bool = False  # outputs published or used externally
    sensitive_data: bool = False  # personal, special category or confidential
    vendor_reliance: bool = False  # heavy reliance on one platform or toolchain
    unclear_ownership: bool = False  # unclear accountability for AI-supported work

    def any_high_stakes(self) -> bool:
        """True when the use is high-stakes, public-facing or touches sensitive data."""
        return self.high_stakes_use or self.public_facing or self.sensitive_data


class DiagnosticInput(BaseModel):
    """A single diagnostic submission."""
    model_config = ConfigDict(extra="forbid")

    org_name: str
    context_notes: str = ""
    scores: DomainScores = Field(default_factory=DomainScores)
    coverage: Optional[DomainCoverage] = None
    flags: ContextFlags = Field(default_factory=ContextFlags)

    @field_validator("org_name")
    @classmethod
    def _org_name_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise InvalidInputError("Organisation name must not be empty")
        return v

    @field_validator("context_notes")
    @classmethod
    def _strip_notes(cls, v: str) -> str:
        return v.strip()


# =============================================================================
# Output Models
# =============================================================================


class DomainStat(BaseModel):
    """Per-domain statistic computed for one evaluation."""
    key: DomainKey
    label: str
    score: int


class RiskSignal(BaseModel):
    """An explainable observation about a risk or gap pattern."""
    model_config = ConfigDict(frozen=True)

    id: str
    level: SignalLevel
    title: str
    rationale: str
    prompts: list[str] = Field(default_factory=list)
    related_domains: list[DomainKey] = Field(default_factory=list)


class DiagnosticSummary(BaseModel):
    """Readable strengths, gaps and stabilisers."""
    strengths: list[str] = Field(default_factory=list)
    gaps: list[str] = Field(default_factory=list)
    stabilisers: list[str] = Field(default_factory=list)  # what reduces risk / increases resilience


class DiagnosticResult(BaseModel):
    """Complete output of one evaluation."""
    org_name: str
    band: CapabilityBand
    average_score: float
    domain_stats: list[DomainStat]
    signals: list[RiskSignal]
    summary: DiagnosticSummary

    def signal_ids(self) -> list[str]:
        return [s.id for s in self.signals]

    def get_signal(self, signal_id: str) -> Optional[RiskSignal]:
        return next((s for s in self.signals if s.id == signal_id), None)

    def highest_level(self) -> SignalLevel:
        """Most urgent level among the signals."""
        if not self.signals:
            return SignalLevel.INFO
        return max((s.level for s in self.signals), key=lambda level: level.rank)
