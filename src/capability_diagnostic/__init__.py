"""Capability Diagnostic - gaps and risk signals from a capability self-assessment."""

from .domains import DOMAINS, Domain, DomainKey, domain_label, get_domain
from .engine import DiagnosticEngine, evaluate, load_input
from .exceptions import DiagnosticError, InvalidInputError
from .schema import (
    CapabilityBand,
    ContextFlags,
    DiagnosticInput,
    DiagnosticResult,
    DomainCoverage,
    DomainScores,
    RiskSignal,
    SignalLevel,
)

__version__ = "1.0.0"

__all__ = [
    "CapabilityBand",
    "ContextFlags",
    "DOMAINS",
    "DiagnosticEngine",
    "DiagnosticError",
    "DiagnosticInput",
    "DiagnosticResult",
    "Domain",
    "DomainCoverage",
    "DomainKey",
    "DomainScores",
    "InvalidInputError",
    "RiskSignal",
    "SignalLevel",
    "domain_label",
    "evaluate",
    "get_domain",
    "load_input",
]
