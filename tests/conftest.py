"""Shared fixtures for the capability diagnostic tests."""

import pytest

from capability_diagnostic.config import reset_config
from capability_diagnostic.schema import ContextFlags, DiagnosticInput, DomainCoverage, DomainScores


@pytest.fixture(autouse=True)
def default_config():
    """Each test starts from the default thresholds."""
    reset_config()
    yield
    reset_config()


@pytest.fixture
def make_input():
    """Factory for submissions; unspecified domains score 2."""
    def _make(scores=None, coverage=None, org_name="Test Team", **flags) -> DiagnosticInput:
        all_scores = {
            "awareness": 2,
            "coagency": 2,
            "practice": 2,
            "ethics": 2,
            "governance": 2,
            "renewal": 2,
        }
        all_scores.update(scores or {})
        return DiagnosticInput(
            org_name=org_name,
            scores=DomainScores(**all_scores),
            coverage=DomainCoverage(**coverage) if coverage is not None else None,
            flags=ContextFlags(**flags),
        )
    return _make
