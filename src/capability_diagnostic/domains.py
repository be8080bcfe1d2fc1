"""Domain catalogue for the capability diagnostic.

The six capability domains are fixed reference data, defined once and
never mutated. Catalogue order is the display order and the tie-break
order for every score-based sort.
"""

from enum import Enum
from typing import Union

from pydantic import BaseModel, ConfigDict


class DomainKey(str, Enum):
    """Identifier for one of the six capability domains."""
    AWARENESS = "awareness"
    COAGENCY = "coagency"
    PRACTICE = "practice"
    ETHICS = "ethics"
    GOVERNANCE = "governance"
    RENEWAL = "renewal"


class Domain(BaseModel):
    """A capability domain with its display metadata."""
    model_config = ConfigDict(frozen=True)

    key: DomainKey
    label: str
    description: str


DOMAINS: tuple[Domain, ...] = (
    Domain(
        key=DomainKey.AWARENESS,
        label="Awareness & Orientation",
        description="Shared understanding, boundaries, risks, and realistic expectations of AI in context.",
    ),
    Domain(
        key=DomainKey.COAGENCY,
        label="Human–AI Co-Agency",
        description="Role clarity, partnership practices, prompting as collaboration, and human judgement in the loop.",
    ),
    Domain(
        key=DomainKey.PRACTICE,
        label="Applied Practice & Innovation",
        description="Practical use in workflows, iteration, experimentation, and responsible improvement of practice.",
    ),
    Domain(
        key=DomainKey.ETHICS,
        label="Ethics, Equity & Impact",
        description="Fairness, inclusion, harm reduction, transparency, and attention to downstream impacts.",
    ),
    Domain(
        key=DomainKey.GOVERNANCE,
        label="Decision-Making & Governance",
        description="Accountability, approvals, oversight, policy alignment, and decision hygiene.",
    ),
    Domain(
        key=DomainKey.RENEWAL,
        label="Reflection, Learning & Renewal",
        description="Ongoing learning, review cycles, capability renewal, and institutional memory.",
    ),
)

_BY_KEY: dict[DomainKey, Domain] = {d.key: d for d in DOMAINS}


def domain_keys() -> list[DomainKey]:
    """Return the domain keys in catalogue order."""
    return [d.key for d in DOMAINS]


def get_domain(key: Union[DomainKey, str]) -> Domain:
    """Look up a domain by key.

    Raises:
        KeyError: If the key is not one of the six catalogue domains.
    """
    try:
        return _BY_KEY[DomainKey(key)]
    except ValueError:
        raise KeyError(key) from None


def domain_label(key: Union[DomainKey, str]) -> str:
    """Return the display label for a key, or the raw key if unknown."""
    try:
        return get_domain(key).label
    except KeyError:
        return key.value if isinstance(key, DomainKey) else str(key)
