"""Rule engine for the capability diagnostic.

Each rule is a plain function that inspects the precomputed statistics in
a ``RuleContext`` and returns at most one ``RiskSignal``. Rules run in a
fixed order; when none fires, a single Info-level fallback is appended so
the signal list is never empty.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Optional

from .config import DiagnosticConfig
from .domains import DOMAINS, DomainKey, domain_keys
from .schema import (
    DiagnosticInput,
    DiagnosticSummary,
    DomainStat,
    RiskSignal,
    SignalLevel,
)
from .scoring import clamp_coverage, clamp_score, coverage_spread, sort_by_score, spread

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RuleContext:
    """Statistics shared by every rule in one evaluation."""
    input: DiagnosticInput
    domain_stats: list[DomainStat]  # catalogue order
    ascending: list[DomainStat]
    descending: list[DomainStat]
    score_spread: int
    coverage: dict[DomainKey, float]  # present values only, clamped
    coverage_spread: float
    config: DiagnosticConfig

    @property
    def lowest(self) -> list[DomainStat]:
        return self.ascending[:2]

    @property
    def highest(self) -> list[DomainStat]:
        return self.descending[:2]

    def score(self, key: DomainKey) -> int:
        return next(s.score for s in self.domain_stats if s.key == key)


def build_context(inputs: DiagnosticInput, config: DiagnosticConfig) -> RuleContext:
    """Clamp the submission and precompute statistics for the rules."""
    domain_stats = [
        DomainStat(key=d.key, label=d.label, score=clamp_score(inputs.scores.get(d.key)))
        for d in DOMAINS
    ]

    coverage = {}
    if inputs.coverage is not None:
        coverage = {key: clamp_coverage(v) for key, v in inputs.coverage.present().items()}

    return RuleContext(
        input=inputs,
        domain_stats=domain_stats,
        ascending=sort_by_score(domain_stats),
        descending=sort_by_score(domain_stats, descending=True),
        score_spread=spread(s.score for s in domain_stats),
        coverage=coverage,
        coverage_spread=coverage_spread(coverage),
        config=config,
    )


# =============================================================================
# Rules
# =============================================================================


def low_floor(ctx: RuleContext) -> Optional[RiskSignal]:
    """Any domain at a very early stage."""
    very_low = [s for s in ctx.domain_stats if s.score <= ctx.config.rule_thresholds.low_floor_max]
    if not very_low:
        return None

    return RiskSignal(
        id="low-floor",
        level=SignalLevel.CONCERN,
        title="Low capability floor in key areas",
        rationale=(
            f"One or more domains are at a very early stage ({', '.join(s.label for s in very_low)}). "
            "This can create fragility: strong practice in one area may still fail if foundational supports are weak."
        ),
        prompts=[
            "Where do people currently rely on informal knowledge or ‘hero individuals’ to compensate?",
            "What would break first if the most capable person left the team?",
            "What is the smallest, safest ‘next practice’ you could embed in the next 30 days?",
        ],
        related_domains=[s.key for s in very_low],
    )


def imbalance(ctx: RuleContext) -> Optional[RiskSignal]:
    """Wide spread between the strongest and weakest domains."""
    cfg = ctx.config.rule_thresholds
    if ctx.score_spread < cfg.imbalance_watch_spread:
        return None

    level = SignalLevel.CONCERN if ctx.score_spread >= cfg.imbalance_concern_spread else SignalLevel.WATCH
    related = [s.key for s in ctx.lowest + ctx.highest]

    return RiskSignal(
        id="imbalance",
        level=level,
        title="Capability imbalance across domains",
        rationale=(
            f"Your scores vary widely (spread = {ctx.score_spread}). Imbalance often indicates uneven development: "
            "innovation may be outpacing governance, or awareness may not translate into applied practice."
        ),
        prompts=[
            "Which domain is carrying the most ‘load’ right now, and is that sustainable?",
            "Where are people improvising because the system lacks guidance or structure?",
            "If you strengthened just one low domain, which would reduce the most downstream risk?",
        ],
        related_domains=list(dict.fromkeys(related)),
    )


def ethics_governance_exposure(ctx: RuleContext) -> Optional[RiskSignal]:
    """Ethics or governance under-strength while stakes are high."""
    limit = ctx.config.rule_thresholds.exposure_max_score
    weak = ctx.score(DomainKey.ETHICS) <= limit or ctx.score(DomainKey.GOVERNANCE) <= limit
    if not (weak and ctx.input.flags.any_high_stakes()):
        return None

    return RiskSignal(
        id="ethics-gov-exposure",
        level=SignalLevel.CONCERN,
        title="Ethics/Governance exposure under high-stakes conditions",
        rationale=(
            "You’ve indicated high-stakes, public-facing, or sensitive-data use. When Ethics/Equity/Impact "
            "and Decision-Making/Governance are not yet established, the organisation is more exposed to harm, "
            "reputational risk, and poor decisions."
        ),
        prompts=[
            "What are the current ‘red lines’ (non-negotiables) for AI use, and are they shared and documented?",
            "Where does accountability sit today (named role), and where is it ambiguous?",
            "What review step could you introduce before outputs are used externally or in consequential decisions?",
        ],
        related_domains=[DomainKey.ETHICS, DomainKey.GOVERNANCE],
    )


def vendor_fragility(ctx: RuleContext) -> Optional[RiskSignal]:
    """Heavy tool reliance without renewal or governance to absorb change."""
    limit = ctx.config.rule_thresholds.vendor_max_score
    weak = ctx.score(DomainKey.RENEWAL) <= limit or ctx.score(DomainKey.GOVERNANCE) <= limit
    if not (ctx.input.flags.vendor_reliance and weak):
        return None

    return RiskSignal(
        id="vendor-fragility",
        level=SignalLevel.WATCH,
        title="Potential fragility from vendor/tool reliance",
        rationale=(
            "Heavy reliance on a single toolchain can create brittleness if policies, pricing, access, or features "
            "change. This risk increases when governance or renewal practices are still developing."
        ),
        prompts=[
            "If access to your primary tool changed tomorrow, what would stop working?",
            "Do you have a ‘minimum viable practice’ that is tool-agnostic?",
            "What knowledge or templates should be captured so capability survives tool changes?",
        ],
        related_domains=[DomainKey.GOVERNANCE, DomainKey.RENEWAL, DomainKey.PRACTICE],
    )


def ownership_ambiguity(ctx: RuleContext) -> Optional[RiskSignal]:
    """Unclear ownership with weak co-agency or governance."""
    limit = ctx.config.rule_thresholds.ownership_max_score
    weak = ctx.score(DomainKey.COAGENCY) <= limit or ctx.score(DomainKey.GOVERNANCE) <= limit
    if not (ctx.input.flags.unclear_ownership and weak):
        return None

    return RiskSignal(
        id="ownership-ambiguity",
        level=SignalLevel.WATCH,
        title="Role clarity and accountability may be under-defined",
        rationale=(
            "You’ve indicated unclear ownership. Without explicit roles for AI-supported work, responsibility can "
            "drift and decisions become harder to defend, especially when systems produce confident outputs."
        ),
        prompts=[
            "Who is responsible for validating outputs in your most common use cases?",
            "What is the ‘human sign-off point’, and is it consistent?",
            "Where could you make role expectations explicit (policy, team agreements, workflow steps)?",
        ],
        related_domains=[DomainKey.COAGENCY, DomainKey.GOVERNANCE],
    )


def _whole_percent(value: float) -> int:
    """Round a non-negative percentage with halves going up."""
    return int(value + 0.5)


def coverage_imbalance(ctx: RuleContext) -> Optional[RiskSignal]:
    """Uneven optional coverage estimates across the programme."""
    if not ctx.coverage:
        return None

    cfg = ctx.config.rule_thresholds
    if ctx.coverage_spread < cfg.coverage_watch_spread:
        return None

    level = SignalLevel.CONCERN if ctx.coverage_spread >= cfg.coverage_concern_spread else SignalLevel.WATCH

    return RiskSignal(
        id="coverage-imbalance",
        level=level,
        title="Capability coverage may be uneven across the programme/system",
        rationale=(
            f"Your optional coverage estimates vary significantly (spread ≈ {_whole_percent(ctx.coverage_spread)}%). "
            "This often means learners/teams encounter some domains repeatedly while others remain implicit or absent."
        ),
        prompts=[
            "Which domains are ‘assumed’ rather than taught or practiced?",
            "Where do people learn ethics/governance/renewal informally, and is that reliable?",
            "What is one small structural change that would increase coverage of a neglected domain?",
        ],
        related_domains=domain_keys(),
    )


def no_major_signals() -> RiskSignal:
    """Fallback emitted when no rule fires."""
    return RiskSignal(
        id="no-major-signals",
        level=SignalLevel.INFO,
        title="No major risk patterns detected from the inputs provided",
        rationale=(
            "Based on your inputs, there are no standout imbalance or low-floor patterns. Use the prompts below to "
            "deepen reflection and validate this with stakeholders."
        ),
        prompts=[
            "Which assumptions in your scoring would others challenge, and why?",
            "Where are you overconfident because things have ‘worked so far’?",
            "What evidence would you collect in the next month to confirm your current view?",
        ],
        related_domains=domain_keys(),
    )


RuleFunc = Callable[[RuleContext], Optional[RiskSignal]]

# Evaluation order is also output order
RULES: tuple[RuleFunc, ...] = (
    low_floor,
    imbalance,
    ethics_governance_exposure,
    vendor_fragility,
    ownership_ambiguity,
    coverage_imbalance,
)


def evaluate_rules(ctx: RuleContext, rules: tuple[RuleFunc, ...] = RULES) -> list[RiskSignal]:
    """Run every rule in order; fall back to an Info signal if none fires."""
    signals = []
    for rule in rules:
        signal = rule(ctx)
        if signal is not None:
            logger.debug("Rule %s fired (%s)", signal.id, signal.level.value)
            signals.append(signal)

    if not signals:
        signals.append(no_major_signals())

    return signals


# =============================================================================
# Summary
# =============================================================================


def _describe(stat: DomainStat) -> str:
    return f"{stat.label} (score {stat.score}/4)"


def build_summary(ctx: RuleContext, avg: float) -> DiagnosticSummary:
    """Strengths, gaps and stabilisers for the report."""
    cfg = ctx.config.stabiliser_thresholds

    stabilisers = []
    if avg >= cfg.average_min:
        stabilisers.append("A generally developing-to-established baseline across domains.")
    if ctx.score(DomainKey.AWARENESS) >= cfg.awareness_min:
        stabilisers.append("Strong orientation reduces misuse and unrealistic expectations.")
    if ctx.score(DomainKey.RENEWAL) >= cfg.renewal_min:
        stabilisers.append("Renewal practices support continuous improvement and resilience.")
    if ctx.score(DomainKey.GOVERNANCE) >= cfg.governance_min:
        stabilisers.append("Governance strength improves defensibility of decisions.")

    return DiagnosticSummary(
        strengths=[_describe(s) for s in ctx.highest],
        gaps=[_describe(s) for s in ctx.lowest],
        stabilisers=stabilisers,
    )
