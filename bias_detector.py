"""
Bias Detector — cognitive-bias heuristics over a spending history

Given one candidate record and the user's history, runs a fixed battery of
independent rules and returns a tagged warning for each rule that fired.

Purchase rules:
───────────────
1. SUNK COST          — ≥2 same-category purchases in the last 180 days
2. LIFESTYLE CREEP    — price > 1.5x the category's historical mean
3. ANCHORING          — price > 1.3x the foregone alternative
4. RECENCY BIAS       — ≥5 purchases of any category in the last 30 days
5. LOSS AVERSION      — protection-framed name and price > 500

Investment rules:
─────────────────
6. FOMO               — high risk, return > 50%, horizon < 3 years
7. CONFIRMATION BIAS  — high risk, return > 30%
8. OVERCONFIDENCE     — > 40% of invested amount in high-risk entries

Simple interface:
    detect_for_purchase(candidate, history) -> List[str]
    detect_for_investment(candidate, history) -> List[str]

Both are total: no rule firing means an empty list, never an exception.
Same-category comparisons skip any history entry sharing the candidate's id,
so the result is the same whether or not the candidate was already saved.
That includes lifestyle creep: its baseline mean is the category history
without the candidate, never "history so far including it".
"""

import logging
import math
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Iterable, List, Optional, Sequence, Tuple

import pandas as pd

from config import BIAS_THRESHOLDS, LOSS_AVERSION_KEYWORDS
from models import Investment, Purchase, RiskLevel, parse_date, utcnow

logger = logging.getLogger(__name__)

MS_PER_DAY = 24 * 60 * 60 * 1000


def days_between(a: datetime, b: datetime) -> int:
    """Whole days between two instants, rounded half-up; order-independent."""
    ms = abs((parse_date(a) - parse_date(b)).total_seconds()) * 1000
    return int(math.floor(ms / MS_PER_DAY + 0.5))


# ═══════════════════════════════════════════════════════════════════════════
# History frames
# ═══════════════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class _PurchaseContext:
    candidate: Purchase
    history: pd.DataFrame     # every purchase, with days_ago
    peers: pd.DataFrame       # same category, candidate excluded, oldest first
    keywords: frozenset


@dataclass(frozen=True)
class _InvestmentContext:
    candidate: Investment
    history: pd.DataFrame


def _purchase_frame(purchases: Sequence[Purchase], now: datetime) -> pd.DataFrame:
    frame = pd.DataFrame(
        [{"id": p.id, "category": p.category, "price": p.price, "date": p.date}
         for p in purchases],
        columns=["id", "category", "price", "date"],
    )
    frame["days_ago"] = frame["date"].map(lambda d: days_between(d, now))
    return frame


def _investment_frame(investments: Sequence[Investment]) -> pd.DataFrame:
    return pd.DataFrame(
        [{"id": i.id, "risk": i.risk_level.value, "amount": i.initial_amount}
         for i in investments],
        columns=["id", "risk", "amount"],
    )


# ═══════════════════════════════════════════════════════════════════════════
# Purchase rules
# ═══════════════════════════════════════════════════════════════════════════

def _sunk_cost(ctx: _PurchaseContext) -> bool:
    recent = ctx.peers[ctx.peers["days_ago"] <= BIAS_THRESHOLDS["sunk_cost_window_days"]]
    return len(recent) >= BIAS_THRESHOLDS["sunk_cost_min_peers"]


def _lifestyle_creep(ctx: _PurchaseContext) -> bool:
    if len(ctx.peers) < BIAS_THRESHOLDS["lifestyle_creep_min_peers"]:
        return False
    mean_price = float(ctx.peers["price"].mean())
    return ctx.candidate.price > mean_price * BIAS_THRESHOLDS["lifestyle_creep_ratio"]


def _anchoring(ctx: _PurchaseContext) -> bool:
    alternative = ctx.candidate.alternative_cost
    if not alternative:
        return False
    return ctx.candidate.price > alternative * BIAS_THRESHOLDS["anchoring_ratio"]


def _recency(ctx: _PurchaseContext) -> bool:
    recent = ctx.history["days_ago"] <= BIAS_THRESHOLDS["recency_window_days"]
    return int(recent.sum()) >= BIAS_THRESHOLDS["recency_min_purchases"]


def _loss_aversion(ctx: _PurchaseContext) -> bool:
    name = ctx.candidate.name.lower()
    framed = any(keyword in name for keyword in ctx.keywords)
    return framed and ctx.candidate.price > BIAS_THRESHOLDS["loss_aversion_min_price"]


PURCHASE_RULES: List[Tuple[str, Callable[[_PurchaseContext], bool], str]] = [
    ("SUNK COST", _sunk_cost,
     "🧠 SUNK COST FALLACY: Several recent purchases in the same category. "
     "Don't let past spending drive this decision."),
    ("LIFESTYLE CREEP", _lifestyle_creep,
     "🧠 LIFESTYLE CREEP: Spending in this category is rising. Make sure this "
     "is a conscious choice, not an automatic upgrade of standards."),
    ("ANCHORING", _anchoring,
     "🧠 ANCHORING: The price looks high next to the alternative. Judge it by "
     "real value, not by the original price or the discount."),
    ("RECENCY BIAS", _recency,
     "🧠 RECENCY BIAS: Many purchases lately. You may be reacting to "
     "short-term stimuli rather than a real need."),
    ("LOSS AVERSION", _loss_aversion,
     "🧠 LOSS AVERSION: This purchase may be an attempt to avoid a potential "
     "loss. Estimate how likely that loss really is."),
]


# ═══════════════════════════════════════════════════════════════════════════
# Investment rules
# ═══════════════════════════════════════════════════════════════════════════

def _fomo(ctx: _InvestmentContext) -> bool:
    c = ctx.candidate
    return (c.risk_level is RiskLevel.HIGH
            and c.expected_return_percent > BIAS_THRESHOLDS["fomo_min_return"]
            and c.time_horizon_years < BIAS_THRESHOLDS["fomo_max_horizon"])


def _confirmation_bias(ctx: _InvestmentContext) -> bool:
    c = ctx.candidate
    return (c.risk_level is RiskLevel.HIGH
            and c.expected_return_percent > BIAS_THRESHOLDS["confirmation_min_return"])


def _overconfidence(ctx: _InvestmentContext) -> bool:
    total = float(ctx.history["amount"].sum())
    if total <= 0:
        return False
    high = ctx.history.loc[ctx.history["risk"] == RiskLevel.HIGH.value, "amount"]
    share = float(high.sum()) / total
    return share > BIAS_THRESHOLDS["overconfidence_high_risk_share"]


INVESTMENT_RULES: List[Tuple[str, Callable[[_InvestmentContext], bool], str]] = [
    ("FOMO", _fomo,
     "🧠 FOMO: High expected return at high risk over a short horizon. Make "
     "sure this isn't fear of missing out."),
    ("CONFIRMATION BIAS", _confirmation_bias,
     "🧠 CONFIRMATION BIAS: The forecast is very optimistic. Work through "
     "pessimistic scenarios too."),
    ("OVERCONFIDENCE", _overconfidence,
     "🧠 OVERCONFIDENCE: A large share of the portfolio is high-risk. You may "
     "be overestimating your ability to forecast."),
]


# ═══════════════════════════════════════════════════════════════════════════
# Public interface
# ═══════════════════════════════════════════════════════════════════════════

def _run(rules, ctx, record_id: str) -> List[str]:
    warnings = []
    for tag, predicate, message in rules:
        if predicate(ctx):
            logger.debug(f"{record_id}: {tag} fired")
            warnings.append(message)
    return warnings


def detect_for_purchase(
    candidate: Purchase,
    history: Iterable[Purchase],
    now: Optional[datetime] = None,
    keywords: Optional[Iterable[str]] = None,
) -> List[str]:
    """
    Evaluate every purchase rule against the candidate.

    `now` pins the reference instant for the two time-window rules;
    `keywords` replaces the configured loss-aversion terms.
    """
    now = now or utcnow()
    keyword_set = frozenset(k.lower() for k in (
        LOSS_AVERSION_KEYWORDS if keywords is None else keywords))

    frame = _purchase_frame(list(history), now)
    peers = frame[(frame["category"] == candidate.category) & (frame["id"] != candidate.id)]
    peers = peers.sort_values("date", key=lambda s: s.map(parse_date), kind="stable")

    ctx = _PurchaseContext(candidate=candidate, history=frame, peers=peers, keywords=keyword_set)
    return _run(PURCHASE_RULES, ctx, candidate.id)


def detect_for_investment(candidate: Investment, history: Iterable[Investment]) -> List[str]:
    """Evaluate every investment rule; overconfidence looks at history only."""
    ctx = _InvestmentContext(candidate=candidate, history=_investment_frame(list(history)))
    return _run(INVESTMENT_RULES, ctx, candidate.id)
