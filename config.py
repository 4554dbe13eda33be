"""
Configuration for finplan
Centralized configuration, easy to modify.

Every threshold the analyzers use lives here. These are fixed heuristics
chosen by judgment, not values fitted to data.
"""
import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

# ── Base directories ────────────────────────────────────────────────────────
DATA_DIR = Path(os.getenv("FINPLAN_DATA_DIR", str(Path.cwd() / "data")))
DATA_FILE = DATA_DIR / "financial-data.json"
LOGS_DIR = Path(os.getenv("FINPLAN_LOGS_DIR", str(DATA_DIR / "logs")))

VERSION = "0.1.0"

# ── Bias detection ──────────────────────────────────────────────────────────
BIAS_THRESHOLDS = {
    # Sunk cost: same-category peers inside the window
    "sunk_cost_window_days": 180,
    "sunk_cost_min_peers": 2,

    # Lifestyle creep: candidate price vs mean of category history
    "lifestyle_creep_min_peers": 2,
    "lifestyle_creep_ratio": 1.5,

    # Anchoring: price vs foregone alternative
    "anchoring_ratio": 1.3,

    # Recency: purchases of any category inside the window
    "recency_window_days": 30,
    "recency_min_purchases": 5,

    # Loss aversion: protection-framed name above this price
    "loss_aversion_min_price": 500,

    # FOMO / confirmation bias (percent, years)
    "fomo_min_return": 50,
    "fomo_max_horizon": 3,
    "confirmation_min_return": 30,

    # Overconfidence: share of invested amount held in high-risk entries
    "overconfidence_high_risk_share": 0.4,
}

# Protection-framed terms for the loss-aversion rule (lowercase, substring match).
# Override with a comma-separated FINPLAN_LOSS_AVERSION_KEYWORDS.
_DEFAULT_LOSS_AVERSION_KEYWORDS = frozenset({
    "insurance", "protection", "guarantee", "warranty", "backup",
    "страховка", "защита", "гарантия", "резервный",
})


def _keywords_from_env(raw: str) -> frozenset:
    return frozenset(k.strip().lower() for k in raw.split(",") if k.strip())


LOSS_AVERSION_KEYWORDS = (
    _keywords_from_env(os.environ["FINPLAN_LOSS_AVERSION_KEYWORDS"])
    if os.getenv("FINPLAN_LOSS_AVERSION_KEYWORDS")
    else _DEFAULT_LOSS_AVERSION_KEYWORDS
)

# ── Purchase analysis ───────────────────────────────────────────────────────
USES_PER_YEAR = {
    "daily": 365,
    "weekly": 52,
    "monthly": 12,
    "rarely": 4,
}
DEFAULT_USES_PER_YEAR = 12
DAYS_PER_YEAR = 365

PURCHASE_THRESHOLDS = {
    "cost_per_use_price_share": 0.10,   # cost per use above 10% of price
    "rare_use_min_price": 1000,
    "alternative_price_share": 0.70,    # alternative below 70% of price
    "maintenance_price_share": 0.50,    # lifetime maintenance above 50% of price
    "daily_equivalent_max": 10,
    "short_lifespan_years": 2,
}

# ── Investment analysis ─────────────────────────────────────────────────────
SAFE_RATE_PERCENT = 5  # reference "risk-free" rate

RISK_MULTIPLIERS = {
    "low": 0.5,
    "medium": 1.0,
    "high": 2.0,
}

INVESTMENT_THRESHOLDS = {
    "high_risk_min_return": 15,
    "short_horizon_years": 3,
    "low_risk_max_return": 20,
    "drawdown_value_share": 0.80,       # current value below 80% of initial
}

# ── Validation ──────────────────────────────────────────────────────────────
VALIDATION_LIMITS = {
    "max_price": 1_000_000_000,
    "max_initial_amount": 10_000_000_000,
    "max_years": 100,
    "min_return_percent": -100,
    "max_return_percent": 10_000,
}

SANITY_THRESHOLDS = {
    "low_risk_max_return": 15,
    "high_risk_min_return": 10,
    "stocks_min_horizon": 3,
    "crypto_max_horizon": 10,
    "short_lifespan_years": 1,
    "short_lifespan_min_price": 500,
}

# ── Display ─────────────────────────────────────────────────────────────────
TERMINAL_WIDTH = 80
ID_PREFIX_LENGTH = 8

# ── Logging ─────────────────────────────────────────────────────────────────
LOG_LEVEL = os.getenv("FINPLAN_LOG_LEVEL", "INFO")
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
