"""
Record Validator — the gate in front of the analyzers

Simple public API:
    validate_purchase(p) / validate_investment(i)   -> raise ValidationError
    check_purchase_sanity(p) / check_investment_sanity(i) -> List[str]
    parse_usage_frequency / parse_investment_type / parse_risk_level

The analyzers trust what passes through here and never re-validate.
Sanity checks don't reject anything; they only produce soft warnings.
"""

import logging
from enum import Enum
from typing import List, Optional, Type

from config import SANITY_THRESHOLDS, VALIDATION_LIMITS
from models import Investment, InvestmentType, Purchase, RiskLevel, UsageFrequency

logger = logging.getLogger(__name__)


class ValidationError(ValueError):
    """A record failed validation and must not reach the analyzers."""


# ── Enum parsing ────────────────────────────────────────────────────────────

def _parse_enum(enum_cls: Type[Enum], value: str, label: str):
    try:
        return enum_cls(value)
    except ValueError:
        allowed = ", ".join(e.value for e in enum_cls)
        raise ValidationError(f"{label} must be one of: {allowed}") from None


def parse_usage_frequency(value: Optional[str]) -> Optional[UsageFrequency]:
    if value is None:
        return None
    return _parse_enum(UsageFrequency, value, "Usage frequency")


def parse_investment_type(value: str) -> InvestmentType:
    return _parse_enum(InvestmentType, value, "Investment type")


def parse_risk_level(value: str) -> RiskLevel:
    return _parse_enum(RiskLevel, value, "Risk level")


# ── Hard validation ─────────────────────────────────────────────────────────

def _is_number(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _require_text(value: Optional[str], message: str):
    if not value or not value.strip():
        raise ValidationError(message)


def _check_years(value, label: str):
    if not _is_number(value) or value <= 0:
        raise ValidationError(f"{label} must be a positive number")
    if value > VALIDATION_LIMITS["max_years"]:
        raise ValidationError(f"{label} is too large (max: {VALIDATION_LIMITS['max_years']} years)")


def _check_non_negative(value, label: str):
    if value is not None and (not _is_number(value) or value < 0):
        raise ValidationError(f"{label} must be a non-negative number")


def validate_purchase(purchase: Purchase) -> None:
    _require_text(purchase.name, "Purchase name cannot be empty")

    if not _is_number(purchase.price) or purchase.price <= 0:
        raise ValidationError("Price must be a positive number")
    if purchase.price > VALIDATION_LIMITS["max_price"]:
        raise ValidationError("Price is too large (max: 1 billion)")

    _require_text(purchase.category, "Category cannot be empty")

    if purchase.expected_lifespan_years is not None:
        _check_years(purchase.expected_lifespan_years, "Lifespan")

    _check_non_negative(purchase.maintenance_cost_per_year, "Maintenance cost")
    _check_non_negative(purchase.alternative_cost, "Alternative cost")


def validate_investment(investment: Investment) -> None:
    _require_text(investment.name, "Investment name cannot be empty")

    amount = investment.initial_amount
    if not _is_number(amount) or amount <= 0:
        raise ValidationError("Initial amount must be a positive number")
    if amount > VALIDATION_LIMITS["max_initial_amount"]:
        raise ValidationError("Initial amount is too large (max: 10 billion)")

    expected = investment.expected_return_percent
    if not _is_number(expected):
        raise ValidationError("Expected return must be a number")
    lo, hi = VALIDATION_LIMITS["min_return_percent"], VALIDATION_LIMITS["max_return_percent"]
    if expected < lo or expected > hi:
        raise ValidationError(f"Expected return must be between {lo}% and {hi}%")

    _check_years(investment.time_horizon_years, "Time horizon")
    _check_non_negative(investment.current_value, "Current value")


# ── Soft sanity checks ──────────────────────────────────────────────────────

def check_purchase_sanity(purchase: Purchase) -> List[str]:
    warnings = []
    s = SANITY_THRESHOLDS
    lifespan = purchase.expected_lifespan_years

    if purchase.maintenance_cost_per_year and lifespan:
        if purchase.maintenance_cost_per_year * lifespan > purchase.price:
            warnings.append("Maintenance over the lifespan exceeds the purchase price. "
                            "Renting might make more sense.")

    if lifespan and lifespan < s["short_lifespan_years"] and purchase.price > s["short_lifespan_min_price"]:
        warnings.append("Expensive purchase with a lifespan under a year. "
                        "Make sure that's justified.")

    if warnings:
        logger.info(f"{purchase.name}: {len(warnings)} sanity warning(s)")
    return warnings


def check_investment_sanity(investment: Investment) -> List[str]:
    warnings = []
    s = SANITY_THRESHOLDS
    risk = investment.risk_level
    expected = investment.expected_return_percent

    if risk is RiskLevel.LOW and expected > s["low_risk_max_return"]:
        warnings.append("High expected return at low risk is unusual. Check your expectations.")

    if risk is RiskLevel.HIGH and expected < s["high_risk_min_return"]:
        warnings.append("Low expected return at high risk. This may not be a good investment.")

    if investment.type is InvestmentType.STOCKS and investment.time_horizon_years < s["stocks_min_horizon"]:
        warnings.append("Short-term stock investments are risky. A horizon of 5+ years is recommended.")

    if investment.type is InvestmentType.CRYPTO and investment.time_horizon_years > s["crypto_max_horizon"]:
        warnings.append("Long-term crypto forecasts are unreliable because of high volatility.")

    if warnings:
        logger.info(f"{investment.name}: {len(warnings)} sanity warning(s)")
    return warnings
