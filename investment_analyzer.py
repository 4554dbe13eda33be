"""
Investment Analyzer — projection and return metrics for a single investment

Simple interface:
    analyze(investment) -> InvestmentAnalysis

Needs no history: bias detection against the portfolio is run separately
by the caller through bias_detector.detect_for_investment.
"""

import logging

import numpy as np

from config import INVESTMENT_THRESHOLDS, RISK_MULTIPLIERS, SAFE_RATE_PERCENT
from models import Investment, InvestmentAnalysis, InvestmentType, RiskLevel

logger = logging.getLogger(__name__)


def growth_factor(investment: Investment) -> float:
    """(1 + rate) ** horizon."""
    rate = investment.expected_return_percent / 100
    return float(np.power(1 + rate, investment.time_horizon_years))


def projected_value(investment: Investment) -> float:
    return investment.initial_amount * growth_factor(investment)


def roi(investment: Investment) -> float:
    projected = projected_value(investment)
    return (projected - investment.initial_amount) / investment.initial_amount * 100


def compounded_return(investment: Investment) -> float:
    return (growth_factor(investment) - 1) * 100


def risk_adjusted_return(investment: Investment) -> float:
    """Excess return over the safe rate, scaled down by the risk multiplier."""
    premium = investment.expected_return_percent - SAFE_RATE_PERCENT
    return premium / RISK_MULTIPLIERS[investment.risk_level.value]


def analyze(investment: Investment) -> InvestmentAnalysis:
    warnings = []
    recommendations = []
    t = INVESTMENT_THRESHOLDS
    risk = investment.risk_level
    expected = investment.expected_return_percent

    if risk is RiskLevel.HIGH and expected < t["high_risk_min_return"]:
        warnings.append("High risk for a relatively low expected return. "
                        "The risk/return trade-off may not be worth it.")

    if investment.type is InvestmentType.CRYPTO and risk is RiskLevel.HIGH:
        recommendations.append("Diversify. High-risk crypto assets shouldn't exceed "
                               "10-15% of the portfolio.")

    if investment.time_horizon_years < t["short_horizon_years"] and risk is RiskLevel.HIGH:
        warnings.append("Short horizon for a high-risk asset. Consider more "
                        "conservative options.")

    if expected < SAFE_RATE_PERCENT and risk is not RiskLevel.LOW:
        warnings.append(f"Expected return is below the risk-free rate ({SAFE_RATE_PERCENT}%). "
                        "Reconsider this investment.")

    if expected > t["low_risk_max_return"] and risk is RiskLevel.LOW:
        warnings.append("Unusually high return for low risk. Check that the "
                        "forecast is realistic.")

    current = investment.current_value
    if current is not None and current < investment.initial_amount * t["drawdown_value_share"]:
        warnings.append("Current value is down more than 20%. Consider whether the "
                        "portfolio needs rebalancing.")
        recommendations.append("Work out why it fell. Is it a temporary correction "
                               "or a fundamental problem?")

    analysis = InvestmentAnalysis(
        investment_id=investment.id,
        projected_value=projected_value(investment),
        roi=roi(investment),
        compounded_return=compounded_return(investment),
        risk_adjusted_return=risk_adjusted_return(investment),
        warnings=warnings,
        recommendations=recommendations,
    )
    logger.info(f"Analyzed investment {investment.id}: projected={analysis.projected_value:.2f} "
                f"roi={analysis.roi:.2f}% risk_adj={analysis.risk_adjusted_return:.2f}")
    return analysis
