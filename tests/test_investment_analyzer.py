from dataclasses import replace

import pytest

import investment_analyzer
from bias_detector import detect_for_investment
from models import InvestmentType, RiskLevel


def test_projection_metrics(base_investment):
    analysis = investment_analyzer.analyze(base_investment)

    assert analysis.investment_id == "1"
    assert analysis.projected_value == pytest.approx(25937.42, abs=0.01)
    assert analysis.roi == pytest.approx(159.37, abs=0.01)
    assert analysis.compounded_return == pytest.approx(analysis.roi)
    assert analysis.risk_adjusted_return == pytest.approx(5.0)


@pytest.mark.parametrize("risk, expected", [
    (RiskLevel.LOW, 10.0),
    (RiskLevel.MEDIUM, 5.0),
    (RiskLevel.HIGH, 2.5),
])
def test_risk_adjusted_return_scales_by_risk(base_investment, risk, expected):
    analysis = investment_analyzer.analyze(replace(base_investment, risk_level=risk))
    assert analysis.risk_adjusted_return == pytest.approx(expected)


def test_reasonable_investment_is_clean_end_to_end(base_investment):
    calm = replace(base_investment, risk_level=RiskLevel.LOW,
                   expected_return_percent=5, time_horizon_years=10)
    analysis = investment_analyzer.analyze(calm)

    assert analysis.warnings == []
    assert analysis.recommendations == []
    assert detect_for_investment(calm, [calm]) == []


def test_high_risk_low_return(base_investment):
    analysis = investment_analyzer.analyze(
        replace(base_investment, risk_level=RiskLevel.HIGH, expected_return_percent=12))
    assert any("low expected return" in w for w in analysis.warnings)


def test_crypto_high_risk_gets_diversification_recommendation(base_investment):
    coin = replace(base_investment, type=InvestmentType.CRYPTO, risk_level=RiskLevel.HIGH,
                   expected_return_percent=40)
    analysis = investment_analyzer.analyze(coin)

    assert any("Diversify" in r for r in analysis.recommendations)
    assert not any("Diversify" in w for w in analysis.warnings)


def test_short_horizon_high_risk(base_investment):
    analysis = investment_analyzer.analyze(
        replace(base_investment, risk_level=RiskLevel.HIGH, expected_return_percent=30,
                time_horizon_years=2))
    assert any("Short horizon" in w for w in analysis.warnings)


def test_below_safe_rate(base_investment):
    analysis = investment_analyzer.analyze(replace(base_investment, expected_return_percent=3))
    assert any("risk-free rate (5%)" in w for w in analysis.warnings)

    low = investment_analyzer.analyze(
        replace(base_investment, expected_return_percent=3, risk_level=RiskLevel.LOW))
    assert low.warnings == []


def test_unrealistic_low_risk_return(base_investment):
    analysis = investment_analyzer.analyze(
        replace(base_investment, risk_level=RiskLevel.LOW, expected_return_percent=25))
    assert any("Unusually high return" in w for w in analysis.warnings)


def test_drawdown(base_investment):
    analysis = investment_analyzer.analyze(replace(base_investment, current_value=7000))
    assert any("down more than 20%" in w for w in analysis.warnings)
    assert len(analysis.recommendations) == 1

    steady = investment_analyzer.analyze(replace(base_investment, current_value=8500))
    assert steady.warnings == []


def test_idempotent(base_investment):
    assert investment_analyzer.analyze(base_investment) == investment_analyzer.analyze(base_investment)
