from datetime import datetime, timedelta, timezone

import pytest

from models import Investment, InvestmentType, Purchase, RiskLevel
from storage import Storage

NOW = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def days_ago():
    """Instant n days before the frozen now."""
    return lambda n: NOW - timedelta(days=n)


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def base_purchase():
    return Purchase(
        id="1",
        name="Test Purchase",
        price=1000,
        category="Electronics",
        date=NOW,
    )


@pytest.fixture
def base_investment():
    return Investment(
        id="1",
        name="Test Investment",
        type=InvestmentType.STOCKS,
        initial_amount=10000,
        expected_return_percent=10,
        risk_level=RiskLevel.MEDIUM,
        time_horizon_years=10,
        date=NOW,
    )


@pytest.fixture
def storage(tmp_path):
    return Storage(tmp_path / "financial-data.json")
