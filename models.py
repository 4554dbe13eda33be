"""Core data models — single source of truth.

Records are immutable once created. Analyses are derived, never persisted,
and keyed by the id of the record they describe. The on-disk JSON uses
camelCase keys; to_dict()/from_dict() own that mapping so storage.py never
touches field names directly.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, List, Dict
from datetime import datetime, timezone


class UsageFrequency(Enum):
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    RARELY = "rarely"


class InvestmentType(Enum):
    STOCKS = "stocks"
    BONDS = "bonds"
    REAL_ESTATE = "real-estate"
    CRYPTO = "crypto"
    BUSINESS = "business"
    OTHER = "other"


class RiskLevel(Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def parse_date(value) -> datetime:
    """ISO-8601 string or datetime -> aware datetime (naive is read as UTC)."""
    if isinstance(value, datetime):
        dt = value
    else:
        dt = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def _drop_none(d: Dict) -> Dict:
    return {k: v for k, v in d.items() if v is not None}


@dataclass(frozen=True)
class Purchase:
    id: str
    name: str
    price: float
    category: str
    date: datetime = field(default_factory=utcnow)
    expected_lifespan_years: Optional[float] = None
    maintenance_cost_per_year: Optional[float] = None
    alternative_cost: Optional[float] = None
    usage_frequency: Optional[UsageFrequency] = None
    notes: Optional[str] = None

    def to_dict(self) -> Dict:
        return _drop_none({
            "id": self.id,
            "name": self.name,
            "price": self.price,
            "date": self.date.isoformat(),
            "category": self.category,
            "expectedLifespanYears": self.expected_lifespan_years,
            "maintenanceCostPerYear": self.maintenance_cost_per_year,
            "alternativeCost": self.alternative_cost,
            "usageFrequency": self.usage_frequency.value if self.usage_frequency else None,
            "notes": self.notes,
        })

    @classmethod
    def from_dict(cls, d: Dict) -> "Purchase":
        freq = d.get("usageFrequency")
        return cls(
            id=d["id"],
            name=d["name"],
            price=float(d["price"]),
            category=d["category"],
            date=parse_date(d["date"]),
            expected_lifespan_years=d.get("expectedLifespanYears"),
            maintenance_cost_per_year=d.get("maintenanceCostPerYear"),
            alternative_cost=d.get("alternativeCost"),
            usage_frequency=UsageFrequency(freq) if freq else None,
            notes=d.get("notes"),
        )


@dataclass(frozen=True)
class Investment:
    id: str
    name: str
    type: InvestmentType
    initial_amount: float
    expected_return_percent: float
    risk_level: RiskLevel
    time_horizon_years: float
    date: datetime = field(default_factory=utcnow)
    current_value: Optional[float] = None
    notes: Optional[str] = None

    @property
    def current_change_percent(self) -> Optional[float]:
        """Change of current value vs initial amount, None when no current value."""
        if self.current_value is None:
            return None
        return (self.current_value - self.initial_amount) / self.initial_amount * 100

    def to_dict(self) -> Dict:
        return _drop_none({
            "id": self.id,
            "name": self.name,
            "type": self.type.value,
            "initialAmount": self.initial_amount,
            "currentValue": self.current_value,
            "date": self.date.isoformat(),
            "expectedReturnPercent": self.expected_return_percent,
            "riskLevel": self.risk_level.value,
            "timeHorizonYears": self.time_horizon_years,
            "notes": self.notes,
        })

    @classmethod
    def from_dict(cls, d: Dict) -> "Investment":
        current = d.get("currentValue")
        return cls(
            id=d["id"],
            name=d["name"],
            type=InvestmentType(d["type"]),
            initial_amount=float(d["initialAmount"]),
            current_value=float(current) if current is not None else None,
            date=parse_date(d["date"]),
            expected_return_percent=float(d["expectedReturnPercent"]),
            risk_level=RiskLevel(d["riskLevel"]),
            time_horizon_years=float(d["timeHorizonYears"]),
            notes=d.get("notes"),
        )


@dataclass
class PurchaseAnalysis:
    purchase_id: str
    cost_per_use: float
    total_cost_of_ownership: float
    daily_equivalent: float
    warnings: List[str] = field(default_factory=list)
    recommendations: List[str] = field(default_factory=list)


@dataclass
class InvestmentAnalysis:
    investment_id: str
    projected_value: float
    roi: float
    compounded_return: float
    risk_adjusted_return: float
    warnings: List[str] = field(default_factory=list)
    recommendations: List[str] = field(default_factory=list)


@dataclass
class FinancialData:
    """The whole persisted document."""
    purchases: List[Purchase] = field(default_factory=list)
    investments: List[Investment] = field(default_factory=list)
    last_updated: datetime = field(default_factory=utcnow)

    def to_dict(self) -> Dict:
        return {
            "purchases": [p.to_dict() for p in self.purchases],
            "investments": [i.to_dict() for i in self.investments],
            "lastUpdated": self.last_updated.isoformat(),
        }

    @classmethod
    def from_dict(cls, d: Dict) -> "FinancialData":
        return cls(
            purchases=[Purchase.from_dict(p) for p in d.get("purchases", [])],
            investments=[Investment.from_dict(i) for i in d.get("investments", [])],
            last_updated=parse_date(d["lastUpdated"]) if d.get("lastUpdated") else utcnow(),
        )
