import json
from dataclasses import replace

import pytest

from models import FinancialData, UsageFrequency
from storage import StorageError, new_id


def test_load_creates_empty_file(storage):
    data = storage.load()

    assert data.purchases == [] and data.investments == []
    assert storage.path.exists()
    on_disk = json.loads(storage.path.read_text(encoding="utf-8"))
    assert on_disk["purchases"] == [] and "lastUpdated" in on_disk


def test_purchase_round_trip_uses_camel_case(storage, base_purchase):
    laptop = replace(base_purchase, expected_lifespan_years=4,
                     usage_frequency=UsageFrequency.DAILY, notes="work")
    storage.add_purchase(laptop)

    raw = json.loads(storage.path.read_text(encoding="utf-8"))["purchases"][0]
    assert raw["expectedLifespanYears"] == 4
    assert raw["usageFrequency"] == "daily"
    assert "alternativeCost" not in raw

    assert storage.get_purchase("1") == laptop


def test_investment_round_trip(storage, base_investment):
    held = replace(base_investment, current_value=9000.0)
    storage.add_investment(held)

    assert storage.get_investment("1") == held
    assert storage.get_investment("missing") is None


def test_update_and_delete_purchase(storage, base_purchase):
    storage.add_purchase(base_purchase)

    updated = storage.update_purchase("1", price=1200.0)
    assert updated.price == 1200.0
    assert storage.get_purchase("1").price == 1200.0
    assert storage.update_purchase("nope", price=1.0) is None

    assert storage.delete_purchase("1") is True
    assert storage.delete_purchase("1") is False
    assert storage.load().purchases == []


def test_delete_investment(storage, base_investment):
    storage.add_investment(base_investment)
    assert storage.delete_investment("1") is True
    assert storage.load().investments == []


def test_reads_records_written_by_other_tools(storage):
    storage.path.write_text(json.dumps({
        "purchases": [{"id": "a", "name": "Bike", "price": 300, "category": "Sport",
                       "date": "2024-03-01T10:00:00.000Z", "usageFrequency": "weekly"}],
        "investments": [],
        "lastUpdated": "2024-03-01T10:00:00.000Z",
    }), encoding="utf-8")

    bike = storage.load().purchases[0]
    assert bike.usage_frequency is UsageFrequency.WEEKLY
    assert bike.date.tzinfo is not None


def test_corrupt_file_raises(storage):
    storage.path.write_text("{not json", encoding="utf-8")
    with pytest.raises(StorageError):
        storage.load()


def test_unknown_enum_on_disk_raises(storage):
    storage.path.write_text(json.dumps({
        "purchases": [], "lastUpdated": "2024-03-01T10:00:00+00:00",
        "investments": [{"id": "x", "name": "X", "type": "tulips", "initialAmount": 1,
                         "date": "2024-03-01T10:00:00+00:00", "expectedReturnPercent": 1,
                         "riskLevel": "low", "timeHorizonYears": 1}],
    }), encoding="utf-8")
    with pytest.raises(StorageError):
        storage.load()


def test_save_stamps_last_updated(storage):
    data = FinancialData()
    before = data.last_updated
    storage.save(data)
    assert data.last_updated >= before


def test_new_id_is_unique():
    assert new_id() != new_id()
