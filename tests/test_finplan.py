from dataclasses import replace

import pytest

import finplan
import investment_analyzer
from display import Display
from finplan import RecordNotFound, find_record
from models import RiskLevel
from storage import Storage


@pytest.fixture
def data_file(tmp_path):
    return tmp_path / "data.json"


def run(data_file, *argv):
    return finplan.main(["--data-file", str(data_file), "--no-color", *argv])


def test_purchase_add_then_analyze(data_file, capsys):
    code = run(data_file, "purchase", "add", "-n", "Laptop", "-p", "1500",
               "-c", "electronics", "-l", "4", "-f", "daily")
    out = capsys.readouterr().out

    assert code == 0
    assert "Purchase added!" in out
    assert "Total cost of ownership: 1500.00" in out

    purchase_id = Storage(data_file).load().purchases[0].id
    assert run(data_file, "purchase", "analyze", purchase_id[:8]) == 0
    assert "Laptop" in capsys.readouterr().out


def test_purchase_add_rejects_invalid_price(data_file, capsys):
    code = run(data_file, "purchase", "add", "-n", "Thing", "-p", "-5", "-c", "misc")
    assert code == 1
    assert "Price must be a positive number" in capsys.readouterr().err
    assert Storage(data_file).load().purchases == []


def test_purchase_add_rejects_unknown_frequency(data_file, capsys):
    code = run(data_file, "purchase", "add", "-n", "Thing", "-p", "5", "-c", "misc",
               "-f", "sometimes")
    assert code == 1
    assert "Usage frequency must be one of" in capsys.readouterr().err


def test_purchase_list_filters_by_category(data_file, capsys):
    run(data_file, "purchase", "add", "-n", "Bike", "-p", "300", "-c", "sport")
    run(data_file, "purchase", "add", "-n", "Phone", "-p", "700", "-c", "electronics")
    capsys.readouterr()

    assert run(data_file, "purchase", "list", "-c", "sport") == 0
    out = capsys.readouterr().out
    assert "Bike" in out and "Phone" not in out


def test_investment_add_shows_biases(data_file, capsys):
    code = run(data_file, "investment", "add", "-n", "Moon coin", "-a", "5000", "-t", "crypto",
               "-r", "100", "--risk", "high", "--horizon", "1")
    out = capsys.readouterr().out

    assert code == 0
    assert "Investment added!" in out
    assert "FOMO" in out and "CONFIRMATION BIAS" in out and "OVERCONFIDENCE" in out
    assert "Diversify" in out


def test_investment_list_and_unknown_id(data_file, capsys):
    run(data_file, "investment", "add", "-n", "Index fund", "-a", "10000", "-t", "stocks",
        "-r", "8", "--risk", "medium", "--horizon", "10")
    capsys.readouterr()

    assert run(data_file, "investment", "list", "-t", "stocks") == 0
    assert "Index fund" in capsys.readouterr().out

    assert run(data_file, "investment", "analyze", "does-not-exist") == 1
    assert "No record with id" in capsys.readouterr().err


def test_find_record_prefix_rules(base_purchase):
    records = [replace(base_purchase, id="abc123"), replace(base_purchase, id="abd456")]

    assert find_record(records, "abc123").id == "abc123"
    assert find_record(records, "abd").id == "abd456"
    with pytest.raises(RecordNotFound, match="ambiguous"):
        find_record(records, "ab")
    with pytest.raises(RecordNotFound):
        find_record(records, "zzz")


def test_find_record_rejects_empty_id(base_purchase):
    with pytest.raises(RecordNotFound, match="cannot be empty"):
        find_record([base_purchase], "")


def test_empty_id_on_cli_is_an_error(data_file, capsys):
    run(data_file, "purchase", "add", "-n", "Bike", "-p", "300", "-c", "sport")
    capsys.readouterr()

    assert run(data_file, "purchase", "analyze", "") == 1
    assert "cannot be empty" in capsys.readouterr().err


@pytest.mark.parametrize("risk, icon", [
    (RiskLevel.LOW, "🟢"), (RiskLevel.MEDIUM, "🟡"), (RiskLevel.HIGH, "🔴"),
])
def test_investment_analysis_shows_risk_icon(base_investment, risk, icon):
    investment = replace(base_investment, risk_level=risk)
    text = Display(color=False).format_investment_analysis(
        investment_analyzer.analyze(investment), investment)
    assert f"Risk level: {icon} {risk.value}" in text
