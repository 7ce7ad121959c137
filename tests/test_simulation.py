import pytest
from pydantic import ValidationError

from src.simulation import (
    SimulationParameters,
    format_number,
    get_recommendations,
    js_round,
    run_simulation,
    to_fixed,
)
from tests.helpers import simulation_payload


def _params(**overrides):
    return SimulationParameters(**simulation_payload(**overrides))


def test_js_round_rounds_half_up():
    assert js_round(2.5) == 3
    assert js_round(-2.5) == -2
    assert js_round(264.7) == 265


def test_to_fixed_and_format_number():
    assert to_fixed(1.224, 2) == "1.22"
    assert to_fixed(967.5, 0) == "968"
    assert to_fixed(3, 2) == "3.00"
    assert format_number(80.0) == "80"
    assert format_number(82.5) == "82.5"


def test_baseline_simulation():
    payload = run_simulation(_params()).to_payload()

    assert payload["profitChange"] == 2.0
    assert payload["revenue"] == "$1.22M"
    assert payload["cost"] == "$900K"
    assert payload["margin"] == 26.5

    simulated = [point["simulated"] for point in payload["timelineData"]]
    assert simulated[:4] == [101, 101, 106, 105]
    assert simulated[5] == 111
    assert [point["baseline"] for point in payload["timelineData"]] == [100, 98, 102, 100, 105, 103]
    assert payload["timelineData"][0]["name"] == "Month 1"


def test_baseline_insights():
    insights = run_simulation(_params()).insights

    assert [insight["type"] for insight in insights] == ["warning", "info", "info"]
    assert insights[0]["title"] == "Load factor of 80% is below optimal level"
    assert insights[1]["title"] == "Current fuel price of $3.00/gal has manageable impact on costs"
    assert insights[2]["title"] == "Medium seasonal demand pattern impacts overall fleet utilization"


def test_favourable_scenario():
    outcome = run_simulation(
        _params(fuelPrice=4.5, loadFactor=90, competitionLevel="Low", seasonalPattern="Peak")
    )
    payload = outcome.to_payload()

    assert payload["profitChange"] == 12.5
    assert payload["revenue"] == "$1.35M"
    assert payload["cost"] == "$968K"
    assert payload["margin"] == 28.3
    assert outcome.insights[0] == {
        "type": "positive",
        "title": "Increasing load factor to 90% would improve profitability by 12.5%",
        "description": "Primary driver of improved performance",
    }
    assert outcome.insights[1]["type"] == "warning"
    assert outcome.insights[1]["title"] == "Fuel price increase beyond $4.50/gal significantly impacts margins"


def test_negative_profit_change_uses_single_growth():
    payload = run_simulation(_params(loadFactor=70, competitionLevel="High", seasonalPattern="Low")).to_payload()

    # -8 - 5 - 3
    assert payload["profitChange"] == -16.0
    assert payload["timelineData"][2]["simulated"] == js_round(102 * (1 - 0.16 * 3 / 3))


def test_unknown_labels_contribute_nothing():
    baseline = run_simulation(_params())
    unknown = run_simulation(_params(competitionLevel="Fierce"))

    assert unknown.profit_change == baseline.profit_change
    assert unknown.revenue == baseline.revenue


def test_simulation_is_deterministic():
    first = run_simulation(_params(fuelPrice=3.7, loadFactor=83.5)).to_payload()
    second = run_simulation(_params(fuelPrice=3.7, loadFactor=83.5)).to_payload()

    assert first == second


def test_outcome_document_keeps_numbers():
    document = run_simulation(_params()).to_document()

    assert document["revenue"] == 1_224_000
    assert document["cost"] == 900_000
    assert document["margin"] == 26.5


def test_margin_is_zero_when_revenue_vanishes():
    outcome = run_simulation(
        _params(fuelPrice=8, loadFactor=2.5, competitionLevel="Extreme", seasonalPattern="Low")
    )

    assert outcome.profit_change == -100
    assert outcome.revenue == 0
    assert outcome.cost == 1_125_000
    assert outcome.margin == 0


def test_parameters_accept_field_names_and_validate_ranges():
    params = SimulationParameters(fuel_price=3, load_factor=80)
    assert params.competition_level == "Moderate"
    assert params.seasonal_pattern == "Medium"

    with pytest.raises(ValidationError):
        SimulationParameters(**simulation_payload(loadFactor=120))
    with pytest.raises(ValidationError):
        SimulationParameters(**simulation_payload(fuelPrice=-1))


def test_recommendations(data_store):
    recommendations = get_recommendations(data_store)

    assert len(recommendations) == 6
    assert {item["type"] for item in recommendations} == {"increase", "warning", "decrease"}
    recommendations[0]["title"] = "changed"
    assert get_recommendations(data_store)[0]["title"] == "Increase Frequency"
