"""Profitability model summary and per-route profit forecasts."""

from typing import Any, Dict, List

from src.load_data import DataStore, dataframe_to_records

FORECAST_30_UPLIFT = 1.05
FORECAST_90_UPLIFT = 1.10
MAX_CONFIDENCE = 100
RERUN_CONFIDENCE_BUMP = 2


class ForecastNotFound(LookupError):
    """Raised when a forecast is requested for an unknown route id."""


def format_signed_currency(amount: float) -> str:
    """``14850 -> '+$14,850'``, ``-2150 -> '-$2,150'``."""
    sign = "-" if amount < 0 else "+"
    return f"{sign}${abs(round(amount)):,}"


def get_profitability_model_data(data_store: DataStore) -> Dict[str, Any]:
    return {
        "performanceData": [
            {"name": name, "actual": actual, "predicted": predicted}
            for name, actual, predicted in data_store.model_performance
        ],
        "modelMetrics": [{"name": name, "value": value} for name, value in data_store.model_metrics],
        "features": [
            {"name": name, "importance": importance} for name, importance in data_store.feature_importance
        ],
    }


def _forecast_payload(row: Dict[str, Any], uplift30: float = 1.0, uplift90: float = 1.0, confidence_bump: int = 0):
    return {
        "id": row["id"],
        "from": row["Source airport"],
        "to": row["Destination airport"],
        "fromCity": row["Source City"],
        "toCity": row["Destination City"],
        "currentProfit": format_signed_currency(row["current"]),
        "forecast30": {"value": format_signed_currency(row["forecast30"] * uplift30), "trend": row["trend30"]},
        "forecast90": {"value": format_signed_currency(row["forecast90"] * uplift90), "trend": row["trend90"]},
        "confidence": min(row["confidence"] + confidence_bump, MAX_CONFIDENCE),
    }


def _forecast_rows(data_store: DataStore) -> List[Dict[str, Any]]:
    return dataframe_to_records(data_store.process_routes(data_store.forecasts))


def get_route_forecasts(data_store: DataStore) -> List[Dict[str, Any]]:
    return [_forecast_payload(row) for row in _forecast_rows(data_store)]


def get_predictions_data(data_store: DataStore) -> Dict[str, Any]:
    return {
        "profitabilityModelData": get_profitability_model_data(data_store),
        "routeForecasts": get_route_forecasts(data_store),
    }


def _forecast_row(data_store: DataStore, route_id: int) -> Dict[str, Any]:
    for row in _forecast_rows(data_store):
        if row["id"] == route_id:
            return row
    raise ForecastNotFound(f"Route {route_id} not found")


def run_new_prediction(data_store: DataStore, route_id: int) -> Dict[str, Any]:
    """
    Re-run the forecast for one route.

    The 30- and 90-day values are scaled by fixed uplift factors, trends are
    left as they were and confidence rises by two points up to 100.
    """
    row = _forecast_row(data_store, route_id)
    return _forecast_payload(row, FORECAST_30_UPLIFT, FORECAST_90_UPLIFT, confidence_bump=RERUN_CONFIDENCE_BUMP)


def prediction_record(data_store: DataStore, route_id: int) -> Dict[str, Any]:
    """The re-run forecast with money as numbers and weighted factors, for storage."""
    row = _forecast_row(data_store, route_id)
    return {
        "routeId": route_id,
        "currentProfit": row["current"],
        "forecast30": {"value": round(row["forecast30"] * FORECAST_30_UPLIFT, 2), "trend": row["trend30"]},
        "forecast90": {"value": round(row["forecast90"] * FORECAST_90_UPLIFT, 2), "trend": row["trend90"]},
        "confidence": min(row["confidence"] + RERUN_CONFIDENCE_BUMP, MAX_CONFIDENCE),
        "factors": [{"name": name, "weight": weight} for name, weight in data_store.feature_importance],
    }
