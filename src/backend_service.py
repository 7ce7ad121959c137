"""Request models and orchestration shared by the FastAPI and Flask front-ends."""

import logging
import threading
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from src.analytics import (
    DEFAULT_NETWORK_VIEW,
    DEFAULT_TOP_ROUTES,
    build_competitive_scene,
    build_network_scene,
    get_analytics_data,
    get_competitive_data,
    get_network_data,
    get_performance_data,
    get_top_routes,
)
from src.document_store import DocumentStore, connect_document_store, serialize_document
from src.load_data import DataStore
from src.models import (
    AirportModel,
    PerformanceMetricModel,
    PredictionModel,
    RouteModel,
    SimulationScenarioModel,
    seed_reference_data,
)
from src.predictions import (
    ForecastNotFound,
    get_predictions_data,
    get_route_forecasts,
    prediction_record,
    run_new_prediction,
)
from src.projection import Viewport
from src.settings import Settings
from src.simulation import SimulationParameters, generate_report, get_recommendations, run_simulation

logger = logging.getLogger(__name__)

MAX_SCENE_SIZE = 4000


class AnalysisError(Exception):
    """Raised when a user request cannot be satisfied."""

    def __init__(self, status_code: int, message: str):
        super().__init__(message)
        self.status_code = status_code


class ScenarioRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(..., min_length=1, max_length=120, description="Display name of the saved scenario.")
    description: str = Field("", max_length=1000)
    parameters: SimulationParameters
    created_by: Optional[str] = Field(None, alias="createdBy", max_length=120)


class PerformanceMetricRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    date: datetime
    load_factor: float = Field(..., alias="loadFactor", ge=0, le=100)
    revenue: float = Field(..., ge=0)
    cost: float = Field(..., ge=0)
    sentiment: float = Field(0, ge=-100, le=100)


class MetricRangeQuery(BaseModel):
    start: Optional[datetime] = None
    end: Optional[datetime] = None


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Naive datetimes are taken to be UTC."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class DocumentStoreProvider:
    """Connects the document store on first use and seeds it once."""

    def __init__(self, settings: Settings, data_store: DataStore, store: Optional[DocumentStore] = None):
        self.settings = settings
        self.data_store = data_store
        self._store = store
        self._lock = threading.Lock()

    def get(self) -> DocumentStore:
        if self._store is not None:
            return self._store
        with self._lock:
            if self._store is None:
                store = connect_document_store(self.settings)
                if self.settings.seed_reference_data:
                    seed_reference_data(store, self.data_store)
                self._store = store
        return self._store

    def close(self) -> None:
        with self._lock:
            if self._store is not None:
                self._store.close()
                self._store = None


def _viewport(width: int, height: int) -> Viewport:
    if width > MAX_SCENE_SIZE or height > MAX_SCENE_SIZE:
        raise AnalysisError(400, f"Scene dimensions must not exceed {MAX_SCENE_SIZE}px.")
    try:
        return Viewport(width, height)
    except ValueError as exc:
        raise AnalysisError(400, str(exc)) from exc


def analytics_overview(data_store: DataStore) -> Dict[str, Any]:
    return get_analytics_data(data_store)


def performance_series(data_store: DataStore, timeframe: Optional[str]) -> List[Dict[str, Any]]:
    if timeframe:
        return get_performance_data(data_store, timeframe)
    return get_performance_data(data_store)


def top_routes(data_store: DataStore, limit: Optional[int] = None) -> List[Dict[str, Any]]:
    return get_top_routes(data_store, DEFAULT_TOP_ROUTES if limit is None else limit)


def network_view(data_store: DataStore, view: Optional[str]) -> Dict[str, Any]:
    return get_network_data(data_store, view or DEFAULT_NETWORK_VIEW)


def network_scene(data_store: DataStore, view: Optional[str], width: int = 800, height: int = 400) -> Dict[str, Any]:
    return build_network_scene(data_store, view or DEFAULT_NETWORK_VIEW, _viewport(width, height))


def competitive_view(data_store: DataStore) -> Dict[str, Any]:
    return get_competitive_data(data_store)


def competitive_scene(
    data_store: DataStore,
    rotation: float = 0.0,
    perspective: float = 20.0,
    width: int = 800,
    height: int = 600,
) -> Dict[str, Any]:
    viewport = _viewport(width, height)
    try:
        return build_competitive_scene(data_store, rotation, perspective, viewport)
    except ValueError as exc:
        raise AnalysisError(400, str(exc)) from exc


def predictions_overview(data_store: DataStore) -> Dict[str, Any]:
    return get_predictions_data(data_store)


def route_forecasts(data_store: DataStore) -> List[Dict[str, Any]]:
    return get_route_forecasts(data_store)


def rerun_forecast(data_store: DataStore, store: DocumentStore, route_id: int) -> Dict[str, Any]:
    """Re-run one route forecast and keep a numeric copy of the result in ``predictions``."""
    try:
        prediction = run_new_prediction(data_store, route_id)
    except ForecastNotFound as exc:
        raise AnalysisError(404, str(exc)) from exc

    PredictionModel(store).create(prediction_record(data_store, route_id))
    logger.info("forecast re-run stored", extra={"route_id": route_id, "store": store.backend})
    return prediction


def recommendations(data_store: DataStore) -> List[Dict[str, Any]]:
    return get_recommendations(data_store)


def simulate(params: SimulationParameters) -> Dict[str, Any]:
    return run_simulation(params).to_payload()


def report_html(data_store: DataStore, generated_at: Optional[datetime] = None) -> str:
    return generate_report(data_store, generated_at)


def list_scenarios(store: DocumentStore) -> List[Dict[str, Any]]:
    scenarios = SimulationScenarioModel(store).find_all()
    scenarios.sort(key=lambda doc: as_utc(doc.get("createdAt")) or datetime.min.replace(tzinfo=timezone.utc), reverse=True)
    return serialize_document(scenarios)


def save_scenario(store: DocumentStore, payload: ScenarioRequest) -> Dict[str, Any]:
    """Run the scenario's simulation and persist inputs and numeric results together."""
    outcome = run_simulation(payload.parameters)
    document = {
        "name": payload.name,
        "description": payload.description,
        "parameters": payload.parameters.model_dump(by_alias=True),
        "results": outcome.to_document(),
    }
    if payload.created_by:
        document["createdBy"] = payload.created_by
    saved = SimulationScenarioModel(store).create(document)
    return serialize_document(saved)


def get_scenario(store: DocumentStore, scenario_id: str) -> Dict[str, Any]:
    scenario = SimulationScenarioModel(store).find_by_id(scenario_id)
    if scenario is None:
        raise AnalysisError(404, "Scenario not found")
    return serialize_document(scenario)


def delete_scenario(store: DocumentStore, scenario_id: str) -> Dict[str, Any]:
    if not SimulationScenarioModel(store).delete(scenario_id):
        raise AnalysisError(404, "Scenario not found")
    return {"id": scenario_id, "deleted": True}


def list_airports(store: DocumentStore) -> List[Dict[str, Any]]:
    return serialize_document(AirportModel(store).find_all())


def list_routes(store: DocumentStore) -> List[Dict[str, Any]]:
    return serialize_document(RouteModel(store).find_all())


def _require_route(store: DocumentStore, route_id: str) -> Dict[str, Any]:
    route = RouteModel(store).find_by_id(route_id)
    if route is None:
        raise AnalysisError(404, "Route not found")
    return route


def route_metrics(store: DocumentStore, route_id: str, query: Optional[MetricRangeQuery] = None) -> List[Dict[str, Any]]:
    """Metrics recorded for a route, optionally bounded by an inclusive date range."""
    _require_route(store, route_id)
    query = query or MetricRangeQuery()
    start, end = as_utc(query.start), as_utc(query.end)
    if start is not None and end is not None and start > end:
        raise AnalysisError(400, "start must not be after end")
    metrics = PerformanceMetricModel(store).find_by_date_range(route_id, start, end)
    metrics.sort(key=lambda doc: as_utc(doc["date"]))
    return serialize_document(metrics)


def record_metric(store: DocumentStore, route_id: str, payload: PerformanceMetricRequest) -> Dict[str, Any]:
    _require_route(store, route_id)
    metric = PerformanceMetricModel(store).create(
        {
            "routeId": route_id,
            "date": as_utc(payload.date),
            "loadFactor": payload.load_factor,
            "revenue": payload.revenue,
            "cost": payload.cost,
            "profit": payload.revenue - payload.cost,
            "sentiment": payload.sentiment,
        }
    )
    return serialize_document(metric)
